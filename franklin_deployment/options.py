from pathlib import Path

import click

from franklin_deployment.constants import BUILD_DIR, ERC20_MINTABLE_ARTIFACT

build_dir_option = click.option(
    "--build-dir",
    "-b",
    help="Directory holding the precompiled contract artifacts.",
    type=click.Path(file_okay=False, exists=True, path_type=Path),
    default=BUILD_DIR,
    show_default=True,
)

test_contracts_option = click.option(
    "--test-contracts",
    "test_contracts",
    help="Deploy the *Test variants of the contracts.",
    is_flag=True,
)

env_file_option = click.option(
    "--env-file",
    "-e",
    help="dotenv file to load before reading the environment.",
    type=click.Path(dir_okay=False, exists=True, path_type=Path),
    required=False,
)

auto_option = click.option(
    "--auto",
    help="Automatically sign transactions.",
    is_flag=True,
)

erc20_artifact_option = click.option(
    "--erc20-artifact",
    help="Artifact of the mintable ERC20 used for test tokens.",
    type=click.Path(dir_okay=False, path_type=Path),
    default=ERC20_MINTABLE_ARTIFACT,
    show_default=True,
)

tesseracts_option = click.option(
    "--tesseracts",
    help="Also register contract ABIs with the Tesseracts explorer.",
    is_flag=True,
)

#!/usr/bin/python3

import click
from ape.cli import ConnectedProviderCommand, account_option, network_option

from franklin_deployment.artifacts import load_erc20_mintable
from franklin_deployment.constants import GOVERNANCE
from franklin_deployment.environment import DeploymentEnvironment, load_env_file
from franklin_deployment.options import (
    auto_option,
    build_dir_option,
    env_file_option,
    erc20_artifact_option,
    test_contracts_option,
)
from franklin_deployment.params import Deployer
from franklin_deployment.tokens import add_test_erc20_token, add_test_not_approved_erc20_token


@click.command(cls=ConnectedProviderCommand)
@account_option()
@network_option(required=True)
@build_dir_option
@test_contracts_option
@env_file_option
@auto_option
@erc20_artifact_option
@click.option(
    "--not-approved",
    help="Do not list the token in Governance.",
    is_flag=True,
)
def cli(account, network, build_dir, test_contracts, env_file, auto, erc20_artifact, not_approved):
    """Deploy a mintable test ERC20 against an existing deployment."""
    load_env_file(env_file)
    deployer = Deployer.from_build_dir(
        build_dir=build_dir,
        test=test_contracts,
        environment=DeploymentEnvironment.from_environ(),
        account=account,
        autosign=auto,
    )
    erc20 = load_erc20_mintable(erc20_artifact)

    if not_approved:
        token = add_test_not_approved_erc20_token(deployer, erc20=erc20)
    else:
        governance = deployer.get_deployed_proxy_contract(GOVERNANCE)
        token = add_test_erc20_token(deployer, governance=governance, erc20=erc20)

    if token is not None:
        print(f"TEST_ERC20={token.address}")


if __name__ == "__main__":
    cli()

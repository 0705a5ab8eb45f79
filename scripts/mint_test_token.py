#!/usr/bin/python3

import click
from ape.cli import ConnectedProviderCommand, account_option, network_option
from ape.contracts import ContractInstance

from franklin_deployment.artifacts import load_erc20_mintable
from franklin_deployment.environment import DeploymentEnvironment, load_env_file
from franklin_deployment.options import (
    auto_option,
    build_dir_option,
    env_file_option,
    erc20_artifact_option,
    test_contracts_option,
)
from franklin_deployment.params import Deployer
from franklin_deployment.tokens import mint_test_erc20_token
from franklin_deployment.types import ChecksumAddress


@click.command(cls=ConnectedProviderCommand)
@account_option()
@network_option(required=True)
@build_dir_option
@test_contracts_option
@env_file_option
@auto_option
@erc20_artifact_option
@click.option(
    "--token-address",
    "-t",
    help="Address of the test token to mint.",
    type=ChecksumAddress(),
    required=True,
)
def cli(account, network, build_dir, test_contracts, env_file, auto, erc20_artifact, token_address):
    """Mint test tokens to the deployer account."""
    load_env_file(env_file)
    deployer = Deployer.from_build_dir(
        build_dir=build_dir,
        test=test_contracts,
        environment=DeploymentEnvironment.from_environ(),
        account=account,
        autosign=auto,
    )
    erc20 = load_erc20_mintable(erc20_artifact)
    token = ContractInstance(token_address, erc20.contract_type)
    mint_test_erc20_token(deployer, erc20=token)


if __name__ == "__main__":
    cli()

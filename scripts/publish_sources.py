#!/usr/bin/python3

import click
from ape.cli import ConnectedProviderCommand, account_option, network_option

from franklin_deployment.constants import CONTRACT_ARTIFACTS
from franklin_deployment.environment import DeploymentEnvironment, load_env_file
from franklin_deployment.options import (
    build_dir_option,
    env_file_option,
    tesseracts_option,
    test_contracts_option,
)
from franklin_deployment.params import Deployer
from franklin_deployment.utils import check_etherscan_api_key


@click.command(cls=ConnectedProviderCommand)
@account_option()
@network_option(required=True)
@build_dir_option
@test_contracts_option
@env_file_option
@tesseracts_option
@click.option(
    "--contract-name",
    "-c",
    "contract_names",
    help="Contract to publish; defaults to every deployed contract.",
    type=click.Choice(list(CONTRACT_ARTIFACTS)),
    multiple=True,
)
def cli(account, network, build_dir, test_contracts, env_file, tesseracts, contract_names):
    """Publish the sources of already deployed contracts to Etherscan."""
    load_env_file(env_file)
    environment = DeploymentEnvironment.from_environ()
    check_etherscan_api_key(environment.etherscan_api_key)

    deployer = Deployer.from_build_dir(
        build_dir=build_dir,
        test=test_contracts,
        environment=environment,
        # the Governance initializer is encoded with the deployer address
        account=account,
    )
    contract_names = contract_names or [
        name for name in CONTRACT_ARTIFACTS if deployer.addresses.get(name)
    ]
    for contract_name in contract_names:
        if tesseracts:
            deployer.post_contract_to_tesseracts(contract_name)
        deployer.publish_source_code_to_etherscan(contract_name)


if __name__ == "__main__":
    cli()

#!/usr/bin/python3

from pathlib import Path

import click
from ape import networks
from ape.cli import ConnectedProviderCommand, account_option, network_option

from franklin_deployment.artifacts import load_erc20_mintable
from franklin_deployment.confirm import _continue
from franklin_deployment.constants import GOVERNANCE
from franklin_deployment.environment import DeploymentEnvironment, load_env_file
from franklin_deployment.options import (
    auto_option,
    build_dir_option,
    env_file_option,
    erc20_artifact_option,
    tesseracts_option,
    test_contracts_option,
)
from franklin_deployment.params import Deployer
from franklin_deployment.registry import write_registry
from franklin_deployment.tokens import add_test_erc20_token
from franklin_deployment.utils import check_etherscan_api_key


@click.command(cls=ConnectedProviderCommand)
@account_option()
@network_option(required=True)
@build_dir_option
@test_contracts_option
@env_file_option
@auto_option
@erc20_artifact_option
@tesseracts_option
@click.option(
    "--add-test-token",
    help="Deploy a mintable test ERC20 and list it in Governance.",
    is_flag=True,
)
@click.option(
    "--publish",
    help="Publish contract sources to Etherscan.",
    is_flag=True,
)
@click.option(
    "--registry-filepath",
    "-f",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Write a deployment registry to this file.",
    required=False,
)
def cli(
    account,
    network,
    build_dir,
    test_contracts,
    env_file,
    auto,
    erc20_artifact,
    tesseracts,
    add_test_token,
    publish,
    registry_filepath,
):
    """
    Deploys the Governance, Verifier and Franklin proxies with their targets,
    and the UpgradeGatekeeper.

    ape run deploy_contracts --network ethereum:sepolia:infura --account deployer --publish
    """
    load_env_file(env_file)
    environment = DeploymentEnvironment.from_environ()
    if publish:
        check_etherscan_api_key(environment.etherscan_api_key)
    environment.require_operator_address()

    deployer = Deployer.from_build_dir(
        build_dir=build_dir,
        test=test_contracts,
        environment=environment,
        account=account,
        autosign=auto,
    )
    print(
        f"Account: {account.address}",
        f"Network: {networks.provider.network.name}",
        f"Chain ID: {networks.provider.chain_id}",
        f"Test contracts: {test_contracts}",
        sep="\n",
    )
    if not auto:
        # Confirms the start of the deployment.
        _continue()

    contracts = deployer.deploy_all()

    if add_test_token:
        erc20 = load_erc20_mintable(erc20_artifact)
        add_test_erc20_token(deployer, governance=contracts[GOVERNANCE], erc20=erc20)

    if registry_filepath:
        entries = deployer.registry_entries(chain_id=networks.provider.chain_id)
        output_filepath = write_registry(entries=entries, filepath=registry_filepath)
        print(f"(i) Registry written to {output_filepath}!")

    print("\nUpdate your environment with:")
    print(*deployer.env_assignments(), sep="\n")

    # explorer calls come after the deployment record is out
    deployed_names = list(deployer.containers)
    if tesseracts:
        for contract_name in deployed_names:
            deployer.post_contract_to_tesseracts(contract_name)
    if publish:
        for contract_name in deployed_names:
            deployer.publish_source_code_to_etherscan(contract_name)


if __name__ == "__main__":
    cli()

import typing
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from ape.api import AccountAPI, ReceiptAPI
from ape.cli.choices import select_account
from ape.contracts import ContractContainer, ContractInstance
from ape.contracts.base import ContractTransactionHandler
from ape_accounts import KeyfileAccount
from eth_abi import encode
from ethpm_types import MethodABI
from hexbytes import HexBytes
from web3.auto import w3

from franklin_deployment.artifacts import load_contract_containers
from franklin_deployment.confirm import _confirm_deployment, _continue
from franklin_deployment.constants import (
    BUILD_DIR,
    CONTRACTS_DIR,
    DEFAULT_GAS_LIMIT,
    FRANKLIN,
    GAS_LIMITS,
    GOVERNANCE,
    PROXIED_CONTRACTS,
    TARGET_SUFFIX,
    UPGRADE_GATEKEEPER,
    VERIFIER,
    ZERO_HASH,
)
from franklin_deployment.environment import (
    ADDRESS_ENVVARS,
    TX_HASH_ENVVARS,
    DeploymentEnvironment,
    env_assignments,
)
from franklin_deployment.exceptions import MissingEnvironmentVariable, UnknownContractError
from franklin_deployment.explorer import EtherscanClient, post_contract_abi, publish_source_code
from franklin_deployment.registry import RegistryEntry
from franklin_deployment.sources import solidity_standard_json_input
from franklin_deployment.utils import get_network_name, hex_string


def _validate_method_args(
    method_abis: List[MethodABI], args: typing.Sequence[Any]
) -> typing.Dict[str, Any]:
    """Validates the transaction arguments against the function ABI."""
    if len(method_abis) == 0:
        raise ValueError("No method abis provided for validation of args")

    abis_matching_args_length = [abi for abi in method_abis if len(abi.inputs) == len(args)]
    for abi in abis_matching_args_length:
        named_args = {}
        for arg, abi_input in zip(args, abi.inputs):
            if not w3.is_encodable(abi_input.type, arg):
                break
            named_args[abi_input.name] = arg
        else:
            return named_args
    raise ValueError(
        f"Could not find ABI for '{method_abis[0].name}' with {len(args)} arg(s) and given type(s)"
    )


class Transactor:
    """
    Represents an ape account plus validated/annotated transaction execution.
    """

    def __init__(self, account: typing.Optional[AccountAPI] = None, autosign: bool = False):
        if account is None:
            self._account = select_account()
        else:
            self._account = account
        if autosign:
            print("WARNING: Autosign is enabled. Transactions will be signed automatically.")
        self._autosign = autosign
        if isinstance(self._account, KeyfileAccount):
            self._account.set_autosign(autosign)

    def get_account(self) -> AccountAPI:
        """Returns the transactor account."""
        return self._account

    def transact(self, method: ContractTransactionHandler, *args) -> ReceiptAPI:
        named_args = _validate_method_args(method_abis=method.abis, args=args)
        base_message = (
            f"\nTransacting {method.contract.contract_type.name}"
            f"[{method.contract.address[:10]}].{method}"
        )
        if named_args:
            pretty_args = "\n\t".join(f"{k}={v}" for k, v in named_args.items())
            message = f"{base_message} with arguments:\n\t{pretty_args}"
        else:
            message = f"{base_message} with no arguments"
        print(message)
        if not self._autosign:
            _continue()

        # ape waits for the receipt before returning
        return method(*args, sender=self._account)


class Deployer(Transactor):
    """
    Deploys the Franklin contract suite: the Governance, Verifier and Franklin
    targets behind proxies, and the UpgradeGatekeeper owning those proxies.

    Addresses and genesis transaction hashes start out as whatever the
    environment provides and are overwritten as contracts get deployed.
    """

    def __init__(
        self,
        containers: Dict[str, ContractContainer],
        environment: Optional[DeploymentEnvironment] = None,
        account: typing.Optional[AccountAPI] = None,
        autosign: bool = False,
        project_root: Optional[Path] = None,
    ):
        super().__init__(account, autosign)
        self.containers = containers
        self.environment = environment or DeploymentEnvironment.from_environ()
        self.addresses = dict(self.environment.addresses)
        self.deploy_transaction_hashes = dict(self.environment.deploy_transaction_hashes)
        self.deployments: Dict[str, ContractInstance] = dict()
        self.project_root = project_root or Path.cwd()

    @classmethod
    def from_build_dir(
        cls, build_dir: Path = BUILD_DIR, test: bool = False, *args, **kwargs
    ) -> "Deployer":
        containers = load_contract_containers(build_dir=build_dir, test=test)
        return cls(containers, *args, **kwargs)

    #
    # Bookkeeping
    #

    def _get_container(self, contract_name: str) -> ContractContainer:
        try:
            return self.containers[contract_name]
        except KeyError:
            raise UnknownContractError(f"Unknown contract '{contract_name}'")

    def _get_address(self, contract_name: str) -> str:
        if contract_name not in ADDRESS_ENVVARS:
            raise UnknownContractError(f"Unknown contract '{contract_name}'")
        address = self.addresses.get(contract_name)
        if not address:
            raise MissingEnvironmentVariable(ADDRESS_ENVVARS[contract_name])
        return address

    def _contract_at(self, contract_name: str, address: str) -> ContractInstance:
        contract_type = self._get_container(contract_name).contract_type
        return ContractInstance(address, contract_type)

    def get_deploy_transaction_hash(self, contract_name: str) -> Optional[str]:
        return self.deploy_transaction_hashes.get(contract_name)

    def get_deployed_proxy_contract(self, contract_name: str) -> ContractInstance:
        """Returns the proxy for a contract, typed with the ABI of its target."""
        return self._contract_at(
            f"{contract_name}{TARGET_SUFFIX}", self._get_address(contract_name)
        )

    def get_deployed_contract(self, contract_name: str) -> ContractInstance:
        return self._contract_at(contract_name, self._get_address(contract_name))

    def env_assignments(self) -> List[str]:
        return env_assignments(self.addresses, self.deploy_transaction_hashes)

    #
    # Arguments
    #

    def initialization_args(self, contract_name: str) -> Tuple[List[str], List[Any]]:
        """Returns the (types, values) proxies pass to their target's initialize."""
        if contract_name == GOVERNANCE:
            return ["address"], [self.get_account().address]
        if contract_name == VERIFIER:
            return [], []
        if contract_name == FRANKLIN:
            genesis_root = self.environment.genesis_root
            return ["address", "address", "address", "bytes32"], [
                self._get_address(GOVERNANCE),
                self._get_address(VERIFIER),
                self.environment.require_operator_address(),
                HexBytes(genesis_root) if genesis_root else ZERO_HASH,
            ]
        raise UnknownContractError(f"{contract_name} is not initialized through a proxy")

    def encoded_initialization_args(self, contract_name: str) -> bytes:
        types, values = self.initialization_args(contract_name)
        return encode(types, values)

    def constructor_args(self, contract_name: str) -> List[Any]:
        if contract_name.endswith(TARGET_SUFFIX):
            self._get_container(contract_name)
            return []
        if contract_name in PROXIED_CONTRACTS:
            return [
                self._get_address(f"{contract_name}{TARGET_SUFFIX}"),
                self.encoded_initialization_args(contract_name),
            ]
        if contract_name == UPGRADE_GATEKEEPER:
            return [self._get_address(FRANKLIN)]
        raise UnknownContractError(f"Unknown contract '{contract_name}'")

    def encoded_constructor_args(self, contract_name: str) -> Optional[str]:
        """
        Returns the hex encoded constructor arguments, without 0x prefix,
        or None if the contract has no constructor.
        """
        contract_type = self._get_container(contract_name).contract_type
        constructors = [abi for abi in contract_type.abi if abi.type == "constructor"]
        if not constructors:
            return None

        types = [abi_input.canonical_type for abi_input in constructors[0].inputs]
        return encode(types, self.constructor_args(contract_name)).hex()

    #
    # Deployment
    #

    def _deploy_contract(self, contract_name: str) -> ContractInstance:
        container = self._get_container(contract_name)
        args = self.constructor_args(contract_name)
        if not self._autosign:
            _confirm_deployment(contract_name, args)

        print(f"\nDeploying {contract_name} ({container.contract_type.name})...")
        instance = self.get_account().deploy(
            container,
            *args,
            gas=GAS_LIMITS.get(contract_name, DEFAULT_GAS_LIMIT),
            publish=False,
        )
        self.addresses[contract_name] = instance.address
        self.deployments[contract_name] = instance
        print(f"(i) {contract_name} deployed to {instance.address}")
        return instance

    def _deploy_proxied(self, contract_name: str) -> ContractInstance:
        target_name = f"{contract_name}{TARGET_SUFFIX}"
        self._deploy_contract(target_name)

        proxy = self._deploy_contract(contract_name)
        if contract_name in TX_HASH_ENVVARS:
            self.deploy_transaction_hashes[contract_name] = hex_string(proxy.txn_hash)

        print(f"Wrapping {contract_name} proxy at {proxy.address} as type {target_name}.")
        return self._contract_at(target_name, proxy.address)

    def deploy_governance(self) -> ContractInstance:
        return self._deploy_proxied(GOVERNANCE)

    def deploy_verifier(self) -> ContractInstance:
        return self._deploy_proxied(VERIFIER)

    def deploy_franklin(self) -> ContractInstance:
        return self._deploy_proxied(FRANKLIN)

    def deploy_upgrade_gatekeeper(self) -> ContractInstance:
        """
        Deploys the gatekeeper and hands it mastership of every proxy,
        then registers every proxy as upgradeable.
        """
        gatekeeper = self._deploy_contract(UPGRADE_GATEKEEPER)

        for contract_name in PROXIED_CONTRACTS:
            proxy = self.get_deployed_contract(contract_name)
            self.transact(proxy.transferMastership, gatekeeper.address)

        for contract_name in PROXIED_CONTRACTS:
            proxy = self.get_deployed_contract(contract_name)
            self.transact(gatekeeper.addUpgradeable, proxy.address)

        return gatekeeper

    def deploy_all(self) -> Dict[str, ContractInstance]:
        return {
            GOVERNANCE: self.deploy_governance(),
            VERIFIER: self.deploy_verifier(),
            FRANKLIN: self.deploy_franklin(),
            UPGRADE_GATEKEEPER: self.deploy_upgrade_gatekeeper(),
        }

    #
    # Publishing
    #

    def _get_abi(self, contract_name: str) -> List[Dict]:
        contract_type = self._get_container(contract_name).contract_type
        return [abi.model_dump(mode="json", by_alias=True) for abi in contract_type.abi]

    def post_contract_to_tesseracts(self, contract_name: str, session=None) -> None:
        post_contract_abi(
            base_url=self.environment.tesseracts_url,
            address=self._get_address(contract_name),
            contract_name=contract_name,
            abi=self._get_abi(contract_name),
            session=session,
        )
        print(f"(i) Posted {contract_name} ABI to {self.environment.tesseracts_url}")

    def publish_source_code_to_etherscan(
        self, contract_name: str, client: Optional[EtherscanClient] = None
    ) -> Optional[Dict]:
        """
        Publishes the standard-JSON sources of a deployed contract to Etherscan.
        Proxies are published as the Proxy contract, targets as their own source.
        """
        source_name = self._get_container(contract_name).contract_type.name
        contract_path = f"{CONTRACTS_DIR.as_posix()}/{source_name}.sol"
        source_code = solidity_standard_json_input(contract_path, root=self.project_root)

        if client is None:
            client = EtherscanClient(
                network=get_network_name(self.environment.network),
                api_key=self.environment.etherscan_api_key,
            )

        print(f"(i) Publishing {contract_name} sources ({contract_path})...")
        return publish_source_code(
            client,
            contract_name=source_name,
            contract_address=self._get_address(contract_name),
            contract_path=contract_path,
            source_code=source_code,
            constructor_arguments=self.encoded_constructor_args(contract_name),
        )

    def registry_entries(self, chain_id: int) -> List[RegistryEntry]:
        entries = list()
        for contract_name in self.containers:
            address = self.addresses.get(contract_name)
            if not address:
                continue
            if contract_name in self.deployments:
                tx_hash = hex_string(self.deployments[contract_name].txn_hash)
            else:
                tx_hash = self.deploy_transaction_hashes.get(contract_name)
            entries.append(
                RegistryEntry(
                    chain_id=chain_id,
                    name=contract_name,
                    address=address,
                    abi=self._get_abi(contract_name),
                    tx_hash=tx_hash,
                )
            )
        return entries

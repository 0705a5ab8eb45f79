import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Mapping, Optional

from dotenv import load_dotenv

from franklin_deployment.constants import DEFAULT_TESSERACTS_URL
from franklin_deployment.exceptions import MissingEnvironmentVariable

# deployer name -> environment variable
ADDRESS_ENVVARS = {
    "GovernanceTarget": "GOVERNANCE_TARGET_ADDR",
    "VerifierTarget": "VERIFIER_TARGET_ADDR",
    "FranklinTarget": "CONTRACT_TARGET_ADDR",
    "Governance": "GOVERNANCE_ADDR",
    "Verifier": "VERIFIER_ADDR",
    "Franklin": "CONTRACT_ADDR",
    "UpgradeGatekeeper": "UPGRADE_GATEKEEPER_ADDR",
}

TX_HASH_ENVVARS = {
    "Governance": "GOVERNANCE_GENESIS_TX_HASH",
    "Franklin": "CONTRACT_GENESIS_TX_HASH",
}

OPERATOR_ADDRESS_ENVVAR = "OPERATOR_FRANKLIN_ADDRESS"
GENESIS_ROOT_ENVVAR = "GENESIS_ROOT"
NETWORK_ENVVAR = "ETH_NETWORK"
ETHERSCAN_API_KEY_ENVVAR = "ETHERSCAN_API_KEY"
TESSERACTS_URL_ENVVAR = "TESSERACTS_URL"


def load_env_file(filepath: Optional[Path]) -> None:
    """Loads a dotenv file into the process environment; set variables win."""
    if not filepath:
        return
    if not load_dotenv(filepath, override=False):
        print(f"(i) No variables loaded from {filepath}")


@dataclass
class DeploymentEnvironment:
    """Deployment inputs read from environment variables."""

    addresses: Dict[str, Optional[str]] = field(default_factory=dict)
    deploy_transaction_hashes: Dict[str, Optional[str]] = field(default_factory=dict)
    operator_address: Optional[str] = None
    genesis_root: Optional[str] = None
    network: Optional[str] = None
    etherscan_api_key: Optional[str] = None
    tesseracts_url: str = DEFAULT_TESSERACTS_URL

    @classmethod
    def from_environ(cls, environ: Optional[Mapping[str, str]] = None) -> "DeploymentEnvironment":
        environ = os.environ if environ is None else environ
        return cls(
            addresses={name: environ.get(var) for name, var in ADDRESS_ENVVARS.items()},
            deploy_transaction_hashes={
                name: environ.get(var) for name, var in TX_HASH_ENVVARS.items()
            },
            operator_address=environ.get(OPERATOR_ADDRESS_ENVVAR),
            genesis_root=environ.get(GENESIS_ROOT_ENVVAR) or None,
            network=environ.get(NETWORK_ENVVAR) or None,
            etherscan_api_key=environ.get(ETHERSCAN_API_KEY_ENVVAR),
            tesseracts_url=environ.get(TESSERACTS_URL_ENVVAR) or DEFAULT_TESSERACTS_URL,
        )

    def require_operator_address(self) -> str:
        if not self.operator_address:
            raise MissingEnvironmentVariable(OPERATOR_ADDRESS_ENVVAR)
        return self.operator_address


def env_assignments(
    addresses: Mapping[str, Optional[str]],
    deploy_transaction_hashes: Mapping[str, Optional[str]],
) -> List[str]:
    """Renders deployer bookkeeping as NAME=value lines for an env file."""
    lines = list()
    for name, var in ADDRESS_ENVVARS.items():
        if addresses.get(name):
            lines.append(f"{var}={addresses[name]}")
    for name, var in TX_HASH_ENVVARS.items():
        if deploy_transaction_hashes.get(name):
            lines.append(f"{var}={deploy_transaction_hashes[name]}")
    return lines

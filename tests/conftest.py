from pathlib import Path
from unittest.mock import MagicMock

import pytest
from ape.contracts import ContractInstance
from eth_utils import to_checksum_address

from franklin_deployment.environment import DeploymentEnvironment
from franklin_deployment.params import Deployer

FIXTURES_DIR = Path(__file__).parent / "fixtures"

DEPLOYER_ADDRESS = to_checksum_address("0x" + "de" * 20)
OPERATOR_ADDRESS = to_checksum_address("0x" + "0f" * 20)
ETHERSCAN_API_KEY = "TESTAPIKEY"


def address(index: int) -> str:
    return to_checksum_address(f"0x{index:040x}")


def tx_hash(index: int) -> str:
    return f"0x{index:064x}"


class FakeAccount:
    """Stands in for an ape account; each deployment lands at the next address."""

    def __init__(self):
        self.address = DEPLOYER_ADDRESS
        self.deploy = MagicMock(side_effect=self._deploy)
        self._deployments = 0

    def _deploy(self, container, *args, **kwargs):
        self._deployments += 1
        return ContractInstance(
            address(0x1000 + self._deployments),
            container.contract_type,
            txn_hash=tx_hash(self._deployments),
        )


@pytest.fixture
def build_dir() -> Path:
    return FIXTURES_DIR / "build"


@pytest.fixture
def project_root() -> Path:
    return FIXTURES_DIR / "project"


@pytest.fixture
def environ():
    return {
        "OPERATOR_FRANKLIN_ADDRESS": OPERATOR_ADDRESS,
        "ETH_NETWORK": "rinkeby",
        "ETHERSCAN_API_KEY": ETHERSCAN_API_KEY,
    }


@pytest.fixture
def environment(environ) -> DeploymentEnvironment:
    return DeploymentEnvironment.from_environ(environ)


@pytest.fixture
def account() -> FakeAccount:
    return FakeAccount()


@pytest.fixture
def deployer(build_dir, project_root, environment, account) -> Deployer:
    return Deployer.from_build_dir(
        build_dir=build_dir,
        environment=environment,
        account=account,
        autosign=True,
        project_root=project_root,
    )


@pytest.fixture
def transact(deployer, monkeypatch) -> MagicMock:
    """Records transactions instead of sending them."""
    mock = MagicMock()
    monkeypatch.setattr(deployer, "transact", mock)
    return mock

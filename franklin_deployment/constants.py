from pathlib import Path

from ape.utils import EMPTY_BYTES32
from web3 import Web3

#
# Filesystem
#

BUILD_DIR = Path("build")
CONTRACTS_DIR = Path("contracts")
WAFFLE_CONFIG_FILENAME = ".waffle.json"
ERC20_MINTABLE_ARTIFACT = Path(
    "node_modules/openzeppelin-solidity/build/contracts/ERC20Mintable.json"
)

#
# Contracts
#

GOVERNANCE = "Governance"
VERIFIER = "Verifier"
FRANKLIN = "Franklin"
UPGRADE_GATEKEEPER = "UpgradeGatekeeper"
PROXY = "Proxy"
TARGET_SUFFIX = "Target"

# deployed behind a proxy, in deployment order
PROXIED_CONTRACTS = [GOVERNANCE, VERIFIER, FRANKLIN]

# deployer name -> (production artifact, test artifact)
CONTRACT_ARTIFACTS = {
    "GovernanceTarget": ("Governance", "GovernanceTest"),
    "VerifierTarget": ("Verifier", "VerifierTest"),
    "FranklinTarget": ("Franklin", "FranklinTest"),
    GOVERNANCE: (PROXY, PROXY),
    VERIFIER: (PROXY, PROXY),
    FRANKLIN: (PROXY, PROXY),
    UPGRADE_GATEKEEPER: ("UpgradeGatekeeper", "UpgradeGatekeeperTest"),
}

ZERO_HASH = EMPTY_BYTES32

#
# Gas
#

DEFAULT_GAS_LIMIT = 3_000_000
GAS_LIMITS = {
    "FranklinTarget": 6_500_000,
}

#
# Test tokens
#

TEST_TOKEN_MINT_AMOUNT = Web3.to_wei(3_000_000_000, "ether")
NOT_APPROVED_TOKEN_MINT_AMOUNT = 1_000_000_000

#
# Block explorers
#

MAINNET = "mainnet"
LOCAL_NETWORKS = ["local"]

SOLC_COMPILER_VERSION = "v0.5.16+commit.9c3226ce"
SOURCE_CODE_FORMAT = "solidity-standard-json-input"

CONTRACT_NOT_INDEXED_MESSAGE = "Unable to locate ContractCode"
PENDING_VERIFICATION_MESSAGE = "Pending in queue"
VERIFICATION_SUBMIT_RETRIES = 20
VERIFICATION_SUBMIT_RETRY_DELAY = 15
VERIFICATION_STATUS_CHECKS = 10
VERIFICATION_STATUS_CHECK_DELAY = 5

DEFAULT_TESSERACTS_URL = "http://localhost:8000"

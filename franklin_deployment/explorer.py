import json
import time
from typing import Dict, List, Optional

import requests
from ape.logging import logger

from franklin_deployment.constants import (
    CONTRACT_NOT_INDEXED_MESSAGE,
    MAINNET,
    PENDING_VERIFICATION_MESSAGE,
    SOLC_COMPILER_VERSION,
    SOURCE_CODE_FORMAT,
    VERIFICATION_STATUS_CHECK_DELAY,
    VERIFICATION_STATUS_CHECKS,
    VERIFICATION_SUBMIT_RETRIES,
    VERIFICATION_SUBMIT_RETRY_DELAY,
)

VERIFIED_STATUS = "1"


def etherscan_api_url(network: str) -> str:
    if network == MAINNET:
        return "https://api.etherscan.io/api"
    return f"https://api-{network}.etherscan.io/api"


def etherscan_address_url(network: str, address: str) -> str:
    if network == MAINNET:
        return f"https://etherscan.io/address/{address}"
    return f"https://{network}.etherscan.io/address/{address}"


class EtherscanClient:
    """Minimal client for the Etherscan contract verification endpoints."""

    def __init__(self, network: str, api_key: Optional[str], session=None):
        self.network = network
        self.api_key = api_key
        self.api_url = etherscan_api_url(network)
        self.session = session or requests.Session()

    def verify_source_code(
        self,
        contract_address: str,
        source_code: str,
        contract_name: str,
        constructor_arguments: Optional[str],
        compiler_version: str = SOLC_COMPILER_VERSION,
    ) -> Dict:
        data = {
            "apikey": self.api_key,
            "module": "contract",
            "action": "verifysourcecode",
            "contractaddress": contract_address,
            "sourceCode": source_code,
            "codeformat": SOURCE_CODE_FORMAT,
            "contractname": contract_name,
            "compilerversion": compiler_version,
            # sic, the API expects this spelling
            "constructorArguements": constructor_arguments,
        }
        response = self.session.post(self.api_url, data=data)
        response.raise_for_status()
        return response.json()

    def check_verify_status(self, guid: str) -> Dict:
        params = {
            "apikey": self.api_key,
            "module": "contract",
            "action": "checkverifystatus",
            "guid": guid,
        }
        response = self.session.get(self.api_url, params=params)
        response.raise_for_status()
        return response.json()


def _wait_for_verification(client: EtherscanClient, guid: str) -> Optional[Dict]:
    status = None
    for check in range(VERIFICATION_STATUS_CHECKS):
        status = client.check_verify_status(guid)
        if PENDING_VERIFICATION_MESSAGE not in str(status.get("result", "")):
            break
        if check < VERIFICATION_STATUS_CHECKS - 1:
            time.sleep(VERIFICATION_STATUS_CHECK_DELAY)
    return status


def publish_source_code(
    client: EtherscanClient,
    contract_name: str,
    contract_address: str,
    contract_path: str,
    source_code: str,
    constructor_arguments: Optional[str],
) -> Optional[Dict]:
    """
    Submits the contract sources for verification and waits for the outcome.

    Submissions made before the explorer has indexed the contract are retried.
    Returns the final verification status, or None if publishing failed.
    """
    retries_left = VERIFICATION_SUBMIT_RETRIES
    while True:
        response = client.verify_source_code(
            contract_address=contract_address,
            source_code=source_code,
            contract_name=f"{contract_path}:{contract_name}",
            constructor_arguments=constructor_arguments,
        )
        if str(response.get("status")) == VERIFIED_STATUS:
            break

        result = str(response.get("result", ""))
        if CONTRACT_NOT_INDEXED_MESSAGE in result and retries_left > 0:
            # explorer backend has not seen the contract yet
            retries_left -= 1
            time.sleep(VERIFICATION_SUBMIT_RETRY_DELAY)
            continue

        logger.error(f"Problem publishing {contract_name}: {response}")
        return None

    status = _wait_for_verification(client, guid=response["result"])
    print(
        f"Published {contract_name} sources on "
        f"{etherscan_address_url(client.network, contract_address)} with status {status}"
    )
    return status


def post_contract_abi(
    base_url: str, address: str, contract_name: str, abi: List[Dict], session=None
) -> requests.Response:
    """Registers a contract ABI with a Tesseracts block explorer."""
    session = session or requests.Session()
    data = {
        "contract_source": json.dumps(abi),
        "contract_compiler": "abi-only",
        "contract_name": contract_name,
        "contract_optimized": "false",
    }
    response = session.post(f"{base_url.rstrip('/')}/{address}/contract", data=data)
    response.raise_for_status()
    return response

"""Test ERC20 tokens for development deployments."""

from typing import Optional

from ape.contracts import ContractContainer, ContractInstance
from ape.exceptions import ApeException
from ape.logging import logger

from franklin_deployment.constants import (
    DEFAULT_GAS_LIMIT,
    NOT_APPROVED_TOKEN_MINT_AMOUNT,
    TEST_TOKEN_MINT_AMOUNT,
)
from franklin_deployment.params import Deployer


def add_test_erc20_token(
    deployer: Deployer, governance: ContractInstance, erc20: ContractContainer
) -> Optional[ContractInstance]:
    """Deploys a mintable ERC20, mints to the deployer and lists it in Governance."""
    account = deployer.get_account()
    try:
        token = account.deploy(erc20, gas=DEFAULT_GAS_LIMIT, publish=False)
        print(f"(i) Test token deployed to {token.address}")
        deployer.transact(token.mint, account.address, TEST_TOKEN_MINT_AMOUNT)
        deployer.transact(governance.addToken, token.address)
        return token
    except ApeException as err:
        logger.error(f"Add token error: {err}")


def mint_test_erc20_token(deployer: Deployer, erc20: ContractInstance) -> None:
    account = deployer.get_account()
    try:
        deployer.transact(erc20.mint, account.address, TEST_TOKEN_MINT_AMOUNT)
    except ApeException as err:
        logger.error(f"Mint token error: {err}")


def add_test_not_approved_erc20_token(
    deployer: Deployer, erc20: ContractContainer
) -> Optional[ContractInstance]:
    """Deploys a mintable ERC20 that is never listed in Governance."""
    account = deployer.get_account()
    try:
        token = account.deploy(erc20, publish=False)
        print(f"(i) Not approved test token deployed to {token.address}")
        deployer.transact(token.mint, account.address, NOT_APPROVED_TOKEN_MINT_AMOUNT)
        return token
    except ApeException as err:
        logger.error(f"Add token error: {err}")

import sys
from typing import Sequence

from ape.utils import ZERO_ADDRESS


def _abort() -> None:
    print("Aborting deployment!")
    sys.exit(-1)


def _continue() -> None:
    """Asks the user to continue."""
    answer = input("Continue Y/N? ")
    if answer.lower().strip() == "n":
        _abort()


def _confirm_zero_address() -> None:
    answer = input("Zero Address detected for deployment parameter; Continue? Y/N? ")
    if answer.lower().strip() == "n":
        _abort()


def _confirm_deployment(contract_name: str, constructor_args: Sequence) -> None:
    """Asks the user to confirm the deployment of a single contract."""
    if constructor_args:
        print(f"\nConstructor parameters for {contract_name}")
        for position, value in enumerate(constructor_args):
            print(f"\t[{position}]={value}")
    else:
        print(f"\n(i) No constructor parameters for {contract_name}")

    answer = input(f"Deploy {contract_name} Y/N? ")
    if answer.lower().strip() == "n":
        _abort()
    if ZERO_ADDRESS in constructor_args:
        _confirm_zero_address()

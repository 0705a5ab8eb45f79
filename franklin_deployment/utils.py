import json
from pathlib import Path
from typing import Optional, Union

from ape import networks
from eth_utils import to_hex

from franklin_deployment.constants import LOCAL_NETWORKS
from franklin_deployment.environment import ETHERSCAN_API_KEY_ENVVAR
from franklin_deployment.exceptions import MissingEnvironmentVariable


def _load_json(filepath: Path) -> dict:
    """Loads a JSON file."""
    with open(filepath, "r") as file:
        return json.load(file)


def is_local_network() -> bool:
    """Returns True if ape is connected to a local development network."""
    return networks.provider.network.name in LOCAL_NETWORKS


def get_network_name(override: Optional[str] = None) -> str:
    """Returns the explorer network name, defaulting to the connected ape network."""
    if override:
        return override
    return networks.provider.network.name


def check_etherscan_api_key(api_key: Optional[str]) -> None:
    """
    Checks that an Etherscan API key is available before anything is deployed,
    so that a long deployment does not fail at the publishing step.
    """
    if is_local_network():
        # unnecessary for local deployment
        return
    if not api_key:
        raise MissingEnvironmentVariable(ETHERSCAN_API_KEY_ENVVAR)


def hex_string(value: Optional[Union[str, bytes]]) -> Optional[str]:
    """Normalizes a transaction hash to a 0x-prefixed string."""
    if value is None or isinstance(value, str):
        return value
    return to_hex(value)

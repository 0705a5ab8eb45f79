import click
import pytest
from hexbytes import HexBytes

from franklin_deployment import utils
from franklin_deployment.exceptions import MissingEnvironmentVariable
from franklin_deployment.types import ChecksumAddress
from franklin_deployment.utils import check_etherscan_api_key, get_network_name, hex_string
from tests.conftest import address, tx_hash


def test_hex_string():
    assert hex_string(None) is None
    assert hex_string(tx_hash(1)) == tx_hash(1)
    assert hex_string(HexBytes(tx_hash(1))) == tx_hash(1)


def test_get_network_name_override():
    assert get_network_name("rinkeby") == "rinkeby"


def test_check_etherscan_api_key(monkeypatch):
    monkeypatch.setattr(utils, "is_local_network", lambda: False)
    check_etherscan_api_key("KEY")
    with pytest.raises(MissingEnvironmentVariable, match="ETHERSCAN_API_KEY is not set"):
        check_etherscan_api_key(None)

    monkeypatch.setattr(utils, "is_local_network", lambda: True)
    check_etherscan_api_key(None)


def test_checksum_address_param():
    param = ChecksumAddress()
    assert param.convert(address(10).lower(), None, None) == address(10)

    with pytest.raises(click.BadParameter, match="not a valid ethereum address"):
        param.convert("0x1234", None, None)

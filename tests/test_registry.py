import json

import pytest

from franklin_deployment.registry import RegistryEntry, read_registry, write_registry
from tests.conftest import address, tx_hash

ABI = [{"type": "function", "name": "getTarget", "inputs": [], "outputs": []}]


@pytest.fixture
def entries():
    return [
        RegistryEntry(
            chain_id=4,
            name="Verifier",
            address=address(2).lower(),
            abi=ABI,
            tx_hash=None,
        ),
        RegistryEntry(
            chain_id=4,
            name="Governance",
            address=address(1),
            abi=ABI,
            tx_hash=tx_hash(1),
        ),
    ]


def test_write_and_read_registry(entries, tmp_path):
    filepath = tmp_path / "registry" / "rinkeby.json"

    assert write_registry(entries, filepath) == filepath

    data = json.loads(filepath.read_text())
    assert list(data) == ["4"]
    assert list(data["4"]) == ["Governance", "Verifier"]
    assert data["4"]["Verifier"]["address"] == address(2)
    assert data["4"]["Governance"]["tx_hash"] == tx_hash(1)

    registry = read_registry(filepath)
    assert [entry.name for entry in registry] == ["Governance", "Verifier"]
    assert registry[1].address == address(2)
    assert registry[1].tx_hash is None


def test_merge_registry(entries, tmp_path):
    filepath = tmp_path / "registry.json"
    write_registry(entries, filepath)

    other_chain = [entry._replace(chain_id=1) for entry in entries]
    assert write_registry(other_chain, filepath) == filepath

    assert {entry.chain_id for entry in read_registry(filepath)} == {1, 4}


def test_overlapping_chains_are_not_merged(entries, tmp_path):
    filepath = tmp_path / "registry.json"
    write_registry(entries, filepath)
    original = filepath.read_text()

    unmerged = write_registry(entries[:1], filepath)

    assert unmerged == tmp_path / "registry.unmerged.json"
    assert filepath.read_text() == original
    assert [entry.name for entry in read_registry(unmerged)] == ["Verifier"]


def test_write_empty_registry(tmp_path, capsys):
    filepath = tmp_path / "registry.json"
    write_registry([], filepath)

    assert not filepath.exists()
    assert "No entries provided." in capsys.readouterr().out

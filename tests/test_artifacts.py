import json

import pytest

from franklin_deployment.artifacts import (
    load_artifact,
    load_contract_container,
    load_contract_containers,
    load_erc20_mintable,
)
from franklin_deployment.exceptions import ArtifactNotFoundError, InvalidArtifactError


def _write_artifact(path, artifact):
    path.write_text(json.dumps(artifact))
    return path


def test_load_waffle_artifact(build_dir):
    artifact = load_artifact(build_dir / "Governance.json")

    assert artifact["bytecode"] == "0x608060405234801561001057600080fd5b50"
    assert {abi["name"] for abi in artifact["abi"]} == {"initialize", "addToken"}


def test_load_truffle_artifact(build_dir):
    artifact = load_artifact(build_dir / "ERC20Mintable.json")
    assert artifact["bytecode"] == "0x608060405234801561001057600080fd5b5030"


def test_load_bare_bytecode_string(tmp_path):
    path = _write_artifact(tmp_path / "Bare.json", {"abi": [], "evm": {"bytecode": "6080"}})
    assert load_artifact(path)["bytecode"] == "0x6080"


def test_missing_artifact(tmp_path):
    with pytest.raises(ArtifactNotFoundError):
        load_artifact(tmp_path / "Nothing.json")

    # still a FileNotFoundError for callers that only know the builtin
    with pytest.raises(FileNotFoundError):
        load_contract_container("Nothing", build_dir=tmp_path)


def test_invalid_artifacts(tmp_path):
    no_abi = _write_artifact(tmp_path / "NoAbi.json", {"bytecode": "0x6080"})
    with pytest.raises(InvalidArtifactError, match="no ABI"):
        load_artifact(no_abi)

    no_bytecode = _write_artifact(tmp_path / "NoBytecode.json", {"abi": [], "evm": {}})
    with pytest.raises(InvalidArtifactError, match="no bytecode"):
        load_artifact(no_bytecode)


def test_load_contract_containers(build_dir):
    containers = load_contract_containers(build_dir=build_dir)

    assert list(containers) == [
        "GovernanceTarget",
        "VerifierTarget",
        "FranklinTarget",
        "Governance",
        "Verifier",
        "Franklin",
        "UpgradeGatekeeper",
    ]
    assert containers["GovernanceTarget"].contract_type.name == "Governance"
    assert containers["UpgradeGatekeeper"].contract_type.name == "UpgradeGatekeeper"

    proxy = containers["Governance"]
    assert containers["Verifier"] is proxy
    assert containers["Franklin"] is proxy
    assert proxy.contract_type.name == "Proxy"


def test_load_test_contract_containers(build_dir):
    containers = load_contract_containers(build_dir=build_dir, test=True)

    assert containers["GovernanceTarget"].contract_type.name == "GovernanceTest"
    assert containers["VerifierTarget"].contract_type.name == "VerifierTest"
    assert containers["FranklinTarget"].contract_type.name == "FranklinTest"
    assert containers["Franklin"].contract_type.name == "Proxy"
    assert containers["UpgradeGatekeeper"].contract_type.name == "UpgradeGatekeeperTest"


def test_load_erc20_mintable(build_dir):
    erc20 = load_erc20_mintable(build_dir / "ERC20Mintable.json")

    assert erc20.contract_type.name == "ERC20Mintable"
    assert [abi.name for abi in erc20.contract_type.mutable_methods] == ["mint"]

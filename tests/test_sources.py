import json

import pytest

from franklin_deployment.exceptions import SourceNotFoundError
from franklin_deployment.sources import (
    _find_imports,
    gather_sources,
    load_compiler_options,
    solidity_standard_json_input,
)


def test_find_imports():
    source = """
pragma solidity ^0.5.0;

import "./A.sol";
import './B.sol' as B;
import * as C from "./C.sol";
import {D, E} from "lib/DE.sol";
// not an import: "import"
"""
    assert _find_imports(source) == ["./A.sol", "./B.sol", "./C.sol", "lib/DE.sol"]


def test_gather_relative_imports(project_root):
    sources = gather_sources("contracts/Proxy.sol", root=project_root)

    assert list(sources) == [
        "contracts/Proxy.sol",
        "contracts/Ownable.sol",
        "contracts/Upgradeable.sol",
    ]
    assert "contract Ownable" in sources["contracts/Ownable.sol"]


def test_gather_node_modules_imports(project_root):
    sources = gather_sources("contracts/Governance.sol", root=project_root)

    assert list(sources) == [
        "contracts/Governance.sol",
        "node_modules/openzeppelin-solidity/contracts/math/SafeMath.sol",
        "contracts/Config.sol",
    ]


def test_gather_unresolvable_import(project_root):
    with pytest.raises(SourceNotFoundError, match="./Missing.sol"):
        gather_sources("contracts/Broken.sol", root=project_root)


def test_gather_missing_contract(project_root):
    with pytest.raises(FileNotFoundError):
        gather_sources("contracts/Nothing.sol", root=project_root)


def test_compiler_options(project_root, tmp_path):
    assert load_compiler_options(project_root) == {"optimizer": {"enabled": True, "runs": 200}}
    assert load_compiler_options(tmp_path) == {}


def test_solidity_standard_json_input(project_root):
    serialized = solidity_standard_json_input("contracts/Proxy.sol", root=project_root)
    assert serialized.startswith('{\n  "language": "Solidity"')

    standard_json = json.loads(serialized)
    assert standard_json["language"] == "Solidity"
    assert set(standard_json["sources"]) == {
        "contracts/Proxy.sol",
        "contracts/Ownable.sol",
        "contracts/Upgradeable.sol",
    }
    assert "content" in standard_json["sources"]["contracts/Proxy.sol"]

    settings = standard_json["settings"]
    assert settings["optimizer"] == {"enabled": True, "runs": 200}
    assert settings["outputSelection"]["*"]["*"] == [
        "abi",
        "evm.bytecode",
        "evm.deployedBytecode",
    ]


def test_explicit_compiler_options(project_root):
    serialized = solidity_standard_json_input(
        "contracts/Proxy.sol", root=project_root, compiler_options={"evmVersion": "istanbul"}
    )
    settings = json.loads(serialized)["settings"]
    assert settings["evmVersion"] == "istanbul"
    assert "optimizer" not in settings

from pathlib import Path
from typing import Dict, Optional

from ape.contracts import ContractContainer
from ethpm_types import ContractType

from franklin_deployment.constants import BUILD_DIR, CONTRACT_ARTIFACTS, ERC20_MINTABLE_ARTIFACT
from franklin_deployment.exceptions import ArtifactNotFoundError, InvalidArtifactError
from franklin_deployment.utils import _load_json


def _get_bytecode(artifact: Dict) -> Optional[str]:
    """
    Returns the deployment bytecode of an artifact.

    Waffle artifacts carry it under evm.bytecode.object, truffle artifacts
    (e.g. openzeppelin-solidity builds) as a top-level 'bytecode' string.
    """
    evm_bytecode = artifact.get("evm", {}).get("bytecode")
    if isinstance(evm_bytecode, dict):
        bytecode = evm_bytecode.get("object")
    else:
        bytecode = evm_bytecode
    bytecode = bytecode or artifact.get("bytecode")
    if not bytecode:
        return None
    if not bytecode.startswith("0x"):
        bytecode = f"0x{bytecode}"
    return bytecode


def load_artifact(filepath: Path) -> Dict:
    """Loads a precompiled contract artifact (ABI + bytecode)."""
    if not filepath.exists():
        raise ArtifactNotFoundError(f"No contract artifact found at {filepath}")

    artifact = _load_json(filepath)
    if "abi" not in artifact:
        raise InvalidArtifactError(f"Artifact {filepath} has no ABI.")

    bytecode = _get_bytecode(artifact)
    if not bytecode:
        raise InvalidArtifactError(f"Artifact {filepath} has no bytecode.")

    return {"abi": artifact["abi"], "bytecode": bytecode}


def contract_container(name: str, artifact: Dict) -> ContractContainer:
    """Wraps an artifact into an ape contract container."""
    contract_type = ContractType.model_validate(
        {
            "contractName": name,
            "abi": artifact["abi"],
            "deploymentBytecode": {"bytecode": artifact["bytecode"]},
        }
    )
    return ContractContainer(contract_type)


def load_contract_container(name: str, build_dir: Path = BUILD_DIR) -> ContractContainer:
    artifact = load_artifact(build_dir / f"{name}.json")
    return contract_container(name, artifact)


def load_contract_containers(
    build_dir: Path = BUILD_DIR, test: bool = False
) -> Dict[str, ContractContainer]:
    """
    Returns the contract containers tracked by the deployer, keyed by deployer name.
    The three proxies share the single Proxy artifact.
    """
    containers = dict()
    loaded = dict()
    for name, (production_artifact, test_artifact) in CONTRACT_ARTIFACTS.items():
        artifact_name = test_artifact if test else production_artifact
        if artifact_name not in loaded:
            loaded[artifact_name] = load_contract_container(artifact_name, build_dir=build_dir)
        containers[name] = loaded[artifact_name]
    return containers


def load_erc20_mintable(filepath: Path = ERC20_MINTABLE_ARTIFACT) -> ContractContainer:
    """Loads the mintable ERC20 used for test tokens."""
    artifact = load_artifact(filepath)
    return contract_container("ERC20Mintable", artifact)

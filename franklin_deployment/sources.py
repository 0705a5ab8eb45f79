"""
Solidity standard-JSON input for block explorer verification.

Sources are gathered by following import statements from the contract file,
the way the compiler resolves them for this project: relative imports against
the importing file, everything else against the project root and then
node_modules.
"""

import json
import posixpath
import re
from collections import OrderedDict
from pathlib import Path
from typing import Dict, Optional

from franklin_deployment.constants import WAFFLE_CONFIG_FILENAME
from franklin_deployment.exceptions import SourceNotFoundError
from franklin_deployment.utils import _load_json

IMPORT_PATTERN = re.compile(
    r"""^\s*import\s+(?:[^"';]*?\s+from\s+)?["']([^"']+)["']""",
    re.MULTILINE,
)
NODE_MODULES = "node_modules"

OUTPUT_SELECTION = {
    "*": {
        "*": [
            "abi",
            "evm.bytecode",
            "evm.deployedBytecode",
        ]
    }
}


def _find_imports(source: str):
    return IMPORT_PATTERN.findall(source)


def _resolve_import(import_path: str, importer: str, root: Path) -> str:
    """Returns the root-relative path of an imported file."""
    if import_path.startswith("./") or import_path.startswith("../"):
        candidates = [posixpath.normpath(posixpath.join(posixpath.dirname(importer), import_path))]
    else:
        candidates = [import_path, posixpath.join(NODE_MODULES, import_path)]

    for candidate in candidates:
        if (root / candidate).is_file():
            return candidate
    raise SourceNotFoundError(f"Cannot resolve import '{import_path}' in {importer}")


def gather_sources(contract_path: str, root: Path) -> Dict[str, str]:
    """
    Returns the contents of a contract and all of its transitive imports,
    keyed by root-relative path.
    """
    contract_path = Path(contract_path).as_posix()
    if not (root / contract_path).is_file():
        raise SourceNotFoundError(f"No contract source found at {root / contract_path}")

    sources = OrderedDict()
    pending = [contract_path]
    while pending:
        path = pending.pop(0)
        if path in sources:
            continue
        content = (root / path).read_text()
        sources[path] = content
        for import_path in _find_imports(content):
            resolved = _resolve_import(import_path, importer=path, root=root)
            if resolved not in sources:
                pending.append(resolved)
    return sources


def load_compiler_options(root: Path) -> Dict:
    """Returns the compilerOptions of the project's waffle config, if any."""
    config_filepath = root / WAFFLE_CONFIG_FILENAME
    if not config_filepath.exists():
        return dict()
    return _load_json(config_filepath).get("compilerOptions", dict())


def solidity_standard_json_input(
    contract_path: str, root: Path, compiler_options: Optional[Dict] = None
) -> str:
    """Builds the serialized standard-JSON compiler input for a contract."""
    if compiler_options is None:
        compiler_options = load_compiler_options(root)

    sources = gather_sources(contract_path, root=root)
    input_json = {
        "language": "Solidity",
        "sources": {path: {"content": content} for path, content in sources.items()},
        "settings": {
            "outputSelection": OUTPUT_SELECTION,
            **compiler_options,
        },
    }
    return json.dumps(input_json, indent=2)

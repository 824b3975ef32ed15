"""Loading of compiled Hardhat artifacts."""

import json
from pathlib import Path
from typing import List, Union

from clashdeploy.errors import ArtifactError
from clashdeploy.models import ContractArtifact


def find_artifact(contract_name: str, artifacts_dir: Union[str, Path]) -> Path:
    """
    Locate the artifact JSON for a contract.

    Hardhat writes artifacts to artifacts/<source path>/<Name>.json; the
    conventional contracts/<Name>.sol location is tried first.

    Raises:
        ArtifactError: If no artifact or more than one artifact matches
    """
    root = Path(artifacts_dir)
    if not root.is_dir():
        raise ArtifactError(f"Artifacts directory not found: {root}. Compile the contracts first.")

    conventional = root / "contracts" / f"{contract_name}.sol" / f"{contract_name}.json"
    if conventional.is_file():
        return conventional

    matches: List[Path] = [
        path for path in root.rglob(f"{contract_name}.json")
        if "build-info" not in path.parts
    ]
    if not matches:
        raise ArtifactError(f"No artifact found for contract {contract_name} under {root}")
    if len(matches) > 1:
        found = ", ".join(str(path.relative_to(root)) for path in sorted(matches))
        raise ArtifactError(
            f"Contract name {contract_name} is ambiguous, matching artifacts: {found}"
        )
    return matches[0]


def load_artifact(contract_name: str, artifacts_dir: Union[str, Path]) -> ContractArtifact:
    """
    Load a deployable contract artifact.

    Args:
        contract_name: Name of the contract (e.g., "ColorClash")
        artifacts_dir: Hardhat artifacts directory

    Returns:
        ContractArtifact with ABI and creation bytecode

    Raises:
        ArtifactError: If the artifact is missing, malformed, abstract, or
            its constructor expects arguments
    """
    path = find_artifact(contract_name, artifacts_dir)
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        raise ArtifactError(f"Failed to read artifact {path}: {e}") from e

    if not isinstance(data, dict):
        raise ArtifactError(f"Artifact {path} is not a JSON object")

    abi = data.get("abi")
    bytecode = data.get("bytecode") or ""
    if not isinstance(abi, list) or not all(isinstance(entry, dict) for entry in abi):
        raise ArtifactError(f"Artifact {path} has no ABI")
    if not isinstance(bytecode, str):
        raise ArtifactError(f"Artifact {path} bytecode is not a hex string (not a Hardhat artifact?)")
    if bytecode in ("", "0x"):
        raise ArtifactError(f"Contract {contract_name} has no bytecode (abstract contract or interface?)")
    if not bytecode.startswith("0x"):
        bytecode = "0x" + bytecode
    if "__$" in bytecode:
        raise ArtifactError(f"Contract {contract_name} requires library linking, which is not supported")

    for entry in abi:
        if entry.get("type") == "constructor" and entry.get("inputs"):
            raise ArtifactError(f"Contract {contract_name} expects constructor arguments")

    return ContractArtifact(
        contract_name=data.get("contractName", contract_name),
        abi=abi,
        bytecode=bytecode,
        source_name=data.get("sourceName"),
    )

"""Compiled artifact loading for hippobreeds-deployments."""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

from .exceptions import ArtifactNotFoundError, MalformedArtifactError
from .types import ArtifactDescriptor

logger = logging.getLogger(__name__)


def strip_hex_prefix(value: str) -> str:
    """Remove a leading 0x from a hex string."""
    if value[:2].lower() == "0x":
        return value[2:]
    return value


def parse_artifact(data: Dict[str, Any], source: str = "<artifact>") -> ArtifactDescriptor:
    """
    Build an ArtifactDescriptor from decoded artifact JSON.

    Only the presence and type of abi/bytecode are checked. Empty bytecode
    is accepted here and left for the network client to reject.

    Args:
        data: Decoded artifact JSON object
        source: Where the data came from, for error messages

    Returns:
        ArtifactDescriptor

    Raises:
        MalformedArtifactError: If abi or bytecode is missing or mistyped
    """
    if not isinstance(data, dict):
        raise MalformedArtifactError(f"Artifact {source} is not a JSON object")

    if "abi" not in data:
        raise MalformedArtifactError(f"Missing 'abi' in artifact: {source}")
    if "bytecode" not in data:
        raise MalformedArtifactError(f"Missing 'bytecode' in artifact: {source}")

    abi = data["abi"]
    bytecode = data["bytecode"]

    if not isinstance(abi, list) or not all(isinstance(item, dict) for item in abi):
        raise MalformedArtifactError(f"'abi' must be a list of objects in artifact: {source}")
    if not isinstance(bytecode, str):
        raise MalformedArtifactError(f"'bytecode' must be a hex string in artifact: {source}")

    return ArtifactDescriptor(
        abi=tuple(abi),
        bytecode=strip_hex_prefix(bytecode),
        contract_name=data.get("contractName"),
    )


def load_artifact(file_path: Union[Path, str]) -> ArtifactDescriptor:
    """
    Load a compiled contract artifact.

    Args:
        file_path: Path to build/contracts/<Name>.json

    Returns:
        ArtifactDescriptor

    Raises:
        ArtifactNotFoundError: If the file does not exist
        MalformedArtifactError: If the file is not valid JSON or lacks fields
    """
    path = Path(file_path)
    try:
        with open(path) as f:
            data = json.load(f)
    except FileNotFoundError:
        raise ArtifactNotFoundError(
            f"Contract artifact not found at {path}. Compile the contracts first."
        ) from None
    except json.JSONDecodeError as e:
        raise MalformedArtifactError(f"Artifact {path} is not valid JSON: {e}") from e

    artifact = parse_artifact(data, str(path))
    logger.debug(
        "Loaded artifact %s (%d ABI entries, %d bytecode bytes)",
        path,
        len(artifact.abi),
        len(artifact.bytecode) // 2,
    )
    return artifact


def find_abi_entry(
    abi, name: str, entry_type: str = "function"
) -> Optional[Dict[str, Any]]:
    """
    Find an ABI entry by type and name.

    Args:
        abi: Contract ABI
        name: Entry name (ignored for constructors)
        entry_type: "function", "event" or "constructor"

    Returns:
        ABI entry dict, or None if not present
    """
    # Linear search through ABI
    for item in abi:
        if item.get("type", "function") != entry_type:
            continue
        if entry_type == "constructor" or item.get("name") == name:
            return item
    return None

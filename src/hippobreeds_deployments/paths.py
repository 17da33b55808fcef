"""Path management utilities for hippobreeds-deployments."""

from pathlib import Path
from typing import Optional, Union

from .constants import ARTIFACTS_DIR, CONTRACT_NAME, RESULT_FILE


def get_default_project_root() -> Path:
    """
    Get default project root (current working directory).

    Returns:
        Path to the current working directory
    """
    return Path.cwd()


def _resolve_root(project_root: Optional[Union[Path, str]]) -> Path:
    if project_root is None:
        return get_default_project_root()
    return Path(project_root).absolute()


def get_artifact_path(
    project_root: Optional[Union[Path, str]] = None,
    contract_name: str = CONTRACT_NAME,
) -> Path:
    """
    Get the compiled artifact path for a contract.

    Args:
        project_root: Project directory (defaults to the working directory)
        contract_name: Contract name, used as the file stem

    Returns:
        Path to build/contracts/<contract_name>.json
    """
    return _resolve_root(project_root).joinpath(*ARTIFACTS_DIR) / f"{contract_name}.json"


def get_result_path(project_root: Optional[Union[Path, str]] = None) -> Path:
    """
    Get the deployment result path.

    Args:
        project_root: Project directory (defaults to the working directory)

    Returns:
        Path to src/abis/contractAddress.json
    """
    return _resolve_root(project_root).joinpath(*RESULT_FILE)

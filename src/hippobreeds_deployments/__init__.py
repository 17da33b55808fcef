"""
hippobreeds-deployments: deployment tooling for the HippoBreeds TRON contract
"""

from importlib.metadata import PackageNotFoundError, version

from .artifacts import load_artifact
from .client import Contract, ContractFactory, TronClient
from .deployer import (
    deploy_contract,
    deployment_options,
    deployment_status,
    load_deployment_result,
    run_deployment,
    save_deployment_result,
)
from .exceptions import (
    ArtifactNotFoundError,
    ConfirmationTimeoutError,
    ContractCallError,
    DeploymentError,
    MalformedArtifactError,
    MalformedResultError,
    NetworkClientError,
    ProfileNotFoundError,
    ResultNotFoundError,
    SigningKeyMissingError,
    TransactionFailedError,
    TransactionRejectedError,
)
from .profiles import build_network_profiles, get_profile, load_network_profiles
from .types import (
    ArtifactDescriptor,
    DeployedContract,
    DeploymentOptions,
    DeploymentResult,
    NetworkProfile,
)

try:
    __version__ = version("hippobreeds-deployments")
except PackageNotFoundError:
    __version__ = None

__all__ = [
    "TronClient",
    "ContractFactory",
    "Contract",
    "deploy_contract",
    "deployment_options",
    "deployment_status",
    "load_deployment_result",
    "run_deployment",
    "save_deployment_result",
    "load_artifact",
    "build_network_profiles",
    "load_network_profiles",
    "get_profile",
    "NetworkProfile",
    "ArtifactDescriptor",
    "DeploymentOptions",
    "DeployedContract",
    "DeploymentResult",
    "DeploymentError",
    "ProfileNotFoundError",
    "SigningKeyMissingError",
    "ArtifactNotFoundError",
    "MalformedArtifactError",
    "ResultNotFoundError",
    "MalformedResultError",
    "NetworkClientError",
    "TransactionRejectedError",
    "TransactionFailedError",
    "ConfirmationTimeoutError",
    "ContractCallError",
]

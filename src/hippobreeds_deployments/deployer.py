"""Contract deployment flow for hippobreeds-deployments."""

import json
import logging
import os
from pathlib import Path
from typing import Any, Mapping, Optional, Sequence, Union

from .artifacts import load_artifact
from .client import TronClient
from .constants import API_KEY_ENV, CONTRACT_NAME
from .exceptions import (
    ConfirmationTimeoutError,
    MalformedResultError,
    NetworkClientError,
    ResultNotFoundError,
)
from .paths import get_artifact_path, get_result_path
from .profiles import get_profile, load_network_profiles, resolve_signing_key
from .types import (
    ArtifactDescriptor,
    DeployedContract,
    DeploymentOptions,
    DeploymentResult,
    NetworkProfile,
)

logger = logging.getLogger(__name__)


def deploy_contract(
    profile: NetworkProfile,
    artifact: ArtifactDescriptor,
    private_key: str,
    options: Optional[DeploymentOptions] = None,
    client: Optional[TronClient] = None,
    constructor_args: Sequence[Any] = (),
) -> DeployedContract:
    """
    Submit a contract creation to the profile's network.

    Makes a single attempt. The client is closed on every exit path.

    Args:
        profile: Target network profile
        artifact: Compiled contract
        private_key: Signing key of a funded account
        options: Fee and energy limits (defaults to the profile's, see deployment_options())
        client: Preconfigured client (defaults to one built from the profile)
        constructor_args: Constructor argument values

    Returns:
        DeployedContract handle

    Raises:
        NetworkClientError: If the network rejects or fails the creation
    """
    if options is None:
        options = deployment_options(profile)
    if client is None:
        client = TronClient.from_profile(
            profile, private_key=private_key, api_key=os.environ.get(API_KEY_ENV)
        )

    with client:
        return client.contract().new(artifact, options, constructor_args)


def save_deployment_result(result: DeploymentResult, path: Union[Path, str]) -> Path:
    """
    Write the deployment result, replacing any previous file.

    Args:
        result: Deployment result record
        path: Output file path

    Returns:
        Path the result was written to

    Creates parent directories if they don't exist.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w") as f:
        json.dump(result.to_dict(), f, indent=2)
    return path


def load_deployment_result(path: Union[Path, str]) -> DeploymentResult:
    """
    Read a previously written deployment result.

    Raises:
        ResultNotFoundError: If no result file exists
        MalformedResultError: If the file is not JSON or has no string address
    """
    path = Path(path)
    if not path.exists():
        raise ResultNotFoundError(
            f"Deployment result not found at {path}. Deploy the contract first."
        )

    try:
        with open(path) as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise MalformedResultError(f"Invalid JSON in deployment result {path}: {e}") from e

    address = data.get("address") if isinstance(data, dict) else None
    if not isinstance(address, str) or not address:
        raise MalformedResultError(f"Missing 'address' in deployment result: {path}")
    return DeploymentResult(address=address)


def deployment_options(profile: NetworkProfile, **overrides: Optional[int]) -> DeploymentOptions:
    """
    Build creation limits for a profile.

    The profile supplies fee_limit and user_fee_percentage, the remaining
    fields keep the DeploymentOptions defaults. Overrides that are None are
    ignored.

    Args:
        profile: Target network profile
        **overrides: DeploymentOptions fields to set explicitly

    Returns:
        DeploymentOptions for the profile
    """
    values = {
        "fee_limit": profile.fee_limit,
        "user_fee_percentage": profile.resource_consumption_percent,
    }
    values.update({key: value for key, value in overrides.items() if value is not None})
    return DeploymentOptions(**values)


def deployment_status(
    profile: NetworkProfile,
    path: Union[Path, str],
    client: Optional[TronClient] = None,
) -> bool:
    """
    Check whether the recorded contract address holds a contract on chain.

    Args:
        profile: Network the result file refers to
        path: Deployment result file
        client: Preconfigured client (defaults to one built from the profile)

    Returns:
        True if a contract exists at the recorded address

    Raises:
        ResultNotFoundError: If no result file exists
        NetworkClientError: If the node cannot be queried
    """
    result = load_deployment_result(path)
    if client is None:
        client = TronClient.from_profile(profile, api_key=os.environ.get(API_KEY_ENV))

    with client:
        return client.get_contract(result.address) is not None


def run_deployment(
    profile_name: str,
    project_root: Optional[Union[Path, str]] = None,
    profiles: Optional[Mapping[str, NetworkProfile]] = None,
    options: Optional[DeploymentOptions] = None,
    environ: Optional[Mapping[str, str]] = None,
    client: Optional[TronClient] = None,
    contract_name: str = CONTRACT_NAME,
    constructor_args: Sequence[Any] = (),
) -> int:
    """
    Deploy the contract and record its address.

    Configuration problems (unknown profile, missing key, bad artifact)
    propagate. Network errors are logged once and turned into exit status 1
    without touching the result file.

    Args:
        profile_name: Network profile to deploy to
        project_root: Project directory (defaults to the working directory)
        profiles: Profile mapping (defaults to the tronbox table)
        options: Fee and energy limits (defaults to the profile's, see deployment_options())
        environ: Environment mapping (defaults to os.environ)
        client: Preconfigured client
        contract_name: Artifact to deploy
        constructor_args: Constructor argument values

    Returns:
        Process exit status: 0 on success, 1 on a deployment error
    """
    if environ is None:
        environ = os.environ
    if profiles is None:
        profiles = load_network_profiles(environ=environ)

    profile = get_profile(profile_name, profiles)
    private_key = resolve_signing_key(profile, environ)
    artifact = load_artifact(get_artifact_path(project_root, contract_name))
    result_path = get_result_path(project_root)

    if client is None:
        client = TronClient.from_profile(
            profile, private_key=private_key, api_key=environ.get(API_KEY_ENV)
        )

    logger.info(
        "Deploying %s contract to %s (%s)...", contract_name, profile.name, profile.endpoint_url
    )
    try:
        deployed = deploy_contract(
            profile, artifact, private_key, options, client, constructor_args
        )
    except ConfirmationTimeoutError as e:
        logger.error("Error deploying contract: %s", e)
        if e.txid:
            logger.error(
                "Transaction %s may still be confirmed; check it before redeploying", e.txid
            )
        return 1
    except NetworkClientError as e:
        logger.error("Error deploying contract: %s", e)
        return 1

    logger.info("Contract deployed successfully!")
    logger.info("Contract Address: %s", deployed.address)

    save_deployment_result(DeploymentResult(address=deployed.address), result_path)
    logger.info("Contract address saved to %s", result_path)
    return 0

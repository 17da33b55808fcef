"""Network profile tables and lookup for hippobreeds-deployments."""

import os
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional

from .constants import DEFAULT_HOST_PORT, DEFAULT_TABLE, NETWORK_TABLES
from .exceptions import ProfileNotFoundError, SigningKeyMissingError
from .types import CompilerSettings, NetworkProfile


def get_table(table_name: str = DEFAULT_TABLE) -> Dict[str, Any]:
    """
    Get a raw network table by name.

    Args:
        table_name: "tronbox" or "legacy"

    Returns:
        Raw table dict with "networks" and "solc" sections

    Raises:
        ValueError: If the table name is unknown
    """
    if table_name not in NETWORK_TABLES:
        raise ValueError(
            f"Unknown network table '{table_name}', "
            f"expected one of: {', '.join(sorted(NETWORK_TABLES))}"
        )
    return NETWORK_TABLES[table_name]


def build_network_profiles(
    table: Optional[Dict[str, Any]] = None,
    host_port: Optional[str] = None,
) -> Mapping[str, NetworkProfile]:
    """
    Build the immutable profile mapping for a network table.

    Called once at startup. The returned mapping is read-only and its
    records are frozen.

    Args:
        table: Raw network table (defaults to the tronbox table)
        host_port: Port substituted into local endpoints (defaults to 9090)

    Returns:
        Read-only mapping of profile name -> NetworkProfile
    """
    if table is None:
        table = get_table()
    if not host_port:
        host_port = DEFAULT_HOST_PORT

    profiles: Dict[str, NetworkProfile] = {}
    for name, config in table["networks"].items():
        profiles[name] = NetworkProfile(
            name=name,
            endpoint_url=config["full_host"].format(host_port=host_port),
            signing_key_source=config["private_key"],
            fee_limit=int(config["fee_limit"]),
            resource_consumption_percent=int(config["user_fee_percentage"]),
            network_id=str(config["network_id"]),
        )

    return MappingProxyType(profiles)


def load_network_profiles(
    table_name: str = DEFAULT_TABLE, environ: Optional[Mapping[str, str]] = None
) -> Mapping[str, NetworkProfile]:
    """
    Build profiles for a named table, honouring $HOST_PORT.

    Args:
        table_name: "tronbox" or "legacy"
        environ: Environment mapping (defaults to os.environ)

    Returns:
        Read-only mapping of profile name -> NetworkProfile
    """
    if environ is None:
        environ = os.environ
    return build_network_profiles(get_table(table_name), environ.get("HOST_PORT"))


def compiler_settings(table_name: str = DEFAULT_TABLE) -> CompilerSettings:
    """
    Get the Solidity compiler flags recorded in a network table.

    Args:
        table_name: "tronbox" or "legacy"

    Returns:
        CompilerSettings for the table
    """
    solc = get_table(table_name)["solc"]
    return CompilerSettings(
        optimizer_enabled=solc["optimizer"]["enabled"],
        optimizer_runs=solc["optimizer"]["runs"],
        version=solc.get("version"),
        evm_version=solc.get("evm_version"),
    )


def profile_names(profiles: Mapping[str, NetworkProfile]) -> List[str]:
    """Get profile names in table order."""
    return list(profiles.keys())


def get_profile(name: str, profiles: Mapping[str, NetworkProfile]) -> NetworkProfile:
    """
    Look up a network profile by name.

    Args:
        name: Profile name, e.g. "nile"
        profiles: Mapping built by build_network_profiles()

    Returns:
        NetworkProfile record

    Raises:
        ProfileNotFoundError: If the name is not defined
    """
    try:
        return profiles[name]
    except KeyError:
        raise ProfileNotFoundError(
            f"Network profile '{name}' not found, "
            f"available profiles: {', '.join(profile_names(profiles))}"
        ) from None


def resolve_signing_key(
    profile: NetworkProfile, environ: Optional[Mapping[str, str]] = None
) -> str:
    """
    Resolve the signing key a profile refers to.

    Args:
        profile: Network profile
        environ: Environment mapping (defaults to os.environ)

    Returns:
        Private key as a hex string

    Raises:
        SigningKeyMissingError: If the referenced variable is unset or empty
        ValueError: If the key source has an unknown scheme
    """
    if environ is None:
        environ = os.environ

    scheme, _, reference = profile.signing_key_source.partition(":")
    if scheme == "inline":
        return reference
    if scheme != "env":
        raise ValueError(
            f"Unknown signing key source '{profile.signing_key_source}' "
            f"for network '{profile.name}'"
        )

    key = environ.get(reference, "").strip()
    if not key:
        raise SigningKeyMissingError(
            f"Signing key for network '{profile.name}' not found: "
            f"set ${reference} in the environment or .env file"
        )
    return key

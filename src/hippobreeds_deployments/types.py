"""Data types and dataclasses for hippobreeds-deployments."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple


@dataclass(frozen=True)
class NetworkProfile:
    """Connection and fee settings for one deployment target."""

    name: str  # e.g., "nile"
    endpoint_url: str  # e.g., "https://nile.trongrid.io"
    signing_key_source: str  # "env:<VAR>" or "inline:<hex>"
    fee_limit: int  # sun
    resource_consumption_percent: int  # 0-100
    network_id: str  # "*" matches any network

    def __post_init__(self):
        if not 0 <= self.resource_consumption_percent <= 100:
            raise ValueError(
                f"resource_consumption_percent must be between 0 and 100, "
                f"got {self.resource_consumption_percent} for '{self.name}'"
            )


@dataclass(frozen=True)
class CompilerSettings:
    """Solidity compiler flags recorded alongside a network table."""

    optimizer_enabled: bool
    optimizer_runs: int
    version: Optional[str] = None
    evm_version: Optional[str] = None


@dataclass(frozen=True)
class ArtifactDescriptor:
    """Compiled contract interface and bytecode."""

    abi: Tuple[Dict[str, Any], ...]
    bytecode: str  # hex, without 0x prefix
    contract_name: Optional[str] = None


@dataclass
class DeploymentOptions:
    """Per-call limits for a contract creation transaction."""

    fee_limit: int = 100_000_000  # sun
    call_value: int = 0  # sun sent with the transaction
    user_fee_percentage: int = 1
    origin_energy_limit: int = 10_000_000

    def __post_init__(self):
        if not 0 <= self.user_fee_percentage <= 100:
            raise ValueError(
                f"user_fee_percentage must be between 0 and 100, got {self.user_fee_percentage}"
            )


@dataclass
class DeployedContract:
    """Handle returned by a successful contract creation."""

    address: str  # base58check, e.g. "T..."
    transaction_id: Optional[str] = None
    block_number: Optional[int] = None
    abi: List[Dict[str, Any]] = field(default_factory=list, repr=False)


@dataclass
class DeploymentResult:
    """The record persisted after a successful deployment."""

    address: str

    def to_dict(self) -> Dict[str, str]:
        return {"address": self.address}

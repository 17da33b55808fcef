"""Custom exception classes for hippobreeds-deployments."""

from typing import Optional


class DeploymentError(Exception):
    """Base exception for deployment-related errors."""

    pass


class ProfileNotFoundError(DeploymentError, KeyError, ValueError):
    """Raised when a network profile name is not defined in the selected table."""

    def __str__(self) -> str:
        # KeyError would repr() the message otherwise
        return str(self.args[0]) if self.args else ""


class SigningKeyMissingError(DeploymentError, ValueError):
    """Raised when the signing key referenced by a profile is not available."""

    pass


class ArtifactNotFoundError(DeploymentError, FileNotFoundError):
    """Raised when the compiled contract artifact file is not found."""

    pass


class MalformedArtifactError(DeploymentError, ValueError):
    """Raised when the artifact file is not JSON or lacks abi/bytecode."""

    pass


class ResultNotFoundError(DeploymentError, FileNotFoundError):
    """Raised when no deployment result file has been written yet."""

    pass


class MalformedResultError(DeploymentError, ValueError):
    """Raised when the deployment result file is not JSON or lacks an address."""

    pass


class NetworkClientError(DeploymentError, RuntimeError):
    """Raised when the network endpoint cannot be reached or returns an error."""

    pass


class TransactionRejectedError(NetworkClientError):
    """Raised when a transaction is refused before it is included in a block."""

    pass


class TransactionFailedError(NetworkClientError):
    """Raised when a transaction is included but its execution failed."""

    pass


class ConfirmationTimeoutError(NetworkClientError):
    """Raised when a broadcast transaction is not confirmed in time."""

    def __init__(
        self,
        message: str,
        txid: Optional[str] = None,
        contract_address: Optional[str] = None,
    ):
        super().__init__(message)
        self.txid = txid
        self.contract_address = contract_address


class ContractCallError(NetworkClientError):
    """Raised when a contract call reverts."""

    pass

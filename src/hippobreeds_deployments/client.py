"""HTTP client for TRON full nodes.

Covers the node API surface the deployment flow and the contract tests need:
contract creation, transaction signing and broadcast, confirmation polling,
and constant/state-changing contract calls. All requests go through a single
``requests.Session``; use the client as a context manager so the session is
released on every exit path::

    with TronClient.from_profile(profile, private_key=key) as client:
        deployed = client.contract().new(artifact, options)
"""

import hashlib
import json
import logging
import time
from typing import Any, Dict, Optional, Sequence

import requests
from eth_account import Account

from .abi import decode_outputs, decode_revert_reason, encode_arguments, function_signature
from .addresses import to_base58_address
from .artifacts import find_abi_entry
from .constants import (
    API_KEY_HEADER,
    DEFAULT_CONFIRMATION_TIMEOUT,
    DEFAULT_DEPLOYMENT_OPTIONS,
    DEFAULT_POLL_INTERVAL,
    DEFAULT_REQUEST_TIMEOUT,
)
from .exceptions import (
    ConfirmationTimeoutError,
    ContractCallError,
    NetworkClientError,
    SigningKeyMissingError,
    TransactionFailedError,
    TransactionRejectedError,
)
from .types import ArtifactDescriptor, DeployedContract, DeploymentOptions, NetworkProfile

logger = logging.getLogger(__name__)


def _decode_message(message: Optional[str]) -> str:
    """Node error messages are usually hex-encoded UTF-8."""
    if not message:
        return ""
    try:
        return bytes.fromhex(message).decode("utf-8")
    except ValueError:
        return message


class TronClient:
    """Synchronous client for a TRON full node HTTP API."""

    def __init__(
        self,
        endpoint_url: str,
        private_key: Optional[str] = None,
        api_key: Optional[str] = None,
        timeout: float = DEFAULT_REQUEST_TIMEOUT,
        fee_limit: int = DEFAULT_DEPLOYMENT_OPTIONS["fee_limit"],
        confirmation_timeout: float = DEFAULT_CONFIRMATION_TIMEOUT,
        poll_interval: float = DEFAULT_POLL_INTERVAL,
    ):
        """
        Initialize the client.

        Args:
            endpoint_url: Full node base URL, e.g. "https://nile.trongrid.io"
            private_key: Hex private key used to sign transactions
            api_key: Optional TronGrid API key
            timeout: Per-request timeout in seconds
            fee_limit: Default fee limit (sun) for contract calls
            confirmation_timeout: Seconds to wait for a transaction to be confirmed
            poll_interval: Seconds between confirmation polls
        """
        self.endpoint_url = endpoint_url.rstrip("/")
        self.timeout = timeout
        self.fee_limit = fee_limit
        self.confirmation_timeout = confirmation_timeout
        self.poll_interval = poll_interval

        self.session = requests.Session()
        if api_key:
            self.session.headers[API_KEY_HEADER] = api_key

        self._account = Account.from_key(private_key) if private_key else None

    @classmethod
    def from_profile(
        cls,
        profile: NetworkProfile,
        private_key: Optional[str] = None,
        api_key: Optional[str] = None,
        **kwargs: Any,
    ) -> "TronClient":
        """Create a client configured from a network profile."""
        kwargs.setdefault("fee_limit", profile.fee_limit)
        return cls(profile.endpoint_url, private_key=private_key, api_key=api_key, **kwargs)

    @property
    def default_address(self) -> Optional[str]:
        """Base58 address of the signing account, if a key was given."""
        if self._account is None:
            return None
        return to_base58_address(self._account.address)

    def close(self) -> None:
        """Close the underlying HTTP session."""
        self.session.close()

    def __enter__(self) -> "TronClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def _post(
        self,
        path: str,
        payload: Dict[str, Any],
        error_class: type = NetworkClientError,
    ) -> Dict[str, Any]:
        url = f"{self.endpoint_url}/{path}"
        try:
            response = self.session.post(url, json=payload, timeout=self.timeout)
        except requests.RequestException as e:
            raise NetworkClientError(f"Network error calling {url}: {e}") from e

        # Check for HTTP errors
        if response.status_code != 200:
            raise NetworkClientError(
                f"Request to {url} failed with status {response.status_code}"
            )

        try:
            result = response.json()
        except ValueError as e:
            raise NetworkClientError(f"Invalid JSON response from {url}") from e

        # Node-side validation errors
        if "Error" in result:
            raise error_class(str(result["Error"]))

        return result

    def _signer(self, private_key: Optional[str] = None):
        if private_key:
            return Account.from_key(private_key)
        if self._account is None:
            raise SigningKeyMissingError("A private key is required to sign transactions")
        return self._account

    def address_of(self, private_key: Optional[str] = None) -> str:
        """Base58 address for a private key, or for the client's own key."""
        return to_base58_address(self._signer(private_key).address)

    def deploy_contract(
        self,
        artifact: ArtifactDescriptor,
        owner_address: str,
        options: DeploymentOptions,
        parameter: str = "",
    ) -> Dict[str, Any]:
        """
        Build an unsigned contract creation transaction.

        Args:
            artifact: Compiled contract
            owner_address: Base58 address paying for the deployment
            options: Fee and energy limits
            parameter: ABI-encoded constructor arguments

        Returns:
            Unsigned transaction dict (txID, raw_data, raw_data_hex, contract_address)

        Raises:
            TransactionRejectedError: If the node refuses to build the transaction
        """
        payload = {
            "owner_address": owner_address,
            "abi": json.dumps(list(artifact.abi)),
            "bytecode": artifact.bytecode,
            "parameter": parameter,
            "fee_limit": options.fee_limit,
            "call_value": options.call_value,
            "consume_user_resource_percent": options.user_fee_percentage,
            "origin_energy_limit": options.origin_energy_limit,
            "visible": True,
        }
        if artifact.contract_name:
            payload["name"] = artifact.contract_name

        return self._post("wallet/deploycontract", payload, TransactionRejectedError)

    def sign_transaction(
        self, transaction: Dict[str, Any], private_key: Optional[str] = None
    ) -> Dict[str, Any]:
        """
        Sign a transaction built by the node.

        The txID is checked against the raw data before signing.

        Args:
            transaction: Unsigned transaction dict
            private_key: Key to sign with (defaults to the client's key)

        Returns:
            New transaction dict with the signature appended
        """
        signer = self._signer(private_key)
        txid = transaction["txID"]

        raw_data_hex = transaction.get("raw_data_hex")
        if raw_data_hex and hashlib.sha256(bytes.fromhex(raw_data_hex)).hexdigest() != txid:
            raise TransactionRejectedError(f"Transaction id {txid} does not match its raw data")

        signed = signer.unsafe_sign_hash(bytes.fromhex(txid))
        # 65 bytes: r || s || recovery id
        signature = (
            signed.r.to_bytes(32, "big")
            + signed.s.to_bytes(32, "big")
            + bytes([signed.v - 27 if signed.v >= 27 else signed.v])
        )

        result = dict(transaction)
        result["signature"] = list(transaction.get("signature", [])) + [signature.hex()]
        return result

    def broadcast(self, transaction: Dict[str, Any]) -> str:
        """
        Broadcast a signed transaction.

        Returns:
            Transaction id

        Raises:
            TransactionRejectedError: If the node does not accept the transaction
        """
        result = self._post("wallet/broadcasttransaction", transaction, TransactionRejectedError)
        if not result.get("result"):
            code = result.get("code", "UNKNOWN")
            message = _decode_message(result.get("message"))
            raise TransactionRejectedError(f"{code}: {message}" if message else code)
        return result.get("txid", transaction["txID"])

    def transaction_info(self, txid: str) -> Dict[str, Any]:
        """Get transaction info; empty dict while the transaction is unconfirmed."""
        return self._post("wallet/gettransactioninfobyid", {"value": txid})

    def wait_for_confirmation(
        self,
        txid: str,
        timeout: Optional[float] = None,
        poll_interval: Optional[float] = None,
    ) -> Dict[str, Any]:
        """
        Poll until a transaction is included in a block.

        Args:
            txid: Transaction id
            timeout: Seconds to wait (defaults to the client's confirmation_timeout)
            poll_interval: Seconds between polls (defaults to the client's poll_interval)

        Returns:
            Transaction info dict

        Raises:
            TransactionFailedError: If the transaction executed but failed
            ConfirmationTimeoutError: If it is not confirmed in time
        """
        if timeout is None:
            timeout = self.confirmation_timeout
        if poll_interval is None:
            poll_interval = self.poll_interval

        deadline = time.monotonic() + timeout
        while True:
            info = self.transaction_info(txid)
            if info.get("id"):
                break
            if time.monotonic() >= deadline:
                raise ConfirmationTimeoutError(
                    f"Transaction {txid} not confirmed after {timeout}s", txid=txid
                )
            logger.debug("Transaction %s not yet confirmed", txid)
            time.sleep(poll_interval)

        receipt_result = info.get("receipt", {}).get("result", "SUCCESS")
        if info.get("result") == "FAILED" or receipt_result != "SUCCESS":
            reason = _decode_message(info.get("resMessage"))
            contract_result = info.get("contractResult") or [""]
            if contract_result[0]:
                reason = decode_revert_reason(contract_result[0])
            message = f"Transaction {txid} failed ({receipt_result})"
            raise TransactionFailedError(f"{message}: {reason}" if reason else message)

        return info

    def get_contract(self, address: str) -> Optional[Dict[str, Any]]:
        """Get on-chain contract metadata, or None if no contract exists there."""
        result = self._post("wallet/getcontract", {"value": address, "visible": True})
        return result or None

    def trigger_constant_contract(
        self,
        owner_address: str,
        contract_address: str,
        function_selector: str,
        parameter: str = "",
    ) -> Dict[str, Any]:
        """
        Execute a contract function locally on the node without a transaction.

        Raises:
            ContractCallError: If execution reverts
        """
        result = self._post(
            "wallet/triggerconstantcontract",
            {
                "owner_address": owner_address,
                "contract_address": contract_address,
                "function_selector": function_selector,
                "parameter": parameter,
                "visible": True,
            },
        )
        status = result.get("result", {})
        if not status.get("result") or status.get("code"):
            constant_result = result.get("constant_result") or [""]
            reason = decode_revert_reason(constant_result[0]) if constant_result[0] else ""
            raise ContractCallError(
                f"Call to {function_selector} reverted: "
                f"{reason or _decode_message(status.get('message'))}"
            )
        return result

    def trigger_smart_contract(
        self,
        owner_address: str,
        contract_address: str,
        function_selector: str,
        parameter: str = "",
        fee_limit: Optional[int] = None,
        call_value: int = 0,
    ) -> Dict[str, Any]:
        """
        Build an unsigned contract call transaction.

        Raises:
            TransactionRejectedError: If the node refuses to build the transaction
        """
        result = self._post(
            "wallet/triggersmartcontract",
            {
                "owner_address": owner_address,
                "contract_address": contract_address,
                "function_selector": function_selector,
                "parameter": parameter,
                "fee_limit": self.fee_limit if fee_limit is None else fee_limit,
                "call_value": call_value,
                "visible": True,
            },
            TransactionRejectedError,
        )
        status = result.get("result", {})
        if not status.get("result"):
            raise TransactionRejectedError(
                f"Call to {function_selector} rejected: {_decode_message(status.get('message'))}"
            )
        return result["transaction"]

    def contract(self) -> "ContractFactory":
        """Get a factory for deploying or opening contracts."""
        return ContractFactory(self)


class ContractFactory:
    """Creates new contracts or opens existing ones through a TronClient."""

    def __init__(self, client: TronClient):
        self.client = client

    def new(
        self,
        artifact: ArtifactDescriptor,
        options: Optional[DeploymentOptions] = None,
        constructor_args: Sequence[Any] = (),
    ) -> DeployedContract:
        """
        Deploy a contract and wait for it to be confirmed.

        Args:
            artifact: Compiled contract
            options: Fee and energy limits (defaults to DeploymentOptions())
            constructor_args: Constructor argument values

        Returns:
            DeployedContract with the base58 contract address

        Raises:
            TransactionRejectedError: If the bytecode is empty/invalid or the node refuses it
            TransactionFailedError: If contract creation fails on chain
            ConfirmationTimeoutError: If the creation is not confirmed in time
        """
        if options is None:
            options = DeploymentOptions()

        bytecode = artifact.bytecode
        if not bytecode or len(bytecode) % 2:
            raise TransactionRejectedError("Invalid contract bytecode provided")
        try:
            bytes.fromhex(bytecode)
        except ValueError:
            raise TransactionRejectedError("Invalid contract bytecode provided") from None

        constructor = find_abi_entry(artifact.abi, "", "constructor")
        inputs = constructor.get("inputs", []) if constructor else []
        parameter = encode_arguments(inputs, list(constructor_args))

        owner = self.client.address_of()
        transaction = self.client.deploy_contract(artifact, owner, options, parameter)
        signed = self.client.sign_transaction(transaction)
        txid = self.client.broadcast(signed)

        predicted = transaction.get("contract_address")
        predicted = to_base58_address(predicted) if predicted else None
        logger.info("Creation transaction %s broadcast, waiting for confirmation", txid)

        try:
            info = self.client.wait_for_confirmation(txid)
        except ConfirmationTimeoutError as e:
            message = str(e)
            if predicted:
                message += f"; contract would be created at {predicted}"
            raise ConfirmationTimeoutError(message, txid=txid, contract_address=predicted) from e

        address = info.get("contract_address")
        address = to_base58_address(address) if address else predicted
        if not address:
            raise TransactionFailedError(f"Transaction {txid} did not report a contract address")

        return DeployedContract(
            address=address,
            transaction_id=txid,
            block_number=info.get("blockNumber"),
            abi=list(artifact.abi),
        )

    def at(self, address: str, abi: Sequence[Dict[str, Any]]) -> "Contract":
        """Open a deployed contract."""
        return Contract(self.client, to_base58_address(address), abi)


class Contract:
    """A deployed contract bound to a client."""

    def __init__(self, client: TronClient, address: str, abi: Sequence[Dict[str, Any]]):
        self.client = client
        self.address = address
        self.abi = list(abi)

    def _function(self, name: str) -> Dict[str, Any]:
        entry = find_abi_entry(self.abi, name)
        if entry is None:
            raise ValueError(f"Function '{name}' not found in contract ABI")
        return entry

    def call(self, method: str, *args: Any, owner: Optional[str] = None) -> Any:
        """
        Call a view function.

        Returns:
            Decoded return value (see abi.decode_outputs)

        Raises:
            ContractCallError: If the call reverts
        """
        entry = self._function(method)
        parameter = encode_arguments(entry.get("inputs", []), args)
        if owner is None:
            owner = self.client.default_address or self.address

        result = self.client.trigger_constant_contract(
            owner, self.address, function_signature(entry), parameter
        )
        constant_result = result.get("constant_result") or [""]
        return decode_outputs(entry.get("outputs", []), constant_result[0])

    def transact(
        self,
        method: str,
        *args: Any,
        call_value: int = 0,
        fee_limit: Optional[int] = None,
        private_key: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        Send a state-changing call and wait for it to be confirmed.

        Args:
            method: Function name
            *args: Function arguments
            call_value: Sun sent with the call
            fee_limit: Fee limit in sun (defaults to the client's fee_limit)
            private_key: Key of the calling account (defaults to the client's key)

        Returns:
            Transaction info dict

        Raises:
            ContractCallError: If the call reverts
        """
        entry = self._function(method)
        parameter = encode_arguments(entry.get("inputs", []), args)
        owner = self.client.address_of(private_key)
        selector = function_signature(entry)

        transaction = self.client.trigger_smart_contract(
            owner, self.address, selector, parameter, fee_limit, call_value
        )
        signed = self.client.sign_transaction(transaction, private_key)
        txid = self.client.broadcast(signed)

        try:
            return self.client.wait_for_confirmation(txid)
        except TransactionFailedError as e:
            raise ContractCallError(f"Call to {selector} reverted: {e}") from e

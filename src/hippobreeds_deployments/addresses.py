"""TRON address conversion helpers.

TRON addresses are the 20-byte account id used by EVM chains with a 0x41
prefix byte. They appear in two textual forms:

- base58check, 34 characters starting with "T" (what users see)
- hex, 42 characters starting with "41" (what some node APIs return)

Contract ABIs use the plain 20-byte form.
"""

import base58
from eth_account import Account

ADDRESS_PREFIX = b"\x41"
BASE58_ADDRESS_LENGTH = 34


def _decode(address: str) -> bytes:
    """Decode any supported address form to its 21-byte representation."""
    if not isinstance(address, str) or not address:
        raise ValueError(f"Invalid address: {address!r}")

    if address.startswith("T") and len(address) == BASE58_ADDRESS_LENGTH:
        raw = base58.b58decode_check(address)
    else:
        value = address[2:] if address[:2].lower() == "0x" else address
        try:
            raw = bytes.fromhex(value)
        except ValueError:
            raise ValueError(f"Invalid address: {address!r}") from None
        if len(raw) == 20:
            raw = ADDRESS_PREFIX + raw

    if len(raw) != 21 or raw[:1] != ADDRESS_PREFIX:
        raise ValueError(f"Invalid address: {address!r}")
    return raw


def to_base58_address(address: str) -> str:
    """Convert an address to base58check form ("T...")."""
    return base58.b58encode_check(_decode(address)).decode("ascii")


def to_hex_address(address: str) -> str:
    """Convert an address to lowercase hex form ("41...")."""
    return _decode(address).hex()


def to_evm_address(address: str) -> bytes:
    """Convert an address to the 20-byte form used in ABI encoding."""
    return _decode(address)[1:]


def is_address(value) -> bool:
    """Check whether a value is a valid address in any supported form."""
    try:
        _decode(value)
    except ValueError:
        return False
    return True


def address_from_private_key(private_key: str) -> str:
    """Derive the base58check account address for a private key."""
    return to_base58_address(Account.from_key(private_key).address)

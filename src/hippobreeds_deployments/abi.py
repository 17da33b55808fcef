"""ABI encoding helpers built on eth-abi."""

from typing import Any, Dict, List, Sequence

from eth_abi import decode, encode
from eth_abi.exceptions import DecodingError

from .addresses import to_base58_address, to_evm_address

# Error(string) selector used by Solidity require/revert reasons
ERROR_SELECTOR = "08c379a0"


def abi_type(param: Dict[str, Any]) -> str:
    """
    Get the canonical type string for an ABI parameter.

    Tuples are expanded to "(t1,t2,...)" keeping any array suffix.
    """
    type_str = param["type"]
    if type_str.startswith("tuple"):
        suffix = type_str[len("tuple"):]
        inner = ",".join(abi_type(c) for c in param.get("components", []))
        return f"({inner}){suffix}"
    return type_str


def function_signature(entry: Dict[str, Any]) -> str:
    """Get the "name(type,...)" selector string of an ABI function entry."""
    types = ",".join(abi_type(p) for p in entry.get("inputs", []))
    return f"{entry['name']}({types})"


def _array_item(param: Dict[str, Any]) -> Dict[str, Any]:
    item = dict(param)
    item["type"] = param["type"][: param["type"].rindex("[")]
    return item


def _to_abi_value(param: Dict[str, Any], value: Any) -> Any:
    type_str = param["type"]
    if type_str.endswith("]"):
        item = _array_item(param)
        return [_to_abi_value(item, v) for v in value]
    if type_str == "tuple":
        components = param.get("components", [])
        if isinstance(value, dict):
            value = [value[c["name"]] for c in components]
        return tuple(_to_abi_value(c, v) for c, v in zip(components, value))
    if type_str == "address":
        return to_evm_address(value)
    return value


def _from_abi_value(param: Dict[str, Any], value: Any) -> Any:
    type_str = param["type"]
    if type_str.endswith("]"):
        item = _array_item(param)
        return [_from_abi_value(item, v) for v in value]
    if type_str == "tuple":
        components = param.get("components", [])
        return {
            c.get("name") or str(i): _from_abi_value(c, v)
            for i, (c, v) in enumerate(zip(components, value))
        }
    if type_str == "address":
        return to_base58_address(value)
    return value


def encode_arguments(inputs: Sequence[Dict[str, Any]], args: Sequence[Any]) -> str:
    """
    ABI-encode call arguments.

    Addresses may be given in base58 or hex form.

    Args:
        inputs: ABI input parameter list
        args: Argument values in order

    Returns:
        Hex-encoded parameters (no 0x prefix), "" when there are no inputs

    Raises:
        ValueError: If the argument count does not match
    """
    if len(inputs) != len(args):
        raise ValueError(f"Expected {len(inputs)} arguments, got {len(args)}")
    if not inputs:
        return ""

    types = [abi_type(p) for p in inputs]
    values = [_to_abi_value(p, a) for p, a in zip(inputs, args)]
    return encode(types, values).hex()


def decode_outputs(outputs: Sequence[Dict[str, Any]], data: str) -> Any:
    """
    Decode a function's return data.

    Tuples become dicts keyed by component name, addresses become base58.

    Args:
        outputs: ABI output parameter list
        data: Hex-encoded return data

    Returns:
        None for no outputs, the value for a single output, otherwise a list
    """
    if not outputs:
        return None

    types = [abi_type(p) for p in outputs]
    raw = decode(types, bytes.fromhex(data))
    values: List[Any] = [_from_abi_value(p, v) for p, v in zip(outputs, raw)]

    if len(values) == 1:
        return values[0]
    return values


def decode_revert_reason(data: str) -> str:
    """
    Decode an Error(string) revert payload.

    Returns the raw hex when the payload is not a standard revert reason.
    """
    if data.startswith(ERROR_SELECTOR):
        try:
            (reason,) = decode(["string"], bytes.fromhex(data[len(ERROR_SELECTOR):]))
            return reason
        except (DecodingError, ValueError):
            return data
    return data

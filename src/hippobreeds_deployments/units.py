"""TRX denomination helpers."""

from decimal import Decimal
from typing import Union

SUN_PER_TRX = 1_000_000


def to_sun(trx: Union[int, str, Decimal]) -> int:
    """
    Convert a TRX amount to sun.

    Args:
        trx: Amount in TRX; pass strings for fractional values to avoid float rounding

    Returns:
        Integer amount in sun

    Raises:
        ValueError: If the amount has more precision than one sun
    """
    sun = Decimal(str(trx)) * SUN_PER_TRX
    if sun != sun.to_integral_value():
        raise ValueError(f"{trx} TRX is not a whole number of sun")
    return int(sun)


def from_sun(sun: int) -> Decimal:
    """Convert an amount in sun to TRX."""
    return Decimal(sun) / SUN_PER_TRX

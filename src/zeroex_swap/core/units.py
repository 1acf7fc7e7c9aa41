"""
Token amount conversions.
All on-chain amounts are integers in the token's smallest unit.
"""

from __future__ import annotations

from decimal import Decimal, InvalidOperation

MAX_UINT256 = 2**256 - 1


def parse_units(amount: str | Decimal, decimals: int) -> int:
    """
    Convert a human-readable amount into base units.

    parse_units("0.1", 18) -> 100000000000000000

    Raises:
        ValueError: for negative, non-numeric or over-precise amounts
    """
    if decimals < 0:
        raise ValueError(f"Invalid decimals: {decimals}")
    try:
        value = Decimal(str(amount))
    except InvalidOperation as e:
        raise ValueError(f"Invalid amount: {amount!r}") from e
    if not value.is_finite() or value < 0:
        raise ValueError(f"Invalid amount: {amount!r}")

    scaled = value.scaleb(decimals)
    if scaled != scaled.to_integral_value():
        raise ValueError(f"Amount {amount} has more than {decimals} decimal places.")
    return int(scaled)

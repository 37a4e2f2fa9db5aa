from __future__ import annotations

from decimal import Context, Decimal

# 80 significant digits hold any uint256 exactly
UINT256_CONTEXT = Context(prec=80)

ETHER_DECIMALS = 18
GWEI_DECIMALS = 9


def scale_amount(raw: int, decimals: int) -> Decimal:
    """raw / 10**decimals without rounding."""
    return Decimal(raw).scaleb(-decimals, UINT256_CONTEXT)


def to_base_units(amount: Decimal | str | int, decimals: int) -> int:
    scaled = Decimal(amount).scaleb(decimals, UINT256_CONTEXT)
    if scaled != scaled.to_integral_value():
        raise ValueError(f"{amount} has more than {decimals} fractional digits")
    return int(scaled)


def format_units(raw: int, decimals: int) -> str:
    """Plain decimal string with trailing zeros removed, e.g. 420000000000000 wei -> '0.00042'."""
    value = scale_amount(raw, decimals)
    text = format(value, "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text or "0"


def format_ether(wei: int) -> str:
    return format_units(wei, ETHER_DECIMALS)


def format_gwei(wei: int) -> str:
    return format_units(wei, GWEI_DECIMALS)

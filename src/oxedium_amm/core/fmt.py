"""
Formatting helpers (non-core arithmetic).

Core arithmetic uses integers only. Decimal here is for display and for the
router-facing fee percentage.
"""

from decimal import Decimal, getcontext

from .constants import BPS_DENOMINATOR, PRICE_EXPONENT
from .exc import AmountDomainError


# ---------------------------------------------------------------------------
# Global Decimal precision (formatting only)
# ---------------------------------------------------------------------------

#: Default precision for Decimal-based formatting; core maths is unaffected.
DEFAULT_DECIMAL_PRECISION: int = 28
getcontext().prec = DEFAULT_DECIMAL_PRECISION


def units_to_decimal(amount: int, decimals: int) -> Decimal:
    """Convert smallest units into whole tokens, e.g. (1_500_000, 6) -> 1.5."""
    if amount < 0:
        raise AmountDomainError("units_to_decimal(): amount must be >= 0")
    if decimals < 0:
        raise AmountDomainError("units_to_decimal(): decimals must be >= 0")
    return Decimal(amount).scaleb(-decimals)


def price_to_decimal(price: int, expo: int = PRICE_EXPONENT) -> Decimal:
    """Oracle integer price to Decimal, e.g. 13_500_000_000 -> 135."""
    return Decimal(price).scaleb(expo)


def bps_to_decimal(bps: int) -> Decimal:
    """Basis points to a fraction: 30 -> 0.003."""
    return Decimal(bps) / Decimal(BPS_DENOMINATOR)


def fee_fraction(fee_amount: int, gross_amount: int) -> Decimal:
    """Share of the gross output taken as fees. Zero gross yields zero."""
    if fee_amount < 0 or gross_amount < 0:
        raise AmountDomainError("fee_fraction(): amounts must be >= 0")
    if gross_amount == 0:
        return Decimal(0)
    return Decimal(fee_amount) / Decimal(gross_amount)


def fmt_units(amount: int, decimals: int, places: int = 6) -> str:
    """Fixed-point string of a token amount for logs and CLIs."""
    return format(units_to_decimal(amount, decimals), f".{places}f")


__all__ = [
    "DEFAULT_DECIMAL_PRECISION",
    "units_to_decimal",
    "price_to_decimal",
    "bps_to_decimal",
    "fee_fraction",
    "fmt_units",
]

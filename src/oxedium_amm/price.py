"""
Oracle-priced amount conversion: **fixed-point maths only**.

`raw_amount_out` converts an input amount into output-token units through a
price-denominated intermediate:

    amount_fp = amount_in * SCALE / 10^decimals_in
    usd_fp    = amount_fp * price_in / 10^8
    out_fp    = usd_fp * 10^8 / price_out
    out       = out_fp * 10^decimals_out / SCALE

Division is deferred as long as possible and happens exactly once per step on
a u128 intermediate, so dust trades of a few base units still price
correctly. The result is floored (the trader never receives more than the
exact conversion).
"""
from __future__ import annotations

from typing import Optional

from .core.checked import (
    require_u64,
    checked_mul,
    checked_div,
    checked_pow10,
    narrow_u64,
)
from .core.constants import SCALE, PRICE_SCALE
from .core.exc import InvalidPrice, MissingData


def _require_decimals(d: Optional[int], what: str) -> int:
    # Absent decimals are a data error, never zero.
    if d is None:
        raise MissingData(what)
    return d


def raw_amount_out(amount_in: int,
                   decimals_in: int,
                   decimals_out: int,
                   price_in: int,
                   price_out: int) -> int:
    """Return the output amount (smallest units) for `amount_in` at the given prices.

    Parameters
    ----------
    amount_in : int
        Input token amount in smallest units (u64).
    decimals_in, decimals_out : int
        Decimal counts of the input and output tokens.
    price_in, price_out : int
        Oracle prices sharing one fixed-point exponent (10^-8).

    Raises
    ------
    InvalidPrice
        If `price_out` is zero or either price is negative.
    ArithmeticOverflow
        If any intermediate leaves the u128 domain.
    OutputOverflow
        If the result does not fit a u64.
    """
    require_u64(amount_in, "amount_in")
    decimals_in = _require_decimals(decimals_in, "decimals_in")
    decimals_out = _require_decimals(decimals_out, "decimals_out")
    if price_in < 0 or price_out < 0:
        raise InvalidPrice(f"negative price: price_in={price_in}, price_out={price_out}")
    if price_out == 0:
        raise InvalidPrice("price_out must be > 0")

    # 1. Normalise the input amount into the fixed-point token unit
    amount_fp = checked_div(
        checked_mul(amount_in, SCALE, "amount_fp calculation"),
        checked_pow10(decimals_in, "amount_fp calculation"),
        "amount_fp calculation",
    )

    # 2. Project into the price-denominated unit
    usd_fp = checked_div(
        checked_mul(amount_fp, price_in, "usd_fp calculation"),
        PRICE_SCALE,
        "usd_fp calculation",
    )

    # 3. Invert through the destination price
    out_fp = checked_div(
        checked_mul(usd_fp, PRICE_SCALE, "out_fp calculation"),
        price_out,
        "out_fp calculation",
    )

    # 4. Denormalise into output smallest units
    out = checked_div(
        checked_mul(out_fp, checked_pow10(decimals_out, "final conversion"), "final conversion"),
        SCALE,
        "final conversion",
    )

    return narrow_u64(out)


# Component name used by the quoter pipeline.
convert = raw_amount_out

__all__ = ["raw_amount_out", "convert"]

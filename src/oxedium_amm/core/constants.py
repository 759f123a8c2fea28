"""
Oxedium Core Constants (integer domain)
=======================================

Only integer constants used by the swap maths live here. Decimal helpers for
display are kept in `fmt.py`.
"""

# NOTE: prices are oracle integers sharing one fixed-point exponent (PRICE_EXPONENT).

# ---------------------------------------------------------------------------
# Fixed-point scales
# ---------------------------------------------------------------------------

#: Internal normalisation unit bridging tokens of different decimal precision.
SCALE: int = 10 ** 12

#: Oracle price exponent assumed by the swap maths (prices are value * 10^-8).
PRICE_EXPONENT: int = -8
PRICE_SCALE: int = 10 ** (-PRICE_EXPONENT)

#: Basis-point denominator: 10_000 bps == 100%.
BPS_DENOMINATOR: int = 10_000


# ---------------------------------------------------------------------------
# Integer widths
# ---------------------------------------------------------------------------

#: Public amounts (token units, prices) are u64 at the boundary.
U64_MAX: int = (1 << 64) - 1

#: Every intermediate product is kept inside a u128.
U128_MAX: int = (1 << 128) - 1


__all__ = [
    "SCALE",
    "PRICE_EXPONENT",
    "PRICE_SCALE",
    "BPS_DENOMINATOR",
    "U64_MAX",
    "U128_MAX",
]

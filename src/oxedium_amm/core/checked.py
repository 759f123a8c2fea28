"""
Checked integer arithmetic for the u128 intermediate domain.

Python integers never wrap, so each helper compares its result against the
width bound and raises instead of returning an out-of-range value. Division
always floors (toward zero in the non-negative domain).
"""

from __future__ import annotations

from .constants import U64_MAX, U128_MAX
from .exc import AmountDomainError, ArithmeticOverflow, OutputOverflow


def _require_u128(x: int, what: str) -> int:
    if not isinstance(x, int) or isinstance(x, bool):
        raise AmountDomainError(f"{what} must be an int, got {type(x).__name__}")
    if x < 0:
        raise AmountDomainError(f"{what} must be >= 0, got {x}")
    if x > U128_MAX:
        raise ArithmeticOverflow(what)
    return x


def require_u64(x: int, what: str) -> int:
    """Validate a boundary value as an unsigned 64-bit integer."""
    if not isinstance(x, int) or isinstance(x, bool):
        raise AmountDomainError(f"{what} must be an int, got {type(x).__name__}")
    if x < 0:
        raise AmountDomainError(f"{what} must be >= 0, got {x}")
    if x > U64_MAX:
        raise AmountDomainError(f"{what} exceeds u64 maximum: {x}")
    return x


def checked_mul(a: int, b: int, step: str) -> int:
    r = _require_u128(a, step) * _require_u128(b, step)
    if r > U128_MAX:
        raise ArithmeticOverflow(f"mul in {step}")
    return r


def checked_div(a: int, b: int, step: str) -> int:
    # A zero divisor is reported as overflow, mirroring checked_div returning None.
    if _require_u128(b, step) == 0:
        raise ArithmeticOverflow(f"div in {step}")
    return _require_u128(a, step) // b


def checked_add(a: int, b: int, step: str, *, limit: int = U128_MAX) -> int:
    r = _require_u128(a, step) + _require_u128(b, step)
    if r > limit:
        raise ArithmeticOverflow(f"add in {step}")
    return r


def checked_pow10(n: int, step: str) -> int:
    """Return 10**n, rejecting negative exponents and results beyond u128."""
    if not isinstance(n, int) or isinstance(n, bool) or n < 0:
        raise AmountDomainError(f"{step}: exponent must be a non-negative int, got {n!r}")
    # 10**39 > U128_MAX
    if n > 38:
        raise ArithmeticOverflow(f"pow10 in {step}")
    return 10 ** n


def narrow_u64(x: int) -> int:
    """Narrow a u128 intermediate to the u64 output width."""
    if x > U64_MAX:
        raise OutputOverflow(x, U64_MAX)
    return x


__all__ = [
    "require_u64",
    "checked_mul",
    "checked_div",
    "checked_add",
    "checked_pow10",
    "narrow_u64",
]

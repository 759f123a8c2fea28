"""
Fee resolution and allocation (integer domain).

- `fees_setting` resolves the effective LP fee rate for a vault pair from a
  small decision table keyed by `FeeRule`.
- `calculate_fee_amount` splits a gross output into net plus the LP,
  protocol and partner buckets. Each bucket is floored independently; the
  remainder stays with the trader in `net`.
"""
from __future__ import annotations

from enum import Enum
from typing import Callable, Dict, Tuple

from .core.checked import checked_mul, require_u64
from .core.constants import BPS_DENOMINATOR
from .core.datatypes import Vault
from .core.exc import (
    ArithmeticOverflow,
    FeeCalculationOverflow,
    FeesExceedMaximum,
    InvalidFeeBps,
)


# ---------------------------------------------------------------------------
# Fee-rate resolution
# ---------------------------------------------------------------------------

class FeeRule(Enum):
    """How the two vaults' `base_fee` combine into one swap fee rate."""

    MAX = "max"                  # the more expensive side wins
    DESTINATION = "destination"  # the vault paying out sets the rate
    AVERAGE = "average"          # floor of the mean


_FEE_RULES: Dict[FeeRule, Callable[[int, int], int]] = {
    FeeRule.MAX: lambda fee_in, fee_out: max(fee_in, fee_out),
    FeeRule.DESTINATION: lambda fee_in, fee_out: fee_out,
    FeeRule.AVERAGE: lambda fee_in, fee_out: (fee_in + fee_out) // 2,
}


def fees_setting(vault_in: Vault, vault_out: Vault, rule: FeeRule = FeeRule.MAX) -> int:
    """Return the LP fee rate (bps) charged on a swap from `vault_in` to `vault_out`."""
    return _FEE_RULES[FeeRule(rule)](vault_in.base_fee, vault_out.base_fee)


# ---------------------------------------------------------------------------
# Fee allocation
# ---------------------------------------------------------------------------

def require_bps(name: str, bps: int) -> int:
    if not isinstance(bps, int) or isinstance(bps, bool):
        raise InvalidFeeBps(name, bps)
    if bps < 0 or bps > BPS_DENOMINATOR:
        raise InvalidFeeBps(name, bps)
    return bps


def _fee(gross_amount: int, bps: int) -> int:
    # gross is a u64 and bps at most 10_000, so the product fits u128; the
    # overflow branch only guards against callers passing wider amounts.
    try:
        return checked_mul(gross_amount, bps, "fee calculation") // BPS_DENOMINATOR
    except ArithmeticOverflow as e:
        raise FeeCalculationOverflow(str(e)) from e


def calculate_fee_amount(gross_amount: int,
                         lp_fee_bps: int,
                         protocol_fee_bps: int,
                         partner_fee_bps: int) -> Tuple[int, int, int, int]:
    """Split `gross_amount` into (net_amount, lp_fee, protocol_fee, partner_fee).

    Each fee is `gross_amount * bps // 10_000`. The buckets always reconcile:
    net + lp + protocol + partner == gross_amount.
    """
    require_u64(gross_amount, "gross_amount")
    require_bps("lp_fee_bps", lp_fee_bps)
    require_bps("protocol_fee_bps", protocol_fee_bps)
    require_bps("partner_fee_bps", partner_fee_bps)

    lp_fee = _fee(gross_amount, lp_fee_bps)
    protocol_fee = _fee(gross_amount, protocol_fee_bps)
    partner_fee = _fee(gross_amount, partner_fee_bps)

    fees = lp_fee + protocol_fee + partner_fee
    if fees > gross_amount:
        # only reachable when the rates sum above 100%
        raise FeesExceedMaximum(lp_fee_bps + protocol_fee_bps + partner_fee_bps)

    return gross_amount - fees, lp_fee, protocol_fee, partner_fee


__all__ = [
    "FeeRule",
    "fees_setting",
    "calculate_fee_amount",
    "require_bps",
]

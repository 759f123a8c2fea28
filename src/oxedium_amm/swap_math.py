"""Swap quoting pipeline: price conversion, fee cap, fee split, liquidity check.

`compute_swap_math` is a single linear validation pipeline. It is pure: it
reads the vaults, never mutates them, performs no I/O and keeps no state, so
any number of quotes may run concurrently against one snapshot. The call is
atomic: it returns a fully populated `SwapMathResult` or raises a
`SwapMathError`.
"""
from __future__ import annotations

from .core.checked import checked_add
from .core.constants import BPS_DENOMINATOR, U64_MAX
from .core.datatypes import SwapMathResult, Vault
from .core.exc import (
    AccountingOverflow,
    ArithmeticOverflow,
    FeeCalculationFailed,
    FeesExceedMaximum,
    InsufficientLiquidity,
    PricingFailed,
    SwapMathError,
    VenueDisabled,
)
from .fees import FeeRule, require_bps, calculate_fee_amount, fees_setting
from .price import raw_amount_out


def compute_swap_math(amount_in: int,
                      decimals_in: int,
                      decimals_out: int,
                      price_in: int,
                      price_out: int,
                      vault_in: Vault,
                      vault_out: Vault,
                      protocol_fee_bps: int,
                      partner_fee_bps: int,
                      *,
                      fee_rule: FeeRule = FeeRule.MAX,
                      stoptap: bool = False) -> SwapMathResult:
    """Compute the output amount and fee breakdown for an exact-in swap.

    Parameters
    ----------
    amount_in : int
        Input amount in smallest units.
    decimals_in, decimals_out : int
        Token decimal counts.
    price_in, price_out : int
        Oracle prices on the shared 10^-8 scale.
    vault_in, vault_out : Vault
        Source and destination vaults (read-only).
    protocol_fee_bps, partner_fee_bps : int
        Protocol (treasury) and partner fee rates.
    fee_rule : FeeRule, optional
        How the vaults' base fees combine into the LP rate.
    stoptap : bool, optional
        Treasury kill-switch; when set no quote is produced.
    """
    if stoptap:
        raise VenueDisabled("venue is disabled (stoptap engaged)")

    swap_fee_bps = fees_setting(vault_in, vault_out, fee_rule)
    try:
        require_bps("protocol_fee_bps", protocol_fee_bps)
        require_bps("partner_fee_bps", partner_fee_bps)
    except SwapMathError as e:
        raise FeeCalculationFailed(e) from e

    # 1. The combined rate may never exceed 100%, whatever the amount
    total_bps = swap_fee_bps + protocol_fee_bps + partner_fee_bps
    if total_bps > BPS_DENOMINATOR:
        raise FeesExceedMaximum(total_bps)

    # 2. Gross output before fees
    try:
        raw_out = raw_amount_out(amount_in, decimals_in, decimals_out, price_in, price_out)
    except SwapMathError as e:
        raise PricingFailed(e) from e

    # 3. Split into net output and fee buckets
    try:
        net, lp_fee, protocol_fee, partner_fee = calculate_fee_amount(
            raw_out, swap_fee_bps, protocol_fee_bps, partner_fee_bps,
        )
    except SwapMathError as e:
        raise FeeCalculationFailed(e) from e

    # 4. The vault pays every recipient, not only the trader
    try:
        total_out = checked_add(net, lp_fee, "fee summation", limit=U64_MAX)
        total_out = checked_add(total_out, protocol_fee, "fee summation", limit=U64_MAX)
        total_out = checked_add(total_out, partner_fee, "fee summation", limit=U64_MAX)
    except ArithmeticOverflow as e:
        raise AccountingOverflow("Overflow when summing fees") from e

    if vault_out.current_liquidity < total_out:
        raise InsufficientLiquidity(total_out, vault_out.current_liquidity)

    return SwapMathResult(
        swap_fee_bps=swap_fee_bps,
        raw_amount_out=raw_out,
        net_amount_out=net,
        lp_fee_amount=lp_fee,
        protocol_fee_amount=protocol_fee,
        partner_fee_amount=partner_fee,
    )


# Router-facing name of the single synchronous operation.
quote = compute_swap_math

__all__ = ["compute_swap_math", "quote"]

"""Demo: oracle-priced vault swaps under the quoting pipeline.

Scenarios covered:
A) SOL -> USDC, 1 SOL at $135, 1 bps LP fee (success)
A2) Dust swap: a few base units still price to a non-zero output
B) Destination price of zero (InvalidPrice)
C) Combined fee rate above 100% (FeesExceedMaximum)
D) Empty destination vault (InsufficientLiquidity)
E) Treasury kill-switch engaged (VenueDisabled)
"""
from __future__ import annotations

import argparse
import sys
from typing import Callable, List

from oxedium_amm import compute_swap_math, Vault, SwapMathError
from oxedium_amm.core import fmt_units, price_to_decimal, PricingFailed

SOL = "So11111111111111111111111111111111111111112"
USDC = "EPjFWdd5AufqSSqeM2qN1xzybapC8G4wEGGkZwyTDt1v"


def mk_vault(mint: str, *, base_fee: int = 1, liquidity: int = 1_000_000_000_000) -> Vault:
    return Vault(
        token_mint=mint,
        pyth_price_account=f"pyth-{mint[:6]}",
        is_active=True,
        base_fee=base_fee,
        max_age_price=300,
        lp_mint=f"lp-{mint[:6]}",
        initial_liquidity=liquidity,
        current_liquidity=liquidity,
        max_liquidity=max(liquidity, 1),
    )


# ---------- scenario runner ----------

def run_scenario(title: str,
                 *,
                 amount_in: int,
                 decimals_in: int = 9,
                 decimals_out: int = 6,
                 price_in: int = 13_500_000_000,
                 price_out: int = 100_000_000,
                 vault_in: Vault,
                 vault_out: Vault,
                 protocol_fee_bps: int = 0,
                 partner_fee_bps: int = 0,
                 stoptap: bool = False) -> None:
    print("\n" + "=" * 80)
    print(f"Scenario: {title}")
    print(f"- IN : {fmt_units(amount_in, decimals_in, places=decimals_in)} @ ${price_to_decimal(price_in)}")
    print(f"- OUT: price ${price_to_decimal(price_out)}, vault liquidity="
          f"{fmt_units(vault_out.current_liquidity, decimals_out, places=decimals_out)}")
    print(f"- fees: lp(base)={vault_in.base_fee}/{vault_out.base_fee} bps, "
          f"protocol={protocol_fee_bps} bps, partner={partner_fee_bps} bps")
    try:
        res = compute_swap_math(
            amount_in, decimals_in, decimals_out, price_in, price_out,
            vault_in, vault_out, protocol_fee_bps, partner_fee_bps,
            stoptap=stoptap,
        )
    except SwapMathError as e:
        cause = f" (cause: {e.cause!r})" if isinstance(e, PricingFailed) else ""
        print(f"\n=== Quote failed ===\n{type(e).__name__}: {e}{cause}")
        return

    print("\n=== Quote ===")
    print(f"- swap_fee_bps = {res.swap_fee_bps}")
    print(f"- raw out      = {fmt_units(res.raw_amount_out, decimals_out, places=decimals_out)}")
    print(f"- net out      = {fmt_units(res.net_amount_out, decimals_out, places=decimals_out)}")
    print(f"- fees         = lp {res.lp_fee_amount}, protocol {res.protocol_fee_amount}, "
          f"partner {res.partner_fee_amount} (units)")


# -------- scenario registry helpers --------
class Scenario:
    def __init__(self, sid: str, fn: Callable[[], None]):
        self.sid = sid
        self.fn = fn

scenarios: List[Scenario] = []

def add(sid: str, fn: Callable[[], None]) -> None:
    scenarios.append(Scenario(sid, fn))


# ---------- run scenarios ----------
if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Oxedium swap quoting demo")
    parser.add_argument("--only", type=str, default=None, help="Comma-separated scenario ids to run (e.g., A,C)")
    parser.add_argument("--skip", type=str, default=None, help="Comma-separated scenario ids to skip")
    args = parser.parse_args(sys.argv[1:])

    add("A", lambda: run_scenario(
        "A) 1 SOL -> USDC at $135, 1 bps LP fee",
        amount_in=1_000_000_000,
        vault_in=mk_vault(SOL),
        vault_out=mk_vault(USDC),
    ))
    add("A2", lambda: run_scenario(
        "A2) Dust: 7 lamports -> USDC base units",
        amount_in=7,
        decimals_in=9,
        decimals_out=9,
        vault_in=mk_vault(SOL),
        vault_out=mk_vault(USDC),
    ))
    add("B", lambda: run_scenario(
        "B) price_out = 0",
        amount_in=1_000_000_000,
        price_out=0,
        vault_in=mk_vault(SOL),
        vault_out=mk_vault(USDC),
    ))
    add("C", lambda: run_scenario(
        "C) 1 + 9999 + 1 bps (> 100%)",
        amount_in=1_000_000_000,
        vault_in=mk_vault(SOL),
        vault_out=mk_vault(USDC),
        protocol_fee_bps=9_999,
        partner_fee_bps=1,
    ))
    add("D", lambda: run_scenario(
        "D) Empty destination vault",
        amount_in=1_000_000_000,
        vault_in=mk_vault(SOL),
        vault_out=mk_vault(USDC, liquidity=0),
    ))
    add("E", lambda: run_scenario(
        "E) Treasury stoptap engaged",
        amount_in=1_000_000_000,
        vault_in=mk_vault(SOL),
        vault_out=mk_vault(USDC),
        stoptap=True,
    ))

    only = set(s.strip() for s in args.only.split(",")) if args.only else None
    skip = set(s.strip() for s in args.skip.split(",")) if args.skip else set()
    for sc in scenarios:
        if only is not None and sc.sid not in only:
            continue
        if sc.sid in skip:
            continue
        sc.fn()

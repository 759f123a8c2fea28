"""
Venue adapter: resolves router quote requests against a market snapshot.

The adapter owns everything the swap maths leaves to its caller: vault lookup
by mint, `is_active` gating, oracle freshness against `max_age_price`, price
exponent normalisation, decimals resolution and the treasury kill-switch. It
then delegates to `compute_swap_math` and reshapes the result into a `Quote`.

State is a single immutable `MarketSnapshot` reference. `update()` swaps it in
one assignment and `quote()` reads it once, so concurrent quotes never observe
a half-applied update.
"""
from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import List, Optional, Tuple

from .core.datatypes import SwapMathResult, Vault
from .core.exc import InactiveVault, MissingData, UnsupportedSwapMode, VenueDisabled
from .core.fmt import fee_fraction
from .fees import FeeRule
from .oracle import check_fresh, rescale_price
from .snapshot import MarketSnapshot
from .swap_math import compute_swap_math

OXEDIUM_PROGRAM_ID = "oxe1hGoyJ41PATPA6ycEYMCyMXWZ33Xwo8rBK8vRCXQ"
OXEDIUM_LABEL = "Oxedium"

EXACT_IN = "ExactIn"
EXACT_OUT = "ExactOut"

# --- Debug utilities (toggleable) ---
DEBUG_AMM = False

def _dbg(msg: str) -> None:
    if DEBUG_AMM:
        print(f"[AMM] {msg}")


@dataclass(frozen=True)
class QuoteParams:
    """Router request: sell `amount` of `input_mint` for `output_mint`."""
    amount: int
    input_mint: str
    output_mint: str
    swap_mode: str = EXACT_IN
    partner_fee_bps: int = 0


@dataclass(frozen=True)
class Quote:
    """Router-facing quote. Fees are denominated in `fee_mint` (the output token).

    `fee_pct` is the share of the gross output withheld as fees.
    """
    in_amount: int
    out_amount: int
    fee_amount: int
    fee_mint: str
    fee_pct: Decimal
    detail: Optional[SwapMathResult] = None


class OxediumAmm:
    """Oracle-priced two-vault venue."""

    def __init__(self,
                 key: str,
                 *,
                 program_id: str = OXEDIUM_PROGRAM_ID,
                 label: str = OXEDIUM_LABEL,
                 fee_rule: FeeRule = FeeRule.MAX,
                 snapshot: Optional[MarketSnapshot] = None) -> None:
        self._key = key
        self._program_id = program_id
        self._label = label
        self.fee_rule = fee_rule
        self._snapshot = snapshot if snapshot is not None else MarketSnapshot.empty()

    # --- identity ---
    def label(self) -> str:
        return self._label

    def key(self) -> str:
        return self._key

    def program_id(self) -> str:
        return self._program_id

    def supports_exact_out(self) -> bool:
        return False

    @property
    def snapshot(self) -> MarketSnapshot:
        return self._snapshot

    # --- state ---
    def update(self, snapshot: MarketSnapshot) -> None:
        """Replace the whole market state. Never mutates the previous snapshot."""
        if not isinstance(snapshot, MarketSnapshot):
            raise TypeError("update() expects a MarketSnapshot")
        self._snapshot = snapshot
        _dbg(f"snapshot replaced: vaults={len(snapshot.vaults)} prices={len(snapshot.prices)}")

    def get_reserve_mints(self) -> List[str]:
        """Mints of active vaults only."""
        return [v.token_mint for v in self._snapshot.vaults.values() if v.is_active]

    # --- quoting ---
    def quote(self, params: QuoteParams, *, now: Optional[float] = None) -> Quote:
        """Price an exact-in swap against the current snapshot.

        `now` (unix seconds) is used for oracle freshness; defaults to the wall clock.
        """
        snap = self._snapshot

        if snap.treasury is None:
            raise MissingData("treasury")
        _, treasury = snap.treasury
        if treasury.stoptap:
            raise VenueDisabled("venue is disabled (stoptap engaged)")

        if params.swap_mode != EXACT_IN:
            raise UnsupportedSwapMode(params.swap_mode)

        vault_in = self._active_vault(snap, params.input_mint, "vault_in")
        vault_out = self._active_vault(snap, params.output_mint, "vault_out")

        price_in = self._price(snap, vault_in, "price_in", now)
        price_out = self._price(snap, vault_out, "price_out", now)

        decimals_in = snap.decimals.get(vault_in.token_mint)
        if decimals_in is None:
            raise MissingData("in_decimals")
        decimals_out = snap.decimals.get(vault_out.token_mint)
        if decimals_out is None:
            raise MissingData("out_decimals")

        _dbg(f"quote {params.amount} {params.input_mint}->{params.output_mint} "
             f"prices=({price_in},{price_out}) decimals=({decimals_in},{decimals_out})")

        result = compute_swap_math(
            params.amount,
            decimals_in,
            decimals_out,
            price_in,
            price_out,
            vault_in,
            vault_out,
            treasury.fee_bps,
            params.partner_fee_bps,
            fee_rule=self.fee_rule,
            stoptap=treasury.stoptap,
        )

        total_fee = result.total_fee_amount
        return Quote(
            in_amount=params.amount,
            out_amount=result.net_amount_out,
            fee_amount=total_fee,
            fee_mint=vault_out.token_mint,
            fee_pct=fee_fraction(total_fee, result.raw_amount_out),
            detail=result,
        )

    # --- helpers ---
    @staticmethod
    def _active_vault(snap: MarketSnapshot, mint: str, what: str) -> Vault:
        found: Optional[Tuple[str, Vault]] = snap.vault_for_mint(mint)
        if found is None:
            raise MissingData(f"{what} for mint {mint}")
        vault = found[1]
        if not vault.is_active:
            raise InactiveVault(mint)
        return vault

    @staticmethod
    def _price(snap: MarketSnapshot, vault: Vault, what: str, now: Optional[float]) -> int:
        reading = snap.prices.get(vault.pyth_price_account)
        if reading is None:
            raise MissingData(what)
        # readings without a publish time carry no staleness information
        if reading.publish_time > 0:
            check_fresh(reading, vault.max_age_price, now)
        return rescale_price(reading)


__all__ = [
    "OXEDIUM_PROGRAM_ID",
    "OXEDIUM_LABEL",
    "EXACT_IN",
    "EXACT_OUT",
    "QuoteParams",
    "Quote",
    "OxediumAmm",
]

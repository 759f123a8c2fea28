"""
Core datatypes read by the swap maths.

These are immutable value types: the adapter refreshes them wholesale on each
update cycle and hands them to the core by reference. The core never owns or
mutates a Vault or a Treasury; a SwapMathResult is created per call.

Notes:
- Asset ids and account references are base58 strings.
- Amounts are integers in the token's smallest units; fee rates are bps.
"""

from __future__ import annotations

from dataclasses import dataclass

from .exc import AmountDomainError, InvariantViolation


def _non_negative(obj, names) -> None:
    for name in names:
        v = getattr(obj, name)
        if not isinstance(v, int) or isinstance(v, bool):
            raise AmountDomainError(f"{type(obj).__name__}.{name} must be an int")
        if v < 0:
            raise AmountDomainError(f"{type(obj).__name__}.{name} must be >= 0, got {v}")


# ---------------------------------------------------------------------------
# Vault
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Vault:
    """One side of a liquidity pool.

    Fields:
    - token_mint: asset id of the pooled token.
    - pyth_price_account: oracle account pricing the token.
    - is_active: eligibility gate (enforced by the adapter, not the maths).
    - base_fee: LP fee rate in bps.
    - max_age_price: oracle staleness bound in seconds (0 disables the check).
    - lp_mint: mint of the vault's LP token.
    - initial_liquidity / current_liquidity / max_liquidity: reserves in smallest units.
    - cumulative_yield_per_lp, protocol_yield: accounting counters (read-only here).
    - create_at_ts: creation timestamp from the account layout.
    """

    token_mint: str
    pyth_price_account: str
    is_active: bool
    base_fee: int
    max_age_price: int
    lp_mint: str
    initial_liquidity: int
    current_liquidity: int
    max_liquidity: int
    cumulative_yield_per_lp: int = 0
    protocol_yield: int = 0
    create_at_ts: int = 0

    def __post_init__(self):
        _non_negative(self, (
            "base_fee",
            "max_age_price",
            "initial_liquidity",
            "current_liquidity",
            "max_liquidity",
            "cumulative_yield_per_lp",
            "protocol_yield",
        ))
        if self.current_liquidity > self.max_liquidity:
            raise InvariantViolation(
                f"current_liquidity={self.current_liquidity} exceeds max_liquidity={self.max_liquidity}"
            )


# ---------------------------------------------------------------------------
# Treasury
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Treasury:
    """Protocol singleton: kill-switch, admin and protocol fee rate (bps)."""

    stoptap: bool
    admin: str
    fee_bps: int

    def __post_init__(self):
        _non_negative(self, ("fee_bps",))


# ---------------------------------------------------------------------------
# Swap result
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class SwapMathResult:
    """Output of one quote: gross output and its split into net plus fee buckets.

    Invariant: net_amount_out + lp_fee_amount + protocol_fee_amount
    + partner_fee_amount == raw_amount_out.
    """

    swap_fee_bps: int
    raw_amount_out: int
    net_amount_out: int
    lp_fee_amount: int
    protocol_fee_amount: int
    partner_fee_amount: int

    @property
    def total_fee_amount(self) -> int:
        return self.lp_fee_amount + self.protocol_fee_amount + self.partner_fee_amount

    @property
    def total_out(self) -> int:
        """Gross amount the destination vault pays out across all recipients."""
        return self.net_amount_out + self.total_fee_amount


__all__ = [
    "Vault",
    "Treasury",
    "SwapMathResult",
]

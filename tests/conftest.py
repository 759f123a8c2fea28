from __future__ import annotations

from typing import Callable

import pytest

# Import project primitives
from oxedium_amm.core import Vault, Treasury
from oxedium_amm.oracle import PriceReading
from oxedium_amm.snapshot import MarketSnapshot


SOL = "So11111111111111111111111111111111111111112"
USDC = "EPjFWdd5AufqSSqeM2qN1xzybapC8G4wEGGkZwyTDt1v"
PYTH_SOL = "PythSolUsd111111111111111111111111111111111"
PYTH_USDC = "PythUsdcUsd11111111111111111111111111111111"

SOL_PRICE = 13_500_000_000   # $135, expo -8
USDC_PRICE = 100_000_000     # $1, expo -8


# -----------------------------
# Test helpers (pure functions)
# -----------------------------


def make_vault(mint: str = USDC,
               *,
               oracle: str = PYTH_USDC,
               base_fee: int = 1,
               liquidity: int = 1_000_000_000_000,
               is_active: bool = True,
               max_age_price: int = 300) -> Vault:
    """Vault with current == initial == max liquidity unless told otherwise."""
    return Vault(
        token_mint=mint,
        pyth_price_account=oracle,
        is_active=is_active,
        base_fee=base_fee,
        max_age_price=max_age_price,
        lp_mint=f"lp-{mint[:8]}",
        initial_liquidity=liquidity,
        current_liquidity=liquidity,
        max_liquidity=liquidity,
        create_at_ts=1,
    )


def make_snapshot(*,
                  vault_in: Vault | None = None,
                  vault_out: Vault | None = None,
                  treasury: Treasury | None = None,
                  prices=None,
                  decimals=None,
                  with_treasury: bool = True) -> MarketSnapshot:
    vin = vault_in if vault_in is not None else make_vault(SOL, oracle=PYTH_SOL)
    vout = vault_out if vault_out is not None else make_vault(USDC, oracle=PYTH_USDC)
    t = treasury if treasury is not None else Treasury(stoptap=False, admin="admin", fee_bps=1)
    return MarketSnapshot(
        vaults={"vault-sol": vin, "vault-usdc": vout},
        treasury=("treasury", t) if with_treasury else None,
        prices=prices if prices is not None else {
            PYTH_SOL: PriceReading(price=SOL_PRICE),
            PYTH_USDC: PriceReading(price=USDC_PRICE),
        },
        decimals=decimals if decimals is not None else {SOL: 9, USDC: 6},
    )


# -----------------------------
# Pytest fixtures
# -----------------------------

@pytest.fixture()
def vault_factory() -> Callable[..., Vault]:
    return make_vault


@pytest.fixture()
def sol_vault() -> Vault:
    return make_vault(SOL, oracle=PYTH_SOL)


@pytest.fixture()
def usdc_vault() -> Vault:
    return make_vault(USDC, oracle=PYTH_USDC)


@pytest.fixture()
def snapshot_default() -> MarketSnapshot:
    return make_snapshot()

from concurrent.futures import ThreadPoolExecutor
from dataclasses import replace
from decimal import Decimal

import pytest

from conftest import (
    make_vault,
    make_snapshot,
    SOL,
    USDC,
    PYTH_SOL,
    PYTH_USDC,
    SOL_PRICE,
    USDC_PRICE,
)

from oxedium_amm.amm import OxediumAmm, QuoteParams, Quote, EXACT_OUT, OXEDIUM_LABEL
from oxedium_amm.fees import FeeRule
from oxedium_amm.oracle import PriceReading
from oxedium_amm.core import (
    Treasury,
    MissingData,
    InactiveVault,
    StalePrice,
    UnsupportedSwapMode,
    VenueDisabled,
    PricingFailed,
    InvalidPrice,
    InsufficientLiquidity,
    FeeCalculationFailed,
)

ONE_SOL = QuoteParams(amount=1_000_000_000, input_mint=SOL, output_mint=USDC)


def _amm(snapshot=None, **kw) -> OxediumAmm:
    amm = OxediumAmm(key="amm-key", **kw)
    amm.update(snapshot if snapshot is not None else make_snapshot())
    return amm


def test_quote_direct():
    print("\n===== AMM_QUOTE_DIRECT =====")
    q = _amm().quote(ONE_SOL)
    print(f"    {q}")
    assert isinstance(q, Quote)
    assert q.in_amount == ONE_SOL.amount
    assert q.out_amount > 0
    assert q.fee_amount > 0
    assert q.fee_mint == USDC
    # lp 1 bps + protocol (treasury) 1 bps on 135 USDC
    assert q.fee_amount == 27_000
    assert q.out_amount == 134_973_000
    assert q.fee_pct == Decimal("0.0002")
    assert q.detail.raw_amount_out == 135_000_000


def test_partner_fee_from_params():
    params = replace(ONE_SOL, partner_fee_bps=10)
    q = _amm().quote(params)
    assert q.detail.partner_fee_amount == 135_000
    assert q.fee_amount == 27_000 + 135_000


def test_identity_accessors():
    amm = _amm()
    assert amm.label() == OXEDIUM_LABEL
    assert amm.key() == "amm-key"
    assert amm.program_id()
    assert amm.supports_exact_out() is False


def test_reserve_mints_only_active():
    snap = make_snapshot(vault_out=make_vault(USDC, is_active=False))
    assert _amm(snap).get_reserve_mints() == [SOL]


# -----------------------------
# Gating and missing data
# -----------------------------


def test_missing_treasury():
    with pytest.raises(MissingData) as ei:
        _amm(make_snapshot(with_treasury=False)).quote(ONE_SOL)
    assert ei.value.what == "treasury"


def test_stoptap_disables_venue():
    snap = make_snapshot(treasury=Treasury(stoptap=True, admin="admin", fee_bps=1))
    with pytest.raises(VenueDisabled):
        _amm(snap).quote(ONE_SOL)


@pytest.mark.parametrize("mint_override", ["inactive", "missing"])
def test_stoptap_wins_over_vault_errors(mint_override):
    print(f"[amm-stoptap-first] stoptap engaged with a {mint_override} destination vault -> expect VenueDisabled")
    stopped = Treasury(stoptap=True, admin="admin", fee_bps=1)
    if mint_override == "inactive":
        snap = make_snapshot(treasury=stopped, vault_out=make_vault(USDC, is_active=False))
        params = ONE_SOL
    else:
        snap = make_snapshot(treasury=stopped)
        params = replace(ONE_SOL, output_mint="NoSuchMint")
    with pytest.raises(VenueDisabled):
        _amm(snap).quote(params)


def test_partner_fee_none_is_a_fee_error():
    with pytest.raises(FeeCalculationFailed):
        _amm().quote(replace(ONE_SOL, partner_fee_bps=None))


def test_exact_out_not_supported():
    with pytest.raises(UnsupportedSwapMode):
        _amm().quote(replace(ONE_SOL, swap_mode=EXACT_OUT))


def test_unknown_mint():
    with pytest.raises(MissingData):
        _amm().quote(replace(ONE_SOL, output_mint="NoSuchMint"))


@pytest.mark.parametrize("side", ["in", "out"])
def test_inactive_vault_rejected(side):
    if side == "in":
        snap = make_snapshot(vault_in=make_vault(SOL, oracle=PYTH_SOL, is_active=False))
    else:
        snap = make_snapshot(vault_out=make_vault(USDC, is_active=False))
    with pytest.raises(InactiveVault):
        _amm(snap).quote(ONE_SOL)


def test_missing_price():
    snap = make_snapshot(prices={PYTH_SOL: PriceReading(price=SOL_PRICE)})
    with pytest.raises(MissingData) as ei:
        _amm(snap).quote(ONE_SOL)
    assert ei.value.what == "price_out"


def test_missing_decimals_is_an_error_not_zero():
    snap = make_snapshot(decimals={SOL: 9})
    with pytest.raises(MissingData) as ei:
        _amm(snap).quote(ONE_SOL)
    assert ei.value.what == "out_decimals"


def test_zero_oracle_price_rejected():
    snap = make_snapshot(prices={
        PYTH_SOL: PriceReading(price=SOL_PRICE),
        PYTH_USDC: PriceReading(price=0),
    })
    with pytest.raises(InvalidPrice):
        _amm(snap).quote(ONE_SOL)


# -----------------------------
# Oracle freshness and exponents
# -----------------------------


def _timed_snapshot(publish_time: int):
    return make_snapshot(prices={
        PYTH_SOL: PriceReading(price=SOL_PRICE, publish_time=publish_time),
        PYTH_USDC: PriceReading(price=USDC_PRICE, publish_time=publish_time),
    })


def test_fresh_prices_accepted():
    q = _amm(_timed_snapshot(1_000)).quote(ONE_SOL, now=1_300)
    assert q.out_amount == 134_973_000


def test_stale_price_rejected():
    print("[amm-stale] published at 1000, now=1301, max_age=300 -> expect StalePrice")
    with pytest.raises(StalePrice) as ei:
        _amm(_timed_snapshot(1_000)).quote(ONE_SOL, now=1_301)
    assert (ei.value.age, ei.value.max_age) == (301, 300)


def test_zero_max_age_disables_staleness():
    snap = make_snapshot(
        vault_in=make_vault(SOL, oracle=PYTH_SOL, max_age_price=0),
        vault_out=make_vault(USDC, max_age_price=0),
        prices=_timed_snapshot(1).prices,
    )
    assert _amm(snap).quote(ONE_SOL, now=10 ** 9).out_amount > 0


def test_price_exponents_are_normalised():
    print("[amm-expo] SOL quoted at expo -6, USDC at expo -8 -> same quote as both at -8")
    snap = make_snapshot(prices={
        PYTH_SOL: PriceReading(price=135_000_000, expo=-6),
        PYTH_USDC: PriceReading(price=USDC_PRICE, expo=-8),
    })
    assert _amm(snap).quote(ONE_SOL) == _amm().quote(ONE_SOL)


def test_pricing_errors_surface_through_adapter():
    snap = make_snapshot(decimals={SOL: 0, USDC: 6})
    with pytest.raises(PricingFailed):
        _amm(snap).quote(QuoteParams(amount=2 ** 63, input_mint=SOL, output_mint=USDC))


# -----------------------------
# Snapshot replacement
# -----------------------------


def test_update_replaces_snapshot_wholesale():
    amm = _amm()
    old = amm.snapshot
    drained = make_snapshot(vault_out=make_vault(USDC, liquidity=0))
    amm.update(drained)
    assert amm.snapshot is drained
    assert old.vaults["vault-usdc"].current_liquidity == 1_000_000_000_000
    with pytest.raises(InsufficientLiquidity):
        amm.quote(ONE_SOL)


def test_update_rejects_non_snapshot():
    with pytest.raises(TypeError):
        _amm().update({"vaults": {}})


def test_fee_rule_configurable():
    snap = make_snapshot(vault_in=make_vault(SOL, oracle=PYTH_SOL, base_fee=30))
    q_max = _amm(snap).quote(ONE_SOL)
    q_dst = _amm(snap, fee_rule=FeeRule.DESTINATION).quote(ONE_SOL)
    assert q_max.detail.swap_fee_bps == 30
    assert q_dst.detail.swap_fee_bps == 1


def test_concurrent_quotes_are_identical():
    amm = _amm()
    with ThreadPoolExecutor(max_workers=8) as pool:
        quotes = list(pool.map(lambda _: amm.quote(ONE_SOL), range(64)))
    assert all(q == quotes[0] for q in quotes)

"""
Oracle boundary: price readings, exponent rescaling, freshness, HTTP fetch.

The swap maths consumes plain integer prices on a shared 10^-8 scale. This
module turns Pyth readings (price, exponent, publish time) into such
integers and enforces a vault's `max_age_price`. `HermesClient` fetches the
latest readings from a Pyth Hermes endpoint over HTTP.
"""
from __future__ import annotations

import os
import time
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional

import requests

from .core.constants import PRICE_EXPONENT
from .core.exc import InvalidPrice, OracleError, StalePrice

DEFAULT_HERMES_URL = "https://hermes.pyth.network"
HERMES_URL_ENV = "OXEDIUM_HERMES_URL"

# Debug printing control
DEBUG_ORACLE = False

def _dbg(msg: str) -> None:
    if DEBUG_ORACLE:
        print(f"[ORACLE] {msg}")


@dataclass(frozen=True)
class PriceReading:
    """One oracle observation: `price * 10^expo`, published at `publish_time` (unix seconds)."""
    price: int
    expo: int = PRICE_EXPONENT
    publish_time: int = 0
    feed_id: Optional[str] = None


def rescale_price(reading: PriceReading, target_expo: int = PRICE_EXPONENT) -> int:
    """Return the reading's price as an integer on the `10^target_expo` scale.

    Scaling down floors; a reading that rescales to zero is rejected.
    """
    if reading.price <= 0:
        raise InvalidPrice(f"non-positive oracle price {reading.price}")
    shift = reading.expo - target_expo
    if shift >= 0:
        price = reading.price * 10 ** shift
    else:
        price = reading.price // 10 ** (-shift)
    if price == 0:
        raise InvalidPrice(f"price {reading.price}e{reading.expo} underflows scale 1e{target_expo}")
    return price


def check_fresh(reading: PriceReading, max_age: int, now: Optional[float] = None) -> None:
    """Raise StalePrice when the reading is older than `max_age` seconds (0 disables)."""
    if max_age <= 0:
        return
    now_s = int(time.time() if now is None else now)
    age = now_s - reading.publish_time
    if age > max_age:
        raise StalePrice(age, max_age)


# ---------------------------------------------------------------------------
# Hermes HTTP client
# ---------------------------------------------------------------------------

def _parse_reading(item: Dict[str, Any]) -> PriceReading:
    try:
        p = item["price"]
        return PriceReading(
            price=int(p["price"]),
            expo=int(p["expo"]),
            publish_time=int(p["publish_time"]),
            feed_id=str(item["id"]),
        )
    except (KeyError, TypeError, ValueError) as e:
        raise OracleError(f"Bad price entry: {item!r}") from e


def normalize_feed_id(feed_id: str) -> str:
    """Pyth feed ids are hex; compare them without a 0x prefix and case-insensitively."""
    f = feed_id.strip().lower()
    return f[2:] if f.startswith("0x") else f


class HermesClient:
    """Minimal Pyth Hermes client (latest parsed price updates)."""

    def __init__(self, base_url: Optional[str] = None, timeout: float = 10.0) -> None:
        self.base_url = (base_url or os.environ.get(HERMES_URL_ENV) or DEFAULT_HERMES_URL).rstrip("/")
        self.timeout = timeout

    def latest_prices(self, feed_ids: Iterable[str]) -> Dict[str, PriceReading]:
        """Return the latest reading per feed id (ids are normalised without a 0x prefix).

        Raises OracleError when the response lacks a parsed entry for a requested feed.
        """
        ids: List[str] = [normalize_feed_id(f) for f in feed_ids]
        if not ids:
            return {}
        url = f"{self.base_url}/v2/updates/price/latest"
        params = [("ids[]", i) for i in ids] + [("parsed", "true")]
        _dbg(f"GET {url} ids={ids}")
        r = requests.get(url, params=params, timeout=self.timeout)
        r.raise_for_status()
        out = r.json()

        if not isinstance(out, dict) or "parsed" not in out:
            raise OracleError(f"Bad Hermes response (no 'parsed'): {out}")

        readings: Dict[str, PriceReading] = {}
        for item in out["parsed"]:
            reading = _parse_reading(item)
            readings[normalize_feed_id(reading.feed_id)] = reading
        missing = [i for i in ids if i not in readings]
        if missing:
            raise OracleError(f"Hermes response missing feeds: {missing}")
        _dbg(f"received {len(readings)} readings")
        return {i: readings[i] for i in ids}


__all__ = [
    "DEFAULT_HERMES_URL",
    "HERMES_URL_ENV",
    "PriceReading",
    "rescale_price",
    "check_fresh",
    "normalize_feed_id",
    "HermesClient",
]

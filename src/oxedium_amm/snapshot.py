"""
Market snapshot: one internally consistent view of vaults, treasury, prices and decimals.

A snapshot is immutable. The adapter replaces its snapshot wholesale on each
update cycle, so a quote that read the snapshot once observes a single
consistent state for its whole duration.

JSON layout accepted by `from_dict` / `load_json`:

    {
      "treasury": {"address": "...", "stoptap": false, "admin": "...", "fee_bps": 1},
      "vaults": {"<vault address>": {<Vault fields>}, ...},
      "prices": {"<oracle account>": {"price": 13500000000, "expo": -8, "publish_time": 0}, ...},
      "decimals": {"<mint>": 9, ...}
    }

A price may also be given as a bare integer (already on the 10^-8 scale).
"""
from __future__ import annotations

import json
from dataclasses import dataclass, field, fields
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Tuple, Union

from .core.constants import PRICE_EXPONENT
from .core.datatypes import Treasury, Vault
from .core.exc import AmountDomainError
from .oracle import PriceReading

_VAULT_FIELDS = {f.name for f in fields(Vault)}


def _frozen(d: Optional[Mapping]) -> Mapping:
    return MappingProxyType(dict(d or {}))


@dataclass(frozen=True)
class MarketSnapshot:
    """Immutable state handed to the quoter.

    - vaults: vault address -> Vault
    - treasury: (treasury address, Treasury) or None when not loaded
    - prices: oracle account -> PriceReading
    - decimals: token mint -> decimal count
    """

    vaults: Mapping[str, Vault] = field(default_factory=dict)
    treasury: Optional[Tuple[str, Treasury]] = None
    prices: Mapping[str, PriceReading] = field(default_factory=dict)
    decimals: Mapping[str, int] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, "vaults", _frozen(self.vaults))
        object.__setattr__(self, "prices", _frozen(self.prices))
        object.__setattr__(self, "decimals", _frozen(self.decimals))

    @staticmethod
    def empty() -> "MarketSnapshot":
        return MarketSnapshot()

    def vault_for_mint(self, mint: str) -> Optional[Tuple[str, Vault]]:
        """Return (vault address, Vault) for the vault pooling `mint`, if any."""
        for address, vault in self.vaults.items():
            if vault.token_mint == mint:
                return address, vault
        return None

    def with_prices(self, prices: Mapping[str, PriceReading]) -> "MarketSnapshot":
        """Return a new snapshot with `prices` merged over the current ones."""
        merged = dict(self.prices)
        merged.update(prices)
        return MarketSnapshot(self.vaults, self.treasury, merged, self.decimals)

    # ------------- constructors -------------

    @classmethod
    def from_dict(cls, doc: Mapping[str, Any]) -> "MarketSnapshot":
        treasury = None
        t = doc.get("treasury")
        if t is not None:
            treasury = (
                str(t["address"]),
                Treasury(stoptap=bool(t["stoptap"]), admin=str(t["admin"]), fee_bps=int(t["fee_bps"])),
            )

        vaults: Dict[str, Vault] = {}
        for address, v in (doc.get("vaults") or {}).items():
            unknown = set(v) - _VAULT_FIELDS
            if unknown:
                raise AmountDomainError(f"vault {address}: unknown fields {sorted(unknown)}")
            vaults[str(address)] = Vault(**v)

        prices: Dict[str, PriceReading] = {}
        for account, p in (doc.get("prices") or {}).items():
            prices[str(account)] = _reading_from(p)

        decimals = {str(m): int(d) for m, d in (doc.get("decimals") or {}).items()}
        return cls(vaults=vaults, treasury=treasury, prices=prices, decimals=decimals)

    @classmethod
    def load_json(cls, path: Union[str, Path]) -> "MarketSnapshot":
        with open(path, "r", encoding="utf-8") as fh:
            return cls.from_dict(json.load(fh))


def _reading_from(p: Union[int, Mapping[str, Any]]) -> PriceReading:
    if isinstance(p, int):
        return PriceReading(price=p)
    return PriceReading(
        price=int(p["price"]),
        expo=int(p.get("expo", PRICE_EXPONENT)),
        publish_time=int(p.get("publish_time", 0)),
        feed_id=p.get("feed_id"),
    )


__all__ = ["MarketSnapshot"]

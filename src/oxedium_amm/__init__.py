"""
Top-level API for oxedium_amm (integer-domain).

This module exposes the stable interface:
  - raw_amount_out / convert: oracle-priced amount conversion
  - fees_setting / calculate_fee_amount: fee-rate resolution and allocation
  - compute_swap_math / quote: the full quoting pipeline
  - OxediumAmm: venue adapter over an immutable MarketSnapshot

The swap maths is pure and integer-only. Network access lives solely in
`oxedium_amm.oracle.HermesClient`.
"""

from __future__ import annotations

from .price import raw_amount_out, convert
from .fees import FeeRule, fees_setting, calculate_fee_amount
from .swap_math import compute_swap_math, quote
from .snapshot import MarketSnapshot
from .amm import OxediumAmm, QuoteParams, Quote

from .core import (
    Vault,
    Treasury,
    SwapMathResult,
    SwapMathError,
)

__all__ = [
    # swap maths
    "raw_amount_out",
    "convert",
    "FeeRule",
    "fees_setting",
    "calculate_fee_amount",
    "compute_swap_math",
    "quote",
    # adapter
    "MarketSnapshot",
    "OxediumAmm",
    "QuoteParams",
    "Quote",
    # core data types
    "Vault",
    "Treasury",
    "SwapMathResult",
    "SwapMathError",
]

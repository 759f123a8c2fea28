"""
Oxedium Core
============

Unified exports for the integer-domain primitives used by the swap maths.
All arithmetic is performed on plain ints bounded to u64 at the boundary and
u128 for intermediates. Decimal helpers are provided *only* for formatting.
"""

# NOTE:
#   Every module outside `core` builds on these primitives. Nothing here performs
#   I/O, logging or mutation of shared state.

# Integer-domain constants
from .constants import (
    SCALE,
    PRICE_EXPONENT,
    PRICE_SCALE,
    BPS_DENOMINATOR,
    U64_MAX,
    U128_MAX,
)

# Checked arithmetic
from .checked import (
    require_u64,
    checked_mul,
    checked_div,
    checked_add,
    checked_pow10,
    narrow_u64,
)

# Value types
from .datatypes import (
    Vault,
    Treasury,
    SwapMathResult,
)

# Formatting helpers (non-core arithmetic)
from .fmt import (
    units_to_decimal,
    price_to_decimal,
    bps_to_decimal,
    fee_fraction,
    fmt_units,
)

# Exceptions
from .exc import (
    SwapMathError,
    AmountDomainError,
    InvariantViolation,
    ArithmeticOverflow,
    InvalidPrice,
    OutputOverflow,
    InvalidFeeBps,
    FeesExceedMaximum,
    FeeCalculationOverflow,
    AccountingOverflow,
    InsufficientLiquidity,
    PricingFailed,
    FeeCalculationFailed,
    VenueDisabled,
    MissingData,
    InactiveVault,
    StalePrice,
    UnsupportedSwapMode,
    OracleError,
)

__all__ = [
    # constants
    "SCALE",
    "PRICE_EXPONENT",
    "PRICE_SCALE",
    "BPS_DENOMINATOR",
    "U64_MAX",
    "U128_MAX",
    # checked
    "require_u64",
    "checked_mul",
    "checked_div",
    "checked_add",
    "checked_pow10",
    "narrow_u64",
    # datatypes
    "Vault",
    "Treasury",
    "SwapMathResult",
    # fmt
    "units_to_decimal",
    "price_to_decimal",
    "bps_to_decimal",
    "fee_fraction",
    "fmt_units",
    # exceptions
    "SwapMathError",
    "AmountDomainError",
    "InvariantViolation",
    "ArithmeticOverflow",
    "InvalidPrice",
    "OutputOverflow",
    "InvalidFeeBps",
    "FeesExceedMaximum",
    "FeeCalculationOverflow",
    "AccountingOverflow",
    "InsufficientLiquidity",
    "PricingFailed",
    "FeeCalculationFailed",
    "VenueDisabled",
    "MissingData",
    "InactiveVault",
    "StalePrice",
    "UnsupportedSwapMode",
    "OracleError",
]

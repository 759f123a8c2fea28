"""
Core exception types for oxedium_amm.

These are dependency-free and may be imported by all modules. Every failure of
a quote is a `SwapMathError`; callers treat it as "this venue cannot price
this trade now" and move on to other routes.
"""

__all__ = [
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


class SwapMathError(Exception):
    """Base class for every error raised while producing a quote."""
    pass


class AmountDomainError(SwapMathError):
    """Raised when inputs violate the non-negative integer domain or basic preconditions."""
    pass


class InvariantViolation(SwapMathError):
    """Raised when a value type would break one of its invariants."""
    pass


# ---------------------------------------------------------------------------
# Pricing
# ---------------------------------------------------------------------------

class ArithmeticOverflow(SwapMathError):
    """Raised when a checked multiply/divide leaves the u128 intermediate domain.

    Attributes
    ----------
    step : str
        Name of the conversion step that overflowed (for diagnostics).
    """

    def __init__(self, step: str):
        super().__init__(f"Overflow during {step}")
        self.step = step


class InvalidPrice(SwapMathError):
    """Raised for a zero or negative oracle price used as a divisor or factor."""
    pass


class OutputOverflow(SwapMathError):
    """Raised when the final u128 value does not fit the u64 output width."""

    def __init__(self, value: int, limit: int):
        super().__init__(f"Output {value} exceeds u64 maximum {limit}")
        self.value = value
        self.limit = limit


# ---------------------------------------------------------------------------
# Fees
# ---------------------------------------------------------------------------

class InvalidFeeBps(SwapMathError):
    """Raised when a fee rate lies outside [0, 10_000] bps."""

    def __init__(self, name: str, value):
        super().__init__(f"{name}={value} must be an integer in [0, 10000] bps")
        self.name = name
        self.value = value


class FeesExceedMaximum(SwapMathError):
    """Raised when the combined fee rate would charge more than 100%."""

    def __init__(self, total_bps: int):
        super().__init__(f"Total fee {total_bps} bps exceeds 100%")
        self.total_bps = total_bps


class FeeCalculationOverflow(SwapMathError):
    """Raised when a fee bucket multiply leaves the u128 domain."""
    pass


class AccountingOverflow(SwapMathError):
    """Raised when net output plus fee buckets overflows u64."""
    pass


class InsufficientLiquidity(SwapMathError):
    """Raised when the destination vault cannot cover the gross output.

    Attributes
    ----------
    required : int
        Gross output (net plus every fee bucket) the vault must pay out.
    available : int
        The vault's `current_liquidity` at quote time.
    """

    def __init__(self, required: int, available: int):
        super().__init__(
            f"Insufficient liquidity in vault: required={required}, available={available}"
        )
        self.required = required
        self.available = available


# ---------------------------------------------------------------------------
# Pipeline wrappers
# ---------------------------------------------------------------------------

class PricingFailed(SwapMathError):
    """Raised by the quoter when price conversion fails; `cause` holds the original error."""

    def __init__(self, cause: SwapMathError):
        super().__init__(f"raw_amount_out failed: {cause!r}")
        self.cause = cause


class FeeCalculationFailed(SwapMathError):
    """Raised by the quoter when fee allocation fails; `cause` holds the original error."""

    def __init__(self, cause: SwapMathError):
        super().__init__(f"calculate_fee_amount failed: {cause!r}")
        self.cause = cause


class VenueDisabled(SwapMathError):
    """Raised when the treasury kill-switch (stoptap) is engaged."""
    pass


# ---------------------------------------------------------------------------
# Adapter boundary
# ---------------------------------------------------------------------------

class MissingData(SwapMathError):
    """Raised when a required input (vault, price, decimals, treasury) cannot be resolved."""

    def __init__(self, what: str):
        super().__init__(f"{what} not found")
        self.what = what


class InactiveVault(SwapMathError):
    """Raised when a vault taking part in the swap is not active."""

    def __init__(self, mint: str):
        super().__init__(f"vault for mint {mint} is not active")
        self.mint = mint


class StalePrice(SwapMathError):
    """Raised when an oracle reading is older than the vault's `max_age_price`."""

    def __init__(self, age: int, max_age: int):
        super().__init__(f"price is {age}s old, max allowed {max_age}s")
        self.age = age
        self.max_age = max_age


class UnsupportedSwapMode(SwapMathError):
    """Raised for swap modes other than exact-in."""

    def __init__(self, mode: str):
        super().__init__(f"swap mode {mode!r} is not supported")
        self.mode = mode


class OracleError(SwapMathError):
    """Raised when an oracle response cannot be parsed into price readings."""
    pass

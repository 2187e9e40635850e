"""Swap error classes.

One class per failure kind of the pool engine. Arithmetic failures share the
CalculationError base so curve code can catch them in one place and turn them
into a "no result" answer.
"""


class SwapError(Exception):
    """Base error for pool operations."""

    pass


# --- Checked arithmetic ---


class CalculationError(SwapError, ArithmeticError):
    """A checked numeric step failed."""

    pass


class ArithmeticOverflow(CalculationError):
    """Result does not fit in the integer domain."""

    pass


class DivideByZero(CalculationError):
    """Division or remainder by zero."""

    pass


class Underflow(CalculationError):
    """Subtraction would produce a negative result."""

    pass


class Imprecise(CalculationError):
    """Fixed-point value has a fractional part that would be truncated."""

    pass


# --- Operation outcomes ---


class ZeroTradingTokens(SwapError):
    """A computed trade, deposit or withdrawal leg rounds to zero."""

    pass


class ExceededSlippage(SwapError):
    """A caller-specified minimum or maximum was violated."""

    pass


class ConversionFailure(SwapError):
    """A computed amount does not fit in a u64 token amount."""

    pass


class FeeCalculationFailure(SwapError):
    """Owner or host fee could not be converted into pool tokens."""

    pass


# --- Initialization ---


class InvalidCurve(SwapError):
    """Curve parameters are invalid."""

    pass


class InvalidFee(SwapError):
    """A fee fraction is invalid or does not match the constraints."""

    pass


class EmptySupply(SwapError):
    """Starting reserves are empty on a side the curve needs."""

    pass


class UnsupportedCurveType(SwapError):
    """Curve type is not allowed by the constraints."""

    pass


class InvalidOwner(SwapError):
    """Fee account owner does not match the constraints owner key."""

    pass


# --- Lifecycle ---


class UnsupportedCurveOperation(SwapError):
    """The curve does not allow this operation (e.g. deposits on an offset curve)."""

    pass


class AlreadyInUse(SwapError):
    """Pool is already initialized."""

    pass


class NotInitialized(SwapError):
    """Pool has not been initialized."""

    pass

"""Precise fixed-point numbers for curve math.

Values are unsigned integers scaled by 10^12 and bounded by u256, which
leaves room for the product of two scaled u128 values. The type exists for
the constant-product single-sided deposit and withdrawal formulas, which need
sqrt(1 + ratio) - 1 and have no exact integer closed form.

All arithmetic is deterministic integer math: no floating point is involved,
so results are reproducible bit-for-bit.
"""

from __future__ import annotations

from decimal import Decimal
from math import isqrt
from typing import ClassVar

from tokenswap.constants import U128_MAX, U256_MAX
from tokenswap.errors import (
    ArithmeticOverflow,
    CalculationError,
    DivideByZero,
    Imprecise,
    Underflow,
)

__all__ = [
    "PreciseNumber",
    "ONE_12",
    "ROUNDING_CORRECTION",
    "DEFAULT_PRECISION",
]

ONE_12 = 10**12

# Added before truncating division so results round half up
ROUNDING_CORRECTION = ONE_12 // 2

# Tolerance (raw units) used by almost_eq when none is given
DEFAULT_PRECISION = 100


class PreciseNumber:
    """Fixed-point number stored as an int scaled by 10^12.

    Example: 1.5 is stored as 1_500_000_000_000

    Operators (+, -, *, /) raise a CalculationError subclass on failure.
    The checked_* methods return None instead, which is what the curve
    calculators propagate.
    """

    ONE: ClassVar[int] = ONE_12
    MAX_VALUE: ClassVar[int] = U256_MAX

    __slots__ = ("value",)
    __hash__ = None  # type: ignore[assignment]  # Unhashable since we define __eq__

    value: int

    def __init__(self, value: int) -> None:
        """Create from raw scaled value.

        Raises:
            Underflow: If value is negative
            ArithmeticOverflow: If value exceeds u256
        """
        if value < 0:
            raise Underflow(f"PreciseNumber cannot be negative: {value}")
        if value > self.MAX_VALUE:
            raise ArithmeticOverflow(f"PreciseNumber overflow: {value}")
        self.value = value

    @classmethod
    def from_integer(cls, i: int) -> PreciseNumber:
        """Create from an integer (will be scaled by 10^12).

        Raises:
            ArithmeticOverflow: If i does not fit in u128
        """
        if i > U128_MAX:
            raise ArithmeticOverflow(f"PreciseNumber input exceeds u128: {i}")
        return cls(i * cls.ONE)

    @classmethod
    def zero(cls) -> PreciseNumber:
        return cls(0)

    @classmethod
    def one(cls) -> PreciseNumber:
        return cls(cls.ONE)

    # --- Conversion ---

    def to_integer(self) -> int:
        """Convert to an integer without losing information.

        Raises:
            Imprecise: If the value has a fractional part; use floor() or
                ceiling() first to choose the rounding explicitly
        """
        whole, fraction = divmod(self.value, self.ONE)
        if fraction:
            raise Imprecise(f"PreciseNumber {self} is not an integer")
        return whole

    def to_decimal(self) -> Decimal:
        """Convert to Decimal for display."""
        return Decimal(self.value) / Decimal(self.ONE)

    def floor(self) -> PreciseNumber:
        """Round down to the nearest integer value."""
        return PreciseNumber(self.value // self.ONE * self.ONE)

    def ceiling(self) -> PreciseNumber:
        """Round up to the nearest integer value."""
        return PreciseNumber((self.value + self.ONE - 1) // self.ONE * self.ONE)

    # --- Arithmetic ---

    def __add__(self, other: PreciseNumber) -> PreciseNumber:
        return PreciseNumber(self.value + other.value)

    def __sub__(self, other: PreciseNumber) -> PreciseNumber:
        if other.value > self.value:
            raise Underflow(f"PreciseNumber underflow: {self} - {other}")
        return PreciseNumber(self.value - other.value)

    def __mul__(self, other: PreciseNumber) -> PreciseNumber:
        """Multiply, rounding half up at the last decimal place."""
        return PreciseNumber((self.value * other.value + ROUNDING_CORRECTION) // self.ONE)

    def __truediv__(self, other: PreciseNumber) -> PreciseNumber:
        """Divide, rounding half up at the last decimal place.

        Raises:
            DivideByZero: If other is zero
        """
        if other.value == 0:
            raise DivideByZero(f"PreciseNumber division by zero: {self} / 0")
        return PreciseNumber((self.value * self.ONE + other.value // 2) // other.value)

    def add(self, other: PreciseNumber) -> PreciseNumber:
        """Add two PreciseNumber values."""
        return self + other

    def sub(self, other: PreciseNumber) -> PreciseNumber:
        """Subtract other from self. Raises Underflow if the result is negative."""
        return self - other

    def mul(self, other: PreciseNumber) -> PreciseNumber:
        return self * other

    def div(self, other: PreciseNumber) -> PreciseNumber:
        return self / other

    def sqrt(self) -> PreciseNumber:
        """Square root, exact to one raw unit (rounded down).

        Raises:
            ArithmeticOverflow: If self exceeds the u128 integer range
        """
        if self.value > U128_MAX * self.ONE:
            raise ArithmeticOverflow(f"PreciseNumber sqrt input too large: {self}")
        # sqrt(v / ONE) * ONE == sqrt(v * ONE)
        return PreciseNumber(isqrt(self.value * self.ONE))

    # --- Checked forms ---

    def checked_add(self, other: PreciseNumber) -> PreciseNumber | None:
        return _checked(self.__add__, other)

    def checked_sub(self, other: PreciseNumber) -> PreciseNumber | None:
        return _checked(self.__sub__, other)

    def checked_mul(self, other: PreciseNumber) -> PreciseNumber | None:
        return _checked(self.__mul__, other)

    def checked_div(self, other: PreciseNumber) -> PreciseNumber | None:
        return _checked(self.__truediv__, other)

    # --- Comparison ---

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PreciseNumber):
            return NotImplemented
        return self.value == other.value

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, PreciseNumber):
            return NotImplemented
        return self.value < other.value

    def __le__(self, other: object) -> bool:
        if not isinstance(other, PreciseNumber):
            return NotImplemented
        return self.value <= other.value

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, PreciseNumber):
            return NotImplemented
        return self.value > other.value

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, PreciseNumber):
            return NotImplemented
        return self.value >= other.value

    def greater_than(self, other: PreciseNumber) -> bool:
        return self > other

    def greater_than_or_equal(self, other: PreciseNumber) -> bool:
        return self >= other

    def less_than(self, other: PreciseNumber) -> bool:
        return self < other

    def less_than_or_equal(self, other: PreciseNumber) -> bool:
        return self <= other

    def almost_eq(self, other: PreciseNumber, precision: int = DEFAULT_PRECISION) -> bool:
        """True if the raw values differ by at most precision."""
        return abs(self.value - other.value) <= precision

    def __repr__(self) -> str:
        return f"PreciseNumber({self.value})"

    def __str__(self) -> str:
        return str(self.to_decimal())


def _checked(op, other: PreciseNumber) -> PreciseNumber | None:  # type: ignore[no-untyped-def]
    try:
        return op(other)
    except CalculationError:
        return None

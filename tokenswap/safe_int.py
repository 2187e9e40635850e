"""Checked unsigned integers for arithmetic on token amounts.

This module provides SafeInt, a lightweight wrapper that makes arithmetic
on pool amounts checked by default:
- Results above the domain maximum raise ArithmeticOverflow
- Subtraction underflow raises Underflow
- Division or remainder by zero raises DivideByZero

SafeInt works in the u128 domain used by the curve math. SafeU256 is the
same wrapper over u256, for the few products that need the extra width.

Usage pattern:
    from tokenswap.safe_int import S

    def calculate(a: int, b: int, c: int) -> int:
        # Wrap at entry
        sa, sb, sc = S(a), S(b), S(c)

        # Natural arithmetic - automatically checked
        result = (sa * sb) // sc  # Raises if sc == 0 or sa * sb > u128
        remainder = sa - sb       # Raises if sb > sa

        # Unwrap at exit
        return result.value
"""

from __future__ import annotations

from typing import ClassVar

from tokenswap.constants import U64_MAX, U128_MAX, U256_MAX
from tokenswap.errors import ArithmeticOverflow, ConversionFailure, DivideByZero, Underflow


class SafeInt:
    """Unsigned integer with checked arithmetic operations.

    Every operation produces a value of the same class and validates it
    against ``MAX``, so an overflowing multiplication fails at the step
    that overflowed instead of silently growing like a Python int.

    Attributes:
        value: The underlying integer value (read-only)
    """

    MAX: ClassVar[int] = U128_MAX

    __slots__ = ("_value",)
    _value: int

    def __init__(self, value: int | SafeInt) -> None:
        """Create a SafeInt from an integer or another SafeInt.

        Args:
            value: Integer value to wrap, or SafeInt to copy

        Raises:
            TypeError: If value is not an int or SafeInt
            Underflow: If value is negative
            ArithmeticOverflow: If value exceeds the domain maximum
        """
        if isinstance(value, SafeInt):
            value = value._value
        elif not isinstance(value, int):
            raise TypeError(f"{type(self).__name__} requires int, got {type(value).__name__}")
        if value < 0:
            raise Underflow(f"Negative value: {value}")
        if value > self.MAX:
            raise ArithmeticOverflow(f"Value exceeds {type(self).__name__} max: {value}")
        self._value = value

    @property
    def value(self) -> int:
        """The underlying integer value."""
        return self._value

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._value})"

    def __str__(self) -> str:
        return str(self._value)

    def __hash__(self) -> int:
        return hash(self._value)

    def _new(self, value: int) -> SafeInt:
        return type(self)(value)

    # --- Arithmetic operations ---

    def __add__(self, other: SafeInt | int) -> SafeInt:
        """Add two values.

        Raises:
            ArithmeticOverflow: If the sum exceeds the domain maximum
        """
        return self._new(self._value + _extract_value(other))

    def __radd__(self, other: int) -> SafeInt:
        return self._new(other + self._value)

    def __sub__(self, other: SafeInt | int) -> SafeInt:
        """Subtract other from self.

        Raises:
            Underflow: If result would be negative
        """
        other_val = _extract_value(other)
        result = self._value - other_val
        if result < 0:
            raise Underflow(f"Underflow: {self._value} - {other_val} = {result}")
        return self._new(result)

    def __rsub__(self, other: int) -> SafeInt:
        result = other - self._value
        if result < 0:
            raise Underflow(f"Underflow: {other} - {self._value} = {result}")
        return self._new(result)

    def __mul__(self, other: SafeInt | int) -> SafeInt:
        """Multiply two values.

        Raises:
            ArithmeticOverflow: If the product exceeds the domain maximum
        """
        return self._new(self._value * _extract_value(other))

    def __rmul__(self, other: int) -> SafeInt:
        return self._new(other * self._value)

    def __floordiv__(self, other: SafeInt | int) -> SafeInt:
        """Integer division.

        Raises:
            DivideByZero: If other is zero
        """
        other_val = _extract_value(other)
        if other_val == 0:
            raise DivideByZero(f"Division by zero: {self._value} // 0")
        return self._new(self._value // other_val)

    def __rfloordiv__(self, other: int) -> SafeInt:
        if self._value == 0:
            raise DivideByZero(f"Division by zero: {other} // 0")
        return self._new(other // self._value)

    def __mod__(self, other: SafeInt | int) -> SafeInt:
        """Remainder.

        Raises:
            DivideByZero: If other is zero
        """
        other_val = _extract_value(other)
        if other_val == 0:
            raise DivideByZero(f"Modulo by zero: {self._value} % 0")
        return self._new(self._value % other_val)

    def __rmod__(self, other: int) -> SafeInt:
        if self._value == 0:
            raise DivideByZero(f"Modulo by zero: {other} % 0")
        return self._new(other % self._value)

    def __truediv__(self, other: object) -> SafeInt:
        raise TypeError("SafeInt does not support true division, use // instead")

    # --- Comparison operations ---

    def __eq__(self, other: object) -> bool:
        if isinstance(other, SafeInt):
            return self._value == other._value
        if isinstance(other, int):
            return self._value == other
        return NotImplemented

    def __ne__(self, other: object) -> bool:
        result = self.__eq__(other)
        if result is NotImplemented:
            return NotImplemented
        return not result

    def __lt__(self, other: SafeInt | int) -> bool:
        return self._value < _extract_value(other)

    def __le__(self, other: SafeInt | int) -> bool:
        return self._value <= _extract_value(other)

    def __gt__(self, other: SafeInt | int) -> bool:
        return self._value > _extract_value(other)

    def __ge__(self, other: SafeInt | int) -> bool:
        return self._value >= _extract_value(other)

    # --- Conversion ---

    def __int__(self) -> int:
        return self._value

    def __bool__(self) -> bool:
        """True if non-zero."""
        return self._value != 0

    def __index__(self) -> int:
        return self._value

    # --- Named operations ---

    def ceiling_div(self, other: SafeInt | int) -> SafeInt:
        """Ceiling division (rounds up).

        Equivalent to: (self + other - 1) // other

        Raises:
            DivideByZero: If other is zero
            ArithmeticOverflow: If self + other - 1 exceeds the domain maximum
        """
        other_val = _extract_value(other)
        if other_val == 0:
            raise DivideByZero(f"Ceiling division by zero: {self._value}")
        return (self + other_val - 1) // other_val

    def ceil_div_with_divisor(self, other: SafeInt | int) -> tuple[SafeInt, SafeInt]:
        """Ceiling division that also shrinks the divisor to fit the quotient.

        Returns the rounded-up quotient together with the smallest divisor
        that still produces it, so a constant-product swap can charge the
        minimal source amount for the destination amount it pays out.

        A dividend smaller than the divisor returns (1, 0) when it is at
        least half the divisor and (0, 0) otherwise.

        Raises:
            DivideByZero: If other is zero
        """
        divisor = self._new(_extract_value(other))
        quotient = self // divisor
        if quotient == 0:
            if self * 2 >= divisor:
                return self._new(1), self._new(0)
            return self._new(0), self._new(0)

        if self % divisor > 0:
            quotient = quotient + 1
            divisor = self // quotient
            if self % quotient > 0:
                divisor = divisor + 1
        return quotient, divisor

    def to_u64(self) -> int:
        """Convert to int, validating it fits in a u64 token amount.

        Raises:
            ConversionFailure: If value exceeds 2^64-1
        """
        if self._value > U64_MAX:
            raise ConversionFailure(f"Value exceeds u64 max: {self._value}")
        return self._value

    @classmethod
    def zero(cls) -> SafeInt:
        """Create a value of 0."""
        return cls(0)


class SafeU256(SafeInt):
    """SafeInt over the u256 domain."""

    MAX: ClassVar[int] = U256_MAX

    __slots__ = ()


def _extract_value(x: SafeInt | int) -> int:
    """Extract integer value from SafeInt or int."""
    if isinstance(x, SafeInt):
        return x._value
    return x


# Convenience aliases for concise code
S = SafeInt
S256 = SafeU256

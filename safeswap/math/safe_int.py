"""Checked integer wrapper for the constant-product contract math.

SafeInt mirrors what the on-chain math would do to an unsigned value:
- Division by zero raises DivisionByZero
- Subtraction below zero raises Underflow
- check() enforces the Solidity type bounds (uint8, uint256)

Usage pattern:
    from safeswap.math.safe_int import S

    amount_in_with_fee = S(amount_in) * FEE_NUMERATOR
    amount_out = (amount_in_with_fee * reserve_out) // denominator
    return amount_out.value
"""

from __future__ import annotations

from safeswap.constants import SOLIDITY_TYPE_MAXIMA, SolidityType


class SafeIntError(ArithmeticError):
    """Base class for SafeInt arithmetic errors."""

    pass


class DivisionByZero(SafeIntError):
    """Division by zero."""

    pass


class Underflow(SafeIntError):
    """Subtraction would produce a negative result."""

    pass


class Uint256Overflow(SafeIntError):
    """Value does not fit the requested Solidity type."""

    pass


class SafeInt:
    """Non-negative integer with checked arithmetic.

    Attributes:
        value: The underlying integer value (read-only)
    """

    __slots__ = ("_value",)
    _value: int

    def __init__(self, value: int | SafeInt) -> None:
        if isinstance(value, SafeInt):
            self._value = value._value
        elif isinstance(value, int) and not isinstance(value, bool):
            self._value = value
        else:
            raise TypeError(f"SafeInt requires int, got {type(value).__name__}")

    @property
    def value(self) -> int:
        """The underlying integer value."""
        return self._value

    def __repr__(self) -> str:
        return f"SafeInt({self._value})"

    def __hash__(self) -> int:
        return hash(self._value)

    def __add__(self, other: SafeInt | int) -> SafeInt:
        return SafeInt(self._value + _extract_value(other))

    __radd__ = __add__

    def __sub__(self, other: SafeInt | int) -> SafeInt:
        """Subtract other from self.

        Raises:
            Underflow: If result would be negative
        """
        other_val = _extract_value(other)
        if other_val > self._value:
            raise Underflow(f"Underflow: {self._value} - {other_val}")
        return SafeInt(self._value - other_val)

    def __mul__(self, other: SafeInt | int) -> SafeInt:
        return SafeInt(self._value * _extract_value(other))

    __rmul__ = __mul__

    def __floordiv__(self, other: SafeInt | int) -> SafeInt:
        """Integer division, truncating.

        Raises:
            DivisionByZero: If other is zero
        """
        other_val = _extract_value(other)
        if other_val == 0:
            raise DivisionByZero(f"Division by zero: {self._value} // 0")
        return SafeInt(self._value // other_val)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, SafeInt):
            return self._value == other._value
        if isinstance(other, int):
            return self._value == other
        return NotImplemented

    def __lt__(self, other: SafeInt | int) -> bool:
        return self._value < _extract_value(other)

    def __le__(self, other: SafeInt | int) -> bool:
        return self._value <= _extract_value(other)

    def __gt__(self, other: SafeInt | int) -> bool:
        return self._value > _extract_value(other)

    def __ge__(self, other: SafeInt | int) -> bool:
        return self._value >= _extract_value(other)

    def __int__(self) -> int:
        return self._value

    def __bool__(self) -> bool:
        return self._value != 0

    def isqrt(self) -> SafeInt:
        """Integer square root (floor), as the pair contract computes it."""
        if self._value < 0:
            raise Underflow(f"Square root of negative value: {self._value}")
        # Babylonian method, matching the Solidity Math.sqrt library
        y = self._value
        if y > 3:
            z = y
            x = y // 2 + 1
            while x < z:
                z = x
                x = (y // x + x) // 2
            return SafeInt(z)
        if y != 0:
            return SafeInt(1)
        return SafeInt(0)

    def check(self, solidity_type: SolidityType = SolidityType.UINT256) -> SafeInt:
        """Validate that the value fits the given Solidity unsigned type.

        Raises:
            Uint256Overflow: If the value is negative or above the type maximum
        """
        if self._value < 0:
            raise Uint256Overflow(f"Negative value cannot be {solidity_type.value}: {self._value}")
        if self._value > SOLIDITY_TYPE_MAXIMA[solidity_type]:
            raise Uint256Overflow(f"Value exceeds {solidity_type.value} max: {self._value}")
        return self


def _extract_value(x: SafeInt | int) -> int:
    if isinstance(x, SafeInt):
        return x._value
    return x


# Convenience alias for concise code
S = SafeInt


__all__ = [
    "SafeInt",
    "S",
    "SafeIntError",
    "DivisionByZero",
    "Underflow",
    "Uint256Overflow",
]

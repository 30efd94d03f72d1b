"""Exact rational arithmetic with explicit rounding.

All values are integer numerator/denominator pairs. Nothing is ever converted
to float: comparisons cross-multiply and conversions to integers or decimal
strings go through to_integer() with a chosen Rounding mode.
"""

from __future__ import annotations

from decimal import Decimal, localcontext

from safeswap.constants import Rounding
from safeswap.math.safe_int import DivisionByZero


def _as_fraction(value: Fraction | int) -> Fraction:
    if isinstance(value, Fraction):
        return value
    if isinstance(value, int) and not isinstance(value, bool):
        return Fraction(value)
    raise TypeError(f"Expected Fraction or int, got {type(value).__name__}")


def _power_of_ten(exponent: int) -> Fraction:
    if exponent >= 0:
        return Fraction(10**exponent)
    return Fraction(1, 10**-exponent)


def _render(coefficient: int, exponent: int, *, normalize: bool) -> str:
    """Render coefficient * 10**exponent as a plain decimal string."""
    with localcontext() as ctx:
        ctx.prec = len(str(abs(coefficient))) + abs(exponent) + 2
        value = Decimal(coefficient).scaleb(exponent)
        if normalize:
            value = value.normalize()
        return format(value, "f")


class Fraction:
    """Immutable rational number.

    The sign is carried by the numerator; the denominator is always positive.

    Raises:
        DivisionByZero: If constructed with a zero denominator
    """

    __slots__ = ("_numerator", "_denominator")
    _numerator: int
    _denominator: int

    def __init__(self, numerator: int, denominator: int = 1) -> None:
        for name, value in (("numerator", numerator), ("denominator", denominator)):
            if not isinstance(value, int) or isinstance(value, bool):
                raise TypeError(f"Fraction {name} must be int, got {type(value).__name__}")
        if denominator == 0:
            raise DivisionByZero(f"Fraction with zero denominator: {numerator}/0")
        if denominator < 0:
            numerator, denominator = -numerator, -denominator
        self._numerator = numerator
        self._denominator = denominator

    @property
    def numerator(self) -> int:
        return self._numerator

    @property
    def denominator(self) -> int:
        return self._denominator

    @property
    def quotient(self) -> int:
        """Integer part, truncated toward zero."""
        return self.to_integer(Rounding.ROUND_DOWN)

    @property
    def remainder(self) -> Fraction:
        """What is left after removing the quotient."""
        return Fraction(self._numerator - self.quotient * self._denominator, self._denominator)

    def invert(self) -> Fraction:
        return Fraction(self._denominator, self._numerator)

    # --- Arithmetic ---

    def add(self, other: Fraction | int) -> Fraction:
        other = _as_fraction(other)
        if self._denominator == other._denominator:
            return Fraction(self._numerator + other._numerator, self._denominator)
        return Fraction(
            self._numerator * other._denominator + other._numerator * self._denominator,
            self._denominator * other._denominator,
        )

    def subtract(self, other: Fraction | int) -> Fraction:
        other = _as_fraction(other)
        if self._denominator == other._denominator:
            return Fraction(self._numerator - other._numerator, self._denominator)
        return Fraction(
            self._numerator * other._denominator - other._numerator * self._denominator,
            self._denominator * other._denominator,
        )

    def multiply(self, other: Fraction | int) -> Fraction:
        other = _as_fraction(other)
        return Fraction(
            self._numerator * other._numerator,
            self._denominator * other._denominator,
        )

    def divide(self, other: Fraction | int) -> Fraction:
        """Divide by other.

        Raises:
            DivisionByZero: If other is zero
        """
        other = _as_fraction(other)
        return Fraction(
            self._numerator * other._denominator,
            self._denominator * other._numerator,
        )

    # --- Comparison (cross-multiplication, denominators are positive) ---

    def _cross(self, other: Fraction | int) -> tuple[int, int]:
        other = _as_fraction(other)
        return (
            self._numerator * other._denominator,
            other._numerator * self._denominator,
        )

    def less_than(self, other: Fraction | int) -> bool:
        left, right = self._cross(other)
        return left < right

    def equal_to(self, other: Fraction | int) -> bool:
        left, right = self._cross(other)
        return left == right

    def greater_than(self, other: Fraction | int) -> bool:
        left, right = self._cross(other)
        return left > right

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Fraction | int) or isinstance(other, bool):
            return NotImplemented
        return self.equal_to(other)

    def __lt__(self, other: Fraction | int) -> bool:
        return self.less_than(other)

    def __le__(self, other: Fraction | int) -> bool:
        return not self.greater_than(other)

    def __gt__(self, other: Fraction | int) -> bool:
        return self.greater_than(other)

    def __ge__(self, other: Fraction | int) -> bool:
        return not self.less_than(other)

    def __hash__(self) -> int:
        # Equal values must hash equally, so hash the reduced form
        left, right = self._numerator, self._denominator
        while right:
            left, right = right, left % right
        divisor = abs(left) or 1
        numerator, denominator = self._numerator // divisor, self._denominator // divisor
        if denominator == 1:
            return hash(numerator)
        return hash((numerator, denominator))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._numerator}/{self._denominator})"

    # --- Conversion ---

    def to_integer(self, rounding: Rounding = Rounding.ROUND_DOWN) -> int:
        """Convert to an integer using the given rounding mode.

        ROUND_DOWN truncates toward zero, ROUND_HALF_UP rounds halves away
        from zero, ROUND_UP rounds away from zero unless the value is exact.
        """
        magnitude, rest = divmod(abs(self._numerator), self._denominator)
        if rounding is Rounding.ROUND_HALF_UP:
            if 2 * rest >= self._denominator:
                magnitude += 1
        elif rounding is Rounding.ROUND_UP:
            if rest:
                magnitude += 1
        elif rounding is not Rounding.ROUND_DOWN:
            raise ValueError(f"Unknown rounding mode: {rounding}")
        return magnitude if self._numerator >= 0 else -magnitude

    def to_significant(
        self,
        significant_digits: int,
        rounding: Rounding = Rounding.ROUND_HALF_UP,
    ) -> str:
        """Format with the given number of significant digits.

        Trailing zeros after the decimal point are dropped.

        Raises:
            ValueError: If significant_digits is not a positive integer
        """
        if not isinstance(significant_digits, int) or significant_digits <= 0:
            raise ValueError(f"{significant_digits} is not a positive integer.")
        if self._numerator == 0:
            return "0"

        magnitude = Fraction(abs(self._numerator), self._denominator)
        # Find e with 10**(e-1) <= magnitude < 10**e
        exponent = len(str(abs(self._numerator))) - len(str(self._denominator)) + 1
        while not magnitude.less_than(_power_of_ten(exponent)):
            exponent += 1
        while magnitude.less_than(_power_of_ten(exponent - 1)):
            exponent -= 1

        shift = significant_digits - exponent
        coefficient = magnitude.multiply(_power_of_ten(shift)).to_integer(rounding)
        rendered = _render(coefficient, -shift, normalize=True)
        return rendered if self._numerator > 0 else "-" + rendered

    def to_fixed(
        self,
        decimal_places: int,
        rounding: Rounding = Rounding.ROUND_HALF_UP,
    ) -> str:
        """Format with exactly decimal_places digits after the decimal point.

        Raises:
            ValueError: If decimal_places is negative
        """
        if not isinstance(decimal_places, int) or decimal_places < 0:
            raise ValueError(f"{decimal_places} is negative.")
        coefficient = self.multiply(10**decimal_places).to_integer(rounding)
        return _render(coefficient, -decimal_places, normalize=False)


__all__ = ["Fraction"]

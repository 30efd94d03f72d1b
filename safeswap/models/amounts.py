"""Currency amounts, percentages and prices.

All three are Fractions underneath:
- CurrencyAmount is raw / 10**decimals, so comparisons are in whole units
- Percent is parts-per-hundred when formatted
- Price is quote raw amount per base raw amount; `adjusted` rescales by decimals
"""

from __future__ import annotations

from safeswap.constants import Rounding, SolidityType
from safeswap.errors import CurrencyMismatchError, InvalidAmountError
from safeswap.math.fraction import Fraction, _render
from safeswap.math.safe_int import S, Uint256Overflow
from safeswap.models.currency import ETHER, Currency, Token, currency_equals


class CurrencyAmount(Fraction):
    """An immutable raw amount of a currency, in its smallest unit.

    Raises:
        InvalidAmountError: If the amount is negative or exceeds uint256
    """

    __slots__ = ("currency",)
    currency: Currency

    def __init__(self, currency: Currency, amount: int) -> None:
        try:
            S(amount).check(SolidityType.UINT256)
        except (Uint256Overflow, TypeError) as err:
            raise InvalidAmountError(f"Invalid amount for {currency!r}: {amount}") from err
        super().__init__(amount, 10**currency.decimals)
        self.currency = currency

    @classmethod
    def ether(cls, amount: int) -> CurrencyAmount:
        """Amount of the native asset, in wei."""
        return CurrencyAmount(ETHER, amount)

    @property
    def raw(self) -> int:
        return self.numerator

    def _require_same_currency(self, other: CurrencyAmount) -> None:
        if not currency_equals(self.currency, other.currency):
            raise CurrencyMismatchError(
                f"Currency mismatch: {self.currency!r} and {other.currency!r}"
            )

    def _with_raw(self, amount: int) -> CurrencyAmount:
        return CurrencyAmount(self.currency, amount)

    def add(self, other: CurrencyAmount) -> CurrencyAmount:  # type: ignore[override]
        self._require_same_currency(other)
        return self._with_raw(self.raw + other.raw)

    def subtract(self, other: CurrencyAmount) -> CurrencyAmount:  # type: ignore[override]
        """Subtract other.

        Raises:
            CurrencyMismatchError: If the currencies differ
            InvalidAmountError: If the result would be negative
        """
        self._require_same_currency(other)
        return self._with_raw(self.raw - other.raw)

    def less_than(self, other: Fraction | int) -> bool:
        if isinstance(other, CurrencyAmount):
            self._require_same_currency(other)
        return super().less_than(other)

    def greater_than(self, other: Fraction | int) -> bool:
        if isinstance(other, CurrencyAmount):
            self._require_same_currency(other)
        return super().greater_than(other)

    def equal_to(self, other: Fraction | int) -> bool:
        if isinstance(other, CurrencyAmount):
            self._require_same_currency(other)
        return super().equal_to(other)

    def __eq__(self, other: object) -> bool:
        # Only amounts of the same currency are equal; use equal_to for value comparison
        if not isinstance(other, CurrencyAmount):
            return False
        return currency_equals(self.currency, other.currency) and self.raw == other.raw

    def __ne__(self, other: object) -> bool:
        return not self.__eq__(other)

    def __hash__(self) -> int:
        return hash((self.currency, self.raw))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.currency.symbol or '?'}, {self.raw})"

    def to_significant(
        self,
        significant_digits: int = 6,
        rounding: Rounding = Rounding.ROUND_DOWN,
    ) -> str:
        return super().to_significant(significant_digits, rounding)

    def to_fixed(
        self,
        decimal_places: int | None = None,
        rounding: Rounding = Rounding.ROUND_DOWN,
    ) -> str:
        """Format with at most the currency's decimals.

        Raises:
            ValueError: If decimal_places exceeds the currency's decimals
        """
        if decimal_places is None:
            decimal_places = self.currency.decimals
        if decimal_places > self.currency.decimals:
            raise ValueError(
                f"{decimal_places} decimals requested, currency has {self.currency.decimals}"
            )
        return super().to_fixed(decimal_places, rounding)

    def to_exact(self) -> str:
        """Exact decimal representation in whole units, trailing zeros dropped."""
        return _render(self.raw, -self.currency.decimals, normalize=True)


class TokenAmount(CurrencyAmount):
    """A CurrencyAmount whose currency is a Token."""

    __slots__ = ()
    currency: Token

    def __init__(self, token: Token, amount: int) -> None:
        if not isinstance(token, Token):
            raise CurrencyMismatchError(f"TokenAmount requires a Token, got {token!r}")
        super().__init__(token, amount)

    @property
    def token(self) -> Token:
        return self.currency

    def _with_raw(self, amount: int) -> TokenAmount:
        return TokenAmount(self.currency, amount)


def amount_of(currency: Currency, amount: int) -> CurrencyAmount:
    """Build a TokenAmount for tokens and a CurrencyAmount for the native asset."""
    if isinstance(currency, Token):
        return TokenAmount(currency, amount)
    return CurrencyAmount(currency, amount)


class Percent(Fraction):
    """A fraction formatted as parts-per-hundred.

    Percent(5, 1000) is 0.5%.
    """

    __slots__ = ()

    @classmethod
    def from_fraction(cls, fraction: Fraction) -> Percent:
        return cls(fraction.numerator, fraction.denominator)

    def to_significant(
        self,
        significant_digits: int = 5,
        rounding: Rounding = Rounding.ROUND_HALF_UP,
    ) -> str:
        return self.multiply(100).to_significant(significant_digits, rounding)

    def to_fixed(
        self,
        decimal_places: int = 2,
        rounding: Rounding = Rounding.ROUND_HALF_UP,
    ) -> str:
        return self.multiply(100).to_fixed(decimal_places, rounding)


class Price(Fraction):
    """Amount of quote currency per unit of base currency.

    The fraction itself is in raw units (quote raw / base raw); `adjusted`
    converts it to whole units using both currencies' decimals.
    """

    __slots__ = ("base_currency", "quote_currency", "scalar")
    base_currency: Currency
    quote_currency: Currency
    scalar: Fraction

    def __init__(
        self,
        base_currency: Currency,
        quote_currency: Currency,
        denominator: int,
        numerator: int,
    ) -> None:
        super().__init__(numerator, denominator)
        self.base_currency = base_currency
        self.quote_currency = quote_currency
        self.scalar = Fraction(10**base_currency.decimals, 10**quote_currency.decimals)

    @classmethod
    def from_amounts(cls, base_amount: CurrencyAmount, quote_amount: CurrencyAmount) -> Price:
        """Price implied by exchanging base_amount for quote_amount."""
        return cls(base_amount.currency, quote_amount.currency, base_amount.raw, quote_amount.raw)

    @property
    def raw(self) -> Fraction:
        return Fraction(self.numerator, self.denominator)

    @property
    def adjusted(self) -> Fraction:
        return self.raw.multiply(self.scalar)

    def invert(self) -> Price:  # type: ignore[override]
        return Price(self.quote_currency, self.base_currency, self.numerator, self.denominator)

    def multiply(self, other: Fraction | int) -> Fraction:
        """Chain two prices (A->B times B->C gives A->C); plain fractions scale.

        Raises:
            CurrencyMismatchError: If other is a Price whose base is not this quote
        """
        if not isinstance(other, Price):
            return super().multiply(other)
        if not currency_equals(self.quote_currency, other.base_currency):
            raise CurrencyMismatchError(
                f"Cannot chain price in {self.quote_currency!r} with price of {other.base_currency!r}"
            )
        fraction = super().multiply(other)
        return Price(self.base_currency, other.quote_currency, fraction.denominator, fraction.numerator)

    def quote(self, currency_amount: CurrencyAmount) -> CurrencyAmount:
        """Convert an amount of the base currency into the quote currency (rounded down).

        Raises:
            CurrencyMismatchError: If the amount is not in the base currency
        """
        if not currency_equals(currency_amount.currency, self.base_currency):
            raise CurrencyMismatchError(
                f"Cannot quote {currency_amount.currency!r} with a price of {self.base_currency!r}"
            )
        return amount_of(self.quote_currency, super().multiply(currency_amount.raw).quotient)

    def __repr__(self) -> str:
        return (
            f"Price({self.quote_currency.symbol or '?'}/{self.base_currency.symbol or '?'}, "
            f"{self.numerator}/{self.denominator})"
        )

    def to_significant(
        self,
        significant_digits: int = 6,
        rounding: Rounding = Rounding.ROUND_HALF_UP,
    ) -> str:
        return self.adjusted.to_significant(significant_digits, rounding)

    def to_fixed(
        self,
        decimal_places: int = 4,
        rounding: Rounding = Rounding.ROUND_HALF_UP,
    ) -> str:
        return self.adjusted.to_fixed(decimal_places, rounding)


__all__ = [
    "CurrencyAmount",
    "TokenAmount",
    "amount_of",
    "Percent",
    "Price",
]

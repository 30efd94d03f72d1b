"""Trades: a route priced for a fixed input or a fixed output amount."""

from __future__ import annotations

from safeswap.constants import Rounding, TradeType
from safeswap.errors import CurrencyMismatchError, InvalidAmountError
from safeswap.math.fraction import Fraction
from safeswap.models.amounts import CurrencyAmount, Percent, Price, TokenAmount, amount_of
from safeswap.models.currency import ETHER, WETH, Currency, Token, currency_equals
from safeswap.routing.route import Route


def wrapped_amount(currency_amount: CurrencyAmount, chain_id: int) -> TokenAmount:
    """The amount the pair contracts see: native amounts become wrapped amounts."""
    if isinstance(currency_amount, TokenAmount):
        return currency_amount
    if isinstance(currency_amount.currency, Token):
        return TokenAmount(currency_amount.currency, currency_amount.raw)
    if currency_amount.currency is ETHER:
        return TokenAmount(WETH[chain_id], currency_amount.raw)
    raise CurrencyMismatchError(f"Cannot wrap {currency_amount!r}")


def _unwrapped_amount(token_amount: TokenAmount, currency: Currency) -> CurrencyAmount:
    if currency is ETHER:
        return CurrencyAmount.ether(token_amount.raw)
    return token_amount


def compute_price_impact(
    mid_price: Price,
    input_amount: CurrencyAmount,
    output_amount: CurrencyAmount,
) -> Percent:
    """Shortfall of the realized output against the mid price quote."""
    exact_quote = mid_price.raw.multiply(input_amount.raw)
    slippage = exact_quote.subtract(output_amount.raw).divide(exact_quote)
    return Percent(slippage.numerator, slippage.denominator)


def _require_non_negative(slippage_tolerance: Percent) -> None:
    if slippage_tolerance.less_than(0):
        raise InvalidAmountError(f"Slippage tolerance cannot be negative: {slippage_tolerance!r}")


class Trade:
    """A route with its amounts computed for one trade size.

    For EXACT_INPUT the input amount is fixed and the output is computed hop
    by hop; for EXACT_OUTPUT the output is fixed and inputs are computed
    backwards. Pairs in the route are never modified.

    Attributes:
        route: The route traded through
        trade_type: Which side the caller fixed
        input_amount: Amount paid (in the route's input currency)
        output_amount: Amount received (in the route's output currency)
        execution_price: output / input actually realized
        next_mid_price: Route mid price after the trade executes
        price_impact: Percent shortfall of execution versus mid price
    """

    __slots__ = (
        "route",
        "trade_type",
        "input_amount",
        "output_amount",
        "execution_price",
        "next_mid_price",
        "price_impact",
    )

    def __init__(self, route: Route, amount: CurrencyAmount, trade_type: TradeType) -> None:
        n = len(route.pairs)
        amounts: list[TokenAmount | None] = [None] * (n + 1)
        next_pairs = [None] * n

        if trade_type is TradeType.EXACT_INPUT:
            if not currency_equals(amount.currency, route.input):
                raise CurrencyMismatchError(
                    f"Input {amount.currency!r} does not match route input {route.input!r}"
                )
            amounts[0] = wrapped_amount(amount, route.chain_id)
            for i in range(n):
                amounts[i + 1], next_pairs[i] = route.pairs[i].get_output_amount(amounts[i])
        else:
            if not currency_equals(amount.currency, route.output):
                raise CurrencyMismatchError(
                    f"Output {amount.currency!r} does not match route output {route.output!r}"
                )
            amounts[n] = wrapped_amount(amount, route.chain_id)
            for i in range(n - 1, -1, -1):
                amounts[i], next_pairs[i] = route.pairs[i].get_input_amount(amounts[i + 1])

        self.route = route
        self.trade_type = trade_type
        if trade_type is TradeType.EXACT_INPUT:
            self.input_amount = amount
            self.output_amount = _unwrapped_amount(amounts[n], route.output)
        else:
            self.input_amount = _unwrapped_amount(amounts[0], route.input)
            self.output_amount = amount

        self.execution_price = Price.from_amounts(self.input_amount, self.output_amount)
        self.next_mid_price = Route(next_pairs, route.input, route.output).mid_price
        self.price_impact = compute_price_impact(
            route.mid_price, self.input_amount, self.output_amount
        )

    @classmethod
    def exact_in(cls, route: Route, amount_in: CurrencyAmount) -> Trade:
        return cls(route, amount_in, TradeType.EXACT_INPUT)

    @classmethod
    def exact_out(cls, route: Route, amount_out: CurrencyAmount) -> Trade:
        return cls(route, amount_out, TradeType.EXACT_OUTPUT)

    def __repr__(self) -> str:
        return (
            f"Trade({self.trade_type.name}, {self.route!r}, "
            f"in={self.input_amount.raw}, out={self.output_amount.raw})"
        )

    @property
    def hops(self) -> int:
        return len(self.route.pairs)

    def minimum_amount_out(self, slippage_tolerance: Percent) -> CurrencyAmount:
        """Least output acceptable under the tolerance, rounded down.

        Raises:
            InvalidAmountError: If the tolerance is negative
        """
        _require_non_negative(slippage_tolerance)
        if self.trade_type is TradeType.EXACT_OUTPUT:
            return self.output_amount
        raw = (
            Fraction(1)
            .add(slippage_tolerance)
            .invert()
            .multiply(self.output_amount.raw)
            .to_integer(Rounding.ROUND_DOWN)
        )
        return amount_of(self.output_amount.currency, raw)

    def maximum_amount_in(self, slippage_tolerance: Percent) -> CurrencyAmount:
        """Most input acceptable under the tolerance, rounded up.

        Raises:
            InvalidAmountError: If the tolerance is negative
        """
        _require_non_negative(slippage_tolerance)
        if self.trade_type is TradeType.EXACT_INPUT:
            return self.input_amount
        raw = (
            Fraction(1)
            .add(slippage_tolerance)
            .multiply(self.input_amount.raw)
            .to_integer(Rounding.ROUND_UP)
        )
        return amount_of(self.input_amount.currency, raw)

    def worst_execution_price(self, slippage_tolerance: Percent) -> Price:
        """Execution price if the trade fills at the edge of the tolerance."""
        return Price.from_amounts(
            self.maximum_amount_in(slippage_tolerance),
            self.minimum_amount_out(slippage_tolerance),
        )


__all__ = ["Trade", "compute_price_impact", "wrapped_amount"]

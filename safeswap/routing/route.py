"""An ordered chain of pairs from an input currency to an output currency."""

from __future__ import annotations

from collections.abc import Sequence
from functools import reduce

from safeswap.amm.pair import Pair
from safeswap.errors import ChainIdMismatchError, InvalidRouteError
from safeswap.models.amounts import Price
from safeswap.models.currency import Currency, Token, wrapped_currency


class Route:
    """A validated path through one or more pairs.

    The input and output may be the native asset, in which case the path
    starts or ends at the wrapped native token.

    Attributes:
        pairs: Pairs in swap order
        path: Tokens visited, len(pairs) + 1 entries, no repeats
        input: Currency the trader pays
        output: Currency the trader receives
    """

    __slots__ = ("pairs", "path", "input", "output")

    def __init__(
        self,
        pairs: Sequence[Pair],
        input: Currency,
        output: Currency | None = None,
    ) -> None:
        if len(pairs) == 0:
            raise InvalidRouteError("A route needs at least one pair")
        chain_id = pairs[0].chain_id
        if any(pair.chain_id != chain_id for pair in pairs):
            raise ChainIdMismatchError("All pairs of a route must be on the same chain")

        wrapped_input = wrapped_currency(input, chain_id)
        if not pairs[0].involves_token(wrapped_input):
            raise InvalidRouteError(f"Input {input!r} is not in the first pair")
        if output is not None and not pairs[-1].involves_token(wrapped_currency(output, chain_id)):
            raise InvalidRouteError(f"Output {output!r} is not in the last pair")

        path: list[Token] = [wrapped_input]
        for i, pair in enumerate(pairs):
            current = path[i]
            if not pair.involves_token(current):
                raise InvalidRouteError(f"Pair {i} does not connect to {current!r}")
            path.append(pair.other_token(current))
        if len(set(path)) != len(path):
            raise InvalidRouteError("A route may not visit a token twice")

        self.pairs: tuple[Pair, ...] = tuple(pairs)
        self.path: tuple[Token, ...] = tuple(path)
        self.input = input
        self.output = output if output is not None else path[-1]

        if wrapped_currency(self.output, chain_id) != path[-1]:
            raise InvalidRouteError(f"Path ends at {path[-1]!r}, not at output {self.output!r}")

    def __repr__(self) -> str:
        return "Route(" + " -> ".join(token.symbol or token.address for token in self.path) + ")"

    def __len__(self) -> int:
        return len(self.pairs)

    @property
    def chain_id(self) -> int:
        return self.pairs[0].chain_id

    @property
    def mid_price(self) -> Price:
        """Spot price of the output per unit of input, before any trade.

        Composed hop by hop from each pair's local price.
        """
        prices = [
            pair.token0_price if self.path[i] == pair.token0 else pair.token1_price
            for i, pair in enumerate(self.pairs)
        ]
        composed = reduce(lambda acc, price: acc.multiply(price), prices[1:], prices[0])
        return Price(self.input, self.output, composed.denominator, composed.numerator)


__all__ = ["Route"]

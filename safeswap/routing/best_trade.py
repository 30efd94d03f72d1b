"""Best-trade search over a set of pairs.

Depth-first search from the fixed side of the trade:
- exact input walks forward from the input token
- exact output walks backward from the output token

A path never revisits a token. Each hop is priced against the caller's
original, unmodified pairs, so no branch can see another branch's reserves.
Trades are ranked by amount (more output / less input), then by fewer hops;
remaining ties keep discovery order, which follows the order of `pairs`.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import TypeVar

import structlog

from safeswap.amm.pair import Pair
from safeswap.config import DEFAULT_SEARCH_CONFIG, SearchConfig
from safeswap.constants import TradeType
from safeswap.errors import InsufficientLiquidityError, InvariantError
from safeswap.models.amounts import CurrencyAmount, TokenAmount
from safeswap.models.currency import Currency, Token, wrapped_currency
from safeswap.routing.route import Route
from safeswap.routing.trade import Trade, wrapped_amount

logger = structlog.get_logger()

T = TypeVar("T")


def input_output_comparator(a: Trade, b: Trade) -> int:
    """Order trades between the same currencies by amounts.

    Negative when a is better: more output for equal input, or less input
    for equal output.
    """
    if a.output_amount.raw == b.output_amount.raw:
        if a.input_amount.raw == b.input_amount.raw:
            return 0
        return -1 if a.input_amount.raw < b.input_amount.raw else 1
    return 1 if a.output_amount.raw < b.output_amount.raw else -1


def trade_comparator(a: Trade, b: Trade) -> int:
    """Amounts first, then the shorter route."""
    amounts = input_output_comparator(a, b)
    if amounts != 0:
        return amounts
    return a.hops - b.hops


def sorted_insert(
    items: list[T],
    add: T,
    max_size: int,
    comparator: Callable[[T, T], int],
) -> T | None:
    """Insert into a sorted list of bounded size.

    Equal items keep insertion order. When the list is full, the new item
    only enters if it is strictly better than the current last item.

    Returns:
        The item that fell off the end (possibly add itself), or None
    """
    if max_size <= 0:
        raise ValueError(f"max_size must be positive, got {max_size}")
    if len(items) >= max_size and comparator(items[-1], add) <= 0:
        return add

    lo, hi = 0, len(items)
    while lo < hi:
        mid = (lo + hi) // 2
        if comparator(items[mid], add) <= 0:
            lo = mid + 1
        else:
            hi = mid
    items.insert(lo, add)
    if len(items) > max_size:
        return items.pop()
    return None


def merge_trade_results(
    *result_lists: Sequence[Trade],
    max_num_results: int,
    comparator: Callable[[Trade, Trade], int] = trade_comparator,
) -> list[Trade]:
    """Merge ranked lists from independent searches, in argument order."""
    merged: list[Trade] = []
    for results in result_lists:
        for trade in results:
            sorted_insert(merged, trade, max_num_results, comparator)
    return merged


class _SearchBudget:
    """Counts pair evaluations for one search call."""

    __slots__ = ("remaining", "exhausted")

    def __init__(self, max_explored_nodes: int) -> None:
        self.remaining = max_explored_nodes
        self.exhausted = False

    def spend(self) -> bool:
        if self.remaining <= 0:
            if not self.exhausted:
                logger.warning("search_budget_exhausted")
            self.exhausted = True
            return False
        self.remaining -= 1
        return True


def _resolve_chain_id(currency_a: Currency, currency_b: Currency) -> int:
    if isinstance(currency_a, Token):
        return currency_a.chain_id
    if isinstance(currency_b, Token):
        return currency_b.chain_id
    raise InvariantError("At least one side of a trade must be a token")


def _validate(pairs: Sequence[Pair], max_num_results: int, max_hops: int) -> None:
    if len(pairs) == 0:
        raise InvariantError("No pairs to search")
    if max_hops <= 0:
        raise InvariantError(f"max_hops must be positive, got {max_hops}")
    if max_num_results <= 0:
        raise InvariantError(f"max_num_results must be positive, got {max_num_results}")


def best_trade_exact_in(
    pairs: Sequence[Pair],
    currency_amount_in: CurrencyAmount,
    currency_out: Currency,
    max_num_results: int | None = None,
    max_hops: int | None = None,
    config: SearchConfig = DEFAULT_SEARCH_CONFIG,
) -> list[Trade]:
    """Best trades spending exactly currency_amount_in for currency_out.

    Args:
        pairs: Candidate pairs; their order decides ties
        currency_amount_in: Fixed input amount (native or token)
        currency_out: Wanted currency (native or token)
        max_num_results: Result capacity (default from config)
        max_hops: Longest route considered (default from config)
        config: Search bounds

    Returns:
        Up to max_num_results trades, best first
    """
    if max_num_results is None:
        max_num_results = config.max_num_results
    if max_hops is None:
        max_hops = config.max_hops
    _validate(pairs, max_num_results, max_hops)

    chain_id = _resolve_chain_id(currency_amount_in.currency, currency_out)
    amount_in = wrapped_amount(currency_amount_in, chain_id)
    token_out = wrapped_currency(currency_out, chain_id)
    results: list[Trade] = []
    if amount_in.token == token_out:
        return results

    budget = _SearchBudget(config.max_explored_nodes)

    def search(
        current_amount: TokenAmount,
        visited: tuple[Token, ...],
        current_pairs: tuple[Pair, ...],
        hops_left: int,
    ) -> None:
        for pair in pairs:
            if not pair.involves_token(current_amount.token):
                continue
            next_token = pair.other_token(current_amount.token)
            if next_token in visited:
                continue
            if not budget.spend():
                return
            try:
                amount_out, _ = pair.get_output_amount(current_amount)
            except InsufficientLiquidityError:
                continue

            route_pairs = current_pairs + (pair,)
            if next_token == token_out:
                trade = Trade(
                    Route(route_pairs, currency_amount_in.currency, currency_out),
                    currency_amount_in,
                    TradeType.EXACT_INPUT,
                )
                sorted_insert(results, trade, max_num_results, trade_comparator)
            elif hops_left > 1:
                search(amount_out, visited + (next_token,), route_pairs, hops_left - 1)

    search(amount_in, (amount_in.token,), (), max_hops)

    logger.debug(
        "best_trade_exact_in",
        pairs=len(pairs),
        max_hops=max_hops,
        explored=config.max_explored_nodes - budget.remaining,
        found=len(results),
    )
    return results


def best_trade_exact_out(
    pairs: Sequence[Pair],
    currency_in: Currency,
    currency_amount_out: CurrencyAmount,
    max_num_results: int | None = None,
    max_hops: int | None = None,
    config: SearchConfig = DEFAULT_SEARCH_CONFIG,
) -> list[Trade]:
    """Best trades receiving exactly currency_amount_out, paying currency_in.

    The search runs backward from the output token, so each hop computes the
    input required for the amount the next hop needs.

    Returns:
        Up to max_num_results trades, best (least input) first
    """
    if max_num_results is None:
        max_num_results = config.max_num_results
    if max_hops is None:
        max_hops = config.max_hops
    _validate(pairs, max_num_results, max_hops)

    chain_id = _resolve_chain_id(currency_in, currency_amount_out.currency)
    amount_out = wrapped_amount(currency_amount_out, chain_id)
    token_in = wrapped_currency(currency_in, chain_id)
    results: list[Trade] = []
    if amount_out.token == token_in:
        return results

    budget = _SearchBudget(config.max_explored_nodes)

    def search(
        current_amount: TokenAmount,
        visited: tuple[Token, ...],
        current_pairs: tuple[Pair, ...],
        hops_left: int,
    ) -> None:
        for pair in pairs:
            if not pair.involves_token(current_amount.token):
                continue
            next_token = pair.other_token(current_amount.token)
            if next_token in visited:
                continue
            if not budget.spend():
                return
            try:
                amount_in, _ = pair.get_input_amount(current_amount)
            except InsufficientLiquidityError:
                continue

            route_pairs = (pair,) + current_pairs
            if next_token == token_in:
                trade = Trade(
                    Route(route_pairs, currency_in, currency_amount_out.currency),
                    currency_amount_out,
                    TradeType.EXACT_OUTPUT,
                )
                sorted_insert(results, trade, max_num_results, trade_comparator)
            elif hops_left > 1:
                search(amount_in, visited + (next_token,), route_pairs, hops_left - 1)

    search(amount_out, (amount_out.token,), (), max_hops)

    logger.debug(
        "best_trade_exact_out",
        pairs=len(pairs),
        max_hops=max_hops,
        explored=config.max_explored_nodes - budget.remaining,
        found=len(results),
    )
    return results


__all__ = [
    "best_trade_exact_in",
    "best_trade_exact_out",
    "input_output_comparator",
    "trade_comparator",
    "sorted_insert",
    "merge_trade_results",
]

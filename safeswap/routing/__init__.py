"""Routes, trades and best-trade search."""

from safeswap.routing.best_trade import (
    best_trade_exact_in,
    best_trade_exact_out,
    input_output_comparator,
    merge_trade_results,
    sorted_insert,
    trade_comparator,
)
from safeswap.routing.route import Route
from safeswap.routing.trade import Trade, compute_price_impact, wrapped_amount

__all__ = [
    "Route",
    "Trade",
    "compute_price_impact",
    "wrapped_amount",
    "best_trade_exact_in",
    "best_trade_exact_out",
    "input_output_comparator",
    "trade_comparator",
    "sorted_insert",
    "merge_trade_results",
]

"""SafeSwap SDK - constant-product pricing, route search and router calls."""

from safeswap.amm.pair import Pair
from safeswap.config import DEFAULT_SEARCH_CONFIG, SearchConfig, configure_logging
from safeswap.constants import ChainId, Rounding, TradeType
from safeswap.math.fraction import Fraction
from safeswap.models.amounts import CurrencyAmount, Percent, Price, TokenAmount
from safeswap.models.currency import ETHER, WETH, Currency, Token, currency_equals
from safeswap.router import SwapParameters, TradeOptions, swap_call_parameters
from safeswap.routing import Route, Trade, best_trade_exact_in, best_trade_exact_out

__version__ = "0.1.0"
__all__ = [
    "ChainId",
    "Rounding",
    "TradeType",
    "Fraction",
    "Currency",
    "Token",
    "ETHER",
    "WETH",
    "currency_equals",
    "CurrencyAmount",
    "TokenAmount",
    "Percent",
    "Price",
    "Pair",
    "Route",
    "Trade",
    "best_trade_exact_in",
    "best_trade_exact_out",
    "TradeOptions",
    "SwapParameters",
    "swap_call_parameters",
    "SearchConfig",
    "DEFAULT_SEARCH_CONFIG",
    "configure_logging",
    "__version__",
]

"""Factory functions for creating test objects.

Usage:
    from tests.helpers import make_pair, TOKEN_0, TOKEN_1

    pair = make_pair(TOKEN_0, 1000, TOKEN_1, 1000)
"""

from safeswap.amm.pair import Pair
from safeswap.models.amounts import TokenAmount
from safeswap.models.currency import Token


def amount(token: Token, raw: int) -> TokenAmount:
    """Shorthand for TokenAmount(token, raw)."""
    return TokenAmount(token, raw)


def make_pair(token_a: Token, reserve_a: int, token_b: Token, reserve_b: int) -> Pair:
    """Create a pair from two tokens and their raw reserves (any order).

    Args:
        token_a: First token
        reserve_a: Raw reserve of token_a
        token_b: Second token
        reserve_b: Raw reserve of token_b

    Returns:
        Pair instance with reserves sorted by token address
    """
    return Pair(TokenAmount(token_a, reserve_a), TokenAmount(token_b, reserve_b))

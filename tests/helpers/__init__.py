"""Test helpers module for shared test utilities.

- constants: Token fixtures on mainnet and a second network
- factories: Pair and amount factory functions
"""

from tests.helpers.constants import (
    BSC_TOKEN_0,
    BSC_TOKEN_1,
    RECIPIENT,
    TOKEN_0,
    TOKEN_1,
    TOKEN_2,
    TOKEN_3,
    WETH_MAINNET,
)
from tests.helpers.factories import amount, make_pair

__all__ = [
    # Constants
    "TOKEN_0",
    "TOKEN_1",
    "TOKEN_2",
    "TOKEN_3",
    "WETH_MAINNET",
    "BSC_TOKEN_0",
    "BSC_TOKEN_1",
    "RECIPIENT",
    # Factories
    "amount",
    "make_pair",
]

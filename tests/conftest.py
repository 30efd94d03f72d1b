"""Pytest configuration and fixtures.

The pair fixtures form a small graph used across AMM, routing and router
tests:

    T0 --(1000/1000)-- T1        T0 --(1000/1100)-- T2
    T0 --(1000/900)--- T3        T1 --(1200/1000)-- T2
    T1 --(1200/1300)-- T3        WETH --(1000/1000)-- T0
"""

import pytest
import structlog

from safeswap.amm.pair import Pair
from tests.helpers import TOKEN_0, TOKEN_1, TOKEN_2, TOKEN_3, WETH_MAINNET, make_pair


@pytest.fixture(autouse=True)
def _reset_structlog():
    """Keep log configuration changes local to a test."""
    yield
    structlog.reset_defaults()


@pytest.fixture
def pair_0_1() -> Pair:
    return make_pair(TOKEN_0, 1000, TOKEN_1, 1000)


@pytest.fixture
def pair_0_2() -> Pair:
    return make_pair(TOKEN_0, 1000, TOKEN_2, 1100)


@pytest.fixture
def pair_0_3() -> Pair:
    return make_pair(TOKEN_0, 1000, TOKEN_3, 900)


@pytest.fixture
def pair_1_2() -> Pair:
    return make_pair(TOKEN_1, 1200, TOKEN_2, 1000)


@pytest.fixture
def pair_1_3() -> Pair:
    return make_pair(TOKEN_1, 1200, TOKEN_3, 1300)


@pytest.fixture
def pair_weth_0() -> Pair:
    return make_pair(WETH_MAINNET, 1000, TOKEN_0, 1000)


@pytest.fixture
def empty_pair_0_1() -> Pair:
    return make_pair(TOKEN_0, 0, TOKEN_1, 0)

"""Constant-product AMM pairs."""

from safeswap.amm.pair import Pair, compute_pair_address

__all__ = ["Pair", "compute_pair_address"]

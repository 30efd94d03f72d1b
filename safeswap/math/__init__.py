"""Exact integer and rational arithmetic."""

from safeswap.math.fraction import Fraction
from safeswap.math.safe_int import (
    DivisionByZero,
    S,
    SafeInt,
    SafeIntError,
    Uint256Overflow,
    Underflow,
)

__all__ = [
    "Fraction",
    "SafeInt",
    "S",
    "SafeIntError",
    "DivisionByZero",
    "Underflow",
    "Uint256Overflow",
]

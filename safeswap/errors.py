"""SafeSwap error classes.

Invariant violations and policy violations propagate to the caller.
Liquidity errors mark a single pool as unusable for the requested amount;
the best-trade search skips such branches and keeps going.

Arithmetic errors live in safeswap.math.safe_int.
"""

from enum import Enum


class SafeSwapError(Exception):
    """Base error for SafeSwap operations."""

    pass


# =============================================================================
# Invariant violations
# =============================================================================


class InvariantError(SafeSwapError, ValueError):
    """Malformed construction input."""

    pass


class CurrencyMismatchError(InvariantError):
    """Two amounts, prices or route endpoints refer to different currencies."""

    pass


class ChainIdMismatchError(InvariantError):
    """Tokens or pairs from different networks were combined."""

    pass


class InvalidRouteError(InvariantError):
    """Pairs do not form a connected path between the declared currencies."""

    pass


class InvalidAmountError(InvariantError):
    """Amount is negative, zero where a positive value is required, or out of range."""

    pass


class InvalidAddressError(InvariantError):
    """Address is malformed or carries an invalid checksum."""

    pass


class UnsupportedChainError(InvariantError):
    """No factory or init code hash is known for the network."""

    pass


# =============================================================================
# Liquidity errors (recoverable)
# =============================================================================


class InsufficientLiquidityError(SafeSwapError):
    """The pool cannot serve the requested amount."""

    pass


class InsufficientReservesError(InsufficientLiquidityError):
    """A reserve is empty or the output would drain the pool."""

    pass


class InsufficientInputAmountError(InsufficientLiquidityError):
    """The input is too small to produce any output (or any liquidity)."""

    pass


# =============================================================================
# Router policy violations
# =============================================================================


class PolicyViolation(str, Enum):
    """Reason a swap call could not be built."""

    ETHER_IN_OUT = "ETHER_IN_OUT"  # router cannot swap native for native
    TTL = "TTL"  # ttl must be positive
    RECIPIENT = "RECIPIENT"  # recipient is not a valid address
    TIP_CURRENCY = "TIP_CURRENCY"  # tip must be paid in the native asset


class RouterPolicyError(SafeSwapError):
    """Trade options are not acceptable to the router contract."""

    def __init__(self, reason: PolicyViolation, message: str | None = None) -> None:
        self.reason = reason
        super().__init__(message or reason.value)


__all__ = [
    "SafeSwapError",
    "InvariantError",
    "CurrencyMismatchError",
    "ChainIdMismatchError",
    "InvalidRouteError",
    "InvalidAmountError",
    "InvalidAddressError",
    "UnsupportedChainError",
    "InsufficientLiquidityError",
    "InsufficientReservesError",
    "InsufficientInputAmountError",
    "PolicyViolation",
    "RouterPolicyError",
]

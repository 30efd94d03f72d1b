"""Currencies: the native asset and ERC20 tokens.

The native asset (ETHER) is a process-wide singleton compared by identity.
Tokens are compared by network and checksummed address, so two Token objects
built from differently-cased addresses are the same token.
"""

from __future__ import annotations

from safeswap.constants import WETH_ADDRESS, SolidityType
from safeswap.errors import (
    ChainIdMismatchError,
    InvalidAmountError,
    InvariantError,
    UnsupportedChainError,
)
from safeswap.math.safe_int import S, Uint256Overflow
from safeswap.models.types import validate_and_parse_address


class Currency:
    """A currency with a number of decimals.

    Only the native asset is constructed directly; everything else is a Token.
    """

    __slots__ = ("decimals", "symbol", "name")

    def __init__(self, decimals: int, symbol: str | None = None, name: str | None = None) -> None:
        try:
            S(decimals).check(SolidityType.UINT8)
        except (Uint256Overflow, TypeError) as err:
            raise InvalidAmountError(f"Invalid decimals: {decimals}") from err
        self.decimals = decimals
        self.symbol = symbol
        self.name = name

    def __repr__(self) -> str:
        return f"Currency({self.symbol or '?'}, decimals={self.decimals})"


# The chain's native asset, attached as transaction value
ETHER = Currency(18, "ETH", "Ether")


class Token(Currency):
    """An ERC20 token on a specific network."""

    __slots__ = ("chain_id", "address")

    def __init__(
        self,
        chain_id: int,
        address: str,
        decimals: int,
        symbol: str | None = None,
        name: str | None = None,
    ) -> None:
        super().__init__(decimals, symbol, name)
        self.chain_id = chain_id
        self.address = validate_and_parse_address(address)

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if not isinstance(other, Token):
            return NotImplemented
        return self.chain_id == other.chain_id and self.address == other.address

    def __hash__(self) -> int:
        return hash((self.chain_id, self.address))

    def __repr__(self) -> str:
        return f"Token({self.symbol or self.address}, chain={self.chain_id})"

    def sorts_before(self, other: Token) -> bool:
        """Whether this token is token0 of a pair with other.

        Raises:
            ChainIdMismatchError: If the tokens are on different networks
            InvariantError: If both tokens are the same address
        """
        if self.chain_id != other.chain_id:
            raise ChainIdMismatchError(
                f"Cannot sort tokens on chains {self.chain_id} and {other.chain_id}"
            )
        if self.address == other.address:
            raise InvariantError(f"Cannot sort identical token addresses: {self.address}")
        return self.address.lower() < other.address.lower()


def currency_equals(currency_a: Currency, currency_b: Currency) -> bool:
    """Compare currencies: tokens by value, the native asset by identity."""
    if isinstance(currency_a, Token) and isinstance(currency_b, Token):
        return currency_a == currency_b
    if isinstance(currency_a, Token) or isinstance(currency_b, Token):
        return False
    return currency_a is currency_b


# Wrapped native asset per network
WETH: dict[int, Token] = {
    chain_id: Token(chain_id, address, 18, "WETH", "Wrapped Ether")
    for chain_id, address in WETH_ADDRESS.items()
}


def wrapped_currency(currency: Currency, chain_id: int) -> Token:
    """Return the token the pair contracts trade for this currency.

    Raises:
        UnsupportedChainError: If the native asset has no wrapper on chain_id
        InvariantError: If currency is neither a Token nor the native asset
    """
    if isinstance(currency, Token):
        return currency
    if currency is ETHER:
        try:
            return WETH[chain_id]
        except KeyError:
            raise UnsupportedChainError(f"No wrapped native asset on chain {chain_id}") from None
    raise InvariantError(f"Unknown currency: {currency!r}")


__all__ = [
    "Currency",
    "ETHER",
    "Token",
    "WETH",
    "currency_equals",
    "wrapped_currency",
]

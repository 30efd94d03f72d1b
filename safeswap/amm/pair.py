"""Constant-product pair: x * y = k with a 0.25% input fee.

Formula: amount_out = (in * 9975 * res_out) / (res_in * 10000 + in * 9975)

Forward swaps round down and reverse swaps round up, exactly as the pair
contract does, so a quote computed here never promises more than the chain
will deliver. Every swap returns a new Pair; the original is never touched.
"""

from __future__ import annotations

from functools import lru_cache

from eth_abi.packed import encode_packed
from eth_utils import keccak, to_checksum_address

from safeswap.constants import (
    FACTORY_ADDRESS,
    FEE_DENOMINATOR,
    FEE_NUMERATOR,
    INIT_CODE_HASH,
    MINIMUM_LIQUIDITY,
    PROTOCOL_FEE_DENOMINATOR_MULTIPLIER,
)
from safeswap.errors import (
    ChainIdMismatchError,
    InsufficientInputAmountError,
    InsufficientReservesError,
    InvalidAmountError,
    InvariantError,
    UnsupportedChainError,
)
from safeswap.math.safe_int import S
from safeswap.models.amounts import Price, TokenAmount
from safeswap.models.currency import Token


@lru_cache(maxsize=4096)
def compute_pair_address(factory: str, init_code_hash: str, token_a: str, token_b: str) -> str:
    """CREATE2 address of the pair for two token addresses (any order).

    address = keccak256(0xff ++ factory ++ keccak256(token0 ++ token1) ++ init_code_hash)[12:]
    """
    token0, token1 = sorted((token_a, token_b), key=str.lower)
    salt = keccak(encode_packed(["address", "address"], [token0, token1]))
    digest = keccak(
        b"\xff" + bytes.fromhex(factory[2:]) + salt + bytes.fromhex(init_code_hash[2:])
    )
    return to_checksum_address("0x" + digest[12:].hex())


class Pair:
    """A liquidity pool between two tokens on one network.

    Tokens are stored sorted by address so any two references to the same
    pool share identity; reserves only affect pricing.
    """

    __slots__ = ("_reserves", "liquidity_token")

    def __init__(self, token_amount_a: TokenAmount, token_amount_b: TokenAmount) -> None:
        if not isinstance(token_amount_a, TokenAmount) or not isinstance(token_amount_b, TokenAmount):
            raise InvariantError("Pair reserves must be TokenAmounts")
        if token_amount_a.token.sorts_before(token_amount_b.token):
            self._reserves = (token_amount_a, token_amount_b)
        else:
            self._reserves = (token_amount_b, token_amount_a)
        self.liquidity_token = Token(
            self.chain_id,
            Pair.get_address(self.token0, self.token1),
            18,
            "SAFE-LP",
            "SafeSwap LP",
        )

    @staticmethod
    def get_address(token_a: Token, token_b: Token) -> str:
        """On-chain address of the pool for two tokens.

        Raises:
            ChainIdMismatchError: If the tokens are on different networks
            UnsupportedChainError: If the network has no factory deployment
        """
        if token_a.chain_id != token_b.chain_id:
            raise ChainIdMismatchError(
                f"Tokens on chains {token_a.chain_id} and {token_b.chain_id} cannot share a pair"
            )
        factory = FACTORY_ADDRESS.get(token_a.chain_id, "")
        init_code_hash = INIT_CODE_HASH.get(token_a.chain_id, "")
        if not factory or not init_code_hash:
            raise UnsupportedChainError(f"No pair factory deployed on chain {token_a.chain_id}")
        return compute_pair_address(factory, init_code_hash, token_a.address, token_b.address)

    # --- Identity and accessors ---

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Pair):
            return NotImplemented
        return self.token0 == other.token0 and self.token1 == other.token1

    def __hash__(self) -> int:
        return hash((self.token0, self.token1))

    def __repr__(self) -> str:
        return (
            f"Pair({self.token0.symbol or self.token0.address}={self.reserve0.raw}, "
            f"{self.token1.symbol or self.token1.address}={self.reserve1.raw})"
        )

    @property
    def chain_id(self) -> int:
        return self.token0.chain_id

    @property
    def token0(self) -> Token:
        return self._reserves[0].token

    @property
    def token1(self) -> Token:
        return self._reserves[1].token

    @property
    def reserve0(self) -> TokenAmount:
        return self._reserves[0]

    @property
    def reserve1(self) -> TokenAmount:
        return self._reserves[1]

    def involves_token(self, token: Token) -> bool:
        return token == self.token0 or token == self.token1

    def _require_token(self, token: Token) -> None:
        if not self.involves_token(token):
            raise InvariantError(f"{token!r} is not in {self!r}")

    def reserve_of(self, token: Token) -> TokenAmount:
        self._require_token(token)
        return self.reserve0 if token == self.token0 else self.reserve1

    def other_token(self, token: Token) -> Token:
        self._require_token(token)
        return self.token1 if token == self.token0 else self.token0

    @property
    def token0_price(self) -> Price:
        """Current mid price of token0 in terms of token1."""
        return Price(self.token0, self.token1, self.reserve0.raw, self.reserve1.raw)

    @property
    def token1_price(self) -> Price:
        """Current mid price of token1 in terms of token0."""
        return Price(self.token1, self.token0, self.reserve1.raw, self.reserve0.raw)

    def price_of(self, token: Token) -> Price:
        """Spot price with token as the base currency."""
        self._require_token(token)
        return self.token0_price if token == self.token0 else self.token1_price

    # --- Swap math ---

    def get_output_amount(self, input_amount: TokenAmount) -> tuple[TokenAmount, Pair]:
        """Output for an exact input, and the pair after the swap.

        Raises:
            InsufficientReservesError: If a reserve is empty or would be drained
            InvalidAmountError: If input_amount is not positive
            InsufficientInputAmountError: If the input is too small to produce output
        """
        if self.reserve0.raw == 0 or self.reserve1.raw == 0:
            raise InsufficientReservesError(f"Empty reserve in {self!r}")
        self._require_token(input_amount.token)
        if input_amount.raw <= 0:
            raise InvalidAmountError(f"Input amount must be positive: {input_amount.raw}")

        input_reserve = self.reserve_of(input_amount.token)
        output_reserve = self.reserve_of(self.other_token(input_amount.token))

        amount_in_with_fee = S(input_amount.raw) * FEE_NUMERATOR
        numerator = amount_in_with_fee * output_reserve.raw
        denominator = S(input_reserve.raw) * FEE_DENOMINATOR + amount_in_with_fee
        amount_out = (numerator // denominator).value

        if amount_out >= output_reserve.raw:
            raise InsufficientReservesError(
                f"Output {amount_out} would drain reserve {output_reserve.raw}"
            )
        if amount_out == 0:
            raise InsufficientInputAmountError(f"Input {input_amount.raw} produces no output")

        output_amount = TokenAmount(output_reserve.token, amount_out)
        return output_amount, Pair(
            input_reserve.add(input_amount),
            output_reserve.subtract(output_amount),
        )

    def get_input_amount(self, output_amount: TokenAmount) -> tuple[TokenAmount, Pair]:
        """Input required for an exact output, and the pair after the swap.

        Raises:
            InsufficientReservesError: If a reserve is empty or output >= reserve_out
            InvalidAmountError: If output_amount is not positive
        """
        self._require_token(output_amount.token)
        output_reserve = self.reserve_of(output_amount.token)
        input_reserve = self.reserve_of(self.other_token(output_amount.token))
        if (
            self.reserve0.raw == 0
            or self.reserve1.raw == 0
            or output_amount.raw >= output_reserve.raw
        ):
            raise InsufficientReservesError(
                f"Cannot take {output_amount.raw} out of reserve {output_reserve.raw}"
            )
        if output_amount.raw <= 0:
            raise InvalidAmountError(f"Output amount must be positive: {output_amount.raw}")

        # Ceiling division: (numerator // denominator) + 1
        numerator = S(input_reserve.raw) * output_amount.raw * FEE_DENOMINATOR
        denominator = (S(output_reserve.raw) - output_amount.raw) * FEE_NUMERATOR
        amount_in = ((numerator // denominator) + 1).value

        input_amount = TokenAmount(input_reserve.token, amount_in)
        return input_amount, Pair(
            input_reserve.add(input_amount),
            output_reserve.subtract(output_amount),
        )

    # --- Liquidity ---

    def _sorted_amounts(
        self, token_amount_a: TokenAmount, token_amount_b: TokenAmount
    ) -> tuple[TokenAmount, TokenAmount]:
        if token_amount_a.token.sorts_before(token_amount_b.token):
            amounts = (token_amount_a, token_amount_b)
        else:
            amounts = (token_amount_b, token_amount_a)
        if amounts[0].token != self.token0 or amounts[1].token != self.token1:
            raise InvariantError(f"Amounts do not match the tokens of {self!r}")
        return amounts

    def get_liquidity_minted(
        self,
        total_supply: TokenAmount,
        token_amount_a: TokenAmount,
        token_amount_b: TokenAmount,
    ) -> TokenAmount:
        """LP tokens minted for a deposit.

        The first deposit locks MINIMUM_LIQUIDITY forever.

        Raises:
            InsufficientInputAmountError: If the deposit mints nothing
        """
        if total_supply.token != self.liquidity_token:
            raise InvariantError("total_supply must be an amount of the liquidity token")
        amount0, amount1 = self._sorted_amounts(token_amount_a, token_amount_b)

        if total_supply.raw == 0:
            root = (S(amount0.raw) * amount1.raw).isqrt()
            if root <= MINIMUM_LIQUIDITY:
                raise InsufficientInputAmountError("Deposit does not exceed the minimum liquidity")
            liquidity = (root - MINIMUM_LIQUIDITY).value
        else:
            liquidity0 = (S(amount0.raw) * total_supply.raw) // self.reserve0.raw
            liquidity1 = (S(amount1.raw) * total_supply.raw) // self.reserve1.raw
            liquidity = min(liquidity0.value, liquidity1.value)

        if liquidity <= 0:
            raise InsufficientInputAmountError("Deposit mints no liquidity")
        return TokenAmount(self.liquidity_token, liquidity)

    def get_liquidity_value(
        self,
        token: Token,
        total_supply: TokenAmount,
        liquidity: TokenAmount,
        fee_on: bool = False,
        k_last: int | None = None,
    ) -> TokenAmount:
        """Amount of token redeemable for liquidity LP tokens.

        With fee_on, the supply first grows by the protocol fee that the pair
        would mint on the next liquidity event.

        Raises:
            InvariantError: If liquidity exceeds total_supply or k_last is missing
        """
        self._require_token(token)
        if total_supply.token != self.liquidity_token or liquidity.token != self.liquidity_token:
            raise InvariantError("Supply and liquidity must be amounts of the liquidity token")
        if liquidity.raw > total_supply.raw:
            raise InvariantError(f"Liquidity {liquidity.raw} exceeds supply {total_supply.raw}")

        adjusted_supply = S(total_supply.raw)
        if fee_on:
            if k_last is None:
                raise InvariantError("k_last is required when the protocol fee is on")
            if k_last != 0:
                root_k = (S(self.reserve0.raw) * self.reserve1.raw).isqrt()
                root_k_last = S(k_last).isqrt()
                if root_k > root_k_last:
                    numerator = S(total_supply.raw) * (root_k - root_k_last)
                    denominator = root_k * PROTOCOL_FEE_DENOMINATOR_MULTIPLIER + root_k_last
                    adjusted_supply = adjusted_supply + numerator // denominator

        value = (S(liquidity.raw) * self.reserve_of(token).raw) // adjusted_supply
        return TokenAmount(token, value.value)


__all__ = ["Pair", "compute_pair_address"]

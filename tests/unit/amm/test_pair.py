"""Tests for constant-product Pair math, addresses and liquidity."""

import pytest
from eth_utils import to_checksum_address

from safeswap.amm.pair import Pair, compute_pair_address
from safeswap.constants import FACTORY_ADDRESS, INIT_CODE_HASH, ChainId
from safeswap.errors import (
    ChainIdMismatchError,
    InsufficientInputAmountError,
    InsufficientLiquidityError,
    InsufficientReservesError,
    InvalidAmountError,
    InvariantError,
    UnsupportedChainError,
)
from safeswap.math.fraction import Fraction
from safeswap.models.amounts import TokenAmount
from safeswap.models.currency import Token
from tests.helpers import BSC_TOKEN_0, TOKEN_0, TOKEN_1, TOKEN_2, amount, make_pair

# Uniswap v2 mainnet deployment, a well-known CREATE2 vector
UNISWAP_FACTORY = "0x5C69bEe701ef814a2B6a3EDD4B1652CB9cc5aA6f"
UNISWAP_INIT_CODE_HASH = "0x96e8ac4277198ff8b6f785478aa9a39f403cb768dd02cbee326c3e7da348845f"
USDC = "0xA0b86991c6218b36c1d19D4a2e9Eb0cE3606eB48"
DAI = "0x6B175474E89094C44Da98b954EedeAC495271d0F"
USDC_DAI_PAIR = "0xAE461cA67B15dc8dc81CE7615e0320dA1A9aB8D5"


def expected_output(amount_in: int, reserve_in: int, reserve_out: int) -> int:
    """Closed-form output with the 0.25% fee."""
    return (amount_in * 9975 * reserve_out) // (reserve_in * 10000 + amount_in * 9975)


class TestPairAddress:
    """Tests for CREATE2 pair address derivation."""

    def test_known_vector(self):
        assert compute_pair_address(UNISWAP_FACTORY, UNISWAP_INIT_CODE_HASH, USDC, DAI) == USDC_DAI_PAIR

    def test_order_independent(self):
        assert Pair.get_address(TOKEN_0, TOKEN_1) == Pair.get_address(TOKEN_1, TOKEN_0)

    def test_checksummed(self):
        address = Pair.get_address(TOKEN_0, TOKEN_1)
        assert len(address) == 42
        assert address == to_checksum_address(address.lower())

    def test_distinct_pairs_distinct_addresses(self):
        assert Pair.get_address(TOKEN_0, TOKEN_1) != Pair.get_address(TOKEN_0, TOKEN_2)

    def test_uses_chain_deployment(self):
        expected = compute_pair_address(
            FACTORY_ADDRESS[ChainId.MAINNET],
            INIT_CODE_HASH[ChainId.MAINNET],
            TOKEN_0.address,
            TOKEN_1.address,
        )
        assert Pair.get_address(TOKEN_0, TOKEN_1) == expected

    def test_unsupported_chain_raises(self):
        a = Token(ChainId.RINKEBY, TOKEN_0.address, 18)
        b = Token(ChainId.RINKEBY, TOKEN_1.address, 18)
        with pytest.raises(UnsupportedChainError):
            Pair.get_address(a, b)
        with pytest.raises(UnsupportedChainError):
            make_pair(a, 1, b, 1)

    def test_chain_mismatch_raises(self):
        with pytest.raises(ChainIdMismatchError):
            Pair.get_address(TOKEN_0, BSC_TOKEN_0)


class TestPairConstruction:
    """Tests for token ordering and identity."""

    def test_tokens_sorted(self):
        pair = make_pair(TOKEN_1, 200, TOKEN_0, 100)
        assert pair.token0 == TOKEN_0
        assert pair.token1 == TOKEN_1
        assert pair.reserve0 == amount(TOKEN_0, 100)
        assert pair.reserve1 == amount(TOKEN_1, 200)

    def test_same_token_raises(self):
        with pytest.raises(InvariantError):
            make_pair(TOKEN_0, 100, TOKEN_0, 100)

    def test_different_chains_raise(self):
        with pytest.raises(ChainIdMismatchError):
            make_pair(TOKEN_0, 100, BSC_TOKEN_0, 100)

    def test_equality_ignores_reserves(self):
        a = make_pair(TOKEN_0, 100, TOKEN_1, 200)
        b = make_pair(TOKEN_1, 5, TOKEN_0, 7)
        assert a == b
        assert hash(a) == hash(b)

    def test_liquidity_token(self):
        pair = make_pair(TOKEN_0, 100, TOKEN_1, 200)
        assert pair.liquidity_token.address == Pair.get_address(TOKEN_0, TOKEN_1)
        assert pair.liquidity_token.decimals == 18
        assert pair.liquidity_token.chain_id == ChainId.MAINNET

    def test_reserve_of_and_other_token(self):
        pair = make_pair(TOKEN_0, 100, TOKEN_1, 200)
        assert pair.reserve_of(TOKEN_1).raw == 200
        assert pair.other_token(TOKEN_0) == TOKEN_1
        with pytest.raises(InvariantError):
            pair.reserve_of(TOKEN_2)

    def test_prices(self):
        pair = make_pair(TOKEN_0, 100, TOKEN_1, 200)
        assert pair.token0_price.raw == Fraction(200, 100)
        assert pair.token1_price.raw == Fraction(100, 200)
        assert pair.price_of(TOKEN_0) == pair.token0_price
        assert pair.price_of(TOKEN_1).base_currency == TOKEN_1
        with pytest.raises(InvariantError):
            pair.price_of(TOKEN_2)


class TestGetOutputAmount:
    """Tests for exact-input swaps."""

    def test_fee_formula(self, pair_0_1):
        output, _ = pair_0_1.get_output_amount(amount(TOKEN_0, 100))
        assert output == amount(TOKEN_1, 90)
        assert output.raw == expected_output(100, 1000, 1000)

    def test_returns_new_pair(self, pair_0_1):
        _, next_pair = pair_0_1.get_output_amount(amount(TOKEN_0, 100))
        assert next_pair.reserve_of(TOKEN_0).raw == 1100
        assert next_pair.reserve_of(TOKEN_1).raw == 910
        # original unchanged
        assert pair_0_1.reserve_of(TOKEN_0).raw == 1000
        assert pair_0_1.reserve_of(TOKEN_1).raw == 1000

    @pytest.mark.parametrize("amount_in", [0, 1, 100, 10**30])
    def test_zero_reserve_raises(self, amount_in):
        """An empty reserve fails regardless of the input amount."""
        pair = make_pair(TOKEN_0, 0, TOKEN_1, 1000)
        with pytest.raises(InsufficientReservesError):
            pair.get_output_amount(amount(TOKEN_0, amount_in))

    def test_zero_input_raises(self, pair_0_1):
        with pytest.raises(InvalidAmountError):
            pair_0_1.get_output_amount(amount(TOKEN_0, 0))

    def test_foreign_token_raises(self, pair_0_1):
        with pytest.raises(InvariantError):
            pair_0_1.get_output_amount(amount(TOKEN_2, 100))

    def test_dust_input_raises(self, pair_0_1):
        """Inputs too small to move the price produce no output."""
        with pytest.raises(InsufficientInputAmountError):
            pair_0_1.get_output_amount(amount(TOKEN_0, 1))

    def test_liquidity_errors_share_base(self):
        assert issubclass(InsufficientReservesError, InsufficientLiquidityError)
        assert issubclass(InsufficientInputAmountError, InsufficientLiquidityError)

    def test_output_never_drains_reserve(self):
        pair = make_pair(TOKEN_0, 10, TOKEN_1, 10)
        output, _ = pair.get_output_amount(amount(TOKEN_0, 10**40))
        assert output.raw == 9

    def test_output_is_monotone(self):
        """A larger input never yields a smaller output."""
        pair = make_pair(TOKEN_0, 10**21, TOKEN_1, 3 * 10**20)
        previous = 0
        for amount_in in [10**15, 10**16, 10**17, 10**18, 10**19, 10**20, 10**21]:
            output, _ = pair.get_output_amount(amount(TOKEN_0, amount_in))
            assert output.raw >= previous
            previous = output.raw


class TestGetInputAmount:
    """Tests for exact-output swaps."""

    def test_round_trip(self, pair_0_1):
        required, next_pair = pair_0_1.get_input_amount(amount(TOKEN_1, 90))
        assert required == amount(TOKEN_0, 100)
        assert next_pair.reserve_of(TOKEN_0).raw == 1100
        assert next_pair.reserve_of(TOKEN_1).raw == 910

    def test_rounds_up(self, pair_0_2):
        """1e9 / 9,975,000 = 100.25..., so 101 is required."""
        required, _ = pair_0_2.get_input_amount(amount(TOKEN_2, 100))
        assert required.raw == 101

    def test_output_at_reserve_raises(self, pair_0_1):
        with pytest.raises(InsufficientReservesError):
            pair_0_1.get_input_amount(amount(TOKEN_1, 1000))

    def test_zero_reserve_raises(self):
        pair = make_pair(TOKEN_0, 0, TOKEN_1, 1000)
        with pytest.raises(InsufficientReservesError):
            pair.get_input_amount(amount(TOKEN_1, 10))

    def test_zero_output_raises(self, pair_0_1):
        with pytest.raises(InvalidAmountError):
            pair_0_1.get_input_amount(amount(TOKEN_1, 0))

    @pytest.mark.parametrize(
        "reserve_in,reserve_out,amount_in",
        [
            (1000, 1000, 100),
            (1000, 1100, 7),
            (10**18, 5 * 10**17, 12345),
            (3, 10**30, 1),
        ],
    )
    def test_round_trip_never_favors_trader(self, reserve_in, reserve_out, amount_in):
        """Buying back the output of a swap costs at least the original input.

        Not a general law: when the output side is much coarser than the
        input side, many inputs floor to the same output (see below).
        """
        pair = make_pair(TOKEN_0, reserve_in, TOKEN_1, reserve_out)
        output, _ = pair.get_output_amount(amount(TOKEN_0, amount_in))
        required, _ = pair.get_input_amount(output)
        assert required.raw >= amount_in

    @pytest.mark.parametrize(
        "reserve_in,reserve_out,amount_out",
        [
            (1000, 1000, 90),
            (1000, 1100, 1),
            (10**18, 5 * 10**17, 6157),
            (10**24, 10**12, 99_740_050),
            (3, 10**30, 10**29),
            (10**30, 7, 6),
        ],
    )
    def test_required_input_delivers_output(self, reserve_in, reserve_out, amount_out):
        """Swapping the quoted input always yields at least the requested output."""
        pair = make_pair(TOKEN_0, reserve_in, TOKEN_1, reserve_out)
        required, _ = pair.get_input_amount(amount(TOKEN_1, amount_out))
        delivered, _ = pair.get_output_amount(required)
        assert delivered.raw >= amount_out

    def test_lopsided_reserves_buy_back_cheaper(self):
        """With a coarse output side the minimal input can undercut the original."""
        pair = make_pair(TOKEN_0, 10**24, TOKEN_1, 10**12)
        output, _ = pair.get_output_amount(amount(TOKEN_0, 10**20))
        required, _ = pair.get_input_amount(output)
        assert output.raw == 99_740_050
        assert required.raw < 10**20
        delivered, _ = pair.get_output_amount(required)
        assert delivered == output


class TestLiquidity:
    """Tests for LP token minting and redemption."""

    def test_first_mint_below_minimum_raises(self):
        pair = make_pair(TOKEN_0, 0, TOKEN_1, 0)
        supply = TokenAmount(pair.liquidity_token, 0)
        with pytest.raises(InsufficientInputAmountError):
            pair.get_liquidity_minted(supply, amount(TOKEN_0, 1000), amount(TOKEN_1, 1000))

    def test_first_mint_locks_minimum(self):
        pair = make_pair(TOKEN_0, 0, TOKEN_1, 0)
        supply = TokenAmount(pair.liquidity_token, 0)
        minted = pair.get_liquidity_minted(supply, amount(TOKEN_0, 1_000_000), amount(TOKEN_1, 1_000_000))
        assert minted.raw == 999_000
        minted = pair.get_liquidity_minted(supply, amount(TOKEN_0, 1001), amount(TOKEN_1, 1001))
        assert minted.raw == 1

    def test_mint_proportional(self):
        pair = make_pair(TOKEN_0, 10_000, TOKEN_1, 10_000)
        supply = TokenAmount(pair.liquidity_token, 10_000)
        minted = pair.get_liquidity_minted(supply, amount(TOKEN_1, 2000), amount(TOKEN_0, 2000))
        assert minted == TokenAmount(pair.liquidity_token, 2000)

    def test_mint_takes_smaller_side(self):
        pair = make_pair(TOKEN_0, 10_000, TOKEN_1, 10_000)
        supply = TokenAmount(pair.liquidity_token, 10_000)
        minted = pair.get_liquidity_minted(supply, amount(TOKEN_0, 2000), amount(TOKEN_1, 500))
        assert minted.raw == 500

    def test_mint_wrong_supply_token_raises(self, pair_0_1):
        with pytest.raises(InvariantError):
            pair_0_1.get_liquidity_minted(amount(TOKEN_0, 1), amount(TOKEN_0, 1), amount(TOKEN_1, 1))

    def test_value_without_fee(self):
        pair = make_pair(TOKEN_0, 1000, TOKEN_1, 1000)
        lp = pair.liquidity_token
        value = pair.get_liquidity_value(TOKEN_0, TokenAmount(lp, 1000), TokenAmount(lp, 1000))
        assert value == amount(TOKEN_0, 1000)
        value = pair.get_liquidity_value(TOKEN_0, TokenAmount(lp, 1000), TokenAmount(lp, 500))
        assert value.raw == 500

    def test_value_with_protocol_fee(self):
        """The pending protocol fee dilutes the supply before redemption."""
        pair = make_pair(TOKEN_0, 1000, TOKEN_1, 1000)
        lp = pair.liquidity_token
        value = pair.get_liquidity_value(
            TOKEN_0, TokenAmount(lp, 500), TokenAmount(lp, 500), fee_on=True, k_last=500 * 500
        )
        assert value.raw == 917

    def test_value_fee_on_requires_k_last(self, pair_0_1):
        lp = pair_0_1.liquidity_token
        with pytest.raises(InvariantError):
            pair_0_1.get_liquidity_value(TOKEN_0, TokenAmount(lp, 500), TokenAmount(lp, 500), fee_on=True)

    def test_value_exceeding_supply_raises(self, pair_0_1):
        lp = pair_0_1.liquidity_token
        with pytest.raises(InvariantError):
            pair_0_1.get_liquidity_value(TOKEN_0, TokenAmount(lp, 500), TokenAmount(lp, 501))

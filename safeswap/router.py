"""Call parameters for the SafeSwap router contract.

Maps a Trade plus caller options to the router method name, its hex-encoded
arguments and the native value to attach. The router exposes six methods,
one per combination of trade type and native asset position:

                 | native in                          | native out                          | token to token
    EXACT_INPUT  | swapExactETHForTokensWithFeeAmount | swapExactTokensForETHAndTipAmount   | swapExactTokensForTokensWithFeeAmount
    EXACT_OUTPUT | swapETHForExactTokensWithFeeAmount | swapTokensForExactETHAndFeeAmount   | swapTokensForExactTokensWithFeeAmount

The mix of "Fee" and "Tip" in the names is how the contract spells them.
Both refer to the same native-asset tip, exposed here as TradeOptions.tip.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from enum import Enum

import structlog
from pydantic import BaseModel, Field

from safeswap.constants import TradeType
from safeswap.errors import InvalidAddressError, PolicyViolation, RouterPolicyError
from safeswap.models.amounts import CurrencyAmount, Percent
from safeswap.models.currency import ETHER
from safeswap.models.types import Address, HexQuantity, validate_and_parse_address
from safeswap.routing.trade import Trade

logger = structlog.get_logger()


@dataclass(frozen=True)
class TradeOptions:
    """Options for building router call parameters.

    Attributes:
        allowed_slippage: How far the price may move against the trader
        ttl: Seconds from now until the swap expires (must be positive)
        recipient: Account receiving the output
        tip: Native-asset amount paid to the relayer (default: none)
    """

    allowed_slippage: Percent
    ttl: int
    recipient: str
    tip: CurrencyAmount | None = None


class SafeSwapTrade(BaseModel):
    """Trade record passed as the first router argument."""

    amount_in: HexQuantity = Field(alias="amountIn")
    amount_out: HexQuantity = Field(alias="amountOut")
    path: list[Address]
    to: Address
    deadline: HexQuantity

    model_config = {"populate_by_name": True, "frozen": True}


class SwapParameters(BaseModel):
    """Method name, arguments and value for the router call.

    model_dump(by_alias=True) gives the wire shape
    {"methodName": ..., "args": [...], "value": "0x..."}.
    """

    method_name: str = Field(alias="methodName")
    args: list[SafeSwapTrade | HexQuantity | list[Address]]
    value: HexQuantity

    model_config = {"populate_by_name": True, "frozen": True}


class _NativePosition(Enum):
    NATIVE_IN = "native_in"
    NATIVE_OUT = "native_out"
    TOKENS = "tokens"


_METHOD_NAMES: dict[tuple[TradeType, _NativePosition], str] = {
    (TradeType.EXACT_INPUT, _NativePosition.NATIVE_IN): "swapExactETHForTokensWithFeeAmount",
    (TradeType.EXACT_INPUT, _NativePosition.NATIVE_OUT): "swapExactTokensForETHAndTipAmount",
    (TradeType.EXACT_INPUT, _NativePosition.TOKENS): "swapExactTokensForTokensWithFeeAmount",
    (TradeType.EXACT_OUTPUT, _NativePosition.NATIVE_IN): "swapETHForExactTokensWithFeeAmount",
    (TradeType.EXACT_OUTPUT, _NativePosition.NATIVE_OUT): "swapTokensForExactETHAndFeeAmount",
    (TradeType.EXACT_OUTPUT, _NativePosition.TOKENS): "swapTokensForExactTokensWithFeeAmount",
}


def to_hex(value: CurrencyAmount | int) -> str:
    """Minimal-width lowercase hex with a 0x prefix ("0x0" for zero)."""
    raw = value.raw if isinstance(value, CurrencyAmount) else value
    if raw < 0:
        raise ValueError(f"Cannot hex-encode negative value: {raw}")
    return f"0x{raw:x}"


def swap_call_parameters(
    trade: Trade,
    options: TradeOptions,
    *,
    current_time: int | None = None,
) -> SwapParameters:
    """Produce the router method name, arguments and value for a trade.

    Args:
        trade: The trade to execute
        options: Slippage, ttl, recipient and tip
        current_time: Unix time in seconds used for the deadline (default: now)

    Returns:
        SwapParameters for the transaction sender

    Raises:
        RouterPolicyError: If the options or trade are not acceptable to the
            router; raised before any amount is computed
    """
    ether_in = trade.input_amount.currency is ETHER
    ether_out = trade.output_amount.currency is ETHER
    # the router does not support both ether in and out
    if ether_in and ether_out:
        raise RouterPolicyError(PolicyViolation.ETHER_IN_OUT, "Cannot swap native for native")
    if options.ttl <= 0:
        raise RouterPolicyError(PolicyViolation.TTL, f"ttl must be positive, got {options.ttl}")
    try:
        to = validate_and_parse_address(options.recipient)
    except InvalidAddressError as err:
        raise RouterPolicyError(PolicyViolation.RECIPIENT, str(err)) from err
    tip = options.tip if options.tip is not None else CurrencyAmount.ether(0)
    if tip.currency is not ETHER:
        raise RouterPolicyError(
            PolicyViolation.TIP_CURRENCY, f"Tip must be in the native asset, got {tip.currency!r}"
        )

    amount_in = trade.maximum_amount_in(options.allowed_slippage)
    amount_out = trade.minimum_amount_out(options.allowed_slippage)
    now = int(time.time()) if current_time is None else current_time

    safe_swap_trade = SafeSwapTrade(
        amount_in=to_hex(amount_in),
        amount_out=to_hex(amount_out),
        path=[token.address for token in trade.route.path],
        to=to,
        deadline=to_hex(now + options.ttl),
    )
    tip_hex = to_hex(tip)

    if ether_in:
        position = _NativePosition.NATIVE_IN
        args: list[SafeSwapTrade | str | list[str]] = [safe_swap_trade, tip_hex]
        value = to_hex(amount_in.raw + tip.raw)
    else:
        position = _NativePosition.NATIVE_OUT if ether_out else _NativePosition.TOKENS
        args = [safe_swap_trade]
        value = tip_hex

    method_name = _METHOD_NAMES[(trade.trade_type, position)]
    logger.info(
        "swap_call_parameters",
        method=method_name,
        hops=trade.hops,
        amount_in=amount_in.raw,
        amount_out=amount_out.raw,
        deadline=now + options.ttl,
    )
    return SwapParameters(method_name=method_name, args=args, value=value)


__all__ = [
    "TradeOptions",
    "SafeSwapTrade",
    "SwapParameters",
    "swap_call_parameters",
    "to_hex",
]

"""Shared type definitions and the address validator.

Address checksumming is delegated to eth-utils; this module only adapts it
to the errors and normalized forms the rest of the package expects.
"""

from typing import Annotated

from eth_utils import (
    is_checksum_address,
    is_checksum_formatted_address,
    is_hex_address,
    to_checksum_address,
)
from pydantic import Field

from safeswap.errors import InvalidAddressError

# Ethereum address (40 hex chars after 0x prefix)
Address = Annotated[str, Field(pattern=r"^0x[a-fA-F0-9]{40}$")]

# Minimal-width lowercase hex quantity, e.g. "0x0", "0x1b4"
HexQuantity = Annotated[str, Field(pattern=r"^0x(0|[1-9a-f][0-9a-f]*)$")]


def is_valid_address(address: str) -> bool:
    """Check if a string has the shape of an Ethereum address (any case)."""
    if not isinstance(address, str):
        return False
    if not address.startswith("0x"):
        return False
    if len(address) != 42:
        return False
    try:
        int(address, 16)
        return True
    except ValueError:
        return False


def validate_and_parse_address(address: str) -> str:
    """Validate an address and return its EIP-55 checksummed form.

    Lowercase and uppercase inputs are accepted; mixed-case inputs must carry
    a valid checksum.

    Raises:
        InvalidAddressError: If the address is malformed or mis-checksummed
    """
    if not isinstance(address, str) or not address.startswith("0x") or not is_hex_address(address):
        raise InvalidAddressError(f"{address} is not a valid address.")
    if is_checksum_formatted_address(address) and not is_checksum_address(address):
        raise InvalidAddressError(f"{address} has an invalid checksum.")
    return to_checksum_address(address)


__all__ = [
    "Address",
    "HexQuantity",
    "is_valid_address",
    "validate_and_parse_address",
]

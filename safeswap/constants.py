"""Protocol constants for the SafeSwap constant-product AMM.

Centralizes per-network contract tables and the fixed parameters of the
pair math. Addresses are validated at import time to catch typos early.
"""

from enum import Enum, IntEnum

from safeswap.models.types import is_valid_address


class ChainId(IntEnum):
    """Networks the SafeSwap contracts are deployed to."""

    MAINNET = 1
    ROPSTEN = 3
    RINKEBY = 4
    GOERLI = 5
    KOVAN = 42
    BSC_MAINNET = 56
    BSC_TESTNET = 97


class TradeType(Enum):
    """Which side of a trade is fixed by the caller."""

    EXACT_INPUT = "exact_input"
    EXACT_OUTPUT = "exact_output"


class Rounding(Enum):
    """Rounding modes for converting fractions to integers."""

    ROUND_DOWN = "round_down"  # toward zero
    ROUND_HALF_UP = "round_half_up"  # half away from zero
    ROUND_UP = "round_up"  # away from zero unless exact


class SolidityType(Enum):
    UINT8 = "uint8"
    UINT256 = "uint256"


SOLIDITY_TYPE_MAXIMA = {
    SolidityType.UINT8: 2**8 - 1,
    SolidityType.UINT256: 2**256 - 1,
}


def _validate_contract_address(name: str, address: str) -> str:
    """Validate a table entry; empty string means "not deployed".

    Raises:
        ValueError: If the address is set but invalid
    """
    if address and not is_valid_address(address):
        raise ValueError(f"Invalid {name} address: {address} (must be 0x + 40 hex chars)")
    return address


def _validate_hash(name: str, value: str) -> str:
    if value and (len(value) != 66 or not value.startswith("0x")):
        raise ValueError(f"Invalid {name}: {value} (must be 0x + 64 hex chars)")
    if value:
        int(value, 16)
    return value


# Pair factory per network; empty where the protocol is not deployed
FACTORY_ADDRESS: dict[ChainId, str] = {
    chain_id: _validate_contract_address(f"factory[{chain_id.name}]", address)
    for chain_id, address in {
        ChainId.MAINNET: "0x26023843814cFF92B8d75311d64D1C032b8b29f2",
        ChainId.ROPSTEN: "0xDfD8bbA37423950bD8050C65E698610C57E55cea",
        ChainId.RINKEBY: "",
        ChainId.GOERLI: "",
        ChainId.KOVAN: "",
        ChainId.BSC_MAINNET: "0x86A859773cf6df9C8117F20b0B950adA84e7644d",
        ChainId.BSC_TESTNET: "0x0eef57EAE29DA890be9211c010F3e31d950fbE67",
    }.items()
}

# keccak256 of the pair contract creation code, used for CREATE2 addresses
INIT_CODE_HASH: dict[ChainId, str] = {
    chain_id: _validate_hash(f"init code hash[{chain_id.name}]", value)
    for chain_id, value in {
        ChainId.MAINNET: "0x7fc48862bb659c6079c67f949053514afd141b7fcc1dc2b0a9474d647c51d670",
        ChainId.ROPSTEN: "0x8b4ce8ec78a7c1be0d482d641f59b942070725a4b7782595db30956c6d46e824",
        ChainId.RINKEBY: "",
        ChainId.GOERLI: "",
        ChainId.KOVAN: "",
        ChainId.BSC_MAINNET: "0x7fc48862bb659c6079c67f949053514afd141b7fcc1dc2b0a9474d647c51d670",
        ChainId.BSC_TESTNET: "0x058100cd6ec5f46d7d7d1e7084082fa4735355e21527487ff6a88c908174e2be",
    }.items()
}

# Wrapped native asset per network (lowercase for consistency)
WETH_ADDRESS: dict[ChainId, str] = {
    chain_id: _validate_contract_address(f"WETH[{chain_id.name}]", address)
    for chain_id, address in {
        ChainId.MAINNET: "0xc02aaa39b223fe8d0a0e5c4f27ead9083c756cc2",
        ChainId.ROPSTEN: "0xc778417e063141139fce010982780140aa0cd5ab",
        ChainId.RINKEBY: "0xc778417e063141139fce010982780140aa0cd5ab",
        ChainId.GOERLI: "0xb4fbf271143f4fbf7b91a5ded31805e42b2208d6",
        ChainId.KOVAN: "0xd0a1e359811322d97991e03f863a0c30c2cf029c",
        ChainId.BSC_MAINNET: "0xbb4cdb9cbd36b01bd1cbaebf2de08d9173bc095c",
        ChainId.BSC_TESTNET: "0xae13d989dac2f0debff460ac112a837c89baa7cd",
    }.items()
}

# Liquidity permanently locked by the first mint of every pair
MINIMUM_LIQUIDITY = 1000

# 0.25% swap fee: amounts are scaled by 9975/10000 on the input side
FEE_NUMERATOR = 9975
FEE_DENOMINATOR = 10000

# rootK multiplier in the protocol fee mint: supply * dRootK / (rootK * 5 + rootKLast)
PROTOCOL_FEE_DENOMINATOR_MULTIPLIER = 5

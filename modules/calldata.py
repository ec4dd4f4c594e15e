"""
Raw calldata for Dextr contracts that have no published ABI.

The selectors below were taken from successful transactions on Base Sepolia,
not derived from the function signatures, so they are kept as literals. Each
member records the argument tuple the contract expects after the selector.
"""

from enum import Enum

from eth_abi import encode
from web3 import Web3


class Selector(Enum):
    # deposit(address sender, uint256 amount) on a token vault
    VAULT_DEPOSIT = ("0x609e7624", ("address", "uint256"))

    # stakeDeposit(address staker, uint256 amount, address tokenVault)
    STAKE_DEPOSIT = ("0x6e129ca1", ("address", "uint256", "address"))

    # unstake(uint256 amount)
    UNSTAKE = ("0x2e17de78", ("uint256",))

    # buyMarket(uint256 baseAmount) on a trading pair
    BUY_MARKET = ("0xbc03f0e1", ("uint256",))

    # sellMarket(uint256 baseAmount) on a trading pair
    SELL_MARKET = ("0x51d5d0da", ("uint256",))

    # enableFreeLiquidity(
    #     (address token, uint256 amount, uint256 minAmount1, uint256 minAmount2) efl,
    #     address[] permitTokens,
    #     uint256[] minPermitPrices,
    #     uint256[] maxPermitPrices
    # )
    ENABLE_FREE_LIQUIDITY = (
        "0x04898597",
        (
            "(address,uint256,uint256,uint256)",
            "address[]",
            "uint256[]",
            "uint256[]",
        ),
    )

    def __init__(self, selector, arg_types):
        self.selector = selector
        self.arg_types = arg_types

    @property
    def prefix(self) -> bytes:
        return bytes.fromhex(self.selector[2:])

    @classmethod
    def from_hex(cls, value: str) -> "Selector":
        value = value.lower()
        if not value.startswith("0x"):
            value = f"0x{value}"

        for member in cls:
            if member.selector == value:
                return member

        raise ValueError(f"Unknown selector {value}")


def encode_call(selector: Selector, *args) -> bytes:
    if len(args) != len(selector.arg_types):
        raise ValueError(
            f"{selector.name} takes {len(selector.arg_types)} argument(s), got {len(args)}"
        )

    return selector.prefix + encode(list(selector.arg_types), list(args))


def to_hex(data: bytes) -> str:
    return Web3.to_hex(data)

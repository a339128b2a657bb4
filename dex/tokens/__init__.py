"""Token contracts: the collaborator protocol and in-memory implementations."""

from dex.tokens.base import FungibleToken
from dex.tokens.erc20 import CloudToken, ERC20Token, MockToken, ThunderToken
from dex.tokens.liquidity import LiquidityToken

__all__ = [
    "FungibleToken",
    "ERC20Token",
    "MockToken",
    "ThunderToken",
    "CloudToken",
    "LiquidityToken",
]

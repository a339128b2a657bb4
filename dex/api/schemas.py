"""Pydantic request/response models for the exchange API.

Amounts travel as decimal strings (uint256 does not fit a JSON number).
``sender`` plays the role of the calling account; the API is a local
simulator and does not authenticate it.
"""

from pydantic import BaseModel, Field

from dex.types import Address, Uint256


class TokenInfo(BaseModel):
    address: Address
    name: str
    symbol: str
    decimals: int
    total_supply: Uint256


class BalanceResponse(BaseModel):
    token: Address
    owner: Address
    balance: Uint256


class MintRequest(BaseModel):
    """Faucet mint on a mock token, credited to ``sender``."""

    sender: Address
    amount: Uint256


class ApproveRequest(BaseModel):
    sender: Address
    spender: Address = Field(description="Registry or pool allowed to pull the tokens")
    amount: Uint256


class CreatePairRequest(BaseModel):
    sender: Address
    token_one: Address
    token_two: Address
    amount_one: Uint256
    amount_two: Uint256


class PoolInfo(BaseModel):
    address: Address
    token_one: Address
    token_two: Address
    liquidity_token: Address
    pool_creator: Address
    reserve_one: Uint256
    reserve_two: Uint256
    total_shares: Uint256


class QuoteResponse(BaseModel):
    pool: Address
    token_in: Address
    token_out: Address
    amount_in: Uint256
    amount_out: Uint256


class AddLiquidityRequest(BaseModel):
    sender: Address
    amount_one: Uint256
    amount_two: Uint256


class RemoveLiquidityRequest(BaseModel):
    sender: Address


class LiquidityResponse(BaseModel):
    """Amounts actually moved; ``minted`` is set for deposits only."""

    pool: Address
    provider: Address
    amount_one: Uint256
    amount_two: Uint256
    minted: Uint256 | None = None


class SwapRequest(BaseModel):
    sender: Address
    token_in: Address
    amount_in: Uint256


class SwapResponse(BaseModel):
    pool: Address
    trader: Address
    token_in: Address
    token_out: Address
    amount_in: Uint256
    amount_out: Uint256


class ErrorResponse(BaseModel):
    reason: str
    detail: str

"""API endpoints for the exchange.

Handlers are ``async def`` with synchronous bodies, so they run one at a time
on the event loop and every ledger call keeps its single sequential order.
"""

import structlog
from fastapi import APIRouter, Depends, HTTPException, Query

from dex.api.exchange import Exchange, get_default_exchange
from dex.api.schemas import (
    AddLiquidityRequest,
    ApproveRequest,
    BalanceResponse,
    CreatePairRequest,
    LiquidityResponse,
    MintRequest,
    PoolInfo,
    QuoteResponse,
    RemoveLiquidityRequest,
    SwapRequest,
    SwapResponse,
    TokenInfo,
)
from dex.pool import Pool
from dex.tokens.erc20 import ERC20Token, MockToken
from dex.tokens.liquidity import LiquidityToken
from dex.types import normalize_address, short

logger = structlog.get_logger()

router = APIRouter()


def get_exchange() -> Exchange:
    """Dependency provider for the exchange.

    Override this in tests to inject a fresh exchange:
        app.dependency_overrides[get_exchange] = lambda: exchange
    """
    return get_default_exchange()


def _token_info(token: ERC20Token) -> TokenInfo:
    return TokenInfo(
        address=token.address,
        name=token.name,
        symbol=token.symbol,
        decimals=token.decimals,
        total_supply=token.total_supply(),
    )


def _pool_info(pool: Pool) -> PoolInfo:
    return PoolInfo(
        address=pool.address,
        token_one=pool.get_token_one_address(),
        token_two=pool.get_token_two_address(),
        liquidity_token=pool.get_liquidity_token_address(),
        pool_creator=pool.get_pool_creator(),
        reserve_one=pool.reserve_one,
        reserve_two=pool.reserve_two,
        total_shares=pool.liquidity_token.total_supply(),
    )


def _swap_sides(pool: Pool, token_in: str) -> tuple[str, str]:
    """(token_in, token_out) addresses, validating token_in belongs to the pool."""
    token_in = normalize_address(token_in)
    one, two = pool.get_token_one_address(), pool.get_token_two_address()
    if token_in == one:
        return one, two
    if token_in == two:
        return two, one
    raise HTTPException(status_code=400, detail=f"Token {token_in} not in pool {pool.address}")


# --- Tokens ---


@router.get("/tokens")
async def list_tokens(exchange: Exchange = Depends(get_exchange)) -> list[TokenInfo]:
    """Tokens deployed on the ledger, liquidity tokens excluded."""
    return [
        _token_info(token)
        for token in exchange.ledger.contracts(ERC20Token)
        if not isinstance(token, LiquidityToken)
    ]


@router.post("/tokens/{address}/mint")
async def mint(
    address: str,
    request: MintRequest,
    exchange: Exchange = Depends(get_exchange),
) -> BalanceResponse:
    token = exchange.ledger.get_contract(address, MockToken)
    token.mint(int(request.amount), sender=request.sender)
    return BalanceResponse(
        token=token.address, owner=request.sender, balance=token.balance_of(request.sender)
    )


@router.post("/tokens/{address}/approve")
async def approve(
    address: str,
    request: ApproveRequest,
    exchange: Exchange = Depends(get_exchange),
) -> dict[str, str]:
    token = exchange.ledger.get_contract(address, ERC20Token)
    token.approve(request.spender, int(request.amount), sender=request.sender)
    return {
        "token": token.address,
        "owner": normalize_address(request.sender),
        "spender": normalize_address(request.spender),
        "allowance": str(token.allowance(request.sender, request.spender)),
    }


@router.get("/tokens/{address}/balances/{owner}")
async def balance(
    address: str,
    owner: str,
    exchange: Exchange = Depends(get_exchange),
) -> BalanceResponse:
    token = exchange.ledger.get_contract(address, ERC20Token)
    return BalanceResponse(token=token.address, owner=normalize_address(owner), balance=token.balance_of(owner))


# --- Pairs ---


@router.post("/pairs", status_code=201)
async def create_pair(
    request: CreatePairRequest,
    exchange: Exchange = Depends(get_exchange),
) -> PoolInfo:
    logger.info(
        "received_create_pair",
        token_one=short(request.token_one),
        token_two=short(request.token_two),
        sender=short(request.sender),
    )
    pool = exchange.dex.create_new_pair(
        request.token_one,
        request.token_two,
        int(request.amount_one),
        int(request.amount_two),
        sender=request.sender,
    )
    return _pool_info(pool)


@router.get("/pairs")
async def list_pairs(exchange: Exchange = Depends(get_exchange)) -> list[PoolInfo]:
    return [_pool_info(pool) for pool in exchange.dex.all_pools()]


@router.get("/pairs/{token_a}/{token_b}")
async def get_pair(
    token_a: str,
    token_b: str,
    exchange: Exchange = Depends(get_exchange),
) -> PoolInfo:
    pool = exchange.dex.get_pool(token_a, token_b)
    if pool is None:
        raise HTTPException(status_code=404, detail=f"No pool for {token_a}/{token_b}")
    return _pool_info(pool)


# --- Pools ---


@router.get("/pools/{address}")
async def get_pool(address: str, exchange: Exchange = Depends(get_exchange)) -> PoolInfo:
    return _pool_info(exchange.ledger.get_contract(address, Pool))


@router.get("/pools/{address}/quote")
async def quote(
    address: str,
    token_in: str,
    amount_in: int = Query(ge=0),
    exchange: Exchange = Depends(get_exchange),
) -> QuoteResponse:
    """Swap output for ``amount_in`` of ``token_in``, without executing."""
    pool = exchange.ledger.get_contract(address, Pool)
    token_in, token_out = _swap_sides(pool, token_in)
    if token_in == pool.get_token_one_address():
        amount_out = pool.get_token_two_quantity(amount_in)
    else:
        amount_out = pool.get_token_one_quantity(amount_in)
    return QuoteResponse(
        pool=pool.address,
        token_in=token_in,
        token_out=token_out,
        amount_in=amount_in,
        amount_out=amount_out,
    )


@router.post("/pools/{address}/liquidity")
async def add_liquidity(
    address: str,
    request: AddLiquidityRequest,
    exchange: Exchange = Depends(get_exchange),
) -> LiquidityResponse:
    pool = exchange.ledger.get_contract(address, Pool)
    reserve_one, reserve_two = pool.get_reserves()
    minted = pool.add_liquidity(int(request.amount_one), int(request.amount_two), sender=request.sender)
    return LiquidityResponse(
        pool=pool.address,
        provider=normalize_address(request.sender),
        amount_one=pool.reserve_one - reserve_one,
        amount_two=pool.reserve_two - reserve_two,
        minted=minted,
    )


@router.post("/pools/{address}/liquidity/remove")
async def remove_liquidity(
    address: str,
    request: RemoveLiquidityRequest,
    exchange: Exchange = Depends(get_exchange),
) -> LiquidityResponse:
    pool = exchange.ledger.get_contract(address, Pool)
    amount_one, amount_two = pool.remove_liquidity(sender=request.sender)
    return LiquidityResponse(
        pool=pool.address,
        provider=normalize_address(request.sender),
        amount_one=amount_one,
        amount_two=amount_two,
    )


@router.post("/pools/{address}/swap")
async def swap(
    address: str,
    request: SwapRequest,
    exchange: Exchange = Depends(get_exchange),
) -> SwapResponse:
    pool = exchange.ledger.get_contract(address, Pool)
    token_in, token_out = _swap_sides(pool, request.token_in)
    if token_in == pool.get_token_one_address():
        amount_out = pool.swap_token_one_for_two(int(request.amount_in), sender=request.sender)
    else:
        amount_out = pool.swap_token_two_for_one(int(request.amount_in), sender=request.sender)
    return SwapResponse(
        pool=pool.address,
        trader=normalize_address(request.sender),
        token_in=token_in,
        token_out=token_out,
        amount_in=request.amount_in,
        amount_out=amount_out,
    )

"""Constant-product liquidity pool.

A pool holds reserves of two tokens and prices swaps with x * y = k, taking
a fee from the output side:

    raw_out    = reserve_out - (reserve_in * reserve_out) // (reserve_in + amount_in)
    fee        = raw_out * fee_percentage // 100
    amount_out = raw_out - fee

Ownership of the reserves is tracked by the pool's own LiquidityToken.
Deposits are trimmed to the current reserve ratio, and shares are minted as

    minted = adj_one * total_supply // (reserve_one + adj_one)

i.e. against the post-deposit reserve of token one.

All arithmetic is truncating uint256 math. Every mutating operation runs in a
ledger transaction, is guarded against re-entry, and updates reserves and
share supply before calling out to the token contracts.
"""

from __future__ import annotations

from typing import ClassVar

import structlog

from dex.config import DEFAULT_POOL_CONFIG, PoolConfig
from dex.errors import (
    EmptyPool,
    InsufficientLiquidity,
    MustSendSomeTokens,
    NoLiquidityAvailable,
    NotFactory,
    PoolAlreadyInitialized,
)
from dex.events import LiquidityAdded, LiquidityRemoved, Swap
from dex.ledger import Contract, Ledger, atomic, nonreentrant
from dex.safe_int import S
from dex.tokens.base import FungibleToken
from dex.tokens.liquidity import LiquidityToken
from dex.types import normalize_address, short

logger = structlog.get_logger()


def require_positive(*amounts: int) -> None:
    for amount in amounts:
        if amount <= 0:
            raise MustSendSomeTokens(f"Amounts must be positive, got {amounts}")


class Pool(Contract):
    """Liquidity pool for one token pair."""

    STATE_FIELDS: ClassVar[tuple[str, ...]] = ("reserve_one", "reserve_two", "_initialized")

    def __init__(
        self,
        ledger: Ledger,
        address: str,
        token_one: FungibleToken,
        token_two: FungibleToken,
        pool_creator: str,
        factory: str,
        config: PoolConfig = DEFAULT_POOL_CONFIG,
    ) -> None:
        super().__init__(ledger, address)
        self.token_one = token_one
        self.token_two = token_two
        self.pool_creator = normalize_address(pool_creator)
        self.factory = normalize_address(factory)
        self.config = config
        self.reserve_one = 0
        self.reserve_two = 0
        self._initialized = False
        self._entered = False
        self.liquidity_token = LiquidityToken.deploy(ledger, deployer=address, owner=address)

    # --- Queries ---

    def get_pool_creator(self) -> str:
        return self.pool_creator

    def get_token_one_address(self) -> str:
        return self.token_one.address

    def get_token_two_address(self) -> str:
        return self.token_two.address

    def get_liquidity_token_address(self) -> str:
        return self.liquidity_token.address

    def get_reserves(self) -> tuple[int, int]:
        return self.reserve_one, self.reserve_two

    @property
    def is_funded(self) -> bool:
        return self.reserve_one > 0 and self.reserve_two > 0

    def check_liquidity_proportion(self, amount_one: int, amount_two: int) -> tuple[int, int]:
        """Largest amounts not exceeding the request that match the reserve ratio.

        Args:
            amount_one: Offered amount of token one
            amount_two: Offered amount of token two

        Returns:
            (adj_one, adj_two) with adj_one:adj_two == reserve_one:reserve_two
            up to truncation

        Raises:
            EmptyPool: If the pool has no reserves to take a ratio from
        """
        if not self.is_funded:
            raise EmptyPool(f"Pool {short(self.address)} has no reserves")

        optimal_two = (S(amount_one) * S(self.reserve_two) // S(self.reserve_one)).value
        if optimal_two <= amount_two:
            return amount_one, optimal_two

        optimal_one = (S(amount_two) * S(self.reserve_one) // S(self.reserve_two)).value
        return optimal_one, amount_two

    def get_amount_out(self, amount_in: int, reserve_in: int, reserve_out: int) -> int:
        """Constant-product output with the fee taken from the output side.

        Returns 0 for a non-positive input or an empty side.
        """
        if amount_in <= 0 or reserve_in <= 0 or reserve_out <= 0:
            return 0

        product = S(reserve_in) * S(reserve_out)
        raw_out = S(reserve_out) - product // (S(reserve_in) + S(amount_in))
        fee = raw_out * S(self.config.fee_percentage) // S(self.config.fee_denominator)
        return (raw_out - fee).value

    def get_token_two_quantity(self, amount_in: int) -> int:
        """Quote token two received for ``amount_in`` of token one."""
        return self.get_amount_out(amount_in, self.reserve_one, self.reserve_two)

    def get_token_one_quantity(self, amount_in: int) -> int:
        """Quote token one received for ``amount_in`` of token two."""
        return self.get_amount_out(amount_in, self.reserve_two, self.reserve_one)

    # --- Liquidity ---

    @atomic
    @nonreentrant
    def initialize(self, amount_one: int, amount_two: int, provider: str, *, sender: str) -> int:
        """Record the creation deposit the registry moved into the pool.

        Mints ``amount_one`` liquidity tokens to ``provider``.

        Raises:
            NotFactory: If called by anyone but the deploying registry
            PoolAlreadyInitialized: If the creation deposit was already made
        """
        if normalize_address(sender) != self.factory:
            raise NotFactory(f"{short(sender)} cannot seed pool {short(self.address)}")
        if self._initialized:
            raise PoolAlreadyInitialized(f"Pool {short(self.address)} is already seeded")
        require_positive(amount_one, amount_two)

        self._initialized = True
        self.reserve_one = amount_one
        self.reserve_two = amount_two
        minted = amount_one
        self.liquidity_token.mint(provider, minted, sender=self.address)

        logger.info(
            "pool_seeded",
            pool=short(self.address),
            provider=short(provider),
            reserve_one=amount_one,
            reserve_two=amount_two,
            minted=minted,
        )
        return minted

    @atomic
    @nonreentrant
    def add_liquidity(self, amount_one: int, amount_two: int, *, sender: str) -> int:
        """Deposit both tokens at the current ratio and mint liquidity tokens.

        The caller must have approved the pool for at least the adjusted
        amounts. An emptied pool accepts the amounts as given and sets a new
        ratio, minting ``amount_one`` shares as at creation.

        Returns:
            Number of liquidity tokens minted to the caller

        Raises:
            MustSendSomeTokens: If either amount is zero or negative
        """
        require_positive(amount_one, amount_two)
        provider = normalize_address(sender)

        if self.is_funded:
            adj_one, adj_two = self.check_liquidity_proportion(amount_one, amount_two)
            total_supply = self.liquidity_token.total_supply()
            minted = (S(adj_one) * S(total_supply) // (S(self.reserve_one) + S(adj_one))).value
        else:
            adj_one, adj_two = amount_one, amount_two
            minted = amount_one

        self.reserve_one = (S(self.reserve_one) + S(adj_one)).value
        self.reserve_two = (S(self.reserve_two) + S(adj_two)).value
        self.liquidity_token.mint(provider, minted, sender=self.address)

        self.token_one.transfer_from(provider, self.address, adj_one, sender=self.address)
        self.token_two.transfer_from(provider, self.address, adj_two, sender=self.address)

        self.emit(
            LiquidityAdded,
            provider=provider,
            amount_one=adj_one,
            amount_two=adj_two,
            minted=minted,
        )
        logger.info(
            "liquidity_added",
            pool=short(self.address),
            provider=short(provider),
            amount_one=adj_one,
            amount_two=adj_two,
            minted=minted,
        )
        return minted

    @atomic
    @nonreentrant
    def remove_liquidity(self, *, sender: str) -> tuple[int, int]:
        """Burn the caller's whole share balance and pay out its reserves.

        Returns:
            (amount_one, amount_two) sent to the caller

        Raises:
            NoLiquidityAvailable: If the caller holds no liquidity tokens
        """
        provider = normalize_address(sender)
        shares = self.liquidity_token.balance_of(provider)
        if shares == 0:
            raise NoLiquidityAvailable(f"{short(provider)} has no liquidity in {short(self.address)}")

        total_supply = self.liquidity_token.total_supply()
        amount_one = (S(shares) * S(self.reserve_one) // S(total_supply)).value
        amount_two = (S(shares) * S(self.reserve_two) // S(total_supply)).value

        self.liquidity_token.burn(provider, shares, sender=self.address)
        self.reserve_one = (S(self.reserve_one) - S(amount_one)).value
        self.reserve_two = (S(self.reserve_two) - S(amount_two)).value

        self.token_one.transfer(provider, amount_one, sender=self.address)
        self.token_two.transfer(provider, amount_two, sender=self.address)

        self.emit(LiquidityRemoved, provider=provider, amount_one=amount_one, amount_two=amount_two)
        logger.info(
            "liquidity_removed",
            pool=short(self.address),
            provider=short(provider),
            burned=shares,
            amount_one=amount_one,
            amount_two=amount_two,
            drained=not self.is_funded,
        )
        return amount_one, amount_two

    # --- Swaps ---

    @atomic
    @nonreentrant
    def swap_token_one_for_two(self, amount_in: int, *, sender: str) -> int:
        """Sell ``amount_in`` of token one for token two.

        Raises:
            MustSendSomeTokens: If amount_in is zero or negative
            EmptyPool: If the pool has no reserves
            InsufficientLiquidity: If the output would drain token two
        """
        return self._swap(amount_in, sender, self.token_one, self.token_two)

    @atomic
    @nonreentrant
    def swap_token_two_for_one(self, amount_in: int, *, sender: str) -> int:
        """Sell ``amount_in`` of token two for token one (mirror of swap_token_one_for_two)."""
        return self._swap(amount_in, sender, self.token_two, self.token_one)

    def _swap(
        self,
        amount_in: int,
        sender: str,
        token_in: FungibleToken,
        token_out: FungibleToken,
    ) -> int:
        require_positive(amount_in)
        if not self.is_funded:
            raise EmptyPool(f"Pool {short(self.address)} has no reserves")
        trader = normalize_address(sender)

        selling_one = token_in is self.token_one
        if selling_one:
            reserve_in, reserve_out = self.reserve_one, self.reserve_two
        else:
            reserve_in, reserve_out = self.reserve_two, self.reserve_one

        amount_out = self.get_amount_out(amount_in, reserve_in, reserve_out)
        if amount_out >= reserve_out:
            raise InsufficientLiquidity(
                f"Output {amount_out} would drain reserve {reserve_out} of {short(self.address)}"
            )

        new_in = (S(reserve_in) + S(amount_in)).value
        new_out = (S(reserve_out) - S(amount_out)).value
        if selling_one:
            self.reserve_one, self.reserve_two = new_in, new_out
        else:
            self.reserve_two, self.reserve_one = new_in, new_out

        token_in.transfer_from(trader, self.address, amount_in, sender=self.address)
        token_out.transfer(trader, amount_out, sender=self.address)

        self.emit(
            Swap,
            trader=trader,
            token_in=token_in.address,
            token_out=token_out.address,
            amount_in=amount_in,
            amount_out=amount_out,
        )
        logger.info(
            "swap",
            pool=short(self.address),
            trader=short(trader),
            token_in=short(token_in.address),
            amount_in=amount_in,
            amount_out=amount_out,
        )
        return amount_out

"""Pair registry: deploys one pool per unordered token pair.

The registry owns pool creation and the pair directory, but not pool state:
once created, a pool is addressed directly and mutates its own reserves.
"""

from __future__ import annotations

from typing import ClassVar

import structlog

from dex.config import DEFAULT_POOL_CONFIG, PoolConfig
from dex.errors import IdenticalTokens, PairAlreadyExists, UnknownContract, ZeroAddress
from dex.events import PoolCreated
from dex.ledger import Contract, Ledger, atomic, nonreentrant
from dex.pool import Pool, require_positive
from dex.tokens.base import FungibleToken
from dex.types import ZERO_ADDRESS, normalize_address, short

logger = structlog.get_logger()


def pair_key(token_a: str, token_b: str) -> frozenset[str]:
    """Order-independent directory key for a token pair."""
    return frozenset([normalize_address(token_a), normalize_address(token_b)])


class DEX(Contract):
    """Factory and directory of liquidity pools."""

    STATE_FIELDS: ClassVar[tuple[str, ...]] = ("_pairs",)

    def __init__(self, ledger: Ledger, address: str, config: PoolConfig = DEFAULT_POOL_CONFIG) -> None:
        super().__init__(ledger, address)
        self.config = config
        self._pairs: dict[frozenset[str], str] = {}
        self._entered = False

    def _resolve_token(self, address: str) -> FungibleToken:
        contract = self.ledger.get_contract(address)
        if not isinstance(contract, FungibleToken):
            raise UnknownContract(f"{address} is not a token")
        return contract

    @atomic
    @nonreentrant
    def create_new_pair(
        self,
        token_one: str,
        token_two: str,
        amount_one: int,
        amount_two: int,
        *,
        sender: str,
    ) -> Pool:
        """Deploy and seed the pool for a new token pair.

        The caller must have approved this registry for ``amount_one`` of
        token one and ``amount_two`` of token two. The caller becomes the pool
        creator and receives the initial liquidity tokens.

        Args:
            token_one: Address of the first token
            token_two: Address of the second token
            amount_one: Initial reserve of token one
            amount_two: Initial reserve of token two
            sender: Calling account

        Returns:
            The newly created Pool

        Raises:
            IdenticalTokens: If both addresses name the same token
            ZeroAddress: If either address is the zero address
            MustSendSomeTokens: If either amount is zero or negative
            PairAlreadyExists: If the unordered pair already has a pool
            ReentrantCall: If a token calls back into the registry mid-creation
            UnknownContract: If an address is not a deployed token
            TokenError: If pulling the initial deposit fails
        """
        token_one = normalize_address(token_one, validate=True)
        token_two = normalize_address(token_two, validate=True)
        creator = normalize_address(sender)

        if token_one == token_two:
            raise IdenticalTokens(f"Cannot pair {token_one} with itself")
        if ZERO_ADDRESS in (token_one, token_two):
            raise ZeroAddress("Pair tokens cannot be the zero address")
        require_positive(amount_one, amount_two)

        key = pair_key(token_one, token_two)
        if key in self._pairs:
            raise PairAlreadyExists(
                f"Pair {short(token_one)}/{short(token_two)} already has pool {self._pairs[key]}"
            )

        first = self._resolve_token(token_one)
        second = self._resolve_token(token_two)

        pool = Pool.deploy(
            self.ledger,
            deployer=self.address,
            token_one=first,
            token_two=second,
            pool_creator=creator,
            factory=self.address,
            config=self.config,
        )
        self._pairs[key] = pool.address
        first.transfer_from(creator, pool.address, amount_one, sender=self.address)
        second.transfer_from(creator, pool.address, amount_two, sender=self.address)
        pool.initialize(amount_one, amount_two, creator, sender=self.address)

        self.emit(
            PoolCreated,
            pool_address=pool.address,
            token_one=token_one,
            token_two=token_two,
            init_amount_one=amount_one,
            init_amount_two=amount_two,
            pool_creator=creator,
        )
        logger.info(
            "pool_created",
            pool=short(pool.address),
            token_one=short(token_one),
            token_two=short(token_two),
            amount_one=amount_one,
            amount_two=amount_two,
            creator=short(creator),
        )
        return pool

    def get_pool_address(self, token_a: str, token_b: str) -> str | None:
        """Pool address for a pair (order independent), or None."""
        return self._pairs.get(pair_key(token_a, token_b))

    def get_pool(self, token_a: str, token_b: str) -> Pool | None:
        """Pool for a pair (order independent), or None."""
        address = self.get_pool_address(token_a, token_b)
        if address is None:
            return None
        return self.ledger.get_contract(address, Pool)

    def all_pools(self) -> list[Pool]:
        """Every pool this registry created, in creation order."""
        return [self.ledger.get_contract(address, Pool) for address in self._pairs.values()]

    @property
    def pair_count(self) -> int:
        return len(self._pairs)

    def __contains__(self, pair: object) -> bool:
        if not isinstance(pair, tuple) or len(pair) != 2:
            return False
        return pair_key(*pair) in self._pairs

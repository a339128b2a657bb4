"""Tests for the pool and registry reentrancy guards."""

import pytest

from dex.errors import ReentrantCall
from dex.ledger import Ledger
from dex.pool import Pool
from dex.registry import DEX
from dex.tokens.erc20 import MockToken
from tests.helpers import DEPLOYER, ETHER, USER, fund


class ReentrantToken(MockToken):
    """Token that runs a hook whenever someone pulls funds with transfer_from."""

    def __init__(self, ledger, address, name, symbol):
        super().__init__(ledger, address, name=name, symbol=symbol)
        self.on_transfer_from = None

    def transfer_from(self, owner, to, amount, *, sender):
        if self.on_transfer_from is not None:
            self.on_transfer_from()
        return super().transfer_from(owner, to, amount, sender=sender)


@pytest.fixture
def hostile_pool():
    ledger = Ledger()
    hostile = ReentrantToken.deploy(ledger, deployer=DEPLOYER, name="Hostile", symbol="HST")
    honest = MockToken.deploy(ledger, deployer=DEPLOYER, name="Honest", symbol="HON")
    dex = DEX.deploy(ledger, deployer=DEPLOYER)

    fund(hostile, USER, 1_000 * ETHER, spender=dex.address)
    fund(honest, USER, 1_000 * ETHER, spender=dex.address)
    pool = dex.create_new_pair(hostile.address, honest.address, 100 * ETHER, 100 * ETHER, sender=USER)
    hostile.approve(pool.address, 500 * ETHER, sender=USER)
    honest.approve(pool.address, 500 * ETHER, sender=USER)
    return pool


class TestReentrancyGuard:
    """A token calling back into the pool mid-operation is rejected."""

    def test_swap_reentering_swap(self, hostile_pool):
        token = hostile_pool.token_one
        token.on_transfer_from = lambda: hostile_pool.swap_token_one_for_two(ETHER, sender=USER)

        with pytest.raises(ReentrantCall):
            hostile_pool.swap_token_one_for_two(ETHER, sender=USER)

    def test_add_liquidity_reentering_remove(self, hostile_pool):
        token = hostile_pool.token_one
        token.on_transfer_from = lambda: hostile_pool.remove_liquidity(sender=USER)

        with pytest.raises(ReentrantCall):
            hostile_pool.add_liquidity(ETHER, ETHER, sender=USER)

    def test_failed_reentry_rolls_back_everything(self, hostile_pool):
        ledger = hostile_pool.ledger
        token_one, token_two = hostile_pool.token_one, hostile_pool.token_two
        reserves = hostile_pool.get_reserves()
        balances = (token_one.balance_of(USER), token_two.balance_of(USER))
        event_count = len(ledger.events)

        token_one.on_transfer_from = lambda: hostile_pool.swap_token_two_for_one(ETHER, sender=USER)
        with pytest.raises(ReentrantCall):
            hostile_pool.swap_token_one_for_two(5 * ETHER, sender=USER)

        assert hostile_pool.get_reserves() == reserves
        assert (token_one.balance_of(USER), token_two.balance_of(USER)) == balances
        assert len(ledger.events) == event_count

    def test_pool_usable_after_rejected_reentry(self, hostile_pool):
        token = hostile_pool.token_one
        token.on_transfer_from = lambda: hostile_pool.add_liquidity(ETHER, ETHER, sender=USER)
        with pytest.raises(ReentrantCall):
            hostile_pool.swap_token_one_for_two(ETHER, sender=USER)

        token.on_transfer_from = None
        assert hostile_pool.swap_token_one_for_two(ETHER, sender=USER) > 0

    def test_read_only_calls_are_allowed(self, hostile_pool):
        """Quotes during a swap see the already-updated reserves."""
        seen = []
        token = hostile_pool.token_one
        token.on_transfer_from = lambda: seen.append(hostile_pool.get_reserves())

        amount_out = hostile_pool.swap_token_one_for_two(ETHER, sender=USER)

        assert seen == [(101 * ETHER, 100 * ETHER - amount_out)]


class TestRegistryReentrancy:
    """A token calling back into the registry during pair creation is rejected."""

    @pytest.fixture
    def setup(self):
        ledger = Ledger()
        hostile = ReentrantToken.deploy(ledger, deployer=DEPLOYER, name="Hostile", symbol="HST")
        honest = MockToken.deploy(ledger, deployer=DEPLOYER, name="Honest", symbol="HON")
        dex = DEX.deploy(ledger, deployer=DEPLOYER)
        fund(hostile, USER, 1_000 * ETHER, spender=dex.address)
        fund(honest, USER, 1_000 * ETHER, spender=dex.address)
        return ledger, dex, hostile, honest

    def test_same_pair_created_once(self, setup):
        ledger, dex, hostile, honest = setup
        hostile.on_transfer_from = lambda: dex.create_new_pair(
            honest.address, hostile.address, ETHER, ETHER, sender=USER
        )

        with pytest.raises(ReentrantCall):
            dex.create_new_pair(hostile.address, honest.address, ETHER, ETHER, sender=USER)

        assert dex.pair_count == 0
        assert ledger.contracts(Pool) == []
        assert hostile.balance_of(USER) == 1_000 * ETHER

    def test_other_pair_rejected_mid_creation(self, setup):
        ledger, dex, hostile, honest = setup
        third = MockToken.deploy(ledger, deployer=DEPLOYER, name="Third", symbol="TRD")
        fund(third, USER, ETHER, spender=dex.address)
        hostile.on_transfer_from = lambda: dex.create_new_pair(
            honest.address, third.address, ETHER, ETHER, sender=USER
        )

        with pytest.raises(ReentrantCall):
            dex.create_new_pair(hostile.address, honest.address, ETHER, ETHER, sender=USER)

        assert dex.pair_count == 0

    def test_pair_recorded_before_tokens_are_pulled(self, setup):
        """Lookups from inside the deposit already see the new pool."""
        _, dex, hostile, honest = setup
        seen = []
        hostile.on_transfer_from = lambda: seen.append(dex.get_pool_address(hostile.address, honest.address))

        pool = dex.create_new_pair(hostile.address, honest.address, ETHER, ETHER, sender=USER)

        assert seen == [pool.address]
        assert dex.all_pools() == [pool]

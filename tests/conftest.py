"""Pytest configuration and fixtures.

The default scenario mirrors the local deployment: ThunderToken and CloudToken
mocks, both test users holding 1000 of each, and a pool seeded by USER with
100/100.
"""

import pytest

from dex.ledger import Ledger
from dex.pool import Pool
from dex.registry import DEX
from dex.tokens.erc20 import CloudToken, ThunderToken
from dex.tokens.liquidity import LiquidityToken
from tests.helpers import (
    DEPLOYER,
    INITIAL_ACCOUNT_BALANCE,
    INITIAL_TOKEN_AMOUNT,
    USER,
    USER_TWO,
)


@pytest.fixture
def ledger() -> Ledger:
    """A fresh, empty ledger."""
    return Ledger()


@pytest.fixture
def thunder_token(ledger: Ledger) -> ThunderToken:
    token = ThunderToken.deploy(ledger, deployer=DEPLOYER)
    token.mint(INITIAL_ACCOUNT_BALANCE, sender=USER)
    token.mint(INITIAL_ACCOUNT_BALANCE, sender=USER_TWO)
    return token


@pytest.fixture
def cloud_token(ledger: Ledger) -> CloudToken:
    token = CloudToken.deploy(ledger, deployer=DEPLOYER)
    token.mint(INITIAL_ACCOUNT_BALANCE, sender=USER)
    token.mint(INITIAL_ACCOUNT_BALANCE, sender=USER_TWO)
    return token


@pytest.fixture
def dex(ledger: Ledger) -> DEX:
    return DEX.deploy(ledger, deployer=DEPLOYER)


@pytest.fixture
def pool(dex: DEX, thunder_token: ThunderToken, cloud_token: CloudToken) -> Pool:
    """Pool created by USER with 100 THT / 100 CLT."""
    thunder_token.approve(dex.address, INITIAL_TOKEN_AMOUNT, sender=USER)
    cloud_token.approve(dex.address, INITIAL_TOKEN_AMOUNT, sender=USER)
    return dex.create_new_pair(
        thunder_token.address,
        cloud_token.address,
        INITIAL_TOKEN_AMOUNT,
        INITIAL_TOKEN_AMOUNT,
        sender=USER,
    )


@pytest.fixture
def liquidity_token(pool: Pool) -> LiquidityToken:
    return pool.liquidity_token

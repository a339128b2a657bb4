"""Test helpers module for shared test utilities.

- constants: Accounts and common amounts
- factories: Funded pool factory and funding helper
"""

from tests.helpers.constants import (
    DEPLOYER,
    ETHER,
    INITIAL_ACCOUNT_BALANCE,
    INITIAL_TOKEN_AMOUNT,
    LIQUIDITY_ADDITION,
    OUTSIDER,
    POOL_FEE_PERCENTAGE,
    USER,
    USER_TWO,
)
from tests.helpers.factories import CREATOR_SURPLUS, fund, make_pool

__all__ = [
    # Constants
    "DEPLOYER",
    "ETHER",
    "USER",
    "USER_TWO",
    "OUTSIDER",
    "INITIAL_ACCOUNT_BALANCE",
    "INITIAL_TOKEN_AMOUNT",
    "LIQUIDITY_ADDITION",
    "POOL_FEE_PERCENTAGE",
    # Factories
    "CREATOR_SURPLUS",
    "fund",
    "make_pool",
]

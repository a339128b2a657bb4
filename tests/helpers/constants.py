"""Shared account and amount constants for tests.

All addresses are lowercase for consistency with normalize_address().

Usage:
    from tests.helpers import USER, INITIAL_TOKEN_AMOUNT
"""

from dex.constants import DEPLOYER

ETHER = 10**18

# =============================================================================
# Accounts
# =============================================================================

USER = "0x70997970c51812dc3a010c7d01b50e0d17dc79c8"
USER_TWO = "0x3c44cdddb6a900fa2b585dd299e03d12fa4293bc"
OUTSIDER = "0x90f79bf6eb2c4f870365e785982e1f47e7d35ce9"

# =============================================================================
# Amounts (mirror the local deployment scenario: 1000 minted, 100 seeded)
# =============================================================================

INITIAL_ACCOUNT_BALANCE = 1000 * ETHER
INITIAL_TOKEN_AMOUNT = 100 * ETHER
LIQUIDITY_ADDITION = 1 * ETHER
POOL_FEE_PERCENTAGE = 3


__all__ = [
    "DEPLOYER",
    "ETHER",
    "USER",
    "USER_TWO",
    "OUTSIDER",
    "INITIAL_ACCOUNT_BALANCE",
    "INITIAL_TOKEN_AMOUNT",
    "LIQUIDITY_ADDITION",
    "POOL_FEE_PERCENTAGE",
]

"""Exchange constants.

Centralizes protocol parameters and well-known local addresses.
"""

from dex.types import ZERO_ADDRESS, is_valid_address

# Swap fee, taken from the output amount: fee = raw_out * 3 // 100
POOL_FEE_PERCENTAGE = 3
POOL_FEE_DENOMINATOR = 100

# Liquidity token metadata (every pool deploys its own instance)
LIQUIDITY_TOKEN_NAME = "Liquidity Token"
LIQUIDITY_TOKEN_SYMBOL = "LIQ"

DEFAULT_DECIMALS = 18


def _validate_address(name: str, address: str) -> str:
    """Validate and return a well-known address.

    Raises:
        ValueError: If the address is invalid
    """
    if not is_valid_address(address):
        raise ValueError(f"Invalid {name} address: {address} (must be 0x + 40 hex chars)")
    return address


# Account that deploys the registry and the local mock tokens
DEPLOYER = _validate_address("DEPLOYER", "0xf39fd6e51aad88f6f4ce6ab8827279cfffb92266")

__all__ = [
    "POOL_FEE_PERCENTAGE",
    "POOL_FEE_DENOMINATOR",
    "LIQUIDITY_TOKEN_NAME",
    "LIQUIDITY_TOKEN_SYMBOL",
    "DEFAULT_DECIMALS",
    "DEPLOYER",
    "ZERO_ADDRESS",
]

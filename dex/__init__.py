"""Constant-product DEX engine - pair registry, pools and liquidity tokens."""

from dex.config import DEFAULT_POOL_CONFIG, PoolConfig
from dex.ledger import Ledger
from dex.pool import Pool
from dex.registry import DEX

__version__ = "0.1.0"
__all__ = ["DEX", "Pool", "Ledger", "PoolConfig", "DEFAULT_POOL_CONFIG", "__version__"]

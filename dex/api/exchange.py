"""Process-wide exchange instance served by the API."""

from __future__ import annotations

from dataclasses import dataclass, field

import structlog

from dex.config import DEFAULT_POOL_CONFIG, PoolConfig, ServerConfig
from dex.constants import DEPLOYER
from dex.ledger import Ledger
from dex.registry import DEX
from dex.tokens.erc20 import CloudToken, ERC20Token, ThunderToken
from dex.types import short

logger = structlog.get_logger()


@dataclass
class Exchange:
    """A ledger with one registry deployed on it."""

    ledger: Ledger
    dex: DEX
    tokens: list[ERC20Token] = field(default_factory=list)


def create_exchange(
    config: PoolConfig = DEFAULT_POOL_CONFIG,
    local_tokens: bool = True,
    deployer: str = DEPLOYER,
) -> Exchange:
    """Deploy a registry and, for local use, the ThunderToken/CloudToken mocks.

    Args:
        config: Pool pricing parameters for every pool the registry creates
        local_tokens: Also deploy the two mock tokens
        deployer: Account that deploys the contracts

    Returns:
        Exchange ready to serve calls
    """
    ledger = Ledger()
    tokens: list[ERC20Token] = []
    if local_tokens:
        logger.info("local_network_detected", action="deploying token mocks")
        tokens.append(ThunderToken.deploy(ledger, deployer=deployer))
        tokens.append(CloudToken.deploy(ledger, deployer=deployer))

    dex = DEX.deploy(ledger, deployer=deployer, config=config)
    logger.info(
        "dex_deployed",
        address=short(dex.address),
        fee_percentage=config.fee_percentage,
        tokens=[t.symbol for t in tokens],
    )
    return Exchange(ledger=ledger, dex=dex, tokens=tokens)


_default_exchange: Exchange | None = None


def get_default_exchange() -> Exchange:
    """Lazily create the exchange configured from the environment."""
    global _default_exchange
    if _default_exchange is None:
        server_config = ServerConfig.from_env()
        _default_exchange = create_exchange(
            config=PoolConfig.from_env(),
            local_tokens=server_config.local_tokens,
        )
    return _default_exchange

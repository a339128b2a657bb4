"""Configuration for pools and the API server."""

import os
from dataclasses import dataclass

from dex.constants import POOL_FEE_DENOMINATOR, POOL_FEE_PERCENTAGE


def _env_bool(name: str, default: str) -> bool:
    return os.environ.get(name, default).lower() in ("true", "1", "yes")


@dataclass(frozen=True)
class PoolConfig:
    """Swap pricing parameters shared by every pool a registry deploys.

    Attributes:
        fee_percentage: Fee taken from the swap output (default: 3, i.e. 3%)
        fee_denominator: Denominator of the fee fraction (default: 100)
    """

    fee_percentage: int = POOL_FEE_PERCENTAGE
    fee_denominator: int = POOL_FEE_DENOMINATOR

    def __post_init__(self) -> None:
        if self.fee_denominator <= 0:
            raise ValueError(f"fee_denominator must be positive, got {self.fee_denominator}")
        if not 0 <= self.fee_percentage < self.fee_denominator:
            raise ValueError(
                f"fee_percentage must be in [0, {self.fee_denominator}), got {self.fee_percentage}"
            )

    @classmethod
    def from_env(cls) -> "PoolConfig":
        """Read DEX_FEE_PERCENTAGE from the environment."""
        return cls(fee_percentage=int(os.environ.get("DEX_FEE_PERCENTAGE", str(POOL_FEE_PERCENTAGE))))


@dataclass(frozen=True)
class ServerConfig:
    """API server settings.

    Attributes:
        host: Host to bind to
        port: Port to bind to
        debug: Enable reload mode and debug logging
        local_tokens: Deploy the ThunderToken/CloudToken mocks at startup
    """

    host: str = "0.0.0.0"
    port: int = 8000
    debug: bool = False
    local_tokens: bool = True

    @classmethod
    def from_env(cls) -> "ServerConfig":
        """Read DEX_HOST, DEX_PORT, DEX_DEBUG and DEX_LOCAL_TOKENS."""
        return cls(
            host=os.environ.get("DEX_HOST", "0.0.0.0"),
            port=int(os.environ.get("DEX_PORT", "8000")),
            debug=_env_bool("DEX_DEBUG", "false"),
            local_tokens=_env_bool("DEX_LOCAL_TOKENS", "true"),
        )


# Default configuration instance
DEFAULT_POOL_CONFIG = PoolConfig()

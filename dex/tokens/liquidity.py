"""Liquidity token: proportional claim on one pool's reserves."""

from __future__ import annotations

import structlog

from dex.constants import LIQUIDITY_TOKEN_NAME, LIQUIDITY_TOKEN_SYMBOL
from dex.errors import NotTokenOwner
from dex.ledger import Ledger, atomic
from dex.tokens.erc20 import ERC20Token
from dex.types import normalize_address, short

logger = structlog.get_logger()


class LiquidityToken(ERC20Token):
    """Fungible share token whose supply only its owning pool controls.

    Holders may transfer shares freely; mint and burn are restricted to
    ``owner`` (the pool that deployed it).
    """

    def __init__(self, ledger: Ledger, address: str, owner: str) -> None:
        super().__init__(ledger, address, name=LIQUIDITY_TOKEN_NAME, symbol=LIQUIDITY_TOKEN_SYMBOL)
        self.owner = normalize_address(owner)

    def _only_owner(self, sender: str) -> None:
        if normalize_address(sender) != self.owner:
            raise NotTokenOwner(f"{short(sender)} is not the owner of {short(self.address)}")

    @atomic
    def mint(self, to: str, amount: int, *, sender: str) -> bool:
        self._only_owner(sender)
        self._mint(normalize_address(to), amount)
        return True

    @atomic
    def burn(self, owner: str, amount: int, *, sender: str) -> bool:
        self._only_owner(sender)
        self._burn(normalize_address(owner), amount)
        return True

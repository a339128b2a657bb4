"""In-memory fungible token with standard transfer/allowance semantics."""

from __future__ import annotations

from typing import ClassVar

import structlog

from dex.constants import DEFAULT_DECIMALS
from dex.errors import InsufficientAllowance, InsufficientBalance, InvalidAmount, ZeroAddress
from dex.events import Approval, Transfer
from dex.ledger import Contract, Ledger, atomic
from dex.safe_int import UINT256_MAX, S
from dex.types import ZERO_ADDRESS, normalize_address, short

logger = structlog.get_logger()


def _check_amount(amount: int) -> int:
    if isinstance(amount, bool) or not isinstance(amount, int):
        raise InvalidAmount(f"Amount must be an int, got {type(amount).__name__}")
    if amount < 0 or amount > UINT256_MAX:
        raise InvalidAmount(f"Amount out of uint256 range: {amount}")
    return amount


class ERC20Token(Contract):
    """Balance ledger implementing the FungibleToken protocol.

    An allowance of 2^256-1 is treated as unlimited and never decremented.
    """

    STATE_FIELDS: ClassVar[tuple[str, ...]] = ("_balances", "_allowances", "_total_supply")

    def __init__(
        self,
        ledger: Ledger,
        address: str,
        name: str,
        symbol: str,
        decimals: int = DEFAULT_DECIMALS,
    ) -> None:
        super().__init__(ledger, address)
        self.name = name
        self.symbol = symbol
        self.decimals = decimals
        self._balances: dict[str, int] = {}
        self._allowances: dict[tuple[str, str], int] = {}
        self._total_supply = 0

    # --- Queries ---

    def total_supply(self) -> int:
        return self._total_supply

    def balance_of(self, owner: str) -> int:
        return self._balances.get(normalize_address(owner), 0)

    def allowance(self, owner: str, spender: str) -> int:
        return self._allowances.get((normalize_address(owner), normalize_address(spender)), 0)

    def holders(self) -> dict[str, int]:
        """Accounts with a non-zero balance."""
        return {owner: balance for owner, balance in self._balances.items() if balance}

    # --- Mutations ---

    @atomic
    def transfer(self, to: str, amount: int, *, sender: str) -> bool:
        self._transfer(normalize_address(sender), normalize_address(to), _check_amount(amount))
        return True

    @atomic
    def approve(self, spender: str, amount: int, *, sender: str) -> bool:
        owner = normalize_address(sender)
        spender = normalize_address(spender)
        if spender == ZERO_ADDRESS:
            raise ZeroAddress("Cannot approve the zero address")
        self._allowances[(owner, spender)] = _check_amount(amount)
        self.emit(Approval, owner=owner, spender=spender, value=amount)
        return True

    @atomic
    def transfer_from(self, owner: str, to: str, amount: int, *, sender: str) -> bool:
        owner = normalize_address(owner)
        spender = normalize_address(sender)
        amount = _check_amount(amount)
        allowed = self.allowance(owner, spender)
        if allowed < amount:
            raise InsufficientAllowance(
                f"{self.symbol}: {short(spender)} may move {allowed} of {short(owner)}, requested {amount}"
            )
        if allowed != UINT256_MAX:
            self._allowances[(owner, spender)] = (S(allowed) - S(amount)).value
        self._transfer(owner, normalize_address(to), amount)
        return True

    # --- Internal balance moves ---

    def _transfer(self, owner: str, to: str, amount: int) -> None:
        if to == ZERO_ADDRESS:
            raise ZeroAddress(f"{self.symbol}: transfer to the zero address")
        balance = self._balances.get(owner, 0)
        if balance < amount:
            raise InsufficientBalance(
                f"{self.symbol}: {short(owner)} holds {balance}, transfer of {amount}"
            )
        self._balances[owner] = (S(balance) - S(amount)).value
        self._balances[to] = (S(self._balances.get(to, 0)) + S(amount)).value
        self.emit(Transfer, sender=owner, recipient=to, value=amount)

    def _mint(self, to: str, amount: int) -> None:
        if to == ZERO_ADDRESS:
            raise ZeroAddress(f"{self.symbol}: mint to the zero address")
        amount = _check_amount(amount)
        self._total_supply = (S(self._total_supply) + S(amount)).value
        self._balances[to] = (S(self._balances.get(to, 0)) + S(amount)).value
        self.emit(Transfer, sender=ZERO_ADDRESS, recipient=to, value=amount)

    def _burn(self, owner: str, amount: int) -> None:
        amount = _check_amount(amount)
        balance = self._balances.get(owner, 0)
        if balance < amount:
            raise InsufficientBalance(f"{self.symbol}: {short(owner)} holds {balance}, burn of {amount}")
        self._balances[owner] = (S(balance) - S(amount)).value
        self._total_supply = (S(self._total_supply) - S(amount)).value
        self.emit(Transfer, sender=owner, recipient=ZERO_ADDRESS, value=amount)


class MockToken(ERC20Token):
    """Token with an open faucet, for local ledgers and tests."""

    @atomic
    def mint(self, amount: int, *, sender: str) -> bool:
        """Credit ``amount`` fresh tokens to the caller."""
        account = normalize_address(sender)
        self._mint(account, amount)
        logger.debug("mock_token_minted", token=self.symbol, account=short(account), amount=amount)
        return True


class ThunderToken(MockToken):
    def __init__(self, ledger: Ledger, address: str) -> None:
        super().__init__(ledger, address, name="ThunderToken", symbol="THT")


class CloudToken(MockToken):
    def __init__(self, ledger: Ledger, address: str) -> None:
        super().__init__(ledger, address, name="CloudToken", symbol="CLT")

"""In-memory ledger: contract directory, call atomicity and reentrancy guard.

The ledger plays the role of the chain the exchange runs on. It allocates
contract addresses, keeps the event log, and wraps every public mutating call
in a transaction: if anything inside the call raises, all contract state,
deployments and events touched by the call are restored before the error
propagates to the caller.
"""

from __future__ import annotations

import copy
import functools
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, ClassVar, ParamSpec, TypeVar

import structlog
from eth_abi import encode  # type: ignore[attr-defined]
from eth_utils import keccak

from dex.errors import ReentrantCall, UnknownContract
from dex.events import Event, EventLog
from dex.types import normalize_address, short

logger = structlog.get_logger()

P = ParamSpec("P")
R = TypeVar("R")
C = TypeVar("C", bound="Contract")


class Contract:
    """Base class for state that lives on the ledger.

    Subclasses list their mutable attributes in ``STATE_FIELDS``; those are
    what a transaction snapshots and restores.
    """

    STATE_FIELDS: ClassVar[tuple[str, ...]] = ()

    def __init__(self, ledger: Ledger, address: str) -> None:
        self.ledger = ledger
        self.address = address

    @classmethod
    def deploy(cls: type[C], ledger: Ledger, *, deployer: str, **kwargs: Any) -> C:
        """Deploy a new instance at a fresh address."""
        return ledger.deploy(functools.partial(cls, **kwargs), deployer=deployer)

    def snapshot(self) -> dict[str, Any]:
        return {name: copy.deepcopy(getattr(self, name)) for name in self.STATE_FIELDS}

    def restore(self, state: dict[str, Any]) -> None:
        for name, value in state.items():
            setattr(self, name, value)

    def emit(self, event_type: type[Event], **fields: Any) -> Event:
        event = event_type(emitter=self.address, **fields)
        self.ledger.events.append(event)
        return event

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.address})"


@dataclass
class _Checkpoint:
    contracts: dict[str, Contract]
    nonces: dict[str, int]
    event_count: int
    states: dict[str, dict[str, Any]]


class Ledger:
    """Directory of deployed contracts with transactional call semantics."""

    def __init__(self) -> None:
        self._contracts: dict[str, Contract] = {}
        self._nonces: dict[str, int] = {}
        self._depth = 0
        self.events = EventLog()

    # --- Contract directory ---

    def next_address(self, deployer: str) -> str:
        """Allocate the next contract address for a deployer.

        keccak256 over the ABI-encoded (deployer, nonce) pair, last 20 bytes.
        """
        deployer = normalize_address(deployer, validate=True)
        nonce = self._nonces.get(deployer, 0)
        self._nonces[deployer] = nonce + 1
        digest = keccak(encode(["address", "uint256"], [deployer, nonce]))
        return "0x" + digest[-20:].hex()

    def deploy(self, factory: Callable[[Ledger, str], C], *, deployer: str) -> C:
        """Construct a contract at a fresh address and register it."""
        with self.transaction():
            address = self.next_address(deployer)
            contract = factory(self, address)
            self._contracts[address] = contract
        logger.debug(
            "contract_deployed",
            kind=type(contract).__name__,
            address=short(address),
            deployer=short(deployer),
        )
        return contract

    def get_contract(self, address: str, kind: type[C] = Contract) -> C:  # type: ignore[assignment]
        """Look up a deployed contract.

        Raises:
            UnknownContract: If nothing of the given kind is deployed there
        """
        contract = self._contracts.get(normalize_address(address))
        if contract is None or not isinstance(contract, kind):
            raise UnknownContract(f"No {kind.__name__} at {address}")
        return contract

    def contracts(self, kind: type[C] = Contract) -> list[C]:  # type: ignore[assignment]
        return [c for c in self._contracts.values() if isinstance(c, kind)]

    def __contains__(self, address: object) -> bool:
        return isinstance(address, str) and normalize_address(address) in self._contracts

    # --- Transactions ---

    @property
    def in_transaction(self) -> bool:
        return self._depth > 0

    @contextmanager
    def transaction(self) -> Iterator[None]:
        """Run a block atomically.

        Nested blocks join the outermost transaction; only the outermost one
        checkpoints and, on error, rolls back.
        """
        if self._depth:
            self._depth += 1
            try:
                yield
            finally:
                self._depth -= 1
            return

        checkpoint = self._checkpoint()
        self._depth = 1
        try:
            yield
        except Exception as err:
            self._rollback(checkpoint)
            logger.warning(
                "transaction_reverted",
                reason=getattr(err, "reason", type(err).__name__),
                detail=str(err),
            )
            raise
        finally:
            self._depth = 0

    def _checkpoint(self) -> _Checkpoint:
        return _Checkpoint(
            contracts=dict(self._contracts),
            nonces=dict(self._nonces),
            event_count=len(self.events),
            states={address: c.snapshot() for address, c in self._contracts.items()},
        )

    def _rollback(self, checkpoint: _Checkpoint) -> None:
        self._contracts = checkpoint.contracts
        self._nonces = checkpoint.nonces
        self.events.truncate(checkpoint.event_count)
        for address, state in checkpoint.states.items():
            self._contracts[address].restore(state)


def atomic(method: Callable[P, R]) -> Callable[P, R]:
    """Run a contract method inside a ledger transaction."""

    @functools.wraps(method)
    def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
        contract: Contract = args[0]  # type: ignore[assignment]
        with contract.ledger.transaction():
            return method(*args, **kwargs)

    return wrapper


def nonreentrant(method: Callable[P, R]) -> Callable[P, R]:
    """Reject calls into a guarded method while another guarded call of the same contract runs."""

    @functools.wraps(method)
    def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
        contract: Any = args[0]
        if getattr(contract, "_entered", False):
            raise ReentrantCall(f"{method.__name__} re-entered {contract!r}")
        contract._entered = True
        try:
            return method(*args, **kwargs)
        finally:
            contract._entered = False

    return wrapper

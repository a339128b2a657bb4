"""Event models emitted by the exchange contracts.

Events are the observer surface of the exchange: indexers read them from the
ledger's EventLog. Each event mirrors an EVM log: ``topic()`` is the keccak256
hash of the canonical signature and ``encode_data()`` ABI-encodes the payload.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import ClassVar, TypeVar

from eth_abi import encode  # type: ignore[attr-defined]
from eth_utils import keccak
from pydantic import BaseModel, ConfigDict, Field

from dex.types import Address


class Event(BaseModel):
    """Base class for ledger events.

    Subclasses declare ``NAME`` and ``ABI`` (field name, ABI type) pairs in
    signature order.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    NAME: ClassVar[str]
    ABI: ClassVar[tuple[tuple[str, str], ...]]

    emitter: Address = Field(description="Address of the contract that emitted the event")

    @classmethod
    def signature(cls) -> str:
        """Canonical signature, e.g. ``Swap(address,address,address,uint256,uint256)``."""
        return f"{cls.NAME}({','.join(abi_type for _, abi_type in cls.ABI)})"

    @classmethod
    def topic(cls) -> str:
        """keccak256 of the signature as 0x-prefixed hex."""
        return "0x" + keccak(text=cls.signature()).hex()

    def encode_data(self) -> bytes:
        """ABI-encode the event arguments."""
        types = [abi_type for _, abi_type in self.ABI]
        values = [getattr(self, name) for name, _ in self.ABI]
        return encode(types, values)


class PoolCreated(Event):
    """A registry deployed and seeded a new pool."""

    NAME: ClassVar[str] = "PoolCreated"
    ABI: ClassVar[tuple[tuple[str, str], ...]] = (
        ("pool_address", "address"),
        ("token_one", "address"),
        ("token_two", "address"),
        ("init_amount_one", "uint256"),
        ("init_amount_two", "uint256"),
        ("pool_creator", "address"),
    )

    pool_address: Address
    token_one: Address
    token_two: Address
    init_amount_one: int = Field(ge=0)
    init_amount_two: int = Field(ge=0)
    pool_creator: Address


class LiquidityAdded(Event):
    """Liquidity deposited; amounts are the ratio-adjusted ones actually pulled."""

    NAME: ClassVar[str] = "LiquidityAdded"
    ABI: ClassVar[tuple[tuple[str, str], ...]] = (
        ("provider", "address"),
        ("amount_one", "uint256"),
        ("amount_two", "uint256"),
        ("minted", "uint256"),
    )

    provider: Address
    amount_one: int = Field(ge=0)
    amount_two: int = Field(ge=0)
    minted: int = Field(ge=0)


class LiquidityRemoved(Event):
    NAME: ClassVar[str] = "LiquidityRemoved"
    ABI: ClassVar[tuple[tuple[str, str], ...]] = (
        ("provider", "address"),
        ("amount_one", "uint256"),
        ("amount_two", "uint256"),
    )

    provider: Address
    amount_one: int = Field(ge=0)
    amount_two: int = Field(ge=0)


class Swap(Event):
    NAME: ClassVar[str] = "Swap"
    ABI: ClassVar[tuple[tuple[str, str], ...]] = (
        ("trader", "address"),
        ("token_in", "address"),
        ("token_out", "address"),
        ("amount_in", "uint256"),
        ("amount_out", "uint256"),
    )

    trader: Address
    token_in: Address
    token_out: Address
    amount_in: int = Field(ge=0)
    amount_out: int = Field(ge=0)


class Transfer(Event):
    """Token movement; mints come from and burns go to the zero address."""

    NAME: ClassVar[str] = "Transfer"
    ABI: ClassVar[tuple[tuple[str, str], ...]] = (
        ("sender", "address"),
        ("recipient", "address"),
        ("value", "uint256"),
    )

    sender: Address = Field(alias="from")
    recipient: Address = Field(alias="to")
    value: int = Field(ge=0)


class Approval(Event):
    NAME: ClassVar[str] = "Approval"
    ABI: ClassVar[tuple[tuple[str, str], ...]] = (
        ("owner", "address"),
        ("spender", "address"),
        ("value", "uint256"),
    )

    owner: Address
    spender: Address
    value: int = Field(ge=0)


E = TypeVar("E", bound=Event)


class EventLog:
    """Append-only log of committed events.

    Rolled-back transactions truncate the log back to their checkpoint, so
    only events of committed calls remain visible.
    """

    def __init__(self) -> None:
        self._events: list[Event] = []

    def append(self, event: Event) -> None:
        self._events.append(event)

    def truncate(self, length: int) -> None:
        del self._events[length:]

    def __len__(self) -> int:
        return len(self._events)

    def __iter__(self) -> Iterator[Event]:
        return iter(self._events)

    def __getitem__(self, index: int) -> Event:
        return self._events[index]

    def filter(self, event_type: type[E], emitter: str | None = None) -> list[E]:
        """Events of one type, optionally restricted to one emitting contract."""
        emitter = emitter.lower() if emitter else None
        return [
            event
            for event in self._events
            if isinstance(event, event_type) and (emitter is None or event.emitter == emitter)
        ]

    def last(self, event_type: type[E], emitter: str | None = None) -> E | None:
        """Most recent event of a type, or None."""
        matches = self.filter(event_type, emitter)
        return matches[-1] if matches else None

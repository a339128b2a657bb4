"""Token collaborator interface.

Pools and the registry only ever talk to tokens through this protocol, so any
implementation with standard fungible-token semantics can be listed.
"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class FungibleToken(Protocol):
    """Capabilities a pool needs from each side of its pair.

    Amounts are unsigned integers in the token's smallest unit. Failures are
    raised, never reported through a False return; a raised error aborts the
    calling pool or registry operation.
    """

    address: str
    name: str
    symbol: str

    def total_supply(self) -> int: ...

    def balance_of(self, owner: str) -> int: ...

    def allowance(self, owner: str, spender: str) -> int: ...

    def transfer(self, to: str, amount: int, *, sender: str) -> bool:
        """Move ``amount`` from ``sender`` to ``to``."""
        ...

    def approve(self, spender: str, amount: int, *, sender: str) -> bool:
        """Let ``spender`` move up to ``amount`` of ``sender``'s balance."""
        ...

    def transfer_from(self, owner: str, to: str, amount: int, *, sender: str) -> bool:
        """Move ``amount`` from ``owner`` to ``to`` using ``sender``'s allowance."""
        ...

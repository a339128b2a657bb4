"""Exchange error classes.

Every error aborts the call that raised it; the enclosing ledger transaction
rolls back all state touched by that call. The ``reason`` attribute is the
stable identifier reported to API clients.
"""


class DexError(Exception):
    """Base error for exchange operations."""

    reason = "DEX__Error"


# --- Pool errors ---


class MustSendSomeTokens(DexError):
    """An amount passed to a liquidity or swap call was zero or negative."""

    reason = "Pool__MustSendSomeTokens"


class NoLiquidityAvailable(DexError):
    """The caller holds no liquidity tokens of this pool."""

    reason = "Pool__NoLiquidityAvailable"


class EmptyPool(DexError):
    """The pool holds no reserves, so it has no price."""

    reason = "Pool__EmptyPool"


class InsufficientLiquidity(DexError):
    """A swap would drain the whole output reserve."""

    reason = "Pool__InsufficientLiquidity"


class NotFactory(DexError):
    """Only the registry that deployed the pool may seed it."""

    reason = "Pool__NotFactory"


class PoolAlreadyInitialized(DexError):
    """The creation deposit was already made."""

    reason = "Pool__AlreadyInitialized"


class ReentrantCall(DexError):
    """A pool operation was re-entered while one was in flight."""

    reason = "Pool__ReentrantCall"


# --- Registry errors ---


class PairAlreadyExists(DexError):
    """A pool for this unordered token pair is already registered."""

    reason = "DEX__PairAlreadyExists"


class IdenticalTokens(DexError):
    """Both sides of the pair are the same token."""

    reason = "DEX__IdenticalTokens"


class ZeroAddress(DexError):
    """The zero address was used where a real account is required."""

    reason = "DEX__ZeroAddress"


class UnknownContract(DexError):
    """No contract of the expected kind lives at the address."""

    reason = "DEX__UnknownContract"


# --- Token errors ---


class TokenError(DexError):
    """Base error for token collaborator failures."""

    reason = "Token__Error"


class InsufficientBalance(TokenError):
    """Transfer or burn amount exceeds the holder's balance."""

    reason = "Token__InsufficientBalance"


class InsufficientAllowance(TokenError):
    """transfer_from amount exceeds what the owner approved."""

    reason = "Token__InsufficientAllowance"


class InvalidAmount(TokenError):
    """Token amounts must be non-negative integers."""

    reason = "Token__InvalidAmount"


class NotTokenOwner(TokenError):
    """Only the owning pool may mint or burn liquidity tokens."""

    reason = "LiquidityToken__NotOwner"

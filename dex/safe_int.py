"""Checked uint256 arithmetic for token amounts.

Every reserve, share and transfer amount on the exchange is an unsigned
256-bit integer in the token's smallest unit. SafeInt wraps a Python int and
makes the arithmetic behave like checked ledger math:
- Addition and multiplication raise Uint256Overflow past 2^256-1
- Subtraction below zero raises Underflow
- Division by zero raises DivisionByZero
- Division truncates toward zero (operands are never negative)

Usage pattern:
    from dex.safe_int import S

    def quote(amount_in: int, reserve_in: int, reserve_out: int) -> int:
        product = S(reserve_in) * S(reserve_out)
        return (S(reserve_out) - product // (S(reserve_in) + S(amount_in))).value
"""

from __future__ import annotations

UINT256_MAX = 2**256 - 1


class SafeIntError(ArithmeticError):
    """Base class for SafeInt arithmetic errors."""

    pass


class DivisionByZero(SafeIntError):
    """Division by zero."""

    pass


class Underflow(SafeIntError):
    """Subtraction would produce a negative amount."""

    pass


class Uint256Overflow(SafeIntError):
    """Value falls outside the uint256 range."""

    pass


class SafeInt:
    """Unsigned 256-bit integer with checked arithmetic.

    Attributes:
        value: The underlying integer value (read-only)
    """

    __slots__ = ("_value",)
    _value: int

    def __init__(self, value: int | SafeInt) -> None:
        """Wrap an integer amount.

        Raises:
            TypeError: If value is not an int or SafeInt (bool is rejected too)
            Uint256Overflow: If value is negative or exceeds 2^256-1
        """
        if isinstance(value, SafeInt):
            self._value = value._value
            return
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError(f"SafeInt requires int, got {type(value).__name__}")
        if value < 0 or value > UINT256_MAX:
            raise Uint256Overflow(f"Value out of uint256 range: {value}")
        self._value = value

    @property
    def value(self) -> int:
        """The underlying integer value."""
        return self._value

    def __repr__(self) -> str:
        return f"SafeInt({self._value})"

    def __str__(self) -> str:
        return str(self._value)

    def __hash__(self) -> int:
        return hash(self._value)

    # --- Arithmetic operations ---

    def __add__(self, other: SafeInt | int) -> SafeInt:
        """Add two amounts.

        Raises:
            Uint256Overflow: If the sum exceeds 2^256-1
        """
        result = self._value + _extract_value(other)
        if result > UINT256_MAX:
            raise Uint256Overflow(f"Overflow: {self._value} + {_extract_value(other)}")
        return SafeInt(result)

    __radd__ = __add__

    def __sub__(self, other: SafeInt | int) -> SafeInt:
        """Subtract other from self.

        Raises:
            Underflow: If result would be negative
        """
        other_val = _extract_value(other)
        result = self._value - other_val
        if result < 0:
            raise Underflow(f"Underflow: {self._value} - {other_val} = {result}")
        return SafeInt(result)

    def __rsub__(self, other: int) -> SafeInt:
        return SafeInt(other) - self

    def __mul__(self, other: SafeInt | int) -> SafeInt:
        """Multiply two amounts.

        Raises:
            Uint256Overflow: If the product exceeds 2^256-1
        """
        result = self._value * _extract_value(other)
        if result > UINT256_MAX:
            raise Uint256Overflow(f"Overflow: {self._value} * {_extract_value(other)}")
        return SafeInt(result)

    __rmul__ = __mul__

    def __floordiv__(self, other: SafeInt | int) -> SafeInt:
        """Truncating integer division.

        Raises:
            DivisionByZero: If other is zero
        """
        other_val = _extract_value(other)
        if other_val == 0:
            raise DivisionByZero(f"Division by zero: {self._value} // 0")
        return SafeInt(self._value // other_val)

    def __rfloordiv__(self, other: int) -> SafeInt:
        return SafeInt(other) // self

    # --- Comparison operations ---

    def __eq__(self, other: object) -> bool:
        if isinstance(other, SafeInt):
            return self._value == other._value
        if isinstance(other, int):
            return self._value == other
        return NotImplemented

    def __lt__(self, other: SafeInt | int) -> bool:
        return self._value < _extract_value(other)

    def __le__(self, other: SafeInt | int) -> bool:
        return self._value <= _extract_value(other)

    def __gt__(self, other: SafeInt | int) -> bool:
        return self._value > _extract_value(other)

    def __ge__(self, other: SafeInt | int) -> bool:
        return self._value >= _extract_value(other)

    # --- Conversion ---

    def __int__(self) -> int:
        return self._value

    def __bool__(self) -> bool:
        return self._value != 0

    def __index__(self) -> int:
        return self._value

    @classmethod
    def zero(cls) -> SafeInt:
        """Create a SafeInt with value 0."""
        return cls(0)


def _extract_value(x: SafeInt | int) -> int:
    """Extract integer value from SafeInt or int."""
    if isinstance(x, SafeInt):
        return x._value
    return x


# Convenience alias for concise code
S = SafeInt

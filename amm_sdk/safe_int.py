"""Checked integer wrapper for pool arithmetic.

Curve math in this package mirrors the deployed pair contracts, which run on
unsigned 256-bit integers and revert on underflow or division by zero.
SafeInt reproduces those failure modes instead of letting Python silently
produce a negative balance or a ``ZeroDivisionError`` deep inside a solver:

    from amm_sdk.safe_int import S

    def get_amount_out(amount_in: int, reserve_in: int, reserve_out: int) -> int:
        numerator = S(amount_in) * S(reserve_out)
        return (numerator // (S(reserve_in) + S(amount_in))).value
"""

from __future__ import annotations

from functools import total_ordering

from amm_sdk.constants import MAX_UINT256
from amm_sdk.errors import AmmSdkError


class SafeIntError(AmmSdkError, ArithmeticError):
    """Base class for checked arithmetic failures."""

    pass


class DivisionByZero(SafeIntError):
    """Division by zero."""

    pass


class Underflow(SafeIntError):
    """Subtraction would produce a negative result."""

    pass


class Uint256Overflow(SafeIntError):
    """Value does not fit in a uint256."""

    pass


@total_ordering
class SafeInt:
    """Non-negative integer with contract-style checked arithmetic.

    Attributes:
        value: The wrapped Python int (read-only)
    """

    __slots__ = ("_value",)
    _value: int

    def __init__(self, value: int | SafeInt) -> None:
        if isinstance(value, SafeInt):
            self._value = value._value
        elif isinstance(value, int) and not isinstance(value, bool):
            self._value = value
        else:
            raise TypeError(f"SafeInt requires int, got {type(value).__name__}")

    @property
    def value(self) -> int:
        return self._value

    def __repr__(self) -> str:
        return f"SafeInt({self._value})"

    def __str__(self) -> str:
        return str(self._value)

    def __hash__(self) -> int:
        return hash(self._value)

    def __int__(self) -> int:
        return self._value

    def __index__(self) -> int:
        return self._value

    def __bool__(self) -> bool:
        return self._value != 0

    def __eq__(self, other: object) -> bool:
        if isinstance(other, (SafeInt, int)):
            return self._value == _unwrap(other)
        return NotImplemented

    def __lt__(self, other: SafeInt | int) -> bool:
        return self._value < _unwrap(other)

    def __add__(self, other: SafeInt | int) -> SafeInt:
        return SafeInt(self._value + _unwrap(other))

    __radd__ = __add__

    def __sub__(self, other: SafeInt | int) -> SafeInt:
        """Subtract, raising Underflow instead of going negative."""
        other_val = _unwrap(other)
        if other_val > self._value:
            raise Underflow(f"Underflow: {self._value} - {other_val}")
        return SafeInt(self._value - other_val)

    def __rsub__(self, other: int) -> SafeInt:
        return SafeInt(other) - self

    def __mul__(self, other: SafeInt | int) -> SafeInt:
        return SafeInt(self._value * _unwrap(other))

    __rmul__ = __mul__

    def __floordiv__(self, other: SafeInt | int) -> SafeInt:
        """Floor division, raising DivisionByZero on a zero divisor."""
        other_val = _unwrap(other)
        if other_val == 0:
            raise DivisionByZero(f"Division by zero: {self._value} // 0")
        return SafeInt(self._value // other_val)

    def __rfloordiv__(self, other: int) -> SafeInt:
        return SafeInt(other) // self

    def __pow__(self, exponent: int) -> SafeInt:
        return SafeInt(self._value**exponent)

    def ceil_div(self, other: SafeInt | int) -> SafeInt:
        """Division rounding up (``divRoundUp`` in the contracts)."""
        other_val = _unwrap(other)
        if other_val == 0:
            raise DivisionByZero(f"Ceiling division by zero: {self._value}")
        return SafeInt(-(-self._value // other_val))

    def mul_div_up(self, multiplier: SafeInt | int, divisor: SafeInt | int) -> SafeInt:
        """``self * multiplier / divisor`` rounded up."""
        return (self * multiplier).ceil_div(divisor)

    def within1(self, other: SafeInt | int) -> bool:
        """True if the two values differ by at most one unit."""
        return abs(self._value - _unwrap(other)) <= 1

    def to_uint256(self) -> int:
        """Unwrap, checking the value fits in a uint256.

        Raises:
            Uint256Overflow: If the value is negative or exceeds 2^256-1
        """
        if self._value < 0 or self._value > MAX_UINT256:
            raise Uint256Overflow(f"Value out of uint256 range: {self._value}")
        return self._value


def _unwrap(x: SafeInt | int) -> int:
    if isinstance(x, SafeInt):
        return x._value
    return x


S = SafeInt

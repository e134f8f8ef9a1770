"""Error classes for pricing and encoding.

Every failure is raised immediately where it is detected and carries enough
context (token, pair, hop) to diagnose it. Nothing in the package substitutes
a default value for a failed computation.
"""

from __future__ import annotations

from typing import Any


class AmmSdkError(Exception):
    """Base error for all amm_sdk failures.

    Keyword arguments passed to the constructor are kept as attributes and in
    ``context`` so callers can log or inspect them.
    """

    def __init__(self, message: str, **context: Any) -> None:
        super().__init__(message)
        self.context = context
        for key, value in context.items():
            setattr(self, key, value)

    def add_context(self, **context: Any) -> None:
        """Attach context that is not already present (e.g. the hop index)."""
        for key, value in context.items():
            if key not in self.context:
                self.context[key] = value
                setattr(self, key, value)


class ValidationError(AmmSdkError, ValueError):
    """Invalid token, pair or amount construction."""

    pass


class ChainIdMismatch(ValidationError):
    """Values from different chains were combined."""

    pass


class SameToken(ValidationError):
    """A pair or ordering was requested for a token against itself."""

    pass


class InvalidToken(ValidationError):
    """A token is not part of the pair, price or amount it was used with."""

    pass


class CurrencyMismatch(InvalidToken):
    """Arithmetic mixed amounts of different currencies."""

    pass


class InvalidAddress(ValidationError):
    """Address is not 0x + 40 hex chars."""

    pass


class InvalidCurve(ValidationError):
    """Unknown curve id, or curve-specific fields inconsistent with it."""

    pass


class InvalidAmount(ValidationError):
    """Amount is negative, zero where a positive value is required, or exceeds uint256."""

    pass


class InvalidSlippageTolerance(ValidationError):
    """Slippage tolerance is negative."""

    pass


class RouteError(ValidationError):
    """Base error for route construction."""

    pass


class EmptyRoute(RouteError):
    """Route has no pairs."""

    pass


class DisconnectedPath(RouteError):
    """Consecutive pairs do not share the running path token."""

    pass


class InputNotInRoute(RouteError):
    """Input currency is not in the first pair."""

    pass


class OutputNotInRoute(RouteError):
    """Output currency is not in the last pair."""

    pass


class InsufficientLiquidity(AmmSdkError):
    """Reserves cannot satisfy the requested swap."""

    pass


class InsufficientInputAmount(AmmSdkError):
    """Input is too small to produce any output."""

    pass


class ConvergenceFailure(AmmSdkError, ArithmeticError):
    """Stable curve Newton iteration did not converge within MAX_LOOP_LIMIT steps."""

    pass


class EncodingError(AmmSdkError, ValueError):
    """Base error for router call encoding."""

    pass


class NativeInNativeOut(EncodingError):
    """A swap cannot take and return the native currency at the same time."""

    pass


class FeeOnTransferExactOutput(EncodingError):
    """Exact-output swaps are not possible for fee-on-transfer tokens."""

    pass

"""Base classes for curve implementations.

A Pair is one entity tagged with a curve id; the curve-specific math lives
in stateless strategy objects looked up by that id.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import IntEnum

from amm_sdk.constants import FEE_ACCURACY
from amm_sdk.errors import InvalidCurve, ValidationError


class CurveId(IntEnum):
    """Curve identifiers as used by the pair factory and the router."""

    CONSTANT_PRODUCT = 0
    STABLE = 1


@dataclass(frozen=True)
class SwapParams:
    """Pool parameters for one swap direction.

    Attributes:
        swap_fee: Fee in parts per FEE_ACCURACY
        amplification_coefficient: A * A_PRECISION (stable curve only)
        multiplier_in: 10^(18 - decimals) of the input token (stable curve only)
        multiplier_out: 10^(18 - decimals) of the output token (stable curve only)
    """

    swap_fee: int
    amplification_coefficient: int | None = None
    multiplier_in: int = 1
    multiplier_out: int = 1

    def __post_init__(self) -> None:
        if not 0 <= self.swap_fee < FEE_ACCURACY:
            raise ValidationError(f"Swap fee must be in [0, {FEE_ACCURACY}), got {self.swap_fee}")


class Curve(ABC):
    """Swap math for one curve kind.

    All amounts and reserves are raw integers of the respective tokens.
    Reserves are checked by the caller; implementations raise
    InsufficientLiquidity or InsufficientInputAmount when the math itself
    cannot produce a valid result.
    """

    curve_id: CurveId

    @abstractmethod
    def get_amount_out(self, amount_in: int, reserve_in: int, reserve_out: int, params: SwapParams) -> int:
        """Output amount for an exact input, rounded down.

        Args:
            amount_in: Input token amount (positive)
            reserve_in: Reserve of input token in pool
            reserve_out: Reserve of output token in pool
            params: Fee and curve parameters for this direction

        Returns:
            Output token amount
        """
        ...

    @abstractmethod
    def get_amount_in(self, amount_out: int, reserve_in: int, reserve_out: int, params: SwapParams) -> int:
        """Input amount required for an exact output, rounded up.

        Args:
            amount_out: Desired output token amount (positive, below reserve_out)
            reserve_in: Reserve of input token in pool
            reserve_out: Reserve of output token in pool
            params: Fee and curve parameters for this direction

        Returns:
            Required input token amount
        """
        ...

    @abstractmethod
    def spot_price(self, reserve_base: int, reserve_quote: int, params: SwapParams) -> tuple[int, int]:
        """Marginal price of the base token, ignoring fees.

        ``params.multiplier_in`` refers to the base token and
        ``params.multiplier_out`` to the quote token.

        Returns:
            (numerator, denominator): raw quote units per raw base unit
        """
        ...


_CURVES: dict[CurveId, Curve] = {}


def register_curve(curve: Curve) -> Curve:
    """Register a curve implementation under its curve id."""
    _CURVES[curve.curve_id] = curve
    return curve


def get_curve(curve_id: int) -> Curve:
    """Look up the implementation for a curve id.

    Raises:
        InvalidCurve: If no curve is registered for the id
    """
    try:
        return _CURVES[CurveId(curve_id)]
    except (ValueError, KeyError) as err:
        raise InvalidCurve(f"Unknown curve id: {curve_id}", curve_id=curve_id) from err

"""Constant product curve (x * y = k).

The fee is deducted from the input before the invariant is applied:

    amount_out = (in * (F - fee) * r_out) / (r_in * F + in * (F - fee))

with F = FEE_ACCURACY.
"""

from __future__ import annotations

from amm_sdk.constants import FEE_ACCURACY
from amm_sdk.curves.base import Curve, CurveId, SwapParams, register_curve
from amm_sdk.errors import InsufficientInputAmount, InsufficientLiquidity
from amm_sdk.safe_int import S


class ConstantProductCurve(Curve):
    """Constant product math with fees in parts per FEE_ACCURACY."""

    curve_id = CurveId.CONSTANT_PRODUCT

    def get_amount_out(self, amount_in: int, reserve_in: int, reserve_out: int, params: SwapParams) -> int:
        amount_in_after_fee = S(amount_in) * (S(FEE_ACCURACY) - params.swap_fee)
        numerator = amount_in_after_fee * S(reserve_out)
        denominator = S(reserve_in) * S(FEE_ACCURACY) + amount_in_after_fee

        amount_out = (numerator // denominator).value
        if amount_out == 0:
            raise InsufficientInputAmount(
                f"Input {amount_in} is too small to produce any output",
                amount_in=amount_in,
            )
        if amount_out >= reserve_out:
            raise InsufficientLiquidity(
                f"Output {amount_out} would drain reserve {reserve_out}",
                amount_out=amount_out,
                reserve_out=reserve_out,
            )
        return amount_out

    def get_amount_in(self, amount_out: int, reserve_in: int, reserve_out: int, params: SwapParams) -> int:
        if amount_out >= reserve_out:
            raise InsufficientLiquidity(
                f"Requested output {amount_out} is not below reserve {reserve_out}",
                amount_out=amount_out,
                reserve_out=reserve_out,
            )

        # Ceiling so the computed input is never insufficient
        numerator = S(reserve_in) * S(amount_out) * S(FEE_ACCURACY)
        denominator = (S(reserve_out) - S(amount_out)) * (S(FEE_ACCURACY) - params.swap_fee)
        return numerator.ceil_div(denominator).value

    def spot_price(self, reserve_base: int, reserve_quote: int, params: SwapParams) -> tuple[int, int]:
        return reserve_quote, reserve_base


constant_product = register_curve(ConstantProductCurve())

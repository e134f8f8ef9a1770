"""Stable (StableSwap) curve.

Reserves are scaled to 18 decimals by per-token precision multipliers before
solving the invariant, and results are scaled back down rounding in the
pool's favor. Fees are taken from the input in both directions.
"""

from __future__ import annotations

from amm_sdk.constants import FEE_ACCURACY
from amm_sdk.curves.base import Curve, CurveId, SwapParams, register_curve
from amm_sdk.curves.stable_math import compute_liquidity, get_y, marginal_price
from amm_sdk.errors import InsufficientInputAmount, InsufficientLiquidity, InvalidCurve
from amm_sdk.safe_int import S


def _n_a(params: SwapParams) -> int:
    if params.amplification_coefficient is None:
        raise InvalidCurve("Stable curve requires an amplification coefficient")
    return 2 * params.amplification_coefficient


class StableCurve(Curve):
    """StableSwap math for two-token pools with an amplification coefficient."""

    curve_id = CurveId.STABLE

    def get_amount_out(self, amount_in: int, reserve_in: int, reserve_out: int, params: SwapParams) -> int:
        """Output for an exact input.

        Algorithm:
            1. Scale reserves to 18 decimals and compute D
            2. Add the fee-deducted input to the input balance
            3. Solve for the new output balance given D
            4. Return: old_balance_out - new_balance_out - 1, scaled down
        """
        n_a = _n_a(params)
        xp_in = S(reserve_in) * params.multiplier_in
        xp_out = S(reserve_out) * params.multiplier_out

        fee_deducted_amount_in = S(amount_in) - (S(amount_in) * params.swap_fee) // FEE_ACCURACY
        d = compute_liquidity(xp_in.value, xp_out.value, n_a)

        x = xp_in + fee_deducted_amount_in * params.multiplier_in
        y = S(get_y(x.value, d, n_a))

        # 1 unit of rounding protection
        if y + 1 >= xp_out:
            raise InsufficientInputAmount(
                f"Input {amount_in} is too small to produce any output",
                amount_in=amount_in,
            )
        amount_out = ((xp_out - y - 1) // params.multiplier_out).value

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
        """Input required for an exact output.

        Algorithm:
            1. Scale reserves to 18 decimals and compute D
            2. Subtract the output plus a rounding margin from the output balance
            3. Solve for the new input balance given D
            4. Return: new_balance_in - old_balance_in + 1, scaled up, grossed up by the fee
        """
        n_a = _n_a(params)
        xp_in = S(reserve_in) * params.multiplier_in
        xp_out = S(reserve_out) * params.multiplier_out

        # One extra raw unit plus one scaled unit absorb the Newton rounding,
        # so quoting the returned input forward yields at least amount_out
        removed = (S(amount_out) + 1) * params.multiplier_out + 1
        if removed >= xp_out:
            raise InsufficientLiquidity(
                f"Requested output {amount_out} is not below reserve {reserve_out}",
                amount_out=amount_out,
                reserve_out=reserve_out,
            )

        d = compute_liquidity(xp_in.value, xp_out.value, n_a)
        y = xp_out - removed
        x = S(get_y(y.value, d, n_a))

        dx = (x + 1 - xp_in).ceil_div(params.multiplier_in)
        return dx.mul_div_up(FEE_ACCURACY, S(FEE_ACCURACY) - params.swap_fee).value

    def spot_price(self, reserve_base: int, reserve_quote: int, params: SwapParams) -> tuple[int, int]:
        numerator, denominator = marginal_price(
            reserve_base * params.multiplier_in,
            reserve_quote * params.multiplier_out,
            _n_a(params),
        )
        # scaled quote per scaled base -> raw quote per raw base
        return numerator * params.multiplier_in, denominator * params.multiplier_out


stable = register_curve(StableCurve())

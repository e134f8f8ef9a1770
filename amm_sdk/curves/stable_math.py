"""Two-token StableSwap math.

Integer port of the stable pair's on-chain library. Balances are the
reserves scaled to 18 decimals; ``n_a`` is ``2 * A`` with ``A`` already
multiplied by A_PRECISION. The invariant D satisfies

    n_a / A_PRECISION * (x + y) + D = n_a / A_PRECISION * D + D^3 / (4 * x * y)

Both solvers are Newton-Raphson iterations capped at MAX_LOOP_LIMIT steps
that stop once successive approximations are within one unit.

IMPORTANT: All calculations use SafeInt so that an underflow or a zero
divisor raises instead of producing a bogus amount.
"""

from __future__ import annotations

import structlog

from amm_sdk.constants import A_PRECISION, MAX_LOOP_LIMIT
from amm_sdk.errors import ConvergenceFailure, InsufficientLiquidity
from amm_sdk.safe_int import S

logger = structlog.get_logger()


def compute_liquidity(xp0: int, xp1: int, n_a: int) -> int:
    """Calculate the StableSwap invariant D from two scaled balances.

    Algorithm:
        1. Initial guess: D = x + y
        2. Iterate D' = (n_a*s/A_PRECISION + 2*dP) * D / ((n_a - A_PRECISION)*D/A_PRECISION + 3*dP)
           where dP = D^3 / (4*x*y)
        3. Stop when |D' - D| <= 1

    Args:
        xp0: Scaled balance of token0
        xp1: Scaled balance of token1
        n_a: 2 * amplification coefficient (A_PRECISION scaled)

    Returns:
        The invariant D

    Raises:
        ConvergenceFailure: If D does not converge within MAX_LOOP_LIMIT iterations
        InsufficientLiquidity: If either balance is zero
    """
    s = S(xp0) + S(xp1)
    if s == 0:
        return 0
    if xp0 == 0 or xp1 == 0:
        raise InsufficientLiquidity("Stable invariant needs both balances positive", xp0=xp0, xp1=xp1)

    d = s
    for _ in range(MAX_LOOP_LIMIT):
        d_p = (((d * d) // xp0) * d) // xp1 // 4
        prev_d = d

        numerator = (S(n_a) * s // A_PRECISION + S(2) * d_p) * d
        denominator = (S(n_a) - A_PRECISION) * d // A_PRECISION + S(3) * d_p
        d = numerator // denominator

        if d.within1(prev_d):
            return d.value

    logger.warning("stable_invariant_no_convergence", xp0=xp0, xp1=xp1, n_a=n_a)
    raise ConvergenceFailure(
        f"Stable invariant did not converge after {MAX_LOOP_LIMIT} iterations",
        xp0=xp0,
        xp1=xp1,
        n_a=n_a,
    )


def get_y(x: int, d: int, n_a: int) -> int:
    """Solve for the other scaled balance given one balance and D.

    Rearranging the invariant for y gives y^2 + (b - D) * y = c with

        c = D^3 * A_PRECISION / (4 * x * n_a)
        b = x + D * A_PRECISION / n_a

    which is iterated as y' = (y^2 + c) / (2y + b - D) starting from y = D.

    Args:
        x: Known scaled balance
        d: Invariant D
        n_a: 2 * amplification coefficient (A_PRECISION scaled)

    Returns:
        The scaled balance y

    Raises:
        ConvergenceFailure: If y does not converge within MAX_LOOP_LIMIT iterations
    """
    sd = S(d)
    c = (sd * sd) // (S(x) * 2)
    c = (c * sd * A_PRECISION) // (S(n_a) * 2)
    b = S(x) + (sd * A_PRECISION) // n_a

    y = sd
    for _ in range(MAX_LOOP_LIMIT):
        prev_y = y
        y = (y * y + c) // (y * 2 + b - sd)
        if y.within1(prev_y):
            return y.value

    logger.warning("stable_get_y_no_convergence", x=x, d=d, n_a=n_a)
    raise ConvergenceFailure(
        f"Stable balance did not converge after {MAX_LOOP_LIMIT} iterations",
        x=x,
        d=d,
        n_a=n_a,
    )


def marginal_price(xp_base: int, xp_quote: int, n_a: int) -> tuple[int, int]:
    """Marginal price of the base token in the quote token, in scaled units.

    Ratio of the partial derivatives of the invariant:

        (4*n_a*x^2*y^2 + A_PRECISION*D^3*y) / (4*n_a*x^2*y^2 + A_PRECISION*D^3*x)

    with x the base balance and y the quote balance. Equals 1 for balanced
    pools and tends to y/x as A goes to 0.

    Returns:
        (numerator, denominator)
    """
    d = S(compute_liquidity(xp_base, xp_quote, n_a))
    x, y = S(xp_base), S(xp_quote)
    d_cubed = d**3
    amp_term = S(4) * n_a * x * x * y * y
    numerator = amp_term + S(A_PRECISION) * d_cubed * y
    denominator = amp_term + S(A_PRECISION) * d_cubed * x
    return numerator.value, denominator.value

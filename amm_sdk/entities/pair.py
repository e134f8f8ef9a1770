"""Pair: an immutable snapshot of one liquidity pool.

A Pair is a tagged union over the curve id. Quoting dispatches to the curve
strategy registered for ``curve_id``; the Pair itself only orients reserves
and wraps raw integers into CurrencyAmounts.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import structlog

from amm_sdk.constants import (
    A_PRECISION,
    FEE_ACCURACY,
    MAX_A,
    MIN_A,
    MINIMUM_LIQUIDITY,
    STABLE_PRECISION_DECIMALS,
)
from amm_sdk.curves import CurveId, SwapParams, get_curve
from amm_sdk.entities.currency import Token
from amm_sdk.entities.fractions import CurrencyAmount, Price
from amm_sdk.errors import (
    AmmSdkError,
    ChainIdMismatch,
    InsufficientLiquidity,
    InvalidAmount,
    InvalidCurve,
    InvalidToken,
    SameToken,
    ValidationError,
)

if TYPE_CHECKING:
    from amm_sdk.models.snapshot import PairSnapshot

logger = structlog.get_logger()


@dataclass(frozen=True, eq=False)
class Pair:
    """Snapshot of a pool between two tokens on one curve.

    The two reserves may be passed in any order; after construction
    ``reserve0`` always holds the token whose address sorts first. Refreshing
    state means building a new Pair (see ``with_reserves``).

    Two pairs are equal when they describe the same pool, i.e. the same
    ``(chain_id, token0, token1, curve_id)``, whatever their reserves.

    Attributes:
        reserve0: Reserve of token0
        reserve1: Reserve of token1
        curve_id: CurveId.CONSTANT_PRODUCT or CurveId.STABLE
        swap_fee: Fee in parts per FEE_ACCURACY
        amplification_coefficient: A * A_PRECISION for stable pairs, None otherwise
    """

    reserve0: CurrencyAmount
    reserve1: CurrencyAmount
    curve_id: CurveId
    swap_fee: int
    amplification_coefficient: int | None = None
    _multipliers: tuple[int, int] = field(default=(1, 1), init=False, repr=False)

    def __post_init__(self) -> None:
        token_a, token_b = self.reserve0.currency, self.reserve1.currency
        if not isinstance(token_a, Token) or not isinstance(token_b, Token):
            raise InvalidToken("Pair reserves must be amounts of tokens, not native currency")
        if token_a.chain_id != token_b.chain_id:
            raise ChainIdMismatch(
                f"Pair tokens are on different chains: {token_a.chain_id} != {token_b.chain_id}",
                token=token_a,
                other=token_b,
            )
        if token_a == token_b:
            raise SameToken(f"Pair needs two distinct tokens, got {token_a!r} twice", token=token_a)

        try:
            curve_id = CurveId(self.curve_id)
        except ValueError as err:
            raise InvalidCurve(f"Unknown curve id: {self.curve_id}", curve_id=self.curve_id) from err

        if not 0 <= self.swap_fee < FEE_ACCURACY:
            raise ValidationError(
                f"Swap fee must be in [0, {FEE_ACCURACY}), got {self.swap_fee}",
                swap_fee=self.swap_fee,
            )
        self._check_amplification(curve_id, token_a, token_b)

        if not token_a.sorts_before(token_b):
            token_a, token_b = token_b, token_a
            reserve0, reserve1 = self.reserve1, self.reserve0
        else:
            reserve0, reserve1 = self.reserve0, self.reserve1

        multipliers = (1, 1)
        if curve_id == CurveId.STABLE:
            multipliers = (
                10 ** (STABLE_PRECISION_DECIMALS - token_a.decimals),
                10 ** (STABLE_PRECISION_DECIMALS - token_b.decimals),
            )

        # Pairs hold whole raw units only
        object.__setattr__(self, "reserve0", CurrencyAmount.from_raw_amount(token_a, reserve0.quotient))
        object.__setattr__(self, "reserve1", CurrencyAmount.from_raw_amount(token_b, reserve1.quotient))
        object.__setattr__(self, "curve_id", curve_id)
        object.__setattr__(self, "_multipliers", multipliers)

    def _check_amplification(self, curve_id: CurveId, token_a: Token, token_b: Token) -> None:
        amp = self.amplification_coefficient
        if curve_id == CurveId.CONSTANT_PRODUCT:
            if amp is not None:
                raise InvalidCurve(
                    "Constant product pairs do not take an amplification coefficient",
                    curve_id=int(curve_id),
                )
            return

        if amp is None:
            raise InvalidCurve("Stable pairs require an amplification coefficient", curve_id=int(curve_id))
        if not MIN_A * A_PRECISION <= amp <= MAX_A * A_PRECISION:
            raise InvalidCurve(
                f"Amplification coefficient {amp} outside [{MIN_A * A_PRECISION}, {MAX_A * A_PRECISION}]",
                amplification_coefficient=amp,
            )
        for token in (token_a, token_b):
            if token.decimals > STABLE_PRECISION_DECIMALS:
                raise InvalidToken(
                    f"Stable pairs support at most {STABLE_PRECISION_DECIMALS} decimals, "
                    f"{token!r} has {token.decimals}",
                    token=token,
                )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Pair):
            return NotImplemented
        return (
            self.token0 == other.token0
            and self.token1 == other.token1
            and self.curve_id == other.curve_id
        )

    def __hash__(self) -> int:
        return hash((self.token0, self.token1, int(self.curve_id)))

    @classmethod
    def from_snapshot(cls, snapshot: PairSnapshot) -> Pair:
        """Build a Pair from a data-source snapshot."""
        token0 = Token(
            snapshot.token0.chain_id,
            snapshot.token0.address,
            snapshot.token0.decimals,
            snapshot.token0.symbol,
            snapshot.token0.name,
        )
        token1 = Token(
            snapshot.token1.chain_id,
            snapshot.token1.address,
            snapshot.token1.decimals,
            snapshot.token1.symbol,
            snapshot.token1.name,
        )
        return cls(
            CurrencyAmount.from_raw_amount(token0, snapshot.reserve0),
            CurrencyAmount.from_raw_amount(token1, snapshot.reserve1),
            snapshot.curve_id,
            snapshot.swap_fee,
            snapshot.amplification_coefficient,
        )

    def with_reserves(self, reserve0: int, reserve1: int) -> Pair:
        """Same pool with refreshed reserves."""
        return Pair(
            CurrencyAmount.from_raw_amount(self.token0, reserve0),
            CurrencyAmount.from_raw_amount(self.token1, reserve1),
            self.curve_id,
            self.swap_fee,
            self.amplification_coefficient,
        )

    @property
    def token0(self) -> Token:
        return self.reserve0.currency  # type: ignore[return-value]

    @property
    def token1(self) -> Token:
        return self.reserve1.currency  # type: ignore[return-value]

    @property
    def chain_id(self) -> int:
        return self.token0.chain_id

    def involves_token(self, token: Token) -> bool:
        return token == self.token0 or token == self.token1

    def other_token(self, token: Token) -> Token:
        """The token on the other side of the pool."""
        if token == self.token0:
            return self.token1
        if token == self.token1:
            return self.token0
        raise InvalidToken(f"{token!r} is not in pair {self!r}", token=token, pair=self)

    def reserve_of(self, token: Token) -> CurrencyAmount:
        if token == self.token0:
            return self.reserve0
        if token == self.token1:
            return self.reserve1
        raise InvalidToken(f"{token!r} is not in pair {self!r}", token=token, pair=self)

    def _swap_params(self, token_in: Token) -> SwapParams:
        m0, m1 = self._multipliers
        m_in, m_out = (m0, m1) if token_in == self.token0 else (m1, m0)
        return SwapParams(
            swap_fee=self.swap_fee,
            amplification_coefficient=self.amplification_coefficient,
            multiplier_in=m_in,
            multiplier_out=m_out,
        )

    def _oriented_reserves(self, token_in: Token) -> tuple[int, int]:
        reserve_in = self.reserve_of(token_in).quotient
        reserve_out = self.reserve_of(self.other_token(token_in)).quotient
        if reserve_in < MINIMUM_LIQUIDITY or reserve_out < MINIMUM_LIQUIDITY:
            raise InsufficientLiquidity(
                f"Pair {self!r} reserves ({reserve_in}, {reserve_out}) are below "
                f"minimum liquidity {MINIMUM_LIQUIDITY}",
                pair=self,
                token=token_in,
            )
        return reserve_in, reserve_out

    @staticmethod
    def _raw_amount(token: Token, amount: CurrencyAmount | int) -> int:
        if isinstance(amount, CurrencyAmount):
            if not amount.currency.wrapped.equals(token):
                raise InvalidToken(
                    f"Amount in {amount.currency!r} does not match token {token!r}",
                    token=amount.currency,
                )
            raw = amount.quotient
        else:
            raw = amount
        if raw <= 0:
            raise InvalidAmount(f"Swap amount must be positive, got {raw}", token=token)
        return raw

    def quote_output_for_input(self, input_token: Token, input_amount: CurrencyAmount | int) -> CurrencyAmount:
        """Output amount for swapping an exact ``input_amount`` of ``input_token``.

        Args:
            input_token: One of the pair's tokens
            input_amount: Raw amount (int) or CurrencyAmount of ``input_token``

        Returns:
            Amount of the other token, rounded down

        Raises:
            InvalidToken: If ``input_token`` is not in the pair
            InsufficientLiquidity: If reserves are empty or the output would drain the pool
            InsufficientInputAmount: If the input is too small to produce any output
            ConvergenceFailure: If the stable solver does not converge
        """
        output_token = self.other_token(input_token)
        amount_in = self._raw_amount(input_token, input_amount)
        reserve_in, reserve_out = self._oriented_reserves(input_token)

        try:
            amount_out = get_curve(self.curve_id).get_amount_out(
                amount_in, reserve_in, reserve_out, self._swap_params(input_token)
            )
        except AmmSdkError as err:
            err.add_context(pair=self)
            raise

        logger.debug(
            "pair_quote_exact_input",
            curve_id=int(self.curve_id),
            token_in=input_token.address,
            amount_in=amount_in,
            amount_out=amount_out,
        )
        return CurrencyAmount.from_raw_amount(output_token, amount_out)

    def quote_input_for_output(self, output_token: Token, output_amount: CurrencyAmount | int) -> CurrencyAmount:
        """Minimum input needed to receive at least ``output_amount`` of ``output_token``.

        Args:
            output_token: One of the pair's tokens
            output_amount: Raw amount (int) or CurrencyAmount of ``output_token``

        Returns:
            Amount of the other token, rounded up

        Raises:
            InvalidToken: If ``output_token`` is not in the pair
            InsufficientLiquidity: If reserves are empty or the output is not below the reserve
            ConvergenceFailure: If the stable solver does not converge
        """
        input_token = self.other_token(output_token)
        amount_out = self._raw_amount(output_token, output_amount)
        reserve_in, reserve_out = self._oriented_reserves(input_token)

        try:
            amount_in = get_curve(self.curve_id).get_amount_in(
                amount_out, reserve_in, reserve_out, self._swap_params(input_token)
            )
        except AmmSdkError as err:
            err.add_context(pair=self)
            raise

        logger.debug(
            "pair_quote_exact_output",
            curve_id=int(self.curve_id),
            token_out=output_token.address,
            amount_out=amount_out,
            amount_in=amount_in,
        )
        return CurrencyAmount.from_raw_amount(input_token, amount_in)

    def get_output_amount(self, input_amount: CurrencyAmount) -> tuple[CurrencyAmount, Pair]:
        """Exact-input swap returning the output and the pool state after it."""
        input_token = input_amount.currency.wrapped
        output_amount = self.quote_output_for_input(input_token, input_amount)
        return output_amount, self._after_swap(input_token, input_amount.quotient, output_amount.quotient)

    def get_input_amount(self, output_amount: CurrencyAmount) -> tuple[CurrencyAmount, Pair]:
        """Exact-output swap returning the required input and the pool state after it."""
        output_token = output_amount.currency.wrapped
        input_amount = self.quote_input_for_output(output_token, output_amount)
        input_token = self.other_token(output_token)
        return input_amount, self._after_swap(input_token, input_amount.quotient, output_amount.quotient)

    def _after_swap(self, input_token: Token, amount_in: int, amount_out: int) -> Pair:
        # the whole input, fee included, stays in the pool
        if input_token == self.token0:
            return self.with_reserves(self.reserve0.quotient + amount_in, self.reserve1.quotient - amount_out)
        return self.with_reserves(self.reserve0.quotient - amount_out, self.reserve1.quotient + amount_in)

    def spot_price(self, of_token: Token) -> Price:
        """Marginal price of ``of_token`` in the other token, ignoring fees.

        Constant product pairs use the reserve ratio; stable pairs use the
        slope of the invariant at the current balances.

        Raises:
            InvalidToken: If ``of_token`` is not in the pair
        """
        quote_token = self.other_token(of_token)
        reserve_base = self.reserve_of(of_token).quotient
        reserve_quote = self.reserve_of(quote_token).quotient
        if reserve_base == 0 or reserve_quote == 0:
            raise InsufficientLiquidity(
                f"Pair {self!r} has an empty reserve, no spot price",
                pair=self,
                token=of_token,
            )
        numerator, denominator = get_curve(self.curve_id).spot_price(
            reserve_base, reserve_quote, self._swap_params(of_token)
        )
        return Price(of_token, quote_token, denominator, numerator)

    def price_of(self, token: Token) -> Price:
        return self.spot_price(token)

    @property
    def token0_price(self) -> Price:
        """Price of token0 in token1."""
        return self.spot_price(self.token0)

    @property
    def token1_price(self) -> Price:
        """Price of token1 in token0."""
        return self.spot_price(self.token1)

    def __repr__(self) -> str:
        return (
            f"Pair({self.token0.symbol or self.token0.address}/{self.token1.symbol or self.token1.address}, "
            f"curve_id={int(self.curve_id)}, reserves=({self.reserve0.quotient}, {self.reserve1.quotient}))"
        )

"""Route: an ordered chain of pairs from an input to an output currency."""

from __future__ import annotations

from collections.abc import Sequence
from functools import cached_property, reduce

import structlog

from amm_sdk.entities.currency import Currency, Token
from amm_sdk.entities.fractions import Price
from amm_sdk.entities.pair import Pair
from amm_sdk.errors import ChainIdMismatch, DisconnectedPath, EmptyRoute, InputNotInRoute, OutputNotInRoute

logger = structlog.get_logger()


class Route:
    """A validated path through one or more pairs.

    The input and output may be the native currency; pairs and ``path`` always
    use its wrapped token.

    Attributes:
        pairs: Pairs in swap order
        path: Tokens visited, ``len(pairs) + 1`` long
        input: Currency the trade starts with
        output: Currency the trade ends with
    """

    def __init__(self, pairs: Sequence[Pair], input: Currency, output: Currency) -> None:
        if len(pairs) == 0:
            raise EmptyRoute("Route needs at least one pair")

        chain_id = pairs[0].chain_id
        for i, pair in enumerate(pairs):
            if pair.chain_id != chain_id:
                raise ChainIdMismatch(
                    f"Pair at hop {i} is on chain {pair.chain_id}, route is on chain {chain_id}",
                    hop=i,
                    pair=pair,
                )

        wrapped_input = input.wrapped
        if not pairs[0].involves_token(wrapped_input):
            raise InputNotInRoute(f"Input {input!r} is not in the first pair {pairs[0]!r}", token=input, hop=0)
        wrapped_output = output.wrapped
        if not pairs[-1].involves_token(wrapped_output):
            raise OutputNotInRoute(
                f"Output {output!r} is not in the last pair {pairs[-1]!r}",
                token=output,
                hop=len(pairs) - 1,
            )

        path: list[Token] = [wrapped_input]
        for i, pair in enumerate(pairs):
            current_input = path[i]
            if not pair.involves_token(current_input):
                raise DisconnectedPath(
                    f"Pair at hop {i} ({pair!r}) does not contain {current_input!r}",
                    hop=i,
                    pair=pair,
                    token=current_input,
                )
            path.append(pair.other_token(current_input))

        if path[-1] != wrapped_output:
            raise DisconnectedPath(
                f"Path ends at {path[-1]!r}, expected {wrapped_output!r}",
                hop=len(pairs) - 1,
                token=path[-1],
            )

        self.pairs: tuple[Pair, ...] = tuple(pairs)
        self.path: tuple[Token, ...] = tuple(path)
        self.input = input
        self.output = output

        logger.debug(
            "route_built",
            chain_id=chain_id,
            hops=len(self.pairs),
            path=[token.address for token in self.path],
        )

    @property
    def chain_id(self) -> int:
        return self.pairs[0].chain_id

    @property
    def curve_ids(self) -> list[int]:
        return [int(pair.curve_id) for pair in self.pairs]

    @cached_property
    def mid_price(self) -> Price:
        """Marginal price of the input in the output, composed across hops.

        Computed on first access and cached on this Route.
        """
        prices = [pair.spot_price(self.path[i]) for i, pair in enumerate(self.pairs)]
        reduced = reduce(lambda accumulated, price: accumulated.multiply(price), prices[1:], prices[0])
        return Price(self.input, self.output, reduced.denominator, reduced.numerator)

    def __repr__(self) -> str:
        symbols = " -> ".join(token.symbol or token.address for token in self.path)
        return f"Route({symbols})"

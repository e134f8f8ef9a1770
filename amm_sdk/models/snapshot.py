"""Pydantic models for pair snapshots supplied by the data source.

The core never reads the ledger itself. Whatever fetches pool state hands it
over as a PairSnapshot, using either snake_case or the camelCase names the
contracts and JSON APIs use (``curveId``, ``swapFee``,
``amplificationCoefficient``).
"""

from pydantic import BaseModel, ConfigDict, Field, model_validator

from amm_sdk.models.types import Address, Uint256


class TokenInfo(BaseModel):
    """Token metadata resolved by the metadata collaborator."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    chain_id: int = Field(alias="chainId", gt=0)
    address: Address
    decimals: int = Field(ge=0, le=254)
    symbol: str | None = None
    name: str | None = None


class PairSnapshot(BaseModel):
    """State of one pool at some block, as read by the caller.

    Reserves are given for ``token0``/``token1`` as passed; they do not have to
    be in canonical order, the Pair sorts them.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    token0: TokenInfo
    token1: TokenInfo
    curve_id: int = Field(alias="curveId", ge=0)
    reserve0: Uint256
    reserve1: Uint256
    swap_fee: int = Field(alias="swapFee", ge=0)
    amplification_coefficient: Uint256 | None = Field(default=None, alias="amplificationCoefficient")

    @model_validator(mode="after")
    def _same_chain(self) -> "PairSnapshot":
        if self.token0.chain_id != self.token1.chain_id:
            raise ValueError(
                f"Snapshot tokens are on different chains: {self.token0.chain_id} != {self.token1.chain_id}"
            )
        return self

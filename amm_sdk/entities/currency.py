"""Currencies: ERC20-style tokens and the chain's native currency."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TypeAlias

from amm_sdk.constants import NATIVE_CURRENCY_INFO, WRAPPED_NATIVE_TOKENS
from amm_sdk.errors import ChainIdMismatch, InvalidAddress, InvalidToken, SameToken, ValidationError
from amm_sdk.models.types import checksum_address, normalize_address


@dataclass(frozen=True, eq=False)
class Token:
    """A token on a specific chain.

    The address is checksummed on construction, so two tokens compare equal
    iff their chain ids and addresses match, regardless of the input casing.

    Attributes:
        chain_id: Chain the token lives on
        address: EIP-55 checksummed contract address
        decimals: Decimal places of the raw amount
        symbol: Optional ticker symbol
        name: Optional display name
    """

    chain_id: int
    address: str
    decimals: int
    symbol: str | None = None
    name: str | None = None

    is_native: bool = field(default=False, init=False, repr=False)
    is_token: bool = field(default=True, init=False, repr=False)

    def __post_init__(self) -> None:
        try:
            address = checksum_address(self.address)
        except ValueError as err:
            raise InvalidAddress(str(err), address=self.address) from err
        if not 0 <= self.decimals < 255:
            raise ValidationError(f"Token decimals out of range: {self.decimals}", token=address)
        object.__setattr__(self, "address", address)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Token):
            return NotImplemented
        return self.chain_id == other.chain_id and self.address == other.address

    def __hash__(self) -> int:
        return hash((self.chain_id, self.address))

    def __repr__(self) -> str:
        label = self.symbol or self.address
        return f"Token({label}, chain_id={self.chain_id})"

    def equals(self, other: Currency) -> bool:
        return isinstance(other, Token) and self == other

    @property
    def wrapped(self) -> Token:
        return self

    def sorts_before(self, other: Token) -> bool:
        """Whether this token is token0 in a pair with ``other``.

        Raises:
            ChainIdMismatch: If the tokens are on different chains
            SameToken: If both tokens have the same address
        """
        if self.chain_id != other.chain_id:
            raise ChainIdMismatch(
                f"Cannot order tokens from chains {self.chain_id} and {other.chain_id}",
                token=self,
                other=other,
            )
        if self.address == other.address:
            raise SameToken(f"Cannot order token {self.address} against itself", token=self)
        return normalize_address(self.address) < normalize_address(other.address)


@dataclass(frozen=True, eq=False)
class NativeCurrency:
    """The chain's native currency (ETH, AVAX, ...).

    Pools only hold the wrapped form; routes and trades accept the native
    currency at either end and the router takes care of wrapping and
    unwrapping.
    """

    chain_id: int
    wrapped_token: Token
    symbol: str | None = None
    name: str | None = None
    decimals: int = 18

    is_native: bool = field(default=True, init=False, repr=False)
    is_token: bool = field(default=False, init=False, repr=False)

    def __post_init__(self) -> None:
        if self.wrapped_token.chain_id != self.chain_id:
            raise ChainIdMismatch(
                "Wrapped token must be on the same chain as the native currency",
                chain_id=self.chain_id,
                token=self.wrapped_token,
            )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, NativeCurrency):
            return NotImplemented
        return self.chain_id == other.chain_id

    def __hash__(self) -> int:
        return hash(("native", self.chain_id))

    def __repr__(self) -> str:
        return f"NativeCurrency({self.symbol}, chain_id={self.chain_id})"

    def equals(self, other: Currency) -> bool:
        return isinstance(other, NativeCurrency) and self == other

    @property
    def wrapped(self) -> Token:
        return self.wrapped_token

    @classmethod
    def on_chain(cls, chain_id: int) -> NativeCurrency:
        """Native currency for a chain with a well-known wrapped token.

        Raises:
            InvalidToken: If the chain has no registered wrapped-native token
        """
        if chain_id not in WRAPPED_NATIVE_TOKENS:
            raise InvalidToken(f"No wrapped native token known for chain {chain_id}", chain_id=chain_id)
        address, wrapped_symbol, wrapped_name = WRAPPED_NATIVE_TOKENS[chain_id]
        symbol, name = NATIVE_CURRENCY_INFO[chain_id]
        wrapped = Token(chain_id, address, 18, wrapped_symbol, wrapped_name)
        return cls(chain_id=chain_id, wrapped_token=wrapped, symbol=symbol, name=name)


Currency: TypeAlias = Token | NativeCurrency

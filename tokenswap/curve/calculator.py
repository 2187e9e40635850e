"""Swap calculations shared by every curve.

Defines the CurveCalculator interface, the trade and rounding directions,
and the result types the curves return.
"""

from __future__ import annotations

import functools
from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import TypeVar

from tokenswap.constants import INITIAL_SWAP_POOL_AMOUNT
from tokenswap.errors import CalculationError, EmptySupply
from tokenswap.math.fixed_point import PreciseNumber

T = TypeVar("T")


class TradeDirection(str, Enum):
    """The direction of a trade.

    Curves can treat each token differently (by adding offsets or prices),
    so the direction selects which reserve is the source.
    """

    A_TO_B = "a_to_b"
    B_TO_A = "b_to_a"

    def opposite(self) -> TradeDirection:
        """A to B becomes B to A, and vice versa."""
        if self is TradeDirection.A_TO_B:
            return TradeDirection.B_TO_A
        return TradeDirection.A_TO_B


class RoundDirection(str, Enum):
    """The direction to round pool token conversions.

    FLOOR whenever the pool pays out, CEILING whenever the user pays in or
    mints pool tokens, so no deposit or withdrawal loses pool value.
    """

    FLOOR = "floor"
    CEILING = "ceiling"


@dataclass(frozen=True)
class SwapWithoutFeesResult:
    """Amounts moved by a swap before any fee is applied."""

    source_amount_swapped: int
    destination_amount_swapped: int


@dataclass(frozen=True)
class TradingTokenResult:
    """Amounts of each token matching a number of pool tokens."""

    token_a_amount: int
    token_b_amount: int


def map_zero_to_none(x: int) -> int | None:
    """Treat a zero amount as a failed calculation."""
    if x == 0:
        return None
    return x


def none_on_calculation_error(func: Callable[..., T]) -> Callable[..., T | None]:
    """Turn checked-arithmetic failures inside func into a None result."""

    @functools.wraps(func)
    def wrapper(*args, **kwargs):  # type: ignore[no-untyped-def]
        try:
            return func(*args, **kwargs)
        except CalculationError:
            return None

    return wrapper


def swap_reserves(
    trade_direction: TradeDirection,
    swap_token_a_amount: int,
    swap_token_b_amount: int,
) -> tuple[int, int]:
    """Order reserves as (source, destination) for a trade direction."""
    if trade_direction is TradeDirection.A_TO_B:
        return swap_token_a_amount, swap_token_b_amount
    return swap_token_b_amount, swap_token_a_amount


class CurveCalculator(ABC):
    """Operations required on a swap curve.

    All amounts are non-negative integers. Methods returning an optional
    value return None when any checked step overflows, divides by zero or
    underflows; they never raise on caller-controlled input.
    """

    @abstractmethod
    def swap_without_fees(
        self,
        source_amount: int,
        swap_source_amount: int,
        swap_destination_amount: int,
        trade_direction: TradeDirection,
    ) -> SwapWithoutFeesResult | None:
        """Calculate how much destination token a source amount buys.

        Args:
            source_amount: Amount of source token offered
            swap_source_amount: Pool reserve of the source token
            swap_destination_amount: Pool reserve of the destination token
            trade_direction: Which token is the source

        Returns:
            Swapped amounts, or None if the trade is too small or fails
        """
        ...

    def new_pool_supply(self) -> int:
        """Get the supply for a new pool (Balancer-style fixed amount)."""
        return INITIAL_SWAP_POOL_AMOUNT

    @abstractmethod
    def pool_tokens_to_trading_tokens(
        self,
        pool_tokens: int,
        pool_token_supply: int,
        swap_token_a_amount: int,
        swap_token_b_amount: int,
        round_direction: RoundDirection,
    ) -> TradingTokenResult | None:
        """Get the trading tokens matching an amount of pool tokens."""
        ...

    @abstractmethod
    def deposit_single_token_type(
        self,
        source_amount: int,
        swap_token_a_amount: int,
        swap_token_b_amount: int,
        pool_supply: int,
        trade_direction: TradeDirection,
    ) -> int | None:
        """Get the pool tokens minted for depositing one token type.

        This essentially performs a swap followed by a deposit, so it moves
        the spot price of the pool. See the single-asset deposit section of
        the Balancer whitepaper for background.
        """
        ...

    @abstractmethod
    def withdraw_single_token_type_exact_out(
        self,
        source_amount: int,
        swap_token_a_amount: int,
        swap_token_b_amount: int,
        pool_supply: int,
        trade_direction: TradeDirection,
        round_direction: RoundDirection,
    ) -> int | None:
        """Get the pool tokens burned to withdraw an exact amount of one token.

        Used for single-sided withdrawals and for converting the owner
        trading fee to pool tokens. It essentially performs a withdrawal
        followed by a swap.
        """
        ...

    @abstractmethod
    def validate(self) -> None:
        """Validate that the curve has no invalid parameters.

        Raises:
            InvalidCurve: If a parameter is invalid
        """
        ...

    def validate_supply(self, token_a_amount: int, token_b_amount: int) -> None:
        """Validate the starting reserves of a new pool.

        Raises:
            EmptySupply: If either reserve is zero
        """
        if token_a_amount == 0:
            raise EmptySupply("Token A reserve is empty")
        if token_b_amount == 0:
            raise EmptySupply("Token B reserve is empty")

    def allows_deposits(self) -> bool:
        """Whether deposits are allowed after initialization."""
        return True

    @abstractmethod
    def normalized_value(
        self,
        swap_token_a_amount: int,
        swap_token_b_amount: int,
    ) -> PreciseNumber | None:
        """Total value of the pool with the dimension of one token.

        The constant product invariant has dimension tokens^2, so its
        normalized value is the square root. Used to check that no trade,
        deposit or withdrawal loses pool value.
        """
        ...

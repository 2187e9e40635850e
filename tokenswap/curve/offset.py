"""Offset curve.

A constant product curve with a fixed amount added to the token B reserve.
The virtual B liquidity lets a pool sell token A at a starting price without
holding any token B, for example to bootstrap the price of a new token.
"""

from __future__ import annotations

from dataclasses import dataclass

from tokenswap.curve import constant_product
from tokenswap.curve.calculator import (
    CurveCalculator,
    RoundDirection,
    SwapWithoutFeesResult,
    TradeDirection,
    TradingTokenResult,
)
from tokenswap.errors import EmptySupply, InvalidCurve
from tokenswap.math.fixed_point import PreciseNumber
from tokenswap.safe_int import S


def _offset_or_none(amount: int, offset: int) -> int | None:
    total = amount + offset
    if total > S.MAX:
        return None
    return total


@dataclass(frozen=True)
class OffsetCurve(CurveCalculator):
    """Constant product curve on (a, b + token_b_offset).

    Deposits are disabled: the offset makes the pool share of token B
    meaningless, so liquidity can only leave the pool after initialization.

    Attributes:
        token_b_offset: Virtual amount added to the token B reserve
    """

    token_b_offset: int = 0

    def swap_without_fees(
        self,
        source_amount: int,
        swap_source_amount: int,
        swap_destination_amount: int,
        trade_direction: TradeDirection,
    ) -> SwapWithoutFeesResult | None:
        if trade_direction is TradeDirection.B_TO_A:
            swap_source_amount = _offset_or_none(swap_source_amount, self.token_b_offset)
            if swap_source_amount is None:
                return None
        else:
            swap_destination_amount = _offset_or_none(swap_destination_amount, self.token_b_offset)
            if swap_destination_amount is None:
                return None
        return constant_product.swap(source_amount, swap_source_amount, swap_destination_amount)

    def pool_tokens_to_trading_tokens(
        self,
        pool_tokens: int,
        pool_token_supply: int,
        swap_token_a_amount: int,
        swap_token_b_amount: int,
        round_direction: RoundDirection,
    ) -> TradingTokenResult | None:
        """Convert on the real reserves; the offset is never paid out."""
        return constant_product.pool_tokens_to_trading_tokens(
            pool_tokens,
            pool_token_supply,
            swap_token_a_amount,
            swap_token_b_amount,
            round_direction,
        )

    def deposit_single_token_type(
        self,
        source_amount: int,
        swap_token_a_amount: int,
        swap_token_b_amount: int,
        pool_supply: int,
        trade_direction: TradeDirection,
    ) -> int | None:
        swap_token_b_amount = _offset_or_none(swap_token_b_amount, self.token_b_offset)
        if swap_token_b_amount is None:
            return None
        return constant_product.deposit_single_token_type(
            source_amount,
            swap_token_a_amount,
            swap_token_b_amount,
            pool_supply,
            trade_direction,
            RoundDirection.FLOOR,
        )

    def withdraw_single_token_type_exact_out(
        self,
        source_amount: int,
        swap_token_a_amount: int,
        swap_token_b_amount: int,
        pool_supply: int,
        trade_direction: TradeDirection,
        round_direction: RoundDirection,
    ) -> int | None:
        swap_token_b_amount = _offset_or_none(swap_token_b_amount, self.token_b_offset)
        if swap_token_b_amount is None:
            return None
        return constant_product.withdraw_single_token_type_exact_out(
            source_amount,
            swap_token_a_amount,
            swap_token_b_amount,
            pool_supply,
            trade_direction,
            round_direction,
        )

    def validate(self) -> None:
        # Without an offset an empty B reserve makes the invariant zero
        if self.token_b_offset == 0:
            raise InvalidCurve("Token B offset must be nonzero")

    def validate_supply(self, token_a_amount: int, token_b_amount: int) -> None:
        if token_a_amount == 0:
            raise EmptySupply("Token A reserve is empty")

    def allows_deposits(self) -> bool:
        return False

    def normalized_value(
        self,
        swap_token_a_amount: int,
        swap_token_b_amount: int,
    ) -> PreciseNumber | None:
        swap_token_b_amount = _offset_or_none(swap_token_b_amount, self.token_b_offset)
        if swap_token_b_amount is None:
            return None
        return constant_product.normalized_value(swap_token_a_amount, swap_token_b_amount)

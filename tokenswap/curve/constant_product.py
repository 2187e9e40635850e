"""Constant product curve.

Uniswap-style invariant: reserve_a * reserve_b = k. The module-level
functions are shared with the offset curve, which runs the same math on
shifted reserves.
"""

from __future__ import annotations

from dataclasses import dataclass

from tokenswap.curve.calculator import (
    CurveCalculator,
    RoundDirection,
    SwapWithoutFeesResult,
    TradeDirection,
    TradingTokenResult,
    map_zero_to_none,
    none_on_calculation_error,
    swap_reserves,
)
from tokenswap.math.fixed_point import PreciseNumber
from tokenswap.safe_int import S


@none_on_calculation_error
def swap(
    source_amount: int,
    swap_source_amount: int,
    swap_destination_amount: int,
) -> SwapWithoutFeesResult | None:
    """Constant product swap ensuring the invariant never decreases.

    The new destination reserve is rounded up, and the source amount is then
    recomputed as the smallest amount that still produces it, so the trader
    is never charged for value the pool does not hand out.

    Returns:
        Swapped amounts, or None if no destination token would be paid out
    """
    invariant = S(swap_source_amount) * S(swap_destination_amount)

    new_swap_source_amount = S(swap_source_amount) + S(source_amount)
    new_swap_destination_amount, new_swap_source_amount = invariant.ceil_div_with_divisor(
        new_swap_source_amount
    )

    source_amount_swapped = new_swap_source_amount - swap_source_amount
    destination_amount_swapped = map_zero_to_none(
        (S(swap_destination_amount) - new_swap_destination_amount).value
    )
    if destination_amount_swapped is None:
        return None

    return SwapWithoutFeesResult(
        source_amount_swapped=source_amount_swapped.value,
        destination_amount_swapped=destination_amount_swapped,
    )


@none_on_calculation_error
def pool_tokens_to_trading_tokens(
    pool_tokens: int,
    pool_token_supply: int,
    swap_token_a_amount: int,
    swap_token_b_amount: int,
    round_direction: RoundDirection,
) -> TradingTokenResult | None:
    """Get the amount of trading tokens for the given amount of pool tokens.

    Both legs are proportional to the pool share. Ceiling only rounds a leg
    up when it is already nonzero, so dust never turns into a full token.
    """
    amounts = []
    for reserve in (swap_token_a_amount, swap_token_b_amount):
        numerator = S(pool_tokens) * S(reserve)
        amount = numerator // pool_token_supply
        if round_direction is RoundDirection.CEILING:
            if numerator % pool_token_supply > 0 and amount > 0:
                amount = amount + 1
        amounts.append(amount.value)

    return TradingTokenResult(token_a_amount=amounts[0], token_b_amount=amounts[1])


def _round_pool_tokens(pool_tokens: PreciseNumber, round_direction: RoundDirection) -> int:
    if round_direction is RoundDirection.FLOOR:
        return pool_tokens.floor().to_integer()
    return pool_tokens.ceiling().to_integer()


@none_on_calculation_error
def deposit_single_token_type(
    source_amount: int,
    swap_token_a_amount: int,
    swap_token_b_amount: int,
    pool_supply: int,
    trade_direction: TradeDirection,
    round_direction: RoundDirection,
) -> int | None:
    """Get the pool tokens for depositing one token type.

    pool_tokens = pool_supply * (sqrt(1 + source_amount / swap_source_amount) - 1)

    This matches a swap of part of the deposit followed by a balanced
    deposit, since the invariant grows with the square of the pool share.
    """
    swap_source_amount, _ = swap_reserves(trade_direction, swap_token_a_amount, swap_token_b_amount)
    ratio = PreciseNumber.from_integer(source_amount) / PreciseNumber.from_integer(swap_source_amount)
    one = PreciseNumber.one()
    root = (one + ratio).sqrt() - one
    pool_tokens = PreciseNumber.from_integer(pool_supply) * root
    return _round_pool_tokens(pool_tokens, round_direction)


@none_on_calculation_error
def withdraw_single_token_type_exact_out(
    source_amount: int,
    swap_token_a_amount: int,
    swap_token_b_amount: int,
    pool_supply: int,
    trade_direction: TradeDirection,
    round_direction: RoundDirection,
) -> int | None:
    """Get the pool tokens burned to withdraw an exact amount of one token.

    pool_tokens = pool_supply * (1 - sqrt(1 - source_amount / swap_source_amount))

    A ratio above one (withdrawing more than the reserve) is clamped so the
    whole supply is required.
    """
    swap_source_amount, _ = swap_reserves(trade_direction, swap_token_a_amount, swap_token_b_amount)
    ratio = PreciseNumber.from_integer(source_amount) / PreciseNumber.from_integer(swap_source_amount)
    one = PreciseNumber.one()
    base = one.checked_sub(ratio) or PreciseNumber.zero()
    root = one - base.sqrt()
    pool_tokens = PreciseNumber.from_integer(pool_supply) * root
    return _round_pool_tokens(pool_tokens, round_direction)


@none_on_calculation_error
def normalized_value(
    swap_token_a_amount: int,
    swap_token_b_amount: int,
) -> PreciseNumber | None:
    """sqrt(a * b): the invariant scaled back to the dimension of one token."""
    swap_token_a_amount_precise = PreciseNumber.from_integer(swap_token_a_amount)
    swap_token_b_amount_precise = PreciseNumber.from_integer(swap_token_b_amount)
    return (swap_token_a_amount_precise * swap_token_b_amount_precise).sqrt()


@dataclass(frozen=True)
class ConstantProductCurve(CurveCalculator):
    """Constant product curve: reserve_a * reserve_b = k."""

    def swap_without_fees(
        self,
        source_amount: int,
        swap_source_amount: int,
        swap_destination_amount: int,
        trade_direction: TradeDirection,
    ) -> SwapWithoutFeesResult | None:
        return swap(source_amount, swap_source_amount, swap_destination_amount)

    def pool_tokens_to_trading_tokens(
        self,
        pool_tokens: int,
        pool_token_supply: int,
        swap_token_a_amount: int,
        swap_token_b_amount: int,
        round_direction: RoundDirection,
    ) -> TradingTokenResult | None:
        return pool_tokens_to_trading_tokens(
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
        return deposit_single_token_type(
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
        return withdraw_single_token_type_exact_out(
            source_amount,
            swap_token_a_amount,
            swap_token_b_amount,
            pool_supply,
            trade_direction,
            round_direction,
        )

    def normalized_value(
        self,
        swap_token_a_amount: int,
        swap_token_b_amount: int,
    ) -> PreciseNumber | None:
        return normalized_value(swap_token_a_amount, swap_token_b_amount)

    def validate(self) -> None:
        pass

"""Constant price curve.

Token B trades at a fixed price in units of token A, set when the pool is
initialized. The pool value is additive (a + b * price) rather than
multiplicative, so conversions between pool tokens and trading tokens are
linear.
"""

from __future__ import annotations

from dataclasses import dataclass

from tokenswap.constants import U128_MAX
from tokenswap.curve.calculator import (
    CurveCalculator,
    RoundDirection,
    SwapWithoutFeesResult,
    TradeDirection,
    TradingTokenResult,
    map_zero_to_none,
    none_on_calculation_error,
)
from tokenswap.errors import EmptySupply, InvalidCurve
from tokenswap.math.fixed_point import PreciseNumber
from tokenswap.safe_int import S, S256


@none_on_calculation_error
def trading_tokens_to_pool_tokens(
    token_b_price: int,
    source_amount: int,
    swap_token_a_amount: int,
    swap_token_b_amount: int,
    pool_supply: int,
    trade_direction: TradeDirection,
    round_direction: RoundDirection,
) -> int | None:
    """Get the pool tokens matching an amount of token A or B.

    pool_tokens = pool_supply * given_value / (a + b * price)

    where given_value is the amount itself for token A and amount * price
    for token B. Computed over u256; the result must fit in u128.
    """
    price = S256(token_b_price)
    if trade_direction is TradeDirection.A_TO_B:
        given_value = S256(source_amount)
    else:
        given_value = S256(source_amount) * price
    total_value = S256(swap_token_b_amount) * price + swap_token_a_amount

    numerator = S256(pool_supply) * given_value
    if round_direction is RoundDirection.FLOOR:
        pool_tokens = numerator // total_value
    else:
        pool_tokens, _ = numerator.ceil_div_with_divisor(total_value)
    return S(pool_tokens.value).value


@dataclass(frozen=True)
class ConstantPriceCurve(CurveCalculator):
    """Constant price curve.

    Attributes:
        token_b_price: Amount of token A required to get one token B
    """

    token_b_price: int = 0

    @none_on_calculation_error
    def swap_without_fees(
        self,
        source_amount: int,
        swap_source_amount: int,
        swap_destination_amount: int,
        trade_direction: TradeDirection,
    ) -> SwapWithoutFeesResult | None:
        """Swap at the fixed price; reserves are ignored.

        Buying token B with an amount of A that is not a multiple of the
        price only takes the multiple, leaving the remainder with the trader.
        """
        price = S(self.token_b_price)
        amount = S(source_amount)

        if trade_direction is TradeDirection.B_TO_A:
            source_amount_swapped = amount
            destination_amount_swapped = amount * price
        else:
            destination_amount_swapped = amount // price
            source_amount_swapped = amount - amount % price

        if not source_amount_swapped or not destination_amount_swapped:
            return None
        return SwapWithoutFeesResult(
            source_amount_swapped=source_amount_swapped.value,
            destination_amount_swapped=destination_amount_swapped.value,
        )

    @none_on_calculation_error
    def pool_tokens_to_trading_tokens(
        self,
        pool_tokens: int,
        pool_token_supply: int,
        swap_token_a_amount: int,
        swap_token_b_amount: int,
        round_direction: RoundDirection,
    ) -> TradingTokenResult | None:
        """Split the value of pool tokens, weighted by the price of B.

        On CEILING the B leg rounds up twice (by price, then by supply), so it
        can exceed the single rounded division by one.
        """
        normalized = self.normalized_value(swap_token_a_amount, swap_token_b_amount)
        if normalized is None:
            return None
        total_value = normalized.to_integer()
        pool_value = S(pool_tokens) * total_value

        if round_direction is RoundDirection.FLOOR:
            token_a_amount = pool_value // pool_token_supply
            token_b_amount = pool_value // self.token_b_price // pool_token_supply
        else:
            token_a_amount, _ = pool_value.ceil_div_with_divisor(pool_token_supply)
            pool_value_as_token_b, _ = pool_value.ceil_div_with_divisor(self.token_b_price)
            token_b_amount, _ = pool_value_as_token_b.ceil_div_with_divisor(pool_token_supply)

        return TradingTokenResult(
            token_a_amount=token_a_amount.value,
            token_b_amount=token_b_amount.value,
        )

    def deposit_single_token_type(
        self,
        source_amount: int,
        swap_token_a_amount: int,
        swap_token_b_amount: int,
        pool_supply: int,
        trade_direction: TradeDirection,
    ) -> int | None:
        return trading_tokens_to_pool_tokens(
            self.token_b_price,
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
        return trading_tokens_to_pool_tokens(
            self.token_b_price,
            source_amount,
            swap_token_a_amount,
            swap_token_b_amount,
            pool_supply,
            trade_direction,
            round_direction,
        )

    def validate(self) -> None:
        if self.token_b_price == 0:
            raise InvalidCurve("Token B price must be nonzero")

    def validate_supply(self, token_a_amount: int, token_b_amount: int) -> None:
        # The pool can start with only token A, since B is priced against it.
        if token_a_amount == 0:
            raise EmptySupply("Token A reserve is empty")

    @none_on_calculation_error
    def normalized_value(
        self,
        swap_token_a_amount: int,
        swap_token_b_amount: int,
    ) -> PreciseNumber | None:
        """(a + b * price) / 2.

        The value is additive, unlike the multiplicative invariants of the
        other curves; halving it puts it in the dimension of one token.
        """
        swap_token_b_value = S(swap_token_b_amount) * self.token_b_price
        if swap_token_b_value.value + swap_token_a_amount > U128_MAX:
            # Halve each term first so the sum stays within u128
            value = swap_token_b_value // 2 + S(swap_token_a_amount) // 2
        else:
            value = (swap_token_b_value + swap_token_a_amount) // 2
        return PreciseNumber.from_integer(value.value)

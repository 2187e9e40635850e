"""Swap curve: a curve calculator composed with the pool fees.

SwapCurve is what the pool lifecycle talks to. It applies the fee model
around the raw curve math, so the calculators themselves stay fee-free.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, TypeAlias

from tokenswap.curve.calculator import (
    CurveCalculator,
    RoundDirection,
    TradeDirection,
    TradingTokenResult,
    none_on_calculation_error,
)
from tokenswap.curve.constant_price import ConstantPriceCurve
from tokenswap.curve.constant_product import ConstantProductCurve
from tokenswap.curve.fees import Fees
from tokenswap.curve.offset import OffsetCurve
from tokenswap.math.fixed_point import PreciseNumber
from tokenswap.safe_int import S

# Closed set of curve implementations
CurveVariant: TypeAlias = ConstantProductCurve | ConstantPriceCurve | OffsetCurve


class CurveType(str, Enum):
    """Curve types supported by the pool."""

    CONSTANT_PRODUCT = "constant_product"
    CONSTANT_PRICE = "constant_price"
    OFFSET = "offset"


@dataclass(frozen=True)
class SwapResult:
    """Result of a swap including fees.

    Token amounts are in source or destination token units. The pool token
    fields are filled in by the pool lifecycle once the owner fee has been
    converted.
    """

    source_amount_swapped: int
    destination_amount_swapped: int
    new_source_reserve: int
    new_destination_reserve: int
    trade_fee: int
    owner_fee: int
    owner_fee_pool_tokens: int = 0
    host_fee_pool_tokens: int = 0


def _calculator_class(curve_type: CurveType) -> type[CurveCalculator]:
    return {
        CurveType.CONSTANT_PRODUCT: ConstantProductCurve,
        CurveType.CONSTANT_PRICE: ConstantPriceCurve,
        CurveType.OFFSET: OffsetCurve,
    }[curve_type]


def curve_type_of(calculator: CurveCalculator) -> CurveType:
    """Get the tag of a calculator instance."""
    for curve_type in CurveType:
        if type(calculator) is _calculator_class(curve_type):
            return curve_type
    raise TypeError(f"Unknown curve calculator: {type(calculator).__name__}")


@dataclass(frozen=True)
class SwapCurve:
    """A curve calculator tagged with its type.

    Attributes:
        curve_type: Tag of the calculator
        calculator: The curve implementation
    """

    curve_type: CurveType
    calculator: CurveCalculator

    def __post_init__(self) -> None:
        expected = _calculator_class(self.curve_type)
        if type(self.calculator) is not expected:
            raise TypeError(
                f"{self.curve_type.value} curve requires {expected.__name__}, "
                f"got {type(self.calculator).__name__}"
            )

    @classmethod
    def create(cls, curve_type: CurveType | str, **params: Any) -> SwapCurve:
        """Build a swap curve from its tag and parameters.

        Example:
            SwapCurve.create(CurveType.CONSTANT_PRICE, token_b_price=100)
        """
        curve_type = CurveType(curve_type)
        return cls(curve_type, _calculator_class(curve_type)(**params))

    @classmethod
    def from_calculator(cls, calculator: CurveCalculator) -> SwapCurve:
        return cls(curve_type_of(calculator), calculator)

    @none_on_calculation_error
    def swap(
        self,
        source_amount: int,
        swap_source_amount: int,
        swap_destination_amount: int,
        trade_direction: TradeDirection,
        fees: Fees,
    ) -> SwapResult | None:
        """Swap source tokens for destination tokens, charging fees.

        The trade fee is taken from the source amount, then the owner fee
        from what remains. Both stay in the source reserve; the owner fee is
        returned separately so it can be minted as pool tokens.

        Args:
            source_amount: Amount of source token offered
            swap_source_amount: Pool reserve of the source token
            swap_destination_amount: Pool reserve of the destination token
            trade_direction: Which token is the source
            fees: Fee schedule of the pool

        Returns:
            SwapResult, or None if any step fails or the trade is too small
        """
        trade_fee = fees.trading_fee(source_amount)
        if trade_fee is None:
            return None
        amount_less_trade_fee = S(source_amount) - trade_fee

        owner_fee = fees.owner_trading_fee(amount_less_trade_fee.value)
        if owner_fee is None:
            return None
        amount_less_fees = amount_less_trade_fee - owner_fee

        result = self.calculator.swap_without_fees(
            amount_less_fees.value,
            swap_source_amount,
            swap_destination_amount,
            trade_direction,
        )
        if result is None:
            return None

        source_amount_swapped = S(result.source_amount_swapped) + trade_fee + owner_fee
        return SwapResult(
            source_amount_swapped=source_amount_swapped.value,
            destination_amount_swapped=result.destination_amount_swapped,
            new_source_reserve=(S(swap_source_amount) + source_amount_swapped).value,
            new_destination_reserve=(
                S(swap_destination_amount) - result.destination_amount_swapped
            ).value,
            trade_fee=trade_fee,
            owner_fee=owner_fee,
        )

    @none_on_calculation_error
    def deposit_single_token_type(
        self,
        source_amount: int,
        swap_token_a_amount: int,
        swap_token_b_amount: int,
        pool_supply: int,
        trade_direction: TradeDirection,
        fees: Fees,
    ) -> int | None:
        """Get pool tokens for a one-sided deposit, after fees.

        Half of the deposit is implicitly swapped for the other token, so the
        trade and owner fees are charged on that half.
        """
        if source_amount == 0:
            return 0
        half_source_amount = max(1, source_amount // 2)
        trade_fee = fees.trading_fee(half_source_amount)
        owner_fee = fees.owner_trading_fee(half_source_amount)
        if trade_fee is None or owner_fee is None:
            return None
        source_amount = (S(source_amount) - trade_fee - owner_fee).value
        return self.calculator.deposit_single_token_type(
            source_amount,
            swap_token_a_amount,
            swap_token_b_amount,
            pool_supply,
            trade_direction,
        )

    @none_on_calculation_error
    def withdraw_single_token_type_exact_out(
        self,
        source_amount: int,
        swap_token_a_amount: int,
        swap_token_b_amount: int,
        pool_supply: int,
        trade_direction: TradeDirection,
        fees: Fees,
    ) -> int | None:
        """Get pool tokens to burn for a one-sided withdrawal, after fees.

        Half of the output is implicitly swapped from the other token, so
        that half is grossed up by the trade and owner fees.
        """
        if source_amount == 0:
            return 0
        half_source_amount = (S(source_amount) + 1) // 2
        pre_fee_source_amount = fees.pre_trading_fee_amount(half_source_amount.value)
        if pre_fee_source_amount is None:
            return None
        source_amount = (S(source_amount) - half_source_amount + pre_fee_source_amount).value
        return self.calculator.withdraw_single_token_type_exact_out(
            source_amount,
            swap_token_a_amount,
            swap_token_b_amount,
            pool_supply,
            trade_direction,
            RoundDirection.CEILING,
        )

    def pool_tokens_to_trading_tokens(
        self,
        pool_tokens: int,
        pool_token_supply: int,
        swap_token_a_amount: int,
        swap_token_b_amount: int,
        round_direction: RoundDirection,
    ) -> TradingTokenResult | None:
        return self.calculator.pool_tokens_to_trading_tokens(
            pool_tokens,
            pool_token_supply,
            swap_token_a_amount,
            swap_token_b_amount,
            round_direction,
        )

    def normalized_value(
        self, swap_token_a_amount: int, swap_token_b_amount: int
    ) -> PreciseNumber | None:
        return self.calculator.normalized_value(swap_token_a_amount, swap_token_b_amount)

    def new_pool_supply(self) -> int:
        return self.calculator.new_pool_supply()

    def allows_deposits(self) -> bool:
        return self.calculator.allows_deposits()

    def validate(self) -> None:
        self.calculator.validate()

    def validate_supply(self, token_a_amount: int, token_b_amount: int) -> None:
        self.calculator.validate_supply(token_a_amount, token_b_amount)


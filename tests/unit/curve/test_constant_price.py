"""Tests for the constant price curve."""

import math
import random

import pytest

from tokenswap.constants import INITIAL_SWAP_POOL_AMOUNT, U64_MAX, U128_MAX
from tokenswap.curve.calculator import RoundDirection, TradeDirection
from tokenswap.curve.constant_price import ConstantPriceCurve, trading_tokens_to_pool_tokens
from tokenswap.errors import EmptySupply, InvalidCurve
from tokenswap.math.fixed_point import PreciseNumber
from tests.helpers import (
    CONVERSION_BASIS_POINTS_GUARANTEE,
    SAMPLE_COUNT,
    check_curve_value_from_swap,
    check_deposit_token_conversion,
    check_normalized_value_from_deposit,
    check_pool_value_from_withdraw,
    check_withdraw_token_conversion,
)


U32_MAX = 2**32 - 1


def _log_uniform(rng: random.Random, low: int, high: int) -> int:
    return int(10 ** rng.uniform(math.log10(low), math.log10(high)))


def _value_covers_both_legs(
    curve: ConstantPriceCurve,
    pool_token_amount: int,
    pool_token_supply: int,
    token_a: int,
    token_b: int,
) -> bool:
    """True if the pool tokens are worth at least one of each token, rounded twice."""
    value = curve.normalized_value(token_a, token_b)
    assert value is not None
    return (
        pool_token_amount * value.to_integer()
        >= 2 * curve.token_b_price * pool_token_supply
    )


def _sample_pool(rng: random.Random) -> tuple[ConstantPriceCurve, int, int, int]:
    """Pool with both sides worth within a factor of two of each other."""
    token_b_price = rng.randint(1, 1000)
    swap_token_b_amount = _log_uniform(rng, 10**8, 10**10)
    swap_token_a_amount = int(swap_token_b_amount * token_b_price * rng.uniform(0.5, 2))
    pool_supply = _log_uniform(rng, 10**9, 10**12)
    return (
        ConstantPriceCurve(token_b_price=token_b_price),
        swap_token_a_amount,
        swap_token_b_amount,
        pool_supply,
    )


class TestSwap:
    """Tests for swaps at the fixed price."""

    def test_no_reserves_needed(self):
        """At price one, both directions trade one for one whatever the reserves."""
        curve = ConstantPriceCurve(token_b_price=1)
        for direction in (TradeDirection.A_TO_B, TradeDirection.B_TO_A):
            result = curve.swap_without_fees(100, 0, 0, direction)
            assert result is not None
            assert result.source_amount_swapped == 100
            assert result.destination_amount_swapped == 100

    def test_large_price(self):
        """Less than one token B worth of A buys nothing."""
        token_b_price = 1_123_513
        curve = ConstantPriceCurve(token_b_price=token_b_price)
        token_b_amount = 500
        token_a_amount = token_b_amount * token_b_price

        assert (
            curve.swap_without_fees(
                token_b_price - 1, token_a_amount, token_b_amount, TradeDirection.A_TO_B
            )
            is None
        )
        assert (
            curve.swap_without_fees(1, token_a_amount, token_b_amount, TradeDirection.A_TO_B)
            is None
        )

        result = curve.swap_without_fees(
            token_b_price, token_a_amount, token_b_amount, TradeDirection.A_TO_B
        )
        assert result is not None
        assert result.source_amount_swapped == token_b_price
        assert result.destination_amount_swapped == 1

    def test_b_to_a_multiplies(self):
        """One token B buys price tokens A."""
        curve = ConstantPriceCurve(token_b_price=1_123_513)
        result = curve.swap_without_fees(1, 0, 0, TradeDirection.B_TO_A)
        assert result is not None
        assert (result.source_amount_swapped, result.destination_amount_swapped) == (1, 1_123_513)

    def test_a_to_b_keeps_remainder(self):
        """Only a multiple of the price is taken from the trader."""
        curve = ConstantPriceCurve(token_b_price=3)
        result = curve.swap_without_fees(10, 1_000, 1_000, TradeDirection.A_TO_B)
        assert result is not None
        assert (result.source_amount_swapped, result.destination_amount_swapped) == (9, 3)

    def test_zero_price_returns_none(self):
        """A zero price cannot trade in either direction."""
        curve = ConstantPriceCurve(token_b_price=0)
        assert curve.swap_without_fees(10, 100, 100, TradeDirection.A_TO_B) is None
        assert curve.swap_without_fees(10, 100, 100, TradeDirection.B_TO_A) is None


class TestPoolTokenConversion:
    """Tests for conversions between pool tokens and trading tokens."""

    def test_normalized_value(self, constant_price):
        """The value is half of a + b * price."""
        assert constant_price.normalized_value(10, 5) == PreciseNumber.from_integer(10)

    def test_normalized_value_halves_before_overflow(self):
        """A sum above u128 halves each term first."""
        curve = ConstantPriceCurve(token_b_price=2)
        value = curve.normalized_value(10, U128_MAX // 2)
        assert value == PreciseNumber.from_integer(2**127 + 4)

    def test_normalized_value_overflow_returns_none(self):
        """b * price beyond u128 returns None."""
        curve = ConstantPriceCurve(token_b_price=2)
        assert curve.normalized_value(10, U128_MAX) is None

    @pytest.mark.parametrize(
        "round_direction,expected",
        [(RoundDirection.FLOOR, (5, 2)), (RoundDirection.CEILING, (5, 3))],
    )
    def test_pool_tokens_to_trading_tokens(self, constant_price, round_direction, expected):
        """Half the supply is worth half the value in each token."""
        result = constant_price.pool_tokens_to_trading_tokens(5, 10, 10, 5, round_direction)
        assert result is not None
        assert (result.token_a_amount, result.token_b_amount) == expected

    def test_ceiling_rounds_token_b_twice(self):
        """The B leg rounds up by price and again by supply."""
        curve = ConstantPriceCurve(token_b_price=3)
        ceiling = curve.pool_tokens_to_trading_tokens(1, 4, 2, 2, RoundDirection.CEILING)
        floor = curve.pool_tokens_to_trading_tokens(1, 4, 2, 2, RoundDirection.FLOOR)
        assert ceiling is not None and floor is not None
        assert (ceiling.token_a_amount, ceiling.token_b_amount) == (1, 1)
        assert (floor.token_a_amount, floor.token_b_amount) == (1, 0)

    @pytest.mark.parametrize(
        "source_amount,direction",
        [(10, TradeDirection.A_TO_B), (5, TradeDirection.B_TO_A)],
    )
    def test_deposit_single_token_type(self, constant_price, source_amount, direction):
        """Ten A or five B are each a quarter of the pool value of twenty."""
        result = constant_price.deposit_single_token_type(source_amount, 10, 5, 100, direction)
        assert result == 50

    def test_rounding_direction(self, constant_price):
        """Three of twenty value units over a supply of seven is 1.05 pool tokens."""
        assert constant_price.deposit_single_token_type(3, 10, 5, 7, TradeDirection.A_TO_B) == 1
        for round_direction, expected in ((RoundDirection.FLOOR, 1), (RoundDirection.CEILING, 2)):
            result = constant_price.withdraw_single_token_type_exact_out(
                3, 10, 5, 7, TradeDirection.A_TO_B, round_direction
            )
            assert result == expected

    def test_empty_pool_returns_none(self):
        """A pool with no value cannot price pool tokens."""
        result = trading_tokens_to_pool_tokens(
            2, 10, 0, 0, 100, TradeDirection.A_TO_B, RoundDirection.FLOOR
        )
        assert result is None


class TestValidation:
    """Tests for curve and supply validation."""

    def test_zero_price_invalid(self):
        """The price must be nonzero."""
        with pytest.raises(InvalidCurve):
            ConstantPriceCurve(token_b_price=0).validate()

    def test_valid_price(self, constant_price):
        """Any nonzero price is valid."""
        constant_price.validate()

    def test_supply_needs_token_a(self, constant_price):
        """Token A must be present at initialization."""
        with pytest.raises(EmptySupply):
            constant_price.validate_supply(0, 10)

    def test_supply_without_token_b(self, constant_price):
        """Token B may be empty, since it is priced against A."""
        constant_price.validate_supply(10, 0)


class TestValueConservation:
    """Sampled checks that pool operations do not lose value."""

    def test_swap_a_to_b(self, rng):
        """Swapping A for B leaves the value unchanged."""
        for _ in range(SAMPLE_COUNT):
            curve, token_a, token_b, _ = _sample_pool(rng)
            source_amount = rng.randint(curve.token_b_price, token_b * curve.token_b_price)
            check_curve_value_from_swap(
                curve, source_amount, token_a, token_b, TradeDirection.A_TO_B
            )

    def test_swap_b_to_a(self, rng):
        """Swapping B for A leaves the value unchanged."""
        for _ in range(SAMPLE_COUNT):
            curve, token_a, token_b, _ = _sample_pool(rng)
            source_amount = rng.randint(1, token_a // curve.token_b_price)
            check_curve_value_from_swap(
                curve, source_amount, token_b, token_a, TradeDirection.B_TO_A
            )

    def test_deposit(self, rng):
        """Pool tokens bought with a two-sided deposit are fully paid for."""
        checked = 0
        for _ in range(SAMPLE_COUNT):
            curve = ConstantPriceCurve(token_b_price=rng.randint(1, U32_MAX))
            pool_token_amount = rng.randint(2, U64_MAX)
            pool_token_supply = rng.randint(INITIAL_SWAP_POOL_AMOUNT, U64_MAX)
            token_a = rng.randint(1, U64_MAX)
            token_b = rng.randint(1, U32_MAX)
            if not _value_covers_both_legs(
                curve, pool_token_amount, pool_token_supply, token_a, token_b
            ):
                continue
            check_normalized_value_from_deposit(
                curve, pool_token_amount, pool_token_supply, token_a, token_b
            )
            checked += 1
        assert checked > 0

    def test_withdraw(self, rng):
        """A two-sided withdrawal takes no more than its share of the value."""
        checked = 0
        for _ in range(SAMPLE_COUNT):
            curve = ConstantPriceCurve(token_b_price=rng.randint(1, U32_MAX))
            pool_token_supply = rng.randint(2, U64_MAX)
            pool_token_amount = rng.randint(1, pool_token_supply - 1)
            token_a = rng.randint(1, U64_MAX)
            token_b = rng.randint(1, U32_MAX)
            if not _value_covers_both_legs(
                curve, pool_token_amount, pool_token_supply, token_a, token_b
            ):
                continue
            result = curve.pool_tokens_to_trading_tokens(
                pool_token_amount, pool_token_supply, token_a, token_b, RoundDirection.FLOOR
            )
            assert result is not None
            if result.token_a_amount > token_a or result.token_b_amount > token_b:
                continue
            check_pool_value_from_withdraw(
                curve, pool_token_amount, pool_token_supply, token_a, token_b
            )
            checked += 1
        assert checked > 0


class TestConversions:
    """Sampled checks that one-sided operations match swap plus two-sided ones."""

    def test_deposit_token_conversion_a_to_b(self, rng):
        """A one-sided deposit of A matches half a swap plus a balanced deposit."""
        for _ in range(SAMPLE_COUNT):
            curve, token_a, token_b, pool_supply = _sample_pool(rng)
            total_value = token_a + token_b * curve.token_b_price
            source_amount = rng.randint(total_value // 4000, total_value // 400)
            check_deposit_token_conversion(
                curve,
                source_amount,
                token_a,
                token_b,
                TradeDirection.A_TO_B,
                pool_supply,
                CONVERSION_BASIS_POINTS_GUARANTEE,
            )

    def test_deposit_token_conversion_b_to_a(self, rng):
        """A one-sided deposit of B matches half a swap plus a balanced deposit."""
        for _ in range(SAMPLE_COUNT):
            curve, token_a, token_b, pool_supply = _sample_pool(rng)
            total_value_in_b = (token_a + token_b * curve.token_b_price) // curve.token_b_price
            source_amount = rng.randint(total_value_in_b // 4000, total_value_in_b // 400)
            check_deposit_token_conversion(
                curve,
                source_amount,
                token_b,
                token_a,
                TradeDirection.B_TO_A,
                pool_supply,
                CONVERSION_BASIS_POINTS_GUARANTEE,
            )

    @pytest.mark.parametrize("direction", [TradeDirection.A_TO_B, TradeDirection.B_TO_A])
    def test_withdraw_token_conversion(self, rng, direction):
        """A one-sided withdrawal matches a balanced withdrawal plus a swap."""
        for _ in range(SAMPLE_COUNT):
            curve, token_a, token_b, pool_supply = _sample_pool(rng)
            pool_token_amount = rng.randint(pool_supply // 1000, pool_supply // 2)
            check_withdraw_token_conversion(
                curve,
                pool_token_amount,
                pool_supply,
                token_a,
                token_b,
                direction,
                # Unswapped remainders of the A leg widen the gap
                CONVERSION_BASIS_POINTS_GUARANTEE * 20,
            )

"""Test helpers module for shared test utilities.

This module consolidates common test utilities to reduce duplication:
- constants: Fee schedules and common amounts
- factories: Pool state factory functions
- checks: Value-conservation checks for the curves
"""

from tests.helpers.checks import (
    check_curve_value_from_swap,
    check_deposit_token_conversion,
    check_normalized_value_from_deposit,
    check_pool_value_from_deposit,
    check_pool_value_from_withdraw,
    check_withdraw_token_conversion,
)
from tests.helpers.constants import (
    CONVERSION_BASIS_POINTS_GUARANTEE,
    NO_FEES,
    RESERVE,
    SAMPLE_COUNT,
    SAMPLE_SEED,
    SWAP_FEES,
    U64_MAX,
    WITHDRAW_FEES,
)
from tests.helpers.factories import make_pool_state

__all__ = [
    # Constants
    "CONVERSION_BASIS_POINTS_GUARANTEE",
    "NO_FEES",
    "RESERVE",
    "SAMPLE_COUNT",
    "SAMPLE_SEED",
    "SWAP_FEES",
    "U64_MAX",
    "WITHDRAW_FEES",
    # Factories
    "make_pool_state",
    # Checks
    "check_curve_value_from_swap",
    "check_deposit_token_conversion",
    "check_normalized_value_from_deposit",
    "check_pool_value_from_deposit",
    "check_pool_value_from_withdraw",
    "check_withdraw_token_conversion",
]

"""Constraints on pool initialization.

A deployment can restrict which curves pools may use, require a minimum fee
schedule, and pin the owner of the fee account. Constraints are a plain
immutable value handed to the pool lifecycle; without one, any valid curve
and fee schedule is accepted.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass

import structlog

from tokenswap.curve.base import CurveType, SwapCurve
from tokenswap.curve.fees import Fees
from tokenswap.errors import InvalidFee, UnsupportedCurveType

logger = structlog.get_logger()

# Fee schedule required by production deployments
PRODUCTION_FEES = Fees(
    trade_fee_numerator=0,
    trade_fee_denominator=10000,
    owner_trade_fee_numerator=5,
    owner_trade_fee_denominator=10000,
    owner_withdraw_fee_numerator=0,
    owner_withdraw_fee_denominator=0,
    host_fee_numerator=20,
    host_fee_denominator=100,
)

PRODUCTION_CURVE_TYPES: tuple[CurveType, ...] = (
    CurveType.CONSTANT_PRICE,
    CurveType.CONSTANT_PRODUCT,
)


@dataclass(frozen=True)
class SwapConstraints:
    """Restrictions applied when a pool is initialized.

    Attributes:
        owner_key: Required owner of the pool fee account, or None for any owner
        valid_curve_types: Curve types pools may use
        fees: Minimum fee schedule. Numerators must be at least these,
            denominators and the host fee must match exactly.
    """

    owner_key: str | None
    valid_curve_types: tuple[CurveType, ...]
    fees: Fees

    def validate_curve(self, swap_curve: SwapCurve) -> None:
        """Check the curve type is allowed.

        Raises:
            UnsupportedCurveType: If the curve type is not in valid_curve_types
        """
        if swap_curve.curve_type not in self.valid_curve_types:
            raise UnsupportedCurveType(f"Curve type {swap_curve.curve_type.value} is not allowed")

    def validate_fees(self, fees: Fees) -> None:
        """Check a fee schedule against the minimum schedule.

        Raises:
            InvalidFee: If any fee is below the minimum or uses another denominator
        """
        required = self.fees
        valid = (
            fees.trade_fee_numerator >= required.trade_fee_numerator
            and fees.trade_fee_denominator == required.trade_fee_denominator
            and fees.owner_trade_fee_numerator >= required.owner_trade_fee_numerator
            and fees.owner_trade_fee_denominator == required.owner_trade_fee_denominator
            and fees.owner_withdraw_fee_numerator >= required.owner_withdraw_fee_numerator
            and fees.owner_withdraw_fee_denominator == required.owner_withdraw_fee_denominator
            and fees.host_fee_numerator == required.host_fee_numerator
            and fees.host_fee_denominator == required.host_fee_denominator
        )
        if not valid:
            raise InvalidFee("Fees do not satisfy the pool constraints")


def load_constraints(environ: Mapping[str, str] | None = None) -> SwapConstraints | None:
    """Load constraints from the environment.

    TOKENSWAP_PRODUCTION (true/1/yes) enables the production constraints, and
    TOKENSWAP_OWNER_FEE_ADDRESS sets the required fee account owner.

    Returns:
        Production constraints, or None when not running in production
    """
    if environ is None:
        environ = os.environ
    production = environ.get("TOKENSWAP_PRODUCTION", "false").lower() in ("true", "1", "yes")
    if not production:
        return None

    owner_key = environ.get("TOKENSWAP_OWNER_FEE_ADDRESS") or None
    if owner_key is None:
        logger.warning("constraints_missing_owner_key")
    return SwapConstraints(
        owner_key=owner_key,
        valid_curve_types=PRODUCTION_CURVE_TYPES,
        fees=PRODUCTION_FEES,
    )

"""Token swap pool engine - curve math, fees and pool operations."""

from tokenswap.constraints import SwapConstraints, load_constraints
from tokenswap.curve import (
    ConstantPriceCurve,
    ConstantProductCurve,
    CurveType,
    Fees,
    OffsetCurve,
    RoundDirection,
    SwapCurve,
    SwapResult,
    TradeDirection,
)
from tokenswap.pool import (
    PoolLifecycle,
    PoolState,
    deposit_all,
    deposit_single,
    initialize,
    process_instruction,
    swap,
    withdraw_all,
    withdraw_single,
)

__version__ = "0.1.0"
__all__ = [
    "ConstantPriceCurve",
    "ConstantProductCurve",
    "CurveType",
    "Fees",
    "OffsetCurve",
    "PoolLifecycle",
    "PoolState",
    "RoundDirection",
    "SwapConstraints",
    "SwapCurve",
    "SwapResult",
    "TradeDirection",
    "__version__",
    "deposit_all",
    "deposit_single",
    "initialize",
    "load_constraints",
    "process_instruction",
    "swap",
    "withdraw_all",
    "withdraw_single",
]

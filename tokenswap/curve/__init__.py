"""Swap curves and the fee model.

Exports:
- CurveCalculator: Interface implemented by every curve
- ConstantProductCurve, ConstantPriceCurve, OffsetCurve: Curve variants
- SwapCurve, CurveType: A calculator tagged with its type, plus fee handling
- Fees: Fee schedule of a pool
"""

from tokenswap.curve.base import CurveType, CurveVariant, SwapCurve, SwapResult
from tokenswap.curve.calculator import (
    CurveCalculator,
    RoundDirection,
    SwapWithoutFeesResult,
    TradeDirection,
    TradingTokenResult,
)
from tokenswap.curve.constant_price import ConstantPriceCurve
from tokenswap.curve.constant_product import ConstantProductCurve
from tokenswap.curve.fees import Fees
from tokenswap.curve.offset import OffsetCurve

__all__ = [
    "ConstantPriceCurve",
    "ConstantProductCurve",
    "CurveCalculator",
    "CurveType",
    "CurveVariant",
    "Fees",
    "OffsetCurve",
    "RoundDirection",
    "SwapCurve",
    "SwapResult",
    "SwapWithoutFeesResult",
    "TradeDirection",
    "TradingTokenResult",
]

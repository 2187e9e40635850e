"""Pydantic models for pool operations."""

from tokenswap.models.instruction import (
    CurveModel,
    DepositAllTokenTypes,
    DepositSingleTokenTypeExactAmountIn,
    FeesModel,
    Initialize,
    Instruction,
    Swap,
    WithdrawAllTokenTypes,
    WithdrawSingleTokenTypeExactAmountOut,
)
from tokenswap.models.types import U64, validate_u64

__all__ = [
    "CurveModel",
    "DepositAllTokenTypes",
    "DepositSingleTokenTypeExactAmountIn",
    "FeesModel",
    "Initialize",
    "Instruction",
    "Swap",
    "U64",
    "WithdrawAllTokenTypes",
    "WithdrawSingleTokenTypeExactAmountOut",
    "validate_u64",
]

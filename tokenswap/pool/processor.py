"""Dispatch typed pool operations to the lifecycle."""

from __future__ import annotations

from typing import Any

import structlog
from pydantic import TypeAdapter

from tokenswap.curve.base import SwapResult
from tokenswap.errors import NotInitialized
from tokenswap.models.instruction import (
    DepositAllTokenTypes,
    DepositSingleTokenTypeExactAmountIn,
    Initialize,
    Instruction,
    Swap,
    WithdrawAllTokenTypes,
    WithdrawSingleTokenTypeExactAmountOut,
)
from tokenswap.pool.lifecycle import DEFAULT_LIFECYCLE, PoolLifecycle
from tokenswap.pool.state import (
    DepositAllResult,
    InitializeResult,
    PoolState,
    WithdrawAllResult,
    WithdrawSingleResult,
)

logger = structlog.get_logger()

_instruction_adapter: TypeAdapter[Any] = TypeAdapter(Instruction)

ProcessResult = (
    InitializeResult
    | SwapResult
    | DepositAllResult
    | WithdrawAllResult
    | int
    | WithdrawSingleResult
)


def parse_instruction(data: dict[str, Any]) -> Any:
    """Validate a raw payload into one of the operation models.

    Raises:
        pydantic.ValidationError: If the payload matches no operation
    """
    return _instruction_adapter.validate_python(data)


def process_instruction(
    lifecycle: PoolLifecycle | None,
    state: PoolState | None,
    instruction: Any,
) -> ProcessResult:
    """Run one operation against a pool.

    Args:
        lifecycle: Lifecycle to run on, or None for the default one
        state: Current pool state; None only for Initialize
        instruction: Operation model, or a raw payload to validate first

    Returns:
        The result of the matching lifecycle operation

    Raises:
        NotInitialized: If a non-Initialize operation has no state
        SwapError: Whatever the lifecycle operation raises
    """
    if lifecycle is None:
        lifecycle = DEFAULT_LIFECYCLE
    if isinstance(instruction, dict):
        instruction = parse_instruction(instruction)

    logger.debug("process_instruction", kind=instruction.kind)

    if isinstance(instruction, Initialize):
        return lifecycle.initialize(
            instruction.fees.to_fees(),
            instruction.curve.to_swap_curve(),
            instruction.reserve_a,
            instruction.reserve_b,
            current=state,
            fee_account_owner=instruction.fee_account_owner,
        )

    if state is None:
        raise NotInitialized("Pool is not initialized")

    if isinstance(instruction, Swap):
        return lifecycle.swap(
            state,
            instruction.amount_in,
            instruction.minimum_amount_out,
            instruction.trade_direction,
            include_host_fee=instruction.include_host_fee,
        )
    if isinstance(instruction, DepositAllTokenTypes):
        return lifecycle.deposit_all(
            state,
            instruction.pool_token_amount,
            instruction.maximum_token_a_amount,
            instruction.maximum_token_b_amount,
        )
    if isinstance(instruction, WithdrawAllTokenTypes):
        return lifecycle.withdraw_all(
            state,
            instruction.pool_token_amount,
            instruction.minimum_token_a_amount,
            instruction.minimum_token_b_amount,
            from_fee_account=instruction.from_fee_account,
        )
    if isinstance(instruction, DepositSingleTokenTypeExactAmountIn):
        return lifecycle.deposit_single(
            state,
            instruction.source_token_amount,
            instruction.trade_direction,
            instruction.minimum_pool_token_amount,
        )
    if isinstance(instruction, WithdrawSingleTokenTypeExactAmountOut):
        return lifecycle.withdraw_single(
            state,
            instruction.destination_token_amount,
            instruction.trade_direction,
            instruction.maximum_pool_token_amount,
            from_fee_account=instruction.from_fee_account,
        )
    raise TypeError(f"Unknown instruction: {type(instruction).__name__}")

#!/usr/bin/env python3
"""Replay a sequence of pool operations and print the pool after each one.

Operations are read from a JSON file holding a list of payloads (camelCase
keys, a "kind" field per operation). The first one must be an initialize
operation. Without a file, a small built-in sequence on a constant product
pool is replayed.

The caller's side of each operation (transfers, mint and burn) is applied
to the pool state so later operations see the updated reserves and supply.

Usage:
    python scripts/simulate_pool.py [operations.json] [--production] [-v]
"""

import argparse
import json
import logging
import os
import sys
from pathlib import Path
from typing import Any

import structlog

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from tokenswap.constraints import load_constraints
from tokenswap.curve.base import SwapResult
from tokenswap.curve.calculator import TradeDirection
from tokenswap.errors import SwapError
from tokenswap.models.instruction import (
    DepositAllTokenTypes,
    DepositSingleTokenTypeExactAmountIn,
    WithdrawAllTokenTypes,
    WithdrawSingleTokenTypeExactAmountOut,
)
from tokenswap.pool.lifecycle import PoolLifecycle
from tokenswap.pool.processor import parse_instruction, process_instruction
from tokenswap.pool.state import InitializeResult, PoolState

EXAMPLE_OPERATIONS: list[dict[str, Any]] = [
    {
        "kind": "initialize",
        "fees": {
            "tradeFeeNumerator": 25,
            "tradeFeeDenominator": 10000,
            "ownerTradeFeeNumerator": 5,
            "ownerTradeFeeDenominator": 10000,
            "ownerWithdrawFeeNumerator": 0,
            "ownerWithdrawFeeDenominator": 0,
            "hostFeeNumerator": 20,
            "hostFeeDenominator": 100,
        },
        "curve": {"curveType": "constant_product"},
        "reserveA": 1_000_000,
        "reserveB": 2_000_000,
    },
    {"kind": "swap", "amountIn": 10_000, "minimumAmountOut": 0, "tradeDirection": "a_to_b"},
    {
        "kind": "deposit_all_token_types",
        "poolTokenAmount": 10_000_000,
        "maximumTokenAAmount": 100_000,
        "maximumTokenBAmount": 100_000,
    },
    {
        "kind": "deposit_single_token_type_exact_amount_in",
        "sourceTokenAmount": 5_000,
        "minimumPoolTokenAmount": 0,
        "tradeDirection": "b_to_a",
    },
    {
        "kind": "withdraw_single_token_type_exact_amount_out",
        "destinationTokenAmount": 1_000,
        "maximumPoolTokenAmount": 10_000_000,
        "tradeDirection": "a_to_b",
    },
    {
        "kind": "withdraw_all_token_types",
        "poolTokenAmount": 5_000_000,
        "minimumTokenAAmount": 0,
        "minimumTokenBAmount": 0,
    },
]


def apply_result(state: PoolState, instruction: Any, result: Any) -> PoolState:
    """Apply the caller's side of an operation to the pool state."""
    a, b, supply = state.reserve_a, state.reserve_b, state.pool_supply

    if isinstance(result, SwapResult):
        if instruction.trade_direction is TradeDirection.A_TO_B:
            a, b = result.new_source_reserve, result.new_destination_reserve
        else:
            a, b = result.new_destination_reserve, result.new_source_reserve
        supply += result.owner_fee_pool_tokens + result.host_fee_pool_tokens
    elif isinstance(instruction, DepositAllTokenTypes):
        minted = instruction.pool_token_amount if supply > 0 else state.curve.new_pool_supply()
        a, b, supply = a + result.token_a_amount, b + result.token_b_amount, supply + minted
    elif isinstance(instruction, WithdrawAllTokenTypes):
        burned = instruction.pool_token_amount - result.withdraw_fee
        a, b, supply = a - result.token_a_amount, b - result.token_b_amount, supply - burned
    elif isinstance(instruction, DepositSingleTokenTypeExactAmountIn):
        if instruction.trade_direction is TradeDirection.A_TO_B:
            a += instruction.source_token_amount
        else:
            b += instruction.source_token_amount
        supply += result
    elif isinstance(instruction, WithdrawSingleTokenTypeExactAmountOut):
        if instruction.trade_direction is TradeDirection.A_TO_B:
            a -= instruction.destination_token_amount
        else:
            b -= instruction.destination_token_amount
        supply -= result.pool_token_amount - result.withdraw_fee

    return state.with_reserves(a, b, supply)


def run(operations: list[dict[str, Any]], lifecycle: PoolLifecycle) -> int:
    """Replay operations, returning the number that failed."""
    state: PoolState | None = None
    failures = 0

    for index, payload in enumerate(operations):
        instruction = parse_instruction(payload)
        try:
            result = process_instruction(lifecycle, state, instruction)
        except SwapError as err:
            failures += 1
            print(f"[{index}] {instruction.kind}: FAILED {type(err).__name__}: {err}")
            continue

        if isinstance(result, InitializeResult):
            state = result.state
        elif state is not None:
            state = apply_result(state, instruction, result)

        print(f"[{index}] {instruction.kind}: {result}")
        if state is not None:
            reserves = f"({state.reserve_a}, {state.reserve_b})"
            print(f"      reserves={reserves} supply={state.pool_supply}")

    return failures


def main() -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Replay pool operations against a simulated pool",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "operations",
        type=Path,
        nargs="?",
        help="JSON file with a list of operation payloads",
    )
    parser.add_argument(
        "--production",
        action="store_true",
        help="Apply the production constraints from the environment",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Show debug logs for each operation",
    )

    args = parser.parse_args()

    log_level = logging.DEBUG if args.verbose else logging.WARNING
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
    )

    if args.operations is None:
        operations = EXAMPLE_OPERATIONS
    else:
        operations = json.loads(args.operations.read_text())

    constraints = None
    if args.production:
        constraints = load_constraints({**os.environ, "TOKENSWAP_PRODUCTION": "true"})
    failures = run(operations, PoolLifecycle(constraints))

    return 0 if failures == 0 else 1


if __name__ == "__main__":
    sys.exit(main())

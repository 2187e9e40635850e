"""Pool state, lifecycle operations and the operation dispatcher."""

from tokenswap.pool.lifecycle import (
    DEFAULT_LIFECYCLE,
    PoolLifecycle,
    deposit_all,
    deposit_single,
    initialize,
    swap,
    withdraw_all,
    withdraw_single,
)
from tokenswap.pool.processor import parse_instruction, process_instruction
from tokenswap.pool.state import (
    DepositAllResult,
    InitializeResult,
    PoolState,
    PoolStatus,
    WithdrawAllResult,
    WithdrawSingleResult,
)

__all__ = [
    "DEFAULT_LIFECYCLE",
    "DepositAllResult",
    "InitializeResult",
    "PoolLifecycle",
    "PoolState",
    "PoolStatus",
    "WithdrawAllResult",
    "WithdrawSingleResult",
    "deposit_all",
    "deposit_single",
    "initialize",
    "parse_instruction",
    "process_instruction",
    "swap",
    "withdraw_all",
    "withdraw_single",
]

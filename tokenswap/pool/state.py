"""Pool state and operation results."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import NamedTuple

from tokenswap.curve.base import SwapCurve
from tokenswap.curve.calculator import TradeDirection
from tokenswap.curve.fees import Fees


class PoolStatus(str, Enum):
    """Lifecycle status of a pool. INITIALIZED is terminal."""

    UNINITIALIZED = "uninitialized"
    INITIALIZED = "initialized"


@dataclass(frozen=True)
class PoolState:
    """Snapshot of a pool, read by the caller from wherever it persists it.

    Operations never mutate a state; they return the amounts the caller must
    transfer, mint or burn before persisting the next snapshot.

    Attributes:
        reserve_a: Token A held by the pool
        reserve_b: Token B held by the pool
        pool_supply: Pool tokens in circulation
        fees: Fee schedule, fixed at initialization
        curve: Swap curve, fixed at initialization
        status: Lifecycle status
    """

    reserve_a: int
    reserve_b: int
    pool_supply: int
    fees: Fees
    curve: SwapCurve
    status: PoolStatus = PoolStatus.INITIALIZED

    @property
    def is_initialized(self) -> bool:
        return self.status is PoolStatus.INITIALIZED

    def reserves(self, trade_direction: TradeDirection) -> tuple[int, int]:
        """Reserves as (source, destination) for a trade direction."""
        if trade_direction is TradeDirection.A_TO_B:
            return self.reserve_a, self.reserve_b
        return self.reserve_b, self.reserve_a

    def with_reserves(self, reserve_a: int, reserve_b: int, pool_supply: int) -> PoolState:
        return replace(self, reserve_a=reserve_a, reserve_b=reserve_b, pool_supply=pool_supply)


class InitializeResult(NamedTuple):
    """Pool tokens minted at initialization and the new pool state."""

    pool_supply: int
    initial_mint_amount: int
    state: PoolState


class DepositAllResult(NamedTuple):
    """Token amounts to transfer in for a two-sided deposit."""

    token_a_amount: int
    token_b_amount: int


class WithdrawAllResult(NamedTuple):
    """Token amounts to pay out for a two-sided withdrawal.

    withdraw_fee is in pool tokens and goes to the fee account.
    """

    token_a_amount: int
    token_b_amount: int
    withdraw_fee: int


class WithdrawSingleResult(NamedTuple):
    """Pool tokens taken from the user for a one-sided withdrawal.

    pool_token_amount includes withdraw_fee.
    """

    pool_token_amount: int
    withdraw_fee: int

"""Factory functions for creating test pools.

Usage:
    from tests.helpers import make_pool_state
    # or
    from tests.helpers.factories import make_pool_state

    state = make_pool_state(reserve_a=1_000, reserve_b=2_000)
"""

from tokenswap.constants import INITIAL_SWAP_POOL_AMOUNT
from tokenswap.curve.base import SwapCurve
from tokenswap.curve.calculator import CurveCalculator
from tokenswap.curve.constant_product import ConstantProductCurve
from tokenswap.curve.fees import Fees
from tokenswap.pool.state import PoolState, PoolStatus
from tests.helpers.constants import NO_FEES, RESERVE


def make_pool_state(
    reserve_a: int = RESERVE,
    reserve_b: int = RESERVE,
    pool_supply: int = INITIAL_SWAP_POOL_AMOUNT,
    fees: Fees = NO_FEES,
    curve: SwapCurve | CurveCalculator | None = None,
    status: PoolStatus = PoolStatus.INITIALIZED,
) -> PoolState:
    """Create a pool state with sensible defaults.

    Args:
        reserve_a: Token A reserve (default: 1M)
        reserve_b: Token B reserve (default: 1M)
        pool_supply: Pool tokens in circulation (default: initial supply)
        fees: Fee schedule (default: no fees)
        curve: Swap curve or bare calculator (default: constant product)
        status: Lifecycle status (default: INITIALIZED)

    Returns:
        PoolState ready for testing
    """
    if curve is None:
        curve = ConstantProductCurve()
    if not isinstance(curve, SwapCurve):
        curve = SwapCurve.from_calculator(curve)
    return PoolState(
        reserve_a=reserve_a,
        reserve_b=reserve_b,
        pool_supply=pool_supply,
        fees=fees,
        curve=curve,
        status=status,
    )

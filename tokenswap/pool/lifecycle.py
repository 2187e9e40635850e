"""Pool lifecycle: initialization and the five pool operations.

Each operation takes a PoolState snapshot, checks it against the caller's
limits and returns the amounts the caller must transfer, mint or burn. No
operation mutates the state it is given; a failure raises a SwapError and
leaves nothing to undo.

Module-level functions are bound to a default lifecycle without
constraints, for callers that do not restrict pool creation.
"""

from __future__ import annotations

from dataclasses import replace

import structlog

from tokenswap.constraints import SwapConstraints
from tokenswap.curve.base import SwapCurve, SwapResult
from tokenswap.curve.calculator import CurveCalculator, RoundDirection, TradeDirection
from tokenswap.curve.fees import Fees
from tokenswap.errors import (
    AlreadyInUse,
    CalculationError,
    ConversionFailure,
    ExceededSlippage,
    FeeCalculationFailure,
    InvalidOwner,
    NotInitialized,
    UnsupportedCurveOperation,
    ZeroTradingTokens,
)
from tokenswap.pool.state import (
    DepositAllResult,
    InitializeResult,
    PoolState,
    PoolStatus,
    WithdrawAllResult,
    WithdrawSingleResult,
)
from tokenswap.safe_int import S

logger = structlog.get_logger()


def _as_swap_curve(curve: SwapCurve | CurveCalculator) -> SwapCurve:
    if isinstance(curve, SwapCurve):
        return curve
    return SwapCurve.from_calculator(curve)


def _require_initialized(state: PoolState) -> None:
    if not state.is_initialized:
        raise NotInitialized("Pool is not initialized")


def _reserve_amount(name: str, amount: int) -> int:
    """Check that a starting reserve is a u64 token amount."""
    try:
        return S(amount).to_u64()
    except CalculationError as err:
        raise ConversionFailure(f"Token {name} reserve is not a u64 amount: {amount}") from err


class PoolLifecycle:
    """Runs pool operations against PoolState snapshots.

    Attributes:
        constraints: Restrictions applied at initialization, or None
    """

    def __init__(self, constraints: SwapConstraints | None = None) -> None:
        self.constraints = constraints

    def initialize(
        self,
        fees: Fees,
        curve: SwapCurve | CurveCalculator,
        reserve_a: int,
        reserve_b: int,
        *,
        current: PoolState | None = None,
        fee_account_owner: str | None = None,
    ) -> InitializeResult:
        """Create a pool from its starting reserves.

        Args:
            fees: Fee schedule of the pool
            curve: Swap curve, or a bare calculator to be tagged
            reserve_a: Starting token A reserve
            reserve_b: Starting token B reserve
            current: Existing state at the pool's address, if any
            fee_account_owner: Owner of the pool fee account, checked against
                the constraints owner key

        Returns:
            Pool supply, the amount minted to the creator and the new state

        Raises:
            AlreadyInUse: If current is already initialized
            UnsupportedCurveType: If the constraints do not allow the curve
            InvalidFee: If the fees are invalid or below the constraints
            InvalidOwner: If the fee account owner does not match
            InvalidCurve: If the curve parameters are invalid
            EmptySupply: If a reserve the curve needs is empty
            ConversionFailure: If a reserve is negative or above u64
        """
        if current is not None and current.is_initialized:
            raise AlreadyInUse("Pool is already initialized")

        swap_curve = _as_swap_curve(curve)
        if self.constraints is not None:
            self.constraints.validate_curve(swap_curve)
            self.constraints.validate_fees(fees)
            owner_key = self.constraints.owner_key
            if owner_key is not None and fee_account_owner != owner_key:
                raise InvalidOwner("Fee account owner does not match the owner key")

        swap_curve.validate()
        fees.validate()
        reserve_a = _reserve_amount("A", reserve_a)
        reserve_b = _reserve_amount("B", reserve_b)
        swap_curve.validate_supply(reserve_a, reserve_b)

        initial_amount = S(swap_curve.new_pool_supply()).to_u64()
        state = PoolState(
            reserve_a=reserve_a,
            reserve_b=reserve_b,
            pool_supply=initial_amount,
            fees=fees,
            curve=swap_curve,
            status=PoolStatus.INITIALIZED,
        )
        logger.debug(
            "pool_initialized",
            curve_type=swap_curve.curve_type.value,
            reserve_a=reserve_a,
            reserve_b=reserve_b,
            pool_supply=initial_amount,
        )
        return InitializeResult(initial_amount, initial_amount, state)

    def swap(
        self,
        state: PoolState,
        amount_in: int,
        minimum_amount_out: int,
        trade_direction: TradeDirection,
        *,
        include_host_fee: bool = False,
    ) -> SwapResult:
        """Swap amount_in of the source token.

        The owner fee is converted into pool tokens as if it were withdrawn
        from the post-swap pool. With a host, the host share of those pool
        tokens is split off.

        Returns:
            SwapResult with the pool token fee amounts filled in

        Raises:
            ZeroTradingTokens: If the trade is too small for either leg
            ExceededSlippage: If the output is below minimum_amount_out
            FeeCalculationFailure: If the owner fee cannot be converted
            ConversionFailure: If an amount does not fit in u64
        """
        _require_initialized(state)
        swap_source_amount, swap_destination_amount = state.reserves(trade_direction)

        result = state.curve.swap(
            amount_in, swap_source_amount, swap_destination_amount, trade_direction, state.fees
        )
        if result is None:
            logger.warning(
                "swap_zero_trading_tokens", amount_in=amount_in, direction=trade_direction.value
            )
            raise ZeroTradingTokens("Swap produced no trading tokens")

        source_amount = S(result.source_amount_swapped).to_u64()
        destination_amount = S(result.destination_amount_swapped).to_u64()
        if source_amount == 0 or destination_amount == 0:
            raise ZeroTradingTokens("Swap leg is zero")
        if destination_amount < minimum_amount_out:
            logger.warning(
                "swap_exceeded_slippage",
                amount_out=destination_amount,
                minimum_amount_out=minimum_amount_out,
            )
            raise ExceededSlippage(
                f"Swap output {destination_amount} below minimum {minimum_amount_out}"
            )

        if trade_direction is TradeDirection.A_TO_B:
            new_reserve_a, new_reserve_b = result.new_source_reserve, result.new_destination_reserve
        else:
            new_reserve_a, new_reserve_b = result.new_destination_reserve, result.new_source_reserve

        owner_fee_pool_tokens = state.curve.calculator.withdraw_single_token_type_exact_out(
            result.owner_fee,
            new_reserve_a,
            new_reserve_b,
            state.pool_supply,
            trade_direction,
            RoundDirection.FLOOR,
        )
        if owner_fee_pool_tokens is None:
            raise FeeCalculationFailure("Owner fee cannot be converted to pool tokens")

        host_fee_pool_tokens = 0
        if owner_fee_pool_tokens > 0 and include_host_fee:
            host_fee = state.fees.host_fee(owner_fee_pool_tokens)
            if host_fee is None:
                raise FeeCalculationFailure("Host fee cannot be calculated")
            host_fee_pool_tokens = host_fee
            owner_fee_pool_tokens -= host_fee

        logger.debug(
            "instruction_swap",
            direction=trade_direction.value,
            amount_in=source_amount,
            amount_out=destination_amount,
            owner_fee_pool_tokens=owner_fee_pool_tokens,
            host_fee_pool_tokens=host_fee_pool_tokens,
        )
        return replace(
            result,
            owner_fee_pool_tokens=owner_fee_pool_tokens,
            host_fee_pool_tokens=host_fee_pool_tokens,
        )

    def deposit_all(
        self,
        state: PoolState,
        pool_token_amount: int,
        maximum_token_a_amount: int,
        maximum_token_b_amount: int,
    ) -> DepositAllResult:
        """Deposit both tokens in exchange for pool_token_amount pool tokens.

        An empty pool mints its initial supply against the whole reserves
        instead of the requested amount.

        Raises:
            UnsupportedCurveOperation: If the curve does not allow deposits
            ZeroTradingTokens: If a token amount is zero
            ExceededSlippage: If a token amount exceeds its maximum
            ConversionFailure: If an amount does not fit in u64
        """
        _require_initialized(state)
        calculator = state.curve.calculator
        if not calculator.allows_deposits():
            raise UnsupportedCurveOperation("Curve does not allow deposits")

        if state.pool_supply > 0:
            pool_mint_supply = state.pool_supply
        else:
            pool_token_amount = pool_mint_supply = calculator.new_pool_supply()

        results = calculator.pool_tokens_to_trading_tokens(
            pool_token_amount,
            pool_mint_supply,
            state.reserve_a,
            state.reserve_b,
            RoundDirection.CEILING,
        )
        if results is None:
            raise ZeroTradingTokens("Deposit produced no trading tokens")

        token_a_amount = S(results.token_a_amount).to_u64()
        _check_maximum("token_a", token_a_amount, maximum_token_a_amount)
        token_b_amount = S(results.token_b_amount).to_u64()
        _check_maximum("token_b", token_b_amount, maximum_token_b_amount)

        logger.debug(
            "instruction_deposit_all_token_types",
            pool_token_amount=pool_token_amount,
            token_a_amount=token_a_amount,
            token_b_amount=token_b_amount,
        )
        return DepositAllResult(token_a_amount, token_b_amount)

    def withdraw_all(
        self,
        state: PoolState,
        pool_token_amount: int,
        minimum_token_a_amount: int,
        minimum_token_b_amount: int,
        *,
        from_fee_account: bool = False,
    ) -> WithdrawAllResult:
        """Burn pool tokens for both tokens.

        The owner withdraw fee is taken from pool_token_amount first, unless
        the pool tokens come from the fee account itself. Payouts never exceed
        the reserves.

        Raises:
            FeeCalculationFailure: If the withdraw fee cannot be calculated
            ZeroTradingTokens: If a leg is zero while its reserve is not
            ExceededSlippage: If a token amount is below its minimum
        """
        _require_initialized(state)
        if from_fee_account:
            withdraw_fee = 0
        else:
            withdraw_fee = state.fees.owner_withdraw_fee(pool_token_amount)
            if withdraw_fee is None:
                raise FeeCalculationFailure("Withdraw fee cannot be calculated")
        pool_token_amount_less_fee = (S(pool_token_amount) - withdraw_fee).value

        results = state.curve.calculator.pool_tokens_to_trading_tokens(
            pool_token_amount_less_fee,
            state.pool_supply,
            state.reserve_a,
            state.reserve_b,
            RoundDirection.FLOOR,
        )
        if results is None:
            raise ZeroTradingTokens("Withdrawal produced no trading tokens")

        token_a_amount = min(state.reserve_a, S(results.token_a_amount).to_u64())
        _check_minimum("token_a", token_a_amount, minimum_token_a_amount, state.reserve_a)
        token_b_amount = min(state.reserve_b, S(results.token_b_amount).to_u64())
        _check_minimum("token_b", token_b_amount, minimum_token_b_amount, state.reserve_b)

        logger.debug(
            "instruction_withdraw_all_token_types",
            pool_token_amount=pool_token_amount,
            withdraw_fee=withdraw_fee,
            token_a_amount=token_a_amount,
            token_b_amount=token_b_amount,
        )
        return WithdrawAllResult(token_a_amount, token_b_amount, withdraw_fee)

    def deposit_single(
        self,
        state: PoolState,
        source_amount: int,
        trade_direction: TradeDirection,
        minimum_pool_token_amount: int,
    ) -> int:
        """Deposit one token type; A_TO_B deposits token A.

        Returns:
            Pool tokens to mint to the depositor

        Raises:
            UnsupportedCurveOperation: If the curve does not allow deposits
            ZeroTradingTokens: If no pool tokens would be minted
            ExceededSlippage: If fewer than minimum_pool_token_amount are minted
        """
        _require_initialized(state)
        if not state.curve.allows_deposits():
            raise UnsupportedCurveOperation("Curve does not allow deposits")

        if state.pool_supply > 0:
            pool_token_amount = state.curve.deposit_single_token_type(
                source_amount,
                state.reserve_a,
                state.reserve_b,
                state.pool_supply,
                trade_direction,
                state.fees,
            )
            if pool_token_amount is None:
                raise ZeroTradingTokens("Deposit produced no pool tokens")
        else:
            pool_token_amount = state.curve.new_pool_supply()

        pool_token_amount = S(pool_token_amount).to_u64()
        if pool_token_amount < minimum_pool_token_amount:
            logger.warning(
                "deposit_single_exceeded_slippage",
                pool_token_amount=pool_token_amount,
                minimum_pool_token_amount=minimum_pool_token_amount,
            )
            raise ExceededSlippage(
                f"Pool tokens {pool_token_amount} below minimum {minimum_pool_token_amount}"
            )
        if pool_token_amount == 0:
            raise ZeroTradingTokens("Deposit produced no pool tokens")

        logger.debug(
            "instruction_deposit_single_token_type",
            direction=trade_direction.value,
            source_amount=source_amount,
            pool_token_amount=pool_token_amount,
        )
        return pool_token_amount

    def withdraw_single(
        self,
        state: PoolState,
        destination_amount: int,
        trade_direction: TradeDirection,
        maximum_pool_token_amount: int,
        *,
        from_fee_account: bool = False,
    ) -> WithdrawSingleResult:
        """Withdraw an exact amount of one token type; A_TO_B withdraws token A.

        Returns:
            Pool tokens taken from the user (burned plus fee) and the fee

        Raises:
            ZeroTradingTokens: If no pool tokens would be burned
            FeeCalculationFailure: If the withdraw fee cannot be calculated
            ExceededSlippage: If more than maximum_pool_token_amount is needed
        """
        _require_initialized(state)
        burn_pool_token_amount = state.curve.withdraw_single_token_type_exact_out(
            destination_amount,
            state.reserve_a,
            state.reserve_b,
            state.pool_supply,
            trade_direction,
            state.fees,
        )
        if burn_pool_token_amount is None:
            raise ZeroTradingTokens("Withdrawal cannot be converted to pool tokens")

        if from_fee_account:
            withdraw_fee = 0
        else:
            withdraw_fee = state.fees.owner_withdraw_fee(burn_pool_token_amount)
            if withdraw_fee is None:
                raise FeeCalculationFailure("Withdraw fee cannot be calculated")

        pool_token_amount = S(burn_pool_token_amount) + withdraw_fee
        if pool_token_amount.to_u64() > maximum_pool_token_amount:
            logger.warning(
                "withdraw_single_exceeded_slippage",
                pool_token_amount=pool_token_amount.value,
                maximum_pool_token_amount=maximum_pool_token_amount,
            )
            raise ExceededSlippage(
                f"Pool tokens {pool_token_amount} above maximum {maximum_pool_token_amount}"
            )
        if pool_token_amount == 0:
            raise ZeroTradingTokens("Withdrawal burns no pool tokens")

        logger.debug(
            "instruction_withdraw_single_token_type",
            direction=trade_direction.value,
            destination_amount=destination_amount,
            pool_token_amount=pool_token_amount.value,
            withdraw_fee=withdraw_fee,
        )
        return WithdrawSingleResult(pool_token_amount.value, withdraw_fee)


def _check_maximum(token: str, amount: int, maximum: int) -> None:
    if amount > maximum:
        logger.warning("deposit_exceeded_slippage", token=token, amount=amount, maximum=maximum)
        raise ExceededSlippage(f"{token} amount {amount} above maximum {maximum}")
    if amount == 0:
        raise ZeroTradingTokens(f"{token} amount is zero")


def _check_minimum(token: str, amount: int, minimum: int, reserve: int) -> None:
    if amount < minimum:
        logger.warning("withdraw_exceeded_slippage", token=token, amount=amount, minimum=minimum)
        raise ExceededSlippage(f"{token} amount {amount} below minimum {minimum}")
    if amount == 0 and reserve != 0:
        raise ZeroTradingTokens(f"{token} amount is zero")


DEFAULT_LIFECYCLE = PoolLifecycle()


def initialize(
    fees: Fees, curve: SwapCurve | CurveCalculator, reserve_a: int, reserve_b: int
) -> InitializeResult:
    return DEFAULT_LIFECYCLE.initialize(fees, curve, reserve_a, reserve_b)


def swap(
    pool_state: PoolState, amount_in: int, minimum_amount_out: int, direction: TradeDirection
) -> SwapResult:
    return DEFAULT_LIFECYCLE.swap(pool_state, amount_in, minimum_amount_out, direction)


def deposit_all(
    pool_state: PoolState, pool_token_amount: int, max_a: int, max_b: int
) -> DepositAllResult:
    return DEFAULT_LIFECYCLE.deposit_all(pool_state, pool_token_amount, max_a, max_b)


def withdraw_all(
    pool_state: PoolState, pool_token_amount: int, min_a: int, min_b: int
) -> WithdrawAllResult:
    return DEFAULT_LIFECYCLE.withdraw_all(pool_state, pool_token_amount, min_a, min_b)


def deposit_single(
    pool_state: PoolState, source_amount: int, direction: TradeDirection, minimum_pool_tokens: int
) -> int:
    return DEFAULT_LIFECYCLE.deposit_single(
        pool_state, source_amount, direction, minimum_pool_tokens
    )


def withdraw_single(
    pool_state: PoolState,
    destination_amount: int,
    direction: TradeDirection,
    maximum_pool_tokens: int,
) -> WithdrawSingleResult:
    return DEFAULT_LIFECYCLE.withdraw_single(
        pool_state, destination_amount, direction, maximum_pool_tokens
    )

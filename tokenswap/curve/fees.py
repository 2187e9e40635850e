"""Fee model for pools.

All fees are fractions (numerator / denominator). Trading fees are taken in
the source token, withdrawal fees in pool tokens, and the host fee is a cut
of the owner fee paid to the front end that routed the trade.
"""

from __future__ import annotations

from dataclasses import dataclass

from tokenswap.curve.calculator import none_on_calculation_error
from tokenswap.errors import InvalidFee
from tokenswap.safe_int import S


@none_on_calculation_error
def calculate_fee(token_amount: int, fee_numerator: int, fee_denominator: int) -> int | None:
    """Apply a fee fraction to an amount.

    Any nonzero fee on a nonzero amount is at least one token, so small
    trades cannot avoid fees by rounding.

    Returns:
        Fee amount, or None if the fraction cannot be applied
        (e.g. a nonzero numerator over a zero denominator)
    """
    if fee_numerator == 0 or token_amount == 0:
        return 0
    fee = S(token_amount) * fee_numerator // fee_denominator
    if fee == 0:
        return 1
    return fee.value


@none_on_calculation_error
def pre_fee_amount(
    post_fee_amount: int, fee_numerator: int, fee_denominator: int, minimum_fees: int = 1
) -> int | None:
    """Invert a fee: an amount that is at least post_fee_amount after the fee.

    Every nonzero fee is at least one token, so the result also leaves
    room for minimum_fees such one-token charges.

    Returns:
        The pre-fee amount, or None if the fee takes the whole amount
    """
    if fee_numerator == 0 or fee_denominator == 0:
        return post_fee_amount
    if post_fee_amount == 0:
        return 0
    if fee_numerator >= fee_denominator:
        return None
    numerator = S(post_fee_amount) * fee_denominator
    denominator = S(fee_denominator) - fee_numerator
    pre_fee = numerator.ceiling_div(denominator)
    return max(pre_fee.value, (S(post_fee_amount) + minimum_fees).value)


def validate_fraction(numerator: int, denominator: int) -> None:
    """Check that a fee fraction is below one.

    Raises:
        InvalidFee: If numerator >= denominator (0/0 means no fee and is valid)
    """
    if denominator == 0 and numerator == 0:
        return
    if numerator >= denominator:
        raise InvalidFee(f"Invalid fee fraction {numerator}/{denominator}")


@dataclass(frozen=True)
class Fees:
    """Fee schedule of a pool, fixed at initialization.

    Attributes:
        trade_fee_numerator: Trade fee kept in the pool for liquidity providers
        trade_fee_denominator: Denominator of the trade fee
        owner_trade_fee_numerator: Trade fee minted as pool tokens to the owner
        owner_trade_fee_denominator: Denominator of the owner trade fee
        owner_withdraw_fee_numerator: Fee on pool tokens withdrawn, paid to the owner
        owner_withdraw_fee_denominator: Denominator of the owner withdraw fee
        host_fee_numerator: Share of the owner trade fee paid to the host
        host_fee_denominator: Denominator of the host fee
    """

    trade_fee_numerator: int = 0
    trade_fee_denominator: int = 0
    owner_trade_fee_numerator: int = 0
    owner_trade_fee_denominator: int = 0
    owner_withdraw_fee_numerator: int = 0
    owner_withdraw_fee_denominator: int = 0
    host_fee_numerator: int = 0
    host_fee_denominator: int = 0

    def trading_fee(self, trading_tokens: int) -> int | None:
        """Trade fee in trading tokens."""
        return calculate_fee(trading_tokens, self.trade_fee_numerator, self.trade_fee_denominator)

    def owner_trading_fee(self, trading_tokens: int) -> int | None:
        """Owner trade fee in trading tokens."""
        return calculate_fee(
            trading_tokens, self.owner_trade_fee_numerator, self.owner_trade_fee_denominator
        )

    def owner_withdraw_fee(self, pool_tokens: int) -> int | None:
        """Owner withdraw fee in pool tokens."""
        return calculate_fee(
            pool_tokens, self.owner_withdraw_fee_numerator, self.owner_withdraw_fee_denominator
        )

    def host_fee(self, owner_fee: int) -> int | None:
        """Host share of an owner fee, in pool tokens."""
        return calculate_fee(owner_fee, self.host_fee_numerator, self.host_fee_denominator)

    def pre_trading_fee_amount(self, post_fee_amount: int) -> int | None:
        """Amount that is post_fee_amount after the trade and owner fees.

        With both fees set, they are combined into one fraction:
        (t_n * o_d + o_n * t_d) / (t_d * o_d), and each may charge its
        one-token minimum. Returns None when the fees take the whole amount.
        """
        if self.trade_fee_numerator == 0 or self.trade_fee_denominator == 0:
            return pre_fee_amount(
                post_fee_amount, self.owner_trade_fee_numerator, self.owner_trade_fee_denominator
            )
        if self.owner_trade_fee_numerator == 0 or self.owner_trade_fee_denominator == 0:
            return pre_fee_amount(
                post_fee_amount, self.trade_fee_numerator, self.trade_fee_denominator
            )
        numerator = (
            self.trade_fee_numerator * self.owner_trade_fee_denominator
            + self.owner_trade_fee_numerator * self.trade_fee_denominator
        )
        denominator = self.trade_fee_denominator * self.owner_trade_fee_denominator
        return pre_fee_amount(post_fee_amount, numerator, denominator, minimum_fees=2)

    def validate(self) -> None:
        """Check every fee fraction.

        Raises:
            InvalidFee: On the first invalid fraction
        """
        validate_fraction(self.trade_fee_numerator, self.trade_fee_denominator)
        validate_fraction(self.owner_trade_fee_numerator, self.owner_trade_fee_denominator)
        validate_fraction(self.owner_withdraw_fee_numerator, self.owner_withdraw_fee_denominator)
        validate_fraction(self.host_fee_numerator, self.host_fee_denominator)

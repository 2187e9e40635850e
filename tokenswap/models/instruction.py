"""Pydantic models for pool operations.

Each operation is a typed request. Payloads use camelCase keys; Python
callers can also populate fields by name.
"""

from typing import Annotated, Any, Literal

from pydantic import BaseModel, Discriminator, Field, Tag

from tokenswap.curve.base import CurveType, SwapCurve
from tokenswap.curve.calculator import TradeDirection
from tokenswap.curve.fees import Fees
from tokenswap.models.types import U64


class FeesModel(BaseModel):
    """Fee schedule of a pool as four numerator/denominator pairs."""

    trade_fee_numerator: U64 = Field(default=0, alias="tradeFeeNumerator")
    trade_fee_denominator: U64 = Field(default=0, alias="tradeFeeDenominator")
    owner_trade_fee_numerator: U64 = Field(default=0, alias="ownerTradeFeeNumerator")
    owner_trade_fee_denominator: U64 = Field(default=0, alias="ownerTradeFeeDenominator")
    owner_withdraw_fee_numerator: U64 = Field(default=0, alias="ownerWithdrawFeeNumerator")
    owner_withdraw_fee_denominator: U64 = Field(default=0, alias="ownerWithdrawFeeDenominator")
    host_fee_numerator: U64 = Field(default=0, alias="hostFeeNumerator")
    host_fee_denominator: U64 = Field(default=0, alias="hostFeeDenominator")

    model_config = {"populate_by_name": True}

    def to_fees(self) -> Fees:
        return Fees(**self.model_dump(by_alias=False))


class CurveModel(BaseModel):
    """Curve type and its parameter.

    token_b_price applies to the constant price curve and token_b_offset to
    the offset curve; the other is ignored.
    """

    curve_type: CurveType = Field(alias="curveType")
    token_b_price: U64 = Field(default=0, alias="tokenBPrice")
    token_b_offset: U64 = Field(default=0, alias="tokenBOffset")

    model_config = {"populate_by_name": True}

    def to_swap_curve(self) -> SwapCurve:
        if self.curve_type is CurveType.CONSTANT_PRICE:
            return SwapCurve.create(self.curve_type, token_b_price=self.token_b_price)
        if self.curve_type is CurveType.OFFSET:
            return SwapCurve.create(self.curve_type, token_b_offset=self.token_b_offset)
        return SwapCurve.create(self.curve_type)


class Initialize(BaseModel):
    """Create a pool from its starting reserves."""

    kind: Literal["initialize"] = "initialize"
    fees: FeesModel
    curve: CurveModel
    reserve_a: U64 = Field(alias="reserveA")
    reserve_b: U64 = Field(alias="reserveB")
    fee_account_owner: str | None = Field(default=None, alias="feeAccountOwner")

    model_config = {"populate_by_name": True}


class Swap(BaseModel):
    """Swap an exact amount in for at least a minimum amount out."""

    kind: Literal["swap"] = "swap"
    amount_in: U64 = Field(alias="amountIn")
    minimum_amount_out: U64 = Field(alias="minimumAmountOut")
    trade_direction: TradeDirection = Field(alias="tradeDirection")
    include_host_fee: bool = Field(default=False, alias="includeHostFee")

    model_config = {"populate_by_name": True}


class DepositAllTokenTypes(BaseModel):
    """Deposit both tokens for an exact amount of pool tokens."""

    kind: Literal["deposit_all_token_types"] = "deposit_all_token_types"
    pool_token_amount: U64 = Field(alias="poolTokenAmount")
    maximum_token_a_amount: U64 = Field(alias="maximumTokenAAmount")
    maximum_token_b_amount: U64 = Field(alias="maximumTokenBAmount")

    model_config = {"populate_by_name": True}


class WithdrawAllTokenTypes(BaseModel):
    """Burn an exact amount of pool tokens for both tokens."""

    kind: Literal["withdraw_all_token_types"] = "withdraw_all_token_types"
    pool_token_amount: U64 = Field(alias="poolTokenAmount")
    minimum_token_a_amount: U64 = Field(alias="minimumTokenAAmount")
    minimum_token_b_amount: U64 = Field(alias="minimumTokenBAmount")
    from_fee_account: bool = Field(default=False, alias="fromFeeAccount")

    model_config = {"populate_by_name": True}


class DepositSingleTokenTypeExactAmountIn(BaseModel):
    """Deposit an exact amount of one token for at least a minimum of pool tokens."""

    kind: Literal["deposit_single_token_type_exact_amount_in"] = (
        "deposit_single_token_type_exact_amount_in"
    )
    source_token_amount: U64 = Field(alias="sourceTokenAmount")
    minimum_pool_token_amount: U64 = Field(alias="minimumPoolTokenAmount")
    trade_direction: TradeDirection = Field(alias="tradeDirection")

    model_config = {"populate_by_name": True}


class WithdrawSingleTokenTypeExactAmountOut(BaseModel):
    """Withdraw an exact amount of one token for at most a maximum of pool tokens."""

    kind: Literal["withdraw_single_token_type_exact_amount_out"] = (
        "withdraw_single_token_type_exact_amount_out"
    )
    destination_token_amount: U64 = Field(alias="destinationTokenAmount")
    maximum_pool_token_amount: U64 = Field(alias="maximumPoolTokenAmount")
    trade_direction: TradeDirection = Field(alias="tradeDirection")
    from_fee_account: bool = Field(default=False, alias="fromFeeAccount")

    model_config = {"populate_by_name": True}


def _get_instruction_kind(v: Any) -> str | None:
    """Discriminator function for the Instruction union type."""
    if isinstance(v, dict):
        kind = v.get("kind")
        return str(kind) if kind is not None else None
    return getattr(v, "kind", None)


# Discriminated union: Pydantic uses the 'kind' field to pick the operation
Instruction = Annotated[
    Annotated[Initialize, Tag("initialize")]
    | Annotated[Swap, Tag("swap")]
    | Annotated[DepositAllTokenTypes, Tag("deposit_all_token_types")]
    | Annotated[WithdrawAllTokenTypes, Tag("withdraw_all_token_types")]
    | Annotated[
        DepositSingleTokenTypeExactAmountIn, Tag("deposit_single_token_type_exact_amount_in")
    ]
    | Annotated[
        WithdrawSingleTokenTypeExactAmountOut, Tag("withdraw_single_token_type_exact_amount_out")
    ],
    Discriminator(_get_instruction_kind),
]

"""Tests for pool initialization constraints."""

from dataclasses import replace

import pytest
from structlog.testing import capture_logs

from tokenswap.constraints import (
    PRODUCTION_CURVE_TYPES,
    PRODUCTION_FEES,
    SwapConstraints,
    load_constraints,
)
from tokenswap.curve.base import CurveType, SwapCurve
from tokenswap.errors import InvalidFee, UnsupportedCurveType


@pytest.fixture
def constraints() -> SwapConstraints:
    return SwapConstraints(
        owner_key="owner",
        valid_curve_types=PRODUCTION_CURVE_TYPES,
        fees=PRODUCTION_FEES,
    )


class TestValidateCurve:
    """Tests for the allowed curve types."""

    @pytest.mark.parametrize("curve_type", PRODUCTION_CURVE_TYPES)
    def test_allowed(self, constraints, curve_type):
        """Listed curve types pass."""
        constraints.validate_curve(SwapCurve.create(curve_type))

    def test_rejected(self, constraints):
        """Other curve types are rejected."""
        with pytest.raises(UnsupportedCurveType):
            constraints.validate_curve(SwapCurve.create(CurveType.OFFSET))


class TestValidateFees:
    """Tests for the minimum fee schedule."""

    def test_exact_schedule(self, constraints):
        """The minimum schedule itself passes."""
        constraints.validate_fees(PRODUCTION_FEES)

    def test_higher_numerators(self, constraints):
        """Numerators above the minimum pass."""
        constraints.validate_fees(
            replace(PRODUCTION_FEES, trade_fee_numerator=3, owner_trade_fee_numerator=10)
        )

    def test_lower_numerator(self, constraints):
        """A numerator below the minimum is rejected."""
        with pytest.raises(InvalidFee):
            constraints.validate_fees(replace(PRODUCTION_FEES, owner_trade_fee_numerator=4))

    def test_other_denominator(self, constraints):
        """Denominators must match exactly."""
        with pytest.raises(InvalidFee):
            constraints.validate_fees(replace(PRODUCTION_FEES, trade_fee_denominator=1000))

    def test_other_host_fee(self, constraints):
        """The host fee must match exactly, even when higher."""
        with pytest.raises(InvalidFee):
            constraints.validate_fees(replace(PRODUCTION_FEES, host_fee_numerator=30))


class TestLoadConstraints:
    """Tests for loading constraints from the environment."""

    def test_not_production(self):
        """Outside production there are no constraints."""
        assert load_constraints({}) is None
        assert load_constraints({"TOKENSWAP_PRODUCTION": "false"}) is None

    @pytest.mark.parametrize("flag", ["true", "1", "yes", "TRUE"])
    def test_production(self, flag):
        """Production loads the production curve types and fees."""
        constraints = load_constraints(
            {"TOKENSWAP_PRODUCTION": flag, "TOKENSWAP_OWNER_FEE_ADDRESS": "owner-key"}
        )
        assert constraints is not None
        assert constraints.owner_key == "owner-key"
        assert constraints.valid_curve_types == PRODUCTION_CURVE_TYPES
        assert constraints.fees == PRODUCTION_FEES

    def test_missing_owner_key_warns(self):
        """Production without an owner accepts any owner, with a warning."""
        with capture_logs() as logs:
            constraints = load_constraints({"TOKENSWAP_PRODUCTION": "true"})
        assert constraints is not None
        assert constraints.owner_key is None
        assert [log["event"] for log in logs] == ["constraints_missing_owner_key"]

    def test_reads_process_environment(self, monkeypatch):
        """Without a mapping, os.environ is read."""
        monkeypatch.setenv("TOKENSWAP_PRODUCTION", "true")
        monkeypatch.setenv("TOKENSWAP_OWNER_FEE_ADDRESS", "env-owner")
        constraints = load_constraints()
        assert constraints is not None
        assert constraints.owner_key == "env-owner"

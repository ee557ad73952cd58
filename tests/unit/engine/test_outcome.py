"""Tests for outcome and XP rules."""

from __future__ import annotations

import pytest

from lifequest.core.exceptions import UnknownStrategyError
from lifequest.engine.outcome import (
    always_award_xp,
    calculate_xp,
    determine_outcome,
    get_outcome_strategy,
    get_xp_strategy,
    high_risk_xp,
    xp_multiplier,
)
from lifequest.models import DayState, RollOutcome


class TestDetermineOutcome:
    """Tests for determine_outcome."""

    @pytest.mark.parametrize(("total", "dc"), [(3, 25), (30, 10), (20, None)])
    def test_natural_twenty(self, total: int, dc: int | None) -> None:
        """Test a natural 20 is critical regardless of the DC."""
        assert determine_outcome(20, total, dc) is RollOutcome.CRITICAL_SUCCESS

    @pytest.mark.parametrize(("total", "dc"), [(25, 5), (1, 10), (1, None)])
    def test_natural_one(self, total: int, dc: int | None) -> None:
        """Test a natural 1 is a critical failure regardless of the DC."""
        assert determine_outcome(1, total, dc) is RollOutcome.CRITICAL_FAILURE

    def test_no_dc_succeeds(self) -> None:
        """Test an unopposed roll always succeeds."""
        assert determine_outcome(2, -5) is RollOutcome.SUCCESS

    def test_dc_comparison(self) -> None:
        """Test meeting the DC succeeds and falling short fails."""
        assert determine_outcome(10, 15, 15) is RollOutcome.SUCCESS
        assert determine_outcome(10, 14, 15) is RollOutcome.FAILURE


class TestXP:
    """Tests for XP rewards."""

    def test_multiplier(self) -> None:
        """Test only a critical day multiplies XP."""
        assert xp_multiplier(DayState.CRITICAL) == 2
        assert xp_multiplier(DayState.CRITICAL, critical_multiplier=3) == 3
        for state in (DayState.NORMAL, DayState.DIFFICULT, DayState.INSPIRATION):
            assert xp_multiplier(state) == 1

    @pytest.mark.parametrize("outcome", [RollOutcome.FAILURE, RollOutcome.CRITICAL_FAILURE])
    @pytest.mark.parametrize("base_xp", [0, 1, 10, 999])
    def test_failures_award_nothing(self, outcome: RollOutcome, base_xp: int) -> None:
        """Test failures never award XP under the default rule."""
        assert calculate_xp(base_xp, outcome, 2) == 0

    def test_default_rewards(self) -> None:
        """Test success and critical success rewards."""
        assert calculate_xp(10, RollOutcome.SUCCESS, 1) == 10
        assert calculate_xp(10, RollOutcome.CRITICAL_SUCCESS, 1) == 20
        assert calculate_xp(10, RollOutcome.CRITICAL_SUCCESS, 2) == 40

    def test_always_award(self) -> None:
        """Test failures still earn a floored share."""
        assert always_award_xp(10, RollOutcome.FAILURE, 1) == 5
        assert always_award_xp(10, RollOutcome.CRITICAL_FAILURE, 1) == 2
        assert always_award_xp(3, RollOutcome.FAILURE, 1) == 1

    def test_high_risk(self) -> None:
        """Test the high-risk multipliers."""
        assert high_risk_xp(10, RollOutcome.CRITICAL_SUCCESS, 1) == 30
        assert high_risk_xp(5, RollOutcome.SUCCESS, 1) == 7
        assert high_risk_xp(10, RollOutcome.FAILURE, 2) == 0


class TestRegistry:
    """Tests for strategy lookup."""

    def test_lookup(self) -> None:
        """Test registered names resolve."""
        assert get_xp_strategy("high_risk") is high_risk_xp
        assert get_outcome_strategy("default")(20, 0, None) is RollOutcome.CRITICAL_SUCCESS

    def test_unknown_xp_strategy(self) -> None:
        """Test unknown names raise a domain error listing the options."""
        with pytest.raises(UnknownStrategyError) as exc_info:
            get_xp_strategy("generous")

        assert exc_info.value.details["available"] == ["always_award", "default", "high_risk"]

    def test_unknown_outcome_strategy(self) -> None:
        """Test unknown outcome strategies raise too."""
        with pytest.raises(UnknownStrategyError):
            get_outcome_strategy("lenient")

"""
Tests for severity classification and messaging.
"""

import pytest

from carrier_intel.core.models import SeverityLevel
from carrier_intel.core.severity import (
    generate_recommendation,
    generate_warning_message,
    get_severity_flag,
    get_severity_level,
)


class TestGetSeverityLevel:
    """Tests for get_severity_level."""

    @pytest.mark.parametrize(
        "variance,severity",
        [
            (-55, SeverityLevel.CRITICAL),
            (-50, SeverityLevel.CRITICAL),
            (-100, SeverityLevel.CRITICAL),
            (-30, SeverityLevel.HIGH),
            (-25, SeverityLevel.HIGH),
            (-15, SeverityLevel.MEDIUM),
            (-10, SeverityLevel.MEDIUM),
            (-5, SeverityLevel.LOW),
            (-0.01, SeverityLevel.LOW),
            (0, SeverityLevel.NONE),
        ],
    )
    def test_thresholds(self, variance: float, severity: SeverityLevel) -> None:
        """Test each severity band."""
        assert get_severity_level(variance) == severity

    def test_sign_is_ignored(self) -> None:
        """Test overpayment of the same size grades the same."""
        assert get_severity_level(55) == SeverityLevel.CRITICAL
        assert get_severity_level(12) == get_severity_level(-12)

    def test_monotone_in_magnitude(self) -> None:
        """Test larger gaps are never graded less severe."""
        magnitudes = [0, 0.5, 5, 9.99, 10, 24.9, 25, 49.9, 50, 75, 100, 250]
        ranks = [get_severity_level(-m).rank for m in magnitudes]
        assert ranks == sorted(ranks)


class TestMessaging:
    """Tests for warning and recommendation templates."""

    def test_critical_warning(self) -> None:
        """Test the critical warning names carrier, item and percentage."""
        message = generate_warning_message(
            "State Farm", "Permit", -100, SeverityLevel.CRITICAL
        )
        assert message.startswith("CRITICAL: State Farm historically underpays")
        assert '"Permit"' in message
        assert "100%" in message

    def test_percentage_is_rounded(self) -> None:
        """Test the percentage is a whole number."""
        message = generate_warning_message("USAA", "Ridge Caps", -18.46, SeverityLevel.MEDIUM)
        assert "by 18%" in message

    def test_none_warning(self) -> None:
        """Test the no-trend message."""
        message = generate_warning_message("USAA", "Gutters", 0, SeverityLevel.NONE)
        assert message == "No historical underpayment trend for this item from USAA."

    @pytest.mark.parametrize("severity", list(SeverityLevel))
    def test_every_severity_has_templates(self, severity: SeverityLevel) -> None:
        """Test every severity renders both templates."""
        assert generate_warning_message("Farmers", "Drip Edge", -30, severity)
        assert "Drip Edge" in generate_recommendation(severity, "Drip Edge")

    def test_recommendation_escalates(self) -> None:
        """Test the critical recommendation is the priority action."""
        assert generate_recommendation(SeverityLevel.CRITICAL, "Permit").startswith(
            "PRIORITY ACTION"
        )
        assert generate_recommendation(SeverityLevel.LOW, "Permit").startswith("Monitor")

    def test_severity_flags(self) -> None:
        """Test text markers."""
        assert get_severity_flag(SeverityLevel.CRITICAL) == "[!!!]"
        assert get_severity_flag(SeverityLevel.NONE) == "[ok]"

"""
Carrier Intelligence Engine - Main Orchestrator.
Coordinates matching, scoring and trend learning over a pattern repository.
"""

import logging
import threading
from collections.abc import Iterable, Mapping
from typing import Any

from .config import EngineSettings
from .core.confidence import calculate_confidence
from .core.matcher import FuzzyMatcher
from .core.models import (
    AggregateRiskAssessment,
    AuditOutcome,
    CarrierInsight,
    CarrierPattern,
    CarrierStats,
    ClaimAnalysis,
    InsightBatch,
    OverallStats,
    SelfTestReport,
    SeverityLevel,
    TrendUpdateResult,
)
from .core.severity import (
    generate_recommendation,
    generate_warning_message,
    get_severity_level,
)
from .data.seed import load_seed_patterns
from .modules.aggregate import AggregateRiskAssessor
from .modules.claim_analysis import analyze_claim_for_carrier
from .modules.statistics import get_carrier_stats, get_overall_stats
from .modules.trend_updater import TrendUpdater
from .repository.base import PatternRepository
from .repository.memory import InMemoryPatternRepository
from .selftest import run_self_tests

logger = logging.getLogger(__name__)

HIGH_RISK_SEVERITIES = (SeverityLevel.CRITICAL, SeverityLevel.HIGH)


def _is_name(value: Any) -> bool:
    return isinstance(value, str) and bool(value.strip())


class CarrierIntelEngine:
    """
    Main orchestrator for carrier underpayment intelligence.

    Read paths (insights, stats, assessments) only read the repository and
    are safe to call concurrently. ``update_trends_from_audit`` is the one
    write path.
    """

    def __init__(
        self,
        repository: PatternRepository | None = None,
        settings: EngineSettings | None = None,
    ) -> None:
        """
        Initialize the Carrier Intelligence Engine.

        Args:
            repository: Pattern store; defaults to an in-memory repository
                seeded with the built-in catalog
            settings: Engine thresholds; defaults to EngineSettings() which
                reads CARRIER_INTEL_* environment variables
        """
        self.settings = settings or EngineSettings()

        if repository is None:
            repository = InMemoryPatternRepository(
                load_seed_patterns() if self.settings.seed_catalog else None
            )
        self.repository = repository
        self.repository.max_attempts = self.settings.update_max_attempts

        # Initialize components lazily
        self._matcher: FuzzyMatcher | None = None
        self._assessor: AggregateRiskAssessor | None = None
        self._trend_updater: TrendUpdater | None = None

    @property
    def matcher(self) -> FuzzyMatcher:
        """Get or create the fuzzy matcher."""
        if self._matcher is None:
            self._matcher = FuzzyMatcher(threshold=self.settings.match_threshold)
        return self._matcher

    @property
    def assessor(self) -> AggregateRiskAssessor:
        """Get or create the aggregate risk assessor."""
        if self._assessor is None:
            self._assessor = AggregateRiskAssessor(
                max_high_priority_items=self.settings.max_high_priority_items
            )
        return self._assessor

    @property
    def trend_updater(self) -> TrendUpdater:
        """Get or create the trend updater."""
        if self._trend_updater is None:
            self._trend_updater = TrendUpdater(self.repository)
        return self._trend_updater

    def get_carrier_patterns(self, carrier_name: str) -> list[CarrierPattern]:
        """All patterns for a carrier; empty for unknown or invalid names."""
        if not _is_name(carrier_name):
            return []
        return self.repository.get_patterns_by_carrier(carrier_name)

    def get_all_carriers(self) -> list[str]:
        """Names of every carrier with at least one pattern."""
        return self.repository.list_carriers()

    def get_insight(self, carrier_name: str, item_name: str) -> CarrierInsight | None:
        """
        Analyze one line item for a carrier.

        Args:
            carrier_name: Insurance carrier
            item_name: Free-text line-item description

        Returns:
            CarrierInsight for the best matching pattern, or None when the
            input is invalid or no pattern reaches the match threshold
        """
        if not _is_name(carrier_name):
            logger.warning("Invalid carrier name: %r", carrier_name)
            return None
        if not _is_name(item_name):
            logger.warning("Invalid item name: %r", item_name)
            return None

        patterns = self.repository.get_patterns_by_carrier(carrier_name)
        if not patterns:
            return None

        match = self.matcher.find_best_match(item_name, patterns)
        if match is None:
            return None

        pattern = match.pattern
        variance = pattern.underpayment_rate
        severity = get_severity_level(variance)
        confidence = calculate_confidence(pattern.historical_count, pattern.confidence)

        return CarrierInsight(
            severity=severity,
            variance=variance,
            percentage_underpayment=abs(variance),
            message=generate_warning_message(carrier_name, item_name, variance, severity),
            recommended_action=generate_recommendation(severity, item_name),
            confidence=confidence.adjusted_confidence,
            confidence_level=confidence.confidence_level,
            sample_size=pattern.historical_count,
            carrier=carrier_name,
            item=item_name,
            pattern=pattern,
            match_score=round(match.score, 4),
        )

    def get_insights(self, carrier_name: str, items: Iterable[str]) -> InsightBatch:
        """
        Analyze every line item of a claim for a carrier.

        Items are matched independently; unmatched or invalid items are
        skipped without aborting the batch.
        """
        items = list(items)
        insights: list[CarrierInsight] = []
        for item in items:
            insight = self.get_insight(carrier_name, item)
            if insight is not None:
                insights.append(insight)

        high_risk_count = sum(1 for i in insights if i.severity in HIGH_RISK_SEVERITIES)
        total_underpayment = sum(i.percentage_underpayment for i in insights)

        if high_risk_count >= 3:
            recommendation = (
                "ALERT: Multiple high-risk items detected. Consider engaging a public "
                "adjuster or attorney to ensure fair compensation."
            )
        elif high_risk_count >= 1:
            recommendation = (
                "Some items flagged as high risk. Ensure thorough documentation and "
                "consider professional review."
            )
        elif insights:
            recommendation = (
                "Some underpayment patterns detected. Provide supporting documentation "
                "for flagged items."
            )
        else:
            recommendation = "Standard claim documentation should be sufficient."

        return InsightBatch(
            carrier=carrier_name if isinstance(carrier_name, str) else str(carrier_name),
            items_analyzed=len(items),
            insights=insights,
            high_risk_count=high_risk_count,
            total_estimated_underpayment=round(total_underpayment, 1),
            overall_recommendation=recommendation,
            assessment=self.assess(insights),
        )

    def assess(self, insights: Iterable[CarrierInsight]) -> AggregateRiskAssessment:
        """Roll per-item insights up into a claim-level verdict."""
        return self.assessor.assess(insights)

    def update_trends_from_audit(
        self, outcome: AuditOutcome | Mapping[str, Any]
    ) -> TrendUpdateResult:
        """Feed one priced audit outcome back into the pattern store."""
        return self.trend_updater.update_from_audit(outcome)

    def get_carrier_stats(self, carrier_name: str) -> CarrierStats | None:
        """Rollup of one carrier's patterns, or None if it has none."""
        return get_carrier_stats(self.get_carrier_patterns(carrier_name), carrier_name)

    def get_overall_stats(self) -> OverallStats:
        """Cross-carrier rollup and risk ranking."""
        return get_overall_stats(self.repository)

    def analyze_claim(self, carrier_name: str, line_items: Iterable[str]) -> ClaimAnalysis:
        """Verbatim substring scan of a claim against a carrier's patterns."""
        return analyze_claim_for_carrier(self.get_carrier_patterns(carrier_name), list(line_items))

    def run_self_tests(self) -> SelfTestReport:
        """Run the built-in regression battery against this engine."""
        return run_self_tests(self)

    def configure(
        self,
        match_threshold: float | None = None,
        max_high_priority_items: int | None = None,
        update_max_attempts: int | None = None,
    ) -> "CarrierIntelEngine":
        """
        Configure the engine settings.

        Args:
            match_threshold: Minimum fuzzy score for a pattern to match
            max_high_priority_items: Cap on HIGH items in priority lists
            update_max_attempts: Optimistic-concurrency attempts per update

        Returns:
            Self for method chaining
        """
        updates: dict[str, Any] = {}
        if match_threshold is not None:
            updates["match_threshold"] = match_threshold
        if max_high_priority_items is not None:
            updates["max_high_priority_items"] = max_high_priority_items
        if update_max_attempts is not None:
            updates["update_max_attempts"] = update_max_attempts

        if updates:
            self.settings = EngineSettings.model_validate(
                {**self.settings.model_dump(), **updates}
            )
            self.repository.max_attempts = self.settings.update_max_attempts
            self._matcher = None
            self._assessor = None
        return self


_default_engine: CarrierIntelEngine | None = None
_default_engine_lock = threading.Lock()


def get_default_engine() -> CarrierIntelEngine:
    """Get the shared engine backed by the seeded in-memory catalog."""
    global _default_engine
    if _default_engine is None:
        with _default_engine_lock:
            if _default_engine is None:
                _default_engine = CarrierIntelEngine()
    return _default_engine


# Convenience function for quick lookups
def get_carrier_insight(carrier_name: str, item_name: str) -> CarrierInsight | None:
    """
    Convenience function for a single line-item lookup.

    Args:
        carrier_name: Insurance carrier
        item_name: Line-item description

    Returns:
        CarrierInsight or None
    """
    return get_default_engine().get_insight(carrier_name, item_name)

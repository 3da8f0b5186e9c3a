"""
Core components for the Carrier Intelligence Engine.
"""

from .confidence import (
    CONFIDENCE_THRESHOLDS,
    CarrierSampleSizes,
    ConfidenceLevel,
    ConfidenceResult,
    calculate_confidence,
)
from .matcher import FuzzyMatcher, PatternMatch, calculate_match_score
from .models import (
    AggregateRiskAssessment,
    AuditOutcome,
    CarrierInsight,
    CarrierPattern,
    CarrierRanking,
    CarrierStats,
    ClaimAnalysis,
    InsightBatch,
    OverallStats,
    SelfTestReport,
    SeverityLevel,
    StrategyType,
    TrendClassification,
    TrendUpdateResult,
)
from .normalizer import canonical_key, normalize_for_matching
from .severity import (
    generate_recommendation,
    generate_warning_message,
    get_severity_flag,
    get_severity_level,
)

__all__ = [
    # Models
    "AggregateRiskAssessment",
    "AuditOutcome",
    "CarrierInsight",
    "CarrierPattern",
    "CarrierRanking",
    "CarrierStats",
    "ClaimAnalysis",
    "InsightBatch",
    "OverallStats",
    "SelfTestReport",
    "SeverityLevel",
    "StrategyType",
    "TrendClassification",
    "TrendUpdateResult",
    # Confidence
    "CONFIDENCE_THRESHOLDS",
    "CarrierSampleSizes",
    "ConfidenceLevel",
    "ConfidenceResult",
    "calculate_confidence",
    # Matching
    "FuzzyMatcher",
    "PatternMatch",
    "calculate_match_score",
    "canonical_key",
    "normalize_for_matching",
    # Severity
    "generate_recommendation",
    "generate_warning_message",
    "get_severity_flag",
    "get_severity_level",
]

"""
Carrier Underpayment Intelligence Engine.

Flags claim line items that an insurance carrier has historically
underpaid, grades the risk, and learns from audit outcomes over time.
"""

import logging

from .config import EngineSettings
from .core.confidence import CarrierSampleSizes, ConfidenceLevel, calculate_confidence
from .core.models import (
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
from .core.severity import get_severity_level
from .engine import CarrierIntelEngine, get_carrier_insight, get_default_engine
from .exceptions import (
    CarrierIntelError,
    ConcurrentUpdateError,
    RepositoryError,
    TrendUpdateError,
)
from .reporting.risk_report import PortfolioFormatter, RiskReportFormatter
from .repository import InMemoryPatternRepository, PatternRepository
from .selftest import run_self_tests

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"

__all__ = [
    # Main Engine
    "CarrierIntelEngine",
    "EngineSettings",
    "get_carrier_insight",
    "get_default_engine",
    "run_self_tests",
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
    # Scoring
    "CarrierSampleSizes",
    "ConfidenceLevel",
    "calculate_confidence",
    "get_severity_level",
    # Storage
    "InMemoryPatternRepository",
    "PatternRepository",
    # Reporting
    "PortfolioFormatter",
    "RiskReportFormatter",
    # Errors
    "CarrierIntelError",
    "ConcurrentUpdateError",
    "RepositoryError",
    "TrendUpdateError",
]

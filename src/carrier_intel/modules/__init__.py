"""
Analysis modules for the Carrier Intelligence Engine.
"""

from .aggregate import AggregateRiskAssessor, classify_overall_risk
from .claim_analysis import analyze_claim_for_carrier
from .statistics import get_carrier_stats, get_overall_stats, get_trend_classification
from .trend_updater import TrendUpdater

__all__ = [
    "AggregateRiskAssessor",
    "TrendUpdater",
    "analyze_claim_for_carrier",
    "classify_overall_risk",
    "get_carrier_stats",
    "get_overall_stats",
    "get_trend_classification",
]

"""
Carrier and portfolio statistics over stored patterns.
"""

from collections.abc import Sequence

from ..core.models import (
    CarrierPattern,
    CarrierRanking,
    CarrierStats,
    OverallStats,
    StrategyType,
    TrendClassification,
)
from ..repository.base import PatternRepository


def get_trend_classification(avg_underpayment_rate: float) -> TrendClassification:
    """Classify a carrier by its average absolute underpayment rate."""
    if avg_underpayment_rate > 25:
        return TrendClassification.PROBLEMATIC
    if avg_underpayment_rate > 15:
        return TrendClassification.UNDERPAYS
    if avg_underpayment_rate < 5:
        return TrendClassification.GENEROUS
    return TrendClassification.FAIR


def calculate_risk_score(
    avg_underpayment_rate: float, avg_frequency: float, pattern_count: int
) -> int:
    """Weighted 40/30/30 blend of underpayment, frequency and breadth."""
    return round(
        avg_underpayment_rate * 0.4 + avg_frequency * 100 * 0.3 + pattern_count * 5 * 0.3
    )


def _empty_breakdown() -> dict[StrategyType, int]:
    return {strategy: 0 for strategy in StrategyType}


def get_carrier_stats(
    patterns: Sequence[CarrierPattern], carrier_name: str
) -> CarrierStats | None:
    """
    Summarize one carrier's patterns.

    Args:
        patterns: Every pattern held for the carrier
        carrier_name: Name to report the stats under

    Returns:
        CarrierStats, or None when the carrier has no patterns
    """
    if not patterns:
        return None

    count = len(patterns)
    breakdown = _empty_breakdown()
    for pattern in patterns:
        breakdown[pattern.common_strategy] += 1

    avg_underpayment = sum(abs(p.underpayment_rate) for p in patterns) / count
    avg_frequency = sum(p.frequency for p in patterns) / count
    avg_confidence = sum(p.confidence for p in patterns) / count

    # max() keeps the first strategy in declaration order on ties
    primary_strategy = max(breakdown, key=lambda strategy: breakdown[strategy])

    return CarrierStats(
        carrier_name=carrier_name,
        total_patterns=count,
        avg_underpayment_rate=round(avg_underpayment, 1),
        avg_frequency=round(avg_frequency, 2),
        avg_confidence=round(avg_confidence, 1),
        primary_strategy=primary_strategy,
        strategy_breakdown=breakdown,
        total_historical_claims=sum(p.historical_count for p in patterns),
        risk_score=calculate_risk_score(avg_underpayment, avg_frequency, count),
        trend_classification=get_trend_classification(avg_underpayment),
    )


def get_overall_stats(repository: PatternRepository) -> OverallStats:
    """
    Portfolio rollup across every carrier in the repository.

    Averages are taken over carriers (each carrier weighs the same), and
    carriers are ranked by risk score, highest first.
    """
    carrier_stats: list[CarrierStats] = []
    for carrier in repository.list_carriers():
        stats = get_carrier_stats(repository.get_patterns_by_carrier(carrier), carrier)
        if stats is not None:
            carrier_stats.append(stats)

    if not carrier_stats:
        return OverallStats()

    prevalence = _empty_breakdown()
    for stats in carrier_stats:
        for strategy, count in stats.strategy_breakdown.items():
            prevalence[strategy] += count

    n = len(carrier_stats)
    rankings = sorted(
        (
            CarrierRanking(
                carrier=s.carrier_name,
                risk_score=s.risk_score,
                avg_underpayment=s.avg_underpayment_rate,
            )
            for s in carrier_stats
        ),
        key=lambda ranking: ranking.risk_score,
        reverse=True,
    )

    return OverallStats(
        total_carriers=n,
        total_patterns=sum(s.total_patterns for s in carrier_stats),
        avg_underpayment_rate=round(sum(s.avg_underpayment_rate for s in carrier_stats) / n, 1),
        avg_frequency=round(sum(s.avg_frequency for s in carrier_stats) / n, 2),
        avg_confidence=round(sum(s.avg_confidence for s in carrier_stats) / n, 1),
        total_historical_claims=sum(s.total_historical_claims for s in carrier_stats),
        carrier_rankings=rankings,
        strategy_prevalence=prevalence,
    )

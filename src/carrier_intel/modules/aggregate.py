"""
Claim-level risk rollup of per-item carrier insights.
"""

from collections.abc import Iterable

from ..core.models import AggregateRiskAssessment, CarrierInsight, SeverityLevel

ACTION_SUMMARIES: dict[SeverityLevel, str] = {
    SeverityLevel.CRITICAL: (
        "URGENT: Multiple critical underpayment patterns detected. Strongly consider "
        "engaging a public adjuster or insurance attorney before accepting settlement."
    ),
    SeverityLevel.HIGH: (
        "ALERT: Significant underpayment risk detected. Gather detailed documentation "
        "and consider professional review of claim settlement."
    ),
    SeverityLevel.MEDIUM: (
        "CAUTION: Some underpayment indicators present. Ensure thorough documentation "
        "with photos, receipts, and contractor estimates."
    ),
    SeverityLevel.LOW: (
        "Minor concerns noted. Standard documentation should suffice, but verify all "
        "line items match fair market values."
    ),
    SeverityLevel.NONE: "Standard documentation should be sufficient for this claim.",
}


def classify_overall_risk(critical: int, high: int, medium: int, low: int) -> SeverityLevel:
    """Overall claim risk from severity counts. Rules are checked in order."""
    if critical >= 2 or (critical >= 1 and high >= 2):
        return SeverityLevel.CRITICAL
    if critical >= 1 or high >= 3:
        return SeverityLevel.HIGH
    if high >= 1 or medium >= 3:
        return SeverityLevel.MEDIUM
    if medium >= 1 or low >= 2:
        return SeverityLevel.LOW
    return SeverityLevel.NONE


class AggregateRiskAssessor:
    """Folds a claim's insights into one risk verdict."""

    def __init__(self, max_high_priority_items: int = 5) -> None:
        self.max_high_priority_items = max_high_priority_items

    def assess(self, insights: Iterable[CarrierInsight]) -> AggregateRiskAssessment:
        """
        Count insights by severity and pick the overall risk.

        Critical items always go on the priority list; high items only
        while the list is shorter than ``max_high_priority_items``.
        """
        counts = {severity: 0 for severity in SeverityLevel}
        total_variance = 0.0
        priority_items: list[str] = []

        for insight in insights:
            counts[insight.severity] += 1
            total_variance += abs(insight.variance)
            if insight.severity == SeverityLevel.CRITICAL:
                priority_items.append(insight.item)
            elif (
                insight.severity == SeverityLevel.HIGH
                and len(priority_items) < self.max_high_priority_items
            ):
                priority_items.append(insight.item)

        overall = classify_overall_risk(
            counts[SeverityLevel.CRITICAL],
            counts[SeverityLevel.HIGH],
            counts[SeverityLevel.MEDIUM],
            counts[SeverityLevel.LOW],
        )

        return AggregateRiskAssessment(
            overall_risk=overall,
            critical_count=counts[SeverityLevel.CRITICAL],
            high_count=counts[SeverityLevel.HIGH],
            medium_count=counts[SeverityLevel.MEDIUM],
            low_count=counts[SeverityLevel.LOW],
            total_variance=round(total_variance, 1),
            priority_items=priority_items,
            action_summary=ACTION_SUMMARIES[overall],
        )

"""
Substring quick scan of a claim against a carrier's patterns.

Cheaper and stricter than fuzzy matching: a line item is flagged only when
its text contains a pattern description or gap phrase verbatim
(case-insensitive). Every matching pattern is reported, not just the best.
"""

from collections.abc import Sequence

from ..core.models import CarrierPattern, ClaimAnalysis, StrategyType

HIGH_FREQUENCY = 0.5
DEEP_UNDERPAYMENT = -30

STRATEGY_RECOMMENDATIONS: dict[StrategyType, str] = {
    StrategyType.OMIT: (
        "Check for completely missing line items - this carrier frequently omits "
        "certain items"
    ),
    StrategyType.UNDERVALUE: (
        "Verify pricing against current market rates - undervaluation is common"
    ),
    StrategyType.DENY_MODIFIER: (
        "Ensure labor modifiers for steep pitch, access difficulty are included"
    ),
    StrategyType.ZERO_COST: "Confirm taxes and permits are not zeroed out",
}


def _matches(item_lower: str, pattern: CarrierPattern) -> bool:
    if pattern.line_item_description.lower() in item_lower:
        return True
    return any(gap.lower() in item_lower for gap in pattern.typical_gaps)


def analyze_claim_for_carrier(
    patterns: Sequence[CarrierPattern], line_items: Sequence[str]
) -> ClaimAnalysis:
    """
    Scan line items for verbatim pattern hits.

    Args:
        patterns: The carrier's patterns
        line_items: Free-text line-item descriptions

    Returns:
        ClaimAnalysis with matched patterns, summed underpayment rate,
        risky items and strategy-driven recommendations
    """
    analysis = ClaimAnalysis()

    for item in line_items:
        if not isinstance(item, str):
            continue
        item_lower = item.lower()
        for pattern in patterns:
            if not _matches(item_lower, pattern):
                continue
            analysis.matched_patterns.append(pattern)
            analysis.estimated_underpayment += abs(pattern.underpayment_rate)
            if (
                pattern.frequency > HIGH_FREQUENCY
                or pattern.underpayment_rate < DEEP_UNDERPAYMENT
            ) and item not in analysis.risk_items:
                analysis.risk_items.append(item)

    strategies = {pattern.common_strategy for pattern in analysis.matched_patterns}
    analysis.recommendations = [
        message
        for strategy, message in STRATEGY_RECOMMENDATIONS.items()
        if strategy in strategies
    ]
    return analysis

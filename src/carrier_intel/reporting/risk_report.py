"""
Carrier Risk Reporting Module.
Renders insight batches and portfolio statistics for callers and exports.
"""

import json
from typing import Any

import pandas as pd

from ..core.models import InsightBatch, OverallStats, SeverityLevel
from ..core.severity import get_severity_flag

INSIGHT_COLUMNS = [
    "item",
    "severity",
    "variance",
    "confidence",
    "confidence_level",
    "sample_size",
    "matched_pattern",
    "strategy",
]

RANKING_COLUMNS = ["rank", "carrier", "risk_score", "avg_underpayment"]


class RiskReportFormatter:
    """
    Formats an InsightBatch for various output formats.
    """

    def __init__(self, batch: InsightBatch) -> None:
        self.batch = batch

    def to_text(self, include_details: bool = True) -> str:
        """
        Format the batch as a plain text report.

        Args:
            include_details: Whether to include per-item messages

        Returns:
            Formatted text report
        """
        lines: list[str] = []
        assessment = self.batch.assessment

        lines.append("=" * 70)
        lines.append("CARRIER UNDERPAYMENT RISK REPORT")
        lines.append("=" * 70)
        lines.append("")
        lines.append(f"Carrier: {self.batch.carrier}")
        lines.append(
            f"Line Items Analyzed: {self.batch.items_analyzed} "
            f"({len(self.batch.insights)} flagged)"
        )
        lines.append("")

        lines.append("-" * 70)
        lines.append("SUMMARY")
        lines.append("-" * 70)
        lines.append(
            f"Overall Risk: {get_severity_flag(assessment.overall_risk)} "
            f"{assessment.overall_risk.value}"
        )
        counts = severity_counts(self.batch)
        for severity in reversed(SeverityLevel):
            if severity is not SeverityLevel.NONE:
                lines.append(f"  - {severity.value.title()}: {counts[severity.value]}")
        lines.append(f"Total Variance: {assessment.total_variance:.1f}%")
        lines.append("")
        lines.append(assessment.action_summary)
        lines.append("")

        if assessment.priority_items:
            lines.append("Priority Items:")
            for item in assessment.priority_items:
                lines.append(f"  - {item}")
            lines.append("")

        if include_details and self.batch.insights:
            lines.append("-" * 70)
            lines.append("FLAGGED ITEMS")
            lines.append("-" * 70)
            ordered = sorted(
                self.batch.insights, key=lambda i: i.severity.rank, reverse=True
            )
            for insight in ordered:
                lines.append("")
                lines.append(
                    f"{get_severity_flag(insight.severity)} "
                    f"[{insight.severity.value}] {insight.item}"
                )
                lines.append(f"   {insight.message}")
                lines.append(
                    f"   Confidence: {insight.confidence:.1f} "
                    f"({insight.confidence_level.value}, n={insight.sample_size})"
                )
                lines.append(f"   Action: {insight.recommended_action}")
            lines.append("")

        lines.append("=" * 70)
        lines.append("END OF REPORT")
        lines.append("=" * 70)

        return "\n".join(lines)

    def to_dict(self) -> dict[str, Any]:
        """Convert the batch to a JSON-compatible dictionary."""
        return self.batch.model_dump(mode="json")

    def to_json(self, indent: int = 2) -> str:
        """Convert the batch to a JSON string."""
        return json.dumps(self.to_dict(), indent=indent)

    def to_dataframe(self) -> pd.DataFrame:
        """One row per flagged line item, most severe first."""
        rows = [
            {
                "item": insight.item,
                "severity": insight.severity.value,
                "variance": insight.variance,
                "confidence": insight.confidence,
                "confidence_level": insight.confidence_level.value,
                "sample_size": insight.sample_size,
                "matched_pattern": (
                    insight.pattern.line_item_description if insight.pattern else None
                ),
                "strategy": (
                    insight.pattern.common_strategy.value if insight.pattern else None
                ),
                "_rank": insight.severity.rank,
            }
            for insight in self.batch.insights
        ]
        if not rows:
            return pd.DataFrame(columns=INSIGHT_COLUMNS)

        df = pd.DataFrame(rows)
        df = df.sort_values("_rank", ascending=False, kind="stable")
        return df[INSIGHT_COLUMNS].reset_index(drop=True)


class PortfolioFormatter:
    """
    Formats cross-carrier OverallStats.
    """

    def __init__(self, stats: OverallStats) -> None:
        self.stats = stats

    def rankings_dataframe(self) -> pd.DataFrame:
        """Carrier rankings as a table, highest risk first."""
        if not self.stats.carrier_rankings:
            return pd.DataFrame(columns=RANKING_COLUMNS)

        df = pd.DataFrame([r.model_dump() for r in self.stats.carrier_rankings])
        df.insert(0, "rank", range(1, len(df) + 1))
        return df[RANKING_COLUMNS]

    def to_text(self) -> str:
        """Plain text portfolio summary."""
        lines: list[str] = []
        lines.append("=" * 70)
        lines.append("CARRIER PORTFOLIO SUMMARY")
        lines.append("=" * 70)
        lines.append(f"Carriers: {self.stats.total_carriers}")
        lines.append(f"Patterns: {self.stats.total_patterns}")
        lines.append(f"Historical Claims: {self.stats.total_historical_claims:,}")
        lines.append(f"Avg Underpayment Rate: {self.stats.avg_underpayment_rate:.1f}%")
        lines.append(f"Avg Frequency: {self.stats.avg_frequency:.2f}")
        lines.append(f"Avg Confidence: {self.stats.avg_confidence:.1f}")
        lines.append("")

        if self.stats.carrier_rankings:
            lines.append("Risk Ranking:")
            for position, ranking in enumerate(self.stats.carrier_rankings, start=1):
                lines.append(
                    f"  {position}. {ranking.carrier} - risk {ranking.risk_score}, "
                    f"avg underpayment {ranking.avg_underpayment:.1f}%"
                )
            lines.append("")

        lines.append("Strategy Prevalence:")
        for strategy, count in self.stats.strategy_prevalence.items():
            lines.append(f"  - {strategy.value}: {count}")

        return "\n".join(lines)


def severity_counts(batch: InsightBatch) -> dict[str, int]:
    """Count of insights per severity, including zero counts."""
    counts = {severity.value: 0 for severity in SeverityLevel}
    for insight in batch.insights:
        counts[insight.severity.value] += 1
    return counts

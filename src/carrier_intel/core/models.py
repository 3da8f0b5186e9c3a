"""
Core data models for the Carrier Intelligence Engine.
Uses Pydantic for validation and serialization.
"""

from enum import Enum
from typing import Annotated

from pydantic import BaseModel, Field, computed_field, field_validator

from .confidence import ConfidenceLevel, calculate_confidence
from .normalizer import canonical_key


class StrategyType(str, Enum):
    """Categorical tag for how a carrier shortchanges a line item."""

    OMIT = "OMIT"
    UNDERVALUE = "UNDERVALUE"
    DENY_COVERAGE = "DENY_COVERAGE"
    DENY_MODIFIER = "DENY_MODIFIER"
    ZERO_COST = "ZERO_COST"


class SeverityLevel(str, Enum):
    """Severity of an underpayment gap, independent of confidence."""

    NONE = "NONE"
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    CRITICAL = "CRITICAL"

    @property
    def rank(self) -> int:
        return list(SeverityLevel).index(self)


class TrendClassification(str, Enum):
    """Carrier-level classification of average underpayment."""

    PROBLEMATIC = "PROBLEMATIC"
    UNDERPAYS = "UNDERPAYS"
    FAIR = "FAIR"
    GENEROUS = "GENEROUS"


class CarrierPattern(BaseModel):
    """Historical underpayment behavior of one carrier on one kind of item."""

    carrier_name: str = Field(min_length=1)
    line_item_description: str = Field(min_length=1)
    underpayment_rate: float = Field(description="Signed percentage vs fair market value")
    frequency: float = Field(ge=0, le=1)
    typical_gaps: list[str] = Field(default_factory=list)
    common_strategy: StrategyType
    historical_count: int = Field(default=0, ge=0)
    confidence: float = Field(ge=0, le=99)
    version: int = Field(default=0, ge=0)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def confidence_level(self) -> ConfidenceLevel:
        """Recomputed from sample size on every access, never stored."""
        return calculate_confidence(self.historical_count, self.confidence).confidence_level

    @property
    def key(self) -> tuple[str, str]:
        return canonical_key(self.carrier_name, self.line_item_description)


class CarrierInsight(BaseModel):
    """Per-item analysis result for one carrier."""

    severity: SeverityLevel
    variance: float
    percentage_underpayment: float
    message: str
    recommended_action: str
    confidence: float
    confidence_level: ConfidenceLevel
    sample_size: int
    carrier: str
    item: str
    pattern: CarrierPattern | None = None
    match_score: float | None = None


StrictPrice = Annotated[float, Field(strict=True, allow_inf_nan=False)]


class AuditOutcome(BaseModel):
    """A completed, priced audit observation fed back into the trends."""

    model_config = {"populate_by_name": True}

    carrier: str = Field(strict=True)
    item_name: str = Field(strict=True, alias="itemName")
    claim_price: StrictPrice = Field(alias="claimPrice")
    market_price: StrictPrice = Field(gt=0, alias="marketPrice")

    @field_validator("carrier", "item_name")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must be a non-empty string")
        return value

    @property
    def variance(self) -> float:
        """Signed percentage of the claim price against market price."""
        return (self.claim_price - self.market_price) * 100 / self.market_price


class TrendUpdateResult(BaseModel):
    """Outcome of feeding one audit into the trend store."""

    success: bool
    created: bool = False
    new_variance: float | None = None
    sample_size: int | None = None
    pattern: CarrierPattern | None = None
    error: str | None = None


class AggregateRiskAssessment(BaseModel):
    """Claim-level verdict rolled up from per-item insights."""

    overall_risk: SeverityLevel = SeverityLevel.NONE
    critical_count: int = 0
    high_count: int = 0
    medium_count: int = 0
    low_count: int = 0
    total_variance: float = 0.0
    priority_items: list[str] = Field(default_factory=list)
    action_summary: str = ""


class InsightBatch(BaseModel):
    """Insights for several line items of one claim."""

    carrier: str
    items_analyzed: int = 0
    insights: list[CarrierInsight] = Field(default_factory=list)
    high_risk_count: int = 0
    total_estimated_underpayment: float = 0.0
    overall_recommendation: str = ""
    assessment: AggregateRiskAssessment = Field(default_factory=AggregateRiskAssessment)


def _empty_breakdown() -> dict[StrategyType, int]:
    return {strategy: 0 for strategy in StrategyType}


class CarrierStats(BaseModel):
    """Rollup of every pattern held for one carrier."""

    carrier_name: str
    total_patterns: int
    avg_underpayment_rate: float
    avg_frequency: float
    avg_confidence: float
    primary_strategy: StrategyType
    strategy_breakdown: dict[StrategyType, int] = Field(default_factory=_empty_breakdown)
    total_historical_claims: int
    risk_score: int
    trend_classification: TrendClassification


class CarrierRanking(BaseModel):
    """One row of the cross-carrier risk ranking."""

    carrier: str
    risk_score: int
    avg_underpayment: float


class OverallStats(BaseModel):
    """Portfolio statistics across all carriers."""

    total_carriers: int = 0
    total_patterns: int = 0
    avg_underpayment_rate: float = 0.0
    avg_frequency: float = 0.0
    avg_confidence: float = 0.0
    total_historical_claims: int = 0
    carrier_rankings: list[CarrierRanking] = Field(default_factory=list)
    strategy_prevalence: dict[StrategyType, int] = Field(default_factory=_empty_breakdown)


class ClaimAnalysis(BaseModel):
    """Result of the substring quick scan over a claim's line items."""

    matched_patterns: list[CarrierPattern] = Field(default_factory=list)
    estimated_underpayment: float = 0.0
    risk_items: list[str] = Field(default_factory=list)
    recommendations: list[str] = Field(default_factory=list)


class SelfTestReport(BaseModel):
    """Tally of the built-in regression battery."""

    passed: int = 0
    failed: int = 0
    results: list[str] = Field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.failed == 0

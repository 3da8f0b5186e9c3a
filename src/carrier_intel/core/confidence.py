"""
Sample-size aware confidence scoring.

A pattern's stored ``confidence`` says how sure the analysts were; the
number of observations behind it decides how much of that we report.
Counts below the minimum sample are halved and capped at 50, larger
samples scale the base score by a multiplier.
"""

from dataclasses import dataclass
from enum import Enum


class ConfidenceLevel(str, Enum):
    """Classification of an adjusted confidence score."""

    INSUFFICIENT = "insufficient"
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    VERY_HIGH = "very_high"


class CarrierSampleSizes:
    """Observation counts at which the sample multiplier steps up."""

    MINIMUM = 50
    LOW_CONFIDENCE = 100
    MEDIUM_CONFIDENCE = 200
    HIGH_CONFIDENCE = 300
    VERY_HIGH_CONFIDENCE = 500


# Adjusted-confidence floor for each level, highest first
CONFIDENCE_THRESHOLDS: list[tuple[float, ConfidenceLevel]] = [
    (95, ConfidenceLevel.VERY_HIGH),
    (90, ConfidenceLevel.HIGH),
    (80, ConfidenceLevel.MEDIUM),
    (70, ConfidenceLevel.LOW),
]

# (count below which the tier applies, multiplier, category)
SAMPLE_MULTIPLIERS: list[tuple[int | None, float, str]] = [
    (CarrierSampleSizes.LOW_CONFIDENCE, 0.75, "minimum"),
    (CarrierSampleSizes.MEDIUM_CONFIDENCE, 0.9, "low"),
    (CarrierSampleSizes.HIGH_CONFIDENCE, 1.0, "medium"),
    (CarrierSampleSizes.VERY_HIGH_CONFIDENCE, 1.05, "high"),
    (None, 1.1, "very_high"),
]

MAX_CONFIDENCE = 99.0
INSUFFICIENT_CAP = 50.0


@dataclass(frozen=True)
class ConfidenceResult:
    """Calibrated confidence for a pattern."""

    confidence_level: ConfidenceLevel
    adjusted_confidence: float
    sample_size_category: str


def get_confidence_level(adjusted_confidence: float) -> ConfidenceLevel:
    """Map an adjusted confidence score to its level."""
    for floor, level in CONFIDENCE_THRESHOLDS:
        if adjusted_confidence >= floor:
            return level
    return ConfidenceLevel.INSUFFICIENT


def get_sample_multiplier(historical_count: int) -> tuple[float, str]:
    """Return the (multiplier, category) tier for a sample count."""
    for upper, multiplier, category in SAMPLE_MULTIPLIERS:
        if upper is None or historical_count < upper:
            return multiplier, category
    raise AssertionError("unreachable: last tier is open-ended")


def calculate_confidence(historical_count: int, confidence: float) -> ConfidenceResult:
    """
    Convert a pattern's sample size and base confidence into a calibrated score.

    Args:
        historical_count: Number of observations backing the pattern
        confidence: Base confidence in [0, 99]

    Returns:
        ConfidenceResult with level, adjusted score and sample category
    """
    if historical_count < CarrierSampleSizes.MINIMUM:
        return ConfidenceResult(
            confidence_level=ConfidenceLevel.INSUFFICIENT,
            adjusted_confidence=min(confidence * 0.5, INSUFFICIENT_CAP),
            sample_size_category="insufficient_data",
        )

    multiplier, category = get_sample_multiplier(historical_count)
    adjusted = min(confidence * multiplier, MAX_CONFIDENCE)

    return ConfidenceResult(
        confidence_level=get_confidence_level(adjusted),
        adjusted_confidence=round(adjusted, 1),
        sample_size_category=category,
    )

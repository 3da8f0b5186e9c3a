"""
Online learning from audit outcomes.

Each completed, priced audit nudges the matching pattern toward the observed
variance with a sample-weighted running average, or starts a new pattern
when the (carrier, item) pair has never been seen.
"""

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from pydantic import ValidationError

from ..core.models import AuditOutcome, CarrierPattern, StrategyType, TrendUpdateResult
from ..exceptions import RepositoryError, TrendUpdateError
from ..repository.base import PatternRepository

logger = logging.getLogger(__name__)

NEW_PATTERN_CONFIDENCE = 50.0
NEW_PATTERN_FREQUENCY = 0.1
CONFIDENCE_STEP = 0.1
MAX_CONFIDENCE = 99.0
UNDERVALUE_VARIANCE = -20.0


def weighted_variance(existing_rate: float, existing_count: int, new_variance: float) -> float:
    """Fold one new observation into a running average."""
    return (existing_rate * existing_count + new_variance) / (existing_count + 1)


def merge_observation(pattern: CarrierPattern, new_variance: float) -> CarrierPattern:
    """Return ``pattern`` updated with one more observed variance."""
    return pattern.model_copy(
        update={
            "underpayment_rate": round(
                weighted_variance(pattern.underpayment_rate, pattern.historical_count, new_variance),
                2,
            ),
            "historical_count": pattern.historical_count + 1,
            "confidence": min(MAX_CONFIDENCE, pattern.confidence + CONFIDENCE_STEP),
        }
    )


def pattern_from_observation(carrier: str, item_name: str, new_variance: float) -> CarrierPattern:
    """Start a new pattern from a single observation."""
    strategy = StrategyType.UNDERVALUE if new_variance < UNDERVALUE_VARIANCE else StrategyType.OMIT
    return CarrierPattern(
        carrier_name=carrier,
        line_item_description=item_name,
        underpayment_rate=round(new_variance, 2),
        frequency=NEW_PATTERN_FREQUENCY,
        typical_gaps=[item_name],
        common_strategy=strategy,
        historical_count=1,
        confidence=NEW_PATTERN_CONFIDENCE,
    )


class TrendUpdater:
    """
    Applies audit outcomes to the pattern repository.

    The read-modify-write runs inside a single ``apply_update`` call, so the
    repository decides how to keep concurrent updates of the same pair from
    losing samples.
    """

    def __init__(self, repository: PatternRepository) -> None:
        self.repository = repository

    def _parse(self, outcome: AuditOutcome | Mapping[str, Any]) -> AuditOutcome | str:
        if isinstance(outcome, AuditOutcome):
            return outcome
        if not isinstance(outcome, Mapping):
            return f"expected a mapping, got {type(outcome).__name__}"
        try:
            return AuditOutcome.model_validate(dict(outcome))
        except ValidationError as exc:
            return "; ".join(
                f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in exc.errors()
            )

    def update_from_audit(self, outcome: AuditOutcome | Mapping[str, Any]) -> TrendUpdateResult:
        """
        Incorporate one audit outcome.

        Args:
            outcome: AuditOutcome or mapping with carrier, item_name,
                claim_price and market_price

        Returns:
            TrendUpdateResult; ``success`` is False for invalid input

        Raises:
            TrendUpdateError: The repository failed to store the update
        """
        parsed = self._parse(outcome)
        if isinstance(parsed, str):
            logger.warning("Invalid audit result for trend update: %s", parsed)
            return TrendUpdateResult(success=False, error=parsed)

        new_variance = parsed.variance
        created = False

        def apply(current: CarrierPattern | None) -> CarrierPattern:
            nonlocal created
            if current is None:
                created = True
                return pattern_from_observation(parsed.carrier, parsed.item_name, new_variance)
            created = False
            return merge_observation(current, new_variance)

        try:
            stored = self.repository.apply_update(parsed.carrier, parsed.item_name, apply)
        except RepositoryError as exc:
            logger.error(
                "Failed to update trend for %s/%r", parsed.carrier, parsed.item_name, exc_info=True
            )
            raise TrendUpdateError(parsed.carrier, parsed.item_name, new_variance) from exc

        if created:
            logger.info(
                "Created new trend for %s/%r: variance = %.2f%%",
                parsed.carrier,
                parsed.item_name,
                new_variance,
            )
        else:
            logger.info(
                "Updated trend for %s/%r: new variance = %.2f%%, sample size = %d",
                parsed.carrier,
                parsed.item_name,
                stored.underpayment_rate,
                stored.historical_count,
            )

        return TrendUpdateResult(
            success=True,
            created=created,
            new_variance=stored.underpayment_rate,
            sample_size=stored.historical_count,
            pattern=stored,
        )

    def update_many(
        self, outcomes: Iterable[AuditOutcome | Mapping[str, Any]]
    ) -> list[TrendUpdateResult]:
        """Apply outcomes in order; invalid ones yield failed results."""
        return [self.update_from_audit(outcome) for outcome in outcomes]

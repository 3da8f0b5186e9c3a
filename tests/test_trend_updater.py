"""
Tests for learning from audit outcomes.
"""

import pytest

from carrier_intel.core.models import AuditOutcome, CarrierPattern, StrategyType
from carrier_intel.data.seed import load_seed_patterns
from carrier_intel.exceptions import RepositoryError, TrendUpdateError
from carrier_intel.modules.trend_updater import (
    TrendUpdater,
    merge_observation,
    pattern_from_observation,
    weighted_variance,
)
from carrier_intel.repository.base import PatternUpdate
from carrier_intel.repository.memory import InMemoryPatternRepository


class BrokenRepository(InMemoryPatternRepository):
    """Repository whose writes always fail."""

    def apply_update(self, carrier_name: str, item: str, update: PatternUpdate) -> CarrierPattern:
        raise RepositoryError("connection reset")


@pytest.fixture
def repository() -> InMemoryPatternRepository:
    """Create a repository seeded with the built-in catalog."""
    return InMemoryPatternRepository(load_seed_patterns())


@pytest.fixture
def updater(repository: InMemoryPatternRepository) -> TrendUpdater:
    """Create an updater over the seeded repository."""
    return TrendUpdater(repository)


def audit(carrier: str, item: str, claim: float, market: float) -> dict[str, object]:
    return {"carrier": carrier, "item_name": item, "claim_price": claim, "market_price": market}


class TestPureHelpers:
    """Tests for the update arithmetic."""

    def test_weighted_variance(self) -> None:
        """Test one observation is weighted against the existing sample."""
        assert weighted_variance(-10, 3, -30) == pytest.approx(-15)
        assert weighted_variance(0, 0, -20) == pytest.approx(-20)

    def test_merge_observation(self) -> None:
        """Test merge rounds the rate and bumps count and confidence."""
        pattern = load_seed_patterns()[0]  # State Farm / Valley Flashing
        merged = merge_observation(pattern, -50)
        assert merged.underpayment_rate == pytest.approx(-12.15)
        assert merged.historical_count == 248
        assert merged.confidence == pytest.approx(92.1)

    def test_confidence_is_capped(self) -> None:
        """Test confidence never exceeds 99."""
        pattern = pattern_from_observation("Acme", "Gutters", -10).model_copy(
            update={"confidence": 98.95}
        )
        assert merge_observation(pattern, -10).confidence == 99
        assert merge_observation(merge_observation(pattern, -10), -10).confidence == 99

    def test_new_pattern_strategy_boundary(self) -> None:
        """Test exactly -20 is not undervalued; below is."""
        assert pattern_from_observation("Acme", "Gutters", -20).common_strategy == StrategyType.OMIT
        assert (
            pattern_from_observation("Acme", "Gutters", -20.01).common_strategy
            == StrategyType.UNDERVALUE
        )


class TestTrendUpdater:
    """Tests for TrendUpdater."""

    def test_creates_new_pattern(
        self, updater: TrendUpdater, repository: InMemoryPatternRepository
    ) -> None:
        """Test a brand-new pair starts a pattern from one observation."""
        result = updater.update_from_audit(audit("State Farm", "Skylight Flashing", 800, 1000))

        assert result.success is True
        assert result.created is True
        assert result.new_variance == -20.0
        assert result.sample_size == 1

        stored = repository.get_pattern("State Farm", "Skylight Flashing")
        assert stored is not None
        assert stored.underpayment_rate == -20.0
        assert stored.historical_count == 1
        assert stored.confidence == 50
        assert stored.frequency == 0.1
        assert stored.typical_gaps == ["Skylight Flashing"]
        assert stored.common_strategy == StrategyType.OMIT

    def test_deep_underpayment_is_undervalue(self, updater: TrendUpdater) -> None:
        """Test a new pattern below -20% is tagged UNDERVALUE."""
        result = updater.update_from_audit(audit("Acme Mutual", "Gutters", 700, 1000))
        assert result.pattern is not None
        assert result.pattern.underpayment_rate == -30.0
        assert result.pattern.common_strategy == StrategyType.UNDERVALUE

    def test_updates_existing_pattern(
        self, updater: TrendUpdater, repository: InMemoryPatternRepository
    ) -> None:
        """Test an existing pattern is reweighted, matched case-insensitively."""
        before = len(repository)
        result = updater.update_from_audit(audit("STATE FARM", "valley flashing", 500, 1000))

        assert result.success is True
        assert result.created is False
        assert result.new_variance == pytest.approx(-12.15)
        assert result.sample_size == 248
        assert len(repository) == before

        stored = repository.get_pattern("State Farm", "Valley Flashing")
        assert stored is not None
        assert stored.carrier_name == "State Farm"
        assert stored.historical_count == 248
        assert stored.confidence == pytest.approx(92.1)

    def test_accepts_audit_outcome_and_camel_case(self, updater: TrendUpdater) -> None:
        """Test both the model and the camelCase signal shape are accepted."""
        outcome = AuditOutcome(carrier="USAA", item_name="Box Vents", claim_price=90, market_price=100)
        assert updater.update_from_audit(outcome).success is True

        camel = {"carrier": "USAA", "itemName": "Box Vents", "claimPrice": 95, "marketPrice": 100}
        result = updater.update_from_audit(camel)
        assert result.success is True
        assert result.sample_size == 2
        assert result.new_variance == pytest.approx(-7.5)

    def test_never_duplicates_a_pair(
        self, updater: TrendUpdater, repository: InMemoryPatternRepository
    ) -> None:
        """Test differently cased names update the same pattern."""
        for carrier, item in [
            ("Acme Mutual", "Gutter Guards"),
            ("acme mutual", "GUTTER GUARDS"),
            ("  ACME  Mutual ", "gutter  guards"),
        ]:
            assert updater.update_from_audit(audit(carrier, item, 900, 1000)).success

        patterns = repository.get_patterns_by_carrier("acme mutual")
        assert len(patterns) == 1
        assert patterns[0].historical_count == 3
        assert len({p.key for p in repository.list_patterns()}) == len(repository)

    def test_counts_and_confidence_never_decrease(
        self, updater: TrendUpdater, repository: InMemoryPatternRepository
    ) -> None:
        """Test repeated audits only grow the sample and confidence."""
        previous = repository.get_pattern("Allstate", "Gutters")
        assert previous is not None
        for claim in (100, 2000, 950, 0, 1000):
            updater.update_from_audit(audit("Allstate", "Gutters", claim, 1000))
            current = repository.get_pattern("Allstate", "Gutters")
            assert current is not None
            assert current.historical_count == previous.historical_count + 1
            assert current.confidence >= previous.confidence
            previous = current

    def test_converges_to_repeated_variance(
        self, updater: TrendUpdater, repository: InMemoryPatternRepository
    ) -> None:
        """Test feeding the same variance drives the rate toward it."""
        updater.update_from_audit(audit("Acme Mutual", "Ridge Vent", 1000, 1000))
        rates = []
        for _ in range(1000):
            result = updater.update_from_audit(audit("Acme Mutual", "Ridge Vent", 800, 1000))
            assert result.new_variance is not None
            rates.append(result.new_variance)

        assert rates == sorted(rates, reverse=True)
        assert min(rates) >= -20.0
        assert rates[-1] == pytest.approx(-20.0, abs=1.0)

    @pytest.mark.parametrize(
        "payload",
        [
            audit("", "Gutters", 800, 1000),
            audit("   ", "Gutters", 800, 1000),
            audit("Allstate", "", 800, 1000),
            {"carrier": 42, "item_name": "Gutters", "claim_price": 800, "market_price": 1000},
            audit("Allstate", "Gutters", "800", 1000),  # type: ignore[arg-type]
            audit("Allstate", "Gutters", 800, 0),
            audit("Allstate", "Gutters", 800, -100),
            audit("Allstate", "Gutters", 800, float("nan")),
            {"carrier": "Allstate", "item_name": "Gutters", "claim_price": 800},
        ],
    )
    def test_invalid_input_is_rejected_without_mutation(
        self,
        updater: TrendUpdater,
        repository: InMemoryPatternRepository,
        payload: dict[str, object],
    ) -> None:
        """Test invalid audits fail softly and leave the store untouched."""
        before = repository.list_patterns()
        result = updater.update_from_audit(payload)

        assert result.success is False
        assert result.error
        assert repository.list_patterns() == before

    def test_non_mapping_input(self, updater: TrendUpdater) -> None:
        """Test a non-mapping input fails softly."""
        result = updater.update_from_audit(["Allstate", "Gutters", 800, 1000])  # type: ignore[arg-type]
        assert result.success is False

    def test_invalid_input_is_logged(
        self, updater: TrendUpdater, caplog: pytest.LogCaptureFixture
    ) -> None:
        """Test invalid audits log a warning."""
        with caplog.at_level("WARNING", logger="carrier_intel.modules.trend_updater"):
            updater.update_from_audit(audit("Allstate", "Gutters", 800, 0))
        assert "Invalid audit result" in caplog.text

    def test_repository_failure_propagates(self) -> None:
        """Test storage errors surface as TrendUpdateError with context."""
        updater = TrendUpdater(BrokenRepository())

        with pytest.raises(TrendUpdateError) as exc_info:
            updater.update_from_audit(audit("Allstate", "Gutters", 800, 1000))

        error = exc_info.value
        assert error.carrier == "Allstate"
        assert error.item_name == "Gutters"
        assert error.new_variance == pytest.approx(-20.0)
        assert error.retryable is True
        assert isinstance(error.__cause__, RepositoryError)

    def test_update_many(self, updater: TrendUpdater) -> None:
        """Test a batch yields one result per outcome and skips bad ones."""
        results = updater.update_many(
            [
                audit("Farmers", "Drip Edge", 650, 1000),
                audit("Farmers", "Drip Edge", 650, 0),
                audit("Farmers", "Gutters", 900, 1000),
            ]
        )
        assert [r.success for r in results] == [True, False, True]
        assert [r.created for r in results] == [False, False, True]

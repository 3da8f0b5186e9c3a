"""
Tests for fuzzy line-item matching.
"""

import pytest

from carrier_intel.core.matcher import FuzzyMatcher, calculate_match_score
from carrier_intel.core.models import CarrierPattern, StrategyType


def make_pattern(description: str, gaps: list[str] | None = None) -> CarrierPattern:
    return CarrierPattern(
        carrier_name="Test Carrier",
        line_item_description=description,
        underpayment_rate=-30,
        frequency=0.5,
        typical_gaps=gaps or [],
        common_strategy=StrategyType.OMIT,
        historical_count=200,
        confidence=90,
    )


class TestCalculateMatchScore:
    """Tests for the token-overlap coefficient."""

    def test_empty_lists_score_zero(self) -> None:
        """Test either side empty scores zero."""
        assert calculate_match_score([], ["roof"]) == 0.0
        assert calculate_match_score(["roof"], []) == 0.0
        assert calculate_match_score([], []) == 0.0

    def test_identical_tokens(self) -> None:
        """Test identical token lists score one."""
        assert calculate_match_score(["valley", "flashing"], ["valley", "flashing"]) == 1.0

    def test_substring_match(self) -> None:
        """Test containment counts as a match for tokens of length three or more."""
        assert calculate_match_score(["flash"], ["flashing"]) == 1.0
        assert calculate_match_score(["flashing"], ["flash"]) == 1.0

    def test_short_tokens_need_equality(self) -> None:
        """Test two-letter tokens only match exactly."""
        assert calculate_match_score(["sq"], ["square"]) == 0.0

    def test_partial_overlap(self) -> None:
        """Test the coefficient on a partial overlap."""
        score = calculate_match_score(
            ["roof", "tear", "off", "sq", "square", "squares"], ["roof", "tear", "off"]
        )
        assert score == pytest.approx(6 / 9)

    def test_no_overlap(self) -> None:
        """Test disjoint tokens score zero."""
        assert calculate_match_score(["garbage"], ["roof", "charge"]) == 0.0

    def test_score_never_exceeds_one(self) -> None:
        """Test many query tokens hitting one candidate stay within bounds."""
        assert calculate_match_score(["flash", "flashing", "flashes"], ["flash"]) == 1.0
        assert calculate_match_score(["roof", "roof", "roof"], ["roof"]) == 1.0

    def test_duplicate_tokens_count(self) -> None:
        """Test repeated tokens count toward matches and length."""
        score = calculate_match_score(
            ["roof", "roof", "garbage", "junk", "stuff"], ["roof", "tear", "off"]
        )
        assert score == 0.5

    def test_shared_expansions_count(self) -> None:
        """Test abbreviations expanding to the same word are scored as given."""
        # sq and sf both expand to "square"
        query = ["sq", "square", "squares", "sf", "square", "foot", "feet"]
        assert calculate_match_score(query, ["square", "foot"]) == pytest.approx(8 / 9)

    @pytest.mark.parametrize(
        "query,candidate",
        [
            (["ice", "water", "shield"], ["ice", "dam", "protection"]),
            (["sq", "square", "squares"], ["square", "foot", "feet"]),
            (["a" * 10], ["a" * 3, "a" * 4]),
            (["permit"], ["permit", "inspection", "fee", "code", "upgrade"]),
        ],
    )
    def test_score_bounds(self, query: list[str], candidate: list[str]) -> None:
        """Test scores stay within [0, 1]."""
        assert 0.0 <= calculate_match_score(query, candidate) <= 1.0


class TestFuzzyMatcher:
    """Tests for best-pattern selection."""

    @pytest.fixture
    def matcher(self) -> FuzzyMatcher:
        """Create a matcher with the default threshold."""
        return FuzzyMatcher()

    def test_default_threshold(self, matcher: FuzzyMatcher) -> None:
        """Test the default match threshold."""
        assert matcher.threshold == 0.35

    def test_invalid_threshold(self) -> None:
        """Test thresholds outside [0, 1] are rejected."""
        with pytest.raises(ValueError):
            FuzzyMatcher(threshold=1.5)

    def test_gap_phrase_is_match_target(self, matcher: FuzzyMatcher) -> None:
        """Test a gap phrase can carry the match when the description does not."""
        pattern = make_pattern(
            "Haul Off / Debris Removal", ["Debris Removal", "Dumpster Rental"]
        )
        match = matcher.find_best_match("Dumpster Rental", [pattern])
        assert match is not None
        assert match.score == 1.0

    def test_threshold_is_inclusive_floor(self, matcher: FuzzyMatcher) -> None:
        """Test scores just under the threshold do not match."""
        pattern = make_pattern("Steep Roof Charge")
        assert matcher.find_best_match("roof", [pattern]) is not None  # 0.5
        assert matcher.find_best_match("roof garbage junk", [pattern]) is None  # 0.33

    def test_repeated_words_reach_threshold(self, matcher: FuzzyMatcher) -> None:
        """Test a repeated word keeps an item above the threshold."""
        pattern = make_pattern("Roof Tear Off")
        match = matcher.find_best_match("roof roof garbage junk stuff", [pattern])
        assert match is not None
        assert match.score == 0.5

    def test_picks_highest_score(self, matcher: FuzzyMatcher) -> None:
        """Test the best scoring pattern wins."""
        weak = make_pattern("Steep Roof Charge")
        strong = make_pattern("Roof Tear Off")
        match = matcher.find_best_match("roof tear off", [weak, strong])
        assert match is not None
        assert match.pattern is strong

    def test_ties_keep_first_pattern(self, matcher: FuzzyMatcher) -> None:
        """Test a tie keeps the first pattern encountered."""
        first = make_pattern("Valley Flashing", ["Drip Edge"])
        second = make_pattern("Drip Edge")
        match = matcher.find_best_match("drip edge", [first, second])
        assert match is not None
        assert match.pattern is first

        reversed_match = matcher.find_best_match("drip edge", [second, first])
        assert reversed_match is not None
        assert reversed_match.pattern is second

    def test_find_ties(self, matcher: FuzzyMatcher) -> None:
        """Test every pattern sharing the top score is reported."""
        first = make_pattern("Valley Flashing", ["Drip Edge"])
        second = make_pattern("Drip Edge")
        third = make_pattern("Gutters")
        ties = matcher.find_ties("drip edge", [first, second, third])
        assert [t.pattern for t in ties] == [first, second]

    def test_no_patterns(self, matcher: FuzzyMatcher) -> None:
        """Test an empty pattern list yields no match."""
        assert matcher.find_best_match("roof", []) is None
        assert matcher.find_ties("roof", []) == []

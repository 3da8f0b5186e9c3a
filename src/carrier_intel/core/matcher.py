"""
Fuzzy matching of claim line items against carrier patterns.

Scoring is a token-overlap coefficient tuned for short, jargon-heavy trade
descriptions: each query token counts at most once, matching on equality
or on substring containment when the contained token is at least three
characters long.
"""

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from .models import CarrierPattern
from .normalizer import normalize_for_matching

logger = logging.getLogger(__name__)

DEFAULT_MATCH_THRESHOLD = 0.35
MIN_SUBSTRING_LENGTH = 3


def _tokens_match(query_token: str, candidate_token: str) -> bool:
    if query_token == candidate_token:
        return True
    if len(query_token) >= MIN_SUBSTRING_LENGTH and query_token in candidate_token:
        return True
    return len(candidate_token) >= MIN_SUBSTRING_LENGTH and candidate_token in query_token


def calculate_match_score(
    query_tokens: Sequence[str], candidate_tokens: Sequence[str]
) -> float:
    """
    Score the overlap between two token lists.

    Tokens are scored as given, duplicates included, so a repeated query
    word or two abbreviations sharing an expansion each count.

    Returns:
        2 * matches / (len(query) + len(candidate)), capped to [0, 1];
        0.0 when either list is empty
    """
    if not query_tokens or not candidate_tokens:
        return 0.0

    matches = 0
    for query_token in query_tokens:
        if any(_tokens_match(query_token, token) for token in candidate_tokens):
            matches += 1

    # Several query tokens may hit the same candidate token
    return min(1.0, (2 * matches) / (len(query_tokens) + len(candidate_tokens)))


@dataclass(frozen=True)
class PatternMatch:
    """A pattern together with the score that selected it."""

    pattern: CarrierPattern
    score: float


class FuzzyMatcher:
    """
    Selects the carrier pattern that best describes a line item.

    Patterns are scored against their own description and each typical
    gap phrase; the best of those is the pattern's score.
    """

    def __init__(self, threshold: float = DEFAULT_MATCH_THRESHOLD) -> None:
        if not 0 <= threshold <= 1:
            raise ValueError(f"threshold must be within [0, 1], got {threshold}")
        self.threshold = threshold

    def score_pattern(self, item_tokens: Sequence[str], pattern: CarrierPattern) -> float:
        """Overall score of a pattern: max of description and gap scores."""
        best = calculate_match_score(
            item_tokens, normalize_for_matching(pattern.line_item_description)
        )
        for gap in pattern.typical_gaps:
            best = max(best, calculate_match_score(item_tokens, normalize_for_matching(gap)))
        return best

    def score_all(
        self, item: str, patterns: Iterable[CarrierPattern]
    ) -> list[PatternMatch]:
        """Score every pattern against an item, preserving pattern order."""
        item_tokens = normalize_for_matching(item)
        return [
            PatternMatch(pattern=pattern, score=self.score_pattern(item_tokens, pattern))
            for pattern in patterns
        ]

    def find_best_match(
        self, item: str, patterns: Iterable[CarrierPattern]
    ) -> PatternMatch | None:
        """
        Find the single best pattern for an item.

        Ties keep the first pattern encountered, so results are stable as
        long as the pattern order is.

        Returns:
            The winning PatternMatch, or None if nothing reaches the threshold
        """
        best: PatternMatch | None = None
        for candidate in self.score_all(item, patterns):
            if candidate.score < self.threshold:
                continue
            if best is None or candidate.score > best.score:
                best = candidate

        if best is not None:
            logger.debug(
                "Matched %r to %r (score %.3f)",
                item,
                best.pattern.line_item_description,
                best.score,
            )
        return best

    def find_ties(
        self, item: str, patterns: Iterable[CarrierPattern]
    ) -> list[PatternMatch]:
        """Return every pattern sharing the best above-threshold score."""
        scored = [m for m in self.score_all(item, patterns) if m.score >= self.threshold]
        if not scored:
            return []
        top = max(m.score for m in scored)
        return [m for m in scored if m.score == top]

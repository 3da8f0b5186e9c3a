"""
Pattern repository contract.

The engine never holds pattern state itself; it reads and writes through a
PatternRepository. Storage adapters implement the abstract methods. The
one stateful operation, ``apply_update``, must be atomic per
(carrier, item) key.
"""

import logging
from abc import ABC, abstractmethod
from collections.abc import Callable

from ..core.models import CarrierPattern
from ..core.normalizer import canonical_key
from ..exceptions import ConcurrentUpdateError, RepositoryError

logger = logging.getLogger(__name__)

PatternUpdate = Callable[[CarrierPattern | None], CarrierPattern]


class PatternRepository(ABC):
    """
    Carrier + item keyed storage for CarrierPattern records.

    Identity is the canonical (carrier, item) key from
    ``core.normalizer.canonical_key``; implementations must use it for both
    lookups and writes. Patterns are returned in insertion order.
    """

    max_attempts: int = 3

    @abstractmethod
    def get_patterns_by_carrier(self, carrier_name: str) -> list[CarrierPattern]:
        """All patterns for a carrier (case-insensitive), in insertion order."""

    @abstractmethod
    def get_pattern(self, carrier_name: str, item: str) -> CarrierPattern | None:
        """The pattern for a (carrier, item) pair, or None."""

    @abstractmethod
    def upsert_pattern(
        self, pattern: CarrierPattern, expected_version: int | None = None
    ) -> CarrierPattern:
        """
        Insert or replace the pattern stored under ``pattern.key``.

        Args:
            pattern: The pattern to store
            expected_version: When given, the write only succeeds if the
                stored version still equals it (-1 meaning "not stored yet")

        Returns:
            The stored pattern with its new version

        Raises:
            ConcurrentUpdateError: The stored version no longer matches
            RepositoryError: The store failed
        """

    @abstractmethod
    def list_patterns(self) -> list[CarrierPattern]:
        """Every stored pattern."""

    def list_carriers(self) -> list[str]:
        """Distinct carrier names, first spelling seen wins."""
        carriers: dict[str, str] = {}
        for pattern in self.list_patterns():
            carriers.setdefault(pattern.key[0], pattern.carrier_name)
        return list(carriers.values())

    def apply_update(
        self, carrier_name: str, item: str, update: PatternUpdate
    ) -> CarrierPattern:
        """
        Atomically read, transform and write the pattern for a key.

        The default implementation uses optimistic concurrency: the write
        is conditional on the version read, and a lost race is retried up
        to ``max_attempts`` times.

        Args:
            carrier_name: Carrier of the pattern
            item: Line item of the pattern
            update: Receives the current pattern (or None) and returns the
                pattern to store

        Raises:
            RepositoryError: The store failed or every attempt lost the race
        """
        last_conflict: ConcurrentUpdateError | None = None
        for attempt in range(1, self.max_attempts + 1):
            current = self.get_pattern(carrier_name, item)
            expected = current.version if current is not None else -1
            try:
                return self.upsert_pattern(update(current), expected_version=expected)
            except ConcurrentUpdateError as exc:
                logger.debug(
                    "Version conflict on %r, attempt %d/%d",
                    canonical_key(carrier_name, item),
                    attempt,
                    self.max_attempts,
                )
                last_conflict = exc

        raise RepositoryError(
            f"Gave up updating {carrier_name}/{item!r} after "
            f"{self.max_attempts} conflicting attempts"
        ) from last_conflict

    def seed(self, patterns: list[CarrierPattern]) -> int:
        """Store patterns whose key is not present yet. Returns the count added."""
        added = 0
        for pattern in patterns:
            if self.get_pattern(pattern.carrier_name, pattern.line_item_description) is None:
                self.upsert_pattern(pattern)
                added += 1
        return added

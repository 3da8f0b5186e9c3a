"""
In-memory pattern repository.
"""

import threading

from ..core.models import CarrierPattern
from ..core.normalizer import canonical_key, canonical_name
from ..exceptions import ConcurrentUpdateError
from .base import PatternRepository, PatternUpdate


class InMemoryPatternRepository(PatternRepository):
    """
    Dict-backed repository for tests, demos and single-process use.

    Stored patterns are copied on the way in and out, so callers never
    share mutable state with the store. A re-entrant lock guards every
    access and makes ``apply_update`` one critical section.
    """

    def __init__(self, patterns: list[CarrierPattern] | None = None) -> None:
        self._patterns: dict[tuple[str, str], CarrierPattern] = {}
        self._lock = threading.RLock()
        if patterns:
            self.seed(patterns)

    def __len__(self) -> int:
        return len(self._patterns)

    def get_patterns_by_carrier(self, carrier_name: str) -> list[CarrierPattern]:
        wanted = canonical_name(carrier_name)
        with self._lock:
            return [
                pattern.model_copy(deep=True)
                for key, pattern in self._patterns.items()
                if key[0] == wanted
            ]

    def get_pattern(self, carrier_name: str, item: str) -> CarrierPattern | None:
        with self._lock:
            pattern = self._patterns.get(canonical_key(carrier_name, item))
            return pattern.model_copy(deep=True) if pattern is not None else None

    def upsert_pattern(
        self, pattern: CarrierPattern, expected_version: int | None = None
    ) -> CarrierPattern:
        key = pattern.key
        with self._lock:
            current = self._patterns.get(key)
            actual = current.version if current is not None else -1
            if expected_version is not None and expected_version != actual:
                raise ConcurrentUpdateError(key, expected_version, actual)

            stored = pattern.model_copy(deep=True, update={"version": actual + 1})
            self._patterns[key] = stored
            return stored.model_copy(deep=True)

    def list_patterns(self) -> list[CarrierPattern]:
        with self._lock:
            return [pattern.model_copy(deep=True) for pattern in self._patterns.values()]

    def apply_update(
        self, carrier_name: str, item: str, update: PatternUpdate
    ) -> CarrierPattern:
        with self._lock:
            current = self.get_pattern(carrier_name, item)
            return self.upsert_pattern(update(current))

    def clear(self) -> None:
        with self._lock:
            self._patterns.clear()

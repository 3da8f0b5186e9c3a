"""
Exceptions raised by the Carrier Intelligence Engine.
"""


class CarrierIntelError(Exception):
    """Base class for engine errors."""


class RepositoryError(CarrierIntelError):
    """The pattern store failed to read or write."""


class ConcurrentUpdateError(RepositoryError):
    """A versioned write lost the race against another writer."""

    def __init__(self, key: tuple[str, str], expected: int | None, actual: int | None) -> None:
        self.key = key
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Pattern {key!r} changed concurrently "
            f"(expected version {expected}, found {actual})"
        )


class TrendUpdateError(CarrierIntelError):
    """An audit outcome could not be written to the pattern store."""

    def __init__(
        self,
        carrier: str,
        item_name: str,
        new_variance: float,
        retryable: bool = True,
    ) -> None:
        self.carrier = carrier
        self.item_name = item_name
        self.new_variance = new_variance
        self.retryable = retryable
        super().__init__(
            f"Failed to record audit for {carrier}/{item_name!r} "
            f"(variance {new_variance:.2f}%)"
        )

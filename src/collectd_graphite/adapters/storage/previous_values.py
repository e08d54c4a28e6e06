"""In-memory previous-value store."""

from collectd_graphite.core.models import Number


class InMemoryPreviousValueStore:
    """In-memory implementation of PreviousValuePort.

    Keeps the last raw reading per key in a dict. Entries are never
    expired and live as long as the store does. Not synchronized on its
    own; GraphiteWriter serializes access under its lock.
    """

    def __init__(self) -> None:
        self._values: dict[str, Number] = {}

    def __len__(self) -> int:
        return len(self._values)

    def __contains__(self, key: object) -> bool:
        return key in self._values

    def get(self, key: str) -> Number | None:
        """Return the last recorded raw value for key, or None."""
        return self._values.get(key)

    def put(self, key: str, value: Number) -> None:
        """Record value as the last raw value for key."""
        self._values[key] = value

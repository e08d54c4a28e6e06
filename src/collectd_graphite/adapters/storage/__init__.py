"""Storage adapters implementing core ports."""

from collectd_graphite.adapters.storage.line_buffer import LineBuffer
from collectd_graphite.adapters.storage.previous_values import (
    InMemoryPreviousValueStore,
)

__all__ = [
    "InMemoryPreviousValueStore",
    "LineBuffer",
]

"""Rate conversion for collectd data sources.

Mimics RRD as closely as possible: the derivative is taken for COUNTER and
DERIVE data sources (with wrap detection for COUNTER), ABSOLUTE values are
divided by the interval and GAUGE values pass through unmodified. As with
RRD, min and max apply to the processed value, not the raw reading.
"""

from collectd_graphite.core.errors import InvalidInterval, RangeViolation
from collectd_graphite.core.models import DataSource, DSType, Number
from collectd_graphite.core.ports import PreviousValuePort

WRAP_32 = 2**32
WRAP_64 = 2**64 - 2**32


def counter_delta(current: Number, previous: Number) -> Number:
    """Return current - previous, corrected for a 32 or 64 bit counter wrap.

    A negative difference first gets 2^32 added. If it is still negative the
    counter must have been 64 bits wide and 2^64 - 2^32 is added on top.
    """
    diff = current - previous
    if diff < 0:
        diff += WRAP_32
    if diff < 0:
        diff += WRAP_64
    return diff


def convert(
    key: str,
    kind: DSType,
    raw: Number,
    interval: float,
    store: PreviousValuePort,
) -> Number | None:
    """Convert a raw reading into the value to emit.

    Args:
        key: Previous-value key for this data source.
        kind: Declared data source kind.
        raw: Raw reading from the value list.
        interval: Collection interval in seconds.
        store: Previous readings, updated for COUNTER and DERIVE.

    Returns:
        The value to emit, or None when no previous reading exists yet
        for a COUNTER or DERIVE key.

    Raises:
        InvalidInterval: If a non-GAUGE kind comes with interval <= 0.
            The previous reading is left unchanged.
    """
    if kind is DSType.GAUGE:
        return raw
    if not interval > 0:
        raise InvalidInterval(interval)
    if kind is DSType.ABSOLUTE:
        # reset on read, so no previous value is needed
        return raw / interval

    previous = store.get(key)
    store.put(key, raw)
    if previous is None:
        return None
    if kind is DSType.COUNTER:
        diff = counter_delta(raw, previous)
    else:
        diff = raw - previous
    return diff / interval


def check_range(value: Number, source: DataSource) -> None:
    """Validate a processed value against the data source bounds.

    Bounds are inclusive; a value exactly at min or max is accepted.

    Raises:
        RangeViolation: If value < min or value > max.
    """
    if (source.min is not None and value < source.min) or (
        source.max is not None and value > source.max
    ):
        raise RangeViolation(value, source.min, source.max)

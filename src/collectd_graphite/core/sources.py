"""Helper functions for creating DataSource and ValueList objects."""

import time
from collections.abc import Iterable

from collectd_graphite.core.models import DataSource, DSType, Number, ValueList


def gauge(
    name: str = "value",
    min: float | None = None,
    max: float | None = None,
) -> DataSource:
    """Create a GAUGE data source.

    Args:
        name: Data source name (default: "value")
        min: Optional lower bound
        max: Optional upper bound

    Returns:
        DataSource whose readings pass through unchanged
    """
    return DataSource(name=name, kind=DSType.GAUGE, min=min, max=max)


def counter(
    name: str = "value",
    min: float | None = None,
    max: float | None = None,
) -> DataSource:
    """Create a COUNTER data source.

    Args:
        name: Data source name (default: "value")
        min: Optional lower bound
        max: Optional upper bound

    Returns:
        DataSource converted to a wrap-corrected per-second rate
    """
    return DataSource(name=name, kind=DSType.COUNTER, min=min, max=max)


def derive(
    name: str = "value",
    min: float | None = None,
    max: float | None = None,
) -> DataSource:
    """Create a DERIVE data source."""
    return DataSource(name=name, kind=DSType.DERIVE, min=min, max=max)


def absolute(
    name: str = "value",
    min: float | None = None,
    max: float | None = None,
) -> DataSource:
    """Create an ABSOLUTE data source."""
    return DataSource(name=name, kind=DSType.ABSOLUTE, min=min, max=max)


def value_list(
    host: str,
    plugin: str,
    type: str,
    values: Iterable[tuple[DataSource, Number]],
    interval: float = 10.0,
    timestamp: float | None = None,
    plugin_instance: str | None = None,
    type_instance: str | None = None,
) -> ValueList:
    """Create a value list, stamping the current time when none is given.

    Args:
        host: Host name
        plugin: Plugin name
        type: Type name
        values: (DataSource, raw value) pairs in types.db order
        interval: Collection interval in seconds (default: 10)
        timestamp: Unix timestamp (default: now)
        plugin_instance: Optional plugin instance
        type_instance: Optional type instance

    Returns:
        ValueList ready to be handed to GraphiteWriter.write()
    """
    return ValueList(
        host=host,
        plugin=plugin,
        type=type,
        time=time.time() if timestamp is None else timestamp,
        interval=interval,
        values=tuple(values),
        plugin_instance=plugin_instance,
        type_instance=type_instance,
    )

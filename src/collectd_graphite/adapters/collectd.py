"""collectd python plugin adapter.

Translates collectd's ValueList objects and datasets into core models and
wires a GraphiteWriter into collectd's callback registry. The ``collectd``
module only exists inside the daemon, so it is passed in rather than
imported here.

Example (the module named in collectd.conf's python ``Import``):
    ```python
    import collectd

    from collectd_graphite.adapters.collectd import register

    register(collectd)
    ```
"""

import logging
from collections.abc import Sequence
from typing import Any

from collectd_graphite.adapters.logging import (
    LOG_DEBUG,
    LOG_ERR,
    LOG_INFO,
    LOG_NOTICE,
    LOG_WARNING,
    install_host_log_sink,
)
from collectd_graphite.core.models import DataSource, DSType, ValueList
from collectd_graphite.writer import GraphiteWriter

logger = logging.getLogger(__name__)

PLUGIN_NAME = "Graphite"

_LOG_FUNCTIONS = {
    LOG_ERR: "error",
    LOG_WARNING: "warning",
    LOG_NOTICE: "notice",
    LOG_INFO: "info",
    LOG_DEBUG: "debug",
}


def data_sources_from_dataset(
    dataset: Sequence[Sequence[Any]],
) -> tuple[DataSource, ...]:
    """Convert collectd.get_dataset() output into DataSource objects.

    Args:
        dataset: Sequence of (name, type, min, max) tuples.
    """
    return tuple(
        DataSource(name=name, kind=DSType.parse(kind), min=minimum, max=maximum)
        for name, kind, minimum, maximum in dataset
    )


def value_list_from_collectd(vl: Any, dataset: Sequence[Sequence[Any]]) -> ValueList:
    """Build a ValueList from a collectd.Values object and its dataset.

    Raises:
        ValueError: If the number of values does not match the dataset.
    """
    sources = data_sources_from_dataset(dataset)
    if len(sources) != len(vl.values):
        raise ValueError(
            f"{vl.plugin}/{vl.type}: {len(vl.values)} values "
            f"for {len(sources)} data sources"
        )
    return ValueList(
        host=vl.host,
        plugin=vl.plugin,
        plugin_instance=vl.plugin_instance or None,
        type=vl.type,
        type_instance=vl.type_instance or None,
        time=vl.time,
        interval=vl.interval,
        values=tuple(zip(sources, vl.values)),
    )


def collectd_log_sink(collectd: Any):
    """Return a (severity, message) sink writing to collectd's log functions."""

    def sink(severity: int, message: str) -> None:
        getattr(collectd, _LOG_FUNCTIONS.get(severity, "info"))(message)

    return sink


def register(collectd: Any, writer: GraphiteWriter | None = None) -> GraphiteWriter:
    """Register config, write and flush callbacks with collectd.

    Args:
        collectd: The ``collectd`` module provided by the daemon.
        writer: Writer to register (default: a new GraphiteWriter).

    Returns:
        The registered writer.
    """
    writer = writer or GraphiteWriter()
    install_host_log_sink(collectd_log_sink(collectd))

    def write(vl: Any, data: Any = None) -> None:
        try:
            converted = value_list_from_collectd(vl, collectd.get_dataset(vl.type))
        except ValueError as exc:
            logger.error("%s", exc)
            return
        writer.write(converted)

    collectd.register_config(writer.configure, name=PLUGIN_NAME)
    collectd.register_write(write, name=PLUGIN_NAME)
    collectd.register_flush(writer.flush, name=PLUGIN_NAME)
    return writer

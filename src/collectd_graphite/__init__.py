"""Forward collectd metrics to Graphite over TCP or AMQP."""

from collectd_graphite.adapters.logging import HostLogHandler, install_host_log_sink
from collectd_graphite.adapters.storage import InMemoryPreviousValueStore, LineBuffer
from collectd_graphite.adapters.transports import (
    AMQPTransport,
    InMemoryTransport,
    TCPTransport,
    build_transport,
)
from collectd_graphite.core.config import GraphiteConfig
from collectd_graphite.core.errors import (
    ConnectFailure,
    ConversionError,
    GraphiteError,
    InvalidInterval,
    PublishFailure,
    RangeViolation,
    TransportError,
)
from collectd_graphite.core.models import DataSource, DSType, ValueList
from collectd_graphite.core.sources import absolute, counter, derive, gauge, value_list
from collectd_graphite.writer import GraphiteWriter

__all__ = [
    "AMQPTransport",
    "ConnectFailure",
    "ConversionError",
    "DSType",
    "DataSource",
    "GraphiteConfig",
    "GraphiteError",
    "GraphiteWriter",
    "HostLogHandler",
    "InMemoryPreviousValueStore",
    "InMemoryTransport",
    "InvalidInterval",
    "LineBuffer",
    "PublishFailure",
    "RangeViolation",
    "TCPTransport",
    "TransportError",
    "ValueList",
    "absolute",
    "build_transport",
    "counter",
    "derive",
    "gauge",
    "install_host_log_sink",
    "value_list",
]

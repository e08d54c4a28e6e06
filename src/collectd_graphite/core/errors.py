"""Exception hierarchy for the graphite writer.

Transport errors are raised by transport adapters and caught by the writer
at the dispatch boundary. Conversion errors affect a single data point and
are caught per point, so the rest of a value list is still processed.
"""


class GraphiteError(Exception):
    """Base class for all collectd_graphite errors."""


class TransportError(GraphiteError):
    """Delivery of a buffered payload failed."""


class ConnectFailure(TransportError):
    """The endpoint was unreachable or rejected the connection."""


class PublishFailure(TransportError):
    """Sending failed after the connection was established."""


class ConversionError(GraphiteError):
    """A single data point could not be converted."""


class RangeViolation(ConversionError):
    """The processed value lies outside the declared [min, max] range."""

    def __init__(self, value: float, minimum: float | None, maximum: float | None):
        self.value = value
        self.minimum = minimum
        self.maximum = maximum
        super().__init__(f"out of range: {value}")


class InvalidInterval(ConversionError):
    """The value list interval cannot be used to compute a rate."""

    def __init__(self, interval: float):
        self.interval = interval
        super().__init__(f"invalid interval: {interval}")

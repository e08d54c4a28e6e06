"""Python logging handler adapter for the host daemon's log facility.

This adapter bridges Python's standard library logging module to a host
log sink taking a syslog severity and a message, such as collectd's
plugin_log.
"""

import logging
import traceback

from collectd_graphite.core.ports import LogSink

# syslog severities used by collectd
LOG_ERR = 3
LOG_WARNING = 4
LOG_NOTICE = 5
LOG_INFO = 6
LOG_DEBUG = 7

_DEFAULT_PREFIX = "Graphite: "
_PACKAGE_LOGGER = "collectd_graphite"


def severity_for(levelno: int) -> int:
    """Map a Python logging level to a syslog severity.

    ERROR and above -> LOG_ERR, WARNING -> LOG_WARNING, INFO -> LOG_INFO,
    anything lower -> LOG_DEBUG.
    """
    if levelno >= logging.ERROR:
        return LOG_ERR
    if levelno >= logging.WARNING:
        return LOG_WARNING
    if levelno >= logging.INFO:
        return LOG_INFO
    return LOG_DEBUG


class HostLogHandler(logging.Handler):
    """Logging handler that forwards records to a host log sink.

    Example:
        ```python
        import logging

        from collectd_graphite.adapters.logging import HostLogHandler

        handler = HostLogHandler(lambda severity, message: print(severity, message))
        logging.getLogger("collectd_graphite").addHandler(handler)
        ```
    """

    def __init__(
        self,
        sink: LogSink,
        prefix: str = _DEFAULT_PREFIX,
        level: int = logging.NOTSET,
    ) -> None:
        """Initialize the handler with a host log sink.

        Args:
            sink: Callable taking (severity, message).
            prefix: Text prepended to every message (default: "Graphite: ").
            level: Minimum level handled (default: NOTSET).
        """
        super().__init__(level)
        self._sink = sink
        self._prefix = prefix

    def emit(self, record: logging.LogRecord) -> None:
        """Emit a log record to the host sink.

        Args:
            record: The log record to emit.
        """
        try:
            message = self._prefix + record.getMessage()
            if record.exc_info and record.exc_info[0] is not None:
                message += "\n" + "".join(traceback.format_exception(*record.exc_info))
            self._sink(severity_for(record.levelno), message)
        except Exception:
            self.handleError(record)


def install_host_log_sink(
    sink: LogSink,
    level: int = logging.INFO,
    logger_name: str = _PACKAGE_LOGGER,
) -> HostLogHandler:
    """Attach a HostLogHandler to the package logger.

    Args:
        sink: Callable taking (severity, message).
        level: Level set on the package logger (default: INFO).
        logger_name: Logger to attach to (default: "collectd_graphite").

    Returns:
        The installed handler, so callers can remove it again.
    """
    handler = HostLogHandler(sink)
    target = logging.getLogger(logger_name)
    target.addHandler(handler)
    target.setLevel(level)
    return handler

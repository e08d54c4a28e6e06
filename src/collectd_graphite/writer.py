"""Graphite writer: the callbacks collectd invokes.

GraphiteWriter owns all mutable state (configuration, previous values and
the line buffer) so several independent writers can coexist in one process.

Delivery is best effort. A payload is taken out of the buffer before it is
sent, and it is never retried or re-queued: when the transport fails the
data is logged as lost and dropped. Under a sustained outage metrics are
silently discarded instead of growing memory or stalling collection.
"""

import logging
import threading
from typing import Any

from collectd_graphite.adapters.storage.line_buffer import LineBuffer
from collectd_graphite.adapters.storage.previous_values import (
    InMemoryPreviousValueStore,
)
from collectd_graphite.adapters.transports import build_transport
from collectd_graphite.core.config import GraphiteConfig
from collectd_graphite.core.encoding.plaintext import encode_line
from collectd_graphite.core.errors import (
    InvalidInterval,
    RangeViolation,
    TransportError,
)
from collectd_graphite.core.models import ValueList
from collectd_graphite.core.paths import build_path, previous_value_key
from collectd_graphite.core.ports import PreviousValuePort, TransportPort
from collectd_graphite.core.rates import check_range, convert

logger = logging.getLogger(__name__)


class GraphiteWriter:
    """Converts value lists into graphite lines and ships them.

    Thread safety: one lock covers rate conversion, buffer append and the
    buffer swap done by a flush, so concurrent write() and flush() calls
    never lose or duplicate a line. A flush takes the send lock before the
    swap and keeps it through delivery, so payloads reach the transport in
    swap order. The coarse lock is released before sending: writers keep
    converting while a slow transport blocks only flushing threads.

    Lock order is send lock, then coarse lock.

    Args:
        config: Initial configuration (default: all defaults).
        transport: Fixed transport. When omitted, one is built from the
            configuration and rebuilt by configure().
        previous_values: Store for COUNTER/DERIVE readings
            (default: a fresh in-memory store).
    """

    def __init__(
        self,
        config: GraphiteConfig | None = None,
        transport: TransportPort | None = None,
        previous_values: PreviousValuePort | None = None,
    ) -> None:
        self._config = config or GraphiteConfig()
        self._fixed_transport = transport is not None
        self._transport = transport or build_transport(self._config)
        self._previous = (
            previous_values
            if previous_values is not None
            else InMemoryPreviousValueStore()
        )
        self._buffer = LineBuffer()
        self._lock = threading.Lock()
        self._send_lock = threading.Lock()

    @property
    def config(self) -> GraphiteConfig:
        return self._config

    @property
    def transport(self) -> TransportPort:
        return self._transport

    @property
    def buffered(self) -> int:
        """Number of characters currently buffered."""
        with self._lock:
            return len(self._buffer)

    # --- Host callbacks ---

    def configure(self, tree: Any) -> bool:
        """Apply host configuration items on top of the current settings.

        Args:
            tree: Mapping, collectd config node or iterable of (key, value).

        Returns:
            True. Bad options are logged and skipped, never fatal.
        """
        config = GraphiteConfig.from_items(tree, base=self._config)
        with self._lock:
            self._config = config
            if not self._fixed_transport:
                self._transport = build_transport(config)
        logger.info(
            "configured: %s transport, buffer %d, prefix %s",
            "AMQP" if config.use_amqp else "TCP",
            config.buffer_size,
            config.prefix,
        )
        logger.debug("configuration: %s", config.as_dict())
        return True

    def write(self, value_list: ValueList) -> bool:
        """Convert a value list, buffer its lines and flush when full.

        Returns:
            True, even when a triggered flush fails to deliver; failures
            are only logged.
        """
        with self._lock:
            self._append(value_list)
            full = self._buffer.should_flush(self._config.buffer_size)
        if full:
            self._swap_and_deliver(only_if_full=True)
        return True

    def flush(
        self, timeout: float | None = None, identifier: str | None = None
    ) -> bool:
        """Deliver everything buffered, regardless of size.

        Args:
            timeout: Accepted for collectd's flush signature; unused.
            identifier: Accepted for collectd's flush signature; unused.

        Returns:
            True if the payload was delivered (or nothing was buffered),
            False if it was dropped.
        """
        return self._swap_and_deliver(only_if_full=False)

    # --- Internals ---

    def _append(self, vl: ValueList) -> None:
        """Convert every data source of vl and buffer the resulting lines.

        Must be called with self._lock held.
        """
        config = self._config
        for source, raw in vl.values:
            path = build_path(
                config,
                vl.host,
                vl.plugin,
                vl.plugin_instance,
                vl.type,
                vl.type_instance,
                source.name,
            )
            key = previous_value_key(
                vl.plugin, vl.plugin_instance, vl.type, vl.type_instance, source.name
            )
            try:
                value = convert(key, source.kind, raw, vl.interval, self._previous)
                if value is None:
                    # first reading of a COUNTER/DERIVE, nothing to emit yet
                    continue
                check_range(value, source)
            except RangeViolation as exc:
                logger.error("%s - out of range: %s", path, exc.value)
                continue
            except InvalidInterval as exc:
                logger.error("%s - invalid interval: %s", path, exc.interval)
                continue
            self._buffer.append(encode_line(path, value, vl.time))

    def _swap_and_deliver(self, only_if_full: bool) -> bool:
        """Take the buffered payload and send it; never raises TransportError.

        The swap happens while holding the send lock, so payloads reach the
        transport in the order they left the buffer. The coarse lock is held
        only for the swap itself.
        """
        with self._send_lock:
            with self._lock:
                if only_if_full and not self._buffer.should_flush(
                    self._config.buffer_size
                ):
                    # another thread flushed first
                    return True
                payload = self._buffer.take_and_clear()
                transport = self._transport
            if not payload:
                return True
            try:
                transport.send(payload)
            except TransportError as exc:
                logger.error("%s (dropped %d bytes)", exc, len(payload))
                return False
        return True

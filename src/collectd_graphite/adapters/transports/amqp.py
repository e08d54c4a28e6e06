"""AMQP transport publishing one message per data point.

Carbon must run with AMQP_METRIC_NAME_IN_BODY enabled, since each message
body is a full plaintext line.
"""

import logging
from collections.abc import Callable
from typing import Any

import pika
from pika.exceptions import AMQPError

from collectd_graphite.core.encoding.plaintext import split_lines
from collectd_graphite.core.errors import ConnectFailure, PublishFailure

logger = logging.getLogger(__name__)

ROUTING_KEY = "graphite"

ConnectionFactory = Callable[[pika.ConnectionParameters], Any]


class AMQPTransport:
    """AMQP implementation of TransportPort, built on pika.

    Each send opens a blocking connection, publishes every line of the
    payload to the exchange and disconnects. Lines that were published
    before a failure stay published; the rest are abandoned.

    Args:
        host: Broker host.
        port: Broker port.
        user: Broker user name.
        password: Broker password.
        vhost: Broker virtual host.
        exchange: Exchange to publish to.
        timeout: Socket timeout in seconds (default: 10).
        routing_key: Routing key for every message (default: "graphite").
        connection_factory: Callable opening a connection from
            ConnectionParameters; defaults to pika.BlockingConnection.
    """

    def __init__(
        self,
        host: str = "localhost",
        port: int = 5672,
        user: str = "foo",
        password: str = "foo",
        vhost: str = "graphite",
        exchange: str = "graphite",
        timeout: float = 10.0,
        routing_key: str = ROUTING_KEY,
        connection_factory: ConnectionFactory = pika.BlockingConnection,
    ) -> None:
        self._host = host
        self._port = port
        self._user = user
        self._password = password
        self._vhost = vhost
        self._exchange = exchange
        self._timeout = timeout
        self._routing_key = routing_key
        self._connection_factory = connection_factory

    @property
    def endpoint(self) -> str:
        return f"{self._host}:{self._port}"

    def connection_parameters(self) -> pika.ConnectionParameters:
        """Return the pika parameters used to reach the broker."""
        return pika.ConnectionParameters(
            host=self._host,
            port=self._port,
            virtual_host=self._vhost,
            credentials=pika.PlainCredentials(self._user, self._password),
            connection_attempts=1,
            socket_timeout=self._timeout,
            blocked_connection_timeout=self._timeout,
        )

    def send(self, payload: str) -> None:
        """Publish every line of the payload as its own message.

        Raises:
            ConnectFailure: If the broker cannot be reached or rejects the login.
            PublishFailure: If opening the channel or publishing fails.
        """
        lines = split_lines(payload)
        if not lines:
            return

        try:
            connection = self._connection_factory(self.connection_parameters())
        except (AMQPError, OSError) as exc:
            raise ConnectFailure(
                f"failed to connect to broker at {self.endpoint} "
                f"- vhost: {self._vhost} : {exc!r}"
            ) from exc

        try:
            channel = connection.channel()
            for line in lines:
                logger.debug("Publishing (AMQP): %s", line)
                channel.basic_publish(
                    exchange=self._exchange,
                    routing_key=self._routing_key,
                    body=line,
                )
        except (AMQPError, OSError) as exc:
            self._close(connection)
            raise PublishFailure(f"failed to publish to AMQP : {exc!r}") from exc

        self._close(connection)

    def _close(self, connection: Any) -> None:
        """Close the connection; failures are logged, not raised."""
        try:
            connection.close()
        except (AMQPError, OSError) as exc:
            logger.error("error closing AMQP connection : %r", exc)

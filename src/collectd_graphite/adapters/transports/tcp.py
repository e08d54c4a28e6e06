"""Carbon plaintext transport over TCP."""

import logging
import socket
from collections.abc import Callable
from typing import Any

from collectd_graphite.core.errors import ConnectFailure, PublishFailure

logger = logging.getLogger(__name__)

Connect = Callable[[tuple[str, int], float], Any]


class TCPTransport:
    """TCP implementation of TransportPort.

    Opens one connection per payload, writes the whole payload in a single
    sendall and closes the connection again. Carbon plaintext is ASCII:
    other characters are replaced with "?" and a warning is logged.

    Args:
        host: Carbon plaintext listener host.
        port: Carbon plaintext listener port.
        timeout: Connect timeout in seconds (default: 10).
        connect: Factory returning a connected socket; defaults to
                 socket.create_connection.
    """

    def __init__(
        self,
        host: str = "localhost",
        port: int = 2003,
        timeout: float = 10.0,
        connect: Connect = socket.create_connection,
    ) -> None:
        self._host = host
        self._port = port
        self._timeout = timeout
        self._connect = connect

    @property
    def endpoint(self) -> str:
        return f"{self._host}:{self._port}"

    def send(self, payload: str) -> None:
        """Write the payload to the carbon listener.

        Raises:
            ConnectFailure: If the connection cannot be established.
            PublishFailure: If writing the payload fails.
        """
        if not payload:
            return
        data = _encode(payload)
        try:
            sock = self._connect((self._host, self._port), self._timeout)
        except OSError as exc:
            raise ConnectFailure(
                f"failed to connect to {self.endpoint} : {exc}"
            ) from exc
        try:
            with sock:
                sock.sendall(data)
        except OSError as exc:
            raise PublishFailure(f"failed to write to {self.endpoint} : {exc}") from exc


def _encode(payload: str) -> bytes:
    try:
        return payload.encode("ascii")
    except UnicodeEncodeError:
        logger.warning("non-ASCII characters replaced with '?' in payload")
        return payload.encode("ascii", errors="replace")

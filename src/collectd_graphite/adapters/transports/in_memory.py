"""In-memory transport."""

from collectd_graphite.core.encoding.plaintext import split_lines
from collectd_graphite.core.errors import TransportError


class InMemoryTransport:
    """In-memory implementation of TransportPort.

    Records every delivered payload in a list. Suitable for testing and
    dry runs where no carbon listener is available. Set ``fail_with`` to
    make every send raise that error instead.
    """

    def __init__(self, fail_with: TransportError | None = None) -> None:
        self.payloads: list[str] = []
        self.attempts = 0
        self.fail_with = fail_with

    def send(self, payload: str) -> None:
        """Record the payload, or raise the configured failure."""
        if not payload:
            return
        self.attempts += 1
        if self.fail_with is not None:
            raise self.fail_with
        self.payloads.append(payload)

    @property
    def lines(self) -> list[str]:
        """All delivered lines, in delivery order, without newlines."""
        return [line for payload in self.payloads for line in split_lines(payload)]

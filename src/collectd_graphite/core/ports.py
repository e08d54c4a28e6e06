"""Port interfaces for writer collaborators.

These protocols define the contracts that adapters must implement.
The writer depends only on these interfaces, not concrete implementations.
"""

from typing import Protocol, runtime_checkable

from collectd_graphite.core.models import Number


@runtime_checkable
class TransportPort(Protocol):
    """Port for delivering a buffered plaintext payload.

    Adapters implementing this protocol push the payload to a downstream
    service exactly once. Examples: TCPTransport, AMQPTransport,
    InMemoryTransport.
    """

    def send(self, payload: str) -> None:
        """Deliver the payload.

        Args:
            payload: Newline-terminated plaintext lines. May be empty,
                     in which case nothing is sent.

        Raises:
            TransportError: If the payload could not be delivered.
        """
        ...


@runtime_checkable
class PreviousValuePort(Protocol):
    """Port for remembering the last raw reading per metric key.

    Used by rate conversion of COUNTER and DERIVE data sources.
    Callers are responsible for serializing read-modify-write sequences.
    """

    def get(self, key: str) -> Number | None:
        """Return the last recorded raw value for key, or None."""
        ...

    def put(self, key: str, value: Number) -> None:
        """Record value as the last raw value for key."""
        ...


@runtime_checkable
class LogSink(Protocol):
    """Host logging facility taking a syslog severity and a message."""

    def __call__(self, severity: int, message: str) -> None: ...

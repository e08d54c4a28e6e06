"""Typed configuration for the graphite writer.

Configuration arrives from the host daemon as a flat set of key/value
items. Keys are matched case-insensitively, unknown keys are ignored and
values that cannot be parsed keep the field's default.
"""

import logging
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, fields, replace
from typing import Any

logger = logging.getLogger(__name__)

_TRUE_STRINGS = frozenset({"true", "yes", "on", "1"})
_FALSE_STRINGS = frozenset({"false", "no", "off", "0"})


def _parse_bool(value: Any) -> bool:
    """Parse a boolean option value.

    Accepts bools, numbers and the strings true/yes/on/1 and false/no/off/0.

    Raises:
        ValueError: If value is not recognized as a boolean.
    """
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value != 0
    text = str(value).strip().lower()
    if text in _TRUE_STRINGS:
        return True
    if text in _FALSE_STRINGS:
        return False
    raise ValueError(f"not a boolean: {value!r}")


def _parse_positive_int(value: Any) -> int:
    """Parse a strictly positive integer option value.

    Accepts ints, integral floats (collectd hands numbers over as floats)
    and numeric strings.

    Raises:
        ValueError: If value is not a positive integer.
    """
    if isinstance(value, bool):
        raise ValueError(f"not an integer: {value!r}")
    if isinstance(value, float):
        if not value.is_integer():
            raise ValueError(f"not an integer: {value!r}")
        result = int(value)
    else:
        result = int(str(value).strip())
    if result <= 0:
        raise ValueError(f"must be positive: {value!r}")
    return result


def _parse_str(value: Any) -> str:
    return str(value)


# option key (lower-case) -> (GraphiteConfig field, parser)
_OPTIONS: dict[str, tuple[str, Callable[[Any], Any]]] = {
    "buffer": ("buffer_size", _parse_positive_int),
    "prefix": ("prefix", _parse_str),
    "hostbucket": ("host_bucket", _parse_str),
    "reversehost": ("reverse_host", _parse_bool),
    "host": ("graphite_host", _parse_str),
    "port": ("graphite_port", _parse_positive_int),
    "useamqp": ("use_amqp", _parse_bool),
    "amqphost": ("amqp_host", _parse_str),
    "amqpport": ("amqp_port", _parse_positive_int),
    "amqpuser": ("amqp_user", _parse_str),
    "amqppassword": ("amqp_password", _parse_str),
    "amqpvhost": ("amqp_vhost", _parse_str),
    "amqpexchange": ("amqp_exchange", _parse_str),
}


def _iter_items(tree: Any) -> Iterable[tuple[str, Any]]:
    """Yield (key, value) pairs from the supported configuration shapes.

    Supported shapes:
    - a mapping of key -> value
    - a collectd-style node whose ``children`` each carry ``key`` and
      ``values`` (only the first value is used)
    - an iterable of (key, value) pairs
    """
    if tree is None:
        return
    if isinstance(tree, Mapping):
        yield from tree.items()
        return
    children = getattr(tree, "children", None)
    if children is not None:
        for child in children:
            values = tuple(getattr(child, "values", ()) or ())
            if not values:
                logger.warning("Ignoring option %s without a value", child.key)
                continue
            yield child.key, values[0]
        return
    for key, value in tree:
        yield key, value


@dataclass(frozen=True)
class GraphiteConfig:
    """Writer configuration.

    Attributes:
        buffer_size: Buffered bytes that trigger a flush (option "Buffer").
        prefix: First path component (option "Prefix").
        host_bucket: Path component after the host (option "HostBucket").
        reverse_host: Reverse host name labels instead of replacing dots
            (option "ReverseHost").
        graphite_host: Carbon plaintext listener host (option "Host").
        graphite_port: Carbon plaintext listener port (option "Port").
        use_amqp: Publish to an AMQP broker instead of TCP (option "UseAMQP").
        amqp_host: Broker host (option "AMQPHost").
        amqp_port: Broker port (option "AMQPPort").
        amqp_user: Broker user name (option "AMQPUser").
        amqp_password: Broker password (option "AMQPPassword").
        amqp_vhost: Broker virtual host (option "AMQPVHost").
        amqp_exchange: Exchange metrics are published to (option "AMQPExchange").
        tcp_timeout: Seconds allowed for the TCP connect.
        amqp_timeout: Seconds allowed for broker socket operations.
    """

    buffer_size: int = 8192
    prefix: str = "collectd"
    host_bucket: str = "collectd"
    reverse_host: bool = False
    graphite_host: str = "localhost"
    graphite_port: int = 2003
    use_amqp: bool = False
    amqp_host: str = "localhost"
    amqp_port: int = 5672
    amqp_user: str = "foo"
    amqp_password: str = "foo"
    amqp_vhost: str = "graphite"
    amqp_exchange: str = "graphite"
    tcp_timeout: float = 10.0
    amqp_timeout: float = 10.0

    @classmethod
    def from_items(
        cls, tree: Any, base: "GraphiteConfig | None" = None
    ) -> "GraphiteConfig":
        """Build a configuration from host configuration items.

        Args:
            tree: Mapping, collectd config node or iterable of (key, value).
            base: Configuration providing values for keys not present
                  (default: all defaults).

        Returns:
            New GraphiteConfig. Unknown keys and unparseable values are
            logged and skipped.
        """
        changes: dict[str, Any] = {}
        for key, value in _iter_items(tree):
            option = _OPTIONS.get(str(key).strip().lower())
            if option is None:
                logger.debug("Ignoring unknown option %s", key)
                continue
            field_name, parser = option
            try:
                changes[field_name] = parser(value)
            except (TypeError, ValueError) as exc:
                logger.warning("Invalid value for option %s: %s", key, exc)
        return replace(base or cls(), **changes)

    def as_dict(self) -> dict[str, Any]:
        """Return the configuration as a dict, with the AMQP password masked."""
        result = {f.name: getattr(self, f.name) for f in fields(self)}
        result["amqp_password"] = "***"
        return result

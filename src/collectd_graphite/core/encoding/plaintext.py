"""Graphite plaintext protocol encoder.

Each data point is one ASCII line: ``<path> <value> <timestamp>\\n``.
"""

from collectd_graphite.core.models import Number


def format_value(value: Number) -> str:
    """Render a value the way its numeric type suggests.

    Integers are rendered without a decimal point. Floats use Python's
    shortest round-trip representation, so a rate of 5.0 stays "5.0".
    """
    if isinstance(value, bool):
        return str(int(value))
    if isinstance(value, int):
        return str(value)
    return repr(float(value))


def encode_line(path: str, value: Number, timestamp: float) -> str:
    """Encode one data point as a newline-terminated plaintext line.

    Args:
        path: Dotted graphite path.
        value: Processed value.
        timestamp: Unix timestamp, truncated to whole seconds.

    Returns:
        Line of the form "path value timestamp\\n".
    """
    return f"{path} {format_value(value)} {int(timestamp)}\n"


def split_lines(payload: str) -> list[str]:
    """Split a buffered payload into lines without trailing newlines.

    Empty lines are dropped, so an empty payload yields an empty list.
    """
    return [line for line in payload.split("\n") if line]

"""Line buffer for plaintext data points.

Accumulates rendered lines until the writer decides to flush. The buffer
itself is not synchronized; GraphiteWriter holds its lock around every
append and take_and_clear so no line is lost or sent twice.
"""


class LineBuffer:
    """Append-only text buffer tracking its length.

    Invariant: ``len(buffer)`` equals the sum of the lengths of all lines
    appended since the last take_and_clear().
    """

    def __init__(self) -> None:
        self._chunks: list[str] = []
        self._length = 0

    def __len__(self) -> int:
        return self._length

    def __bool__(self) -> bool:
        return self._length > 0

    def append(self, line: str) -> None:
        """Append a rendered line."""
        self._chunks.append(line)
        self._length += len(line)

    def should_flush(self, threshold: int) -> bool:
        """Return True once the buffered length has reached threshold."""
        return self._length >= threshold

    def take_and_clear(self) -> str:
        """Return the buffered text and reset the buffer to empty."""
        payload = "".join(self._chunks)
        self._chunks = []
        self._length = 0
        return payload

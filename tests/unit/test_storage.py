"""Tests for the line buffer and the in-memory previous-value store."""

import pytest

from collectd_graphite.adapters.storage import InMemoryPreviousValueStore, LineBuffer
from collectd_graphite.core.ports import PreviousValuePort


class TestLineBuffer:
    """Tests for LineBuffer."""

    @pytest.mark.core
    @pytest.mark.tier(0)
    def test_new_buffer_is_empty(self) -> None:
        buffer = LineBuffer()
        assert len(buffer) == 0
        assert not buffer
        assert buffer.take_and_clear() == ""

    @pytest.mark.core
    @pytest.mark.tier(0)
    @pytest.mark.tra("Buffer.Length.Invariant")
    def test_length_is_sum_of_line_lengths(self) -> None:
        buffer = LineBuffer()
        lines = ["a.b 1 1\n", "a.c 22 1\n", "a.d 333 1\n"]
        for line in lines:
            buffer.append(line)
        assert len(buffer) == sum(len(line) for line in lines)

    @pytest.mark.core
    @pytest.mark.tier(0)
    @pytest.mark.tra("Buffer.ShouldFlush.Threshold")
    def test_should_flush_at_threshold(self) -> None:
        """should_flush turns true once length reaches the threshold."""
        buffer = LineBuffer()
        buffer.append("x" * 9)
        assert not buffer.should_flush(10)
        buffer.append("x")
        assert buffer.should_flush(10)

    @pytest.mark.core
    @pytest.mark.tier(0)
    @pytest.mark.tra("Buffer.TakeAndClear")
    def test_take_and_clear_returns_contents_in_order(self) -> None:
        buffer = LineBuffer()
        buffer.append("first 1 1\n")
        buffer.append("second 2 2\n")
        assert buffer.take_and_clear() == "first 1 1\nsecond 2 2\n"
        assert len(buffer) == 0
        assert buffer.take_and_clear() == ""


class TestInMemoryPreviousValueStore:
    """Tests for InMemoryPreviousValueStore."""

    @pytest.mark.core
    @pytest.mark.tier(0)
    def test_implements_port(self) -> None:
        assert isinstance(InMemoryPreviousValueStore(), PreviousValuePort)

    @pytest.mark.core
    @pytest.mark.tier(0)
    def test_unknown_key_returns_none(self) -> None:
        assert InMemoryPreviousValueStore().get("cpu.load.value") is None

    @pytest.mark.core
    @pytest.mark.tier(0)
    def test_put_overwrites(self) -> None:
        store = InMemoryPreviousValueStore()
        store.put("k", 1)
        store.put("k", 2)
        assert store.get("k") == 2
        assert len(store) == 1
        assert "k" in store

"""Shared test fixtures for all test modules."""

import logging
from collections.abc import Callable, Iterator
from typing import Any

import pytest

from collectd_graphite.adapters.logging import HostLogHandler
from collectd_graphite.adapters.storage.previous_values import (
    InMemoryPreviousValueStore,
)
from collectd_graphite.adapters.transports.in_memory import InMemoryTransport
from collectd_graphite.core.config import GraphiteConfig
from collectd_graphite.core.models import DataSource, Number, ValueList
from collectd_graphite.writer import GraphiteWriter

TIMESTAMP = 1702300000.0


@pytest.fixture
def config() -> GraphiteConfig:
    """Default configuration."""
    return GraphiteConfig()


@pytest.fixture
def store() -> InMemoryPreviousValueStore:
    """Empty previous-value store."""
    return InMemoryPreviousValueStore()


@pytest.fixture
def transport() -> InMemoryTransport:
    """Transport recording every delivered payload."""
    return InMemoryTransport()


@pytest.fixture
def make_writer(transport: InMemoryTransport) -> Callable[..., GraphiteWriter]:
    """Factory fixture for writers wired to the in-memory transport.

    Keyword arguments are GraphiteConfig fields.

    Usage:
        def test_something(make_writer):
            writer = make_writer(buffer_size=100)
    """

    def _make(**overrides: Any) -> GraphiteWriter:
        return GraphiteWriter(config=GraphiteConfig(**overrides), transport=transport)

    return _make


@pytest.fixture
def make_value_list() -> Callable[..., ValueList]:
    """Factory fixture for value lists with stable defaults.

    Usage:
        vl = make_value_list([(gauge(), 10)], host="db01.example.com")
    """

    def _make(
        values: list[tuple[DataSource, Number]],
        host: str = "db01.example.com",
        plugin: str = "cpu",
        type: str = "load",
        interval: float = 10.0,
        time: float = TIMESTAMP,
        plugin_instance: str | None = None,
        type_instance: str | None = None,
    ) -> ValueList:
        return ValueList(
            host=host,
            plugin=plugin,
            type=type,
            time=time,
            interval=interval,
            values=tuple(values),
            plugin_instance=plugin_instance,
            type_instance=type_instance,
        )

    return _make


@pytest.fixture
def host_log() -> Iterator[list[tuple[int, str]]]:
    """Capture package log output as (severity, message) pairs."""
    records: list[tuple[int, str]] = []
    handler = HostLogHandler(
        lambda severity, message: records.append((severity, message))
    )
    package_logger = logging.getLogger("collectd_graphite")
    previous_level = package_logger.level
    package_logger.addHandler(handler)
    package_logger.setLevel(logging.DEBUG)
    try:
        yield records
    finally:
        package_logger.removeHandler(handler)
        package_logger.setLevel(previous_level)

"""BDD step definitions for forwarding.feature."""

from dataclasses import dataclass, field, replace
from typing import Any

import pytest
from pytest_bdd import given, parsers, then, when

from collectd_graphite.adapters.transports.in_memory import InMemoryTransport
from collectd_graphite.core.config import GraphiteConfig
from collectd_graphite.core.errors import ConnectFailure
from collectd_graphite.core.models import DataSource, DSType, Number
from collectd_graphite.core.sources import value_list
from collectd_graphite.writer import GraphiteWriter


@dataclass
class ForwardingContext:
    """State shared between the steps of one scenario."""

    transport: InMemoryTransport = field(default_factory=InMemoryTransport)
    config: GraphiteConfig = field(default_factory=GraphiteConfig)
    writer: GraphiteWriter | None = None
    maximum: Number | None = None
    results: list[bool] = field(default_factory=list)
    log: list[tuple[int, str]] = field(default_factory=list)

    def rebuild(self, **overrides: Any) -> None:
        self.config = replace(self.config, **overrides)
        self.writer = GraphiteWriter(self.config, transport=self.transport)


@pytest.fixture
def ctx(host_log: list[tuple[int, str]]) -> ForwardingContext:
    """Fresh scenario context for each test, capturing host log output."""
    return ForwardingContext(log=host_log)


def _number(text: str) -> Number:
    return int(text) if text.lstrip("-").isdigit() else float(text)


# =============================================================================
# Given steps
# =============================================================================


@given(parsers.parse('a writer with prefix "{prefix}" and host bucket "{bucket}"'))
def given_writer_with_prefix(ctx: ForwardingContext, prefix: str, bucket: str) -> None:
    ctx.rebuild(prefix=prefix, host_bucket=bucket)


@given(parsers.parse("a writer with buffer size {size:d}"))
def given_writer_with_buffer_size(ctx: ForwardingContext, size: int) -> None:
    ctx.rebuild(buffer_size=size)


@given("the collector refuses connections")
def given_collector_refuses(ctx: ForwardingContext) -> None:
    ctx.transport.fail_with = ConnectFailure(
        "failed to connect to localhost:2003 : [Errno 111] Connection refused"
    )


@given(parsers.parse("the data source maximum is {maximum:d}"))
def given_data_source_maximum(ctx: ForwardingContext, maximum: int) -> None:
    ctx.maximum = maximum


# =============================================================================
# When steps
# =============================================================================


@when(
    parsers.parse(
        'host "{host}" reports {kind} "{plugin}/{type_name}" value {value} at {ts:d}'
    )
)
def when_host_reports(
    ctx: ForwardingContext,
    host: str,
    kind: str,
    plugin: str,
    type_name: str,
    value: str,
    ts: int,
) -> None:
    assert ctx.writer is not None
    source = DataSource("value", DSType.parse(kind), max=ctx.maximum)
    vl = value_list(host, plugin, type_name, [(source, _number(value))], timestamp=ts)
    ctx.results.append(ctx.writer.write(vl))


@when("the writer is flushed")
def when_writer_flushed(ctx: ForwardingContext) -> None:
    assert ctx.writer is not None
    ctx.results.append(ctx.writer.flush())


# =============================================================================
# Then steps
# =============================================================================


@then(parsers.parse('the collector receives "{line}"'))
def then_collector_receives(ctx: ForwardingContext, line: str) -> None:
    assert line in ctx.transport.lines


@then(parsers.parse("exactly {count:d} line was delivered"))
def then_lines_delivered(ctx: ForwardingContext, count: int) -> None:
    assert len(ctx.transport.lines) == count


@then(parsers.parse("exactly {count:d} payload was delivered"))
def then_payloads_delivered(ctx: ForwardingContext, count: int) -> None:
    assert len(ctx.transport.payloads) == count


@then("no line was delivered")
def then_nothing_delivered(ctx: ForwardingContext) -> None:
    assert ctx.transport.lines == []


@then("every write succeeded")
def then_every_write_succeeded(ctx: ForwardingContext) -> None:
    assert ctx.results and all(ctx.results)


@then("the buffer is empty")
def then_buffer_empty(ctx: ForwardingContext) -> None:
    assert ctx.writer is not None
    assert ctx.writer.buffered == 0


@then(parsers.parse('the host log mentions "{text}"'))
def then_host_log_mentions(ctx: ForwardingContext, text: str) -> None:
    assert any(text in message for _, message in ctx.log)

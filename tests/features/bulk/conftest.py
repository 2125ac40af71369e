"""BDD step definitions for bulk export features."""

from dataclasses import dataclass, field
from typing import Any

import pytest
from pytest_bdd import given, parsers, then, when

from meterexport.core.clock import MockClock
from meterexport.core.encoding.bulk import INDEX_ACTION
from meterexport.core.export import render_cycle
from meterexport.core.meters import Counter, DistributionSummary, Gauge


@dataclass
class ExportScenarioContext:
    """Shared state between steps in an export scenario."""

    clock: MockClock = field(default_factory=MockClock)
    meters: list[Any] = field(default_factory=list)
    payload: str = ""


@pytest.fixture
def ctx() -> ExportScenarioContext:
    """Fresh scenario context for each test."""
    return ExportScenarioContext()


# === Given ===
@given("a mock clock at the epoch")
def step_mock_clock(ctx: ExportScenarioContext) -> None:
    ctx.clock = MockClock()


@given(parsers.parse('a counter "{name}" incremented by {amount:d}'))
def step_counter(ctx: ExportScenarioContext, name: str, amount: int) -> None:
    counter = Counter(name, ctx.clock)
    counter.increment(amount)
    ctx.meters.append(counter)


@given(parsers.parse('a counter "{name}" tagged {k1}={v1} and {k2}={v2}'))
def step_tagged_counter(
    ctx: ExportScenarioContext, name: str, k1: str, v1: str, k2: str, v2: str
) -> None:
    counter = Counter(name, ctx.clock, tags={k1: v1, k2: v2})
    counter.increment()
    ctx.meters.append(counter)


@given(parsers.parse('a distribution summary "{name}" recording {a:d} and {b:d}'))
def step_summary(ctx: ExportScenarioContext, name: str, a: int, b: int) -> None:
    summary = DistributionSummary(name, ctx.clock)
    summary.record(a)
    summary.record(b)
    ctx.meters.append(summary)


@given(parsers.parse('a gauge "{name}" without a referent'))
def step_orphan_gauge(ctx: ExportScenarioContext, name: str) -> None:
    ctx.meters.append(Gauge(name, None, float))


@given(parsers.parse("the clock advanced by {seconds:d} seconds"))
def step_advance_clock(ctx: ExportScenarioContext, seconds: int) -> None:
    ctx.clock.add_seconds(seconds)


# === When ===
@when("the meters are exported")
def step_export(ctx: ExportScenarioContext) -> None:
    ctx.payload = render_cycle(ctx.meters, ctx.clock)


# === Then ===
@then(parsers.parse("{n:d} document is exported"))
def then_document_count(ctx: ExportScenarioContext, n: int) -> None:
    assert ctx.payload.count(INDEX_ACTION) == n


@then(parsers.parse("the document contains '{fragment}'"))
def then_document_contains(ctx: ExportScenarioContext, fragment: str) -> None:
    lines = ctx.payload.splitlines(keepends=True)
    assert lines[0] == INDEX_ACTION
    assert fragment in lines[1]


@then("nothing is exported")
def then_nothing_exported(ctx: ExportScenarioContext) -> None:
    assert ctx.payload == ""

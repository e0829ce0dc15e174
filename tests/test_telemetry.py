"""Tests for tracing of resolution and navigation."""

import pytest
from opentelemetry.sdk.trace.export.in_memory_span_exporter import InMemorySpanExporter

from stepper.core.telemetry import TelemetryService
from stepper.services.session import StepperSession


@pytest.fixture(scope="module")
def exporter():
    exporter = InMemorySpanExporter()
    TelemetryService("stepper-tests", exporter=exporter)
    return exporter


@pytest.mark.asyncio
async def test_resolution_and_moves_are_traced(exporter, simple_graph):
    exporter.clear()
    session = StepperSession(simple_graph)

    await session.start()
    await session.go_to_next_step()
    await session.go_to_prev_step()

    names = [span.name for span in exporter.get_finished_spans()]
    assert names == [
        "stepper.resolve_first_step",
        "stepper.navigator.next",
        "stepper.navigator.previous",
    ]

"""Pytest configuration and fixtures."""

import asyncio
from unittest.mock import AsyncMock

import pytest

from stepper.models.domain import Step, StepGraph
from stepper.services.events import EventEmitter


async def _slow_not_done() -> bool:
    await asyncio.sleep(0.001)
    return False


async def _always_skip() -> bool:
    return True


@pytest.fixture
def simple_graph():
    """Three flat steps; "2" blocks back navigation."""
    return StepGraph(
        initial_step="1",
        steps={
            "1": Step(next="2"),
            "2": Step(next="3", can_go_back=False),
            "3": Step(next=None),
        },
    )


@pytest.fixture
def nested_layer():
    """Innermost sub-flow; "2.1.2" is always skipped."""
    return StepGraph(
        initial_step="2.1.1",
        steps={
            "2.1.1": Step(next="2.1.2", can_go_back=False),
            "2.1.2": Step(next="2.1.3", should_skip=_always_skip),
            "2.1.3": Step(next=None),
        },
    )


@pytest.fixture
def advanced_graph(nested_layer):
    """Nested graph: "1" is done, "2" is a container of containers."""
    return StepGraph(
        initial_step="1",
        steps={
            "1": Step(next="2", is_done=lambda: True),
            "2": Step(
                next="3",
                is_done=_slow_not_done,
                child_steps=StepGraph(
                    initial_step="2.1",
                    steps={
                        "2.1": Step(next="2.2", child_steps=nested_layer),
                        "2.2": Step(
                            next=None,
                            child_steps=StepGraph(
                                initial_step="2.2.1",
                                steps={
                                    "2.2.1": Step(next="2.2.2"),
                                    "2.2.2": Step(next=None),
                                },
                            ),
                        ),
                    },
                ),
            ),
            "3": Step(next=None),
        },
    )


@pytest.fixture
def skip_graph():
    """Flat graph whose middle step is always skipped."""
    return StepGraph(
        initial_step="1",
        steps={
            "1": Step(next="2"),
            "2": Step(next="3", should_skip=lambda: True),
            "3": Step(next=None),
        },
    )


@pytest.fixture
def mock_emitter():
    """Mock EventEmitter."""
    emitter = AsyncMock(spec=EventEmitter)
    return emitter

"""First-step resolution — where should a freshly loaded stepper start?

Walks the step graph depth-first from the initial step (or an explicit
override), passing over steps whose ``is_done`` or ``should_skip``
predicate holds and descending into the child graph of the first
container that is still open.  The result is the address of the first
actionable step, e.g. ``"2/2.1/2.1.1"``.

A done step without a ``next`` is returned as-is: there is nowhere else
to go.  Graphs whose ``next`` chain loops are not detected and end in
``RecursionError``.
"""

from __future__ import annotations

import logging

from stepper.core.predicates import evaluate_predicate
from stepper.core.telemetry import trace_span
from stepper.models.domain import StepGraph, join_address

logger = logging.getLogger(__name__)


@trace_span("stepper.resolve_first_step")
async def resolve_first_step(graph: StepGraph, start: str | None = None) -> str:
    """Return the address of the first unfulfilled step.

    Args:
        graph: The step graph to search.
        start: Step to start the search from; defaults to
            ``graph.initial_step``.  Done/skipped steps are still passed
            over when starting from an override.

    Raises:
        StepNotFoundError: If *start* or a ``next`` reference is unknown.
        Exception: Whatever an ``is_done`` / ``should_skip`` predicate raises.
    """
    address = await _resolve(graph, start or graph.initial_step)
    logger.info("Resolved first step: %s", address)
    return address


async def _resolve(graph: StepGraph, name: str) -> str:
    step = graph.get_step(name)

    # Both predicates run, in this order, even if the first one already holds
    is_done = await evaluate_predicate(step.is_done)
    should_skip = await evaluate_predicate(step.should_skip)

    if is_done or should_skip:
        if step.next is None:
            # Last step of this graph, stay here
            return name
        logger.debug(
            "Passing over step %r (done=%s, skip=%s)", name, is_done, should_skip
        )
        return await _resolve(graph, step.next)

    if step.child_steps is not None:
        child_address = await _resolve(step.child_steps, step.child_steps.initial_step)
        return join_address(name, child_address)
    return name

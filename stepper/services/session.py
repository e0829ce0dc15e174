"""Stepper session — state handling for one run of a form wizard.

Ties the pieces together the way a UI needs them:

1. the step graph is flattened once into the navigation sequence;
2. :meth:`StepperSession.start` resolves the first unfulfilled step
   (the session is *loading* until then);
3. :meth:`go_to_next_step` / :meth:`go_to_prev_step` move through the
   sequence.

Every change of the current step is pushed to the optional
:class:`EventEmitter` as a ``step_changed`` event.
"""

from __future__ import annotations

import logging

from stepper.models.domain import SequentialStep, StepGraph
from stepper.services.events import EventEmitter
from stepper.services.flattener import flatten
from stepper.services.navigator import Navigator
from stepper.services.resolver import resolve_first_step

logger = logging.getLogger(__name__)


class StepperSession:
    """Current-step state for a single stepper instance.

    Usage::

        emitter = EventEmitter()
        session = StepperSession(graph, emitter=emitter)
        await session.start()
        await session.go_to_next_step()
        session.current_step.address
    """

    def __init__(
        self,
        graph: StepGraph,
        initial_step: str | None = None,
        emitter: EventEmitter | None = None,
    ) -> None:
        self.graph = graph
        self.initial_step = initial_step or graph.initial_step
        self.emitter = emitter
        self.navigator = Navigator(flatten(graph), on_change=self._on_step_changed)

    @property
    def is_loading(self) -> bool:
        return self.navigator.current is None

    @property
    def current_step(self) -> SequentialStep | None:
        return self.navigator.current

    @property
    def steps_sequence(self) -> tuple[SequentialStep, ...]:
        return self.navigator.sequence

    async def start(self) -> SequentialStep | None:
        """Resolve and select the first step.

        Resolution failures (unknown steps, raising predicates) are
        logged and reported as an ``error`` event; the session then
        stays loading.
        """
        if self.emitter:
            await self.emitter.emit_loading()
        try:
            address = await resolve_first_step(self.graph, self.initial_step)
        except Exception as e:
            logger.exception("Failed to resolve the first step of %r", self.initial_step)
            if self.emitter:
                await self.emitter.emit_error(str(e))
            return None
        return await self.navigator.go_to(address)

    async def go_to_next_step(self) -> SequentialStep | None:
        return await self.navigator.next()

    async def go_to_prev_step(self) -> SequentialStep | None:
        return await self.navigator.previous()

    async def close(self) -> None:
        """Finish the session and close the emitter."""
        if self.emitter:
            current = self.current_step
            await self.emitter.emit_done(current.address if current else None)

    async def _on_step_changed(self, step: SequentialStep) -> None:
        if self.emitter:
            await self.emitter.emit_step_changed(step)

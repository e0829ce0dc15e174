"""Forward / backward movement through a flattened step sequence.

The navigator owns the sequence produced by :func:`flatten` and the
*current* record.  Moving re-checks each candidate's ``should_skip``
predicate and keeps going in the same direction while it holds.

Boundaries and ``can_go_back=False`` are not errors: the move is a
silent no-op.  Overlapping ``next()`` / ``previous()`` calls are not
coordinated; callers must wait for one move to finish before starting
another.
"""

from __future__ import annotations

import inspect
import logging
from collections.abc import Awaitable, Callable, Sequence

from stepper.core.predicates import evaluate_predicate
from stepper.core.telemetry import trace_span
from stepper.models.domain import SequentialStep

logger = logging.getLogger(__name__)

StepChangeCallback = Callable[[SequentialStep], Awaitable[None] | None]


class Navigator:
    """Tracks the current step of one stepper instance.

    Usage::

        navigator = Navigator(flatten(graph), on_change=render)
        await navigator.go_to(await resolve_first_step(graph))
        await navigator.next()
    """

    def __init__(
        self,
        sequence: Sequence[SequentialStep],
        on_change: StepChangeCallback | None = None,
    ) -> None:
        self._sequence: tuple[SequentialStep, ...] = tuple(sequence)
        self._index: dict[str, int] = {
            record.address: i for i, record in enumerate(self._sequence)
        }
        self._on_change = on_change
        self._current: SequentialStep | None = None

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    @property
    def sequence(self) -> tuple[SequentialStep, ...]:
        return self._sequence

    @property
    def current(self) -> SequentialStep | None:
        return self._current

    def index_of(self, address: str) -> int | None:
        """Position of *address* in the sequence, or ``None``."""
        return self._index.get(address)

    def find(self, address: str) -> SequentialStep | None:
        index = self._index.get(address)
        return self._sequence[index] if index is not None else None

    # ------------------------------------------------------------------
    # Movement
    # ------------------------------------------------------------------

    async def go_to(self, address: str) -> SequentialStep | None:
        """Jump straight to *address* without consulting any predicate.

        Unknown addresses leave the current step untouched.
        """
        record = self.find(address)
        if record is None:
            logger.warning("Address %r is not part of the step sequence", address)
            return None
        await self._set_current(record)
        return record

    @trace_span("stepper.navigator.next")
    async def next(self) -> SequentialStep | None:
        """Advance to the next step that is not skipped.

        Returns the (possibly unchanged) current step.
        """
        if self._current is not None:
            await self._forward_from(self._current)
        return self._current

    @trace_span("stepper.navigator.previous")
    async def previous(self) -> SequentialStep | None:
        """Go back to the previous step that is not skipped.

        Blocked when the step being left has ``can_go_back=False``; this
        includes skipped steps passed over on the way back.
        Returns the (possibly unchanged) current step.
        """
        if self._current is not None:
            await self._backward_from(self._current)
        return self._current

    async def _forward_from(self, record: SequentialStep) -> None:
        index = self._index.get(record.address)
        if index is None or index >= len(self._sequence) - 1:
            return
        candidate = self._sequence[index + 1]
        if await evaluate_predicate(candidate.should_skip):
            logger.debug("Skipping %r", candidate.address)
            await self._forward_from(candidate)
        else:
            await self._set_current(candidate)

    async def _backward_from(self, record: SequentialStep) -> None:
        index = self._index.get(record.address)
        if index is None or index <= 0:
            return
        if not record.can_go_back:
            logger.debug("Back navigation blocked at %r", record.address)
            return
        candidate = self._sequence[index - 1]
        if await evaluate_predicate(candidate.should_skip):
            logger.debug("Skipping %r", candidate.address)
            await self._backward_from(candidate)
        else:
            await self._set_current(candidate)

    async def _set_current(self, record: SequentialStep) -> None:
        self._current = record
        logger.info("Current step: %s", record.address)
        if self._on_change is not None:
            result = self._on_change(record)
            if inspect.isawaitable(result):
                await result

"""Stepper change notifications.

A :class:`StepperSession` reports its progress through an
:class:`EventEmitter` so a UI layer can show a loading indicator and
re-render whenever the current step changes.

Event types
-----------

.. list-table::
   :header-rows: 1

   * - type
     - description
   * - ``loading``
     - First-step resolution has started.
   * - ``step_changed``
     - The current step changed; data holds ``address`` and ``can_go_back``.
   * - ``error``
     - First-step resolution failed; the session stays loading.
   * - ``done``
     - The session is finished, no more events follow.
"""

from __future__ import annotations

import asyncio
import json
from collections.abc import AsyncIterator
from dataclasses import dataclass
from enum import StrEnum
from typing import Any

from stepper.models.domain import SequentialStep


class EventType(StrEnum):
    """Stepper event types."""

    LOADING = "loading"
    STEP_CHANGED = "step_changed"
    ERROR = "error"
    DONE = "done"


@dataclass
class StepperEvent:
    """A single stepper event."""

    type: EventType
    address: str | None = None
    data: Any = None

    def to_json(self) -> str:
        """Serialise to a single JSON line."""
        payload: dict[str, Any] = {"type": self.type.value}
        if self.address is not None:
            payload["address"] = self.address
        if self.data is not None:
            payload["data"] = self.data
        return json.dumps(payload, default=str)


class EventEmitter:
    """Async event queue between a stepper session and its consumer.

    The session pushes events via :meth:`emit` and the convenience
    helpers.  A consumer reads them with ``async for event in emitter``
    until :meth:`close` (or :meth:`emit_done`) is called.

    The queue is bounded: once *maxsize* events are unread, :meth:`emit`
    (and with it every session move) waits for the consumer.
    """

    def __init__(self, maxsize: int = 2000) -> None:
        self._queue: asyncio.Queue[StepperEvent | None] = asyncio.Queue(maxsize=maxsize)
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    # ------------------------------------------------------------------
    # Producer API (called by the session)
    # ------------------------------------------------------------------

    async def emit(self, event: StepperEvent) -> None:
        """Push a single event; waits while the queue is full."""
        if self._closed:
            return
        await self._queue.put(event)

    async def emit_loading(self) -> None:
        await self.emit(StepperEvent(type=EventType.LOADING))

    async def emit_step_changed(self, step: SequentialStep) -> None:
        """Convenience: emit a ``step_changed`` event for *step*."""
        await self.emit(
            StepperEvent(
                type=EventType.STEP_CHANGED,
                address=step.address,
                data={"can_go_back": step.can_go_back},
            )
        )

    async def emit_error(self, error: str) -> None:
        await self.emit(StepperEvent(type=EventType.ERROR, data=error))

    async def emit_done(self, address: str | None = None) -> None:
        """Convenience: emit the final ``done`` event and close."""
        await self.emit(StepperEvent(type=EventType.DONE, address=address))
        await self.close()

    async def close(self) -> None:
        """Signal that no more events will be emitted."""
        if self._closed:
            return
        try:
            await self._queue.put(None)  # sentinel
        finally:
            self._closed = True

    # ------------------------------------------------------------------
    # Consumer API
    # ------------------------------------------------------------------

    def __aiter__(self) -> AsyncIterator[StepperEvent]:
        return self._iter_events()

    async def _iter_events(self) -> AsyncIterator[StepperEvent]:
        """Yield events until closed."""
        while True:
            event = await self._queue.get()
            if event is None:
                break
            yield event

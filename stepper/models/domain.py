"""Step graph data model shared across the stepper.

A stepper is described by a :class:`StepGraph`: a mapping of step names to
:class:`Step` nodes plus the name to start from.  A step that carries
``child_steps`` is a *container*; its nested graph is entered "into" the
step rather than "after" it.

Leaf steps are identified externally by an *address*, the step names from
the root graph down to the leaf joined by :data:`ADDRESS_DELIMITER`
(``"2/2.1/2.1.1"``).
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field

from stepper.services.exceptions import StepNotFoundError

ADDRESS_DELIMITER = "/"

# Zero-argument check, sync or async (e.g. a network lookup)
Predicate = Callable[[], bool | Awaitable[bool]]


def join_address(*names: str) -> str:
    """Join step names into a single address string."""
    return ADDRESS_DELIMITER.join(names)


@dataclass(frozen=True)
class Step:
    """A single node of a step graph.

    - ``next``        — following sibling in the same graph, ``None`` when last
    - ``is_done``     — predicate; a done step is passed over at load time
    - ``should_skip`` — predicate; re-checked at load time and on every move
    - ``can_go_back`` — ``None`` means "use the positional default"
    - ``child_steps`` — nested sub-flow, turns the step into a container
    """

    next: str | None = None
    is_done: Predicate | None = None
    should_skip: Predicate | None = None
    can_go_back: bool | None = None
    child_steps: StepGraph | None = None

    @property
    def is_container(self) -> bool:
        return self.child_steps is not None


@dataclass(frozen=True)
class StepGraph:
    """Named steps plus the step traversal starts from."""

    initial_step: str
    steps: dict[str, Step] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.initial_step not in self.steps:
            raise StepNotFoundError(self.initial_step, list(self.steps))

    def get_step(self, name: str) -> Step:
        """Return the step called *name*.

        Raises:
            StepNotFoundError: If the graph has no such step.
        """
        try:
            return self.steps[name]
        except KeyError:
            raise StepNotFoundError(name, list(self.steps)) from None

    def __contains__(self, name: object) -> bool:
        return name in self.steps


@dataclass(frozen=True)
class SequentialStep:
    """One leaf step of the flattened navigation sequence."""

    address: str
    can_go_back: bool
    should_skip: Predicate | None = None

    @property
    def name(self) -> str:
        """Leaf step name, the last segment of the address."""
        return self.address.rsplit(ADDRESS_DELIMITER, 1)[-1]

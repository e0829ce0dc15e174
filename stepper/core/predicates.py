"""Step predicate evaluation and the named-predicate registry.

Predicates (``isDone`` / ``shouldSkip``) may be plain functions or
coroutine functions.  :func:`evaluate_predicate` hides the difference.

Config files refer to predicates by name; implementations are registered
with ``@register_predicate("name")`` and looked up when a graph is built.

Example::

    @register_predicate("has_user")
    async def has_user() -> bool:
        return await users.exists(current_user_id())

    graph = build_step_graph(config, default_registry)
"""

from __future__ import annotations

import inspect
import logging

from stepper.models.domain import Predicate
from stepper.services.exceptions import UnknownPredicateError

logger = logging.getLogger(__name__)


async def evaluate_predicate(predicate: Predicate | None) -> bool:
    """Run *predicate*, awaiting its result when needed.

    A missing predicate counts as ``False``.  Exceptions are not caught.
    """
    if predicate is None:
        return False
    result = predicate()
    if inspect.isawaitable(result):
        result = await result
    return bool(result)


class PredicateRegistry:
    """Maps predicate names used in config files to callables."""

    def __init__(self) -> None:
        self._predicates: dict[str, Predicate] = {}

    def register(self, name: str):
        """Decorator that registers a predicate under *name*."""

        def wrapper(func: Predicate) -> Predicate:
            if name in self._predicates:
                logger.warning("Predicate %r re-registered, replacing", name)
            self._predicates[name] = func
            return func

        return wrapper

    def get(self, name: str) -> Predicate:
        """Look up a registered predicate.

        Raises:
            UnknownPredicateError: If nothing is registered as *name*.
        """
        if name not in self._predicates:
            raise UnknownPredicateError(name, self.names())
        return self._predicates[name]

    def names(self) -> list[str]:
        return sorted(self._predicates)

    def __contains__(self, name: object) -> bool:
        return name in self._predicates


# Process-wide registry used by ``@register_predicate``
default_registry = PredicateRegistry()


def register_predicate(name: str):
    """Register a predicate on :data:`default_registry`."""
    return default_registry.register(name)

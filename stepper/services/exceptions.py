"""Stepper-specific exceptions."""

from __future__ import annotations


class StepNotFoundError(KeyError):
    """Raised when ``next``, ``initialStep`` or a start override names an unknown step."""

    def __init__(self, step_name: str, available: list[str] | None = None) -> None:
        self.step_name = step_name
        self.available = available or []
        super().__init__(
            f"Step not found: {step_name!r}. Available steps: {self.available}"
        )

    def __str__(self) -> str:
        # KeyError would repr() the message otherwise
        return str(self.args[0])


class UnknownPredicateError(LookupError):
    """Raised when a step config references a predicate that was never registered."""

    def __init__(self, predicate_name: str, available: list[str] | None = None) -> None:
        self.predicate_name = predicate_name
        super().__init__(
            f"No predicate registered as {predicate_name!r}. "
            f"Available predicates: {available or []}"
        )

"""Pydantic models for step graph JSON files."""

from __future__ import annotations

from pydantic import BaseModel, Field, model_validator

from stepper.core.predicates import PredicateRegistry, default_registry
from stepper.models.domain import Step, StepGraph


class StepConfig(BaseModel):
    """A single step as declared in a config file.

    - ``next``       — following step name, ``null`` for the last one
    - ``isDone``     — name of a registered predicate
    - ``shouldSkip`` — name of a registered predicate
    - ``canGoBack``  — omit to use the positional default
    - ``childSteps`` — nested graph; turns the step into a container
    """

    next: str | None = None
    is_done: str | None = Field(None, alias="isDone")
    should_skip: str | None = Field(None, alias="shouldSkip")
    can_go_back: bool | None = Field(None, alias="canGoBack")
    child_steps: StepGraphConfig | None = Field(None, alias="childSteps")

    model_config = {"populate_by_name": True}


class StepGraphConfig(BaseModel):
    """A step graph: named steps plus the step to start from."""

    initial_step: str = Field(alias="initialStep")
    steps: dict[str, StepConfig]

    model_config = {"populate_by_name": True}

    @model_validator(mode="after")
    def _check_initial_step(self) -> StepGraphConfig:
        if self.initial_step not in self.steps:
            raise ValueError(
                f"initialStep {self.initial_step!r} is not one of the steps: "
                f"{list(self.steps)}"
            )
        return self


StepConfig.model_rebuild()


def build_step_graph(
    config: StepGraphConfig,
    registry: PredicateRegistry = default_registry,
) -> StepGraph:
    """Turn a validated config into a runtime :class:`StepGraph`.

    Raises:
        UnknownPredicateError: If a step names an unregistered predicate.
    """
    steps: dict[str, Step] = {}
    for name, step_cfg in config.steps.items():
        steps[name] = Step(
            next=step_cfg.next,
            is_done=registry.get(step_cfg.is_done) if step_cfg.is_done else None,
            should_skip=(
                registry.get(step_cfg.should_skip) if step_cfg.should_skip else None
            ),
            can_go_back=step_cfg.can_go_back,
            child_steps=(
                build_step_graph(step_cfg.child_steps, registry)
                if step_cfg.child_steps is not None
                else None
            ),
        )
    return StepGraph(initial_step=config.initial_step, steps=steps)

"""Step graph loader with environment variable resolution."""

from __future__ import annotations

import json
import os
import re
from pathlib import Path

from stepper.config.models import StepGraphConfig, build_step_graph
from stepper.core.predicates import PredicateRegistry, default_registry
from stepper.models.domain import StepGraph

_ENV_PATTERN = re.compile(r"\$\{(\w+)\}")


def _resolve_env_vars(value: object) -> object:
    """Recursively resolve ``${ENV_VAR}`` placeholders in config values."""
    if isinstance(value, str):
        return _ENV_PATTERN.sub(lambda m: os.environ.get(m.group(1), m.group(0)), value)
    if isinstance(value, dict):
        return {k: _resolve_env_vars(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_resolve_env_vars(item) for item in value]
    return value


def load_step_graph_config(path: str | Path = "steps.json") -> StepGraphConfig:
    """Load a step graph definition from a JSON file.

    - Resolves ``${ENV_VAR}`` placeholders from environment variables
      (handy for feature-flagging predicate names per deployment).
    - Validates the document against :class:`StepGraphConfig`.

    Raises:
        FileNotFoundError: If the config file does not exist.
        ValueError: If the file does not hold a JSON object.
        pydantic.ValidationError: If the graph definition is invalid.
    """
    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"Step graph file not found: {config_path}")

    raw = json.loads(config_path.read_text(encoding="utf-8"))
    resolved = _resolve_env_vars(raw)

    if not isinstance(resolved, dict):
        raise ValueError("Step graph file must contain a JSON object")

    return StepGraphConfig.model_validate(resolved)


def load_step_graph(
    path: str | Path = "steps.json",
    registry: PredicateRegistry = default_registry,
) -> StepGraph:
    """Load, validate and build a runtime step graph in one go."""
    return build_step_graph(load_step_graph_config(path), registry)

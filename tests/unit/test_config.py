"""Unit tests for step graph config loading."""

import json

import pytest
from pydantic import ValidationError

from stepper.config.loader import load_step_graph, load_step_graph_config
from stepper.config.models import StepGraphConfig, build_step_graph
from stepper.core.predicates import PredicateRegistry
from stepper.services.exceptions import UnknownPredicateError
from stepper.services.flattener import flatten
from stepper.services.resolver import resolve_first_step

GRAPH = {
    "initialStep": "account",
    "steps": {
        "account": {"next": "profile", "isDone": "has_account"},
        "profile": {
            "next": "review",
            "childSteps": {
                "initialStep": "name",
                "steps": {
                    "name": {"next": "photo", "canGoBack": False},
                    "photo": {"next": None, "shouldSkip": "${PHOTO_CHECK}"},
                },
            },
        },
        "review": {"next": None},
    },
}


@pytest.fixture
def registry():
    registry = PredicateRegistry()

    @registry.register("has_account")
    async def has_account() -> bool:
        return True

    @registry.register("photo_disabled")
    def photo_disabled() -> bool:
        return True

    return registry


@pytest.fixture
def graph_file(tmp_path):
    path = tmp_path / "steps.json"
    path.write_text(json.dumps(GRAPH), encoding="utf-8")
    return path


def test_load_resolves_env_vars(graph_file, monkeypatch):
    monkeypatch.setenv("PHOTO_CHECK", "photo_disabled")

    config = load_step_graph_config(graph_file)

    photo = config.steps["profile"].child_steps.steps["photo"]
    assert photo.should_skip == "photo_disabled"
    assert config.steps["account"].is_done == "has_account"


def test_unresolved_env_var_is_left_as_is(graph_file, monkeypatch):
    monkeypatch.delenv("PHOTO_CHECK", raising=False)

    config = load_step_graph_config(graph_file)

    assert config.steps["profile"].child_steps.steps["photo"].should_skip == "${PHOTO_CHECK}"


@pytest.mark.asyncio
async def test_load_and_build(graph_file, registry, monkeypatch):
    monkeypatch.setenv("PHOTO_CHECK", "photo_disabled")

    graph = load_step_graph(graph_file, registry)

    assert await resolve_first_step(graph) == "profile/name"
    assert [(r.address, r.can_go_back) for r in flatten(graph)] == [
        ("account", False),
        ("profile/name", False),
        ("profile/photo", True),
        ("review", True),
    ]


def test_unknown_predicate(graph_file, registry, monkeypatch):
    monkeypatch.setenv("PHOTO_CHECK", "no_such_check")

    with pytest.raises(UnknownPredicateError, match="no_such_check"):
        load_step_graph(graph_file, registry)


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_step_graph_config(tmp_path / "missing.json")


def test_non_object_document(tmp_path):
    path = tmp_path / "steps.json"
    path.write_text("[]", encoding="utf-8")
    with pytest.raises(ValueError, match="JSON object"):
        load_step_graph_config(path)


def test_initial_step_must_be_declared():
    with pytest.raises(ValidationError, match="initialStep"):
        StepGraphConfig.model_validate({"initialStep": "x", "steps": {"a": {}}})


def test_snake_case_names_accepted(registry):
    config = StepGraphConfig(
        initial_step="a",
        steps={"a": {"next": None, "can_go_back": True}},
    )
    graph = build_step_graph(config, registry)
    assert graph.get_step("a").can_go_back is True

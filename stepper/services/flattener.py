"""Step graph → flat navigation sequence.

Read ``child_steps`` as a left child and ``next`` as a right sibling and
the graph is a binary tree.  A preorder (node, left, right) walk visits a
container's whole sub-flow before moving on to its sibling::

    intro                    intro
    account                  account/email
    |- email        ──▶      account/password
    |- password              review
    review

Containers (``account``) never appear in the output; only their leaves
do, addressed by the full path.

Predicates are *not* evaluated here.  ``should_skip`` is carried on each
record so the navigator can re-check it on every move.
"""

from __future__ import annotations

from stepper.models.domain import (
    ADDRESS_DELIMITER,
    SequentialStep,
    StepGraph,
)


def flatten(graph: StepGraph) -> list[SequentialStep]:
    """Flatten *graph* into its ordered list of leaf steps.

    The first record defaults to ``can_go_back=False``, every later one to
    ``True``; an explicit ``can_go_back`` on the step always wins.

    Raises:
        StepNotFoundError: If a ``next`` reference names an unknown step.
    """
    result: list[SequentialStep] = []
    _traverse(graph, graph.initial_step, "", result)
    return result


def _traverse(
    graph: StepGraph,
    name: str,
    prefix: str,
    result: list[SequentialStep],
) -> None:
    step = graph.get_step(name)

    # 1. node (leaves only)
    if step.child_steps is None:
        default_can_go_back = bool(result)
        result.append(
            SequentialStep(
                address=f"{prefix}{name}",
                can_go_back=(
                    step.can_go_back
                    if step.can_go_back is not None
                    else default_can_go_back
                ),
                should_skip=step.should_skip,
            )
        )

    # 2. left subtree
    if step.child_steps is not None:
        _traverse(
            step.child_steps,
            step.child_steps.initial_step,
            f"{prefix}{name}{ADDRESS_DELIMITER}",
            result,
        )

    # 3. right subtree
    if step.next is not None:
        _traverse(graph, step.next, prefix, result)

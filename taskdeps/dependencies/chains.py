"""Dependency chains and the critical path.

A chain is a maximal prerequisite -> dependent path of at least two
tasks, starting at a structural root (a task none of whose waiting-for
IDs resolve). The critical path is the longest chain.
"""

from collections.abc import Iterator, Sequence

from loguru import logger

from taskdeps.dependencies.graph import TaskIndex
from taskdeps.dependencies.models import ChainStep, ChainStepStatus, ChainSummary, Task
from taskdeps.dependencies.readiness import are_dependencies_met


def _fresh_dependents(index: TaskIndex, task: Task, on_path: set[str]) -> Iterator[Task]:
    # on_path is read lazily, so it reflects the path when each candidate is reached
    for dependent in index.dependents(task.id):
        if dependent.id not in on_path:
            yield dependent


def _walk_from_root(index: TaskIndex, root: Task) -> list[list[Task]]:
    """Enumerate maximal simple paths starting at *root*, depth first."""
    chains: list[list[Task]] = []
    path = [root]
    on_path = {root.id}
    # [candidates, extended]
    stack: list[list] = [[_fresh_dependents(index, root, on_path), False]]

    while stack:
        frame = stack[-1]
        nxt = next(frame[0], None)

        if nxt is not None:
            frame[1] = True
            path.append(nxt)
            on_path.add(nxt.id)
            stack.append([_fresh_dependents(index, nxt, on_path), False])
            continue

        # No dependent left to follow: close the chain unless it was extended
        if not frame[1] and len(path) > 1:
            chains.append(list(path))
        stack.pop()
        on_path.discard(path.pop().id)

    return chains


def build_dependency_chains(tasks: Sequence[Task] | None) -> list[list[Task]]:
    """
    Build every dependency chain in a task collection.

    Roots are visited in collection order and dependents in collection
    order, so the result is deterministic. A dependent already on the
    current path is never followed again, which bounds every walk.

    Args:
        tasks: Task collection.

    Returns:
        Chains sorted longest first. Equal-length chains keep discovery
        order. Empty when the collection has no dependency edges.

    Example:
        >>> chains = build_dependency_chains([t1, t2, t3, t4])
        >>> [[t.id for t in c] for c in chains]
        [['t1', 't2', 't3'], ['t1', 't4']]
    """
    index = TaskIndex(tasks)
    if not index.has_edges():
        return []

    chains: list[list[Task]] = []
    for task in index.tasks:
        if not index.is_structural_root(task) or not index.dependents(task.id):
            continue
        chains.extend(_walk_from_root(index, task))

    chains.sort(key=len, reverse=True)
    logger.debug(f"Built {len(chains)} dependency chains from {len(index)} tasks")
    return chains


def calculate_critical_path(tasks: Sequence[Task] | None) -> list[Task]:
    """
    Find the longest dependency chain.

    Args:
        tasks: Task collection, possibly disconnected.

    Returns:
        The first chain of ``build_dependency_chains(tasks)``, or an
        empty list when there are no chains.
    """
    chains = build_dependency_chains(tasks)
    if not chains:
        return []
    return chains[0]


def summarize_chain(
    chain: Sequence[Task],
    all_tasks: Sequence[Task] | TaskIndex | None,
) -> ChainSummary:
    """
    Prepare a chain for display.

    Completed tasks are marked completed, the first incomplete task is
    the current step, and later tasks are ready or blocked depending on
    their prerequisites.

    Args:
        chain: Tasks of one chain, prerequisite first.
        all_tasks: Collection used to evaluate readiness.

    Returns:
        ChainSummary with one step per task.
    """
    index = all_tasks if isinstance(all_tasks, TaskIndex) else TaskIndex(all_tasks)
    first_incomplete = next((i for i, t in enumerate(chain) if not t.completed), None)

    steps: list[ChainStep] = []
    for i, task in enumerate(chain):
        met = are_dependencies_met(task, index)
        if task.completed:
            status = ChainStepStatus.COMPLETED
        elif i == first_incomplete:
            status = ChainStepStatus.CURRENT
        elif met:
            status = ChainStepStatus.READY
        else:
            status = ChainStepStatus.BLOCKED
        steps.append(ChainStep(position=i + 1, task=task, status=status, dependencies_met=met))

    return ChainSummary(steps=steps)

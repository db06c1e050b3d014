"""Cycle checks and dependency editing helpers.

The analysis functions tolerate cycles. These helpers exist so that an
editor can refuse a link that would create one, and so that existing
cycles and dangling references can be reported.
"""

from collections import deque
from collections.abc import Sequence

from loguru import logger

from taskdeps.core.exceptions import CircularDependencyError, TaskNotFoundError
from taskdeps.dependencies.graph import Missing, TaskIndex
from taskdeps.dependencies.models import GraphDiagnostics, Task


def would_create_circular_dependency(
    dependent_id: str,
    prerequisite_id: str,
    tasks: Sequence[Task] | TaskIndex | None,
) -> bool:
    """
    Check if "dependent waits for prerequisite" would close a cycle.

    Searches breadth first along prerequisite -> dependent edges starting
    at *dependent_id*. Reaching *prerequisite_id* means the prerequisite
    already waits, directly or not, for the dependent.

    Args:
        dependent_id: Task that would gain the prerequisite.
        prerequisite_id: Task it would wait for.
        tasks: Current task collection.

    Returns:
        True if the link is a self-reference or would close a cycle.

    Example:
        >>> # b waits for a
        >>> would_create_circular_dependency("a", "b", [a, b])
        True
    """
    if dependent_id == prerequisite_id:
        return True

    index = tasks if isinstance(tasks, TaskIndex) else TaskIndex(tasks)
    queue: deque[str] = deque([dependent_id])
    visited = {dependent_id}

    while queue:
        current_id = queue.popleft()
        if current_id == prerequisite_id:
            return True
        for dependent in index.dependents(current_id):
            if dependent.id not in visited:
                visited.add(dependent.id)
                queue.append(dependent.id)

    return False


def add_dependency(
    task: Task,
    prerequisite_id: str,
    tasks: Sequence[Task] | None,
) -> Task:
    """
    Return a copy of *task* that also waits for *prerequisite_id*.

    Args:
        task: Task to extend. It is not modified.
        prerequisite_id: ID of the new prerequisite.
        tasks: Current task collection.

    Returns:
        New Task. The same waiting list is kept when the prerequisite is
        already present.

    Raises:
        TaskNotFoundError: If no task has *prerequisite_id*.
        CircularDependencyError: If the link would close a cycle.
    """
    index = TaskIndex(tasks)
    if isinstance(index.resolve(prerequisite_id), Missing):
        raise TaskNotFoundError(prerequisite_id)

    if prerequisite_id in task.waiting_for_task_ids:
        return task.model_copy()

    if would_create_circular_dependency(task.id, prerequisite_id, index):
        raise CircularDependencyError(task.id, prerequisite_id)

    logger.debug(f"Task {task.id} now waits for {prerequisite_id}")
    return task.model_copy(
        update={"waiting_for_task_ids": [*task.waiting_for_task_ids, prerequisite_id]}
    )


def remove_dependency(task: Task, prerequisite_id: str) -> Task:
    """Return a copy of *task* that no longer waits for *prerequisite_id*."""
    return task.model_copy(
        update={
            "waiting_for_task_ids": [
                tid for tid in task.waiting_for_task_ids if tid != prerequisite_id
            ]
        }
    )


def find_cycles(tasks: Sequence[Task] | None) -> list[list[str]]:
    """
    Find cycles among two or more tasks.

    Uses a white/grey/black depth-first search over waiting-for edges and
    reports at most one cycle per back edge. Self-loops are left to
    ``diagnose_graph``.

    Args:
        tasks: Task collection.

    Returns:
        Cycles as ID paths that start and end with the same ID, e.g.
        ``["a", "b", "a"]``.
    """
    index = TaskIndex(tasks)
    WHITE, GRAY, BLACK = 0, 1, 2
    colors: dict[str, int] = {t.id: WHITE for t in index.tasks}
    cycles: list[list[str]] = []

    for start in index.tasks:
        if colors[start.id] != WHITE:
            continue

        path = [start.id]
        colors[start.id] = GRAY
        stack = [iter(index.resolved_prerequisites(start))]

        while stack:
            neighbor = next(stack[-1], None)
            if neighbor is None:
                stack.pop()
                colors[path.pop()] = BLACK
                continue

            if neighbor.id == path[-1]:
                continue
            if colors[neighbor.id] == GRAY:
                cycle_start = path.index(neighbor.id)
                cycles.append(path[cycle_start:] + [neighbor.id])
            elif colors[neighbor.id] == WHITE:
                colors[neighbor.id] = GRAY
                path.append(neighbor.id)
                stack.append(iter(index.resolved_prerequisites(neighbor)))

    return cycles


def diagnose_graph(tasks: Sequence[Task] | None) -> GraphDiagnostics:
    """
    Report dangling references, self-loops and cycles.

    Args:
        tasks: Task collection.

    Returns:
        GraphDiagnostics, healthy when nothing was found.
    """
    index = TaskIndex(tasks)
    dangling: dict[str, list[str]] = {}
    self_loops: list[str] = []

    for task in index.tasks:
        missing = [
            tid for tid in dict.fromkeys(task.waiting_for_task_ids)
            if isinstance(index.resolve(tid), Missing)
        ]
        if missing:
            dangling[task.id] = missing
        if task.id in task.waiting_for_task_ids:
            self_loops.append(task.id)

    cycles = find_cycles(index.tasks)

    if dangling:
        logger.warning(f"{len(dangling)} tasks wait for unknown tasks")
    if self_loops:
        logger.warning(f"Tasks waiting for themselves: {self_loops}")
    if cycles:
        logger.warning(f"Detected {len(cycles)} dependency cycles")

    return GraphDiagnostics(
        dangling_references=dangling,
        self_loops=self_loops,
        cycles=cycles,
    )

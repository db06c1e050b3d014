"""Task readiness - are a task's prerequisites satisfied?

The predicate is conservative: a waiting-for ID that matches no task
counts as unmet. The pending listing only returns tasks that can be
inspected, so dangling IDs never show up there.
"""

from collections.abc import Sequence

from taskdeps.dependencies.graph import Found, Missing, TaskIndex
from taskdeps.dependencies.models import Task


def _as_index(tasks: Sequence[Task] | TaskIndex | None) -> TaskIndex:
    if isinstance(tasks, TaskIndex):
        return tasks
    return TaskIndex(tasks)


def are_dependencies_met(task: Task, all_tasks: Sequence[Task] | TaskIndex | None) -> bool:
    """
    Check if every prerequisite of a task is completed.

    Args:
        task: Task to check.
        all_tasks: Collection (or prebuilt index) to resolve IDs against.

    Returns:
        True if the waiting list is empty or every ID resolves to a
        completed task. False if any prerequisite is incomplete or missing.

    Example:
        >>> are_dependencies_met(Task(id="b", waitingForTaskIds=["a"]), [])
        False
    """
    if not task.waiting_for_task_ids:
        return True

    index = _as_index(all_tasks)
    for prereq_id in task.waiting_for_task_ids:
        resolved = index.resolve(prereq_id)
        if isinstance(resolved, Missing):
            return False
        if not resolved.task.completed:
            return False
    return True


def get_pending_dependencies(
    task: Task,
    all_tasks: Sequence[Task] | TaskIndex | None,
) -> list[Task]:
    """
    Get prerequisites that exist and are not yet completed.

    Args:
        task: Task whose waiting list is inspected.
        all_tasks: Collection (or prebuilt index) to resolve IDs against.

    Returns:
        Incomplete prerequisite tasks in waiting-list order.
    """
    if not task.waiting_for_task_ids:
        return []

    index = _as_index(all_tasks)
    pending: list[Task] = []
    for prereq_id in task.waiting_for_task_ids:
        resolved = index.resolve(prereq_id)
        if isinstance(resolved, Found) and not resolved.task.completed:
            pending.append(resolved.task)
    return pending


def get_blocked_tasks(tasks: Sequence[Task] | None) -> list[Task]:
    """Tasks in *tasks* whose dependencies are not met within *tasks*."""
    index = TaskIndex(tasks)
    return [t for t in index.tasks if not are_dependencies_met(t, index)]


def get_ready_tasks(tasks: Sequence[Task] | None) -> list[Task]:
    """Incomplete tasks in *tasks* whose dependencies are all met."""
    index = TaskIndex(tasks)
    return [
        t for t in index.tasks
        if not t.completed and are_dependencies_met(t, index)
    ]

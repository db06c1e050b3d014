"""Task index - id lookup and forward edges for one analysis call.

The dependency graph is never stored. Every public operation builds a
``TaskIndex`` from the snapshot it was given, so nothing derived from
one call leaks into the next.
"""

from collections.abc import Iterable
from dataclasses import dataclass

from taskdeps.dependencies.models import Task


@dataclass(frozen=True)
class Found:
    """A waiting-for ID that matched a task in the collection."""

    task: Task


@dataclass(frozen=True)
class Missing:
    """A waiting-for ID with no matching task (dangling reference)."""

    task_id: str


class TaskIndex:
    """
    Id -> task map plus prerequisite -> dependents adjacency.

    When the same ID appears more than once, the first task wins and the
    later duplicates are ignored everywhere.

    Example:
        >>> index = TaskIndex(tasks)
        >>> index.resolve("t1")
        Found(task=Task(id='t1', ...))
        >>> index.dependents("t1")
        [Task(id='t2', ...)]
    """

    def __init__(self, tasks: Iterable[Task] | None) -> None:
        self._by_id: dict[str, Task] = {}
        self._tasks: list[Task] = []

        for task in tasks or []:
            if task.id in self._by_id:
                continue
            self._by_id[task.id] = task
            self._tasks.append(task)

        # Forward edges, dependents kept in collection order
        self._dependents: dict[str, list[Task]] = {t.id: [] for t in self._tasks}
        for task in self._tasks:
            for prereq_id in dict.fromkeys(task.waiting_for_task_ids):
                if prereq_id in self._dependents:
                    self._dependents[prereq_id].append(task)

    def __len__(self) -> int:
        return len(self._tasks)

    def __contains__(self, task_id: object) -> bool:
        return task_id in self._by_id

    @property
    def tasks(self) -> list[Task]:
        """Tasks in collection order, duplicates removed."""
        return list(self._tasks)

    def get(self, task_id: str) -> Task | None:
        return self._by_id.get(task_id)

    def resolve(self, task_id: str) -> Found | Missing:
        """Look up a waiting-for ID.

        Args:
            task_id: ID taken from some task's waiting list.

        Returns:
            Found with the task, or Missing for a dangling reference.
        """
        task = self._by_id.get(task_id)
        if task is None:
            return Missing(task_id)
        return Found(task)

    def resolved_prerequisites(self, task: Task) -> list[Task]:
        """Prerequisites of *task* that exist, in waiting-list order.

        Dangling IDs are skipped and repeated IDs reported once.
        """
        prereqs: list[Task] = []
        for prereq_id in dict.fromkeys(task.waiting_for_task_ids):
            resolved = self.resolve(prereq_id)
            if isinstance(resolved, Found):
                prereqs.append(resolved.task)
        return prereqs

    def dependents(self, task_id: str) -> list[Task]:
        """Tasks that wait for *task_id*, in collection order."""
        return list(self._dependents.get(task_id, []))

    def is_structural_root(self, task: Task) -> bool:
        """Check if no waiting-for ID of *task* resolves to a task."""
        return not any(
            isinstance(self.resolve(prereq_id), Found)
            for prereq_id in task.waiting_for_task_ids
        )

    def has_edges(self) -> bool:
        return any(self._dependents.values())

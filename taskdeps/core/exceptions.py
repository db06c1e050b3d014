"""Exceptions raised by the dependency engine.

Malformed graphs (cycles, self-references, dangling IDs) never raise.
These errors cover editing operations and loading task snapshots.
"""


class TaskDepsError(Exception):
    """Base exception for taskdeps errors."""

    pass


class TaskNotFoundError(TaskDepsError):
    """A task ID did not match any task in the collection."""

    def __init__(self, task_id: str) -> None:
        self.task_id = task_id
        super().__init__(f"Task not found: {task_id}")


class CircularDependencyError(TaskDepsError):
    """Linking two tasks would create a dependency cycle."""

    def __init__(self, dependent_id: str, prerequisite_id: str) -> None:
        self.dependent_id = dependent_id
        self.prerequisite_id = prerequisite_id
        super().__init__(
            f"Cannot create circular dependency: {prerequisite_id} "
            f"already waits for {dependent_id}"
            if dependent_id != prerequisite_id
            else f"Cannot create circular dependency: {dependent_id} cannot wait for itself"
        )


class TaskLoadError(TaskDepsError):
    """A task snapshot could not be read or validated."""

    pass

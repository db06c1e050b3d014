"""Level assignment - how deep a task sits in its dependency chain.

A task's level is 0 when none of its waiting-for IDs resolve, otherwise
one more than the deepest resolved prerequisite. Cycles and self-loops
are cut: a prerequisite already on the active path contributes 0.
"""

from collections.abc import Sequence
from dataclasses import dataclass

from loguru import logger

from taskdeps.core.config import Settings, get_settings
from taskdeps.dependencies.graph import TaskIndex
from taskdeps.dependencies.models import NodePosition, Task


@dataclass
class _Frame:
    task: Task
    prereqs: list[Task]
    cacheable: bool
    next: int = 0
    best: int = -1
    # Set when a cycle was cut anywhere below this frame
    cut: bool = False


class LevelAssigner:
    """
    Compute task levels over one task collection.

    Results are memoised for the lifetime of the assigner, which should
    be one call. A level is only cached when it does not depend on how
    the traversal reached the task, so the memo never changes a result.
    Traversal uses an explicit stack, so long chains cannot exhaust the
    interpreter's recursion limit.

    Example:
        >>> assigner = LevelAssigner(tasks)
        >>> assigner.level(tasks[2])
        2
    """

    def __init__(self, tasks: Sequence[Task] | TaskIndex | None) -> None:
        self._index = tasks if isinstance(tasks, TaskIndex) else TaskIndex(tasks)
        self._cache: dict[str, int] = {}

    @property
    def index(self) -> TaskIndex:
        return self._index

    def level(self, task: Task) -> int:
        """
        Get the level of a task.

        Args:
            task: Task to evaluate. It does not have to belong to the
                collection; its waiting-for IDs are resolved against it.

        Returns:
            Level, always >= 0.
        """
        root_cacheable = self._index.get(task.id) is task
        if root_cacheable and task.id in self._cache:
            return self._cache[task.id]

        visiting = {task.id}
        frames = [
            _Frame(
                task=task,
                prereqs=self._index.resolved_prerequisites(task),
                cacheable=root_cacheable,
            )
        ]
        result = 0

        while frames:
            frame = frames[-1]

            if frame.next < len(frame.prereqs):
                prereq = frame.prereqs[frame.next]
                frame.next += 1

                if prereq.id in visiting:
                    # Cycle or self-loop: the branch contributes 0
                    frame.best = max(frame.best, 0)
                    frame.cut = True
                elif prereq.id in self._cache:
                    frame.best = max(frame.best, self._cache[prereq.id])
                else:
                    visiting.add(prereq.id)
                    frames.append(
                        _Frame(
                            task=prereq,
                            prereqs=self._index.resolved_prerequisites(prereq),
                            cacheable=True,
                        )
                    )
                continue

            frames.pop()
            visiting.discard(frame.task.id)
            value = 0 if not frame.prereqs else frame.best + 1

            if frame.cacheable and not frame.cut:
                self._cache[frame.task.id] = value

            if frames:
                parent = frames[-1]
                parent.best = max(parent.best, value)
                parent.cut = parent.cut or frame.cut
            else:
                result = value

        return result

    def levels(self) -> dict[str, int]:
        """Level of every task in the collection, keyed by task ID."""
        return {task.id: self.level(task) for task in self._index.tasks}


def calculate_task_level(task: Task, all_tasks: Sequence[Task] | None) -> int:
    """
    Calculate the level of a task in the dependency hierarchy.

    Args:
        task: Task to evaluate.
        all_tasks: Collection used to resolve waiting-for IDs.

    Returns:
        0 for tasks without resolvable prerequisites, otherwise one more
        than the deepest prerequisite.

    Example:
        >>> t1 = Task(id="t1")
        >>> t2 = Task(id="t2", waitingForTaskIds=["t1"])
        >>> calculate_task_level(t2, [t1, t2])
        1
    """
    return LevelAssigner(all_tasks).level(task)


def calculate_levels(tasks: Sequence[Task] | None) -> dict[str, int]:
    """Calculate the level of every task in one memoised pass."""
    levels = LevelAssigner(tasks).levels()
    logger.debug(f"Assigned levels to {len(levels)} tasks")
    return levels


def calculate_node_positions(
    tasks: Sequence[Task] | None,
    settings: Settings | None = None,
) -> dict[str, NodePosition]:
    """
    Lay tasks out in rows, one row per level.

    Levels are computed among *tasks* only. Rows are laid out top to
    bottom by ascending level, tasks left to right in collection order.
    Each row is centred against the widest row seen so far.

    Args:
        tasks: Tasks to place.
        settings: Layout settings (defaults to the global settings).

    Returns:
        Task ID -> top-left position.
    """
    settings = settings or get_settings()
    index = TaskIndex(tasks)
    levels = LevelAssigner(index).levels()

    level_groups: dict[int, list[Task]] = {}
    for task in index.tasks:
        level_groups.setdefault(levels[task.id], []).append(task)

    column = settings.graph_node_width + settings.graph_horizontal_gap
    row = settings.graph_node_height + settings.graph_vertical_gap
    positions: dict[str, NodePosition] = {}
    max_width = 0

    for level in sorted(level_groups):
        tasks_in_level = level_groups[level]
        level_width = len(tasks_in_level) * column
        max_width = max(max_width, level_width)

        for i, task in enumerate(tasks_in_level):
            positions[task.id] = NodePosition(
                x=i * column + (max_width - level_width) / 2,
                y=level * row + settings.graph_top_offset,
            )

    return positions

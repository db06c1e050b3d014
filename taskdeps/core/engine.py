"""Dependency engine - the entry point used by the dependencies view.

The engine holds the current task snapshot and the selected view.
Every query recomputes its result from the snapshot; nothing derived
is kept between calls.
"""

import sys
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from loguru import logger

from taskdeps.core.config import Settings, get_settings
from taskdeps.core.exceptions import TaskNotFoundError
from taskdeps.dependencies.chains import (
    build_dependency_chains,
    calculate_critical_path,
    summarize_chain,
)
from taskdeps.dependencies.cycles import add_dependency, diagnose_graph
from taskdeps.dependencies.graph import TaskIndex
from taskdeps.dependencies.levels import calculate_levels
from taskdeps.dependencies.models import (
    DependencyStats,
    DependencyView,
    GraphDiagnostics,
    Task,
)
from taskdeps.dependencies.readiness import get_pending_dependencies
from taskdeps.dependencies.stats import (
    build_graph_view,
    get_dependencies_tasks,
    get_dependency_stats,
)


class DependencyEngine:
    """
    Dependency analysis over one task snapshot.

    Example:
        >>> engine = DependencyEngine(tasks)
        >>> engine.get_dependency_stats().blocked
        2
        >>> engine.set_current_view("chains")
        >>> engine.render_view()["view"]
        'chains'
    """

    def __init__(
        self,
        tasks: Sequence[Task] | None = None,
        settings: Settings | None = None,
        configure_logging: bool = True,
    ) -> None:
        """Initialize the engine.

        Args:
            tasks: Task snapshot. Defaults to an empty collection.
            settings: Optional settings override. Uses default if not provided.
            configure_logging: Install the loguru sinks from settings.
        """
        self.settings = settings or get_settings()
        self._tasks: list[Task] = list(tasks or [])
        self._current_view = DependencyView(self.settings.default_view)

        if configure_logging:
            self._configure_logging()

    def _configure_logging(self) -> None:
        """Configure loguru based on settings."""
        logger.remove()  # Remove default handler

        log_format = (
            "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
            "<level>{level: <8}</level> | "
            "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
            "<level>{message}</level>"
        )

        logger.add(
            sys.stderr,
            level="DEBUG" if self.settings.debug else self.settings.log_level,
            format=log_format,
            colorize=True,
        )

        if self.settings.log_file:
            Path(self.settings.log_file).parent.mkdir(parents=True, exist_ok=True)
            logger.add(
                self.settings.log_file,
                rotation="1 day",
                retention="7 days",
                level=self.settings.log_level,
                format=log_format,
            )

    # =========================================================================
    # SNAPSHOT
    # =========================================================================

    @property
    def tasks(self) -> list[Task]:
        return list(self._tasks)

    def load(self, tasks: Sequence[Task] | None) -> None:
        """Replace the task snapshot."""
        self._tasks = list(tasks or [])
        logger.debug(f"Engine snapshot replaced: {len(self._tasks)} tasks")

    def get_task(self, task_id: str) -> Task | None:
        return TaskIndex(self._tasks).get(task_id)

    def link(self, dependent_id: str, prerequisite_id: str) -> Task:
        """
        Make one task wait for another and update the snapshot.

        Args:
            dependent_id: Task that gains the prerequisite.
            prerequisite_id: Task to wait for.

        Returns:
            The updated dependent task.

        Raises:
            TaskNotFoundError: If either task is unknown.
            CircularDependencyError: If the link would close a cycle.
        """
        dependent = self.get_task(dependent_id)
        if dependent is None:
            raise TaskNotFoundError(dependent_id)

        updated = add_dependency(dependent, prerequisite_id, self._tasks)
        self._tasks = [updated if t is dependent else t for t in self._tasks]
        logger.info(f"Linked {dependent_id} -> waits for {prerequisite_id}")
        return updated

    # =========================================================================
    # VIEW STATE
    # =========================================================================

    def get_current_view(self) -> DependencyView:
        """Get the current visualization mode."""
        return self._current_view

    def set_current_view(self, view: DependencyView | str) -> None:
        """
        Set the visualization mode.

        Raises:
            ValueError: If *view* is not graph, chains or critical.
        """
        self._current_view = DependencyView(view)
        logger.debug(f"Dependencies view set to {self._current_view.value}")

    # =========================================================================
    # QUERIES
    # =========================================================================

    def get_dependencies_tasks(self, project_id: str | None = None) -> list[Task]:
        """Incomplete tasks, optionally restricted to one project."""
        return get_dependencies_tasks(self._tasks, project_id)

    def get_dependency_stats(self, project_id: str | None = None) -> DependencyStats:
        """
        Dashboard counters for the working set.

        Prerequisites are resolved in the working set unless
        ``stats_against_full_collection`` is enabled.
        """
        return get_dependency_stats(
            self._tasks,
            project_id,
            against_full_collection=self.settings.stats_against_full_collection,
        )

    def get_levels(self, project_id: str | None = None) -> dict[str, int]:
        return calculate_levels(self.get_dependencies_tasks(project_id))

    def get_chains(self, project_id: str | None = None) -> list[list[Task]]:
        return build_dependency_chains(self.get_dependencies_tasks(project_id))

    def get_critical_path(self, project_id: str | None = None) -> list[Task]:
        return calculate_critical_path(self.get_dependencies_tasks(project_id))

    def get_pending_dependencies(self, task_id: str) -> list[Task]:
        """Incomplete prerequisites of *task_id*, empty for unknown tasks."""
        task = self.get_task(task_id)
        if task is None:
            return []
        return get_pending_dependencies(task, self._tasks)

    def diagnose(self) -> GraphDiagnostics:
        return diagnose_graph(self._tasks)

    def render_view(self, project_id: str | None = None) -> dict[str, Any]:
        """
        Build the payload of the current view.

        Args:
            project_id: Optional project filter.

        Returns:
            Dictionary with ``view``, ``stats`` and the view's data:
            ``graph`` nodes/edges, ``chains`` summaries, or the
            ``critical`` path summary (``None`` when there is none).
        """
        tasks = self.get_dependencies_tasks(project_id)
        payload: dict[str, Any] = {
            "view": self._current_view.value,
            "stats": self.get_dependency_stats(project_id).model_dump(by_alias=True),
        }

        if self._current_view == DependencyView.GRAPH:
            graph = build_graph_view(tasks, self._tasks, self.settings)
            payload["graph"] = graph.model_dump()
        elif self._current_view == DependencyView.CHAINS:
            payload["chains"] = [
                summarize_chain(chain, self._tasks).to_dict()
                for chain in build_dependency_chains(tasks)
            ]
        else:
            path = calculate_critical_path(tasks)
            payload["critical"] = summarize_chain(path, self._tasks).to_dict() if path else None

        return payload

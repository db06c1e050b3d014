"""Readiness aggregation and the graph view payload."""

from collections.abc import Sequence

from loguru import logger

from taskdeps.core.config import Settings, get_settings
from taskdeps.dependencies.graph import TaskIndex
from taskdeps.dependencies.levels import LevelAssigner, calculate_node_positions
from taskdeps.dependencies.models import (
    DependencyStats,
    GraphEdge,
    GraphNode,
    GraphView,
    Task,
)
from taskdeps.dependencies.readiness import are_dependencies_met


def get_dependencies_tasks(
    tasks: Sequence[Task] | None,
    project_id: str | None = None,
) -> list[Task]:
    """
    Select the working set for the dependencies view.

    Args:
        tasks: Full task collection.
        project_id: Optional project filter. Empty means no filter.

    Returns:
        Incomplete tasks, restricted to *project_id* when given.
    """
    selected = [t for t in tasks or [] if not t.completed]
    if project_id:
        selected = [t for t in selected if t.project_id == project_id]
    return selected


def update_deps_stats(
    tasks: Sequence[Task] | None,
    all_tasks: Sequence[Task] | None = None,
) -> DependencyStats:
    """
    Count total, dependent, blocked and ready tasks.

    Readiness is evaluated against *tasks* itself unless *all_tasks* is
    given. With the default, a prerequisite outside the subset (filtered
    out by project, say) cannot be found and its dependent counts as
    blocked.

    Args:
        tasks: Subset to count, usually incomplete tasks only.
        all_tasks: Optional wider collection to resolve prerequisites in.

    Returns:
        DependencyStats where ``ready == total - blocked``.

    Example:
        >>> update_deps_stats([t1, t2_waits_t1, t3_waits_t1])
        DependencyStats(total=3, with_dependencies=2, blocked=2, ready=1)
    """
    subset = list(tasks or [])
    index = TaskIndex(all_tasks if all_tasks is not None else subset)

    total = len(subset)
    with_deps = sum(1 for t in subset if t.has_dependencies)
    blocked = sum(1 for t in subset if not are_dependencies_met(t, index))

    return DependencyStats(
        total=total,
        with_dependencies=with_deps,
        blocked=blocked,
        ready=total - blocked,
    )


def get_dependency_stats(
    all_tasks: Sequence[Task] | None,
    project_id: str | None = None,
    *,
    against_full_collection: bool | None = None,
) -> DependencyStats:
    """
    Filter the collection and aggregate readiness.

    Args:
        all_tasks: Full task collection.
        project_id: Optional project filter.
        against_full_collection: Resolve prerequisites in the full
            collection instead of the filtered subset. Defaults to the
            ``stats_against_full_collection`` setting.

    Returns:
        DependencyStats for the filtered tasks.
    """
    if against_full_collection is None:
        against_full_collection = get_settings().stats_against_full_collection

    subset = get_dependencies_tasks(all_tasks, project_id)
    stats = update_deps_stats(subset, all_tasks if against_full_collection else None)
    logger.debug(
        f"Dependency stats for project={project_id or '*'}: "
        f"{stats.total} total, {stats.blocked} blocked, {stats.ready} ready"
    )
    return stats


def build_graph_view(
    tasks: Sequence[Task] | None,
    all_tasks: Sequence[Task] | None = None,
    settings: Settings | None = None,
) -> GraphView:
    """
    Build nodes and edges of the graph view.

    Only tasks that wait for something become nodes. Levels and positions
    are computed among those nodes. An edge is drawn for each prerequisite
    that is itself a node.

    Args:
        tasks: Working set.
        all_tasks: Collection used for the blocked flag (defaults to *tasks*).
        settings: Layout settings.

    Returns:
        GraphView, empty when no task has dependencies.
    """
    settings = settings or get_settings()
    with_deps = [t for t in TaskIndex(tasks).tasks if t.has_dependencies]
    if not with_deps:
        return GraphView()

    node_index = TaskIndex(with_deps)
    readiness_index = TaskIndex(all_tasks if all_tasks is not None else tasks)
    positions = calculate_node_positions(with_deps, settings)
    levels = LevelAssigner(node_index).levels()

    nodes = [
        GraphNode(
            task_id=task.id,
            title=task.title,
            level=levels[task.id],
            position=positions[task.id],
            blocked=not are_dependencies_met(task, readiness_index),
            dependency_count=len(task.waiting_for_task_ids),
        )
        for task in with_deps
    ]

    edges: list[GraphEdge] = []
    for task in with_deps:
        for prereq in node_index.resolved_prerequisites(task):
            edges.append(
                GraphEdge(source=prereq.id, target=task.id, completed=prereq.completed)
            )

    return GraphView(nodes=nodes, edges=edges)

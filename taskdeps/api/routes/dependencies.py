"""
Dependencies API Routes.

Analyse a posted task snapshot: statistics, levels, chains, critical
path, graph layout, readiness and cycle checks.

Handlers are plain functions: the graph walks are CPU bound and FastAPI
runs sync handlers in its threadpool, off the event loop.
"""

from __future__ import annotations

from fastapi import APIRouter
from pydantic import BaseModel, ConfigDict, Field

from taskdeps.core.config import get_settings
from taskdeps.core.exceptions import TaskNotFoundError
from taskdeps.dependencies.chains import build_dependency_chains, calculate_critical_path
from taskdeps.dependencies.cycles import (
    add_dependency,
    diagnose_graph,
    would_create_circular_dependency,
)
from taskdeps.dependencies.graph import TaskIndex
from taskdeps.dependencies.levels import calculate_levels
from taskdeps.dependencies.models import (
    DependencyStats,
    GraphDiagnostics,
    GraphView,
    Task,
)
from taskdeps.dependencies.readiness import are_dependencies_met, get_pending_dependencies
from taskdeps.dependencies.stats import (
    build_graph_view,
    get_dependencies_tasks,
    get_dependency_stats,
    update_deps_stats,
)

router = APIRouter()


# ============================================================================
# Request / Response Models
# ============================================================================


class TaskSetRequest(BaseModel):
    """A task snapshot plus the view filter."""

    model_config = ConfigDict(populate_by_name=True)

    tasks: list[Task] | None = Field(default=None, description="Task snapshot")
    project_id: str | None = Field(default=None, alias="projectId")
    include_completed: bool = Field(
        default=False,
        alias="includeCompleted",
        description="Analyse completed tasks too instead of the incomplete working set",
    )
    against_full_collection: bool | None = Field(
        default=None,
        alias="againstFullCollection",
        description=(
            "Resolve prerequisites in the whole snapshot when counting blocked "
            "tasks. Unset uses the server setting."
        ),
    )

    def working_set(self) -> list[Task]:
        """Tasks the view analyses."""
        tasks = self.tasks or []
        if self.include_completed:
            if self.project_id:
                return [t for t in tasks if t.project_id == self.project_id]
            return list(tasks)
        return get_dependencies_tasks(tasks, self.project_id)


class CycleCheckRequest(BaseModel):
    """Would linking two tasks close a cycle?"""

    model_config = ConfigDict(populate_by_name=True)

    tasks: list[Task] | None = None
    dependent_id: str = Field(..., alias="dependentId")
    prerequisite_id: str = Field(..., alias="prerequisiteId")


class LevelsResponse(BaseModel):
    levels: dict[str, int]


class ChainsResponse(BaseModel):
    chains: list[list[Task]]


class CriticalPathResponse(BaseModel):
    path: list[Task]
    length: int


class TaskReadiness(BaseModel):
    """Readiness of a single task."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    dependencies_met: bool = Field(alias="dependenciesMet")
    pending: list[str]


class CycleCheckResponse(BaseModel):
    circular: bool


# ============================================================================
# Routes
# ============================================================================


@router.post("/stats", response_model=DependencyStats)
def dependency_stats(request: TaskSetRequest) -> DependencyStats:
    """
    Count total, dependent, blocked and ready tasks in the working set.
    """
    if not request.include_completed:
        return get_dependency_stats(
            request.tasks,
            request.project_id,
            against_full_collection=request.against_full_collection,
        )

    against_full = request.against_full_collection
    if against_full is None:
        against_full = get_settings().stats_against_full_collection
    return update_deps_stats(
        request.working_set(),
        (request.tasks or []) if against_full else None,
    )


@router.post("/levels", response_model=LevelsResponse)
def task_levels(request: TaskSetRequest) -> LevelsResponse:
    """
    Level of every task in the working set.
    """
    return LevelsResponse(levels=calculate_levels(request.working_set()))


@router.post("/chains", response_model=ChainsResponse)
def dependency_chains(request: TaskSetRequest) -> ChainsResponse:
    """
    Dependency chains, longest first.
    """
    return ChainsResponse(chains=build_dependency_chains(request.working_set()))


@router.post("/critical-path", response_model=CriticalPathResponse)
def critical_path(request: TaskSetRequest) -> CriticalPathResponse:
    """
    The longest dependency chain, empty when there is none.
    """
    path = calculate_critical_path(request.working_set())
    return CriticalPathResponse(path=path, length=len(path))


@router.post("/graph", response_model=GraphView)
def dependency_graph(request: TaskSetRequest) -> GraphView:
    """
    Nodes and edges of the layered graph view.
    """
    return build_graph_view(request.working_set(), request.tasks or [])


@router.post("/readiness", response_model=list[TaskReadiness])
def task_readiness(request: TaskSetRequest) -> list[TaskReadiness]:
    """
    Whether each task in the working set can start, and what it waits for.

    Prerequisites are resolved in the whole posted snapshot.
    """
    index = TaskIndex(request.tasks)
    return [
        TaskReadiness(
            id=task.id,
            dependencies_met=are_dependencies_met(task, index),
            pending=[p.id for p in get_pending_dependencies(task, index)],
        )
        for task in request.working_set()
    ]


@router.post("/cycle-check", response_model=CycleCheckResponse)
def cycle_check(request: CycleCheckRequest) -> CycleCheckResponse:
    """
    Check if "dependent waits for prerequisite" would create a cycle.
    """
    circular = would_create_circular_dependency(
        request.dependent_id,
        request.prerequisite_id,
        request.tasks,
    )
    return CycleCheckResponse(circular=circular)


@router.post("/diagnostics", response_model=GraphDiagnostics)
def diagnostics(request: TaskSetRequest) -> GraphDiagnostics:
    """
    Dangling references, self-references and cycles in the snapshot.
    """
    return diagnose_graph(request.tasks)


@router.post("/link", response_model=Task)
def link_tasks(request: CycleCheckRequest) -> Task:
    """
    Return the dependent task with the prerequisite added to its waiting list.

    The posted snapshot is not stored anywhere.

    Raises:
        TaskNotFoundError: Unknown dependent or prerequisite (404).
        CircularDependencyError: The link would close a cycle (409).
    """
    dependent = TaskIndex(request.tasks).get(request.dependent_id)
    if dependent is None:
        raise TaskNotFoundError(request.dependent_id)
    return add_dependency(dependent, request.prerequisite_id, request.tasks)

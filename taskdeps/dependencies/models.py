"""Pydantic models for dependency analysis.

This module defines the task shape consumed by the dependency engine
and the derived values it produces: statistics, graph layout, chain
summaries and diagnostics.
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


# =============================================================================
# ENUMS
# =============================================================================


class DependencyView(str, Enum):
    """Visualization mode of the dependencies view."""

    GRAPH = "graph"
    CHAINS = "chains"
    CRITICAL = "critical"


class ChainStepStatus(str, Enum):
    """Display state of a single task inside a chain."""

    COMPLETED = "completed"
    CURRENT = "current"
    READY = "ready"
    BLOCKED = "blocked"


# =============================================================================
# TASK
# =============================================================================


class Task(BaseModel):
    """Minimal task record needed for dependency analysis.

    Tasks are read-only inputs. Both the stored camelCase keys and the
    Python field names are accepted, and every other field of the
    application's task record is ignored.

    Example:
        >>> task = Task(id="t2", title="Write report", waitingForTaskIds=["t1"])
        >>> task.waiting_for_task_ids
        ['t1']
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    id: str = Field(
        ...,
        description="Unique task identifier",
    )
    title: str = Field(
        default="",
        description="Task title",
    )
    completed: bool = Field(
        default=False,
        description="Whether the task is done",
    )
    waiting_for_task_ids: list[str] = Field(
        default_factory=list,
        alias="waitingForTaskIds",
        description="IDs of tasks this task waits for",
    )
    project_id: str | None = Field(
        default=None,
        alias="projectId",
        description="Owning project, if any",
    )

    @field_validator("waiting_for_task_ids", mode="before")
    @classmethod
    def coerce_missing_waiting_list(cls, v: Any) -> Any:
        """Treat a null waiting list as empty."""
        if v is None:
            return []
        return v

    @property
    def has_dependencies(self) -> bool:
        """Check if the task references any prerequisite."""
        return len(self.waiting_for_task_ids) > 0


# =============================================================================
# STATISTICS
# =============================================================================


class DependencyStats(BaseModel):
    """Dashboard counters for a set of tasks."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    total: int = Field(default=0, ge=0)
    with_dependencies: int = Field(default=0, ge=0, alias="withDependencies")
    blocked: int = Field(default=0, ge=0)
    ready: int = Field(default=0, ge=0)


# =============================================================================
# GRAPH VIEW
# =============================================================================


class NodePosition(BaseModel):
    """Top-left corner of a node in the layered graph layout."""

    model_config = ConfigDict(frozen=True)

    x: float
    y: float


class GraphNode(BaseModel):
    """A task rendered as a node of the dependency graph."""

    model_config = ConfigDict(frozen=True)

    task_id: str
    title: str
    level: int = Field(ge=0)
    position: NodePosition
    blocked: bool
    dependency_count: int = Field(ge=0)


class GraphEdge(BaseModel):
    """Prerequisite -> dependent connection between two graph nodes."""

    model_config = ConfigDict(frozen=True)

    source: str = Field(description="Prerequisite task ID")
    target: str = Field(description="Dependent task ID")
    completed: bool = Field(description="Whether the prerequisite is done")


class GraphView(BaseModel):
    """Nodes and edges of the graph view."""

    nodes: list[GraphNode] = Field(default_factory=list)
    edges: list[GraphEdge] = Field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.nodes


# =============================================================================
# CHAINS
# =============================================================================


class ChainStep(BaseModel):
    """One task of a chain with its display state."""

    model_config = ConfigDict(frozen=True)

    position: int = Field(ge=1, description="1-based position in the chain")
    task: Task
    status: ChainStepStatus
    dependencies_met: bool = Field(description="Whether the step could be started now")


class ChainSummary(BaseModel):
    """A dependency chain prepared for display.

    Example:
        >>> summary = summarize_chain(chain, tasks)
        >>> summary.title
        'Draft outline -> Publish'
    """

    steps: list[ChainStep] = Field(default_factory=list)

    @property
    def length(self) -> int:
        return len(self.steps)

    @property
    def title(self) -> str:
        if not self.steps:
            return ""
        return f"{self.steps[0].task.title} -> {self.steps[-1].task.title}"

    @property
    def completed_count(self) -> int:
        return sum(1 for s in self.steps if s.status == ChainStepStatus.COMPLETED)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "title": self.title,
            "length": self.length,
            "completed": self.completed_count,
            "steps": [
                {
                    "position": s.position,
                    "id": s.task.id,
                    "title": s.task.title,
                    "status": s.status.value,
                    "dependenciesMet": s.dependencies_met,
                }
                for s in self.steps
            ],
        }


# =============================================================================
# DIAGNOSTICS
# =============================================================================


class GraphDiagnostics(BaseModel):
    """Structural problems found in a task collection.

    None of these stop the engine from working; they explain why a task
    shows up as blocked or why a chain ends early.
    """

    dangling_references: dict[str, list[str]] = Field(
        default_factory=dict,
        description="Task ID -> waiting-for IDs that match no task",
    )
    self_loops: list[str] = Field(
        default_factory=list,
        description="Tasks that wait for themselves",
    )
    cycles: list[list[str]] = Field(
        default_factory=list,
        description="Cycles among two or more tasks, as ID paths",
    )

    @property
    def is_healthy(self) -> bool:
        return not (self.dangling_references or self.self_loops or self.cycles)

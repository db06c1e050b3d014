"""Dependency analysis - readiness, levels, chains and statistics.

This module provides the dependency graph engine:
- Readiness (is a task's waiting list satisfied?)
- Levels (how deep a task sits in its chain)
- Chains and the critical path
- Statistics and the graph view
- Cycle checks for editing
"""

from taskdeps.dependencies.chains import (
    build_dependency_chains,
    calculate_critical_path,
    summarize_chain,
)
from taskdeps.dependencies.cycles import (
    add_dependency,
    diagnose_graph,
    find_cycles,
    remove_dependency,
    would_create_circular_dependency,
)
from taskdeps.dependencies.graph import Found, Missing, TaskIndex
from taskdeps.dependencies.levels import (
    LevelAssigner,
    calculate_levels,
    calculate_node_positions,
    calculate_task_level,
)
from taskdeps.dependencies.loader import load_tasks, parse_tasks
from taskdeps.dependencies.models import (
    ChainStep,
    ChainStepStatus,
    ChainSummary,
    DependencyStats,
    DependencyView,
    GraphDiagnostics,
    GraphEdge,
    GraphNode,
    GraphView,
    NodePosition,
    Task,
)
from taskdeps.dependencies.readiness import (
    are_dependencies_met,
    get_blocked_tasks,
    get_pending_dependencies,
    get_ready_tasks,
)
from taskdeps.dependencies.stats import (
    build_graph_view,
    get_dependencies_tasks,
    get_dependency_stats,
    update_deps_stats,
)

__all__ = [
    # Models
    "ChainStep",
    "ChainStepStatus",
    "ChainSummary",
    "DependencyStats",
    "DependencyView",
    "GraphDiagnostics",
    "GraphEdge",
    "GraphNode",
    "GraphView",
    "NodePosition",
    "Task",
    # Index
    "Found",
    "Missing",
    "TaskIndex",
    # Readiness
    "are_dependencies_met",
    "get_blocked_tasks",
    "get_pending_dependencies",
    "get_ready_tasks",
    # Levels
    "LevelAssigner",
    "calculate_levels",
    "calculate_node_positions",
    "calculate_task_level",
    # Chains
    "build_dependency_chains",
    "calculate_critical_path",
    "summarize_chain",
    # Statistics
    "build_graph_view",
    "get_dependencies_tasks",
    "get_dependency_stats",
    "update_deps_stats",
    # Cycles
    "add_dependency",
    "diagnose_graph",
    "find_cycles",
    "remove_dependency",
    "would_create_circular_dependency",
    # Loading
    "load_tasks",
    "parse_tasks",
]

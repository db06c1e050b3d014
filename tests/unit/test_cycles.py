"""Unit tests for cycle checks, dependency editing and diagnostics."""

import pytest

from taskdeps.core.exceptions import CircularDependencyError, TaskNotFoundError
from taskdeps.dependencies.cycles import (
    add_dependency,
    diagnose_graph,
    find_cycles,
    remove_dependency,
    would_create_circular_dependency,
)
from taskdeps.dependencies.models import Task


class TestWouldCreateCircularDependency:
    """Tests for would_create_circular_dependency."""

    def test_self_reference(self) -> None:
        """Test that waiting for oneself is circular."""
        assert would_create_circular_dependency("a", "a", [Task(id="a")])

    def test_transitive_cycle(self, branching_tasks: list) -> None:
        """Test that T1 cannot wait for T3, which waits for T1 indirectly."""
        assert would_create_circular_dependency("T1", "T3", branching_tasks)

    def test_direct_cycle(self, branching_tasks: list) -> None:
        """Test that T1 cannot wait for its own dependent."""
        assert would_create_circular_dependency("T1", "T2", branching_tasks)

    def test_independent_branches(self, branching_tasks: list) -> None:
        """Test that siblings may wait for each other."""
        assert not would_create_circular_dependency("T3", "T4", branching_tasks)
        assert not would_create_circular_dependency("T4", "T2", branching_tasks)

    def test_unknown_ids(self) -> None:
        """Test that unknown IDs never close a cycle."""
        assert not would_create_circular_dependency("x", "y", [])

    def test_existing_cycle_terminates(self) -> None:
        """Test that the search ends on a graph that already has a cycle."""
        a = Task(id="a", waitingForTaskIds=["b"])
        b = Task(id="b", waitingForTaskIds=["a"])
        c = Task(id="c")

        assert not would_create_circular_dependency("a", "c", [a, b, c])


class TestAddDependency:
    """Tests for add_dependency and remove_dependency."""

    def test_adds_prerequisite(self, branching_tasks: list) -> None:
        """Test a new task is returned with the extra prerequisite."""
        t4 = branching_tasks[3]

        updated = add_dependency(t4, "T2", branching_tasks)

        assert updated.waiting_for_task_ids == ["T1", "T2"]
        assert t4.waiting_for_task_ids == ["T1"]

    def test_already_present(self, branching_tasks: list) -> None:
        """Test adding an existing prerequisite keeps the list."""
        t2 = branching_tasks[1]

        updated = add_dependency(t2, "T1", branching_tasks)

        assert updated.waiting_for_task_ids == ["T1"]

    def test_unknown_prerequisite(self, branching_tasks: list) -> None:
        """Test that an unknown prerequisite is rejected."""
        with pytest.raises(TaskNotFoundError) as exc_info:
            add_dependency(branching_tasks[1], "nope", branching_tasks)

        assert exc_info.value.task_id == "nope"

    def test_circular(self, branching_tasks: list) -> None:
        """Test that a cycle-closing link is rejected."""
        with pytest.raises(CircularDependencyError) as exc_info:
            add_dependency(branching_tasks[0], "T3", branching_tasks)

        assert "Cannot create circular dependency" in str(exc_info.value)
        assert exc_info.value.dependent_id == "T1"
        assert exc_info.value.prerequisite_id == "T3"

    def test_self_link(self, branching_tasks: list) -> None:
        """Test that a task cannot wait for itself."""
        with pytest.raises(CircularDependencyError):
            add_dependency(branching_tasks[1], "T2", branching_tasks)

    def test_remove(self) -> None:
        """Test removing every occurrence of a prerequisite."""
        task = Task(id="t", waitingForTaskIds=["a", "b", "a"])

        updated = remove_dependency(task, "a")

        assert updated.waiting_for_task_ids == ["b"]
        assert task.waiting_for_task_ids == ["a", "b", "a"]


class TestFindCycles:
    """Tests for find_cycles."""

    def test_acyclic(self, branching_tasks: list) -> None:
        """Test that a DAG has no cycles."""
        assert find_cycles(branching_tasks) == []

    def test_two_task_cycle(self) -> None:
        """Test a mutual wait."""
        a = Task(id="a", waitingForTaskIds=["b"])
        b = Task(id="b", waitingForTaskIds=["a"])

        assert find_cycles([a, b]) == [["a", "b", "a"]]

    def test_three_task_cycle(self) -> None:
        """Test a longer cycle is reported as an ID path."""
        a = Task(id="a", waitingForTaskIds=["c"])
        b = Task(id="b", waitingForTaskIds=["a"])
        c = Task(id="c", waitingForTaskIds=["b"])

        assert find_cycles([a, b, c]) == [["a", "c", "b", "a"]]

    def test_self_loop_not_reported(self) -> None:
        """Test that self-loops are left to diagnostics."""
        assert find_cycles([Task(id="a", waitingForTaskIds=["a"])]) == []


class TestDiagnoseGraph:
    """Tests for diagnose_graph."""

    def test_healthy(self, branching_tasks: list) -> None:
        """Test a clean collection."""
        report = diagnose_graph(branching_tasks)

        assert report.is_healthy

    def test_problems(self) -> None:
        """Test dangling IDs, self-loops and cycles are all reported."""
        tasks = [
            Task(id="a", waitingForTaskIds=["ghost", "ghost"]),
            Task(id="b", waitingForTaskIds=["b"]),
            Task(id="c", waitingForTaskIds=["d"]),
            Task(id="d", waitingForTaskIds=["c"]),
        ]

        report = diagnose_graph(tasks)

        assert not report.is_healthy
        assert report.dangling_references == {"a": ["ghost"]}
        assert report.self_loops == ["b"]
        assert report.cycles == [["c", "d", "c"]]

    def test_empty(self) -> None:
        """Test that an empty collection is healthy."""
        assert diagnose_graph([]).is_healthy

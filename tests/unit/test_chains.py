"""Unit tests for dependency chains and the critical path."""

from taskdeps.dependencies.chains import (
    build_dependency_chains,
    calculate_critical_path,
    summarize_chain,
)
from taskdeps.dependencies.models import ChainStepStatus, Task


def ids(chain: list) -> list[str]:
    return [t.id for t in chain]


class TestBuildDependencyChains:
    """Tests for build_dependency_chains."""

    def test_empty_input(self) -> None:
        """Test that no tasks means no chains."""
        assert build_dependency_chains([]) == []
        assert build_dependency_chains(None) == []

    def test_no_edges(self) -> None:
        """Test that unrelated tasks produce no chains."""
        tasks = [Task(id="a"), Task(id="b"), Task(id="c", waitingForTaskIds=["ghost"])]

        assert build_dependency_chains(tasks) == []

    def test_branching_scenario(self, branching_tasks: list) -> None:
        """Test maximal paths from a shared root, longest first."""
        chains = build_dependency_chains(branching_tasks)

        assert [ids(c) for c in chains] == [["T1", "T2", "T3"], ["T1", "T4"]]

    def test_sorted_by_descending_length(self) -> None:
        """Test ordering across disconnected components."""
        tasks = [
            Task(id="a"),
            Task(id="b", waitingForTaskIds=["a"]),
            Task(id="x"),
            Task(id="y", waitingForTaskIds=["x"]),
            Task(id="z", waitingForTaskIds=["y"]),
            Task(id="w", waitingForTaskIds=["z"]),
        ]

        chains = build_dependency_chains(tasks)

        assert [ids(c) for c in chains] == [["x", "y", "z", "w"], ["a", "b"]]
        for i in range(len(chains) - 1):
            assert len(chains[i]) >= len(chains[i + 1])

    def test_equal_lengths_keep_discovery_order(self) -> None:
        """Test that ties follow root order, then collection order."""
        tasks = [
            Task(id="r2"),
            Task(id="r1"),
            Task(id="d1", waitingForTaskIds=["r1"]),
            Task(id="d2", waitingForTaskIds=["r2"]),
            Task(id="d3", waitingForTaskIds=["r2"]),
        ]

        chains = build_dependency_chains(tasks)

        assert [ids(c) for c in chains] == [["r2", "d2"], ["r2", "d3"], ["r1", "d1"]]

    def test_root_with_dangling_reference(self) -> None:
        """Test that a task whose only prerequisite is missing is a root."""
        tasks = [
            Task(id="a", waitingForTaskIds=["ghost"]),
            Task(id="b", waitingForTaskIds=["a"]),
        ]

        assert [ids(c) for c in build_dependency_chains(tasks)] == [["a", "b"]]

    def test_diamond(self) -> None:
        """Test that both routes through a diamond are reported."""
        tasks = [
            Task(id="a"),
            Task(id="b", waitingForTaskIds=["a"]),
            Task(id="c", waitingForTaskIds=["a"]),
            Task(id="d", waitingForTaskIds=["b", "c"]),
        ]

        chains = build_dependency_chains(tasks)

        assert [ids(c) for c in chains] == [["a", "b", "d"], ["a", "c", "d"]]

    def test_pure_cycle_has_no_root(self) -> None:
        """Test that a cycle without an entry point yields no chains."""
        a = Task(id="a", waitingForTaskIds=["b"])
        b = Task(id="b", waitingForTaskIds=["a"])

        assert build_dependency_chains([a, b]) == []

    def test_self_reference(self) -> None:
        """Test that a self-referencing task does not loop."""
        task = Task(id="a", waitingForTaskIds=["a"])

        assert build_dependency_chains([task]) == []

    def test_cycle_below_a_root(self) -> None:
        """Test that a cycle reached from a root closes the chain."""
        tasks = [
            Task(id="r"),
            Task(id="a", waitingForTaskIds=["r", "b"]),
            Task(id="b", waitingForTaskIds=["a"]),
        ]

        chains = build_dependency_chains(tasks)

        assert [ids(c) for c in chains] == [["r", "a", "b"]]

    def test_inputs_not_mutated(self, branching_tasks: list) -> None:
        """Test that the task list is left as it was."""
        before = [t.model_copy() for t in branching_tasks]

        build_dependency_chains(branching_tasks)

        assert branching_tasks == before


class TestCalculateCriticalPath:
    """Tests for calculate_critical_path."""

    def test_longest_branch(self, branching_tasks: list) -> None:
        """Test that the length-3 chain beats the length-2 branch."""
        path = calculate_critical_path(branching_tasks)

        assert ids(path) == ["T1", "T2", "T3"]

    def test_matches_first_chain(self) -> None:
        """Test the critical path is the first sorted chain."""
        tasks = [
            Task(id="a"),
            Task(id="b", waitingForTaskIds=["a"]),
            Task(id="c"),
            Task(id="d", waitingForTaskIds=["c"]),
        ]

        assert calculate_critical_path(tasks) == build_dependency_chains(tasks)[0]

    def test_no_dependencies(self) -> None:
        """Test that there is no critical path without edges."""
        assert calculate_critical_path([Task(id="a"), Task(id="b")]) == []
        assert calculate_critical_path([]) == []

    def test_considers_every_component(self) -> None:
        """Test that a later component can hold the longest chain."""
        tasks = [
            Task(id="a"),
            Task(id="b", waitingForTaskIds=["a"]),
            Task(id="x"),
            Task(id="y", waitingForTaskIds=["x"]),
            Task(id="z", waitingForTaskIds=["y"]),
        ]

        assert ids(calculate_critical_path(tasks)) == ["x", "y", "z"]


class TestSummarizeChain:
    """Tests for summarize_chain."""

    def test_step_statuses(self, branching_tasks: list) -> None:
        """Test completed, current and blocked steps."""
        chain = calculate_critical_path(branching_tasks)

        summary = summarize_chain(chain, branching_tasks)

        assert [s.status for s in summary.steps] == [
            ChainStepStatus.COMPLETED,
            ChainStepStatus.CURRENT,
            ChainStepStatus.BLOCKED,
        ]
        assert [s.position for s in summary.steps] == [1, 2, 3]
        assert summary.steps[1].dependencies_met
        assert not summary.steps[2].dependencies_met

    def test_ready_step_after_current(self) -> None:
        """Test that a later step with met dependencies is ready."""
        a = Task(id="a", title="A")
        b = Task(id="b", title="B", waitingForTaskIds=["a"])

        # Evaluated against a collection where "a" is done elsewhere
        done_a = Task(id="a", title="A", completed=True)
        summary = summarize_chain([a, b], [done_a, b])

        assert summary.steps[0].status == ChainStepStatus.CURRENT
        assert summary.steps[1].status == ChainStepStatus.READY

    def test_summary_fields(self, branching_tasks: list) -> None:
        """Test title, length and serialization."""
        chain = calculate_critical_path(branching_tasks)

        summary = summarize_chain(chain, branching_tasks)
        data = summary.to_dict()

        assert summary.title == "Gather receipts -> Submit tax return"
        assert summary.length == 3
        assert summary.completed_count == 1
        assert data["steps"][0]["status"] == "completed"
        assert data["steps"][2]["id"] == "T3"

    def test_empty_chain(self) -> None:
        """Test summarizing nothing."""
        summary = summarize_chain([], [])

        assert summary.length == 0
        assert summary.title == ""

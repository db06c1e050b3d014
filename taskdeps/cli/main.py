"""Main CLI entry point using Typer."""

import json
from pathlib import Path

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from taskdeps import __version__
from taskdeps.core.engine import DependencyEngine
from taskdeps.core.exceptions import TaskDepsError
from taskdeps.dependencies.chains import summarize_chain
from taskdeps.dependencies.loader import load_tasks
from taskdeps.dependencies.models import ChainStepStatus

app = typer.Typer(
    name="taskdeps",
    help="taskdeps - dependency analysis for GTD task lists",
    add_completion=True,
    rich_markup_mode="rich",
)

console = Console()

STATUS_COLORS = {
    ChainStepStatus.COMPLETED: "green",
    ChainStepStatus.CURRENT: "bold cyan",
    ChainStepStatus.READY: "blue",
    ChainStepStatus.BLOCKED: "red",
}


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"[bold blue]taskdeps[/bold blue] version {__version__}")
        raise typer.Exit()


def load_engine(path: Path) -> DependencyEngine:
    """Load a task snapshot into an engine, exiting on load errors."""
    try:
        return DependencyEngine(load_tasks(path))
    except TaskDepsError as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(code=1) from e


@app.callback()
def main(
    version: bool | None = typer.Option(
        None,
        "--version",
        "-v",
        help="Show version and exit.",
        callback=version_callback,
        is_eager=True,
    ),
) -> None:
    """
    taskdeps - see what is ready, what is blocked and what blocks the most.

    Every command reads a JSON task list or an application backup file.
    """
    pass


@app.command()
def stats(
    tasks_file: Path = typer.Argument(..., help="Task list or backup JSON file"),
    project: str | None = typer.Option(
        None,
        "--project",
        "-p",
        help="Only count tasks of this project",
    ),
    as_json: bool = typer.Option(
        False,
        "--json",
        help="Print JSON instead of a table",
    ),
) -> None:
    """
    Show total, dependent, blocked and ready counts for incomplete tasks.

    Example:
        taskdeps stats backup.json --project work
    """
    engine = load_engine(tasks_file)
    result = engine.get_dependency_stats(project)

    if as_json:
        typer.echo(json.dumps(result.model_dump(by_alias=True)))
        return

    table = Table(title="Dependency Statistics")
    table.add_column("Metric")
    table.add_column("Value", justify="right")
    table.add_row("Total Tasks", str(result.total))
    table.add_row("With Dependencies", str(result.with_dependencies))
    table.add_row("Blocked", f"[red]{result.blocked}[/red]")
    table.add_row("Ready", f"[green]{result.ready}[/green]")
    console.print(table)


@app.command()
def levels(
    tasks_file: Path = typer.Argument(..., help="Task list or backup JSON file"),
    project: str | None = typer.Option(None, "--project", "-p", help="Project filter"),
) -> None:
    """
    Show the dependency level of every incomplete task.
    """
    engine = load_engine(tasks_file)
    task_levels = engine.get_levels(project)

    table = Table(title="Task Levels")
    table.add_column("Level", style="cyan", justify="right")
    table.add_column("ID", style="bold")
    table.add_column("Title")

    for task in sorted(engine.get_dependencies_tasks(project), key=lambda t: task_levels[t.id]):
        table.add_row(str(task_levels[task.id]), task.id, task.title)

    console.print(table)


@app.command()
def chains(
    tasks_file: Path = typer.Argument(..., help="Task list or backup JSON file"),
    project: str | None = typer.Option(None, "--project", "-p", help="Project filter"),
    limit: int | None = typer.Option(
        None,
        "--limit",
        "-n",
        min=1,
        help="Show only the N longest chains",
    ),
) -> None:
    """
    Show dependency chains, longest first.
    """
    engine = load_engine(tasks_file)
    found = engine.get_chains(project)

    if not found:
        console.print("[yellow]No dependency chains found[/yellow]")
        return

    for chain in found[:limit]:
        summary = summarize_chain(chain, engine.tasks)
        steps = " -> ".join(
            f"[{STATUS_COLORS[s.status]}]{s.task.title or s.task.id}[/{STATUS_COLORS[s.status]}]"
            for s in summary.steps
        )
        console.print(
            Panel(
                steps,
                title=f"[bold]{summary.title}[/bold]",
                subtitle=f"{summary.length} tasks",
                border_style="blue",
            )
        )


@app.command("critical-path")
def critical_path(
    tasks_file: Path = typer.Argument(..., help="Task list or backup JSON file"),
    project: str | None = typer.Option(None, "--project", "-p", help="Project filter"),
) -> None:
    """
    Show the longest chain of dependent tasks.
    """
    engine = load_engine(tasks_file)
    path = engine.get_critical_path(project)

    if not path:
        console.print("[yellow]No critical path found[/yellow]")
        return

    summary = summarize_chain(path, engine.tasks)
    table = Table(title=f"Critical Path ({summary.length} tasks)")
    table.add_column("#", justify="right")
    table.add_column("ID", style="bold")
    table.add_column("Title")
    table.add_column("Status")

    for step in summary.steps:
        color = STATUS_COLORS[step.status]
        table.add_row(
            str(step.position),
            step.task.id,
            step.task.title,
            f"[{color}]{step.status.value}[/{color}]",
        )

    console.print(table)


@app.command()
def blocked(
    tasks_file: Path = typer.Argument(..., help="Task list or backup JSON file"),
    project: str | None = typer.Option(None, "--project", "-p", help="Project filter"),
) -> None:
    """
    List incomplete tasks that are waiting for something.
    """
    engine = load_engine(tasks_file)
    waiting = [t for t in engine.get_dependencies_tasks(project) if t.has_dependencies]

    table = Table(title="Waiting Tasks")
    table.add_column("ID", style="bold")
    table.add_column("Title")
    table.add_column("Blocked By")

    rows = 0
    for task in waiting:
        pending = engine.get_pending_dependencies(task.id)
        unknown = [tid for tid in task.waiting_for_task_ids if engine.get_task(tid) is None]
        if not pending and not unknown:
            continue
        blockers = [p.title or p.id for p in pending]
        blockers.extend(f"[dim]{tid} (missing)[/dim]" for tid in unknown)
        table.add_row(task.id, task.title, ", ".join(blockers))
        rows += 1

    if rows == 0:
        console.print("[green]Nothing is blocked[/green]")
        return

    console.print(table)


@app.command()
def view(
    tasks_file: Path = typer.Argument(..., help="Task list or backup JSON file"),
    mode: str | None = typer.Option(
        None,
        "--view",
        "-m",
        help="View to render: graph, chains or critical (default: TASKDEPS_DEFAULT_VIEW)",
    ),
    project: str | None = typer.Option(None, "--project", "-p", help="Project filter"),
) -> None:
    """
    Print the JSON payload of a dependencies view.
    """
    engine = load_engine(tasks_file)
    if mode is not None:
        try:
            engine.set_current_view(mode)
        except ValueError as e:
            console.print(f"[bold red]Unknown view:[/bold red] {mode}")
            raise typer.Exit(code=2) from e

    typer.echo(json.dumps(engine.render_view(project), indent=2))


# Register the remaining commands on this app
from taskdeps.cli import commands  # noqa: E402,F401


if __name__ == "__main__":
    app()

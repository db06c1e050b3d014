"""Additional CLI commands for taskdeps."""

from pathlib import Path

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from taskdeps.cli.main import app, load_engine
from taskdeps.core.exceptions import TaskDepsError

console = Console()


@app.command()
def check(
    tasks_file: Path = typer.Argument(..., help="Task list or backup JSON file"),
    strict: bool = typer.Option(
        False,
        "--strict",
        help="Exit with code 1 when problems are found",
    ),
) -> None:
    """
    Report dangling references, self-references and dependency cycles.
    """
    engine = load_engine(tasks_file)
    report = engine.diagnose()

    if report.is_healthy:
        console.print("[green]No dependency problems found[/green]")
        return

    table = Table(title="Dependency Problems")
    table.add_column("Problem", style="bold")
    table.add_column("Tasks")

    for task_id, missing in report.dangling_references.items():
        table.add_row("Missing prerequisite", f"{task_id} waits for {', '.join(missing)}")
    for task_id in report.self_loops:
        table.add_row("Waits for itself", task_id)
    for cycle in report.cycles:
        table.add_row("Cycle", " -> ".join(cycle))

    console.print(table)

    if strict:
        raise typer.Exit(code=1)


@app.command()
def link(
    tasks_file: Path = typer.Argument(..., help="Task list or backup JSON file"),
    dependent_id: str = typer.Argument(..., help="Task that should wait"),
    prerequisite_id: str = typer.Argument(..., help="Task to wait for"),
) -> None:
    """
    Check whether one task can wait for another without creating a cycle.

    Example:
        taskdeps link backup.json write-report gather-data
    """
    engine = load_engine(tasks_file)

    try:
        updated = engine.link(dependent_id, prerequisite_id)
    except TaskDepsError as e:
        console.print(f"[bold red]Cannot link:[/bold red] {e}")
        raise typer.Exit(code=1) from e

    waits_for = ", ".join(updated.waiting_for_task_ids)
    console.print(f"[green]OK:[/green] {dependent_id} can wait for {prerequisite_id}")
    console.print(f"[dim]{dependent_id} would wait for: {waits_for}[/dim]")


@app.command()
def config(
    show: bool = typer.Option(
        False,
        "--show",
        help="Show current configuration",
    ),
) -> None:
    """
    View taskdeps configuration.

    Settings come from TASKDEPS_* environment variables or a .env file.
    """
    if not show:
        console.print("Use --show to view configuration")
        return

    from taskdeps.core.config import get_settings

    settings = get_settings()

    table = Table(title="Current Configuration")
    table.add_column("Setting")
    table.add_column("Value")

    table.add_row("Log Level", settings.log_level)
    table.add_row("Debug Mode", str(settings.debug))
    table.add_row("Log File", settings.log_file or "-")
    table.add_row("Default View", settings.default_view)
    table.add_row("Stats Against Full Collection", str(settings.stats_against_full_collection))
    table.add_row(
        "Node Size",
        f"{settings.graph_node_width}x{settings.graph_node_height}",
    )
    table.add_row(
        "Gaps (h/v)",
        f"{settings.graph_horizontal_gap}/{settings.graph_vertical_gap}",
    )

    console.print(table)


@app.command()
def serve(
    port: int | None = typer.Option(None, "--port", "-p", help="Port for the API server"),
    host: str | None = typer.Option(None, "--host", "-h", help="Host to bind to"),
) -> None:
    """
    Start the dependency analysis HTTP API.

    Example:
        taskdeps serve --port 3000
    """
    import uvicorn

    from taskdeps.api.main import app as api_app
    from taskdeps.core.config import get_settings

    settings = get_settings()
    host = host or settings.api_host
    port = port or settings.api_port

    console.print(
        Panel(
            f"[bold]API:[/bold]     http://{host}:{port}/api/dependencies\n"
            f"[bold]Docs:[/bold]    http://{host}:{port}/docs\n"
            f"[bold]Health:[/bold]  http://{host}:{port}/health",
            title="[bold cyan]taskdeps API[/bold cyan]",
            border_style="cyan",
        )
    )

    uvicorn.run(api_app, host=host, port=port, log_level=settings.log_level.lower())

"""Typer CLI for trialrun.

Commands:
- list: Show the execution units of the given targets
- run: Discover and run the given targets
- config: Show configuration
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.table import Table

from trialrun.config_loader import (
    get_global_config_path,
    get_project_config_path,
    load_yaml_file,
)
from trialrun.discovery.entries import class_name
from trialrun.exceptions import ConfigurationError
from trialrun.observability.logging import setup_logging
from trialrun.runner.models import RunReport, UnitStatus
from trialrun.runner.runner import run_all, run_suite
from trialrun.runner.targets import expand_targets
from trialrun.settings import get_settings

app = typer.Typer(
    name="trialrun",
    help="Scenario-aware test runner",
    no_args_is_help=True,
)

console = Console()

STATUS_STYLE = {
    UnitStatus.PASSED: "green",
    UnitStatus.FAILED: "bold red",
    UnitStatus.SKIPPED: "yellow",
}


def _load_classes(targets: List[str], path: Path) -> list[type]:
    root = str(path.resolve())
    if root not in sys.path:
        sys.path.insert(0, root)
    try:
        return expand_targets(targets)
    except ConfigurationError as e:
        console.print(f"[bold red]Error:[/bold red] {e.message}")
        raise typer.Exit(2)


@app.command("list")
def list_units(
    targets: List[str] = typer.Argument(..., help="package.module or package.module:Class"),
    path: Path = typer.Option(Path("."), "--path", "-p", help="Directory to import targets from"),
):
    """Show every execution unit without running it."""
    setup_logging(get_settings())
    classes = _load_classes(targets, path)

    failed = False
    for discovery in run_all(classes):
        name = class_name(discovery.cls)
        if discovery.error is not None:
            failed = True
            console.print(f"[bold red]✗ {name}[/bold red]: {discovery.error.message}")
            continue
        console.print(f"[bold]{name}[/bold] ({len(discovery.units)} units)")
        for unit in discovery.units:
            console.print(f"  {unit.method.name} [dim]{unit.scenario!r}[/dim]")

    if failed:
        raise typer.Exit(1)


def _print_report(report: RunReport, show_skipped: bool) -> None:
    table = Table(title="Results")
    table.add_column("Class", style="cyan")
    table.add_column("Method")
    table.add_column("Scenario", style="dim")
    table.add_column("Status")
    table.add_column("Detail")

    for class_report in report.classes:
        if class_report.error is not None:
            table.add_row(
                class_report.class_name,
                "-",
                "-",
                "[bold red]error[/bold red]",
                class_report.error["message"],
            )
            continue
        for unit in class_report.units:
            if unit.status == UnitStatus.SKIPPED and not show_skipped:
                continue
            style = STATUS_STYLE[unit.status]
            table.add_row(
                unit.class_name,
                unit.method,
                unit.scenario,
                f"[{style}]{unit.status.value}[/{style}]",
                unit.message or "",
            )

    console.print(table)
    console.print(
        f"[green]{report.passed} passed[/green], [red]{report.failed} failed[/red], "
        f"[yellow]{report.skipped} skipped[/yellow], [red]{report.errors} errors[/red]"
    )


@app.command()
def run(
    targets: List[str] = typer.Argument(..., help="package.module or package.module:Class"),
    path: Path = typer.Option(Path("."), "--path", "-p", help="Directory to import targets from"),
    json_output: bool = typer.Option(False, "--json", help="Print the report as JSON"),
    show_skipped: Optional[bool] = typer.Option(
        None, "--show-skipped/--hide-skipped", help="Include skipped units in the table"
    ),
):
    """Discover and run the given targets."""
    settings = get_settings()
    setup_logging(settings)
    classes = _load_classes(targets, path)

    report = run_suite(classes)

    if json_output or settings.output_format == "json":
        typer.echo(report.model_dump_json(indent=2))
    else:
        _print_report(report, settings.show_skipped if show_skipped is None else show_skipped)

    if not report.ok:
        raise typer.Exit(1)


@app.command()
def config():
    """Show merged configuration and where it came from."""
    settings = get_settings()

    table = Table(title="trialrun Configuration")
    table.add_column("Key", style="cyan")
    table.add_column("Value", style="green")
    for key, value in settings.model_dump().items():
        table.add_row(key, str(value))
    console.print(table)

    console.print()
    console.print("[bold]Configuration Sources:[/bold]")

    global_path = get_global_config_path()
    if global_path.exists():
        console.print(f"  [green]✓[/green] Global: {global_path}")
    else:
        console.print(f"  [yellow]○[/yellow] Global: {global_path} (not created)")

    project_path = get_project_config_path()
    if project_path:
        console.print(f"  [green]✓[/green] Project: {project_path}")
        loaded = load_yaml_file(project_path)
        console.print(f"  Keys: {', '.join(sorted(loaded)) or '(empty)'}")
    else:
        console.print("  [yellow]○[/yellow] Project: Not found in current directory")


def main() -> None:
    app()


if __name__ == "__main__":
    main()

"""CLI entry point for condec-systest."""

from __future__ import annotations

import logging

import requests
import typer
from rich import print as rprint
from rich.logging import RichHandler
from rich.table import Table

from condec_systest.activity import read_activity_log
from condec_systest.condec.models import FilterSettings
from condec_systest.config import Config
from condec_systest.harness import Harness
from condec_systest.rest import RestError

app = typer.Typer(help="Drive a Jira instance with the ConDec plugin for system testing.")


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log every REST call"),
) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(show_path=False)],
    )


def _load_config() -> Config:
    try:
        config = Config.load()
    except ValueError as e:
        rprint(f"[red]{e}[/red]")
        raise typer.Exit(1)
    issues = config.validate()
    if issues:
        for issue in issues:
            rprint(f"[red]Config error: {issue}[/red]")
        raise typer.Exit(1)
    return config


def _fail(e: Exception) -> None:
    if isinstance(e, RestError) and e.error:
        rprint(f"[red]{e} ({e.error})[/red]")
    else:
        rprint(f"[red]{e}[/red]")
    raise typer.Exit(1)


@app.command()
def check() -> None:
    """Validate the configuration and contact the Jira instance."""
    config = _load_config()
    harness = Harness.from_config(config)
    try:
        info = harness.jira.server_info()
    except (RestError, requests.RequestException) as e:
        _fail(e)
    finally:
        harness.close()

    rprint(f"[green]Connected to {config.jira_url}[/green]")
    rprint(f"  Jira version: {info.get('version', 'unknown')}")
    rprint(f"  Server title: {info.get('serverTitle', '')}")
    rprint(f"  Test project: {config.project_key}")


@app.command()
def setup(
    issue_strategy: bool = typer.Option(
        False, "--issue-strategy", help="Store knowledge elements as Jira issues"
    ),
) -> None:
    """Delete and recreate the test project, then activate ConDec for it.

    Destroys everything in the configured project.
    """
    config = _load_config()
    harness = Harness.from_config(config)
    try:
        harness.reset(use_issue_strategy=issue_strategy)
    except (RestError, requests.RequestException) as e:
        _fail(e)
    finally:
        harness.close()

    strategy = "on" if issue_strategy else "off"
    rprint(f"[green bold]Project {config.project_key} reset[/green bold] (issue strategy {strategy})")


@app.command()
def elements(
    search: str = typer.Option("", "--search", "-s", help="Free-text search term"),
    selected: str = typer.Option(None, "--selected", help="Jira issue key to root the graph at"),
    irrelevant: bool = typer.Option(False, "--irrelevant", help="Include irrelevant text"),
    knowledge_type: list[str] = typer.Option(None, "--type", "-t", help="Knowledge type filter"),
) -> None:
    """List knowledge elements of the test project."""
    config = _load_config()
    harness = Harness.from_config(config)
    settings = FilterSettings(
        project_key=config.project_key,
        search_term=search,
        selected_element=selected,
        knowledge_types=knowledge_type or None,
        is_irrelevant_text_shown=True if irrelevant else None,
    )
    try:
        found = harness.condec.filter_elements(settings)
    except (RestError, requests.RequestException) as e:
        _fail(e)
    finally:
        harness.close()

    if not found:
        rprint("[yellow]No knowledge elements found.[/yellow]")
        return

    table = Table(title=f"Knowledge elements in {config.project_key}")
    table.add_column("ID", justify="right")
    table.add_column("Loc")
    table.add_column("Type")
    table.add_column("Status")
    table.add_column("Summary")
    for el in found:
        style = None if el.relevant else "dim"
        table.add_row(
            str(el.id), el.documentation_location, el.type, el.status, el.summary, style=style
        )
    rprint(table)


@app.command()
def activity(
    limit: int = typer.Option(20, "--limit", "-n", help="Number of calls to show"),
    failed: bool = typer.Option(False, "--failed", help="Only show failed calls"),
) -> None:
    """Show recent REST calls made by the harness."""
    entries = read_activity_log(limit=limit, failed_only=failed)
    if not entries:
        rprint("[yellow]No REST activity logged yet.[/yellow]")
        return

    table = Table(title="Recent REST calls")
    table.add_column("Time")
    table.add_column("Method")
    table.add_column("Status", justify="right")
    table.add_column("ms", justify="right")
    table.add_column("URL")
    table.add_column("Error")
    for e in entries:
        status = e.get("status")
        table.add_row(
            e.get("timestamp", "")[:19],
            e.get("method", ""),
            "-" if status is None else str(status),
            str(e.get("duration_ms", "")),
            e.get("url", ""),
            e.get("error") or "",
            style="red" if e.get("error") else None,
        )
    rprint(table)


if __name__ == "__main__":
    app()

"""Rich rendering of HAL resources for the CLI."""

from __future__ import annotations

from rich.console import Console
from rich.table import Table

from halkit.hal.types import LINKS_KEY, Resource, as_sequence
from halkit.state.lifecycle import StateView


def links_table(resource: Resource) -> Table:
    table = Table(title="Links")
    table.add_column("rel", style="cyan")
    table.add_column("method")
    table.add_column("href")
    table.add_column("templated", justify="center")

    for rel, value in (resource.get(LINKS_KEY) or {}).items():
        for link in as_sequence(value):
            table.add_row(
                rel,
                str(link.get("method") or "GET").upper(),
                link.get("href", ""),
                "yes" if link.get("templated") else "",
            )
    return table


def state_table(view: StateView) -> Table:
    table = Table(title=f"Lifecycle: {view.current_state or 'unknown'}")
    table.add_column("action", style="cyan")
    table.add_column("expected", justify="center")
    table.add_column("offered", justify="center")

    for action in list(view.expected_actions) + view.unexpected_actions:
        table.add_row(
            action,
            "yes" if action in view.expected_actions else "",
            "[green]yes[/green]" if view.can(action) else "[red]no[/red]",
        )
    return table


def print_table(table: Table, console: Console | None = None) -> None:
    (console or Console()).print(table)

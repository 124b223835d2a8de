"""
Ranking Display Module

Rich tables for filter pass results (Windows and Workspaces tabs).
"""

import json
from typing import Any, Dict, List

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ..models.filter_state import FilterResult, MatchTier

TIER_STYLES = {
    MatchTier.WORD_BOUNDARY: "green",
    MatchTier.INITIALS: "cyan",
    MatchTier.SUBSEQUENCE: "yellow",
    MatchTier.FUZZY: "magenta",
    MatchTier.UNFILTERED: "dim",
}


def display_ranking(result: FilterResult, query: str, console: Console = None) -> None:
    """
    Display a ranked Windows tab as a table.

    Args:
        result: FilterResult of RankedWindow
        query: Query the result was produced for
        console: Rich console (optional, creates new if not provided)
    """
    if console is None:
        console = Console()

    title = f"Windows matching '{escape(query)}'" if query else "Windows (MRU order)"
    table = Table(title=title)
    table.add_column("#", justify="right", style="dim")
    table.add_column("Key", justify="center")
    table.add_column("Score", justify="right")
    table.add_column("Tier")
    table.add_column("WS", justify="right")
    table.add_column("Type")
    table.add_column("Title")
    table.add_column("Class", style="dim")
    table.add_column("ID", style="dim")

    for index, row in enumerate(result.items):
        window = row.window
        marker = "[bold reverse]" if index == result.selected_index else ""
        style = TIER_STYLES.get(row.tier, "white")
        workspace = "S" if window.is_sticky else str(window.desktop + 1)
        title_text = escape(row.display_title)
        if marker:
            title_text = f"{marker}{title_text}[/]"

        table.add_row(
            str(index),
            row.harpoon_key or "",
            f"{row.score:g}",
            f"[{style}]{row.tier.value}[/{style}]",
            workspace,
            window.type.value,
            title_text,
            escape(window.class_name),
            f"{window.id:#x}",
        )

    console.print(table)

    if result.selected is None:
        console.print("[yellow]No match (no target)[/yellow]")
    else:
        console.print(f"Selected: [bold]{escape(result.selected.display_title)}[/bold] (row {result.selected_index})")


def ranking_to_dict(result: FilterResult, query: str) -> Dict[str, Any]:
    rows: List[Dict[str, Any]] = []
    for row in result.items:
        rows.append({
            "window": row.window.model_dump(mode='json'),
            "harpoon_key": row.harpoon_key,
            "custom_name": row.custom_name,
            "score": row.score,
            "tier": row.tier.value,
        })
    return {"query": query, "selected_index": result.selected_index, "windows": rows}


def format_ranking_json(result: FilterResult, query: str) -> str:
    """
    Format a ranked Windows tab as a JSON string.

    Returns:
        JSON string
    """
    return json.dumps(ranking_to_dict(result, query), indent=2)


def display_workspaces(result: FilterResult, console: Console = None) -> None:
    """Display a filtered Workspaces tab."""
    if console is None:
        console = Console()

    table = Table(title="Workspaces")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Number", justify="right")
    table.add_column("Name")
    table.add_column("Current")

    for index, workspace in enumerate(result.items):
        current = "[green]Yes[/green]" if workspace.is_current else "[dim]No[/dim]"
        name = escape(workspace.name)
        if index == result.selected_index:
            name = f"[bold reverse]{name}[/]"
        table.add_row(str(index), str(workspace.id + 1), name, current)

    console.print(table)


def format_workspaces_json(result: FilterResult) -> str:
    return json.dumps({
        "selected_index": result.selected_index,
        "workspaces": [w.model_dump(mode='json') for w in result.items],
    }, indent=2)

"""
Registry Display Module

Rich tables for harpoon slots, named windows and options.
"""

import json
from typing import Iterable, Optional

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ..models.options import CofiOptions
from ..models.registry import HarpoonSlot, NamedWindowEntry, NamedWindowRecord


def display_harpoon(slots: Iterable[HarpoonSlot], console: Console = None,
                    selected_index: Optional[int] = None, show_empty: bool = False) -> None:
    """
    Display harpoon slots.

    Args:
        slots: Slots to show, in key order
        console: Rich console (optional, creates new if not provided)
        selected_index: Row to highlight
        show_empty: Also list unassigned slots
    """
    if console is None:
        console = Console()

    table = Table(title="Harpoon Slots")
    table.add_column("Key", justify="center", style="bold")
    table.add_column("Window ID", style="dim")
    table.add_column("Title")
    table.add_column("Class")
    table.add_column("Instance", style="dim")
    table.add_column("Type")

    shown = 0
    for index, slot in enumerate(slots):
        if not slot.assigned and not show_empty:
            continue
        key = f"[reverse]{slot.key}[/reverse]" if index == selected_index else slot.key
        if slot.assigned:
            table.add_row(key, f"{slot.id:#x}", escape(slot.title), escape(slot.class_name),
                          escape(slot.instance), slot.type.value)
        else:
            table.add_row(key, "", "[dim]empty[/dim]", "", "", "")
        shown += 1

    if shown == 0:
        console.print("[dim]No harpoon slots assigned[/dim]")
        return

    console.print(table)


def format_harpoon_json(slots: Iterable[HarpoonSlot]) -> str:
    return json.dumps([s.model_dump(mode='json') for s in slots], indent=2)


def display_names(entries: Iterable[NamedWindowEntry], console: Console = None,
                  selected_index: Optional[int] = None) -> None:
    """
    Display named windows, orphaned ones dimmed.

    Args:
        entries: Named window entries, in registry order
        console: Rich console (optional, creates new if not provided)
        selected_index: Row to highlight
    """
    if console is None:
        console = Console()

    entries = list(entries)
    if not entries:
        console.print("[dim]No named windows[/dim]")
        return

    table = Table(title="Named Windows")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Name", style="bold cyan")
    table.add_column("Title pattern")
    table.add_column("Class")
    table.add_column("Window ID", style="dim")
    table.add_column("Status")

    for index, entry in enumerate(entries):
        status = "[green]assigned[/green]" if entry.assigned else "[yellow]orphaned[/yellow]"
        name = escape(entry.custom_name)
        if index == selected_index:
            name = f"[reverse]{name}[/reverse]"
        table.add_row(str(index), name, escape(entry.original_title), escape(entry.class_name),
                      f"{entry.id:#x}", status)

    console.print(table)


def format_names_json(entries: Iterable[NamedWindowEntry]) -> str:
    return json.dumps(
        [NamedWindowRecord.from_entry(e).model_dump(mode='json') for e in entries],
        indent=2,
    )


def display_options(options: CofiOptions, console: Console = None) -> None:
    """Display effective switcher options."""
    if console is None:
        console = Console()

    table = Table(title="Options", show_header=False)
    table.add_column("Option", style="dim")
    table.add_column("Value")

    for name, value in options.model_dump(mode='json').items():
        table.add_row(name, str(value))

    console.print(table)

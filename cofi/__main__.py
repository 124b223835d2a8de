"""
cofi diagnostic CLI

Runs the ranking pipeline outside the GUI and prints the result.

Usage:
    cofi-diagnose rank SNAPSHOT [--query Q] [--tab TAB] [--json]
    cofi-diagnose live [--query Q] [--json]
    cofi-diagnose harpoon [--all] [--json]
    cofi-diagnose names [--json]
    cofi-diagnose options [--json]

SNAPSHOT is a JSON file shaped like a WindowSnapshot:
    {"windows": [{"id": 1, "title": "...", "class_name": "...", ...}],
     "active_id": 1, "current_desktop": 0, "desktop_count": 4}
"""

import json
import sys
from pathlib import Path
from typing import Optional

import click
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape

from .config import load_options
from .constants import ConfigPaths
from .displays import ranking_display, registry_display
from .errors import CofiError, ErrorCode, SnapshotError
from .logging_config import setup_logging
from .models.filter_state import Tab
from .models.window import WindowSnapshot
from .services import registry_store
from .services.filter_pipeline import AppState, apply_filter, refresh
from .services.identity_registry import HarpoonRegistry, NamedWindowRegistry


def load_snapshot_file(path: Path) -> WindowSnapshot:
    """Load a WindowSnapshot from a JSON file.

    Raises:
        SnapshotError: If the file cannot be read or is not a valid snapshot
    """
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
        return WindowSnapshot.model_validate(data)
    except (OSError, json.JSONDecodeError, UnicodeDecodeError) as e:
        raise SnapshotError(
            code=ErrorCode.FILE_READ_ERROR,
            message=f"Cannot read snapshot {path}: {e}",
        ) from e
    except ValidationError as e:
        raise SnapshotError(
            code=ErrorCode.PARSE_ERROR,
            message=f"Invalid snapshot {path}: {e.error_count()} error(s)",
            suggestion="Check field names against WindowSnapshot / WindowDescriptor",
            context={"errors": [err["msg"] for err in e.errors()]},
        ) from e


def build_state(snapshot: WindowSnapshot, harpoon_file: Path, names_file: Path) -> AppState:
    """AppState with registries read from disk.

    The registries get no path, so reconciling against the snapshot never
    writes back to the user's files.
    """
    state = AppState(
        harpoon=HarpoonRegistry(registry_store.load_harpoon_slots(harpoon_file)),
        names=NamedWindowRegistry(registry_store.load_named_windows(names_file)),
    )
    refresh(state, snapshot)
    return state


def show_result(state: AppState, query: str, output_json: bool, console: Console) -> None:
    result = apply_filter(state, query)
    tab = state.current_tab

    if tab == Tab.WINDOWS:
        if output_json:
            click.echo(ranking_display.format_ranking_json(result, query))
        else:
            ranking_display.display_ranking(result, query, console)
    elif tab == Tab.WORKSPACES:
        if output_json:
            click.echo(ranking_display.format_workspaces_json(result))
        else:
            ranking_display.display_workspaces(result, console)
    elif tab == Tab.HARPOON:
        if output_json:
            click.echo(registry_display.format_harpoon_json(result.items))
        else:
            registry_display.display_harpoon(result.items, console, result.selected_index, show_empty=True)
    else:
        if output_json:
            click.echo(registry_display.format_names_json(result.items))
        else:
            registry_display.display_names(result.items, console, result.selected_index)


def fail(console: Console, error: Exception, output_json: bool) -> None:
    if output_json and isinstance(error, CofiError):
        click.echo(json.dumps({"error": error.to_dict()}, indent=2))
    else:
        console.print(f"[red]Error: {escape(str(error))}[/red]")
    sys.exit(1)


@click.group()
@click.option('--harpoon-file', type=click.Path(path_type=Path), default=ConfigPaths.HARPOON_FILE,
              show_default=True, help='harpoon.json to read')
@click.option('--names-file', type=click.Path(path_type=Path), default=ConfigPaths.NAMES_FILE,
              show_default=True, help='names.json to read')
@click.option('-v', '--verbose', is_flag=True, help='Log at INFO level')
@click.option('--debug', is_flag=True, help='Log at DEBUG level')
@click.pass_context
def cli(ctx, harpoon_file: Path, names_file: Path, verbose: bool, debug: bool):
    """cofi diagnostic commands for window ranking and identity registries."""
    setup_logging(verbose=verbose, debug=debug)
    ctx.ensure_object(dict)
    ctx.obj["harpoon_file"] = harpoon_file
    ctx.obj["names_file"] = names_file


@cli.command()
@click.argument('snapshot', type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option('-q', '--query', default='', help='Filter query')
@click.option('--tab', type=click.Choice([t.value for t in Tab]), default=Tab.WINDOWS.value,
              show_default=True, help='Tab to filter')
@click.option('--json', 'output_json', is_flag=True, help='Output JSON instead of formatted tables')
@click.pass_context
def rank(ctx, snapshot: Path, query: str, tab: str, output_json: bool):
    """
    Rank windows from a snapshot file.

    Loads SNAPSHOT, re-binds harpoon slots and named windows against it and
    prints the filtered list for the chosen tab with the selected row.
    """
    console = Console()

    try:
        state = build_state(load_snapshot_file(snapshot), ctx.obj["harpoon_file"], ctx.obj["names_file"])
        state.current_tab = Tab(tab)
        show_result(state, query, output_json, console)
    except CofiError as e:
        fail(console, e, output_json)


@cli.command()
@click.option('-q', '--query', default='', help='Filter query')
@click.option('--json', 'output_json', is_flag=True, help='Output JSON instead of formatted tables')
@click.pass_context
def live(ctx, query: str, output_json: bool):
    """
    Rank the windows of the running i3 / sway session.
    """
    from .sources.i3_snapshot import take_snapshot

    console = Console()

    try:
        state = build_state(take_snapshot(), ctx.obj["harpoon_file"], ctx.obj["names_file"])
        show_result(state, query, output_json, console)
    except CofiError as e:
        fail(console, e, output_json)


@cli.command()
@click.option('--all', 'show_all', is_flag=True, help='Include empty slots')
@click.option('--json', 'output_json', is_flag=True, help='Output JSON instead of formatted tables')
@click.pass_context
def harpoon(ctx, show_all: bool, output_json: bool):
    """Show harpoon slots as stored on disk."""
    slots = registry_store.load_harpoon_slots(ctx.obj["harpoon_file"])
    if not show_all:
        slots = [s for s in slots if s.assigned]

    if output_json:
        click.echo(registry_display.format_harpoon_json(slots))
    else:
        registry_display.display_harpoon(slots, Console(), show_empty=show_all)


@cli.command()
@click.option('--json', 'output_json', is_flag=True, help='Output JSON instead of formatted tables')
@click.pass_context
def names(ctx, output_json: bool):
    """Show named windows as stored on disk."""
    entries = registry_store.load_named_windows(ctx.obj["names_file"])

    if output_json:
        click.echo(registry_display.format_names_json(entries))
    else:
        registry_display.display_names(entries, Console())


@cli.command()
@click.option('--file', 'options_file', type=click.Path(path_type=Path), default=None,
              help='Options file (default: ~/.config/cofi.json)')
@click.option('--json', 'output_json', is_flag=True, help='Output JSON instead of formatted tables')
def options(options_file: Optional[Path], output_json: bool):
    """Show effective switcher options."""
    opts = load_options(options_file)

    if output_json:
        click.echo(json.dumps(opts.model_dump(mode='json'), indent=2))
    else:
        registry_display.display_options(opts, Console())


if __name__ == '__main__':
    cli()

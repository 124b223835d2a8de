"""Window snapshots from i3 / sway over IPC.

Walks the i3ipc container tree and converts every window container into a
WindowDescriptor:
- id: container id (stable for the session, works for X11 and Wayland)
- class_name / instance: window_class / window_instance, or app_id on
  Wayland
- type: Special for floating and scratchpad windows, Normal otherwise
- desktop: index of the workspace in get_workspaces() order, -1 for sticky
  and scratchpad windows
"""

import logging
from typing import Any, Iterator, List, Optional, Sequence, Tuple

import i3ipc

from ..constants import STICKY_DESKTOP
from ..errors import ErrorCode, SnapshotError
from ..models.window import WindowDescriptor, WindowSnapshot, WindowType

logger = logging.getLogger(__name__)

SCRATCHPAD_WORKSPACE = "__i3_scratch"
FLOATING_STATES = ("auto_on", "user_on")


def is_window(con: Any) -> bool:
    """Check if a container holds a client window (X11 or Wayland)."""
    return con.type in ("con", "floating_con") and bool(
        getattr(con, "window", None) or getattr(con, "app_id", None)
    )


def iter_windows(node: Any, workspace: Optional[str] = None,
                 floating: bool = False) -> Iterator[Tuple[Any, Optional[str], bool]]:
    """Yield (container, workspace name, floating) for every window below node."""
    # Bars live in dock areas
    if node.type == "dockarea":
        return
    if node.type == "workspace":
        workspace = node.name

    if is_window(node):
        yield node, workspace, floating or getattr(node, "floating", None) in FLOATING_STATES
        return

    for child in node.nodes:
        yield from iter_windows(child, workspace, floating)
    for child in node.floating_nodes:
        yield from iter_windows(child, workspace, True)


def to_descriptor(con: Any, workspace: Optional[str], floating: bool,
                  workspace_names: Sequence[str]) -> WindowDescriptor:
    app_id = getattr(con, "app_id", None) or ""
    scratchpad = workspace == SCRATCHPAD_WORKSPACE

    if scratchpad or getattr(con, "sticky", False):
        desktop = STICKY_DESKTOP
    elif workspace in workspace_names:
        desktop = list(workspace_names).index(workspace)
    else:
        desktop = 0

    return WindowDescriptor(
        id=con.id,
        title=con.name or "",
        class_name=getattr(con, "window_class", None) or app_id,
        instance=getattr(con, "window_instance", None) or app_id,
        type=WindowType.SPECIAL if (floating or scratchpad) else WindowType.NORMAL,
        desktop=desktop,
        pid=getattr(con, "pid", None) or 0,
    )


def build_snapshot(tree: Any, workspaces: Sequence[Any]) -> WindowSnapshot:
    """Build a snapshot from an i3ipc tree and get_workspaces() reply.

    Args:
        tree: Root container (i3ipc.Con)
        workspaces: Workspace replies, in the order the window manager
            reports them

    Returns:
        WindowSnapshot

    Raises:
        CapacityExceededError: If the tree holds more than 256 windows
    """
    workspace_names = [ws.name for ws in workspaces]

    current_desktop = 0
    for index, ws in enumerate(workspaces):
        if ws.focused:
            current_desktop = index
            break

    windows: List[WindowDescriptor] = []
    for con, workspace, floating in iter_windows(tree):
        windows.append(to_descriptor(con, workspace, floating, workspace_names))
        logger.debug(f"Window {con.id:#x} on {workspace!r}: {con.name!r}")

    focused = tree.find_focused()
    active_id = focused.id if focused is not None and is_window(focused) else 0

    return WindowSnapshot(
        windows=windows,
        active_id=active_id,
        current_desktop=current_desktop,
        desktop_count=len(workspaces),
        desktop_names=workspace_names,
    )


def take_snapshot(connection: Optional[i3ipc.Connection] = None) -> WindowSnapshot:
    """Query the running window manager for a snapshot.

    Args:
        connection: Existing connection (a new one is opened if None)

    Raises:
        SnapshotError: If i3 / sway cannot be reached or queried
    """
    try:
        conn = connection or i3ipc.Connection()
        tree = conn.get_tree()
        workspaces = conn.get_workspaces()
    except Exception as e:
        logger.error(f"Failed to query window manager: {e}")
        raise SnapshotError(
            code=ErrorCode.WINDOW_SYSTEM_UNAVAILABLE,
            message=f"Cannot query i3/sway: {e}",
            suggestion="Make sure i3 or sway is running and I3SOCK / SWAYSOCK is set",
        ) from e

    snapshot = build_snapshot(tree, workspaces)
    logger.info(
        f"Snapshot: {len(snapshot.windows)} windows on {snapshot.desktop_count} workspaces"
    )
    return snapshot

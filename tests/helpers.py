"""Builders shared by the cofi tests."""

from cofi.models.window import WindowDescriptor, WindowSnapshot, WindowType


def make_window(
    id: int,
    title: str = "",
    class_name: str = "",
    instance: str = "",
    type: WindowType = WindowType.NORMAL,
    desktop: int = 0,
    pid: int = 0,
) -> WindowDescriptor:
    """Build a WindowDescriptor; instance defaults to the lower-cased class."""
    return WindowDescriptor(
        id=id,
        title=title,
        class_name=class_name,
        instance=instance or class_name.lower(),
        type=type,
        desktop=desktop,
        pid=pid,
    )


def make_snapshot(windows, active_id: int = 0, current_desktop: int = 0,
                  desktop_count: int = 4) -> WindowSnapshot:
    return WindowSnapshot(
        windows=list(windows),
        active_id=active_id,
        current_desktop=current_desktop,
        desktop_count=desktop_count,
    )

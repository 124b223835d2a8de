"""MRU window history.

Keeps the window list in most-recently-used order across refreshes so that
position 0 is the active window and position 1 is the one to alt-tab to.

Refresh cycle:
1. KeepOnly: drop windows that disappeared, refresh the rest in place
2. AddNew: append windows seen for the first time, in snapshot order
3. Promote: move a newly activated window to the front
4. Partition: regroup everything after the first two entries by workspace
   and type
"""

import logging
from typing import Callable, List, Optional

from ..constants import MAX_WINDOWS, OWN_WINDOW_CLASS
from ..errors import CapacityExceededError, ErrorCode
from ..models.window import WindowDescriptor, WindowSnapshot

logger = logging.getLogger(__name__)

OwnWindowPredicate = Callable[[WindowDescriptor], bool]


def is_own_window(window: WindowDescriptor) -> bool:
    """Check if a window is the switcher itself (class "cofi", any case)."""
    return window.class_name.lower() == OWN_WINDOW_CLASS


def update_history(
    history: List[WindowDescriptor],
    windows: List[WindowDescriptor],
    previous_active_id: Optional[int],
    current_active_id: int,
    own_window_predicate: OwnWindowPredicate = is_own_window,
) -> List[WindowDescriptor]:
    """Merge a fresh window list into the history.

    Args:
        history: History from the previous refresh
        windows: Live windows in window-system order
        previous_active_id: Active window at the previous refresh (None on
            the first refresh, so the active window is always promoted)
        current_active_id: Active window now (0 = none)
        own_window_predicate: Windows it accepts are never promoted

    Returns:
        New history list; the input list is not modified

    Raises:
        CapacityExceededError: If the result holds more than 256 windows
    """
    live = {}
    for window in windows:
        live.setdefault(window.id, window)

    # KeepOnly, refreshed from the snapshot
    result = [live[entry.id] for entry in history if entry.id in live]
    seen = {entry.id for entry in result}

    # AddNew
    for window in windows:
        if window.id not in seen:
            result.append(window)
            seen.add(window.id)

    if len(result) > MAX_WINDOWS:
        raise CapacityExceededError(
            "windows", MAX_WINDOWS, len(result),
            code=ErrorCode.TOO_MANY_WINDOWS,
        )

    # Promote
    if current_active_id != 0 and current_active_id != previous_active_id:
        for index in range(1, len(result)):
            if result[index].id != current_active_id:
                continue
            if own_window_predicate(result[index]):
                logger.debug(f"Not promoting own window {current_active_id:#x}")
            else:
                logger.debug(f"Promoting window {current_active_id:#x} from position {index}")
                result.insert(0, result.pop(index))
            break

    return result


def _bucket(window: WindowDescriptor, current_desktop: int) -> int:
    if window.is_sticky:
        return 4
    on_current = window.desktop == current_desktop
    if window.is_normal:
        return 0 if on_current else 1
    return 2 if on_current else 3


def partition_and_reorder(
    history: List[WindowDescriptor],
    current_desktop: int,
) -> List[WindowDescriptor]:
    """Regroup the history after its first two entries.

    Entries 0 and 1 (active window and alt-tab target) stay put. The rest
    are grouped, each group keeping history order:
    current-workspace Normal, other-workspace Normal, current-workspace
    Special, other-workspace Special, then sticky windows of any type.

    Returns:
        New list; the input list is not modified
    """
    if len(history) <= 2:
        return list(history)

    head = history[:2]
    tail = sorted(history[2:], key=lambda w: _bucket(w, current_desktop))
    return head + tail


class HistoryTracker:
    """Owns the MRU history between refreshes.

    Attributes:
        windows: Current history, most recent first
        previous_active_id: Active window seen at the last refresh
    """

    def __init__(self, own_window_predicate: OwnWindowPredicate = is_own_window):
        self.windows: List[WindowDescriptor] = []
        self.previous_active_id: Optional[int] = None
        self.own_window_predicate = own_window_predicate

    def sync(self, snapshot: WindowSnapshot) -> List[WindowDescriptor]:
        """Apply a snapshot: update, promote and partition the history.

        Returns:
            The new history
        """
        self.windows = update_history(
            self.windows,
            snapshot.windows,
            self.previous_active_id,
            snapshot.active_id,
            self.own_window_predicate,
        )
        if snapshot.active_id != 0:
            self.previous_active_id = snapshot.active_id

        self.windows = partition_and_reorder(self.windows, snapshot.current_desktop)
        logger.debug(f"History synced: {len(self.windows)} windows, active={snapshot.active_id:#x}")
        return self.windows

    def __len__(self) -> int:
        return len(self.windows)

    def __iter__(self):
        return iter(self.windows)

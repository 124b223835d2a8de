"""Filter pipeline: snapshot + query -> ranked, selectable lists.

One pass over the Windows tab:
1. Remember the selected window id
2. Sync the MRU history with the snapshot and partition it
3. Score each window (custom-named windows are scored on
   "{custom_name} - {title}")
4. Sort by score, ties keep history order
5. Normal windows before Special windows
6. Restore the selection by id, clamp it
7. Empty query on the Windows tab selects row 1 (alt-tab)

The other tabs (workspaces, harpoon, names) use a plain subsequence filter
over a searchable text built from each item.

Selection movement follows the switcher's bottom-up list: "up" moves to
the next row (index + 1), "down" to the previous one, both wrapping.
"""

import logging
from dataclasses import dataclass, field
from typing import Callable, List, Optional, TypeVar

from ..core.history import HistoryTracker
from ..core.match_scorer import MatchScorer, is_subsequence
from ..logging_config import log_timing
from ..models.filter_state import FilterResult, RankedWindow, ScoredCandidate, Selection, Tab
from ..models.registry import HarpoonSlot, NamedWindowEntry
from ..models.window import WindowDescriptor, WindowSnapshot, WorkspaceInfo
from .identity_registry import HarpoonRegistry, NamedWindowRegistry

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class AppState:
    """Everything a filter pass reads and updates.

    Owned by the application; passed explicitly to every pipeline function.
    """
    snapshot: WindowSnapshot = field(default_factory=WindowSnapshot)
    history: HistoryTracker = field(default_factory=HistoryTracker)
    harpoon: HarpoonRegistry = field(default_factory=HarpoonRegistry)
    names: NamedWindowRegistry = field(default_factory=NamedWindowRegistry)
    scorer: MatchScorer = field(default_factory=MatchScorer)
    current_tab: Tab = Tab.WINDOWS
    selection: Selection = field(default_factory=Selection)
    command_mode: bool = False
    query: str = ""

    # Latest results per tab
    windows: FilterResult = field(default_factory=FilterResult)
    workspaces: FilterResult = field(default_factory=FilterResult)
    harpoon_slots: FilterResult = field(default_factory=FilterResult)
    named_windows: FilterResult = field(default_factory=FilterResult)

    def result_for(self, tab: Tab) -> FilterResult:
        return {
            Tab.WINDOWS: self.windows,
            Tab.WORKSPACES: self.workspaces,
            Tab.HARPOON: self.harpoon_slots,
            Tab.NAMES: self.named_windows,
        }[tab]


def refresh(state: AppState, snapshot: WindowSnapshot) -> bool:
    """Install a new snapshot and re-bind registries to it.

    Returns:
        True if a harpoon slot or named window was re-bound
    """
    state.snapshot = snapshot
    harpoon_changed = state.harpoon.reconcile(snapshot)
    names_changed = state.names.reconcile(snapshot)
    logger.debug(
        f"Refreshed snapshot: {len(snapshot.windows)} windows, "
        f"desktop {snapshot.current_desktop}, active {snapshot.active_id:#x}"
    )
    return harpoon_changed or names_changed


def _scoring_title(window: WindowDescriptor, custom_name: Optional[str]) -> Optional[str]:
    if custom_name:
        return f"{custom_name} - {window.title}"
    return None


def filter_windows(state: AppState, query: str) -> FilterResult:
    """Rank the Windows tab.

    Args:
        state: Application state (history and selection are updated)
        query: Text typed by the user

    Returns:
        FilterResult of RankedWindow; selected_index is None if empty
    """
    with log_timing("filter pass", logger):
        selection = state.selection

        previous = state.windows.selected
        if previous is not None:
            selection.selected_window_id = previous.window.id

        history = state.history.sync(state.snapshot)
        current_desktop = state.snapshot.current_desktop

        candidates: List[ScoredCandidate] = []
        for window in history:
            custom_name = state.names.custom_name_of(window.id)
            result = state.scorer.score(
                query, window, current_desktop,
                title=_scoring_title(window, custom_name),
            )
            if result is None:
                continue
            candidates.append(ScoredCandidate(window, result.value, result.tier))
            logger.debug(f"Scored {window.id:#x} '{window.title}': {result.value} ({result.tier.value})")

        if query:
            candidates = sorted(candidates, key=lambda c: c.score, reverse=True)

        normal = [c for c in candidates if c.window.is_normal]
        special = [c for c in candidates if not c.window.is_normal]

        items = [
            RankedWindow(
                window=c.window,
                harpoon_key=state.harpoon.slot_of(c.window.id),
                custom_name=state.names.custom_name_of(c.window.id),
                score=c.score,
                tier=c.tier,
            )
            for c in normal + special
        ]

        index = _restore_index(items, selection.selected_window_id, lambda r: r.window.id)
        if (
            state.current_tab == Tab.WINDOWS
            and not query
            and len(items) >= 2
            and not state.command_mode
        ):
            index = 1

        result = FilterResult(items=items, selected_index=index)
        selection.window_index = index if index is not None else 0
        selection.selected_window_id = result.selected.window.id if result.selected else 0

    state.windows = result
    state.query = query
    logger.debug(f"Filter '{query}': {len(items)} of {len(history)} windows, selected {index}")
    return result


def _restore_index(items: List[T], wanted_id, key: Callable[[T], int]) -> Optional[int]:
    """Index of the item with wanted_id, 0 if absent, None if empty."""
    if not items:
        return None
    for index, item in enumerate(items):
        if key(item) == wanted_id:
            return index
    return 0


def _subsequence_filter(items: List[T], query: str, text: Callable[[T], str]) -> List[T]:
    if not query:
        return list(items)
    return [item for item in items if is_subsequence(query, text(item))]


def _clamp(index: int, length: int) -> Optional[int]:
    if length == 0:
        return None
    return max(0, min(index, length - 1))


def workspace_search_text(workspace: WorkspaceInfo) -> str:
    return f"{workspace.id + 1} {workspace.name}"


def harpoon_search_text(slot: HarpoonSlot) -> str:
    if slot.assigned:
        return f"{slot.key} {slot.title} {slot.class_name} {slot.instance}"
    return f"{slot.key} empty"


def named_window_search_text(entry: NamedWindowEntry) -> str:
    return f"{entry.custom_name} {entry.original_title} {entry.class_name} {entry.instance}"


def filter_workspaces(state: AppState, query: str) -> FilterResult:
    """Filter the Workspaces tab by "{number} {name}"."""
    selection = state.selection

    previous = state.workspaces.selected
    if previous is not None:
        selection.selected_workspace_id = previous.id

    items = _subsequence_filter(state.snapshot.workspaces(), query, workspace_search_text)
    index = _restore_index(items, selection.selected_workspace_id, lambda w: w.id)

    result = FilterResult(items=items, selected_index=index)
    selection.workspace_index = index if index is not None else 0
    selection.selected_workspace_id = result.selected.id if result.selected else -1

    state.workspaces = result
    state.query = query
    return result


def filter_harpoon(state: AppState, query: str) -> FilterResult:
    """Filter the Harpoon tab; all 36 slots for an empty query."""
    items = _subsequence_filter(state.harpoon.slots, query, harpoon_search_text)
    index = _clamp(state.selection.harpoon_index, len(items))

    state.selection.harpoon_index = index if index is not None else 0
    state.harpoon_slots = FilterResult(items=items, selected_index=index)
    state.query = query
    return state.harpoon_slots


def filter_names(state: AppState, query: str) -> FilterResult:
    """Filter the Names tab, orphaned entries included."""
    items = _subsequence_filter(state.names.entries, query, named_window_search_text)
    index = _clamp(state.selection.names_index, len(items))

    state.selection.names_index = index if index is not None else 0
    state.named_windows = FilterResult(items=items, selected_index=index)
    state.query = query
    return state.named_windows


TAB_FILTERS = {
    Tab.WINDOWS: filter_windows,
    Tab.WORKSPACES: filter_workspaces,
    Tab.HARPOON: filter_harpoon,
    Tab.NAMES: filter_names,
}


def apply_filter(state: AppState, query: str) -> FilterResult:
    """Filter the current tab."""
    return TAB_FILTERS[state.current_tab](state, query)


def _record_selected_id(state: AppState, result: FilterResult) -> None:
    selected = result.selected
    if selected is None:
        return
    if state.current_tab == Tab.WINDOWS:
        state.selection.selected_window_id = selected.window.id
    elif state.current_tab == Tab.WORKSPACES:
        state.selection.selected_workspace_id = selected.id


def _move_selection(state: AppState, step: int) -> Optional[int]:
    tab = state.current_tab
    result = state.result_for(tab)
    if not result.items:
        return None

    current = result.selected_index if result.selected_index is not None else 0
    index = (current + step) % len(result.items)

    result.selected_index = index
    state.selection.set_index(tab, index)
    _record_selected_id(state, result)
    logger.info(f"Selection {'up' if step > 0 else 'down'} -> {tab.value}[{index}]")
    return index


def move_selection_up(state: AppState) -> Optional[int]:
    """Select the next row, wrapping from the last row to the first.

    Returns:
        New index, or None if the current tab is empty
    """
    return _move_selection(state, 1)


def move_selection_down(state: AppState) -> Optional[int]:
    """Select the previous row, wrapping from the first row to the last."""
    return _move_selection(state, -1)


def validate_selection(state: AppState) -> Optional[int]:
    """Clamp the current tab's selection into range."""
    tab = state.current_tab
    result = state.result_for(tab)
    index = _clamp(state.selection.index_for(tab), len(result.items))

    result.selected_index = index
    state.selection.set_index(tab, index if index is not None else 0)
    _record_selected_id(state, result)
    return index


def selected_window(state: AppState) -> Optional[WindowDescriptor]:
    """Window selected on the Windows tab, or None (no target)."""
    if state.current_tab != Tab.WINDOWS:
        return None
    selected = state.windows.selected
    return selected.window if selected is not None else None


def selected_workspace(state: AppState) -> Optional[WorkspaceInfo]:
    """Workspace selected on the Workspaces tab, or None."""
    if state.current_tab != Tab.WORKSPACES:
        return None
    return state.workspaces.selected


def selected_named_index(state: AppState) -> Optional[int]:
    """Registry index of the entry selected on the Names tab, or None.

    Feeds NamedWindowRegistry.rename / delete.
    """
    if state.current_tab != Tab.NAMES:
        return None
    selected = state.named_windows.selected
    if selected is None:
        return None
    for index, entry in enumerate(state.names.entries):
        if entry is selected:
            return index
    return None

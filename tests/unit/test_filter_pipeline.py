"""Unit tests for the filter pipeline and selection handling."""

import pytest

from cofi.models.filter_state import MatchTier, Tab
from cofi.models.registry import NamedWindowEntry
from cofi.models.window import WindowType
from cofi.services.filter_pipeline import (
    AppState,
    apply_filter,
    filter_harpoon,
    filter_names,
    filter_windows,
    filter_workspaces,
    move_selection_down,
    move_selection_up,
    refresh,
    selected_named_index,
    selected_window,
    selected_workspace,
    validate_selection,
)
from cofi.services.identity_registry import HarpoonRegistry, NamedWindowRegistry

from ..helpers import make_snapshot, make_window


def window_ids(result):
    return [row.window.id for row in result.items]


@pytest.fixture
def state(sample_snapshot):
    """AppState refreshed with the sample desktop."""
    app = AppState()
    refresh(app, sample_snapshot)
    return app


class TestFilterWindows:
    """Test ranking of the Windows tab."""

    def test_empty_query_alt_tab(self, state):
        """Test an empty query keeps MRU order and selects row 1."""
        result = filter_windows(state, "")

        # Normal windows in history order, then the Special dialog
        assert window_ids(result) == [1, 2, 3, 5, 4]
        assert result.selected_index == 1
        assert selected_window(state).id == 2

    def test_empty_query_tier(self, state):
        """Test unfiltered rows carry the uniform score."""
        result = filter_windows(state, "")

        assert {row.tier for row in result.items} == {MatchTier.UNFILTERED}

    def test_alt_tab_needs_two_windows(self):
        """Test a single window stays at index 0."""
        app = AppState()
        refresh(app, make_snapshot([make_window(1, "Only")], active_id=1))

        assert filter_windows(app, "").selected_index == 0

    def test_alt_tab_disabled_in_command_mode(self, state):
        """Test command mode keeps the selection on the first row."""
        state.command_mode = True

        assert filter_windows(state, "").selected_index == 0

    def test_alt_tab_only_on_windows_tab(self, state):
        """Test the alt-tab rule applies only while the Windows tab is shown."""
        state.current_tab = Tab.WORKSPACES

        assert filter_windows(state, "").selected_index == 0

    def test_query_filters(self, state):
        """Test non-matching windows are dropped."""
        result = filter_windows(state, "term")

        assert window_ids(result) == [2]
        assert result.items[0].tier == MatchTier.WORD_BOUNDARY
        assert result.items[0].score == 2000 + 100 + 500
        assert result.selected_index == 0

    def test_sorted_by_score_ties_keep_history(self):
        """Test descending score with equal scores in history order."""
        app = AppState()
        refresh(app, make_snapshot([
            make_window(10, "beta alpha", "b"),
            make_window(11, "alpha one", "a"),
            make_window(12, "alpha two", "a"),
        ]))

        result = filter_windows(app, "alpha")

        # 10 scores 2500, 11 and 12 tie at 2600
        assert window_ids(result) == [11, 12, 10]

    def test_normal_before_special(self):
        """Test Special windows follow Normal ones whatever their score."""
        app = AppState()
        refresh(app, make_snapshot([
            make_window(20, "alpha dialog", "d", type=WindowType.SPECIAL),
            make_window(21, "beta alpha", "b"),
        ]))

        result = filter_windows(app, "alpha")

        assert window_ids(result) == [21, 20]
        assert result.items[1].score > result.items[0].score

    def test_no_match_means_no_target(self, state):
        """Test an empty result has no selection."""
        result = filter_windows(state, "qqq")

        assert result.items == []
        assert result.selected_index is None
        assert selected_window(state) is None

    def test_custom_name_is_searchable(self, sample_snapshot):
        """Test named windows are scored on "{name} - {title}"."""
        names = NamedWindowRegistry([NamedWindowEntry(
            id=1, custom_name="work", original_title="Mozilla Firefox",
            class_name="firefox", instance="Navigator",
        )])
        app = AppState(names=names)
        refresh(app, sample_snapshot)

        result = filter_windows(app, "work")

        assert window_ids(result) == [1]
        assert result.items[0].custom_name == "work"
        assert result.items[0].display_title == "work - Mozilla Firefox"

    def test_harpoon_key_annotation(self, state, sample_windows):
        """Test rows report the harpoon key bound to their window."""
        state.harpoon.assign("a", sample_windows[1])

        result = filter_windows(state, "")

        keys = {row.window.id: row.harpoon_key for row in result.items}
        assert keys[2] == "a"
        assert keys[1] is None

    def test_history_updated(self, state):
        """Test the filter pass syncs the MRU history."""
        filter_windows(state, "")

        assert [w.id for w in state.history] == [1, 2, 3, 4, 5]


class TestSelectionRestore:
    """Test the selection following its window across passes."""

    def test_selection_follows_window(self, state):
        """Test the selected window keeps the cursor while the query changes."""
        filter_windows(state, "")
        move_selection_up(state)
        assert selected_window(state).id == 3

        result = filter_windows(state, "a")
        assert result.selected.window.id == 3
        assert result.selected_index == 2

        result = filter_windows(state, "code")
        assert window_ids(result) == [3]
        assert result.selected_index == 0

    def test_missing_window_resets_to_top(self, state):
        """Test a filtered-out selection falls back to row 0."""
        filter_windows(state, "")

        result = filter_windows(state, "code")

        assert result.selected_index == 0
        assert selected_window(state).id == 3


class TestMoveSelection:
    """Test wrapping selection movement."""

    def test_up_and_down_wrap(self, state):
        """Test up moves to the next row, down to the previous, both wrapping."""
        filter_windows(state, "")

        assert move_selection_up(state) == 2
        assert move_selection_down(state) == 1
        assert move_selection_down(state) == 0
        assert move_selection_down(state) == 4
        assert move_selection_up(state) == 0

    def test_empty_tab(self, state):
        """Test movement on an empty list does nothing."""
        filter_windows(state, "qqq")

        assert move_selection_up(state) is None
        assert move_selection_down(state) is None

    def test_validate_clamps(self, state):
        """Test an out-of-range index is clamped to the last row."""
        filter_windows(state, "")
        state.selection.window_index = 10

        assert validate_selection(state) == 4
        assert selected_window(state).id == 4

    def test_selected_window_only_on_windows_tab(self, state):
        """Test other tabs have no window target."""
        filter_windows(state, "")
        state.current_tab = Tab.HARPOON

        assert selected_window(state) is None


class TestOtherTabs:
    """Test the workspace, harpoon and names filters."""

    def test_workspaces(self, state):
        """Test workspaces are listed with fallback names."""
        result = filter_workspaces(state, "")

        assert [w.name for w in result.items] == ["web", "code", "3"]
        assert result.selected_index == 0

    def test_workspace_query(self, state):
        """Test workspaces filter on number and name."""
        assert [w.id for w in filter_workspaces(state, "co").items] == [1]
        assert [w.id for w in filter_workspaces(state, "3").items] == [2]

    def test_workspace_selection_follows_id(self, state):
        """Test the selected workspace survives re-filtering."""
        state.current_tab = Tab.WORKSPACES
        filter_workspaces(state, "")
        move_selection_up(state)

        result = filter_workspaces(state, "")

        assert result.selected_index == 1
        assert selected_workspace(state).name == "code"

    def test_harpoon_all_slots(self, state, sample_windows):
        """Test an empty query lists all 36 slots."""
        state.harpoon.assign("a", sample_windows[0])

        assert len(filter_harpoon(state, "")) == 36
        assert [s.key for s in filter_harpoon(state, "fire").items] == ["a"]
        assert len(filter_harpoon(state, "empty")) == 35

    def test_names(self, sample_snapshot):
        """Test the names filter and the registry index of the selection."""
        names = NamedWindowRegistry([
            NamedWindowEntry(id=1, custom_name="browser", original_title="Mozilla Firefox"),
            NamedWindowEntry(id=2, custom_name="shell", original_title="Terminal - bash",
                             assigned=False),
        ])
        app = AppState(names=names, current_tab=Tab.NAMES)
        refresh(app, sample_snapshot)

        assert len(filter_names(app, "")) == 2

        result = filter_names(app, "shell")
        assert [e.custom_name for e in result.items] == ["shell"]
        assert result.selected_index == 0
        assert selected_named_index(app) == 1

    def test_apply_filter_dispatches_on_tab(self, state):
        """Test apply_filter runs the current tab's filter."""
        state.current_tab = Tab.HARPOON

        result = apply_filter(state, "")

        assert result is state.harpoon_slots
        assert state.query == ""


class TestRefresh:
    """Test snapshot installation."""

    def test_rebinds_registries(self, sample_snapshot):
        """Test refresh re-binds a harpoon slot to the restarted window."""
        harpoon = HarpoonRegistry()
        harpoon.assign("a", make_window(99, "Mozilla Firefox", "firefox", "Navigator"))
        app = AppState(harpoon=harpoon)

        assert refresh(app, sample_snapshot) is True
        assert app.harpoon.slot_of(1) == "a"
        assert app.snapshot is sample_snapshot

    def test_nothing_to_rebind(self, state, sample_snapshot):
        """Test refresh reports no change for empty registries."""
        assert refresh(state, sample_snapshot) is False

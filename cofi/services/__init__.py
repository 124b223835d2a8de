"""
Services for cofi.

- registry_store: harpoon.json / names.json persistence
- identity_registry: harpoon slots and named windows, re-bound on id churn
- filter_pipeline: AppState and the per-tab filter passes
"""

from .identity_registry import HarpoonRegistry, NamedWindowRegistry
from .filter_pipeline import (
    AppState,
    refresh,
    filter_windows,
    filter_workspaces,
    filter_harpoon,
    filter_names,
    apply_filter,
    move_selection_up,
    move_selection_down,
    validate_selection,
    selected_window,
)

__all__ = [
    "HarpoonRegistry",
    "NamedWindowRegistry",
    "AppState",
    "refresh",
    "filter_windows",
    "filter_workspaces",
    "filter_harpoon",
    "filter_names",
    "apply_filter",
    "move_selection_up",
    "move_selection_down",
    "validate_selection",
    "selected_window",
]

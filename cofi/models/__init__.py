"""
Models for cofi.

- window: WindowDescriptor, WindowSnapshot, WorkspaceInfo (pydantic)
- registry: harpoon slots and named windows, plus their on-disk records
- filter_state: per-pass scores, ranked rows and selection (dataclasses)
- options: cofi.json options
"""

from .window import WindowType, WindowDescriptor, WindowSnapshot, WorkspaceInfo
from .registry import (
    HarpoonSlot,
    NamedWindowEntry,
    HarpoonSlotRecord,
    NamedWindowRecord,
    HarpoonFile,
    NamedWindowsFile,
    title_to_pattern,
)
from .filter_state import (
    MatchTier,
    Score,
    ScoredCandidate,
    RankedWindow,
    Tab,
    Selection,
    FilterResult,
)
from .options import Alignment, CofiOptions

__all__ = [
    "WindowType",
    "WindowDescriptor",
    "WindowSnapshot",
    "WorkspaceInfo",
    "HarpoonSlot",
    "NamedWindowEntry",
    "HarpoonSlotRecord",
    "NamedWindowRecord",
    "HarpoonFile",
    "NamedWindowsFile",
    "title_to_pattern",
    "MatchTier",
    "Score",
    "ScoredCandidate",
    "RankedWindow",
    "Tab",
    "Selection",
    "FilterResult",
    "Alignment",
    "CofiOptions",
]

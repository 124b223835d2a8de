"""
Transient filter-pass models.

Produced fresh on every filter pass and never persisted, so these are
plain dataclasses rather than pydantic models.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Generic, List, Optional, TypeVar

from .window import WindowDescriptor


class MatchTier(Enum):
    """Which scoring strategy produced a match, highest priority first."""
    WORD_BOUNDARY = "word_boundary"
    INITIALS = "initials"
    SUBSEQUENCE = "subsequence"
    FUZZY = "fuzzy"
    UNFILTERED = "unfiltered"  # empty query, every window matches
    NONE = "none"


@dataclass(frozen=True)
class Score:
    """Result of scoring one window against a query."""
    value: float
    tier: MatchTier

    def with_bonus(self, bonus: float) -> "Score":
        return Score(self.value + bonus, self.tier)


@dataclass(frozen=True)
class ScoredCandidate:
    """A window paired with its score for one filter pass."""
    window: WindowDescriptor
    score: float
    tier: MatchTier


@dataclass(frozen=True)
class RankedWindow:
    """One row of the Windows tab output."""
    window: WindowDescriptor
    harpoon_key: Optional[str] = None
    custom_name: Optional[str] = None
    score: float = 0.0
    tier: MatchTier = MatchTier.UNFILTERED

    @property
    def display_title(self) -> str:
        """Title as shown to the user, custom name first when set."""
        if self.custom_name:
            return f"{self.custom_name} - {self.window.title}"
        return self.window.title


class Tab(Enum):
    """Switcher tabs."""
    WINDOWS = "windows"
    WORKSPACES = "workspaces"
    HARPOON = "harpoon"
    NAMES = "names"


@dataclass
class Selection:
    """Per-tab selection state.

    The recorded ids let a selection follow its item across re-filtering
    instead of sticking to a row position.
    """
    window_index: int = 0
    workspace_index: int = 0
    harpoon_index: int = 0
    names_index: int = 0
    selected_window_id: int = 0
    selected_workspace_id: int = -1

    def index_for(self, tab: Tab) -> int:
        return {
            Tab.WINDOWS: self.window_index,
            Tab.WORKSPACES: self.workspace_index,
            Tab.HARPOON: self.harpoon_index,
            Tab.NAMES: self.names_index,
        }[tab]

    def set_index(self, tab: Tab, index: int) -> None:
        if tab == Tab.WINDOWS:
            self.window_index = index
        elif tab == Tab.WORKSPACES:
            self.workspace_index = index
        elif tab == Tab.HARPOON:
            self.harpoon_index = index
        else:
            self.names_index = index


T = TypeVar("T")


@dataclass
class FilterResult(Generic[T]):
    """Output of a filter pass: ordered items plus the selected row.

    selected_index is None when the list is empty ("no target").
    """
    items: List[T] = field(default_factory=list)
    selected_index: Optional[int] = None

    @property
    def selected(self) -> Optional[T]:
        if self.selected_index is None:
            return None
        return self.items[self.selected_index]

    def __len__(self) -> int:
        return len(self.items)

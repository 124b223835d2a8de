"""
Pydantic models for the identity registries.

Two kinds of entries bind a user choice to a window whose id may change
across restarts:
- HarpoonSlot: one of 36 single-key bookmarks (0-9, a-z)
- NamedWindowEntry: a custom label, re-matched by a wildcard title pattern

Each entry has an on-disk record model whose field names are the
interoperable JSON format (harpoon.json / names.json).
"""

from typing import List

from pydantic import BaseModel, Field, field_validator

from ..constants import HARPOON_KEYS, MAX_HARPOON_SLOTS
from .window import WindowDescriptor, WindowType


def title_to_pattern(title: str) -> str:
    """Convert a live title into a stored wildcard pattern.

    A literal '*' in the title would act as a wildcard, so it is stored as
    '.', which matches exactly one character.

    Examples:
        >>> title_to_pattern("*scratch* - Emacs")
        '.scratch. - Emacs'
    """
    return title.replace("*", ".")


class HarpoonSlot(BaseModel):
    """A single harpoon bookmark."""

    key: str = Field(..., min_length=1, max_length=1, description="Slot key, 0-9 or a-z")
    assigned: bool = Field(default=False, description="True if the slot is bound to a window")
    id: int = Field(default=0, ge=0, description="Bound window id (may be stale)")
    title: str = Field(default="", description="Title captured when bound")
    class_name: str = Field(default="")
    instance: str = Field(default="")
    type: WindowType = Field(default=WindowType.NORMAL)

    @field_validator('key')
    @classmethod
    def validate_key(cls, v: str) -> str:
        """Validate slot key is one of 0-9, a-z."""
        if v not in HARPOON_KEYS:
            raise ValueError(f"Invalid harpoon key: {v!r}")
        return v

    @property
    def index(self) -> int:
        """0-based slot index (0-9 for digits, 10-35 for letters)."""
        return HARPOON_KEYS.index(self.key)

    def as_descriptor(self) -> WindowDescriptor:
        """Stored identity as a descriptor, for the window matcher."""
        return WindowDescriptor(
            id=self.id,
            title=self.title,
            class_name=self.class_name,
            instance=self.instance,
            type=self.type,
        )

    def clear(self) -> None:
        """Unbind the slot, keeping the key."""
        self.assigned = False
        self.id = 0


class NamedWindowEntry(BaseModel):
    """A user-assigned custom name for a window."""

    id: int = Field(default=0, ge=0, description="Bound window id")
    custom_name: str = Field(..., min_length=1, description="User label")
    original_title: str = Field(default="", description="Wildcard title pattern ('*' any run, '.' one char)")
    class_name: str = Field(default="")
    instance: str = Field(default="")
    type: WindowType = Field(default=WindowType.NORMAL)
    assigned: bool = Field(default=True, description="False when orphaned")

    def as_descriptor(self) -> WindowDescriptor:
        """Stored identity as a descriptor, title being the pattern."""
        return WindowDescriptor(
            id=self.id,
            title=self.original_title,
            class_name=self.class_name,
            instance=self.instance,
            type=self.type,
        )


# On-disk records

class HarpoonSlotRecord(BaseModel):
    """One element of harpoon.json's "harpoon_slots" array."""

    slot: int = Field(..., ge=0, lt=MAX_HARPOON_SLOTS)
    window_id: int = Field(..., ge=0)
    title: str = ""
    class_name: str = ""
    instance: str = ""
    type: WindowType = WindowType.NORMAL

    @classmethod
    def from_slot(cls, slot: HarpoonSlot) -> "HarpoonSlotRecord":
        return cls(
            slot=slot.index,
            window_id=slot.id,
            title=slot.title,
            class_name=slot.class_name,
            instance=slot.instance,
            type=slot.type,
        )

    def to_slot(self) -> HarpoonSlot:
        return HarpoonSlot(
            key=HARPOON_KEYS[self.slot],
            assigned=True,
            id=self.window_id,
            title=self.title,
            class_name=self.class_name,
            instance=self.instance,
            type=self.type,
        )


class NamedWindowRecord(BaseModel):
    """One element of names.json's "named_windows" array."""

    window_id: int = Field(..., ge=0)
    custom_name: str = Field(..., min_length=1)
    original_title: str = ""
    class_name: str = ""
    instance: str = ""
    type: WindowType = WindowType.NORMAL
    assigned: int = Field(default=1, ge=0, le=1)

    @field_validator('assigned', mode='before')
    @classmethod
    def coerce_assigned(cls, v):
        """Accept JSON booleans as well as 0/1."""
        if isinstance(v, bool):
            return int(v)
        return v

    @classmethod
    def from_entry(cls, entry: NamedWindowEntry) -> "NamedWindowRecord":
        return cls(
            window_id=entry.id,
            custom_name=entry.custom_name,
            original_title=entry.original_title,
            class_name=entry.class_name,
            instance=entry.instance,
            type=entry.type,
            assigned=1 if entry.assigned else 0,
        )

    def to_entry(self) -> NamedWindowEntry:
        return NamedWindowEntry(
            id=self.window_id,
            custom_name=self.custom_name,
            original_title=self.original_title,
            class_name=self.class_name,
            instance=self.instance,
            type=self.type,
            assigned=bool(self.assigned),
        )


class HarpoonFile(BaseModel):
    """Top-level shape of harpoon.json."""
    harpoon_slots: List[HarpoonSlotRecord] = Field(default_factory=list)


class NamedWindowsFile(BaseModel):
    """Top-level shape of names.json."""
    named_windows: List[NamedWindowRecord] = Field(default_factory=list)

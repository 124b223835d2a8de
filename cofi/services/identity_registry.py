"""Identity registries: harpoon slots and named windows.

Both registries bind a user choice to a window id. Window ids do not
survive an application or session restart, so on every snapshot refresh
each entry whose window vanished is re-bound to a live window that looks
like the same one:

1. Exact pass: class, instance, type and title all equal
2. Fallback pass (only if the exact pass found nothing):
   - harpoon: fuzzy title match, and the stored title follows the live one
   - named windows: wildcard match against the stored title pattern
3. No match: harpoon keeps the stale id, named windows become orphaned

A live window already bound to another entry is never taken. If anything
was re-bound the registry is written back to disk.
"""

import logging
from pathlib import Path
from typing import Iterable, List, Optional, Set, Union

from ..constants import HARPOON_KEYS, MAX_NAMED_WINDOWS
from ..core.window_matcher import exact_match, fuzzy_title_match, same_application, wildcard_match
from ..errors import CapacityExceededError, ErrorCode, InvalidSlotError, RegistryError
from ..models.registry import HarpoonSlot, NamedWindowEntry, title_to_pattern
from ..models.window import WindowDescriptor, WindowSnapshot
from . import registry_store

logger = logging.getLogger(__name__)

SlotKey = Union[str, int]


class IdentityRegistry:
    """Shared reassignment algorithm.

    Subclasses provide the entries, the fallback matcher and what happens
    on a fallback hit or a miss.
    """

    name = "registry"

    def __init__(self, path: Optional[Path] = None):
        """
        Args:
            path: File to persist to; None keeps the registry in memory only
        """
        self.path = path

    # Hooks

    def assigned_entries(self) -> List:
        raise NotImplementedError

    def _stored_identity(self, entry) -> WindowDescriptor:
        return entry.as_descriptor()

    def _fallback_match(self, stored: WindowDescriptor, window: WindowDescriptor) -> bool:
        raise NotImplementedError

    def _on_fallback_hit(self, entry, window: WindowDescriptor) -> None:
        entry.id = window.id

    def _on_miss(self, entry) -> None:
        pass

    def save(self) -> bool:
        raise NotImplementedError

    # Shared algorithm

    def bound_ids(self) -> Set[int]:
        """Ids currently held by assigned entries."""
        return {entry.id for entry in self.assigned_entries()}

    def reconcile(self, snapshot: WindowSnapshot) -> bool:
        """Re-bind entries whose window disappeared.

        Args:
            snapshot: Live windows

        Returns:
            True if any entry was re-bound (the registry was then saved)
        """
        live_ids = snapshot.ids()
        changed = False

        for entry in self.assigned_entries():
            if entry.id in live_ids:
                continue

            old_id = entry.id
            stored = self._stored_identity(entry)
            bound = self.bound_ids()
            candidates = [w for w in snapshot.windows if w.id not in bound]

            match = next((w for w in candidates if exact_match(stored, w)), None)
            if match is not None:
                entry.id = match.id
                logger.info(
                    f"Reassigned {self.name} {self._label(entry)} from {old_id:#x} "
                    f"to {match.id:#x} (exact match: {match.title})"
                )
                changed = True
                continue

            match = next((w for w in candidates if self._fallback_match(stored, w)), None)
            if match is not None:
                self._on_fallback_hit(entry, match)
                logger.info(
                    f"Reassigned {self.name} {self._label(entry)} from {old_id:#x} "
                    f"to {match.id:#x} (fuzzy match: {match.title})"
                )
                changed = True
                continue

            logger.debug(f"No replacement for {self.name} {self._label(entry)} ({old_id:#x})")
            self._on_miss(entry)

        if changed:
            self.save()

        return changed

    def _label(self, entry) -> str:
        return repr(entry)


class HarpoonRegistry(IdentityRegistry):
    """36 single-key window bookmarks (0-9, a-z)."""

    name = "harpoon slot"

    def __init__(self, slots: Optional[List[HarpoonSlot]] = None, path: Optional[Path] = None):
        super().__init__(path)
        self.slots = slots if slots is not None else registry_store.empty_harpoon_slots()

    @classmethod
    def load(cls, path: Path) -> "HarpoonRegistry":
        """Create a registry from harpoon.json."""
        return cls(registry_store.load_harpoon_slots(path), path=path)

    def save(self) -> bool:
        if self.path is None:
            return False
        return registry_store.save_harpoon_slots(self.path, self.slots)

    def assigned_entries(self) -> List[HarpoonSlot]:
        return [slot for slot in self.slots if slot.assigned]

    def _fallback_match(self, stored: WindowDescriptor, window: WindowDescriptor) -> bool:
        return fuzzy_title_match(stored, window)

    def _on_fallback_hit(self, entry: HarpoonSlot, window: WindowDescriptor) -> None:
        entry.id = window.id
        entry.title = window.title

    def _label(self, entry: HarpoonSlot) -> str:
        return entry.key

    def _slot(self, key: SlotKey) -> HarpoonSlot:
        """Resolve a key ('0'-'9', 'a'-'z', any case) or index 0-35."""
        if isinstance(key, bool):
            raise InvalidSlotError(key)
        if isinstance(key, int):
            if 0 <= key < len(HARPOON_KEYS):
                return self.slots[key]
            raise InvalidSlotError(key)
        if isinstance(key, str) and len(key) == 1 and key.lower() in HARPOON_KEYS:
            return self.slots[HARPOON_KEYS.index(key.lower())]
        raise InvalidSlotError(key)

    def assign(self, key: SlotKey, window: WindowDescriptor) -> HarpoonSlot:
        """Bind a slot to a window, replacing any previous binding.

        A window lives in at most one slot: binding it here clears any
        other slot holding it.

        Raises:
            InvalidSlotError: If key is not a valid slot
        """
        slot = self._slot(key)

        for other in self.slots:
            if other is not slot and other.assigned and other.id == window.id:
                logger.debug(f"Moving window {window.id:#x} from slot {other.key} to {slot.key}")
                other.clear()

        slot.assigned = True
        slot.id = window.id
        slot.title = window.title
        slot.class_name = window.class_name
        slot.instance = window.instance
        slot.type = window.type
        logger.info(f"Assigned window {window.id:#x} ({window.title}) to slot {slot.key}")

        self.save()
        return slot

    def unassign(self, key: SlotKey) -> None:
        slot = self._slot(key)
        if slot.assigned:
            slot.clear()
            logger.info(f"Unassigned slot {slot.key}")
            self.save()

    def is_assigned(self, key: SlotKey) -> bool:
        return self._slot(key).assigned

    def get(self, key: SlotKey) -> HarpoonSlot:
        return self._slot(key)

    def slot_of(self, window_id: int) -> Optional[str]:
        """Key of the slot bound to a window, or None."""
        if window_id == 0:
            return None
        for slot in self.slots:
            if slot.assigned and slot.id == window_id:
                return slot.key
        return None

    def id_of(self, key: SlotKey) -> Optional[int]:
        """Window id bound to a slot, or None if the slot is empty."""
        slot = self._slot(key)
        return slot.id if slot.assigned else None

    def __iter__(self):
        return iter(self.slots)

    def __len__(self) -> int:
        return len(self.slots)


class NamedWindowRegistry(IdentityRegistry):
    """User-assigned custom window names, in creation order."""

    name = "named window"

    def __init__(self, entries: Optional[Iterable[NamedWindowEntry]] = None, path: Optional[Path] = None):
        super().__init__(path)
        self.entries: List[NamedWindowEntry] = list(entries or [])

    @classmethod
    def load(cls, path: Path) -> "NamedWindowRegistry":
        """Create a registry from names.json."""
        return cls(registry_store.load_named_windows(path), path=path)

    def save(self) -> bool:
        if self.path is None:
            return False
        return registry_store.save_named_windows(self.path, self.entries)

    def assigned_entries(self) -> List[NamedWindowEntry]:
        return [entry for entry in self.entries if entry.assigned]

    def _fallback_match(self, stored: WindowDescriptor, window: WindowDescriptor) -> bool:
        return same_application(stored, window) and wildcard_match(stored.title, window.title)

    def _on_miss(self, entry: NamedWindowEntry) -> None:
        entry.assigned = False
        logger.info(f"Named window '{entry.custom_name}' orphaned")

    def _label(self, entry: NamedWindowEntry) -> str:
        return f"'{entry.custom_name}'"

    def _check_index(self, index: int) -> NamedWindowEntry:
        if not 0 <= index < len(self.entries):
            raise RegistryError(
                code=ErrorCode.INVALID_NAME_INDEX,
                message=f"No named window at index {index}",
                suggestion=f"Use an index between 0 and {len(self.entries) - 1}",
                context={"index": index, "count": len(self.entries)},
            )
        return self.entries[index]

    @staticmethod
    def _check_name(custom_name: str) -> None:
        if not custom_name:
            raise RegistryError(
                code=ErrorCode.EMPTY_CUSTOM_NAME,
                message="Custom name must not be empty",
            )

    def assign(self, window: WindowDescriptor, custom_name: str) -> NamedWindowEntry:
        """Name a window, or rename it if it already has a name.

        The window's title is stored as a wildcard pattern (literal '*'
        becomes '.') so the name can follow the window across restarts.

        Raises:
            RegistryError: If custom_name is empty
            CapacityExceededError: If the registry is full
        """
        self._check_name(custom_name)

        index = self.index_of(window.id)
        if index is not None:
            entry = self.entries[index]
            entry.custom_name = custom_name
            logger.info(f"Updated custom name for window {window.id:#x} to '{custom_name}'")
            self.save()
            return entry

        if len(self.entries) >= MAX_NAMED_WINDOWS:
            raise CapacityExceededError(
                "named windows", MAX_NAMED_WINDOWS, len(self.entries) + 1,
                code=ErrorCode.TOO_MANY_NAMED_WINDOWS,
            )

        entry = NamedWindowEntry(
            id=window.id,
            custom_name=custom_name,
            original_title=title_to_pattern(window.title),
            class_name=window.class_name,
            instance=window.instance,
            type=window.type,
            assigned=True,
        )
        self.entries.append(entry)
        logger.info(f"Assigned custom name '{custom_name}' to window {window.id:#x}")
        self.save()
        return entry

    def rename(self, index: int, new_name: str) -> NamedWindowEntry:
        """Change the custom name of the entry at index.

        Raises:
            RegistryError: If index is out of range or new_name is empty
        """
        self._check_name(new_name)
        entry = self._check_index(index)
        logger.info(f"Renaming '{entry.custom_name}' to '{new_name}' (window {entry.id:#x})")
        entry.custom_name = new_name
        self.save()
        return entry

    def delete(self, index: int) -> NamedWindowEntry:
        """Remove the entry at index; later entries shift down.

        Raises:
            RegistryError: If index is out of range
        """
        entry = self._check_index(index)
        del self.entries[index]
        logger.info(f"Deleted custom name '{entry.custom_name}' (window {entry.id:#x})")
        self.save()
        return entry

    def get(self, index: int) -> Optional[NamedWindowEntry]:
        if 0 <= index < len(self.entries):
            return self.entries[index]
        return None

    def index_of(self, window_id: int) -> Optional[int]:
        """Position of the entry holding window_id, assigned or not."""
        if window_id == 0:
            return None
        for index, entry in enumerate(self.entries):
            if entry.id == window_id:
                return index
        return None

    def custom_name_of(self, window_id: int) -> Optional[str]:
        """Custom name of a window, ignoring orphaned entries."""
        if window_id == 0:
            return None
        for entry in self.entries:
            if entry.assigned and entry.id == window_id:
                return entry.custom_name
        return None

    def is_named(self, window_id: int) -> bool:
        return self.custom_name_of(window_id) is not None

    def __iter__(self):
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

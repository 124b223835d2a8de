"""JSON persistence for harpoon slots and named windows.

Reads and writes ~/.config/cofi/harpoon.json and ~/.config/cofi/names.json.
Loading is best-effort: a missing file yields defaults, and malformed files
or records are skipped with a warning so one bad entry never costs the user
the rest of their bookmarks. Writes are atomic (temp file + rename); a
failed write is logged and reported through the return value.
"""

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ValidationError

from ..constants import HARPOON_KEYS, MAX_NAMED_WINDOWS
from ..models.registry import (
    HarpoonFile,
    HarpoonSlot,
    HarpoonSlotRecord,
    NamedWindowEntry,
    NamedWindowRecord,
    NamedWindowsFile,
)

logger = logging.getLogger(__name__)


def empty_harpoon_slots() -> List[HarpoonSlot]:
    """All 36 slots, unassigned."""
    return [HarpoonSlot(key=key) for key in HARPOON_KEYS]


def read_json_object(path: Path) -> Optional[Dict[str, Any]]:
    """Read a JSON object from disk.

    Returns:
        Parsed object, or None if the file is missing, unreadable, not
        valid JSON, or not a JSON object
    """
    if not path.exists():
        logger.debug(f"{path} does not exist, using defaults")
        return None

    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        logger.warning(f"Ignoring malformed JSON in {path}: {e}")
        return None
    except OSError as e:
        logger.warning(f"Could not read {path}: {e}")
        return None

    if not isinstance(data, dict):
        logger.warning(f"Ignoring {path}: top level is not a JSON object")
        return None

    return data


def write_json_atomic(path: Path, data: Dict[str, Any]) -> bool:
    """Write a JSON object atomically (temp file + rename).

    Returns:
        True on success; on failure the error is logged and False returned
    """
    try:
        path.parent.mkdir(parents=True, exist_ok=True)

        fd, temp_path = tempfile.mkstemp(
            dir=path.parent, prefix=f".{path.stem}-", suffix=".json"
        )
        try:
            with os.fdopen(fd, "w") as f:
                json.dump(data, f, indent=2)
                f.flush()
                os.fsync(f.fileno())

            os.replace(temp_path, path)
        except Exception:
            if Path(temp_path).exists():
                os.unlink(temp_path)
            raise

    except OSError as e:
        logger.error(f"Failed to write {path}: {e}")
        return False

    return True


def _records(data: Optional[Dict[str, Any]], key: str, path: Path) -> List[Any]:
    if data is None:
        return []
    raw = data.get(key, [])
    if not isinstance(raw, list):
        logger.warning(f"Ignoring {key!r} in {path}: expected a list")
        return []
    return raw


def _parse_record(model: type, item: Any, path: Path, position: int) -> Optional[BaseModel]:
    try:
        return model.model_validate(item)
    except ValidationError as e:
        logger.warning(f"Skipping invalid record #{position} in {path}: {e.error_count()} error(s)")
        logger.debug(f"Validation details: {e}")
        return None


def load_harpoon_slots(path: Path) -> List[HarpoonSlot]:
    """Load harpoon slots.

    Args:
        path: Path to harpoon.json

    Returns:
        All 36 slots in key order; slots absent from the file are unassigned
    """
    slots = empty_harpoon_slots()
    data = read_json_object(path)

    loaded = 0
    for position, item in enumerate(_records(data, "harpoon_slots", path)):
        record = _parse_record(HarpoonSlotRecord, item, path, position)
        if record is None:
            continue
        if slots[record.slot].assigned:
            logger.warning(f"Duplicate harpoon slot {record.slot} in {path}, keeping the first")
            continue
        slots[record.slot] = record.to_slot()
        loaded += 1
        logger.debug(f"Loaded slot {HARPOON_KEYS[record.slot]}: window {record.window_id:#x} '{record.title}'")

    if data is not None:
        logger.info(f"Loaded {loaded} harpoon slot(s) from {path}")

    return slots


def save_harpoon_slots(path: Path, slots: List[HarpoonSlot]) -> bool:
    """Save assigned harpoon slots (unassigned slots are not written)."""
    document = HarpoonFile(
        harpoon_slots=[HarpoonSlotRecord.from_slot(s) for s in slots if s.assigned]
    )
    ok = write_json_atomic(path, document.model_dump(mode='json'))
    if ok:
        logger.info(f"Saved {len(document.harpoon_slots)} harpoon slot(s) to {path}")
    return ok


def load_named_windows(path: Path) -> List[NamedWindowEntry]:
    """Load named windows in file order.

    Args:
        path: Path to names.json

    Returns:
        Entries, at most MAX_NAMED_WINDOWS of them
    """
    entries: List[NamedWindowEntry] = []
    data = read_json_object(path)
    records = _records(data, "named_windows", path)

    if len(records) > MAX_NAMED_WINDOWS:
        logger.warning(
            f"{path} holds {len(records)} named windows, keeping the first {MAX_NAMED_WINDOWS}"
        )
        records = records[:MAX_NAMED_WINDOWS]

    for position, item in enumerate(records):
        record = _parse_record(NamedWindowRecord, item, path, position)
        if record is None:
            continue
        entries.append(record.to_entry())

    if data is not None:
        logger.info(f"Loaded {len(entries)} named window(s) from {path}")

    return entries


def save_named_windows(path: Path, entries: List[NamedWindowEntry]) -> bool:
    """Save all named windows, orphaned ones included."""
    document = NamedWindowsFile(
        named_windows=[NamedWindowRecord.from_entry(e) for e in entries]
    )
    ok = write_json_atomic(path, document.model_dump(mode='json'))
    if ok:
        logger.info(f"Saved {len(document.named_windows)} named window(s) to {path}")
    return ok

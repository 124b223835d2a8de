"""Load and save switcher options (~/.config/cofi.json).

The options live under the "options" key; other top-level keys in the file
are preserved on save. Invalid values fall back to their defaults.
"""

import logging
from pathlib import Path
from typing import Any, Dict, Optional

from pydantic import ValidationError

from .constants import ConfigPaths
from .models.options import CofiOptions
from .services.registry_store import read_json_object, write_json_atomic

logger = logging.getLogger(__name__)

OPTIONS_KEY = "options"


def _validate_options(raw: Dict[str, Any], path: Path) -> CofiOptions:
    """Validate options, dropping fields that fail validation."""
    known = {k: v for k, v in raw.items() if k in CofiOptions.model_fields}
    for unknown in sorted(set(raw) - set(known)):
        logger.warning(f"Ignoring unknown option {unknown!r} in {path}")

    try:
        return CofiOptions.model_validate(known)
    except ValidationError as e:
        bad_fields = {err["loc"][0] for err in e.errors() if err.get("loc")}
        for field_name in sorted(bad_fields):
            logger.warning(f"Invalid value for option {field_name!r} in {path}, using default")
        cleaned = {k: v for k, v in known.items() if k not in bad_fields}
        return CofiOptions.model_validate(cleaned)


def load_options(path: Optional[Path] = None) -> CofiOptions:
    """Load options, falling back to defaults.

    Args:
        path: Options file (defaults to ~/.config/cofi.json)

    Returns:
        CofiOptions; defaults if the file is missing or unusable
    """
    path = path or ConfigPaths.OPTIONS_FILE
    data = read_json_object(path)
    if data is None:
        return CofiOptions()

    raw = data.get(OPTIONS_KEY, {})
    if not isinstance(raw, dict):
        logger.warning(f"Ignoring {OPTIONS_KEY!r} in {path}: expected an object")
        return CofiOptions()

    options = _validate_options(raw, path)
    logger.debug(f"Loaded options from {path}: {options.model_dump(mode='json')}")
    return options


def save_options(options: CofiOptions, path: Optional[Path] = None) -> bool:
    """Write options, keeping any other top-level keys already in the file.

    Returns:
        True if the file was written
    """
    path = path or ConfigPaths.OPTIONS_FILE
    data = read_json_object(path) or {}
    data[OPTIONS_KEY] = options.model_dump(mode='json')

    ok = write_json_atomic(path, data)
    if ok:
        logger.info(f"Saved options to {path}")
    return ok

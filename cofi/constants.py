"""Centralized configuration paths and constants for cofi.

Single source of truth for file locations, capacities and scoring weights
used across the package.
"""

from pathlib import Path
from typing import Final


class ConfigPaths:
    """Centralized configuration paths.

    All paths are computed once at import time based on user's home directory.
    Loaders accept an explicit path, so tests never touch these.

    Example:
        from cofi.constants import ConfigPaths

        slots = load_harpoon_slots(ConfigPaths.HARPOON_FILE)
    """

    HOME: Final[Path] = Path.home()
    CONFIG_DIR: Final[Path] = HOME / ".config"
    COFI_CONFIG_DIR: Final[Path] = CONFIG_DIR / "cofi"

    # Options live next to the cofi directory, registries inside it
    OPTIONS_FILE: Final[Path] = CONFIG_DIR / "cofi.json"
    HARPOON_FILE: Final[Path] = COFI_CONFIG_DIR / "harpoon.json"
    NAMES_FILE: Final[Path] = COFI_CONFIG_DIR / "names.json"


# Capacities
MAX_WINDOWS: Final[int] = 256
MAX_HARPOON_SLOTS: Final[int] = 36
MAX_NAMED_WINDOWS: Final[int] = MAX_WINDOWS

# Harpoon slot keys: 0-9 then a-z
HARPOON_KEYS: Final[str] = "0123456789abcdefghijklmnopqrstuvwxyz"

# Window class of the switcher itself, never promoted in history
OWN_WINDOW_CLASS: Final[str] = "cofi"

# Sticky windows are shown on every workspace
STICKY_DESKTOP: Final[int] = -1

# Scoring tiers
SCORE_WORD_BOUNDARY: Final[int] = 2000
SCORE_INITIALS_MATCH: Final[int] = 1900
SCORE_SUBSEQUENCE_MATCH: Final[int] = 1500
SCORE_CLASS_INSTANCE_MATCH: Final[int] = 1400
SCORE_FUZZY_BASE: Final[int] = 1000
SCORE_UNFILTERED: Final[int] = 1000

# Bonuses
SCORE_WORD_CHAIN_BONUS: Final[int] = 300
SCORE_TITLE_START_BONUS: Final[int] = 100
SCORE_INITIALS_EXTRA_WORD_BONUS: Final[int] = 50
SCORE_CURRENT_WORKSPACE_BONUS: Final[int] = 500

# Fuzzy tier detail weights
SCORE_FUZZY_CONSECUTIVE_BONUS: Final[int] = 10
SCORE_FUZZY_CASE_BONUS: Final[int] = 10
SCORE_FUZZY_POSITION_PENALTY: Final[int] = 1

# Characters that start a new word for the word-boundary and initials tiers
WORD_BOUNDARY_CHARS: Final[frozenset] = frozenset(" -_.(|")

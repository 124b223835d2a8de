"""User options stored in ~/.config/cofi.json under "options"."""

import logging
from enum import Enum

from pydantic import BaseModel, Field, field_validator

logger = logging.getLogger(__name__)


class Alignment(str, Enum):
    """Where the switcher window is placed on screen."""
    CENTER = "center"
    TOP = "top"
    TOP_LEFT = "top_left"
    TOP_RIGHT = "top_right"
    LEFT = "left"
    RIGHT = "right"
    BOTTOM = "bottom"
    BOTTOM_LEFT = "bottom_left"
    BOTTOM_RIGHT = "bottom_right"


class CofiOptions(BaseModel):
    """Switcher options with their built-in defaults."""

    close_on_focus_loss: bool = Field(default=True, description="Close the switcher when it loses focus")
    align: Alignment = Field(default=Alignment.CENTER, description="Screen alignment")
    workspaces_per_row: int = Field(default=0, ge=0, description="Workspace grid width, 0 for a single row")
    tile_columns: int = Field(default=2, description="Tiling grid columns (2 or 3)")

    @field_validator('align', mode='before')
    @classmethod
    def fallback_align(cls, v):
        """Unknown alignment names fall back to center."""
        if isinstance(v, Alignment):
            return v
        try:
            return Alignment(v)
        except ValueError:
            logger.warning(f"Unknown align value {v!r}, using center")
            return Alignment.CENTER

    @field_validator('tile_columns', mode='before')
    @classmethod
    def validate_tile_columns(cls, v):
        """Only 2 or 3 columns are supported; anything else becomes 3."""
        if v in (2, 3) and not isinstance(v, bool):
            return v
        logger.warning(f"Invalid tile_columns value {v!r}, using default 3")
        return 3

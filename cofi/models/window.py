"""
Pydantic models for windows and window-system snapshots.

A WindowSnapshot is what the window-system collaborator hands to cofi on
every refresh: the live windows, the active window and the current
workspace. Descriptors are frozen; a refresh replaces them wholesale.
"""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from ..constants import MAX_WINDOWS, STICKY_DESKTOP
from ..errors import CapacityExceededError, ErrorCode


class WindowType(str, Enum):
    """Window classification used for list partitioning."""
    NORMAL = "Normal"
    SPECIAL = "Special"


class WindowDescriptor(BaseModel):
    """A single top-level window as reported by the window system."""

    model_config = ConfigDict(frozen=True)

    id: int = Field(..., ge=0, description="Window handle, stable during a session")
    title: str = Field(default="", description="Window title")
    class_name: str = Field(default="", description="WM_CLASS class part (or Wayland app_id)")
    instance: str = Field(default="", description="WM_CLASS instance part")
    type: WindowType = Field(default=WindowType.NORMAL, description="Normal or Special")
    desktop: int = Field(default=0, ge=STICKY_DESKTOP, description="Workspace index, -1 for sticky")
    pid: int = Field(default=0, ge=0, description="Owning process id (0 if unknown)")

    @property
    def is_sticky(self) -> bool:
        """Check if window is visible on all workspaces."""
        return self.desktop == STICKY_DESKTOP

    @property
    def is_normal(self) -> bool:
        return self.type == WindowType.NORMAL

    def workspace_title(self, title: Optional[str] = None) -> str:
        """Title with the 1-based workspace number appended.

        Lets users filter by workspace ("firefox 2"). Sticky windows keep
        the raw title.

        Args:
            title: Title to use instead of self.title (custom names)
        """
        base = self.title if title is None else title
        if self.is_sticky:
            return base
        return f"{base} {self.desktop + 1}"


class WorkspaceInfo(BaseModel):
    """A workspace (desktop) entry for the Workspaces tab."""

    model_config = ConfigDict(frozen=True)

    id: int = Field(..., ge=0, description="0-based workspace index")
    name: str = Field(default="", description="Workspace name")
    is_current: bool = Field(default=False, description="True for the user's current workspace")


class WindowSnapshot(BaseModel):
    """Everything the window system reports on one refresh."""

    windows: List[WindowDescriptor] = Field(default_factory=list)
    active_id: int = Field(default=0, ge=0, description="Currently focused window (0 = none)")
    current_desktop: int = Field(default=0, ge=0, description="User's current workspace index")
    desktop_count: int = Field(default=1, ge=0, description="Number of workspaces")
    desktop_names: List[str] = Field(default_factory=list, description="Optional workspace names")

    @model_validator(mode='after')
    def check_capacity(self) -> 'WindowSnapshot':
        """Reject snapshots larger than the window capacity."""
        if len(self.windows) > MAX_WINDOWS:
            raise CapacityExceededError(
                "windows", MAX_WINDOWS, len(self.windows),
                code=ErrorCode.TOO_MANY_WINDOWS,
            )
        return self

    def ids(self) -> set:
        """Set of live window ids."""
        return {w.id for w in self.windows}

    def workspaces(self) -> List[WorkspaceInfo]:
        """Workspace list for the Workspaces tab.

        Unnamed workspaces are named after their 1-based number.
        """
        result = []
        for index in range(self.desktop_count):
            if index < len(self.desktop_names) and self.desktop_names[index]:
                name = self.desktop_names[index]
            else:
                name = str(index + 1)
            result.append(WorkspaceInfo(
                id=index,
                name=name,
                is_current=(index == self.current_desktop),
            ))
        return result

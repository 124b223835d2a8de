"""Window-system snapshot sources."""

from .i3_snapshot import build_snapshot, take_snapshot

__all__ = ["build_snapshot", "take_snapshot"]

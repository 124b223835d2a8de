"""
Display modules for the diagnostic CLI.
"""

from . import ranking_display
from . import registry_display

__all__ = ['ranking_display', 'registry_display']

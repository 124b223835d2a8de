"""cofi - window identity and ranking core for a desktop window switcher.

This package provides:
- Multi-tier fuzzy scoring of windows against a typed query
- MRU window history with alt-tab ordering guarantees
- Harpoon slots and named windows that survive window id churn
- The filter pipeline that turns a window snapshot into a ranked list
"""

__version__ = "0.1.0"
__author__ = "cofi contributors"
__license__ = "MIT"

__all__ = ["__version__", "__author__", "__license__"]

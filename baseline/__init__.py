"""
baseline package marker.
"""

from baseline.comparator import BaselineComparator, BaselineEntry, BaselineReport

__all__ = ["BaselineComparator", "BaselineEntry", "BaselineReport"]

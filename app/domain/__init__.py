"""
app/domain package marker.
"""

from app.domain.anomaly import ResultSet, ScoredGroup, TabularResult
from app.domain.tally import ColumnSelector, GlobalTally, PartialTally, TallyMode

__all__ = [
    "ColumnSelector",
    "GlobalTally",
    "PartialTally",
    "ResultSet",
    "ScoredGroup",
    "TabularResult",
    "TallyMode",
]

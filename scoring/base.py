"""
scoring/base.py

Abstract base interface for tally scorers.
All scorer implementations must inherit from BaseScorer.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence

from app.domain.anomaly import ResultSet
from app.domain.tally import GlobalTally


class BaseScorer(ABC):
    """Abstract base class for tally scorers.

    Defines the contract shared by scoring strategies: consume a merged
    GlobalTally and produce an ordered, immutable ResultSet.
    """

    @abstractmethod
    def score(self, tally: GlobalTally, *, columns: Sequence[str] = ()) -> ResultSet:
        """Score every group in the tally.

        Args:
            tally: Merged tally including its record total.
            columns: Selector columns the tally was grouped by; used only
                     to label the result.

        Returns:
            The groups passing the scorer's filter, in report order.
        """
        raise NotImplementedError("Subclasses must implement score()")

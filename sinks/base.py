"""
sinks/base.py

Abstract base interface for result sinks.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from app.domain.anomaly import TabularResult


class ResultSink(ABC):
    """
    Renders a finished result somewhere. Sinks never modify the result.
    """

    @abstractmethod
    def emit(self, result: TabularResult) -> None:
        raise NotImplementedError("Subclasses must implement emit()")

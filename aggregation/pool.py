"""
aggregation/pool.py

Worker-pool sizing policies for the aggregation coordinator.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol


class PoolSizingPolicy(Protocol):
    """
    Given the number of files to process, return the worker count.
    """

    def __call__(self, file_count: int) -> int: ...


@dataclass(frozen=True)
class HalfFileCountPolicy:
    """
    One worker per two files, clamped to ``[minimum, maximum]``.
    """

    minimum: int = 1
    maximum: int = 10

    def __call__(self, file_count: int) -> int:
        return max(self.minimum, min(file_count // 2, self.maximum))


@dataclass(frozen=True)
class FixedPoolSize:
    """
    Always use ``size`` workers (at least one).
    """

    size: int

    def __call__(self, file_count: int) -> int:
        return max(1, self.size)

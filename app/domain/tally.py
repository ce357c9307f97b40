"""
app/domain/tally.py

Domain models shared by the tally workers and the aggregation coordinator.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Sequence, Union

Row = tuple[str, ...]
TallyKey = Union[str, Row]


class TallyMode(str, Enum):
    """
    How a worker records the rows it attributes to a group.

    COUNT keeps only occurrence counts. ROWS also keeps every full row
    so the report can show each occurrence of a rare value.
    """

    COUNT = "count"
    ROWS = "rows"


@dataclass(frozen=True)
class ColumnSelector:
    """
    Ordered header names used to group records.
    """

    columns: tuple[str, ...]

    def __post_init__(self) -> None:
        if not self.columns:
            raise ValueError("At least one selector column is required.")
        for name in self.columns:
            if not name or not name.strip():
                raise ValueError(f"Invalid selector column name: {name!r}")

    @classmethod
    def from_names(cls, names: Sequence[str]) -> ColumnSelector:
        return cls(columns=tuple(name.strip() for name in names))

    @property
    def is_composite(self) -> bool:
        return len(self.columns) > 1


@dataclass
class PartialTally:
    """
    Result of tallying one input file.

    ``counts`` is always populated. ``rows`` is only populated in ROWS mode,
    where ``counts[key] == len(rows[key])``. ``records`` is the number of data
    rows attributed to at least one group.
    """

    source: Path
    mode: TallyMode
    counts: dict[TallyKey, int] = field(default_factory=dict)
    rows: dict[TallyKey, list[Row]] = field(default_factory=dict)
    records: int = 0
    error_code: str | None = None

    @property
    def failed(self) -> bool:
        return self.error_code is not None

    def add(self, key: TallyKey, row: Row | None = None) -> None:
        self.counts[key] = self.counts.get(key, 0) + 1
        if self.mode is TallyMode.ROWS and row is not None:
            self.rows.setdefault(key, []).append(row)


@dataclass
class GlobalTally:
    """
    Run-wide tally built from every PartialTally.

    Only the aggregation coordinator mutates this object, and only after all
    workers have finished.
    """

    mode: TallyMode
    counts: dict[TallyKey, int] = field(default_factory=dict)
    rows: dict[TallyKey, list[Row]] = field(default_factory=dict)
    total_records: int = 0

    def merge(self, partial: PartialTally) -> None:
        """
        Fold one partial tally's groups into this tally.

        The record total is accumulated separately by the coordinator.
        """

        for key, count in partial.counts.items():
            self.counts[key] = self.counts.get(key, 0) + count
        for key, rows in partial.rows.items():
            self.rows.setdefault(key, []).extend(rows)

    def __len__(self) -> int:
        return len(self.counts)

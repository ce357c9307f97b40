"""
app/domain/anomaly.py

Domain models produced by the anomaly scorer and consumed by result sinks.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Protocol

from app.domain.tally import Row, TallyKey, TallyMode


class TabularResult(Protocol):
    """
    Anything a result sink can render: a header, string records and a
    small summary of how the records were produced.
    """

    def header(self) -> list[str]: ...

    def records(self) -> list[list[str]]: ...

    def summary(self) -> dict[str, object]: ...


@dataclass(frozen=True)
class ScoredGroup:
    """
    One scored group, or one occurrence of a scored group in ROWS mode.
    """

    key: TallyKey
    count: int
    score: float
    row: Row | None = None

    def key_fields(self) -> tuple[str, ...]:
        if isinstance(self.key, tuple):
            return self.key
        return (self.key,)

    def to_record(self) -> list[str]:
        """
        Flatten into display fields: count, score, then the row or the key.
        """

        fields = self.row if self.row is not None else self.key_fields()
        return [str(self.count), f"{self.score:f}", *fields]


@dataclass(frozen=True)
class ResultSet:
    """
    Ordered, immutable sequence of anomalous groups.

    Attributes
    ----------
    groups:        Scored groups, most anomalous first.
    threshold:     Rarity threshold the groups were filtered with.
    total_records: Record total the proportions were computed against.
    mode:          Tally mode the groups came from.
    columns:       Selector columns used for grouping.
    """

    groups: tuple[ScoredGroup, ...]
    threshold: float
    total_records: int
    mode: TallyMode
    columns: tuple[str, ...]

    def __iter__(self) -> Iterator[ScoredGroup]:
        return iter(self.groups)

    def __len__(self) -> int:
        return len(self.groups)

    def header(self) -> list[str]:
        if self.mode is TallyMode.COUNT:
            return ["count", "score", *self.columns]
        width = max((len(group.row or ()) for group in self.groups), default=0)
        return ["count", "score", *(f"field_{index}" for index in range(1, width + 1))]

    def records(self) -> list[list[str]]:
        return [group.to_record() for group in self.groups]

    def summary(self) -> dict[str, object]:
        return {
            "columns": ", ".join(self.columns),
            "mode": self.mode.value,
            "threshold": self.threshold,
            "total_records": self.total_records,
            "anomalies": len(self.groups),
        }

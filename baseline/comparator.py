"""
baseline/comparator.py

Sequential baseline comparison.

For one column, reports how many of a directory's files contain each
distinct value, as a fraction of the files that could be read. An optional
baseline file marks which values it already contains.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from aggregation.errors import FileTallyError
from aggregation.source import discover_input_files
from aggregation.worker import read_table, resolve_columns
from app.domain.tally import ColumnSelector
from app.logging_utils import log_event

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BaselineEntry:
    """
    One distinct value and the fraction of files containing it.
    """

    value: str
    average: float
    in_baseline: bool | None = None


@dataclass(frozen=True)
class BaselineReport:
    """
    Baseline comparison result, most common values first.
    """

    entries: tuple[BaselineEntry, ...]
    column: str
    files_compared: int
    baseline_file: str | None = None

    def __len__(self) -> int:
        return len(self.entries)

    def header(self) -> list[str]:
        columns = ["average", self.column]
        if self.baseline_file is not None:
            columns.append("in_baseline")
        return columns

    def records(self) -> list[list[str]]:
        records: list[list[str]] = []
        for entry in self.entries:
            record = [f"{entry.average:.2f}", entry.value]
            if self.baseline_file is not None:
                record.append("yes" if entry.in_baseline else "no")
            records.append(record)
        return records

    def summary(self) -> dict[str, object]:
        return {
            "column": self.column,
            "files_compared": self.files_compared,
            "baseline_file": self.baseline_file or "-",
            "values": len(self.entries),
        }


class BaselineComparator:
    """
    Computes per-value file coverage for one column.
    """

    def __init__(
        self,
        *,
        column: str,
        extension: str = ".csv",
        encoding: str = "utf-8-sig",
    ) -> None:
        self._selector = ColumnSelector.from_names([column])
        self._extension = extension
        self._encoding = encoding

    @property
    def column(self) -> str:
        return self._selector.columns[0]

    def distinct_values(self, path: str | Path) -> set[str]:
        """
        Return the set of values in the column for ``path``.

        Raises:
            FileTallyError: the file cannot be read or lacks the column.
        """

        file_path = Path(path)
        rows = read_table(file_path, encoding=self._encoding)
        [(_column, index)] = resolve_columns(file_path, rows[0], self._selector)
        return {row[index] for row in rows[1:] if len(row) > index}

    def compare(
        self,
        directory: str | Path,
        *,
        baseline_file: str | Path | None = None,
    ) -> BaselineReport:
        baseline_values: set[str] | None = None
        if baseline_file is not None:
            baseline_values = self.distinct_values(baseline_file)

        files = sorted(discover_input_files(directory, extension=self._extension, recursive=False))
        if baseline_file is not None:
            baseline_path = Path(baseline_file).resolve()
            files = [path for path in files if path.resolve() != baseline_path]

        file_counts: dict[str, int] = {}
        files_compared = 0
        for path in files:
            try:
                values = self.distinct_values(path)
            except FileTallyError as exc:
                log_event(
                    logger,
                    logging.ERROR,
                    "baseline_file_skipped",
                    code=exc.code,
                    path=str(path),
                    error=str(exc),
                )
                continue
            files_compared += 1
            for value in values:
                file_counts[value] = file_counts.get(value, 0) + 1

        entries = [
            BaselineEntry(
                value=value,
                average=count / files_compared,
                in_baseline=None if baseline_values is None else value in baseline_values,
            )
            for value, count in file_counts.items()
        ]
        entries.sort(key=lambda entry: (-entry.average, entry.value))

        log_event(
            logger,
            logging.INFO,
            "baseline_compared",
            column=self.column,
            files_compared=files_compared,
            values=len(entries),
        )
        return BaselineReport(
            entries=tuple(entries),
            column=self.column,
            files_compared=files_compared,
            baseline_file=None if baseline_file is None else str(baseline_file),
        )

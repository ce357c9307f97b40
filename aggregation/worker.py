"""
aggregation/worker.py

File tally worker: turns one tabular file into a PartialTally.

The worker is stateless across files. Every per-file problem (open failure,
malformed content, missing columns) is logged and converted into an empty,
failed PartialTally; nothing raised here reaches the coordinator.
"""

from __future__ import annotations

import csv
import logging
from pathlib import Path

from aggregation.errors import ColumnNotFound, FileTallyError, FileUnparsable, FileUnreadable
from app import failure_codes
from app.domain.tally import ColumnSelector, PartialTally, Row, TallyMode
from app.logging_utils import log_event

logger = logging.getLogger(__name__)


def read_numbered_table(
    path: str | Path,
    *,
    encoding: str = "utf-8-sig",
) -> list[tuple[int, Row]]:
    """
    Read every non-blank row of a delimited file with its line number.

    Line numbers are physical: blank lines are skipped but still counted,
    and a quoted field spanning lines numbers the record by its last line.

    Raises:
        FileUnreadable: the file cannot be opened or read.
        FileUnparsable: the content is not valid delimited text or has no header.
    """

    file_path = Path(path)
    try:
        handle = file_path.open("r", encoding=encoding, newline="")
    except OSError as exc:
        raise FileUnreadable(file_path, f"Failed to open file {file_path}: {exc}") from exc

    with handle:
        reader = csv.reader(handle)
        try:
            rows = [(reader.line_num, tuple(record)) for record in reader if record]
        except (csv.Error, UnicodeDecodeError) as exc:
            raise FileUnparsable(file_path, f"Failed to read file {file_path}: {exc}") from exc
        except OSError as exc:
            raise FileUnreadable(file_path, f"Failed to read file {file_path}: {exc}") from exc

    if not rows:
        raise FileUnparsable(file_path, f"Header row is missing in file {file_path}")
    return rows


def read_table(path: str | Path, *, encoding: str = "utf-8-sig") -> list[Row]:
    """
    Read every non-blank row of a delimited file, header first.

    Rows may have any number of fields.
    """

    return [row for _line_number, row in read_numbered_table(path, encoding=encoding)]


def resolve_columns(
    path: Path,
    header: Row,
    selector: ColumnSelector,
) -> list[tuple[str, int]]:
    """
    Map each selector column to its first position in ``header``.

    Columns absent from the header are logged and skipped.

    Raises:
        ColumnNotFound: none of the selector columns is present.
    """

    resolved: list[tuple[str, int]] = []
    for column in selector.columns:
        try:
            resolved.append((column, header.index(column)))
        except ValueError:
            log_event(
                logger,
                logging.WARNING,
                "column_not_found",
                code=failure_codes.COLUMN_NOT_FOUND,
                column=column,
                path=str(path),
            )
    if not resolved:
        raise ColumnNotFound(path, selector.columns)
    return resolved


class FileTallyWorker:
    """
    Tallies one file at a time for a fixed selector and mode.

    In COUNT mode with several selector columns the key always has one slot
    per selector column, in selector order. A column missing from a file
    fills its slot with ``MISSING_VALUE`` so values never shift into another
    column's position.
    """

    MISSING_VALUE = ""

    def __init__(
        self,
        *,
        selector: ColumnSelector,
        mode: TallyMode = TallyMode.COUNT,
        encoding: str = "utf-8-sig",
    ) -> None:
        self._selector = selector
        self._mode = mode
        self._encoding = encoding

    @property
    def mode(self) -> TallyMode:
        return self._mode

    def tally(self, path: str | Path) -> PartialTally:
        """
        Tally ``path``. Never raises for file-level problems.
        """

        file_path = Path(path)
        try:
            rows = read_numbered_table(file_path, encoding=self._encoding)
            resolved = resolve_columns(file_path, rows[0][1], self._selector)
        except FileTallyError as exc:
            log_event(
                logger,
                logging.ERROR,
                "file_tally_failed",
                code=exc.code,
                path=str(file_path),
                error=str(exc),
            )
            return PartialTally(source=file_path, mode=self._mode, error_code=exc.code)

        if self._mode is TallyMode.ROWS:
            return self._tally_rows(file_path, rows[1:], resolved)
        return self._tally_counts(file_path, rows[1:], resolved)

    def _tally_counts(
        self,
        path: Path,
        rows: list[tuple[int, Row]],
        resolved: list[tuple[str, int]],
    ) -> PartialTally:
        partial = PartialTally(source=path, mode=TallyMode.COUNT)
        widest_column, required = max(resolved, key=lambda item: item[1])
        positions = dict(resolved)
        slots = [positions.get(column) for column in self._selector.columns]

        if self._selector.is_composite and None in slots:
            log_event(
                logger,
                logging.WARNING,
                "composite_key_padded",
                path=str(path),
                missing=[column for column in self._selector.columns if column not in positions],
                placeholder=self.MISSING_VALUE,
            )

        for line_number, row in rows:
            if len(row) <= required:
                self._warn_short_row(path, line_number, widest_column, len(row))
                continue
            if self._selector.is_composite:
                partial.add(
                    tuple(self.MISSING_VALUE if index is None else row[index] for index in slots)
                )
            else:
                partial.add(row[required])
            partial.records += 1
        return partial

    def _tally_rows(
        self,
        path: Path,
        rows: list[tuple[int, Row]],
        resolved: list[tuple[str, int]],
    ) -> PartialTally:
        # One row can land in several buckets, one per selector column.
        partial = PartialTally(source=path, mode=TallyMode.ROWS)

        for line_number, row in rows:
            attributed = False
            for column, index in resolved:
                if len(row) <= index:
                    self._warn_short_row(path, line_number, column, len(row))
                    continue
                partial.add(row[index], row)
                attributed = True
            if attributed:
                partial.records += 1
        return partial

    @staticmethod
    def _warn_short_row(path: Path, line_number: int, column: str, width: int) -> None:
        log_event(
            logger,
            logging.WARNING,
            "row_too_short",
            column=column,
            path=str(path),
            line_number=line_number,
            width=width,
        )

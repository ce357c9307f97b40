"""
sinks/delimited.py

Delimited-file writer for result records.
"""

from __future__ import annotations

import csv
import logging
from pathlib import Path

from app.domain.anomaly import TabularResult
from app.logging_utils import log_event
from sinks.base import ResultSink

logger = logging.getLogger(__name__)


class DelimitedFileSink(ResultSink):
    """
    Writes records to ``output_file`` with ``csv.writer``.
    """

    def __init__(
        self,
        output_file: str | Path,
        *,
        include_header: bool = False,
        delimiter: str = ",",
    ) -> None:
        self._output_file = Path(output_file)
        self._include_header = include_header
        self._delimiter = delimiter

    def emit(self, result: TabularResult) -> None:
        records = result.records()
        with self._output_file.open("w", encoding="utf-8", newline="") as handle:
            writer = csv.writer(handle, delimiter=self._delimiter)
            if self._include_header:
                writer.writerow(result.header())
            writer.writerows(records)

        log_event(
            logger,
            logging.INFO,
            "delimited_file_written",
            path=str(self._output_file),
            records=len(records),
        )

"""
sinks/console.py

Plain listing of result records on a text stream.
"""

from __future__ import annotations

import sys
from typing import TextIO

from app.domain.anomaly import TabularResult
from sinks.base import ResultSink


class ConsoleSink(ResultSink):
    """
    Prints one bracketed, space-separated line per record.
    """

    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream

    def emit(self, result: TabularResult) -> None:
        stream = self._stream or sys.stdout
        for record in result.records():
            print(f"[{' '.join(record)}]", file=stream)

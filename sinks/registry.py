"""
sinks/registry.py

Maps output format names to result sinks.
"""

from __future__ import annotations

from pathlib import Path
from typing import TextIO

from sinks.base import ResultSink
from sinks.console import ConsoleSink
from sinks.delimited import DelimitedFileSink
from sinks.html import HTMLReportSink

OUTPUT_FORMATS: tuple[str, ...] = ("console", "html", "csv")


def build_sink(
    output_format: str,
    output_file: str | Path,
    *,
    title: str = "Anomaly report",
    stream: TextIO | None = None,
) -> ResultSink:
    """
    Return the sink for ``output_format``.

    Raises:
        ValueError: unknown output format.
    """

    normalized = output_format.strip().lower()
    if normalized == "console":
        return ConsoleSink(stream)
    if normalized == "html":
        return HTMLReportSink(output_file, title=title)
    if normalized == "csv":
        return DelimitedFileSink(output_file)
    raise ValueError(
        f"Unknown output format: {output_format}. Allowed values: {list(OUTPUT_FORMATS)}."
    )


def writes_file(output_format: str) -> bool:
    return output_format.strip().lower() != "console"

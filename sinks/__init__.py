"""
sinks package marker.
"""

from sinks.base import ResultSink
from sinks.console import ConsoleSink
from sinks.delimited import DelimitedFileSink
from sinks.html import HTMLReportSink
from sinks.registry import OUTPUT_FORMATS, build_sink

__all__ = [
    "ConsoleSink",
    "DelimitedFileSink",
    "HTMLReportSink",
    "OUTPUT_FORMATS",
    "ResultSink",
    "build_sink",
]

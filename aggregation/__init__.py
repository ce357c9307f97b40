"""
aggregation package marker.
"""

from aggregation.coordinator import AggregationCoordinator
from aggregation.errors import (
    ColumnNotFound,
    FileUnparsable,
    FileUnreadable,
    InputDirectoryNotFound,
    NoInputFilesFound,
    RarityError,
)
from aggregation.pool import FixedPoolSize, HalfFileCountPolicy, PoolSizingPolicy
from aggregation.source import discover_input_files
from aggregation.worker import FileTallyWorker

__all__ = [
    "AggregationCoordinator",
    "ColumnNotFound",
    "FileTallyWorker",
    "FileUnparsable",
    "FileUnreadable",
    "FixedPoolSize",
    "HalfFileCountPolicy",
    "InputDirectoryNotFound",
    "NoInputFilesFound",
    "PoolSizingPolicy",
    "RarityError",
    "discover_input_files",
]

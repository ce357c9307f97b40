"""
aggregation/source.py

Record source: discovers candidate input files under a root directory.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from aggregation.errors import InputDirectoryNotFound, NoInputFilesFound
from app.logging_utils import log_event

logger = logging.getLogger(__name__)


def discover_input_files(
    directory: str | Path,
    *,
    extension: str = ".csv",
    recursive: bool = True,
) -> list[Path]:
    """
    Return the tabular files under ``directory`` matching ``extension``.

    The returned order follows the directory walk and carries no meaning
    for later stages.

    Raises:
        InputDirectoryNotFound: ``directory`` does not exist or is not a directory.
        NoInputFilesFound:      no matching file was found.
    """

    root = Path(directory)
    if not root.is_dir():
        raise InputDirectoryNotFound(root)

    suffix = extension.lower()
    files: list[Path] = []
    if recursive:
        for dirpath, _dirnames, filenames in os.walk(root, onerror=_log_walk_error):
            for filename in filenames:
                if Path(filename).suffix.lower() == suffix:
                    files.append(Path(dirpath) / filename)
    else:
        files = [
            entry
            for entry in root.iterdir()
            if entry.is_file() and entry.suffix.lower() == suffix
        ]

    if not files:
        raise NoInputFilesFound(root, suffix)

    log_event(
        logger,
        logging.DEBUG,
        "input_files_discovered",
        directory=str(root),
        extension=suffix,
        file_count=len(files),
    )
    return files


def _log_walk_error(exc: OSError) -> None:
    log_event(
        logger,
        logging.WARNING,
        "directory_walk_failed",
        path=getattr(exc, "filename", None),
        error=str(exc),
    )

"""
aggregation/errors.py

Exception taxonomy for detection runs.

Fatal errors (bad input directory, no files) propagate to the caller.
Per-file errors are raised inside the tally worker and absorbed at its
boundary, so a bad file costs only its own records.
"""

from __future__ import annotations

from pathlib import Path

from app import failure_codes


class RarityError(Exception):
    """
    Base class for detection errors. ``code`` is a stable failure code.
    """

    code: str = "rarity_error"


class InputDirectoryNotFound(RarityError, FileNotFoundError):
    """
    Raised when the root input directory does not exist.
    """

    code = failure_codes.INPUT_DIRECTORY_NOT_FOUND

    def __init__(self, directory: str | Path) -> None:
        super().__init__(f"Directory {directory} does not exist")
        self.directory = Path(directory)


class NoInputFilesFound(RarityError):
    """
    Raised when a directory walk yields no candidate files.
    """

    code = failure_codes.NO_INPUT_FILES_FOUND

    def __init__(self, directory: str | Path, extension: str) -> None:
        super().__init__(f"No {extension} files found in directory {directory}")
        self.directory = Path(directory)
        self.extension = extension


class FileTallyError(RarityError):
    """
    Per-file failure; never escapes the tally worker.
    """

    def __init__(self, path: str | Path, message: str) -> None:
        super().__init__(message)
        self.path = Path(path)


class FileUnreadable(FileTallyError):
    code = failure_codes.FILE_UNREADABLE


class FileUnparsable(FileTallyError):
    code = failure_codes.FILE_UNPARSABLE


class ColumnNotFound(FileTallyError):
    """
    Raised when none of the selector columns appear in a file's header.
    """

    code = failure_codes.COLUMN_NOT_FOUND

    def __init__(self, path: str | Path, columns: tuple[str, ...]) -> None:
        super().__init__(path, f"Header(s) {', '.join(columns)} not found in file {path}")
        self.columns = columns

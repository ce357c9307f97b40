"""Shared failure code constants for detection error handling."""

INPUT_DIRECTORY_NOT_FOUND = "input_directory_not_found"
NO_INPUT_FILES_FOUND = "no_input_files_found"
FILE_UNREADABLE = "file_unreadable"
FILE_UNPARSABLE = "file_unparsable"
COLUMN_NOT_FOUND = "column_not_found"
ZERO_TOTAL_RECORDS = "zero_total_records"

FATAL_FAILURES = [
    INPUT_DIRECTORY_NOT_FOUND,
    NO_INPUT_FILES_FOUND,
]

RECOVERABLE_FAILURES = [
    FILE_UNREADABLE,
    FILE_UNPARSABLE,
    COLUMN_NOT_FOUND,
    ZERO_TOTAL_RECORDS,
]

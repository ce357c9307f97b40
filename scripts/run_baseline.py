"""
Compare a directory of CSV files against a baseline from CLI.
"""

from __future__ import annotations

import argparse
import logging
from collections.abc import Sequence

from pydantic import ValidationError

from aggregation.errors import RarityError
from aggregation.source import discover_input_files
from app.config import get_detection_settings
from app.logging_utils import configure_logging
from app.schemas.detection import BaselineRequest
from baseline.comparator import BaselineComparator
from scripts.cli_common import (
    EXIT_FAILURE,
    EXIT_OK,
    EXIT_USAGE,
    confirm_overwrite,
    format_validation_error,
)
from sinks.registry import OUTPUT_FORMATS, build_sink, writes_file

logger = logging.getLogger(__name__)


def main(argv: Sequence[str] | None = None) -> int:
    configure_logging()
    settings = get_detection_settings()

    parser = argparse.ArgumentParser(
        description="Report how many files contain each value of a CSV column."
    )
    parser.add_argument("-d", dest="directory", default=".", help="Directory containing CSV files.")
    parser.add_argument("-b", dest="baseline_file", default=None, help="Baseline CSV file (optional).")
    parser.add_argument("--header", dest="column", default="Path", help="CSV header to compare on.")
    parser.add_argument("-o", dest="output_format", default="console", choices=OUTPUT_FORMATS)
    parser.add_argument("-f", dest="output_file", default=settings.output_file)
    parser.add_argument("-y", "--yes", dest="assume_yes", action="store_true")
    args = parser.parse_args(argv)

    try:
        request = BaselineRequest(
            directory=args.directory,
            column=args.column,
            baseline_file=args.baseline_file,
            output_format=args.output_format,
            output_file=args.output_file,
        )
    except ValidationError as exc:
        logger.error("Invalid arguments: %s", format_validation_error(exc))
        return EXIT_USAGE

    try:
        discover_input_files(request.directory, extension=settings.file_extension, recursive=False)
    except RarityError as exc:
        logger.error("Baseline comparison failed [%s]: %s", exc.code, exc)
        return EXIT_FAILURE

    if writes_file(request.output_format) and not confirm_overwrite(
        request.output_file, assume_yes=args.assume_yes
    ):
        logger.info("Output file %s left unchanged.", request.output_file)
        return EXIT_OK

    comparator = BaselineComparator(
        column=request.column,
        extension=settings.file_extension,
        encoding=settings.file_encoding,
    )
    try:
        report = comparator.compare(request.directory, baseline_file=request.baseline_file)
        build_sink(request.output_format, request.output_file, title="Baseline report").emit(report)
    except RarityError as exc:
        logger.error("Baseline comparison failed [%s]: %s", exc.code, exc)
        return EXIT_FAILURE
    except OSError as exc:
        logger.error("Failed to write output %s: %s", request.output_file, exc)
        return EXIT_FAILURE
    return EXIT_OK


if __name__ == "__main__":
    raise SystemExit(main())

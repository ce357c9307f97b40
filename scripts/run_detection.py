"""
Run categorical anomaly detection over a directory of CSV files from CLI.
"""

from __future__ import annotations

import argparse
import logging
from collections.abc import Sequence

from pydantic import ValidationError

from aggregation.errors import RarityError
from aggregation.source import discover_input_files
from app.logging_utils import configure_logging
from app.schemas.detection import DetectionRequest
from app.services.detection_service import get_detection_service
from scripts.cli_common import (
    EXIT_FAILURE,
    EXIT_OK,
    EXIT_USAGE,
    confirm_overwrite,
    format_validation_error,
)
from sinks.registry import OUTPUT_FORMATS, build_sink, writes_file

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    settings = get_detection_service().settings
    parser = argparse.ArgumentParser(
        description="Flag rare column values across a directory of CSV files."
    )
    parser.add_argument("-d", dest="directory", default=".", help="Directory containing CSV files.")
    parser.add_argument(
        "--header",
        dest="columns",
        default="Path",
        help="CSV header(s) to group by (comma-separated).",
    )
    parser.add_argument(
        "-o",
        dest="output_format",
        default="console",
        choices=OUTPUT_FORMATS,
        help="Output format.",
    )
    parser.add_argument(
        "-f",
        dest="output_file",
        default=settings.output_file,
        help="Output file path for html and csv formats.",
    )
    parser.add_argument(
        "-t",
        dest="threshold",
        type=float,
        default=settings.threshold,
        help="Threshold for log proportion to identify anomalies.",
    )
    parser.add_argument(
        "-w",
        dest="workers",
        type=int,
        default=None,
        help="Worker pool size (default: half the file count, clamped).",
    )
    parser.add_argument(
        "--mode",
        dest="mode",
        default="count",
        choices=("count", "rows"),
        help="count: one result per rare value; rows: one result per row of a rare value.",
    )
    parser.add_argument(
        "-y",
        "--yes",
        dest="assume_yes",
        action="store_true",
        help="Overwrite the output file without prompting.",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    configure_logging()
    args = build_parser().parse_args(argv)

    try:
        request = DetectionRequest(
            directory=args.directory,
            columns=args.columns,
            threshold=args.threshold,
            workers=args.workers,
            mode=args.mode,
            output_format=args.output_format,
            output_file=args.output_file,
        )
    except ValidationError as exc:
        logger.error("Invalid arguments: %s", format_validation_error(exc))
        return EXIT_USAGE

    service = get_detection_service()
    try:
        discover_input_files(request.directory, extension=service.settings.file_extension)
    except RarityError as exc:
        logger.error("Detection failed [%s]: %s", exc.code, exc)
        return EXIT_FAILURE

    if writes_file(request.output_format) and not confirm_overwrite(
        request.output_file, assume_yes=args.assume_yes
    ):
        logger.info("Output file %s left unchanged.", request.output_file)
        return EXIT_OK

    sink = build_sink(request.output_format, request.output_file, title="Anomaly report")
    try:
        service.detect(request, sink=sink)
    except RarityError as exc:
        logger.error("Detection failed [%s]: %s", exc.code, exc)
        return EXIT_FAILURE
    except OSError as exc:
        logger.error("Failed to write output %s: %s", request.output_file, exc)
        return EXIT_FAILURE
    return EXIT_OK


if __name__ == "__main__":
    raise SystemExit(main())

"""
Helpers shared by the command-line entry points.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable

from pydantic import ValidationError

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_USAGE = 2


def confirm_overwrite(
    output_file: str | Path,
    *,
    assume_yes: bool = False,
    prompt: Callable[[str], str] | None = None,
) -> bool:
    """
    Return True when ``output_file`` may be written.

    An existing file is only overwritten after the user answers ``y``.
    """

    path = Path(output_file)
    if assume_yes or not path.exists():
        return True
    try:
        answer = (prompt or input)(f"Output file {path} already exists. Overwrite? (y/n) ")
    except EOFError:
        logger.error("Failed to read user input for overwrite confirmation.")
        return False
    return answer.strip().lower() == "y"


def format_validation_error(exc: ValidationError) -> str:
    parts = []
    for error in exc.errors():
        location = ".".join(str(item) for item in error.get("loc", ())) or "request"
        parts.append(f"{location}: {error.get('msg', 'invalid value')}")
    return "; ".join(parts)

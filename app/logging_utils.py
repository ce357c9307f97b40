"""
Structured logging helpers for detection workflows.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from app.config import get_log_level


def configure_logging() -> None:
    """
    Configure root logging once for the CLI process.
    """

    logging.basicConfig(
        level=getattr(logging, get_log_level(), logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def log_event(
    logger: logging.Logger,
    level: int,
    event: str,
    **fields: Any,
) -> None:
    """
    Log ``event`` and its fields as one JSON object with sorted keys.

    Values JSON cannot encode (paths, enums) are written with ``str``.
    Nothing is serialized when ``level`` is disabled for ``logger``.
    """

    if not logger.isEnabledFor(level):
        return
    logger.log(level, json.dumps({"event": event, **fields}, default=str, sort_keys=True))

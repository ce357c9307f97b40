"""
app/config.py

Application-level configuration helpers.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path


ENV_FILENAMES = (".env", ".env.local")


def load_env_files(root: Path | None = None) -> None:
    """
    Load KEY=VALUE pairs from the project's `.env` files, if present.

    Later files win over earlier ones, the process environment wins over both.
    An ``export`` prefix and surrounding quotes are accepted.
    """

    project_root = root or Path(__file__).resolve().parents[1]
    loaded: dict[str, str] = {}
    for filename in ENV_FILENAMES:
        env_path = project_root / filename
        if not env_path.is_file():
            continue

        for raw_line in env_path.read_text(encoding="utf-8").splitlines():
            line = raw_line.strip()
            if line.startswith("export "):
                line = line[len("export "):].lstrip()
            if not line or line.startswith("#") or "=" not in line:
                continue

            key, value = (part.strip() for part in line.split("=", 1))
            if key:
                loaded[key] = value.strip('"').strip("'")

    for key, value in loaded.items():
        os.environ.setdefault(key, value)


@lru_cache(maxsize=1)
def _load_env_once() -> None:
    """
    Ensure project `.env` files are loaded once before reading settings.
    """

    load_env_files()


def _get_int_env(name: str, default: int) -> int:
    """
    Read an integer from environment variables with safe fallback.
    """

    _load_env_once()
    raw_value = os.getenv(name)
    if raw_value is None:
        return default
    try:
        return int(raw_value)
    except ValueError:
        return default


def _get_float_env(name: str, default: float) -> float:
    """
    Read a float from environment variables with safe fallback.
    """

    _load_env_once()
    raw_value = os.getenv(name)
    if raw_value is None:
        return default
    try:
        return float(raw_value)
    except ValueError:
        return default


def _get_str_env(name: str, default: str) -> str:
    """
    Read a string from environment variables with fallback.
    """

    _load_env_once()
    value = os.getenv(name)
    if value is None:
        return default
    stripped = value.strip()
    return stripped if stripped else default


@dataclass(frozen=True)
class DetectionSettings:
    """
    Runtime settings for anomaly detection runs.
    """

    threshold: float = -3.0
    file_extension: str = ".csv"
    min_workers: int = 1
    max_workers: int = 10
    file_encoding: str = "utf-8-sig"
    output_file: str = "output.csv"


@lru_cache(maxsize=1)
def get_detection_settings() -> DetectionSettings:
    """
    Return cached detection settings from environment variables.
    """

    min_workers = max(1, _get_int_env("RARITY_MIN_WORKERS", 1))
    extension = _get_str_env("RARITY_FILE_EXTENSION", ".csv")
    if not extension.startswith("."):
        extension = f".{extension}"

    return DetectionSettings(
        threshold=_get_float_env("RARITY_THRESHOLD", -3.0),
        file_extension=extension.lower(),
        min_workers=min_workers,
        max_workers=max(min_workers, _get_int_env("RARITY_MAX_WORKERS", 10)),
        file_encoding=_get_str_env("RARITY_FILE_ENCODING", "utf-8-sig"),
        output_file=_get_str_env("RARITY_OUTPUT_FILE", "output.csv"),
    )


def get_log_level() -> str:
    """
    Return the configured root log level name.
    """

    return _get_str_env("LOG_LEVEL", "INFO").upper()

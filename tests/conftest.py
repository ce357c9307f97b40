from __future__ import annotations

import csv
from pathlib import Path
from typing import Callable, Sequence

import pytest

WriteCSV = Callable[..., Path]


@pytest.fixture()
def write_csv(tmp_path: Path) -> WriteCSV:
    """Factory writing rows (header first) to a CSV file under tmp_path."""

    def _write(name: str, rows: Sequence[Sequence[str]], *, directory: Path | None = None) -> Path:
        target = (directory or tmp_path) / name
        target.parent.mkdir(parents=True, exist_ok=True)
        with target.open("w", encoding="utf-8", newline="") as handle:
            csv.writer(handle).writerows(rows)
        return target

    return _write


@pytest.fixture()
def category_dir(tmp_path: Path, write_csv: WriteCSV) -> Path:
    """Three files: A x4, B x1, C x1 in column ``category``."""

    data_dir = tmp_path / "data"
    write_csv("one.csv", [("id", "category"), ("1", "A"), ("2", "A"), ("3", "B")], directory=data_dir)
    write_csv("two.csv", [("id", "category"), ("4", "A"), ("5", "C")], directory=data_dir)
    write_csv("three.csv", [("id", "category"), ("6", "A")], directory=data_dir)
    return data_dir

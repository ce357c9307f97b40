from __future__ import annotations

import logging
from pathlib import Path

import pytest

from aggregation.errors import ColumnNotFound, InputDirectoryNotFound
from baseline.comparator import BaselineComparator, BaselineEntry


@pytest.fixture()
def paths_dir(tmp_path: Path, write_csv) -> Path:
    data_dir = tmp_path / "paths"
    write_csv("a.csv", [("Path",), ("/bin/sh",), ("/bin/sh",), ("/tmp/x",)], directory=data_dir)
    write_csv("b.csv", [("Path",), ("/bin/sh",), ("/usr/bin/env",)], directory=data_dir)
    write_csv("c.csv", [("Path", "Size"), ("/bin/sh", "1")], directory=data_dir)
    write_csv("d.csv", [("Other",), ("/bin/sh",)], directory=data_dir)
    write_csv("nested/e.csv", [("Path",), ("/ignored",)], directory=data_dir)
    return data_dir


def test_reports_fraction_of_files_containing_each_value(paths_dir: Path, caplog) -> None:
    with caplog.at_level(logging.WARNING):
        report = BaselineComparator(column="Path").compare(paths_dir)

    assert report.files_compared == 3
    assert report.entries[0] == BaselineEntry(value="/bin/sh", average=1.0)
    assert [entry.value for entry in report.entries[1:]] == ["/tmp/x", "/usr/bin/env"]
    assert report.entries[1].average == pytest.approx(1 / 3)
    assert "baseline_file_skipped" in caplog.text
    assert report.records()[0] == ["1.00", "/bin/sh"]
    assert report.header() == ["average", "Path"]


def test_marks_values_present_in_baseline(paths_dir: Path, tmp_path: Path, write_csv) -> None:
    baseline = write_csv("baseline.csv", [("Path",), ("/bin/sh",), ("/usr/bin/env",)])

    report = BaselineComparator(column="Path").compare(paths_dir, baseline_file=baseline)

    flags = {entry.value: entry.in_baseline for entry in report.entries}
    assert flags == {"/bin/sh": True, "/tmp/x": False, "/usr/bin/env": True}
    assert report.header() == ["average", "Path", "in_baseline"]
    assert ["0.33", "/tmp/x", "no"] in report.records()


def test_baseline_file_inside_directory_is_not_compared(paths_dir: Path, write_csv) -> None:
    baseline = write_csv("z_baseline.csv", [("Path",), ("/only/baseline",)], directory=paths_dir)

    report = BaselineComparator(column="Path").compare(paths_dir, baseline_file=baseline)

    assert report.files_compared == 3
    assert "/only/baseline" not in {entry.value for entry in report.entries}


def test_baseline_without_column_is_fatal(paths_dir: Path, write_csv) -> None:
    baseline = write_csv("bad_baseline.csv", [("Other",), ("x",)])

    with pytest.raises(ColumnNotFound):
        BaselineComparator(column="Path").compare(paths_dir, baseline_file=baseline)


def test_missing_directory(tmp_path: Path) -> None:
    with pytest.raises(InputDirectoryNotFound):
        BaselineComparator(column="Path").compare(tmp_path / "nope")

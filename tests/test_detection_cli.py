"""
tests/test_detection_cli.py

Tests for the request schema, the detection service and the CLI entry points.
"""

from __future__ import annotations

import csv
import threading
from pathlib import Path

import pytest
from pydantic import ValidationError

from aggregation.errors import InputDirectoryNotFound, NoInputFilesFound
from app.config import DetectionSettings
from app.schemas.detection import BaselineRequest, DetectionRequest
from app.services.detection_service import DetectionService
from scripts import run_baseline, run_detection
from scripts.cli_common import confirm_overwrite


# ---------------------------------------------------------------------------
# DetectionRequest
# ---------------------------------------------------------------------------


class TestDetectionRequest:
    def test_splits_comma_separated_columns(self) -> None:
        request = DetectionRequest(directory="data", columns="user, host")

        assert request.columns == ("user", "host")
        assert request.threshold == -3.0
        assert request.mode == "count"

    @pytest.mark.parametrize("columns", ["", "user,,host", ()])
    def test_rejects_blank_columns(self, columns: object) -> None:
        with pytest.raises(ValidationError):
            DetectionRequest(directory="data", columns=columns)

    def test_rejects_non_positive_workers(self) -> None:
        with pytest.raises(ValidationError):
            DetectionRequest(directory="data", columns="user", workers=0)

    def test_rejects_unknown_output_format(self) -> None:
        with pytest.raises(ValidationError):
            DetectionRequest(directory="data", columns="user", output_format="xml")

    def test_baseline_request_defaults(self) -> None:
        request = BaselineRequest(directory="data", column="Path")

        assert request.baseline_file is None
        assert request.output_format == "console"


# ---------------------------------------------------------------------------
# DetectionService
# ---------------------------------------------------------------------------


class TestDetectionService:
    @pytest.fixture()
    def service(self) -> DetectionService:
        return DetectionService(settings=DetectionSettings())

    def test_detect_runs_end_to_end(self, service: DetectionService, category_dir: Path) -> None:
        request = DetectionRequest(
            directory=str(category_dir), columns="category", threshold=-0.5, workers=3
        )

        result = service.detect(request)

        assert [group.key for group in result] == ["B", "C"]
        assert result.total_records == 6

    def test_detect_rows_mode(self, service: DetectionService, category_dir: Path) -> None:
        request = DetectionRequest(
            directory=str(category_dir), columns="category", threshold=-0.5, mode="rows"
        )

        result = service.detect(request)

        assert [group.row for group in result] == [("3", "B"), ("5", "C")]

    def test_missing_directory_is_fatal(self, service: DetectionService, tmp_path: Path) -> None:
        request = DetectionRequest(directory=str(tmp_path / "missing"), columns="category")

        with pytest.raises(InputDirectoryNotFound):
            service.detect(request)

    def test_no_files_is_fatal(self, service: DetectionService, tmp_path: Path) -> None:
        with pytest.raises(NoInputFilesFound):
            service.detect(DetectionRequest(directory=str(tmp_path), columns="category"))

    def test_pool_policy_prefers_override(self, service: DetectionService) -> None:
        assert service.pool_policy(4)(100) == 4
        assert service.pool_policy()(100) == 10

    def test_cancelled_run_returns_empty_result(
        self, service: DetectionService, category_dir: Path
    ) -> None:
        cancel = threading.Event()
        cancel.set()

        result = service.detect(
            DetectionRequest(directory=str(category_dir), columns="category"),
            cancel_event=cancel,
        )

        assert len(result) == 0


# ---------------------------------------------------------------------------
# CLI
# ---------------------------------------------------------------------------


class TestConfirmOverwrite:
    def test_missing_file_needs_no_prompt(self, tmp_path: Path) -> None:
        def _fail(_: str) -> str:
            raise AssertionError("prompted")

        assert confirm_overwrite(tmp_path / "new.csv", prompt=_fail)

    @pytest.mark.parametrize(("answer", "expected"), [("y", True), ("Y\n", True), ("n", False), ("", False)])
    def test_existing_file_prompts(self, tmp_path: Path, answer: str, expected: bool) -> None:
        target = tmp_path / "out.csv"
        target.write_text("old", encoding="utf-8")

        assert confirm_overwrite(target, prompt=lambda _: answer) is expected

    def test_eof_declines(self, tmp_path: Path) -> None:
        target = tmp_path / "out.csv"
        target.write_text("old", encoding="utf-8")

        def _eof(_: str) -> str:
            raise EOFError

        assert confirm_overwrite(target, prompt=_eof) is False


class TestRunDetection:
    def test_console_output(self, category_dir: Path, capsys) -> None:
        code = run_detection.main(["-d", str(category_dir), "--header", "category", "-t", "-0.5"])

        assert code == 0
        lines = capsys.readouterr().out.splitlines()
        assert lines == ["[1 -0.778151 B]", "[1 -0.778151 C]"]

    def test_csv_output(self, category_dir: Path, tmp_path: Path) -> None:
        target = tmp_path / "out.csv"

        code = run_detection.main(
            ["-d", str(category_dir), "--header", "category", "-t", "-0.5", "-o", "csv", "-f", str(target)]
        )

        assert code == 0
        with target.open(encoding="utf-8", newline="") as handle:
            assert [row[2] for row in csv.reader(handle)] == ["B", "C"]

    def test_declined_overwrite_keeps_file(
        self, category_dir: Path, tmp_path: Path, monkeypatch
    ) -> None:
        target = tmp_path / "out.csv"
        target.write_text("keep", encoding="utf-8")
        monkeypatch.setattr("builtins.input", lambda _: "n")

        code = run_detection.main(
            ["-d", str(category_dir), "--header", "category", "-o", "csv", "-f", str(target)]
        )

        assert code == 0
        assert target.read_text(encoding="utf-8") == "keep"

    def test_missing_directory_exits_one(self, tmp_path: Path) -> None:
        assert run_detection.main(["-d", str(tmp_path / "missing"), "--header", "category"]) == 1

    def test_missing_directory_fails_before_overwrite_prompt(
        self, tmp_path: Path, monkeypatch
    ) -> None:
        target = tmp_path / "out.csv"
        target.write_text("keep", encoding="utf-8")
        prompts: list[str] = []
        monkeypatch.setattr("builtins.input", lambda message: prompts.append(message) or "y")

        code = run_detection.main(
            ["-d", str(tmp_path / "missing"), "--header", "category", "-o", "csv", "-f", str(target)]
        )

        assert code == 1
        assert prompts == []
        assert target.read_text(encoding="utf-8") == "keep"

    def test_blank_header_exits_two(self, category_dir: Path) -> None:
        assert run_detection.main(["-d", str(category_dir), "--header", "category,"]) == 2


class TestRunBaseline:
    def test_console_output(self, category_dir: Path, capsys) -> None:
        code = run_baseline.main(["-d", str(category_dir), "--header", "category"])

        assert code == 0
        assert capsys.readouterr().out.splitlines() == [
            "[1.00 A]",
            "[0.33 B]",
            "[0.33 C]",
        ]

    def test_no_files_exits_one(self, tmp_path: Path) -> None:
        assert run_baseline.main(["-d", str(tmp_path), "--header", "category"]) == 1

    def test_missing_directory_fails_before_overwrite_prompt(
        self, tmp_path: Path, monkeypatch
    ) -> None:
        target = tmp_path / "out.csv"
        target.write_text("keep", encoding="utf-8")
        prompts: list[str] = []
        monkeypatch.setattr("builtins.input", lambda message: prompts.append(message) or "y")

        code = run_baseline.main(
            ["-d", str(tmp_path / "missing"), "--header", "Path", "-o", "csv", "-f", str(target)]
        )

        assert code == 1
        assert prompts == []
        assert target.read_text(encoding="utf-8") == "keep"

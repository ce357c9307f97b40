"""
sinks/html.py

HTML report rendered from a Jinja2 template.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape

from app.domain.anomaly import TabularResult
from app.logging_utils import log_event
from sinks.base import ResultSink

logger = logging.getLogger(__name__)

DEFAULT_TEMPLATE = "report.html.j2"


def _template_env(templates_path: Path | None = None) -> Environment:
    search_path = templates_path or Path(__file__).resolve().parent / "templates"
    return Environment(
        loader=FileSystemLoader(str(search_path)),
        autoescape=select_autoescape(enabled_extensions=("html", "xml", "j2")),
        trim_blocks=True,
        lstrip_blocks=True,
    )


class HTMLReportSink(ResultSink):
    """
    Renders the result as an HTML table into ``output_file``.
    """

    def __init__(
        self,
        output_file: str | Path,
        *,
        title: str = "Anomaly report",
        template_name: str = DEFAULT_TEMPLATE,
        templates_path: Path | None = None,
    ) -> None:
        self._output_file = Path(output_file)
        self._title = title
        self._template_name = template_name
        self._env = _template_env(templates_path)

    def render(self, result: TabularResult) -> str:
        template = self._env.get_template(self._template_name)
        return template.render(
            title=self._title,
            generated_at=datetime.now(timezone.utc).isoformat(timespec="seconds"),
            summary=result.summary(),
            header=result.header(),
            records=result.records(),
        )

    def emit(self, result: TabularResult) -> None:
        rendered = self.render(result)
        self._output_file.parent.mkdir(parents=True, exist_ok=True)
        self._output_file.write_text(rendered, encoding="utf-8")
        log_event(
            logger,
            logging.INFO,
            "html_report_written",
            path=str(self._output_file),
            records=len(result.records()),
        )

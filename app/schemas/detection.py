"""
app/schemas/detection.py

Validated run requests for the detection and baseline command-line tools.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator


class DetectionRequest(BaseModel):
    """
    Inputs for one anomaly detection run.
    """

    model_config = ConfigDict(
        extra="forbid",
        frozen=True,
        str_strip_whitespace=True,
    )

    directory: str = Field(min_length=1)
    columns: tuple[str, ...] = Field(min_length=1)
    threshold: float = -3.0
    workers: int | None = Field(default=None, ge=1)
    mode: Literal["count", "rows"] = "count"
    output_format: Literal["console", "html", "csv"] = "console"
    output_file: str = Field(default="output.csv", min_length=1)

    @field_validator("columns", mode="before")
    @classmethod
    def _split_columns(cls, value: object) -> object:
        if isinstance(value, str):
            return tuple(value.split(","))
        return value

    @field_validator("columns")
    @classmethod
    def _reject_blank_columns(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        cleaned = tuple(name.strip() for name in value)
        for name in cleaned:
            if not name:
                raise ValueError("Column names must not be blank.")
        return cleaned


class BaselineRequest(BaseModel):
    """
    Inputs for one baseline comparison run.
    """

    model_config = ConfigDict(
        extra="forbid",
        frozen=True,
        str_strip_whitespace=True,
    )

    directory: str = Field(min_length=1)
    column: str = Field(min_length=1)
    baseline_file: str | None = None
    output_format: Literal["console", "html", "csv"] = "console"
    output_file: str = Field(default="output.csv", min_length=1)

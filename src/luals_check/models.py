# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Core data models shared across the luals_check package."""

from __future__ import annotations

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .severity import Severity


class SourceRange(BaseModel):
    """1-based, start-inclusive span inside a file."""

    model_config = ConfigDict(frozen=True)

    line: int = Field(ge=1)
    column: int = Field(ge=1)
    end_line: int = Field(ge=1)
    end_column: int = Field(ge=1)

    @property
    def is_point(self) -> bool:
        """Return ``True`` when the range starts and ends at the same position."""

        return (self.line, self.column) == (self.end_line, self.end_column)


class RawRelatedInformation(BaseModel):
    """Secondary location attached to a diagnostic, as written by the tool."""

    model_config = ConfigDict(frozen=True)

    file: str
    range: SourceRange
    message: str = ""


class RawDiagnostic(BaseModel):
    """Diagnostic record as deserialised from the check artifact."""

    model_config = ConfigDict(frozen=True)

    file: str
    range: SourceRange
    severity: int | str | None
    message: str
    code: str | None = None
    related: tuple[RawRelatedInformation, ...] = Field(default_factory=tuple)

    @field_validator("code", mode="before")
    @classmethod
    def _coerce_code(cls, value: object) -> object:
        """Accept integer diagnostic codes by rendering them as strings."""
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value


class RelatedInformation(BaseModel):
    """Secondary location with a canonicalised file path."""

    model_config = ConfigDict(frozen=True)

    file: Path
    range: SourceRange
    message: str = ""


class Diagnostic(BaseModel):
    """Normalised diagnostic consumed by filtering and reporting."""

    model_config = ConfigDict(frozen=True)

    file: Path
    range: SourceRange
    severity: Severity
    message: str
    code: str | None = None
    root_scoped: bool
    related: tuple[RelatedInformation, ...] = Field(default_factory=tuple)

    @property
    def line(self) -> int:
        """Return the 1-based start line."""

        return self.range.line

    @property
    def column(self) -> int:
        """Return the 1-based start column."""

        return self.range.column


class ToolStatus(str, Enum):
    """Outcome classification of a single external tool invocation."""

    SUCCEEDED = "succeeded"
    REPORTED_PROBLEMS = "reported-problems"
    FAILED_TO_RUN = "failed-to-run"


class ToolOutcome(BaseModel):
    """Result bundle produced by the invoker."""

    model_config = ConfigDict(frozen=True)

    status: ToolStatus
    command: tuple[str, ...]
    returncode: int
    artifact: Path
    stdout: str = ""
    stderr: str = ""

    @property
    def failed(self) -> bool:
        """Return ``True`` when the tool could not complete its run."""

        return self.status is ToolStatus.FAILED_TO_RUN


class FilterResult(BaseModel):
    """Diagnostics selected for display plus the error-threshold tally."""

    model_config = ConfigDict(frozen=True)

    displayed: tuple[Diagnostic, ...] = Field(default_factory=tuple)
    error_count: int = 0


class RunResult(BaseModel):
    """Aggregate result for a completed diagnosis run."""

    model_config = ConfigDict(frozen=True)

    root: Path
    artifact: Path
    outcome: ToolOutcome
    diagnostics: tuple[Diagnostic, ...] = Field(default_factory=tuple)
    filtered: FilterResult = Field(default_factory=FilterResult)

    @property
    def has_errors(self) -> bool:
        """Return ``True`` when any diagnostic reached the error threshold."""

        return self.filtered.error_count > 0


__all__ = [
    "Diagnostic",
    "FilterResult",
    "RawDiagnostic",
    "RawRelatedInformation",
    "RelatedInformation",
    "RunResult",
    "SourceRange",
    "ToolOutcome",
    "ToolStatus",
]

# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Error taxonomy for the diagnosis pipeline.

Every fatal condition raised by a pipeline stage derives from
:class:`DiagnosisError` and carries a stable ``kind`` string. Only the
orchestrator translates these errors into an exit status.
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import ClassVar


class DiagnosisError(RuntimeError):
    """Base class for failures that abort a diagnosis run."""

    kind: ClassVar[str] = "DiagnosisError"

    def __init__(self, message: str, *, stderr: str | None = None) -> None:
        """Initialise the error with a human-readable ``message``.

        Args:
            message: Description of the failure shown to the user.
            stderr: Optional captured stderr of the external tool.
        """

        super().__init__(message)
        self.stderr = stderr


class ToolNotFoundError(DiagnosisError):
    """Raised when the external tool executable cannot be launched."""

    kind = "ToolNotFound"

    def __init__(self, executable: str, reason: str | None = None) -> None:
        detail = f": {reason}" if reason else ""
        super().__init__(f"Unable to launch '{executable}'{detail}")
        self.executable = executable


class ToolCrashedError(DiagnosisError):
    """Raised when the external tool terminates abnormally."""

    kind = "ToolCrashed"

    def __init__(self, command: Sequence[str], returncode: int, stderr: str | None) -> None:
        program = command[0] if command else "<unknown>"
        super().__init__(f"'{program}' failed with exit status {returncode}", stderr=stderr)
        self.command = tuple(command)
        self.returncode = returncode


class ArtifactMissingError(DiagnosisError):
    """Raised when no diagnostics artifact exists after the tool ran."""

    kind = "ArtifactMissing"

    def __init__(self, path: Path, *, stderr: str | None = None) -> None:
        super().__init__(f"Diagnostics file doesn't exist: {path}", stderr=stderr)
        self.path = path


class ArtifactUnwritableError(DiagnosisError):
    """Raised when the artifact destination cannot be prepared for the tool."""

    kind = "ArtifactUnwritable"

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"Cannot prepare diagnostics file {path}: {reason}")
        self.path = path
        self.reason = reason


class ArtifactMalformedError(DiagnosisError):
    """Raised when the diagnostics artifact cannot be read or parsed."""

    kind = "ArtifactMalformed"

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"Failed to read diagnostics file {path}: {reason}")
        self.path = path
        self.reason = reason


class UnknownSeverityError(DiagnosisError):
    """Raised when a raw severity code is missing from the mapping table."""

    kind = "UnknownSeverity"

    def __init__(self, code: object) -> None:
        shown = "<missing>" if code is None else repr(code)
        super().__init__(f"Unknown diagnostic severity {shown}")
        self.code = code


__all__ = [
    "ArtifactMalformedError",
    "ArtifactMissingError",
    "ArtifactUnwritableError",
    "DiagnosisError",
    "ToolCrashedError",
    "ToolNotFoundError",
    "UnknownSeverityError",
]

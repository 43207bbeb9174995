# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Launch ``lua-language-server --check`` and classify how it terminated."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Final, Protocol

from .errors import ArtifactUnwritableError, ToolNotFoundError
from .models import ToolOutcome, ToolStatus
from .process_utils import run_command

LOGGER = logging.getLogger(__name__)

DEFAULT_EXECUTABLE: Final[str] = "lua-language-server"
DEFAULT_CHECKLEVEL: Final[str] = "Information"
PROBLEMS_RETURNCODES: Final[frozenset[int]] = frozenset({1})


class DiagnosticTool(Protocol):
    """Narrow interface hiding the external tool's CLI flags and versions."""

    name: str

    def run(self, root: Path, artifact_path: Path) -> ToolOutcome:
        """Check ``root`` and write diagnostics to ``artifact_path``."""
        ...


def classify_returncode(returncode: int) -> ToolStatus:
    """Return the :class:`ToolStatus` implied by a process exit status.

    Args:
        returncode: Exit status of the child; negative when killed by a signal.

    Returns:
        ToolStatus: ``SUCCEEDED`` for ``0``, ``REPORTED_PROBLEMS`` for the
        tool's "diagnostics found" status and ``FAILED_TO_RUN`` otherwise.
    """

    if returncode == 0:
        return ToolStatus.SUCCEEDED
    if returncode in PROBLEMS_RETURNCODES:
        return ToolStatus.REPORTED_PROBLEMS
    return ToolStatus.FAILED_TO_RUN


def _prepare_destination(artifact_path: Path) -> None:
    """Create the artifact directory and remove any stale artifact.

    Raises:
        ArtifactUnwritableError: If the directory cannot be created or the
            previous artifact cannot be removed.
    """

    try:
        artifact_path.parent.mkdir(parents=True, exist_ok=True)
        # A stale artifact from an earlier run must never pass for this run's output.
        artifact_path.unlink(missing_ok=True)
    except OSError as exc:
        raise ArtifactUnwritableError(artifact_path, exc.strerror or str(exc)) from exc


@dataclass(slots=True)
class LuaLanguageServer:
    """Invoker for the ``lua-language-server`` command-line checker."""

    executable: str = DEFAULT_EXECUTABLE
    checklevel: str = DEFAULT_CHECKLEVEL
    timeout: float | None = None
    name: str = "lua-language-server"

    def build_command(self, root: Path, artifact_path: Path) -> list[str]:
        """Return the argument list for checking ``root``."""

        return [
            self.executable,
            "--check",
            str(root),
            f"--checklevel={self.checklevel}",
            "--check_format=json",
            f"--check_out_path={artifact_path}",
        ]

    def run(self, root: Path, artifact_path: Path) -> ToolOutcome:
        """Run the checker against ``root`` and wait for it to exit.

        Args:
            root: Canonical project root to check.
            artifact_path: Destination for the diagnostics artifact.

        Returns:
            ToolOutcome: Classified outcome with captured output streams.

        Raises:
            ArtifactUnwritableError: If the artifact destination cannot be prepared.
            ToolNotFoundError: If the executable is missing or cannot be launched.
        """

        command = self.build_command(root, artifact_path)
        _prepare_destination(artifact_path)
        LOGGER.debug("Running %s", " ".join(command))
        try:
            completed = run_command(command, cwd=root, timeout=self.timeout)
        except OSError as exc:
            raise ToolNotFoundError(self.executable, str(exc)) from exc

        status = classify_returncode(completed.returncode)
        LOGGER.debug("%s exited with status %s (%s)", self.name, completed.returncode, status.value)
        if completed.stdout:
            LOGGER.debug("%s stdout:\n%s", self.name, completed.stdout.rstrip())
        return ToolOutcome(
            status=status,
            command=tuple(command),
            returncode=completed.returncode,
            artifact=artifact_path,
            stdout=completed.stdout or "",
            stderr=completed.stderr or "",
        )


__all__ = [
    "DEFAULT_CHECKLEVEL",
    "DEFAULT_EXECUTABLE",
    "DiagnosticTool",
    "LuaLanguageServer",
    "classify_returncode",
]

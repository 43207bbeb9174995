# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Sequence the diagnosis pipeline and derive the process exit status.

The pipeline runs strictly in order (invoke, read, normalise, filter,
report) with a terminal failure state reachable from every step. Any
:class:`~luals_check.errors.DiagnosisError` ends the run with
:attr:`ExitCode.TOOL_ERROR`; diagnostics at or above the error threshold end
it with :attr:`ExitCode.PROBLEMS_FOUND`.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum, IntEnum

from rich.console import Console

from .artifact import locate_artifact, read_artifact
from .config import CheckConfig
from .errors import DiagnosisError, ToolCrashedError
from .filtering import filter_diagnostics
from .invoker import DiagnosticTool, LuaLanguageServer
from .models import RunResult, ToolOutcome
from .normalizer import Normalizer
from .reporting import render_report
from .severity import checklevel_for

LOGGER = logging.getLogger(__name__)


class ExitCode(IntEnum):
    """Process exit statuses; ``2`` is left to CLI usage errors."""

    OK = 0
    PROBLEMS_FOUND = 1
    TOOL_ERROR = 3


class PipelineState(str, Enum):
    """States traversed by a single run."""

    INVOKING = "invoking"
    READING = "reading"
    NORMALIZING = "normalizing"
    FILTERING = "filtering"
    REPORTING = "reporting"
    DONE = "done"
    FAILED = "failed"


ErrorHandler = Callable[[DiagnosisError], None]


@dataclass(slots=True)
class Orchestrator:
    """Run the pipeline for one :class:`CheckConfig`.

    Attributes:
        config: Settings for the run.
        console: Console receiving the report.
        tool: Invoker; defaults to :class:`LuaLanguageServer` built from ``config``.
        on_error: Callback presenting a fatal error to the user.
    """

    config: CheckConfig
    console: Console
    tool: DiagnosticTool | None = None
    on_error: ErrorHandler | None = None
    state: PipelineState = PipelineState.INVOKING
    history: list[PipelineState] = field(default_factory=list)
    result: RunResult | None = None
    error: DiagnosisError | None = None

    def _resolve_tool(self) -> DiagnosticTool:
        if self.tool is None:
            self.tool = LuaLanguageServer(
                executable=self.config.executable,
                checklevel=checklevel_for(self.config.show, self.config.fail),
                timeout=self.config.timeout,
            )
        return self.tool

    def _enter(self, state: PipelineState) -> None:
        LOGGER.debug("pipeline: %s -> %s", self.state.value, state.value)
        self.state = state
        self.history.append(state)

    def run(self) -> ExitCode:
        """Execute every stage and return the exit status.

        Returns:
            ExitCode: ``OK``, ``PROBLEMS_FOUND`` or ``TOOL_ERROR``; the three
            outcomes are mutually exclusive.
        """

        self.history = [PipelineState.INVOKING]
        self.state = PipelineState.INVOKING
        try:
            result = self._execute()
        except DiagnosisError as exc:
            self.error = exc
            self._enter(PipelineState.FAILED)
            if self.on_error is not None:
                self.on_error(exc)
            return ExitCode.TOOL_ERROR
        self.result = result
        self._enter(PipelineState.DONE)
        return ExitCode.PROBLEMS_FOUND if result.has_errors else ExitCode.OK

    def _execute(self) -> RunResult:
        tool = self._resolve_tool()
        normalizer = Normalizer(self.config.root)
        root = normalizer.root
        outcome = tool.run(root, self.config.artifact_path())
        self._ensure_tool_ran(outcome)

        self._enter(PipelineState.READING)
        artifact = locate_artifact(outcome.artifact, outcome.stdout)
        raw = read_artifact(artifact)

        self._enter(PipelineState.NORMALIZING)
        diagnostics = normalizer.normalize_all(raw)

        self._enter(PipelineState.FILTERING)
        filtered = filter_diagnostics(diagnostics, show_min=self.config.show, error_min=self.config.fail)
        LOGGER.debug(
            "%d diagnostic(s): %d displayed, %d at or above %s",
            len(diagnostics),
            len(filtered.displayed),
            filtered.error_count,
            self.config.fail.value,
        )

        self._enter(PipelineState.REPORTING)
        render_report(
            filtered,
            root=root,
            artifact=artifact,
            console=self.console,
            width=self._wrap_width(),
            tool=tool.name,
        )
        return RunResult(
            root=root,
            artifact=artifact,
            outcome=outcome,
            diagnostics=tuple(diagnostics),
            filtered=filtered,
        )

    @staticmethod
    def _ensure_tool_ran(outcome: ToolOutcome) -> None:
        if outcome.failed:
            raise ToolCrashedError(outcome.command, outcome.returncode, outcome.stderr)

    def _wrap_width(self) -> int | None:
        configured = self.config.wrap_width
        if configured is None:
            return self.console.width
        return configured or None


def run_check(
    config: CheckConfig,
    *,
    console: Console,
    tool: DiagnosticTool | None = None,
    on_error: ErrorHandler | None = None,
) -> ExitCode:
    """Run one diagnosis with ``config`` and return the exit status."""

    return Orchestrator(config=config, console=console, tool=tool, on_error=on_error).run()


__all__ = ["ExitCode", "Orchestrator", "PipelineState", "run_check"]

# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Render filtered diagnostics for a human reading a terminal.

Each diagnostic becomes a blank-line separated block::

    src/init.lua:3:7 [undefined-global]
        warning: Undefined global `foo`.

Blocks are grouped by file in first-seen order and keep artifact order inside
a file. A summary line always follows, and an error panel is appended when
diagnostics reached the error threshold.
"""

from __future__ import annotations

import textwrap
from collections.abc import Iterable, Sequence
from pathlib import Path
from typing import Final

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.text import Text

from .models import Diagnostic, FilterResult, RelatedInformation, SourceRange
from .paths import display_relative_path
from .severity import Severity

INDENT: Final[str] = "    "
RELATED_BULLET: Final[str] = "•"
SUMMARY_TEMPLATE: Final[str] = "Diagnosis complete, {count} problems found, see {artifact}"
ERROR_TEMPLATE: Final[str] = "{tool} found {count} problems"
CODE_STYLE: Final[str] = "bold"

_SEVERITY_STYLES: Final[dict[Severity, str]] = {
    Severity.ERROR: "bright_red",
    Severity.WARNING: "bright_yellow",
    Severity.INFO: "bright_white",
    Severity.HINT: "bright_cyan",
}


def severity_style(severity: Severity) -> str:
    """Return the rich style associated with ``severity``."""

    return _SEVERITY_STYLES[severity]


def format_range(span: SourceRange) -> str:
    """Return ``line:col`` or ``line:col-end_line:end_col`` for ``span``."""

    start = f"{span.line}:{span.column}"
    if span.is_point:
        return start
    return f"{start}-{span.end_line}:{span.end_column}"


def format_location(path: Path, span: SourceRange, root: Path) -> str:
    """Return ``<path>:<range>`` with ``path`` shown relative to ``root``."""

    return f"{display_relative_path(path, root)}:{format_range(span)}"


def group_by_file(diagnostics: Iterable[Diagnostic]) -> dict[Path, list[Diagnostic]]:
    """Group ``diagnostics`` by canonical file, preserving first-seen and inner order."""

    groups: dict[Path, list[Diagnostic]] = {}
    for diagnostic in diagnostics:
        groups.setdefault(diagnostic.file, []).append(diagnostic)
    return groups


def wrap_message(text: str, width: int | None) -> list[str]:
    """Return ``text`` split into indented lines no wider than ``width``.

    Words longer than the available room are kept whole on their own line.

    Args:
        text: Message body, possibly spanning several lines.
        width: Total line width including the indent. ``None`` or values not
            larger than the indent disable wrapping.

    Returns:
        list[str]: Indented output lines.
    """

    source_lines = text.splitlines() or [""]
    if width is None or width <= len(INDENT):
        return [f"{INDENT}{line}".rstrip() for line in source_lines]
    wrapped: list[str] = []
    for line in source_lines:
        pieces = textwrap.wrap(
            line,
            width=width,
            initial_indent=INDENT,
            subsequent_indent=INDENT,
            break_long_words=False,
            break_on_hyphens=False,
        )
        wrapped.extend(pieces or [INDENT.rstrip()])
    return wrapped


def _is_redundant(related: RelatedInformation, diagnostic: Diagnostic) -> bool:
    return (
        related.file == diagnostic.file
        and related.range == diagnostic.range
        and related.message in ("", diagnostic.message)
    )


def format_diagnostic(diagnostic: Diagnostic, *, root: Path, width: int | None = None) -> Text:
    """Return the styled, multi-line block describing ``diagnostic``.

    Args:
        diagnostic: Diagnostic to render.
        root: Project root used to shorten paths.
        width: Wrap width for the message body; ``None`` disables wrapping.

    Returns:
        Text: Header line, indented message and related-information lines.
    """

    style = severity_style(diagnostic.severity)
    label = diagnostic.severity.value
    block = Text(format_location(diagnostic.file, diagnostic.range, root))
    block.append(" [")
    if diagnostic.code:
        block.append(diagnostic.code, style=CODE_STYLE)
    else:
        block.append(label, style=style)
    block.append("]")

    for index, line in enumerate(wrap_message(f"{label}: {diagnostic.message}", width)):
        block.append("\n")
        if index == 0:
            block.append(INDENT)
            block.append(label, style=style)
            block.append(line[len(INDENT) + len(label) :])
        else:
            block.append(line)

    for related in diagnostic.related:
        if _is_redundant(related, diagnostic):
            continue
        block.append(f"\n{INDENT}{RELATED_BULLET} {format_location(related.file, related.range, root)}")
        if related.message:
            block.append(f": {related.message}")
    return block


def format_summary(count: int, artifact: Path) -> str:
    """Return the closing summary line."""

    return SUMMARY_TEMPLATE.format(count=count, artifact=artifact)


def build_error_panel(error_count: int, *, tool: str = "lua-language-server") -> Panel:
    """Return the boxed block announcing error-threshold diagnostics."""

    message = Text(ERROR_TEMPLATE.format(tool=tool, count=error_count), style="bold")
    return Panel.fit(message, title="error", title_align="left", box=box.HEAVY, border_style="bright_red")


def render_diagnostics(
    diagnostics: Sequence[Diagnostic],
    *,
    root: Path,
    console: Console,
    width: int | None = None,
) -> None:
    """Print one blank-line separated block per diagnostic, grouped by file."""

    for group in group_by_file(diagnostics).values():
        for diagnostic in group:
            console.print()
            console.print(format_diagnostic(diagnostic, root=root, width=width))


def render_report(
    filtered: FilterResult,
    *,
    root: Path,
    artifact: Path,
    console: Console,
    width: int | None = None,
    tool: str = "lua-language-server",
) -> None:
    """Render the full report: diagnostic listing, summary and error block.

    Args:
        filtered: Output of :func:`luals_check.filtering.filter_diagnostics`.
        root: Canonical project root.
        artifact: Artifact path quoted in the summary line.
        console: Rich console receiving the output.
        width: Wrap width for message bodies; ``None`` disables wrapping.
        tool: Tool name quoted in the error block.
    """

    render_diagnostics(filtered.displayed, root=root, console=console, width=width)
    if filtered.displayed:
        console.print()
    console.print(Text(format_summary(len(filtered.displayed), artifact)))
    if filtered.error_count > 0:
        console.print()
        console.print(build_error_panel(filtered.error_count, tool=tool))


__all__ = [
    "build_error_panel",
    "format_diagnostic",
    "format_location",
    "format_range",
    "format_summary",
    "group_by_file",
    "render_diagnostics",
    "render_report",
    "severity_style",
    "wrap_message",
]

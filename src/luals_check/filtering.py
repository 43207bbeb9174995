# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Select diagnostics for display and count those that fail the run.

Two thresholds apply independently to root-scoped diagnostics:

* ``show_min`` decides what is printed;
* ``error_min`` decides what makes the run fail.

The error tally ignores ``show_min`` entirely, so hiding a diagnostic never
hides the failure it causes. Diagnostics outside the project root are neither
shown nor counted.
"""

from __future__ import annotations

from collections.abc import Iterable

from .models import Diagnostic, FilterResult
from .severity import Severity


def is_displayed(diagnostic: Diagnostic, show_min: Severity) -> bool:
    """Return ``True`` when ``diagnostic`` should appear in the report."""

    return diagnostic.root_scoped and diagnostic.severity >= show_min


def is_failing(diagnostic: Diagnostic, error_min: Severity) -> bool:
    """Return ``True`` when ``diagnostic`` counts toward the error threshold."""

    return diagnostic.root_scoped and diagnostic.severity >= error_min


def filter_diagnostics(
    diagnostics: Iterable[Diagnostic],
    *,
    show_min: Severity,
    error_min: Severity,
) -> FilterResult:
    """Apply root membership and both severity thresholds to ``diagnostics``.

    Args:
        diagnostics: Normalised diagnostics in artifact order.
        show_min: Least severe level that is displayed.
        error_min: Least severe level that makes the run fail.

    Returns:
        FilterResult: Displayed diagnostics (order preserved) and the number of
        root-scoped diagnostics at or above ``error_min``.
    """

    displayed: list[Diagnostic] = []
    error_count = 0
    for diagnostic in diagnostics:
        if is_displayed(diagnostic, show_min):
            displayed.append(diagnostic)
        if is_failing(diagnostic, error_min):
            error_count += 1
    return FilterResult(displayed=tuple(displayed), error_count=error_count)


__all__ = ["filter_diagnostics", "is_displayed", "is_failing"]

# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for the display and error thresholds."""

from __future__ import annotations

from pathlib import Path

import pytest

from luals_check.filtering import filter_diagnostics, is_displayed, is_failing
from luals_check.models import Diagnostic, SourceRange
from luals_check.severity import Severity


def _diag(severity: Severity, *, message: str = "m", root_scoped: bool = True) -> Diagnostic:
    return Diagnostic(
        file=Path("/p/a.lua"),
        range=SourceRange(line=1, column=1, end_line=1, end_column=1),
        severity=severity,
        message=message,
        root_scoped=root_scoped,
    )


def test_show_threshold_does_not_hide_failures() -> None:
    diagnostics = [_diag(Severity.HINT), _diag(Severity.WARNING), _diag(Severity.ERROR)]

    result = filter_diagnostics(diagnostics, show_min=Severity.ERROR, error_min=Severity.WARNING)

    assert [item.severity for item in result.displayed] == [Severity.ERROR]
    assert result.error_count == 2


def test_hidden_only_failures_still_count() -> None:
    result = filter_diagnostics([_diag(Severity.WARNING)], show_min=Severity.ERROR, error_min=Severity.WARNING)
    assert result.displayed == ()
    assert result.error_count == 1


def test_out_of_root_neither_shown_nor_counted() -> None:
    diagnostics = [_diag(Severity.ERROR, root_scoped=False), _diag(Severity.HINT)]
    result = filter_diagnostics(diagnostics, show_min=Severity.HINT, error_min=Severity.HINT)
    assert [item.severity for item in result.displayed] == [Severity.HINT]
    assert result.error_count == 1


def test_displayed_preserves_input_order() -> None:
    diagnostics = [_diag(Severity.INFO, message=str(index)) for index in (3, 1, 2)]
    result = filter_diagnostics(diagnostics, show_min=Severity.HINT, error_min=Severity.ERROR)
    assert [item.message for item in result.displayed] == ["3", "1", "2"]
    assert result.error_count == 0


def test_empty_input() -> None:
    result = filter_diagnostics([], show_min=Severity.HINT, error_min=Severity.WARNING)
    assert result.displayed == ()
    assert result.error_count == 0


@pytest.mark.parametrize("severity", list(Severity))
@pytest.mark.parametrize("threshold", list(Severity))
def test_predicates_follow_severity_order(severity: Severity, threshold: Severity) -> None:
    diagnostic = _diag(severity)
    assert is_displayed(diagnostic, threshold) is (severity.rank >= threshold.rank)
    assert is_failing(diagnostic, threshold) is (severity.rank >= threshold.rank)

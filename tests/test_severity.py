# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for severity ordering and the raw severity mapping table."""

from __future__ import annotations

import pytest

from luals_check.errors import UnknownSeverityError
from luals_check.severity import Severity, checklevel_for, severity_from_code


def test_ordering_uses_rank_not_string_order() -> None:
    assert Severity.HINT < Severity.INFO < Severity.WARNING < Severity.ERROR
    # Lexically "error" < "hint"; the rank table must win.
    assert Severity.ERROR > Severity.HINT
    assert max(Severity) is Severity.ERROR
    assert sorted([Severity.ERROR, Severity.HINT, Severity.WARNING, Severity.INFO]) == [
        Severity.HINT,
        Severity.INFO,
        Severity.WARNING,
        Severity.ERROR,
    ]


@pytest.mark.parametrize(
    ("code", "expected"),
    [
        (1, Severity.ERROR),
        (2, Severity.WARNING),
        (3, Severity.INFO),
        (4, Severity.HINT),
        ("2", Severity.WARNING),
        ("Error", Severity.ERROR),
        ("Information", Severity.INFO),
        ("info", Severity.INFO),
        ("HINT", Severity.HINT),
    ],
)
def test_severity_from_code_maps_tool_vocabulary(code: int | str, expected: Severity) -> None:
    assert severity_from_code(code) is expected
    # Mapping is deterministic across calls.
    assert severity_from_code(code) is severity_from_code(code)


@pytest.mark.parametrize("code", [0, 5, -1, "fatal", "", None, True, 2.0])
def test_unknown_codes_raise_instead_of_defaulting(code: object) -> None:
    with pytest.raises(UnknownSeverityError) as excinfo:
        severity_from_code(code)  # type: ignore[arg-type]
    assert excinfo.value.kind == "UnknownSeverity"
    assert excinfo.value.code == code


def test_unknown_severity_message_names_missing_code() -> None:
    assert "<missing>" in str(UnknownSeverityError(None))
    assert "'fatal'" in str(UnknownSeverityError("fatal"))


def test_parse_accepts_cli_labels() -> None:
    assert Severity.parse("Warning") is Severity.WARNING
    assert Severity.parse(" hint ") is Severity.HINT
    with pytest.raises(ValueError, match="expected one of"):
        Severity.parse("information")


def test_checklevel_covers_the_less_severe_threshold() -> None:
    assert checklevel_for(Severity.HINT, Severity.WARNING) == "Hint"
    assert checklevel_for(Severity.ERROR, Severity.WARNING) == "Warning"
    assert checklevel_for(Severity.ERROR, Severity.ERROR) == "Error"
    assert checklevel_for(Severity.INFO, Severity.ERROR) == "Information"

# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Severity related types and helpers."""

from __future__ import annotations

from enum import Enum
from typing import Final

from .errors import UnknownSeverityError


class Severity(str, Enum):
    """Closed severity set ordered from least (hint) to most (error) severe.

    Comparison operators use :data:`_SEVERITY_RANK` so ordering never depends
    on the lexical order of the member values.
    """

    HINT = "hint"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"

    @property
    def rank(self) -> int:
        """Return the ordinal position of the severity (higher is more severe)."""

        return _SEVERITY_RANK[self]

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Severity):
            return NotImplemented
        return self.rank < other.rank

    def __le__(self, other: object) -> bool:
        if not isinstance(other, Severity):
            return NotImplemented
        return self.rank <= other.rank

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, Severity):
            return NotImplemented
        return self.rank > other.rank

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, Severity):
            return NotImplemented
        return self.rank >= other.rank

    def __str__(self) -> str:
        return self.value

    @classmethod
    def parse(cls, label: str) -> Severity:
        """Return the severity matching a CLI/config ``label``.

        Args:
            label: One of ``error``, ``warning``, ``info`` or ``hint`` in any case.

        Returns:
            Severity: Matching severity member.

        Raises:
            ValueError: If ``label`` does not name a severity.
        """

        try:
            return cls(label.strip().lower())
        except ValueError:
            choices = ", ".join(member.value for member in cls)
            raise ValueError(f"invalid severity '{label}' (expected one of: {choices})") from None


_SEVERITY_RANK: Final[dict[Severity, int]] = {
    Severity.HINT: 0,
    Severity.INFO: 1,
    Severity.WARNING: 2,
    Severity.ERROR: 3,
}

# LSP ``DiagnosticSeverity`` integers as written to the check artifact.
_LSP_SEVERITY_CODES: Final[dict[int, Severity]] = {
    1: Severity.ERROR,
    2: Severity.WARNING,
    3: Severity.INFO,
    4: Severity.HINT,
}

# lua-language-server level names (``--checklevel`` and ``.luarc.json`` vocabulary).
_LUALS_SEVERITY_NAMES: Final[dict[str, Severity]] = {
    "error": Severity.ERROR,
    "warning": Severity.WARNING,
    "information": Severity.INFO,
    "info": Severity.INFO,
    "hint": Severity.HINT,
}

_CHECKLEVEL_NAMES: Final[dict[Severity, str]] = {
    Severity.ERROR: "Error",
    Severity.WARNING: "Warning",
    Severity.INFO: "Information",
    Severity.HINT: "Hint",
}


def severity_from_code(code: int | str | None) -> Severity:
    """Map a raw tool severity ``code`` onto :class:`Severity`.

    Args:
        code: LSP severity integer or lua-language-server level name.

    Returns:
        Severity: The mapped severity.

    Raises:
        UnknownSeverityError: If ``code`` is missing or not in the mapping table.
    """

    if isinstance(code, bool):
        raise UnknownSeverityError(code)
    if isinstance(code, int):
        severity = _LSP_SEVERITY_CODES.get(code)
    elif isinstance(code, str):
        stripped = code.strip()
        severity = _LSP_SEVERITY_CODES.get(int(stripped)) if stripped.isdecimal() else None
        if severity is None:
            severity = _LUALS_SEVERITY_NAMES.get(stripped.lower())
    else:
        severity = None
    if severity is None:
        raise UnknownSeverityError(code)
    return severity


def checklevel_for(show_min: Severity, error_min: Severity) -> str:
    """Return the ``--checklevel`` value covering both thresholds."""

    return _CHECKLEVEL_NAMES[min(show_min, error_min)]


__all__ = ["Severity", "checklevel_for", "severity_from_code"]

# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Map raw artifact records onto the canonical :class:`Diagnostic` model."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

from .models import Diagnostic, RawDiagnostic, RawRelatedInformation, RelatedInformation
from .paths import canonicalize, is_within, uri_to_path
from .severity import severity_from_code

LOGGER = logging.getLogger(__name__)


class Normalizer:
    """Interpret raw diagnostics relative to a single project root.

    The root is canonicalised once at construction. Normalisation never drops
    records; selecting what to show is left to :mod:`luals_check.filtering`.
    """

    def __init__(self, root: Path) -> None:
        """Bind the normaliser to ``root``.

        Args:
            root: Project root; relative values resolve against the CWD.
        """

        self._root = canonicalize(root)

    @property
    def root(self) -> Path:
        """Return the canonical project root."""

        return self._root

    def canonical_file(self, location: str) -> Path:
        """Return the canonical path for a tool-written ``location``.

        Raises:
            ValueError: If ``location`` uses an unsupported URI scheme.
        """

        return canonicalize(uri_to_path(location), base_dir=self._root)

    def normalize(self, raw: RawDiagnostic) -> Diagnostic:
        """Return the normalised form of ``raw``.

        Args:
            raw: Record produced by the artifact reader.

        Returns:
            Diagnostic: Canonical diagnostic carrying its root membership.

        Raises:
            UnknownSeverityError: If ``raw.severity`` is not in the mapping table.
        """

        severity = severity_from_code(raw.severity)
        file_path = self.canonical_file(raw.file)
        root_scoped = is_within(file_path, self._root)
        if not root_scoped:
            LOGGER.debug("Diagnostic in out-of-project path %s", file_path)
        return Diagnostic(
            file=file_path,
            range=raw.range,
            severity=severity,
            message=raw.message,
            code=raw.code,
            root_scoped=root_scoped,
            related=tuple(self._related(raw.related)),
        )

    def normalize_all(self, raws: Iterable[RawDiagnostic]) -> list[Diagnostic]:
        """Normalise ``raws`` preserving their order."""

        return [self.normalize(raw) for raw in raws]

    def _related(self, entries: Iterable[RawRelatedInformation]) -> Iterable[RelatedInformation]:
        for entry in entries:
            yield RelatedInformation(
                file=self.canonical_file(entry.file),
                range=entry.range,
                message=entry.message,
            )


def normalize_diagnostics(raws: Iterable[RawDiagnostic], *, root: Path) -> list[Diagnostic]:
    """Normalise ``raws`` against ``root`` in one call."""

    return Normalizer(root).normalize_all(raws)


__all__ = ["Normalizer", "normalize_diagnostics"]

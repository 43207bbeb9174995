# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Locate and deserialise the ``--check`` diagnostics artifact.

The artifact is an LSP-shaped JSON document. Two layouts are accepted: the
mapping of file URI to diagnostic list written by lua-language-server, and a
list of ``PublishDiagnosticsParams`` objects. Any deviation from the schema
fails the whole read; partially parsed artifacts are never returned.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable, Iterator, Mapping
from pathlib import Path
from typing import Any, Final

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError

from .errors import ArtifactMalformedError, ArtifactMissingError
from .models import RawDiagnostic, RawRelatedInformation, SourceRange
from .paths import uri_to_path

LOGGER = logging.getLogger(__name__)

_ARTIFACT_ENCODING: Final[str] = "utf-8"


class _LspModel(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)


class _LspPosition(_LspModel):
    line: int = Field(ge=0)
    character: int = Field(ge=0)


class _LspRange(_LspModel):
    start: _LspPosition
    end: _LspPosition

    def to_source_range(self) -> SourceRange:
        """Convert the 0-based LSP range into a 1-based :class:`SourceRange`."""

        return SourceRange(
            line=self.start.line + 1,
            column=self.start.character + 1,
            end_line=self.end.line + 1,
            end_column=self.end.character + 1,
        )


class _LspLocation(_LspModel):
    uri: str
    range: _LspRange


class _LspRelatedInformation(_LspModel):
    location: _LspLocation
    message: str = ""


class _LspDiagnostic(_LspModel):
    range: _LspRange
    message: str
    severity: int | str | None = None
    code: int | str | None = None
    source: str | None = None
    related_information: list[_LspRelatedInformation] | None = Field(default=None, alias="relatedInformation")


class _PublishDiagnosticsParams(_LspModel):
    uri: str
    diagnostics: list[_LspDiagnostic]


_MAPPING_ADAPTER: Final[TypeAdapter[dict[str, list[_LspDiagnostic]]]] = TypeAdapter(dict[str, list[_LspDiagnostic]])
_LIST_ADAPTER: Final[TypeAdapter[list[_PublishDiagnosticsParams]]] = TypeAdapter(list[_PublishDiagnosticsParams])


def locate_artifact(requested: Path, stdout: str = "") -> Path:
    """Return the path of the artifact written by the tool.

    The requested destination wins. Tool versions that ignore the output-path
    flag announce their default location as the last token of their final
    stdout line (``Diagnosis complete, N problems found, see <path>``), which
    is used as a fallback.

    Args:
        requested: Destination passed to the tool.
        stdout: Captured tool stdout.

    Returns:
        Path: Existing artifact path.

    Raises:
        ArtifactMissingError: If neither location holds a file.
    """

    if requested.is_file():
        return requested
    fallback = _announced_artifact(stdout)
    if fallback is not None and fallback.is_file():
        LOGGER.debug("Artifact not written to %s; using announced location %s", requested, fallback)
        return fallback
    raise ArtifactMissingError(requested)


def _announced_artifact(stdout: str) -> Path | None:
    lines = [line for line in stdout.splitlines() if line.strip()]
    if not lines:
        return None
    tokens = lines[-1].split()
    return Path(tokens[-1]) if tokens else None


def read_artifact(path: Path) -> list[RawDiagnostic]:
    """Read and parse the artifact at ``path``.

    Args:
        path: Artifact location, usually from :func:`locate_artifact`.

    Returns:
        list[RawDiagnostic]: Records in document order.

    Raises:
        ArtifactMissingError: If ``path`` does not exist.
        ArtifactMalformedError: If the content is unreadable or off-schema.
    """

    try:
        text = path.read_text(encoding=_ARTIFACT_ENCODING)
    except FileNotFoundError as exc:
        raise ArtifactMissingError(path) from exc
    except (OSError, UnicodeDecodeError) as exc:
        raise ArtifactMalformedError(path, str(exc)) from exc
    return parse_artifact(text, path=path)


def parse_artifact(text: str, *, path: Path) -> list[RawDiagnostic]:
    """Parse artifact ``text``; ``path`` is only used in error messages."""

    if not text.strip():
        raise ArtifactMalformedError(path, "file is empty")
    try:
        payload: Any = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ArtifactMalformedError(path, f"invalid JSON ({exc})") from exc

    try:
        entries = list(_iter_entries(payload))
    except ValidationError as exc:
        raise ArtifactMalformedError(path, _describe_validation_error(exc)) from exc
    except TypeError as exc:
        raise ArtifactMalformedError(path, str(exc)) from exc

    records: list[RawDiagnostic] = []
    for uri, diagnostics in entries:
        _check_location(uri, path)
        records.extend(_to_raw(uri, diagnostic, path) for diagnostic in diagnostics)
    LOGGER.debug("Read %d diagnostic(s) across %d file(s) from %s", len(records), len(entries), path)
    return records


def _iter_entries(payload: Any) -> Iterator[tuple[str, list[_LspDiagnostic]]]:
    if isinstance(payload, Mapping):
        yield from _MAPPING_ADAPTER.validate_python(payload).items()
        return
    if isinstance(payload, list):
        for params in _LIST_ADAPTER.validate_python(payload):
            yield params.uri, params.diagnostics
        return
    raise TypeError(f"expected a JSON object or array at top level, found {type(payload).__name__}")


def _to_raw(uri: str, diagnostic: _LspDiagnostic, artifact: Path) -> RawDiagnostic:
    return RawDiagnostic(
        file=uri,
        range=diagnostic.range.to_source_range(),
        severity=diagnostic.severity,
        message=diagnostic.message,
        code=diagnostic.code,
        related=tuple(_related(diagnostic.related_information or (), artifact)),
    )


def _related(entries: Iterable[_LspRelatedInformation], artifact: Path) -> Iterator[RawRelatedInformation]:
    for entry in entries:
        _check_location(entry.location.uri, artifact)
        yield RawRelatedInformation(
            file=entry.location.uri,
            range=entry.location.range.to_source_range(),
            message=entry.message,
        )


def _check_location(uri: str, artifact: Path) -> None:
    if not uri.strip():
        raise ArtifactMalformedError(artifact, "diagnostic entry has an empty file URI")
    try:
        uri_to_path(uri)
    except ValueError as exc:
        raise ArtifactMalformedError(artifact, str(exc)) from exc


def _describe_validation_error(exc: ValidationError) -> str:
    first = exc.errors()[0]
    location = ".".join(str(part) for part in first.get("loc", ())) or "<root>"
    suffix = f" (+{exc.error_count() - 1} more)" if exc.error_count() > 1 else ""
    return f"{location}: {first.get('msg', 'invalid value')}{suffix}"


__all__ = ["locate_artifact", "parse_artifact", "read_artifact"]

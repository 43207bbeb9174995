# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Helpers for reasoning about filesystem paths and file URIs."""

from __future__ import annotations

import os
from os import PathLike
from pathlib import Path
from typing import Final
from urllib.parse import urlsplit
from urllib.request import url2pathname

_Pathish = str | PathLike[str] | Path
FILE_SCHEME: Final[str] = "file"
_LOCAL_HOSTS: Final[frozenset[str]] = frozenset({"", "localhost"})


def _best_effort_resolve(path: Path) -> Path:
    """Return ``path`` resolved where possible without raising.

    Args:
        path: Candidate path to resolve.

    Returns:
        Path: Absolute variant when resolution succeeds; otherwise the closest
        achievable approximation.

    """

    try:
        return path.resolve(strict=False)
    except (OSError, RuntimeError):
        return path.absolute() if not path.is_absolute() else path


def canonicalize(path: _Pathish, *, base_dir: _Pathish | None = None) -> Path:
    """Return the canonical absolute form of ``path``.

    Relative paths are anchored at ``base_dir`` (``Path.cwd()`` when omitted),
    symlinks are resolved and the case is folded the way the host platform
    compares paths. Applying the function to its own output is a no-op.

    Args:
        path: Filesystem path supplied by the caller or the tool.
        base_dir: Directory that anchors relative inputs.

    Returns:
        Path: Canonical absolute path.

    Raises:
        ValueError: If ``path`` is ``None`` or empty.

    """

    if path is None or not str(path).strip():
        raise ValueError("path must not be empty")

    raw_path = Path(path).expanduser()
    if not raw_path.is_absolute():
        base = Path.cwd() if base_dir is None else Path(base_dir).expanduser()
        raw_path = base / raw_path
    resolved = _best_effort_resolve(raw_path)
    return Path(os.path.normcase(resolved))


def is_within(path: Path, root: Path) -> bool:
    """Return ``True`` when canonical ``path`` equals or lies beneath canonical ``root``.

    The comparison is made on path components, so ``/project-other`` is not
    considered part of ``/project``.
    """

    return path == root or path.is_relative_to(root)


def uri_to_path(location: str) -> Path:
    """Return the local path named by a ``file://`` URI or a plain path.

    Args:
        location: ``file://`` URI or filesystem path as written by the tool.

    Returns:
        Path: Decoded path; may still be relative when ``location`` was.

    Raises:
        ValueError: If ``location`` uses an unsupported URI scheme.

    """

    parts = urlsplit(location)
    scheme = parts.scheme.lower()
    if scheme == FILE_SCHEME:
        decoded = url2pathname(parts.path)
        if parts.netloc.lower() not in _LOCAL_HOSTS:
            return Path(f"//{parts.netloc}{decoded}")
        return Path(decoded)
    # A single letter is a Windows drive (``C:\\...``), not a scheme.
    if not scheme or len(scheme) == 1:
        return Path(location)
    raise ValueError(f"URL has unknown scheme {parts.scheme!r}; expected {FILE_SCHEME!r}")


def display_relative_path(path: _Pathish, root: _Pathish) -> str:
    """Return a display-friendly representation of ``path`` relative to ``root``.

    Args:
        path: Path to present to the user.
        root: Base directory used for relativisation.

    Returns:
        str: Relative POSIX path when possible, otherwise the absolute POSIX
        representation.

    """

    candidate = Path(path)
    try:
        return candidate.relative_to(root).as_posix()
    except ValueError:
        pass
    try:
        return Path(os.path.relpath(candidate, root)).as_posix()
    except ValueError:
        return candidate.as_posix()


__all__ = (
    "FILE_SCHEME",
    "canonicalize",
    "display_relative_path",
    "is_within",
    "uri_to_path",
)

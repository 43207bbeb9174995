# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Safe wrappers around ``subprocess`` execution."""

from __future__ import annotations

import shutil

# Bandit: subprocess usage is intentional; we launch a single configured
# executable with an argument list and never use ``shell=True``.
import subprocess  # nosec B404
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Final

TIMEOUT_RETURNCODE: Final[int] = 124


def _ensure_text(value: str | bytes | None) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    return value.decode(errors="replace")


def resolve_executable(executable: str) -> str:
    """Return the absolute path of ``executable``.

    Args:
        executable: Program name looked up on ``PATH`` or an explicit path.

    Returns:
        str: Path suitable for ``subprocess``.

    Raises:
        FileNotFoundError: If the executable cannot be located.
    """

    candidate = Path(executable).expanduser()
    if candidate.is_absolute() or len(candidate.parts) > 1:
        if not candidate.exists():
            raise FileNotFoundError(f"Executable '{executable}' does not exist")
        return str(candidate.absolute())

    resolved = shutil.which(executable)
    if resolved is None:
        raise FileNotFoundError(f"Executable '{executable}' was not found on PATH")
    return resolved


def run_command(
    args: Sequence[str],
    *,
    cwd: Path | None = None,
    env: Mapping[str, str] | None = None,
    timeout: float | None = None,
) -> subprocess.CompletedProcess[str]:
    """Execute *args* with captured, separately buffered stdout and stderr.

    Args:
        args: Command line; the first element is resolved via :func:`resolve_executable`.
        cwd: Working directory for the child process.
        env: Optional replacement environment.
        timeout: Seconds to wait before killing the child. ``None`` waits forever.

    Returns:
        CompletedProcess[str]: Completed process. A timeout is reported as
        return code ``124`` with an explanatory line appended to stderr.

    Raises:
        ValueError: If ``args`` is empty.
        FileNotFoundError: If the executable cannot be located.
        PermissionError: If the executable cannot be launched.
    """

    if not args:
        raise ValueError("subprocess command requires at least one argument")
    head, *rest = args
    normalized = [resolve_executable(head), *rest]

    try:
        # Bandit: argument lists come from validated configuration; no shell expansion.
        return subprocess.run(  # nosec B603
            normalized,
            cwd=str(cwd) if cwd is not None else None,
            env=dict(env) if env is not None else None,
            check=False,
            capture_output=True,
            text=True,
            errors="replace",
            timeout=timeout,
            stdin=subprocess.DEVNULL,
        )
    except subprocess.TimeoutExpired as exc:
        stderr = _ensure_text(exc.stderr)
        timeout_msg = f"Command timed out after {timeout:.1f}s" if timeout is not None else "Command timed out"
        return subprocess.CompletedProcess(
            args=normalized,
            returncode=TIMEOUT_RETURNCODE,
            stdout=_ensure_text(exc.stdout),
            stderr=f"{stderr}\n{timeout_msg}" if stderr else timeout_msg,
        )


__all__ = ["TIMEOUT_RETURNCODE", "resolve_executable", "run_command"]

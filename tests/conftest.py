# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared pytest fixtures."""

from __future__ import annotations

import json
import stat
import sys
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import pytest

from luals_check.console import get_console_manager
from luals_check.models import ToolOutcome, ToolStatus

LspFactory = Callable[..., dict[str, Any]]
ArtifactWriter = Callable[..., Path]


@pytest.fixture(autouse=True)
def _reset_console_cache() -> None:
    """Ensure cached consoles never leak terminal detection between tests."""
    get_console_manager().clear()


@pytest.fixture
def project_root(tmp_path: Path) -> Path:
    """Return a canonical project directory containing a Lua source tree."""
    root = tmp_path / "project"
    (root / "src").mkdir(parents=True)
    (root / "src" / "init.lua").write_text("local x = 1\n", encoding="utf-8")
    return root.resolve()


@pytest.fixture
def make_lsp() -> LspFactory:
    """Return a builder for LSP diagnostic dictionaries (0-based positions)."""

    def _build(
        line: int = 0,
        character: int = 0,
        *,
        severity: int | str | None = 2,
        message: str = "Undefined global `foo`.",
        code: str | int | None = None,
        end: tuple[int, int] | None = None,
        related: list[dict[str, Any]] | None = None,
    ) -> dict[str, Any]:
        end_line, end_character = end if end is not None else (line, character)
        payload: dict[str, Any] = {
            "range": {
                "start": {"line": line, "character": character},
                "end": {"line": end_line, "character": end_character},
            },
            "message": message,
            "source": "Lua Diagnostics.",
        }
        if severity is not None:
            payload["severity"] = severity
        if code is not None:
            payload["code"] = code
        if related is not None:
            payload["relatedInformation"] = related
        return payload

    return _build


@pytest.fixture
def write_artifact(tmp_path: Path) -> ArtifactWriter:
    """Return a helper writing a JSON artifact under ``tmp_path/out``."""

    def _write(payload: Any, name: str = "check.json") -> Path:
        target = tmp_path / "out" / name
        target.parent.mkdir(parents=True, exist_ok=True)
        text = payload if isinstance(payload, str) else json.dumps(payload)
        target.write_text(text, encoding="utf-8")
        return target

    return _write


@dataclass
class FakeTool:
    """In-process stand-in for the lua-language-server invoker."""

    payload: Any = None
    returncode: int = 0
    stdout: str = ""
    stderr: str = ""
    name: str = "lua-language-server"
    calls: list[tuple[Path, Path]] = field(default_factory=list)

    def run(self, root: Path, artifact_path: Path) -> ToolOutcome:
        self.calls.append((root, artifact_path))
        artifact_path.parent.mkdir(parents=True, exist_ok=True)
        artifact_path.unlink(missing_ok=True)
        if self.payload is not None:
            text = self.payload if isinstance(self.payload, str) else json.dumps(self.payload)
            artifact_path.write_text(text, encoding="utf-8")
        status = {0: ToolStatus.SUCCEEDED, 1: ToolStatus.REPORTED_PROBLEMS}.get(
            self.returncode,
            ToolStatus.FAILED_TO_RUN,
        )
        return ToolOutcome(
            status=status,
            command=(self.name, "--check", str(root)),
            returncode=self.returncode,
            artifact=artifact_path,
            stdout=self.stdout,
            stderr=self.stderr,
        )


@pytest.fixture
def fake_tool_cls() -> type[FakeTool]:
    """Expose :class:`FakeTool` to test modules."""
    return FakeTool


_FAKE_SERVER_TEMPLATE = """#!{python}
import json
import os
import sys
import time

args = sys.argv[1:]
with open(os.environ["FAKE_LUALS_ARGV"], "w", encoding="utf-8") as handle:
    json.dump(args, handle)
out_path = None
for arg in args:
    if arg.startswith("--check_out_path="):
        out_path = arg.split("=", 1)[1]
payload = os.environ.get("FAKE_LUALS_PAYLOAD")
if payload is not None and out_path and not os.environ.get("FAKE_LUALS_IGNORE_OUT_PATH"):
    with open(out_path, "w", encoding="utf-8") as handle:
        handle.write(payload)
fallback = os.environ.get("FAKE_LUALS_FALLBACK")
if payload is not None and fallback:
    with open(fallback, "w", encoding="utf-8") as handle:
        handle.write(payload)
    print("Diagnosis complete, 0 problems found, see " + fallback)
time.sleep(float(os.environ.get("FAKE_LUALS_SLEEP", "0")))
sys.stderr.write(os.environ.get("FAKE_LUALS_STDERR", ""))
sys.exit(int(os.environ.get("FAKE_LUALS_EXIT", "0")))
"""


_FAKE_SERVER_KNOBS = (
    "FAKE_LUALS_PAYLOAD",
    "FAKE_LUALS_IGNORE_OUT_PATH",
    "FAKE_LUALS_FALLBACK",
    "FAKE_LUALS_SLEEP",
    "FAKE_LUALS_STDERR",
    "FAKE_LUALS_EXIT",
)


@pytest.fixture
def fake_server(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Write an executable stand-in for ``lua-language-server`` and return its path.

    Behaviour is steered through ``FAKE_LUALS_*`` environment variables; the
    received argv is recorded in ``FAKE_LUALS_ARGV``.
    """
    script = tmp_path / "bin" / "lua-language-server"
    script.parent.mkdir(parents=True, exist_ok=True)
    script.write_text(_FAKE_SERVER_TEMPLATE.format(python=sys.executable), encoding="utf-8")
    script.chmod(script.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    monkeypatch.setenv("FAKE_LUALS_ARGV", str(tmp_path / "argv.json"))
    for name in _FAKE_SERVER_KNOBS:
        monkeypatch.delenv(name, raising=False)
    return script

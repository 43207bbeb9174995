# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for configuration defaults, file loading and precedence."""

from __future__ import annotations

import tempfile
from pathlib import Path

import pytest

from luals_check.config import CONFIG_FILENAME, CheckConfig, ConfigError, load_config, read_config_file
from luals_check.invoker import DEFAULT_EXECUTABLE
from luals_check.severity import Severity


def test_defaults(project_root: Path) -> None:
    config = load_config(project_root)
    assert config.root == project_root
    assert config.executable == DEFAULT_EXECUTABLE
    assert config.show is Severity.HINT
    assert config.fail is Severity.WARNING
    assert config.wrap_width is None
    assert not config.hides_failures


def test_default_artifact_is_per_project(tmp_path: Path) -> None:
    first = CheckConfig(root=tmp_path / "one").artifact_path()
    second = CheckConfig(root=tmp_path / "two").artifact_path()
    assert first != second
    assert first.name == "check.json"
    assert first.is_relative_to(Path(tempfile.gettempdir()) / "luals-check")
    assert CheckConfig(root=tmp_path / "one").artifact_path() == first


def test_explicit_artifact_wins(tmp_path: Path) -> None:
    assert CheckConfig(root=tmp_path, artifact=tmp_path / "x.json").artifact_path() == tmp_path / "x.json"


def test_project_file_is_read(project_root: Path) -> None:
    (project_root / CONFIG_FILENAME).write_text(
        'show = "Warning"\nfail = "error"\nwrap-width = 100\nartifact = "build/check.json"\n',
        encoding="utf-8",
    )
    config = load_config(project_root)
    assert config.show is Severity.WARNING
    assert config.fail is Severity.ERROR
    assert config.wrap_width == 100
    assert config.artifact == project_root / "build" / "check.json"


def test_section_table_and_cli_precedence(project_root: Path, tmp_path: Path) -> None:
    config_file = tmp_path / "custom.toml"
    config_file.write_text(
        '[luals-check]\nexecutable = "bin/luals"\nshow = "info"\ntimeout = 30\n',
        encoding="utf-8",
    )

    config = load_config(
        project_root,
        config_file=config_file,
        overrides={"show": Severity.ERROR, "timeout": None},
    )

    assert config.executable == str(tmp_path / "bin" / "luals")
    assert config.show is Severity.ERROR
    assert config.timeout == 30
    assert config.hides_failures


def test_bare_executable_name_is_not_anchored(tmp_path: Path) -> None:
    config_file = tmp_path / "c.toml"
    config_file.write_text('executable = "lua-language-server-3"\n', encoding="utf-8")
    assert read_config_file(config_file)["executable"] == "lua-language-server-3"


@pytest.mark.parametrize(
    ("content", "fragment"),
    [
        ('show = "loud"\n', "invalid severity"),
        ("timeout = -1\n", "timeout"),
        ("unknown = 1\n", "unknown"),
        ("show = [\n", "Invalid TOML"),
        ('luals-check = "x"\n', "must be a table"),
    ],
)
def test_invalid_files_raise_config_error(project_root: Path, content: str, fragment: str) -> None:
    (project_root / CONFIG_FILENAME).write_text(content, encoding="utf-8")
    with pytest.raises(ConfigError, match=fragment):
        load_config(project_root)


def test_missing_explicit_file(project_root: Path, tmp_path: Path) -> None:
    with pytest.raises(ConfigError, match="does not exist"):
        load_config(project_root, config_file=tmp_path / "absent.toml")


def test_relative_artifact_is_made_absolute(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)
    config = CheckConfig(root=tmp_path / "project", artifact=Path("out") / "check.json")
    assert config.artifact_path() == Path.cwd() / "out" / "check.json"
    assert config.artifact_path().is_absolute()

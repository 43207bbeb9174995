# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Configuration model and layered loading for luals-check.

Precedence, lowest first: built-in defaults, ``.luals-check.toml`` in the
project root (or an explicit ``--config`` file), then CLI options.
"""

from __future__ import annotations

import hashlib
import tempfile
import tomllib
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Final

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .invoker import DEFAULT_EXECUTABLE
from .severity import Severity

CONFIG_FILENAME: Final[str] = ".luals-check.toml"
CONFIG_SECTION: Final[str] = "luals-check"
ARTIFACT_DIRNAME: Final[str] = "luals-check"
ARTIFACT_FILENAME: Final[str] = "check.json"
_PATH_KEYS: Final[frozenset[str]] = frozenset({"artifact", "executable"})
_ROOT_DIGEST_LENGTH: Final[int] = 16


class ConfigError(Exception):
    """Raised when configuration input is invalid."""


class CheckConfig(BaseModel):
    """Resolved settings for one diagnosis run."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    root: Path = Field(default_factory=Path.cwd)
    executable: str = DEFAULT_EXECUTABLE
    show: Severity = Severity.HINT
    fail: Severity = Severity.WARNING
    artifact: Path | None = None
    timeout: float | None = Field(default=None, gt=0)
    wrap_width: int | None = Field(default=None, ge=0)
    color: bool = True
    emoji: bool = True
    debug: bool = False

    @field_validator("show", "fail", mode="before")
    @classmethod
    def _parse_severity(cls, value: object) -> object:
        """Accept severity labels in any case."""
        if isinstance(value, str) and not isinstance(value, Severity):
            return Severity.parse(value)
        return value

    @property
    def hides_failures(self) -> bool:
        """Return ``True`` when ``show`` is stricter than ``fail``."""

        return self.show > self.fail

    def artifact_path(self) -> Path:
        """Return the configured artifact path or the per-project default.

        The default lives under the system temporary directory, keyed by a
        digest of the resolved root so that runs for different projects do
        not overwrite each other. A relative ``artifact`` is anchored at the
        current working directory.
        """

        if self.artifact is not None:
            artifact = self.artifact.expanduser()
            return artifact if artifact.is_absolute() else Path.cwd() / artifact
        digest = hashlib.sha256(str(self.root.resolve()).encode("utf-8")).hexdigest()[:_ROOT_DIGEST_LENGTH]
        return Path(tempfile.gettempdir()) / ARTIFACT_DIRNAME / digest / ARTIFACT_FILENAME


def read_config_file(path: Path) -> dict[str, Any]:
    """Return the settings table stored in the TOML file at ``path``.

    Settings may live at top level or under a ``[luals-check]`` table. Relative
    ``artifact``/``executable`` paths resolve against the file's directory.

    Raises:
        ConfigError: If the file cannot be read or parsed.
    """

    try:
        with path.open("rb") as handle:
            data = tomllib.load(handle)
    except OSError as exc:
        raise ConfigError(f"Unable to read configuration {path}: {exc}") from exc
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"Invalid TOML in {path}: {exc}") from exc

    section = data.get(CONFIG_SECTION, data)
    if not isinstance(section, Mapping):
        raise ConfigError(f"[{CONFIG_SECTION}] in {path} must be a table")
    settings = {key.replace("-", "_"): value for key, value in section.items() if key != CONFIG_SECTION}
    for key in _PATH_KEYS & settings.keys():
        value = settings[key]
        if isinstance(value, str) and (key == "artifact" or "/" in value or "\\" in value):
            candidate = Path(value).expanduser()
            settings[key] = candidate if candidate.is_absolute() else path.parent / candidate
    if "executable" in settings:
        settings["executable"] = str(settings["executable"])
    return settings


def load_config(
    root: Path,
    *,
    config_file: Path | None = None,
    overrides: Mapping[str, Any] | None = None,
) -> CheckConfig:
    """Build a :class:`CheckConfig` from all sources.

    Args:
        root: Project root being checked.
        config_file: Explicit configuration file; when omitted the optional
            ``.luals-check.toml`` in ``root`` is used.
        overrides: CLI values; ``None`` entries are ignored.

    Returns:
        CheckConfig: Validated configuration.

    Raises:
        ConfigError: If a source is unreadable or a value is invalid.
    """

    values: dict[str, Any] = {}
    candidate = config_file if config_file is not None else root / CONFIG_FILENAME
    if config_file is not None and not config_file.is_file():
        raise ConfigError(f"Configuration file {config_file} does not exist")
    if candidate.is_file():
        values.update(read_config_file(candidate))
    values.update({key: value for key, value in (overrides or {}).items() if value is not None})
    values["root"] = root
    try:
        return CheckConfig(**values)
    except ValidationError as exc:
        details = "; ".join(
            f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}" for error in exc.errors()
        )
        raise ConfigError(f"Invalid configuration: {details}") from exc


__all__ = [
    "CONFIG_FILENAME",
    "CheckConfig",
    "ConfigError",
    "load_config",
    "read_config_file",
]

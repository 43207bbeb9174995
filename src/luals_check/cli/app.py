# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""CLI application entry point for ``luals-check``."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated, Any, Final

import typer

from .. import __version__
from ..config import CheckConfig, ConfigError, load_config
from ..console import get_console_manager
from ..logging import configure_debug_logging
from ..orchestrator import run_check
from ..severity import Severity
from .shared import CLIError, CLILogger, build_cli_logger
from .typer_ext import create_typer

USAGE_ERROR_EXIT_CODE: Final[int] = 2

SHOW_HELP: Final[str] = (
    "Display diagnostics at or above this severity. Hidden diagnostics still count toward --fail."
)
FAIL_HELP: Final[str] = (
    "Exit with status 1 if any diagnostic at or above this severity is found, whether or not it is displayed."
)

app = create_typer(
    name="luals-check",
    help="Check project diagnostics using lua-language-server.",
    add_completion=False,
    no_args_is_help=False,
)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"luals-check {__version__}")
        raise typer.Exit()


def _load_check_config(
    project: Path,
    *,
    config_file: Path | None,
    overrides: dict[str, Any],
    logger: CLILogger,
) -> CheckConfig:
    """Resolve configuration, converting failures into :class:`CLIError`."""

    try:
        return load_config(project, config_file=config_file, overrides=overrides)
    except ConfigError as exc:
        logger.fail(str(exc))
        raise CLIError(str(exc), exit_code=USAGE_ERROR_EXIT_CODE) from exc


@app.command(help="Check project diagnostics using lua-language-server.")
def check(
    project: Annotated[
        Path,
        typer.Argument(help="Path to the project to check.", show_default=True),
    ] = Path("."),
    lua_language_server: Annotated[
        str | None,
        typer.Option(
            "--lua-language-server",
            "-c",
            help="Path to the lua-language-server executable. [default: lua-language-server]",
        ),
    ] = None,
    show: Annotated[
        Severity | None,
        typer.Option("--show", case_sensitive=False, help=f"{SHOW_HELP} [default: hint]"),
    ] = None,
    fail: Annotated[
        Severity | None,
        typer.Option("--fail", case_sensitive=False, help=f"{FAIL_HELP} [default: warning]"),
    ] = None,
    artifact: Annotated[
        Path | None,
        typer.Option("--artifact", help="Where lua-language-server writes its JSON diagnostics."),
    ] = None,
    timeout: Annotated[
        float | None,
        typer.Option("--timeout", min=0.0, help="Seconds to wait for lua-language-server before failing."),
    ] = None,
    wrap_width: Annotated[
        int | None,
        typer.Option("--wrap-width", min=0, help="Wrap messages at this width (0 disables wrapping)."),
    ] = None,
    config_file: Annotated[
        Path | None,
        typer.Option("--config", help="Configuration file (defaults to .luals-check.toml in the project)."),
    ] = None,
    no_color: Annotated[bool, typer.Option("--no-color", help="Disable ANSI colour output.")] = False,
    no_emoji: Annotated[bool, typer.Option("--no-emoji", help="Disable emoji in messages.")] = False,
    debug: Annotated[bool, typer.Option("--debug", help="Print debug traces to stderr.")] = False,
    version: Annotated[
        bool,
        typer.Option("--version", callback=_version_callback, is_eager=True, help="Show the version and exit."),
    ] = False,
) -> None:
    """Run lua-language-server on PROJECT and report its diagnostics."""

    del version
    logger = build_cli_logger(emoji=not no_emoji, no_color=no_color)
    overrides: dict[str, Any] = {
        "executable": lua_language_server,
        "show": show,
        "fail": fail,
        "artifact": artifact,
        "timeout": timeout,
        "wrap_width": wrap_width,
        "color": False if no_color else None,
        "emoji": False if no_emoji else None,
        "debug": True if debug else None,
    }
    try:
        config = _load_check_config(project, config_file=config_file, overrides=overrides, logger=logger)
    except CLIError as exc:
        raise typer.Exit(code=exc.exit_code) from exc

    configure_debug_logging(config.debug)
    logger = build_cli_logger(emoji=config.emoji, no_color=not config.color)
    if config.hides_failures:
        logger.warn(
            f"--show {config.show.value} hides diagnostics below {config.show.value}; "
            f"{config.fail.value} diagnostics still fail the run."
        )

    console = get_console_manager().get(color=config.color, emoji=config.emoji)
    exit_code = run_check(config, console=console, on_error=logger.pipeline_error)
    raise typer.Exit(code=int(exit_code))


def main() -> None:
    """Console-script entry point."""

    app()


__all__ = ["app", "main"]

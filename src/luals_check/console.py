# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Shared rich consoles for report output and user messages."""

from __future__ import annotations

import sys
from functools import lru_cache

from rich.console import Console

_ConsoleKey = tuple[bool, bool, bool]


def detect_tty() -> bool:
    """Return ``True`` when stdout is an interactive terminal."""

    try:
        return sys.stdout.isatty()
    except (AttributeError, ValueError):
        return False


def _build_console(*, color: bool, emoji: bool, tty: bool) -> Console:
    styled = color and tty
    return Console(
        color_system="auto" if styled else None,
        force_terminal=tty,
        no_color=not styled,
        emoji=emoji,
        highlight=False,
        soft_wrap=True,
    )


class RichConsoleManager:
    """Hand out one console per (colour, emoji, terminal) combination.

    Reports and ``warn``/``fail`` messages share a console so their output
    interleaves in order. Colour is only used when stdout is a terminal.
    """

    def __init__(self) -> None:
        self._consoles: dict[_ConsoleKey, Console] = {}

    def get(self, *, color: bool, emoji: bool) -> Console:
        """Return the console for the given ``color``/``emoji`` preferences."""

        tty = detect_tty()
        key = (color, emoji, tty)
        console = self._consoles.get(key)
        if console is None:
            console = self._consoles[key] = _build_console(color=color, emoji=emoji, tty=tty)
        return console

    def clear(self) -> None:
        """Forget every console so terminal detection runs again."""

        self._consoles.clear()


@lru_cache(maxsize=1)
def get_console_manager() -> RichConsoleManager:
    """Return the process-wide :class:`RichConsoleManager`."""

    return RichConsoleManager()


__all__ = ["RichConsoleManager", "detect_tty", "get_console_manager"]

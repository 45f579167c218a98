"""Leveled diagnostic channels for command-line applications.

``debug``, ``info`` and ``warn`` write to stdout; ``error`` and
``fatal`` write to stderr so they survive output redirection.  Each
level gets a themed prefix when Rich is available.
"""

from __future__ import annotations

from mainline.cli.console import ConsoleProxy

LEVELS: tuple[str, ...] = ("debug", "info", "warn", "error", "fatal")
"""Level names, least to most severe."""

MAINLINE_THEME: dict[str, str] = {
    "debug": "dim",
    "info": "bold cyan",
    "warn": "bold yellow",
    "error": "bold red",
    "fatal": "bold white on red",
}

_PREFIXES: dict[str, str] = {
    "debug": "debug:",
    "info": "",
    "warn": "warning:",
    "error": "error:",
    "fatal": "fatal:",
}


class CLILogger:
    """Write messages to stdout/stderr, filtered by a minimum level.

    Parameters
    ----------
    level:
        Lowest level that is emitted.  Defaults to ``"info"``.
    """

    def __init__(self, level: str = "info") -> None:
        self._stdout = ConsoleProxy(stderr=False, theme=MAINLINE_THEME)
        self._stderr = ConsoleProxy(stderr=True, theme=MAINLINE_THEME)
        self.level = level

    @property
    def level(self) -> str:
        return self._level

    @level.setter
    def level(self, value: str) -> None:
        name = value.lower()
        if name == "warning":
            name = "warn"
        if name not in LEVELS:
            raise ValueError(
                f"unknown log level {value!r} (expected one of: {', '.join(LEVELS)})"
            )
        self._level = name

    def enabled_for(self, level: str) -> bool:
        return LEVELS.index(level) >= LEVELS.index(self._level)

    # ------------------------------------------------------------------
    # Channels
    # ------------------------------------------------------------------

    def debug(self, message: str) -> None:
        self._emit("debug", message)

    def info(self, message: str) -> None:
        self._emit("info", message)

    def warn(self, message: str) -> None:
        self._emit("warn", message)

    def error(self, message: str) -> None:
        self._emit("error", message)

    def fatal(self, message: str) -> None:
        self._emit("fatal", message)

    def _emit(self, level: str, message: str) -> None:
        if not self.enabled_for(level):
            return
        target = self._stderr if level in ("error", "fatal") else self._stdout
        target.print(message, prefix=_PREFIXES[level], style=level)

"""CLI console helpers with optional Rich support.

This module intentionally avoids module-level imports of Rich so the
harness keeps working (plain text output) in environments where Rich
is not installed.
"""

from __future__ import annotations

import sys
from typing import Any


def _load_rich() -> tuple[type[Any], type[Any], Any] | None:
    """Return ``(Console, Theme, escape)`` from Rich, or ``None``."""
    try:
        from rich.console import Console
        from rich.markup import escape
        from rich.theme import Theme
    except ModuleNotFoundError:
        return None
    return Console, Theme, escape


class ConsoleProxy:
    """Minimal ``print``-compatible proxy with a plain-text fallback.

    Parameters
    ----------
    stderr:
        Write to ``sys.stderr`` instead of ``sys.stdout``.
    theme:
        Rich style definitions usable as the *style* of a line.
    """

    def __init__(
        self,
        *,
        stderr: bool = False,
        theme: dict[str, str] | None = None,
    ) -> None:
        self.stderr: bool = stderr
        self._theme: dict[str, str] = dict(theme or {})

    def print(self, message: str, *, prefix: str = "", style: str | None = None) -> None:
        """Write one line: an optional styled *prefix* then *message*.

        *message* is printed literally; Rich markup inside it is escaped.
        """
        rich = _load_rich()
        if rich is None:
            stream = sys.stderr if self.stderr else sys.stdout
            print(f"{prefix} {message}" if prefix else message, file=stream)
            return

        console_class, theme_class, escape = rich
        rich_console = console_class(stderr=self.stderr, theme=theme_class(self._theme))
        head = escape(prefix)
        if head and style:
            head = f"[{style}]{head}[/{style}]"
        body = escape(message)
        rich_console.print(f"{head} {body}" if head else body, soft_wrap=True, highlight=False)


console = ConsoleProxy(stderr=True)

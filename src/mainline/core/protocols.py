"""Protocols (interfaces) for the engine's collaborators.

The engine depends ONLY on these contracts.  The concrete argparse
backed parser and the Rich logger in the ``cli`` layer satisfy them
structurally, and tests substitute their own.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

from mainline.core.options import OptionStore


class ArgumentParser(Protocol):
    """Contract for command-line parsing backends."""

    def parse(self, argv: Sequence[str], options: OptionStore) -> list[str]:
        """Consume *argv*, write recognised options into *options*.

        Returns the leftover positional arguments in command-line order.

        Raises
        ------
        ArgumentParseError
            When *argv* contains unknown options or malformed values.
        """
        ...  # pragma: no cover


class ErrorSink(Protocol):
    """Contract for the error-level diagnostic channel."""

    def __call__(self, message: str) -> None:
        """Emit *message* exactly as given."""
        ...  # pragma: no cover

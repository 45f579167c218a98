"""Custom exception hierarchy for mainline.

Failures raised by a registered routine are caught at exactly one place,
the invocation boundary in :mod:`mainline.cli.app`, and translated into
an exit status.  Harness misuse (running twice, running with nothing
registered) is reported with its own exceptions and is NOT translated.

Hierarchy
---------
MainlineError
├── ApplicationError
├── ExitRequest
├── ArgumentParseError
├── EngineStateError
└── NoRoutineError
"""

from __future__ import annotations


class MainlineError(Exception):
    """Base exception for all mainline errors."""

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint: str | None = hint
        """Optional actionable guidance shown below the error message."""

    @property
    def message(self) -> str:
        return str(self)


# --- Routine failures ------------------------------------------------------

class ApplicationError(MainlineError):
    """Raised by a routine to fail with a specific exit status.

    The message is sent to the error channel and the process exits with
    *exit_code*.
    """

    def __init__(
        self,
        exit_code: int,
        message: str,
        *,
        hint: str | None = None,
    ) -> None:
        super().__init__(message, hint=hint)
        self.exit_code: int = exit_code


class ExitRequest(MainlineError):
    """Raised by :meth:`Main.exit_now` to stop the routine early.

    Not a failure as such: it unwinds the routine so the engine can
    terminate with *exit_code*.  The message is optional.
    """

    def __init__(self, exit_code: int, message: str | None = None) -> None:
        super().__init__(message or "")
        self.exit_code: int = exit_code
        self.exit_message: str | None = message


# --- Argument parsing ------------------------------------------------------

class ArgumentParseError(MainlineError):
    """Raised when the command line cannot be parsed."""


# --- Harness misuse --------------------------------------------------------

class EngineStateError(MainlineError):
    """Raised when a :class:`Main` is used outside its one-run lifecycle."""


class NoRoutineError(MainlineError):
    """Raised when running a :class:`Main` that has no registered routine."""

"""Execution engine: register a routine, run it, exit with a status.

This module is the **sole error boundary** for a mainline application.
It catches every exception raised by the registered routine, reports
its message on the error channel, and returns a well-defined exit
status.  It is also the only place that translates between outcomes
and the OS process exit code.

Lifecycle
---------
``Idle → Parsing → (exit 1) | Invoking → Terminated(status)``.  A
:class:`Main` instance runs once; :meth:`Main.execute` called a second
time raises :class:`~mainline.exceptions.EngineStateError`.

Example
-------
::

    app = Main("greet")
    app.on("--shout", "-s", "Print in capitals")

    @app.main
    def greet(name):
        text = f"hello {name or 'world'}"
        print(text.upper() if app.options.get("shout") else text)

    if __name__ == "__main__":
        app.run()
"""

from __future__ import annotations

import os
import shlex
import sys
import traceback
from collections.abc import Callable, Sequence
from typing import Any, NoReturn

from mainline.cli import exit_codes
from mainline.cli.logger import LEVELS, CLILogger
from mainline.cli.parser import OptionParser
from mainline.core.binding import bind_positionals
from mainline.core.models import ExplicitExit, NormalReturn, Outcome, UnhandledFailure
from mainline.core.options import OptionStore
from mainline.core.protocols import ArgumentParser, ErrorSink
from mainline.exceptions import (
    ApplicationError,
    ArgumentParseError,
    EngineStateError,
    ExitRequest,
    MainlineError,
    NoRoutineError,
)

Routine = Callable[..., Any]


# ---------------------------------------------------------------------------
# Outcome → exit status
# ---------------------------------------------------------------------------

def exit_status(outcome: Outcome) -> int:
    """Map a routine :data:`~mainline.core.models.Outcome` to an exit status.

    * integer return value → that integer (``bool`` is not an integer here)
    * any other return value → :data:`exit_codes.SUCCESS`
    * explicit exit → the requested code
    * failure carrying a code → that code
    * any other failure → :data:`exit_codes.SOFTWARE_ERROR`
    """
    if isinstance(outcome, NormalReturn):
        value = outcome.value
        if isinstance(value, int) and not isinstance(value, bool):
            return value
        return exit_codes.SUCCESS
    if isinstance(outcome, ExplicitExit):
        return outcome.code
    if outcome.code is None:
        return exit_codes.SOFTWARE_ERROR
    return outcome.code


def _message_of(exc: BaseException) -> str:
    return str(exc) or type(exc).__name__


def _system_exit_outcome(exc: SystemExit) -> ExplicitExit:
    """Follow the interpreter's rules for ``SystemExit.code``."""
    code = exc.code
    if code is None:
        return ExplicitExit(exit_codes.SUCCESS)
    if isinstance(code, int) and not isinstance(code, bool):
        return ExplicitExit(code)
    return ExplicitExit(exit_codes.GENERAL_ERROR, str(code))


# ---------------------------------------------------------------------------
# Engine
# ---------------------------------------------------------------------------

class Main:
    """Bootstrap one command-line run around a single routine.

    Parameters
    ----------
    prog:
        Program name for usage and error messages.  Defaults to the
        script name.
    description:
        Text shown by ``--help``.
    logger:
        Diagnostic channels.  A fresh :class:`CLILogger` by default.
    error:
        Error-level channel used for failure messages.  Defaults to
        ``logger.error``; pass a callable to capture messages.
    parser:
        Option parser.  A fresh :class:`OptionParser` by default.
    """

    def __init__(
        self,
        prog: str | None = None,
        *,
        description: str | None = None,
        logger: CLILogger | None = None,
        error: ErrorSink | None = None,
        parser: OptionParser | None = None,
    ) -> None:
        self.logger: CLILogger = logger or CLILogger()
        self._error: ErrorSink = error or self.logger.error
        self.opts: OptionParser = parser or OptionParser(prog=prog, description=description)
        self.options: OptionStore = OptionStore()
        self.arguments: list[str] = []
        self._routine: Routine | None = None
        self._env_var: str | None = None
        self._has_run = False

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------

    def main(self, routine: Routine) -> Routine:
        """Register *routine* as the entry point; usable as a decorator.

        Registering again before the run replaces the previous routine.
        """
        if self._has_run:
            raise EngineStateError("cannot register a routine after the run has started")
        self._routine = routine
        return routine

    def on(
        self,
        *switches: str,
        help: str | None = None,
        handler: Callable[..., Any] | None = None,
        choices: Sequence[str] | None = None,
    ) -> OptionParser:
        """Declare an option on :attr:`opts`.

        Without *handler* the value lands in :attr:`options` under the
        option's names.
        """
        return self.opts.on(*switches, help=help, handler=handler, choices=choices)

    def description(self, text: str) -> None:
        self.opts.description(text)

    def version(self, text: str) -> None:
        self.opts.version(text)

    def arg(self, label: str, help: str | None = None) -> None:
        """Name the positional arguments in ``--help`` output."""
        self.opts.arguments_label(label, help)

    def defaults_from_env_var(self, name: str) -> None:
        """Prepend shell-quoted arguments from environment variable *name*.

        Command-line arguments come after them, so they win.
        """
        self._env_var = name

    def use_log_level_option(self) -> None:
        """Add ``--log-level LEVEL`` controlling :attr:`logger`."""
        self.on(
            "--log-level LEVEL",
            help=f"Set the logging level ({', '.join(LEVELS)}).",
            handler=self._set_log_level,
            choices=LEVELS,
        )

    def _set_log_level(self, level: str) -> None:
        self.logger.level = level

    # ------------------------------------------------------------------
    # Routine helpers
    # ------------------------------------------------------------------

    def exit_now(self, code: int | str, message: str | None = None) -> NoReturn:
        """Stop the routine and exit with *code*, reporting *message*.

        ``exit_now("message")`` exits with status 1; passing a second
        message alongside it raises ``TypeError``.
        """
        if isinstance(code, str):
            if message is not None:
                raise TypeError("exit_now() takes one message, got two")
            raise ExitRequest(exit_codes.GENERAL_ERROR, code)
        raise ExitRequest(code, message)

    # ------------------------------------------------------------------
    # Running
    # ------------------------------------------------------------------

    def run(self, argv: Sequence[str] | None = None) -> NoReturn:
        """Run the routine and terminate the process with its status."""
        sys.exit(self.execute(argv))

    def execute(self, argv: Sequence[str] | None = None) -> int:
        """Parse *argv*, run the routine, and return the exit status.

        Parameters
        ----------
        argv:
            Explicit argument list.  When ``None`` (default),
            ``sys.argv[1:]`` is used.

        Raises
        ------
        NoRoutineError
            If no routine has been registered.
        EngineStateError
            If this instance has already run.
        """
        if self._has_run:
            raise EngineStateError("a Main instance runs only once")
        if self._routine is None:
            raise NoRoutineError(
                "no routine registered",
                hint="Decorate your entry point with @app.main.",
            )
        self._has_run = True

        if argv is None:
            argv = sys.argv[1:]
        parse_status = self._parse(argv)
        if parse_status is not None:
            return parse_status

        outcome = self._invoke(self._routine)
        return self._report(outcome)

    def _parse(self, argv: Sequence[str]) -> int | None:
        """Fill :attr:`options` and :attr:`arguments`.

        Returns ``None`` on success, otherwise the status to exit with.
        """
        full_argv = list(argv)
        if self._env_var is not None:
            full_argv = shlex.split(os.environ.get(self._env_var, "")) + full_argv
        parser: ArgumentParser = self.opts
        try:
            self.arguments = parser.parse(full_argv, self.options)
        except ArgumentParseError:
            return exit_codes.PARSE_ERROR
        except SystemExit as exc:
            # --help and --version
            return exit_status(_system_exit_outcome(exc))
        return None

    def _invoke(self, routine: Routine) -> Outcome:
        """Call *routine* once, capturing how it ended."""
        call_args = bind_positionals(routine, self.arguments)
        try:
            value = routine(*call_args)
        except ExitRequest as exc:
            return ExplicitExit(exc.exit_code, exc.exit_message)
        except ApplicationError as exc:
            return UnhandledFailure(_message_of(exc), exc.exit_code, exc.hint)
        except SystemExit as exc:
            return _system_exit_outcome(exc)
        except KeyboardInterrupt:
            return ExplicitExit(exit_codes.KEYBOARD_INTERRUPT, "Aborted by user.")
        except Exception as exc:  # noqa: BLE001
            self.logger.debug("".join(traceback.format_exception(exc)).rstrip())
            hint = exc.hint if isinstance(exc, MainlineError) else None
            return UnhandledFailure(_message_of(exc), None, hint)
        return NormalReturn(value)

    def _report(self, outcome: Outcome) -> int:
        """Send any failure message to the error channel; return the status."""
        if isinstance(outcome, ExplicitExit) and outcome.message:
            self._error(outcome.message)
        elif isinstance(outcome, UnhandledFailure):
            self._error(outcome.message)
            if outcome.hint:
                self.logger.info(f"Hint: {outcome.hint}")
        return exit_status(outcome)

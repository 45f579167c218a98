"""argparse-backed option parser used by :class:`mainline.cli.app.Main`.

Options are declared with switch strings in the familiar
``OptionParser`` notation::

    opts.on("--verbose", "-v", help="Talk more")
    opts.on("--[no-]color")
    opts.on("--output FILE", "-o", "Where to write the report")
    opts.on("--retries=N", handler=lambda value: ...)

Without a *handler* the parsed value is written straight into the
:class:`~mainline.core.options.OptionStore` under every name the
option has (``"output"`` and ``"o"`` above).  With a handler, the
handler receives the value and nothing is stored.

Free-text documentation strings are shown literally in ``--help``.  An
explicit ``help=`` keyword is handed to argparse unchanged, so it may
use argparse placeholders such as ``%(default)s`` and must write a
literal percent sign as ``%%``.

A required option value may start with a dash: ``--flag -x`` stores
``"-x"`` under ``flag``, as does ``-f -x``.
"""

from __future__ import annotations

import argparse
import re
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any

from mainline.cli.console import console
from mainline.core.binding import arity_of
from mainline.core.options import OptionStore
from mainline.exceptions import ArgumentParseError

Handler = Callable[..., Any]

_SWITCH_RE = re.compile(
    r"^(?P<dashes>--?)(?P<negatable>\[no-\])?(?P<name>[^\s=\[]+)"
    r"(?:[ =](?P<value>\S+))?$"
)


# ---------------------------------------------------------------------------
# Switch declarations
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class OptionSpec:
    """A parsed ``on(...)`` declaration."""

    option_strings: tuple[str, ...]
    """Everything argparse should recognise, e.g. ``("--flag", "-f")``."""

    keys: tuple[str, ...]
    """OptionStore keys, canonical key first."""

    metavar: str | None
    """Value placeholder, or ``None`` for a switch."""

    value_optional: bool
    negatable: bool
    help: str | None

    @property
    def takes_value(self) -> bool:
        return self.metavar is not None

    @property
    def canonical_key(self) -> str:
        return self.keys[0]


def _key_for(name: str) -> str:
    return name.replace("-", "_")


def parse_switches(switches: Sequence[str], help: str | None = None) -> OptionSpec:
    """Turn ``on(...)`` switch strings into an :class:`OptionSpec`.

    Strings that do not start with ``-`` are documentation.

    Raises
    ------
    ValueError
        If no switch is declared or a switch string is malformed.
    """
    long_strings: list[str] = []
    short_strings: list[str] = []
    long_keys: list[str] = []
    short_keys: list[str] = []
    docs: list[str] = []
    metavar: str | None = None
    value_optional = False
    negatable = False

    for switch in switches:
        if not switch.startswith("-"):
            docs.append(switch)
            continue
        match = _SWITCH_RE.match(switch)
        if match is None:
            raise ValueError(f"malformed switch declaration: {switch!r}")

        name = match.group("name")
        if match.group("dashes") == "--":
            long_strings.append(f"--{name}")
            if match.group("negatable"):
                negatable = True
                long_strings.append(f"--no-{name}")
            long_keys.append(_key_for(name))
        else:
            short_strings.append(f"-{name}")
            short_keys.append(_key_for(name))

        value = match.group("value")
        if value:
            if value.startswith("[") and value.endswith("]"):
                value_optional = True
                value = value[1:-1]
            metavar = value

    if not long_strings and not short_strings:
        raise ValueError(f"no switch declared in {list(switches)!r}")
    if negatable and metavar is not None:
        raise ValueError("a negatable switch cannot take a value")

    keys = tuple(dict.fromkeys(long_keys + short_keys))
    if help is None and docs:
        help = " ".join(docs).replace("%", "%%")
    return OptionSpec(
        option_strings=tuple(long_strings + short_strings),
        keys=keys,
        metavar=metavar,
        value_optional=value_optional,
        negatable=negatable,
        help=help,
    )


# ---------------------------------------------------------------------------
# argparse plumbing
# ---------------------------------------------------------------------------

class _RaisingArgumentParser(argparse.ArgumentParser):
    """``ArgumentParser`` that raises instead of exiting on bad input."""

    def error(self, message: str) -> None:  # type: ignore[override]
        console.print(self.format_usage().rstrip())
        console.print(f"{self.prog}: error: {message}")
        raise ArgumentParseError(message)


class _OptionAction(argparse.Action):
    """Routes a parsed option to its handler or into the option store."""

    def __init__(
        self,
        option_strings: list[str],
        dest: str,
        *,
        spec: OptionSpec,
        deliver: Callable[[OptionSpec, Any], None],
        **kwargs: Any,
    ) -> None:
        self.spec = spec
        self._deliver = deliver
        super().__init__(option_strings, dest, **kwargs)

    def __call__(
        self,
        parser: argparse.ArgumentParser,
        namespace: argparse.Namespace,
        values: Any,
        option_string: str | None = None,
    ) -> None:
        if not self.spec.takes_value:
            value: Any = True
            if self.spec.negatable and option_string and option_string.startswith("--no-"):
                value = False
        else:
            value = values
        self._deliver(self.spec, value)


# ---------------------------------------------------------------------------
# Public parser
# ---------------------------------------------------------------------------

class OptionParser:
    """Declarative option parser satisfying the ``ArgumentParser`` protocol.

    Parameters
    ----------
    prog:
        Program name shown in usage and error messages.
    description:
        Text shown in ``--help`` between usage and options.
    """

    def __init__(self, prog: str | None = None, description: str | None = None) -> None:
        self._parser = _RaisingArgumentParser(
            prog=prog,
            description=description,
            allow_abbrev=False,
        )
        self._arguments_action = self._parser.add_argument(
            "arguments",
            nargs="*",
            metavar="ARG",
            help=argparse.SUPPRESS,
        )
        self._handlers: dict[OptionSpec, Handler | None] = {}
        self._takes_required_value: set[str] = set()
        self._store: OptionStore | None = None

    # ------------------------------------------------------------------
    # Declaration
    # ------------------------------------------------------------------

    def on(
        self,
        *switches: str,
        help: str | None = None,
        handler: Handler | None = None,
        choices: Sequence[str] | None = None,
    ) -> OptionParser:
        """Declare an option; see the module docstring for the notation.

        *handler* is called with the parsed value (``True``/``False`` for
        switches).  A handler declaring no parameters is called with none.
        *choices* restricts the accepted values of an option taking one.
        Returns the parser, so declarations can be chained.
        """
        spec = parse_switches(switches, help=help)
        self._handlers[spec] = handler

        kwargs: dict[str, Any] = {
            "dest": f"_option_{spec.canonical_key}",
            "default": argparse.SUPPRESS,
            "help": spec.help,
        }
        if spec.takes_value:
            kwargs["metavar"] = spec.metavar
            if not spec.value_optional:
                self._takes_required_value.update(spec.option_strings)
            if spec.value_optional:
                kwargs["nargs"] = "?"
                kwargs["const"] = True
            if choices is not None:
                kwargs["choices"] = list(choices)
        else:
            kwargs["nargs"] = 0

        self._parser.add_argument(
            *spec.option_strings,
            action=_OptionAction,
            spec=spec,
            deliver=self._deliver,
            **kwargs,
        )
        return self

    def description(self, text: str) -> OptionParser:
        self._parser.description = text
        return self

    def version(self, text: str) -> OptionParser:
        """Add ``--version``, printing *text* and exiting 0."""
        self._parser.add_argument(
            "--version",
            action="version",
            version=text,
            help="Show the version and exit.",
        )
        return self

    def arguments_label(self, label: str, help: str | None = None) -> OptionParser:
        """Name the positional arguments in usage (and optionally document them)."""
        self._arguments_action.metavar = label
        self._arguments_action.help = help if help is not None else argparse.SUPPRESS
        return self

    # ------------------------------------------------------------------
    # Parsing
    # ------------------------------------------------------------------

    def parse(self, argv: Sequence[str], options: OptionStore) -> list[str]:
        """Parse *argv* into *options* and return leftover positionals.

        Raises
        ------
        ArgumentParseError
            On unknown options, missing option values or rejected choices.
        """
        self._store = options
        try:
            namespace = self._parser.parse_intermixed_args(self._join_dash_values(argv))
        finally:
            self._store = None
        return list(getattr(namespace, "arguments", None) or [])

    def _join_dash_values(self, argv: Sequence[str]) -> list[str]:
        """Attach dash-leading values to the option that requires them.

        argparse would read ``--flag -x`` as two options; ``--flag=-x``
        and ``-f-x`` are unambiguous.
        """
        joined: list[str] = []
        tokens = iter(argv)
        for token in tokens:
            if token == "--":
                joined.append(token)
                joined.extend(tokens)
                break
            if token in self._takes_required_value:
                value = next(tokens, None)
                if value is None:
                    joined.append(token)
                elif value.startswith("-") and value != "--":
                    sep = "=" if token.startswith("--") else ""
                    joined.append(f"{token}{sep}{value}")
                else:
                    joined.extend([token, value])
                continue
            joined.append(token)
        return joined

    def _deliver(self, spec: OptionSpec, value: Any) -> None:
        handler = self._handlers.get(spec)
        if handler is not None:
            arity = arity_of(handler)
            if arity.fixed == 0 and not arity.variadic:
                handler()
            else:
                handler(value)
            return
        if self._store is None:
            raise RuntimeError("option delivered outside of parse()")
        for key in spec.keys:
            self._store[key] = value

    # ------------------------------------------------------------------
    # Help
    # ------------------------------------------------------------------

    @property
    def prog(self) -> str:
        return self._parser.prog

    def format_help(self) -> str:
        return self._parser.format_help()

    def __str__(self) -> str:
        return self.format_help()

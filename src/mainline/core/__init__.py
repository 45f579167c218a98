"""Core layer — pure data and binding logic.

Rules
-----
* No ``print()`` calls.
* No process termination.
* No imports from ``cli``.
"""

from mainline.core.binding import Arity, arity_of, bind_positionals
from mainline.core.models import ExplicitExit, NormalReturn, Outcome, UnhandledFailure
from mainline.core.options import OptionStore
from mainline.core.protocols import ArgumentParser, ErrorSink

__all__: list[str] = [
    "ArgumentParser",
    "Arity",
    "ErrorSink",
    "ExplicitExit",
    "NormalReturn",
    "OptionStore",
    "Outcome",
    "UnhandledFailure",
    "arity_of",
    "bind_positionals",
]

"""Bind command-line positionals onto a routine's declared parameters.

Rules
-----
* A routine declaring ``n`` positional parameters receives exactly the
  first ``n`` supplied values, in command-line order.
* Required parameters with nothing to receive get ``None``.
* Parameters with defaults that have nothing to receive keep their
  default.
* Extra supplied values are dropped, unless the routine takes
  ``*args``, in which case it receives all of them.
"""

from __future__ import annotations

import inspect
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any

_POSITIONAL_KINDS = (
    inspect.Parameter.POSITIONAL_ONLY,
    inspect.Parameter.POSITIONAL_OR_KEYWORD,
)


@dataclass(frozen=True, slots=True)
class Arity:
    """Positional shape of a routine's signature."""

    required: int
    """Positional parameters without a default."""

    optional: int
    """Positional parameters with a default."""

    variadic: bool
    """Whether the routine accepts ``*args``."""

    @property
    def fixed(self) -> int:
        return self.required + self.optional


def arity_of(routine: Callable[..., Any]) -> Arity:
    """Inspect *routine* and return its positional :class:`Arity`.

    Callables whose signature cannot be introspected (some builtins)
    are treated as accepting any number of arguments.
    """
    try:
        signature = inspect.signature(routine)
    except (TypeError, ValueError):
        return Arity(required=0, optional=0, variadic=True)

    required = 0
    optional = 0
    variadic = False
    for param in signature.parameters.values():
        if param.kind in _POSITIONAL_KINDS:
            if param.default is inspect.Parameter.empty:
                required += 1
            else:
                optional += 1
        elif param.kind is inspect.Parameter.VAR_POSITIONAL:
            variadic = True
    return Arity(required=required, optional=optional, variadic=variadic)


def bind_positionals(
    routine: Callable[..., Any],
    arguments: Sequence[str],
) -> tuple[Any, ...]:
    """Return the positional call arguments for *routine*.

    Never raises for a short or long *arguments* sequence; padding and
    truncation follow the module rules.
    """
    arity = arity_of(routine)
    if arity.variadic:
        supplied = tuple(arguments)
    else:
        supplied = tuple(arguments[: arity.fixed])
    missing = arity.required - len(supplied)
    return supplied + (None,) * max(missing, 0)

"""Outcome models for a single routine invocation.

Exactly one outcome is produced per run.  All models are **frozen**
dataclasses; the CLI layer pattern-matches on their type to decide the
process exit status.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Union


@dataclass(frozen=True, slots=True)
class NormalReturn:
    """The routine returned normally."""

    value: Any
    """Whatever the routine returned, including ``None``."""


@dataclass(frozen=True, slots=True)
class ExplicitExit:
    """The routine asked to terminate early with a given status."""

    code: int

    message: str | None = None
    """Shown on the error channel when present."""


@dataclass(frozen=True, slots=True)
class UnhandledFailure:
    """The routine raised an exception that escaped it."""

    message: str

    code: int | None = None
    """Exit status carried by the failure, or ``None`` when unrecognised."""

    hint: str | None = None


Outcome = Union[NormalReturn, ExplicitExit, UnhandledFailure]

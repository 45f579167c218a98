"""Exit-code constants used by the CLI layer.

Centralised here so that every exit path uses a well-known, tested
value rather than magic integers scattered across the codebase.
"""

from __future__ import annotations

SUCCESS: int = 0
"""Clean exit, or the routine returned something that is not an integer."""

GENERAL_ERROR: int = 1
"""The routine asked to stop with a message but no explicit status."""

PARSE_ERROR: int = 1
"""The command line could not be parsed.  The routine was never invoked."""

SOFTWARE_ERROR: int = 70
"""An unrecognised exception escaped the routine.  ``EX_SOFTWARE`` in sysexits.h."""

KEYBOARD_INTERRUPT: int = 130
"""User pressed Ctrl+C.  Follows POSIX convention (128 + SIGINT=2)."""

"""The shared options store.

A deliberately loose mapping: the parser configuration decides which
keys exist, and nothing here validates keys or values.
"""

from __future__ import annotations

from typing import Any


class OptionStore(dict[str, Any]):
    """Mutable bag of parsed option values, shared by reference.

    Missing keys read as ``None`` through :meth:`get`, so a routine can
    test ``options.get("verbose")`` without caring whether the switch
    was ever configured.
    """

    def set(self, key: str, value: Any) -> None:
        self[key] = value

    def __repr__(self) -> str:
        return f"{type(self).__name__}({dict.__repr__(self)})"

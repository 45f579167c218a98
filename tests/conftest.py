"""Shared pytest fixtures and configuration for the mainline test suite.

Guidelines
----------
* Never let a test terminate the interpreter: use ``Main.execute`` or
  wrap ``Main.run`` in ``pytest.raises(SystemExit)``.
* Capture the error channel through the injected ``error`` callable.
* Tests must not depend on the real ``sys.argv`` or environment.
"""

from __future__ import annotations

import pytest

from mainline.cli.app import Main


@pytest.fixture
def errors() -> list[str]:
    """Messages sent to the error channel."""
    return []


@pytest.fixture
def app(errors: list[str]) -> Main:
    """A fresh engine whose error channel appends to ``errors``."""
    return Main("test-app", error=errors.append)

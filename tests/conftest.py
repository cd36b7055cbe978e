"""Shared test configuration.

The capability flag is read when ``chaoskit`` is first imported, so it has to be
set here, before any test module pulls the package in.
"""

from __future__ import annotations

import os

os.environ["CHAOSKIT_ENABLED"] = "1"

import pytest  # noqa: E402

from chaoskit import FailpointRegistry  # noqa: E402


@pytest.fixture
def registry() -> FailpointRegistry:
    """A private registry, so tests do not share failpoint state."""
    return FailpointRegistry()

"""Shared pytest fixtures for the midivisual test suite."""

import pytest


# ---------------------------------------------------------------------------
# Environment
# ---------------------------------------------------------------------------

@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep developer shell settings out of config and logging tests."""
    for name in (
        "MIDIVISUAL_ENV",
        "MIDIVISUAL_LOG_LEVEL",
        "MIDIVISUAL_DEFAULT_DURATION",
        "MIDIVISUAL_WARNINGS",
    ):
        monkeypatch.delenv(name, raising=False)

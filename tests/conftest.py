"""Shared fixtures."""

import datetime

import pytest

_ENV_VARS = ("ASCIIMOON_SIZE", "ASCIIMOON_HEMISPHERE", "ASCIIMOON_LOG_LEVEL")


@pytest.fixture(autouse=True)
def _isolated_environment(monkeypatch):
    """Keep the developer's environment and .env file out of the tests."""
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr("asciimoon.cli.load_dotenv", lambda *a, **kw: False)


@pytest.fixture
def fixed_today():
    """Clock stand-in: today is always 2000-01-21 (a full moon)."""
    return lambda: datetime.date(2000, 1, 21)

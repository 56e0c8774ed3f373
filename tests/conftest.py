# tests/conftest.py
from __future__ import annotations

from collections.abc import Generator

import pytest

from archespec.config.settings import get_settings

_SETTINGS_ENV = (
    "ENVIRONMENT",
    "LOG_LEVEL",
    "SERVICE_NAME",
    "ARCHESPEC_OPENAPI_VERSION",
    "ARCHESPEC_JSON_INDENT",
    "ARCHESPEC_STRONG_PARAMETERS",
    "ARCHESPEC_RESPONSE_OMIT",
)


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch: pytest.MonkeyPatch, tmp_path_factory: pytest.TempPathFactory) -> Generator[None, None, None]:
    """Run every test against default settings, unaffected by the environment or a local .env."""
    for name in _SETTINGS_ENV:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path_factory.mktemp("cwd"))
    monkeypatch.setenv("ENVIRONMENT", "test")
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()

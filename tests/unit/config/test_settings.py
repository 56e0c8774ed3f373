# tests/unit/config/test_settings.py
from __future__ import annotations

import pytest

from archespec.config.settings import Environment, Settings, get_settings
from archespec.domain.value_objects.openapi_version import OpenAPIVersion


def test_defaults_when_unset_are_sane() -> None:
    s = get_settings()

    assert s.environment is Environment.TEST
    assert s.log_level is None
    assert s.service_name == "archespec"
    assert s.openapi_version == OpenAPIVersion.from_value("3.1")
    assert s.json_indent is None
    assert s.strong_parameters is False
    assert s.response_omit is None


def test_settings_are_read_from_the_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ARCHESPEC_OPENAPI_VERSION", "3.0")
    monkeypatch.setenv("ARCHESPEC_JSON_INDENT", "2")
    monkeypatch.setenv("ARCHESPEC_STRONG_PARAMETERS", "true")
    monkeypatch.setenv("ARCHESPEC_RESPONSE_OMIT", "empty")
    monkeypatch.setenv("LOG_LEVEL", " warning ")
    monkeypatch.setenv("SERVICE_NAME", "petstore")

    s = get_settings()

    assert s.openapi_version == OpenAPIVersion.from_value("3.0")
    assert s.json_indent == 2
    assert s.strong_parameters is True
    assert s.response_omit == "empty"
    assert s.log_level == "WARNING"
    assert s.service_name == "petstore"


def test_get_settings_is_cached() -> None:
    assert get_settings() is get_settings()


@pytest.mark.parametrize(
    ("name", "value"),
    [
        ("ARCHESPEC_OPENAPI_VERSION", "4.0"),
        ("ARCHESPEC_JSON_INDENT", "9"),
        ("ARCHESPEC_RESPONSE_OMIT", "always"),
        ("LOG_LEVEL", "loud"),
        ("ENVIRONMENT", "moon"),
    ],
)
def test_invalid_configuration_raises_runtime_error(monkeypatch: pytest.MonkeyPatch, name: str, value: str) -> None:
    monkeypatch.setenv(name, value)

    with pytest.raises(RuntimeError, match="Invalid configuration"):
        get_settings()


def test_unknown_dotenv_keys_are_rejected(tmp_path, monkeypatch: pytest.MonkeyPatch) -> None:
    (tmp_path / ".env").write_text("ARCHESPEC_UNKNOWN=1\n", encoding="utf-8")
    monkeypatch.chdir(tmp_path)

    with pytest.raises(RuntimeError, match="Invalid configuration"):
        get_settings()


def test_blank_log_level_is_unset() -> None:
    assert Settings(LOG_LEVEL="  ").log_level is None

from __future__ import annotations

import pytest

from backend.app.config import load_settings


def test_defaults(monkeypatch) -> None:
    for name in (
        "OPENAI_API_KEY", "OPENAI_MODEL", "OPENAI_TEMPERATURE", "OPENAI_MAX_TOKENS",
        "GATEWAY_MAX_ATTEMPTS", "GATEWAY_BACKOFF_SECONDS", "OPENAI_TIMEOUT_SECONDS", "CORS_ALLOW_ORIGINS",
    ):
        monkeypatch.delenv(name, raising=False)

    s = load_settings()

    assert s.has_openai_key is False
    assert s.openai_model == "gpt-4o-mini"
    assert (s.temperature, s.max_tokens) == (0.7, 1000)
    assert (s.max_attempts, s.backoff_seconds, s.timeout_seconds) == (3, 2.0, 30.0)
    assert s.cors_allow_origins == ("*",)


def test_overrides_from_env(monkeypatch) -> None:
    monkeypatch.setenv("OPENAI_API_KEY", " sk-test ")
    monkeypatch.setenv("GATEWAY_MAX_ATTEMPTS", "5")
    monkeypatch.setenv("CORS_ALLOW_ORIGINS", "http://localhost:8501, http://127.0.0.1:8501")

    s = load_settings()

    assert s.openai_api_key == "sk-test"
    assert s.max_attempts == 5
    assert s.cors_allow_origins == ("http://localhost:8501", "http://127.0.0.1:8501")


@pytest.mark.parametrize("name, value", [("GATEWAY_MAX_ATTEMPTS", "three"), ("GATEWAY_MAX_ATTEMPTS", "0"), ("OPENAI_TIMEOUT_SECONDS", "soon")])
def test_invalid_values_raise(monkeypatch, name, value) -> None:
    monkeypatch.setenv(name, value)
    with pytest.raises(ValueError):
        load_settings()

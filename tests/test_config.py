"""Tests for settings loading."""

import pytest

from src.config import load_settings


def test_defaults(monkeypatch):
    for name in ("AI_TOOLS_ENABLED", "LLM_PROVIDER", "LLM_CLIENT", "LLM_MODEL", "LLM_API_KEY",
                 "LLM_MAX_TOKENS", "LLM_TEMPERATURE", "LLM_TIMEOUT_S", "APP_ENV"):
        monkeypatch.delenv(name, raising=False)
    settings = load_settings()
    assert settings.ai_tools_enabled is False
    assert settings.llm_provider == "mistral"
    assert settings.llm_client == "native"
    assert settings.llm_model == "mistral-small-latest"
    assert settings.llm_max_tokens == 2000
    assert settings.llm_temperature == 0.3
    assert settings.llm_timeout_s is None
    assert settings.is_production is False


def test_openai_from_env(monkeypatch):
    monkeypatch.setenv("AI_TOOLS_ENABLED", "true")
    monkeypatch.setenv("LLM_PROVIDER", "OpenAI")
    monkeypatch.delenv("LLM_MODEL", raising=False)
    monkeypatch.setenv("LLM_API_KEY", "sk-test")
    monkeypatch.setenv("APP_ENV", "production")
    settings = load_settings()
    assert settings.ai_tools_enabled is True
    assert settings.llm_provider == "openai"
    assert settings.llm_model == "gpt-4o-mini"
    assert settings.llm_api_key.get_secret_value() == "sk-test"
    assert settings.is_production is True


def test_only_exact_true_enables(monkeypatch):
    monkeypatch.setenv("AI_TOOLS_ENABLED", "TRUE")
    assert load_settings().ai_tools_enabled is False


def test_invalid_number_keeps_default(monkeypatch):
    monkeypatch.setenv("LLM_MAX_TOKENS", "lots")
    monkeypatch.setenv("LLM_TIMEOUT_S", "12.5")
    settings = load_settings()
    assert settings.llm_max_tokens == 2000
    assert settings.llm_timeout_s == 12.5


@pytest.mark.parametrize("name, value, field, default", [
    ("LLM_MAX_TOKENS", "-5", "llm_max_tokens", 2000),
    ("LLM_MAX_TOKENS", "0", "llm_max_tokens", 2000),
    ("LLM_TEMPERATURE", "5", "llm_temperature", 0.3),
    ("LLM_TIMEOUT_S", "0", "llm_timeout_s", None),
    ("LLM_TIMEOUT_S", "nan", "llm_timeout_s", None),
])
def test_out_of_range_number_keeps_default(monkeypatch, name, value, field, default):
    monkeypatch.setenv(name, value)
    assert getattr(load_settings(), field) == default


def test_unknown_provider_falls_back(monkeypatch):
    monkeypatch.setenv("LLM_PROVIDER", "anthropic")
    monkeypatch.setenv("LLM_CLIENT", "unified")
    settings = load_settings()
    assert settings.llm_provider == "mistral"
    assert settings.llm_client == "unified"

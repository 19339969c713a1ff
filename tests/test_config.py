"""Tests for comparator/core/config.py."""

import pytest
from pydantic import ValidationError

from comparator.core.config import Settings


def test_missing_api_key_fails(monkeypatch):
    monkeypatch.delenv("GROQ_API_KEY", raising=False)
    with pytest.raises(ValidationError):
        Settings(_env_file=None)


def test_defaults(monkeypatch):
    monkeypatch.setenv("GROQ_API_KEY", "abc")
    for name in ("GROQ_MODEL", "LLM_TEMPERATURE", "LLM_TIMEOUT", "LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    settings = Settings(_env_file=None)
    assert settings.GROQ_API_KEY == "abc"
    assert settings.GROQ_MODEL == "openai/gpt-oss-120b"
    assert settings.LLM_TIMEOUT == 60.0
    assert settings.LOG_LEVEL == "INFO"


def test_overrides_from_environment(monkeypatch):
    monkeypatch.setenv("GROQ_API_KEY", "abc")
    monkeypatch.setenv("GROQ_MODEL", "moonshotai/kimi-k2-instruct")
    monkeypatch.setenv("LLM_TIMEOUT", "15")
    settings = Settings(_env_file=None)
    assert settings.GROQ_MODEL == "moonshotai/kimi-k2-instruct"
    assert settings.LLM_TIMEOUT == 15.0

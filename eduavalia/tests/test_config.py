"""Tests for environment-based settings."""

from pathlib import Path

from eduavalia.config import DEFAULT_INSTITUTION, DEFAULT_MODEL, DEFAULT_QUESTIONNAIRE, DEFAULT_TEMPERATURE, load_settings


def test_defaults_without_environment():
    settings = load_settings({})
    assert settings.openai_api_key is None
    assert not settings.has_api_key
    assert settings.model == DEFAULT_MODEL
    assert settings.institution == DEFAULT_INSTITUTION
    assert settings.questionnaire_path == DEFAULT_QUESTIONNAIRE
    assert settings.temperature == DEFAULT_TEMPERATURE
    assert settings.log_level == "INFO"


def test_environment_overrides():
    settings = load_settings({
        "OPENAI_API_KEY": "sk-test",
        "EDUAVALIA_MODEL": "gpt-4o",
        "EDUAVALIA_INSTITUTION": "Escola Exemplo",
        "EDUAVALIA_QUESTIONNAIRE": "/tmp/q.yaml",
        "EDUAVALIA_TEMPERATURE": "0.2",
        "EDUAVALIA_LOG_LEVEL": "debug",
    })
    assert settings.has_api_key
    assert settings.model == "gpt-4o"
    assert settings.institution == "Escola Exemplo"
    assert settings.questionnaire_path == Path("/tmp/q.yaml")
    assert settings.temperature == 0.2
    assert settings.log_level == "DEBUG"


def test_invalid_temperature_falls_back():
    assert load_settings({"EDUAVALIA_TEMPERATURE": "warm"}).temperature == DEFAULT_TEMPERATURE

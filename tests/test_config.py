"""Tests for settings and environment fallbacks."""

import pytest
from pydantic import ValidationError

from core.config import Settings
from core.exceptions import ConfigurationError


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in (
        "SUPABASE_URL",
        "NEXT_PUBLIC_SUPABASE_URL",
        "SUPABASE_SERVICE_ROLE_KEY",
        "SUPABASE_SERVICE_KEY",
        "DATABASE_URL",
        "POSTGRES_DB_URL",
        "RAG_TOP_K",
        "API_PORT",
        "LLM_PROVIDER",
        "LLM_TEMPERATURE",
        "LLM_MAX_TOKENS",
        "EMBEDDING_MODEL",
        "EMBEDDING_DIMENSIONS",
        "DB_POOL_SIZE",
    ):
        monkeypatch.delenv(name, raising=False)


def test_defaults():
    settings = Settings(_env_file=None)
    assert settings.api_port == 4000
    assert settings.llm_provider == "openai"
    assert settings.llm_temperature == 0.3
    assert settings.llm_max_tokens == 1000
    assert settings.embedding_model == "mistral-embed"
    assert settings.embedding_dimensions == 1024
    assert settings.rag_top_k == 3
    assert settings.db_pool_size == 5


def test_secondary_env_name_is_used(monkeypatch):
    monkeypatch.setenv("NEXT_PUBLIC_SUPABASE_URL", "https://public.supabase.co")
    monkeypatch.setenv("SUPABASE_SERVICE_KEY", "service-key")
    settings = Settings(_env_file=None)
    assert settings.supabase_url == "https://public.supabase.co"
    assert settings.supabase_service_role_key == "service-key"


def test_first_env_name_wins(monkeypatch):
    monkeypatch.setenv("DATABASE_URL", "sqlite:///primary.db")
    monkeypatch.setenv("POSTGRES_DB_URL", "postgresql://secondary")
    assert Settings(_env_file=None).database_url == "sqlite:///primary.db"


def test_plain_setting_from_env(monkeypatch):
    monkeypatch.setenv("RAG_TOP_K", "5")
    assert Settings(_env_file=None).rag_top_k == 5


def test_env_names_lists_fallbacks_in_order():
    assert Settings.env_names("supabase_url") == ["SUPABASE_URL", "NEXT_PUBLIC_SUPABASE_URL"]
    assert Settings.env_names("rag_top_k") == ["RAG_TOP_K"]


def test_require_names_every_checked_variable():
    settings = Settings(_env_file=None)
    with pytest.raises(ConfigurationError) as exc_info:
        settings.require("database_url", error_code="database_not_configured")

    error = exc_info.value
    assert error.status_code == 503
    assert error.error_code == "database_not_configured"
    assert "DATABASE_URL" in error.message
    assert "POSTGRES_DB_URL" in error.message


def test_require_returns_value():
    settings = Settings(_env_file=None, database_url="sqlite://")
    assert settings.require("database_url") == "sqlite://"


@pytest.mark.parametrize("name, value", [("LLM_TEMPERATURE", "1.5"), ("LLM_TEMPERATURE", "-0.1"), ("LLM_MAX_TOKENS", "0")])
def test_out_of_range_completion_settings_fail_at_load(monkeypatch, name, value):
    monkeypatch.setenv(name, value)
    with pytest.raises(ValidationError):
        Settings(_env_file=None)


def test_temperature_zero_is_accepted(monkeypatch):
    monkeypatch.setenv("LLM_TEMPERATURE", "0")
    assert Settings(_env_file=None).llm_temperature == 0.0


def test_missing_error_names_every_checked_variable():
    error = Settings.missing_error("supabase_service_role_key", "authentication_error")
    assert error.error_code == "authentication_error"
    assert "SUPABASE_SERVICE_ROLE_KEY, SUPABASE_SERVICE_KEY" in error.message

"""Tests for settings loading."""

import pytest
from pydantic import ValidationError

from recipe_ingestion.config import ChunkingConfig, IngestionSettings, SamplingConfig


class TestIngestionSettings:

    def test_defaults(self):
        settings = IngestionSettings(provider="gemini")
        assert settings.sampling.temperature == 0.1
        assert settings.sampling.max_output_tokens == 16384
        assert settings.chunking.max_chunk_size == 8000
        assert settings.chunking.overlap_size == 1000
        assert settings.retry.rate_limit_retry_delay_s == 3.0
        assert settings.resolved_base_url.startswith("https://generativelanguage.googleapis.com")

    def test_from_env_reads_provider_key(self, monkeypatch):
        monkeypatch.setenv("OPENROUTER_API_KEY", "env-key")
        monkeypatch.delenv("RECIPE_EXTRACTION_MODEL", raising=False)
        settings = IngestionSettings.from_env(provider="openrouter")
        assert settings.api_key == "env-key"
        assert settings.resolved_model == "google/gemini-2.5-flash-lite"

    def test_from_env_model_override(self, monkeypatch):
        monkeypatch.setenv("GEMINI_API_KEY", "g-key")
        monkeypatch.setenv("RECIPE_EXTRACTION_MODEL", "gemini-2.5-pro")
        settings = IngestionSettings.from_env(provider="gemini")
        assert settings.resolved_model == "gemini-2.5-pro"

    def test_explicit_overrides_win(self, monkeypatch):
        monkeypatch.setenv("GEMINI_API_KEY", "g-key")
        settings = IngestionSettings.from_env(provider="gemini", api_key="explicit")
        assert settings.api_key == "explicit"

    def test_bare_settings_ignore_environment(self, monkeypatch):
        monkeypatch.setenv("RECIPE_LLM_PROVIDER", "deepseek")
        assert IngestionSettings().provider == "gemini"

    def test_from_env_reads_provider_at_call_time(self, monkeypatch):
        monkeypatch.setenv("RECIPE_LLM_PROVIDER", "openrouter")
        monkeypatch.setenv("OPENROUTER_API_KEY", "env-key")
        assert IngestionSettings.from_env().provider == "openrouter"

    def test_unsupported_provider_from_env(self, monkeypatch):
        monkeypatch.setenv("RECIPE_LLM_PROVIDER", "deepseek")
        with pytest.raises(ValueError, match="Unsupported LLM provider"):
            IngestionSettings.from_env()

    def test_unsupported_provider(self):
        with pytest.raises(ValueError, match="Unsupported LLM provider"):
            IngestionSettings.from_env(provider="deepseek")

    def test_invalid_sampling_rejected(self):
        with pytest.raises(ValidationError):
            SamplingConfig(top_p=1.5)
        with pytest.raises(ValidationError):
            ChunkingConfig(max_chunk_size=0)

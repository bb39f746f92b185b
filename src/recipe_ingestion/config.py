"""
Runtime settings for the ingestion pipeline.

Settings are resolved once from the environment (``.env`` is loaded if
present) and then passed explicitly to the extraction client and the
pipeline. Nothing in the package reads the environment after that.
"""

import os
from typing import Literal, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field

from .constants import (
    DEFAULT_PROVIDER,
    TEXT_CHUNK_SIZE,
    TEXT_CHUNK_OVERLAP,
    MIN_FINAL_CHUNK_SIZE,
    TEMPERATURE,
    MAX_OUTPUT_TOKENS,
    TOP_P,
    TOP_K,
    REQUEST_TIMEOUT_S,
    INTER_CHUNK_DELAY_S,
    RATE_LIMIT_RETRY_DELAY_S,
    MAX_RATE_LIMIT_RETRIES,
)

# Provider configurations
PROVIDERS = {
    "gemini": {
        "base_url": "https://generativelanguage.googleapis.com/v1beta/openai/",
        "model": "gemini-2.5-flash-lite",
        "env_key": "GEMINI_API_KEY",
    },
    "openrouter": {
        "base_url": "https://openrouter.ai/api/v1",
        "model": "google/gemini-2.5-flash-lite",
        "env_key": "OPENROUTER_API_KEY",
    },
}


class SamplingConfig(BaseModel):
    """Sampling parameters sent with every extraction request."""

    temperature: float = Field(default=TEMPERATURE, ge=0.0, le=2.0)
    max_output_tokens: int = Field(default=MAX_OUTPUT_TOKENS, gt=0)
    top_p: float = Field(default=TOP_P, gt=0.0, le=1.0)
    top_k: int = Field(default=TOP_K, gt=0)
    timeout_s: float = Field(default=REQUEST_TIMEOUT_S, gt=0.0)


class ChunkingConfig(BaseModel):
    """Window sizes used to split long input text."""

    max_chunk_size: int = Field(default=TEXT_CHUNK_SIZE, gt=0)
    overlap_size: int = Field(default=TEXT_CHUNK_OVERLAP, ge=0)
    min_final_chunk_size: int = Field(default=MIN_FINAL_CHUNK_SIZE, ge=0)


class RetryPolicy(BaseModel):
    """Pacing and rate-limit backoff for the extraction service."""

    inter_chunk_delay_s: float = Field(default=INTER_CHUNK_DELAY_S, ge=0.0)
    rate_limit_retry_delay_s: float = Field(default=RATE_LIMIT_RETRY_DELAY_S, ge=0.0)
    max_rate_limit_retries: int = Field(default=MAX_RATE_LIMIT_RETRIES, ge=0)


class IngestionSettings(BaseModel):
    """Everything the pipeline needs to talk to the extraction service."""

    provider: Literal["gemini", "openrouter"] = DEFAULT_PROVIDER
    api_key: Optional[str] = None
    model: Optional[str] = None
    base_url: Optional[str] = None
    sampling: SamplingConfig = Field(default_factory=SamplingConfig)
    chunking: ChunkingConfig = Field(default_factory=ChunkingConfig)
    retry: RetryPolicy = Field(default_factory=RetryPolicy)

    @property
    def resolved_model(self) -> str:
        return self.model or PROVIDERS[self.provider]["model"]

    @property
    def resolved_base_url(self) -> str:
        return self.base_url or PROVIDERS[self.provider]["base_url"]

    @classmethod
    def from_env(cls, provider: Optional[str] = None, **overrides) -> "IngestionSettings":
        """
        Build settings from environment variables.

        Args:
            provider: "gemini" or "openrouter". Defaults to RECIPE_LLM_PROVIDER.
            **overrides: Any other field, applied as-is.

        Returns:
            IngestionSettings with the provider's API key filled in when available.
        """
        load_dotenv()
        provider = provider or os.getenv("RECIPE_LLM_PROVIDER", DEFAULT_PROVIDER)
        if provider not in PROVIDERS:
            raise ValueError(f"Unsupported LLM provider: {provider}. Must be one of: {', '.join(PROVIDERS)}")

        overrides.setdefault("api_key", os.getenv(PROVIDERS[provider]["env_key"]))
        overrides.setdefault("model", os.getenv("RECIPE_EXTRACTION_MODEL"))
        return cls(provider=provider, **overrides)

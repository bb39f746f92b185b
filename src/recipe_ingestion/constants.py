"""Constants for recipe ingestion package."""

from typing import Literal

# Provider used when RECIPE_LLM_PROVIDER is not set (read by IngestionSettings.from_env)
DEFAULT_PROVIDER: Literal["gemini", "openrouter"] = "gemini"

# Text chunking
TEXT_CHUNK_SIZE = 8000
TEXT_CHUNK_OVERLAP = 1000
MIN_FINAL_CHUNK_SIZE = 500

# Sampling
TEMPERATURE = 0.1  # low temperature for thorough extraction
MAX_OUTPUT_TOKENS = 16384
TOP_P = 0.95
TOP_K = 40
REQUEST_TIMEOUT_S = 120.0  # per chunk

# Rate limiting
INTER_CHUNK_DELAY_S = 0.2
RATE_LIMIT_RETRY_DELAY_S = 3.0
MAX_RATE_LIMIT_RETRIES = 1

# Progress estimation
AVG_CHARS_PER_RECIPE = 1200

# Normalizer defaults
DEFAULT_TITLE = "Untitled Recipe"
DEFAULT_CATEGORY = "General"
DEFAULT_COOK_TIME = 30
DEFAULT_PREP_TIME = 15
DEFAULT_SERVINGS = 4

# Probe thermometer limits (°F)
PROBE_TEMP_MIN_F = 100
PROBE_TEMP_MAX_F = 300

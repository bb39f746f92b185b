import json
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest

from recipe_ingestion.config import IngestionSettings, RetryPolicy


def make_completion(content, prompt_tokens=1200, completion_tokens=300):
    """Shape of an openai ChatCompletion, enough for the extraction client."""
    return SimpleNamespace(
        choices=[SimpleNamespace(message=SimpleNamespace(content=content))],
        usage=SimpleNamespace(prompt_tokens=prompt_tokens, completion_tokens=completion_tokens),
    )


def make_status_error(cls, status_code, message="error", code=None):
    request = httpx.Request("POST", "https://example.test/v1/chat/completions")
    body = {"message": message, "code": code}
    response = httpx.Response(status_code, request=request, json=body)
    return cls(message, response=response, body=body)


def make_client(*side_effect):
    """Mock AsyncOpenAI client whose create() returns or raises each item in turn."""
    client = MagicMock()
    client.chat.completions.create = AsyncMock(side_effect=list(side_effect))
    return client


@pytest.fixture
def settings():
    """Settings with a fake key and no pacing delay."""
    return IngestionSettings(
        provider="gemini",
        api_key="test-api-key",
        retry=RetryPolicy(inter_chunk_delay_s=0.0, rate_limit_retry_delay_s=3.0),
    )


@pytest.fixture
def fake_sleep():
    """Records requested delays instead of sleeping."""
    return AsyncMock(return_value=None)


@pytest.fixture
def cookie_recipe():
    return {
        "title": "Chocolate Chip Cookies",
        "description": "Chewy cookies",
        "ingredients": ["2 cups flour", "1 cup butter", "1 cup chocolate chips"],
        "steps": [{"text": "Preheat oven to 375°F."}, {"text": "Bake for 10 minutes."}],
        "cookTime": 10,
        "prepTime": 15,
        "servings": 24,
        "category": "Dessert",
        "tags": ["Baking"],
    }


@pytest.fixture
def cookie_response(cookie_recipe):
    return "```json\n" + json.dumps([cookie_recipe]) + "\n```"



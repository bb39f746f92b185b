"""End-to-end tests for the ingestion pipeline with a mocked extraction API."""

import asyncio
import json
from unittest.mock import AsyncMock

import openai
import pytest

from recipe_ingestion import RecipeIngestor
from recipe_ingestion.config import ChunkingConfig, IngestionSettings, RetryPolicy
from recipe_ingestion.exceptions import EmptyResultError, ExtractionError, ExtractionFailure
from recipe_ingestion.models.recipe import ActionSuggestion, CookingAction
from recipe_ingestion.services.pipeline import ingest_text

from conftest import make_client, make_completion, make_status_error

COOKBOOK = (
    "Chocolate Chip Cookies\n"
    "2 cups flour, 1 cup butter, 1 cup chocolate chips.\n"
    "Preheat oven to 375F. Bake for 10 minutes.\n"
) * 4


def _settings(**chunking) -> IngestionSettings:
    chunking = {"max_chunk_size": 300, "overlap_size": 100, "min_final_chunk_size": 50, **chunking}
    return IngestionSettings(
        api_key="test-api-key",
        chunking=ChunkingConfig(**chunking),
        retry=RetryPolicy(inter_chunk_delay_s=0.0),
    )


def _recipes_json(*titles: str) -> str:
    return json.dumps([
        {"title": t, "ingredients": ["1 cup flour"], "steps": [{"text": "Mix."}, {"text": "Bake."}]}
        for t in titles
    ])


class TestIngestText:

    @pytest.mark.asyncio
    async def test_overlapping_chunks_yield_one_recipe(self, cookie_response, fake_sleep):
        assert 300 < len(COOKBOOK) <= 500
        api = make_client(make_completion(cookie_response), make_completion(cookie_response))

        result = await ingest_text(COOKBOOK, _settings(), client=api, sleep=fake_sleep)

        assert result.chunk_count == 2
        assert api.chat.completions.create.await_count == 2
        assert [r.title for r in result.recipes] == ["Chocolate Chip Cookies"]
        assert result.errors == []
        assert result.cancelled is False

    @pytest.mark.asyncio
    async def test_recipes_kept_in_chunk_order(self, fake_sleep):
        api = make_client(
            make_completion(_recipes_json("Soup", "Bread")),
            make_completion(_recipes_json("bread", "Salad")),
        )
        result = await ingest_text(COOKBOOK, _settings(), client=api, sleep=fake_sleep)
        assert [r.title for r in result.recipes] == ["Soup", "Bread", "Salad"]

    @pytest.mark.asyncio
    async def test_failed_chunk_is_recorded_and_skipped(self, fake_sleep):
        api = make_client(
            make_status_error(openai.InternalServerError, 503, "down"),
            make_completion(_recipes_json("Salad")),
        )
        result = await ingest_text(COOKBOOK, _settings(), client=api, sleep=fake_sleep)

        assert [r.title for r in result.recipes] == ["Salad"]
        assert len(result.errors) == 1
        assert result.errors[0].chunk_index == 0
        assert result.errors[0].reason == ExtractionFailure.UNAVAILABLE.value

    @pytest.mark.asyncio
    async def test_unreadable_response_is_recorded(self, fake_sleep):
        api = make_client(make_completion("Sorry, no JSON here."), make_completion(_recipes_json("Salad")))
        result = await ingest_text(COOKBOOK, _settings(), client=api, sleep=fake_sleep)

        assert [r.title for r in result.recipes] == ["Salad"]
        assert result.errors[0].reason == "normalization"

    @pytest.mark.asyncio
    async def test_all_chunks_failing_raises_last_extraction_error(self, fake_sleep):
        api = make_client(
            make_status_error(openai.InternalServerError, 503, "down"),
            make_status_error(openai.RateLimitError, 429, "quota exceeded", code="insufficient_quota"),
        )
        with pytest.raises(ExtractionError) as exc_info:
            await ingest_text(COOKBOOK, _settings(), client=api, sleep=fake_sleep)
        assert exc_info.value.reason == ExtractionFailure.QUOTA_EXHAUSTED

    @pytest.mark.asyncio
    async def test_no_recipes_raises_empty_result(self, fake_sleep):
        api = make_client(make_completion("[]"), make_completion('[{"title": "Only a title"}]'))
        with pytest.raises(EmptyResultError, match="No recipes found"):
            await ingest_text(COOKBOOK, _settings(), client=api, sleep=fake_sleep)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("text", ["", "   \n\t"])
    async def test_empty_text_raises_before_any_call(self, text, fake_sleep):
        api = make_client()
        with pytest.raises(EmptyResultError):
            await ingest_text(text, _settings(), client=api, sleep=fake_sleep)
        api.chat.completions.create.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_cancel_between_chunks_returns_partial_result(self, fake_sleep):
        cancel_event = asyncio.Event()

        async def create(**kwargs):
            cancel_event.set()
            return make_completion(_recipes_json("Soup"))

        api = make_client()
        api.chat.completions.create = AsyncMock(side_effect=create)

        result = await ingest_text(
            COOKBOOK,
            _settings(),
            client=api,
            sleep=fake_sleep,
            cancel_event=cancel_event,
        )

        assert result.cancelled is True
        assert [r.title for r in result.recipes] == ["Soup"]
        assert api.chat.completions.create.await_count == 1

    @pytest.mark.asyncio
    async def test_progress_reports_estimate(self, fake_sleep):
        api = make_client(make_completion(_recipes_json("Soup")), make_completion("[]"))
        progress = AsyncMock()

        await ingest_text(COOKBOOK, _settings(), client=api, sleep=fake_sleep, progress_callback=progress)

        messages = [call.args for call in progress.await_args_list]
        assert messages[0][0].startswith("Analyzing text")
        assert messages[-1] == ("Found 1 recipe(s)", 1, 1)

    @pytest.mark.asyncio
    async def test_analyzer_suggestions_attached(self, fake_sleep):
        api = make_client(make_completion(_recipes_json("Bread")), make_completion("[]"))

        def analyzer(title, description, steps, cook_time):
            assert steps == ["Mix.", "Bake."]
            return [ActionSuggestion(stepIndex=1, action=CookingAction(methodId="bake", parameters={"cooking_time": 1800}))]

        result = await ingest_text(COOKBOOK, _settings(), client=api, sleep=fake_sleep, analyzer=analyzer)

        steps = result.recipes[0].steps
        assert steps[0].cookingAction is None
        assert steps[1].cookingAction.methodId == "bake"

    @pytest.mark.asyncio
    async def test_raw_dict_suggestions_do_not_abort_import(self, fake_sleep):
        api = make_client(make_completion(_recipes_json("Bread")), make_completion("[]"))

        def analyzer(title, description, steps, cook_time):
            return [
                {"stepIndex": 0, "action": {"methodId": "roast", "parameters": {}}},
                {"stepIndex": -1},
            ]

        result = await ingest_text(COOKBOOK, _settings(), client=api, sleep=fake_sleep, analyzer=analyzer)

        steps = result.recipes[0].steps
        assert steps[0].cookingAction.methodId == "roast"
        assert steps[1].cookingAction is None


class TestRecipeIngestor:

    @pytest.mark.asyncio
    async def test_ingest_creates_fresh_client_per_import(self, cookie_response, monkeypatch):
        api = make_client(*(make_completion(cookie_response) for _ in range(4)))
        ingestor = RecipeIngestor(settings=_settings(), client=api)
        created = []

        from recipe_ingestion.services import pipeline
        original = pipeline.ExtractionClient

        def tracking_client(*args, **kwargs):
            client = original(*args, **kwargs)
            created.append(client)
            return client

        monkeypatch.setattr(pipeline, "ExtractionClient", tracking_client)

        first = await ingestor.ingest(COOKBOOK)
        second = await ingestor.ingest(COOKBOOK)

        assert len(first.recipes) == len(second.recipes) == 1
        assert len(created) == 2
        assert created[0].pacer is not created[1].pacer

    def test_validate_and_summarize(self):
        action = CookingAction(methodId="METHOD_BAKE", parameters={"target_cavity_temp": 550, "cooking_time": 1500})
        assert RecipeIngestor.validate_action("cq50", action) == {
            "target_cavity_temp": "Temperature must not exceed 500°F",
        }
        assert RecipeIngestor.validate_parameter("oven", "bake", "cooking_time", "") is None
        assert RecipeIngestor.summarize(action) == "25 min • 550°F"

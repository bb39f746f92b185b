"""Tests for the command line entry point."""

import json
from unittest.mock import AsyncMock, patch

from recipe_ingestion import cli
from recipe_ingestion.models.recipe import CandidateRecipe, Step
from recipe_ingestion.services.pipeline import IngestionResult


def _result():
    recipe = CandidateRecipe(
        title="Pancakes",
        ingredients=["1 cup flour"],
        steps=[Step(text="Mix.")],
        cookTime=10,
        prepTime=5,
        servings=2,
        category="Breakfast",
    )
    return IngestionResult(recipes=[recipe], chunk_count=1)


class TestCli:

    def test_missing_input_file(self, tmp_path):
        assert cli.main([str(tmp_path / "missing.txt"), "--quiet"]) == 1

    def test_writes_json_output(self, tmp_path, monkeypatch):
        monkeypatch.setenv("GEMINI_API_KEY", "test-key")
        source = tmp_path / "notes.txt"
        source.write_text("Pancakes\n1 cup flour\nMix.", encoding="utf-8")
        output = tmp_path / "out.json"

        with patch.object(cli, "ingest_text", AsyncMock(return_value=_result())) as ingest:
            code = cli.main([str(source), "--output", str(output), "--provider", "gemini", "--quiet"])

        assert code == 0
        assert ingest.await_args.args[0] == "Pancakes\n1 cup flour\nMix."
        data = json.loads(output.read_text(encoding="utf-8"))
        assert [r["title"] for r in data] == ["Pancakes"]

    def test_pipeline_error_returns_1(self, tmp_path, monkeypatch):
        from recipe_ingestion.exceptions import EmptyResultError

        monkeypatch.setenv("GEMINI_API_KEY", "test-key")
        source = tmp_path / "notes.txt"
        source.write_text("nothing useful", encoding="utf-8")

        with patch.object(cli, "ingest_text", AsyncMock(side_effect=EmptyResultError())):
            assert cli.main([str(source), "--quiet"]) == 1

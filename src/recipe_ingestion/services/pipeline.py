"""
Ingest one block of text: chunk, extract, normalize, dedupe, decorate.

Chunks are sent one at a time, in order. A chunk that fails is recorded and
skipped so one bad response does not lose the recipes found elsewhere in a
long document. Cancellation is honoured between chunks, never mid-request.
"""

import asyncio
import logging
import time
from typing import Awaitable, Callable, List, Optional

from pydantic import BaseModel, Field

from ..config import IngestionSettings
from ..exceptions import EmptyResultError, ExtractionError, NormalizationError
from ..models.recipe import CandidateRecipe
from .chunking import chunk_text, estimate_recipe_count, log_chunk_info
from .decoration import Analyzer, analyze_and_decorate
from .deduplication import dedupe
from .extraction import ClockFn, ExtractionClient, SleepFn
from .normalizer import normalize_all

logger = logging.getLogger(__name__)

# (message, recipes_found, total_estimate)
ProgressCallback = Callable[[str, int, int], Awaitable[None]]


class ChunkFailure(BaseModel):
    """Why one chunk produced no recipes."""

    chunk_index: int = Field(ge=0)
    reason: str
    message: str


class IngestionResult(BaseModel):
    recipes: List[CandidateRecipe] = Field(default_factory=list)
    errors: List[ChunkFailure] = Field(default_factory=list)
    chunk_count: int = 0
    cancelled: bool = False


async def ingest_text(
    text: str,
    settings: Optional[IngestionSettings] = None,
    *,
    client=None,
    analyzer: Optional[Analyzer] = None,
    progress_callback: Optional[ProgressCallback] = None,
    cancel_event: Optional[asyncio.Event] = None,
    sleep: SleepFn = asyncio.sleep,
    clock: ClockFn = time.monotonic,
) -> IngestionResult:
    """
    Extract every recipe from a block of text.

    Args:
        text: Raw text (OCR output, PDF pages, pasted notes).
        settings: Provider, sampling, chunking and retry settings.
        client: Optional AsyncOpenAI-compatible client, passed to the
            extraction client created for this import.
        analyzer: Optional appliance analyzer whose suggestions are attached to steps.
        progress_callback: Optional async callback for progress updates.
        cancel_event: When set, stops before the next chunk.
        sleep: Coroutine used for pacing and retry delays.
        clock: Monotonic clock used for pacing.

    Returns:
        IngestionResult with the de-duplicated recipes and per-chunk failures.

    Raises:
        EmptyResultError: If the text is empty or no recipe survived.
        ExtractionError: If every chunk failed at the extraction service
            (the last failure is re-raised).
    """
    if not text or not text.strip():
        raise EmptyResultError("No text provided.")

    settings = settings or IngestionSettings.from_env()
    chunking = settings.chunking
    chunks = chunk_text(
        text,
        max_chunk_size=chunking.max_chunk_size,
        overlap_size=chunking.overlap_size,
        min_final_chunk_size=chunking.min_final_chunk_size,
    )
    log_chunk_info(chunks)

    total_estimate = estimate_recipe_count(text)
    extractor = ExtractionClient(settings, client=client, sleep=sleep, clock=clock)

    async def report(message: str, found: int) -> None:
        if progress_callback:
            await progress_callback(message, found, total_estimate)

    candidates: List[CandidateRecipe] = []
    failures: List[ChunkFailure] = []
    last_extraction_error: Optional[ExtractionError] = None
    extraction_failures = 0
    cancelled = False

    await report(f"Analyzing text ({len(chunks)} section(s))...", 0)

    for index, chunk in enumerate(chunks):
        if cancel_event is not None and cancel_event.is_set():
            logger.info(f"Import cancelled before chunk {index + 1}/{len(chunks)}")
            cancelled = True
            break

        tag = f"[Chunk {index + 1}/{len(chunks)}]"
        await report(f"Processing section {index + 1} of {len(chunks)}...", len(candidates))

        try:
            result = await extractor.extract(chunk)
            recipes = normalize_all(result.text)
        except ExtractionError as e:
            logger.error(f"{tag} Extraction failed ({e.reason.value}): {e}")
            failures.append(ChunkFailure(chunk_index=index, reason=e.reason.value, message=str(e)))
            last_extraction_error = e
            extraction_failures += 1
            continue
        except NormalizationError as e:
            logger.error(f"{tag} Could not read response: {e}")
            failures.append(ChunkFailure(chunk_index=index, reason="normalization", message=str(e)))
            continue

        logger.info(f"{tag} Found {len(recipes)} recipe(s)")
        candidates.extend(recipes)

    recipes = dedupe(candidates)

    if analyzer is not None:
        recipes = [await analyze_and_decorate(recipe, analyzer) for recipe in recipes]

    if cancelled:
        await report(f"Cancelled, kept {len(recipes)} recipe(s)", len(recipes))
        return IngestionResult(recipes=recipes, errors=failures, chunk_count=len(chunks), cancelled=True)

    if last_extraction_error is not None and extraction_failures == len(chunks):
        raise last_extraction_error

    if not recipes:
        raise EmptyResultError(failures=failures)

    await report(f"Found {len(recipes)} recipe(s)", len(recipes))
    logger.info(f"Import complete: {len(recipes)} recipe(s), {len(failures)} failed chunk(s)")

    return IngestionResult(recipes=recipes, errors=failures, chunk_count=len(chunks))

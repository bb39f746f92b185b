"""
Split long input text into overlapping windows for extraction.

A 200-page cookbook export does not fit in one model response, so the text
is cut into windows of ``max_chunk_size`` characters that overlap by
``overlap_size``. A recipe cut at one window boundary appears whole in the
next window; the resulting duplicates are removed later by title.
"""

import logging
from typing import List

from ..constants import AVG_CHARS_PER_RECIPE, TEXT_CHUNK_SIZE, TEXT_CHUNK_OVERLAP, MIN_FINAL_CHUNK_SIZE
from ..exceptions import ChunkingError
from ..models.recipe import TextChunk

logger = logging.getLogger(__name__)


def chunk_text(
    text: str,
    max_chunk_size: int = TEXT_CHUNK_SIZE,
    overlap_size: int = TEXT_CHUNK_OVERLAP,
    min_final_chunk_size: int = MIN_FINAL_CHUNK_SIZE,
) -> List[TextChunk]:
    """
    Split text into overlapping chunks.

    Windows start every ``max_chunk_size - overlap_size`` characters until the
    remaining tail fits in one window. That tail becomes a final chunk only if
    it is longer than ``min_final_chunk_size``; a shorter tail is dropped, so
    callers keep ``min_final_chunk_size <= overlap_size`` to have it covered
    by the previous window.

    Args:
        text: Raw input text.
        max_chunk_size: Maximum characters per chunk.
        overlap_size: Characters shared by consecutive chunks.
        min_final_chunk_size: Shortest tail worth its own chunk.

    Returns:
        Chunks in input order. Empty text gives an empty list.

    Raises:
        ChunkingError: If the sizes cannot make forward progress.
    """
    if max_chunk_size <= 0:
        raise ChunkingError(f"max_chunk_size must be positive, got {max_chunk_size}")
    if overlap_size < 0 or overlap_size >= max_chunk_size:
        raise ChunkingError(
            f"overlap_size must be in [0, {max_chunk_size}), got {overlap_size}"
        )
    if min_final_chunk_size < 0:
        raise ChunkingError(f"min_final_chunk_size must not be negative, got {min_final_chunk_size}")

    if not text:
        return []

    if len(text) <= max_chunk_size:
        return [TextChunk(text=text, start_offset=0)]

    step = max_chunk_size - overlap_size
    chunks: List[TextChunk] = []
    start = 0

    while start < len(text):
        chunks.append(TextChunk(text=text[start:start + max_chunk_size], start_offset=start))
        start += step

        if len(text) - start <= max_chunk_size:
            tail = text[start:]
            if len(tail) > min_final_chunk_size:
                chunks.append(TextChunk(text=tail, start_offset=start))
            else:
                logger.debug(f"Dropping {len(tail)}-char tail, covered by previous overlap")
            break

    return chunks


def non_overlapping_text(chunks: List[TextChunk]) -> str:
    """Rebuild the covered text by appending only what each chunk adds."""
    covered = 0
    parts = []
    for chunk in chunks:
        if chunk.end_offset > covered:
            parts.append(chunk.text[max(0, covered - chunk.start_offset):])
            covered = chunk.end_offset
    return "".join(parts)


def estimate_recipe_count(text: str, avg_chars_per_recipe: int = AVG_CHARS_PER_RECIPE) -> int:
    """Rough number of recipes in a text, used only for progress reporting."""
    if not text or avg_chars_per_recipe <= 0:
        return 0
    return max(1, round(len(text) / avg_chars_per_recipe))


def log_chunk_info(chunks: List[TextChunk]) -> None:
    logger.info(f"Split text into {len(chunks)} chunk(s)")
    for index, chunk in enumerate(chunks, 1):
        logger.debug(
            f"[Chunk {index}/{len(chunks)}] offset={chunk.start_offset} length={len(chunk.text)}"
        )

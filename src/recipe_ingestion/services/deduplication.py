"""Drop recipes that several overlapping chunks extracted more than once."""

import logging
import re
from typing import List

from ..models.recipe import CandidateRecipe

logger = logging.getLogger(__name__)

_NON_WORD = re.compile(r"[^\w\s]")
_WHITESPACE = re.compile(r"\s+")


def normalize_title(title: str) -> str:
    """Lowercase, turn punctuation into spaces, collapse whitespace ("Choc-Chip!" -> "choc chip")."""
    lowered = _NON_WORD.sub(" ", (title or "").lower())
    return _WHITESPACE.sub(" ", lowered).strip()


def dedupe(candidates: List[CandidateRecipe]) -> List[CandidateRecipe]:
    """
    Keep the first recipe for each normalized title, in arrival order.

    Args:
        candidates: Recipes in chunk order, then in-chunk order.

    Returns:
        A new list; input order of the kept recipes is preserved.
    """
    seen = set()
    unique: List[CandidateRecipe] = []

    for recipe in candidates:
        key = normalize_title(recipe.title)
        if key in seen:
            logger.info(f"Skipping duplicate recipe: {recipe.title}")
            continue
        seen.add(key)
        unique.append(recipe)

    removed = len(candidates) - len(unique)
    if removed:
        logger.info(f"Deduplication: {len(candidates)} -> {len(unique)} recipes ({removed} duplicates removed)")
    else:
        logger.info(f"Deduplication: no duplicates among {len(candidates)} recipes")

    return unique

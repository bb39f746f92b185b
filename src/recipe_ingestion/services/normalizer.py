"""
Turn raw extraction responses into CandidateRecipe records.

Model output is loose: it arrives wrapped in markdown fences, numbers come
as strings, steps are sometimes plain strings and sometimes objects, and
quantities carry float noise ("0.3333333334 cup"). Everything is coerced
here so later stages only ever see well-formed records.
"""

import json
import logging
import re
from typing import Any, List, Optional, Union

from pydantic import ValidationError

from ..constants import (
    DEFAULT_TITLE,
    DEFAULT_CATEGORY,
    DEFAULT_COOK_TIME,
    DEFAULT_PREP_TIME,
    DEFAULT_SERVINGS,
)
from ..exceptions import NormalizationError
from ..models.recipe import CandidateRecipe, CookingAction, Step
from ..utils.coercion import parse_leading_int

logger = logging.getLogger(__name__)

_FENCE_OPEN = re.compile(r"^```(?:json)?[ \t]*\n?", re.IGNORECASE)
_FENCE_CLOSE = re.compile(r"\n?```\s*$")
_LONG_DECIMAL = re.compile(r"\d+\.\d{3,}")


def strip_code_fences(text: str) -> str:
    """Remove a leading ```json (or ```) fence and the trailing ``` fence."""
    text = text.strip()
    text = _FENCE_OPEN.sub("", text, count=1)
    text = _FENCE_CLOSE.sub("", text, count=1)
    return text.strip()


def parse_json_payload(text: str) -> Any:
    """
    Parse a response body as JSON.

    Falls back to the outermost ``[...]`` or ``{...}`` slice when the model
    wrapped the JSON in prose.

    Raises:
        NormalizationError: If no JSON value can be recovered.
    """
    cleaned = strip_code_fences(text)
    try:
        return json.loads(cleaned)
    except RecursionError as exc:
        raise NormalizationError("Response JSON is nested too deeply") from exc
    except json.JSONDecodeError:
        pass

    starts = [i for i in (cleaned.find("["), cleaned.find("{")) if i != -1]
    if starts:
        start = min(starts)
        closer = "]" if cleaned[start] == "[" else "}"
        end = cleaned.rfind(closer)
        if end > start:
            try:
                return json.loads(cleaned[start:end + 1])
            except RecursionError as exc:
                raise NormalizationError("Response JSON is nested too deeply") from exc
            except json.JSONDecodeError as exc:
                raise NormalizationError(f"Response is not valid JSON: {exc}") from exc

    raise NormalizationError(f"No JSON found in response: {cleaned[:100]}...")


def round_long_decimals(ingredient: str) -> str:
    """Round numbers with more than two decimals ("0.3333 cup" -> "0.33 cup")."""
    return _LONG_DECIMAL.sub(lambda m: f"{float(m.group(0)):.2f}", ingredient)


def _clean_strings(values: Any) -> List[str]:
    if not isinstance(values, list):
        return []
    return [v.strip() for v in values if isinstance(v, str) and v.strip()]


def _to_int(value: Any, default: int) -> int:
    parsed = parse_leading_int(value)
    return parsed if parsed else default


def _build_step(raw: Any) -> Optional[Step]:
    if isinstance(raw, str):
        return Step(text=raw.strip()) if raw.strip() else None
    if not isinstance(raw, dict):
        return None

    text = raw.get("text")
    if not isinstance(text, str) or not text.strip():
        return None

    image = raw.get("image") if isinstance(raw.get("image"), str) else None
    action = None
    if raw.get("cookingAction"):
        try:
            action = CookingAction.model_validate(raw["cookingAction"])
        except ValidationError as exc:
            logger.warning(f"Dropping malformed cookingAction on step '{text[:40]}': {exc.error_count()} error(s)")

    return Step(text=text.strip(), image=image, cookingAction=action)


def build_recipe(parsed: dict, image: Optional[str] = None) -> Optional[CandidateRecipe]:
    """
    Build one CandidateRecipe from a decoded JSON object.

    Returns None when the object has neither ingredients nor steps.
    """
    title = parsed.get("title")
    title = title.strip() if isinstance(title, str) and title.strip() else DEFAULT_TITLE

    raw_description = parsed.get("description")
    description = raw_description.strip() if isinstance(raw_description, str) else ""
    notes = parsed.get("notes")
    notes = notes.strip() if isinstance(notes, str) else ""
    if notes and notes != description:
        description = f"{description}\n\nNotes: {notes}" if description else notes

    raw_steps = parsed.get("steps")
    steps = [s for s in (_build_step(raw) for raw in raw_steps) if s] if isinstance(raw_steps, list) else []

    category = parsed.get("category")
    category = category.strip() if isinstance(category, str) and category.strip() else DEFAULT_CATEGORY

    recipe = CandidateRecipe(
        title=title,
        description=description,
        ingredients=[round_long_decimals(i) for i in _clean_strings(parsed.get("ingredients"))],
        steps=steps,
        cookTime=_to_int(parsed.get("cookTime"), DEFAULT_COOK_TIME),
        prepTime=_to_int(parsed.get("prepTime"), DEFAULT_PREP_TIME),
        servings=_to_int(parsed.get("servings"), DEFAULT_SERVINGS),
        category=category,
        tags=_clean_strings(parsed.get("tags")),
        image=image,
    )

    if recipe.is_empty:
        logger.warning(f"Recipe '{title}' has no ingredients or steps, skipping")
        return None

    return recipe


def _build_many(items: list, image: Optional[str]) -> List[CandidateRecipe]:
    recipes = []
    for index, item in enumerate(items):
        if not isinstance(item, dict):
            logger.warning(f"Skipping array item {index}: expected an object, got {type(item).__name__}")
            continue
        recipe = build_recipe(item, image=image)
        if recipe is not None:
            recipes.append(recipe)
    return recipes


def normalize(
    raw_response_text: str,
    image: Optional[str] = None,
) -> Union[List[CandidateRecipe], CandidateRecipe, None]:
    """
    Normalize one raw extraction response.

    Args:
        raw_response_text: Response body, possibly fenced or wrapped in prose.
        image: Optional image URI attached to every resulting recipe.

    Returns:
        A list for a JSON array, a single recipe (or None if empty) for a
        JSON object, None when the text cannot be parsed.
    """
    try:
        parsed = parse_json_payload(raw_response_text)
    except NormalizationError as exc:
        logger.error(f"Failed to parse extraction response: {exc}")
        return None

    if isinstance(parsed, list):
        return _build_many(parsed, image)

    if isinstance(parsed, dict):
        return build_recipe(parsed, image=image)

    logger.error(f"Extraction response is a JSON {type(parsed).__name__}, expected an object or array")
    return None


def normalize_all(raw_response_text: str, image: Optional[str] = None) -> List[CandidateRecipe]:
    """
    Normalize a response into a flat list of recipes.

    Raises:
        NormalizationError: If the response cannot be parsed at all.
    """
    parsed = parse_json_payload(raw_response_text)
    if isinstance(parsed, dict):
        parsed = [parsed]
    if not isinstance(parsed, list):
        raise NormalizationError(f"Expected a JSON object or array, got {type(parsed).__name__}")
    return _build_many(parsed, image)

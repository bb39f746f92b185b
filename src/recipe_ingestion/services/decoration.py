"""Attach appliance suggestions from an external analyzer to recipe steps."""

import inspect
import logging
from typing import Any, Awaitable, Callable, Iterable, List, Mapping, Optional, Union

from pydantic import ValidationError

from ..models.recipe import ActionSuggestion, CandidateRecipe, Step

logger = logging.getLogger(__name__)

SuggestionLike = Union[ActionSuggestion, Mapping[str, Any]]

# (title, description, steps, cook_time) -> suggestions, sync or async
Analyzer = Callable[
    [str, str, List[str], int],
    Union[List[SuggestionLike], Awaitable[List[SuggestionLike]]],
]


def coerce_suggestions(items: Optional[Iterable[Any]], title: str = "") -> List[ActionSuggestion]:
    """
    Turn analyzer output into ActionSuggestion models.

    Accepts models or ``{stepIndex, action}`` dicts (``cookingAction`` also
    works as the key). Items that do not validate are logged and skipped.
    """
    suggestions: List[ActionSuggestion] = []
    for index, item in enumerate(items or []):
        if isinstance(item, ActionSuggestion):
            suggestions.append(item)
            continue
        try:
            suggestions.append(ActionSuggestion.model_validate(item))
        except ValidationError as exc:
            logger.warning(
                f"Skipping suggestion {index} for '{title}': {exc.error_count()} validation error(s)"
            )
    return suggestions


def decorate_steps(recipe: CandidateRecipe, suggestions: Iterable[SuggestionLike]) -> CandidateRecipe:
    """
    Return a copy of the recipe with each suggestion set on its step.

    Suggestions pointing past the last step are ignored. Parameters are not
    validated here.
    """
    suggestions = coerce_suggestions(suggestions, recipe.title)
    if not suggestions:
        return recipe

    steps: List[Step] = [step.model_copy() for step in recipe.steps]
    for suggestion in suggestions:
        if suggestion.stepIndex >= len(steps):
            logger.debug(
                f"Ignoring suggestion for step {suggestion.stepIndex} of '{recipe.title}' "
                f"({len(steps)} steps)"
            )
            continue
        action = suggestion.action.model_copy(update={"stepIndex": suggestion.stepIndex})
        steps[suggestion.stepIndex] = steps[suggestion.stepIndex].model_copy(update={"cookingAction": action})

    return recipe.model_copy(update={"steps": steps})


async def analyze_and_decorate(recipe: CandidateRecipe, analyzer: Optional[Analyzer]) -> CandidateRecipe:
    """
    Ask the analyzer for suggestions and merge them in.

    Any failure, in the analyzer or while merging its output, is logged and
    the recipe is returned undecorated.
    """
    if analyzer is None:
        return recipe

    try:
        suggestions = analyzer(
            recipe.title,
            recipe.description,
            [step.text for step in recipe.steps],
            recipe.cookTime,
        )
        if inspect.isawaitable(suggestions):
            suggestions = await suggestions

        suggestions = coerce_suggestions(suggestions, recipe.title)
        if suggestions:
            logger.info(f"Attaching {len(suggestions)} appliance suggestion(s) to '{recipe.title}'")
        return decorate_steps(recipe, suggestions)
    except Exception as e:
        logger.error(f"Appliance analysis failed for '{recipe.title}': {e}")
        return recipe

"""
One-line summaries of cooking actions ("45 min • 350°F • Natural Release").

Cooking actions written by different app versions store the same setting
under different keys: minutes under ``time`` or ``duration``, seconds under
``cooking_time``, temperatures under five names, and so on. The synonym
table below maps every known key to one canonical category, in priority
order. It is read once per action by ``resolve_parameters``; only the
first populated key of each category is shown.
"""

import logging
import math
from enum import Enum
from typing import Any, Callable, Dict, List, Mapping, NamedTuple, Union

from ..models.recipe import CookingAction
from ..utils.coercion import format_number, parse_leading_number

logger = logging.getLogger(__name__)

SEPARATOR = " • "


class ParameterCategory(str, Enum):
    TIME = "time"
    TEMPERATURE = "temperature"
    PRESSURE_LEVEL = "pressure_level"
    HEAT_LEVEL = "heat_level"
    RELEASE = "release"


class ResolvedParameter(NamedTuple):
    key: str
    value: Any


def _truthy(value: Any) -> bool:
    return bool(value)


def _present(value: Any) -> bool:
    return value is not None


def _text(value: Any) -> str:
    if isinstance(value, float):
        return format_number(value)
    return str(value)


def _minutes_from_seconds(value: Any, params: Mapping[str, Any]) -> str:
    seconds = parse_leading_number(value)
    if seconds is None:
        return f"{_text(value)} min"
    return f"{math.floor(seconds / 60 + 0.5)} min"


def _probe(value: Any, params: Mapping[str, Any]) -> str:
    remove = params.get("remove_probe_temp")
    if remove and remove != value:
        return f"Probe: {_text(value)}°F (remove at {_text(remove)}°F)"
    return f"Probe: {_text(value)}°F"


def _pressure_level(value: Any, params: Mapping[str, Any]) -> str:
    return "High Pressure" if value == 1 else "Low Pressure"


_HEAT_LEVELS = {
    "1": "Low",
    "2": "Medium",
    "3": "High",
    "low": "Low",
    "medium": "Medium",
    "high": "High",
}


def _heat_level(value: Any, params: Mapping[str, Any]) -> str:
    text = _text(value)
    return _HEAT_LEVELS.get(text.lower(), text)


_RELEASES = {0: "Quick Release", 1: "Pulse Release", 2: "Natural Release"}


def _release_code(value: Any, params: Mapping[str, Any]) -> str:
    return _RELEASES.get(value, "Quick Release")


def _natural_release(value: Any, params: Mapping[str, Any]) -> str:
    return "Natural Release" if value else "Quick Release"


def _suffix(suffix: str) -> Callable[[Any, Mapping[str, Any]], str]:
    return lambda value, params: f"{_text(value)}{suffix}"


def _prefix(prefix: str, suffix: str) -> Callable[[Any, Mapping[str, Any]], str]:
    return lambda value, params: f"{prefix}{_text(value)}{suffix}"


class Synonym(NamedTuple):
    key: str
    is_populated: Callable[[Any], bool]
    render: Callable[[Any, Mapping[str, Any]], str]


# Order matters: within a category the first populated key wins.
SYNONYMS: Dict[ParameterCategory, List[Synonym]] = {
    ParameterCategory.TIME: [
        Synonym("time", _truthy, _suffix(" min")),
        Synonym("cooking_time", _truthy, _minutes_from_seconds),
        Synonym("duration", _truthy, _suffix(" min")),
    ],
    ParameterCategory.TEMPERATURE: [
        Synonym("temperature", _truthy, _suffix("°F")),
        Synonym("target_cavity_temp", _truthy, _suffix("°F")),
        Synonym("target_probe_temp", _truthy, _probe),
        Synonym("internalTemp", _truthy, _prefix("Internal: ", "°F")),
        Synonym("targetTemperature", _truthy, _suffix("°F")),
    ],
    ParameterCategory.PRESSURE_LEVEL: [
        Synonym("pressure", _truthy, _suffix(" Pressure")),
        # 0 is a real setting (low pressure)
        Synonym("pres_level", _present, _pressure_level),
        Synonym("pressureLevel", _truthy, _pressure_level),
    ],
    ParameterCategory.HEAT_LEVEL: [
        Synonym("temp_level", _truthy, _heat_level),
        Synonym("tempLevel", _truthy, _heat_level),
    ],
    ParameterCategory.RELEASE: [
        Synonym("pres_release", _present, _release_code),
        Synonym("naturalRelease", _present, _natural_release),
        Synonym("pressureRelease", _truthy, _suffix(" Release")),
        Synonym("releaseMethod", _truthy, _suffix(" Release")),
    ],
}


def resolve_parameters(parameters: Mapping[str, Any]) -> Dict[ParameterCategory, ResolvedParameter]:
    """Pick the winning key of each category present in a parameter bag."""
    resolved: Dict[ParameterCategory, ResolvedParameter] = {}
    for category, synonyms in SYNONYMS.items():
        for synonym in synonyms:
            value = parameters.get(synonym.key)
            if synonym.is_populated(value):
                resolved[category] = ResolvedParameter(synonym.key, value)
                break
    return resolved


def _split_action(action: Union[CookingAction, Mapping[str, Any], None]):
    if isinstance(action, CookingAction):
        return action.parameters or {}, action.model_extra or {}
    if isinstance(action, Mapping):
        params = action.get("parameters")
        return (params if isinstance(params, Mapping) else {}), action
    return {}, {}


_RENDERERS = {synonym.key: synonym.render for synonyms in SYNONYMS.values() for synonym in synonyms}


def format_summary(action: Union[CookingAction, Mapping[str, Any], None]) -> str:
    """
    Summarize the key settings of a cooking action.

    Accepts a CookingAction or the equivalent raw dict. Returns an empty
    string when nothing is recognised; never raises.
    """
    params, top_level = _split_action(action)
    resolved = resolve_parameters(params)

    phrases = []
    for parameter in resolved.values():
        try:
            phrases.append(_RENDERERS[parameter.key](parameter.value, params))
        except (TypeError, ValueError) as exc:
            logger.debug(f"Could not format {parameter.key}={parameter.value!r}: {exc}")

    # Older actions kept temperature and duration next to the parameter bag
    legacy_temp = top_level.get("temperature")
    if legacy_temp and not params.get("temperature"):
        phrases.append(f"{_text(legacy_temp)}°F")
    legacy_duration = top_level.get("duration")
    if legacy_duration and not params.get("time") and not params.get("cooking_time"):
        phrases.append(f"{_text(legacy_duration)} min")

    return SEPARATOR.join(phrases)

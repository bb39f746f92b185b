"""
Validate appliance cooking-action parameters as the user edits them.

Errors are returned as data (a message or a field -> message map) and never
raised: the form decides how to show them. A blank value is always valid so
a field can be cleared and retyped without flashing an error.
"""

import math
from typing import Any, Dict, Mapping, Optional, Union

from pydantic import BaseModel

from ..appliances import get_method
from ..constants import PROBE_TEMP_MIN_F, PROBE_TEMP_MAX_F
from ..models.appliance import ApplianceFamily, ParameterOptions, ParameterRange
from ..utils.coercion import format_number, is_blank, parse_leading_int

TARGET_PROBE_KEY = "target_probe_temp"
REMOVE_PROBE_KEY = "remove_probe_temp"
PROBE_KEYS = (TARGET_PROBE_KEY, REMOVE_PROBE_KEY)

ValidationErrors = Dict[str, str]
Family = Union[str, ApplianceFamily]


class ProbeTempErrors(BaseModel):
    target_error: Optional[str] = None
    remove_error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.target_error is None and self.remove_error is None


def _check_range(spec: ParameterRange, raw_value: Any) -> Optional[str]:
    is_time = spec.unit == "s"
    noun = "Cooking time" if is_time else "Temperature"

    value = parse_leading_int(raw_value)
    if value is None:
        return f"{noun} must be a number"

    if is_time:
        if value < spec.min:
            return f"Cooking time must be at least {math.floor(spec.min / 60)} minutes"
        if value > spec.max:
            return f"Cooking time must not exceed {math.floor(spec.max / 60)} minutes"
        return None

    if value < spec.min:
        return f"{spec.label} must be at least {format_number(spec.min)}{spec.unit}"
    if value > spec.max:
        return f"{spec.label} must not exceed {format_number(spec.max)}{spec.unit}"
    return None


def _check_options(spec: ParameterOptions, raw_value: Any) -> Optional[str]:
    if isinstance(raw_value, bool):
        value = int(raw_value)
    elif isinstance(raw_value, str):
        value = parse_leading_int(raw_value)
    else:
        value = raw_value

    if value in spec.options:
        return None

    choices = ", ".join(
        f"{option} ({spec.names[option]})" if option in spec.names else str(option)
        for option in spec.options
    )
    return f"{spec.label} must be one of: {choices}"


def _probe_value(value: Any) -> Optional[int]:
    if is_blank(value):
        return None
    return parse_leading_int(value)


def validate(
    family: Family,
    method_id: Union[str, int, None],
    key: str,
    raw_value: Any,
    current_parameters: Optional[Mapping[str, Any]] = None,
) -> Optional[str]:
    """
    Validate one edited parameter.

    Args:
        family: "oven" / "cooker" or one of their model aliases.
        method_id: Canonical, program (METHOD_*) or numeric mode id.
        key: Parameter being edited.
        raw_value: Value as typed; may be a string.
        current_parameters: The rest of the action's parameters, for the
            probe cross-field rule.

    Returns:
        An error message, or None when the value is acceptable or not checked.
    """
    if is_blank(raw_value):
        return None

    method = get_method(family, method_id)
    if method is None:
        return None

    spec = method.spec_for(key)
    if spec is None:
        return None

    if isinstance(spec, ParameterOptions):
        return _check_options(spec, raw_value)

    error = _check_range(spec, raw_value)
    if error or key not in PROBE_KEYS:
        return error

    current = current_parameters or {}
    value = parse_leading_int(raw_value)
    if key == REMOVE_PROBE_KEY:
        target = _probe_value(current.get(TARGET_PROBE_KEY))
        if target and value > target:
            return f"Remove temperature must not exceed target temperature ({target}°F)"
    else:
        remove = _probe_value(current.get(REMOVE_PROBE_KEY))
        if remove and value < remove:
            return f"Probe temperature must not be below remove temperature ({remove}°F)"
    return None


def validate_probe_temps(target: Any, remove: Any) -> ProbeTempErrors:
    """
    Validate target and remove probe temperatures together.

    The ordering error is reported on the remove field, referencing the target.
    """
    errors = ProbeTempErrors()

    target_value = _probe_value(target)
    if not is_blank(target):
        if target_value is None:
            errors.target_error = "Temperature must be a number"
        elif target_value < PROBE_TEMP_MIN_F:
            errors.target_error = f"Probe temperature must be at least {PROBE_TEMP_MIN_F}°F"
        elif target_value > PROBE_TEMP_MAX_F:
            errors.target_error = f"Probe temperature must not exceed {PROBE_TEMP_MAX_F}°F"

    remove_value = _probe_value(remove)
    if not is_blank(remove):
        if remove_value is None:
            errors.remove_error = "Temperature must be a number"
        elif remove_value < PROBE_TEMP_MIN_F:
            errors.remove_error = f"Remove temperature must be at least {PROBE_TEMP_MIN_F}°F"
        elif remove_value > PROBE_TEMP_MAX_F:
            errors.remove_error = f"Remove temperature must not exceed {PROBE_TEMP_MAX_F}°F"
        elif target_value is not None and remove_value > target_value:
            errors.remove_error = f"Remove temperature must not exceed target temperature ({target_value}°F)"

    return errors


def validate_parameters(
    family: Family,
    method_id: Union[str, int, None],
    parameters: Mapping[str, Any],
) -> ValidationErrors:
    """Validate a whole parameter bag. Returns field -> message for every failing field."""
    errors: ValidationErrors = {}
    for key, value in parameters.items():
        if key in PROBE_KEYS:
            continue
        error = validate(family, method_id, key, value, parameters)
        if error:
            errors[key] = error

    method = get_method(family, method_id)
    if method is not None and method.supports_probe:
        probe = validate_probe_temps(parameters.get(TARGET_PROBE_KEY), parameters.get(REMOVE_PROBE_KEY))
        if probe.target_error:
            errors[TARGET_PROBE_KEY] = probe.target_error
        if probe.remove_error:
            errors[REMOVE_PROBE_KEY] = probe.remove_error

    return errors


def default_parameters(family: Family, method_id: Union[str, int, None]) -> Dict[str, Any]:
    """Starting parameters for a freshly selected method."""
    method = get_method(family, method_id)
    if method is None:
        return {}
    defaults = {
        key: int(value) if isinstance(value, float) and value.is_integer() else value
        for key, value in method.defaults().items()
    }
    if TARGET_PROBE_KEY in defaults:
        defaults[REMOVE_PROBE_KEY] = default_remove_temp(defaults[TARGET_PROBE_KEY])
    return defaults


def default_remove_temp(target: int) -> int:
    """5°F below the target, never below the probe minimum."""
    return max(PROBE_TEMP_MIN_F, target - 5)


def clamp_remove_temp(remove: int, target: int) -> int:
    return target if remove > target else remove


def should_show_remove_temp(remove: Optional[int], target: Optional[int]) -> bool:
    if not remove or not target:
        return False
    return remove != target

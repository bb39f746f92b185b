"""Smart oven (CQ50 mini oven) cooking methods, temperatures in °F, times in seconds."""

from typing import Dict, List, Optional

from ..constants import PROBE_TEMP_MIN_F, PROBE_TEMP_MAX_F
from ..models.appliance import (
    FanSpeed,
    MethodSpec,
    ParameterOptions,
    ParameterRange,
    ShadeLevel,
    TemperatureLevel,
)

DEFAULT_PROBE_TARGET_F = 145
REHEAT_PROBE_TARGET_F = 165


def _cooking_time(default: int, max_s: int, min_s: int = 60) -> ParameterRange:
    return ParameterRange(min=min_s, max=max_s, unit="s", label="Cooking time", default=default)


def _cavity_temp(default: int, min_f: int, max_f: int) -> ParameterRange:
    return ParameterRange(min=min_f, max=max_f, unit="°F", label="Temperature", default=default)


def _fan_speed(default: FanSpeed, options: List[FanSpeed]) -> ParameterOptions:
    return ParameterOptions(
        options=[int(o) for o in options],
        label="Fan speed",
        default=int(default),
        names={int(o): o.name.title() for o in options},
    )


def _temp_level(default: TemperatureLevel = TemperatureLevel.HIGH) -> ParameterOptions:
    options = [TemperatureLevel.LOW, TemperatureLevel.HIGH]
    return ParameterOptions(
        options=[int(o) for o in options],
        label="Temperature level",
        default=int(default),
        names={int(o): o.name.title() for o in options},
    )


def _probe(target_default: int = DEFAULT_PROBE_TARGET_F) -> Dict[str, ParameterRange]:
    return {
        "target_probe_temp": ParameterRange(
            min=PROBE_TEMP_MIN_F, max=PROBE_TEMP_MAX_F, unit="°F",
            label="Probe temperature", default=target_default,
        ),
        "remove_probe_temp": ParameterRange(
            min=PROBE_TEMP_MIN_F, max=PROBE_TEMP_MAX_F, unit="°F",
            label="Remove temperature",
        ),
    }


def _method(
    method_id: str,
    name: str,
    parameters: dict,
    probe_target: Optional[int] = None,
) -> MethodSpec:
    params = dict(parameters)
    if probe_target is not None:
        params.update(_probe(probe_target))
    return MethodSpec(
        id=method_id,
        name=name,
        aliases=[f"METHOD_{method_id.upper()}"],
        parameters=params,
        supports_probe=probe_target is not None,
    )


OVEN_METHODS: List[MethodSpec] = [
    _method("air_fry", "Air Fry", {
        "target_cavity_temp": _cavity_temp(375, 300, 450),
        "cooking_time": _cooking_time(1800, 3540),
        "fan_speed": _fan_speed(FanSpeed.HIGH, [FanSpeed.HIGH]),
    }, probe_target=DEFAULT_PROBE_TARGET_F),
    _method("bake", "Bake", {
        "target_cavity_temp": _cavity_temp(350, 200, 500),
        "cooking_time": _cooking_time(1800, 14340),
        "fan_speed": _fan_speed(FanSpeed.LOW, list(FanSpeed)),
    }, probe_target=DEFAULT_PROBE_TARGET_F),
    _method("roast", "Roast", {
        "target_cavity_temp": _cavity_temp(350, 200, 500),
        "cooking_time": _cooking_time(1800, 14340),
        "fan_speed": _fan_speed(FanSpeed.MEDIUM, list(FanSpeed)),
    }, probe_target=DEFAULT_PROBE_TARGET_F),
    _method("broil", "Broil", {
        "temp_level": _temp_level(),
        "cooking_time": _cooking_time(900, 1800),
    }, probe_target=DEFAULT_PROBE_TARGET_F),
    _method("air_broil", "Air Broil", {
        "temp_level": _temp_level(),
        "cooking_time": _cooking_time(900, 1800),
        "fan_speed": _fan_speed(FanSpeed.HIGH, [FanSpeed.LOW, FanSpeed.MEDIUM, FanSpeed.HIGH]),
    }, probe_target=DEFAULT_PROBE_TARGET_F),
    _method("toast", "Toast", {
        "shade_level": ParameterOptions(
            options=[int(s) for s in ShadeLevel],
            label="Shade level",
            default=int(ShadeLevel.MEDIUM),
            names={int(s): s.name.replace("_", "-").title() for s in ShadeLevel},
        ),
    }),
    _method("dehydrate", "Dehydrate", {
        "target_cavity_temp": _cavity_temp(130, 95, 165),
        "cooking_time": _cooking_time(43200, 259140),
        "fan_speed": _fan_speed(FanSpeed.LOW, [FanSpeed.LOW, FanSpeed.MEDIUM]),
    }),
    _method("proof", "Proof", {
        "target_cavity_temp": _cavity_temp(100, 70, 130),
        "cooking_time": _cooking_time(7200, 14340),
    }),
    _method("reheat", "Reheat", {
        "target_cavity_temp": _cavity_temp(350, 200, 400),
        "cooking_time": _cooking_time(900, 3540),
        "fan_speed": _fan_speed(FanSpeed.LOW, list(FanSpeed)),
    }, probe_target=REHEAT_PROBE_TARGET_F),
    _method("keep_warm", "Keep Warm", {
        "target_cavity_temp": _cavity_temp(155, 110, 200),
        "cooking_time": _cooking_time(7200, 14340),
        "fan_speed": _fan_speed(FanSpeed.LOW, list(FanSpeed)),
    }, probe_target=155),
    _method("slow_cook", "Slow Cook", {
        "temp_level": _temp_level(),
        "cooking_time": _cooking_time(43200, 86340),
        "fan_speed": _fan_speed(FanSpeed.LOW, [FanSpeed.OFF, FanSpeed.LOW]),
    }, probe_target=DEFAULT_PROBE_TARGET_F),
]

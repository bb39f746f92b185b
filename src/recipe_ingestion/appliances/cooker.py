"""Smart pressure cooker (RJ40) cooking methods, temperatures in °F, times in seconds."""

from typing import List

from ..models.appliance import (
    MethodSpec,
    ParameterOptions,
    ParameterRange,
    PressureLevel,
    PressureRelease,
)

# Numeric mode ids reported by the device firmware
COOKER_MODE_IDS = {
    "pressure_cook": 0,
    "sear_saute": 1,
    "steam": 2,
    "slow_cook": 3,
    "sous_vide": 5,
    "keep_warm": 15,
    "ferment": 16,
    "sterilize": 17,
}


def _time(default: int, min_s: int, max_s: int) -> ParameterRange:
    return ParameterRange(min=min_s, max=max_s, unit="s", label="Cooking time", default=default)


def _temp(default: int, min_f: int, max_f: int) -> ParameterRange:
    return ParameterRange(min=min_f, max=max_f, unit="°F", label="Temperature", default=default)


PRESSURE_LEVEL = ParameterOptions(
    options=[int(PressureLevel.HIGH), int(PressureLevel.LOW)],
    label="Pressure level",
    default=int(PressureLevel.HIGH),
    names={int(PressureLevel.HIGH): "High", int(PressureLevel.LOW): "Low"},
)

PRESSURE_RELEASE = ParameterOptions(
    options=[int(r) for r in PressureRelease],
    label="Pressure release",
    default=int(PressureRelease.QUICK),
    names={int(r): r.name.title() for r in PressureRelease},
)

KEEP_WARM = ParameterOptions(
    options=[0, 1],
    label="Keep warm",
    default=1,
    names={0: "Off", 1: "On"},
)


def _method(method_id: str, name: str, parameters: dict, aliases: List[str] = ()) -> MethodSpec:
    return MethodSpec(
        id=method_id,
        name=name,
        aliases=[str(COOKER_MODE_IDS[method_id]), *aliases],
        parameters=parameters,
    )


COOKER_METHODS: List[MethodSpec] = [
    _method("pressure_cook", "Pressure Cook", {
        "cooking_time": _time(900, 0, 14400),
        "pres_level": PRESSURE_LEVEL,
        "pres_release": PRESSURE_RELEASE,
        "keep_warm": KEEP_WARM,
    }, aliases=["pressure", "rice"]),
    _method("sear_saute", "Sear/Sauté", {
        "cooking_time": _time(1800, 60, 3600),
        "temp_level": ParameterOptions(
            options=[0, 1, 2, 3],
            label="Temperature level",
            default=1,
            names={0: "Low", 1: "Medium-Low", 2: "Medium-High", 3: "High"},
        ),
    }, aliases=["saute", "sear"]),
    _method("steam", "Steam", {
        "cooking_time": _time(600, 60, 3600),
    }),
    _method("slow_cook", "Slow Cook", {
        "cooking_time": _time(14400, 1800, 86400),
        "temp_level": ParameterOptions(
            options=[0, 1],
            label="Temperature level",
            default=0,
            names={0: "Low", 1: "High"},
        ),
    }),
    _method("keep_warm", "Keep Warm", {
        "cooking_time": _time(1800, 1800, 259200),
    }),
    _method("ferment", "Ferment", {
        "cooking_time": _time(28800, 3600, 86400),
        "cooking_temp": _temp(110, 75, 110),
    }),
    _method("sterilize", "Sterilize", {
        "cooking_time": _time(600, 0, 14400),
        "pres_level": PRESSURE_LEVEL,
        "pres_release": PRESSURE_RELEASE,
    }),
    _method("sous_vide", "Sous Vide", {
        "cooking_time": _time(3600, 60, 259200),
        "cooking_temp": _temp(140, 110, 200),
    }),
]

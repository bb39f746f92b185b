from .recipe import TextChunk, CookingAction, Step, CandidateRecipe, ActionSuggestion
from .appliance import (
    ApplianceFamily,
    FanSpeed,
    TemperatureLevel,
    ShadeLevel,
    PressureLevel,
    PressureRelease,
    ParameterRange,
    ParameterOptions,
    MethodSpec,
)

__all__ = [
    "TextChunk",
    "CookingAction",
    "Step",
    "CandidateRecipe",
    "ActionSuggestion",
    "ApplianceFamily",
    "FanSpeed",
    "TemperatureLevel",
    "ShadeLevel",
    "PressureLevel",
    "PressureRelease",
    "ParameterRange",
    "ParameterOptions",
    "MethodSpec",
]

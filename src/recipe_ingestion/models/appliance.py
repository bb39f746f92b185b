"""
Appliance method schemas.

Each appliance family exposes a set of cooking methods; each method declares
which parameters it accepts and what values are legal for them. Numeric
parameters are described by a range, discrete ones by their legal values.
"""

from enum import Enum, IntEnum
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class ApplianceFamily(str, Enum):
    """Smart appliance families whose cooking actions can be validated."""

    OVEN = "oven"
    COOKER = "cooker"


class FanSpeed(IntEnum):
    OFF = 0
    LOW = 1
    MEDIUM = 2
    HIGH = 3


class TemperatureLevel(IntEnum):
    LOW = 0
    MEDIUM_LOW = 1
    MEDIUM_HIGH = 2
    HIGH = 3


class ShadeLevel(IntEnum):
    LIGHT = 0
    MEDIUM_LIGHT = 1
    MEDIUM = 2
    MEDIUM_DARK = 3
    DARK = 4


class PressureLevel(IntEnum):
    LOW = 0
    HIGH = 1


class PressureRelease(IntEnum):
    QUICK = 0
    PULSE = 1
    NATURAL = 2


class ParameterRange(BaseModel):
    """Inclusive numeric range for a parameter."""

    model_config = ConfigDict(frozen=True)

    min: float
    max: float
    unit: str
    label: str
    default: Optional[float] = None


class ParameterOptions(BaseModel):
    """Enumerated legal values for a parameter."""

    model_config = ConfigDict(frozen=True)

    options: List[Any]
    label: str
    default: Optional[Any] = None
    names: Dict[Any, str] = Field(default_factory=dict)


ParameterSpec = Union[ParameterRange, ParameterOptions]


class MethodSpec(BaseModel):
    """One cooking method of an appliance family."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    aliases: List[str] = Field(default_factory=list)
    parameters: Dict[str, ParameterSpec] = Field(default_factory=dict)
    supports_probe: bool = False

    def spec_for(self, key: str) -> Optional[ParameterSpec]:
        return self.parameters.get(key)

    def defaults(self) -> Dict[str, Any]:
        """Default value of every parameter that declares one."""
        return {
            key: spec.default
            for key, spec in self.parameters.items()
            if spec.default is not None
        }

"""
Recipe models produced by the ingestion pipeline.

Field names follow the JSON shape the catalog app stores (camelCase), so a
``model_dump()`` can be handed to the storage layer unchanged.
"""

from typing import Any, Dict, List, Optional, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

ParameterValue = Union[bool, int, float, str]


class TextChunk(BaseModel):
    """A bounded window of the raw input text."""

    model_config = ConfigDict(frozen=True)

    text: str
    start_offset: int = Field(ge=0)

    @property
    def end_offset(self) -> int:
        return self.start_offset + len(self.text)


class CookingAction(BaseModel):
    """An appliance program attached to a recipe step."""

    # Older records carry top-level keys such as "temperature" or "duration"
    model_config = ConfigDict(extra="allow")

    id: Optional[str] = None
    applianceId: Optional[str] = None
    methodId: str
    methodName: Optional[str] = None
    parameters: Dict[str, Any] = Field(default_factory=dict)
    stepIndex: Optional[int] = None
    estimatedTime: Optional[int] = None


class Step(BaseModel):
    """A single instruction of a recipe."""

    text: str
    image: Optional[str] = None
    cookingAction: Optional[CookingAction] = None


class CandidateRecipe(BaseModel):
    """A recipe decoded from one extraction response, before deduplication."""

    title: str
    description: str = ""
    ingredients: List[str] = Field(default_factory=list)
    steps: List[Step] = Field(default_factory=list)
    cookTime: int = Field(description="Cooking time in minutes")
    prepTime: int = Field(description="Preparation time in minutes")
    servings: int
    category: str
    tags: List[str] = Field(default_factory=list)
    image: Optional[str] = None

    @property
    def is_empty(self) -> bool:
        return not self.ingredients and not self.steps


class ActionSuggestion(BaseModel):
    """A cooking action proposed for one step by the appliance analyzer."""

    stepIndex: int = Field(ge=0)
    action: CookingAction = Field(validation_alias=AliasChoices("action", "cookingAction"))

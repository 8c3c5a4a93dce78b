from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

ATTRIBUTES = ("memory", "bond", "resolve", "curiosity")


class AttributeDelta(BaseModel):
    model_config = ConfigDict(frozen=True)

    memory: int = 0
    bond: int = 0
    resolve: int = 0
    curiosity: int = 0


class Choice(BaseModel):
    model_config = ConfigDict(frozen=True)

    label: str = Field(min_length=1)
    value: str
    next: str
    params: AttributeDelta | None = None


class Scene(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str = Field(min_length=1)
    text: str
    choices: list[Choice] = Field(default_factory=list)
    next: str | None = None
    params: AttributeDelta | None = None
    ending_decision_point: bool = False

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from pydantic import BaseModel, Field

from storybot.models.story import Scene

ResultStatus = Literal["scene", "invalid_input", "story_ended", "session_absent"]


class Transition(BaseModel):
    source: str
    destination: str
    choice_matched: str | None = None


class Session(BaseModel):
    user_id: str
    current_scene_id: str
    chapter: int = 0
    memory: int = 0
    bond: int = 0
    resolve: int = 0
    curiosity: int = 0
    history: list[Transition] = Field(default_factory=list)

    def attributes(self) -> dict[str, int]:
        return {
            "memory": self.memory,
            "bond": self.bond,
            "resolve": self.resolve,
            "curiosity": self.curiosity,
        }


@dataclass(frozen=True)
class SceneResult:
    status: ResultStatus
    scene: Scene | None = None

    @classmethod
    def shown(cls, scene: Scene) -> SceneResult:
        return cls("scene", scene)

    @classmethod
    def invalid_input(cls) -> SceneResult:
        return cls("invalid_input")

    @classmethod
    def story_ended(cls) -> SceneResult:
        return cls("story_ended")

    @classmethod
    def session_absent(cls) -> SceneResult:
        return cls("session_absent")

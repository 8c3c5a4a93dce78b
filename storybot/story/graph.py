from __future__ import annotations

import json
import logging
from collections.abc import Iterator, Mapping
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from storybot.models.story import Scene

log = logging.getLogger(__name__)


class StoryContentError(RuntimeError):
    pass


class StoryGraph:
    """Read-only lookup table of scenes keyed by id."""

    def __init__(self, scenes: Mapping[str, Scene]) -> None:
        self._scenes = dict(scenes)

    def get_scene(self, scene_id: str | None) -> Scene | None:
        if scene_id is None:
            return None
        return self._scenes.get(scene_id)

    def scene_ids(self) -> list[str]:
        return list(self._scenes)

    def __contains__(self, scene_id: object) -> bool:
        return scene_id in self._scenes

    def __len__(self) -> int:
        return len(self._scenes)

    def __iter__(self) -> Iterator[Scene]:
        return iter(self._scenes.values())


def _normalize_choices(scene_id: str, raw_choices: Any) -> Any:
    if not isinstance(raw_choices, list):
        return raw_choices
    normalized = []
    for raw in raw_choices:
        if isinstance(raw, dict) and "value" not in raw and "label" in raw:
            log.warning("choice_value_missing scene=%s label=%r matching_by=label", scene_id, raw["label"])
            raw = {**raw, "value": raw["label"]}
        normalized.append(raw)
    return normalized


def build_story_graph(data: Any, *, ending_decision_scene_id: str | None = None) -> StoryGraph:
    if not isinstance(data, dict):
        raise StoryContentError("scenario must be a JSON object keyed by scene id")
    if not data:
        raise StoryContentError("scenario contains no scenes")

    scenes: dict[str, Scene] = {}
    for key, raw in data.items():
        if not isinstance(raw, dict):
            raise StoryContentError(f"scene {key!r} is not an object")
        record = dict(raw)
        record.setdefault("id", key)
        if record["id"] != key:
            raise StoryContentError(f"scene key {key!r} does not match its id {record['id']!r}")
        if "choices" in record:
            record["choices"] = _normalize_choices(key, record["choices"])
        if key == ending_decision_scene_id:
            record["ending_decision_point"] = True
        try:
            scenes[key] = Scene.model_validate(record)
        except ValidationError as exc:
            raise StoryContentError(f"scene {key!r} is malformed: {exc}") from exc

    if ending_decision_scene_id and ending_decision_scene_id not in scenes:
        log.warning("ending_decision_scene_missing id=%s", ending_decision_scene_id)
    return StoryGraph(scenes)


def load_story_graph(path: str | Path, *, ending_decision_scene_id: str | None = None) -> StoryGraph:
    scenario_path = Path(path)
    try:
        data = json.loads(scenario_path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise StoryContentError(f"failed to load scenario {scenario_path}: {exc}") from exc
    graph = build_story_graph(data, ending_decision_scene_id=ending_decision_scene_id)
    log.info("scenario_loaded path=%s scenes=%s", scenario_path, len(graph))
    return graph

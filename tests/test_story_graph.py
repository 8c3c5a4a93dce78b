from __future__ import annotations

import json
import logging

import pytest

from storybot.models.story import AttributeDelta
from storybot.story.graph import StoryContentError, build_story_graph, load_story_graph


def _write(tmp_path, data) -> str:
    path = tmp_path / "scenario.json"
    path.write_text(json.dumps(data), encoding="utf-8")
    return str(path)


def test_load_scenario_file(tmp_path):
    path = _write(
        tmp_path,
        {
            "start": {"id": "start", "text": "Hello", "next": "fork", "params": {"memory": 1}},
            "fork": {
                "text": "Pick",
                "choices": [{"label": "Stay", "value": "stay", "next": "end", "params": {"bond": 2}}],
            },
            "end": {"id": "end", "text": "Bye"},
        },
    )

    graph = load_story_graph(path)

    assert len(graph) == 3
    assert graph.scene_ids() == ["start", "fork", "end"]
    assert graph.get_scene("start").params == AttributeDelta(memory=1)
    assert graph.get_scene("fork").id == "fork"
    assert graph.get_scene("fork").choices[0].params.bond == 2
    assert "end" in graph


def test_missing_scene_is_none():
    graph = build_story_graph({"start": {"text": "Hello"}})
    assert graph.get_scene("nowhere") is None
    assert graph.get_scene(None) is None


def test_decision_scene_is_flagged_by_reserved_id():
    graph = build_story_graph(
        {
            "branch": {"text": "Decide", "next": "ending_bond"},
            "other": {"text": "Plain", "next": "branch"},
        },
        ending_decision_scene_id="branch",
    )
    assert graph.get_scene("branch").ending_decision_point
    assert not graph.get_scene("other").ending_decision_point


def test_explicit_decision_flag_is_kept():
    graph = build_story_graph({"branch": {"text": "Decide", "ending_decision_point": True}})
    assert graph.get_scene("branch").ending_decision_point


def test_choice_without_value_matches_by_label_and_warns(caplog):
    with caplog.at_level(logging.WARNING):
        graph = build_story_graph({"fork": {"text": "Pick", "choices": [{"label": "Stay", "next": "end"}]}})

    assert graph.get_scene("fork").choices[0].value == "Stay"
    assert "choice_value_missing" in caplog.text


def test_invalid_json_is_fatal(tmp_path):
    path = tmp_path / "scenario.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(StoryContentError):
        load_story_graph(path)


def test_missing_file_is_fatal(tmp_path):
    with pytest.raises(StoryContentError):
        load_story_graph(tmp_path / "missing.json")


@pytest.mark.parametrize(
    "data",
    [
        {},
        [],
        {"start": "just text"},
        {"start": {"id": "other", "text": "Mismatched"}},
        {"start": {"id": "start"}},
        {"start": {"text": "Bad choice", "choices": [{"label": "x", "value": "x"}]}},
        {"start": {"text": "Bad params", "params": {"memory": "lots"}}},
    ],
)
def test_malformed_content_is_fatal(data):
    with pytest.raises(StoryContentError):
        build_story_graph(data)


def test_scenes_are_immutable():
    graph = build_story_graph({"start": {"text": "Hello", "next": "b"}})
    scene = graph.get_scene("start")
    with pytest.raises(Exception):
        scene.next = "elsewhere"
    assert graph.get_scene("start").next == "b"

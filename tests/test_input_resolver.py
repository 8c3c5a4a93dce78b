from __future__ import annotations

from storybot.engine.input_resolver import resolve_input
from storybot.models.story import AttributeDelta, Choice, Scene

ADVANCE = "__next__"


def _choice_scene() -> Scene:
    return Scene(
        id="fork",
        text="Which way?",
        choices=[
            Choice(label="Left", value="left", next="left_path", params=AttributeDelta(bond=1)),
            Choice(label="Right", value="right", next="right_path"),
            Choice(label="Left again", value="left", next="unreachable"),
        ],
    )


def test_advance_token_follows_next_with_scene_params():
    scene = Scene(id="a", text="A", next="b", params=AttributeDelta(memory=2))

    resolved = resolve_input(scene, ADVANCE, advance_token=ADVANCE)

    assert resolved is not None
    assert resolved.destination == "b"
    assert resolved.choice is None
    assert resolved.params == AttributeDelta(memory=2)


def test_first_matching_choice_wins():
    resolved = resolve_input(_choice_scene(), "left", advance_token=ADVANCE)

    assert resolved is not None
    assert resolved.destination == "left_path"
    assert resolved.choice.label == "Left"
    assert resolved.params == AttributeDelta(bond=1)


def test_choice_matching_is_exact():
    scene = _choice_scene()
    assert resolve_input(scene, "Left", advance_token=ADVANCE) is None
    assert resolve_input(scene, " left", advance_token=ADVANCE) is None
    assert resolve_input(scene, "left\n", advance_token=ADVANCE) is None


def test_label_does_not_match_when_value_differs():
    assert resolve_input(_choice_scene(), "Right", advance_token=ADVANCE) is None


def test_advance_token_is_checked_before_choices():
    scene = Scene(
        id="a",
        text="A",
        next="b",
        choices=[Choice(label="Next", value=ADVANCE, next="c")],
    )

    resolved = resolve_input(scene, ADVANCE, advance_token=ADVANCE)

    assert resolved.destination == "b"
    assert resolved.choice is None


def test_advance_token_without_next_scans_choices():
    scene = Scene(id="a", text="A", choices=[Choice(label="Go", value=ADVANCE, next="c")])

    resolved = resolve_input(scene, ADVANCE, advance_token=ADVANCE)

    assert resolved.destination == "c"
    assert resolved.choice is not None


def test_no_match_on_terminal_scene():
    scene = Scene(id="end", text="The end.")
    assert resolve_input(scene, ADVANCE, advance_token=ADVANCE) is None
    assert resolve_input(scene, "anything", advance_token=ADVANCE) is None

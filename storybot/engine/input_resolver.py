from __future__ import annotations

from dataclasses import dataclass

from storybot.models.story import AttributeDelta, Choice, Scene


@dataclass(frozen=True)
class ResolvedTransition:
    destination: str
    choice: Choice | None
    params: AttributeDelta | None


def resolve_input(scene: Scene, text: str, *, advance_token: str) -> ResolvedTransition | None:
    """Pick the edge of ``scene`` selected by ``text``.

    The advance token is checked before any choice, so it always means
    "follow ``scene.next``" even if a choice reuses the same string.
    Choice values are compared exactly. ``None`` means nothing matched.
    """
    if text == advance_token and scene.next:
        return ResolvedTransition(destination=scene.next, choice=None, params=scene.params)
    for choice in scene.choices:
        if choice.value == text:
            return ResolvedTransition(destination=choice.next, choice=choice, params=choice.params)
    return None

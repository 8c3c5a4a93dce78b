from __future__ import annotations

import logging
from collections.abc import Iterable

from storybot.engine.attribute_engine import apply_delta
from storybot.engine.ending_resolver import EndingResolver
from storybot.engine.input_resolver import resolve_input
from storybot.models.core import SceneResult, Transition
from storybot.sessions.store import SessionStore
from storybot.story.graph import StoryGraph

log = logging.getLogger(__name__)


class NarrativeEngine:
    def __init__(
        self,
        graph: StoryGraph,
        store: SessionStore,
        ending_resolver: EndingResolver,
        *,
        entry_scene_id: str,
        advance_token: str,
        start_commands: Iterable[str],
        reset_commands: Iterable[str],
    ) -> None:
        self.graph = graph
        self.store = store
        self.ending_resolver = ending_resolver
        self.entry_scene_id = entry_scene_id
        self.advance_token = advance_token
        self.start_commands = frozenset(start_commands)
        self.reset_commands = frozenset(reset_commands)

    def is_restart_command(self, text: str) -> bool:
        return text in self.start_commands or text in self.reset_commands

    def advance(self, user_id: str, text: str) -> SceneResult:
        log.info("input_received user=%s text=%r", user_id, text)
        with self.store.lock(user_id):
            if self.is_restart_command(text):
                return self._restart(user_id)
            return self._advance_locked(user_id, text)

    def _restart(self, user_id: str) -> SceneResult:
        session = self.store.reset(user_id, self.entry_scene_id)
        scene = self.graph.get_scene(session.current_scene_id)
        if scene is None:
            log.error("scene_missing user=%s scene=%s entry=1", user_id, session.current_scene_id)
            return SceneResult.story_ended()
        return SceneResult.shown(scene)

    def _advance_locked(self, user_id: str, text: str) -> SceneResult:
        session = self.store.get(user_id)
        if session is None:
            log.info("session_absent user=%s", user_id)
            return SceneResult.session_absent()

        current = self.graph.get_scene(session.current_scene_id)
        if current is None:
            log.info("story_ended user=%s scene=%s", user_id, session.current_scene_id)
            return SceneResult.story_ended()

        resolved = resolve_input(current, text, advance_token=self.advance_token)
        if resolved is None:
            log.info("input_unmatched user=%s scene=%s", user_id, current.id)
            return SceneResult.invalid_input()

        apply_delta(session, resolved.params)

        destination = resolved.destination
        if current.ending_decision_point:
            destination = self.ending_resolver.determine_ending(session)

        choice_matched = resolved.choice.value if resolved.choice is not None else None
        session.history.append(Transition(source=current.id, destination=destination, choice_matched=choice_matched))
        session.current_scene_id = destination
        log.info(
            "scene_transition user=%s from=%s to=%s choice=%r",
            user_id,
            current.id,
            destination,
            choice_matched,
        )

        scene = self.graph.get_scene(destination)
        if scene is None:
            log.warning("scene_missing user=%s scene=%s", user_id, destination)
            return SceneResult.story_ended()
        return SceneResult.shown(scene)

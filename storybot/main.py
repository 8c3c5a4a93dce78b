from __future__ import annotations

import logging

from storybot.config import Settings, configure_logging
from storybot.discord_bot import run_discord_bot
from storybot.engine.ending_resolver import EndingResolver
from storybot.engine.narrative_engine import NarrativeEngine
from storybot.sessions.store import InMemorySessionStore, SessionStore
from storybot.story.graph import StoryContentError, load_story_graph

log = logging.getLogger(__name__)


def build_engine(settings: Settings, store: SessionStore | None = None) -> NarrativeEngine:
    try:
        graph = load_story_graph(settings.scenario_path, ending_decision_scene_id=settings.ending_decision_scene_id)
    except StoryContentError:
        log.critical("scenario_load_failed path=%s", settings.scenario_path, exc_info=True)
        raise
    log.info("available_scenes %s", ", ".join(graph.scene_ids()))
    if settings.entry_scene_id not in graph:
        log.warning("entry_scene_missing id=%s", settings.entry_scene_id)
    return NarrativeEngine(
        graph,
        store or InMemorySessionStore(),
        EndingResolver(settings.ending_scene_ids),
        entry_scene_id=settings.entry_scene_id,
        advance_token=settings.advance_token,
        start_commands=settings.start_commands,
        reset_commands=settings.reset_commands,
    )


def main() -> None:
    settings = Settings()
    configure_logging(settings.dev_mode)
    logging.getLogger(__name__).info("app_start %s", settings.redacted())
    engine = build_engine(settings)
    run_discord_bot(engine, settings)


if __name__ == "__main__":
    main()

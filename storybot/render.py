from __future__ import annotations

from dataclasses import dataclass, field

from storybot.config import Settings
from storybot.models.core import SceneResult

INVALID_INPUT_TEXT = "Please choose one of the options shown."
ERROR_NOTICE_TEMPLATE = "Something went wrong. Type `{reset}` to start over."


@dataclass(frozen=True)
class ReplyOption:
    label: str
    value: str


@dataclass(frozen=True)
class Reply:
    text: str
    options: list[ReplyOption] = field(default_factory=list)


def story_ended_text(settings: Settings) -> str:
    return (
        "The story ends here. Thank you for playing!\n\n"
        f"Type `{settings.primary_reset_command}` to begin again from the start."
    )


def session_absent_text(settings: Settings) -> str:
    start = settings.start_commands[0] if settings.start_commands else settings.primary_reset_command
    return f"Type `{start}` to begin the story."


def error_notice(settings: Settings) -> str:
    return ERROR_NOTICE_TEMPLATE.format(reset=settings.primary_reset_command)


def render_result(result: SceneResult, settings: Settings) -> Reply:
    if result.status == "invalid_input":
        return Reply(INVALID_INPUT_TEXT)
    if result.status == "story_ended":
        return Reply(story_ended_text(settings))
    if result.status == "session_absent":
        return Reply(session_absent_text(settings))

    scene = result.scene
    if scene is None:
        return Reply(story_ended_text(settings))
    if scene.choices:
        options = [ReplyOption(choice.label, choice.value) for choice in scene.choices]
    elif scene.next:
        options = [ReplyOption(settings.next_label, settings.advance_token)]
    else:
        options = []
    return Reply(scene.text, options)

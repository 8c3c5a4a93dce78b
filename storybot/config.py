from __future__ import annotations

import logging
import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    return int(raw)


def _env_list(name: str, default: tuple[str, ...]) -> tuple[str, ...]:
    raw = os.getenv(name)
    if raw is None:
        return default
    # Commands may contain newlines, so only commas separate entries.
    return tuple(item for item in (part.strip() for part in raw.split(",")) if item)


@dataclass(frozen=True)
class Settings:
    scenario_path: str = os.getenv("SCENARIO_PATH", "scenario.json")
    dev_mode: bool = os.getenv("DEV_MODE", "0") == "1"
    discord_token: str | None = os.getenv("DISCORD_TOKEN")
    bot_channel: str = os.getenv("BOT_CHANNEL", "story")
    entry_scene_id: str = os.getenv("ENTRY_SCENE_ID", "prologue_start")
    ending_decision_scene_id: str = os.getenv("ENDING_DECISION_SCENE_ID", "ending_branch")
    ending_bad_scene_id: str = os.getenv("ENDING_BAD_SCENE_ID", "ending_bad")
    ending_true_scene_id: str = os.getenv("ENDING_TRUE_SCENE_ID", "ending_true")
    ending_bond_scene_id: str = os.getenv("ENDING_BOND_SCENE_ID", "ending_bond")
    ending_resolve_scene_id: str = os.getenv("ENDING_RESOLVE_SCENE_ID", "ending_resolve")
    ending_curiosity_scene_id: str = os.getenv("ENDING_CURIOSITY_SCENE_ID", "ending_curiosity")
    advance_token: str = os.getenv("ADVANCE_TOKEN", "__next__")
    next_label: str = os.getenv("NEXT_LABEL", "Next")
    start_commands: tuple[str, ...] = _env_list("START_COMMANDS", ("!start",))
    reset_commands: tuple[str, ...] = _env_list("RESET_COMMANDS", ("!reset",))
    max_buttons: int = _env_int("MAX_BUTTONS", 25)

    @property
    def ending_scene_ids(self) -> dict[str, str]:
        return {
            "bad": self.ending_bad_scene_id,
            "true": self.ending_true_scene_id,
            "bond": self.ending_bond_scene_id,
            "resolve": self.ending_resolve_scene_id,
            "curiosity": self.ending_curiosity_scene_id,
        }

    @property
    def primary_reset_command(self) -> str:
        if self.reset_commands:
            return self.reset_commands[0]
        return self.start_commands[0] if self.start_commands else ""

    def redacted(self) -> dict[str, object]:
        return {
            "scenario_path": self.scenario_path,
            "dev_mode": self.dev_mode,
            "discord_token_set": bool(self.discord_token),
            "bot_channel": self.bot_channel,
            "entry_scene_id": self.entry_scene_id,
            "ending_decision_scene_id": self.ending_decision_scene_id,
            "ending_scene_ids": self.ending_scene_ids,
            "start_commands": list(self.start_commands),
            "reset_commands": list(self.reset_commands),
        }


def configure_logging(dev_mode: bool) -> None:
    level = logging.DEBUG if dev_mode else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

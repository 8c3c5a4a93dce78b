from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass

from storybot.models.core import Session

log = logging.getLogger(__name__)

ENDINGS = ("bad", "true", "bond", "resolve", "curiosity")

Attributes = Mapping[str, int]


def _dominates(attrs: Attributes, name: str) -> bool:
    return all(attrs[name] > value for other, value in attrs.items() if other != name)


def _is_max(attrs: Attributes, name: str) -> bool:
    return attrs[name] == max(attrs.values())


@dataclass(frozen=True)
class EndingRule:
    name: str
    predicate: Callable[[Attributes], bool]
    ending: str


# First match wins. memory gates the bad and true endings but has no ending of its own.
ENDING_RULES: tuple[EndingRule, ...] = (
    EndingRule(
        "bad",
        lambda a: a["memory"] >= 6 and (a["bond"] <= 2 or a["resolve"] <= 2),
        "bad",
    ),
    EndingRule(
        "true",
        lambda a: a["memory"] >= 4 and a["bond"] >= 4 and a["resolve"] >= 4 and a["curiosity"] >= 4,
        "true",
    ),
    EndingRule("bond_dominant", lambda a: a["bond"] >= 5 and _dominates(a, "bond"), "bond"),
    EndingRule("resolve_dominant", lambda a: a["resolve"] >= 5 and _dominates(a, "resolve"), "resolve"),
    EndingRule("curiosity_dominant", lambda a: a["curiosity"] >= 4 and _dominates(a, "curiosity"), "curiosity"),
    EndingRule("bond_highest", lambda a: _is_max(a, "bond"), "bond"),
    EndingRule("resolve_highest", lambda a: _is_max(a, "resolve"), "resolve"),
    EndingRule("curiosity_highest", lambda a: _is_max(a, "curiosity"), "curiosity"),
    EndingRule("default", lambda a: True, "bond"),
)


def select_ending(attrs: Attributes, rules: tuple[EndingRule, ...] = ENDING_RULES) -> EndingRule:
    for rule in rules:
        if rule.predicate(attrs):
            return rule
    raise LookupError("ending rules did not cover the attribute set")


class EndingResolver:
    def __init__(self, ending_scene_ids: Mapping[str, str], rules: tuple[EndingRule, ...] = ENDING_RULES) -> None:
        missing = [name for name in ENDINGS if name not in ending_scene_ids]
        if missing:
            raise ValueError(f"ending scene ids missing for: {', '.join(missing)}")
        self.ending_scene_ids = dict(ending_scene_ids)
        self.rules = rules

    def determine_ending(self, session: Session) -> str:
        attrs = session.attributes()
        rule = select_ending(attrs, self.rules)
        scene_id = self.ending_scene_ids[rule.ending]
        log.info("ending_selected user=%s rule=%s scene=%s attributes=%s", session.user_id, rule.name, scene_id, attrs)
        return scene_id

from storybot.engine.attribute_engine import apply_delta
from storybot.engine.ending_resolver import ENDING_RULES, EndingResolver, EndingRule, select_ending
from storybot.engine.input_resolver import ResolvedTransition, resolve_input
from storybot.engine.narrative_engine import NarrativeEngine

__all__ = [
    "ENDING_RULES",
    "EndingResolver",
    "EndingRule",
    "NarrativeEngine",
    "ResolvedTransition",
    "apply_delta",
    "resolve_input",
    "select_ending",
]

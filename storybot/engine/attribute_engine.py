from __future__ import annotations

import logging

from storybot.models.core import Session
from storybot.models.story import ATTRIBUTES, AttributeDelta

log = logging.getLogger(__name__)


def apply_delta(session: Session, delta: AttributeDelta | None) -> None:
    if delta is None:
        return
    for name in ATTRIBUTES:
        amount = getattr(delta, name)
        if not amount:
            continue
        setattr(session, name, getattr(session, name) + amount)
        log.debug("attribute_delta user=%s %s=%+d total=%s", session.user_id, name, amount, getattr(session, name))

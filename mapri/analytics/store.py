from __future__ import annotations

import time
from collections import deque
from enum import Enum
from typing import Any

# Oldest events are dropped once the log is full
MAX_EVENTS = 10_000


class EventType(str, Enum):
    view = "view"
    place_change = "place_change"


_events: deque[dict[str, Any]] = deque(maxlen=MAX_EVENTS)


def record_event(event_type: EventType | str, data: dict[str, Any]) -> None:
    """Append an event; unknown event types raise ``ValueError``."""
    kind = EventType(event_type)
    _events.append({
        **data,
        "type": kind.value,
        "timestamp": time.time(),
    })


def get_events() -> list[dict[str, Any]]:
    return list(_events)


def clear_events() -> None:
    _events.clear()

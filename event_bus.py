"""
Title: ECAMS Event Bus (Synchronous Publish / Subscribe)
Author: Alex Cooke
Date Created: 2026-10-13
Last Modified: 2026-10-18
Version: 1.1

Purpose:
Provides the hub through which the ECAM systems-monitoring simulator (ECAMS)
core announces state transitions (alarm raised, acknowledged, evicted, log
cleared, master status changed). Rendering, audio, export and fault-effect
collaborators subscribe; the core never calls them directly.

Targeted Requirements:
- ECAMS-FR024: Alarm raised/acknowledged events are published to collaborators.
- ECAMS-IR002: A failing subscriber shall never break a simulation tick.

Scope and Limitations:
- Delivery is synchronous on the publishing thread, in subscription order.
- Handler exceptions are logged and skipped, never propagated.

Safety Notice:
This software is for academic and illustrative purposes only.
It is not flight-certified and must not be used in operational systems.

Dependencies:
- Python 3.10+
- collections, dataclasses, enum, logging, threading, typing (standard library)
"""

import logging
import threading
from collections import defaultdict
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable

logger = logging.getLogger(__name__)


class EventType(Enum):
    ALARM_RAISED = "alarm_raised"
    ALARM_ACKNOWLEDGED = "alarm_acknowledged"
    ALARM_EVICTED = "alarm_evicted"
    ALARM_LOG_CLEARED = "alarm_log_cleared"
    MASTER_STATUS_CHANGED = "master_status_changed"


@dataclass(frozen=True)
class Event:
    type: EventType
    payload: Any = None


Handler = Callable[[Event], None]


class EventBus:
    def __init__(self):
        self._handlers: dict[EventType, list[Handler]] = defaultdict(list)
        self._lock = threading.Lock()

    def subscribe(self, event_type: EventType, handler: Handler) -> Callable[[], None]:
        with self._lock:
            self._handlers[event_type].append(handler)

        def _unsubscribe() -> None:
            with self._lock:
                if handler in self._handlers[event_type]:
                    self._handlers[event_type].remove(handler)

        return _unsubscribe

    def publish(self, event_type: EventType, payload: Any = None) -> Event:
        event = Event(event_type, payload)
        with self._lock:
            handlers = list(self._handlers[event_type])

        for handler in handlers:
            try:
                handler(event)
            except Exception:
                logger.exception("Event handler failed for %s", event_type.value)

        return event

"""
Title: Master Status Aggregator
Author: Alex Cooke
Date Created: 2026-10-13
Last Modified: 2026-10-18
Version: 1.2

Purpose:
Derives the single aircraft-wide master status shown on the ECAM status
banner from the counts of active (unacknowledged) alarms, and announces
status transitions to subscribed collaborators (e.g. the critical-state
aural cue).

Targeted Requirements:
- ECAMS-FR040: CRITICAL once active warnings + cautions reach the configured
  limit, regardless of level mix; otherwise WARNING, CAUTION or NORMAL.
- ECAMS-FR041: Master status is recomputed from the alarm log on every query.

Scope and Limitations:
- The monitor remembers only the last *published* status, to detect
  transitions; queries never return a cached status.
- refresh() is serialised by a re-entrant lock: it runs on the clock thread
  and, through bus handlers, on the console thread. Subscribers to
  MASTER_STATUS_CHANGED run while that lock is held.

Safety Notice:
This software is for academic and illustrative purposes only.
It is not flight-certified and must not be used in operational systems.
"""

import logging
import threading
from dataclasses import dataclass

from alarm_engine import AlarmEngine
from alarm_levels import AlarmCounts, MasterStatus
from event_bus import Event, EventBus, EventType

logger = logging.getLogger(__name__)


def derive_status(counts: AlarmCounts, max_alarms_before_critical: int) -> MasterStatus:
    if counts.warn_count + counts.caut_count >= max_alarms_before_critical:
        return MasterStatus.CRITICAL
    if counts.warn_count > 0:
        return MasterStatus.WARNING
    if counts.caut_count > 0:
        return MasterStatus.CAUTION
    return MasterStatus.NORMAL


@dataclass(frozen=True)
class MasterState:
    status: MasterStatus
    warn_count: int
    caut_count: int

    def to_dict(self) -> dict:
        return {
            "status": self.status.value,
            "warn_count": self.warn_count,
            "caut_count": self.caut_count,
        }


class MasterStatusMonitor:
    def __init__(
        self,
        engine: AlarmEngine,
        max_alarms_before_critical: int,
        bus: EventBus | None = None,
    ):
        self._engine = engine
        self.max_alarms_before_critical = int(max_alarms_before_critical)
        self._bus = bus
        self._lock = threading.RLock()
        self._last_published: MasterStatus = MasterStatus.NORMAL

        if bus is not None:
            for event_type in (
                EventType.ALARM_RAISED,
                EventType.ALARM_ACKNOWLEDGED,
                EventType.ALARM_EVICTED,
                EventType.ALARM_LOG_CLEARED,
            ):
                bus.subscribe(event_type, self._on_alarm_event)

    def state(self) -> MasterState:
        counts = self._engine.counts()
        return MasterState(
            status=derive_status(counts, self.max_alarms_before_critical),
            warn_count=counts.warn_count,
            caut_count=counts.caut_count,
        )

    def status(self) -> MasterStatus:
        return self.state().status

    def refresh(self) -> MasterState:
        # Recompute and publish MASTER_STATUS_CHANGED on transition.
        # Compute, compare and publish stay under one lock: stale counts never
        # overwrite a newer published status.
        with self._lock:
            current = self.state()
            previous = self._last_published
            if current.status is previous:
                return current
            self._last_published = current.status

            logger.info("Master status %s -> %s", previous.value.upper(), current.status.value.upper())
            if self._bus is not None:
                self._bus.publish(EventType.MASTER_STATUS_CHANGED, current)
        return current

    def _on_alarm_event(self, _event: Event) -> None:
        self.refresh()

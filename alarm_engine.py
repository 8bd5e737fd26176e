"""
Title: ECAM Alarm Engine (Raise, Dedupe, Acknowledge, Bounded Log)
Author: Alex Cooke
Date Created: 2026-10-12
Last Modified: 2026-10-18
Version: 1.5

Purpose:
Implements the alarm lifecycle for the ECAM systems-monitoring simulator
(ECAMS). On each alarm-check tick the engine decides, with a configured
probability, whether a catalogued fault fires; selects which fault according
to the configured selection policy; and raises a new alarm unless an
unacknowledged alarm with the same code is already present. Alarms are held
in a bounded, insertion-ordered log with oldest-first eviction, and may be
acknowledged individually or all at once by the operator.

Targeted Requirements:
- ECAMS-FR020: At most one unacknowledged alarm per fault code (dedupe).
- ECAMS-FR021: Acknowledgement is one-way and idempotent; unknown ids are a
  normal negative result.
- ECAMS-FR022: The alarm log shall never exceed its configured maximum;
  oldest entries are evicted first regardless of acknowledgement.
- ECAMS-FR023: Active alarms are presented most recent first.
- ECAMS-FR024: Alarm raised/acknowledged events are published to collaborators.

Scope and Limitations:
- Alarm history is in-memory only and lost on restart.
- Fault occurrence is probabilistic; it is not derived from sensor readings
  except through the WEIGHTED selection policy.
- All log access is serialised by a single re-entrant lock so the engine can
  be driven from the clock thread and the operator console simultaneously.

Safety Notice:
This software is for academic and illustrative purposes only.
It is not flight-certified and must not be used in operational systems.

Dependencies:
- Python 3.10+
- collections, dataclasses, datetime, itertools, logging, random, threading, time (standard library)
- alarm_levels.py
- ecam_configuration.py
- event_bus.py

Safety and Certification Disclaimer:
All artefacts in this repository are produced for academic assessment purposes only.
They do not represent certified software and must not be used in real-world aviation
or safety-critical systems.
"""

# Change Log:
#
# 1.5 (2026-10-18)
#   - AlarmLog backed by a deque; eviction is O(1).
#
# 1.4 (2026-10-17)
#   - Events are published after the log lock is released so subscribers may
#     query the engine from any thread without lock-order issues.
#
# 1.3 (2026-10-16)
#   - Added WEIGHTED fault selection (bias towards already-degraded systems).
#   - Fault selection consumes a single random() draw for both policies so
#     scripted random sources remain simple.
#
# 1.2 (2026-10-14)
#   - Added acknowledge_all() and clear() operator actions.
#
# 1.1 (2026-10-13)
#   - Bounded log with FIFO eviction; ALARM_EVICTED event.
#
# 1.0 (2026-10-12)
#   - Initial raise / dedupe / acknowledge implementation.

import itertools
import logging
import random
import threading
import time
from collections import deque
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable, Iterable, Mapping, Sequence

from alarm_levels import AlarmCounts, AlarmLevel, FaultSelectionPolicy
from ecam_configuration import FaultDefinition
from event_bus import EventBus, EventType

logger = logging.getLogger(__name__)


@dataclass
class Alarm:
    id: int
    timestamp: float
    code: str
    message: str
    level: AlarmLevel
    system: str
    acknowledged: bool = False

    @property
    def utc_time(self) -> str:
        # HH:MM:SS as shown in the ECAM log column.
        return datetime.fromtimestamp(self.timestamp, tz=timezone.utc).strftime("%H:%M:%S")

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "timestamp": self.timestamp,
            "time": self.utc_time,
            "code": self.code,
            "message": self.message,
            "level": self.level.value,
            "system": self.system,
            "acknowledged": self.acknowledged,
        }


class AlarmLog:
    """Insertion-ordered alarm store bounded to ``max_entries``."""

    def __init__(self, max_entries: int):
        if int(max_entries) < 1:
            raise ValueError("max_entries must be >= 1")
        self.max_entries = int(max_entries)
        self._entries: deque[Alarm] = deque()

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self):
        return iter(list(self._entries))

    def append(self, alarm: Alarm) -> list[Alarm]:
        # Returns the entries evicted to keep the log within bounds.
        self._entries.append(alarm)
        evicted: list[Alarm] = []
        while len(self._entries) > self.max_entries:
            evicted.append(self._entries.popleft())
        return evicted

    def find(self, alarm_id: int) -> Alarm | None:
        for alarm in self._entries:
            if alarm.id == alarm_id:
                return alarm
        return None

    def has_active(self, code: str) -> bool:
        return any(a.code == code and not a.acknowledged for a in self._entries)

    def active(self) -> list[Alarm]:
        return [a for a in reversed(self._entries) if not a.acknowledged]

    def clear(self) -> int:
        n = len(self._entries)
        self._entries.clear()
        return n


class AlarmEngine:
    def __init__(
        self,
        catalog: Iterable[FaultDefinition],
        max_log_entries: int = 50,
        alarm_probability: float = 0.15,
        rng: random.Random | None = None,
        clock: Callable[[], float] = time.time,
        selection_policy: FaultSelectionPolicy = FaultSelectionPolicy.UNIFORM,
        bus: EventBus | None = None,
    ):
        self._catalog: tuple[FaultDefinition, ...] = tuple(catalog)
        self._by_code = {f.code: f for f in self._catalog}
        if not self._catalog:
            raise ValueError("Fault catalogue must not be empty")

        self._log = AlarmLog(max_log_entries)
        self._ids = itertools.count(1)
        self._lock = threading.RLock()

        self.alarm_probability = float(alarm_probability)
        self.selection_policy = selection_policy
        self.rng = rng or random.Random()
        self.clock = clock
        self.bus = bus

    # -------------------------
    # Properties / small helpers
    # -------------------------

    @property
    def catalog(self) -> tuple[FaultDefinition, ...]:
        return self._catalog

    @property
    def max_log_entries(self) -> int:
        return self._log.max_entries

    def fault(self, code: str) -> FaultDefinition:
        try:
            return self._by_code[code]
        except KeyError:
            raise KeyError(f"Unknown fault code: {code}") from None

    def _publish(self, events: Sequence[tuple[EventType, object]]) -> None:
        if self.bus is None:
            return
        for event_type, payload in events:
            self.bus.publish(event_type, payload)

    # -------------------------
    # Alarm check tick
    # -------------------------

    def tick(
        self,
        system_levels: Mapping[str, AlarmLevel] | None = None,
        *,
        force: bool = False,
        fault_code: str | None = None,
    ) -> list[Alarm]:
        # One alarm-check: maybe select a fault and raise it. Returns alarms raised.
        if not force and self.rng.random() > self.alarm_probability:
            return []

        if fault_code is not None:
            fault = self.fault(fault_code)
        else:
            fault = self._select_fault(system_levels or {})

        alarm = self.raise_fault(fault)
        return [alarm] if alarm is not None else []

    def _select_fault(self, system_levels: Mapping[str, AlarmLevel]) -> FaultDefinition:
        r = self.rng.random()

        if self.selection_policy is FaultSelectionPolicy.WEIGHTED:
            # Weight 1 for a nominal system, 2 for caution, 3 for warning.
            weights = [
                1 + system_levels.get(f.system, AlarmLevel.NORMAL).rank for f in self._catalog
            ]
            target = r * sum(weights)
            for fault, cumulative in zip(self._catalog, itertools.accumulate(weights)):
                if target < cumulative:
                    return fault
            return self._catalog[-1]

        idx = min(int(r * len(self._catalog)), len(self._catalog) - 1)
        return self._catalog[idx]

    # -------------------------
    # Lifecycle operations
    # -------------------------

    def raise_fault(self, fault: FaultDefinition | str) -> Alarm | None:
        if isinstance(fault, str):
            fault = self.fault(fault)

        events: list[tuple[EventType, object]] = []
        with self._lock:
            if self._log.has_active(fault.code):
                logger.debug("Alarm %s already active, not duplicated", fault.code)
                return None

            alarm = Alarm(
                id=next(self._ids),
                timestamp=float(self.clock()),
                code=fault.code,
                message=fault.message,
                level=fault.level,
                system=fault.system,
            )
            evicted = self._log.append(alarm)
            events.append((EventType.ALARM_RAISED, alarm))
            for old in evicted:
                logger.debug("Alarm log full, evicted #%d %s", old.id, old.code)
                events.append((EventType.ALARM_EVICTED, old))

        logger.info("Alarm raised: #%d %s %s (%s)", alarm.id, alarm.level.value.upper(), alarm.code, alarm.message)
        self._publish(events)
        return alarm

    def acknowledge(self, alarm_id: int) -> bool:
        with self._lock:
            alarm = self._log.find(alarm_id)
            if alarm is None or alarm.acknowledged:
                return False
            alarm.acknowledged = True

        logger.info("Alarm acknowledged: #%d %s", alarm.id, alarm.code)
        self._publish([(EventType.ALARM_ACKNOWLEDGED, alarm)])
        return True

    def acknowledge_all(self) -> int:
        with self._lock:
            pending = self._log.active()
            for alarm in pending:
                alarm.acknowledged = True

        if pending:
            logger.info("Acknowledged %d alarm(s)", len(pending))
        self._publish([(EventType.ALARM_ACKNOWLEDGED, a) for a in pending])
        return len(pending)

    def clear(self) -> None:
        with self._lock:
            removed = self._log.clear()

        logger.info("Alarm log cleared (%d entries removed)", removed)
        self._publish([(EventType.ALARM_LOG_CLEARED, removed)])

    # -------------------------
    # Queries
    # -------------------------

    def find(self, alarm_id: int) -> Alarm | None:
        with self._lock:
            return self._log.find(alarm_id)

    def alarm_log(self) -> list[Alarm]:
        # Oldest first.
        with self._lock:
            return list(self._log)

    def active_alarms(self) -> list[Alarm]:
        # Unacknowledged only, most recent first.
        with self._lock:
            return self._log.active()

    def counts(self) -> AlarmCounts:
        with self._lock:
            active = self._log.active()
        return AlarmCounts(
            warn_count=sum(1 for a in active if a.level is AlarmLevel.WARNING),
            caut_count=sum(1 for a in active if a.level is AlarmLevel.CAUTION),
        )

    def system_statuses(self) -> dict[str, AlarmLevel]:
        # Worst active level per system; systems with no active alarm are omitted.
        statuses: dict[str, AlarmLevel] = {}
        for alarm in self.active_alarms():
            current = statuses.get(alarm.system, AlarmLevel.NORMAL)
            if alarm.level.rank > current.rank:
                statuses[alarm.system] = alarm.level
        return statuses

"""
Title: Simulation Clock (Cooperative Sensor / Alarm Tick Scheduler)
Author: Alex Cooke
Date Created: 2026-10-13
Last Modified: 2026-10-18
Version: 1.4

Purpose:
Drives the ECAM systems-monitoring simulator (ECAMS) on two independent fixed
intervals: a fast sensor-update tick (simulate, classify, refresh master
status) and a slower alarm-check tick (probabilistic fault raise). Both ticks
are plain synchronous methods; the timing source is an injected clock, so the
same scheduler can be polled from a background thread in operation or stepped
manually against a fake clock in tests.

Targeted Requirements:
- ECAMS-FR050: Sensor updates and alarm checks run on distinct configured intervals.
- ECAMS-FR051: Frozen mode suppresses every tick, including manual steps;
  resume is immediate and lossless.
- ECAMS-FR052: Test mode forces scripted faults, bypassing the random source.
- ECAMS-FR053: start/stop/freeze are idempotent; no duplicate timers.
- ECAMS-FR054: A tick is never re-entered while the previous tick of the same
  kind is still in flight.

Scope and Limitations:
- Timing is approximate (poll-based) and not real-time deterministic.
- A late poll runs a due tick once and reschedules from the poll time; missed
  ticks are not replayed.
- Threading model is simplified and not representative of certified avionics tasking.

Safety Notice:
This software is for academic and illustrative purposes only.
It is not flight-certified and must not be used in operational systems.

Dependencies:
- Python 3.10+
- collections, logging, threading, time, typing (standard library)
- sims/sensor_simulator.py
- alarm_engine.py
- master_status.py
- threshold_evaluator.py

Safety and Certification Disclaimer:
All artefacts in this repository are produced for academic assessment purposes only.
They do not represent certified software and must not be used in real-world aviation
or safety-critical systems.
"""

import logging
import threading
import time
from collections import deque
from typing import Callable, Mapping, Optional, Sequence

from alarm_engine import Alarm, AlarmEngine
from alarm_levels import AlarmLevel
from ecam_configuration import Threshold
from master_status import MasterStatusMonitor
from sims.sensor_simulator import SensorReading, SensorSimulator
from threshold_evaluator import evaluate_readings, worst_level_by_system

logger = logging.getLogger(__name__)

TEST_MODE_DEFAULT_FAULTS = 4


class SimulationClock:
    def __init__(
        self,
        simulator: SensorSimulator,
        engine: AlarmEngine,
        monitor: MasterStatusMonitor,
        thresholds: Mapping[str, Threshold],
        *,
        update_interval_s: float = 1.0,
        alarm_check_interval_s: float = 3.0,
        clock: Callable[[], float] = time.monotonic,
        poll_period_s: float = 0.05,
        on_tick: Optional[Callable] = None,
    ):
        if update_interval_s <= 0 or alarm_check_interval_s <= 0:
            raise ValueError("Tick intervals must be > 0")

        self.simulator = simulator
        self.engine = engine
        self.monitor = monitor
        self._thresholds = thresholds

        self._update_interval_s = float(update_interval_s)
        self._alarm_check_interval_s = float(alarm_check_interval_s)
        self._clock = clock
        self._poll_period_s = max(0.01, float(poll_period_s))
        self._on_tick = on_tick

        # Schedule (set on first poll)
        self._next_sensor_due: float | None = None
        self._next_alarm_due: float | None = None

        # Re-entrancy guards, one per tick kind
        self._sensor_busy = threading.Lock()
        self._alarm_busy = threading.Lock()

        self._frozen = False
        self._test_mode = False
        self._test_script: deque[str] = deque()

        self._channel_levels: dict[str, AlarmLevel] = {}

        # Background loop
        self._running = False
        self._stop_evt = threading.Event()
        self._thread: threading.Thread | None = None

    # -------------------------
    # Properties
    # -------------------------

    @property
    def update_interval_s(self) -> float:
        return self._update_interval_s

    @property
    def alarm_check_interval_s(self) -> float:
        return self._alarm_check_interval_s

    @property
    def frozen(self) -> bool:
        return self._frozen

    @property
    def test_mode(self) -> bool:
        return self._test_mode

    @property
    def running(self) -> bool:
        return self._running

    def channel_levels(self) -> dict[str, AlarmLevel]:
        return dict(self._channel_levels)

    def system_levels(self) -> dict[str, AlarmLevel]:
        return worst_level_by_system(self._channel_levels, self.simulator.channels)

    # -------------------------
    # Ticks
    # -------------------------

    def sensor_tick(self) -> dict[str, SensorReading] | None:
        # Returns None when frozen or when a sensor tick is already in flight.
        if self._frozen:
            return None
        if not self._sensor_busy.acquire(blocking=False):
            logger.debug("Sensor tick skipped: previous tick still in flight")
            return None
        try:
            readings = self.simulator.update()
            self._channel_levels = evaluate_readings(
                readings, self.simulator.channels, self._thresholds
            )
            self.monitor.refresh()
        finally:
            self._sensor_busy.release()

        if self._on_tick:
            self._on_tick(self)
        return readings

    def alarm_tick(self) -> list[Alarm]:
        if self._frozen:
            return []
        if not self._alarm_busy.acquire(blocking=False):
            logger.debug("Alarm tick skipped: previous tick still in flight")
            return []
        try:
            if self._test_mode:
                if not self._test_script:
                    raised = []
                else:
                    code = self._test_script.popleft()
                    raised = self.engine.tick(self.system_levels(), force=True, fault_code=code)
            else:
                raised = self.engine.tick(self.system_levels())
            self.monitor.refresh()
        finally:
            self._alarm_busy.release()

        if self._on_tick:
            self._on_tick(self)
        return raised

    def step(self, n: int = 1) -> int:
        # Manual stepping: n sensor+alarm tick pairs, ignoring the schedule.
        if self._frozen:
            logger.debug("Step ignored: simulation frozen")
            return 0
        n = max(1, int(n))
        for _ in range(n):
            self.sensor_tick()
            self.alarm_tick()
        return n

    def poll(self) -> list[str]:
        # Run whichever ticks are due at the injected clock's current time.
        now = float(self._clock())
        if self._next_sensor_due is None or self._next_alarm_due is None:
            self._next_sensor_due = now + self._update_interval_s
            self._next_alarm_due = now + self._alarm_check_interval_s
            return []

        ran: list[str] = []

        sensor_due = now >= self._next_sensor_due
        if sensor_due:
            self._next_sensor_due = self._reschedule(self._next_sensor_due, self._update_interval_s, now)

        alarm_due = now >= self._next_alarm_due
        if alarm_due:
            self._next_alarm_due = self._reschedule(self._next_alarm_due, self._alarm_check_interval_s, now)

        # Frozen: due ticks are discarded, the schedule keeps advancing.
        if self._frozen:
            return ran

        if sensor_due:
            self.sensor_tick()
            ran.append("sensor")
        if alarm_due:
            self.alarm_tick()
            ran.append("alarm")
        return ran

    @staticmethod
    def _reschedule(due: float, interval: float, now: float) -> float:
        nxt = due + interval
        if nxt <= now:
            # Late poll: no burst catch-up
            nxt = now + interval
        return nxt

    # -------------------------
    # Freeze / test mode
    # -------------------------

    def freeze(self) -> None:
        if not self._frozen:
            self._frozen = True
            logger.info("Simulation frozen")

    def resume(self) -> None:
        if self._frozen:
            self._frozen = False
            logger.info("Simulation resumed")

    def toggle_freeze(self) -> bool:
        if self._frozen:
            self.resume()
        else:
            self.freeze()
        return self._frozen

    def enable_test_mode(self, codes: Sequence[str] | None = None) -> None:
        if codes is None:
            codes = [f.code for f in self.engine.catalog[:TEST_MODE_DEFAULT_FAULTS]]
        for code in codes:
            self.engine.fault(code)  # KeyError on unknown codes

        self._test_script = deque(codes)
        self._test_mode = True
        logger.info("Test mode enabled (%d scripted fault(s))", len(self._test_script))

    def disable_test_mode(self) -> None:
        if self._test_mode:
            logger.info("Test mode disabled")
        self._test_mode = False
        self._test_script.clear()

    def pending_test_faults(self) -> list[str]:
        return list(self._test_script)

    # -------------------------
    # Background loop
    # -------------------------

    def start(self) -> None:
        if self._running:
            return
        self._running = True
        self._stop_evt.clear()
        self._thread = threading.Thread(target=self._run, name="ecam-clock", daemon=True)
        self._thread.start()
        logger.info(
            "Simulation clock started (sensor=%.3fs, alarm=%.3fs)",
            self._update_interval_s,
            self._alarm_check_interval_s,
        )

    def stop(self) -> None:
        if not self._running:
            return
        self._stop_evt.set()
        if self._thread is not None:
            self._thread.join(timeout=1.0)
        self._running = False
        self._thread = None
        logger.info("Simulation clock stopped")

    def _run(self) -> None:
        while not self._stop_evt.is_set():
            try:
                self.poll()
            except Exception:
                logger.exception("Unhandled exception in simulation clock")
            self._stop_evt.wait(self._poll_period_s)

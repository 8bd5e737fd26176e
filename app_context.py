"""
Title: Application Context Container for ECAMS
Author: Alex Cooke
Date Created: 2026-10-13
Last Modified: 2026-10-18
Version: 1.3

Purpose:
Defines a central application context object for the ECAM systems-monitoring
simulator (ECAMS). The AppContext aggregates the core components (sensor
simulator, fault injector, alarm engine, master status monitor, simulation
clock, event bus),
the validated static configuration and lifecycle control primitives into a
single, explicit container constructed once per process and passed by
reference. No module-level singletons are required for the core to function
or be tested.

Targeted Requirements:
- ECAMS-IR001: Provide a read-only snapshot of readings, alarms, counts and
  master status for rendering and export collaborators.

Scope and Limitations:
- Acts purely as a dependency container; contains no classification or alarm logic.
- Not intended to represent certified avionics process partitioning or tasking.

Safety Notice:
This software is for academic and illustrative purposes only.
It is not flight-certified and must not be used in operational systems.

Dependencies:
- Python 3.10+
- dataclasses, random, threading, time, typing (standard library)
- ecam_configuration.py, ecam_tables.py
- sims/sensor_simulator.py, sims/fault_injector.py
- alarm_engine.py, master_status.py, simulation_clock.py, event_bus.py

Safety and Certification Disclaimer:
All artefacts in this repository are produced for academic assessment purposes only.
They do not represent certified software and must not be used in real-world aviation
or safety-critical systems.
"""

import random
import time
from dataclasses import dataclass, field
from threading import Event
from typing import Callable, Iterable, Mapping

import ecam_tables
from alarm_engine import AlarmEngine
from ecam_configuration import FaultDefinition, SimulationConfig, Threshold
from event_bus import EventBus, EventType
from master_status import MasterStatusMonitor
from sims.fault_injector import FaultEffect, FaultInjector
from sims.sensor_simulator import SensorChannel, SensorSimulator
from simulation_clock import SimulationClock


@dataclass
class AppContext:
    config: SimulationConfig
    thresholds: Mapping[str, Threshold]
    bus: EventBus
    simulator: SensorSimulator
    engine: AlarmEngine
    monitor: MasterStatusMonitor
    clock: SimulationClock
    injector: FaultInjector
    shutdown_event: Event = field(default_factory=Event)

    def shutdown(self) -> None:
        self.clock.stop()
        self.shutdown_event.set()

    def reset(self) -> None:
        # Operator RESET: empty the alarm log, drop fault effects and restore nominal readings.
        self.engine.clear()
        self.injector.clear_faults()
        self.simulator.reset()
        self.monitor.refresh()

    def snapshot(self) -> dict:
        state = self.monitor.state()
        return {
            "readings": self.simulator.values(),
            "active_alarms": [a.to_dict() for a in self.engine.active_alarms()],
            "alarm_log": [a.to_dict() for a in self.engine.alarm_log()],
            "master": state.to_dict(),
            "system_status": {s: lv.value for s, lv in self.engine.system_statuses().items()},
            "frozen": self.clock.frozen,
            "test_mode": self.clock.test_mode,
            "injected_faults": self.injector.active_faults(),
        }


def build_context(
    config: SimulationConfig | None = None,
    *,
    thresholds: Mapping[str, Threshold] | None = None,
    catalog: Iterable[FaultDefinition] | None = None,
    channels: Iterable[SensorChannel] | None = None,
    effects: Mapping[str, Iterable[FaultEffect]] | None = None,
    rng: random.Random | None = None,
    wall_clock: Callable[[], float] = time.time,
    tick_clock: Callable[[], float] = time.monotonic,
    on_tick: Callable | None = None,
) -> AppContext:
    # Validates every static table before wiring; ConfigurationError is fatal.
    config = config or SimulationConfig()
    thresholds = ecam_tables.THRESHOLDS if thresholds is None else thresholds
    catalog = tuple(ecam_tables.FAULT_CATALOG if catalog is None else catalog)
    channels = tuple(ecam_tables.SENSOR_CHANNELS if channels is None else channels)
    effects = {
        code: tuple(entries)
        for code, entries in (ecam_tables.FAULT_EFFECTS if effects is None else effects).items()
    }

    ecam_tables.validate_tables(thresholds, catalog, channels, effects)

    rng = rng or random.Random()
    bus = EventBus()

    simulator = SensorSimulator(
        channels,
        rng=rng,
        clock=wall_clock,
        jitter_multiplier=config.jitter_multiplier,
    )
    engine = AlarmEngine(
        catalog,
        max_log_entries=config.max_log_entries,
        alarm_probability=config.alarm_probability,
        rng=rng,
        clock=wall_clock,
        selection_policy=config.fault_selection,
        bus=bus,
    )
    monitor = MasterStatusMonitor(engine, config.max_alarms_before_critical, bus=bus)

    # Subscribed after the monitor so status is annunciated before readings degrade.
    injector = FaultInjector(simulator, effects)
    if config.inject_fault_effects:
        bus.subscribe(EventType.ALARM_RAISED, injector.on_alarm_raised)

    clock = SimulationClock(
        simulator,
        engine,
        monitor,
        thresholds,
        update_interval_s=config.update_interval_s,
        alarm_check_interval_s=config.alarm_check_interval_s,
        clock=tick_clock,
        on_tick=on_tick,
    )

    return AppContext(
        config=config,
        thresholds=thresholds,
        bus=bus,
        simulator=simulator,
        engine=engine,
        monitor=monitor,
        clock=clock,
        injector=injector,
    )

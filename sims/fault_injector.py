"""
Title: ECAM Fault Effect Injector
Author: Alex Cooke
Date Created: 2026-10-18
Last Modified: 2026-10-18
Version: 1.0

Purpose:
Applies the sensor-level consequences of a catalogued fault to the ECAM
systems-monitoring simulator (ECAMS). Each fault code maps to zero or more
channel effects (scale then offset, e.g. oil pressure -35 PSI, EGT +330 C).
When a fault is injected its effects are written once through
SensorSimulator.set_value, so degraded values are validated into channel
bounds and then carried forward by the normal jitter, where the threshold
evaluator classifies them on the next sensor tick.

Targeted Requirements:
- ECAMS-SR004: An injected fault shall degrade the readings of its system.
- ECAMS-SR005: Clearing injected faults shall restore affected channels to nominal.

Scope and Limitations:
- Effects are one-off step changes; no progressive failure trends are modelled.
- A fault code already injected is not applied twice until faults are cleared.
- Fault codes with no entry in the effect table have no sensor consequence.

Safety Notice:
This software is for academic and illustrative purposes only.
It is not flight-certified and must not be used in operational systems.

Dependencies:
- Python 3.10+
- dataclasses, logging, math, threading, typing (standard library)
- sims/sensor_simulator.py
- ecam_configuration.py
"""

import logging
import math
import threading
from dataclasses import dataclass
from typing import Iterable, Mapping, Sequence

from ecam_configuration import ConfigurationError, FaultDefinition
from sims.sensor_simulator import SensorChannel, SensorReading, SensorSimulator

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FaultEffect:
    channel: str
    delta: float = 0.0
    factor: float = 1.0

    def apply(self, value: float) -> float:
        return value * self.factor + self.delta


def validate_fault_effects(
    effects: Mapping[str, Sequence[FaultEffect]],
    catalog: Iterable[FaultDefinition],
    channels: Iterable[SensorChannel],
) -> None:
    codes = {f.code for f in catalog}
    keys = {ch.key for ch in channels}
    for code, entries in effects.items():
        if code not in codes:
            raise ConfigurationError(f"Fault effect for unknown fault code: {code}")
        for effect in entries:
            if effect.channel not in keys:
                raise ConfigurationError(
                    f"Fault {code!r} affects unknown sensor channel {effect.channel!r}"
                )
            if not (math.isfinite(effect.delta) and math.isfinite(effect.factor)):
                raise ConfigurationError(f"Fault {code!r} effect on {effect.channel!r} must be finite")


class FaultInjector:
    def __init__(
        self,
        simulator: SensorSimulator,
        effects: Mapping[str, Sequence[FaultEffect]],
    ):
        self.simulator = simulator
        self._effects = {code: tuple(entries) for code, entries in effects.items()}
        self._active: dict[str, tuple[FaultEffect, ...]] = {}
        self._lock = threading.Lock()

    def effects(self, code: str) -> tuple[FaultEffect, ...]:
        return self._effects.get(code, ())

    def active_faults(self) -> list[str]:
        # Injection order.
        with self._lock:
            return list(self._active)

    def inject(self, code: str) -> list[SensorReading]:
        # Apply the fault's channel effects once; returns the readings written.
        with self._lock:
            if code in self._active:
                return []
            effects = self.effects(code)
            self._active[code] = effects

            applied = []
            for effect in effects:
                current = self.simulator.read(effect.channel).value
                applied.append(self.simulator.set_value(effect.channel, effect.apply(current)))

        if applied:
            logger.info(
                "Fault %s injected: %s",
                code,
                ", ".join(f"{r.parameter_key}={r.value:.2f}" for r in applied),
            )
        return applied

    def clear_faults(self) -> int:
        # Restore every channel touched by an injected fault to its nominal value.
        with self._lock:
            cleared = len(self._active)
            touched = {e.channel for effects in self._active.values() for e in effects}
            self._active.clear()
            for key in sorted(touched):
                self.simulator.set_value(key, self.simulator.channels[key].initial)

        if cleared:
            logger.info("Cleared %d injected fault(s)", cleared)
        return cleared

    def on_alarm_raised(self, event) -> None:
        # Event bus handler: a raised alarm injects its fault's effects.
        self.inject(event.payload.code)

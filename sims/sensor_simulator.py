"""
Title: ECAM Sensor Telemetry Simulator
Author: Alex Cooke
Date Created: 2026-10-12
Last Modified: 2026-10-18
Version: 1.4

Purpose:
Provides a lightweight, stochastic telemetry generator for the ECAM
systems-monitoring simulator (ECAMS). Each configured channel is perturbed
once per sensor tick by a bounded, uniformly distributed jitter and then
validated into its channel range. The random source and clock are injectable
so tests can supply seeded or scripted sequences.

Targeted Requirements:
- ECAMS-SR001: Every stored reading shall be finite and within its channel bounds.
- ECAMS-SR002: Simulation intensity shall be tunable through a global jitter multiplier.
- ECAMS-SR003: Current readings shall be exposed as a read-only snapshot.

Scope and Limitations:
- Values are randomly perturbed and not based on engine or systems models.
- No drift or correlation between channels is modelled. Fault effects are
  applied from outside as one-off offsets (sims/fault_injector.py).
- Channel state is guarded by a lock so operator overrides may arrive from
  the console thread while the clock thread updates.
- Readings are overwritten every tick; no history is retained.

Safety Notice:
This software is for academic and illustrative purposes only.
It is not flight-certified and must not be used in operational systems.

Dependencies:
- Python 3.10+
- dataclasses, math, random, threading, time, typing (standard library)
- sims/value_validator.py
- ecam_configuration.py

Safety and Certification Disclaimer:
All artefacts in this repository are produced for academic assessment purposes only.
They do not represent certified software and must not be used in real-world aviation
or safety-critical systems.
"""

import math
import random
import threading
import time
from dataclasses import dataclass
from typing import Callable, Iterable, Mapping

from ecam_configuration import ConfigurationError, Threshold
from sims.value_validator import is_finite_number, validate


@dataclass(frozen=True)
class SensorChannel:
    key: str                    # e.g. "eng1.n1"
    system: str                 # e.g. "engines"
    initial: float              # nominal start value
    jitter_range: float         # +/- perturbation per tick before scaling
    min_value: float = 0.0
    max_value: float = math.inf
    threshold_key: str | None = None


@dataclass(frozen=True)
class SensorReading:
    parameter_key: str
    value: float
    timestamp: float


def jitter(
    current: float,
    jitter_range: float,
    min_value: float = 0.0,
    max_value: float = math.inf,
    rng=None,
) -> float:
    # Uniform delta in [-range, +range], then validated into [min_value, max_value].
    source = rng if rng is not None else random
    if not is_finite_number(current):
        current = validate(current, min_value, max_value)
    delta = (source.random() - 0.5) * 2.0 * jitter_range
    return validate(current + delta, min_value, max_value)


def validate_channels(
    channels: Iterable[SensorChannel],
    thresholds: Mapping[str, Threshold],
) -> None:
    seen: set[str] = set()
    for ch in channels:
        if ch.key in seen:
            raise ConfigurationError(f"Duplicate sensor channel: {ch.key}")
        seen.add(ch.key)

        if ch.threshold_key is not None and ch.threshold_key not in thresholds:
            raise ConfigurationError(
                f"Sensor channel {ch.key!r} references unknown threshold {ch.threshold_key!r}"
            )
        if not ch.min_value <= ch.max_value:
            raise ConfigurationError(f"Sensor channel {ch.key!r} has min_value > max_value")
        if not is_finite_number(ch.initial) or not is_finite_number(ch.jitter_range):
            raise ConfigurationError(f"Sensor channel {ch.key!r} initial/jitter_range must be finite")
        if ch.jitter_range < 0:
            raise ConfigurationError(f"Sensor channel {ch.key!r} jitter_range must be >= 0")


class SensorSimulator:
    def __init__(
        self,
        channels: Iterable[SensorChannel],
        rng: random.Random | None = None,
        clock: Callable[[], float] = time.time,
        jitter_multiplier: float = 1.0,
    ):
        self.channels: dict[str, SensorChannel] = {ch.key: ch for ch in channels}
        self.rng = rng or random.Random()
        self.clock = clock
        self.jitter_multiplier = float(jitter_multiplier)

        self._readings: dict[str, SensorReading] = {}
        self._lock = threading.Lock()
        self.reset()

    def reset(self) -> dict[str, SensorReading]:
        # Restore every channel to its nominal initial value.
        now = float(self.clock())
        with self._lock:
            self._readings = {
                key: SensorReading(key, validate(ch.initial, ch.min_value, ch.max_value), now)
                for key, ch in self.channels.items()
            }
        return self.readings()

    def update(self) -> dict[str, SensorReading]:
        # Advance every channel by one jittered step and return the new snapshot.
        now = float(self.clock())
        with self._lock:
            for key, ch in self.channels.items():
                value = jitter(
                    self._readings[key].value,
                    ch.jitter_range * self.jitter_multiplier,
                    ch.min_value,
                    ch.max_value,
                    rng=self.rng,
                )
                self._readings[key] = SensorReading(key, value, now)
        return self.readings()

    def readings(self) -> dict[str, SensorReading]:
        with self._lock:
            return dict(self._readings)

    def values(self) -> dict[str, float]:
        with self._lock:
            return {key: r.value for key, r in self._readings.items()}

    def read(self, key: str) -> SensorReading:
        return self._readings[key]

    def set_value(self, key: str, value) -> SensorReading:
        # Force a channel to a specific value (operator override / scenario scripting).
        ch = self.channels[key]
        reading = SensorReading(key, validate(value, ch.min_value, ch.max_value), float(self.clock()))
        with self._lock:
            self._readings[key] = reading
        return reading

"""
Title: ECAM Simulation Configuration and Static Definition Models
Author: Alex Cooke
Date Created: 2026-10-12
Last Modified: 2026-10-18
Version: 1.3

Purpose:
Defines the immutable data models loaded once at startup by the ECAM
systems-monitoring simulator (ECAMS): the simulation timing/limit settings,
per-parameter threshold definitions and fault-code catalogue entries. All
models are validated at construction time; malformed configuration is fatal
and the application refuses to start rather than run with undefined
classification behaviour.

Targeted Requirements:
- ECAMS-CR001: Intervals, limits, probability and jitter multiplier shall be
  positive and finite.
- ECAMS-CR002: Every threshold shall define at least one bound, in strictly
  increasing order.
- ECAMS-CR003: Fault codes shall be unique across the catalogue.

Scope and Limitations:
- Configuration values are static and immutable once instantiated.
- JSON is the only supported file format for configuration overrides.
- Threshold tables and the fault catalogue are supplied in code (ecam_tables.py).

Safety Notice:
This software is for academic and illustrative purposes only.
It is not flight-certified and must not be used in operational systems.

Dependencies:
- Python 3.10+
- dataclasses (standard library)
- json, math, pathlib (standard library)
- alarm_levels.py

Safety and Certification Disclaimer:
All artefacts in this repository are produced for academic assessment purposes only.
They do not represent certified software and must not be used in real-world aviation
or safety-critical systems.
"""

import json
import math
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Iterable, Mapping

from alarm_levels import AlarmLevel, FaultSelectionPolicy


class ConfigurationError(ValueError):
    """Raised when static configuration cannot be used safely."""


def _require_positive_finite(name: str, value: Any) -> None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ConfigurationError(f"{name} must be numeric, got {value!r}")
    if not math.isfinite(value) or value <= 0:
        raise ConfigurationError(f"{name} must be positive and finite, got {value!r}")


def _require_increasing(label: str, bounds: list[tuple[str, float | None]]) -> None:
    defined = [(name, value) for name, value in bounds if value is not None]
    for name, value in defined:
        if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value):
            raise ConfigurationError(f"{label}: {name} must be a finite number, got {value!r}")
    for (lo_name, lo), (hi_name, hi) in zip(defined, defined[1:]):
        if not lo < hi:
            raise ConfigurationError(
                f"{label}: expected {lo_name} < {hi_name}, got {lo} >= {hi}"
            )


@dataclass(frozen=True)
class SimulationConfig:
    # Immutable simulation settings.
    update_interval_ms: float = 1000
    alarm_check_interval_ms: float = 3000
    max_log_entries: int = 50
    max_alarms_before_critical: int = 10
    alarm_probability: float = 0.15
    jitter_multiplier: float = 1.0
    fault_selection: FaultSelectionPolicy = FaultSelectionPolicy.UNIFORM
    inject_fault_effects: bool = True

    def __post_init__(self) -> None:
        for name in (
            "update_interval_ms",
            "alarm_check_interval_ms",
            "max_log_entries",
            "max_alarms_before_critical",
            "alarm_probability",
            "jitter_multiplier",
        ):
            _require_positive_finite(name, getattr(self, name))

        for name in ("max_log_entries", "max_alarms_before_critical"):
            if int(getattr(self, name)) != getattr(self, name):
                raise ConfigurationError(f"{name} must be a whole number")

        if self.alarm_probability > 1.0:
            raise ConfigurationError(
                f"alarm_probability must be <= 1.0, got {self.alarm_probability!r}"
            )

        if not isinstance(self.fault_selection, FaultSelectionPolicy):
            try:
                policy = FaultSelectionPolicy(self.fault_selection)
            except ValueError:
                raise ConfigurationError(
                    f"Unknown fault_selection policy: {self.fault_selection!r}"
                ) from None
            # Frozen dataclass: bypass __setattr__ for the normalised value.
            object.__setattr__(self, "fault_selection", policy)

        if not isinstance(self.inject_fault_effects, bool):
            raise ConfigurationError(
                f"inject_fault_effects must be true or false, got {self.inject_fault_effects!r}"
            )

    @property
    def update_interval_s(self) -> float:
        return self.update_interval_ms / 1000.0

    @property
    def alarm_check_interval_s(self) -> float:
        return self.alarm_check_interval_ms / 1000.0

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "SimulationConfig":
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigurationError(f"Unknown configuration keys: {unknown}")
        return cls(**dict(data))


def load_config(path: str | Path | None = None) -> SimulationConfig:
    # Defaults when no file is given; otherwise JSON object overrides.
    if path is None:
        return SimulationConfig()

    p = Path(path)
    try:
        data = json.loads(p.read_text(encoding="utf-8"))
    except OSError as e:
        raise ConfigurationError(f"Cannot read configuration file {p}: {e}") from e
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Invalid JSON in configuration file {p}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigurationError(f"Configuration file {p} must contain a JSON object")

    return SimulationConfig.from_mapping(data)


@dataclass(frozen=True)
class Threshold:
    """Static limits for one monitored parameter.

    Rising-bad parameters use ``caution``/``warning``/``max_value``.
    Parameters unsafe at both extremes (pressures, bus voltages) use the
    ``*_lo``/``*_hi`` bounds around ``nominal`` and are evaluated dual-bound.
    ``max_value`` is the gauge ceiling for either shape and must lie above
    every alarm bound; it is never classified against.
    """

    name: str
    unit: str
    caution: float | None = None
    warning: float | None = None
    max_value: float | None = None
    caution_lo: float | None = None
    warning_lo: float | None = None
    caution_hi: float | None = None
    warning_hi: float | None = None
    nominal: float | None = None

    def __post_init__(self) -> None:
        bounds = (
            self.caution,
            self.warning,
            self.max_value,
            self.caution_lo,
            self.warning_lo,
            self.caution_hi,
            self.warning_hi,
        )
        if all(b is None for b in bounds):
            raise ConfigurationError(f"Threshold {self.name!r} defines no bounds")

        if self.is_dual_bound:
            if self.caution is not None or self.warning is not None:
                raise ConfigurationError(
                    f"Threshold {self.name!r} mixes single-sided and dual-bound limits"
                )
            _require_increasing(
                f"Threshold {self.name!r}",
                [
                    ("warning_lo", self.warning_lo),
                    ("caution_lo", self.caution_lo),
                    ("nominal", self.nominal),
                    ("caution_hi", self.caution_hi),
                    ("warning_hi", self.warning_hi),
                    ("max_value", self.max_value),
                ],
            )
        else:
            _require_increasing(
                f"Threshold {self.name!r}",
                [
                    ("caution", self.caution),
                    ("warning", self.warning),
                    ("max_value", self.max_value),
                ],
            )

    @property
    def is_dual_bound(self) -> bool:
        return any(
            b is not None
            for b in (self.caution_lo, self.warning_lo, self.caution_hi, self.warning_hi)
        )


@dataclass(frozen=True)
class FaultDefinition:
    # Immutable fault catalogue entry.
    code: str
    message: str
    system: str
    level: AlarmLevel

    def __post_init__(self) -> None:
        if not self.code:
            raise ConfigurationError("Fault code must be a non-empty string")
        if self.level not in (AlarmLevel.CAUTION, AlarmLevel.WARNING):
            raise ConfigurationError(
                f"Fault {self.code!r} level must be CAUTION or WARNING, got {self.level!r}"
            )


def validate_thresholds(thresholds: Mapping[str, Threshold]) -> None:
    if not thresholds:
        raise ConfigurationError("Threshold table is empty")
    for key, threshold in thresholds.items():
        if not isinstance(threshold, Threshold):
            raise ConfigurationError(f"Threshold entry {key!r} is not a Threshold")


def validate_fault_catalog(catalog: Iterable[FaultDefinition]) -> None:
    seen: set[str] = set()
    count = 0
    for fault in catalog:
        if fault.code in seen:
            raise ConfigurationError(f"Duplicate fault code: {fault.code}")
        seen.add(fault.code)
        count += 1
    if count == 0:
        raise ConfigurationError("Fault catalogue is empty")

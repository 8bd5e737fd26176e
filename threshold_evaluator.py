"""
Title: Threshold Evaluator (Reading-to-Severity Classification)
Author: Alex Cooke
Date Created: 2026-10-12
Last Modified: 2026-10-15
Version: 1.1

Purpose:
Classifies simulated sensor readings against their static threshold
definitions, producing an AlarmLevel per reading. Two evaluation shapes are
supported: single-sided (rising values are bad) and dual-bound (both
depletion and excess are bad, e.g. oil pressure and bus voltage). Channel
levels can be folded into the most severe level per aircraft system.

Targeted Requirements:
- ECAMS-FR010: Warning is checked before caution; boundary values classify
  as the stricter level.
- ECAMS-FR011: Dual-bound parameters classify both extremes.

Scope and Limitations:
- Stateless; no hysteresis, persistence timers or latching are modelled.

Safety Notice:
This software is for academic and illustrative purposes only.
It is not flight-certified and must not be used in operational systems.
"""

from typing import Mapping

from alarm_levels import AlarmLevel, most_severe
from ecam_configuration import Threshold
from sims.sensor_simulator import SensorChannel, SensorReading


def classify(value: float, threshold: Threshold) -> AlarmLevel:
    if threshold.warning is not None and value >= threshold.warning:
        return AlarmLevel.WARNING
    if threshold.caution is not None and value >= threshold.caution:
        return AlarmLevel.CAUTION
    return AlarmLevel.NORMAL


def classify_dual_bound(value: float, threshold: Threshold) -> AlarmLevel:
    # Undefined bounds on either side are simply not checked.
    if (threshold.warning_lo is not None and value <= threshold.warning_lo) or (
        threshold.warning_hi is not None and value >= threshold.warning_hi
    ):
        return AlarmLevel.WARNING
    if (threshold.caution_lo is not None and value <= threshold.caution_lo) or (
        threshold.caution_hi is not None and value >= threshold.caution_hi
    ):
        return AlarmLevel.CAUTION
    return AlarmLevel.NORMAL


def evaluate(value: float, threshold: Threshold) -> AlarmLevel:
    if threshold.is_dual_bound:
        return classify_dual_bound(value, threshold)
    return classify(value, threshold)


def evaluate_readings(
    readings: Mapping[str, SensorReading],
    channels: Mapping[str, SensorChannel],
    thresholds: Mapping[str, Threshold],
) -> dict[str, AlarmLevel]:
    """Classify every reading whose channel is bound to a threshold.

    Channels with no threshold (quantities, surface positions) are skipped and
    do not appear in the result.
    """
    levels: dict[str, AlarmLevel] = {}
    for key, reading in readings.items():
        ch = channels.get(key)
        if ch is None or ch.threshold_key is None:
            continue
        levels[key] = evaluate(reading.value, thresholds[ch.threshold_key])
    return levels


def worst_level_by_system(
    levels: Mapping[str, AlarmLevel],
    channels: Mapping[str, SensorChannel],
) -> dict[str, AlarmLevel]:
    grouped: dict[str, list[AlarmLevel]] = {}
    for key, level in levels.items():
        grouped.setdefault(channels[key].system, []).append(level)
    return {system: most_severe(lv) for system, lv in grouped.items()}

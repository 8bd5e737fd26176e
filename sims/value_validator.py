"""
Title: Sensor Value Validation Utility
Author: Alex Cooke
Date Created: 2026-10-12
Last Modified: 2026-10-18
Version: 1.2

Purpose:
Repairs and clamps numeric sensor readings before they enter the simulator
state. Invalid readings (non-numeric, NaN, infinite) are substituted with the
midpoint of the permitted range and surfaced as a logged diagnostic only.

Targeted Requirements:
- ECAMS-SR001: Every stored reading shall be finite and within its channel bounds.

Scope and Limitations:
- Never raises; always returns a usable float.
- bool is rejected as non-numeric even though it subclasses int.
- Integers too large for a float are treated as invalid, not propagated.

Safety Notice:
This software is for academic and illustrative purposes only.
It is not flight-certified and must not be used in operational systems.

Dependencies:
- Python 3.10+
- logging, math (standard library)
"""

import logging
import math

logger = logging.getLogger(__name__)


def _safe_midpoint(min_value: float, max_value: float) -> float:
    mid = (min_value + max_value) / 2.0
    if math.isfinite(mid):
        return mid
    # Open-ended range: fall back to whichever bound is finite.
    if math.isfinite(min_value):
        return float(min_value)
    if math.isfinite(max_value):
        return float(max_value)
    return 0.0


def is_finite_number(value) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    try:
        return math.isfinite(value)
    except OverflowError:
        # int beyond float range
        return False


def validate(value, min_value: float, max_value: float) -> float:
    # Clamp value into [min_value, max_value]; repair invalid input with the midpoint.
    if not is_finite_number(value):
        fallback = _safe_midpoint(min_value, max_value)
        logger.warning("Invalid sensor value: %r (substituting %s)", value, fallback)
        return fallback

    return float(max(min_value, min(max_value, value)))

"""
Title: ECAM Severity Level Definitions
Author: Alex Cooke
Date Created: 2026-10-12
Last Modified: 2026-10-15
Version: 1.1

Purpose:
Defines the authoritative severity vocabulary used throughout the ECAM
systems-monitoring simulator (ECAMS). Per-parameter classification produces an
AlarmLevel, active-alarm totals are carried as AlarmCounts, and the master
status banner is expressed as a MasterStatus. FaultSelectionPolicy names the
strategies the alarm engine may use to choose which catalogued fault fires.

Targeted Requirements:
- ECAMS-FR010: Caution and warning are ascending severity tiers.
- ECAMS-FR040: Master status is one of NORMAL, CAUTION, WARNING, CRITICAL.

Scope and Limitations:
- Logical levels only; no colour, sound or text rendering is encoded here.
- Enum values are lower-case strings so they serialise directly into
  snapshots consumed by rendering and export collaborators.

Safety Notice:
This software is for academic and illustrative purposes only.
It is not flight-certified and must not be used in operational systems.

Dependencies:
- Python 3.10+
- dataclasses (standard library)
- enum (standard library)

Safety and Certification Disclaimer:
All artefacts in this repository are produced for academic assessment purposes only.
They do not represent certified software and must not be used in real-world aviation
or safety-critical systems.
"""

from dataclasses import dataclass
from enum import Enum


class AlarmLevel(Enum):
    NORMAL = "normal"
    CAUTION = "caution"
    WARNING = "warning"

    @property
    def rank(self) -> int:
        # 0 = normal, 1 = caution, 2 = warning
        return _LEVEL_RANK[self]


_LEVEL_RANK = {
    AlarmLevel.NORMAL: 0,
    AlarmLevel.CAUTION: 1,
    AlarmLevel.WARNING: 2,
}


def most_severe(levels) -> AlarmLevel:
    worst = AlarmLevel.NORMAL
    for level in levels:
        if level.rank > worst.rank:
            worst = level
    return worst


class MasterStatus(Enum):
    NORMAL = "normal"
    CAUTION = "caution"
    WARNING = "warning"
    CRITICAL = "critical"


class FaultSelectionPolicy(Enum):
    UNIFORM = "uniform"
    WEIGHTED = "weighted"


@dataclass(frozen=True)
class AlarmCounts:
    # Counts of unacknowledged alarms by level.
    warn_count: int = 0
    caut_count: int = 0

    @property
    def total(self) -> int:
        return self.warn_count + self.caut_count

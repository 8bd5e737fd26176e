"""
Title: ECAMS Operator Console and Status Annunciation Unit Tests
Author: Alex Cooke
Date Created: 2026-10-14
Last Modified: 2026-10-17
Version: 1.1

Purpose:
Provides unit-level verification of the operator console commands in cli.py
and of the StatusAnnunciator master status output. These tests validate that
operator actions (raise, acknowledge, ACK ALL, reset, freeze, test mode,
sensor override) reach the core and that negative results are reported
rather than raised.

Targeted Requirements (Verification Only):
- ECAMS-FR021: Unknown or already acknowledged alarm ids are reported, not raised.
- ECAMS-FR040: Master status transitions are annunciated to the console.

Scope and Limitations:
- Tests console command dispatch and stdout only.
- The background clock is never started; ticks are stepped manually.

Safety Notice:
This file is a test artefact intended solely for verification and assessment.
It must not be used in operational or flight-certified systems.

Dependencies:
- Python 3.10+
- pytest
- cli.py (StatusAnnunciator, execute)
- app_context.py
"""

import random

import pytest

from app_context import build_context
from cli import StatusAnnunciator, execute
from ecam_configuration import SimulationConfig


class FakeClock:
    def __init__(self, start: float = 0.0):
        self.t: float = float(start)

    def __call__(self) -> float:
        return self.t

    def advance(self, dt: float) -> None:
        self.t += float(dt)


@pytest.fixture
def ctx():
    config = SimulationConfig(max_alarms_before_critical=3)
    return build_context(
        config,
        rng=random.Random(42),
        wall_clock=FakeClock(3661.0),
        tick_clock=FakeClock(),
    )


def _lines(capsys) -> list[str]:
    return capsys.readouterr().out.strip().splitlines()


# -----------------------------
# StatusAnnunciator
# -----------------------------

def test_status_annunciator_prints_initial_status(ctx, capsys):
    ann = StatusAnnunciator()

    ann(ctx.clock)

    assert _lines(capsys) == ["MASTER: NORMAL"]


def test_status_annunciator_prints_only_on_change(ctx, capsys):
    ann = StatusAnnunciator()

    ann(ctx.clock)
    ann(ctx.clock)
    ctx.engine.raise_fault("ENG-OIL-LO")
    ann(ctx.clock)
    ann(ctx.clock)
    ctx.engine.raise_fault("ENG-N1-HI")
    ctx.engine.raise_fault("ENG-EGT-HI")
    ann(ctx.clock)

    assert _lines(capsys) == [
        "MASTER: NORMAL",
        "MASTER: CAUTION",
        "MASTER: CRITICAL",
    ]


# -----------------------------
# execute()
# -----------------------------

@pytest.mark.parametrize("cmd", ["q", "quit", "exit"])
def test_quit_commands_end_console(ctx, cmd):
    assert execute(ctx, cmd) is False


def test_blank_command_is_ignored(ctx, capsys):
    assert execute(ctx, "   ") is True
    assert capsys.readouterr().out == ""


def test_unknown_command(ctx, capsys):
    assert execute(ctx, "gear down") is True
    assert _lines(capsys) == ["Unknown command. Type 'help'."]


def test_raise_injects_catalogued_fault(ctx, capsys):
    execute(ctx, "raise eng-oil-lo")

    out = _lines(capsys)
    assert len(out) == 1
    assert out[0].startswith("Raised: #1")
    assert "01:01:01" in out[0]
    assert "ENG-OIL-LO" in out[0]
    assert [a.code for a in ctx.engine.active_alarms()] == ["ENG-OIL-LO"]


def test_raise_duplicate_reports_already_active(ctx, capsys):
    execute(ctx, "raise ENG-OIL-LO")
    capsys.readouterr()

    execute(ctx, "raise ENG-OIL-LO")

    assert _lines(capsys) == ["ENG-OIL-LO already active"]
    assert len(ctx.engine.alarm_log()) == 1


def test_raise_unknown_code_is_reported(ctx, capsys):
    assert execute(ctx, "raise GEAR-DISAGREE") is True
    assert _lines(capsys) == ["Unknown fault code: GEAR-DISAGREE"]


def test_ack_single_alarm(ctx, capsys):
    alarm = ctx.engine.raise_fault("ENG-N1-HI")

    execute(ctx, f"ack {alarm.id}")
    execute(ctx, f"ack {alarm.id}")

    assert _lines(capsys) == [
        f"Alarm #{alarm.id} acknowledged",
        f"Alarm #{alarm.id} not active",
    ]


def test_ack_unknown_id_is_reported_not_raised(ctx, capsys):
    execute(ctx, "ack 999")
    assert _lines(capsys) == ["Alarm #999 not active"]


def test_ack_with_bad_argument_prints_usage(ctx, capsys):
    execute(ctx, "ack first")
    assert _lines(capsys) == ["Usage: ack <id> | ack all"]


def test_ack_all(ctx, capsys):
    ctx.engine.raise_fault("ENG-N1-HI")
    ctx.engine.raise_fault("ENG-OIL-LO")

    execute(ctx, "ack all")

    assert _lines(capsys) == ["Acknowledged 2 alarm(s)"]
    assert ctx.engine.active_alarms() == []


def test_reset_clears_log_and_restores_readings(ctx, capsys):
    ctx.engine.raise_fault("ENG-N1-HI")
    ctx.simulator.set_value("eng1.n1", 100.0)

    execute(ctx, "reset")

    assert ctx.engine.alarm_log() == []
    assert ctx.simulator.read("eng1.n1").value == 85.2
    assert _lines(capsys) == ["Alarm log cleared, readings restored to nominal"]


def test_set_clamps_into_channel_bounds(ctx, capsys):
    execute(ctx, "set eng1.n1 200")

    out = _lines(capsys)
    assert out[0].startswith("Set: eng1.n1")
    assert out[0].endswith("104.00")


def test_set_unknown_sensor(ctx, capsys):
    execute(ctx, "set eng9.n1 50")
    assert _lines(capsys) == ["Unknown sensor: eng9.n1"]


def test_set_invalid_value(ctx, capsys):
    execute(ctx, "set eng1.n1 lots")
    assert _lines(capsys) == ["Invalid value."]


def test_freeze_and_resume(ctx, capsys):
    execute(ctx, "freeze")
    assert ctx.clock.frozen is True

    execute(ctx, "resume")
    assert ctx.clock.frozen is False

    assert _lines(capsys) == ["Simulation frozen", "Simulation resumed"]


def test_test_mode_on_with_codes_and_off(ctx, capsys):
    execute(ctx, "test on hyd-grn-lo fuel-qty-lo")
    assert ctx.clock.pending_test_faults() == ["HYD-GRN-LO", "FUEL-QTY-LO"]

    execute(ctx, "test off")
    assert ctx.clock.test_mode is False

    assert _lines(capsys) == ["Test mode ON: HYD-GRN-LO, FUEL-QTY-LO", "Test mode OFF"]


def test_test_mode_unknown_code(ctx, capsys):
    execute(ctx, "test on BOGUS")
    assert _lines(capsys) == ["Unknown fault code: BOGUS"]
    assert ctx.clock.test_mode is False


def test_step_runs_ticks(ctx, capsys):
    execute(ctx, "step 2")
    assert _lines(capsys) == ["Stepped 2 tick(s)"]


def test_step_while_frozen_is_ignored(ctx, capsys):
    before = ctx.simulator.values()
    execute(ctx, "freeze")

    execute(ctx, "step 5")

    assert _lines(capsys) == ["Simulation frozen", "Simulation frozen, step ignored"]
    assert ctx.simulator.values() == before
    assert ctx.engine.alarm_log() == []


def test_alarms_and_log_listing(ctx, capsys):
    ctx.engine.raise_fault("ENG-N1-HI")
    ctx.engine.raise_fault("ENG-OIL-LO")
    ctx.engine.acknowledge(1)

    execute(ctx, "alarms")
    active = _lines(capsys)
    execute(ctx, "log")
    log = _lines(capsys)

    assert len(active) == 1 and "ENG-OIL-LO" in active[0]
    assert len(log) == 2 and "ACK" in log[0]


def test_status_block(ctx, capsys):
    ctx.engine.raise_fault("ENG-N1-HI")

    execute(ctx, "status")

    out = capsys.readouterr().out
    assert "Master: WARNING" in out
    assert "Warnings: 1  Cautions: 0" in out
    assert "engines=WARNING" in out


def test_clear_restores_channels_degraded_by_raised_fault(ctx, capsys):
    execute(ctx, "raise ENG-OIL-LO")
    assert ctx.simulator.read("eng1.oilPress").value == 27
    execute(ctx, "injected")

    execute(ctx, "clear")
    execute(ctx, "injected")

    out = _lines(capsys)
    assert out[1:] == ["Injected: ENG-OIL-LO", "Cleared 1 injected fault(s)", "No injected faults"]
    assert ctx.simulator.read("eng1.oilPress").value == 62
    assert [a.code for a in ctx.engine.active_alarms()] == ["ENG-OIL-LO"]

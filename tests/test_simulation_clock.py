"""
Title: ECAMS Simulation Clock Unit Tests
Author: Alex Cooke
Date Created: 2026-10-14
Last Modified: 2026-10-17
Version: 1.1

Purpose:
Verifies the cooperative tick scheduler: distinct sensor and alarm intervals,
freeze/resume semantics, scripted test mode, late-poll rescheduling,
re-entrancy guards and idempotent start/stop.

Targeted Requirements (Verification Only):
- ECAMS-FR050 .. ECAMS-FR054

Scope and Limitations:
- Scheduling is driven by a FakeClock through poll(); the background thread
  is only started to check start/stop idempotence.

Safety Notice:
This file is a test artefact intended solely for verification and assessment.
It must not be used in operational or flight-certified systems.
"""

import random

import pytest

from alarm_levels import AlarmLevel
from app_context import build_context
from ecam_configuration import SimulationConfig
from simulation_clock import SimulationClock, TEST_MODE_DEFAULT_FAULTS


class FakeClock:
    def __init__(self, start: float = 0.0):
        self._t = float(start)

    def __call__(self) -> float:
        return self._t

    def advance(self, dt: float) -> None:
        self._t += float(dt)


def make_ctx(probability: float = 1.0, on_tick=None):
    tick_clock = FakeClock()
    cfg = SimulationConfig(alarm_probability=probability)
    ctx = build_context(
        cfg,
        rng=random.Random(2026),
        wall_clock=lambda: 0.0,
        tick_clock=tick_clock,
        on_tick=on_tick,
    )
    return ctx, tick_clock


# -----------------------------
# Scheduling
# -----------------------------

def test_rejects_non_positive_intervals():
    ctx, _ = make_ctx()
    with pytest.raises(ValueError):
        SimulationClock(ctx.simulator, ctx.engine, ctx.monitor, ctx.thresholds, update_interval_s=0)


def test_first_poll_only_arms_schedule():
    ctx, _ = make_ctx()
    assert ctx.clock.poll() == []


def test_sensor_and_alarm_ticks_run_on_their_own_intervals():
    ctx, t = make_ctx()
    ctx.clock.poll()

    t.advance(1.0)
    assert ctx.clock.poll() == ["sensor"]
    t.advance(1.0)
    assert ctx.clock.poll() == ["sensor"]
    t.advance(1.0)
    assert ctx.clock.poll() == ["sensor", "alarm"]


def test_poll_before_due_runs_nothing():
    ctx, t = make_ctx()
    ctx.clock.poll()
    t.advance(0.5)
    assert ctx.clock.poll() == []


def test_late_poll_runs_each_due_tick_once():
    ctx, t = make_ctx()
    ctx.clock.poll()

    t.advance(10.0)
    assert ctx.clock.poll() == ["sensor", "alarm"]

    # Rescheduled from the poll time, not replayed
    t.advance(0.5)
    assert ctx.clock.poll() == []
    t.advance(0.5)
    assert ctx.clock.poll() == ["sensor"]


def test_alarm_tick_raises_with_certain_probability():
    ctx, t = make_ctx(probability=1.0)
    ctx.clock.poll()
    t.advance(3.0)
    ctx.clock.poll()

    assert len(ctx.engine.alarm_log()) == 1


def test_step_runs_tick_pairs_ignoring_schedule():
    ctx, _ = make_ctx(probability=1.0)
    ctx.clock.step(3)
    assert 1 <= len(ctx.engine.alarm_log()) <= 3


def test_on_tick_called_after_each_tick():
    calls = []
    ctx, _ = make_ctx(on_tick=calls.append)

    ctx.clock.sensor_tick()
    ctx.clock.alarm_tick()

    assert calls == [ctx.clock, ctx.clock]


# -----------------------------
# Sensor tick
# -----------------------------

def test_sensor_tick_classifies_channels_and_systems():
    ctx, _ = make_ctx()
    ctx.simulator.set_value("eng1.n1", 103.0)

    ctx.clock.sensor_tick()

    assert ctx.clock.channel_levels()["eng1.n1"] is AlarmLevel.WARNING
    assert ctx.clock.system_levels()["engines"] is AlarmLevel.WARNING


def test_sensor_tick_not_reentered_while_in_flight():
    ctx, _ = make_ctx()
    ctx.clock._sensor_busy.acquire()
    try:
        assert ctx.clock.sensor_tick() is None
    finally:
        ctx.clock._sensor_busy.release()

    assert ctx.clock.sensor_tick() is not None


def test_alarm_tick_not_reentered_while_in_flight():
    ctx, _ = make_ctx(probability=1.0)
    ctx.clock._alarm_busy.acquire()
    try:
        assert ctx.clock.alarm_tick() == []
    finally:
        ctx.clock._alarm_busy.release()

    assert ctx.engine.alarm_log() == []


# -----------------------------
# Freeze
# -----------------------------

def test_frozen_poll_suppresses_all_ticks():
    ctx, t = make_ctx(probability=1.0)
    ctx.clock.poll()
    before = ctx.simulator.values()

    ctx.clock.freeze()
    for _ in range(5):
        t.advance(3.0)
        assert ctx.clock.poll() == []

    assert ctx.simulator.values() == before
    assert ctx.engine.alarm_log() == []


def test_frozen_step_changes_nothing():
    ctx, _ = make_ctx(probability=1.0)
    before = ctx.simulator.values()

    ctx.clock.freeze()
    assert ctx.clock.step(5) == 0

    assert ctx.simulator.values() == before
    assert ctx.engine.alarm_log() == []


def test_frozen_direct_ticks_are_suppressed():
    calls = []
    ctx, _ = make_ctx(probability=1.0, on_tick=calls.append)
    before = ctx.simulator.values()

    ctx.clock.freeze()

    assert ctx.clock.sensor_tick() is None
    assert ctx.clock.alarm_tick() == []
    assert ctx.simulator.values() == before
    assert ctx.engine.alarm_log() == []
    assert calls == []


def test_frozen_test_mode_step_keeps_script():
    ctx, _ = make_ctx()
    ctx.clock.enable_test_mode()
    ctx.clock.freeze()

    ctx.clock.step(3)

    assert len(ctx.clock.pending_test_faults()) == TEST_MODE_DEFAULT_FAULTS


def test_step_after_resume_runs_again():
    ctx, _ = make_ctx(probability=1.0)
    ctx.clock.freeze()
    ctx.clock.step()
    ctx.clock.resume()

    assert ctx.clock.step(2) == 2
    assert ctx.engine.alarm_log() != []


def test_resume_continues_on_schedule_without_burst():
    ctx, t = make_ctx()
    ctx.clock.poll()
    ctx.clock.freeze()
    t.advance(3.0)
    ctx.clock.poll()

    ctx.clock.resume()
    t.advance(1.0)

    assert ctx.clock.poll() == ["sensor"]


def test_freeze_and_resume_are_idempotent():
    ctx, _ = make_ctx()

    ctx.clock.freeze()
    ctx.clock.freeze()
    assert ctx.clock.frozen is True

    ctx.clock.resume()
    ctx.clock.resume()
    assert ctx.clock.frozen is False


def test_toggle_freeze():
    ctx, _ = make_ctx()
    assert ctx.clock.toggle_freeze() is True
    assert ctx.clock.toggle_freeze() is False


# -----------------------------
# Test mode
# -----------------------------

def test_test_mode_default_script_is_first_catalogue_faults():
    ctx, _ = make_ctx()
    ctx.clock.enable_test_mode()

    expected = [f.code for f in ctx.engine.catalog[:TEST_MODE_DEFAULT_FAULTS]]
    assert ctx.clock.pending_test_faults() == expected
    assert ctx.clock.test_mode is True


def test_test_mode_raises_scripted_faults_in_order_then_nothing():
    # Probability so small that a random raise would never happen
    ctx, _ = make_ctx(probability=1e-9)
    ctx.clock.enable_test_mode(["HYD-GRN-LO", "FUEL-QTY-LO"])

    first = ctx.clock.alarm_tick()
    second = ctx.clock.alarm_tick()
    third = ctx.clock.alarm_tick()

    assert [a.code for a in first] == ["HYD-GRN-LO"]
    assert [a.code for a in second] == ["FUEL-QTY-LO"]
    assert third == []
    assert ctx.clock.pending_test_faults() == []


def test_test_mode_rejects_unknown_code():
    ctx, _ = make_ctx()
    with pytest.raises(KeyError):
        ctx.clock.enable_test_mode(["NOT-A-FAULT"])
    assert ctx.clock.test_mode is False


def test_disable_test_mode_drops_script():
    ctx, _ = make_ctx()
    ctx.clock.enable_test_mode()
    ctx.clock.disable_test_mode()

    assert ctx.clock.test_mode is False
    assert ctx.clock.pending_test_faults() == []


def test_frozen_test_mode_does_not_consume_script():
    ctx, t = make_ctx()
    ctx.clock.enable_test_mode()
    ctx.clock.poll()
    ctx.clock.freeze()

    t.advance(3.0)
    ctx.clock.poll()

    assert len(ctx.clock.pending_test_faults()) == TEST_MODE_DEFAULT_FAULTS


# -----------------------------
# Background loop
# -----------------------------

def test_start_and_stop_are_idempotent():
    ctx, _ = make_ctx()

    ctx.clock.start()
    thread = ctx.clock._thread
    ctx.clock.start()
    assert ctx.clock._thread is thread
    assert ctx.clock.running is True

    ctx.clock.stop()
    ctx.clock.stop()
    assert ctx.clock.running is False
    assert ctx.clock._thread is None


def test_stop_before_start_is_noop():
    ctx, _ = make_ctx()
    ctx.clock.stop()
    assert ctx.clock.running is False

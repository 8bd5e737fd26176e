#!/usr/bin/env python3
"""
Title: ECAMS Interactive Operator Console
Author: Alex Cooke
Date Created: 2026-10-14
Last Modified: 2026-10-18
Version: 1.3

Purpose:
Provides an interactive command-line console for driving the ECAM
systems-monitoring simulator (ECAMS): start/stop/step the simulation clock,
freeze and resume, enable scripted test mode, inject and acknowledge alarms,
clear injected fault effects, override individual sensor readings and inspect
the readings, alarm log and master status.

Targeted Requirements:
- None (supporting simulation, demonstration and tooling only)

Scope and Limitations:
- Plain-text output only; no ECAM display rendering.
- The StatusAnnunciator prints master status transitions only, not every tick.

Safety Notice:
This software is for academic and illustrative purposes only.
It is not flight-certified and must not be used in operational systems.
"""

from alarm_engine import Alarm
from alarm_levels import MasterStatus
from app_context import AppContext, build_context
from sims.sensor_simulator import SensorReading


class StatusAnnunciator:
    # Prints the master status whenever it changes.
    def __init__(self):
        self._last: MasterStatus | None = None

    def __call__(self, clock) -> None:
        status = clock.monitor.status()
        if status is not self._last:
            print(f"MASTER: {status.name}")
            self._last = status


def _fmt_alarm(a: Alarm) -> str:
    ack = "ACK" if a.acknowledged else "   "
    return f"#{a.id:<4} {a.utc_time} {ack} {a.level.name:<7} {a.code:<13} {a.message}"


def _fmt_reading(r: SensorReading) -> str:
    return f"{r.parameter_key:<30} {r.value:>10.2f}"


def _print_status(ctx: AppContext) -> None:
    state = ctx.monitor.state()
    print("\n=== STATUS ===")
    print(f"Master: {state.status.name}")
    print(f"Warnings: {state.warn_count}  Cautions: {state.caut_count}")
    print(f"Log entries: {len(ctx.engine.alarm_log())}/{ctx.engine.max_log_entries}")
    print(f"Running: {ctx.clock.running}  Frozen: {ctx.clock.frozen}  TestMode: {ctx.clock.test_mode}")
    systems = ctx.engine.system_statuses()
    if systems:
        print("Systems:", ", ".join(f"{s}={lv.name}" for s, lv in sorted(systems.items())))
    print("=============\n")


def _print_help() -> None:
    print(
        """
Commands
  help                         Print help
  q                            Quit

Clock control
  run                          Start background simulation clock
  stop                         Stop background clock
  step [n]                     Run n sensor+alarm tick pairs (default 1)
  freeze | resume              Suppress / restore all ticks
  test on [codes...] | off     Scripted test mode (default: first 4 catalogue faults)

Alarms
  alarms                       Active alarms, most recent first
  log                          Full alarm log, oldest first
  ack <id> | ack all           Acknowledge one alarm or every active alarm
  raise <code>                 Inject a catalogued fault
  faults                       List the fault catalogue
  injected                     Faults whose sensor effects are applied
  clear                        Restore channels degraded by injected faults
  reset                        Clear the alarm log and restore nominal readings

Sensors
  readings                     Print current readings
  set <key> <value>            Override a reading (validated into channel bounds)

State
  status                       Print master status block
"""
    )


def execute(ctx: AppContext, cmd: str) -> bool:
    # Runs one console command; returns False when the console should exit.
    parts = cmd.split()
    if not parts:
        return True

    op = parts[0].lower()

    if op in ("q", "quit", "exit"):
        return False

    if op in ("help", "?"):
        _print_help()
        return True

    if op == "run":
        ctx.clock.start()
        print(f"Clock running (sensor {ctx.clock.update_interval_s:.3f}s, alarm {ctx.clock.alarm_check_interval_s:.3f}s)")
        return True

    if op == "stop":
        ctx.clock.stop()
        print("Clock stopped")
        return True

    if op == "step":
        try:
            n = int(parts[1]) if len(parts) >= 2 else 1
        except ValueError:
            print("Usage: step [n]")
            return True
        if ctx.clock.frozen:
            print("Simulation frozen, step ignored")
            return True
        print(f"Stepped {ctx.clock.step(n)} tick(s)")
        return True

    if op == "freeze":
        ctx.clock.freeze()
        print("Simulation frozen")
        return True

    if op == "resume":
        ctx.clock.resume()
        print("Simulation resumed")
        return True

    if op == "test":
        if len(parts) >= 2 and parts[1].lower() == "on":
            codes = [c.upper() for c in parts[2:]] or None
            try:
                ctx.clock.enable_test_mode(codes)
            except KeyError as e:
                print(e.args[0])
                return True
            print("Test mode ON:", ", ".join(ctx.clock.pending_test_faults()))
            return True
        if len(parts) == 2 and parts[1].lower() == "off":
            ctx.clock.disable_test_mode()
            print("Test mode OFF")
            return True
        print("Usage: test on [codes...] | test off")
        return True

    if op == "alarms":
        active = ctx.engine.active_alarms()
        if not active:
            print("No active alarms")
        for a in active:
            print(_fmt_alarm(a))
        return True

    if op == "log":
        entries = ctx.engine.alarm_log()
        if not entries:
            print("Alarm log empty")
        for a in entries:
            print(_fmt_alarm(a))
        return True

    if op == "ack":
        if len(parts) != 2:
            print("Usage: ack <id> | ack all")
            return True
        if parts[1].lower() == "all":
            print(f"Acknowledged {ctx.engine.acknowledge_all()} alarm(s)")
            return True
        try:
            alarm_id = int(parts[1])
        except ValueError:
            print("Usage: ack <id> | ack all")
            return True
        ok = ctx.engine.acknowledge(alarm_id)
        print(f"Alarm #{alarm_id} acknowledged" if ok else f"Alarm #{alarm_id} not active")
        return True

    if op == "raise":
        if len(parts) != 2:
            print("Usage: raise <code>")
            return True
        try:
            alarm = ctx.engine.raise_fault(parts[1].upper())
        except KeyError as e:
            print(e.args[0])
            return True
        if alarm is None:
            print(f"{parts[1].upper()} already active")
        else:
            print("Raised:", _fmt_alarm(alarm))
        return True

    if op == "faults":
        for f in ctx.engine.catalog:
            print(f"{f.code:<13} {f.level.name:<7} {f.system:<16} {f.message}")
        return True

    if op == "injected":
        active = ctx.injector.active_faults()
        print("Injected: " + ", ".join(active) if active else "No injected faults")
        return True

    if op == "clear":
        print(f"Cleared {ctx.injector.clear_faults()} injected fault(s)")
        return True

    if op == "reset":
        ctx.reset()
        print("Alarm log cleared, readings restored to nominal")
        return True

    if op == "readings":
        for r in ctx.simulator.readings().values():
            print(_fmt_reading(r))
        return True

    if op == "set":
        if len(parts) != 3:
            print("Usage: set <key> <value>")
            return True
        key = parts[1]
        if key not in ctx.simulator.channels:
            print(f"Unknown sensor: {key}")
            return True
        try:
            value = float(parts[2])
        except ValueError:
            print("Invalid value.")
            return True
        print("Set:", _fmt_reading(ctx.simulator.set_value(key, value)))
        return True

    if op == "status":
        _print_status(ctx)
        return True

    print("Unknown command. Type 'help'.")
    return True


def main() -> int:
    annunciator = StatusAnnunciator()
    ctx = build_context(on_tick=annunciator)

    _print_help()
    while True:
        try:
            cmd = input("> ").strip()
        except (EOFError, KeyboardInterrupt):
            print()
            break

        if not execute(ctx, cmd):
            break

    ctx.shutdown()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

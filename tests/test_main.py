# test_main.py
#
# Smoke tests for the headless entry point: startup refusal on bad
# configuration and a bounded run that shuts down cleanly.

import json
import signal

import pytest

import main


@pytest.fixture(autouse=True)
def _no_signal_handlers(monkeypatch):
    # Leave the test runner's own SIGINT handling in place.
    monkeypatch.setattr(signal, "signal", lambda *args: None)


def test_parse_args_defaults():
    args = main.parse_args([])
    assert args.config is None
    assert args.duration is None
    assert args.seed is None
    assert args.test_mode is False
    assert args.verbose is False


def test_bounded_run_exits_cleanly():
    assert main.main(["--duration", "0", "--seed", "1"]) == 0


def test_bounded_run_in_test_mode(tmp_path):
    cfg = tmp_path / "fast.json"
    cfg.write_text(json.dumps({"update_interval_ms": 10, "alarm_check_interval_ms": 20}), encoding="utf-8")

    assert main.main(["--config", str(cfg), "--duration", "0.1", "--test-mode"]) == 0


def test_invalid_config_refuses_to_start(tmp_path):
    cfg = tmp_path / "bad.json"
    cfg.write_text(json.dumps({"max_log_entries": 0}), encoding="utf-8")

    assert main.main(["--config", str(cfg), "--duration", "0"]) == 2


def test_initialize_enables_test_mode():
    args = main.parse_args(["--seed", "3", "--test-mode"])
    ctx = main.initialize(args)
    try:
        assert ctx.clock.test_mode is True
        assert len(ctx.clock.pending_test_faults()) == 4
    finally:
        ctx.shutdown()

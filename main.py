#!/usr/bin/env python3
import argparse
import logging
import random
import signal

from app_context import AppContext, build_context
from ecam_configuration import ConfigurationError, load_config
from event_bus import Event, EventType


def setup_logging(verbose: bool = False):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
    )


def setup_signal_handlers(ctx: AppContext):
    def _handle_shutdown(signum, frame):
        logging.info("Shutdown signal received (%s)", signum)
        ctx.shutdown()

    signal.signal(signal.SIGINT, _handle_shutdown)
    signal.signal(signal.SIGTERM, _handle_shutdown)


def log_events(ctx: AppContext) -> None:
    # Stand-in collaborator: annunciate alarm and status events to the log.
    def _on_raised(event: Event):
        alarm = event.payload
        logging.warning("%s %s UTC %s - %s", alarm.level.value.upper(), alarm.utc_time, alarm.code, alarm.message)

    def _on_status(event: Event):
        state = event.payload
        logging.warning(
            "MASTER %s (warnings=%d cautions=%d)",
            state.status.value.upper(),
            state.warn_count,
            state.caut_count,
        )

    ctx.bus.subscribe(EventType.ALARM_RAISED, _on_raised)
    ctx.bus.subscribe(EventType.MASTER_STATUS_CHANGED, _on_status)


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="ECAM systems-monitoring simulator (headless)")
    parser.add_argument("--config", help="JSON file overriding simulation settings")
    parser.add_argument("--duration", type=float, default=None, help="Stop after N seconds")
    parser.add_argument("--seed", type=int, default=None, help="Seed the random source")
    parser.add_argument("--test-mode", action="store_true", help="Raise the scripted test faults")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser.parse_args(argv)


def initialize(args) -> AppContext:
    logging.info("Initializing application")

    config = load_config(args.config)
    rng = random.Random(args.seed) if args.seed is not None else None
    ctx = build_context(config, rng=rng)

    if args.test_mode:
        ctx.clock.enable_test_mode()
    return ctx


def main(argv=None) -> int:
    args = parse_args(argv)
    setup_logging(args.verbose)

    try:
        ctx = initialize(args)
    except ConfigurationError as e:
        logging.error("Refusing to start: %s", e)
        return 2

    setup_signal_handlers(ctx)
    log_events(ctx)

    ctx.clock.start()
    ctx.shutdown_event.wait(timeout=args.duration)
    ctx.shutdown()

    state = ctx.monitor.state()
    logging.info(
        "Main loop terminated (master=%s, log entries=%d)",
        state.status.value.upper(),
        len(ctx.engine.alarm_log()),
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

import argparse, logging, sys

import config
from sim.scenarios import SCENARIOS
from sim.world import World
from wellclear.bus import EventBus, STATE_TOPIC, VIOLATIONS_TOPIC
from wellclear.engine import WellClearDetector
from wellclear.exceptions import ReportFormatError
from wellclear.io import ViolationLog, load_state_reports
from wellclear.monitor import WellClearMonitor
from wellclear.notify import outcome_lines


def load_scenario(key: str):
    fn = SCENARIOS.get(key, SCENARIOS["1"])
    return fn()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Well-clear violation monitor")
    parser.add_argument(
        "--input", "-i",
        help="CSV file of state reports to replay",
        default=None,
    )
    parser.add_argument(
        "--scenario", "-s",
        help="scenario key (1/2/3/4) if no input CSV",
        default="1",
    )
    parser.add_argument("--ownship", type=int, default=config.OWNSHIP_ID,
                        help="ownship aircraft id")
    parser.add_argument("--duration", type=float, default=120.0,
                        help="scenario length (s)")
    parser.add_argument("--log", default=config.LOG_PATH,
                        help="per-cycle CSV log path ('' disables)")
    parser.add_argument("--max-age", type=float, default=config.MAX_STATE_AGE_S,
                        help="evict traffic older than this many seconds")
    parser.add_argument("--tthr", type=float, default=None,
                        help="override modified tau threshold (s)")
    parser.add_argument("--verbose", "-v", action="store_true")
    return parser


def replay(path: str, monitor: WellClearMonitor, log: ViolationLog) -> int:
    try:
        reports = load_state_reports(path)
    except (OSError, ReportFormatError) as e:
        logging.getLogger("run").error("Failed to load reports: %s", e)
        return 1

    bus = EventBus()
    monitor.attach(bus)
    current = {"time_s": 0.0}

    def _print(outcome):
        log.record(current["time_s"], monitor.ownship_id, outcome)
        for line in outcome_lines(outcome):
            print(line)

    bus.on(VIOLATIONS_TOPIC, _print)
    for report in reports:
        current["time_s"] = report.time_ms / 1000.0
        bus.emit(STATE_TOPIC, report)
    return 0


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    thresholds = {"tthr_s": args.tthr} if args.tthr is not None else None
    monitor = WellClearMonitor(
        ownship_id=args.ownship,
        engine=WellClearDetector(thresholds),
        max_state_age_s=args.max_age,
    )
    log_path = args.log or None

    if args.input:
        log = ViolationLog(log_path)
        try:
            return replay(args.input, monitor, log)
        finally:
            log.close()

    world = World(load_scenario(args.scenario), monitor=monitor, log_path=log_path)

    def _print(outcome):
        for line in outcome_lines(outcome):
            print(f"[t={world.time_s:6.1f}s] {line}")

    world.bus.on(VIOLATIONS_TOPIC, _print)
    try:
        world.publish()
        while world.time_s < args.duration:
            world.step(config.DT)
    finally:
        world.close()

    s = monitor.stats
    print(f"cycles={s.cycles_run} suppressed={s.cycles_suppressed} "
          f"failed={s.cycles_failed} warnings={s.airspeed_warnings} "
          f"min_ttv={s.min_time_to_violation_s:.1f}s")
    return 0


if __name__ == "__main__":
    sys.exit(main())

from __future__ import annotations

import argparse
import json
import logging
import sys
import threading
from pathlib import Path
from typing import TYPE_CHECKING, Any, NoReturn

from disk_pressure.allocation.factory import build_allocation
from disk_pressure.core.domain.errors import ConfigError
from disk_pressure.core.events.event_bus import EventBus
from disk_pressure.core.events.sinks.file_recorder import FileRecorderSink
from disk_pressure.core.events.sinks.metrics_sink import PrometheusMetricsSink
from disk_pressure.core.events.sinks.progress_sink import ProgressSink
from disk_pressure.core.events.sinks.sink_logging import LoggingEventSink
from disk_pressure.core.guard.disk_guard import DiskGuard
from disk_pressure.io.disk_usage import ShutilDiskUsageProbe
from disk_pressure.io.local_writer import ZeroFillFileWriter
from disk_pressure.runtime.prometheus_metrics import PrometheusMetricsClient
from disk_pressure.runtime.summary import print_schedule_summary, summarize_schedule
from disk_pressure.scheduler.cancellation import (
    CancellationToken,
    install_signal_handlers,
    restore_signal_handlers,
)
from disk_pressure.scheduler.schedule_config import (
    DEFAULT_STEP_DELAY_SECONDS,
    DEFAULT_TARGET_DIR,
    ScheduleConfig,
)
from disk_pressure.scheduler.write_scheduler import WriteScheduler

if TYPE_CHECKING:
    from disk_pressure.core.ports.disk_usage import DiskUsageProbe
    from disk_pressure.core.ports.file_writer import FileWriter

LOGGER = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1


# ---------------------------------------------------------------------------
# Argument parsing
# ---------------------------------------------------------------------------

class _ArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that reports usage errors as ConfigError instead of exiting 2."""

    def error(self, message: str) -> NoReturn:
        self.print_usage(sys.stderr)
        raise ConfigError(message)


def build_parser() -> argparse.ArgumentParser:
    common = _ArgumentParser(add_help=False)

    common.add_argument(
        "--high-water-percent",
        type=int,
        default=None,
        help="Abort before a write once disk usage reaches this percentage (default: 99).",
    )

    common.add_argument(
        "--events-file",
        type=Path,
        default=None,
        help="Append every run event as a JSON line to this file.",
    )

    common.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: INFO).",
    )

    common.add_argument(
        "--plan-only",
        action="store_true",
        help="Print the schedule summary and exit without writing.",
    )

    parser = _ArgumentParser(
        prog="disk-pressure",
        description="Consume disk space on a timed cadence, with a hard stop near full.",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    # TOTAL
    total_parser = subparsers.add_parser(
        "total",
        parents=[common],
        help="Write TOTAL_MB over TOTAL_MINUTES, one file per step.",
    )
    total_parser.add_argument("total_mb", type=int, help="Total megabytes to write.")
    total_parser.add_argument("total_minutes", type=int, help="Number of steps (one per minute).")
    total_parser.add_argument(
        "target_dir",
        nargs="?",
        type=Path,
        default=DEFAULT_TARGET_DIR,
        help=f"Output directory (default: {DEFAULT_TARGET_DIR}).",
    )
    total_parser.add_argument(
        "mode",
        nargs="?",
        choices=["fixed", "fib"],
        default="fixed",
        help="Size pattern: equal files or a Fibonacci ramp (default: fixed).",
    )
    total_parser.add_argument(
        "--step-seconds",
        type=float,
        default=DEFAULT_STEP_DELAY_SECONDS,
        help="Seconds between steps (default: 60, at most 30 days).",
    )

    # RANDOM
    random_parser = subparsers.add_parser(
        "random",
        parents=[common],
        help="Write a file of random size every INTERVAL_SEC until stopped.",
    )
    random_parser.add_argument("min_mb", type=int, help="Minimum file size in MB.")
    random_parser.add_argument("max_mb", type=int, help="Maximum file size in MB.")
    random_parser.add_argument("interval_sec", type=float, help="Seconds between files.")
    random_parser.add_argument(
        "target_dir",
        nargs="?",
        type=Path,
        default=DEFAULT_TARGET_DIR,
        help=f"Output directory (default: {DEFAULT_TARGET_DIR}).",
    )
    random_parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Random seed (optional; for reproducible sizes).",
    )

    # RUN (JSON config)
    run_parser = subparsers.add_parser(
        "run",
        parents=[common],
        help="Run a schedule described by a JSON config file.",
    )
    run_parser.add_argument(
        "--config",
        type=Path,
        required=True,
        help="Path to a ScheduleConfig JSON file.",
    )

    return parser


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _load_json(path: Path) -> dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise ConfigError(f"cannot read config {path}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise ConfigError(f"config {path} is not valid JSON: {exc}") from exc

    if not isinstance(data, dict):
        raise ConfigError(f"config {path} must contain a JSON object")
    return data


def config_from_args(args: argparse.Namespace) -> ScheduleConfig:
    """Translate parsed arguments into a validated ScheduleConfig."""
    if args.command == "run":
        raw = _load_json(args.config)
    elif args.command == "total":
        raw = {
            "target_dir": str(args.target_dir),
            "step_delay_seconds": args.step_seconds,
            "allocation": {
                "mode": args.mode,
                "total_mb": args.total_mb,
                "steps": args.total_minutes,
            },
        }
    elif args.command == "random":
        raw = {
            "target_dir": str(args.target_dir),
            "step_delay_seconds": args.interval_sec,
            "allocation": {
                "mode": "uniform",
                "min_mb": args.min_mb,
                "max_mb": args.max_mb,
                "seed": args.seed,
            },
        }
    else:
        raise ConfigError(f"unknown command {args.command!r}")

    # Command-line flags win over the config file.
    if args.high_water_percent is not None:
        guard = dict(raw.get("guard") or {})
        guard["high_water_percent"] = args.high_water_percent
        raw["guard"] = guard
    if args.events_file is not None:
        raw["events_path"] = str(args.events_file)

    return ScheduleConfig.from_json_obj(raw)


def build_event_bus(cfg: ScheduleConfig) -> EventBus:
    sinks: list[Any] = [
        LoggingEventSink(logging.getLogger("disk_pressure.events")),
        ProgressSink(),
    ]

    if cfg.events_path is not None:
        sinks.append(FileRecorderSink(cfg.events_path))

    metrics = PrometheusMetricsClient()
    if metrics.is_enabled():
        sinks.append(PrometheusMetricsSink(metrics, target_dir=str(cfg.target_dir)))

    return EventBus(sinks=sinks)


# ---------------------------------------------------------------------------
# Main
# ---------------------------------------------------------------------------

def main(
    argv: list[str] | None = None,
    *,
    token: CancellationToken | None = None,
    writer: FileWriter | None = None,
    probe: DiskUsageProbe | None = None,
) -> int:
    """Run the CLI and return the process exit code."""
    # pylint: disable=too-many-return-statements
    parser = build_parser()

    try:
        args = parser.parse_args(argv)
    except ConfigError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return EXIT_FAILURE

    logging.basicConfig(
        level=args.log_level,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )

    try:
        cfg = config_from_args(args)
        allocation = build_allocation(cfg.allocation)
    except ConfigError as exc:
        LOGGER.error("Invalid configuration: %s", exc)
        return EXIT_FAILURE

    try:
        cfg.target_dir.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        LOGGER.error("Cannot create target directory %s: %s", cfg.target_dir, exc)
        return EXIT_FAILURE

    probe = probe if probe is not None else ShutilDiskUsageProbe()
    writer = writer if writer is not None else ZeroFillFileWriter()

    summary = summarize_schedule(cfg=cfg, allocation=allocation, probe=probe)
    print_schedule_summary(summary)

    if args.plan_only:
        return EXIT_OK

    previous_handlers = None
    if token is None:
        token = CancellationToken()
        if threading.current_thread() is threading.main_thread():
            previous_handlers = install_signal_handlers(token)

    event_bus = build_event_bus(cfg)
    scheduler = WriteScheduler(
        target_dir=cfg.target_dir,
        step_delay_seconds=cfg.step_delay_seconds,
        guard=DiskGuard(probe=probe, guard_cfg=cfg.guard),
        writer=writer,
        event_bus=event_bus,
    )

    LOGGER.info("Starting... Press Ctrl+C to stop.")

    try:
        result = scheduler.run(allocation, token)
    finally:
        event_bus.close()
        if previous_handlers is not None:
            restore_signal_handlers(previous_handlers)

    if result.status == "canceled":
        LOGGER.info(
            "Stopped by user after %d steps (%d MB written).",
            result.steps_completed,
            result.written_mb,
        )
        return EXIT_OK

    if result.status == "completed":
        LOGGER.info(
            "Completed writing %d MB over %d steps in %s mode.",
            result.written_mb,
            result.steps_completed,
            allocation.name,
        )
        return EXIT_OK

    LOGGER.error(
        "Run aborted after %d steps (%d MB written): %s",
        result.steps_completed,
        result.written_mb,
        result.error,
    )
    return EXIT_FAILURE


def run() -> None:
    sys.exit(main())


if __name__ == "__main__":
    run()

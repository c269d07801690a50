"""Process entry point: run every delivery scenario and exit 0 only if all pass."""

from __future__ import annotations

import argparse
import asyncio
import logging
from pathlib import Path
from typing import Any, Iterable, Mapping, Optional, Sequence

from dotenv import load_dotenv

from common import MessageBus, load_config, setup_logging
from common.config import as_float, as_int, as_mapping
from common.logging import logging_options
from verify import HarnessReport, ScenarioSpec, WaitPolicy, run_all
from verify.scenarios import (
    DEFAULT_SCENARIOS,
    build_wait_policy,
    scenarios_from_config,
    select,
)

from .loopback import LoopbackPublisher

logger = logging.getLogger(__name__)


def _build_wait_policy(
    config: Mapping[str, Any],
    *,
    interval_ms: Optional[float] = None,
    max_iterations: Optional[int] = None,
) -> WaitPolicy:
    policy = build_wait_policy(config.get("wait"), WaitPolicy()) or WaitPolicy()
    return WaitPolicy(
        interval=interval_ms / 1000.0 if interval_ms is not None else policy.interval,
        max_iterations=max_iterations if max_iterations is not None else policy.max_iterations,
    )


def _build_scenarios(config: Mapping[str, Any]) -> tuple[ScenarioSpec, ...]:
    if "scenarios" not in config:
        return DEFAULT_SCENARIOS
    scenarios = scenarios_from_config(config.get("scenarios"))
    if not scenarios:
        logger.warning("Config lists no scenarios; falling back to the built-in table")
        return DEFAULT_SCENARIOS
    return scenarios


def _build_loopback(
    config: Mapping[str, Any],
    bus: MessageBus,
    scenarios: Sequence[ScenarioSpec],
    *,
    force: bool,
) -> LoopbackPublisher | None:
    loopback_cfg = as_mapping(config.get("loopback"))
    if not (force or loopback_cfg.get("enabled")):
        logger.info("Loopback publisher disabled; expecting the bridge to publish")
        return None
    period = as_float(loopback_cfg.get("period_ms"), 20.0) / 1000.0
    return LoopbackPublisher(bus, scenarios, period=period)


class HarnessRuntime:
    """Wire configuration, the bus, an optional publisher and the scenario run."""

    def __init__(
        self,
        config_path: Optional[Path] = None,
        *,
        loopback: bool = False,
        channels: Optional[Iterable[str]] = None,
        interval_ms: Optional[float] = None,
        max_iterations: Optional[int] = None,
        log_level: Optional[str] = None,
    ) -> None:
        self.config_path = config_path
        self.loopback = loopback
        self.channels = list(channels) if channels else None
        self.interval_ms = interval_ms
        self.max_iterations = max_iterations
        self.log_level = log_level

    async def run(self) -> HarnessReport:
        load_dotenv()
        config = load_config(self.config_path)

        level, log_file = logging_options(config, self.log_level)
        setup_logging(level, log_file)

        policy = _build_wait_policy(
            config, interval_ms=self.interval_ms, max_iterations=self.max_iterations
        )
        scenarios = select(_build_scenarios(config), self.channels)
        if not scenarios:
            raise SystemExit(f"No scenarios match channels {self.channels!r}")

        logger.info(
            "Running %d scenarios (poll every %.3fs, %d polls max)",
            len(scenarios),
            policy.interval,
            policy.max_iterations,
        )

        bus_cfg = as_mapping(config.get("bus"))
        bus = MessageBus(max_subscriptions=as_int(bus_cfg.get("max_subscriptions"), 1024))
        publisher = _build_loopback(config, bus, scenarios, force=self.loopback)

        try:
            if publisher:
                await publisher.start()
            report = await run_all(bus, scenarios, policy=policy)
        finally:
            if publisher:
                await publisher.stop()
            await bus.close()

        if report.failed:
            logger.error(
                "%d of %d scenarios failed: %s",
                len(report.failed),
                len(report.results),
                ", ".join(result.channel for result in report.failed),
            )
        return report


async def run_harness(**kwargs: Any) -> HarnessReport:
    runtime = HarnessRuntime(**kwargs)
    return await runtime.run()


def parse_args(argv: Iterable[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Verify that bridged messages arrive on every channel"
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to YAML configuration file",
    )
    parser.add_argument(
        "--loopback",
        action="store_true",
        help="Publish the expected messages in-process instead of relying on the bridge",
    )
    parser.add_argument(
        "--channel",
        dest="channels",
        action="append",
        help="Only run the scenario for this channel (repeatable)",
    )
    parser.add_argument(
        "--interval-ms",
        type=float,
        default=None,
        help="Milliseconds slept between polls (default 10)",
    )
    parser.add_argument(
        "--max-iterations",
        type=int,
        default=None,
        help="Polls before a channel counts as timed out (default 200)",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Override the configured log level",
    )
    args = parser.parse_args(list(argv) if argv is not None else None)
    if args.interval_ms is not None and args.interval_ms < 0:
        parser.error(f"--interval-ms must be >= 0, got {args.interval_ms:g}")
    if args.max_iterations is not None and args.max_iterations < 1:
        parser.error(f"--max-iterations must be >= 1, got {args.max_iterations}")
    return args


def main(argv: Iterable[str] | None = None) -> int:
    args = parse_args(argv)
    report = asyncio.run(
        run_harness(
            config_path=args.config,
            loopback=args.loopback,
            channels=args.channels,
            interval_ms=args.interval_ms,
            max_iterations=args.max_iterations,
            log_level=args.log_level,
        )
    )
    return report.exit_code


if __name__ == "__main__":  # pragma: no cover - CLI execution path
    raise SystemExit(main())

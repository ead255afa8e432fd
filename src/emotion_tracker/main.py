"""Application entrypoint: run a live tracking session or inspect a bootstrap one."""

from __future__ import annotations

import argparse
import asyncio
import json
import sys

import structlog

from emotion_tracker.config import Settings, get_settings
from emotion_tracker.logger import setup_logging
from emotion_tracker.models import EMOTION_METADATA, Sample
from emotion_tracker.research.export import export_history_json
from emotion_tracker.streaming.controller import TrackingController

logger = structlog.get_logger(__name__)


async def run_session(controller: TrackingController, duration: float) -> None:
    """Track live for ``duration`` seconds, logging every sample."""

    def _log_sample(sample: Sample) -> None:
        logger.info(
            "sample",
            emotion=sample.emotion.value,
            confidence=sample.confidence,
            heart_rate=sample.heart_rate,
            eda=sample.eda,
            temperature=sample.temperature,
        )

    unsubscribe = controller.on_sample(_log_sample)
    await controller.start()
    try:
        await asyncio.sleep(duration)
    finally:
        await controller.stop()
        unsubscribe()


def _settings_with(settings: Settings, **overrides) -> Settings:
    values = {k: v for k, v in overrides.items() if v is not None}
    return settings.model_copy(update=values) if values else settings


def _positive_float(text: str) -> float:
    value = float(text)
    if value <= 0:
        raise argparse.ArgumentTypeError(f"must be positive, got {text}")
    return value


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog="emotion-tracker",
        description="Simulated wearable emotion tracking.",
    )
    parser.add_argument("--seed", type=int, default=None, help="Seed for reproducible sessions.")
    # SUPPRESS keeps a sub-command without --seed from clobbering the global value.
    seed_parent = argparse.ArgumentParser(add_help=False)
    seed_parent.add_argument("--seed", type=int, default=argparse.SUPPRESS, help="Seed for reproducible sessions.")
    sub = parser.add_subparsers(dest="command")

    # ── run ───────────────────────────────────────────────────
    run_parser = sub.add_parser("run", parents=[seed_parent], help="Track live and print the session summary.")
    run_parser.add_argument("--duration", type=_positive_float, default=10.0)
    run_parser.add_argument("--interval", type=_positive_float, default=None)

    # ── summary / trend / export / labels ─────────────────────
    sub.add_parser("summary", parents=[seed_parent], help="Print the summary of a bootstrap session.")
    trend_parser = sub.add_parser(
        "trend", parents=[seed_parent], help="Print the most recent samples of a bootstrap session.",
    )
    trend_parser.add_argument("--limit", type=int, default=None)
    sub.add_parser("export", parents=[seed_parent], help="Print the history of a bootstrap session as JSON.")
    sub.add_parser("labels", help="Print emotion label metadata.")

    args = parser.parse_args(argv)
    settings = _settings_with(get_settings(), random_seed=args.seed)
    setup_logging(settings.log_level)

    if args.command == "run":
        controller = TrackingController(interval_seconds=args.interval, settings=settings)
        asyncio.run(run_session(controller, args.duration))
        print(controller.get_summary().model_dump_json(indent=2))
    elif args.command == "summary":
        print(TrackingController(settings=settings).get_summary().model_dump_json(indent=2))
    elif args.command == "trend":
        recent = TrackingController(settings=settings).get_recent(args.limit)
        print(export_history_json(recent))
    elif args.command == "export":
        print(TrackingController(settings=settings).export_json())
    elif args.command == "labels":
        labels = [meta.model_dump(mode="json") for meta in EMOTION_METADATA.values()]
        print(json.dumps(labels, indent=2))
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()

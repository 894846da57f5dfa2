"""
Run Stats Reporter CLI
Dispatches a run event exported by a host hook to the RunStatsListener.

    python main.py started  run.json
    python main.py finalized run.json
"""
import argparse
import json
import logging
import sys

from run_stats.host.json_adapter import PayloadError, run_from_payload
from run_stats.listeners.run_stats_listener import RunStatsListener
from run_stats.utils.logging_config import setup_logging

logger = logging.getLogger("main")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Report a CI run event to the statistics service.")
    parser.add_argument("event", choices=["started", "finalized"])
    parser.add_argument("payload", help="Path to the JSON run description, or - for stdin")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    parser.add_argument("--log-dir", default=None, help="Also write logs to this directory")
    return parser


def _load_payload(path: str):
    if path == "-":
        return json.load(sys.stdin)
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(level=logging.DEBUG if args.verbose else logging.INFO, log_dir=args.log_dir)

    try:
        run = run_from_payload(_load_payload(args.payload))
    except (PayloadError, OSError, ValueError, TypeError) as e:
        logger.error("Invalid run description %s: %s", args.payload, e)
        return 2

    listener = RunStatsListener()
    if args.event == "started":
        listener.on_started(run)
    else:
        listener.on_finalized(run)
    return 0


if __name__ == "__main__":
    sys.exit(main())

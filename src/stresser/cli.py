#!/usr/bin/env python3
# cli.py — CLI for the stresser load generator

import argparse
import asyncio
import logging
import sys

from stresser.core import LoadDispatcher
from stresser.logging_config import setup_logging
from stresser.models import ConfigurationError, RunConfig
from stresser.rendering import render_latency_histogram, render_report

logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="stresser",
        description="Stress testing tool: fire GET requests at a URL and report status codes",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )

    parser.add_argument(
        "--url",
        required=True,
        help="URL of the service to test",
    )
    parser.add_argument(
        "--requests",
        type=int,
        default=1,
        help="Total number of requests",
    )
    parser.add_argument(
        "--concurrency",
        type=int,
        default=1,
        help="Number of concurrent requests",
    )

    # Reporting
    parser.add_argument(
        "--legacy-codes",
        action="store_true",
        help="Report timeouts as 404 and other transport errors as 500",
    )
    parser.add_argument(
        "--histogram",
        action="store_true",
        help="Print a latency histogram after the report",
    )
    parser.add_argument(
        "--progress",
        action="store_true",
        help="Show a live progress bar on stderr",
    )

    # Logging & Debugging
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug-level logging",
    )
    parser.add_argument(
        "--log-file",
        type=str,
        default=None,
        help="Optional file to write logs to (e.g., stresser.log)",
    )

    return parser.parse_args(argv)


async def run(argv: list[str] | None = None) -> int:
    args = parse_args(argv)

    log_level = "DEBUG" if args.debug else "INFO"
    setup_logging(level=log_level, log_file=args.log_file)

    try:
        config = RunConfig(
            url=args.url,
            total_requests=args.requests,
            concurrency=args.concurrency,
            legacy_codes=args.legacy_codes,
        )
    except ConfigurationError as e:
        logger.debug(f"Rejected configuration: {e}")
        print(f"Error: {e}")
        return 1

    dispatcher = LoadDispatcher(config, show_progress=args.progress)
    report = await dispatcher.run()

    print(render_report(report))
    if args.histogram:
        print()
        print(render_latency_histogram(list(report.latencies)))

    return 0


def main():
    sys.exit(asyncio.run(run()))


if __name__ == "__main__":
    main()

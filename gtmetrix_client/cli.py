"""CLI entry point for running a GTmetrix test."""

import argparse
import asyncio
import json
import logging
import os
import sys
from collections.abc import Sequence
from typing import Any

from pydantic import ValidationError

from gtmetrix_client.config import GTmetrixConfig
from gtmetrix_client.errors import GTmetrixError, RemoteError
from gtmetrix_client.models.snapshot import ResultSnapshot
from gtmetrix_client.session import TestSession

STATE_SYMBOLS = {
    "completed": "✅",
    "error": "❗",
}


def log_snapshot_summary(
    log: logging.Logger, target_url: str, snapshot: ResultSnapshot
) -> None:
    """Log a formatted summary of a finished test."""
    log.info("=" * 80)
    log.info("Test Results Summary:")
    log.info("=" * 80)

    symbol = STATE_SYMBOLS.get(snapshot.state, "?")
    log.info("%s %s: %s", symbol, target_url, snapshot.state)

    if snapshot.error:
        log.info("  Error: %s", snapshot.error)
    if not snapshot.is_completed:
        return

    results = snapshot.results
    log.info("  Report URL: %s", results.report_url)
    log.info(
        "  PageSpeed: %d, YSlow: %d", results.pagespeed_score, results.yslow_score
    )
    log.info(
        "  Fully loaded: %dms, %d bytes, %d requests",
        results.fully_loaded_time,
        results.page_bytes,
        results.page_elements,
    )


def format_output(target_url: str, snapshot: ResultSnapshot) -> dict[str, Any]:
    """Format a finished test for JSON output."""
    return {
        "url": target_url,
        "state": snapshot.state,
        "error": snapshot.error or None,
        "results": snapshot.results.model_dump() if snapshot.is_completed else None,
        "resources": (
            snapshot.resources.model_dump() if snapshot.is_completed else None
        ),
    }


def format_error(target_url: str, error: GTmetrixError) -> dict[str, Any]:
    """Format a failed test run for JSON output."""
    output: dict[str, Any] = {
        "url": target_url,
        "state": "error",
        "error": str(error),
        "results": None,
        "resources": None,
    }
    if isinstance(error, RemoteError) and error.reference is not None:
        output["credits_left"] = error.reference.credits_left
    return output


async def run(target_url: str, config: GTmetrixConfig) -> int:
    """Run a test and return exit code."""
    log = logging.getLogger("gtmetrix_client")

    log.info("Testing %s (timeout=%.0fs)", target_url, config.timeout)

    async with TestSession.from_config(config) as session:
        try:
            snapshot = await session.submit_and_wait(target_url)
        except GTmetrixError as exc:
            log.error("Test of %s failed: %s", target_url, exc)
            print(json.dumps(format_error(target_url, exc), indent=2))
            return 1

    log_snapshot_summary(log, target_url, snapshot)
    print(json.dumps(format_output(target_url, snapshot), indent=2))

    return 0 if snapshot.is_completed else 1


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser, credentials default to the environment."""
    parser = argparse.ArgumentParser(description="Run a GTmetrix performance test")
    parser.add_argument("url", help="URL of the site to test")
    parser.add_argument(
        "--username",
        default=os.environ.get("GTMETRIX_USERNAME"),
        help="GTmetrix account e-mail (default: $GTMETRIX_USERNAME)",
    )
    parser.add_argument(
        "--api-key",
        default=os.environ.get("GTMETRIX_API_KEY"),
        help="GTmetrix API key (default: $GTMETRIX_API_KEY)",
    )
    parser.add_argument(
        "--api-base-url",
        default="https://gtmetrix.com/api/0.1/",
        help="GTmetrix API root",
    )
    parser.add_argument(
        "--poll-interval",
        type=float,
        default=1.0,
        help="Seconds between polls",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=300.0,
        help="Seconds to wait for the test to finish",
    )
    parser.add_argument(
        "--strict-decode",
        action="store_true",
        help="Fail on malformed API responses instead of treating them as empty",
    )
    return parser


def parse_config(
    parser: argparse.ArgumentParser, argv: Sequence[str] | None = None
) -> tuple[str, GTmetrixConfig]:
    """Parse arguments into the target URL and a client configuration."""
    args = parser.parse_args(argv)

    if not args.username or not args.api_key:
        parser.error(
            "credentials required: pass --username and --api-key or set "
            "GTMETRIX_USERNAME and GTMETRIX_API_KEY"
        )

    try:
        config = GTmetrixConfig(
            username=args.username,
            api_key=args.api_key,
            api_base_url=args.api_base_url,
            poll_interval=args.poll_interval,
            timeout=args.timeout,
            strict_decode=args.strict_decode,
        )
    except ValidationError as exc:
        problems = "; ".join(
            f"{error['loc'][0]}: {error['msg']}" for error in exc.errors()
        )
        parser.error(f"invalid configuration: {problems}")
    return args.url, config


def main() -> None:
    """CLI entry point."""
    target_url, config = parse_config(build_parser())

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )

    sys.exit(asyncio.run(run(target_url, config)))


if __name__ == "__main__":  # pragma: no cover
    main()

import argparse
import asyncio
import logging
import os
import sys

from dotenv import load_dotenv

# Load configuration from single .env file
load_dotenv("energy-dashboard.env")

from session import DashboardSession
from sinks.console import ConsoleSink
from sinks.lametric import LaMetricSink
from sources.esp32 import Esp32Source

# Setup logging
logging.basicConfig(
    level=logging.INFO,
    format='%(levelname)s - %(message)s',
    datefmt='%H:%M:%S'
)
logger = logging.getLogger(__name__)

# Defaults when neither the env file nor the CLI says otherwise
DEFAULT_ESP32_HOST = "172.20.10.5"
DEFAULT_FETCH_INTERVAL_MS = 200


def get_source(host: str | None = None):
    """Initialize the ESP32 source with hard fail on misconfiguration"""
    if host is None:
        host = os.getenv("ESP32_HOST", DEFAULT_ESP32_HOST)
    if not host:
        logger.error("ESP32: ESP32_HOST not configured in energy-dashboard.env")
        sys.exit(1)
    logger.info(f"Using source: ESP32 at {host}")
    return Esp32Source(host=host)


def get_interval(interval_ms: str | int | None = None) -> float:
    """Poll interval in seconds, from the CLI value or FETCH_INTERVAL_MS"""
    if interval_ms is None:
        interval_ms = os.getenv("FETCH_INTERVAL_MS", DEFAULT_FETCH_INTERVAL_MS)
    try:
        value = int(interval_ms)
    except (TypeError, ValueError):
        logger.error(f"Invalid FETCH_INTERVAL_MS: {interval_ms!r} is not a number")
        sys.exit(1)
    if value <= 0:
        logger.error(f"Invalid FETCH_INTERVAL_MS: {value} must be positive")
        sys.exit(1)
    return value / 1000


def get_sinks(quiet: bool = False) -> list:
    """Console unless quiet, plus LaMetric when it is configured"""
    sinks = []
    if not quiet:
        sinks.append(ConsoleSink())

    lametric = LaMetricSink()
    if lametric.configured:
        logger.info(f"Using sink: LaMetric at {lametric.url}")
        sinks.append(lametric)
    return sinks


async def main(host: str | None, interval_ms: int | None, drop_superseded: bool, quiet: bool):
    source = get_source(host)
    interval = get_interval(interval_ms)

    async with source:
        session = DashboardSession(
            source,
            sinks=get_sinks(quiet),
            drop_superseded=drop_superseded
        )
        logger.info(f"Fetching every {interval * 1000:.0f} ms")
        await session.poll_forever(interval)


if __name__ == "__main__":
    # Parse command line arguments
    parser = argparse.ArgumentParser(description="ESP32 Energy Dashboard")
    parser.add_argument(
        "--host",
        type=str,
        default=None,
        help=f"ESP32 address (default: ESP32_HOST or {DEFAULT_ESP32_HOST})"
    )
    parser.add_argument(
        "--interval",
        type=int,
        default=None,
        help=f"Poll interval in ms (default: FETCH_INTERVAL_MS or {DEFAULT_FETCH_INTERVAL_MS})"
    )
    parser.add_argument(
        "--drop-superseded",
        action="store_true",
        help="Ignore responses that arrive after a newer one was already shown"
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Do not print the dashboard to the terminal"
    )
    args = parser.parse_args()

    try:
        asyncio.run(main(args.host, args.interval, args.drop_superseded, args.quiet))
    except KeyboardInterrupt:
        logger.info("Dashboard stopped by user.")

"""ESP32 capacitor monitor ingress module - polls measurement JSON via HTTP"""
import logging
import sys
from typing import Any

import httpx

logger = logging.getLogger(__name__)


class Esp32Source:
    """
    ESP32 energy monitor source.

    The device serves its latest measurement as a JSON object on the root
    path. One GET per poll, over a persistent keep-alive client.

    No retrying or backoff: every failure is raised to the caller, which
    simply polls again on the next tick.
    """

    def __init__(self, host: str, timeout: float | None = None):
        """
        Initialize ESP32 source.

        Args:
            host: IP address or hostname of the ESP32 (e.g., "172.20.10.5")
            timeout: HTTP request timeout in seconds (default: None, wait forever)
        """
        self.host = host
        self.timeout = timeout
        self.url = f"http://{host}/"
        self.client = None

    async def __aenter__(self):
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def connect(self) -> None:
        """
        Create the persistent HTTP client.

        Reachability is not tested here: the dashboard has to come up and
        show "Disconnected" while the device is still booting.
        """
        if not self.host:
            logger.error("ESP32_HOST not configured")
            sys.exit(1)
            return  # For test mocking: prevent further execution

        self.client = httpx.AsyncClient(
            timeout=self.timeout,
            limits=httpx.Limits(max_keepalive_connections=1)
        )
        logger.info(f"ESP32: Polling {self.url}")

    async def fetch(self) -> Any:
        """
        Fetch the current measurement.

        Raises:
            httpx.HTTPStatusError: on a non-success status.
            httpx.HTTPError: on connection level failures.
            ValueError: when the body is not valid JSON.
        """
        if self.client is None:
            raise RuntimeError("ESP32: fetch() called before connect()")

        response = await self.client.get(self.url)
        response.raise_for_status()
        return response.json()

    async def close(self) -> None:
        if self.client:
            await self.client.aclose()
            self.client = None
            logger.info("ESP32: Client closed")

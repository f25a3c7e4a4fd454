"""LaMetric Time egress module - pushes the charge level as a goal frame via HTTP"""
import asyncio
import logging
import math
import os
import requests

from display import Display

logger = logging.getLogger(__name__)

# Configuration
LAMETRIC_API_KEY = os.environ.get("LAMETRIC_API_KEY")
LAMETRIC_URL = os.environ.get("LAMETRIC_URL")
ICON_CHARGING = 26337  # Drawing power
ICON_READY = 54077     # Feeding power
ICON_STALE = 1059      # Lightning bolt with red slash (no data)


def _perform_http_request(url, api_key, payload):
    """
    Executes the HTTP Push to LaMetric Time.
    Is ran in a thread to not block the main loop.
    """
    try:
        r = requests.post(
            url,
            json=payload,
            auth=("dev", api_key),
            timeout=2
        )
        r.raise_for_status()
    except Exception as e:
        logger.warning(f"LaMetric: Failed HTTP POST {e}")


def build_payload(display: Display) -> dict:
    """
    Formats the display as a LaMetric frame.

    Connected: a goal frame filling up towards 100 %.
    Disconnected: "-- %" with the no-data icon.
    """
    if not display.connected:
        frame = {
            "text": "-- %",
            "icon": ICON_STALE,
            "index": 0
        }
    else:
        fill = display.fill_percentage
        frame = {
            "goalData": {
                "start": 0,
                "current": 0 if math.isnan(fill) else round(fill),
                "end": 100,
                "unit": "%"
            },
            "icon": ICON_READY if display.ultimate_active else ICON_CHARGING,
            "index": 0
        }

    return {"frames": [frame]}


class LaMetricSink:
    """
    Mirrors the charge level on a LaMetric Time.

    The dashboard refreshes far more often than the clock can scroll, so a
    payload identical to the last one pushed is not sent again.
    """

    def __init__(self, url: str | None = None, api_key: str | None = None):
        self.url = url or LAMETRIC_URL
        self.api_key = api_key or LAMETRIC_API_KEY
        self._last_payload = None

    @property
    def configured(self) -> bool:
        return bool(self.url and self.api_key)

    async def publish(self, display: Display) -> None:
        if not self.configured:
            return

        payload = build_payload(display)
        if payload == self._last_payload:
            return

        self._last_payload = payload
        await self.send_http_payload(payload)

    async def send_http_payload(self, payload):
        """
        Offloads the blocking HTTP request to a thread.
        """
        await asyncio.to_thread(_perform_http_request, self.url, self.api_key, payload)

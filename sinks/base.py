"""Base definitions for display sinks"""
from typing import Protocol

from display import Display


class DisplaySink(Protocol):
    """
    Protocol for egress sinks (terminal, LaMetric, etc).

    A sink is handed the whole display after every cycle and decides
    itself what, if anything, to show. Sinks must not raise.
    """

    async def publish(self, display: Display) -> None:
        ...

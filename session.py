"""Dashboard session - fetch-and-render cycle and the ultimate-ready flag"""
import asyncio
import logging
from typing import Iterable

from display import Display
from energy import calculate_savings, fill_percentage
from sinks.base import DisplaySink
from sources.base import MeasurementSnapshot, MeasurementSource

logger = logging.getLogger(__name__)

# Status the device reports once the target voltage has been reached
ULTIMATE_READY = "ULTIMATE_READY"


class DashboardSession:
    """
    Owns the state that outlives a single poll cycle.

    That is the display and the `ultimate_ready` flag. One session is
    created at startup and lives as long as the process.

    Cycles are started on a fixed timer without waiting for the previous
    one, so several requests can be in flight. By default whichever
    finishes last wins. With `drop_superseded=True` a result older than the
    last one rendered is discarded instead.
    """

    def __init__(
        self,
        source: MeasurementSource,
        display: Display | None = None,
        sinks: Iterable[DisplaySink] = (),
        drop_superseded: bool = False
    ):
        self.source = source
        self.display = display if display is not None else Display()
        self.sinks = list(sinks)
        self.drop_superseded = drop_superseded
        self.ultimate_ready = False
        self._issued = 0
        self._accepted = 0

    async def run_cycle(self) -> None:
        """
        One poll: fetch, render, publish.

        Never raises for fetch problems. Network errors, bad status and
        unparseable bodies all end up as the "Disconnected" rendering.
        """
        self._issued += 1
        sequence = self._issued

        try:
            data = await self.source.fetch()
        except Exception as e:
            if not self._accept(sequence):
                return
            logger.error(f"Error fetching data: {e}")
            self.render_failure()
        else:
            if not self._accept(sequence):
                return
            self.render(MeasurementSnapshot.from_json(data))

        for sink in self.sinks:
            await sink.publish(self.display)

    def render(self, snapshot: MeasurementSnapshot) -> None:
        fill = fill_percentage(snapshot.voltage, snapshot.target_voltage)
        value = calculate_savings(snapshot.total_energy)

        self.display.show_snapshot(snapshot, fill, value)
        self._update_ultimate(snapshot.status)

    def render_failure(self) -> None:
        self.ultimate_ready = False
        self.display.show_disconnected()

    def _update_ultimate(self, status: str | None) -> None:
        if status == ULTIMATE_READY and not self.ultimate_ready:
            self._activate_ultimate()
        elif status != ULTIMATE_READY and self.ultimate_ready:
            self.ultimate_ready = False
            self.display.ultimate_active = False

    def _activate_ultimate(self) -> None:
        self.ultimate_ready = True
        self.display.show_ready()
        logger.info("Ultimate activated!")

    def _accept(self, sequence: int) -> bool:
        if self.drop_superseded and sequence < self._accepted:
            logger.debug(f"Dropping result of cycle {sequence}, cycle {self._accepted} already rendered")
            return False
        self._accepted = max(self._accepted, sequence)
        return True

    async def poll_forever(self, interval: float) -> None:
        """
        Run a cycle now and then every `interval` seconds, forever.

        A new cycle starts on schedule even while earlier ones are still
        waiting for their response. A cycle that blows up is logged and
        the timer carries on.
        """
        async with asyncio.TaskGroup() as tg:
            tg.create_task(self._logged_cycle())
            while True:
                await asyncio.sleep(interval)
                tg.create_task(self._logged_cycle())

    async def _logged_cycle(self) -> None:
        try:
            await self.run_cycle()
        except Exception as e:
            logger.error(f"Cycle error: {e}")

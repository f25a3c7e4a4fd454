"""Terminal egress module - prints the dashboard regions to stdout"""
import math
import sys

from display import Display

BAR_CELLS = 20


def render_bar(fill: float, cells: int = BAR_CELLS) -> str:
    """Text progress bar, e.g. '[#####---------------]  25.0%'."""
    if math.isnan(fill):
        filled = 0
        label = "  NaN%"
    else:
        filled = round(fill / 100 * cells)
        label = f"{fill:5.1f}%"
    return f"[{'#' * filled}{'-' * (cells - filled)}] {label}"


def render_frame(display: Display) -> str:
    lines = [render_bar(display.fill_percentage)]
    if display.ultimate_active:
        lines.append("*** ULTIMATE ***")
    lines.extend(display.text_regions().values())
    return "\n".join(lines)


class ConsoleSink:
    """Prints the display, but only when something on it changed."""

    def __init__(self, stream=None):
        self.stream = stream if stream is not None else sys.stdout
        self._last_frame = None

    async def publish(self, display: Display) -> None:
        frame = render_frame(display)
        if frame == self._last_frame:
            return

        self._last_frame = frame
        print(frame, end="\n\n", file=self.stream, flush=True)

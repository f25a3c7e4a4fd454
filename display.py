"""Dashboard display model - the named regions every cycle writes to"""
import math
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Context, Decimal

from energy import EnergyValue
from sources.base import MeasurementSnapshot

NOT_AVAILABLE = "N/A"
CURRENCY_UNIT = "บาท"
READY_MESSAGE = "ULTIMATE READY! (Target Voltage Reached)"
DISCONNECTED_MESSAGE = "Status: Disconnected! (Check IP/ESP32)"

# Enough digits for any value below 1e21 at nine decimal places
FIXED_CONTEXT = Context(prec=40)

TEXT_REGIONS = (
    "timestamp",
    "voltage",
    "current",
    "power",
    "energy",
    "potential_energy",
    "status",
    "energy_kwh",
    "savings",
)


def format_fixed(value: float, digits: int) -> str:
    """
    Fixed-point text as the browser renders it: NaN and Infinity spelled out.

    Rounds the exact binary value half away from zero, so 3.15625 to four
    places is 3.1563. From 1e21 up the browser falls back to number text.
    """
    if math.isnan(value) or math.isinf(value) or abs(value) >= 1e21:
        return format_number(value)
    if value == 0:
        value = 0.0  # no "-0.0000"
    rounded = Decimal(value).quantize(
        Decimal(1).scaleb(-digits),
        rounding=ROUND_HALF_UP,
        context=FIXED_CONTEXT
    )
    return f"{rounded:f}"


def format_number(value: float) -> str:
    """
    Shortest number text: 50 rather than 50.0, NaN rather than nan.

    Plain digits between 1e-6 and 1e21, exponent form ("1e-7", "1e+21")
    outside that range.
    """
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value == 0:
        return "0"

    text = repr(value)
    if 1e-6 <= abs(value) < 1e21:
        text = f"{Decimal(text):f}"
        if "." in text:
            text = text.rstrip("0").rstrip(".")
        return text

    mantissa, _, exponent = text.partition("e")
    return f"{mantissa}e{int(exponent):+d}"


def format_text(value: str | None) -> str:
    return NOT_AVAILABLE if value is None else value


@dataclass
class Display:
    """
    The dashboard's display regions.

    Text regions hold the exact strings shown to the user. `bar_width` is the
    progress bar fill as a CSS width, and `ultimate_active` is the
    "ultimate-active" highlight on the container.
    """
    bar_width: str = "0%"
    fill_percentage: float = 0.0
    timestamp: str = ""
    voltage: str = ""
    current: str = ""
    power: str = ""
    energy: str = ""
    potential_energy: str = ""
    status: str = ""
    energy_kwh: str = ""
    savings: str = ""
    ultimate_active: bool = False
    connected: bool = False

    def show_snapshot(self, snapshot: MeasurementSnapshot, fill: float, value: EnergyValue) -> None:
        self.connected = True
        self.fill_percentage = fill
        self.bar_width = f"{format_number(fill)}%"
        self.timestamp = f"Time: {format_text(snapshot.timestamp)}"
        self.voltage = f"Voltage: {format_fixed(snapshot.voltage, 4)} V"
        self.current = f"Current: {format_fixed(snapshot.current, 4)} mA"
        self.power = f"Power: {format_fixed(snapshot.power, 4)} mW"
        self.energy = f"Total Energy (Integrated): {format_fixed(snapshot.total_energy, 6)} J"
        self.potential_energy = (
            f"Potential Energy (½CV²): {format_fixed(snapshot.potential_energy, 6)} J"
        )
        self.status = f"Status: {format_text(snapshot.status)}"
        self.energy_kwh = f"Energy Generated: {format_fixed(value.energy_kwh, 9)} kWh"
        self.savings = (
            f"Estimated Savings: {format_fixed(value.estimated_cost_baht, 5)} {CURRENCY_UNIT}"
        )

    def show_ready(self) -> None:
        self.ultimate_active = True
        self.status = READY_MESSAGE

    def show_disconnected(self) -> None:
        """Every text region to its N/A form. The bar keeps its last width."""
        self.connected = False
        self.status = DISCONNECTED_MESSAGE
        self.timestamp = f"Time: {NOT_AVAILABLE}"
        self.voltage = f"Voltage: {NOT_AVAILABLE}"
        self.current = f"Current: {NOT_AVAILABLE}"
        self.power = f"Power: {NOT_AVAILABLE}"
        self.energy = f"Total Energy (Integrated): {NOT_AVAILABLE}"
        self.potential_energy = f"Potential Energy (½CV²): {NOT_AVAILABLE}"
        self.energy_kwh = f"Energy Generated: {NOT_AVAILABLE} kWh"
        self.savings = f"Estimated Savings: {NOT_AVAILABLE} {CURRENCY_UNIT}"
        self.ultimate_active = False

    def text_regions(self) -> dict[str, str]:
        return {name: getattr(self, name) for name in TEXT_REGIONS}

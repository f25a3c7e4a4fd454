"""Base definitions for measurement sources - data contracts and protocols"""
import math
from dataclasses import dataclass
from typing import Any, Protocol

# JSON field names as reported by the device firmware
FIELD_VOLTAGE = "voltage_V"
FIELD_CURRENT = "current_mA"
FIELD_POWER = "power_mW"
FIELD_TOTAL_ENERGY = "energy_Joules"
FIELD_POTENTIAL_ENERGY = "potentialE_Joules"
FIELD_STATUS = "status"
FIELD_TARGET_VOLTAGE = "target_V"
FIELD_TIMESTAMP = "timestamp"


def to_float(value: Any) -> float:
    """Coerce a JSON value to float, NaN when it is missing or not numeric."""
    if value is None or isinstance(value, bool):
        return math.nan
    try:
        return float(value)
    except OverflowError:
        # Integers past the float range read as +/- Infinity
        return math.inf if value > 0 else -math.inf
    except (TypeError, ValueError):
        return math.nan


def to_text(value: Any) -> str | None:
    if value is None:
        return None
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


@dataclass
class MeasurementSnapshot:
    """
    One reading of the capacitor bank, as reported by the device.

    Attributes:
        voltage: Capacitor voltage in Volts.
        current: Current in milliamps.
        power: Power in milliwatts.
        total_energy: Integrated energy in Joules, accumulated by the device.
        potential_energy: Stored energy (1/2 CV^2) in Joules.
        status: Device status string, shown verbatim.
        target_voltage: Voltage at which the bar is full.
        timestamp: Device timestamp, shown verbatim (not parsed).
    """
    voltage: float
    current: float
    power: float
    total_energy: float
    potential_energy: float
    status: str | None = None
    target_voltage: float = math.nan
    timestamp: str | None = None

    @classmethod
    def from_json(cls, data: Any) -> "MeasurementSnapshot":
        """
        Build a snapshot from the decoded JSON body.

        There is no schema validation: missing or malformed numeric fields
        become NaN, and a body that is not an object counts as empty.
        """
        if not isinstance(data, dict):
            data = {}

        return cls(
            voltage=to_float(data.get(FIELD_VOLTAGE)),
            current=to_float(data.get(FIELD_CURRENT)),
            power=to_float(data.get(FIELD_POWER)),
            total_energy=to_float(data.get(FIELD_TOTAL_ENERGY)),
            potential_energy=to_float(data.get(FIELD_POTENTIAL_ENERGY)),
            status=to_text(data.get(FIELD_STATUS)),
            target_voltage=to_float(data.get(FIELD_TARGET_VOLTAGE)),
            timestamp=to_text(data.get(FIELD_TIMESTAMP))
        )


class MeasurementSource(Protocol):
    """
    Protocol for ingress sources.

    Uses Protocol for duck typing - implementations don't need to inherit,
    just implement the methods with matching signatures.
    """

    async def connect(self) -> None:
        """Prepare the connection. Must not fail on an unreachable device."""
        ...

    async def fetch(self) -> Any:
        """
        Request one measurement and return the decoded JSON body.

        Should raise on network errors, non-success status or a body that
        is not JSON. No retries: the caller decides what a failure means.
        """
        ...

    async def close(self) -> None:
        ...

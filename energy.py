"""Energy value calculations - unit conversion and bar fill percentage"""
import math
from dataclasses import dataclass

# 1 Joule = 2.777 x 10^-7 Kilowatt-hour (kWh)
JOULE_TO_KWH = 2.777e-7
# Average tariff in baht per kWh
COST_PER_KWH_BAHT = 4.0


@dataclass
class EnergyValue:
    """
    Monetary view of an amount of energy.

    Attributes:
        energy_kwh: Energy in kilowatt-hours.
        estimated_cost_baht: What that energy is worth at COST_PER_KWH_BAHT.
    """
    energy_kwh: float
    estimated_cost_baht: float


def calculate_savings(total_joules: float) -> EnergyValue:
    """
    Convert joules to kWh and estimate their value in baht.

    No validation: NaN and infinities propagate.
    """
    energy_kwh = total_joules * JOULE_TO_KWH
    return EnergyValue(
        energy_kwh=energy_kwh,
        estimated_cost_baht=energy_kwh * COST_PER_KWH_BAHT
    )


def fill_percentage(voltage: float, target_voltage: float) -> float:
    """
    Percentage of the target voltage reached, clamped to [0, 100].

    A zero target gives the IEEE result (+/- infinity, or NaN for 0/0)
    instead of raising. NaN is returned unclamped.
    """
    try:
        ratio = voltage / target_voltage
    except ZeroDivisionError:
        if voltage == 0 or math.isnan(voltage):
            return math.nan
        ratio = math.copysign(math.inf, voltage) * math.copysign(1.0, target_voltage)

    percentage = ratio * 100
    if math.isnan(percentage):
        return percentage
    return min(100.0, max(0.0, percentage))

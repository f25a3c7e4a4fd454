import math

from display import (
    DISCONNECTED_MESSAGE,
    Display,
    format_fixed,
    format_number,
)
from energy import calculate_savings
from sources.base import MeasurementSnapshot


def make_snapshot(**overrides):
    fields = dict(
        voltage=3.14159265,
        current=12.5,
        power=41.25,
        total_energy=3600000.0,
        potential_energy=2.7225,
        status="CHARGING",
        target_voltage=5.0,
        timestamp="2024-01-01 12:00:00"
    )
    fields.update(overrides)
    return MeasurementSnapshot(**fields)


def test_show_snapshot_formats_every_region():
    display = Display()
    snapshot = make_snapshot()

    display.show_snapshot(snapshot, 50.0, calculate_savings(snapshot.total_energy))

    assert display.bar_width == "50%"
    assert display.voltage == "Voltage: 3.1416 V"
    assert display.current == "Current: 12.5000 mA"
    assert display.power == "Power: 41.2500 mW"
    assert display.energy == "Total Energy (Integrated): 3600000.000000 J"
    assert display.potential_energy == "Potential Energy (½CV²): 2.722500 J"
    assert display.status == "Status: CHARGING"
    assert display.timestamp == "Time: 2024-01-01 12:00:00"
    assert display.energy_kwh == "Energy Generated: 0.999720000 kWh"
    assert display.savings == "Estimated Savings: 3.99888 บาท"
    assert display.connected is True


def test_show_snapshot_renders_nan_fields():
    """Malformed fields surface as 'NaN' rather than failing the cycle"""
    display = Display()
    snapshot = make_snapshot(voltage=math.nan, total_energy=math.nan, timestamp=None)

    display.show_snapshot(snapshot, math.nan, calculate_savings(snapshot.total_energy))

    assert display.bar_width == "NaN%"
    assert display.voltage == "Voltage: NaN V"
    assert display.energy_kwh == "Energy Generated: NaN kWh"
    assert display.savings == "Estimated Savings: NaN บาท"
    assert display.timestamp == "Time: N/A"


def test_show_disconnected_sets_all_not_available():
    display = Display()
    snapshot = make_snapshot()
    display.show_snapshot(snapshot, 62.5, calculate_savings(snapshot.total_energy))
    display.show_ready()

    display.show_disconnected()

    assert display.text_regions() == {
        "timestamp": "Time: N/A",
        "voltage": "Voltage: N/A",
        "current": "Current: N/A",
        "power": "Power: N/A",
        "energy": "Total Energy (Integrated): N/A",
        "potential_energy": "Potential Energy (½CV²): N/A",
        "status": DISCONNECTED_MESSAGE,
        "energy_kwh": "Energy Generated: N/A kWh",
        "savings": "Estimated Savings: N/A บาท",
    }
    assert display.ultimate_active is False
    assert display.connected is False
    # The bar is left where it was
    assert display.bar_width == "62.5%"


def test_format_fixed():
    assert format_fixed(3.14159265, 4) == "3.1416"
    assert format_fixed(-0.0, 4) == "0.0000"
    assert format_fixed(math.nan, 6) == "NaN"
    assert format_fixed(math.inf, 4) == "Infinity"
    assert format_fixed(-math.inf, 4) == "-Infinity"


def test_format_number():
    assert format_number(100.0) == "100"
    assert format_number(0.0) == "0"
    assert format_number(-0.0) == "0"
    assert format_number(62.5) == "62.5"
    assert format_number(100 / 3) == "33.333333333333336"
    assert format_number(math.nan) == "NaN"


def test_format_fixed_rounds_halves_up():
    """Exact binary halves round away from zero, like the browser"""
    assert format_fixed(3.15625, 4) == "3.1563"
    assert format_fixed(0.03125, 4) == "0.0313"
    assert format_fixed(0.015625, 5) == "0.01563"
    assert format_fixed(-3.15625, 4) == "-3.1563"
    # 1.005 is stored just below the half, so it rounds down
    assert format_fixed(1.005, 2) == "1.00"


def test_format_fixed_large_values():
    assert format_fixed(3600000.0, 6) == "3600000.000000"
    assert format_fixed(123456789012345678.0, 9) == "123456789012345680.000000000"
    assert format_fixed(1e21, 4) == "1e+21"


def test_format_number_small_and_large():
    """Plain digits down to 1e-6, exponent form beyond"""
    assert format_number(1e-5) == "0.00001"
    assert format_number(0.000123) == "0.000123"
    assert format_number(1e-7) == "1e-7"
    assert format_number(1.5e-7) == "1.5e-7"
    assert format_number(1e20) == "100000000000000000000"
    assert format_number(1e21) == "1e+21"

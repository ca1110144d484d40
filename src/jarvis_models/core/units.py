"""Display units conventionally attached to each sample type.

The wire format carries no unit. Producers agree on SI units per
SampleType; this table is used for human-readable output only.
"""

import math
from typing import TYPE_CHECKING

from jarvis_models.core.enums import SampleType

if TYPE_CHECKING:
    from jarvis_models.core.models import Sample

UNITS: dict[SampleType, str] = {
    SampleType.ELECTRICITY_CONSUMPTION: "J",
    SampleType.ELECTRICITY_PRODUCTION: "J",
    SampleType.GAS_CONSUMPTION: "m³",
    SampleType.FLOW: "m³/s",
    SampleType.ENERGY: "J",
    SampleType.HEAT_DEMAND: "W",
    SampleType.HUMIDITY: "%",
    SampleType.PRESSURE: "Pa",
    SampleType.TEMPERATURE: "°C",
    SampleType.TEMPERATURE_SETPOINT: "°C",
    SampleType.TIME: "s",
    SampleType.BATTERY_SOC: "%",
    SampleType.ELECTRICITY_VOLTAGE: "V",
    SampleType.ELECTRICITY_CURRENT: "A",
    SampleType.WATER_CONSUMPTION: "m³",
    SampleType.DISTANCE_TRAVELED: "m",
    SampleType.AVAILABILITY: "%",
    SampleType.BATTERY_CHARGE_RATE: "W",
}


def unit_for(sample_type: SampleType) -> str | None:
    """Return the display unit for a sample type, or None if it has none."""
    return UNITS.get(sample_type)


def _format_number(value: float) -> str:
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "inf" if value > 0 else "-inf"
    if value == 0 and math.copysign(1.0, value) < 0:
        return "-0"
    if value.is_integer() and abs(value) < 1e16:
        return str(int(value))
    return repr(value)


def format_value(sample: "Sample") -> str:
    """Render a sample value with its unit.

    Args:
        sample: The sample to render.

    Returns:
        String such as "54000000 J", or the bare number when the sample
        type has no conventional unit.
    """
    number = _format_number(sample.value)
    unit = unit_for(sample.sample_type)
    return f"{number} {unit}" if unit else number

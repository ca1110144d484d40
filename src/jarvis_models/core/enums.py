"""Closed enumerations referenced by Sample.

Every enumeration reserves 0 as UNSPECIFIED. Values that are not known to
this version of the schema decode to UNSPECIFIED instead of failing, so
newer producers can add members without breaking older consumers.
"""

import logging
import re
from enum import IntEnum
from typing import Self

logger = logging.getLogger(__name__)

_CAMEL_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")


class ProtoEnum(IntEnum):
    """IntEnum with protobuf naming and open-enum decoding."""

    @classmethod
    def prefix(cls) -> str:
        """Return the protobuf name prefix, e.g. ENTITY_TYPE for EntityType."""
        return _CAMEL_BOUNDARY.sub("_", cls.__name__).upper()

    @property
    def proto_name(self) -> str:
        """Protobuf member name, e.g. ENTITY_TYPE_DEVICE."""
        return f"{self.prefix()}_{self.name}"

    @classmethod
    def from_wire(cls, value: int) -> Self:
        """Map a raw wire value to a member.

        Args:
            value: Integer read from the wire or from JSON.

        Returns:
            The matching member, or UNSPECIFIED for unknown values.
        """
        try:
            return cls(value)
        except ValueError:
            logger.debug("Unknown %s value %d mapped to UNSPECIFIED", cls.__name__, value)
            return cls(0)

    @classmethod
    def from_name(cls, name: str) -> Self:
        """Map a protobuf or short member name to a member.

        Accepts "ENTITY_TYPE_DEVICE", "DEVICE" and "" (UNSPECIFIED).
        Unknown names map to UNSPECIFIED.
        """
        if not name:
            return cls(0)
        prefix = f"{cls.prefix()}_"
        short = name[len(prefix) :] if name.startswith(prefix) else name
        try:
            return cls[short]
        except KeyError:
            logger.debug("Unknown %s name %r mapped to UNSPECIFIED", cls.__name__, name)
            return cls(0)


class EntityType(ProtoEnum):
    """Kind of entity a sample was taken from."""

    UNSPECIFIED = 0
    TARIFF = 1
    ZONE = 2
    DEVICE = 3
    PHASE = 4


class SampleType(ProtoEnum):
    """Category of a measured quantity."""

    UNSPECIFIED = 0
    ELECTRICITY_CONSUMPTION = 1
    ELECTRICITY_PRODUCTION = 2
    GAS_CONSUMPTION = 3
    FLOW = 4
    ENERGY = 5
    HEAT_DEMAND = 6
    HUMIDITY = 7
    PRESSURE = 8
    TEMPERATURE = 9
    TEMPERATURE_SETPOINT = 10
    TIME = 11
    BATTERY_SOC = 12
    ELECTRICITY_VOLTAGE = 13
    ELECTRICITY_CURRENT = 14
    WATER_CONSUMPTION = 15
    DISTANCE_TRAVELED = 16
    AVAILABILITY = 17
    BATTERY_CHARGE_RATE = 18


class MetricType(ProtoEnum):
    """How a sample value should be interpreted."""

    UNSPECIFIED = 0
    COUNTER = 1
    GAUGE = 2

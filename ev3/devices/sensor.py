"""LEGO sensors (``lego-sensor`` device class)."""
from __future__ import annotations

from .base import Device, DriverDevice, attribute_property


class Sensor(Device):
    """Generic sensor with mode selection and numbered value attributes."""

    CLASS_NAME = "lego-sensor"

    mode = attribute_property("mode", str)
    modes = attribute_property("modes", list, writable=False)
    num_values = attribute_property(
        "num_values", int, writable=False,
        doc="Number of valid value<N> attributes in the current mode.")
    decimals = attribute_property(
        "decimals", int, writable=False,
        doc="Decimal places of the values in the current mode.")
    units = attribute_property("units", str, writable=False)

    def value(self, index: int = 0) -> int:
        """Raw integer reading of ``value<index>``."""
        return self.get_attribute(f"value{index}").get(int)

    def float_value(self, index: int = 0) -> float:
        """Reading of ``value<index>`` scaled by ``decimals``."""
        return self.value(index) / (10 ** self.decimals)


class TouchSensor(Sensor, DriverDevice):
    """EV3 touch sensor."""

    DRIVER_NAME = "lego-ev3-touch"

    MODE_TOUCH = "TOUCH"

    @property
    def is_pressed(self) -> bool:
        return self.value(0) == 1

"""Device categories built on the driver layer."""

from .base import Device, DriverDevice, attribute_property
from .tacho_motor import TachoMotor, LargeMotor, MediumMotor
from .sensor import Sensor, TouchSensor

__all__ = [
    "Device",
    "DriverDevice",
    "attribute_property",
    "TachoMotor",
    "LargeMotor",
    "MediumMotor",
    "Sensor",
    "TouchSensor",
]

"""ev3dev sysfs binding - attribute access, device discovery and blocking waits."""

from .errors import Ev3Error, InternalError, MultipleMatchesError, NotFoundError
from .models import DeviceDescriptor, MotorPort, Port, SensorPort
from .driver import Attribute, Driver, wait
from .devices import (
    Device,
    TachoMotor,
    LargeMotor,
    MediumMotor,
    Sensor,
    TouchSensor,
)

__all__ = [
    "Ev3Error",
    "InternalError",
    "MultipleMatchesError",
    "NotFoundError",
    "DeviceDescriptor",
    "MotorPort",
    "Port",
    "SensorPort",
    "Attribute",
    "Driver",
    "wait",
    "Device",
    "TachoMotor",
    "LargeMotor",
    "MediumMotor",
    "Sensor",
    "TouchSensor",
]

"""Immutable value types shared by the driver and device layers.

Ports and device descriptors never change after construction; they only
identify things on the sysfs tree.
"""
from __future__ import annotations

import os
from dataclasses import dataclass
from enum import Enum
from typing import Union


class MotorPort(Enum):
    """Output connectors a motor can be plugged into."""
    OUT_A = "outA"
    OUT_B = "outB"
    OUT_C = "outC"
    OUT_D = "outD"

    @property
    def address(self) -> str:
        return self.value


class SensorPort(Enum):
    """Input connectors a sensor can be plugged into."""
    IN_1 = "in1"
    IN_2 = "in2"
    IN_3 = "in3"
    IN_4 = "in4"

    @property
    def address(self) -> str:
        return self.value


# Union type for all connector variants
Port = Union[MotorPort, SensorPort]


@dataclass(frozen=True)
class DeviceDescriptor:
    """Identifies one device instance directory.

    Attributes:
        class_name: Device class directory name (e.g. 'tacho-motor')
        name: Instance directory name (e.g. 'motor0')
    """
    class_name: str
    name: str

    def path(self, root: str) -> str:
        """Absolute path of the instance directory below ``root``."""
        return os.path.join(root, self.class_name, self.name)

    def attribute_path(self, root: str, attribute_name: str) -> str:
        """Absolute path of one attribute file of this instance."""
        return os.path.join(self.path(root), attribute_name)

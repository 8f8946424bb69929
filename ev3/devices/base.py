"""Abstract base classes for ev3dev devices.

Every device exposes its sysfs attributes through ``get_attribute``. The
accessors defined here and in the category classes are plain forwarding
calls onto that method; they add type coercion and nothing else.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, List, Optional, Type, TypeVar

from ..driver import (
    Attribute,
    Driver,
    SYSFS_CLASS_ROOT,
    find_name_by_driver,
    find_name_by_port_and_driver,
    find_names_by_driver,
)
from ..driver.codec import Kind
from ..models import Port

_DeviceT = TypeVar("_DeviceT", bound="DriverDevice")


def attribute_property(name: str, kind: Kind = str, writable: bool = True,
                       doc: Optional[str] = None) -> property:
    """Build a property reading (and optionally writing) one attribute.

    Args:
        name: Attribute file name
        kind: Codec or type used on read and write
        writable: Whether to define a setter
        doc: Property docstring
    """
    def getter(self: Device) -> Any:
        return self.get_attribute(name).get(kind)

    def setter(self: Device, value: Any) -> None:
        self.get_attribute(name).set(value, kind)

    return property(getter, setter if writable else None, doc=doc)


class Device(ABC):
    """Abstract ev3dev device.

    Subclasses only have to provide ``get_attribute``.
    """

    @abstractmethod
    def get_attribute(self, name: str) -> Attribute:
        """Return the Attribute called ``name`` of this device.

        Raises:
            InternalError: If the attribute does not exist
        """
        pass

    address = attribute_property(
        "address", str, writable=False,
        doc="Port the device is connected to (e.g. 'ev3-ports:outA').")

    commands = attribute_property(
        "commands", list, writable=False,
        doc="Commands supported by the device's driver.")

    driver_name = attribute_property(
        "driver_name", str, writable=False,
        doc="Name of the kernel driver bound to the device.")

    def set_command(self, command: str) -> None:
        """Send a command verbatim to the ``command`` attribute."""
        self.get_attribute("command").set_raw(command)


class DriverDevice(Device):
    """Device backed by a ``Driver`` and located through discovery.

    Concrete classes set ``CLASS_NAME`` and ``DRIVER_NAME``.
    """

    CLASS_NAME: str = ""
    DRIVER_NAME: str = ""

    def __init__(self, driver: Driver):
        self._driver = driver

    @property
    def driver(self) -> Driver:
        return self._driver

    def get_attribute(self, name: str) -> Attribute:
        return self._driver.get_attribute(name)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self._driver.name}>"

    @classmethod
    def get(cls: Type[_DeviceT], port: Port, *, root: str = SYSFS_CLASS_ROOT) -> _DeviceT:
        """Device of this type plugged into ``port``.

        Raises:
            NotFoundError: No such device on the port
        """
        name = find_name_by_port_and_driver(cls.CLASS_NAME, port, cls.DRIVER_NAME, root=root)
        return cls(Driver(cls.CLASS_NAME, name, root=root))

    @classmethod
    def find(cls: Type[_DeviceT], *, root: str = SYSFS_CLASS_ROOT) -> _DeviceT:
        """The single device of this type, on whatever port.

        Raises:
            NotFoundError: No device of this type
            MultipleMatchesError: More than one device of this type
        """
        name = find_name_by_driver(cls.CLASS_NAME, cls.DRIVER_NAME, root=root)
        return cls(Driver(cls.CLASS_NAME, name, root=root))

    @classmethod
    def list(cls: Type[_DeviceT], *, root: str = SYSFS_CLASS_ROOT) -> List[_DeviceT]:
        """Every device of this type, in directory order."""
        return [
            cls(Driver(cls.CLASS_NAME, name, root=root))
            for name in find_names_by_driver(cls.CLASS_NAME, cls.DRIVER_NAME, root=root)
        ]

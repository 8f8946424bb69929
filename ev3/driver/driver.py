"""Per-device attribute cache.

A ``Driver`` is bound to one device instance directory and lazily opens the
attribute files it is asked for. Opened attributes stay cached for the
lifetime of the Driver, so repeated accesses reuse one file descriptor.

A Driver is not thread-safe. Callers that share one between threads must
serialize access themselves.
"""
from __future__ import annotations

import logging
from typing import Dict

from ..errors import InternalError
from ..models import DeviceDescriptor
from .attribute import Attribute, SYSFS_CLASS_ROOT

logger = logging.getLogger(__name__)


class Driver:
    """Attribute access for one ``{root}/{class_name}/{name}`` directory."""

    def __init__(self, class_name: str, name: str, root: str = SYSFS_CLASS_ROOT):
        """Initialize driver.

        Args:
            class_name: Device class (e.g. 'tacho-motor')
            name: Device instance (e.g. 'motor0')
            root: Directory holding the device classes
        """
        self._descriptor = DeviceDescriptor(class_name, name)
        self._root = root
        self._attributes: Dict[str, Attribute] = {}

    @property
    def descriptor(self) -> DeviceDescriptor:
        return self._descriptor

    @property
    def class_name(self) -> str:
        return self._descriptor.class_name

    @property
    def name(self) -> str:
        return self._descriptor.name

    @property
    def root(self) -> str:
        return self._root

    @property
    def path(self) -> str:
        return self._descriptor.path(self._root)

    def get_attribute(self, attribute_name: str) -> Attribute:
        """Return the cached Attribute for ``attribute_name``, opening it on first use.

        A failed open is not cached; the next call tries again. A cached
        attribute whose file has been closed is dropped and opened again.

        Raises:
            InternalError: If the attribute file cannot be opened
        """
        attribute = self._attributes.get(attribute_name)
        if attribute is not None:
            if not attribute.closed:
                return attribute
            logger.debug(f"Reopening closed attribute {attribute_name!r} of {self.path}")
            del self._attributes[attribute_name]

        try:
            attribute = Attribute.open(
                self.class_name, self.name, attribute_name, root=self._root
            )
        except InternalError as e:
            logger.warning(f"Cannot open attribute {attribute_name!r} of {self.path}: {e}")
            raise

        self._attributes[attribute_name] = attribute
        return attribute

    def clone(self) -> Driver:
        """Return a Driver for the same device with a fresh, empty cache."""
        return type(self)(self.class_name, self.name, root=self._root)

    __copy__ = clone

    def __eq__(self, other) -> bool:
        if not isinstance(other, Driver):
            return NotImplemented
        return self._descriptor == other._descriptor and self._root == other._root

    def __hash__(self) -> int:
        return hash((self._descriptor, self._root))

    def __repr__(self) -> str:
        return f"<Driver {self.path}>"

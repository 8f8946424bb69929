from __future__ import annotations

import logging
import os
from typing import List

from ...errors import InternalError, MultipleMatchesError, NotFoundError
from ...models import Port
from ..attribute import Attribute, SYSFS_CLASS_ROOT

logger = logging.getLogger(__name__)


def _list_class(class_name: str, root: str) -> List[str]:
    """Instance names below ``{root}/{class_name}`` in directory order."""
    try:
        return os.listdir(os.path.join(root, class_name))
    except OSError as e:
        raise InternalError(str(e)) from e


def _read(class_name: str, name: str, attribute_name: str, root: str) -> str:
    attribute = Attribute.open(class_name, name, attribute_name, root=root)
    try:
        return attribute.get(str)
    finally:
        attribute.close()


def is_matching_port(address: str, port: Port) -> bool:
    """
    Decide whether an ``address`` attribute value belongs to ``port``.

    Addresses are sometimes prefixed (e.g. 'ev3-ports:outA'), so this is a
    substring test, not equality.
    """
    return port.address in address


def find_name_by_port_and_driver(
    class_name: str,
    port: Port,
    driver_name: str,
    *,
    root: str = SYSFS_CLASS_ROOT,
) -> str:
    """
    Find the instance plugged into ``port`` and bound to ``driver_name``.

    The first instance matching both wins, in directory order. No
    ambiguity check is made since a port holds one device.

    Raises:
        NotFoundError: No instance matches
        InternalError: The class directory or an attribute cannot be read
    """
    for name in _list_class(class_name, root):
        address = _read(class_name, name, "address", root)
        if not is_matching_port(address, port):
            continue
        if _read(class_name, name, "driver_name", root) == driver_name:
            return name

    raise NotFoundError(
        f"No {driver_name} device of class {class_name} on port {port.address}"
    )


def find_names_by_port(
    class_name: str,
    port: Port,
    *,
    root: str = SYSFS_CLASS_ROOT,
) -> List[str]:
    """All instances whose address matches ``port``, in directory order."""
    return [
        name
        for name in _list_class(class_name, root)
        if is_matching_port(_read(class_name, name, "address", root), port)
    ]


def find_name_by_port(
    class_name: str,
    port: Port,
    *,
    root: str = SYSFS_CLASS_ROOT,
) -> str:
    """
    Find exactly one instance plugged into ``port``.

    Behaviour:
        - 0 matches  -> NotFoundError
        - 1 match    -> return it
        - >1 matches -> log error and raise MultipleMatchesError
    """
    matches = find_names_by_port(class_name, port, root=root)

    if not matches:
        raise NotFoundError(f"No device of class {class_name} on port {port.address}")

    if len(matches) > 1:
        logger.error(
            "Multiple %s devices match port %s; refusing to choose automatically. "
            "Devices: %s",
            class_name,
            port.address,
            matches,
        )
        raise MultipleMatchesError(
            f"Multiple devices of class {class_name} on port {port.address} "
            f"({len(matches)} devices)",
            names=matches,
        )

    return matches[0]


def find_names_by_driver(
    class_name: str,
    driver_name: str,
    *,
    root: str = SYSFS_CLASS_ROOT,
) -> List[str]:
    """
    Find all instances bound to ``driver_name``.

    Returns:
        Instance names in directory order (possibly empty).
    """
    return [
        name
        for name in _list_class(class_name, root)
        if _read(class_name, name, "driver_name", root) == driver_name
    ]


def find_name_by_driver(
    class_name: str,
    driver_name: str,
    *,
    root: str = SYSFS_CLASS_ROOT,
) -> str:
    """
    Find exactly one instance bound to ``driver_name``.

    Behaviour:
        - 0 matches  -> NotFoundError
        - 1 match    -> return it
        - >1 matches -> log error and raise MultipleMatchesError

    Callers hitting MultipleMatchesError can narrow the query with a port
    (see find_name_by_port_and_driver).
    """
    matches = find_names_by_driver(class_name, driver_name, root=root)

    if not matches:
        raise NotFoundError(f"No {driver_name} device of class {class_name} found")

    if len(matches) > 1:
        logger.error(
            "Multiple %s devices found; refusing to choose automatically. "
            "Devices: %s",
            driver_name,
            matches,
        )
        raise MultipleMatchesError(
            f"Multiple {driver_name} devices found ({len(matches)} devices)",
            names=matches,
        )

    return matches[0]

"""Driver layer for ev3dev sysfs devices.

This module provides:
- Typed access to single attribute files (Attribute)
- Value codecs for attribute text (Codec and friends)
- Per-device attribute cache (Driver)
- Device discovery by port and driver name (find_name_by_*)
- Blocking wait on attribute changes (wait)
"""

from .attribute import Attribute, SYSFS_CLASS_ROOT
from .codec import Codec, FLOAT, INT, STRING, TOKENS, codec_for
from .driver import Driver
from .events import wait, EVENT_BATCH_SIZE
from .finder import (
    MultipleMatchesError,
    NotFoundError,
    find_name_by_driver,
    find_name_by_port,
    find_name_by_port_and_driver,
    find_names_by_driver,
    find_names_by_port,
)

__all__ = [
    # Attribute
    'Attribute',
    'SYSFS_CLASS_ROOT',

    # Codecs
    'Codec',
    'FLOAT',
    'INT',
    'STRING',
    'TOKENS',
    'codec_for',

    # Driver
    'Driver',

    # Wait
    'wait',
    'EVENT_BATCH_SIZE',

    # Finder
    'MultipleMatchesError',
    'NotFoundError',
    'find_name_by_driver',
    'find_name_by_port',
    'find_name_by_port_and_driver',
    'find_names_by_driver',
    'find_names_by_port',
]

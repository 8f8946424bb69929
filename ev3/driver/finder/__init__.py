from .core import (
    find_name_by_driver,
    find_name_by_port,
    find_name_by_port_and_driver,
    find_names_by_driver,
    find_names_by_port,
    is_matching_port,
)
from ...errors import MultipleMatchesError, NotFoundError

__all__ = [
    "find_name_by_driver",
    "find_name_by_port",
    "find_name_by_port_and_driver",
    "find_names_by_driver",
    "find_names_by_port",
    "is_matching_port",
    "MultipleMatchesError",
    "NotFoundError",
]

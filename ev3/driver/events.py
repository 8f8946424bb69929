"""Blocking wait on sysfs attribute changes.

The kernel signals a change of a sysfs attribute value as urgent data
(``EPOLLPRI``) on an open descriptor of that attribute. ``wait`` sleeps on
that notification and re-evaluates a predicate after every wakeup, so
spurious wakeups are harmless.
"""
from __future__ import annotations

import logging
import select
import time
from typing import Callable, Optional

logger = logging.getLogger(__name__)

EVENT_BATCH_SIZE = 10


def wait(fd: int, predicate: Callable[[], bool], timeout: Optional[float] = None) -> bool:
    """Block until ``predicate()`` is true or ``timeout`` elapses.

    Args:
        fd: Descriptor of an open sysfs attribute
        predicate: Condition over live device state
        timeout: Maximum wait in seconds, or None to wait forever. Zero or
            a negative value only checks the predicate once.

    Returns:
        True if the predicate became true, False on timeout
    """
    if predicate():
        return True
    if timeout is not None and timeout <= 0:
        return False

    start = time.monotonic()

    with select.epoll() as poller:
        poller.register(fd, select.EPOLLPRI | select.EPOLLET)

        remaining = timeout
        while True:
            # Result only matters as a wakeup; the predicate decides
            events = poller.poll(
                remaining if remaining is not None else -1,
                EVENT_BATCH_SIZE,
            )
            logger.debug(f"Wakeup on fd {fd} with {len(events)} event(s)")

            if timeout is not None:
                elapsed = time.monotonic() - start
                if elapsed >= timeout:
                    return False
                remaining = timeout - elapsed

            if predicate():
                return True

r"""Blocking wait primitives used by the retry loops.

Only two operations in the package block the calling thread: a plain
sleep before a retry, and a wait that can be cut short when an external
condition becomes true.

Both accept any non-negative ``timedelta``, up to ``timedelta.max``.
Long delays are split into bounded slices because ``time.sleep`` and
lock timeouts reject values that large.
"""

from __future__ import annotations

__all__ = ["sleep", "wait_for"]

import threading
import time
from datetime import timedelta
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable

# Longest single blocking call.
_MAX_WAIT: timedelta = timedelta(seconds=min(threading.TIMEOUT_MAX, 86400.0))


def sleep(delay: timedelta) -> None:
    """Block the calling thread for ``delay``.

    Args:
        delay: How long to sleep.

    Example:
        ```pycon
        >>> from datetime import timedelta
        >>> from aretry.utils.wait import sleep
        >>> sleep(timedelta(milliseconds=1))

        ```
    """
    while delay > _MAX_WAIT:
        time.sleep(_MAX_WAIT.total_seconds())
        delay -= _MAX_WAIT
    time.sleep(delay.total_seconds())


def wait_for(
    condition: threading.Condition,
    predicate: Callable[[], bool],
    delay: timedelta,
) -> bool:
    """Wait on ``condition`` until ``predicate`` is true or ``delay``
    elapses.

    The caller must already hold the condition's lock. The predicate is
    re-evaluated on every wakeup, so spurious wakeups are ignored and a
    notification sent between the caller's last check and this call is
    not lost.

    Args:
        condition: The condition variable to wait on.
        predicate: The cancellation predicate.
        delay: The maximum time to wait.

    Returns:
        ``True`` if the wait was cut short by the predicate, ``False``
        if it timed out.
    """
    max_wait = _MAX_WAIT.total_seconds()
    remaining = delay.total_seconds()
    deadline = time.monotonic() + remaining
    while True:
        if condition.wait_for(predicate, timeout=min(remaining, max_wait)):
            return True
        remaining = deadline - time.monotonic()
        if remaining <= 0:
            return False

r"""Per-thread random source used by the jitter policies.

Jitter policies accept an explicit ``random.Random`` instance. When none
is given they draw from a generator owned by the calling thread, so two
threads never advance the same generator.
"""

from __future__ import annotations

__all__ = ["thread_rng", "uniform_delay"]

import random
import threading
from typing import TYPE_CHECKING

from aretry.utils.duration import from_microseconds, to_microseconds

if TYPE_CHECKING:
    from datetime import timedelta

_local = threading.local()


def thread_rng() -> random.Random:
    """Return the random generator owned by the calling thread.

    The generator is created lazily the first time a thread asks for it.

    Returns:
        The calling thread's generator.

    Example:
        ```pycon
        >>> from aretry.utils.rng import thread_rng
        >>> thread_rng() is thread_rng()
        True

        ```
    """
    rng = getattr(_local, "rng", None)
    if rng is None:
        rng = random.Random()  # noqa: S311
        _local.rng = rng
    return rng


def uniform_delay(upper: timedelta, rng: random.Random | None = None) -> timedelta:
    """Draw a delay uniformly from ``[0, upper]`` in whole microseconds.

    Args:
        upper: The inclusive upper bound.
        rng: The generator to draw from. Defaults to the calling
            thread's generator.

    Returns:
        The random delay.
    """
    rng = rng if rng is not None else thread_rng()
    return from_microseconds(rng.randint(0, to_microseconds(upper)))

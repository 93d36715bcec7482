r"""Randomized fixed-bound delay policies.

The jitter policies draw their delays from a ``random.Random`` instance.
Pass ``rng`` to make the draws reproducible; otherwise each calling
thread uses its own generator.
"""

from __future__ import annotations

__all__ = ["equal_jitter", "full_jitter"]

from typing import TYPE_CHECKING

from aretry.policy import RetryPolicy
from aretry.utils.duration import format_microseconds, saturating_add, to_delay
from aretry.utils.rng import uniform_delay

if TYPE_CHECKING:
    import random
    from datetime import timedelta

    from aretry.status import RetryStatus


def full_jitter(max_delay: timedelta | float, rng: random.Random | None = None) -> RetryPolicy:
    """Create a policy waiting a uniformly random delay in
    ``[0, max_delay]``, with unlimited retries.

    Args:
        max_delay: The largest delay.
        rng: Optional random generator.

    Returns:
        The policy.

    Raises:
        ValueError: If ``max_delay`` is negative.
    """
    max_delay = to_delay(max_delay, "max_delay")

    def _full_jitter(status: RetryStatus) -> timedelta | None:  # noqa: ARG001
        return uniform_delay(max_delay, rng)

    return RetryPolicy(_full_jitter, name=f"full_jitter({format_microseconds(max_delay)})")


def equal_jitter(max_delay: timedelta | float, rng: random.Random | None = None) -> RetryPolicy:
    """Create a policy waiting half of ``max_delay`` plus a uniformly
    random delay in ``[0, max_delay / 2]``, with unlimited retries.

    Half of ``max_delay`` is rounded down to the microsecond.

    Args:
        max_delay: The largest delay.
        rng: Optional random generator.

    Returns:
        The policy.

    Raises:
        ValueError: If ``max_delay`` is negative.
    """
    max_delay = to_delay(max_delay, "max_delay")
    half = max_delay // 2

    def _equal_jitter(status: RetryStatus) -> timedelta | None:  # noqa: ARG001
        return saturating_add(half, uniform_delay(half, rng))

    return RetryPolicy(_equal_jitter, name=f"equal_jitter({format_microseconds(max_delay)})")

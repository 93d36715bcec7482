r"""Fixed-delay policies."""

from __future__ import annotations

__all__ = ["constant_delay", "never_retry"]

from typing import TYPE_CHECKING

from aretry.policy import RetryPolicy
from aretry.utils.duration import format_microseconds, to_delay

if TYPE_CHECKING:
    from datetime import timedelta

    from aretry.status import RetryStatus


def never_retry() -> RetryPolicy:
    """Create a policy that always stops.

    Returns:
        The policy.

    Example:
        ```pycon
        >>> from aretry import never_retry
        >>> list(never_retry().simulate(3))
        []

        ```
    """

    def _never_retry(status: RetryStatus) -> timedelta | None:  # noqa: ARG001
        return None

    return RetryPolicy(_never_retry, name="never_retry()")


def constant_delay(delay: timedelta | float) -> RetryPolicy:
    """Create a policy that always waits ``delay`` and never stops.

    Args:
        delay: The fixed delay, as a ``timedelta`` or in seconds.

    Returns:
        The policy.

    Raises:
        ValueError: If ``delay`` is negative.

    Example:
        ```pycon
        >>> from aretry import RetryStatus, constant_delay
        >>> constant_delay(2.5)(RetryStatus(iteration_number=10))
        datetime.timedelta(seconds=2, microseconds=500000)

        ```
    """
    delay = to_delay(delay, "delay")

    def _constant_delay(status: RetryStatus) -> timedelta | None:  # noqa: ARG001
        return delay

    return RetryPolicy(_constant_delay, name=f"constant_delay({format_microseconds(delay)})")

r"""Policies and combinators that bound how long a loop keeps retrying.

Every wrapping combinator evaluates the wrapped policy exactly once per
decision and derives both the delay and the stop decision from that
single evaluation, so random policies are never drawn twice.
"""

from __future__ import annotations

__all__ = [
    "cap_delay",
    "limit_cumulative_delay",
    "limit_retries",
    "limit_retries_by_delay",
    "limit_time_point",
]

from datetime import datetime
from functools import partial
from typing import TYPE_CHECKING

from aretry.policy import RetryPolicy
from aretry.utils.duration import ZERO_DELAY, format_microseconds, to_delay
from aretry.utils.validation import validate_count, validate_policy

if TYPE_CHECKING:
    from collections.abc import Callable
    from datetime import timedelta

    from aretry.status import RetryStatus


def limit_retries(retry_limit: int) -> RetryPolicy:
    """Create a policy that retries immediately, at most
    ``retry_limit`` times.

    Args:
        retry_limit: The maximum number of retries.

    Returns:
        The policy. Its delay is always zero.

    Raises:
        ValueError: If ``retry_limit`` is negative.

    Example:
        ```pycon
        >>> from aretry import limit_retries
        >>> len(list(limit_retries(3).simulate(10)))
        3

        ```
    """
    validate_count(retry_limit, "retry_limit")

    def _limit_retries(status: RetryStatus) -> timedelta | None:
        if status.iteration_number >= retry_limit:
            return None
        return ZERO_DELAY

    return RetryPolicy(_limit_retries, name=f"limit_retries({retry_limit})")


def limit_retries_by_delay(delay_limit: timedelta | float, policy: RetryPolicy) -> RetryPolicy:
    """Stop once the delay chosen by ``policy`` reaches ``delay_limit``.

    Args:
        delay_limit: The first delay that is no longer allowed.
        policy: The wrapped policy.

    Returns:
        The limited policy.

    Raises:
        TypeError: If ``policy`` is not a ``RetryPolicy``.
        ValueError: If ``delay_limit`` is negative.
    """
    delay_limit = to_delay(delay_limit, "delay_limit")
    validate_policy(policy)

    def _limit_retries_by_delay(status: RetryStatus) -> timedelta | None:
        delay = policy(status)
        if delay is not None and delay >= delay_limit:
            return None
        return delay

    return RetryPolicy(
        _limit_retries_by_delay,
        name=f"limit_retries_by_delay({format_microseconds(delay_limit)}, {policy.name})",
    )


def limit_cumulative_delay(
    cumulative_delay_limit: timedelta | float, policy: RetryPolicy
) -> RetryPolicy:
    """Stop once the total time spent waiting would reach
    ``cumulative_delay_limit``.

    Args:
        cumulative_delay_limit: The total delay that is no longer
            allowed.
        policy: The wrapped policy.

    Returns:
        The limited policy.

    Raises:
        TypeError: If ``policy`` is not a ``RetryPolicy``.
        ValueError: If ``cumulative_delay_limit`` is negative.

    Example:
        ```pycon
        >>> from aretry import constant_delay, limit_cumulative_delay
        >>> policy = limit_cumulative_delay(2.5, constant_delay(1.0))
        >>> [status.cumulative_delay.total_seconds() for status in policy.simulate(10)]
        [1.0, 2.0]

        ```
    """
    cumulative_delay_limit = to_delay(cumulative_delay_limit, "cumulative_delay_limit")
    validate_policy(policy)

    def _limit_cumulative_delay(status: RetryStatus) -> timedelta | None:
        delay = policy(status)
        if delay is not None and cumulative_delay_limit - status.cumulative_delay <= delay:
            return None
        return delay

    return RetryPolicy(
        _limit_cumulative_delay,
        name=(
            f"limit_cumulative_delay({format_microseconds(cumulative_delay_limit)}, "
            f"{policy.name})"
        ),
    )


def limit_time_point(
    time_point: datetime,
    policy: RetryPolicy,
    clock: Callable[[], datetime] | None = None,
) -> RetryPolicy:
    """Stop retrying if the next attempt would happen after
    ``time_point``.

    For example, ``limit_time_point(datetime(2030, 1, 1, 7, 2), policy)``
    never schedules a retry after 07:02 on that day.

    Args:
        time_point: The wall-clock deadline. Naive and aware datetimes
            are both accepted; the clock uses the same timezone.
        policy: The wrapped policy.
        clock: Optional function returning the current time. Defaults
            to ``datetime.now`` in the timezone of ``time_point``.

    Returns:
        The limited policy.

    Raises:
        TypeError: If ``time_point`` is not a ``datetime`` or ``policy``
            is not a ``RetryPolicy``.
    """
    if not isinstance(time_point, datetime):
        msg = f"time_point must be a datetime, got {type(time_point).__name__}"
        raise TypeError(msg)
    validate_policy(policy)
    now = clock if clock is not None else partial(datetime.now, tz=time_point.tzinfo)

    def _limit_time_point(status: RetryStatus) -> timedelta | None:
        delay = policy(status)
        if delay is not None and delay > time_point - now():
            return None
        return delay

    return RetryPolicy(
        _limit_time_point,
        name=f"limit_time_point({time_point.isoformat()}, {policy.name})",
    )


def cap_delay(max_delay: timedelta | float, policy: RetryPolicy) -> RetryPolicy:
    """Set an upper bound on the delay chosen by ``policy``.

    The stop decisions of ``policy`` are kept unchanged.

    Args:
        max_delay: The largest delay allowed.
        policy: The wrapped policy.

    Returns:
        The capped policy.

    Raises:
        TypeError: If ``policy`` is not a ``RetryPolicy``.
        ValueError: If ``max_delay`` is negative.

    Example:
        ```pycon
        >>> from aretry import RetryStatus, cap_delay, exponential_backoff
        >>> policy = cap_delay(1.0, exponential_backoff(0.1))
        >>> policy(RetryStatus(iteration_number=20))
        datetime.timedelta(seconds=1)

        ```
    """
    max_delay = to_delay(max_delay, "max_delay")
    validate_policy(policy)

    def _cap_delay(status: RetryStatus) -> timedelta | None:
        delay = policy(status)
        if delay is None:
            return None
        return min(max_delay, delay)

    return RetryPolicy(
        _cap_delay, name=f"cap_delay({format_microseconds(max_delay)}, {policy.name})"
    )

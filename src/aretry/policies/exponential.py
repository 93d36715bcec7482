r"""Exponential backoff policies.

The jittered variants follow the "Exponential Backoff And Jitter" article
of the AWS Architecture Blog:
http://www.awsarchitectureblog.com/2015/03/backoff.html

All of them are uncapped and retry forever. Typically you combine them
with a finite limit, for example
``cap_delay(timedelta(seconds=1), full_jitter_backoff(timedelta(microseconds=10)))``.
"""

from __future__ import annotations

__all__ = [
    "decorrelated_jitter_backoff",
    "equal_jitter_backoff",
    "exponential_backoff",
    "full_jitter_backoff",
]

from typing import TYPE_CHECKING

from aretry.policy import RetryPolicy
from aretry.utils.duration import (
    MAX_DELAY,
    ZERO_DELAY,
    format_microseconds,
    saturating_add,
    saturating_mul,
    to_delay,
)
from aretry.utils.rng import uniform_delay

if TYPE_CHECKING:
    import random
    from datetime import timedelta

    from aretry.status import RetryStatus

# 2**64 microseconds is already far beyond MAX_DELAY
_MAX_EXPONENT = 64


def _grow(base: timedelta, iteration_number: int) -> timedelta:
    if base == ZERO_DELAY:
        return ZERO_DELAY
    if iteration_number >= _MAX_EXPONENT:
        return MAX_DELAY
    return saturating_mul(base, 2**iteration_number)


def exponential_backoff(base: timedelta | float) -> RetryPolicy:
    """Create a policy whose delay doubles after every retry.

    The delay of retry ``i`` (0-indexed) is ``base * 2**i``.

    Args:
        base: The first delay.

    Returns:
        The policy.

    Raises:
        ValueError: If ``base`` is negative.

    Example:
        ```pycon
        >>> from aretry import exponential_backoff
        >>> policy = exponential_backoff(0.3)
        >>> [status.previous_delay.total_seconds() for status in policy.simulate(3)]
        [0.3, 0.6, 1.2]

        ```
    """
    base = to_delay(base, "base")

    def _exponential_backoff(status: RetryStatus) -> timedelta | None:
        return _grow(base, status.iteration_number)

    return RetryPolicy(
        _exponential_backoff, name=f"exponential_backoff({format_microseconds(base)})"
    )


def full_jitter_backoff(base: timedelta | float, rng: random.Random | None = None) -> RetryPolicy:
    """Create a "full jitter" exponential backoff policy.

    The delay of retry ``i`` is drawn uniformly from
    ``[0, base * 2**i]``.

    Args:
        base: The base delay.
        rng: Optional random generator.

    Returns:
        The policy.

    Raises:
        ValueError: If ``base`` is negative.
    """
    base = to_delay(base, "base")

    def _full_jitter_backoff(status: RetryStatus) -> timedelta | None:
        return uniform_delay(_grow(base, status.iteration_number), rng)

    return RetryPolicy(
        _full_jitter_backoff, name=f"full_jitter_backoff({format_microseconds(base)})"
    )


def equal_jitter_backoff(base: timedelta | float, rng: random.Random | None = None) -> RetryPolicy:
    """Create an "equal jitter" exponential backoff policy.

    With ``half = base * 2**i / 2``, the delay of retry ``i`` is ``half``
    plus a delay drawn uniformly from ``[0, half]``.

    Args:
        base: The base delay.
        rng: Optional random generator.

    Returns:
        The policy.

    Raises:
        ValueError: If ``base`` is negative.
    """
    base = to_delay(base, "base")

    def _equal_jitter_backoff(status: RetryStatus) -> timedelta | None:
        half = _grow(base, status.iteration_number) // 2
        return saturating_add(half, uniform_delay(half, rng))

    return RetryPolicy(
        _equal_jitter_backoff, name=f"equal_jitter_backoff({format_microseconds(base)})"
    )


def decorrelated_jitter_backoff(
    base: timedelta | float, rng: random.Random | None = None
) -> RetryPolicy:
    """Create a "decorrelated jitter" backoff policy.

    The delay is drawn uniformly from ``[0, 3 * previous_delay]``.

    Note:
        The policy stops when the status has no ``previous_delay``, so
        used on its own from a fresh status it never retries. Compose it
        after a policy that supplies the first delay, for example as the
        "after" policy of a ``PreemptibleRetry`` or by driving it with a
        status produced by another policy. ``base`` is validated and only
        used to name the policy.

    Args:
        base: The nominal base delay.
        rng: Optional random generator.

    Returns:
        The policy.

    Raises:
        ValueError: If ``base`` is negative.

    Example:
        ```pycon
        >>> from aretry import RetryStatus, decorrelated_jitter_backoff
        >>> decorrelated_jitter_backoff(0.01)(RetryStatus()) is None
        True

        ```
    """
    base = to_delay(base, "base")

    def _decorrelated_jitter_backoff(status: RetryStatus) -> timedelta | None:
        if status.previous_delay is None:
            return None
        return uniform_delay(saturating_mul(status.previous_delay, 3), rng)

    return RetryPolicy(
        _decorrelated_jitter_backoff,
        name=f"decorrelated_jitter_backoff({format_microseconds(base)})",
    )

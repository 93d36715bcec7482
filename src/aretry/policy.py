r"""Retry policy abstraction and its algebra.

A retry policy is a decision function that maps the progress of a retry
loop (a ``RetryStatus``) to either the delay to wait before the next
attempt or ``None``, meaning the loop must stop retrying. Policies are
first-class values: they can be combined, wrapped by the combinators of
``aretry.policies``, replayed with ``simulate`` and driven by ``retry``.

Example:
    ```pycon
    >>> from datetime import timedelta
    >>> from aretry import cap_delay, exponential_backoff, limit_retries
    >>> policy = cap_delay(
    ...     timedelta(milliseconds=400), exponential_backoff(timedelta(milliseconds=100))
    ... ) + limit_retries(4)
    >>> for status in policy.simulate(10):
    ...     print(status)
    ...
    { iteration_number: 1, cumulative_delay: 100000us, previous_delay: 100000us }
    { iteration_number: 2, cumulative_delay: 300000us, previous_delay: 200000us }
    { iteration_number: 3, cumulative_delay: 700000us, previous_delay: 400000us }
    { iteration_number: 4, cumulative_delay: 1100000us, previous_delay: 400000us }

    ```
"""

from __future__ import annotations

__all__ = ["RetryPolicy", "combine"]

import logging
from dataclasses import replace
from typing import TYPE_CHECKING, TypeVar

from aretry.status import RetryStatus
from aretry.utils.duration import format_microseconds, saturating_add
from aretry.utils.validation import validate_count, validate_policy
from aretry.utils.wait import sleep

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator
    from datetime import timedelta

logger: logging.Logger = logging.getLogger(__name__)

T = TypeVar("T")
S = TypeVar("S", bound=RetryStatus)


class RetryPolicy:
    """A named, composable retry decision function.

    The wrapped function receives the current ``RetryStatus`` and
    returns the delay to wait before the next attempt, or ``None`` to
    stop retrying. It must not keep per-loop state: the same policy can
    be shared by several retry loops running on different threads.

    Args:
        policy: The decision function.
        name: Optional name used by ``repr``. Defaults to the function
            name.

    Raises:
        TypeError: If ``policy`` is not callable.
    """

    def __init__(
        self,
        policy: Callable[[RetryStatus], timedelta | None],
        name: str | None = None,
    ) -> None:
        if not callable(policy):
            msg = f"policy must be callable, got {type(policy).__name__}"
            raise TypeError(msg)
        self._policy = policy
        self._name = name if name is not None else getattr(policy, "__name__", "policy")

    @property
    def name(self) -> str:
        """The name of the policy."""
        return self._name

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}({self._name})"

    def __call__(self, status: RetryStatus) -> timedelta | None:
        """Compute the next delay for ``status``.

        Args:
            status: The current retry status.

        Returns:
            The delay before the next attempt, or ``None`` to stop.
        """
        return self._policy(status)

    def __add__(self, other: RetryPolicy) -> RetryPolicy:
        if not isinstance(other, RetryPolicy):
            return NotImplemented
        return combine(self, other)

    def apply(self, status: S) -> S | None:
        """Advance ``status`` by one retry without waiting.

        Args:
            status: The current retry status.

        Returns:
            The next status, or ``None`` if the policy stops. Subclasses
            of ``RetryStatus`` keep their extra fields.
        """
        delay = self._policy(status)
        if delay is None:
            return None
        return replace(
            status,
            iteration_number=status.iteration_number + 1,
            cumulative_delay=saturating_add(status.cumulative_delay, delay),
            previous_delay=delay,
        )

    def apply_and_delay(self, status: S) -> S | None:
        """Advance ``status`` by one retry and sleep for the new delay.

        Args:
            status: The current retry status.

        Returns:
            The next status, or ``None`` if the policy stops. In that
            case the function returns immediately.
        """
        next_status = self.apply(status)
        if next_status is None:
            return None
        logger.debug(
            f"Waiting {format_microseconds(next_status.previous_delay)} before retry "
            f"{next_status.iteration_number}"
        )
        sleep(next_status.previous_delay)
        return next_status

    def retry(
        self,
        should_retry: Callable[[RetryStatus, T], bool],
        action: Callable[[RetryStatus], T],
    ) -> T:
        """Run ``action`` until ``should_retry`` or the policy says stop.

        The action is called with the current status. If
        ``should_retry(status, result)`` is false the result is returned
        immediately. Otherwise the policy is applied (with a real wait);
        if it stops, the last result is returned as is.

        Args:
            should_retry: The predicate deciding whether a result calls
                for another attempt.
            action: The action to run.

        Returns:
            The result of the last call to ``action``.
        """
        status = RetryStatus()
        while True:
            result = action(status)
            if not should_retry(status, result):
                return result
            next_status = self.apply_and_delay(status)
            if next_status is None:
                logger.debug(f"{self!r} stopped retrying after {status.iteration_number} retries")
                return result
            status = next_status

    def simulate(self, n: int) -> Iterator[RetryStatus]:
        """Replay up to ``n`` retries without waiting or running an
        action.

        Args:
            n: The maximum number of statuses to produce.

        Returns:
            A lazy iterator over the successive statuses, starting from
            a fresh status and ending early when the policy stops. Each
            call starts over.

        Raises:
            ValueError: If ``n`` is negative.

        Example:
            ```pycon
            >>> from datetime import timedelta
            >>> from aretry import constant_delay
            >>> policy = constant_delay(timedelta(microseconds=100))
            >>> for status in policy.simulate(2):
            ...     print(status)
            ...
            { iteration_number: 1, cumulative_delay: 100us, previous_delay: 100us }
            { iteration_number: 2, cumulative_delay: 200us, previous_delay: 100us }

            ```
        """
        validate_count(n, "n")
        return _simulate(self, RetryStatus(), n)


def _simulate(policy: RetryPolicy, status: RetryStatus, n: int) -> Iterator[RetryStatus]:
    for _ in range(n):
        next_status = policy.apply(status)
        if next_status is None:
            return
        status = next_status
        yield status


def combine(x: RetryPolicy, y: RetryPolicy) -> RetryPolicy:
    """Combine two policies into one that waits for the longer delay.

    Both policies are evaluated at the same status. The combination
    stops as soon as either of them stops; otherwise it returns the
    larger of the two delays. ``x + y`` is equivalent.

    Args:
        x: The first policy.
        y: The second policy.

    Returns:
        The combined policy.

    Raises:
        TypeError: If either argument is not a ``RetryPolicy``.

    Example:
        ```pycon
        >>> from datetime import timedelta
        >>> from aretry import RetryStatus, combine, constant_delay, limit_retries
        >>> policy = combine(constant_delay(timedelta(seconds=1)), limit_retries(1))
        >>> policy(RetryStatus())
        datetime.timedelta(seconds=1)
        >>> policy(RetryStatus(iteration_number=1)) is None
        True

        ```
    """
    validate_policy(x, "x")
    validate_policy(y, "y")

    def _combined(status: RetryStatus) -> timedelta | None:
        x_delay = x(status)
        y_delay = y(status)
        if x_delay is None or y_delay is None:
            return None
        return max(x_delay, y_delay)

    return RetryPolicy(_combined, name=f"combine({x.name}, {y.name})")

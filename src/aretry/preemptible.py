r"""Retry loops whose waits can be preempted by an external condition.

A ``PreemptibleRetry`` switches from one ``RetryPolicy`` to another when
a condition becomes true. While the first policy governs the loop, each
wait can be cut short by the condition, so the action is re-attempted
immediately.

The condition is a boolean owned by the caller and guarded by the lock
of a ``threading.Condition``. It must only be modified while holding
that lock, after which the waiters are notified:

```python
condition = threading.Condition()
leader_elected = False

# retry thread
policy = PreemptibleRetry(constant_delay(0.1), constant_delay(0.01))
policy.retry(condition, lambda: leader_elected, should_retry, action)

# signalling thread
with condition:
    leader_elected = True
    condition.notify_all()
```
"""

from __future__ import annotations

__all__ = ["PreemptibleRetry"]

import logging
from typing import TYPE_CHECKING, TypeVar

from aretry.status import PreemptibleRetryStatus, RetryPhase, RetryStatus
from aretry.utils.duration import format_microseconds
from aretry.utils.validation import validate_count, validate_policy
from aretry.utils.wait import wait_for

if TYPE_CHECKING:
    import threading
    from collections.abc import Callable, Iterator

    from aretry.policy import RetryPolicy

logger: logging.Logger = logging.getLogger(__name__)

T = TypeVar("T")


class PreemptibleRetry:
    """Retry with one policy until a condition becomes true, then with
    another.

    The loop is a two-state machine. In the ``BEFORE`` phase the delays
    come from ``policy_before`` and every wait can be preempted by the
    condition. Once the condition has been observed the loop moves to
    the ``AFTER`` phase for good: the retry status is reset, because the
    two policies have independent budgets, and the delays come from
    ``policy_after``.

    Args:
        policy_before: The policy used until the condition is true.
        policy_after: The policy used once the condition is true.

    Raises:
        TypeError: If either policy is not a ``RetryPolicy``.

    Example:
        ```pycon
        >>> from aretry import PreemptibleRetry, constant_delay, limit_retries
        >>> policy = PreemptibleRetry(constant_delay(1.0), limit_retries(2))
        >>> for status in policy.simulate(2, 5):
        ...     print(status)
        ...
        { iteration_number: 1, cumulative_delay: 1000000us, previous_delay: 1000000us }
        { iteration_number: 2, cumulative_delay: 2000000us, previous_delay: 1000000us }
        { iteration_number: 1, cumulative_delay: 0us, previous_delay: 0us }
        { iteration_number: 2, cumulative_delay: 0us, previous_delay: 0us }

        ```
    """

    def __init__(self, policy_before: RetryPolicy, policy_after: RetryPolicy) -> None:
        self._policy_before = validate_policy(policy_before, "policy_before")
        self._policy_after = validate_policy(policy_after, "policy_after")

    @property
    def policy_before(self) -> RetryPolicy:
        return self._policy_before

    @property
    def policy_after(self) -> RetryPolicy:
        return self._policy_after

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__qualname__}(policy_before={self._policy_before.name}, "
            f"policy_after={self._policy_after.name})"
        )

    def apply_and_preemptible_delay(
        self,
        condition: threading.Condition,
        predicate: Callable[[], bool],
        status: PreemptibleRetryStatus,
    ) -> PreemptibleRetryStatus | None:
        """Advance ``status`` by one retry and wait, unless preempted.

        In the ``BEFORE`` phase the predicate is evaluated under the
        condition's lock. If it is false, ``policy_before`` chooses the
        delay and the thread waits on ``condition`` for that delay, still
        holding the lock until the wait starts. The wait ends early if
        the predicate becomes true; the returned status then has
        ``condition_signalled`` set and is in the ``AFTER`` phase.

        Once the predicate is true (or the status is already in the
        ``AFTER`` phase) the lock is released, the status is reset if it
        comes from the ``BEFORE`` phase or from a preempted wait, and
        ``policy_after`` is applied with a plain sleep.

        Args:
            condition: The condition variable notified when the
                predicate may have changed.
            predicate: Reads the caller's condition. Called with the
                condition's lock held.
            status: The current status.

        Returns:
            The next status, or ``None`` if the governing policy stops.
        """
        if status.phase is RetryPhase.BEFORE:
            with condition:
                if not predicate():
                    next_status = self._policy_before.apply(status)
                    if next_status is None:
                        return None
                    if wait_for(condition, predicate, next_status.previous_delay):
                        logger.debug(
                            f"Wait of {format_microseconds(next_status.previous_delay)} "
                            f"before retry {next_status.iteration_number} was preempted"
                        )
                        return PreemptibleRetryStatus.wrap(
                            next_status, condition_signalled=True, phase=RetryPhase.AFTER
                        )
                    return PreemptibleRetryStatus.wrap(
                        next_status, condition_signalled=False, phase=RetryPhase.BEFORE
                    )

        if status.condition_signalled or status.phase is RetryPhase.BEFORE:
            logger.debug(
                f"Condition observed after {status.iteration_number} retries, "
                f"switching to {self._policy_after.name}"
            )
            status = PreemptibleRetryStatus(phase=RetryPhase.AFTER)
        next_status = self._policy_after.apply_and_delay(status)
        if next_status is None:
            return None
        return PreemptibleRetryStatus.wrap(
            next_status, condition_signalled=False, phase=RetryPhase.AFTER
        )

    def retry(
        self,
        condition: threading.Condition,
        predicate: Callable[[], bool],
        should_retry: Callable[[PreemptibleRetryStatus, T], bool],
        action: Callable[[PreemptibleRetryStatus], T],
    ) -> T:
        """Run ``action`` until ``should_retry`` or the governing policy
        says stop.

        Args:
            condition: The condition variable notified when the
                predicate may have changed.
            predicate: Reads the caller's condition.
            should_retry: The predicate deciding whether a result calls
                for another attempt.
            action: The action to run.

        Returns:
            The result of the last call to ``action``.
        """
        status = PreemptibleRetryStatus()
        while True:
            result = action(status)
            if not should_retry(status, result):
                return result
            next_status = self.apply_and_preemptible_delay(condition, predicate, status)
            if next_status is None:
                logger.debug(
                    f"{self!r} stopped retrying in phase {status.phase.value} "
                    f"after {status.iteration_number} retries"
                )
                return result
            status = next_status

    def simulate(self, n_before: int, n_after: int) -> Iterator[PreemptibleRetryStatus]:
        """Replay both phases without waiting or signalling.

        Args:
            n_before: The maximum number of statuses produced by
                ``policy_before``.
            n_after: The maximum number of statuses produced by
                ``policy_after``, starting over from a fresh status.

        Returns:
            A lazy iterator over the statuses of both phases. Each phase
            ends early when its policy stops.

        Raises:
            ValueError: If ``n_before`` or ``n_after`` is negative.
        """
        validate_count(n_before, "n_before")
        validate_count(n_after, "n_after")
        return self._simulate(n_before, n_after)

    def _simulate(self, n_before: int, n_after: int) -> Iterator[PreemptibleRetryStatus]:
        phases = (
            (self._policy_before, n_before, False, RetryPhase.BEFORE),
            (self._policy_after, n_after, True, RetryPhase.AFTER),
        )
        for policy, n, signalled, phase in phases:
            status = RetryStatus()
            for _ in range(n):
                next_status = policy.apply(status)
                if next_status is None:
                    break
                status = next_status
                yield PreemptibleRetryStatus.wrap(
                    status, condition_signalled=signalled, phase=phase
                )

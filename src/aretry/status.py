r"""Retry progress records threaded through every policy decision."""

from __future__ import annotations

__all__ = ["PreemptibleRetryStatus", "RetryPhase", "RetryStatus"]

from dataclasses import dataclass, field
from datetime import timedelta
from enum import Enum

from aretry.utils.duration import ZERO_DELAY, format_microseconds


@dataclass(frozen=True)
class RetryStatus:
    """Progress of a retry loop.

    A fresh status (``RetryStatus()``) describes a loop that has not
    retried yet. Each status produced by ``RetryPolicy.apply`` has one
    more iteration, the new delay added to ``cumulative_delay``, and the
    new delay stored in ``previous_delay``.

    Attributes:
        iteration_number: The number of retries already applied.
        cumulative_delay: The sum of all the delays applied so far.
        previous_delay: The most recently applied delay, or ``None``
            before the first retry.

    Example:
        ```pycon
        >>> from datetime import timedelta
        >>> from aretry import RetryStatus
        >>> print(RetryStatus())
        { iteration_number: 0, cumulative_delay: 0us, previous_delay: none }
        >>> print(RetryStatus(2, timedelta(microseconds=300), timedelta(microseconds=200)))
        { iteration_number: 2, cumulative_delay: 300us, previous_delay: 200us }

        ```
    """

    iteration_number: int = 0
    cumulative_delay: timedelta = ZERO_DELAY
    previous_delay: timedelta | None = None

    def _fields_str(self) -> str:
        previous = (
            "none" if self.previous_delay is None else format_microseconds(self.previous_delay)
        )
        return (
            f"iteration_number: {self.iteration_number}, "
            f"cumulative_delay: {format_microseconds(self.cumulative_delay)}, "
            f"previous_delay: {previous}"
        )

    def __str__(self) -> str:
        return f"{{ {self._fields_str()} }}"


class RetryPhase(Enum):
    """Which policy of a ``PreemptibleRetry`` governs the loop.

    Attributes:
        BEFORE: The condition has not been observed yet.
        AFTER: The condition was observed. This phase is terminal.
    """

    BEFORE = "before"
    AFTER = "after"


@dataclass(frozen=True)
class PreemptibleRetryStatus(RetryStatus):
    """Retry progress of a ``PreemptibleRetry`` loop.

    Attributes:
        condition_signalled: Whether the external condition became true
            during the wait that produced this status.
        phase: The phase the loop is in after this status.

    ``str`` renders the same counters as ``RetryStatus``. The flag and
    the phase show up in ``repr``.
    """

    condition_signalled: bool = False
    phase: RetryPhase = field(default=RetryPhase.BEFORE)

    @classmethod
    def wrap(
        cls,
        status: RetryStatus,
        *,
        condition_signalled: bool,
        phase: RetryPhase,
    ) -> PreemptibleRetryStatus:
        """Build a preemptible status from the counters of ``status``.

        Args:
            status: The status whose counters are copied.
            condition_signalled: The condition flag of the new status.
            phase: The phase of the new status.

        Returns:
            The new status.
        """
        return cls(
            iteration_number=status.iteration_number,
            cumulative_delay=status.cumulative_delay,
            previous_delay=status.previous_delay,
            condition_signalled=condition_signalled,
            phase=phase,
        )

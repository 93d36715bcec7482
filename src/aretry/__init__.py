r"""aretry - Composable retry policies with preemptible waits.

This package decides, after each failed attempt of an action, whether to
retry and after how long. Policies are small decision functions that can
be combined into arbitrarily complex backoff curves, and a preemptible
coordinator lets a waiting retry loop be woken early by an external
condition before switching to a different policy.

Key Features:
    - Policies as first-class values, combined with ``combine`` or ``+``
    - Constant, jitter, exponential and AWS-style jittered backoff policies
    - Retry count, delay, cumulative delay and wall-clock limits
    - ``simulate`` to inspect a backoff curve without waiting
    - ``PreemptibleRetry`` to cut waits short when a condition is signalled

Example:
    ```pycon
    >>> from aretry import cap_delay, exponential_backoff, limit_retries
    >>> policy = cap_delay(2.0, exponential_backoff(0.1)) + limit_retries(5)
    >>> attempts = []
    >>> def action(status):
    ...     attempts.append(status.iteration_number)
    ...     return len(attempts) >= 3
    ...
    >>> policy.retry(lambda status, ok: not ok, action)  # doctest: +SKIP
    True

    ```
"""

from __future__ import annotations

__all__ = [
    "PolicyConfig",
    "PreemptibleRetry",
    "PreemptibleRetryStatus",
    "RetryPhase",
    "RetryPolicy",
    "RetryStatus",
    "__version__",
    "cap_delay",
    "combine",
    "constant_delay",
    "decorrelated_jitter_backoff",
    "equal_jitter",
    "equal_jitter_backoff",
    "exponential_backoff",
    "full_jitter",
    "full_jitter_backoff",
    "limit_cumulative_delay",
    "limit_retries",
    "limit_retries_by_delay",
    "limit_time_point",
    "never_retry",
]

from importlib.metadata import PackageNotFoundError, version

from aretry.config import PolicyConfig
from aretry.policies import (
    cap_delay,
    constant_delay,
    decorrelated_jitter_backoff,
    equal_jitter,
    equal_jitter_backoff,
    exponential_backoff,
    full_jitter,
    full_jitter_backoff,
    limit_cumulative_delay,
    limit_retries,
    limit_retries_by_delay,
    limit_time_point,
    never_retry,
)
from aretry.policy import RetryPolicy, combine
from aretry.preemptible import PreemptibleRetry
from aretry.status import PreemptibleRetryStatus, RetryPhase, RetryStatus

try:
    __version__ = version(__name__)
except PackageNotFoundError:  # pragma: no cover
    # Package is not installed, fallback if needed
    __version__ = "0.0.0"

r"""Catalog of retry policies and combinators.

This package provides ready-made policies (constant delays, jitter,
exponential backoff variants) and combinators that bound other policies
(retry counts, delay caps, cumulative and wall-clock limits).
"""

from __future__ import annotations

__all__ = [
    "cap_delay",
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

from aretry.policies.constant import constant_delay, never_retry
from aretry.policies.exponential import (
    decorrelated_jitter_backoff,
    equal_jitter_backoff,
    exponential_backoff,
    full_jitter_backoff,
)
from aretry.policies.jitter import equal_jitter, full_jitter
from aretry.policies.limits import (
    cap_delay,
    limit_cumulative_delay,
    limit_retries,
    limit_retries_by_delay,
    limit_time_point,
)

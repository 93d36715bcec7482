r"""Utility functions for retry policies.

This package provides helpers for delay arithmetic, parameter
validation, random delay generation, and the blocking waits performed
by the retry loops.
"""

from __future__ import annotations

__all__ = [
    "MAX_DELAY",
    "ZERO_DELAY",
    "sleep",
    "thread_rng",
    "to_delay",
    "uniform_delay",
    "validate_count",
    "validate_policy",
    "wait_for",
]

from aretry.utils.duration import MAX_DELAY, ZERO_DELAY, to_delay
from aretry.utils.rng import thread_rng, uniform_delay
from aretry.utils.validation import validate_count, validate_policy
from aretry.utils.wait import sleep, wait_for

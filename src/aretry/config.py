r"""Configuration dataclass and defaults for common retry policies.

This module provides configuration constants and a dataclass-based
configuration object that builds the usual "exponential backoff with
limits" policy out of the catalog in ``aretry.policies``.
"""

from __future__ import annotations

__all__ = [
    "DEFAULT_BASE_DELAY",
    "DEFAULT_MAX_RETRIES",
    "JitterMode",
    "PolicyConfig",
]

from dataclasses import dataclass, replace
from datetime import timedelta
from enum import Enum
from typing import TYPE_CHECKING, Any

from aretry.policies import (
    cap_delay,
    equal_jitter_backoff,
    exponential_backoff,
    full_jitter_backoff,
    limit_cumulative_delay,
    limit_retries,
)
from aretry.policy import combine
from aretry.utils.duration import to_delay
from aretry.utils.validation import validate_count

if TYPE_CHECKING:
    import random

    from aretry.policy import RetryPolicy

# Default maximum number of retries
# Total attempts = max_retries + 1 (initial attempt)
DEFAULT_MAX_RETRIES = 3

# Default base delay for exponential backoff
# With 0.3s: 1st retry waits 0.3s, 2nd waits 0.6s, 3rd waits 1.2s
DEFAULT_BASE_DELAY = timedelta(seconds=0.3)


class JitterMode(Enum):
    """Randomization applied to the exponential backoff.

    Attributes:
        NONE: Plain exponential backoff.
        FULL: Full jitter exponential backoff.
        EQUAL: Equal jitter exponential backoff.
    """

    NONE = "none"
    FULL = "full"
    EQUAL = "equal"


@dataclass
class PolicyConfig:
    """Configuration of an exponential backoff retry policy.

    Args:
        max_retries: Maximum number of retries. ``None`` means unlimited.
            Must be >= 0.
        base_delay: Base delay of the exponential backoff, as a
            ``timedelta`` or in seconds.
        max_delay: Optional cap on each individual delay.
        max_cumulative_delay: Optional budget for the total time spent
            waiting. The loop stops before the budget is reached.
        jitter: Randomization applied to the backoff.

    Raises:
        ValueError: If a count or a delay is negative.

    Example:
        ```pycon
        >>> from aretry.config import PolicyConfig
        >>> config = PolicyConfig(max_retries=2, base_delay=0.5)
        >>> [status.previous_delay.total_seconds() for status in config.build_policy().simulate(10)]
        [0.5, 1.0]
        >>> config.merge(max_retries=4).max_retries
        4

        ```
    """

    max_retries: int | None = DEFAULT_MAX_RETRIES
    base_delay: timedelta | float = DEFAULT_BASE_DELAY
    max_delay: timedelta | float | None = None
    max_cumulative_delay: timedelta | float | None = None
    jitter: JitterMode | str = JitterMode.NONE

    def __post_init__(self) -> None:
        """Validate and normalize configuration parameters after
        initialization.

        Raises:
            ValueError: If any parameter fails validation.
        """
        if self.max_retries is not None:
            validate_count(self.max_retries, "max_retries")
        self.base_delay = to_delay(self.base_delay, "base_delay")
        if self.max_delay is not None:
            self.max_delay = to_delay(self.max_delay, "max_delay")
        if self.max_cumulative_delay is not None:
            self.max_cumulative_delay = to_delay(
                self.max_cumulative_delay, "max_cumulative_delay"
            )
        self.jitter = JitterMode(self.jitter)

    def merge(self, **overrides: Any) -> PolicyConfig:
        """Create a new config with specified parameters overridden.

        Only non-None override values are applied.

        Args:
            **overrides: Keyword arguments for parameters to override.

        Returns:
            A new PolicyConfig instance with overrides applied.
        """
        filtered_overrides = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **filtered_overrides)

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to dictionary format.

        Returns:
            Dictionary with the configuration parameters.
        """
        return {
            "max_retries": self.max_retries,
            "base_delay": self.base_delay,
            "max_delay": self.max_delay,
            "max_cumulative_delay": self.max_cumulative_delay,
            "jitter": self.jitter,
        }

    def build_policy(self, rng: random.Random | None = None) -> RetryPolicy:
        """Build the retry policy described by this configuration.

        Args:
            rng: Optional random generator used by the jitter modes.

        Returns:
            The composed policy.
        """
        if self.jitter is JitterMode.FULL:
            policy = full_jitter_backoff(self.base_delay, rng=rng)
        elif self.jitter is JitterMode.EQUAL:
            policy = equal_jitter_backoff(self.base_delay, rng=rng)
        else:
            policy = exponential_backoff(self.base_delay)
        if self.max_delay is not None:
            policy = cap_delay(self.max_delay, policy)
        if self.max_cumulative_delay is not None:
            policy = limit_cumulative_delay(self.max_cumulative_delay, policy)
        if self.max_retries is not None:
            policy = combine(policy, limit_retries(self.max_retries))
        return policy

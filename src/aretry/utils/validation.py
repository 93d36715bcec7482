r"""Parameter validation utilities for retry policies.

This module provides validation functions used by the policy
constructors so that malformed configuration is rejected when a policy
is built instead of producing surprising behavior while retrying.
"""

from __future__ import annotations

__all__ = ["validate_count", "validate_policy"]

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from aretry.policy import RetryPolicy


def validate_count(value: int, name: str) -> int:
    """Validate a non-negative integer count.

    Args:
        value: The value to validate.
        name: The parameter name used in error messages.

    Returns:
        The validated value.

    Raises:
        TypeError: If ``value`` is not an integer.
        ValueError: If ``value`` is negative.

    Example:
        ```pycon
        >>> from aretry.utils.validation import validate_count
        >>> validate_count(3, "retry_limit")
        3
        >>> validate_count(-1, "retry_limit")  # doctest: +SKIP
        Traceback (most recent call last):
        ...
        ValueError: retry_limit must be >= 0, got -1

        ```
    """
    if isinstance(value, bool) or not isinstance(value, int):
        msg = f"{name} must be an int, got {value!r}"
        raise TypeError(msg)
    if value < 0:
        msg = f"{name} must be >= 0, got {value}"
        raise ValueError(msg)
    return value


def validate_policy(policy: Any, name: str = "policy") -> RetryPolicy:
    """Validate that an argument is a retry policy.

    Args:
        policy: The object to validate.
        name: The parameter name used in error messages.

    Returns:
        The validated policy.

    Raises:
        TypeError: If ``policy`` is not a ``RetryPolicy``.
    """
    from aretry.policy import RetryPolicy

    if not isinstance(policy, RetryPolicy):
        msg = f"{name} must be a RetryPolicy, got {type(policy).__name__}"
        raise TypeError(msg)
    return policy

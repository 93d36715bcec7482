r"""Duration helpers shared by retry policies.

Delays are represented as ``datetime.timedelta`` values so that all the
arithmetic performed by the policies is exact at microsecond
resolution. The helpers in this module convert user input to delays and
keep exponential growth from overflowing ``timedelta``.
"""

from __future__ import annotations

__all__ = [
    "MAX_DELAY",
    "ZERO_DELAY",
    "format_microseconds",
    "from_microseconds",
    "saturating_add",
    "saturating_mul",
    "to_delay",
    "to_microseconds",
]

from datetime import timedelta

ZERO_DELAY = timedelta(0)

# Largest delay a policy can return. Growth that would go past it is clamped
MAX_DELAY = timedelta.max

_ONE_MICROSECOND = timedelta(microseconds=1)
_MAX_MICROSECONDS = MAX_DELAY // _ONE_MICROSECOND


def to_microseconds(delay: timedelta) -> int:
    """Convert a delay to an integer number of microseconds.

    Args:
        delay: The delay to convert.

    Returns:
        The number of whole microseconds in ``delay``.

    Example:
        ```pycon
        >>> from datetime import timedelta
        >>> from aretry.utils.duration import to_microseconds
        >>> to_microseconds(timedelta(milliseconds=1, microseconds=5))
        1005

        ```
    """
    return delay // _ONE_MICROSECOND


def from_microseconds(microseconds: int) -> timedelta:
    """Convert microseconds to a delay, clamped to ``[0, MAX_DELAY]``.

    Args:
        microseconds: The number of microseconds.

    Returns:
        The corresponding delay.
    """
    if microseconds <= 0:
        return ZERO_DELAY
    if microseconds >= _MAX_MICROSECONDS:
        return MAX_DELAY
    return timedelta(microseconds=microseconds)


def saturating_add(left: timedelta, right: timedelta) -> timedelta:
    """Add two non-negative delays without overflowing ``timedelta``.

    Args:
        left: The first delay.
        right: The second delay.

    Returns:
        ``left + right``, or ``MAX_DELAY`` if the sum does not fit.
    """
    return from_microseconds(to_microseconds(left) + to_microseconds(right))


def saturating_mul(delay: timedelta, factor: int) -> timedelta:
    """Multiply a non-negative delay by a non-negative integer without
    overflowing ``timedelta``.

    Args:
        delay: The delay to scale.
        factor: The integer factor.

    Returns:
        ``delay * factor``, or ``MAX_DELAY`` if the product does not fit.
    """
    return from_microseconds(to_microseconds(delay) * factor)


def to_delay(value: timedelta | float, name: str = "delay") -> timedelta:
    """Convert a user supplied value to a non-negative delay.

    Args:
        value: A ``timedelta`` or a number of seconds.
        name: The parameter name used in error messages.

    Returns:
        The value as a ``timedelta``.

    Raises:
        TypeError: If ``value`` is neither a ``timedelta`` nor a number.
        ValueError: If ``value`` is negative.

    Example:
        ```pycon
        >>> from aretry.utils.duration import to_delay
        >>> to_delay(1.5)
        datetime.timedelta(seconds=1, microseconds=500000)

        ```
    """
    if isinstance(value, bool) or not isinstance(value, (timedelta, int, float)):
        msg = f"{name} must be a timedelta or a number of seconds, got {value!r}"
        raise TypeError(msg)
    delay = value if isinstance(value, timedelta) else timedelta(seconds=value)
    if delay < ZERO_DELAY:
        msg = f"{name} must be non-negative, got {value}"
        raise ValueError(msg)
    return delay


def format_microseconds(delay: timedelta) -> str:
    """Render a delay in microseconds, e.g. ``"1500us"``.

    Args:
        delay: The delay to render.

    Returns:
        The formatted delay.
    """
    return f"{to_microseconds(delay)}us"

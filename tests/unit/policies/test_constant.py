r"""Unit tests for fixed-delay policies."""

from __future__ import annotations

from datetime import timedelta

import pytest

from aretry import RetryStatus, constant_delay, never_retry

#################################
#     Tests for never_retry     #
#################################


@pytest.mark.parametrize(
    "status", [RetryStatus(), RetryStatus(5, timedelta(seconds=1), timedelta(seconds=1))]
)
def test_never_retry_always_stops(status: RetryStatus) -> None:
    assert never_retry()(status) is None


def test_never_retry_name() -> None:
    assert never_retry().name == "never_retry()"


####################################
#     Tests for constant_delay     #
####################################


@pytest.mark.parametrize("iteration_number", [0, 1, 10, 1000])
def test_constant_delay(iteration_number: int) -> None:
    policy = constant_delay(timedelta(milliseconds=250))
    assert policy(RetryStatus(iteration_number=iteration_number)) == timedelta(milliseconds=250)


def test_constant_delay_seconds() -> None:
    assert constant_delay(2.5)(RetryStatus()) == timedelta(seconds=2.5)


def test_constant_delay_zero() -> None:
    assert constant_delay(0)(RetryStatus()) == timedelta(0)


def test_constant_delay_simulate_cumulative() -> None:
    statuses = list(constant_delay(timedelta(microseconds=100)).simulate(3))
    assert [s.previous_delay for s in statuses] == [timedelta(microseconds=100)] * 3
    assert [s.cumulative_delay for s in statuses] == [
        timedelta(microseconds=100),
        timedelta(microseconds=200),
        timedelta(microseconds=300),
    ]


def test_constant_delay_invalid_delay() -> None:
    with pytest.raises(ValueError, match=r"delay must be non-negative"):
        constant_delay(timedelta(seconds=-1))


def test_constant_delay_invalid_type() -> None:
    with pytest.raises(TypeError, match=r"delay must be a timedelta or a number of seconds"):
        constant_delay("1s")  # type: ignore[arg-type]

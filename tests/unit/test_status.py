r"""Unit tests for retry status records."""

from __future__ import annotations

from dataclasses import FrozenInstanceError, replace
from datetime import timedelta

import pytest

from aretry.status import PreemptibleRetryStatus, RetryPhase, RetryStatus

#################################
#     Tests for RetryStatus     #
#################################


def test_retry_status_defaults() -> None:
    """Test that a fresh status has no retries and no delay."""
    status = RetryStatus()
    assert status.iteration_number == 0
    assert status.cumulative_delay == timedelta(0)
    assert status.previous_delay is None


def test_retry_status_is_frozen() -> None:
    status = RetryStatus()
    with pytest.raises(FrozenInstanceError):
        status.iteration_number = 1  # type: ignore[misc]


def test_retry_status_str_fresh() -> None:
    assert (
        str(RetryStatus())
        == "{ iteration_number: 0, cumulative_delay: 0us, previous_delay: none }"
    )


def test_retry_status_str_renders_microseconds() -> None:
    status = RetryStatus(
        iteration_number=3,
        cumulative_delay=timedelta(milliseconds=1, microseconds=500),
        previous_delay=timedelta(microseconds=750),
    )
    assert (
        str(status) == "{ iteration_number: 3, cumulative_delay: 1500us, previous_delay: 750us }"
    )


def test_retry_status_str_zero_previous_delay() -> None:
    """Test that a zero previous delay is not rendered as none."""
    status = RetryStatus(iteration_number=1, previous_delay=timedelta(0))
    assert str(status) == "{ iteration_number: 1, cumulative_delay: 0us, previous_delay: 0us }"


############################################
#     Tests for PreemptibleRetryStatus     #
############################################


def test_preemptible_retry_status_defaults() -> None:
    status = PreemptibleRetryStatus()
    assert status == PreemptibleRetryStatus(0, timedelta(0), None, False, RetryPhase.BEFORE)
    assert isinstance(status, RetryStatus)


def test_preemptible_retry_status_wrap() -> None:
    """Test that wrap copies the counters of a plain status."""
    status = RetryStatus(2, timedelta(microseconds=30), timedelta(microseconds=20))
    wrapped = PreemptibleRetryStatus.wrap(
        status, condition_signalled=True, phase=RetryPhase.AFTER
    )
    assert wrapped == PreemptibleRetryStatus(
        iteration_number=2,
        cumulative_delay=timedelta(microseconds=30),
        previous_delay=timedelta(microseconds=20),
        condition_signalled=True,
        phase=RetryPhase.AFTER,
    )


def test_preemptible_retry_status_replace_keeps_extra_fields() -> None:
    status = PreemptibleRetryStatus(condition_signalled=True, phase=RetryPhase.AFTER)
    replaced = replace(status, iteration_number=5)
    assert replaced.condition_signalled
    assert replaced.phase is RetryPhase.AFTER
    assert replaced.iteration_number == 5


@pytest.mark.parametrize("signalled", [True, False])
def test_preemptible_retry_status_str(signalled: bool) -> None:
    status = PreemptibleRetryStatus(
        iteration_number=1,
        cumulative_delay=timedelta(microseconds=10),
        previous_delay=timedelta(microseconds=10),
        condition_signalled=signalled,
    )
    assert str(status) == "{ iteration_number: 1, cumulative_delay: 10us, previous_delay: 10us }"


def test_preemptible_retry_status_repr() -> None:
    text = repr(PreemptibleRetryStatus(condition_signalled=True, phase=RetryPhase.AFTER))
    assert "condition_signalled=True" in text
    assert "phase=<RetryPhase.AFTER: 'after'>" in text

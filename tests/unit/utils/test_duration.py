from __future__ import annotations

from datetime import timedelta

import pytest

from aretry.utils.duration import (
    MAX_DELAY,
    ZERO_DELAY,
    format_microseconds,
    from_microseconds,
    saturating_add,
    saturating_mul,
    to_delay,
    to_microseconds,
)

#####################################
#     Tests for to_microseconds     #
#####################################


@pytest.mark.parametrize(
    ("delay", "expected"),
    [
        (timedelta(0), 0),
        (timedelta(microseconds=7), 7),
        (timedelta(milliseconds=2), 2000),
        (timedelta(seconds=1, microseconds=1), 1_000_001),
    ],
)
def test_to_microseconds(delay: timedelta, expected: int) -> None:
    assert to_microseconds(delay) == expected


#######################################
#     Tests for from_microseconds     #
#######################################


def test_from_microseconds() -> None:
    assert from_microseconds(1500) == timedelta(microseconds=1500)


def test_from_microseconds_clamps() -> None:
    assert from_microseconds(-5) == ZERO_DELAY
    assert from_microseconds(10**30) == MAX_DELAY


#####################################
#     Tests for saturating ops      #
#####################################


def test_saturating_add() -> None:
    assert saturating_add(timedelta(seconds=1), timedelta(seconds=2)) == timedelta(seconds=3)
    assert saturating_add(MAX_DELAY, timedelta(seconds=1)) == MAX_DELAY


def test_saturating_mul() -> None:
    assert saturating_mul(timedelta(microseconds=3), 4) == timedelta(microseconds=12)
    assert saturating_mul(timedelta(days=1), 10**12) == MAX_DELAY


##############################
#     Tests for to_delay     #
##############################


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (timedelta(seconds=2), timedelta(seconds=2)),
        (2, timedelta(seconds=2)),
        (0.25, timedelta(milliseconds=250)),
        (0, ZERO_DELAY),
    ],
)
def test_to_delay(value: timedelta | float, expected: timedelta) -> None:
    assert to_delay(value) == expected


def test_to_delay_negative() -> None:
    with pytest.raises(ValueError, match=r"base must be non-negative, got -1"):
        to_delay(-1, "base")


@pytest.mark.parametrize("value", ["1", None, True])
def test_to_delay_invalid_type(value: object) -> None:
    with pytest.raises(TypeError, match=r"delay must be a timedelta or a number of seconds"):
        to_delay(value)  # type: ignore[arg-type]


#########################################
#     Tests for format_microseconds     #
#########################################


def test_format_microseconds() -> None:
    assert format_microseconds(timedelta(milliseconds=1, microseconds=5)) == "1005us"
    assert format_microseconds(ZERO_DELAY) == "0us"

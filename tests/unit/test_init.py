from __future__ import annotations

import pytest

import aretry


def test_package_version_is_string() -> None:
    """Test that __version__ is a string."""
    assert isinstance(aretry.__version__, str)


def test_package_version_format() -> None:
    """Test that __version__ follows semantic versioning."""
    assert "." in aretry.__version__


def test_all_exports_defined() -> None:
    """Test that all items in __all__ are defined in the module."""
    for name in aretry.__all__:
        assert hasattr(aretry, name), f"{name} is in __all__ but not defined in module"


@pytest.mark.parametrize(
    "func_name",
    [
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
    ],
)
def test_policy_constructors_are_exported(func_name: str) -> None:
    assert callable(getattr(aretry, func_name))

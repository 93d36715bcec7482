from __future__ import annotations

import random
from typing import TYPE_CHECKING
from unittest.mock import Mock, patch

import pytest

if TYPE_CHECKING:
    from collections.abc import Generator


@pytest.fixture
def mock_sleep() -> Generator[Mock, None, None]:
    """Patch time.sleep to make tests run faster."""
    with patch("time.sleep", return_value=None) as mock:
        yield mock


@pytest.fixture
def max_rng() -> Mock:
    """Create a random generator that always draws the upper bound."""
    return Mock(spec=random.Random, randint=Mock(side_effect=lambda a, b: b))  # noqa: ARG005


@pytest.fixture
def min_rng() -> Mock:
    """Create a random generator that always draws the lower bound."""
    return Mock(spec=random.Random, randint=Mock(side_effect=lambda a, b: a))  # noqa: ARG005

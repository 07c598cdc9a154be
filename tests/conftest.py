# conftest.py - shared fixtures
from unittest.mock import MagicMock

import pytest

from phpbeautify.markers import MarkerCodec


@pytest.fixture
def codec():
    return MarkerCodec()


@pytest.fixture
def identity_formatter():
    """Formatter that returns the disguised text untouched, so tests can inspect it."""
    return MagicMock(side_effect=lambda text, options: text)

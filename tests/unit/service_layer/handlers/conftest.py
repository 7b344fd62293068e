"""Fixtures for the command handler tests."""

import pytest

from almanac.adapters.id_generators import SimpleIdGenerator
from almanac.interfaces.id_generator import IdGenerator


@pytest.fixture
def id_generator() -> IdGenerator:
    """Predictable ids (``000001``, ``000002``, ...) for calendars created without one."""
    return SimpleIdGenerator(length=6)

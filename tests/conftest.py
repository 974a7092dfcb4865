"""
Shared pytest fixtures for LifeHub tests.

Every test runs against a fixed clock and predictable ids, so stores
built in different tests compare equal and ids can be asserted exactly.
"""

import os
from datetime import date, datetime
from itertools import count

import pytest

from lifehub.config import TrackerSettings, get_settings
from lifehub.models import Store
from lifehub.mutations import Mutator


# Wednesday; its week starts Monday 2026-10-19.
FIXED_NOW = datetime(2026, 10, 21, 9, 30)
FIXED_TODAY = FIXED_NOW.date()
WEEK_START = date(2026, 10, 19)


def sequential_ids(prefix: str = "id"):
    """An id factory yielding id-1, id-2, ..."""
    counter = count(1)
    return lambda: f"{prefix}-{next(counter)}"


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch):
    """Keep LIFEHUB_* variables from the developer's shell out of tests."""
    for name in list(os.environ):
        if name.startswith("LIFEHUB_"):
            monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def clock():
    return lambda: FIXED_NOW


@pytest.fixture
def ids():
    return sequential_ids()


@pytest.fixture
def mutator(clock, ids):
    return Mutator(
        clock=clock,
        id_factory=ids,
        settings=TrackerSettings(_env_file=None),
    )


@pytest.fixture
def store():
    """Default Store with reading ids that never collide with mutator ids."""
    return Store.defaults(FIXED_TODAY, id_factory=sequential_ids("book"))

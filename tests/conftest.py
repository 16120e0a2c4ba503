import pytest

from config import Params
from environment import Environment


@pytest.fixture
def params():
    return Params()


@pytest.fixture
def env():
    """Small grid, seeded and populated."""
    e = Environment(width=20, height=15, scale=2)
    e.reset("test", 30, 0.35, 3.0)
    return e


@pytest.fixture
def empty_env():
    """Small grid with no agents."""
    e = Environment(width=12, height=8, scale=1)
    e.reset("empty", 0, 0.35, 3.0)
    return e

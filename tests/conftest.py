import pytest

from fnkit.config.settings import reset_settings


@pytest.fixture(autouse=True)
def fresh_settings():
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def counter():
    """A value-only step: yields 1, 2, ... up to the state limit."""

    def step(limit, key):
        n = 1 if key is None else key + 1
        if n > limit:
            return None
        return (n,)

    def upto(limit):
        return step, limit, None

    return upto

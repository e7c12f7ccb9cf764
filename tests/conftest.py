import pytest

from charvec import OPTIONS


@pytest.fixture(autouse=True)
def default_options():
    """Every test starts and ends with the default options"""
    OPTIONS.reset()
    yield OPTIONS
    OPTIONS.reset()

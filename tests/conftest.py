import pytest

from pera.interpreter import Interpreter
from pera.types.environment import Environment


@pytest.fixture
def interp():
    """Fresh interpreter with an empty top-level environment."""
    return Interpreter()


@pytest.fixture
def env():
    return Environment()

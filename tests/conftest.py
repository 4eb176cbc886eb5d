"""
Shared fixtures for the MPC tests.
"""

import pytest

from polympc.core.actuation.config import MPCConfig
from polympc.core.actuation.mpc_controller import MPCController


@pytest.fixture
def config():
    # Generous time budget so slow CI machines do not hit the solver timeout.
    return MPCConfig(max_wall_time=5.0)


@pytest.fixture(scope="module")
def controller():
    return MPCController(MPCConfig(max_wall_time=5.0))

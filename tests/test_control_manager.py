"""
Tests for the control-loop wrapper and its fallback policy.
"""

import pytest

from polympc.core.actuation.controller import ControlManager
from polympc.core.actuation.errors import ConfigError, InvalidInputError, SolverError
from polympc.core.actuation.solver import SolveResult
from polympc.core.actuation.types import Actuation

STATE = [0.0, 0.0, 0.0, 10.0, 0.0, 0.0]
FLAT = [0.0, 0.0, 0.0, 0.0]


def _manager(fallback="hold"):
    return ControlManager({"fallback": fallback, "args": {"max_wall_time": 5.0}})


def _fail(*args, **kwargs):
    raise SolverError(SolveResult(success=False, status="Maximum_CpuTime_Exceeded"))


def test_run_step_returns_mpc_command():
    manager = _manager()
    manager.update_info(STATE)
    command = manager.run_step(FLAT)

    assert isinstance(command, Actuation)
    assert command.a > 0.0
    assert manager.last_command == command
    assert manager.last_solution is not None
    assert manager.failures == 0


def test_hold_fallback_reuses_last_command(monkeypatch):
    manager = _manager("hold")
    manager.update_info(STATE)
    good = manager.run_step(FLAT)

    monkeypatch.setattr(manager.controller, "solve", _fail)
    command = manager.run_step(FLAT)

    assert command == good
    assert manager.failures == 1
    assert manager.last_solution is None


def test_brake_fallback_commands_full_deceleration(monkeypatch):
    manager = _manager("brake")
    manager.last_command = Actuation(delta=0.1, a=0.5)
    manager.update_info(STATE)
    monkeypatch.setattr(manager.controller, "solve", _fail)

    command = manager.run_step(FLAT)
    assert command == Actuation(delta=0.1, a=-1.0)

    manager.run_step(FLAT)
    assert manager.failures == 2


def test_malformed_input_triggers_fallback():
    manager = _manager("brake")
    manager.update_info([0.0, 0.0, 0.0, float("nan"), 0.0, 0.0])

    command = manager.run_step(FLAT)
    assert command.a == -1.0
    assert manager.failures == 1


def test_run_step_requires_state():
    with pytest.raises(InvalidInputError):
        _manager().run_step(FLAT)


def test_unknown_fallback_is_rejected():
    with pytest.raises(ConfigError):
        _manager("coast")


def test_to_vehicle_control_normalizes_command():
    manager = _manager()
    delta_max = manager.controller.config.delta_max

    assert manager.to_vehicle_control(Actuation(delta=delta_max / 2, a=0.4)) == pytest.approx(
        {"steering": 0.5, "throttle": 0.4, "brake": 0.0}
    )
    assert manager.to_vehicle_control(Actuation(delta=-2 * delta_max, a=-0.7)) == pytest.approx(
        {"steering": -1.0, "throttle": 0.0, "brake": 0.7}
    )

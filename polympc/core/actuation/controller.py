"""
Integrates the MPC controller into a periodic control loop.
"""

import logging

import numpy as np

from polympc.core.actuation.errors import ConfigError, InvalidInputError, SolverError
from polympc.core.actuation.mpc_controller import MPCController
from polympc.core.actuation.types import Actuation

logger = logging.getLogger(__name__)

FALLBACK_MODES = ("hold", "brake")


class ControlManager:
    def __init__(self, control_config):
        """
        Initialize the MPC controller.
        Args:
            control_config (dict): Configuration from YAML with the MPC
                ``args`` and an optional ``fallback`` of ``hold`` (reuse the
                last command) or ``brake`` (hold steering, full deceleration).
        """
        self.fallback = control_config.get("fallback", "hold")
        if self.fallback not in FALLBACK_MODES:
            raise ConfigError(f"fallback must be one of {FALLBACK_MODES}, got {self.fallback!r}")
        self.controller = MPCController(control_config.get("args", {}))
        self.current_state = None
        self.last_command = Actuation(delta=0.0, a=0.0)
        self.last_solution = None
        self.failures = 0

    def update_info(self, state):
        """
        Update the controller with the vehicle's current state.
        Args:
            state (State or sequence): [x, y, psi, v, cte, epsi]
        """
        self.current_state = state

    def run_step(self, coeffs):
        """
        Execute one control step.
        Args:
            coeffs (sequence): Reference polynomial in the state's frame.
        Returns:
            Actuation: The MPC command, or the fallback command when the
            cycle's input was rejected or the solver failed.
        """
        if self.current_state is None:
            raise InvalidInputError("run_step called before update_info")
        try:
            solution = self.controller.solve(self.current_state, coeffs)
        except (InvalidInputError, SolverError) as exc:
            self.failures += 1
            self.last_solution = None
            command = self._fallback_command()
            logger.warning(f"MPC cycle failed ({exc}); applying '{self.fallback}' fallback {command}")
            return command

        self.failures = 0
        self.last_solution = solution
        self.last_command = solution.actuation
        return solution.actuation

    def _fallback_command(self):
        if self.fallback == "brake":
            return Actuation(delta=self.last_command.delta, a=-self.controller.config.a_max)
        return self.last_command

    def to_vehicle_control(self, actuation):
        """
        Convert an actuation to a normalized vehicle command.
        Args:
            actuation (Actuation): Steering angle (rad) and acceleration.
        Returns:
            dict: ``steering`` in [-1, 1], ``throttle`` and ``brake`` in [0, 1].
        """
        config = self.controller.config
        accel = float(np.clip(actuation.a / config.a_max, -1.0, 1.0))
        return {
            "steering": float(np.clip(actuation.delta / config.delta_max, -1.0, 1.0)),
            "throttle": max(accel, 0.0),
            "brake": max(-accel, 0.0),
        }

"""
Initial guess, variable bounds and constraint bounds for one MPC cycle.
"""

from dataclasses import dataclass

import numpy as np

from polympc.core.actuation.layout import STATE_FIELDS


@dataclass(frozen=True, eq=False)
class Problem:
    x0: np.ndarray
    lbx: np.ndarray
    ubx: np.ndarray
    lbg: np.ndarray
    ubg: np.ndarray


class ProblemBuilder:
    def __init__(self, config):
        """
        Args:
            config (MPCConfig): Horizon and actuator limits.
        """
        self.config = config
        self.layout = config.layout

    def initial_guess(self):
        """All zeros; the initial-state constraint moves step 0 to the measured state."""
        return np.zeros(self.layout.n_vars)

    def variable_bounds(self):
        """Box bounds: states unbounded, steering within +-delta_max, acceleration within +-a_max."""
        lay, cfg = self.layout, self.config
        lbx = np.full(lay.n_vars, -cfg.unbounded)
        ubx = np.full(lay.n_vars, cfg.unbounded)

        # Steering limit is an angle and is not scaled by lf.
        lbx[lay.segment("delta")] = -cfg.delta_max
        ubx[lay.segment("delta")] = cfg.delta_max

        lbx[lay.segment("a")] = -cfg.a_max
        ubx[lay.segment("a")] = cfg.a_max
        return lbx, ubx

    def constraint_bounds(self, state):
        """
        Zero residual for every dynamics constraint, equality to the measured
        state for the six step 0 constraints.

        Args:
            state (State): Measured state at the start of the cycle.
        Returns:
            tuple: (lbg, ubg)
        """
        lay = self.layout
        lbg = np.zeros(lay.n_constraints)
        ubg = np.zeros(lay.n_constraints)
        for name, value in zip(STATE_FIELDS, state.as_list()):
            lbg[lay.index(name, 0)] = value
            ubg[lay.index(name, 0)] = value
        return lbg, ubg

    def build(self, state):
        lbx, ubx = self.variable_bounds()
        lbg, ubg = self.constraint_bounds(state)
        return Problem(x0=self.initial_guess(), lbx=lbx, ubx=ubx, lbg=lbg, ubg=ubg)

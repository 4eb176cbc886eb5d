"""
Combined cost and constraint evaluator for the NLP solver.
"""

import casadi as ca

from polympc.core.actuation.cost import CostModel
from polympc.core.actuation.layout import STATE_FIELDS
from polympc.dynamics.vehicle_model import VehicleModel


class FGEvaluator:
    """
    Maps a decision vector and reference coefficients to ``(f, g)``.

    ``f`` is the scalar cost. ``g`` has one entry per state variable: the
    step 0 entries echo the initial state so their bounds can pin it, and
    every later entry is the residual ``state(t+1) - model(state(t), u(t))``.
    The evaluator holds nothing but the configuration snapshot, so it can be
    called any number of times with symbolic or numeric arguments.
    """

    def __init__(self, config, dynamics=None, cost_model=None):
        self.layout = config.layout
        self.dynamics = dynamics or VehicleModel(config.lf, config.dt)
        self.cost_model = cost_model or CostModel(config)

    def constraints(self, vars, coeffs):
        lay = self.layout
        g = [None] * lay.n_constraints

        for name in STATE_FIELDS:
            g[lay.index(name, 0)] = vars[lay.index(name, 0)]

        for t in range(lay.horizon - 1):
            predicted = self.dynamics.step(lay.state_at(vars, t), lay.actuation_at(vars, t), coeffs)
            for name, value in zip(STATE_FIELDS, predicted):
                g[lay.index(name, t + 1)] = vars[lay.index(name, t + 1)] - value

        return g

    def __call__(self, vars, coeffs):
        return self.cost_model(vars), ca.vertcat(*self.constraints(vars, coeffs))

    def symbolic(self):
        """Symbolic decision vector, parameter vector, cost and constraints."""
        vars = ca.SX.sym("vars", self.layout.n_vars)
        coeffs = ca.SX.sym("coeffs", 4)
        f, g = self(vars, coeffs)
        return vars, coeffs, f, g

    def to_function(self):
        """Numeric ``fg(vars, coeffs) -> (f, g)`` CasADi function."""
        vars, coeffs, f, g = self.symbolic()
        return ca.Function("fg", [vars, coeffs], [f, g], ["vars", "coeffs"], ["f", "g"])

"""
Layout of the flat decision vector handed to the NLP solver.

The vector holds six state trajectories of length N followed by two
actuator trajectories of length N-1::

    [x(0..N-1), y, psi, v, cte, epsi, delta(0..N-2), a(0..N-2)]

The constraint vector reuses the state part of this layout: entry
``x(0)`` pins the initial x, entry ``x(t + 1)`` holds the x dynamics
residual between steps t and t+1, and so on for every state.
"""

from dataclasses import dataclass

from polympc.core.actuation.errors import LayoutError

STATE_FIELDS = ("x", "y", "psi", "v", "cte", "epsi")
ACTUATOR_FIELDS = ("delta", "a")


@dataclass(frozen=True)
class VariableLayout:
    horizon: int

    @property
    def n_states(self):
        return len(STATE_FIELDS) * self.horizon

    @property
    def n_vars(self):
        return self.n_states + len(ACTUATOR_FIELDS) * (self.horizon - 1)

    @property
    def n_constraints(self):
        return self.n_states

    def start(self, name):
        """Offset of the first entry of the named segment."""
        if name in STATE_FIELDS:
            return STATE_FIELDS.index(name) * self.horizon
        if name in ACTUATOR_FIELDS:
            return self.n_states + ACTUATOR_FIELDS.index(name) * (self.horizon - 1)
        raise LayoutError(f"unknown segment '{name}'")

    def length(self, name):
        return self.horizon if name in STATE_FIELDS else self.horizon - 1

    def segment(self, name):
        start = self.start(name)
        return slice(start, start + self.length(name))

    def index(self, name, t):
        if not 0 <= t < self.length(name):
            raise LayoutError(f"step {t} outside segment '{name}' of length {self.length(name)}")
        return self.start(name) + t

    def x(self, t):
        return self.index("x", t)

    def y(self, t):
        return self.index("y", t)

    def psi(self, t):
        return self.index("psi", t)

    def v(self, t):
        return self.index("v", t)

    def cte(self, t):
        return self.index("cte", t)

    def epsi(self, t):
        return self.index("epsi", t)

    def delta(self, t):
        return self.index("delta", t)

    def a(self, t):
        return self.index("a", t)

    def state_at(self, vars, t):
        """Six state entries of step ``t`` in ``STATE_FIELDS`` order."""
        return [vars[self.index(name, t)] for name in STATE_FIELDS]

    def actuation_at(self, vars, t):
        """Steering and acceleration entries of step ``t``."""
        return [vars[self.index(name, t)] for name in ACTUATOR_FIELDS]

    def check(self, vector, expected=None):
        """Raise ``LayoutError`` unless ``vector`` has the layout's length."""
        expected = self.n_vars if expected is None else expected
        size = vector.shape[0] if hasattr(vector, "shape") else len(vector)
        if size != expected:
            raise LayoutError(f"vector of length {size} does not match layout length {expected}")
        return vector

"""
Reads the command and the predicted path out of a solved decision vector.
"""

from polympc.core.actuation.errors import SolverError
from polympc.core.actuation.types import Actuation, MPCSolution


class ActuationExtractor:
    def __init__(self, layout):
        self.layout = layout

    def first_actuation(self, vars):
        lay = self.layout
        return Actuation(delta=float(vars[lay.delta(0)]), a=float(vars[lay.a(0)]))

    def trajectory(self, vars):
        """Predicted (x, y) of steps 1..N-1; step 0 is the measured state."""
        lay = self.layout
        return [(float(vars[lay.x(t)]), float(vars[lay.y(t)])) for t in range(1, lay.horizon)]

    def extract(self, result):
        """
        Args:
            result (SolveResult): A successful solve.
        Returns:
            MPCSolution: First actuation pair and predicted trajectory.
        """
        if not result.success or result.x is None:
            raise SolverError(result)
        vars = self.layout.check(result.x)
        return MPCSolution(
            actuation=self.first_actuation(vars),
            trajectory=self.trajectory(vars),
            cost=result.cost,
            status=result.status,
            vars=vars,
        )

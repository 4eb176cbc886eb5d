"""
Quadratic MPC objective over one horizon.
"""


class CostModel:
    def __init__(self, config):
        """
        Args:
            config (MPCConfig): Reference targets and weights.
        """
        self.layout = config.layout
        self.weights = config.weights
        self.ref_cte = config.ref_cte
        self.ref_epsi = config.ref_epsi
        self.ref_v = config.ref_v

    def tracking(self, vars):
        """Deviation of cte, epsi and v from their references over all N steps."""
        w, lay = self.weights, self.layout
        cost = 0
        for t in range(lay.horizon):
            cost += w.cte * (vars[lay.cte(t)] - self.ref_cte) ** 2
            cost += w.epsi * (vars[lay.epsi(t)] - self.ref_epsi) ** 2
            cost += w.v * (vars[lay.v(t)] - self.ref_v) ** 2
        return cost

    def actuation(self, vars):
        """Magnitude of steering and acceleration over the N-1 control steps."""
        w, lay = self.weights, self.layout
        cost = 0
        for t in range(lay.horizon - 1):
            cost += w.delta * vars[lay.delta(t)] ** 2
            cost += w.a * vars[lay.a(t)] ** 2
        return cost

    def smoothness(self, vars):
        """Change between consecutive actuations over the N-2 control pairs."""
        w, lay = self.weights, self.layout
        cost = 0
        for t in range(lay.horizon - 2):
            cost += w.delta_diff * (vars[lay.delta(t + 1)] - vars[lay.delta(t)]) ** 2
            cost += w.a_diff * (vars[lay.a(t + 1)] - vars[lay.a(t)]) ** 2
        return cost

    def __call__(self, vars):
        return self.tracking(vars) + self.actuation(vars) + self.smoothness(vars)

"""
Defines the vehicle's discrete-time kinematic model for MPC.
States: [x, y, yaw (psi), velocity (v), cross-track error (cte), heading error (epsi)]
Controls: [steering angle (delta), acceleration (a)]
"""

import casadi as ca


class VehicleModel:
    def __init__(self, lf, dt):
        # Number of states and controls
        self.n_states = 6  # [x, y, psi, v, cte, epsi]
        self.n_controls = 2  # [delta, a]
        self.lf = lf  # Front axle to center of gravity (meters)
        self.dt = dt  # Step duration (seconds)

    @staticmethod
    def polyeval(coeffs, x):
        """Cubic reference path evaluated at x (coefficients low to high degree)."""
        return coeffs[0] + coeffs[1] * x + coeffs[2] * x * x + coeffs[3] * x * x * x

    @staticmethod
    def desired_heading(coeffs, x):
        """Tangent direction of the reference path at x."""
        return ca.atan(coeffs[1] + 2 * coeffs[2] * x + 3 * coeffs[3] * x * x)

    def step(self, state, control, coeffs):
        """
        Kinematic bicycle update from step t to t+1.

        Uses only CasADi primitives without branching so the same call works on
        floats, DM and SX (automatic differentiation inside the solver).

        Args:
            state (sequence/casadi.SX): State at t [x, y, psi, v, cte, epsi]
            control (sequence/casadi.SX): Controls at t [delta, a]
            coeffs (sequence/casadi.SX): Reference polynomial coefficients
        Returns:
            list: State at t+1 in the same order.
        """
        x, y, psi, v, cte, epsi = state
        delta, a = control
        dt = self.dt

        f = self.polyeval(coeffs, x)
        psides = self.desired_heading(coeffs, x)

        x1 = x + v * ca.cos(psi) * dt
        y1 = y + v * ca.sin(psi) * dt
        psi1 = psi + v * delta / self.lf * dt
        v1 = v + a * dt
        # cte and epsi are re-derived from the reference at x, not propagated from cte/epsi
        cte1 = (f - y) + v * ca.sin(epsi) * dt
        epsi1 = (psi - psides) + v * delta / self.lf * dt

        return [x1, y1, psi1, v1, cte1, epsi1]

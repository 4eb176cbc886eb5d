"""
Polynomial-reference model predictive control for a kinematic bicycle.
"""

from polympc.core.actuation.config import CostWeights, MPCConfig
from polympc.core.actuation.mpc_controller import CyclePhase, MPCController
from polympc.core.actuation.types import Actuation, MPCSolution, ReferencePolynomial, State

__all__ = [
    "Actuation",
    "CostWeights",
    "CyclePhase",
    "MPCConfig",
    "MPCController",
    "MPCSolution",
    "ReferencePolynomial",
    "State",
]

"""
Model Predictive Controller (MPC) for polynomial reference tracking.
Uses CasADi for symbolic optimization and IPOPT as the solver.
"""

import enum
import logging
import threading

from polympc.core.actuation.config import MPCConfig
from polympc.core.actuation.cost import CostModel
from polympc.core.actuation.errors import SolverError
from polympc.core.actuation.evaluator import FGEvaluator
from polympc.core.actuation.extractor import ActuationExtractor
from polympc.core.actuation.problem import ProblemBuilder
from polympc.core.actuation.solver import SolverAdapter
from polympc.core.actuation.types import ReferencePolynomial, State
from polympc.core.common.time_tracking import timed_cycle
from polympc.dynamics.vehicle_model import VehicleModel

logger = logging.getLogger(__name__)


class CyclePhase(enum.Enum):
    IDLE = "idle"
    BUILDING = "building"
    SOLVING = "solving"
    EXTRACTED = "extracted"
    FAILED = "failed"


class MPCController:
    def __init__(self, config=None):
        """
        Initialize MPC with configuration parameters.
        Args:
            config (MPCConfig or dict): Configuration, or the ``args`` mapping
                from a YAML file.
        """
        if config is None:
            config = MPCConfig()
        elif not isinstance(config, MPCConfig):
            config = MPCConfig.from_dict(config)
        self.config = config
        self.layout = config.layout

        # Vehicle dynamics model and objective
        self.dynamics = VehicleModel(config.lf, config.dt)
        self.cost_model = CostModel(config)
        self.evaluator = FGEvaluator(config, self.dynamics, self.cost_model)

        self.builder = ProblemBuilder(config)
        self.solver = SolverAdapter(config, self.evaluator)
        self.extractor = ActuationExtractor(self.layout)

        # The evaluator reads this cycle's coefficients; cycles must not overlap.
        self._cycle_lock = threading.Lock()
        self.phase = CyclePhase.IDLE
        self.last_phase = CyclePhase.IDLE
        self.last_result = None
        self.last_cycle_time = None

    @timed_cycle
    def solve(self, state, coeffs):
        """
        Compute the actuation for one control cycle.
        Args:
            state (State or sequence): [x, y, psi, v, cte, epsi] at cycle start.
            coeffs (ReferencePolynomial or sequence): 4 coefficients, low to high degree.
        Returns:
            MPCSolution: First actuation pair and predicted trajectory.
        Raises:
            InvalidInputError: state or coefficients are malformed.
            SolverError: IPOPT did not converge within its time budget.
        """
        # Reject malformed input before anything reaches the evaluator.
        if not isinstance(state, State):
            state = State.from_sequence(state)
        reference = ReferencePolynomial.from_sequence(coeffs)

        with self._cycle_lock:
            try:
                self.phase = CyclePhase.BUILDING
                problem = self.builder.build(state)

                self.phase = CyclePhase.SOLVING
                result = self.solver.solve(problem, reference.as_list())
                self.last_result = result
                if not result.success:
                    raise SolverError(result)

                solution = self.extractor.extract(result)
                self.phase = CyclePhase.EXTRACTED
                logger.debug(
                    f"Cost {solution.cost:.4f}: delta={solution.actuation.delta:.4f} a={solution.actuation.a:.4f}"
                )
                return solution
            except Exception:
                self.phase = CyclePhase.FAILED
                raise
            finally:
                self.last_phase = self.phase
                self.phase = CyclePhase.IDLE

    def run_step(self, state, coeffs):
        """Flat ``[delta, a, x1, y1, ...]`` output of ``solve``."""
        return self.solve(state, coeffs).to_list()

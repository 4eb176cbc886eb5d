"""
Thin adapter around CasADi's IPOPT interface.
"""

import logging
import time
from dataclasses import dataclass
from typing import Optional

import casadi as ca
import numpy as np

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class SolveResult:
    success: bool
    status: str
    x: Optional[np.ndarray] = None
    cost: Optional[float] = None
    iterations: int = 0
    solve_time: float = 0.0


class SolverAdapter:
    def __init__(self, config, evaluator):
        """
        Create the IPOPT solver for the evaluator's problem shape.

        The reference coefficients are the NLP parameter ``p``, so the solver
        is built once and every cycle only supplies numbers.

        Args:
            config (MPCConfig): Solver time budget and verbosity.
            evaluator (FGEvaluator): Differentiable cost and constraint evaluator.
        """
        self.layout = config.layout
        vars, coeffs, f, g = evaluator.symbolic()
        nlp = {"x": vars, "p": coeffs, "f": f, "g": g}

        # SX graphs give IPOPT exact sparse Jacobian and Hessian structures.
        self.options = {
            "ipopt.print_level": config.print_level,
            "ipopt.sb": "yes",
            "ipopt.max_wall_time": config.max_wall_time,
            "print_time": 0,
            "error_on_fail": False,
        }
        self.solver = ca.nlpsol("solver", "ipopt", nlp, self.options)

    def solve(self, problem, coeffs):
        """
        Run IPOPT once. Failures are reported in the result, never retried.

        Args:
            problem (Problem): Initial guess and bounds.
            coeffs (sequence): Reference polynomial coefficients.
        Returns:
            SolveResult: Status and, on success, the decision vector and cost.
        """
        lay = self.layout
        lay.check(problem.x0)
        lay.check(problem.lbx)
        lay.check(problem.ubx)
        lay.check(problem.lbg, lay.n_constraints)
        lay.check(problem.ubg, lay.n_constraints)

        start = time.perf_counter()
        try:
            sol = self.solver(
                x0=problem.x0,
                lbx=problem.lbx,
                ubx=problem.ubx,
                lbg=problem.lbg,
                ubg=problem.ubg,
                p=np.asarray(coeffs, dtype=float),
            )
        except RuntimeError as exc:
            elapsed = time.perf_counter() - start
            logger.warning(f"IPOPT raised during solve: {exc}")
            return SolveResult(success=False, status=f"Solver_Exception: {exc}", solve_time=elapsed)
        elapsed = time.perf_counter() - start

        stats = self.solver.stats()
        status = str(stats.get("return_status", "unknown"))
        iterations = int(stats.get("iter_count", 0))
        if not stats.get("success", False):
            logger.warning(f"IPOPT failed with status {status} after {iterations} iterations ({elapsed:.3f}s)")
            return SolveResult(success=False, status=status, iterations=iterations, solve_time=elapsed)

        cost = float(sol["f"])
        logger.debug(f"IPOPT {status}: cost {cost:.4f}, {iterations} iterations, {elapsed:.3f}s")
        return SolveResult(
            success=True,
            status=status,
            x=sol["x"].full().ravel(),
            cost=cost,
            iterations=iterations,
            solve_time=elapsed,
        )

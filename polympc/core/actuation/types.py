"""
Value types exchanged with the MPC core.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

import numpy as np

from polympc.core.actuation.errors import InvalidInputError


def _finite_vector(values, size, what):
    try:
        vector = np.asarray(values, dtype=float).reshape(-1)
    except (TypeError, ValueError) as exc:
        raise InvalidInputError(f"{what} must be a sequence of {size} numbers") from exc
    if vector.shape[0] != size:
        raise InvalidInputError(f"{what} must have {size} entries, got {vector.shape[0]}")
    if not np.all(np.isfinite(vector)):
        raise InvalidInputError(f"{what} contains NaN or Inf: {vector.tolist()}")
    return vector


@dataclass(frozen=True)
class State:
    """Vehicle state snapshot at the start of a control cycle."""

    x: float
    y: float
    psi: float
    v: float
    cte: float
    epsi: float

    def __post_init__(self):
        _finite_vector(self.as_list(), 6, "state")

    @classmethod
    def from_sequence(cls, values):
        return cls(*(float(value) for value in _finite_vector(values, 6, "state")))

    def as_list(self):
        return [self.x, self.y, self.psi, self.v, self.cte, self.epsi]


@dataclass(frozen=True)
class Actuation:
    delta: float  # steering angle, rad
    a: float  # normalized throttle/brake in [-1, 1]


@dataclass(frozen=True)
class ReferencePolynomial:
    """Cubic reference path ``y = c0 + c1*x + c2*x^2 + c3*x^3``."""

    coeffs: Tuple[float, float, float, float]

    def __post_init__(self):
        object.__setattr__(self, "coeffs", tuple(float(c) for c in _finite_vector(self.coeffs, 4, "reference polynomial")))

    @classmethod
    def from_sequence(cls, values):
        if isinstance(values, cls):
            return values
        return cls(tuple(_finite_vector(values, 4, "reference polynomial")))

    def as_list(self):
        return list(self.coeffs)

    def __call__(self, x):
        c0, c1, c2, c3 = self.coeffs
        return c0 + c1 * x + c2 * x ** 2 + c3 * x ** 3

    def heading(self, x):
        """Desired heading: arctangent of the path slope at ``x``."""
        _, c1, c2, c3 = self.coeffs
        return float(np.arctan(c1 + 2 * c2 * x + 3 * c3 * x ** 2))


@dataclass(frozen=True)
class MPCSolution:
    """
    Outcome of one successful control cycle.

    ``trajectory`` holds the predicted (x, y) points of steps 1..N-1 and is
    meant for visualization only.
    """

    actuation: Actuation
    trajectory: List[Tuple[float, float]]
    cost: float
    status: str
    vars: Optional[np.ndarray] = field(default=None, compare=False, repr=False)

    def to_list(self):
        """Flat output ``[delta, a, x1, y1, ..., x(N-1), y(N-1)]``."""
        result = [self.actuation.delta, self.actuation.a]
        for x, y in self.trajectory:
            result.extend((x, y))
        return result

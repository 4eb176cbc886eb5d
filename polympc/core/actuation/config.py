"""
Immutable tuning configuration for the MPC core.

A single ``MPCConfig`` snapshot is handed to every component at construction.
Changing ``horizon`` changes the size of every vector the controller builds,
so a new controller must be created for a new horizon.
"""

import math
from dataclasses import asdict, dataclass, field, fields

from polympc.core.actuation.errors import ConfigError
from polympc.core.actuation.layout import VariableLayout


def _number(name, value):
    if isinstance(value, bool):
        raise ConfigError(f"{name} must be a number, got {value!r}")
    try:
        return float(value)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"{name} must be a number, got {value!r}") from exc


@dataclass(frozen=True)
class CostWeights:
    """Quadratic cost weights. Path tracking dominates actuation effort."""

    cte: float = 500.0
    epsi: float = 500.0
    v: float = 1.0
    delta: float = 5.0
    a: float = 5.0
    delta_diff: float = 50.0
    a_diff: float = 25.0

    def __post_init__(self):
        for f in fields(self):
            value = getattr(self, f.name)
            if not math.isfinite(value) or value < 0:
                raise ConfigError(f"weight '{f.name}' must be a finite non-negative number, got {value!r}")


@dataclass(frozen=True)
class MPCConfig:
    """Horizon, vehicle, reference and solver settings."""

    horizon: int = 10
    dt: float = 0.1
    # Front axle to CoG distance, tuned so the model reproduces the measured turning radius.
    lf: float = 2.67
    ref_v: float = 40.0
    ref_cte: float = 0.0
    ref_epsi: float = 0.0
    weights: CostWeights = field(default_factory=CostWeights)
    delta_max: float = math.radians(25.0)
    a_max: float = 1.0
    unbounded: float = 1.0e19
    max_wall_time: float = 0.5  # s
    print_level: int = 0

    def __post_init__(self):
        if isinstance(self.horizon, bool) or not isinstance(self.horizon, int) or self.horizon < 2:
            raise ConfigError(f"horizon must be an integer >= 2, got {self.horizon!r}")
        for name in ("dt", "lf", "delta_max", "a_max", "unbounded", "max_wall_time"):
            value = getattr(self, name)
            if not math.isfinite(value) or value <= 0:
                raise ConfigError(f"{name} must be a finite positive number, got {value!r}")
        for name in ("ref_v", "ref_cte", "ref_epsi"):
            if not math.isfinite(getattr(self, name)):
                raise ConfigError(f"{name} must be finite")
        if not isinstance(self.weights, CostWeights):
            raise ConfigError("weights must be a CostWeights instance")

    @property
    def layout(self):
        return VariableLayout(self.horizon)

    @classmethod
    def from_dict(cls, cfg):
        """
        Build a configuration from a mapping such as a YAML ``args`` section.

        Args:
            cfg (dict): Configuration values. ``delta_max`` is in degrees and
                ``weights`` may list only the weights to override.

        Returns:
            MPCConfig: The validated configuration.
        """
        cfg = dict(cfg or {})
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(cfg) - known)
        if unknown:
            raise ConfigError(f"unknown MPC configuration keys: {unknown}")

        weights = cfg.pop("weights", None) or {}
        if not isinstance(weights, dict):
            raise ConfigError(f"weights must be a mapping, got {weights!r}")
        unknown = sorted(set(weights) - {f.name for f in fields(CostWeights)})
        if unknown:
            raise ConfigError(f"unknown cost weight keys: {unknown}")

        if "delta_max" in cfg:
            cfg["delta_max"] = math.radians(_number("delta_max", cfg["delta_max"]))
        for name in ("dt", "lf", "ref_v", "ref_cte", "ref_epsi", "a_max", "unbounded", "max_wall_time"):
            if name in cfg:
                cfg[name] = _number(name, cfg[name])

        weights = {name: _number(f"weights.{name}", value) for name, value in weights.items()}
        return cls(weights=CostWeights(**weights), **cfg)

    def to_dict(self):
        """Inverse of ``from_dict``: ``delta_max`` is reported in degrees."""
        data = asdict(self)
        data["delta_max"] = math.degrees(self.delta_max)
        return data

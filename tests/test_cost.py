"""
Tests for the MPC objective.
"""

import numpy as np
import pytest

from polympc.core.actuation.config import CostWeights, MPCConfig
from polympc.core.actuation.cost import CostModel


def test_zero_vector_only_pays_speed_error(config):
    cost_model = CostModel(config)
    vars = np.zeros(config.layout.n_vars)

    assert cost_model.tracking(vars) == pytest.approx(10 * 1.0 * 40.0 ** 2)
    assert cost_model.actuation(vars) == 0
    assert cost_model.smoothness(vars) == 0


def test_single_steering_input_pays_magnitude_and_change(config):
    layout = config.layout
    cost_model = CostModel(config)
    vars = np.zeros(layout.n_vars)
    vars[layout.v(0):layout.v(0) + layout.horizon] = config.ref_v
    vars[layout.delta(0)] = 0.1

    assert cost_model.actuation(vars) == pytest.approx(5.0 * 0.1 ** 2)
    # delta(1) - delta(0) is the only non-zero change
    assert cost_model.smoothness(vars) == pytest.approx(50.0 * 0.1 ** 2)
    assert cost_model(vars) == pytest.approx(5.0 * 0.01 + 50.0 * 0.01)


def test_tracking_is_relative_to_references():
    config = MPCConfig(ref_v=0.0, ref_cte=0.5, ref_epsi=-0.1)
    layout = config.layout
    cost_model = CostModel(config)
    vars = np.zeros(layout.n_vars)
    vars[layout.segment("cte")] = 0.5
    vars[layout.segment("epsi")] = -0.1

    assert cost_model.tracking(vars) == pytest.approx(0.0)


def test_path_errors_dominate_actuation():
    """A unit cross-track error costs far more than a unit of steering."""
    weights = CostWeights()
    assert weights.cte >= 100 * weights.delta
    assert weights.epsi >= 100 * weights.a
    assert weights.delta_diff > weights.delta
    assert weights.a_diff > weights.a


def test_custom_weights_are_used():
    config = MPCConfig(weights=CostWeights(a=2.0, a_diff=0.0))
    layout = config.layout
    vars = np.zeros(layout.n_vars)
    vars[layout.segment("a")] = 1.0

    cost_model = CostModel(config)
    assert cost_model.actuation(vars) == pytest.approx(2.0 * (layout.horizon - 1))
    assert cost_model.smoothness(vars) == pytest.approx(0.0)

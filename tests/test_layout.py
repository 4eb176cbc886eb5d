"""
Tests for the decision-vector layout.
"""

import numpy as np
import pytest

from polympc.core.actuation.errors import LayoutError
from polympc.core.actuation.layout import ACTUATOR_FIELDS, STATE_FIELDS, VariableLayout


def test_segment_offsets_for_default_horizon():
    """Six state blocks of N followed by two actuator blocks of N-1."""
    layout = VariableLayout(10)

    assert [layout.start(name) for name in STATE_FIELDS] == [0, 10, 20, 30, 40, 50]
    assert layout.start("delta") == 60
    assert layout.start("a") == 69
    assert layout.n_vars == 6 * 10 + 2 * 9
    assert layout.n_constraints == 60


def test_named_accessors_match_index():
    layout = VariableLayout(7)
    for t in range(7):
        assert layout.x(t) == t
        assert layout.epsi(t) == 35 + t
    for t in range(6):
        assert layout.delta(t) == 42 + t
        assert layout.a(t) == 48 + t
    assert layout.a(5) == layout.n_vars - 1


def test_segments_cover_vector_without_overlap():
    layout = VariableLayout(12)
    covered = np.zeros(layout.n_vars, dtype=int)
    for name in STATE_FIELDS + ACTUATOR_FIELDS:
        covered[layout.segment(name)] += 1
    assert np.all(covered == 1)


def test_out_of_range_step_is_rejected():
    layout = VariableLayout(10)
    with pytest.raises(LayoutError):
        layout.x(10)
    with pytest.raises(LayoutError):
        layout.delta(9)
    with pytest.raises(LayoutError):
        layout.start("throttle")


def test_state_and_actuation_views():
    layout = VariableLayout(4)
    vars = np.arange(layout.n_vars, dtype=float)

    assert layout.state_at(vars, 2) == [2, 6, 10, 14, 18, 22]
    assert layout.actuation_at(vars, 1) == [25, 28]


def test_check_rejects_wrong_length():
    layout = VariableLayout(10)
    layout.check(np.zeros(78))
    with pytest.raises(LayoutError):
        layout.check(np.zeros(77))
    with pytest.raises(AssertionError):
        layout.check([0.0] * 60)

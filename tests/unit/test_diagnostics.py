# tests/unit/test_diagnostics.py
"""
Unit tests for order parameter, winding number, circular variance and
the two classification rules (live vs terminal).
"""
from __future__ import annotations

import math
import numpy as np
import pytest

from ringsync.analysis.diagnostics import (
    BasinOutcome,
    OrderParameter,
    State,
    circular_variance,
    classify,
    classify_terminal,
    order_parameter,
    winding_number,
)


# ---- order parameter --------------------------------------------------------

def test_order_parameter_cancels_for_quarter_turns():
    op = order_parameter(np.array([0.0, np.pi / 2, np.pi, 1.5 * np.pi]))
    assert op.r == pytest.approx(0.0, abs=1e-12)


def test_order_parameter_equal_phases_is_one():
    op = order_parameter(np.full(9, 2.3))
    assert op.r == pytest.approx(1.0, abs=1e-12)
    assert op.r <= 1.0
    assert op.psi == pytest.approx(2.3)


def test_order_parameter_unpacks_as_pair():
    r, psi = order_parameter(np.array([0.0, 0.2]))
    assert r == pytest.approx(math.cos(0.1))
    assert psi == pytest.approx(0.1)


def test_order_parameter_psi_uses_atan2_quadrant():
    op = order_parameter(np.array([np.pi - 0.1, np.pi + 0.1]))
    assert abs(op.psi) == pytest.approx(np.pi, abs=1e-12)


@pytest.mark.parametrize("seed", range(5))
def test_order_parameter_bounded(seed):
    rng = np.random.default_rng(seed)
    theta = rng.uniform(0.0, 2 * np.pi, size=int(rng.integers(2, 64)))
    op = order_parameter(theta)
    assert isinstance(op, OrderParameter)
    assert 0.0 <= op.r <= 1.0


def test_circular_variance_is_one_minus_r():
    theta = np.array([0.0, 0.5, 1.0, 4.0])
    assert circular_variance(theta) == pytest.approx(1.0 - order_parameter(theta).r)
    assert circular_variance(np.zeros(5)) == pytest.approx(0.0, abs=1e-12)


# ---- winding number ---------------------------------------------------------

@pytest.mark.parametrize("n", [4, 5, 8, 16, 100])
def test_winding_twisted1(n):
    theta = 2 * np.pi * np.arange(n) / n
    assert winding_number(theta) == 1
    assert winding_number(theta[::-1]) == -1


@pytest.mark.parametrize("n", [5, 8, 16, 100])
def test_winding_twisted2(n):
    theta = np.mod(4 * np.pi * np.arange(n) / n, 2 * np.pi)
    assert winding_number(theta) == 2


def test_winding_synchronized_is_zero():
    assert winding_number(np.full(6, 1.0)) == 0


def test_winding_invariant_under_2pi_shifts():
    n = 10
    theta = 2 * np.pi * np.arange(n) / n
    shifted = theta + 2 * np.pi * np.array([0, 1, -2, 3, 0, 0, -1, 5, 2, 0])
    assert winding_number(shifted) == winding_number(theta) == 1


def test_winding_returns_int():
    assert type(winding_number(np.array([0.0, 1.0, 2.0]))) is int


# ---- live classification ----------------------------------------------------

def test_high_r_is_synchronized_regardless_of_q():
    label = classify(0.95, 1)
    assert label.kind is State.SYNCHRONIZED
    assert label.q == 0
    assert str(label) == "synchronized (q=0)"


@pytest.mark.parametrize(
    "r, q, kind",
    [
        (0.4, 1, State.TWISTED),
        (0.4, -1, State.TWISTED),
        (0.2, 2, State.TWISTED),
        (0.2, -2, State.TWISTED),
        (0.4, 2, State.PARTIAL),      # q=2 needs r < 0.3
        (0.2, 0, State.DESYNCHRONIZED),
        (0.2, 3, State.DESYNCHRONIZED),
        (0.6, 1, State.PARTIAL),
        (0.9, 0, State.PARTIAL),      # boundary is strict
    ],
)
def test_classify_precedence(r, q, kind):
    assert classify(r, q).kind is kind


def test_classify_labels():
    assert str(classify(0.1, -1)) == "twisted (q=-1)"
    assert str(classify(0.05, 0)) == "desynchronized"
    assert str(classify(0.4216, 2)) == "partial (r=0.42, q=2)"


def test_classify_is_pure():
    assert classify(0.45, 1) == classify(0.45, 1)


# ---- terminal classification ------------------------------------------------

@pytest.mark.parametrize(
    "r, q, outcome",
    [
        (0.86, 1, BasinOutcome.SYNC),
        (0.85, 0, BasinOutcome.OTHER),
        (0.85, 1, BasinOutcome.TWISTED1),
        (0.6, -1, BasinOutcome.TWISTED1),
        (0.1, -2, BasinOutcome.TWISTED2),
        (0.5, 3, BasinOutcome.OTHER),
    ],
)
def test_classify_terminal(r, q, outcome):
    assert classify_terminal(r, q) is outcome


def test_live_and_terminal_rules_differ():
    # r between the two sync thresholds
    assert classify(0.88, 0).kind is State.PARTIAL
    assert classify_terminal(0.88, 0) is BasinOutcome.SYNC

# tests/unit/test_ring.py
"""
Unit tests for OscillatorRing construction, mutators and accessors.
"""
from __future__ import annotations

import numpy as np
import pytest

from ringsync import OscillatorRing, setup
from ringsync.analysis.diagnostics import State
from ringsync.dynamics import ring_rhs
from ringsync.errors import ConfigError, PolicyError, StepperNotFoundError, TopologyError

TWO_PI = 2 * np.pi


def _in_range(theta: np.ndarray) -> bool:
    return bool(np.all((theta >= 0.0) & (theta < TWO_PI)))


# ---- construction -----------------------------------------------------------

def test_defaults_identical_frequencies_random_phases():
    ring = OscillatorRing(16, seed=0)
    assert ring.n == 16
    assert ring.coupling == 1.0
    np.testing.assert_array_equal(ring.frequencies, np.ones(16))
    theta = ring.get_phases()
    assert theta.shape == (16,)
    assert _in_range(theta)
    assert np.unique(theta).size == 16


@pytest.mark.parametrize("bad", [1, 0, -4, 2.5, True, "8"])
def test_invalid_size_rejected(bad):
    with pytest.raises(TopologyError):
        OscillatorRing(bad)


def test_smallest_ring_is_two():
    ring = OscillatorRing(2, seed=1)
    ring.step(0.02)
    assert ring.get_phases().shape == (2,)


def test_topology_error_is_config_error():
    with pytest.raises(ConfigError, match="at least 2"):
        OscillatorRing(1)


def test_rng_and_seed_are_exclusive():
    with pytest.raises(ConfigError, match="either rng or seed"):
        OscillatorRing(4, rng=np.random.default_rng(0), seed=0)


def test_seeded_rings_are_reproducible():
    a = OscillatorRing(8, seed=42)
    b = OscillatorRing(8, rng=np.random.default_rng(42))
    np.testing.assert_array_equal(a.get_phases(), b.get_phases())


def test_setup_applies_policies():
    ring = setup(10, coupling=2.0, frequencies="twoGroups", phases="twisted1", seed=3)
    assert ring.coupling == 2.0
    np.testing.assert_array_equal(ring.frequencies, [0.8] * 5 + [1.2] * 5)
    assert ring.get_winding_number() == 1


# ---- mutators ---------------------------------------------------------------

def test_get_phases_returns_copy():
    ring = OscillatorRing(5, seed=0)
    theta = ring.get_phases()
    theta[:] = 99.0
    assert _in_range(ring.get_phases())
    freqs = ring.frequencies
    freqs[:] = -1.0
    np.testing.assert_array_equal(ring.frequencies, np.ones(5))


def test_set_coupling_clamps_negative():
    ring = OscillatorRing(4, seed=0)
    ring.set_coupling(-3.0)
    assert ring.coupling == 0.0
    ring.set_coupling(12.5)
    assert ring.coupling == 12.5


def test_unknown_policy_is_an_error_not_a_noop():
    ring = OscillatorRing(4, seed=0)
    before = ring.get_phases()
    with pytest.raises(PolicyError):
        ring.set_initial_phases("spiral")
    with pytest.raises(PolicyError):
        ring.set_frequencies("lorentzian")
    np.testing.assert_array_equal(ring.get_phases(), before)


def test_set_phases_normalizes():
    ring = OscillatorRing(3, seed=0)
    ring.set_phases([-np.pi / 2, 5 * np.pi, 0.25])
    np.testing.assert_allclose(ring.get_phases(), [1.5 * np.pi, np.pi, 0.25], atol=1e-12)


def test_set_phases_checks_length():
    ring = OscillatorRing(3, seed=0)
    with pytest.raises(ConfigError, match="shape"):
        ring.set_phases([0.0, 1.0])
    with pytest.raises(ConfigError, match="finite"):
        ring.set_phases([0.0, np.nan, 1.0])


def test_set_frequency_values():
    ring = OscillatorRing(3, seed=0)
    ring.set_frequency_values([0.5, 1.0, 1.5])
    np.testing.assert_array_equal(ring.frequencies, [0.5, 1.0, 1.5])
    with pytest.raises(ConfigError):
        ring.set_frequency_values([1.0])


def test_perturb_zero_intensity_is_identity():
    ring = OscillatorRing(12, seed=5)
    before = ring.get_phases()
    ring.perturb(0.0)
    np.testing.assert_array_equal(ring.get_phases(), before)


def test_perturb_bounded_by_intensity():
    ring = OscillatorRing(200, seed=5)
    before = ring.get_phases()
    ring.perturb(0.1)
    after = ring.get_phases()
    delta = np.angle(np.exp(1j * (after - before)))
    assert np.max(np.abs(delta)) <= 0.1 * np.pi + 1e-12
    assert np.max(np.abs(delta)) > 0.0
    assert _in_range(after)


def test_large_perturbation_stays_wrapped():
    ring = OscillatorRing(50, seed=1)
    ring.perturb(25.0)
    assert _in_range(ring.get_phases())


# ---- integration hooks ------------------------------------------------------

def test_derivative_uses_shared_rhs():
    ring = setup(6, coupling=1.3, frequencies="random", seed=9)
    theta = ring.get_phases() + 0.3
    np.testing.assert_allclose(
        ring.derivative(theta),
        ring_rhs(theta, ring.frequencies, 1.3),
    )
    np.testing.assert_allclose(
        ring.derivative(),
        ring_rhs(ring.get_phases(), ring.frequencies, 1.3),
    )


@pytest.mark.parametrize("method", ["step", "step_rk4"])
def test_phases_stay_wrapped_with_negative_frequencies(method):
    ring = OscillatorRing(8, coupling=2.0, seed=2)
    ring.set_frequency_values(np.linspace(-3.0, 3.0, 8))
    for _ in range(300):
        getattr(ring, method)(0.05)
        assert _in_range(ring.get_phases())


def test_advance_accepts_aliases():
    a = OscillatorRing(6, seed=4)
    b = OscillatorRing(6, seed=4)
    a.advance(0.02, 10, "classical_rk4")
    for _ in range(10):
        b.step_rk4(0.02)
    np.testing.assert_array_equal(a.get_phases(), b.get_phases())


def test_advance_unknown_stepper():
    ring = OscillatorRing(4, seed=0)
    with pytest.raises(StepperNotFoundError):
        ring.advance(0.02, 1, "leapfrog")


def test_advance_rejects_negative_steps():
    ring = OscillatorRing(4, seed=0)
    with pytest.raises(ConfigError):
        ring.advance(0.02, -1)


# ---- diagnostics ------------------------------------------------------------

def test_nearly_equal_phases_classify_synchronized():
    ring = OscillatorRing(10, seed=0)
    ring.set_phases(1.0 + 0.001 * np.arange(10))
    assert ring.get_order_parameter().r > 0.999
    label = ring.classify_state()
    assert label.kind is State.SYNCHRONIZED
    assert label.q == 0


def test_quarter_turns_variance_is_one():
    ring = OscillatorRing(4, seed=0)
    ring.set_phases([0.0, np.pi / 2, np.pi, 1.5 * np.pi])
    assert ring.get_order_parameter().r == pytest.approx(0.0, abs=1e-12)
    assert ring.get_phase_variance() == pytest.approx(1.0, abs=1e-12)
    assert ring.classify_state().kind is State.TWISTED


@pytest.mark.parametrize("n", [4, 8, 16, 50])
def test_twisted1_initialization_winding(n):
    ring = OscillatorRing(n, seed=0)
    ring.set_initial_phases("twisted1")
    assert ring.get_winding_number() == 1


@pytest.mark.parametrize("n", [5, 8, 16, 50])
def test_twisted2_initialization_winding(n):
    ring = OscillatorRing(n, seed=0)
    ring.set_initial_phases("twisted2")
    assert ring.get_winding_number() == 2


def test_classify_is_stable_on_same_state():
    ring = OscillatorRing(12, seed=11)
    assert ring.classify_state() == ring.classify_state()


def test_repr_mentions_size_and_coupling():
    text = repr(OscillatorRing(4, coupling=2.0, seed=0))
    assert "n=4" in text
    assert "K=2" in text

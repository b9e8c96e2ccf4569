# tests/steppers/test_stepper_contract.py
"""
Stepper contract tests (cross-stepper):

- Registration and metadata checks (order, time_control, aliases)
- Steppers propose a state without touching the current one
- Duplicate registration guardrails
"""
from __future__ import annotations

import numpy as np
import pytest

from ringsync.dynamics import ring_rhs
from ringsync.errors import StepperNotFoundError
from ringsync.steppers import get_stepper, list_steppers, register, registry
from ringsync.steppers.euler import EulerSpec
from ringsync.steppers.rk4 import RK4Spec


def _rhs_into(y, dy, omega, K):
    ring_rhs(y, omega, K, out=dy)


def test_registered_steppers():
    assert list_steppers() == ["euler", "rk4"]
    reg = registry()
    for alias in ("fwd_euler", "forward_euler", "rk4_classic", "classical_rk4"):
        assert alias in reg


@pytest.mark.parametrize(
    "name, canonical, order",
    [("euler", "euler", 1), ("forward_euler", "euler", 1), ("rk4", "rk4", 4), ("rk4_classic", "rk4", 4)],
)
def test_metadata(name, canonical, order):
    meta = get_stepper(name).meta
    assert meta.name == canonical
    assert meta.order == order
    assert meta.time_control == "fixed"
    assert meta.scheme == "explicit"


def test_unknown_stepper_is_key_error():
    with pytest.raises(StepperNotFoundError, match="rk45"):
        get_stepper("rk45")
    with pytest.raises(KeyError):
        get_stepper("rk45")


def test_duplicate_name_with_new_spec_rejected():
    with pytest.raises(ValueError, match="already registered"):
        register(EulerSpec())


def test_reregistering_same_spec_is_idempotent():
    spec = get_stepper("rk4")
    register(spec)
    assert get_stepper("rk4") is spec


def test_registry_copy_is_detached():
    reg = registry()
    reg.pop("euler")
    assert "euler" in registry()


@pytest.mark.parametrize("spec_cls", [EulerSpec, RK4Spec])
def test_stepper_does_not_mutate_current_state(spec_cls):
    spec = spec_cls()
    n = 6
    stepper = spec.emit(_rhs_into)
    ws = spec.make_workspace(n)
    y = np.linspace(0.0, 5.0, n)
    y_before = y.copy()
    y_prop = np.empty(n)
    stepper(0.1, y, np.ones(n), 1.5, ws, y_prop)
    np.testing.assert_array_equal(y, y_before)
    assert not np.allclose(y_prop, y)


def test_euler_single_step_formula():
    spec = EulerSpec()
    n = 5
    rng = np.random.default_rng(0)
    y = rng.uniform(0.0, 2 * np.pi, size=n)
    omega = rng.uniform(0.8, 1.2, size=n)
    y_prop = np.empty(n)
    spec.emit(_rhs_into)(0.02, y, omega, 2.0, spec.make_workspace(n), y_prop)
    np.testing.assert_allclose(y_prop, y + 0.02 * ring_rhs(y, omega, 2.0), rtol=0, atol=1e-15)


def test_rk4_single_step_formula():
    spec = RK4Spec()
    n = 5
    dt = 0.1
    rng = np.random.default_rng(1)
    y = rng.uniform(0.0, 2 * np.pi, size=n)
    omega = rng.uniform(0.8, 1.2, size=n)
    f = lambda v: ring_rhs(v, omega, 1.0)
    k1 = f(y)
    k2 = f(y + 0.5 * dt * k1)
    k3 = f(y + 0.5 * dt * k2)
    k4 = f(y + dt * k3)
    expected = y + dt / 6.0 * (k1 + 2 * k2 + 2 * k3 + k4)
    y_prop = np.empty(n)
    spec.emit(_rhs_into)(dt, y, omega, 1.0, spec.make_workspace(n), y_prop)
    np.testing.assert_allclose(y_prop, expected, rtol=0, atol=1e-13)

# src/ringsync/steppers/rk4.py
"""
RK4 (Runge-Kutta 4th order, explicit, fixed-step) stepper implementation.

Used where trajectory fidelity matters more than per-call cost.
"""
from __future__ import annotations
from typing import TYPE_CHECKING, NamedTuple
import numpy as np

from .base import StepperMeta

if TYPE_CHECKING:
    from .base import RhsFn, StepperFn

__all__ = ["RK4Spec"]


class RK4Spec:
    """
    Classic 4th-order Runge-Kutta stepper (explicit, fixed-step).

    Formula (autonomous field):
        k1 = f(y)
        k2 = f(y + dt/2 * k1)
        k3 = f(y + dt/2 * k2)
        k4 = f(y + dt * k3)
        y_{n+1} = y_n + dt/6 * (k1 + 2*k2 + 2*k3 + k4)
    """
    def __init__(self, meta: StepperMeta | None = None):
        if meta is None:
            meta = StepperMeta(
                name="rk4",
                time_control="fixed",
                scheme="explicit",
                family="runge-kutta",
                order=4,
                aliases=("rk4_classic", "classical_rk4"),
            )
        self.meta = meta

    class Workspace(NamedTuple):
        y_stage: np.ndarray
        k1: np.ndarray
        k2: np.ndarray
        k3: np.ndarray
        k4: np.ndarray

    def make_workspace(self, n_state: int) -> Workspace:
        zeros = lambda: np.zeros((n_state,), dtype=np.float64)
        return RK4Spec.Workspace(
            y_stage=zeros(),
            k1=zeros(),
            k2=zeros(),
            k3=zeros(),
            k4=zeros(),
        )

    def emit(self, rhs_fn: RhsFn) -> StepperFn:
        """
        Build the RK4 stepper function.

        Signature:
            stepper(dt, y_curr, frequencies, coupling, ws, y_prop) -> None
        """
        def rk4_stepper(dt, y_curr, frequencies, coupling, ws, y_prop):
            k1 = ws.k1
            k2 = ws.k2
            k3 = ws.k3
            k4 = ws.k4
            y_stage = ws.y_stage

            # Stage 1: k1 = f(y)
            rhs_fn(y_curr, k1, frequencies, coupling)

            # Stage 2: k2 = f(y + dt/2 * k1)
            np.multiply(0.5 * dt, k1, out=y_stage)
            y_stage += y_curr
            rhs_fn(y_stage, k2, frequencies, coupling)

            # Stage 3: k3 = f(y + dt/2 * k2)
            np.multiply(0.5 * dt, k2, out=y_stage)
            y_stage += y_curr
            rhs_fn(y_stage, k3, frequencies, coupling)

            # Stage 4: k4 = f(y + dt * k3)
            np.multiply(dt, k3, out=y_stage)
            y_stage += y_curr
            rhs_fn(y_stage, k4, frequencies, coupling)

            # Combine: y_prop = y + dt/6 * (k1 + 2*k2 + 2*k3 + k4)
            np.add(k2, k3, out=y_prop)
            y_prop *= 2.0
            y_prop += k1
            y_prop += k4
            y_prop *= dt / 6.0
            y_prop += y_curr

        return rk4_stepper


# Auto-register on module import
def _auto_register():
    from .registry import register
    spec = RK4Spec()
    register(spec)

_auto_register()

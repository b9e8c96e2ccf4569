# src/ringsync/steppers/euler.py
"""
Euler (explicit, fixed-step) stepper implementation.

Single RHS buffer workspace; first-order accurate. Intended for the live
per-tick update where dt is small.
"""
from __future__ import annotations
from typing import TYPE_CHECKING, NamedTuple
import numpy as np

from .base import StepperMeta

if TYPE_CHECKING:
    from .base import RhsFn, StepperFn

__all__ = ["EulerSpec"]

# NOTE: steppers propose raw states only. Wrapping into [0, 2π) is done once
#       by the ring after every accepted step, identically for all steppers.

class EulerSpec:
    """
    Explicit Euler stepper: y_{n+1} = y_n + dt * f(y_n)

    Fixed-step, order 1, explicit scheme.
    """
    def __init__(self, meta: StepperMeta | None = None):
        if meta is None:
            meta = StepperMeta(
                name="euler",
                time_control="fixed",
                scheme="explicit",
                family="euler",
                order=1,
                aliases=("fwd_euler", "forward_euler"),
            )
        self.meta = meta

    class Workspace(NamedTuple):
        dy: np.ndarray

    def make_workspace(self, n_state: int) -> Workspace:
        return EulerSpec.Workspace(
            dy=np.zeros((n_state,), dtype=np.float64),
        )

    def emit(self, rhs_fn: RhsFn) -> StepperFn:
        """
        Build the Euler stepper function.

        Signature:
            stepper(dt, y_curr, frequencies, coupling, ws, y_prop) -> None
        """
        def euler_stepper(dt, y_curr, frequencies, coupling, ws, y_prop):
            dy = ws.dy
            rhs_fn(y_curr, dy, frequencies, coupling)
            np.multiply(dt, dy, out=y_prop)
            y_prop += y_curr

        return euler_stepper


# Auto-register on module import
def _auto_register():
    from .registry import register
    spec = EulerSpec()
    register(spec)

_auto_register()

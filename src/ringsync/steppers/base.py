# src/ringsync/steppers/base.py
from __future__ import annotations
from dataclasses import dataclass
from typing import Literal, NamedTuple, Protocol, Callable
import numpy as np

__all__ = [
    "TimeCtrl", "Scheme", "StepperMeta", "StepperSpec", "RhsFn", "StepperFn",
]

TimeCtrl = Literal["fixed"]
Scheme = Literal["explicit"]

# rhs(phases, dy_out, frequencies, coupling) -> None
RhsFn = Callable[[np.ndarray, np.ndarray, np.ndarray, float], None]

# stepper(dt, y_curr, frequencies, coupling, ws, y_prop) -> None
StepperFn = Callable[[float, np.ndarray, np.ndarray, float, NamedTuple, np.ndarray], None]


@dataclass(frozen=True)
class StepperMeta:
    """
    Public metadata for a stepper.
    Only fixed-step explicit schemes exist; ``time_control`` and ``scheme``
    are kept so listings read the same as for a general integrator library.
    """
    name: str
    time_control: TimeCtrl = "fixed"
    scheme: Scheme = "explicit"
    family: str = ""
    order: int = 1
    aliases: tuple[str, ...] = ()


class StepperSpec(Protocol):
    """
    Interface every stepper spec implements.
    Implementations MUST:
      - expose ``meta: StepperMeta``
      - provide ``make_workspace(n_state) -> NamedTuple`` of scratch arrays
      - provide ``emit(rhs_fn) -> StepperFn``; the returned function writes the
        proposed (un-wrapped) state into ``y_prop`` and never touches ``y_curr``
    """

    meta: StepperMeta

    def make_workspace(self, n_state: int) -> NamedTuple: ...

    def emit(self, rhs_fn: RhsFn) -> StepperFn: ...

# src/ringsync/analysis/diagnostics.py
"""
Collective-state diagnostics for a ring of phases.

All functions are pure in the phase vector; nothing here is cached on the ring.

Two classification rules exist and intentionally use different thresholds:

- ``classify`` is the live label shown while a ring evolves
  (r > 0.9 / twisted below 0.5 or 0.3 / desynchronized below 0.3).
- ``classify_terminal`` buckets the end state of a basin trial
  (r > 0.85, then |q| alone).
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
import math
import numpy as np

__all__ = [
    "OrderParameter",
    "State",
    "StateLabel",
    "BasinOutcome",
    "order_parameter",
    "winding_number",
    "circular_variance",
    "classify",
    "classify_terminal",
]

_TWO_PI = 2.0 * math.pi

# Live classification thresholds
SYNC_R = 0.9
TWIST1_MAX_R = 0.5
TWIST2_MAX_R = 0.3
DESYNC_MAX_R = 0.3

# Terminal (basin trial) threshold
TERMINAL_SYNC_R = 0.85


@dataclass(frozen=True)
class OrderParameter:
    """Kuramoto order parameter r·e^{iψ} = (1/N) Σ e^{iθ_j}."""
    r: float
    psi: float

    def __iter__(self):
        yield self.r
        yield self.psi


class State(str, Enum):
    SYNCHRONIZED = "synchronized"
    TWISTED = "twisted"
    DESYNCHRONIZED = "desynchronized"
    PARTIAL = "partial"


@dataclass(frozen=True)
class StateLabel:
    kind: State
    r: float
    q: int

    def __str__(self) -> str:
        if self.kind is State.SYNCHRONIZED:
            return "synchronized (q=0)"
        if self.kind is State.TWISTED:
            return f"twisted (q={self.q})"
        if self.kind is State.DESYNCHRONIZED:
            return "desynchronized"
        return f"partial (r={self.r:.2f}, q={self.q})"


class BasinOutcome(str, Enum):
    SYNC = "sync"
    TWISTED1 = "twisted1"
    TWISTED2 = "twisted2"
    OTHER = "other"


def order_parameter(phases: np.ndarray) -> OrderParameter:
    """Mean of the unit phasors: magnitude r in [0, 1] and mean phase ψ."""
    theta = np.asarray(phases, dtype=np.float64)
    mean_cos = float(np.mean(np.cos(theta)))
    mean_sin = float(np.mean(np.sin(theta)))
    r = math.sqrt(mean_cos * mean_cos + mean_sin * mean_sin)
    # rounding can push a perfectly coherent sum a hair above one
    r = min(r, 1.0)
    return OrderParameter(r=r, psi=math.atan2(mean_sin, mean_cos))


def winding_number(phases: np.ndarray) -> int:
    """
    Net number of 2π twists going once around the ring.

    Each neighbour difference θ_{i+1} - θ_i is wrapped into [-π, π] before
    summing. A difference sitting exactly on ±π is ambiguous and is left as is,
    so a configuration sampled exactly at such a crossing can read one off.
    """
    theta = np.asarray(phases, dtype=np.float64)
    total = 0.0
    for diff in (np.roll(theta, -1) - theta).tolist():
        while diff > math.pi:
            diff -= _TWO_PI
        while diff < -math.pi:
            diff += _TWO_PI
        total += diff
    return int(round(total / _TWO_PI))


def circular_variance(phases: np.ndarray) -> float:
    """Circular variance 1 - r: 0 at perfect synchrony, towards 1 when dispersed."""
    return 1.0 - order_parameter(phases).r


def classify(r: float, q: int) -> StateLabel:
    """
    Live state label from (r, q). Rules are checked in order:

    1. r > 0.9                  -> synchronized (q reported as 0)
    2. |q| == 1 and r < 0.5     -> twisted
    3. |q| == 2 and r < 0.3     -> twisted
    4. r < 0.3                  -> desynchronized
    5. otherwise                -> partial
    """
    if r > SYNC_R:
        return StateLabel(State.SYNCHRONIZED, r, 0)
    if abs(q) == 1 and r < TWIST1_MAX_R:
        return StateLabel(State.TWISTED, r, q)
    if abs(q) == 2 and r < TWIST2_MAX_R:
        return StateLabel(State.TWISTED, r, q)
    if r < DESYNC_MAX_R:
        return StateLabel(State.DESYNCHRONIZED, r, q)
    return StateLabel(State.PARTIAL, r, q)


def classify_terminal(r: float, q: int) -> BasinOutcome:
    """Bucket for the end state of a basin trial."""
    if r > TERMINAL_SYNC_R:
        return BasinOutcome.SYNC
    if abs(q) == 1:
        return BasinOutcome.TWISTED1
    if abs(q) == 2:
        return BasinOutcome.TWISTED2
    return BasinOutcome.OTHER

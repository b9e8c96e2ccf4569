# src/ringsync/runtime/trajectory.py
from __future__ import annotations

from dataclasses import dataclass
import warnings

import numpy as np

from ringsync.errors import ConfigError
from .ring import DEFAULT_DT, OscillatorRing

__all__ = ["Trajectory", "simulate", "effective_dt", "SPEED_MIN", "SPEED_MAX"]

# Playback speed multiplier range applied on top of the base dt
SPEED_MIN = 0.25
SPEED_MAX = 4.0


@dataclass(frozen=True)
class Trajectory:
    """
    Recorded diagnostics of a fixed-step run.

    Fields:
      - t: elapsed time at each record, shape (n_rec,)
      - r, psi: order parameter magnitude / mean phase per record
      - q: winding number per record (int64)
      - final_phases: copy of the ring phases after the last step
      - dt: effective step used
      - method: stepper name
    """
    t: np.ndarray
    r: np.ndarray
    psi: np.ndarray
    q: np.ndarray
    final_phases: np.ndarray
    dt: float
    method: str

    @property
    def n(self) -> int:
        return int(self.t.shape[0])

    def __repr__(self) -> str:
        r_last = float(self.r[-1]) if self.n else float("nan")
        return f"Trajectory({self.n} records, dt={self.dt:g}, method={self.method!r}, r_final={r_last:.3f})"


def effective_dt(dt: float, speed: float = 1.0) -> float:
    """Base step scaled by a speed multiplier clamped to [0.25, 4]."""
    clamped = min(SPEED_MAX, max(SPEED_MIN, float(speed)))
    if clamped != speed:
        warnings.warn(
            f"speed={speed} outside [{SPEED_MIN}, {SPEED_MAX}]; using {clamped}.",
            RuntimeWarning,
            stacklevel=3,
        )
    return float(dt) * clamped


def simulate(
    ring: OscillatorRing,
    *,
    steps: int,
    dt: float = DEFAULT_DT,
    speed: float = 1.0,
    method: str = "euler",
    record_every: int = 1,
) -> Trajectory:
    """
    Advance ``ring`` in place for ``steps`` fixed steps and record (t, r, ψ, q).

    The initial state is always recorded; afterwards every ``record_every``-th
    step is recorded, and the final step is always included.
    """
    if steps < 0:
        raise ConfigError(f"steps must be non-negative (got {steps})")
    if record_every < 1:
        raise ConfigError(f"record_every must be >= 1 (got {record_every})")

    h = effective_dt(dt, speed)
    t_rec: list[float] = []
    r_rec: list[float] = []
    psi_rec: list[float] = []
    q_rec: list[int] = []

    def record(step_idx: int) -> None:
        op = ring.get_order_parameter()
        t_rec.append(step_idx * h)
        r_rec.append(op.r)
        psi_rec.append(op.psi)
        q_rec.append(ring.get_winding_number())

    record(0)
    for k in range(1, int(steps) + 1):
        ring.advance(h, 1, method)
        if k % record_every == 0 or k == steps:
            record(k)

    return Trajectory(
        t=np.asarray(t_rec, dtype=np.float64),
        r=np.asarray(r_rec, dtype=np.float64),
        psi=np.asarray(psi_rec, dtype=np.float64),
        q=np.asarray(q_rec, dtype=np.int64),
        final_phases=ring.get_phases(),
        dt=h,
        method=method,
    )

# src/ringsync/analysis/sweep.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Literal
import numpy as np

from ringsync.errors import ConfigError
from ringsync.runtime.ring import DEFAULT_DT, OscillatorRing

__all__ = ["SweepBranch", "Hysteresis", "coupling_sweep", "hysteresis"]

K_MIN = 0.0
K_MAX = 5.0
SWEEP_SPEED = 0.005

Direction = Literal["up", "down"]


@dataclass(frozen=True)
class SweepBranch:
    """One monotone K ramp: K[i] is the coupling in effect when r[i] was measured."""
    direction: Direction
    K: np.ndarray
    r: np.ndarray

    def __len__(self) -> int:
        return int(self.K.shape[0])

    def __repr__(self) -> str:
        if not len(self):
            return f"SweepBranch({self.direction}, empty)"
        return f"SweepBranch({self.direction}, {len(self)} points, K {self.K[0]:.3f}->{self.K[-1]:.3f})"


@dataclass(frozen=True)
class Hysteresis:
    up: SweepBranch
    down: SweepBranch

    def r_at(self, K: float) -> tuple[float, float]:
        """Order parameter on the (up, down) branches at the sample nearest to K."""
        i_up = int(np.argmin(np.abs(self.up.K - K)))
        i_dn = int(np.argmin(np.abs(self.down.K - K)))
        return float(self.up.r[i_up]), float(self.down.r[i_dn])


def _resolve_direction(direction) -> Direction:
    if direction in ("up", 1, +1):
        return "up"
    if direction in ("down", -1):
        return "down"
    raise ConfigError(f"direction must be 'up'/'down' or +1/-1 (got {direction!r})")


def coupling_sweep(
    ring: OscillatorRing,
    direction: Direction | int,
    *,
    dt: float = DEFAULT_DT,
    speed: float = SWEEP_SPEED,
    k_min: float = K_MIN,
    k_max: float = K_MAX,
    steps_per_k: int = 1,
    method: str = "euler",
) -> SweepBranch:
    """
    Ramp the ring's coupling monotonically while it evolves, recording (K, r).

    Each tick advances ``steps_per_k`` steps at the current K, records
    (K, r), then moves K by ``speed`` in the sweep direction. The ramp stops
    once K is clamped to ``k_min`` / ``k_max``; the bound itself is recorded
    as the final point. The ring is mutated in place and keeps the final K.
    """
    sense = _resolve_direction(direction)
    if speed <= 0:
        raise ConfigError(f"speed must be positive (got {speed})")
    if not 0.0 <= k_min < k_max:
        raise ConfigError(f"need 0 <= k_min < k_max (got k_min={k_min}, k_max={k_max})")
    if steps_per_k < 1:
        raise ConfigError(f"steps_per_k must be >= 1 (got {steps_per_k})")

    sign = 1.0 if sense == "up" else -1.0
    K = min(k_max, max(k_min, ring.coupling))
    ks: list[float] = []
    rs: list[float] = []
    while True:
        ring.set_coupling(K)
        ring.advance(dt, steps_per_k, method)
        ks.append(K)
        rs.append(ring.get_order_parameter().r)
        if (sign > 0 and K >= k_max) or (sign < 0 and K <= k_min):
            break
        K = min(k_max, max(k_min, K + sign * speed))

    return SweepBranch(
        direction=sense,
        K=np.asarray(ks, dtype=np.float64),
        r=np.asarray(rs, dtype=np.float64),
    )


def hysteresis(
    ring: OscillatorRing,
    *,
    dt: float = DEFAULT_DT,
    speed: float = SWEEP_SPEED,
    k_min: float = K_MIN,
    k_max: float = K_MAX,
    steps_per_k: int = 1,
    method: str = "euler",
) -> Hysteresis:
    """Sweep K from k_min up to k_max, then back down, on the same ring."""
    ring.set_coupling(k_min)
    kwargs = dict(dt=dt, speed=speed, k_min=k_min, k_max=k_max, steps_per_k=steps_per_k, method=method)
    up = coupling_sweep(ring, "up", **kwargs)
    down = coupling_sweep(ring, "down", **kwargs)
    return Hysteresis(up=up, down=down)

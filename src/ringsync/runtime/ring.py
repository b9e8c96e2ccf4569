# src/ringsync/runtime/ring.py
from __future__ import annotations

from typing import Dict, NamedTuple, Sequence
import numbers

import numpy as np

from ringsync.analysis.diagnostics import (
    OrderParameter,
    StateLabel,
    circular_variance,
    classify,
    order_parameter,
    winding_number,
)
from ringsync.dynamics import ring_rhs, wrap_phases
from ringsync.errors import ConfigError, TopologyError
from ringsync.policies import (
    FrequencyPolicy,
    PhasePolicy,
    make_frequencies,
    make_phases,
)
from ringsync.steppers import get_stepper
from ringsync.steppers.base import StepperFn

__all__ = ["OscillatorRing", "DEFAULT_DT", "DEFAULT_COUPLING"]

DEFAULT_DT = 0.02
DEFAULT_COUPLING = 1.0
DEFAULT_PERTURBATION = 0.1


def _rhs_into(phases: np.ndarray, dy_out: np.ndarray, frequencies: np.ndarray, coupling: float) -> None:
    ring_rhs(phases, frequencies, coupling, out=dy_out)


def _coerce_rng(rng: np.random.Generator | None, seed: int | None) -> np.random.Generator:
    if rng is not None and seed is not None:
        raise ConfigError("Pass either rng or seed, not both.")
    if rng is not None:
        return rng
    return np.random.default_rng(seed)


class OscillatorRing:
    """
    N identical-topology phase oscillators on a periodic ring.

    The ring owns its phase and frequency arrays; all mutators keep every phase
    in [0, 2π) and both arrays at length N. Randomness comes only from the
    injected generator (``rng``) or one seeded from ``seed``.

    Example::

        ring = OscillatorRing(16, coupling=2.0, seed=1)
        ring.set_initial_phases("twisted1")
        for _ in range(500):
            ring.step_rk4(0.02)
        print(ring.classify_state())
    """

    def __init__(
        self,
        n: int,
        *,
        coupling: float = DEFAULT_COUPLING,
        rng: np.random.Generator | None = None,
        seed: int | None = None,
    ) -> None:
        if isinstance(n, bool) or not isinstance(n, numbers.Integral) or n < 2:
            raise TopologyError(n)
        self._n = int(n)
        self._rng = _coerce_rng(rng, seed)
        self._phases = np.zeros((self._n,), dtype=np.float64)
        self._frequencies = np.ones((self._n,), dtype=np.float64)
        self._coupling = 0.0
        self._y_prop = np.empty((self._n,), dtype=np.float64)
        # stepper name -> (stepper fn, workspace)
        self._steppers: Dict[str, tuple[StepperFn, NamedTuple]] = {}

        self.set_coupling(coupling)
        self.set_frequencies(FrequencyPolicy.IDENTICAL)
        self.set_initial_phases(PhasePolicy.RANDOM)

    # ------------------------------------------------------------------ state

    @property
    def n(self) -> int:
        return self._n

    @property
    def coupling(self) -> float:
        return self._coupling

    @property
    def frequencies(self) -> np.ndarray:
        return self._frequencies.copy()

    @property
    def rng(self) -> np.random.Generator:
        return self._rng

    def get_phases(self) -> np.ndarray:
        """Independent copy of the phase vector."""
        return self._phases.copy()

    def set_phases(self, values: Sequence[float] | np.ndarray) -> None:
        """Overwrite all phases (normalized into [0, 2π))."""
        arr = self._check_length("phases", values)
        wrap_phases(arr, out=self._phases)

    def set_frequency_values(self, values: Sequence[float] | np.ndarray) -> None:
        """Overwrite all natural frequencies with explicit values."""
        self._frequencies[:] = self._check_length("frequencies", values)

    def set_frequencies(self, policy: FrequencyPolicy | str) -> None:
        """Assign natural frequencies from a named policy."""
        self._frequencies[:] = make_frequencies(policy, self._n, self._rng)

    def set_initial_phases(self, policy: PhasePolicy | str) -> None:
        """Assign phases from a named policy, then normalize."""
        wrap_phases(make_phases(policy, self._n, self._rng), out=self._phases)

    def set_coupling(self, coupling: float) -> None:
        """Set K; negative values are clamped to 0 (no upper bound)."""
        self._coupling = max(0.0, float(coupling))

    def perturb(self, intensity: float = DEFAULT_PERTURBATION) -> None:
        """
        Add independent uniform noise in [-intensity·π, intensity·π) to every phase.
        ``intensity`` is not bounded; large values simply randomize the ring.
        """
        half_width = abs(float(intensity)) * np.pi
        if half_width == 0.0:
            return
        self._phases += self._rng.uniform(-half_width, half_width, size=self._n)
        wrap_phases(self._phases, out=self._phases)

    # ------------------------------------------------------------ integration

    def derivative(self, phases: np.ndarray | None = None) -> np.ndarray:
        """dθ/dt at ``phases`` (default: the current state) under this ring's ω and K."""
        theta = self._phases if phases is None else self._check_length("phases", phases)
        return ring_rhs(theta, self._frequencies, self._coupling)

    def step(self, dt: float) -> None:
        """Advance one explicit Euler step."""
        self._advance_once("euler", float(dt))

    def step_rk4(self, dt: float) -> None:
        """Advance one classic RK4 step."""
        self._advance_once("rk4", float(dt))

    def advance(self, dt: float, steps: int = 1, method: str = "euler") -> None:
        """Apply ``steps`` fixed steps of the named stepper (name or alias)."""
        if steps < 0:
            raise ConfigError(f"steps must be non-negative (got {steps})")
        dt = float(dt)
        for _ in range(int(steps)):
            self._advance_once(method, dt)

    def _advance_once(self, method: str, dt: float) -> None:
        stepper, ws = self._stepper_for(method)
        stepper(dt, self._phases, self._frequencies, self._coupling, ws, self._y_prop)
        wrap_phases(self._y_prop, out=self._phases)

    def _stepper_for(self, method: str) -> tuple[StepperFn, NamedTuple]:
        cached = self._steppers.get(method)
        if cached is None:
            spec = get_stepper(method)
            cached = (spec.emit(_rhs_into), spec.make_workspace(self._n))
            self._steppers[method] = cached
        return cached

    # ------------------------------------------------------------ diagnostics

    def get_order_parameter(self) -> OrderParameter:
        return order_parameter(self._phases)

    def get_winding_number(self) -> int:
        return winding_number(self._phases)

    def get_phase_variance(self) -> float:
        """Circular variance 1 - r."""
        return circular_variance(self._phases)

    def classify_state(self) -> StateLabel:
        r = self.get_order_parameter().r
        return classify(r, self.get_winding_number())

    # ---------------------------------------------------------------- helpers

    def _check_length(self, name: str, values) -> np.ndarray:
        arr = np.array(values, dtype=np.float64, copy=True)
        if arr.shape != (self._n,):
            raise ConfigError(f"{name} must have shape ({self._n},), got {arr.shape}")
        if not np.all(np.isfinite(arr)):
            raise ConfigError(f"{name} must be finite")
        return arr

    def __repr__(self) -> str:
        op = self.get_order_parameter()
        return (
            f"OscillatorRing(n={self._n}, K={self._coupling:g}, "
            f"r={op.r:.3f}, q={self.get_winding_number()})"
        )

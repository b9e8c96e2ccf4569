# src/ringsync/__init__.py
from __future__ import annotations

# Re-export the public engine surface for stable imports
from .errors import RingsyncError, ConfigError, TopologyError, PolicyError, StepperNotFoundError
from .policies import FrequencyPolicy, PhasePolicy
from .dynamics import ring_rhs, wrap_phases
from .steppers import get_stepper, list_steppers, registry
from .runtime.ring import OscillatorRing
from .runtime.trajectory import Trajectory, simulate
from .analysis.diagnostics import (
    OrderParameter, State, StateLabel, BasinOutcome,
    order_parameter, winding_number, circular_variance, classify, classify_terminal,
)
from .analysis.basin import BasinExperiment, BasinResult
from .analysis.sweep import SweepBranch, Hysteresis, coupling_sweep, hysteresis


__all__ = [
    # Core entry points
    "OscillatorRing", "BasinExperiment", "simulate", "setup",
    # Policies
    "FrequencyPolicy", "PhasePolicy",
    # Dynamics
    "ring_rhs", "wrap_phases",
    # Results / diagnostics
    "Trajectory", "BasinResult", "SweepBranch", "Hysteresis",
    "OrderParameter", "State", "StateLabel", "BasinOutcome",
    "order_parameter", "winding_number", "circular_variance", "classify", "classify_terminal",
    "coupling_sweep", "hysteresis",
    # Stepper registry
    "get_stepper", "list_steppers", "registry",
    # Errors
    "RingsyncError", "ConfigError", "TopologyError", "PolicyError", "StepperNotFoundError",
]


def setup(
    n: int = 16, *,
    coupling: float = 1.0,
    frequencies: FrequencyPolicy | str = FrequencyPolicy.IDENTICAL,
    phases: PhasePolicy | str = PhasePolicy.RANDOM,
    seed: int | None = None,
) -> OscillatorRing:
    """Build and initialize a ring in one call.

    Convenience wrapper around ``OscillatorRing`` plus the two policy setters.
    Use the class directly when you need to inject a shared generator.

    Parameters:
        n: Number of oscillators (>= 2).
        coupling: Coupling strength K (negative values clamp to 0).
        frequencies: Natural-frequency policy ("identical", "random", "twoGroups").
        phases: Initial-phase policy ("random", "quasiSync", "twisted1", "twisted2").
        seed: Seed for the ring's random generator.

    Returns:
        A ready-to-step ``OscillatorRing``.

    Example::

        from ringsync import setup

        ring = setup(32, coupling=2.5, phases="quasiSync", seed=7)
        ring.step_rk4(0.02)
        print(ring.classify_state())
    """
    ring = OscillatorRing(n, coupling=coupling, seed=seed)
    ring.set_frequencies(frequencies)
    ring.set_initial_phases(phases)
    return ring

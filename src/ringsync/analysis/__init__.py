"""Diagnostics and batch experiments built on OscillatorRing."""

import importlib

from ringsync.analysis.diagnostics import (
    BasinOutcome,
    OrderParameter,
    State,
    StateLabel,
    circular_variance,
    classify,
    classify_terminal,
    order_parameter,
    winding_number,
)

_BASIN_EXPORTS = {
    "BasinExperiment",
    "BasinResult",
}

_SWEEP_EXPORTS = {
    "SweepBranch",
    "Hysteresis",
    "coupling_sweep",
    "hysteresis",
}

__all__ = [
    # Diagnostics
    "BasinOutcome",
    "OrderParameter",
    "State",
    "StateLabel",
    "circular_variance",
    "classify",
    "classify_terminal",
    "order_parameter",
    "winding_number",
    # Batch experiments
    *_BASIN_EXPORTS,
    # Coupling sweeps
    *_SWEEP_EXPORTS,
]


def __getattr__(name):
    if name in _BASIN_EXPORTS:
        module = importlib.import_module("ringsync.analysis.basin")
        value = getattr(module, name)
        globals()[name] = value
        return value
    if name in _SWEEP_EXPORTS:
        module = importlib.import_module("ringsync.analysis.sweep")
        value = getattr(module, name)
        globals()[name] = value
        return value
    raise AttributeError(f"module 'ringsync.analysis' has no attribute '{name}'")

# src/ringsync/dynamics.py
"""
Ring-coupled Kuramoto vector field.

    dθ_i/dt = ω_i + (K/2) * [sin(θ_{i+1} - θ_i) + sin(θ_{i-1} - θ_i)]

with periodic neighbours (i ± 1 mod N).
"""
from __future__ import annotations

import numpy as np

__all__ = ["TWO_PI", "ring_rhs", "wrap_phases"]

TWO_PI = 2.0 * np.pi


def ring_rhs(
    phases: np.ndarray,
    frequencies: np.ndarray,
    coupling: float,
    out: np.ndarray | None = None,
) -> np.ndarray:
    """
    Evaluate the ring vector field for an arbitrary phase vector.

    Pure in (phases, frequencies, coupling): the same inputs always give the
    same derivative, so it serves both the live state and RK4 stage vectors.

    Args:
        phases: Phase vector, shape (N,). Need not be wrapped.
        frequencies: Natural frequencies ω, shape (N,).
        coupling: Global coupling strength K.
        out: Optional preallocated output buffer of shape (N,).

    Returns:
        The derivative dθ/dt (``out`` if given).
    """
    theta = np.asarray(phases, dtype=np.float64)
    nxt = np.roll(theta, -1)   # θ_{i+1}
    prv = np.roll(theta, 1)    # θ_{i-1}
    coupling_term = np.sin(nxt - theta) + np.sin(prv - theta)
    if out is None:
        out = np.empty_like(theta)
    np.multiply(0.5 * coupling, coupling_term, out=out)
    out += frequencies
    return out


def wrap_phases(phases: np.ndarray, out: np.ndarray | None = None) -> np.ndarray:
    """
    Map phases into [0, 2π) with a true (floor) modulo.

    Negative inputs wrap upward. Tiny negatives whose modulo rounds to
    exactly 2π are mapped to 0 so the half-open interval holds.
    """
    res = np.mod(phases, TWO_PI, out=out)
    res[res >= TWO_PI] = 0.0
    return res

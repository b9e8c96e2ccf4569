# src/ringsync/policies.py
"""
Initialization policies for natural frequencies and initial phases.

Each policy is an enum member mapped to a pure function ``(n, rng) -> ndarray``.
Phase policies return raw (un-normalized) angles; the ring normalizes them
into [0, 2π) after assignment.
"""
from __future__ import annotations

from enum import Enum
from typing import Callable, Dict
import numpy as np

from ringsync.errors import PolicyError

__all__ = [
    "FrequencyPolicy",
    "PhasePolicy",
    "make_frequencies",
    "make_phases",
    "resolve_frequency_policy",
    "resolve_phase_policy",
]

TWO_PI = 2.0 * np.pi

# Frequency constants
OMEGA_IDENTICAL = 1.0
OMEGA_LOW = 0.8
OMEGA_HIGH = 1.2

# Half-width of the quasi-sync noise band (total amplitude 0.3)
QUASI_SYNC_HALF_WIDTH = 0.15


class FrequencyPolicy(str, Enum):
    IDENTICAL = "identical"
    RANDOM = "random"
    TWO_GROUPS = "twoGroups"


class PhasePolicy(str, Enum):
    RANDOM = "random"
    QUASI_SYNC = "quasiSync"
    TWISTED1 = "twisted1"
    TWISTED2 = "twisted2"


PolicyFn = Callable[[int, np.random.Generator], np.ndarray]


# ---- frequency policies ------------------------------------------------------

def _freq_identical(n: int, rng: np.random.Generator) -> np.ndarray:
    return np.full((n,), OMEGA_IDENTICAL, dtype=np.float64)


def _freq_random(n: int, rng: np.random.Generator) -> np.ndarray:
    return rng.uniform(OMEGA_LOW, OMEGA_HIGH, size=n)


def _freq_two_groups(n: int, rng: np.random.Generator) -> np.ndarray:
    out = np.full((n,), OMEGA_HIGH, dtype=np.float64)
    out[: n // 2] = OMEGA_LOW
    return out


# ---- phase policies ----------------------------------------------------------

def _phase_random(n: int, rng: np.random.Generator) -> np.ndarray:
    return rng.uniform(0.0, TWO_PI, size=n)


def _phase_quasi_sync(n: int, rng: np.random.Generator) -> np.ndarray:
    center = rng.uniform(0.0, TWO_PI)
    return center + rng.uniform(-QUASI_SYNC_HALF_WIDTH, QUASI_SYNC_HALF_WIDTH, size=n)


def _phase_twisted(q: int) -> PolicyFn:
    def twisted(n: int, rng: np.random.Generator) -> np.ndarray:
        return q * TWO_PI * np.arange(n, dtype=np.float64) / n
    twisted.__name__ = f"_phase_twisted{q}"
    return twisted


_FREQUENCY_FNS: Dict[FrequencyPolicy, PolicyFn] = {
    FrequencyPolicy.IDENTICAL: _freq_identical,
    FrequencyPolicy.RANDOM: _freq_random,
    FrequencyPolicy.TWO_GROUPS: _freq_two_groups,
}

_PHASE_FNS: Dict[PhasePolicy, PolicyFn] = {
    PhasePolicy.RANDOM: _phase_random,
    PhasePolicy.QUASI_SYNC: _phase_quasi_sync,
    PhasePolicy.TWISTED1: _phase_twisted(1),
    PhasePolicy.TWISTED2: _phase_twisted(2),
}


def _lookup_key(name: str) -> str:
    # "twoGroups", "two_groups", "two-groups" and "TWO_GROUPS" all collapse to "twogroups"
    return name.replace("_", "").replace("-", "").lower()


def _resolve(enum_cls, kind: str, policy):
    if isinstance(policy, enum_cls):
        return policy
    if isinstance(policy, str):
        key = _lookup_key(policy)
        for member in enum_cls:
            if _lookup_key(member.value) == key:
                return member
    raise PolicyError(kind, policy, [m.value for m in enum_cls])


def resolve_frequency_policy(policy: FrequencyPolicy | str) -> FrequencyPolicy:
    """Coerce a member or name (camelCase or snake_case) to a FrequencyPolicy."""
    return _resolve(FrequencyPolicy, "frequency", policy)


def resolve_phase_policy(policy: PhasePolicy | str) -> PhasePolicy:
    """Coerce a member or name (camelCase or snake_case) to a PhasePolicy."""
    return _resolve(PhasePolicy, "phase", policy)


def make_frequencies(policy: FrequencyPolicy | str, n: int, rng: np.random.Generator) -> np.ndarray:
    """Return a fresh length-``n`` array of natural frequencies."""
    return _FREQUENCY_FNS[resolve_frequency_policy(policy)](n, rng)


def make_phases(policy: PhasePolicy | str, n: int, rng: np.random.Generator) -> np.ndarray:
    """Return a fresh length-``n`` array of (un-normalized) initial phases."""
    return _PHASE_FNS[resolve_phase_policy(policy)](n, rng)

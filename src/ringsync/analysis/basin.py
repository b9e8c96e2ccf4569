# src/ringsync/analysis/basin.py
"""
Basin-of-attraction estimates by repeated random-start simulation.

Every trial builds a fresh ring (identical frequencies, random phases),
integrates it with fixed-step Euler, and buckets the end state with
``classify_terminal``. Trials are independent: each ring is discarded after
classification, so stopping between trials never leaves shared state behind.
"""
from __future__ import annotations

import asyncio
from dataclasses import dataclass, asdict
from typing import Callable, Iterator
import numpy as np

from ringsync.analysis.diagnostics import BasinOutcome, classify_terminal
from ringsync.errors import ConfigError, TopologyError
from ringsync.policies import FrequencyPolicy, PhasePolicy
from ringsync.runtime.ring import OscillatorRing

__all__ = [
    "BasinResult",
    "BasinExperiment",
    "ProgressFn",
]

DEFAULT_N = 16
DEFAULT_STEPS = 2000
DEFAULT_DT = 0.02
DEFAULT_YIELD_EVERY = 10

# progress(done, total)
ProgressFn = Callable[[int, int], None]


@dataclass(frozen=True)
class BasinResult:
    sync: int
    twisted1: int
    twisted2: int
    other: int
    total: int

    def __post_init__(self) -> None:
        counts = (self.sync, self.twisted1, self.twisted2, self.other)
        if any(c < 0 for c in counts):
            raise ValueError("basin counts must be non-negative")
        if sum(counts) != self.total:
            raise ValueError(f"basin counts sum to {sum(counts)}, expected total={self.total}")

    @classmethod
    def from_counts(cls, counts: dict[BasinOutcome, int], total: int) -> BasinResult:
        return cls(
            sync=counts.get(BasinOutcome.SYNC, 0),
            twisted1=counts.get(BasinOutcome.TWISTED1, 0),
            twisted2=counts.get(BasinOutcome.TWISTED2, 0),
            other=counts.get(BasinOutcome.OTHER, 0),
            total=total,
        )

    def fractions(self) -> dict[str, float]:
        """Share of trials per outcome (all zeros for an empty run)."""
        denom = float(self.total) if self.total else 1.0
        return {
            "sync": self.sync / denom,
            "twisted1": self.twisted1 / denom,
            "twisted2": self.twisted2 / denom,
            "other": self.other / denom,
        }

    def as_dict(self) -> dict[str, int]:
        return asdict(self)


class BasinExperiment:
    """
    Repeated-trial driver estimating basin sizes for a given (K, N).

    Args:
        dt: Fixed Euler step per integration step.
        yield_every: Trial cadence for progress callbacks and, in
            ``run_async``, cooperative suspension.
        rng / seed: Source of randomness. Each trial gets its own child
            generator spawned from it, so a seeded experiment is reproducible.
        progress: Optional ``progress(done, total)`` callback.
    """

    def __init__(
        self,
        *,
        dt: float = DEFAULT_DT,
        yield_every: int = DEFAULT_YIELD_EVERY,
        rng: np.random.Generator | None = None,
        seed: int | None = None,
        progress: ProgressFn | None = None,
    ) -> None:
        if yield_every < 1:
            raise ConfigError(f"yield_every must be >= 1 (got {yield_every})")
        if rng is not None and seed is not None:
            raise ConfigError("Pass either rng or seed, not both.")
        self.dt = float(dt)
        self.yield_every = int(yield_every)
        self.progress = progress
        self._rng = rng if rng is not None else np.random.default_rng(seed)
        self.results: BasinResult | None = None

    # ------------------------------------------------------------------ core

    def run_trial(self, K: float, N: int, steps: int, rng: np.random.Generator) -> BasinOutcome:
        """Simulate one random start and return its terminal bucket."""
        ring = OscillatorRing(N, rng=rng)
        ring.set_coupling(K)
        ring.set_frequencies(FrequencyPolicy.IDENTICAL)
        ring.set_initial_phases(PhasePolicy.RANDOM)
        for _ in range(steps):
            ring.step(self.dt)
        r = ring.get_order_parameter().r
        return classify_terminal(r, ring.get_winding_number())

    def iter_trials(
        self,
        num_trials: int,
        K: float,
        N: int = DEFAULT_N,
        steps: int = DEFAULT_STEPS,
    ) -> Iterator[tuple[int, BasinOutcome]]:
        """Yield ``(trial_index, outcome)`` lazily, one trial at a time."""
        self._validate(num_trials, N, steps)
        for i, child in enumerate(self._rng.spawn(num_trials)):
            yield i, self.run_trial(K, N, steps, child)

    # --------------------------------------------------------------- drivers

    def run(
        self,
        num_trials: int,
        K: float,
        N: int = DEFAULT_N,
        steps: int = DEFAULT_STEPS,
    ) -> BasinResult:
        """Run all trials synchronously and return the aggregate distribution."""
        counts = dict.fromkeys(BasinOutcome, 0)
        for i, outcome in self.iter_trials(num_trials, K, N, steps):
            counts[outcome] += 1
            self._notify(i, num_trials)
        return self._finish(counts, num_trials)

    async def run_async(
        self,
        num_trials: int,
        K: float,
        N: int = DEFAULT_N,
        steps: int = DEFAULT_STEPS,
    ) -> BasinResult:
        """
        Same as ``run`` but suspends to the event loop every ``yield_every``
        trials so a host loop stays responsive. Cancelling the task between
        trials is safe; no partial result is recorded in that case.
        """
        counts = dict.fromkeys(BasinOutcome, 0)
        for i, outcome in self.iter_trials(num_trials, K, N, steps):
            counts[outcome] += 1
            if self._notify(i, num_trials):
                await asyncio.sleep(0)
        return self._finish(counts, num_trials)

    # --------------------------------------------------------------- helpers

    def _validate(self, num_trials: int, N: int, steps: int) -> None:
        if num_trials < 0:
            raise ConfigError(f"num_trials must be non-negative (got {num_trials})")
        if steps < 0:
            raise ConfigError(f"steps must be non-negative (got {steps})")
        if N < 2:
            raise TopologyError(N)

    def _notify(self, index: int, total: int) -> bool:
        done = index + 1
        at_boundary = done % self.yield_every == 0
        if self.progress is not None and (at_boundary or done == total):
            self.progress(done, total)
        return at_boundary

    def _finish(self, counts: dict[BasinOutcome, int], total: int) -> BasinResult:
        result = BasinResult.from_counts(counts, total)
        self.results = result
        return result

"""
Basin sizes of the ring Kuramoto model versus coupling strength.

Runs a BasinExperiment at several K values and prints how often random
initial phases end synchronized, twisted (q=±1, q=±2) or elsewhere.
"""

from __future__ import annotations

import asyncio

from ringsync import BasinExperiment

N = 16
STEPS = 2000
TRIALS = 50

print(f"Ring of N={N}, {TRIALS} random starts per K, {STEPS} Euler steps (dt=0.02)\n")
print(f"{'K':>5} {'sync':>6} {'q=1':>6} {'q=2':>6} {'other':>6}")

for K in (0.5, 1.0, 2.0, 3.0):
    exp = BasinExperiment(seed=2024)
    res = exp.run(TRIALS, K, N, STEPS)
    pct = {k: 100.0 * v for k, v in res.fractions().items()}
    print(f"{K:5.2f} {pct['sync']:5.1f}% {pct['twisted1']:5.1f}% {pct['twisted2']:5.1f}% {pct['other']:5.1f}%")


# Same experiment from an event loop: progress reports while the loop stays free
async def main() -> None:
    def progress(done: int, total: int) -> None:
        print(f"  ... {done}/{total}")

    exp = BasinExperiment(seed=7, progress=progress)
    res = await exp.run_async(30, 3.0, N, STEPS)
    print(f"\nasync run at K=3.0: {res.as_dict()}")

asyncio.run(main())

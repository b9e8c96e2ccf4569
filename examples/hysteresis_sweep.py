"""
Coupling sweep up and down on one ring with mixed natural frequencies.

Prints r(K) for both branches; with two frequency groups the up and down
branches lock/unlock at different K (hysteresis).
"""

from ringsync import setup, hysteresis

ring = setup(16, coupling=0.0, frequencies="twoGroups", phases="random", seed=3)
loop = hysteresis(ring, speed=0.01, k_max=3.0, steps_per_k=10)

print(f"{'K':>6} {'r_up':>8} {'r_down':>8}")
for K in (0.0, 0.25, 0.5, 0.75, 1.0, 1.5, 2.0, 2.5, 3.0):
    r_up, r_down = loop.r_at(K)
    print(f"{K:6.2f} {r_up:8.4f} {r_down:8.4f}")

print(f"\nfinal state: {ring.classify_state()}")

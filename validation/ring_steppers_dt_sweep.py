"""List accuracy of ring steppers and their change with dt"""

from ringsync import OscillatorRing, list_steppers
import math
import os

# Two oscillators: both ring neighbours coincide, so φ = θ1 - θ0 obeys
# φ' = -2K sin φ with tan(φ/2) = tan(φ0/2) exp(-2Kt).
K = 1.0
phi0 = 1.0
T = 2.0

def actual(t):
    return 2.0 * math.atan(math.tan(phi0 / 2.0) * math.exp(-2.0 * K * t))

dts = [2e-1, 1e-1, 5e-2, 2e-2, 1e-2, 1e-3]

def run_tests(steppers, results):
    for stepper in steppers:
        results[stepper] = []
        for dt in dts:
            ring = OscillatorRing(2, coupling=K, seed=0)
            ring.set_phases([0.0, phi0])
            steps = int(round(T / dt))
            ring.advance(dt, steps, stepper)
            theta = ring.get_phases()
            phi = math.remainder(theta[1] - theta[0], 2.0 * math.pi)
            error = abs(phi - actual(T))
            results[stepper].append((dt, error, steps))

def write_results(f, steppers, results, title):
    f.write(f"{title}\n")
    f.write("=" * len(title) + "\n\n")
    for stepper in steppers:
        f.write(f"Stepper: {stepper}\n")
        f.write(f"{'step_count':>10} {'dt':>10} {'error':>15}\n")
        f.write("-" * 35 + "\n")
        for dt, error, step_count in results[stepper]:
            f.write(f"{step_count:>10} {dt:>10.2e} {error:>15.4e}\n")
        f.write("\n")

    # Per dt ranking
    for i, dt in enumerate(dts):
        ranked = sorted(((s, results[s][i][1]) for s in steppers), key=lambda x: x[1])
        f.write(f"dt={dt:.2e}\n")
        for j, (stepper, error) in enumerate(ranked, 1):
            f.write(f"{j}) {stepper} = {error:.4e}\n")
        f.write("\n")

steppers = list_steppers()
results = {}
run_tests(steppers, results)

# Write to file
fname = os.path.splitext(__file__)[0] + ".txt"
with open(fname, "w") as f:
    write_results(f, steppers, results, "Fixed-step ring steppers")

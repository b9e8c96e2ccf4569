# src/ringsync/cli.py
"""
Command-line driver for ringsync.

    ringsync run      [--n N] [--coupling K] [--steps S] [--stepper NAME] ...
    ringsync basin    [--trials T] [--coupling K] [--n N] [--steps S] [--seed X]
    ringsync sweep    [--n N] [--speed V] [--k-max K] [--every M] [--seed X]
    ringsync steppers list

Defaults come from the user config file (see ``ringsync.config``); flags win.
Exit codes: 0 ok, 1 ringsync error, 2 usage error.
"""
from __future__ import annotations

import argparse
import sys
from typing import Sequence

from ringsync.analysis.basin import BasinExperiment
from ringsync.analysis.sweep import K_MAX, SWEEP_SPEED, hysteresis
from ringsync.config import RingConfig, load_config
from ringsync.errors import RingsyncError
from ringsync.policies import FrequencyPolicy, PhasePolicy
from ringsync.runtime.ring import OscillatorRing
from ringsync.runtime.trajectory import simulate
from ringsync.steppers import get_stepper, list_steppers

__all__ = ["main", "build_parser"]


def _pick(value, default):
    return default if value is None else value


# ---- commands ---------------------------------------------------------------

def _cmd_run(args: argparse.Namespace, cfg: RingConfig) -> int:
    sim = cfg.simulation
    ring = OscillatorRing(
        _pick(args.n, sim.n),
        coupling=_pick(args.coupling, sim.coupling),
        seed=_pick(args.seed, sim.seed),
    )
    ring.set_frequencies(args.freq)
    ring.set_initial_phases(args.init)
    if args.perturb:
        ring.perturb(args.perturb)

    traj = simulate(
        ring,
        steps=args.steps,
        dt=_pick(args.dt, sim.dt),
        speed=_pick(args.speed, sim.speed),
        method=_pick(args.stepper, sim.stepper),
        record_every=max(1, args.steps // 10) if args.steps else 1,
    )
    for t, r, q in zip(traj.t, traj.r, traj.q):
        print(f"t={t:9.3f}  r={r:.4f}  q={int(q):+d}")

    op = ring.get_order_parameter()
    print(f"N={ring.n} K={ring.coupling:g} stepper={traj.method} dt={traj.dt:g}")
    print(f"r={op.r:.6f} psi={op.psi:.6f} q={ring.get_winding_number()} variance={ring.get_phase_variance():.6f}")
    print(f"state: {ring.classify_state()}")
    return 0


def _cmd_basin(args: argparse.Namespace, cfg: RingConfig) -> int:
    exp_cfg = cfg.experiment
    sim = cfg.simulation
    trials = _pick(args.trials, exp_cfg.trials)

    def progress(done: int, total: int) -> None:
        print(f"trial {done}/{total}", file=sys.stderr)

    exp = BasinExperiment(
        dt=_pick(args.dt, sim.dt),
        yield_every=exp_cfg.yield_every,
        seed=_pick(args.seed, sim.seed),
        progress=None if args.quiet else progress,
    )
    K = _pick(args.coupling, sim.coupling)
    res = exp.run(trials, K, _pick(args.n, sim.n), _pick(args.steps, exp_cfg.steps))

    print(f"K={K:.2f}, {res.total} simulations")
    fractions = res.fractions()
    labels = (
        ("sync", "sync (q=0)"),
        ("twisted1", "twisted q=1"),
        ("twisted2", "twisted q=2"),
        ("other", "other"),
    )
    for key, label in labels:
        print(f"  {label:<12} {getattr(res, key):>6d}  {100.0 * fractions[key]:5.1f}%")
    return 0


def _cmd_sweep(args: argparse.Namespace, cfg: RingConfig) -> int:
    sim = cfg.simulation
    ring = OscillatorRing(_pick(args.n, sim.n), seed=_pick(args.seed, sim.seed))
    ring.set_initial_phases(args.init)
    loop = hysteresis(
        ring,
        dt=_pick(args.dt, sim.dt),
        speed=args.speed,
        k_max=args.k_max,
        method=_pick(args.stepper, sim.stepper),
    )
    print(f"{'dir':<5} {'K':>7} {'r':>8}")
    for branch in (loop.up, loop.down):
        for i in range(0, len(branch), args.every):
            print(f"{branch.direction:<5} {branch.K[i]:7.3f} {branch.r[i]:8.4f}")
    return 0


def _cmd_steppers_list(args: argparse.Namespace, cfg: RingConfig) -> int:
    for name in list_steppers():
        meta = get_stepper(name).meta
        aliases = ",".join(meta.aliases) or "-"
        print(
            f"{meta.name:<8} order={meta.order} time_control={meta.time_control} "
            f"scheme={meta.scheme} aliases={aliases}"
        )
    return 0


# ---- parser -----------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="ringsync", description="Kuramoto ring simulator")
    parser.add_argument("--config", default=None, help="path to a TOML config file")
    sub = parser.add_subparsers(dest="command", required=True)

    p_run = sub.add_parser("run", help="simulate one ring and report diagnostics")
    p_run.add_argument("--n", type=int, default=None)
    p_run.add_argument("--coupling", "-K", type=float, default=None)
    p_run.add_argument("--dt", type=float, default=None)
    p_run.add_argument("--speed", type=float, default=None)
    p_run.add_argument("--steps", type=int, default=1000)
    p_run.add_argument("--stepper", default=None)
    p_run.add_argument("--freq", default=FrequencyPolicy.IDENTICAL.value,
                       help="identical | random | twoGroups")
    p_run.add_argument("--init", default=PhasePolicy.RANDOM.value,
                       help="random | quasiSync | twisted1 | twisted2")
    p_run.add_argument("--perturb", type=float, default=0.0)
    p_run.add_argument("--seed", type=int, default=None)
    p_run.set_defaults(func=_cmd_run)

    p_basin = sub.add_parser("basin", help="estimate basin sizes from random starts")
    p_basin.add_argument("--trials", type=int, default=None)
    p_basin.add_argument("--coupling", "-K", type=float, default=None)
    p_basin.add_argument("--n", type=int, default=None)
    p_basin.add_argument("--steps", type=int, default=None)
    p_basin.add_argument("--dt", type=float, default=None)
    p_basin.add_argument("--seed", type=int, default=None)
    p_basin.add_argument("--quiet", action="store_true", help="suppress progress on stderr")
    p_basin.set_defaults(func=_cmd_basin)

    p_sweep = sub.add_parser("sweep", help="ramp K up then down and print r(K)")
    p_sweep.add_argument("--n", type=int, default=None)
    p_sweep.add_argument("--dt", type=float, default=None)
    p_sweep.add_argument("--speed", type=float, default=SWEEP_SPEED)
    p_sweep.add_argument("--k-max", dest="k_max", type=float, default=K_MAX)
    p_sweep.add_argument("--every", type=int, default=50, help="print every M-th point")
    p_sweep.add_argument("--stepper", default=None)
    p_sweep.add_argument("--init", default=PhasePolicy.RANDOM.value)
    p_sweep.add_argument("--seed", type=int, default=None)
    p_sweep.set_defaults(func=_cmd_sweep)

    p_steppers = sub.add_parser("steppers", help="stepper registry")
    steppers_sub = p_steppers.add_subparsers(dest="steppers_command", required=True)
    p_list = steppers_sub.add_parser("list", help="list registered steppers")
    p_list.set_defaults(func=_cmd_steppers_list)

    return parser


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    try:
        args = parser.parse_args(argv)
    except SystemExit as exc:
        return int(exc.code or 0)

    if getattr(args, "every", 1) < 1:
        print("error: --every must be >= 1", file=sys.stderr)
        return 2
    if getattr(args, "steps", 0) is not None and getattr(args, "steps", 0) < 0:
        print("error: --steps must be non-negative", file=sys.stderr)
        return 2

    try:
        cfg = load_config(args.config)
        return args.func(args, cfg)
    except RingsyncError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())

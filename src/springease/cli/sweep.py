import argparse
from pathlib import Path

from springease.pipelines.sweep import SpringSweep, SweepConfig
from springease.pipelines.utils import parse_floats_list, parse_ints_list

def main(argv=None):
    p = argparse.ArgumentParser("springease-sweep", description="Sweep damping ratio × half cycles.")
    # grid
    p.add_argument("--dampings", type=str, default="0.1,0.3,0.5,0.7,0.9")
    p.add_argument("--half-cycles", type=str, default="1,3,6,10")
    p.add_argument("--y0", type=float, default=-1.0)
    p.add_argument("--v0", type=float, default=0.0)

    # sampling / solver
    p.add_argument("--N", type=int, default=2001)
    p.add_argument("--t1", type=float, default=1.0)
    p.add_argument("--settle-eps", type=float, default=1e-3)
    p.add_argument("--tol", type=float, default=1e-6)
    p.add_argument("--max-iter", type=int, default=1000)

    # execution
    p.add_argument("--outdir", type=str, default="results/sweep")
    p.add_argument("--save-samples", action="store_true")
    p.add_argument("--save-plots", action="store_true")
    p.add_argument("--plots-dir", type=str, default=None)
    args = p.parse_args(argv)

    cfg = SweepConfig(
        damping_ratios=parse_floats_list(args.dampings),
        half_cycles=parse_ints_list(args.half_cycles),
        initial_position=args.y0,
        initial_velocity=args.v0,

        N=args.N,
        t1=args.t1,
        settle_eps=args.settle_eps,
        tolerance=args.tol,
        max_iterations=args.max_iter,

        outdir=Path(args.outdir),
        save_samples=bool(args.save_samples),
        save_plots=bool(args.save_plots),
        plots_dir=Path(args.plots_dir) if args.plots_dir else None,
    )
    SpringSweep(cfg).run()

if __name__ == "__main__":
    main()

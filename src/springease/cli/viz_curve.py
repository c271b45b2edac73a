import argparse
from pathlib import Path
import numpy as np

from springease.core.reference import ReferenceConfig, integrate_reference
from springease.core.spring import make_spring_easing
from springease.pipelines.utils import add_spring_arguments, config_tag, spring_from_args
from springease.viz.plotting import plot_curve, plot_reference_comparison

def main(argv=None):
    p = argparse.ArgumentParser("springease-viz", description="Plot a spring easing curve.")
    add_spring_arguments(p)
    p.add_argument("--N", type=int, default=1000)
    p.add_argument("--t1", type=float, default=1.5)
    p.add_argument("--reference", action="store_true", help="also plot against the integrated ODE")
    p.add_argument("--out", type=str, default=None, help="PNG path (default results/viz/<tag>.png)")
    p.add_argument("--show", action="store_true")
    args = p.parse_args(argv)

    cfg, options = spring_from_args(args)
    curve = make_spring_easing(cfg, options)
    out = Path(args.out) if args.out else Path("results/viz") / f"{config_tag(cfg)}.png"
    title = (f"spring ζ={cfg.damping_ratio:g}, k={cfg.half_cycles}, "
             f"y0={cfg.initial_position:g}, v0={cfg.initial_velocity:g}")

    t = np.linspace(0.0, args.t1, args.N)
    plot_curve(t, curve.sample(t), envelope=curve.envelope(t), title=title, save=out, show=args.show)
    print(f"Saved: {out}")

    if args.reference:
        t_ref, y_closed, y_ref = integrate_reference(curve, ReferenceConfig(N=args.N, t1=args.t1))
        ref_out = out.with_name(out.stem + "_reference.png")
        plot_reference_comparison(t_ref, y_closed, y_ref, title=title, save=ref_out, show=args.show)
        print(f"Saved: {ref_out}")

if __name__ == "__main__":
    main()

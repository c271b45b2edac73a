import argparse
import json
from pathlib import Path
import numpy as np

from springease.core.spring import make_spring_easing
from springease.core.tween import SpringTween
from springease.pipelines.utils import add_spring_arguments, config_tag, ensure_dir, spring_from_args

def main(argv=None):
    p = argparse.ArgumentParser("springease-sample", description="Sample a spring easing curve into animation frames.")
    add_spring_arguments(p)
    p.add_argument("--N", type=int, default=600, help="samples on [0, t1] for samples.npz")
    p.add_argument("--t1", type=float, default=1.0)
    p.add_argument("--duration", type=float, default=1.0, help="animation length in seconds")
    p.add_argument("--fps", type=float, default=60.0)
    p.add_argument("--magnitude", type=float, default=1.0)
    p.add_argument("--outdir", type=str, default="results/frames")
    args = p.parse_args(argv)

    cfg, options = spring_from_args(args)
    curve = make_spring_easing(cfg, options)
    sol = curve.solution

    t = np.linspace(0.0, args.t1, args.N)
    y = curve.sample(t)
    frames = SpringTween(curve=curve, duration=args.duration, magnitude=args.magnitude).frames(args.fps)

    save_dir = Path(args.outdir) / config_tag(cfg)
    ensure_dir(save_dir)
    (save_dir / "frames.json").write_text(json.dumps(frames.tolist()))
    np.savez(save_dir / "samples.npz", t=t, y=y, velocity=curve.velocity(t))

    print(f"✅ {sol.method} | omega={curve.omega:.6f} | B={curve.amplitude_b:.6f} | "
          f"iterations={sol.iterations} | converged={sol.converged}")
    print(f"   Saved frames: {len(frames)} -> {save_dir/'frames.json'}")
    print(f"   Saved samples: {save_dir/'samples.npz'}")

if __name__ == "__main__":
    main()

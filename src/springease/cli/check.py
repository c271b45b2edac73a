import argparse

from springease.core.reference import ReferenceConfig, integrate_reference
from springease.core.spring import make_spring_easing
from springease.eval.metrics import max_abs_error, zero_crossings
from springease.pipelines.utils import add_spring_arguments, spring_from_args

def main(argv=None):
    p = argparse.ArgumentParser("springease-check", description="Check the closed-form curve against ODE integration.")
    add_spring_arguments(p)
    p.add_argument("--N", type=int, default=2001)
    p.add_argument("--t1", type=float, default=1.0)
    p.add_argument("--rtol", type=float, default=1e-10)
    p.add_argument("--atol", type=float, default=1e-12)
    p.add_argument("--method", type=str, default="DOP853")
    p.add_argument("--max-error", type=float, default=1e-6)
    args = p.parse_args(argv)

    cfg, options = spring_from_args(args)
    curve = make_spring_easing(cfg, options)
    ref_cfg = ReferenceConfig(N=args.N, t1=args.t1, rtol=args.rtol, atol=args.atol, method=args.method)
    t, y_closed, y_ref = integrate_reference(curve, ref_cfg)

    err_x = max_abs_error(y_closed[:, 0], y_ref[:, 0])
    err_v = max_abs_error(y_closed[:, 1], y_ref[:, 1])
    crossings = zero_crossings(y_closed[t <= 1.0, 0])

    print(f"omega={curve.omega:.6f} B={curve.amplitude_b:.6f} [{curve.solution.method}, "
          f"converged={curve.solution.converged}]")
    print(f"max|x - x_ref|={err_x:.3e}  max|v - v_ref|={err_v:.3e}  "
          f"crossings on [0, 1]={crossings} (half_cycles={cfg.half_cycles})")

    if err_x > args.max_error:
        print(f"❌ position error {err_x:.3e} exceeds {args.max_error:g}")
        raise SystemExit(1)
    print("✅ closed form matches the reference")

if __name__ == "__main__":
    main()

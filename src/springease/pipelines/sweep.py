# src/springease/pipelines/sweep.py
from __future__ import annotations
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Dict, List, Optional, Tuple

import numpy as np

from springease.core.solver import SolverOptions
from springease.core.spring import SpringConfig, make_spring_easing
from springease.eval.metrics import half_period_peaks, settle_time, zero_crossings
from springease.pipelines.utils import append_csv, config_tag, ensure_dir, num_to_token, save_json
from springease.viz.plotting import plot_curve


@dataclass(frozen=True)
class SweepConfig:
    # grid
    damping_ratios: Tuple[float, ...] = (0.1, 0.3, 0.5, 0.7, 0.9)
    half_cycles: Tuple[int, ...] = (1, 3, 6, 10)
    initial_position: float = -1.0
    initial_velocity: float = 0.0

    # sampling / solver
    N: int = 2001                  # samples on [0, t1]
    t1: float = 1.0
    settle_eps: float = 1e-3
    tolerance: float = 1e-6
    max_iterations: int = 1000

    # execution
    outdir: Path = Path("results/sweep")
    save_samples: bool = False
    save_plots: bool = False
    plots_dir: Optional[Path] = None

    def validate(self) -> None:
        if not self.damping_ratios or not self.half_cycles:
            raise ValueError("damping_ratios and half_cycles must both be non-empty.")
        if self.N < 2:
            raise ValueError(f"N must be >= 2, got {self.N}")
        if not self.t1 > 0:
            raise ValueError(f"t1 must be > 0, got {self.t1}")


class SpringSweep:
    """
    Evaluate the spring curve over a (damping ratio × half cycles) grid.

    Per point: solver outcome, zero crossings on [0, 1], value at t = 1,
    settle time and the decay of half-period peaks. Writes
    <outdir>/<run_id>/metrics.json and appends one row to <outdir>/summary.csv.
    """
    metric_keys: Tuple[str, ...] = ("zero_crossings", "abs_end_value", "settle_time", "iterations")

    def __init__(self, cfg: SweepConfig):
        cfg.validate()
        self.cfg = cfg
        self.options = SolverOptions(tolerance=cfg.tolerance, max_iterations=cfg.max_iterations)
        self.run_id = self._build_run_id()
        self.run_root = cfg.outdir / self.run_id
        ensure_dir(self.run_root)

    def _build_run_id(self) -> str:
        return (f"sweep_y0{num_to_token(self.cfg.initial_position)}"
                f"_v0{num_to_token(self.cfg.initial_velocity)}"
                f"_n{len(self.cfg.damping_ratios)}x{len(self.cfg.half_cycles)}")

    def _run_point(self, zeta: float, k: int) -> Dict:
        spring = SpringConfig(
            damping_ratio=zeta,
            half_cycles=k,
            initial_position=self.cfg.initial_position,
            initial_velocity=self.cfg.initial_velocity,
        )
        curve = make_spring_easing(spring, self.options)
        sol = curve.solution

        t = np.linspace(0.0, self.cfg.t1, self.cfg.N)
        y = curve.sample(t)
        window = t <= 1.0
        peaks = half_period_peaks(curve, n=max(2, k))

        metrics = {
            "tag": config_tag(spring),
            "damping_ratio": zeta,
            "half_cycles": k,
            "method": sol.method,
            "converged": sol.converged,
            "iterations": sol.iterations,
            "residual": sol.residual,
            "omega": curve.omega,
            "amplitude_b": curve.amplitude_b,
            "zero_crossings": zero_crossings(y[window]),
            "abs_end_value": abs(curve(1.0)),
            "settle_time": settle_time(t, y, self.cfg.settle_eps),
            "peak_decay": float(peaks[1] / peaks[0]) if peaks[0] > 0 else float("nan"),
        }

        if self.cfg.save_samples:
            np.savez(self.run_root / f"samples_{metrics['tag']}.npz", t=t, y=y)

        if self.cfg.save_plots:
            figs = Path(self.cfg.plots_dir or (self.run_root / "figs"))
            ensure_dir(figs)
            plot_curve(
                t, y, envelope=curve.envelope(t),
                title=f"ζ={zeta:g} · k={k} · y0={self.cfg.initial_position:g} · v0={self.cfg.initial_velocity:g}",
                save=figs / f"{metrics['tag']}.png", show=False,
            )
        return metrics

    def _summary_row(self, agg: Dict) -> Dict:
        return {
            "run_id": self.run_id,
            "initial_position": self.cfg.initial_position,
            "initial_velocity": self.cfg.initial_velocity,
            "damping_ratios": str(self.cfg.damping_ratios),
            "half_cycles": str(self.cfg.half_cycles),
            "points": len(agg["per_point"]),
            "all_converged": int(agg["all_converged"]),
            "crossing_mismatches": agg["crossing_mismatches"],
            "abs_end_value_max": f"{agg['abs_end_value_max']:.8e}",
            "settle_time_max": f"{agg['settle_time_max']:.6f}",
        }

    def run(self) -> Dict:
        per_point: List[Dict] = []
        for zeta in self.cfg.damping_ratios:
            for k in self.cfg.half_cycles:
                m = self._run_point(zeta, k)
                per_point.append(m)
                print(
                    f"ζ={zeta:<5g} k={k:<3d} [{m['method']}] "
                    f"crossings={m['zero_crossings']:<3d} "
                    f"|y(1)|={m['abs_end_value']:.2e} "
                    f"settle={m['settle_time']:.3f} "
                    f"converged={m['converged']}"
                )

        agg: Dict = {
            "run_id": self.run_id,
            "config": asdict(self.cfg),
            "per_point": per_point,
            "all_converged": all(m["converged"] for m in per_point),
            # k-th crossing lands on t = 1 itself and may fall either side of the grid end
            "crossing_mismatches": sum(
                1 for m in per_point if abs(m["zero_crossings"] - m["half_cycles"]) > 1
            ),
        }
        for key in self.metric_keys:
            series = [m[key] for m in per_point]
            agg[key] = series
            agg[f"{key}_max"] = float(np.nanmax(series)) if not np.all(np.isnan(series)) else float("nan")

        save_json(agg, self.run_root / "metrics.json")
        append_csv(self._summary_row(agg), self.cfg.outdir / "summary.csv")

        print("\n✅ Sweep complete")
        print(f"   points={len(per_point)} | converged={agg['all_converged']} | "
              f"crossing mismatches={agg['crossing_mismatches']}")
        print(f"   Saved run metrics: {self.run_root/'metrics.json'}")
        return agg

import argparse
import csv
import json
from pathlib import Path
from typing import Tuple

from springease.core.solver import SolverOptions
from springease.core.spring import SpringConfig

def ensure_dir(p: Path) -> None:
    p.mkdir(parents=True, exist_ok=True)

def _json_default(o):
    from pathlib import Path as _P
    import numpy as _np
    if isinstance(o, _P):
        return str(o)
    if isinstance(o, (_np.integer, _np.floating, _np.bool_)):
        return o.item()
    if isinstance(o, _np.ndarray):
        return o.tolist()
    return str(o)

def save_json(obj, path: Path) -> None:
    ensure_dir(path.parent)
    path.write_text(json.dumps(obj, indent=2, default=_json_default))

def append_csv(row: dict, path: Path) -> None:
    ensure_dir(path.parent)
    write = not path.exists()
    with path.open("a", newline="") as f:
        w = csv.DictWriter(f, fieldnames=row.keys())
        if write:
            w.writeheader()
        w.writerow(row)

def parse_floats_list(s: str) -> Tuple[float, ...]:
    s = s.strip()
    return tuple(float(x) for x in s.split(",") if x) if s else ()

def parse_ints_list(s: str) -> Tuple[int, ...]:
    s = s.strip()
    return tuple(int(x) for x in s.split(",") if x) if s else ()

def num_to_token(x: float) -> str:
    # 0.1 -> 0p1, -0.05 -> m0p05
    s = f"{x:g}"
    return s.replace(".", "p").replace("-", "m")

def config_tag(cfg: SpringConfig) -> str:
    # SpringConfig(0.5, 6, -1, 0) -> z0p5_k6_y0m1_v00
    return (f"z{num_to_token(cfg.damping_ratio)}_k{cfg.half_cycles}"
            f"_y0{num_to_token(cfg.initial_position)}_v0{num_to_token(cfg.initial_velocity)}")

def add_spring_arguments(p: argparse.ArgumentParser) -> None:
    """Flags shared by every CLI; defaults are the clock-hand spring."""
    p.add_argument("--damping", type=float, default=0.5, help="damping ratio in (0, 1)")
    p.add_argument("--half-cycles", type=int, default=6)
    p.add_argument("--y0", type=float, default=-1.0, help="initial position")
    p.add_argument("--v0", type=float, default=0.0, help="initial velocity")
    p.add_argument("--tol", type=float, default=1e-6)
    p.add_argument("--max-iter", type=int, default=1000)

def spring_from_args(args: argparse.Namespace) -> Tuple[SpringConfig, SolverOptions]:
    cfg = SpringConfig(
        damping_ratio=args.damping,
        half_cycles=args.half_cycles,
        initial_position=args.y0,
        initial_velocity=args.v0,
    )
    return cfg, SolverOptions(tolerance=args.tol, max_iterations=args.max_iter)

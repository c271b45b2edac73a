from dataclasses import dataclass
from typing import Tuple
import numpy as np
from scipy.integrate import solve_ivp
from .ode_problems import spring_rhs
from .spring import EasingCurve

Array = np.ndarray

@dataclass
class ReferenceConfig:
    N: int = 400
    t0: float = 0.0
    t1: float = 1.0
    rtol: float = 1e-10
    atol: float = 1e-12
    method: str = "DOP853"

def integrate_reference(curve: EasingCurve, cfg: ReferenceConfig) -> Tuple[Array, Array, Array]:
    """
    Integrate the spring ODE from the curve's own state at t0.

    Returns (t, y_closed, y_ref), both trajectories shaped (N, 2) as [x, v].
    """
    t_eval = np.linspace(cfg.t0, cfg.t1, cfg.N, dtype=np.float64)
    y0 = np.array([curve(cfg.t0), float(curve.velocity(cfg.t0))], dtype=np.float64)
    rhs = spring_rhs(curve.damping_ratio, curve.angular_frequency)

    def rhs_1d(t, y):
        # SciPy gives y shape (2,). rhs expects (1, 2).
        return rhs(t, y[None, :])[0]

    sol = solve_ivp(rhs_1d, (cfg.t0, cfg.t1), y0, t_eval=t_eval,
                    rtol=cfg.rtol, atol=cfg.atol, method=cfg.method)
    if not sol.success:
        raise RuntimeError(f"solve_ivp failed: {sol.message}")

    y_ref = sol.y.T                                                   # (N, 2)
    y_closed = np.stack([curve.sample(t_eval), curve.velocity(t_eval)], axis=-1)
    return t_eval, y_closed, y_ref

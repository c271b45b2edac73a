from typing import Callable
import numpy as np

Array = np.ndarray

def spring_rhs(damping_ratio: float, angular_frequency: float) -> Callable[[float, Array], Array]:
    """Damped spring: x' = v, v' = -2*zeta*W*v - W^2 * x"""
    damping = 2.0 * damping_ratio * angular_frequency
    omega2 = angular_frequency ** 2
    def f(t: float, y: Array) -> Array:
        x, v = y[..., 0], y[..., 1]
        return np.stack([v, -damping*v - omega2*x], axis=-1)
    return f

# src/springease/core/spring.py
from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Optional

import numpy as np

from .errors import DegenerateConfigurationError
from .solver import SolvedParameters, SolverOptions, solve_closed_form, solve_numerically

Array = np.ndarray


@dataclass(frozen=True)
class SpringConfig:
    damping_ratio: float = 0.5        # in (0, 1), 1 excluded
    half_cycles: int = 6              # zero crossings before settling, >= 1
    initial_position: float = -1.0    # typically in [-1, 1]
    initial_velocity: float = 0.0     # signed; ~0 selects the closed form

    def __post_init__(self):
        self.validate()
        object.__setattr__(self, "half_cycles", int(self.half_cycles))

    def validate(self) -> None:
        if not (0.0 < self.damping_ratio < 1.0):
            raise ValueError(f"damping_ratio must be in (0, 1), got {self.damping_ratio}")
        if isinstance(self.half_cycles, bool) or not float(self.half_cycles).is_integer():
            raise ValueError(f"half_cycles must be an integer, got {self.half_cycles!r}")
        if self.half_cycles < 1:
            raise ValueError(f"half_cycles must be >= 1, got {self.half_cycles}")
        if not math.isfinite(self.initial_position):
            raise ValueError(f"initial_position must be finite, got {self.initial_position}")
        if not math.isfinite(self.initial_velocity):
            raise ValueError(f"initial_velocity must be finite, got {self.initial_velocity}")


def clamp(x: float, lo: float, hi: float) -> float:
    return min(max(x, lo), hi)


def solve_spring(config: SpringConfig, options: Optional[SolverOptions] = None) -> SolvedParameters:
    options = options or SolverOptions()
    zeta = config.damping_ratio
    k = int(config.half_cycles)
    y0 = config.initial_position
    v0 = config.initial_velocity

    # v0 == 0 decouples B from omega; any other v0 needs the bisection.
    if abs(v0) < options.velocity_threshold:
        return solve_closed_form(zeta, k, y0)
    return solve_numerically(zeta, k, y0, v0, options)


@dataclass(frozen=True)
class EasingCurve:
    """
    Decaying sinusoid y(t) = exp(-t*zeta*W) * (A*cos(Wd*t) + B*sin(Wd*t)).

    W = 2*pi*omega, Wd = W*sqrt(1 - zeta^2). Immutable; calling it has no side
    effects, so one curve can be shared between animations and threads.
    `__call__` works on plain floats, `sample`/`velocity`/`envelope` on arrays.
    """
    amplitude_a: float
    amplitude_b: float
    omega: float
    damping_ratio: float
    solution: Optional[SolvedParameters] = field(default=None, compare=False, repr=False)
    angular_frequency: float = field(init=False, repr=False)
    damped_frequency: float = field(init=False, repr=False)

    def __post_init__(self):
        omega = self.omega * 2 * math.pi
        omega_d = omega * math.sqrt(1 - self.damping_ratio * self.damping_ratio)
        if not (math.isfinite(omega_d) and math.isfinite(self.amplitude_b)) or omega_d == 0:
            raise DegenerateConfigurationError(
                f"cannot build curve from omega={self.omega}, B={self.amplitude_b}"
            )
        object.__setattr__(self, "angular_frequency", omega)
        object.__setattr__(self, "damped_frequency", omega_d)

    @property
    def half_period(self) -> float:
        """Spacing between consecutive zero crossings."""
        return math.pi / self.damped_frequency

    @property
    def decay_rate(self) -> float:
        return self.damping_ratio * self.angular_frequency

    def __call__(self, t: float) -> float:
        """Any float is accepted; far outside [0, 1] the result may be inf or nan."""
        return float(self.sample(t))

    def sample(self, t) -> Array:
        t = np.asarray(t, dtype=np.float64)
        omega_d = self.damped_frequency
        with np.errstate(over="ignore", invalid="ignore"):
            sinusoid = self.amplitude_a * np.cos(omega_d * t) + self.amplitude_b * np.sin(omega_d * t)
            return np.exp(-t * self.damping_ratio * self.angular_frequency) * sinusoid

    def velocity(self, t) -> Array:
        """dy/dt; equals 2*pi*v0 at t = 0 for a converged solve."""
        t = np.asarray(t, dtype=np.float64)
        a, b = self.amplitude_a, self.amplitude_b
        sigma, omega_d = self.decay_rate, self.damped_frequency
        cos_coef = -sigma * a + omega_d * b
        sin_coef = -sigma * b - omega_d * a
        return np.exp(-sigma * t) * (cos_coef * np.cos(omega_d * t) + sin_coef * np.sin(omega_d * t))

    def envelope(self, t) -> Array:
        """Upper bound on |y(t)|."""
        t = np.asarray(t, dtype=np.float64)
        return math.hypot(self.amplitude_a, self.amplitude_b) * np.exp(-self.decay_rate * t)


def make_spring_easing(config: SpringConfig, options: Optional[SolverOptions] = None) -> EasingCurve:
    """
    Build the easing curve for `config`.

    Usage:
        curve = make_spring_easing(SpringConfig(damping_ratio=0.5, half_cycles=6,
                                                initial_position=-1, initial_velocity=0))
        offset = 6.0 * curve(progress)   # progress in [0, 1]
    """
    solution = solve_spring(config, options)
    return EasingCurve(
        amplitude_a=config.initial_position,
        amplitude_b=solution.amplitude_b,
        omega=solution.omega,
        damping_ratio=config.damping_ratio,
        solution=solution,
    )

# src/springease/core/solver.py
"""
Solvers for the spring easing parameters (omega, B).

The curve is y(t) = exp(-zeta*W*t) * (A*cos(Wd*t) + B*sin(Wd*t)) with
W = 2*pi*omega and Wd = W*sqrt(1 - zeta^2). A is the initial position.
omega is fixed by requiring the k-th zero crossing to land on t = 1, and B by
the initial velocity. With v0 == 0 both follow in closed form; otherwise
they depend on each other and B is found by bracketing + bisection.

See https://en.wikipedia.org/wiki/Damping#Under-damping_(0_%E2%89%A4_%CE%B6_%3C_1)
"""
from __future__ import annotations

import math
import warnings
from dataclasses import dataclass
from typing import Callable, Literal, Optional

from .errors import ConvergenceWarning, DegenerateConfigurationError

Method = Literal["closed_form", "bisection"]

# residual sign, stored the way math.copysign reports it
POS = False
NEG = True


@dataclass(frozen=True)
class SolverOptions:
    tolerance: float = 1e-6           # |residual| accepted as a root
    max_iterations: int = 1000        # shared by bracketing and bisection
    velocity_threshold: float = 1e-6  # |v0| below this uses the closed form

    def __post_init__(self):
        self.validate()

    def validate(self) -> None:
        if not self.tolerance > 0:
            raise ValueError(f"tolerance must be > 0, got {self.tolerance}")
        if self.max_iterations < 1:
            raise ValueError(f"max_iterations must be >= 1, got {self.max_iterations}")
        if not self.velocity_threshold >= 0:
            raise ValueError(f"velocity_threshold must be >= 0, got {self.velocity_threshold}")


@dataclass(frozen=True)
class SolvedParameters:
    """omega (in cycles per unit t) and the sine amplitude B."""
    omega: float
    amplitude_b: float
    converged: bool = True
    iterations: int = 0
    residual: float = 0.0
    method: Method = "closed_form"


@dataclass
class RootFindState:
    """Scratch state of one bisection solve."""
    b: float
    omega: float = math.nan
    residual: float = math.nan
    direction: bool = POS
    lower: float = math.nan
    upper: float = math.nan
    iterations: int = 0


def compute_omega(a: float, b: float, k: float, zeta: float) -> float:
    """
    omega such that the k-th zero crossing of A*cos + B*sin falls on t = 1.

    atan has range (-pi/2, pi/2). When A and B have opposite signs the first
    root -atan(A/B) is already positive and counts as a half-cycle, so one is
    taken off k to keep exactly k crossings.

    B == 0 uses the limit of the formula, which is continuous there for
    k >= 1: pi*(k - 1/2) when A != 0, pi*k when A == 0.
    """
    if a * b < 0 and k >= 1:
        k -= 1

    if b == 0:
        if a == 0:
            phase = math.pi * k
        elif k >= 1:
            phase = math.pi * (k - 0.5)
        else:
            raise DegenerateConfigurationError(
                f"omega undefined for B == 0 with k={k} (A={a})"
            )
    else:
        phase = -math.atan(a / b) + math.pi * k

    return phase / (2 * math.pi * math.sqrt(1 - zeta * zeta))


def residual(b: float, omega: float, zeta: float, y0: float, v0: float) -> float:
    """B minus the B implied by the velocity boundary condition at omega."""
    omega_d = omega * math.sqrt(1 - zeta * zeta)
    return b - (zeta * omega * y0 + v0) / omega_d


def solve_closed_form(zeta: float, k: int, y0: float) -> SolvedParameters:
    if y0 == 0:
        raise DegenerateConfigurationError(
            "initial position and velocity are both zero; the curve is identically 0"
        )
    b = zeta * y0 / math.sqrt(1 - zeta * zeta)
    omega = compute_omega(y0, b, float(k), zeta)
    return SolvedParameters(omega=omega, amplitude_b=b, method="closed_form")


def solve_numerically(
    zeta: float,
    k: int,
    y0: float,
    v0: float,
    options: Optional[SolverOptions] = None,
    callback: Optional[Callable[[RootFindState], None]] = None,
) -> SolvedParameters:
    """
    Resolve the mutual dependence of omega and B by bisection on B.

    Bracketing doubles |B| from the starting guess B = zeta until the residual
    changes sign. omega(B) only moves within one half-cycle, so the residual
    increases with B: a negative start grows B upward, a non-negative start
    negates B and grows it downward. Bisection then keeps r(lower) < 0 <=
    r(upper), replacing the bound picked by the sign just evaluated.
    The sign is recomputed at every midpoint, never carried over from the
    start. `callback`, if given, sees the state after each bisection update.

    Hitting max_iterations is not an error: the current pair is returned with
    converged=False and a ConvergenceWarning is emitted.
    """
    options = options or SolverOptions()
    cap = options.max_iterations
    k = float(k)

    def step(state: RootFindState) -> None:
        state.omega = compute_omega(y0, state.b, k, zeta)
        state.residual = residual(state.b, state.omega, zeta, y0, v0)
        state.direction = math.copysign(1.0, state.residual) < 0

    state = RootFindState(b=zeta)
    step(state)

    if abs(state.residual) > options.tolerance:
        if state.direction == NEG:
            while state.direction == NEG and state.iterations < cap:
                state.lower = state.b
                state.b *= 2
                state.iterations += 1
                step(state)
            state.upper = state.b
        else:
            state.upper = state.b
            state.b *= -1
            state.iterations += 1
            step(state)
            while state.direction == POS and state.iterations < cap:
                state.upper = state.b
                state.b *= 2
                state.iterations += 1
                step(state)
            state.lower = state.b

        while abs(state.residual) > options.tolerance and state.iterations < cap:
            state.b = (state.lower + state.upper) / 2
            state.iterations += 1
            step(state)
            if state.direction == POS:
                state.upper = state.b
            else:
                state.lower = state.b
            if callback is not None:
                callback(state)

    converged = abs(state.residual) <= options.tolerance
    if not converged:
        warnings.warn(
            f"bisection stopped after {state.iterations} iterations with "
            f"|residual|={abs(state.residual):.3e} > {options.tolerance:g} "
            f"(zeta={zeta}, k={int(k)}, y0={y0}, v0={v0})",
            ConvergenceWarning,
            stacklevel=3,
        )

    return SolvedParameters(
        omega=state.omega,
        amplitude_b=state.b,
        converged=converged,
        iterations=state.iterations,
        residual=state.residual,
        method="bisection",
    )

"""
Unit Tests for the spring parameter solvers

Covers the half-cycle corrected omega formula, the closed-form path and the
bracket-and-bisect path, including its iteration cap.
"""

import math

import pytest
from scipy.optimize import brentq

from springease.core.errors import ConvergenceWarning, DegenerateConfigurationError
from springease.core.solver import (
    SolverOptions,
    compute_omega,
    residual,
    solve_closed_form,
    solve_numerically,
)

S = math.sqrt(1 - 0.5 ** 2)


def _residual_at(b, zeta=0.5, k=6, y0=-1.0, v0=5.0):
    return residual(b, compute_omega(y0, b, k, zeta), zeta, y0, v0)


# ============================================================================
# Omega formula
# ============================================================================


class TestComputeOmega:
    """Test the half-cycle corrected omega formula."""

    def test_same_sign_keeps_k(self):
        """A and B with the same sign use k as given."""
        expected = (-math.atan(-1.0 / -0.5) + math.pi * 6) / (2 * math.pi * S)
        assert compute_omega(-1.0, -0.5, 6, 0.5) == expected

    def test_opposite_sign_drops_one_half_cycle(self):
        """A*B < 0 solves with k - 1."""
        expected = (-math.atan(-1.0 / 0.5) + math.pi * 5) / (2 * math.pi * S)
        assert compute_omega(-1.0, 0.5, 6, 0.5) == expected

    def test_no_correction_when_k_is_zero(self):
        """The k >= 1 guard leaves k = 0 untouched."""
        expected = -math.atan(-1.0 / 0.5) / (2 * math.pi * S)
        assert compute_omega(-1.0, 0.5, 0, 0.5) == expected

    def test_continuous_through_b_zero(self):
        """B == 0 returns the common limit of both sides."""
        left = compute_omega(-1.0, -1e-12, 6, 0.5)
        right = compute_omega(-1.0, 1e-12, 6, 0.5)
        mid = compute_omega(-1.0, 0.0, 6, 0.5)
        assert mid == pytest.approx(left, abs=1e-9)
        assert mid == pytest.approx(right, abs=1e-9)
        assert mid == pytest.approx(5.5 / (2 * S))

    def test_zero_amplitudes_use_plain_k(self):
        """A == B == 0 falls back to pi*k, the value for any B when A == 0."""
        assert compute_omega(0.0, 0.0, 3, 0.5) == pytest.approx(3 / (2 * S))
        assert compute_omega(0.0, 0.7, 3, 0.5) == pytest.approx(3 / (2 * S))

    def test_b_zero_with_k_zero_is_degenerate(self):
        """No limit exists for B == 0 when k == 0."""
        with pytest.raises(DegenerateConfigurationError):
            compute_omega(1.0, 0.0, 0, 0.5)

    def test_omega_positive_for_valid_inputs(self):
        """omega stays positive for every sign combination once k >= 1."""
        for a in (-1.0, 1.0):
            for b in (-2.0, -0.1, 0.0, 0.1, 2.0):
                assert compute_omega(a, b, 1, 0.3) > 0


# ============================================================================
# Closed form
# ============================================================================


class TestClosedForm:
    """Test the v0 == 0 path."""

    def test_amplitude_b_from_damping(self):
        """B = zeta*y0/sqrt(1 - zeta^2)."""
        sol = solve_closed_form(0.5, 6, -1.0)
        assert sol.amplitude_b == pytest.approx(-0.5 / S)
        assert sol.omega == compute_omega(-1.0, sol.amplitude_b, 6, 0.5)

    def test_reports_converged_without_iterations(self):
        sol = solve_closed_form(0.3, 4, 0.8)
        assert sol.method == "closed_form"
        assert sol.converged
        assert sol.iterations == 0

    def test_zero_position_is_degenerate(self):
        """y0 == v0 == 0 gives A == B == 0."""
        with pytest.raises(DegenerateConfigurationError):
            solve_closed_form(0.5, 6, 0.0)


# ============================================================================
# Bisection
# ============================================================================


class TestNumericalSolver:
    """Test the bracket-and-bisect path."""

    def test_converges_for_positive_velocity(self):
        """Root above the initial guess: B grows upward."""
        sol = solve_numerically(0.5, 6, -1.0, 5.0)
        assert sol.method == "bisection"
        assert sol.converged
        assert abs(sol.residual) <= 1e-6
        assert abs(_residual_at(sol.amplitude_b)) <= 1e-6

    def test_omega_matches_returned_b(self):
        """omega is the formula value at the returned B."""
        sol = solve_numerically(0.5, 6, -1.0, 5.0)
        assert sol.omega == compute_omega(-1.0, sol.amplitude_b, 6, 0.5)

    def test_converges_for_negative_velocity(self):
        """Root below the initial guess: B is negated and grows downward."""
        sol = solve_numerically(0.5, 6, -1.0, -5.0)
        assert sol.converged
        assert sol.amplitude_b < 0
        assert abs(_residual_at(sol.amplitude_b, v0=-5.0)) <= 1e-6

    def test_matches_brentq(self):
        """Independent root finder lands on the same B."""
        root = brentq(_residual_at, 0.5, 4.0, xtol=1e-12)
        sol = solve_numerically(0.5, 6, -1.0, 5.0)
        assert sol.amplitude_b == pytest.approx(root, abs=1e-5)

    def test_bisection_through_b_zero(self):
        """A bracket of [-zeta, zeta] evaluates B == 0 on its first midpoint."""
        sol = solve_numerically(0.5, 6, -1.0, 1.6)
        assert sol.converged
        assert math.isfinite(sol.omega)
        assert abs(sol.amplitude_b) < 0.5

    def test_zero_position_with_velocity(self):
        """A == 0 keeps omega constant, so B = v0 / (omega*sqrt(1 - zeta^2))."""
        sol = solve_numerically(0.5, 3, 0.0, 1.0)
        assert sol.converged
        assert sol.amplitude_b == pytest.approx(2.0 / 3.0, abs=1e-5)

    def test_iteration_cap_reports_non_convergence(self):
        """Hitting the cap warns and returns the current pair."""
        options = SolverOptions(max_iterations=3)
        with pytest.warns(ConvergenceWarning):
            sol = solve_numerically(0.5, 6, -1.0, 5.0, options)
        assert not sol.converged
        assert sol.iterations == 3
        assert abs(sol.residual) > 1e-6
        assert math.isfinite(sol.amplitude_b)

    def test_looser_tolerance_needs_fewer_iterations(self):
        loose = solve_numerically(0.5, 6, -1.0, 5.0, SolverOptions(tolerance=1e-2))
        strict = solve_numerically(0.5, 6, -1.0, 5.0, SolverOptions(tolerance=1e-10))
        assert loose.converged and strict.converged
        assert loose.iterations < strict.iterations
        assert abs(strict.residual) <= 1e-10


class TestBisectionBounds:
    """Test the bound updates made during bisection."""

    @staticmethod
    def _record(v0):
        steps = []

        def callback(state):
            steps.append((state.b, state.residual, state.lower, state.upper))

        sol = solve_numerically(0.5, 6, -1.0, v0, callback=callback)
        return sol, steps

    @pytest.mark.parametrize("v0,start_negative", [(5.0, True), (-5.0, False)])
    def test_start_sign_selects_branch(self, v0, start_negative):
        assert (_residual_at(0.5, v0=v0) < 0) == start_negative

    @pytest.mark.parametrize("v0", [5.0, -5.0])
    def test_bracket_holds_at_every_step(self, v0):
        """r(lower) < 0 <= r(upper) after every midpoint."""
        sol, steps = self._record(v0)
        assert sol.converged
        assert len(steps) > 3
        for _, _, lower, upper in steps:
            assert lower < upper
            assert _residual_at(lower, v0=v0) < 0 <= _residual_at(upper, v0=v0)

    @pytest.mark.parametrize("v0", [5.0, -5.0])
    def test_midpoint_replaces_bound_of_its_own_sign(self, v0):
        _, steps = self._record(v0)
        for b, r, lower, upper in steps:
            if r < 0:
                assert lower == b
            else:
                assert upper == b

    @pytest.mark.parametrize("v0", [5.0, -5.0])
    def test_both_bounds_move(self, v0):
        """The update follows each midpoint's sign, not the starting sign."""
        _, steps = self._record(v0)
        lowers = {lower for _, _, lower, _ in steps}
        uppers = {upper for _, _, _, upper in steps}
        assert len(lowers) > 1
        assert len(uppers) > 1

    @pytest.mark.parametrize("v0", [5.0, -5.0])
    def test_bracket_shrinks(self, v0):
        _, steps = self._record(v0)
        widths = [upper - lower for _, _, lower, upper in steps]
        assert all(w2 < w1 for w1, w2 in zip(widths, widths[1:]))
        assert widths[-1] < widths[0] / 8


class TestSolverOptions:
    """Test option validation."""

    @pytest.mark.parametrize(
        "kwargs",
        [{"tolerance": 0.0}, {"tolerance": -1e-6}, {"max_iterations": 0}, {"velocity_threshold": -1.0}],
    )
    def test_invalid_options_rejected(self, kwargs):
        with pytest.raises(ValueError):
            SolverOptions(**kwargs)

    def test_defaults(self):
        opts = SolverOptions()
        assert opts.tolerance == 1e-6
        assert opts.max_iterations == 1000
        assert opts.velocity_threshold == 1e-6

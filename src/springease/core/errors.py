class DegenerateConfigurationError(ValueError):
    """Spring parameters for which the curve is undefined (e.g. A == B == 0)."""


class ConvergenceWarning(RuntimeWarning):
    """Bisection hit its iteration cap; the returned parameters are approximate."""

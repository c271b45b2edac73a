import math
from typing import Sequence
import numpy as np

def zero_crossings(y: Sequence[float]) -> int:
    """Number of sign changes; exact zeros are skipped, not counted twice."""
    s = np.sign(np.asarray(y, dtype=np.float64))
    s = s[s != 0]
    return int(np.count_nonzero(s[1:] != s[:-1]))

def half_period_peaks(curve, n: int, samples: int = 64) -> np.ndarray:
    """max |y| over each of n consecutive half periods, sampled on the same offsets."""
    h = curve.half_period
    offsets = np.linspace(0.0, h, samples, endpoint=False)
    return np.array([np.max(np.abs(curve.sample(i * h + offsets))) for i in range(n)])

def max_abs_error(a, b) -> float:
    a = np.asarray(a, dtype=np.float64)
    b = np.asarray(b, dtype=np.float64)
    return float(np.max(np.abs(a - b))) if a.size else 0.0

def settle_time(t, y, eps: float = 1e-3) -> float:
    """First sample time after which |y| stays within eps (nan if it never does)."""
    t = np.asarray(t, dtype=np.float64)
    outside = np.flatnonzero(np.abs(np.asarray(y, dtype=np.float64)) > eps)
    if outside.size == 0:
        return float(t[0])
    last = outside[-1]
    return float(t[last + 1]) if last + 1 < t.size else math.nan

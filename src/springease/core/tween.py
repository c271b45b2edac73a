"""
Per-frame use of an easing curve.

A tween is a plain value: the caller owns the clock and passes the elapsed
time in, so nothing here reads the time or keeps a "current easing" around.

Usage (spring a clock hand into place after each one-second tick):
    tween = SpringTween(curve=make_spring_easing(SpringConfig()), duration=1.0, magnitude=6.0)
    frame = tween.step(elapsed)          # once per rendered frame
    angle = target_angle + frame.value
    # stop redrawing once frame.finished
"""
from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from .spring import EasingCurve, clamp


@dataclass(frozen=True)
class TweenFrame:
    progress: float
    value: float
    finished: bool


@dataclass(frozen=True)
class SpringTween:
    curve: EasingCurve
    duration: float = 1.0     # seconds the animation spans
    magnitude: float = 1.0    # scales the curve, e.g. degrees moved per tick

    def __post_init__(self):
        if not self.duration > 0:
            raise ValueError(f"duration must be > 0, got {self.duration}")

    def progress(self, elapsed: float) -> float:
        return clamp(elapsed / self.duration, 0.0, 1.0)

    def finished(self, elapsed: float) -> bool:
        return elapsed >= self.duration

    def value(self, elapsed: float) -> float:
        return self.magnitude * self.curve(self.progress(elapsed))

    def step(self, elapsed: float) -> TweenFrame:
        p = self.progress(elapsed)
        return TweenFrame(progress=p, value=self.magnitude * self.curve(p),
                          finished=self.finished(elapsed))

    def frames(self, fps: float = 60.0) -> np.ndarray:
        """One value per frame from start to finish, both ends included."""
        if not fps > 0:
            raise ValueError(f"fps must be > 0, got {fps}")
        n = max(2, int(round(self.duration * fps)) + 1)
        elapsed = np.linspace(0.0, self.duration, n)
        return np.array([self.value(e) for e in elapsed], dtype=np.float64)

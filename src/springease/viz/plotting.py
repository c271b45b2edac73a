from __future__ import annotations
from pathlib import Path
from typing import Optional, Tuple, Any

import numpy as np
import matplotlib.pyplot as plt


def _to_numpy(x: Any) -> Optional[np.ndarray]:
    if x is None:
        return None
    return np.asarray(x, dtype=np.float64)


def _finish(fig, save: Optional[Path], show: bool) -> None:
    fig.tight_layout()
    if save:
        Path(save).parent.mkdir(parents=True, exist_ok=True)
        fig.savefig(save, dpi=150)
    if show:
        plt.show()
    plt.close(fig)


def plot_curve(
    t,
    y,
    envelope=None,
    title: str = "Spring easing",
    label: str = "y",
    mark_unit_interval: bool = True,
    save: Optional[Path] = None,
    show: bool = False,
):
    """Curve with its decay envelope (±) and the animated window [0, 1] shaded."""
    t = _to_numpy(t)
    y = _to_numpy(y)
    envelope = _to_numpy(envelope)

    fig, ax = plt.subplots(1, 1, figsize=(9, 5))
    if mark_unit_interval:
        ax.axvspan(0.0, 1.0, color="0.9", zorder=0, label="progress ∈ [0, 1]")
    if envelope is not None:
        ax.plot(t, envelope, lw=1.0, ls="--", color="0.4", label="envelope")
        ax.plot(t, -envelope, lw=1.0, ls="--", color="0.4")
    ax.plot(t, y, lw=1.8, label=label)
    ax.axhline(0.0, color="k", lw=0.8, alpha=0.6)
    ax.set_xlabel("t")
    ax.set_ylabel("displacement")
    ax.set_title(title)
    ax.grid(True, ls="--", alpha=0.4)
    ax.legend()
    _finish(fig, save, show)


def plot_reference_comparison(
    t,
    y_closed,
    y_ref,
    title: str = "Closed form vs ODE reference",
    labels: Tuple[str, str] = ("x", "v"),
    save: Optional[Path] = None,
    show: bool = False,
    with_residuals: bool = True,
    with_phase: bool = True,
):
    """Compare the closed-form curve to an integrated trajectory; both shaped (N, 2)."""
    t = _to_numpy(t)
    y_closed = _to_numpy(y_closed)
    y_ref = _to_numpy(y_ref)

    nrows = 1 + int(with_residuals) + int(with_phase)
    fig = plt.figure(figsize=(10, 4.0 * nrows))

    # Top: trajectories
    ax1 = fig.add_subplot(nrows, 1, 1)
    ax1.plot(t, y_ref[:, 0], lw=1.8, label=f"{labels[0]} reference")
    ax1.plot(t, y_closed[:, 0], lw=1.8, ls="--", label=f"{labels[0]} closed form")
    ax1.set_ylabel(labels[0])
    ax1.set_title(title)
    ax1.grid(True, ls="--", alpha=0.4)
    ax1.legend()

    r = y_closed - y_ref
    row = 2

    if with_residuals:
        ax2 = fig.add_subplot(nrows, 1, row)
        ax2.plot(t, r[:, 0], lw=1.2, label=f"{labels[0]} residual")
        ax2.plot(t, r[:, 1], lw=1.2, label=f"{labels[1]} residual")
        ax2.axhline(0.0, color="k", lw=0.8, alpha=0.6)
        ax2.set_ylabel("residual")
        ax2.grid(True, ls="--", alpha=0.4)
        ax2.legend()
        row += 1

    if with_phase:
        ax3 = fig.add_subplot(nrows, 1, row)
        ax3.plot(y_ref[:, 0], y_ref[:, 1], lw=1.6, label="reference")
        ax3.plot(y_closed[:, 0], y_closed[:, 1], lw=1.6, ls="--", label="closed form")
        ax3.set_xlabel(labels[0])
        ax3.set_ylabel(labels[1])
        ax3.grid(True, ls="--", alpha=0.4)
        ax3.legend()

    _finish(fig, save, show)

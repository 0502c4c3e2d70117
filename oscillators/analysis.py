# SPDX-FileCopyrightText: Copyright (c) 2025 NBEL
# SPDX-License-Identifier: Apache-2.0
"""
Record headless runs of a session and plot them.

Usage:
    from oscillators import create_session
    from oscillators.analysis import record, plot_run

    session = create_session("spring_mass", damping=0.0)
    run = record(session, duration=10.0)
    plot_run(run, path="spring_mass.png")
"""

from typing import Dict, Optional

import numpy as np
import matplotlib

matplotlib.use('Agg')
import matplotlib.pyplot as plt  # noqa: E402

from .session import PendulumSession  # noqa: E402

PENDULUM_FIELDS = ("theta", "omega")
SPRING_MASS_FIELDS = ("x", "v", "energy", "external_force")

LABELS = {
    "theta": "Angle (rad)",
    "omega": "Angular velocity (rad/s)",
    "x": "Position (m)",
    "v": "Velocity (m/s)",
    "energy": "Energy (J)",
    "external_force": "F(t) (N)",
}


def record(session, duration: float) -> Dict[str, np.ndarray]:
    """
    Run the session for `duration` seconds of simulated time.

    The recording starts from the session's current state (the first sample
    is that state) and leaves the session paused afterwards.

    Returns:
        Dict with 't' and one array per state field, each of length steps + 1
    """
    fields = PENDULUM_FIELDS if isinstance(session, PendulumSession) else SPRING_MASS_FIELDS
    steps = int(round(duration / session.dt))

    snap = session.snapshot()
    samples = {name: [getattr(snap, name)] for name in ("t",) + fields}

    session.start()
    for _ in range(steps):
        snap = session.step()
        for name in samples:
            samples[name].append(getattr(snap, name))
    session.pause()

    run = {name: np.asarray(values, dtype=np.float64) for name, values in samples.items()}
    run["system"] = session.NAME
    return run


def energy_drift(run: Dict[str, np.ndarray]) -> float:
    """
    Largest relative deviation of the recorded energy from its first sample.

    Always a fraction of the initial energy. A run starting at zero energy
    (x0 = 0) has no relative scale: the result is 0.0 if the energy stays
    at zero and inf otherwise.
    """
    energy = run["energy"]
    deviation = float(np.max(np.abs(energy - energy[0])))
    if energy[0] == 0.0:
        return 0.0 if deviation == 0.0 else float('inf')
    return deviation / abs(energy[0])


def plot_run(run: Dict[str, np.ndarray], path: Optional[str] = None, title: Optional[str] = None):
    """
    Plot every recorded field against time, one axis per field.

    Args:
        run: Output of record()
        path: Save the figure here if given
        title: Figure title (defaults to the system name)

    Returns:
        The matplotlib Figure
    """
    fields = [name for name in run if name not in ("t", "system")]
    fig, axes = plt.subplots(len(fields), 1, figsize=(10, 2.5 * len(fields)), sharex=True)
    axes = np.atleast_1d(axes)

    for ax, name in zip(axes, fields):
        ax.plot(run["t"], run[name], linewidth=2)
        ax.axhline(y=0, color='k', linestyle='--', alpha=0.3)
        ax.set_ylabel(LABELS.get(name, name), fontsize=12)
        ax.grid(True, alpha=0.3)

    axes[-1].set_xlabel('Time (s)', fontsize=12)
    axes[0].set_title(title or f"{run.get('system', '')} simulation", fontsize=14, fontweight='bold')

    plt.tight_layout()
    if path is not None:
        fig.savefig(path, dpi=150, bbox_inches='tight')
        print(f"   ✓ Plot saved as: {path}")
    return fig

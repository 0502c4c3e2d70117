# SPDX-FileCopyrightText: Copyright (c) 2025 NBEL
# SPDX-License-Identifier: Apache-2.0
"""
Simulation sessions for the pendulum and spring-mass demos.

A session owns one system's parameter store, its current state and the
run flag. It is the only writer of the state: the solver produces a new
state on step(), reset() rebuilds it from the initial-condition
parameters. Everything a renderer needs is available as an immutable
snapshot.

Usage:
    from oscillators import SpringMassSession

    session = SpringMassSession(dt=0.016)
    session.start()
    for _ in range(100):
        snap = session.step()
    session.set_parameter("damping", 0.0)   # applies from the next step
    session.reset()                         # back to IDLE at x0
"""

from collections import deque
from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any, Callable, Dict, Optional, Tuple

from .sim.derived import CRITICAL_TOLERANCE, forcing_force, pendulum_quantities, spring_mass_quantities
from .sim.model import PendulumModel, SpringMassModel
from .solvers import SolverExplicitEuler, SolverSemiImplicit

DEFAULT_DT = 0.016  # ~60 FPS
HISTORY_LENGTH = 50


class RunState(Enum):
    IDLE = "idle"
    RUNNING = "running"


# ============================================================================
# SNAPSHOTS
# ============================================================================

@dataclass(frozen=True)
class PendulumSnapshot:
    """Read-only view of a pendulum session for rendering."""

    theta: float
    omega: float
    t: float
    length: float
    natural_frequency: float
    period: float
    running: bool

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class SpringMassSnapshot:
    """Read-only view of a spring-mass session for rendering."""

    x: float
    v: float
    t: float
    energy: float
    external_force: float
    forcing_amplitude: float
    natural_frequency: float
    damping_ratio: float
    damped_frequency: float
    behavior: str
    frequency_ratio: float
    near_resonance: bool
    history: Tuple[float, ...]
    running: bool

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self)


# ============================================================================
# SESSIONS
# ============================================================================

class SimulationSession:
    """
    Run/reset state machine around one model + solver pair.

    States are IDLE (state frozen) and RUNNING (step() integrates and
    publishes the new snapshot to the listener).
    reset() is accepted from either state and always lands in IDLE.

    Subclasses set MODEL_CLASS and SOLVER_CLASS and implement snapshot().
    """

    MODEL_CLASS = None
    SOLVER_CLASS = None
    NAME = ""

    def __init__(
        self,
        model=None,
        dt: float = DEFAULT_DT,
        listener: Optional[Callable[[Any], None]] = None,
        verbose: bool = False,
    ):
        """
        Args:
            model: Parameter store (a default one is created if None)
            dt: Fixed integration step in seconds
            listener: Called with a fresh snapshot after every integrated step
                and every command (start, pause, reset, set_parameter)
            verbose: Print lifecycle messages
        """
        if not dt > 0.0:
            raise ValueError(f"dt must be > 0 (got {dt})")

        self.model = model if model is not None else self.MODEL_CLASS()
        self.solver = self.SOLVER_CLASS(self.model)
        self.dt = dt
        self.listener = listener
        self.verbose = verbose

        self.run_state = RunState.IDLE
        self.state = self.model.state()
        self.step_count = 0

    # ------------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------------

    @property
    def running(self) -> bool:
        return self.run_state is RunState.RUNNING

    def start(self):
        if self.running:
            return
        self.run_state = RunState.RUNNING
        if self.verbose:
            print(f"[{self.NAME}] Started at t={self.state.t:.2f}s")
        self._notify()

    def pause(self):
        if not self.running:
            return
        self.run_state = RunState.IDLE
        if self.verbose:
            print(f"[{self.NAME}] Paused at t={self.state.t:.2f}s")
        self._notify()

    def toggle(self):
        if self.running:
            self.pause()
        else:
            self.start()

    def reset(self):
        """Stop and rebuild the state from the current initial conditions."""
        self.run_state = RunState.IDLE
        self.state = self.model.state()
        self.step_count = 0
        self._on_reset()
        if self.verbose:
            print(f"[{self.NAME}] Reset!")
        self._notify()

    def set_parameter(self, name: str, value: float) -> float:
        """
        Update one parameter. The state is left as is; the new value is
        used from the next step on (initial conditions from the next reset).
        """
        value = self.model.set_parameter(name, value)
        self._notify()
        return value

    def step(self, external: float = 0.0):
        """
        Integrate one fixed step if running; otherwise leave the state frozen.

        Args:
            external: Extra load passed to the solver (0 for the demos)

        Returns:
            Snapshot of the (possibly unchanged) state
        """
        if not self.running:
            return self.snapshot()

        self.state = self.solver.step(self.state, self.dt, external)
        self.step_count += 1
        self._on_step()

        snapshot = self.snapshot()
        if self.listener is not None:
            self.listener(snapshot)
        return snapshot

    def parameters(self) -> Dict[str, float]:
        return self.model.parameters()

    def snapshot(self):
        raise NotImplementedError

    # ------------------------------------------------------------------------
    # Hooks
    # ------------------------------------------------------------------------

    def _on_step(self):
        pass

    def _on_reset(self):
        pass

    def _notify(self):
        if self.listener is not None:
            self.listener(self.snapshot())


class PendulumSession(SimulationSession):
    """Session for the damped pendulum (explicit Euler)."""

    MODEL_CLASS = PendulumModel
    SOLVER_CLASS = SolverExplicitEuler
    NAME = "pendulum"

    def snapshot(self) -> PendulumSnapshot:
        derived = pendulum_quantities(self.model)
        return PendulumSnapshot(
            theta=self.state.theta,
            omega=self.state.omega,
            t=self.state.t,
            length=self.model.length,
            natural_frequency=derived["natural_frequency"],
            period=derived["period"],
            running=self.running,
        )


class SpringMassSession(SimulationSession):
    """
    Session for the driven spring-mass-damper (semi-implicit Euler).

    Keeps the last HISTORY_LENGTH positions for trail rendering.
    """

    MODEL_CLASS = SpringMassModel
    SOLVER_CLASS = SolverSemiImplicit
    NAME = "spring-mass"

    def __init__(self, model=None, dt: float = DEFAULT_DT, listener=None, verbose: bool = False,
                 history_length: int = HISTORY_LENGTH, critical_tolerance: float = CRITICAL_TOLERANCE):
        self.history = deque(maxlen=history_length)
        self.critical_tolerance = critical_tolerance
        super().__init__(model=model, dt=dt, listener=listener, verbose=verbose)

    def _on_step(self):
        self.history.append(self.state.x)

    def _on_reset(self):
        self.history.clear()

    def snapshot(self) -> SpringMassSnapshot:
        model = self.model
        derived = spring_mass_quantities(model, self.critical_tolerance)
        return SpringMassSnapshot(
            x=self.state.x,
            v=self.state.v,
            t=self.state.t,
            energy=self.state.energy,
            external_force=forcing_force(model.forcing_amplitude, model.forcing_frequency, self.state.t),
            forcing_amplitude=model.forcing_amplitude,
            natural_frequency=derived["natural_frequency"],
            damping_ratio=derived["damping_ratio"],
            damped_frequency=derived["damped_frequency"],
            behavior=derived["behavior"],
            frequency_ratio=derived["frequency_ratio"],
            near_resonance=derived["near_resonance"],
            history=tuple(self.history),
            running=self.running,
        )


SESSIONS = {
    "pendulum": PendulumSession,
    "spring_mass": SpringMassSession,
}


def create_session(system: str, dt: float = DEFAULT_DT, **parameters) -> SimulationSession:
    """
    Build a session for 'pendulum' or 'spring_mass' with parameter overrides.

    Example:
        >>> session = create_session("spring_mass", mass=2.0, damping=0.0)
    """
    if system not in SESSIONS:
        raise ValueError(f"Unknown system: {system} (expected one of {sorted(SESSIONS)})")
    session_cls = SESSIONS[system]
    model = session_cls.MODEL_CLASS(**parameters)
    return session_cls(model=model, dt=dt)

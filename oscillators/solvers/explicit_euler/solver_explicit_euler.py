# SPDX-FileCopyrightText: Copyright (c) 2025 NBEL
# SPDX-License-Identifier: Apache-2.0
#
# Explicit Euler solver for the damped pendulum

from ...sim.state import PendulumState
from ..solver import SolverBase
from .kernels_pendulum import integrate_pendulum


class SolverExplicitEuler(SolverBase):
    """
    Forward (explicit) Euler integrator for the nonlinear pendulum.

    Both the angle and the angular velocity are advanced from derivatives
    evaluated at the start of the step. The scheme slowly pumps energy into
    an undamped pendulum; keep dt small (the demos use 0.016 s).

    Example:
        >>> model = PendulumModel(length=1.0, initial_angle=0.3)
        >>> solver = SolverExplicitEuler(model)
        >>> state = model.state()
        >>>
        >>> for i in range(100):
        >>>     state = solver.step(state, dt=0.016)
    """

    def step(self, state: PendulumState, dt: float, external: float = 0.0) -> PendulumState:
        """
        Advance the pendulum by one timestep.

        Args:
            state: The input state
            dt: The timestep (in seconds)
            external: Applied angular acceleration added to the equation of motion (rad/s^2)
        """
        return integrate_pendulum(state, self.model, dt, external)

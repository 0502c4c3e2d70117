# SPDX-FileCopyrightText: Copyright (c) 2025 NBEL
# SPDX-License-Identifier: Apache-2.0
#
# Semi-implicit solver for the driven spring-mass-damper

from ...sim.state import SpringMassState
from ..solver import SolverBase
from .kernels_spring import integrate_spring_mass


class SolverSemiImplicit(SolverBase):
    """
    A semi-implicit integrator using symplectic Euler for the spring-mass system.

    The velocity is kicked first and the position drifts with the new
    velocity. For an undamped, undriven oscillator the energy stays bounded
    instead of growing, provided dt * omega_n < 2.

    Example:
        >>> model = SpringMassModel(mass=1.0, spring_constant=10.0)
        >>> solver = SolverSemiImplicit(model)
        >>> state = model.state()
        >>>
        >>> for i in range(100):
        >>>     state = solver.step(state, dt=0.016)
    """

    def step(self, state: SpringMassState, dt: float, external: float = 0.0) -> SpringMassState:
        """
        Advance the oscillator by one timestep.

        Args:
            state: The input state
            dt: The timestep (in seconds)
            external: Additional force added to the drive (N)
        """
        return integrate_spring_mass(state, self.model, dt, external)

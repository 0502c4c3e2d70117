# SPDX-FileCopyrightText: Copyright (c) 2025 NBEL
# SPDX-License-Identifier: Apache-2.0
#
# Base solver class for the oscillator simulations


class SolverBase:
    """
    Generic base class for fixed-step solvers.

    A solver is bound to a model (the parameter store) and advances a
    state by one time step. It reads model parameters at every step, so a
    parameter change takes effect on the next step; it never writes them.
    """

    def __init__(self, model):
        """
        Initialize the solver with a model.

        Args:
            model: Parameter store of the simulated system
        """
        self.model = model

    def step(self, state, dt: float, external: float = 0.0):
        """
        Advance the state by one time step.

        Must be implemented by concrete solver subclasses.

        Args:
            state: The input state (left untouched)
            dt: The time step (in seconds)
            external: Additional applied load (force or angular acceleration)

        Returns:
            The new state
        """
        raise NotImplementedError("Concrete solvers must implement step()")

    def integrate(self, state, dt: float, steps: int):
        """Apply step() repeatedly and return the final state."""
        for _ in range(steps):
            state = self.step(state, dt)
        return state

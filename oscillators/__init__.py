# SPDX-FileCopyrightText: Copyright (c) 2025 NBEL
# SPDX-License-Identifier: Apache-2.0
"""
Interactive pendulum and spring-mass simulations.

Follows the Model + State + Solver pattern:
    - sim.Model*: Parameter store (physical constants, initial conditions)
    - sim.State*: Time-varying state (immutable, one per step)
    - solvers.Solver*: Fixed-step time integration
    - session: Run/reset state machine and snapshots
    - driver: Frame clock that steps a session once per frame
"""

from .sim import (
    GRAVITY,
    InvalidParameterError,
    ParameterRange,
    PendulumModel,
    PendulumState,
    SpringMassModel,
    SpringMassState,
)
from .solvers import SolverBase, SolverExplicitEuler, SolverSemiImplicit
from .session import (
    DEFAULT_DT,
    HISTORY_LENGTH,
    PendulumSession,
    PendulumSnapshot,
    RunState,
    SimulationSession,
    SpringMassSession,
    SpringMassSnapshot,
    create_session,
)
from .driver import FrameDriver

__all__ = [
    "DEFAULT_DT",
    "GRAVITY",
    "HISTORY_LENGTH",
    "FrameDriver",
    "InvalidParameterError",
    "ParameterRange",
    "PendulumModel",
    "PendulumSession",
    "PendulumSnapshot",
    "PendulumState",
    "RunState",
    "SimulationSession",
    "SolverBase",
    "SolverExplicitEuler",
    "SolverSemiImplicit",
    "SpringMassModel",
    "SpringMassSession",
    "SpringMassSnapshot",
    "SpringMassState",
    "create_session",
]

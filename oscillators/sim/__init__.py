# SPDX-FileCopyrightText: Copyright (c) 2025 NBEL
# SPDX-License-Identifier: Apache-2.0

from .state import PendulumState, SpringMassState
from .model import (
    GRAVITY,
    PENDULUM_PARAMETERS,
    SPRING_MASS_PARAMETERS,
    InvalidParameterError,
    ModelBase,
    ParameterRange,
    PendulumModel,
    SpringMassModel,
)

__all__ = [
    "GRAVITY",
    "PENDULUM_PARAMETERS",
    "SPRING_MASS_PARAMETERS",
    "InvalidParameterError",
    "ModelBase",
    "ParameterRange",
    "PendulumModel",
    "PendulumState",
    "SpringMassModel",
    "SpringMassState",
]

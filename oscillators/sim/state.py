# SPDX-FileCopyrightText: Copyright (c) 2025 NBEL
# SPDX-License-Identifier: Apache-2.0
#
# State classes for the pendulum and spring-mass simulations

from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True)
class PendulumState:
    """
    Time-varying state of the pendulum.

    Attributes:
        theta: Angle from the downward vertical (rad)
        omega: Angular velocity (rad/s)
        t: Elapsed simulation time (s)
    """

    theta: float
    omega: float
    t: float = 0.0

    def as_array(self) -> np.ndarray:
        return np.array([self.theta, self.omega], dtype=np.float64)


@dataclass(frozen=True)
class SpringMassState:
    """
    Time-varying state of the spring-mass-damper.

    The energy field is derived from (x, v) by whoever builds the state;
    it is never integrated.

    Attributes:
        x: Displacement from equilibrium (m)
        v: Velocity (m/s)
        t: Elapsed simulation time (s)
        energy: Total mechanical energy 1/2 m v^2 + 1/2 k x^2 (J)
    """

    x: float
    v: float
    t: float = 0.0
    energy: float = 0.0

    def as_array(self) -> np.ndarray:
        return np.array([self.x, self.v], dtype=np.float64)

# SPDX-FileCopyrightText: Copyright (c) 2025 NBEL
# SPDX-License-Identifier: Apache-2.0
#
# Pendulum kernels for the explicit Euler solver

import math

from ...sim.state import PendulumState


def eval_pendulum_acceleration(theta: float, omega: float, length: float, damping: float,
                               gravity: float, applied: float = 0.0) -> float:
    """
    Angular acceleration of the damped pendulum.

        alpha = -(g / L) sin(theta) - c omega + applied
    """
    return -(gravity / length) * math.sin(theta) - damping * omega + applied


def integrate_pendulum(state: PendulumState, model, dt: float, applied: float = 0.0) -> PendulumState:
    """
    One explicit Euler step of the pendulum.

    The angle advances with the velocity from the start of the step, not
    the updated one:

        omega' = omega + alpha dt
        theta' = theta + omega dt
        t'     = t + dt
    """
    theta = state.theta
    omega = state.omega

    alpha = eval_pendulum_acceleration(theta, omega, model.length, model.damping, model.gravity, applied)

    new_omega = omega + alpha * dt
    new_theta = theta + omega * dt

    return PendulumState(theta=new_theta, omega=new_omega, t=state.t + dt)

# SPDX-FileCopyrightText: Copyright (c) 2025 NBEL
# SPDX-License-Identifier: Apache-2.0
#
# Spring-mass-damper kernels for the semi-implicit solver

from ...sim.derived import forcing_force, total_energy
from ...sim.state import SpringMassState


def eval_spring_mass_acceleration(x: float, v: float, t: float, model, applied: float = 0.0) -> float:
    """
    Acceleration from Newton's second law for the driven oscillator.

        m a = -k x - c v + A cos(omega_f t) + applied
    """
    f_ext = forcing_force(model.forcing_amplitude, model.forcing_frequency, t) + applied
    return (-model.spring_constant * x - model.damping * v + f_ext) / model.mass


def integrate_spring_mass(state: SpringMassState, model, dt: float, applied: float = 0.0) -> SpringMassState:
    """
    One semi-implicit (symplectic) Euler step of the spring-mass-damper.

    The drive is sampled at the time at the start of the step and the
    position advances with the updated velocity:

        v' = v + a dt
        x' = x + v' dt
        t' = t + dt
        E' = 1/2 m v'^2 + 1/2 k x'^2
    """
    a = eval_spring_mass_acceleration(state.x, state.v, state.t, model, applied)

    new_v = state.v + a * dt
    new_x = state.x + new_v * dt

    return SpringMassState(
        x=new_x,
        v=new_v,
        t=state.t + dt,
        energy=total_energy(model.mass, model.spring_constant, new_x, new_v),
    )

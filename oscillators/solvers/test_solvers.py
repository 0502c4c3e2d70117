"""
Tests for the pendulum and spring-mass solvers.

Run with:
    pytest oscillators/solvers/test_solvers.py
"""

import math

import numpy as np

from oscillators.sim import PendulumModel, PendulumState, SpringMassModel, SpringMassState
from oscillators.solvers import SolverExplicitEuler, SolverSemiImplicit
from oscillators.solvers.explicit_euler import eval_pendulum_acceleration, integrate_pendulum
from oscillators.solvers.semi_implicit import integrate_spring_mass

DT = 0.016


# ============================================================================
# PENDULUM (EXPLICIT EULER)
# ============================================================================

def test_pendulum_first_step():
    """L=1, theta0=0.3, c=0: alpha ~ -2.899, angle moves on the second step"""
    model = PendulumModel(length=1.0, initial_angle=0.3, damping=0.0)
    solver = SolverExplicitEuler(model)
    state = model.state()

    alpha = eval_pendulum_acceleration(0.3, 0.0, 1.0, 0.0, 9.81)
    assert np.isclose(alpha, -9.81 * math.sin(0.3))
    assert np.isclose(alpha, -2.899, atol=1e-3)

    s1 = solver.step(state, DT)
    assert np.isclose(s1.omega, alpha * DT)
    # Angle advanced with the pre-update omega (zero)
    assert s1.theta == 0.3
    assert s1.t == DT

    s2 = solver.step(s1, DT)
    assert s2.theta < 0.3
    assert s2.theta == s1.theta + s1.omega * DT


def test_pendulum_uses_old_velocity():
    model = PendulumModel(length=1.5, damping=0.2)
    state = PendulumState(theta=0.4, omega=-0.8, t=1.0)

    new = integrate_pendulum(state, model, DT)
    alpha = -(model.gravity / 1.5) * math.sin(0.4) - 0.2 * (-0.8)

    assert new.omega == -0.8 + alpha * DT
    assert new.theta == 0.4 + (-0.8) * DT
    assert new.t == 1.0 + DT


def test_pendulum_damping_decays_swing():
    model = PendulumModel(length=1.0, initial_angle=0.5, damping=1.0)
    state = SolverExplicitEuler(model).integrate(model.state(), DT, 1000)
    assert abs(state.theta) < 0.05


def test_pendulum_applied_load():
    model = PendulumModel()
    state = model.state()
    free = integrate_pendulum(state, model, DT)
    pushed = integrate_pendulum(state, model, DT, applied=1.0)
    assert np.isclose(pushed.omega - free.omega, DT)


# ============================================================================
# SPRING-MASS (SEMI-IMPLICIT EULER)
# ============================================================================

def test_spring_mass_first_step():
    """m=1, k=10, c=0.5, x0=0.1, A=0: a=-1, v'=-0.016, x'=0.099744"""
    model = SpringMassModel(mass=1.0, spring_constant=10.0, damping=0.5,
                            initial_position=0.1, forcing_amplitude=0.0)
    s1 = SolverSemiImplicit(model).step(model.state(), DT)

    assert np.isclose(s1.v, -0.016)
    assert np.isclose(s1.x, 0.099744)
    assert np.isclose(s1.t, DT)
    assert np.isclose(s1.energy, 0.5 * 0.016 ** 2 + 0.5 * 10.0 * 0.099744 ** 2)
    assert np.isclose(s1.energy, 0.04987, atol=1e-5)


def test_spring_mass_uses_new_velocity():
    model = SpringMassModel(mass=2.0, spring_constant=5.0, damping=0.3)
    state = SpringMassState(x=0.2, v=0.5, t=0.0)

    new = integrate_spring_mass(state, model, DT)
    a = (-5.0 * 0.2 - 0.3 * 0.5 + 0.0) / 2.0

    assert new.v == 0.5 + a * DT
    assert new.x == 0.2 + new.v * DT


def test_forcing_sampled_at_step_start():
    model = SpringMassModel(mass=1.0, spring_constant=10.0, damping=0.0,
                            forcing_amplitude=4.0, forcing_frequency=2.0)
    state = SpringMassState(x=0.0, v=0.0, t=0.3)

    new = integrate_spring_mass(state, model, DT)
    expected_force = 4.0 * math.cos(2.0 * 0.3)
    assert np.isclose(new.v, expected_force * DT)


def test_energy_recomputed_from_state():
    model = SpringMassModel(damping=0.0, forcing_amplitude=3.0, forcing_frequency=2.5)
    solver = SolverSemiImplicit(model)
    state = model.state()
    for _ in range(200):
        state = solver.step(state, DT)
        assert np.isclose(state.energy, 0.5 * model.mass * state.v ** 2 + 0.5 * model.spring_constant * state.x ** 2,
                          rtol=1e-12, atol=0.0)


def test_undamped_energy_stays_bounded():
    """Undamped, undriven: energy within 5% of the start over 10 s"""
    model = SpringMassModel(mass=1.0, spring_constant=10.0, damping=0.0, forcing_amplitude=0.0)
    solver = SolverSemiImplicit(model)
    state = model.state()
    e0 = state.energy

    energies = []
    for _ in range(int(round(10.0 / DT))):
        state = solver.step(state, DT)
        energies.append(state.energy)

    drift = np.max(np.abs(np.array(energies) - e0)) / e0
    assert drift < 0.05


def test_parameter_change_applies_next_step():
    model = SpringMassModel()
    solver = SolverSemiImplicit(model)
    state = model.state()

    before = solver.step(state, DT)
    model.set_parameter("mass", 2.0)
    after = solver.step(state, DT)

    assert not np.isclose(before.v, after.v)
    assert np.isclose(after.v, before.v / 2.0)


# ============================================================================
# DETERMINISM
# ============================================================================

def test_repeated_runs_are_bit_identical():
    for model, solver_cls in ((PendulumModel(initial_angle=1.2, damping=0.1), SolverExplicitEuler),
                              (SpringMassModel(forcing_amplitude=2.0, forcing_frequency=3.0), SolverSemiImplicit)):
        a = solver_cls(model).integrate(model.state(), DT, 500)
        b = solver_cls(model).integrate(model.state(), DT, 500)
        assert a == b

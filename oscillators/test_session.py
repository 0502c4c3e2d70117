"""
Tests for SimulationSession and FrameDriver.

Run with:
    pytest oscillators/test_session.py
"""

import numpy as np
import pytest

from oscillators import (
    FrameDriver,
    PendulumSession,
    RunState,
    SpringMassSession,
    create_session,
)
from oscillators.sim import InvalidParameterError, PendulumModel, SpringMassModel


# ============================================================================
# SESSION
# ============================================================================

def test_session_starts_idle_and_frozen():
    session = SpringMassSession()
    assert session.run_state is RunState.IDLE

    before = session.state
    snap = session.step()
    assert session.state == before
    assert snap.t == 0.0
    assert session.step_count == 0


def test_start_pause_toggle():
    session = PendulumSession()
    session.start()
    assert session.running
    session.step()
    t_paused = session.state.t
    session.pause()
    session.step()
    assert session.state.t == t_paused

    session.toggle()
    assert session.running
    session.toggle()
    assert not session.running


def test_reset_is_idempotent():
    session = SpringMassSession(model=SpringMassModel(initial_position=0.25))
    fresh = session.snapshot()

    session.start()
    for _ in range(50):
        session.step()
    session.reset()
    once = session.snapshot()
    session.reset()
    twice = session.snapshot()

    assert once == twice == fresh
    assert session.run_state is RunState.IDLE
    assert session.step_count == 0
    assert len(session.history) == 0
    # Energy after reset comes from the initial displacement
    assert np.isclose(once.energy, 0.5 * 10.0 * 0.25 ** 2)


def test_reset_picks_up_new_initial_conditions():
    session = PendulumSession()
    session.set_parameter("initial_angle", -0.8)
    assert session.state.theta == 0.3
    session.reset()
    assert session.state.theta == -0.8
    assert session.state.omega == 0.0


def test_set_parameter_does_not_reset_state():
    session = SpringMassSession()
    session.start()
    for _ in range(10):
        session.step()
    state = session.state

    session.set_parameter("spring_constant", 30.0)
    assert session.state == state
    assert session.running

    snap = session.snapshot()
    assert np.isclose(snap.natural_frequency, np.sqrt(30.0))


def test_invalid_parameter_keeps_session_usable():
    session = SpringMassSession()
    with pytest.raises(InvalidParameterError):
        session.set_parameter("mass", 0.0)
    with pytest.raises(KeyError):
        session.set_parameter("nonexistent", 1.0)

    session.start()
    snap = session.step()
    assert np.isfinite(snap.x)


def test_history_is_bounded_fifo():
    session = SpringMassSession()
    session.start()
    positions = []
    for _ in range(80):
        positions.append(session.step().x)

    snap = session.snapshot()
    assert len(snap.history) == 50
    assert list(snap.history) == positions[-50:]


def test_listener_notified_per_step_and_command():
    received = []
    session = SpringMassSession(listener=received.append)

    session.start()
    assert len(received) == 1
    assert received[0].running

    first = session.step()
    second = session.step()
    assert len(received) == 3
    assert received[1] == first
    assert received[2] == second

    session.set_parameter("damping", 0.0)
    session.pause()
    assert len(received) == 5

    # Idle steps integrate nothing and publish nothing
    session.step()
    assert len(received) == 5

    session.reset()
    assert len(received) == 6
    assert received[-1].t == 0.0


def test_spring_mass_scenario_through_session():
    session = create_session("spring_mass", mass=1.0, spring_constant=10.0, damping=0.5,
                             initial_position=0.1, forcing_amplitude=0.0)
    session.start()
    snap = session.step()

    assert np.isclose(snap.x, 0.099744)
    assert np.isclose(snap.v, -0.016)
    assert np.isclose(snap.t, 0.016)
    assert snap.behavior == "underdamped"
    assert snap.external_force == 0.0


def test_pendulum_scenario_through_session():
    session = create_session("pendulum", length=1.0, initial_angle=0.3, damping=0.0)
    snap = session.snapshot()
    assert np.isclose(snap.natural_frequency, 3.1321, atol=1e-4)

    session.start()
    s1 = session.step()
    s2 = session.step()
    assert s1.omega < 0.0
    assert s2.theta < 0.3


def test_create_session_errors():
    with pytest.raises(ValueError):
        create_session("double_pendulum")
    with pytest.raises(ValueError):
        SpringMassSession(dt=0.0)
    with pytest.raises(ValueError):
        PendulumSession(dt=-0.01)
    with pytest.raises(InvalidParameterError):
        create_session("pendulum", length=-1.0)


def test_sessions_are_deterministic():
    runs = []
    for _ in range(2):
        session = create_session("pendulum", initial_angle=1.4, damping=0.05)
        session.start()
        runs.append([session.step().theta for _ in range(300)])
    assert runs[0] == runs[1]


def test_snapshot_is_immutable():
    snap = SpringMassSession().snapshot()
    with pytest.raises(Exception):
        snap.x = 1.0


# ============================================================================
# FRAME DRIVER
# ============================================================================

def test_driver_steps_once_per_tick():
    frames = []
    session = PendulumSession(model=PendulumModel())
    driver = FrameDriver(session, on_frame=frames.append)

    token = driver.start()
    for _ in range(5):
        token = driver.tick(token)

    assert driver.frame_count == 5
    assert session.step_count == 5
    assert len(frames) == 5
    assert frames[-1] == session.snapshot()


def test_stale_token_after_pause_is_ignored():
    session = SpringMassSession()
    driver = FrameDriver(session)

    old = driver.start()
    driver.tick(old)
    driver.pause()
    assert driver.tick(old) is None

    new = driver.start()
    assert new != old
    t = session.state.t
    assert driver.tick(old) is None
    assert session.state.t == t

    assert driver.tick(new) == new
    assert session.state.t > t


def test_stale_token_after_reset_is_ignored():
    session = SpringMassSession()
    driver = FrameDriver(session)

    token = driver.start()
    for _ in range(3):
        token = driver.tick(token)
    driver.reset()

    assert driver.tick(token) is None
    assert session.state.t == 0.0
    assert driver.frame_count == 0
    assert driver.token is None


def test_on_frame_can_stop_the_loop():
    session = SpringMassSession()
    driver = FrameDriver(session)

    def stop_after_three(snapshot):
        if driver.frame_count >= 3:
            driver.pause()

    driver.on_frame = stop_after_three
    snap = driver.run(frames=100, fps=None)

    assert driver.frame_count == 3
    assert not session.running
    assert snap.t == session.state.t


def test_toggle_returns_token_or_none():
    driver = FrameDriver(PendulumSession())
    token = driver.toggle()
    assert token is not None
    assert driver.toggle() is None
    assert driver.tick(token) is None


def test_run_integrates_requested_frames():
    session = SpringMassSession()
    snap = FrameDriver(session).run(frames=40, fps=None)
    assert session.step_count == 40
    assert np.isclose(snap.t, 40 * 0.016)


def test_run_without_frame_limit_stops_on_pause():
    session = PendulumSession()
    driver = FrameDriver(session)

    def stop_at_one_second(snapshot):
        if snapshot.t >= 1.0:
            driver.pause()

    driver.on_frame = stop_at_one_second
    snap = driver.run(fps=None)

    assert not session.running
    assert driver.frame_count == 63
    assert snap.t >= 1.0


def test_run_is_paced_by_default():
    session = SpringMassSession()
    driver = FrameDriver(session)

    def stop_after_five(snapshot):
        if driver.frame_count >= 5:
            driver.reset()

    driver.on_frame = stop_after_five
    snap = driver.run()

    assert snap.t == 0.0
    assert driver.token is None
    assert not session.running

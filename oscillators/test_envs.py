"""
Tests for the Gymnasium adapter and the recording/plotting helpers.

Run with:
    pytest oscillators/test_envs.py
"""

import os

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")

import numpy as np  # noqa: E402
import pytest  # noqa: E402

from oscillators import create_session  # noqa: E402
from oscillators.analysis import energy_drift, plot_run, record  # noqa: E402
from oscillators.envs import OscillatorEnv  # noqa: E402


# ============================================================================
# RECORDING
# ============================================================================

def test_record_spring_mass():
    session = create_session("spring_mass", damping=0.0)
    run = record(session, duration=1.6)

    assert run["system"] == "spring-mass"
    assert len(run["t"]) == 101
    for name in ("x", "v", "energy", "external_force"):
        assert run[name].shape == run["t"].shape
    assert run["t"][0] == 0.0
    assert np.isclose(run["t"][-1], 1.6)
    assert not session.running


def test_record_pendulum_fields():
    run = record(create_session("pendulum"), duration=0.32)
    assert set(run) == {"t", "theta", "omega", "system"}
    assert run["theta"][0] == 0.3


def test_undamped_energy_drift_under_five_percent():
    session = create_session("spring_mass", mass=1.0, spring_constant=10.0,
                             damping=0.0, forcing_amplitude=0.0)
    run = record(session, duration=10.0)
    assert energy_drift(run) < 0.05


def test_energy_drift_is_relative():
    assert energy_drift({"energy": np.array([2.0, 2.1, 1.8])}) == pytest.approx(0.1)

    # Zero initial energy has no relative scale
    assert energy_drift({"energy": np.zeros(5)}) == 0.0
    driven = record(create_session("spring_mass", initial_position=0.0, forcing_amplitude=2.0), duration=0.5)
    assert driven["energy"][0] == 0.0
    assert energy_drift(driven) == float("inf")


def test_damping_removes_energy():
    run = record(create_session("spring_mass", damping=2.0), duration=5.0)
    assert run["energy"][-1] < 0.1 * run["energy"][0]


def test_plot_run_saves_figure(tmp_path):
    run = record(create_session("spring_mass", forcing_amplitude=1.0), duration=1.0)
    path = tmp_path / "spring_mass.png"

    fig = plot_run(run, path=str(path))

    assert path.exists()
    assert len(fig.axes) == 4


# ============================================================================
# GYMNASIUM ENVIRONMENT
# ============================================================================

def test_env_reset_and_step_shapes():
    env = OscillatorEnv("spring_mass")
    obs, info = env.reset(seed=0)

    assert obs.shape == (2,)
    assert obs.dtype == np.float64
    assert np.allclose(obs, [0.1, 0.0])
    assert info["t"] == 0.0

    obs, reward, terminated, truncated, info = env.step(np.zeros(1))
    assert env.observation_space.contains(obs)
    assert reward == 0.0
    assert not terminated
    assert not truncated
    assert np.isclose(info["x"], 0.099744)
    env.close()


def test_env_zero_action_matches_session():
    env = OscillatorEnv("pendulum", initial_angle=0.6, damping=0.1)
    env.reset()
    session = create_session("pendulum", initial_angle=0.6, damping=0.1)
    session.start()

    for _ in range(100):
        obs, *_ = env.step(np.zeros(1))
        snap = session.step()
        assert obs[0] == snap.theta
        assert obs[1] == snap.omega


def test_env_action_is_clipped():
    env = OscillatorEnv("spring_mass", max_action=1.0, initial_position=0.0)
    env.reset()
    obs, *_ = env.step(np.array([100.0]))
    assert np.isclose(obs[1], 1.0 * 0.016)


def test_env_truncates_at_max_time():
    env = OscillatorEnv("spring_mass", max_time=0.16)
    env.reset()
    truncated = False
    steps = 0
    while not truncated:
        _, _, _, truncated, _ = env.step(np.zeros(1))
        steps += 1
    assert steps == 10


def test_env_reset_options_override_then_restore():
    env = OscillatorEnv("spring_mass", mass=2.0)
    obs, info = env.reset(options={"initial_position": -0.2})
    assert np.allclose(obs, [-0.2, 0.0])
    assert env.session.model.mass == 2.0

    obs, _ = env.reset()
    assert np.allclose(obs, [0.1, 0.0])


def test_env_rejects_unknown_system():
    with pytest.raises(ValueError):
        OscillatorEnv("triple_pendulum")


@pytest.mark.parametrize("system", ["pendulum", "spring_mass"])
def test_env_rgb_array_render(system):
    env = OscillatorEnv(system, render_mode="rgb_array", window_width=320, window_height=240)
    env.reset()
    env.step(np.zeros(1))
    frame = env.render()

    assert frame.shape == (240, 320, 3)
    assert frame.dtype == np.uint8
    # Something besides the white background was drawn
    assert (frame != 255).any()
    env.close()

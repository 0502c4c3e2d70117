# SPDX-FileCopyrightText: Copyright (c) 2025 NBEL
# SPDX-License-Identifier: Apache-2.0
"""
Gymnasium environment around a simulation session.

The action is an extra load applied on top of the system's own dynamics:
an angular acceleration (rad/s^2) for the pendulum, a force (N) added to
the drive for the spring-mass. With a zero action the trajectory is the
same as the interactive demo's.

Usage:
    from oscillators.envs import OscillatorEnv

    env = OscillatorEnv("spring_mass", render_mode="rgb_array")
    obs, info = env.reset(seed=0, options={"damping": 0.0})
    obs, reward, terminated, truncated, info = env.step(np.zeros(1))
"""

from typing import Any, Dict, Optional

import numpy as np
import gymnasium as gym
from gymnasium import spaces
import pygame

from pygame_renderer import Renderer

from .session import DEFAULT_DT, SESSIONS


class OscillatorEnv(gym.Env):
    """
    Pendulum or spring-mass oscillator as a Gymnasium environment.

    Observation: [theta, omega] or [x, v] (float64)
    Action: Box(1) applied load, clipped to [-max_action, max_action]
    Reward: 0.0 (the environment only exposes the dynamics)
    Truncation: when simulated time reaches max_time
    Info: the session snapshot as a dict
    """

    metadata = {'render_modes': ['human', 'rgb_array'], 'render_fps': 60}

    # ========================================================================
    # INITIALIZATION
    # ========================================================================

    def __init__(
        self,
        system: str = "spring_mass",
        render_mode: Optional[str] = None,
        dt: float = DEFAULT_DT,
        max_time: float = 10.0,
        max_action: float = 10.0,
        window_width: int = 500,
        window_height: int = 300,
        **parameters,
    ):
        """
        Args:
            system: 'pendulum' or 'spring_mass'
            render_mode: 'human', 'rgb_array', or None
            dt: Physics timestep
            max_time: Episode length in simulated seconds
            max_action: Bound of the applied load
            window_width: Window width in pixels
            window_height: Window height in pixels
            **parameters: Model parameter overrides (e.g. mass=2.0)
        """
        super().__init__()

        if system not in SESSIONS:
            raise ValueError(f"Unknown system: {system} (expected one of {sorted(SESSIONS)})")
        assert render_mode is None or render_mode in self.metadata["render_modes"]

        self.system = system
        self.render_mode = render_mode
        self.max_time = max_time
        self.max_action = max_action

        session_cls = SESSIONS[system]
        self.session = session_cls(model=session_cls.MODEL_CLASS(**parameters), dt=dt)
        self._defaults = self.session.parameters()

        self.action_space = spaces.Box(low=-max_action, high=max_action, shape=(1,), dtype=np.float64)
        self.observation_space = spaces.Box(low=-np.inf, high=np.inf, shape=(2,), dtype=np.float64)

        # Pygame rendering setup
        self.window_width = window_width
        self.window_height = window_height
        self.window = None
        self.clock = None
        self.renderer = Renderer(window_width=window_width, window_height=window_height)

    # ========================================================================
    # ENVIRONMENT INTERFACE (Gymnasium API)
    # ========================================================================

    def reset(self, seed=None, options=None):
        """
        Reset to the initial conditions.

        options may hold parameter overrides; parameters not named are
        restored to the values the environment was built with.
        """
        super().reset(seed=seed)

        values = dict(self._defaults)
        if options:
            values.update(options)
        for name, value in values.items():
            self.session.set_parameter(name, value)

        self.session.reset()
        self.session.start()

        if self.render_mode == "human":
            self._render_frame()

        return self._get_obs(), self._get_info()

    def step(self, action):
        """Execute one time step of physics simulation"""
        load = float(np.clip(np.asarray(action, dtype=np.float64).reshape(-1)[0],
                             -self.max_action, self.max_action))

        self.session.step(load)

        truncated = self.session.state.t >= self.max_time - 1e-9
        obs = self._get_obs()

        if self.render_mode == "human":
            self._render_frame()

        return obs, 0.0, False, truncated, self._get_info()

    def _get_obs(self) -> np.ndarray:
        return self.session.state.as_array()

    def _get_info(self) -> Dict[str, Any]:
        return self.session.snapshot().as_dict()

    # ========================================================================
    # RENDERING
    # ========================================================================

    def render(self):
        """Public rendering interface"""
        if self.render_mode is None:
            return None
        return self._render_frame()

    def _render_frame(self):
        snapshot = self.session.snapshot()
        self._init_window()

        canvas = self.renderer.create_canvas()
        if self.system == "pendulum":
            self.renderer.draw_pendulum(canvas, snapshot)
            lines = self.renderer.pendulum_info_lines(snapshot)
        else:
            self.renderer.draw_spring_mass(canvas, snapshot)
            lines = self.renderer.spring_mass_info_lines(snapshot)
        self.renderer.draw_info_text(canvas, lines)

        if self.render_mode == "human":
            self.window.blit(canvas, canvas.get_rect())
            pygame.event.pump()
            pygame.display.flip()
            self.clock.tick(self.metadata["render_fps"])
            return None
        return self.renderer.to_rgb_array(canvas)

    def _init_window(self):
        """Initialize pygame window for human rendering mode"""
        if self.render_mode == "human" and self.window is None:
            pygame.init()
            pygame.display.init()
            self.window = pygame.display.set_mode((self.window_width, self.window_height))
            pygame.display.set_caption(f"Oscillator ({self.system})")
            self.clock = pygame.time.Clock()

    # ========================================================================
    # CLEANUP
    # ========================================================================

    def close(self):
        if self.window is not None:
            pygame.display.quit()
            pygame.quit()
            self.window = None

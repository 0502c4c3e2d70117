#!/usr/bin/env python3
"""
Base Class for Oscillator Demos

Provides the interactive loop shared by the pendulum and spring-mass demos.
Subclasses only need to build their session and draw their scene.

Uses:
- SimulationSession + FrameDriver from oscillators for physics and timing
- Renderer from pygame_renderer for drawing

Author: NBEL
License: Apache-2.0
"""

import argparse
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

import pygame

from pygame_renderer import Renderer

from ..analysis import plot_run, record
from ..driver import FrameDriver
from ..session import DEFAULT_DT, HISTORY_LENGTH


@dataclass
class DemoConfig:
    """Configuration for an oscillator demo."""
    # Physics
    dt: float = DEFAULT_DT

    # Display
    window_width: int = 500
    window_height: int = 300
    fps: int = 60
    render: bool = True

    # Simulation
    duration: float = 60.0
    autostart: bool = False
    trail_length: int = HISTORY_LENGTH

    # Output
    plot_path: Optional[str] = None
    verbose: bool = True


class DemoBase(ABC):
    """
    Abstract base class for oscillator demos.

    Subclasses must implement:
        - create_session(): Build the SimulationSession for this demo
        - get_demo_name(): Return the demo name for display
        - draw_scene(): Draw the system from a snapshot

    Optional overrides:
        - get_info_lines(): Custom info text for HUD

    Controls:
        SPACE start/pause, R reset, Q/ESC quit,
        UP/DOWN select parameter, LEFT/RIGHT adjust it
    """

    def __init__(self, config: Optional[DemoConfig] = None, parameters: Optional[Dict[str, float]] = None):
        """
        Initialize the demo base.

        Args:
            config: Demo configuration (uses defaults if None)
            parameters: Model parameter overrides
        """
        self.config = config or DemoConfig()
        self.parameters = parameters or {}

        # Will be initialized in setup()
        self.session = None
        self.driver: Optional[FrameDriver] = None
        self.renderer: Optional[Renderer] = None
        self.window: Optional[pygame.Surface] = None
        self.clock: Optional[pygame.time.Clock] = None

        # State tracking
        self.token: Optional[int] = None
        self.running: bool = True
        self.selected: int = 0

    @abstractmethod
    def create_session(self):
        """
        Create the simulation session for this demo.

        Returns:
            SimulationSession configured from self.parameters
        """
        pass

    @abstractmethod
    def get_demo_name(self) -> str:
        """
        Get the display name of this demo.

        Returns:
            String name for UI display
        """
        pass

    @abstractmethod
    def draw_scene(self, canvas: pygame.Surface, snapshot) -> None:
        """
        Draw the physical system.

        Args:
            canvas: Pygame surface to draw on
            snapshot: Current session snapshot
        """
        pass

    def get_info_lines(self, snapshot) -> List[Tuple[str, Tuple[int, int, int]]]:
        """
        Get info lines for HUD display.

        Returns:
            List of (text, color) tuples
        """
        return [(f"Time: {snapshot.t:.1f}s", (0, 0, 0))]

    # ------------------------------------------------------------------------
    # Parameter controls
    # ------------------------------------------------------------------------

    @property
    def parameter_names(self) -> List[str]:
        return list(self.session.model.PARAMETERS)

    def adjust_selected(self, direction: int) -> float:
        """Nudge the selected parameter by one step, clamped to its range."""
        name = self.parameter_names[self.selected]
        param_range = self.session.model.PARAMETERS[name]
        value = param_range.nudge(self.session.model.get_parameter(name), direction)
        return self.session.set_parameter(name, value)

    def select_parameter(self, direction: int) -> str:
        self.selected = (self.selected + direction) % len(self.parameter_names)
        return self.parameter_names[self.selected]

    def parameter_lines(self) -> List[Tuple[str, Tuple[int, int, int]]]:
        lines = []
        for i, name in enumerate(self.parameter_names):
            param_range = self.session.model.PARAMETERS[name]
            marker = ">" if i == self.selected else " "
            color = (29, 78, 216) if i == self.selected else (100, 100, 100)
            value = self.session.model.get_parameter(name)
            lines.append((f"{marker} {param_range.label}: {value:.2f} {param_range.unit}", color))
        return lines

    # ------------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------------

    def setup(self) -> None:
        """Initialize session, driver and renderer."""
        cfg = self.config

        if cfg.verbose:
            print("=" * 70)
            print(self.get_demo_name())
            print("=" * 70)

        self.session = self.create_session()
        self.driver = FrameDriver(self.session, verbose=cfg.verbose and not cfg.render)

        if cfg.verbose:
            for name, value in self.session.parameters().items():
                print(f"  {name}: {value}")
            print(f"  dt: {cfg.dt}s")
            print()

        if cfg.render:
            pygame.init()
            self.renderer = Renderer(window_width=cfg.window_width, window_height=cfg.window_height)
            self.window = pygame.display.set_mode((cfg.window_width, cfg.window_height))
            pygame.display.set_caption(self.get_demo_name())
            self.clock = pygame.time.Clock()

    def reset(self) -> None:
        """Reset simulation to initial state."""
        self.driver.reset()
        self.token = None
        if self.config.verbose:
            print("Reset!")

    def toggle(self) -> None:
        self.token = self.driver.toggle()
        if self.config.verbose:
            print("Running" if self.token is not None else "Paused")

    def render(self) -> None:
        """Render the current frame."""
        snapshot = self.session.snapshot()
        canvas = self.renderer.create_canvas()

        self.draw_scene(canvas, snapshot)
        self.renderer.draw_info_text(canvas, self.get_info_lines(snapshot), position=(10, 10))
        self.renderer.draw_info_text(canvas, self.parameter_lines(),
                                     position=(10, self.config.window_height - 17 * len(self.parameter_names) - 10))

        self.window.blit(canvas, canvas.get_rect())
        pygame.event.pump()
        pygame.display.flip()

    def handle_events(self) -> None:
        """Handle pygame events."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False
            elif event.type == pygame.KEYDOWN:
                if event.key in (pygame.K_q, pygame.K_ESCAPE):
                    self.running = False
                elif event.key == pygame.K_r:
                    self.reset()
                elif event.key == pygame.K_SPACE:
                    self.toggle()
                elif event.key == pygame.K_UP:
                    self.select_parameter(-1)
                elif event.key == pygame.K_DOWN:
                    self.select_parameter(1)
                elif event.key == pygame.K_LEFT:
                    self.adjust_selected(-1)
                elif event.key == pygame.K_RIGHT:
                    self.adjust_selected(1)

    def run(self) -> Dict[str, Any]:
        """
        Run the demo.

        Windowed: interactive loop until quit or duration elapses.
        Headless: steps for the configured duration, optionally plotting.

        Returns:
            Final snapshot as a dictionary
        """
        self.setup()
        cfg = self.config

        if not cfg.render:
            return self._run_headless()

        if cfg.verbose:
            print("Press SPACE to start/pause, R to reset, Q/ESC to quit")
            print("UP/DOWN select a parameter, LEFT/RIGHT change it")
            print()

        if cfg.autostart:
            self.token = self.driver.start()

        start_time = time.time()
        while self.running and self.session.state.t < cfg.duration:
            self.handle_events()

            # One physics step per displayed frame
            self.token = self.driver.tick(self.token)
            self.render()
            self.clock.tick(cfg.fps)

            if cfg.verbose and self.token is not None and self.driver.frame_count % 100 == 0:
                fps = self.driver.frame_count / max(time.time() - start_time, 0.01)
                print(f"t={self.session.state.t:.2f}s | fps={fps:.1f}")

        pygame.quit()
        return self.session.snapshot().as_dict()

    def _run_headless(self) -> Dict[str, Any]:
        cfg = self.config
        run = record(self.session, cfg.duration)

        if cfg.plot_path:
            plot_run(run, path=cfg.plot_path, title=self.get_demo_name())

        summary = self.session.snapshot().as_dict()
        if cfg.verbose:
            print()
            print("=" * 70)
            print("SIMULATION COMPLETE")
            print("=" * 70)
            print(f"  Duration: {summary['t']:.2f}s ({len(run['t']) - 1} steps)")
        return summary

    # ------------------------------------------------------------------------
    # Command line
    # ------------------------------------------------------------------------

    @classmethod
    def add_common_args(cls, parser: argparse.ArgumentParser) -> None:
        """Add common command-line arguments to parser."""
        parser.add_argument('--dt', type=float, default=DEFAULT_DT,
                            help=f'Time step (default: {DEFAULT_DT})')
        parser.add_argument('--fps', type=int, default=60,
                            help='Frame rate of the window (default: 60)')
        parser.add_argument('--duration', '-t', type=float, default=60.0,
                            help='Simulation duration in seconds (default: 60)')
        parser.add_argument('--window-width', type=int, default=500,
                            help='Window width (default: 500)')
        parser.add_argument('--window-height', type=int, default=300,
                            help='Window height (default: 300)')
        parser.add_argument('--no-render', action='store_true',
                            help='Run without visualization')
        parser.add_argument('--autostart', action='store_true',
                            help='Start running immediately')
        parser.add_argument('--trail-length', type=int, default=HISTORY_LENGTH,
                            help=f'Positions kept for the spring-mass trail (default: {HISTORY_LENGTH})')
        parser.add_argument('--plot', type=str, default=None,
                            help='Save a time-series plot here (headless mode)')
        parser.add_argument('--quiet', action='store_true',
                            help='Suppress progress output')

    @classmethod
    def add_parameter_args(cls, parser: argparse.ArgumentParser, ranges) -> None:
        """One --flag per tunable model parameter."""
        for name, param_range in ranges.items():
            parser.add_argument(f"--{name.replace('_', '-')}", dest=name, type=float, default=None,
                                help=f'{param_range.label} in {param_range.unit} [{param_range.minimum}, {param_range.maximum}]')

    @classmethod
    def config_from_args(cls, args) -> DemoConfig:
        """Create DemoConfig from parsed arguments."""
        return DemoConfig(
            dt=args.dt,
            window_width=args.window_width,
            window_height=args.window_height,
            fps=args.fps,
            render=not args.no_render,
            duration=args.duration,
            autostart=args.autostart,
            trail_length=args.trail_length,
            plot_path=args.plot,
            verbose=not args.quiet,
        )

    @classmethod
    def parameters_from_args(cls, args, ranges) -> Dict[str, float]:
        return {name: getattr(args, name) for name in ranges if getattr(args, name) is not None}

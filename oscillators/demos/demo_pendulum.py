#!/usr/bin/env python3
"""
Interactive Pendulum Demo

Damped nonlinear pendulum integrated with explicit Euler. Try different
lengths to see how the period changes, add damping to watch the swing
decay, and use large angles to see nonlinear behavior.

Usage:
    python -m oscillators.demos.demo_pendulum
    python -m oscillators.demos.demo_pendulum --length 2.0 --initial-angle 1.2
    python -m oscillators.demos.demo_pendulum --no-render -t 10 --plot pendulum.png
"""

import argparse

from ..session import PendulumSession
from ..sim.model import PENDULUM_PARAMETERS, PendulumModel
from .demo_base import DemoBase


class PendulumDemo(DemoBase):
    """Pendulum swinging from a ceiling pivot."""

    def create_session(self) -> PendulumSession:
        return PendulumSession(model=PendulumModel(**self.parameters), dt=self.config.dt)

    def get_demo_name(self) -> str:
        return "Interactive Pendulum Simulation"

    def draw_scene(self, canvas, snapshot) -> None:
        self.renderer.draw_pendulum(canvas, snapshot)

    def get_info_lines(self, snapshot):
        return self.renderer.pendulum_info_lines(snapshot)


def main():
    parser = argparse.ArgumentParser(description="Pendulum Demo")
    DemoBase.add_common_args(parser)
    DemoBase.add_parameter_args(parser, PENDULUM_PARAMETERS)
    args = parser.parse_args()

    demo = PendulumDemo(
        config=DemoBase.config_from_args(args),
        parameters=DemoBase.parameters_from_args(args, PENDULUM_PARAMETERS),
    )
    demo.run()


if __name__ == "__main__":
    main()

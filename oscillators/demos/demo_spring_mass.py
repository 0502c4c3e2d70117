#!/usr/bin/env python3
"""
Interactive Spring-Mass Demo

Damped spring-mass oscillator driven by F(t) = A cos(omega_f t), integrated
with semi-implicit Euler. Set damping to 0 for pure oscillation, or match
the forcing frequency to the natural frequency for resonance.

Usage:
    python -m oscillators.demos.demo_spring_mass
    python -m oscillators.demos.demo_spring_mass --forcing-amplitude 2 --forcing-frequency 3.1
    python -m oscillators.demos.demo_spring_mass --no-render -t 20 --plot spring.png
"""

import argparse

from ..session import SpringMassSession
from ..sim.model import SPRING_MASS_PARAMETERS, SpringMassModel
from .demo_base import DemoBase


class SpringMassDemo(DemoBase):
    """Mass on a spring attached to a wall, with optional drive."""

    def create_session(self) -> SpringMassSession:
        return SpringMassSession(model=SpringMassModel(**self.parameters), dt=self.config.dt,
                                 history_length=self.config.trail_length)

    def get_demo_name(self) -> str:
        return "Interactive Spring-Mass System"

    def draw_scene(self, canvas, snapshot) -> None:
        self.renderer.draw_spring_mass(canvas, snapshot)

    def get_info_lines(self, snapshot):
        return self.renderer.spring_mass_info_lines(snapshot)


def main():
    parser = argparse.ArgumentParser(description="Spring-Mass Demo")
    DemoBase.add_common_args(parser)
    DemoBase.add_parameter_args(parser, SPRING_MASS_PARAMETERS)
    args = parser.parse_args()

    demo = SpringMassDemo(
        config=DemoBase.config_from_args(args),
        parameters=DemoBase.parameters_from_args(args, SPRING_MASS_PARAMETERS),
    )
    demo.run()


if __name__ == "__main__":
    main()

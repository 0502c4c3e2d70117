from .demo_base import DemoBase, DemoConfig
from .demo_pendulum import PendulumDemo
from .demo_spring_mass import SpringMassDemo

__all__ = [
    "DemoBase",
    "DemoConfig",
    "PendulumDemo",
    "SpringMassDemo",
]

from .solver_explicit_euler import SolverExplicitEuler
from .kernels_pendulum import eval_pendulum_acceleration, integrate_pendulum

__all__ = [
    "SolverExplicitEuler",
    "eval_pendulum_acceleration",
    "integrate_pendulum",
]

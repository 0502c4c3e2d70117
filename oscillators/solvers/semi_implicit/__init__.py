from .solver_semi_implicit import SolverSemiImplicit
from .kernels_spring import eval_spring_mass_acceleration, integrate_spring_mass

__all__ = [
    "SolverSemiImplicit",
    "eval_spring_mass_acceleration",
    "integrate_spring_mass",
]

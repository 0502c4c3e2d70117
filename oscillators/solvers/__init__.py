# SPDX-FileCopyrightText: Copyright (c) 2025 NBEL
# SPDX-License-Identifier: Apache-2.0
#
# Solvers module for the oscillator simulations

from .solver import SolverBase
from .explicit_euler import SolverExplicitEuler
from .semi_implicit import SolverSemiImplicit

__all__ = [
    "SolverBase",
    "SolverExplicitEuler",
    "SolverSemiImplicit",
]

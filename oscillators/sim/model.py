# SPDX-FileCopyrightText: Copyright (c) 2025 NBEL
# SPDX-License-Identifier: Apache-2.0
#
# Parameter stores for the pendulum and spring-mass systems

import math
from dataclasses import dataclass
from typing import ClassVar, Dict, Tuple

from .derived import total_energy
from .state import PendulumState, SpringMassState

GRAVITY = 9.81


class InvalidParameterError(ValueError):
    """A parameter value would make the equations of motion undefined."""


@dataclass(frozen=True)
class ParameterRange:
    """
    Valid range and display metadata of one tunable parameter.

    Ranges are advisory. Models accept any finite value (apart from the
    denominator checks); UI controls clamp before writing.
    """

    label: str
    unit: str
    minimum: float
    maximum: float
    step: float

    def clamp(self, value: float) -> float:
        return min(max(value, self.minimum), self.maximum)

    def nudge(self, value: float, direction: int) -> float:
        """Move value one UI step up (direction > 0) or down, clamped to the range."""
        sign = 1.0 if direction > 0 else -1.0
        return self.clamp(value + sign * self.step)

    def contains(self, value: float) -> bool:
        return self.minimum <= value <= self.maximum


PENDULUM_PARAMETERS: Dict[str, ParameterRange] = {
    "length": ParameterRange("Length", "m", 0.5, 2.0, 0.1),
    "initial_angle": ParameterRange("Initial Angle", "rad", -1.5, 1.5, 0.1),
    "damping": ParameterRange("Damping", "1/s", 0.0, 1.0, 0.05),
}

SPRING_MASS_PARAMETERS: Dict[str, ParameterRange] = {
    "mass": ParameterRange("Mass", "kg", 0.5, 3.0, 0.1),
    "spring_constant": ParameterRange("Spring Constant", "N/m", 1.0, 50.0, 1.0),
    "damping": ParameterRange("Damping", "N*s/m", 0.0, 5.0, 0.1),
    "initial_position": ParameterRange("Initial Position", "m", -0.3, 0.3, 0.01),
    "forcing_amplitude": ParameterRange("Force Amplitude", "N", 0.0, 10.0, 0.5),
    "forcing_frequency": ParameterRange("Force Frequency", "rad/s", 0.1, 10.0, 0.1),
}


class ModelBase:
    """
    Shared behaviour of the parameter stores.

    Subclasses declare PARAMETERS (tunable names -> ranges) and POSITIVE
    (parameters that appear in a denominator and must stay > 0).
    Solvers read the attributes; only set_parameter writes them.
    """

    PARAMETERS: ClassVar[Dict[str, ParameterRange]] = {}
    POSITIVE: ClassVar[Tuple[str, ...]] = ()

    def set_parameter(self, name: str, value: float) -> float:
        """
        Write one tunable parameter.

        Raises:
            KeyError: name is not a tunable parameter of this model
            InvalidParameterError: value is non-finite, or <= 0 for a
                denominator parameter
        """
        if name not in self.PARAMETERS:
            raise KeyError(f"Unknown parameter '{name}' for {type(self).__name__}")
        value = float(value)
        self._check(name, value)
        setattr(self, name, value)
        return value

    def get_parameter(self, name: str) -> float:
        if name not in self.PARAMETERS:
            raise KeyError(f"Unknown parameter '{name}' for {type(self).__name__}")
        return getattr(self, name)

    def parameters(self) -> Dict[str, float]:
        return {name: getattr(self, name) for name in self.PARAMETERS}

    def validate(self):
        for name in self.PARAMETERS:
            self._check(name, getattr(self, name))

    def _check(self, name: str, value: float):
        if not math.isfinite(value):
            raise InvalidParameterError(f"{name} must be finite (got {value})")
        if name in self.POSITIVE and value <= 0.0:
            raise InvalidParameterError(f"{name} must be > 0 (got {value})")


@dataclass
class PendulumModel(ModelBase):
    """
    Parameters of a linearly damped, undriven simple pendulum.

    Attributes:
        length: Rod length L (m)
        initial_angle: Angle the pendulum is released from on reset (rad)
        damping: Linear damping coefficient c (1/s)
        gravity: Gravitational acceleration g, fixed (m/s^2)
    """

    length: float = 1.0
    initial_angle: float = 0.3
    damping: float = 0.0
    gravity: float = GRAVITY

    PARAMETERS: ClassVar[Dict[str, ParameterRange]] = PENDULUM_PARAMETERS
    POSITIVE: ClassVar[Tuple[str, ...]] = ("length",)

    def __post_init__(self):
        self.validate()
        if not math.isfinite(self.gravity):
            raise InvalidParameterError(f"gravity must be finite (got {self.gravity})")

    def state(self) -> PendulumState:
        """Fresh state released from rest at the initial angle."""
        return PendulumState(theta=self.initial_angle, omega=0.0, t=0.0)


@dataclass
class SpringMassModel(ModelBase):
    """
    Parameters of a damped spring-mass oscillator driven by A cos(omega_f t).

    Attributes:
        mass: Mass m (kg)
        spring_constant: Stiffness k (N/m)
        damping: Viscous damping c (N*s/m)
        initial_position: Displacement the mass starts from on reset (m)
        forcing_amplitude: Drive amplitude A (N)
        forcing_frequency: Drive angular frequency omega_f (rad/s)
    """

    mass: float = 1.0
    spring_constant: float = 10.0
    damping: float = 0.5
    initial_position: float = 0.1
    forcing_amplitude: float = 0.0
    forcing_frequency: float = 1.0

    PARAMETERS: ClassVar[Dict[str, ParameterRange]] = SPRING_MASS_PARAMETERS
    POSITIVE: ClassVar[Tuple[str, ...]] = ("mass", "spring_constant")

    def __post_init__(self):
        self.validate()

    def state(self) -> SpringMassState:
        """Fresh state at rest at the initial position."""
        x0 = self.initial_position
        return SpringMassState(
            x=x0,
            v=0.0,
            t=0.0,
            energy=total_energy(self.mass, self.spring_constant, x0, 0.0),
        )

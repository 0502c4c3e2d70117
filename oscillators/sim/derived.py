# SPDX-FileCopyrightText: Copyright (c) 2025 NBEL
# SPDX-License-Identifier: Apache-2.0
#
# Derived quantities (frequencies, damping ratio, energy) for both systems

import math
from typing import Any, Dict

UNDERDAMPED = "underdamped"
CRITICALLY_DAMPED = "critically damped"
OVERDAMPED = "overdamped"

RESONANCE_BAND = 0.1
CRITICAL_TOLERANCE = 1e-9


def natural_frequency(stiffness: float, inertia: float) -> float:
    """
    Undamped natural angular frequency sqrt(stiffness / inertia).

    Spring-mass: natural_frequency(k, m). Pendulum: natural_frequency(g, L).
    """
    return math.sqrt(stiffness / inertia)


def damping_ratio(damping: float, stiffness: float, mass: float) -> float:
    """zeta = c / (2 sqrt(k m))"""
    return damping / (2.0 * math.sqrt(stiffness * mass))


def damped_frequency(omega_n: float, zeta: float) -> float:
    """
    Damped angular frequency omega_n * sqrt(1 - zeta^2).

    Clamped to 0 for zeta >= 1 instead of returning NaN.
    """
    return omega_n * math.sqrt(max(0.0, 1.0 - zeta * zeta))


def classify_damping(zeta: float, tol: float = CRITICAL_TOLERANCE) -> str:
    """
    Classify the free response from the damping ratio.

    Args:
        zeta: Damping ratio
        tol: Half-width of the band around 1.0 reported as critically
            damped. tol=0.0 gives exact floating-point equality.
    """
    if abs(zeta - 1.0) <= tol:
        return CRITICALLY_DAMPED
    if zeta < 1.0:
        return UNDERDAMPED
    return OVERDAMPED


def period(omega_n: float) -> float:
    """Small-oscillation period 2 pi / omega_n."""
    return 2.0 * math.pi / omega_n


def frequency_ratio(forcing_frequency: float, omega_n: float) -> float:
    return forcing_frequency / omega_n


def is_near_resonance(ratio: float, band: float = RESONANCE_BAND) -> bool:
    return abs(ratio - 1.0) < band


def forcing_force(amplitude: float, forcing_frequency: float, t: float) -> float:
    """External drive F(t) = A cos(omega_f t)."""
    return amplitude * math.cos(forcing_frequency * t)


def kinetic_energy(mass: float, v: float) -> float:
    return 0.5 * mass * v * v


def potential_energy(stiffness: float, x: float) -> float:
    return 0.5 * stiffness * x * x


def total_energy(mass: float, stiffness: float, x: float, v: float) -> float:
    return kinetic_energy(mass, v) + potential_energy(stiffness, x)


# ============================================================================
# PER-SYSTEM BUNDLES
# ============================================================================

def pendulum_quantities(model) -> Dict[str, float]:
    """Natural frequency and period of a PendulumModel."""
    omega_n = natural_frequency(model.gravity, model.length)
    return {
        "natural_frequency": omega_n,
        "period": period(omega_n),
    }


def spring_mass_quantities(model, tol: float = CRITICAL_TOLERANCE) -> Dict[str, Any]:
    """All parameter-derived descriptors of a SpringMassModel."""
    omega_n = natural_frequency(model.spring_constant, model.mass)
    zeta = damping_ratio(model.damping, model.spring_constant, model.mass)
    ratio = frequency_ratio(model.forcing_frequency, omega_n)
    return {
        "natural_frequency": omega_n,
        "damping_ratio": zeta,
        "damped_frequency": damped_frequency(omega_n, zeta),
        "behavior": classify_damping(zeta, tol),
        "frequency_ratio": ratio,
        "near_resonance": is_near_resonance(ratio),
    }

"""
Pygame Renderer for the Oscillator Demos.

This module provides shared rendering functionality used across:
- oscillators/demos (interactive pendulum and spring-mass windows)
- oscillators/envs.py (Gymnasium render modes)

Main classes:
- Renderer: Common pygame-based rendering class for both scenes
"""

from .renderer import Renderer

__all__ = ['Renderer']

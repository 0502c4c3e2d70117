"""
Pygame Renderer for the Oscillator Demos

Draws the two instructional scenes from session snapshots:
1. Pendulum: ceiling, pivot, rod, bob, vertical reference and angle arc
2. Spring-mass: hatched wall, zig-zag spring colored by stretch, mass block,
   equilibrium line, displacement arrow, drive force arrow and position trail
3. HUD text lines

Usage:
    from pygame_renderer import Renderer

    renderer = Renderer(window_width=500, window_height=300)

    # In render loop:
    canvas = renderer.create_canvas()
    renderer.draw_spring_mass(canvas, snapshot)
    renderer.draw_info_text(canvas, renderer.spring_mass_info_lines(snapshot))
"""

import math

import numpy as np
import pygame
from typing import List, Optional, Sequence, Tuple


Color = Tuple[int, int, int]


class Renderer:
    """
    Pygame renderer for pendulum and spring-mass visualization.

    All methods draw onto a pygame Surface; no window is required.
    """

    # ========================================================================
    # COLOR CONSTANTS
    # ========================================================================

    WHITE = (255, 255, 255)
    BLACK = (0, 0, 0)
    GREY = (100, 100, 100)
    LIGHT_GREY = (156, 163, 175)
    WALL = (107, 114, 128)
    WALL_HATCH = (75, 85, 99)
    DARK = (55, 65, 81)

    BOB_FILL = (239, 68, 68)
    BOB_OUTLINE = (220, 38, 38)
    MASS_FILL = (59, 130, 246)
    MASS_OUTLINE = (29, 78, 216)
    ARC_COLOR = (16, 185, 129)
    DISPLACEMENT = (239, 68, 68)
    FORCE = (245, 158, 11)
    TRAIL = (239, 68, 68, 77)  # ~0.3 alpha

    # Spring: Orange (compressed) -> Green (rest) -> Red (stretched)
    SPRING_COLORS = [(255, 165, 0), (16, 185, 129), (255, 0, 0)]

    # ========================================================================
    # INITIALIZATION
    # ========================================================================

    def __init__(
        self,
        window_width: int = 500,
        window_height: int = 300,
        pendulum_scale: float = 150.0,
        spring_scale: float = 200.0,
        pivot: Tuple[int, int] = (200, 50),
        equilibrium_x: int = 300,
        spring_coils: int = 8,
        max_stretch: float = 0.3,
        arrow_head_size: int = 8,
        font_size: int = 24,
        font_size_small: int = 18,
    ):
        """
        Initialize the renderer.

        Args:
            window_width: Window width in pixels
            window_height: Window height in pixels
            pendulum_scale: Pixels per meter of pendulum length
            spring_scale: Pixels per meter of spring-mass displacement
            pivot: Screen position of the pendulum pivot
            equilibrium_x: Screen x of the mass at x = 0
            spring_coils: Number of zig-zag coils drawn for the spring
            max_stretch: Displacement (m) mapped to the extreme spring colors
            arrow_head_size: Arrow head size
            font_size: Main font size
            font_size_small: Small font size for labels
        """
        self.window_width = window_width
        self.window_height = window_height
        self.pendulum_scale = pendulum_scale
        self.spring_scale = spring_scale
        self.pivot = pivot
        self.equilibrium_x = equilibrium_x
        self.center_y = window_height // 2
        self.spring_coils = spring_coils
        self.max_stretch = max_stretch
        self.arrow_head_size = arrow_head_size

        # Fonts (initialized lazily)
        self._font = None
        self._font_small = None
        self._font_size = font_size
        self._font_size_small = font_size_small

    @property
    def font(self):
        """Lazy font initialization."""
        if self._font is None:
            if not pygame.font.get_init():
                pygame.font.init()
            self._font = pygame.font.Font(None, self._font_size)
        return self._font

    @property
    def font_small(self):
        """Lazy small font initialization."""
        if self._font_small is None:
            if not pygame.font.get_init():
                pygame.font.init()
            self._font_small = pygame.font.Font(None, self._font_size_small)
        return self._font_small

    # ========================================================================
    # CANVAS CREATION
    # ========================================================================

    def create_canvas(self, background_color=None) -> pygame.Surface:
        """
        Create a new canvas (pygame Surface) with background color.

        Args:
            background_color: RGB tuple or None for white

        Returns:
            pygame.Surface
        """
        canvas = pygame.Surface((self.window_width, self.window_height))
        canvas.fill(background_color or self.WHITE)
        return canvas

    # ========================================================================
    # COORDINATE CONVERSION
    # ========================================================================

    def bob_position(self, theta: float, length: float) -> Tuple[int, int]:
        """Screen position of the pendulum bob (theta measured from straight down)."""
        px, py = self.pivot
        return (int(px + length * self.pendulum_scale * math.sin(theta)),
                int(py + length * self.pendulum_scale * math.cos(theta)))

    def mass_screen_x(self, x: float) -> int:
        return int(self.equilibrium_x + x * self.spring_scale)

    # ========================================================================
    # PENDULUM
    # ========================================================================

    def draw_pendulum(self, canvas: pygame.Surface, snapshot):
        """
        Draw the pendulum scene.

        Args:
            canvas: pygame Surface to draw on
            snapshot: PendulumSnapshot (theta, length)
        """
        theta = snapshot.theta
        length = snapshot.length
        px, py = self.pivot
        bob = self.bob_position(theta, length)

        # Ceiling
        pygame.draw.rect(canvas, self.WALL, pygame.Rect(0, py - 10, self.window_width, 10))

        # Vertical reference line
        self._draw_dashed_line(canvas, self.LIGHT_GREY, (px, py),
                               (px, int(py + length * self.pendulum_scale + 20)), dash=3)

        # Angle arc
        if abs(theta) > 0.05:
            self._draw_angle_arc(canvas, theta, radius=40)

        # Rod, pivot and bob
        pygame.draw.line(canvas, self.DARK, (px, py), bob, 2)
        pygame.draw.circle(canvas, self.DARK, (px, py), 5)
        pygame.draw.circle(canvas, self.BOB_FILL, bob, 15)
        pygame.draw.circle(canvas, self.BOB_OUTLINE, bob, 15, 2)

    def _draw_angle_arc(self, canvas: pygame.Surface, theta: float, radius: int, segments: int = 24):
        px, py = self.pivot
        points = []
        for i in range(segments + 1):
            a = theta * i / segments
            points.append((int(px + radius * math.sin(a)), int(py + radius * math.cos(a))))
        # Every other segment for a dashed look
        for i in range(0, segments, 2):
            pygame.draw.line(canvas, self.ARC_COLOR, points[i], points[i + 1], 2)

    def pendulum_info_lines(self, snapshot) -> List[Tuple[str, Color]]:
        return [
            (f"Natural Frequency: {snapshot.natural_frequency:.2f} rad/s", self.BLACK),
            (f"Period: {snapshot.period:.2f} s", self.BLACK),
            (f"Current Angle: {math.degrees(snapshot.theta):.1f} deg", self.BLACK),
            (f"Angular Velocity: {snapshot.omega:.2f} rad/s", self.BLACK),
            (f"Time: {snapshot.t:.1f} s", self.GREY),
        ]

    # ========================================================================
    # SPRING-MASS
    # ========================================================================

    def draw_spring_mass(self, canvas: pygame.Surface, snapshot):
        """
        Draw the spring-mass scene.

        Args:
            canvas: pygame Surface to draw on
            snapshot: SpringMassSnapshot (x, history, external_force, forcing_amplitude)
        """
        cy = self.center_y
        mass_x = self.mass_screen_x(snapshot.x)

        self._draw_wall(canvas)
        self._draw_spring(canvas, 70, mass_x - 30, cy, snapshot.x)

        # Mass block
        block = pygame.Rect(mass_x - 30, cy - 25, 60, 50)
        pygame.draw.rect(canvas, self.MASS_FILL, block)
        pygame.draw.rect(canvas, self.MASS_OUTLINE, block, 2)
        label = self.font.render("m", True, self.WHITE)
        canvas.blit(label, label.get_rect(center=(mass_x, cy)))

        self.draw_trail(canvas, snapshot.history)

        # Equilibrium line
        self._draw_dashed_line(canvas, self.LIGHT_GREY, (self.equilibrium_x, cy - 100),
                               (self.equilibrium_x, cy + 100), dash=3)
        text = self.font_small.render("Equilibrium", True, self.WALL)
        canvas.blit(text, text.get_rect(center=(self.equilibrium_x, cy - 110)))

        # Displacement arrow
        if abs(snapshot.x) > 0.01:
            y = cy + 60
            pygame.draw.line(canvas, self.DISPLACEMENT, (self.equilibrium_x, y), (mass_x, y), 3)
            self._draw_arrowhead(canvas, (self.equilibrium_x, y), (mass_x, y), self.DISPLACEMENT)
            text = self.font_small.render("x", True, self.DISPLACEMENT)
            canvas.blit(text, text.get_rect(center=((self.equilibrium_x + mass_x) // 2, cy + 80)))

        # External force arrow
        if abs(snapshot.forcing_amplitude) > 0.01:
            self.draw_force_arrow(canvas, mass_x + 40, cy, snapshot.external_force)

    def _draw_wall(self, canvas: pygame.Surface):
        cy = self.center_y
        pygame.draw.rect(canvas, self.WALL, pygame.Rect(50, cy - 50, 20, 100))
        for i in range(8):
            y = cy - 40 + i * 10
            pygame.draw.line(canvas, self.WALL_HATCH, (40, y), (50, y + 10), 1)

    def _draw_spring(self, canvas: pygame.Surface, start_x: int, end_x: int, y: int, stretch: float):
        """Zig-zag spring between start_x and end_x, colored by stretch."""
        coil_width = (end_x - start_x) / self.spring_coils
        points = [(start_x, y)]
        for i in range(self.spring_coils):
            y1 = y - 15 if i % 2 == 0 else y + 15
            y2 = y + 15 if i % 2 == 0 else y - 15
            points.append((int(start_x + i * coil_width + coil_width / 4), y1))
            points.append((int(start_x + i * coil_width + 3 * coil_width / 4), y2))
        points.append((end_x, y))

        t = float(np.clip(stretch / self.max_stretch, -1.0, 1.0))
        color = self._get_diverging_color((t + 1.0) / 2.0)
        pygame.draw.lines(canvas, color, False, points, 3)

    def draw_trail(self, canvas: pygame.Surface, history: Sequence[float]):
        """Faded polyline of recent positions below the mass."""
        if len(history) < 2:
            return
        y = self.center_y + 80
        points = [(self.mass_screen_x(x), y) for x in history]
        overlay = pygame.Surface((self.window_width, self.window_height), pygame.SRCALPHA)
        pygame.draw.lines(overlay, self.TRAIL, False, points, 1)
        canvas.blit(overlay, (0, 0))

    def draw_force_arrow(self, canvas: pygame.Surface, x: int, y: int, force: float, pixels_per_newton: float = 30.0):
        """Horizontal arrow of length proportional to the signed force."""
        direction = 1 if force > 0 else -1
        length = abs(force) * pixels_per_newton
        end = (int(x + direction * length), y)
        pygame.draw.line(canvas, self.FORCE, (x, y), end, 4)
        self._draw_arrowhead(canvas, (x, y), end, self.FORCE, size=10)
        text = self.font_small.render("F(t)", True, self.FORCE)
        canvas.blit(text, text.get_rect(center=(int(x + direction * length / 2), y - 15)))

    def spring_mass_info_lines(self, snapshot) -> List[Tuple[str, Color]]:
        lines = [
            (f"Natural Frequency: {snapshot.natural_frequency:.2f} rad/s", self.BLACK),
            (f"Damping Ratio: {snapshot.damping_ratio:.3f}", self.BLACK),
            (f"Behavior: {snapshot.behavior}", self.BLACK),
        ]
        if snapshot.damping_ratio < 1.0:
            lines.append((f"Damped Frequency: {snapshot.damped_frequency:.2f} rad/s", self.BLACK))
        if snapshot.forcing_amplitude > 0.0:
            ratio = f"Frequency Ratio: {snapshot.frequency_ratio:.2f}"
            if snapshot.near_resonance:
                lines.append((ratio + " (Near Resonance!)", self.BOB_OUTLINE))
            else:
                lines.append((ratio, self.BLACK))
        lines += [
            (f"Position: {snapshot.x:.3f} m", self.GREY),
            (f"Velocity: {snapshot.v:.3f} m/s", self.GREY),
            (f"Energy: {snapshot.energy:.3f} J", self.GREY),
            (f"Time: {snapshot.t:.1f} s", self.GREY),
        ]
        return lines

    # ========================================================================
    # SHARED DRAWING UTILITIES
    # ========================================================================

    def _draw_arrowhead(
        self,
        canvas: pygame.Surface,
        start: Tuple[int, int],
        end: Tuple[int, int],
        color: Color,
        size: Optional[int] = None,
    ):
        """
        Draw arrow head at end position.

        Args:
            canvas: pygame Surface to draw on
            start: Arrow start position (screen coords)
            end: Arrow end position (screen coords)
            color: Arrow color
            size: Head size (default: self.arrow_head_size)
        """
        dx = end[0] - start[0]
        dy = end[1] - start[1]
        length = math.hypot(dx, dy)

        if length < 1:
            return

        dx, dy = dx / length, dy / length
        px, py = -dy, dx

        head_size = size if size else self.arrow_head_size
        p1 = (int(end[0] - dx * head_size + px * head_size * 0.5),
              int(end[1] - dy * head_size + py * head_size * 0.5))
        p2 = (int(end[0] - dx * head_size - px * head_size * 0.5),
              int(end[1] - dy * head_size - py * head_size * 0.5))

        pygame.draw.polygon(canvas, color, [end, p1, p2])

    def _draw_dashed_line(self, canvas: pygame.Surface, color: Color, start: Tuple[int, int],
                          end: Tuple[int, int], dash: int = 5, width: int = 1):
        dx = end[0] - start[0]
        dy = end[1] - start[1]
        length = math.hypot(dx, dy)
        if length < 1:
            return
        n = int(length // dash)
        for i in range(0, n, 2):
            a = i / n
            b = min((i + 1) / n, 1.0)
            pygame.draw.line(canvas, color,
                             (int(start[0] + dx * a), int(start[1] + dy * a)),
                             (int(start[0] + dx * b), int(start[1] + dy * b)), width)

    def _get_diverging_color(self, t: float) -> Color:
        """
        Get spring color for normalized position t in [0, 1].

        Three-point gradient:
            t=0.0 → Compressed color
            t=0.5 → Rest color
            t=1.0 → Stretched color
        """
        c0, c1, c2 = self.SPRING_COLORS

        if t < 0.5:
            t2 = t * 2
            r = int(c0[0] + (c1[0] - c0[0]) * t2)
            g = int(c0[1] + (c1[1] - c0[1]) * t2)
            b = int(c0[2] + (c1[2] - c0[2]) * t2)
        else:
            t2 = (t - 0.5) * 2
            r = int(c1[0] + (c2[0] - c1[0]) * t2)
            g = int(c1[1] + (c2[1] - c1[1]) * t2)
            b = int(c1[2] + (c2[2] - c1[2]) * t2)

        return r, g, b

    # ========================================================================
    # UI TEXT
    # ========================================================================

    def draw_info_text(
        self,
        canvas: pygame.Surface,
        lines: List[Tuple[str, Color]],
        position: Tuple[int, int] = (10, 10),
        line_spacing: int = 17,
    ):
        """
        Draw multiple lines of info text.

        Args:
            canvas: pygame Surface to draw on
            lines: List of (text, color) tuples
            position: Top-left position
            line_spacing: Vertical spacing between lines
        """
        x, y = position

        for i, (text, color) in enumerate(lines):
            text_surface = self.font_small.render(text, True, color)
            canvas.blit(text_surface, (x, y + i * line_spacing))

    def to_rgb_array(self, canvas: pygame.Surface) -> np.ndarray:
        """Canvas pixels as an (H, W, 3) uint8 array."""
        return np.transpose(np.array(pygame.surfarray.pixels3d(canvas)), axes=(1, 0, 2))

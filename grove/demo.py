"""
Bézier demo mode: one quadratic and one cubic curve side by side.

Each curve is drawn with its control polygon, and a marker travels along
it. The marker position comes from the curve evaluator rather than the
backend's native curve rendering, so the two should visibly agree.
"""

from dataclasses import dataclass, field
import math

import numpy as np

from grove.config import Color
from grove.curves import evaluate_cubic, evaluate_quadratic
from grove.surface import PathBuilder, Surface

POLYGON_COLOR = Color(200, 200, 255)
QUAD_COLOR = Color(120, 255, 200)
CUBIC_COLOR = Color(120, 255, 220)
MARKER_COLOR = Color(255, 255, 255)
BACKGROUND = Color(0, 0, 0)


@dataclass
class CurveDemo:
    """Control points, marker phases and phase speeds for both curves."""

    quad: list[tuple[float, float]] = field(
        default_factory=lambda: [(-200.0, 100.0), (0.0, -150.0), (200.0, 100.0)]
    )
    cubic: list[tuple[float, float]] = field(
        default_factory=lambda: [(-220.0, 140.0), (-120.0, -180.0),
                                 (120.0, 180.0), (220.0, -140.0)]
    )
    quad_phase: float = 0.0
    cubic_phase: float = 0.0
    quad_speed: float = 0.01
    cubic_speed: float = 0.008

    def randomize(self, width: float, height: float, rng: np.random.Generator) -> None:
        """Scatter control points relative to the viewport and pick new speeds."""
        spread = min(width, height) * 0.35

        q0 = (-spread * 0.8, spread * (0.2 + rng.random() * 0.4))
        q2 = (spread * 0.8, spread * (0.2 + rng.random() * 0.4))
        q1 = ((rng.random() - 0.5) * spread * 0.4, -spread * (0.2 + rng.random() * 0.8))
        self.quad = [q0, q1, q2]

        p0 = (-spread * 0.9, spread * (0.25 + rng.random() * 0.2))
        p3 = (spread * 0.9, -spread * (0.25 + rng.random() * 0.2))
        p1 = (-spread * (0.2 + rng.random() * 0.3), -spread * (0.2 + rng.random() * 0.8))
        p2 = (spread * (0.2 + rng.random() * 0.3), spread * (0.2 + rng.random() * 0.8))
        self.cubic = [p0, p1, p2, p3]

        self.quad_speed = 0.006 + rng.random() * 0.02
        self.cubic_speed = 0.005 + rng.random() * 0.018
        self.quad_phase = 0.0
        self.cubic_phase = 0.0

    def step(self) -> None:
        self.quad_phase += self.quad_speed
        self.cubic_phase += self.cubic_speed

    @property
    def quad_t(self) -> float:
        return (math.sin(self.quad_phase) + 1) / 2

    @property
    def cubic_t(self) -> float:
        return (math.cos(self.cubic_phase) + 1) / 2

    def quad_marker(self) -> tuple[float, float]:
        x, y = evaluate_quadratic(*self.quad, self.quad_t)
        return float(x), float(y)

    def cubic_marker(self) -> tuple[float, float]:
        x, y = evaluate_cubic(*self.cubic, self.cubic_t)
        return float(x), float(y)

    def draw(self, surface: Surface, width: float, height: float) -> None:
        surface.reset_transform()
        surface.clear(BACKGROUND)

        with surface.saved():
            surface.translate(width / 2, height / 2)

            # Quadratic on the left
            with surface.saved():
                surface.translate(-width * 0.22, 0)
                q0, q1, q2 = self.quad
                polygon = PathBuilder().move_to(*q0).line_to(*q1).line_to(*q2)
                surface.stroke(polygon, POLYGON_COLOR, 0.5, 1.4, tag="control_polygon")
                curve = PathBuilder().move_to(*q0).quad_to(*q1, *q2)
                surface.stroke(curve, QUAD_COLOR, 0.9, 3, tag="quadratic")
                surface.circle(self.quad_marker(), 7, MARKER_COLOR, tag="marker")

            # Cubic on the right
            with surface.saved():
                surface.translate(width * 0.12, 0)
                p0, p1, p2, p3 = self.cubic
                polygon = PathBuilder().move_to(*p0).line_to(*p1).line_to(*p2).line_to(*p3)
                surface.stroke(polygon, POLYGON_COLOR, 0.5, 1.4, tag="control_polygon")
                curve = PathBuilder().move_to(*p0).cubic_to(*p1, *p2, *p3)
                surface.stroke(curve, CUBIC_COLOR, 0.9, 3, tag="cubic")
                surface.circle(self.cubic_marker(), 7, MARKER_COLOR, tag="marker")

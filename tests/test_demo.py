"""
Tests for the Bézier demo mode.
"""

import numpy as np
import pytest

from grove.demo import CurveDemo
from grove.surface import RecordingSurface


class TestCurveDemo:
    """Tests for demo control points and markers."""

    def test_markers_start_on_curves(self) -> None:
        """At phase 0 the quadratic marker is mid-curve and the cubic one at its end."""
        demo = CurveDemo()
        assert demo.quad_t == pytest.approx(0.5)
        assert demo.cubic_t == pytest.approx(1.0)
        assert demo.cubic_marker() == pytest.approx(demo.cubic[3], abs=1e-3)

    def test_step_advances_phases(self) -> None:
        demo = CurveDemo()
        demo.step()
        assert demo.quad_phase == pytest.approx(demo.quad_speed)
        assert demo.cubic_phase == pytest.approx(demo.cubic_speed)

    def test_randomize_scales_with_viewport(self) -> None:
        """Control points stay within the spread derived from the viewport."""
        demo = CurveDemo()
        demo.randomize(800, 600, np.random.default_rng(5))
        spread = 600 * 0.35
        points = np.array(demo.quad + demo.cubic)
        assert np.all(np.abs(points) <= spread)
        assert demo.quad_phase == 0.0
        assert 0.006 <= demo.quad_speed <= 0.026
        assert 0.005 <= demo.cubic_speed <= 0.023

    def test_draw_tags(self) -> None:
        """Both curves are drawn with their control polygons and markers."""
        demo = CurveDemo()
        surface = RecordingSurface(800, 600)
        demo.draw(surface, 800, 600)
        assert len(surface.by_tag("control_polygon")) == 2
        assert len(surface.by_tag("quadratic")) == 1
        assert len(surface.by_tag("cubic")) == 1
        assert len(surface.by_tag("marker")) == 2
        assert surface.depth == 0

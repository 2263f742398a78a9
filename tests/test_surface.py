"""
Tests for the transform stack and recording surface.
"""

import math

import numpy as np
import pytest
from matplotlib.path import Path

from grove.config import Color
from grove.surface import PathBuilder, RecordingSurface

WHITE = Color(255, 255, 255)


class TestPathBuilder:
    """Tests for path construction."""

    def test_cubic_codes(self) -> None:
        """A cubic segment adds three CURVE4 vertices."""
        path = PathBuilder().move_to(0, 0).cubic_to(1, 1, 2, 1, 3, 0)
        assert path.codes == [Path.MOVETO, Path.CURVE4, Path.CURVE4, Path.CURVE4]
        assert len(path) == 4

    def test_quad_and_close(self) -> None:
        """Quadratic segments use CURVE3 and close returns to the start."""
        path = PathBuilder().move_to(1, 2).quad_to(3, 4, 5, 6).close()
        assert path.codes[1:3] == [Path.CURVE3, Path.CURVE3]
        assert path.codes[-1] == Path.CLOSEPOLY
        assert path.vertices[-1] == (1, 2)


class TestTransforms:
    """Tests for the affine stack."""

    def test_translate_then_rotate(self) -> None:
        """Transforms compose in call order like a canvas context."""
        surface = RecordingSurface()
        surface.translate(10, 20)
        surface.rotate(math.pi / 2)
        assert np.allclose(surface.transform_point(1, 0), [10, 21])

    def test_saved_scope_restores(self) -> None:
        """Leaving a saved block restores the previous matrix."""
        surface = RecordingSurface()
        surface.translate(5, 5)
        before = surface.matrix
        with surface.saved():
            surface.rotate(1.0)
            surface.scale(3.0)
        assert np.allclose(surface.matrix, before)
        assert surface.depth == 0

    def test_restore_without_save_raises(self) -> None:
        """Unbalanced restore is a programming error."""
        surface = RecordingSurface()
        with pytest.raises(IndexError):
            surface.restore()

    def test_scene_point_ignores_camera(self) -> None:
        """Points captured after set_camera are relative to the camera."""
        surface = RecordingSurface()
        surface.translate(400, 300)
        surface.scale(2.0)
        surface.set_camera()
        surface.translate(10, -5)
        assert np.allclose(surface.scene_point(), [10, -5])
        assert np.allclose(surface.current_origin(), [420, 290])

    def test_scale_factor(self) -> None:
        """Uniform scale survives rotation."""
        surface = RecordingSurface()
        surface.rotate(0.7)
        surface.scale(1.5)
        assert surface.scale_factor() == pytest.approx(1.5)


class TestRecording:
    """Tests for recorded commands."""

    def test_stroke_in_screen_coordinates(self) -> None:
        """Vertices are stored after the transform."""
        surface = RecordingSurface()
        surface.translate(100, 100)
        surface.stroke(PathBuilder().move_to(0, 0).line_to(0, -10), WHITE, 0.5, 2.0,
                       tag="test", depth=3)
        cmd = surface.commands[-1]
        assert cmd.kind == "stroke"
        assert np.allclose(cmd.end_point, [100, 90])
        assert cmd.rgba[3] == 0.5
        assert cmd.depth == 3

    def test_width_scales_with_transform(self) -> None:
        """Line width follows the current zoom."""
        surface = RecordingSurface()
        surface.scale(2.0)
        surface.stroke(PathBuilder().move_to(0, 0).line_to(1, 0), WHITE, width=3.0)
        assert surface.commands[-1].width == pytest.approx(6.0)

    def test_clear_starts_new_frame(self) -> None:
        """Clearing drops the previous frame's commands."""
        surface = RecordingSurface()
        surface.circle((0, 0), 3, WHITE, tag="seed")
        surface.clear(Color(0, 0, 0))
        assert [c.kind for c in surface.commands] == ["clear"]
        assert surface.by_tag("seed") == []

"""
Static leaves drawn at branch tips.

A leaf is two mirrored cubic curves meeting at the base and the tip, with
a straight midrib. Leaves flutter on their own schedule (time and depth
drive a small rotation and sideways offset) and fade in with their
branch's appear fraction.

When a spawner is attached, each drawn leaf is offered to it; the spawner
decides whether that leaf detaches and becomes a falling-leaf particle.
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

from grove.config import Color, LeafConfig, Palette
from grove.surface import PathBuilder, Surface

if TYPE_CHECKING:
    from grove.particles import FallingLeaf, LeafSpawner


# Fraction of leaf length where the lobes are widest near the base
STATIC_SHOULDER = 0.20


def leaf_outline(size: float, half_width: float, shoulder: float) -> PathBuilder:
    """Closed two-lobe leaf from (0, 0) to the tip at (0, -size)."""
    return (
        PathBuilder()
        .move_to(0.0, 0.0)
        .cubic_to(half_width, -size * shoulder,
                  half_width * 0.9, -size * 0.9,
                  0.0, -size)
        .cubic_to(-half_width * 0.9, -size * 0.9,
                  -half_width, -size * shoulder,
                  0.0, 0.0)
        .close()
    )


def draw_leaf_shape(
    surface: Surface,
    size: float,
    half_width: float,
    shoulder: float,
    fill: Color,
    fill_alpha: float,
    edge: Color,
    edge_alpha: float,
    midrib: Color,
    midrib_alpha: float,
    tag: str = "leaf",
    depth: int | None = None,
) -> None:
    """Fill, outline and midrib of one leaf at the surface origin."""
    outline = leaf_outline(size, half_width, shoulder)
    surface.fill(outline, fill, fill_alpha, tag=tag, depth=depth)
    surface.stroke(outline, edge, edge_alpha, 1.0, tag=tag, depth=depth)

    rib = PathBuilder().move_to(0.0, 0.0).line_to(0.0, -size)
    surface.stroke(rib, midrib, midrib_alpha, 0.7, tag=tag, depth=depth)


class LeafEmitter:
    """Draws tip leaves and offers each one to an optional spawner."""

    def __init__(
        self,
        config: LeafConfig,
        palette: Palette,
        max_depth: int,
        spawner: LeafSpawner | None = None,
    ) -> None:
        self.config = config
        self.palette = palette
        self.max_depth = max_depth
        self.spawner = spawner

    def leaf_size(self, depth: int) -> float:
        """Leaves on deeper tips are slightly larger."""
        depth_ratio = depth / self.max_depth
        return self.config.base_size * (0.8 + 0.4 * depth_ratio)

    def emit(
        self,
        surface: Surface,
        time: float,
        appear: float,
        depth: int,
        growth: float,
    ) -> FallingLeaf | None:
        """
        Draw a leaf at the current origin.

        Returns the falling leaf spawned from it, if any.
        """
        size = self.leaf_size(depth)
        half_width = size * 0.55

        swing = math.sin(time * 1.2 + depth * 0.4) * (math.pi / 45)
        offset_x = math.sin(time * 0.7 + depth * 0.8) * 5

        spawned = None
        with surface.saved():
            surface.translate(offset_x * appear, 0.0)
            surface.rotate(swing * appear)
            surface.rotate(-math.pi / 20)

            draw_leaf_shape(
                surface, size, half_width, STATIC_SHOULDER,
                fill=self.palette.leaf, fill_alpha=0.85 * appear,
                edge=self.palette.leaf_edge, edge_alpha=0.9 * appear,
                midrib=self.palette.midrib, midrib_alpha=0.22 * appear,
                tag="leaf", depth=depth,
            )

            if self.spawner is not None:
                spawned = self.spawner.on_leaf_visited(
                    surface.scene_point(), size, growth
                )

        return spawned

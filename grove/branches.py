"""
Recursive Bézier branch generator.

The tree is never stored. Every frame it is re-derived from two scalars,
growth progress and global time:

1. growth sets how deep recursion may go: floor(max_depth * growth)
2. each depth fades in over its own growth window, so deeper branches
   start appearing only after shallower ones are partly grown
3. time drives a per-depth sinusoidal sway that bends each cubic segment

Each call draws one segment, optionally hands the tip to the leaf emitter,
and recurses into two shorter children rotated apart by a depth-dependent
spread.
"""

from __future__ import annotations

from dataclasses import dataclass
import math
from typing import TYPE_CHECKING

from grove.config import Color, ColorGradient, GrowthConfig, Palette
from grove.surface import PathBuilder, Surface

if TYPE_CHECKING:
    from grove.leaves import LeafEmitter


# Per-depth appear window: starts at depth_ratio * APPEAR_DELAY, lasts APPEAR_WINDOW
APPEAR_DELAY = 0.6
APPEAR_WINDOW = 0.45

# Gates on depth_ratio / appear
LEAF_DEPTH_RATIO = 0.85
LEAF_MIN_APPEAR = 0.6
CHILD_MIN_APPEAR = 0.3

# Width and opacity ranges from trunk (depth 0) to tips (max_depth)
TRUNK_WIDTH, TIP_WIDTH = 14.0, 1.0
TRUNK_ALPHA, TIP_ALPHA = 1.0, 0.35

# Spread between the two children, from depth 0 to max_depth
MIN_SPREAD, MAX_SPREAD = math.pi / 9, math.pi / 3.5
JITTER_AMPLITUDE = math.pi / 70

# Time offsets given to (right, left) children so their sway phases diverge
CHILD_TIME_OFFSETS = (0.2, 0.3)


def clamp(v: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, v))


def map_range(v: float, a: float, b: float, c: float, d: float) -> float:
    """Linearly map v from [a, b] onto [c, d]."""
    return c + (v - a) * (d - c) / (b - a)


# =============================================================================
# PURE BRANCH MATH
# =============================================================================

def active_max_depth(growth: float, max_depth: int) -> int:
    """Deepest level reachable at this growth, always within [0, max_depth]."""
    return int(clamp(math.floor(max_depth * growth), 0, max_depth))


def appear_fraction(depth: int, growth: float, max_depth: int) -> float:
    """
    Fade-in fraction of a branch at `depth`.

    appear = clamp((growth - start) / window, 0, 1)
    where start = (depth / max_depth) * APPEAR_DELAY.
    """
    depth_ratio = depth / max_depth
    appear_start = depth_ratio * APPEAR_DELAY
    appear_end = appear_start + APPEAR_WINDOW
    window = max(appear_end - appear_start, 1e-9)
    return clamp((growth - appear_start) / window, 0.0, 1.0)


@dataclass(frozen=True)
class BranchStyle:
    """Stroke appearance of one branch segment."""
    color: Color
    width: float
    alpha: float


def branch_style(
    depth: int,
    appear: float,
    max_depth: int,
    gradient: ColorGradient,
    palette: Palette,
) -> BranchStyle:
    """Color from the gradient, width and opacity thinning toward the tips."""
    color = palette.root_override if depth == 0 else gradient[depth]
    width = map_range(depth, 0, max_depth, TRUNK_WIDTH, TIP_WIDTH)
    alpha = map_range(depth, 0, max_depth, TRUNK_ALPHA, TIP_ALPHA)
    return BranchStyle(color=color, width=width * appear, alpha=alpha * appear)


def sway_offset(effective_length: float, depth: int, max_depth: int, time: float) -> float:
    """Lateral wind offset; frequency shifts with depth so levels drift apart."""
    depth_ratio = depth / max_depth
    curve = effective_length * (0.18 + depth_ratio * 0.5)
    local_phase = time * (0.65 + depth * 0.07)
    return math.sin(local_phase) * curve


def segment_controls(
    effective_length: float, sway: float
) -> tuple[tuple[float, float], ...]:
    """
    Cubic segment (start, cp1, cp2, end) in the branch's local frame.

    The branch grows along -y (up on screen); sway bends the control
    points in opposite directions to give an S-shaped curve.
    """
    start = (0.0, 0.0)
    cp1 = (sway * 0.55, -effective_length * 0.3)
    cp2 = (-sway * 0.45, -effective_length * 0.8)
    end = (sway * 0.15, -effective_length)
    return start, cp1, cp2, end


def child_rotations(depth: int, max_depth: int, time: float) -> tuple[float, float]:
    """Rotations of the (right, left) children relative to the parent tip."""
    depth_ratio = depth / max_depth
    spread = map_range(depth_ratio, 0, 1, MIN_SPREAD, MAX_SPREAD)
    jitter = math.sin(depth * 8.8 + time * 0.45) * JITTER_AMPLITUDE
    return spread + jitter, -spread + jitter


# =============================================================================
# GENERATOR
# =============================================================================

class BranchGenerator:
    """
    Draws the whole tree by recursion from the root.

    Holds only immutable configuration; all per-frame state arrives as
    arguments, so two calls with equal arguments draw identical trees
    (apart from leaf spawning, which is random).
    """

    def __init__(
        self,
        config: GrowthConfig,
        gradient: ColorGradient,
        palette: Palette,
        leaf_emitter: LeafEmitter | None = None,
    ) -> None:
        if len(gradient) != config.max_depth + 1:
            raise ValueError(
                f"Gradient has {len(gradient)} colors, expected {config.max_depth + 1}"
            )
        self.config = config
        self.gradient = gradient
        self.palette = palette
        self.leaf_emitter = leaf_emitter

    @property
    def max_depth(self) -> int:
        return self.config.max_depth

    def generate(
        self,
        surface: Surface,
        length: float,
        orientation: float,
        depth: int,
        time: float,
        growth: float,
    ) -> int:
        """
        Draw one segment at the surface's current origin and recurse.

        Args:
            surface: Target surface; its transform is restored on return
            length: Full-growth length of this segment
            orientation: Rotation applied before drawing (root sway)
            depth: Recursion depth (0 = trunk)
            time: Sway phase time for this segment
            growth: Growth progress in [0, 1]

        Returns:
            Number of segments drawn in this subtree
        """
        current_max = active_max_depth(growth, self.max_depth)
        if depth > current_max:
            return 0

        appear = appear_fraction(depth, growth, self.max_depth)
        if appear <= 0:
            return 0

        depth_ratio = depth / self.max_depth
        effective = length * appear
        if depth == 0:
            effective *= self.config.root_shortening

        style = branch_style(depth, appear, self.max_depth, self.gradient, self.palette)
        sway = sway_offset(effective, depth, self.max_depth, time)
        start, cp1, cp2, end = segment_controls(effective, sway)

        drawn = 1
        with surface.saved():
            surface.rotate(orientation)

            path = PathBuilder().move_to(*start).cubic_to(*cp1, *cp2, *end)
            surface.stroke(path, style.color, style.alpha, style.width,
                           tag="branch", depth=depth)

            # Children grow from the tip
            surface.translate(*end)

            if (self.leaf_emitter is not None
                    and depth_ratio > LEAF_DEPTH_RATIO and appear > LEAF_MIN_APPEAR):
                self.leaf_emitter.emit(surface, time, appear, depth, growth)

            if depth < current_max and appear > CHILD_MIN_APPEAR:
                child_length = effective * self.config.child_length_ratio
                rotations = child_rotations(depth, self.max_depth, time)
                for rotation, offset in zip(rotations, CHILD_TIME_OFFSETS):
                    with surface.saved():
                        surface.rotate(rotation)
                        drawn += self.generate(
                            surface, child_length, orientation,
                            depth + 1, time + offset, growth,
                        )

        return drawn

    def draw_tree(
        self,
        surface: Surface,
        origin: tuple[float, float],
        height: float,
        time: float,
        growth: float,
    ) -> int:
        """
        Draw the tree rooted at `origin` (bottom center of the viewport).

        Before growth reaches the seed phase end only a small seed dot is
        drawn. Returns the number of branch segments drawn.
        """
        base_height = height * self.config.trunk_height_ratio * growth
        sway = math.sin(time * 0.5) * (math.pi / 90)

        with surface.saved():
            surface.translate(*origin)

            if growth < self.config.seed_phase_end:
                radius = map_range(growth, 0, self.config.seed_phase_end, 2, 6)
                surface.circle((0.0, 0.0), radius, self.palette.trunk, 1.0, tag="seed")
                return 0

            return self.generate(surface, base_height, sway, 0, time, growth)

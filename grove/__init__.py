"""
Grove Rendering Module

A generative fractal tree that grows from a seed into swaying cubic
Bézier branches, sheds falling-leaf particles, and supports a one-shot
camera zoom.

Modules:
    config: Colors, gradient and scene configuration
    curves: Quadratic and cubic Bézier evaluation
    growth: Growth progress and global time clocks
    surface: Immediate-mode drawing surface (recording, matplotlib)
    branches: Recursive branch generator
    leaves: Tip leaves and their drawing
    particles: Falling-leaf particle system and spawn policy
    zoom: Camera zoom animation
    scene: Scene context with reset/tick lifecycle
    demo: Bézier curve demo mode
    app: Matplotlib host and headless rendering
"""

from grove.branches import (
    BranchGenerator,
    BranchStyle,
    active_max_depth,
    appear_fraction,
    branch_style,
    child_rotations,
    segment_controls,
    sway_offset,
)
from grove.config import (
    Color,
    ColorGradient,
    GrowthConfig,
    LeafConfig,
    Palette,
    SceneConfig,
    ZoomConfig,
    get_preset,
)
from grove.curves import evaluate_cubic, evaluate_quadratic, sample_cubic, sample_quadratic
from grove.growth import GrowthClock, SceneClock
from grove.leaves import LeafEmitter, draw_leaf_shape, leaf_outline
from grove.particles import FallingLeaf, FallingLeafSystem, LeafSpawner
from grove.scene import FrameStats, Scene
from grove.surface import (
    DrawCommand,
    MatplotlibSurface,
    PathBuilder,
    RecordingSurface,
    Surface,
)
from grove.zoom import ZoomAnimator, ZoomFrame

__all__ = [
    # Config
    "Color",
    "ColorGradient",
    "GrowthConfig",
    "LeafConfig",
    "Palette",
    "SceneConfig",
    "ZoomConfig",
    "get_preset",
    # Curves
    "evaluate_cubic",
    "evaluate_quadratic",
    "sample_cubic",
    "sample_quadratic",
    # Clocks
    "GrowthClock",
    "SceneClock",
    # Drawing surface
    "DrawCommand",
    "MatplotlibSurface",
    "PathBuilder",
    "RecordingSurface",
    "Surface",
    # Tree generation
    "BranchGenerator",
    "BranchStyle",
    "active_max_depth",
    "appear_fraction",
    "branch_style",
    "child_rotations",
    "segment_controls",
    "sway_offset",
    # Leaves and particles
    "LeafEmitter",
    "draw_leaf_shape",
    "leaf_outline",
    "FallingLeaf",
    "FallingLeafSystem",
    "LeafSpawner",
    # Camera
    "ZoomAnimator",
    "ZoomFrame",
    # Scene
    "FrameStats",
    "Scene",
]

"""
Configuration and type definitions for the growing-tree scene.

This module defines the constants, colors, and configuration for the
fractal tree renderer. Every persistent number the scene uses lives here
so that a scene can be built with different timing or palette without
touching the drawing code.

Scene timing:
    time_step: GlobalTime increment per frame (seconds)
    growth_speed: GrowthState increment per frame
    zoom.duration: length of the one-shot zoom animation (seconds)

All configuration objects are frozen and validated on construction.
"""

from dataclasses import dataclass, field
from typing import NamedTuple


class Color(NamedTuple):
    """
    An RGB color with channels in [0, 255].

    Channels may be fractional; gradients and blends produce
    non-integer values and we keep them as-is.
    """

    r: float
    g: float
    b: float

    def to_rgb(self) -> tuple[float, float, float]:
        """Convert to matplotlib's [0, 1] float triple."""
        return (self.r / 255.0, self.g / 255.0, self.b / 255.0)

    def to_rgba(self, alpha: float = 1.0) -> tuple[float, float, float, float]:
        """Convert to a matplotlib RGBA tuple with alpha clipped to [0, 1]."""
        a = max(0.0, min(1.0, alpha))
        return (self.r / 255.0, self.g / 255.0, self.b / 255.0, a)

    def lerp(self, other: "Color", t: float) -> "Color":
        """Linear interpolation toward `other` (t=0 -> self, t=1 -> other)."""
        return Color(
            self.r * (1 - t) + other.r * t,
            self.g * (1 - t) + other.g * t,
            self.b * (1 - t) + other.b * t,
        )

    def is_valid(self) -> bool:
        return all(0.0 <= c <= 255.0 for c in self)


class ColorGradient:
    """
    Immutable list of colors linearly interpolated from `start` to `end`.

    Indexed by recursion depth: gradient[0] is the trunk color and
    gradient[steps - 1] is the leaf color.
    """

    __slots__ = ("_colors",)

    def __init__(self, start: Color, end: Color, steps: int) -> None:
        if steps < 2:
            raise ValueError("A gradient needs at least 2 steps")
        self._colors = tuple(start.lerp(end, i / (steps - 1)) for i in range(steps))

    def __getitem__(self, index: int) -> Color:
        return self._colors[index]

    def __len__(self) -> int:
        return len(self._colors)

    def __iter__(self):
        return iter(self._colors)


@dataclass(frozen=True)
class Palette:
    """Scene colors. Defaults give the standard hand-tuned look."""

    trunk: Color = Color(70, 40, 20)  # Gradient start (brown)
    leaf: Color = Color(144, 238, 144)  # Gradient end and leaf fill (light green)
    autumn: Color = Color(184, 134, 11)  # Falling leaf color at full life
    root_override: Color = Color(40, 22, 10)  # Darker tone for the depth-0 segment
    leaf_edge: Color = Color(40, 110, 60)
    falling_edge: Color = Color(134, 86, 32)
    # Falling leaves blend toward this yellow as they fade out
    transition_yellow: Color = Color(255, 215, 0)
    midrib: Color = Color(255, 255, 255)
    background: Color = Color(0, 0, 0)

    def __post_init__(self) -> None:
        for name in self.__dataclass_fields__:
            if not getattr(self, name).is_valid():
                raise ValueError(f"Color '{name}' has channels outside [0, 255]")


@dataclass(frozen=True)
class GrowthConfig:
    """Growth clock and recursion parameters."""

    max_depth: int = 9  # Fractal depth at full growth
    growth_speed: float = 0.0006  # GrowthState increment per frame
    seed_phase_end: float = 0.12  # Below this growth only a seed dot is drawn
    trunk_height_ratio: float = 0.33  # Base trunk length as fraction of viewport height
    root_shortening: float = 0.85  # Extra shortening of the depth-0 segment
    child_length_ratio: float = 0.7  # Child length relative to parent's effective length

    def __post_init__(self) -> None:
        if self.max_depth < 1:
            raise ValueError("max_depth must be at least 1")
        if self.growth_speed <= 0:
            raise ValueError("growth_speed must be positive")
        if not 0.0 <= self.seed_phase_end < 1.0:
            raise ValueError("seed_phase_end must be in [0, 1)")


@dataclass(frozen=True)
class LeafConfig:
    """Leaf drawing and falling-leaf particle parameters."""

    base_size: float = 22.0  # Static leaf length before depth scaling
    max_falling_leaves: int = 45  # Cap on concurrently live falling leaves
    gravity: float = 0.6  # Added to vy as gravity * dt each advance
    fade_rate: float = 0.0008  # Life lost per advance
    spawn_probability: float = 0.0008  # Per-visit chance a drawn leaf falls
    spawn_growth_threshold: float = 0.97  # Leaves only fall once growth exceeds this
    exit_margin: float = 120.0  # Leaves below height + margin are removed
    horizontal_damping: float = 0.6  # x += vx * damping
    angular_damping: float = 0.55  # angle += angular_velocity * damping

    def __post_init__(self) -> None:
        if self.max_falling_leaves < 0:
            raise ValueError("max_falling_leaves must be nonnegative")
        if self.fade_rate <= 0:
            raise ValueError("fade_rate must be positive")
        if not 0.0 <= self.spawn_probability <= 1.0:
            raise ValueError("spawn_probability must be in [0, 1]")
        if self.base_size <= 0:
            raise ValueError("base_size must be positive")


@dataclass(frozen=True)
class ZoomConfig:
    """Camera zoom animation parameters."""

    duration: float = 7.0  # Seconds from activation to self-deactivation
    scale: float = 0.35  # Peak zoom is 1 + scale
    focus_ratio: float = 0.25  # Peak focus height as fraction of viewport height

    def __post_init__(self) -> None:
        if self.duration <= 0:
            raise ValueError("Zoom duration must be positive")
        if self.scale < 0:
            raise ValueError("Zoom scale must be nonnegative")


@dataclass(frozen=True)
class SceneConfig:
    """
    Complete scene configuration.

    Composes growth, leaf, zoom and palette settings plus the fixed
    per-frame time step shared by every animated component.
    """

    time_step: float = 0.016  # GlobalTime / zoom / particle step per frame
    growth: GrowthConfig = field(default_factory=GrowthConfig)
    leaves: LeafConfig = field(default_factory=LeafConfig)
    zoom: ZoomConfig = field(default_factory=ZoomConfig)
    palette: Palette = field(default_factory=Palette)

    def __post_init__(self) -> None:
        if self.time_step <= 0:
            raise ValueError("time_step must be positive")

    @classmethod
    def default(cls) -> "SceneConfig":
        """Standard look and pacing (~28 s to full growth at 60 fps)."""
        return cls()

    @classmethod
    def fast(cls) -> "SceneConfig":
        """A quick-growing preset for previews and headless rendering."""
        return cls(growth=GrowthConfig(growth_speed=0.02))

    def make_gradient(self) -> ColorGradient:
        """Trunk-to-leaf gradient with one color per depth level."""
        return ColorGradient(
            self.palette.trunk, self.palette.leaf, self.growth.max_depth + 1
        )


PRESETS = {
    "default": SceneConfig.default,
    "fast": SceneConfig.fast,
}


def get_preset(name: str) -> SceneConfig:
    """Look up a named preset."""
    if name not in PRESETS:
        raise ValueError(f"Unknown preset: {name}. Choose from {sorted(PRESETS)}")
    return PRESETS[name]()

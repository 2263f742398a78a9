"""
Scene context: all persistent state of the growing-tree animation.

The scene owns the few values that survive between frames (global time,
growth progress, zoom state and the falling-leaf population) and the
immutable helpers that turn them into drawing commands every frame.

Frame order, driven by the host calling tick():

1. advance global time, zoom clock and growth
2. apply the zoom transform (if active)
3. draw the tree from the root (tip leaves may detach)
4. advance, cull and draw the falling leaves
"""

from dataclasses import dataclass

import numpy as np

from grove.branches import BranchGenerator
from grove.config import SceneConfig
from grove.growth import GrowthClock, SceneClock
from grove.leaves import LeafEmitter
from grove.particles import EXITED, FADED, FallingLeafSystem, LeafSpawner
from grove.surface import Surface
from grove.zoom import ZoomAnimator, ZoomFrame


@dataclass
class FrameStats:
    """What one tick did. Collected by headless runs for reporting."""
    frame: int
    time: float
    growth: float
    segments: int
    falling_leaves: int
    spawned: int
    exited: int
    faded: int
    zoom_active: bool
    zoom_alpha: float | None = None


class Scene:
    """
    The growing tree with its falling leaves and camera.

    Args:
        config: Scene configuration (defaults to SceneConfig.default())
        width, height: Viewport size in pixels
        seed: Seed for the leaf-spawn random generator
    """

    def __init__(
        self,
        config: SceneConfig | None = None,
        width: float = 960,
        height: float = 720,
        seed: int | np.random.SeedSequence | None = None,
    ) -> None:
        if config is None:
            config = SceneConfig.default()
        self.config = config
        self.width = width
        self.height = height
        self.rng = np.random.default_rng(seed)

        self.gradient = config.make_gradient()
        self.clock = SceneClock(config.time_step)
        self.growth = GrowthClock(config.growth.growth_speed)
        self.zoom = ZoomAnimator(config.zoom, config.time_step)
        self.particles = FallingLeafSystem(config.leaves, config.palette, config.time_step)
        self.spawner = LeafSpawner(config.leaves, self.particles, self.rng)
        self.leaf_emitter = LeafEmitter(
            config.leaves, config.palette, config.growth.max_depth, self.spawner
        )
        self.branches = BranchGenerator(
            config.growth, self.gradient, config.palette, self.leaf_emitter
        )

    @property
    def origin(self) -> tuple[float, float]:
        """Tree root: bottom center of the viewport."""
        return (self.width / 2, self.height)

    @property
    def time(self) -> float:
        return self.clock.time

    @property
    def progress(self) -> float:
        return self.growth.progress

    # -- commands -------------------------------------------------------------

    def reset(self) -> None:
        """Restart from a seed: time, growth, zoom and leaves all cleared."""
        self.clock.reset()
        self.growth.reset()
        self.zoom.cancel()
        self.particles.clear()

    def activate_zoom(self) -> bool:
        """Start the zoom animation; ignored while the tree is still growing."""
        return self.zoom.activate(self.growth.progress)

    def resize(self, width: float, height: float) -> None:
        """Adopt a new viewport size and restart the tree."""
        self.width = width
        self.height = height
        self.reset()

    # -- frame lifecycle ------------------------------------------------------

    def advance(self) -> ZoomFrame | None:
        """Advance every clock by one frame; returns the zoom frame if active."""
        self.clock.advance()
        zoom_frame = self.zoom.step(self.height)
        self.growth.advance()
        return zoom_frame

    def render(self, surface: Surface, zoom_frame: ZoomFrame | None = None) -> FrameStats:
        """Draw the current state onto `surface` and move the falling leaves."""
        spawned_before = self.spawner.spawned

        surface.reset_transform()
        surface.clear(self.config.palette.background)

        with surface.saved():
            if zoom_frame is not None:
                zoom_frame.apply(surface, self.width, self.height)
            surface.set_camera()

            segments = self.branches.draw_tree(
                surface, self.origin, self.height, self.clock.time, self.growth.progress
            )
            removed = self.particles.advance(self.height)
            self.particles.draw(surface)

        reasons = [reason for _, reason in removed]
        return FrameStats(
            frame=self.clock.frame,
            time=self.clock.time,
            growth=self.growth.progress,
            segments=segments,
            falling_leaves=len(self.particles),
            spawned=self.spawner.spawned - spawned_before,
            exited=reasons.count(EXITED),
            faded=reasons.count(FADED),
            zoom_active=self.zoom.active,
            zoom_alpha=None if zoom_frame is None else zoom_frame.alpha,
        )

    def tick(self, surface: Surface) -> FrameStats:
        """One full frame: advance state, then draw."""
        zoom_frame = self.advance()
        return self.render(surface, zoom_frame)

"""
Falling-leaf particles.

Once the tree is nearly grown, leaves drawn at branch tips occasionally
detach. Each detached leaf becomes an independent particle that falls
under a stylized gravity, drifts sideways, spins, and fades.

Per advance, under a fixed time step dt:

    vy    += gravity * dt
    x     += vx * horizontal_damping
    y     += vy
    angle += angular_velocity * angular_damping
    life  -= fade_rate

A particle is removed in the same advance that it drops below the
visible area (height + exit_margin) or runs out of life. The population
is capped; the cap is checked when a leaf asks to be admitted.
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from grove.config import LeafConfig, Palette
from grove.leaves import draw_leaf_shape
from grove.surface import Surface

# Removal reasons reported by FallingLeafSystem.advance
EXITED = "exited"
FADED = "faded"

# Leaves within this much of zero life count as faded
LIFE_EPSILON = 1e-9

# Falling leaves are a little wider with a higher shoulder than tip leaves
FALLING_HALF_WIDTH = 0.6
FALLING_SHOULDER = 0.22


@dataclass
class FallingLeaf:
    """A single detached leaf. life is 1 at spawn and decreases to 0."""
    x: float
    y: float
    size: float
    angle: float = 0.0
    angular_velocity: float = 0.0
    vx: float = 0.0
    vy: float = 0.0
    life: float = 1.0

    @property
    def position(self) -> tuple[float, float]:
        return (self.x, self.y)


class FallingLeafSystem:
    """Owns every live falling leaf; advances, culls and draws them."""

    def __init__(self, config: LeafConfig, palette: Palette, time_step: float) -> None:
        self.config = config
        self.palette = palette
        self.time_step = time_step
        self.leaves: list[FallingLeaf] = []

    def __len__(self) -> int:
        return len(self.leaves)

    def __iter__(self):
        return iter(self.leaves)

    @property
    def max_leaves(self) -> int:
        return self.config.max_falling_leaves

    @property
    def is_full(self) -> bool:
        return len(self.leaves) >= self.max_leaves

    def spawn(self, leaf: FallingLeaf) -> bool:
        """Admit a leaf unless the population is at its cap."""
        if self.is_full:
            return False
        self.leaves.append(leaf)
        return True

    def clear(self) -> None:
        self.leaves = []

    def advance(self, height: float) -> list[tuple[FallingLeaf, str]]:
        """
        Move every leaf one step and drop the ones that left or faded.

        Args:
            height: Visible height; leaves below height + exit_margin exit

        Returns:
            (leaf, reason) for each leaf removed by this call
        """
        cfg = self.config
        floor_y = height + cfg.exit_margin
        survivors: list[FallingLeaf] = []
        removed: list[tuple[FallingLeaf, str]] = []

        for leaf in self.leaves:
            leaf.vy += cfg.gravity * self.time_step
            leaf.x += leaf.vx * cfg.horizontal_damping
            leaf.y += leaf.vy
            leaf.angle += leaf.angular_velocity * cfg.angular_damping
            leaf.life -= cfg.fade_rate

            if leaf.y > floor_y:
                removed.append((leaf, EXITED))
            elif leaf.life <= LIFE_EPSILON:
                removed.append((leaf, FADED))
            else:
                survivors.append(leaf)

        self.leaves = survivors
        return removed

    def draw(self, surface: Surface) -> None:
        """Draw leaves shifting from the autumn color toward yellow as they fade out."""
        palette = self.palette
        for leaf in self.leaves:
            fill = palette.autumn.lerp(palette.transition_yellow, 1.0 - leaf.life)
            with surface.saved():
                surface.translate(leaf.x, leaf.y)
                surface.rotate(leaf.angle)
                draw_leaf_shape(
                    surface, leaf.size, leaf.size * FALLING_HALF_WIDTH, FALLING_SHOULDER,
                    fill=fill, fill_alpha=0.9 * leaf.life,
                    edge=palette.falling_edge, edge_alpha=0.9 * leaf.life,
                    midrib=palette.midrib, midrib_alpha=0.18 * leaf.life,
                    tag="falling_leaf",
                )


class LeafSpawner:
    """
    Decides whether a drawn tip leaf detaches.

    A leaf falls only when growth has passed the threshold, a random draw
    lands under the spawn probability, and the particle system has room.
    """

    def __init__(
        self,
        config: LeafConfig,
        particles: FallingLeafSystem,
        rng: np.random.Generator | None = None,
    ) -> None:
        self.config = config
        self.particles = particles
        self.rng = rng if rng is not None else np.random.default_rng()
        self.spawned = 0

    def should_spawn(self, growth: float) -> bool:
        if growth <= self.config.spawn_growth_threshold:
            return False
        if self.rng.random() >= self.config.spawn_probability:
            return False
        return not self.particles.is_full

    def on_leaf_visited(
        self, position, size: float, growth: float
    ) -> FallingLeaf | None:
        """
        Offer a drawn leaf for detachment.

        Args:
            position: Scene position of the leaf base
            size: Drawn leaf size
            growth: Current growth progress

        Returns:
            The new particle, or None if the leaf stays on the tree
        """
        if not self.should_spawn(growth):
            return None

        leaf = FallingLeaf(
            x=float(position[0]),
            y=float(position[1]),
            size=size,
            angle=0.0,
            angular_velocity=self.rng.uniform(-1.0, 1.0) * 0.03,
            vx=self.rng.uniform(-1.0, 1.0) * 0.25,
            vy=self.rng.random() * 0.05 - 0.02,
            life=1.0,
        )
        if not self.particles.spawn(leaf):
            return None
        self.spawned += 1
        return leaf


"""
Tests for falling-leaf physics, culling and spawning.
"""

import numpy as np
import pytest

from grove.config import LeafConfig, Palette
from grove.particles import (
    EXITED,
    FADED,
    FallingLeaf,
    FallingLeafSystem,
    LeafSpawner,
)
from grove.surface import RecordingSurface

DT = 0.016


def make_system(**overrides) -> FallingLeafSystem:
    return FallingLeafSystem(LeafConfig(**overrides), Palette(), DT)


class TestPhysics:
    """Tests for the per-step update."""

    def test_single_step(self) -> None:
        """Gravity, damping and fade are applied once per advance."""
        system = make_system()
        leaf = FallingLeaf(x=10.0, y=20.0, size=20.0, angular_velocity=0.02, vx=0.2, vy=0.01)
        system.spawn(leaf)
        system.advance(height=600)

        assert leaf.vy == pytest.approx(0.01 + 0.6 * DT)
        assert leaf.x == pytest.approx(10.0 + 0.2 * 0.6)
        assert leaf.y == pytest.approx(20.0 + leaf.vy)
        assert leaf.angle == pytest.approx(0.02 * 0.55)
        assert leaf.life == pytest.approx(1.0 - 0.0008)

    def test_fades_after_exact_lifetime(self) -> None:
        """With fade_rate 0.0008 a leaf survives 1249 steps and goes on the 1250th."""
        system = make_system()
        system.spawn(FallingLeaf(x=0.0, y=0.0, size=20.0))
        for _ in range(1249):
            assert system.advance(height=1e6) == []
        assert len(system) == 1

        removed = system.advance(height=1e6)
        assert [reason for _, reason in removed] == [FADED]
        assert len(system) == 0

    def test_exits_below_margin(self) -> None:
        """A leaf is dropped the step it passes height + exit margin."""
        system = make_system(gravity=0.0)
        system.spawn(FallingLeaf(x=0.0, y=100.0, size=20.0, vy=50.0))
        for _ in range(12):
            assert system.advance(height=600) == []
        removed = system.advance(height=600)
        assert [reason for _, reason in removed] == [EXITED]

    def test_exit_reported_before_fade(self) -> None:
        """A leaf that both exits and fades in one step counts as exited."""
        system = make_system()
        system.spawn(FallingLeaf(x=0.0, y=719.0, size=20.0, vy=10.0, life=0.0005))
        removed = system.advance(height=600)
        assert [reason for _, reason in removed] == [EXITED]

    def test_only_removed_leaves_dropped(self) -> None:
        system = make_system()
        keep = FallingLeaf(x=0.0, y=0.0, size=20.0)
        gone = FallingLeaf(x=0.0, y=5000.0, size=20.0)
        system.spawn(keep)
        system.spawn(gone)
        system.advance(height=600)
        assert list(system) == [keep]


class TestCapacity:
    """Tests for the population cap."""

    def test_spawn_refused_at_cap(self) -> None:
        system = make_system(max_falling_leaves=2)
        assert system.spawn(FallingLeaf(0.0, 0.0, 20.0))
        assert system.spawn(FallingLeaf(0.0, 0.0, 20.0))
        assert not system.spawn(FallingLeaf(0.0, 0.0, 20.0))
        assert system.is_full
        assert len(system) == 2

    def test_spawner_respects_cap(self) -> None:
        """Even with certain spawning the population never exceeds the cap."""
        config = LeafConfig(max_falling_leaves=3, spawn_probability=1.0)
        system = FallingLeafSystem(config, Palette(), DT)
        spawner = LeafSpawner(config, system, np.random.default_rng(1))
        results = [spawner.on_leaf_visited((0.0, 0.0), 20.0, 1.0) for _ in range(10)]
        assert sum(r is not None for r in results) == 3
        assert len(system) == 3
        assert spawner.spawned == 3


class TestSpawner:
    """Tests for the detachment decision."""

    def test_no_spawn_before_threshold(self) -> None:
        """Growth at or below the threshold never detaches leaves."""
        config = LeafConfig(spawn_probability=1.0)
        system = FallingLeafSystem(config, Palette(), DT)
        spawner = LeafSpawner(config, system, np.random.default_rng(2))
        for growth in (0.0, 0.5, 0.97):
            assert spawner.on_leaf_visited((0.0, 0.0), 20.0, growth) is None
        assert len(system) == 0

    def test_initial_motion_ranges(self) -> None:
        """Spawned leaves start upright and full, with small random velocities."""
        config = LeafConfig(spawn_probability=1.0, max_falling_leaves=200)
        system = FallingLeafSystem(config, Palette(), DT)
        spawner = LeafSpawner(config, system, np.random.default_rng(3))
        for _ in range(200):
            spawner.on_leaf_visited((12.0, 34.0), 20.0, 1.0)

        for leaf in system:
            assert (leaf.x, leaf.y) == (12.0, 34.0)
            assert leaf.angle == 0.0
            assert leaf.life == 1.0
            assert -0.03 <= leaf.angular_velocity <= 0.03
            assert -0.25 <= leaf.vx <= 0.25
            assert -0.02 <= leaf.vy <= 0.03

    def test_probability_zero_never_spawns(self) -> None:
        config = LeafConfig(spawn_probability=0.0)
        system = FallingLeafSystem(config, Palette(), DT)
        spawner = LeafSpawner(config, system, np.random.default_rng(4))
        assert all(
            spawner.on_leaf_visited((0.0, 0.0), 20.0, 1.0) is None for _ in range(100)
        )


class TestDrawing:
    """Tests for falling-leaf rendering."""

    def test_color_shifts_as_leaf_fades(self) -> None:
        """Fill moves from autumn toward yellow and fades with life."""
        palette = Palette()
        system = make_system()
        system.spawn(FallingLeaf(x=50.0, y=50.0, size=20.0, life=0.5))
        surface = RecordingSurface()
        system.draw(surface)

        fill = surface.by_tag("falling_leaf")[0]
        expected = palette.autumn.lerp(palette.transition_yellow, 0.5).to_rgba(0.45)
        assert fill.kind == "fill"
        assert fill.rgba == pytest.approx(expected)

    def test_outline_fades_with_life(self) -> None:
        """The edge stroke fades with the fill instead of staying opaque."""
        system = make_system()
        system.spawn(FallingLeaf(x=50.0, y=50.0, size=20.0, life=0.1))
        surface = RecordingSurface()
        system.draw(surface)

        fill, edge, midrib = surface.by_tag("falling_leaf")
        assert edge.kind == "stroke"
        assert edge.rgba[3] == pytest.approx(0.09)
        assert midrib.rgba[3] == pytest.approx(0.018)

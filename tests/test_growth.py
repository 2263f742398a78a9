"""
Tests for the growth and global-time clocks.
"""

import pytest

from grove.growth import GrowthClock, SceneClock


class TestGrowthClock:
    """Tests for growth progress."""

    def test_starts_at_zero(self) -> None:
        """A new clock is a seed."""
        clock = GrowthClock(step=0.01)
        assert clock.progress == 0.0
        assert not clock.is_complete

    def test_monotonic_and_saturates(self) -> None:
        """Progress never decreases and stops at exactly 1.0."""
        clock = GrowthClock(step=0.3)
        values = [clock.advance() for _ in range(6)]
        assert values == sorted(values)
        assert values[-1] == 1.0
        assert all(v <= 1.0 for v in values)

    def test_small_step_converges_exactly(self) -> None:
        """Accumulated float error never leaves progress short of or above 1."""
        clock = GrowthClock(step=0.0006)
        for _ in range(2000):
            clock.advance()
        assert clock.progress == 1.0
        assert clock.is_complete

    def test_idempotent_at_ceiling(self) -> None:
        """Advancing a complete clock keeps it at 1."""
        clock = GrowthClock(step=0.5, progress=1.0)
        clock.advance()
        clock.advance()
        assert clock.progress == 1.0

    def test_reset(self) -> None:
        """Reset returns to the seed state."""
        clock = GrowthClock(step=0.25)
        clock.advance()
        clock.reset()
        assert clock.progress == 0.0

    def test_rejects_nonpositive_step(self) -> None:
        """A zero step would never grow."""
        with pytest.raises(ValueError):
            GrowthClock(step=0.0)


class TestSceneClock:
    """Tests for global animation time."""

    def test_advance_accumulates(self) -> None:
        """Each advance adds one time step and counts a frame."""
        clock = SceneClock(time_step=0.016)
        for _ in range(10):
            clock.advance()
        assert clock.time == pytest.approx(0.16)
        assert clock.frame == 10

    def test_reset(self) -> None:
        """Reset zeroes time and frame count."""
        clock = SceneClock(time_step=0.016)
        clock.advance()
        clock.reset()
        assert clock.time == 0.0
        assert clock.frame == 0

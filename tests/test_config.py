"""
Tests for colors, gradients and configuration validation.
"""

import pytest

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


class TestColor:
    """Tests for the RGB color type."""

    def test_to_rgb_scales_channels(self) -> None:
        """Channels are mapped from [0, 255] to [0, 1]."""
        assert Color(255, 0, 51).to_rgb() == pytest.approx((1.0, 0.0, 0.2))

    def test_to_rgba_clips_alpha(self) -> None:
        """Alpha outside [0, 1] is clipped."""
        assert Color(0, 0, 0).to_rgba(1.7)[3] == 1.0
        assert Color(0, 0, 0).to_rgba(-0.2)[3] == 0.0

    def test_lerp_endpoints(self) -> None:
        """t=0 gives self and t=1 gives the other color."""
        a, b = Color(10, 20, 30), Color(110, 220, 130)
        assert a.lerp(b, 0.0) == a
        assert a.lerp(b, 1.0) == b
        assert a.lerp(b, 0.5) == Color(60, 120, 80)


class TestColorGradient:
    """Tests for the depth gradient."""

    def test_length_and_endpoints(self) -> None:
        """max_depth + 1 colors from trunk to leaf."""
        config = SceneConfig()
        gradient = config.make_gradient()
        assert len(gradient) == config.growth.max_depth + 1
        assert gradient[0] == config.palette.trunk
        assert gradient[len(gradient) - 1] == pytest.approx(config.palette.leaf)

    def test_monotonic_channels(self) -> None:
        """Green rises steadily from trunk brown to leaf green."""
        gradient = ColorGradient(Color(70, 40, 20), Color(144, 238, 144), 10)
        greens = [c.g for c in gradient]
        assert greens == sorted(greens)

    def test_too_few_steps(self) -> None:
        """A gradient needs two ends."""
        with pytest.raises(ValueError):
            ColorGradient(Color(0, 0, 0), Color(255, 255, 255), 1)


class TestValidation:
    """Tests for eager configuration checks."""

    def test_max_depth_positive(self) -> None:
        with pytest.raises(ValueError, match="max_depth"):
            GrowthConfig(max_depth=0)

    def test_growth_speed_positive(self) -> None:
        with pytest.raises(ValueError, match="growth_speed"):
            GrowthConfig(growth_speed=0.0)

    def test_spawn_probability_range(self) -> None:
        with pytest.raises(ValueError, match="spawn_probability"):
            LeafConfig(spawn_probability=1.5)

    def test_fade_rate_positive(self) -> None:
        with pytest.raises(ValueError, match="fade_rate"):
            LeafConfig(fade_rate=0.0)

    def test_zoom_duration_positive(self) -> None:
        with pytest.raises(ValueError, match="duration"):
            ZoomConfig(duration=0.0)

    def test_time_step_positive(self) -> None:
        with pytest.raises(ValueError, match="time_step"):
            SceneConfig(time_step=-0.016)

    def test_palette_channel_range(self) -> None:
        with pytest.raises(ValueError, match="trunk"):
            Palette(trunk=Color(300, 0, 0))


class TestPresets:
    """Tests for named presets."""

    def test_default_keeps_tuned_pacing(self) -> None:
        """The default scene keeps the hand-tuned constants."""
        config = get_preset("default")
        assert config.growth.max_depth == 9
        assert config.growth.growth_speed == 0.0006
        assert config.zoom.duration == 7.0
        assert config.leaves.max_falling_leaves == 45

    def test_fast_grows_quicker(self) -> None:
        assert get_preset("fast").growth.growth_speed > get_preset("default").growth.growth_speed

    def test_unknown_preset(self) -> None:
        with pytest.raises(ValueError, match="Unknown preset"):
            get_preset("bonsai")

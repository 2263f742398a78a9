"""
One-shot camera zoom animation.

Two states, Idle and Active. Activation is only accepted once the tree is
fully grown. While active, each frame advances the zoom clock and derives

    alpha   = clamp(time / duration, 0, 1)
    cyc     = sin(alpha * pi)             # 0 -> 1 -> 0
    scale   = 1 + zoom_scale * cyc
    focus_y = lerp(height / 2, height * focus_ratio, cyc)

The view is scaled about the screen center while the focus point rises
toward the canopy and back. The animator returns to Idle on its own once
alpha reaches 1.
"""

from dataclasses import dataclass
import math

from grove.config import ZoomConfig
from grove.surface import Surface

IDLE = "idle"
ACTIVE = "active"


@dataclass(frozen=True)
class ZoomFrame:
    """Camera parameters for a single frame."""
    alpha: float
    cyc: float
    scale: float
    focus_y: float

    def apply(self, surface: Surface, width: float, height: float) -> None:
        """Translate to center, scale, then move the focus point to center."""
        surface.translate(width / 2, height / 2)
        surface.scale(self.scale)
        surface.translate(-width / 2, -self.focus_y)


class ZoomAnimator:
    """Idle/Active state machine driving the zoom transform."""

    def __init__(self, config: ZoomConfig, time_step: float) -> None:
        self.config = config
        self.time_step = time_step
        self.active = False
        self.time = 0.0

    @property
    def state(self) -> str:
        return ACTIVE if self.active else IDLE

    def activate(self, growth: float) -> bool:
        """Start the animation; ignored until growth reaches 1."""
        if growth < 1.0:
            return False
        self.active = True
        self.time = 0.0
        return True

    def cancel(self) -> None:
        self.active = False
        self.time = 0.0

    def frame_at(self, time: float, height: float) -> ZoomFrame:
        """Camera parameters at `time` seconds after activation."""
        alpha = min(1.0, max(0.0, time / self.config.duration))
        cyc = math.sin(alpha * math.pi)
        base_y = height / 2
        top_y = height * self.config.focus_ratio
        return ZoomFrame(
            alpha=alpha,
            cyc=cyc,
            scale=1.0 + self.config.scale * cyc,
            focus_y=base_y + (top_y - base_y) * cyc,
        )

    def step(self, height: float) -> ZoomFrame | None:
        """
        Advance one frame.

        Returns the frame's camera parameters, or None while idle. The
        frame that reaches alpha = 1 is still returned; the animator is
        idle afterwards.
        """
        if not self.active:
            return None

        self.time += self.time_step
        frame = self.frame_at(self.time, height)
        if frame.alpha >= 1.0:
            self.active = False
        return frame

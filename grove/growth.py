"""
Frame clocks for the scene.

GrowthClock: progress in [0, 1], advanced by a fixed step per frame and
    saturating at exactly 1.0. Gates recursion depth and branch fade-in.
SceneClock: GlobalTime, advanced by a fixed step per frame without bound.
    Feeds every sinusoidal sway term.

Both are reset only on scene restart.
"""

from dataclasses import dataclass


@dataclass
class GrowthClock:
    """Monotonic growth progress, 0 = seed and 1 = fully grown tree."""

    step: float
    progress: float = 0.0

    def __post_init__(self) -> None:
        if self.step <= 0:
            raise ValueError("Growth step must be positive")

    def advance(self) -> float:
        """Move one frame forward; no-op once saturated."""
        self.progress = min(1.0, self.progress + self.step)
        return self.progress

    def reset(self) -> None:
        self.progress = 0.0

    @property
    def is_complete(self) -> bool:
        return self.progress >= 1.0


@dataclass
class SceneClock:
    """Global animation time."""

    time_step: float
    time: float = 0.0
    frame: int = 0

    def advance(self) -> float:
        self.time += self.time_step
        self.frame += 1
        return self.time

    def reset(self) -> None:
        self.time = 0.0
        self.frame = 0

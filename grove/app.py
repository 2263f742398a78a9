"""
Matplotlib host for the scene.

Interactive mode wraps a figure in a FuncAnimation loop and maps keys to
scene commands:

    1   Bézier demo mode (randomizes the curves)
    2   tree mode (restarts the tree)
    r   restart the tree / re-randomize the demo
    s   save a PNG screenshot of the current frame
    z   zoom toward the tree (only once fully grown)

Headless helpers render a fixed number of frames to a RecordingSurface or
straight to a PNG.
"""

import time

import numpy as np
import matplotlib.pyplot as plt
import matplotlib.animation as animation

from grove.config import SceneConfig
from grove.demo import CurveDemo
from grove.scene import FrameStats, Scene
from grove.surface import MatplotlibSurface, RecordingSurface, Surface

MODE_DEMO = 1
MODE_TREE = 2

MODE_NAMES = {MODE_DEMO: "Bézier DEMO", MODE_TREE: "Tree"}
SCREENSHOT_NAMES = {MODE_DEMO: "bezier_demo.png", MODE_TREE: "growing_tree.png"}

# Keys handled by GroveApp.on_key_press
APP_KEYS = ("1", "2", "r", "s", "z")


# =============================================================================
# HEADLESS RENDERING
# =============================================================================

def render_frames(
    scene: Scene,
    num_frames: int,
    surface: Surface | None = None,
) -> list[FrameStats]:
    """Tick the scene `num_frames` times and collect per-frame stats."""
    if surface is None:
        surface = RecordingSurface(scene.width, scene.height)
    return [scene.tick(surface) for _ in range(num_frames)]


def summarize(stats: list[FrameStats]) -> dict[str, float]:
    """Scalar summary of a headless run."""
    if not stats:
        return {}
    last = stats[-1]
    return {
        "Frames": last.frame,
        "Time": last.time,
        "Growth": last.growth,
        "Segments": last.segments,
        "PeakSegments": max(s.segments for s in stats),
        "FallingLeaves": last.falling_leaves,
        "PeakFallingLeaves": max(s.falling_leaves for s in stats),
        "Spawned": sum(s.spawned for s in stats),
        "Exited": sum(s.exited for s in stats),
        "Faded": sum(s.faded for s in stats),
    }


def print_summary(stats: list[FrameStats]) -> None:
    """Print a formatted summary table to stdout."""
    summary = summarize(stats)
    print("\n" + "=" * 40)
    print("RENDER SUMMARY")
    print("=" * 40)
    for key, value in summary.items():
        if isinstance(value, int):
            print(f"{key:20s}: {value:>10d}")
        else:
            print(f"{key:20s}: {value:>10.3f}")
    print("=" * 40)


def make_figure(width: float, height: float, dpi: int = 100) -> tuple[plt.Figure, plt.Axes]:
    """A borderless figure whose single Axes spans the whole canvas."""
    fig = plt.figure(figsize=(width / dpi, height / dpi), dpi=dpi)
    ax = fig.add_axes([0, 0, 1, 1])
    return fig, ax


def save_frame(
    filepath: str,
    scene: Scene,
    num_frames: int = 1,
    dpi: int = 100,
) -> list[FrameStats]:
    """Advance the scene `num_frames` frames and save the last one as an image."""
    fig, ax = make_figure(scene.width, scene.height, dpi)
    surface = MatplotlibSurface(ax, scene.width, scene.height)
    stats = render_frames(scene, num_frames, surface)
    surface.flush()
    fig.savefig(filepath, dpi=dpi, facecolor=fig.get_facecolor())
    plt.close(fig)
    print(f"Saved to {filepath}")
    return stats


def split_seed(seed: int | None) -> tuple[np.random.SeedSequence, np.random.SeedSequence]:
    """Independent (scene, demo) seed streams derived from one user seed."""
    scene_seed, demo_seed = np.random.SeedSequence(seed).spawn(2)
    return scene_seed, demo_seed


def release_default_keys(keys=APP_KEYS) -> None:
    """
    Unbind `keys` from matplotlib's navigation keymaps.

    The defaults map 's' to the save dialog and 'r' to home, which would
    fire alongside our own handlers.
    """
    for name in plt.rcParams:
        if name.startswith("keymap."):
            bound = plt.rcParams[name]
            if any(key in bound for key in keys):
                plt.rcParams[name] = [k for k in bound if k not in keys]


# =============================================================================
# INTERACTIVE APP
# =============================================================================

class GroveApp:
    """Interactive window: scene + demo + key dispatch + status overlay."""

    def __init__(
        self,
        config: SceneConfig | None = None,
        width: float = 960,
        height: float = 720,
        seed: int | None = None,
        interval: int = 16,
    ) -> None:
        scene_seed, demo_seed = split_seed(seed)
        self.rng = np.random.default_rng(demo_seed)
        self.scene = Scene(config, width, height, seed=scene_seed)
        self.demo = CurveDemo()
        self.demo.randomize(width, height, self.rng)
        self.mode = MODE_TREE

        self.fig, self.ax = make_figure(width, height)
        self.surface = MatplotlibSurface(self.ax, width, height)
        self.status = self.fig.text(
            0.01, 0.99, "", color="white", fontsize=9,
            verticalalignment="top", family="monospace",
        )

        self._fps = 0
        self._frame_count = 0
        self._last_fps_time = time.perf_counter()

        release_default_keys()
        self.fig.canvas.mpl_connect('key_press_event', self.on_key_press)
        self.fig.canvas.mpl_connect('resize_event', self.on_resize)
        self.animation = animation.FuncAnimation(
            self.fig, self.animate, interval=interval, blit=False,
            cache_frame_data=False,
        )

    # -- commands -------------------------------------------------------------

    def set_mode(self, mode: int) -> None:
        if mode not in MODE_NAMES:
            raise ValueError(f"Unknown mode: {mode}")
        self.mode = mode
        if mode == MODE_DEMO:
            self.demo.randomize(self.scene.width, self.scene.height, self.rng)
            self.scene.zoom.cancel()
        else:
            self.scene.reset()

    def restart(self) -> None:
        if self.mode == MODE_TREE:
            self.scene.reset()
        else:
            self.demo.randomize(self.scene.width, self.scene.height, self.rng)

    def zoom(self) -> bool:
        if self.mode != MODE_TREE:
            return False
        return self.scene.activate_zoom()

    def screenshot(self, filepath: str | None = None) -> str:
        if filepath is None:
            filepath = SCREENSHOT_NAMES[self.mode]
        self.fig.savefig(filepath, facecolor=self.fig.get_facecolor())
        print(f"Saved to {filepath}")
        return filepath

    # -- event handlers -------------------------------------------------------

    def on_key_press(self, event) -> None:
        key = (event.key or "").lower()
        actions = {
            '1': lambda: self.set_mode(MODE_DEMO),
            '2': lambda: self.set_mode(MODE_TREE),
            'r': self.restart,
            's': self.screenshot,
            'z': self.zoom,
        }
        if key in actions:
            actions[key]()

    def on_resize(self, event) -> None:
        width, height = event.width, event.height
        if width <= 0 or height <= 0:
            return
        self.surface.resize(width, height)
        self.scene.resize(width, height)

    # -- frame loop -----------------------------------------------------------

    def _update_fps(self) -> None:
        self._frame_count += 1
        now = time.perf_counter()
        if now - self._last_fps_time >= 1.0:
            self._fps = self._frame_count
            self._frame_count = 0
            self._last_fps_time = now

    def animate(self, frame):
        if self.mode == MODE_TREE:
            self.scene.tick(self.surface)
        else:
            self.scene.clock.advance()
            self.demo.step()
            self.demo.draw(self.surface, self.scene.width, self.scene.height)

        self.surface.flush()
        self._update_fps()
        self.status.set_text(f"Mode: {MODE_NAMES[self.mode]}   FPS: {self._fps}")
        return self.surface.artists + [self.status]

    def run(self) -> None:
        plt.show()

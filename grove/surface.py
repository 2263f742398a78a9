"""
Immediate-mode 2D drawing surface.

The scene never touches matplotlib directly. It issues path, stroke and
fill commands against a Surface, which keeps a stack of affine transforms
(translate / rotate / scale, save / restore) and hands finished commands,
already in screen coordinates, to a backend:

- RecordingSurface: keeps DrawCommand records (headless runs, tests)
- MatplotlibSurface: batches each frame into one PathCollection on an Axes

Screen coordinates follow the usual raster convention: origin top-left,
y growing downward, positive rotation turning clockwise on screen.
"""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass, field
import math

import numpy as np
import matplotlib.pyplot as plt
from matplotlib.collections import PathCollection
from matplotlib.path import Path

from grove.config import Color

TRANSPARENT = (0.0, 0.0, 0.0, 0.0)


# =============================================================================
# PATH BUILDER
# =============================================================================

class PathBuilder:
    """
    Accumulates vertices and matplotlib path codes in local coordinates.

    Quadratic and cubic segments map onto Path.CURVE3 / Path.CURVE4, so
    backends can render true Bézier curves instead of polylines.
    """

    def __init__(self) -> None:
        self.vertices: list[tuple[float, float]] = []
        self.codes: list[int] = []

    def move_to(self, x: float, y: float) -> "PathBuilder":
        self.vertices.append((x, y))
        self.codes.append(Path.MOVETO)
        return self

    def line_to(self, x: float, y: float) -> "PathBuilder":
        self.vertices.append((x, y))
        self.codes.append(Path.LINETO)
        return self

    def quad_to(self, cx: float, cy: float, x: float, y: float) -> "PathBuilder":
        self.vertices.extend([(cx, cy), (x, y)])
        self.codes.extend([Path.CURVE3, Path.CURVE3])
        return self

    def cubic_to(
        self, c1x: float, c1y: float, c2x: float, c2y: float, x: float, y: float
    ) -> "PathBuilder":
        self.vertices.extend([(c1x, c1y), (c2x, c2y), (x, y)])
        self.codes.extend([Path.CURVE4, Path.CURVE4, Path.CURVE4])
        return self

    def close(self) -> "PathBuilder":
        start = self.vertices[0] if self.vertices else (0.0, 0.0)
        self.vertices.append(start)
        self.codes.append(Path.CLOSEPOLY)
        return self

    def __len__(self) -> int:
        return len(self.vertices)


# =============================================================================
# DRAW COMMANDS
# =============================================================================

@dataclass
class DrawCommand:
    """
    One finished drawing operation in screen coordinates.

    `tag` names what was drawn ("branch", "leaf", "seed", ...) and `depth`
    carries the recursion depth for branch and leaf commands.
    """
    kind: str  # "stroke", "fill", "circle" or "clear"
    vertices: np.ndarray = field(default_factory=lambda: np.zeros((0, 2)))
    codes: list[int] = field(default_factory=list)
    rgba: tuple[float, float, float, float] = (0.0, 0.0, 0.0, 1.0)
    width: float = 0.0
    radius: float = 0.0
    tag: str = ""
    depth: int | None = None

    @property
    def end_point(self) -> np.ndarray:
        return self.vertices[-1]


# =============================================================================
# SURFACE BASE
# =============================================================================

def _translation(dx: float, dy: float) -> np.ndarray:
    return np.array([[1.0, 0.0, dx], [0.0, 1.0, dy], [0.0, 0.0, 1.0]])


def _rotation(angle: float) -> np.ndarray:
    c, s = math.cos(angle), math.sin(angle)
    return np.array([[c, -s, 0.0], [s, c, 0.0], [0.0, 0.0, 1.0]])


def _scaling(sx: float, sy: float) -> np.ndarray:
    return np.array([[sx, 0.0, 0.0], [0.0, sy, 0.0], [0.0, 0.0, 1.0]])


class Surface:
    """
    Transform stack plus drawing entry points.

    Subclasses implement `_emit` to consume DrawCommands.
    """

    def __init__(self, width: float, height: float) -> None:
        self.width = width
        self.height = height
        self._matrix = np.eye(3)
        self._camera = np.eye(3)
        self._stack: list[tuple[np.ndarray, np.ndarray]] = []

    # -- transform stack ------------------------------------------------------

    @property
    def matrix(self) -> np.ndarray:
        return self._matrix.copy()

    @property
    def depth(self) -> int:
        """Number of currently saved transform states."""
        return len(self._stack)

    def save(self) -> None:
        self._stack.append((self._matrix.copy(), self._camera.copy()))

    def restore(self) -> None:
        self._matrix, self._camera = self._stack.pop()

    @contextmanager
    def saved(self):
        """Scope a block of transforms: save on entry, restore on exit."""
        self.save()
        try:
            yield self
        finally:
            self.restore()

    def reset_transform(self) -> None:
        self._matrix = np.eye(3)
        self._camera = np.eye(3)
        self._stack.clear()

    def translate(self, dx: float, dy: float) -> None:
        self._matrix = self._matrix @ _translation(dx, dy)

    def rotate(self, angle: float) -> None:
        self._matrix = self._matrix @ _rotation(angle)

    def scale(self, sx: float, sy: float | None = None) -> None:
        self._matrix = self._matrix @ _scaling(sx, sx if sy is None else sy)

    def set_camera(self) -> None:
        """
        Mark the current transform as the camera.

        scene_point() reports positions relative to this mark, so points
        captured under a zoom transform can be redrawn under a different one.
        """
        self._camera = self._matrix.copy()

    # -- point queries --------------------------------------------------------

    def transform_point(self, x: float, y: float) -> np.ndarray:
        """Map a local point to screen coordinates."""
        p = self._matrix @ np.array([x, y, 1.0])
        return p[:2]

    def transform_vertices(self, vertices) -> np.ndarray:
        pts = np.asarray(vertices, dtype=float).reshape(-1, 2)
        homog = np.hstack([pts, np.ones((len(pts), 1))])
        return (homog @ self._matrix.T)[:, :2]

    def current_origin(self) -> np.ndarray:
        """Screen position of the local origin."""
        return self.transform_point(0.0, 0.0)

    def scene_point(self, x: float = 0.0, y: float = 0.0) -> np.ndarray:
        """Map a local point into camera-independent scene coordinates."""
        p = np.linalg.solve(self._camera, self._matrix @ np.array([x, y, 1.0]))
        return p[:2]

    def scale_factor(self) -> float:
        """Uniform scale of the current transform (for widths and radii)."""
        return math.sqrt(abs(np.linalg.det(self._matrix[:2, :2])))

    # -- drawing --------------------------------------------------------------

    def clear(self, color: Color) -> None:
        self._emit(DrawCommand(kind="clear", rgba=color.to_rgba(1.0), tag="background"))

    def stroke(
        self,
        path: PathBuilder,
        color: Color,
        alpha: float = 1.0,
        width: float = 1.0,
        tag: str = "",
        depth: int | None = None,
    ) -> None:
        self._emit(DrawCommand(
            kind="stroke",
            vertices=self.transform_vertices(path.vertices),
            codes=list(path.codes),
            rgba=color.to_rgba(alpha),
            width=width * self.scale_factor(),
            tag=tag,
            depth=depth,
        ))

    def fill(
        self,
        path: PathBuilder,
        color: Color,
        alpha: float = 1.0,
        tag: str = "",
        depth: int | None = None,
    ) -> None:
        self._emit(DrawCommand(
            kind="fill",
            vertices=self.transform_vertices(path.vertices),
            codes=list(path.codes),
            rgba=color.to_rgba(alpha),
            tag=tag,
            depth=depth,
        ))

    def circle(
        self,
        center: tuple[float, float],
        radius: float,
        color: Color,
        alpha: float = 1.0,
        tag: str = "",
    ) -> None:
        self._emit(DrawCommand(
            kind="circle",
            vertices=self.transform_vertices([center]),
            rgba=color.to_rgba(alpha),
            radius=radius * self.scale_factor(),
            tag=tag,
        ))

    def resize(self, width: float, height: float) -> None:
        self.width = width
        self.height = height

    def flush(self) -> None:
        """Present everything drawn since the last clear. No-op by default."""

    def _emit(self, command: DrawCommand) -> None:
        raise NotImplementedError


# =============================================================================
# BACKENDS
# =============================================================================

class RecordingSurface(Surface):
    """Keeps every command of the current frame; `clear` starts a new frame."""

    def __init__(self, width: float = 800, height: float = 600) -> None:
        super().__init__(width, height)
        self.commands: list[DrawCommand] = []

    def _emit(self, command: DrawCommand) -> None:
        if command.kind == "clear":
            self.commands = []
        self.commands.append(command)

    def by_tag(self, tag: str) -> list[DrawCommand]:
        return [c for c in self.commands if c.tag == tag]

    def depths(self, tag: str = "branch") -> set[int]:
        """Distinct recursion depths that produced commands with `tag`."""
        return {c.depth for c in self.commands if c.tag == tag and c.depth is not None}


class MatplotlibSurface(Surface):
    """
    Renders commands as matplotlib artists on a single Axes.

    The Axes is configured to screen coordinates (y flipped) and filled
    edge to edge. Commands are buffered in draw order and turned into a
    single PathCollection by `flush`; `clear` drops the previous frame's
    collection and buffer.
    """

    def __init__(self, ax: plt.Axes, width: float, height: float) -> None:
        super().__init__(width, height)
        self.ax = ax
        self._pending: list[DrawCommand] = []
        self._collection: PathCollection | None = None
        self._points_per_unit = 1.0
        self._configure_axes()

    def _configure_axes(self) -> None:
        self.ax.set_xlim(0, self.width)
        self.ax.set_ylim(self.height, 0)  # Flip Y for screen coords
        self.ax.set_aspect('equal')
        self.ax.axis('off')
        self._points_per_unit = self._measure_points_per_unit()

    def resize(self, width: float, height: float) -> None:
        super().resize(width, height)
        self._configure_axes()

    def _measure_points_per_unit(self) -> float:
        """Convert data-unit line widths to matplotlib points."""
        fig = self.ax.figure
        extent = self.ax.get_window_extent()
        if self.width <= 0 or extent.width <= 0:
            return 1.0
        return extent.width * 72.0 / fig.dpi / self.width

    def _emit(self, command: DrawCommand) -> None:
        if command.kind == "clear":
            self._remove_collection()
            self._pending = []
            self._points_per_unit = self._measure_points_per_unit()
            self.ax.set_facecolor(command.rgba)
            self.ax.figure.set_facecolor(command.rgba)
            return
        self._pending.append(command)

    def _remove_collection(self) -> None:
        if self._collection is not None:
            self._collection.remove()
            self._collection = None

    def flush(self) -> None:
        """Replace the displayed frame with the commands drawn since `clear`."""
        self._remove_collection()
        if not self._pending:
            return

        paths, faces, edges, widths = [], [], [], []
        for command in self._pending:
            if command.kind == "circle":
                paths.append(Path.circle(command.vertices[0], command.radius))
            else:
                paths.append(Path(command.vertices, command.codes))

            if command.kind == "stroke":
                faces.append(TRANSPARENT)
                edges.append(command.rgba)
                widths.append(command.width * self._points_per_unit)
            else:
                faces.append(command.rgba)
                edges.append(TRANSPARENT)
                widths.append(0.0)

        self._collection = PathCollection(
            paths,
            facecolors=faces,
            edgecolors=edges,
            linewidths=widths,
            capstyle='round',
            joinstyle='round',
            transform=self.ax.transData,
        )
        self.ax.add_collection(self._collection, autolim=False)
        self._pending = []

    @property
    def artists(self) -> list:
        return [] if self._collection is None else [self._collection]

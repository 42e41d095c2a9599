"""
MandalaRotate - Mandala Engine
Turns raw pointer samples into symmetric mandala points and decides what
each frame draws.

Two storage tiers:
  points  - live PointBuffer, drawn point by point every frame
  surface - persistent RasterSurface the live points are baked into

Input path:  pointer sample -> interpolate -> expand -> clamp -> points
Render path: render_tick() bakes and evicts when points exceed capacity,
             then the renderer paints surface followed by the live points.
"""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional

from config import Config
from logging_utils import log_event
from point_buffer import PointBuffer, PointView
from polar_point import Point
from raster_surface import ExportResult, RasterSurface
from stroke_interpolator import interpolate, interpolation_count
from symmetry import expand_clamped

DEFAULT_SEGMENTS = 8
DEFAULT_BORDER = 4
DEFAULT_CAPACITY = 3000
DEFAULT_SAVE_NAME = "Mandala"


class DrawState(Enum):
    IDLE = "idle"            # No pointer down
    DRAWING = "drawing"      # Pointer down, last_sample tracked


@dataclass
class EngineStats:
    """Running counters for one engine session"""
    samples: int = 0
    points_generated: int = 0
    bake_passes: int = 0
    points_evicted: int = 0
    saves: int = 0
    failed_saves: int = 0


@dataclass(frozen=True)
class FrameContents:
    """What the renderer paints this frame: surface first, then live points"""
    surface: RasterSurface
    live: PointView
    baked: bool


class MandalaEngine:
    """
    Owns the mandala state for one session.

    One instance is shared by the input handler and the render driver;
    pass it to both rather than reaching for a module global.
    """

    def __init__(self, width: int, height: int, segments: int = DEFAULT_SEGMENTS, *,
                 border: int = DEFAULT_BORDER,
                 capacity: int = DEFAULT_CAPACITY,
                 radius_bound: Optional[float] = None,
                 standard_quadrants: bool = False,
                 output_dir: Optional[Path] = None):
        if segments <= 0:
            raise ValueError(f"segments must be a positive integer, got {segments}")
        if width <= 0 or height <= 0:
            raise ValueError(f"canvas size must be positive, got {width}x{height}")
        if border < 0:
            raise ValueError(f"border must not be negative, got {border}")
        if capacity <= 0:
            raise ValueError(f"capacity must be positive, got {capacity}")
        if radius_bound is not None and radius_bound <= 0:
            raise ValueError(f"radius_bound must be positive, got {radius_bound}")

        self.width = int(width)
        self.height = int(height)
        self.segments = int(segments)
        self.border = int(border)
        self.capacity = int(capacity)
        self.standard_quadrants = standard_quadrants
        self.output_dir = Path(output_dir) if output_dir else None
        self._radius_bound = radius_bound

        self.points = PointBuffer()
        self.surface = RasterSurface(self.width, self.height, self.border)
        self.state = DrawState.IDLE
        self.last_sample: Optional[Point] = None
        self.stats = EngineStats()

        log_event("INFO", "Engine", "Created", size=f"{self.width}x{self.height}",
                  segments=self.segments, capacity=self.capacity,
                  radius=self.radius_bound)
        if self.segments % 2:
            log_event("WARNING", "Engine", "Odd segment count leaves gaps between mirrored sectors",
                      segments=self.segments)

    @classmethod
    def from_config(cls, config: Config) -> "MandalaEngine":
        radius = config.symmetry.radius_bound or None
        return cls(
            config.canvas.width,
            config.canvas.height,
            config.symmetry.segments,
            border=config.canvas.border,
            capacity=config.buffer.capacity,
            radius_bound=radius,
            standard_quadrants=config.geometry.standard_quadrant_angles,
            output_dir=Path(config.export.output_dir) if config.export.output_dir else None,
        )

    @property
    def radius_bound(self) -> float:
        if self._radius_bound is not None:
            return float(self._radius_bound)
        return min(self.width, self.height) / 2

    def to_centered(self, x: float, y: float) -> Point:
        """Canvas-local coordinates -> origin-centred coordinates."""
        return Point(x - self.width // 2, y - self.height // 2)

    # ------------------------------------------------------------------
    # Input path
    # ------------------------------------------------------------------

    def add_point(self, x: float, y: float) -> int:
        """Expand one origin-centred sample into the buffer; returns points admitted."""
        copies = expand_clamped(Point(x, y), self.segments, self.radius_bound,
                                standard_quadrants=self.standard_quadrants)
        self.points.extend(copies)
        self.stats.points_generated += len(copies)
        return len(copies)

    def pointer_down(self) -> None:
        self.state = DrawState.DRAWING
        self.last_sample = None
        log_event("DEBUG", "Engine", "Pointer down")

    def pointer_move(self, x: float, y: float) -> int:
        """Handle a canvas-local pointer position; ignored unless drawing."""
        if self.state is not DrawState.DRAWING:
            return 0

        current = self.to_centered(x, y)
        self.stats.samples += 1
        admitted = 0
        if self.last_sample is not None:
            n = interpolation_count(self.last_sample, current)
            for between in interpolate(self.last_sample, current, n):
                admitted += self.add_point(between.x, between.y)
        admitted += self.add_point(current.x, current.y)
        self.last_sample = current
        return admitted

    def pointer_up(self) -> None:
        """End the stroke and flush every live point into the surface."""
        self.state = DrawState.IDLE
        self.last_sample = None
        flushed = self.flush()
        log_event("DEBUG", "Engine", "Pointer up", flushed=flushed)

    def handle_sample(self, x: float, y: float, pressed: bool) -> int:
        """Consume one (x, y, pressed) sample from the windowing layer."""
        if pressed:
            if self.state is DrawState.IDLE:
                self.pointer_down()
            return self.pointer_move(x, y)
        if self.state is DrawState.DRAWING:
            self.pointer_up()
        return 0

    # ------------------------------------------------------------------
    # Render path
    # ------------------------------------------------------------------

    def _bake(self) -> PointView:
        view = self.points.bake_all_into(self.surface)
        self.stats.bake_passes += 1
        return view

    def flush(self) -> int:
        """Bake all live points, then evict exactly the baked ones."""
        view = self._bake()
        evicted = self.points.evict_from_view(view, len(view))
        self.stats.points_evicted += evicted
        return evicted

    def render_tick(self) -> FrameContents:
        """
        Per-frame policy: past capacity, bake the whole buffer and evict only
        the oldest `capacity` points. The rest stays live for later frames.
        """
        baked = False
        if self.points.size() > self.capacity:
            view = self._bake()
            evicted = self.points.evict_from_view(view, self.capacity)
            self.stats.points_evicted += evicted
            baked = True
            log_event("DEBUG", "Engine", "Baked", baked=len(view), evicted=evicted,
                      live=self.points.size())
        return FrameContents(surface=self.surface, live=self.points.snapshot(), baked=baked)

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def clear(self) -> None:
        """Reset to a blank surface and an empty buffer at the same geometry."""
        self.surface.reset(self.width, self.height, self.border)
        self.points.clear()
        # A drag in progress keeps drawing; its next sample starts a fresh segment
        self.last_sample = None
        log_event("INFO", "Engine", "Cleared")

    def save(self, name: str = DEFAULT_SAVE_NAME) -> ExportResult:
        """Flush everything and export the surface as <name>.bmp."""
        self.flush()
        target = self.output_dir / name if self.output_dir else Path(name)
        result = self.surface.export_bitmap(target)
        if result.ok:
            self.stats.saves += 1
            log_event("INFO", "Engine", "Saved", path=result.path)
        else:
            self.stats.failed_saves += 1
            log_event("WARNING", "Engine", "Save failed", path=result.path, error=result.error)
        return result

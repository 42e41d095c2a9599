"""
MandalaRotate - Raster Surface
Persistent pixel grid that live points are baked into.

The grid is (height + 2*border) rows by (width + 2*border) columns of RGB,
white background, black strokes. The mandala origin sits at
(border + width // 2, border + height // 2).
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Optional, Union

import numpy as np
from PIL import Image

from polar_point import Point
from logging_utils import log_event

BACKGROUND_RGB = (255, 255, 255)
FOREGROUND_RGB = (0, 0, 0)
BITMAP_SUFFIX = ".bmp"


@dataclass(frozen=True)
class ExportResult:
    ok: bool
    path: Path
    error: Optional[str] = None


def pixel_offset(v):
    """Round half-up toward the pixel grid, truncating toward zero (scalar or array)."""
    return np.trunc(0.5 + np.asarray(v, dtype=np.float64)).astype(np.int64)


class RasterSurface:
    """Background image that points are permanently stamped into"""

    def __init__(self, width: int, height: int, border: int = 4):
        self.reset(width, height, border)

    def reset(self, width: int, height: int, border: int) -> None:
        """Reinitialise the whole grid to background at the given dimensions."""
        self.width = int(width)
        self.height = int(height)
        self.border = int(border)
        self._pixels = np.empty(
            (self.height + 2 * self.border, self.width + 2 * self.border, 3),
            dtype=np.uint8,
        )
        self._pixels[:, :] = BACKGROUND_RGB

    @property
    def grid_width(self) -> int:
        return self._pixels.shape[1]

    @property
    def grid_height(self) -> int:
        return self._pixels.shape[0]

    @property
    def pixels(self) -> np.ndarray:
        """Live pixel array (rows, cols, rgb). Treat as read-only outside the engine."""
        return self._pixels

    def to_rgb_array(self) -> np.ndarray:
        return self._pixels.copy()

    def pixel_coords(self, p: Point) -> tuple[int, int]:
        """Grid column/row a point stamps to (may lie outside the grid)."""
        col = self.border + self.width // 2 + int(pixel_offset(p.x))
        row = self.border + self.height // 2 + int(pixel_offset(p.y))
        return col, row

    def stamp(self, p: Point) -> bool:
        """Set the pixel under p to foreground. Outside the grid is a no-op; returns whether it landed."""
        col, row = self.pixel_coords(p)
        if 0 <= col < self.grid_width and 0 <= row < self.grid_height:
            self._pixels[row, col] = FOREGROUND_RGB
            return True
        return False

    def stamp_many(self, points: Union[np.ndarray, Iterable[Point]]) -> int:
        """Vectorised stamp; returns how many points landed inside the grid."""
        if isinstance(points, np.ndarray):
            coords = points.reshape(-1, 2)
        elif hasattr(points, "to_array"):
            coords = points.to_array()
        else:
            coords = np.array([(p.x, p.y) for p in points], dtype=np.float64).reshape(-1, 2)

        if coords.shape[0] == 0:
            return 0

        cols = self.border + self.width // 2 + pixel_offset(coords[:, 0])
        rows = self.border + self.height // 2 + pixel_offset(coords[:, 1])
        inside = (cols >= 0) & (cols < self.grid_width) & (rows >= 0) & (rows < self.grid_height)
        self._pixels[rows[inside], cols[inside]] = FOREGROUND_RGB
        return int(np.count_nonzero(inside))

    def is_set(self, col: int, row: int) -> bool:
        if not (0 <= col < self.grid_width and 0 <= row < self.grid_height):
            return False
        return bool((self._pixels[row, col] == FOREGROUND_RGB).all())

    def stamped_count(self) -> int:
        return int(np.count_nonzero((self._pixels == FOREGROUND_RGB).all(axis=2)))

    def export_bitmap(self, path: Union[str, Path]) -> ExportResult:
        """Encode the grid as an uncompressed 24-bit BMP. Failures are reported, not raised."""
        target = Path(path)
        if target.suffix.lower() != BITMAP_SUFFIX:
            target = target.with_name(target.name + BITMAP_SUFFIX)

        try:
            image = Image.fromarray(self._pixels)
            image.save(target, format="BMP")
        except (OSError, ValueError) as e:
            log_event("ERROR", "Surface", "Bitmap export failed", path=target, error=e)
            return ExportResult(ok=False, path=target, error=str(e))

        log_event("INFO", "Surface", "Bitmap exported", path=target,
                  size=f"{self.grid_width}x{self.grid_height}")
        return ExportResult(ok=True, path=target)

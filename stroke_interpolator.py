"""
MandalaRotate - Stroke Interpolator
Fills the gap between two consecutive pointer samples so fast motion
does not leave holes in the stroke.
"""

import math
from typing import List

from polar_point import Point


def interpolation_count(a: Point, b: Point) -> int:
    """Chebyshev distance between two samples, rounded half-up."""
    return math.trunc(0.5 + max(abs(a.x - b.x), abs(a.y - b.y)))


def interpolate(a: Point, b: Point, n: int) -> List[Point]:
    """
    Return n points stepping across the x-span of a and b.

    x runs from min(a.x, b.x) in steps of span/n. y starts at the y of the
    endpoint carrying the smaller x (b on a tie) and moves monotonically
    toward the other endpoint's y.
    """
    if n <= 0:
        return []

    min_x = min(a.x, b.x)
    max_x = max(a.x, b.x)
    x_step = (max_x - min_x) / n

    min_y = min(a.y, b.y)
    max_y = max(a.y, b.y)
    y_step = (max_y - min_y) / n

    start_y = b.y if b.x == min_x else a.y
    if start_y != min_y:
        y_step = -y_step

    return [Point(min_x + x_step * i, start_y + i * y_step) for i in range(n)]

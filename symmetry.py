"""
MandalaRotate - Symmetry
Expands one input point into its rotational copies and clamps them to the disk.

Two families are generated per segment:
  near - the input mirrored across its nearest sector boundary, then rotated
  far  - the raw input rotated

With an even segment count the families interleave so each sector is the
mirror image of its neighbour.
"""

import math
from typing import List

from polar_point import Point, from_polar, rotate, to_polar


def expand(origin: Point, segments: int, *, standard_quadrants: bool = False) -> List[Point]:
    """
    Return the 2*segments symmetric copies of origin (before clamping).

    Order is near copy then far copy for each segment index. The caller
    validates segments > 0.
    """
    segment_angle = 2 * math.pi / segments
    original_angle = to_polar(origin, standard_quadrants=standard_quadrants).angle

    # Sector boundary nearest the input
    segment_index = math.floor(original_angle / segment_angle + 0.5)
    difference = segment_index * segment_angle - original_angle

    points: List[Point] = []
    for i in range(segments):
        points.append(rotate(origin, difference * 2 + segment_angle * i,
                             standard_quadrants=standard_quadrants))
        points.append(rotate(origin, segment_angle * i,
                             standard_quadrants=standard_quadrants))
    return points


def clamp(p: Point, radius_bound: float, *, standard_quadrants: bool = False) -> Point:
    """Project p onto the boundary circle when it lies outside radius_bound."""
    polar = to_polar(p, standard_quadrants=standard_quadrants)
    if polar.radius <= radius_bound:
        return p
    return from_polar(radius_bound, polar.angle)


def expand_clamped(origin: Point, segments: int, radius_bound: float, *,
                   standard_quadrants: bool = False) -> List[Point]:
    """expand() followed by clamp() on every copy."""
    return [
        clamp(p, radius_bound, standard_quadrants=standard_quadrants)
        for p in expand(origin, segments, standard_quadrants=standard_quadrants)
    ]

"""
MandalaRotate - Polar Point
Cartesian points with polar conversion and rotation about the mandala origin.

Coordinates are centred on the mandala origin, not on the screen origin.
Angles are in radians.
"""

import math
from dataclasses import dataclass

HALF_PI = math.pi / 2
TWO_PI = 2 * math.pi


@dataclass(frozen=True)
class Point:
    """Immutable cartesian point, origin at the mandala centre"""
    x: float
    y: float

    def __str__(self) -> str:
        return f"({self.x}, {self.y})"


@dataclass(frozen=True)
class PolarForm:
    """Polar representation (radius >= 0, angle in radians)"""
    radius: float
    angle: float


def to_polar(p: Point, *, standard_quadrants: bool = False) -> PolarForm:
    """
    Convert a point to polar form.

    The angle is atan(|y/x|) corrected per quadrant:
        x > 0, y >= 0  -> base
        x > 0, y < 0   -> base + 3*pi/2   (2*pi - base with standard_quadrants)
        x <= 0, y >= 0 -> pi - base
        x <= 0, y < 0  -> base + pi
    x == 0 takes base = pi/2, so the origin maps to angle pi/2.
    """
    x, y = p.x, p.y
    if x == 0:
        base = HALF_PI
    else:
        base = math.atan(abs(y / x))

    if x > 0:
        if y >= 0:
            angle = base
        elif standard_quadrants:
            angle = TWO_PI - base
        else:
            angle = base + 3 * HALF_PI
    else:
        if y >= 0:
            angle = math.pi - base
        else:
            angle = base + math.pi

    return PolarForm(radius=math.sqrt(x * x + y * y), angle=angle)


def from_polar(radius: float, angle: float) -> Point:
    return Point(radius * math.cos(angle), radius * math.sin(angle))


def rotate(p: Point, theta: float, *, standard_quadrants: bool = False) -> Point:
    """Rotate p about the origin by theta. The angle is not normalised."""
    polar = to_polar(p, standard_quadrants=standard_quadrants)
    return from_polar(polar.radius, polar.angle + theta)

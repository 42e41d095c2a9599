import math
import unittest

from polar_point import Point, PolarForm, from_polar, rotate, to_polar


class TestToPolar(unittest.TestCase):
    def test_positive_x_axis(self):
        polar = to_polar(Point(3.0, 0.0))
        self.assertAlmostEqual(polar.radius, 3.0, places=9)
        self.assertAlmostEqual(polar.angle, 0.0, places=9)

    def test_quadrant_corrections(self):
        cases = [
            (Point(1.0, 1.0), math.pi / 4),
            (Point(-1.0, 1.0), 3 * math.pi / 4),
            (Point(-1.0, -1.0), 5 * math.pi / 4),
        ]
        for p, expected in cases:
            with self.subTest(p=p):
                self.assertAlmostEqual(to_polar(p).angle, expected, places=9)
                self.assertAlmostEqual(to_polar(p).radius, math.sqrt(2), places=9)

    def test_zero_x_uses_half_pi_base(self):
        self.assertAlmostEqual(to_polar(Point(0.0, 2.0)).angle, math.pi / 2, places=9)
        self.assertAlmostEqual(to_polar(Point(0.0, -2.0)).angle, 3 * math.pi / 2, places=9)

    def test_origin_is_defined(self):
        polar = to_polar(Point(0.0, 0.0))
        self.assertEqual(polar.radius, 0.0)
        self.assertAlmostEqual(polar.angle, math.pi / 2, places=9)

    def test_quadrant_four_legacy_rule(self):
        base = math.atan(0.5)
        self.assertAlmostEqual(to_polar(Point(2.0, -1.0)).angle, base + 3 * math.pi / 2, places=9)

    def test_quadrant_four_standard_rule(self):
        base = math.atan(0.5)
        angle = to_polar(Point(2.0, -1.0), standard_quadrants=True).angle
        self.assertAlmostEqual(angle, 2 * math.pi - base, places=9)

    def test_returns_polar_form(self):
        self.assertIsInstance(to_polar(Point(1.0, 2.0)), PolarForm)


class TestFromPolarAndRotate(unittest.TestCase):
    SAMPLE_POINTS = [
        Point(3.0, 4.0),
        Point(-7.5, 2.25),
        Point(-0.5, -9.0),
        Point(12.0, -5.0),
        Point(0.0, 6.0),
        Point(-250.0, 0.0),
    ]

    def assertPointAlmostEqual(self, a: Point, b: Point, places: int = 9):
        self.assertAlmostEqual(a.x, b.x, places=places)
        self.assertAlmostEqual(a.y, b.y, places=places)

    def test_from_polar(self):
        self.assertPointAlmostEqual(from_polar(2.0, math.pi / 2), Point(0.0, 2.0))

    def test_round_trip_outside_quadrant_four(self):
        for p in self.SAMPLE_POINTS:
            if p.x > 0 and p.y < 0:
                continue
            with self.subTest(p=p):
                polar = to_polar(p)
                self.assertPointAlmostEqual(from_polar(polar.radius, polar.angle), p)

    def test_round_trip_all_quadrants_with_standard_rule(self):
        for p in self.SAMPLE_POINTS:
            with self.subTest(p=p):
                polar = to_polar(p, standard_quadrants=True)
                self.assertPointAlmostEqual(from_polar(polar.radius, polar.angle), p)

    def test_legacy_quadrant_four_reflects_across_diagonal(self):
        # base + 3*pi/2 lands on the reflection across y = -x
        self.assertPointAlmostEqual(rotate(Point(2.0, -1.0), 0.0), Point(1.0, -2.0))

    def test_rotate_quarter_turn(self):
        self.assertPointAlmostEqual(rotate(Point(5.0, 0.0), math.pi / 2), Point(0.0, 5.0))

    def test_rotation_composes(self):
        angles = [(0.3, 1.1), (2.5, -0.7), (4.0, 3.9), (-1.2, -2.2)]
        for p in self.SAMPLE_POINTS:
            for theta1, theta2 in angles:
                with self.subTest(p=p, theta1=theta1, theta2=theta2):
                    twice = rotate(rotate(p, theta1, standard_quadrants=True), theta2,
                                   standard_quadrants=True)
                    once = rotate(p, theta1 + theta2, standard_quadrants=True)
                    self.assertPointAlmostEqual(twice, once)

    def test_rotate_preserves_radius(self):
        for p in self.SAMPLE_POINTS:
            with self.subTest(p=p):
                rotated = rotate(p, 1.234)
                self.assertAlmostEqual(math.hypot(rotated.x, rotated.y), math.hypot(p.x, p.y), places=9)

    def test_point_is_immutable(self):
        p = Point(1.0, 2.0)
        with self.assertRaises(AttributeError):
            p.x = 5.0  # type: ignore[misc]


if __name__ == "__main__":
    unittest.main()

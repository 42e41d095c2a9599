import unittest

from polar_point import Point
from stroke_interpolator import interpolate, interpolation_count


class TestInterpolationCount(unittest.TestCase):
    def test_chebyshev_distance_rounded_half_up(self):
        cases = [
            (Point(0.0, 0.0), Point(10.0, 0.0), 10),
            (Point(0.0, 0.0), Point(3.4, -7.6), 8),
            (Point(0.0, 0.0), Point(2.5, 0.0), 3),
            (Point(-3.0, 2.0), Point(-3.0, 2.0), 0),
            (Point(0.0, 0.0), Point(0.4, 0.2), 0),
        ]
        for a, b, expected in cases:
            with self.subTest(a=a, b=b):
                self.assertEqual(interpolation_count(a, b), expected)
                self.assertEqual(interpolation_count(b, a), expected)


class TestInterpolate(unittest.TestCase):
    def assertPoints(self, actual, expected):
        self.assertEqual(len(actual), len(expected))
        for got, (x, y) in zip(actual, expected):
            self.assertAlmostEqual(got.x, x, places=9)
            self.assertAlmostEqual(got.y, y, places=9)

    def test_horizontal_run(self):
        points = interpolate(Point(0.0, 0.0), Point(10.0, 0.0), 10)
        self.assertPoints(points, [(float(i), 0.0) for i in range(10)])

    def test_starts_at_smaller_x_whichever_endpoint_it_is(self):
        forward = interpolate(Point(0.0, 0.0), Point(10.0, 0.0), 10)
        backward = interpolate(Point(10.0, 0.0), Point(0.0, 0.0), 10)
        self.assertEqual(forward, backward)

    def test_y_descends_from_left_endpoint(self):
        points = interpolate(Point(0.0, 10.0), Point(4.0, 0.0), 4)
        self.assertPoints(points, [(0.0, 10.0), (1.0, 7.5), (2.0, 5.0), (3.0, 2.5)])

    def test_y_ascends_from_left_endpoint(self):
        points = interpolate(Point(4.0, 8.0), Point(0.0, 0.0), 4)
        self.assertPoints(points, [(0.0, 0.0), (1.0, 2.0), (2.0, 4.0), (3.0, 6.0)])

    def test_vertical_tie_starts_at_second_endpoint(self):
        points = interpolate(Point(5.0, 0.0), Point(5.0, 4.0), 4)
        self.assertPoints(points, [(5.0, 4.0), (5.0, 3.0), (5.0, 2.0), (5.0, 1.0)])

    def test_endpoint_with_larger_x_is_excluded(self):
        points = interpolate(Point(0.0, 0.0), Point(6.0, 3.0), 6)
        self.assertNotIn(Point(6.0, 3.0), points)
        self.assertEqual(points[0], Point(0.0, 0.0))

    def test_non_positive_count_yields_nothing(self):
        self.assertEqual(interpolate(Point(0.0, 0.0), Point(10.0, 0.0), 0), [])
        self.assertEqual(interpolate(Point(0.0, 0.0), Point(10.0, 0.0), -3), [])

    def test_points_stay_inside_bounding_box(self):
        a, b = Point(-12.5, 40.0), Point(30.0, -7.25)
        n = interpolation_count(a, b)
        points = interpolate(a, b, n)
        self.assertEqual(len(points), n)
        for p in points:
            self.assertTrue(-12.5 <= p.x <= 30.0)
            self.assertTrue(-7.25 - 1e-9 <= p.y <= 40.0 + 1e-9)


if __name__ == "__main__":
    unittest.main()

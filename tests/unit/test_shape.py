import random
import sys
import unittest
from collections import Counter
from pathlib import Path

ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT / "packages" / "renderer"))

from chaosgame_renderer.models import Point, Shape


class ShapeTests(unittest.TestCase):
    def test_empty_corners_rejected(self):
        with self.assertRaises(ValueError):
            Shape([])

    def test_single_corner_always_selected(self):
        only = Point(3, 4)
        shape = Shape([only])
        self.assertTrue(all(shape.random_corner() == only for _ in range(50)))

    def test_triangle_corners(self):
        shape = Shape.triangle(249, 215.6)
        self.assertEqual(shape.corners, (Point(124.5, 0), Point(0, 215.6), Point(249, 215.6)))
        self.assertEqual(len(shape), 3)

    def test_uniform_corner_selection(self):
        shape = Shape.triangle(10, 10, rng=random.Random(1234))
        draws = 120_000
        counts = Counter(shape.random_corner() for _ in range(draws))
        self.assertEqual(set(counts), set(shape.corners))
        for corner in shape.corners:
            self.assertAlmostEqual(counts[corner] / draws, 1 / 3, delta=0.02)


if __name__ == "__main__":
    unittest.main()

"""
Rectangle painter tests: geometry invariants and the palette widening model.
"""

import random
import unittest

from torso_slide.canvas import Canvas
from torso_slide.rectangles import (
    BLUE,
    GREEN,
    PALETTE,
    RED,
    YELLOW,
    choose_palette_size,
    choose_rect_count,
    paint_rectangles,
    random_rect,
)


class ScriptedRandom(random.Random):
    """Returns queued values from random(); everything else is seeded."""

    def __init__(self, values):
        super().__init__(0)
        self.values = list(values)
        self.calls = 0

    def random(self):
        self.calls += 1
        return self.values.pop(0)


class TestRectangles(unittest.TestCase):

    def test_palette_order(self):
        self.assertEqual(PALETTE, [RED, BLUE, YELLOW, GREEN])

    def test_rect_bounds_and_minimum_size(self):
        rng = random.Random(1234)
        for _ in range(5000):
            rect = random_rect(rng, 768, 512)
            self.assertGreaterEqual(rect.width, 50)
            self.assertGreaterEqual(rect.height, 50)
            self.assertGreaterEqual(rect.x0, 0)
            self.assertGreaterEqual(rect.y0, 0)
            self.assertLessEqual(rect.x1, 768)
            self.assertLessEqual(rect.y1, 512)
            self.assertLess(rect.x0, 768 - 50)
            self.assertLess(rect.y0, 512 - 50)

    def test_rect_can_reach_canvas_edge(self):
        rng = random.Random(7)
        rects = [random_rect(rng, 120, 120) for _ in range(2000)]
        self.assertTrue(any(r.x1 == 120 for r in rects))
        self.assertTrue(any(r.y1 == 120 for r in rects))

    def test_forced_palette_size(self):
        rng = random.Random(99)
        colors = {random_rect(rng, 768, 512, palette_size=2).color for _ in range(500)}
        self.assertEqual(colors, {RED, BLUE})

        colors = {random_rect(rng, 768, 512, palette_size=4).color for _ in range(500)}
        self.assertEqual(colors, set(PALETTE))

        with self.assertRaises(ValueError):
            random_rect(rng, 768, 512, palette_size=5)

    def test_rect_count_is_two_or_three(self):
        rng = random.Random(2024)
        trials = 20000
        counts = [choose_rect_count(rng) for _ in range(trials)]
        self.assertEqual(set(counts), {2, 3})
        share = counts.count(3) / trials
        print(f"\n   3-rectangle share: {share:.4f}")
        self.assertAlmostEqual(share, 0.05, delta=0.01)

    def test_palette_widening_uses_two_independent_draws(self):
        # Second widening is not gated on the first
        self.assertEqual(choose_palette_size(ScriptedRandom([0.9, 0.9])), 2)
        self.assertEqual(choose_palette_size(ScriptedRandom([0.0005, 0.9])), 3)
        self.assertEqual(choose_palette_size(ScriptedRandom([0.9, 0.0005])), 3)
        self.assertEqual(choose_palette_size(ScriptedRandom([0.0005, 0.0005])), 4)

        rng = ScriptedRandom([0.5, 0.5, 0.5])
        choose_palette_size(rng)
        self.assertEqual(rng.calls, 2)

    def test_palette_size_distribution_is_binomial(self):
        """With p exaggerated to 0.3, sizes follow 2 + Binomial(2, 0.3)."""
        rng = random.Random(31337)
        trials = 20000
        sizes = [choose_palette_size(rng, p_widen=0.3) for _ in range(trials)]
        self.assertAlmostEqual(sizes.count(2) / trials, 0.49, delta=0.02)
        self.assertAlmostEqual(sizes.count(3) / trials, 0.42, delta=0.02)
        self.assertAlmostEqual(sizes.count(4) / trials, 0.09, delta=0.015)

    def test_default_palette_size_mostly_two(self):
        rng = random.Random(5)
        sizes = [choose_palette_size(rng) for _ in range(20000)]
        self.assertGreater(sizes.count(2) / len(sizes), 0.99)

    def test_paint_rectangles_overwrites_in_order(self):
        canvas = Canvas(768, 512)
        rects = paint_rectangles(canvas, random.Random(3), 3, palette_size=2)
        self.assertEqual(len(rects), 3)

        last = rects[-1]
        cx = (last.x0 + last.x1) // 2
        cy = (last.y0 + last.y1) // 2
        self.assertEqual(canvas.get_pixel(cx, cy), last.color)
        self.assertEqual(canvas.get_pixel(last.x0, last.y0), last.color)
        self.assertEqual(canvas.get_pixel(last.x1 - 1, last.y1 - 1), last.color)


if __name__ == "__main__":
    unittest.main()

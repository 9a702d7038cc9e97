"""
Text rasterizer tests against a real serif font.
"""

import unittest
from unittest.mock import patch

import numpy as np

from torso_slide.canvas import BLACK, Canvas
from torso_slide.fonts import LoadedFont, resolve_serif_font
from torso_slide.text import Scale, draw_text, layout_glyphs


class TestTextRasterizer(unittest.TestCase):

    @classmethod
    def setUpClass(cls):
        cls.font = resolve_serif_font()
        cls.scale = Scale(22.0, 30.0)

    def test_caption_lands_in_line_box(self):
        canvas = Canvas(768, 512)
        glyphs = draw_text(canvas, BLACK, 5, 512 - 30, self.scale, self.font, "aqua.flv - synthetic frame #42")
        self.assertTrue(glyphs)

        dark = np.argwhere(canvas.pixels.min(axis=2) < 128)
        self.assertTrue(len(dark) > 0, "caption drew nothing")
        ys, xs = dark[:, 0], dark[:, 1]
        self.assertGreaterEqual(ys.min(), 512 - 30 - 2)
        self.assertGreaterEqual(xs.min(), 5 - 2)
        self.assertLess(xs.max(), 768)

        # Text is black, so ink is always gray
        ink = canvas.pixels[canvas.pixels.min(axis=2) < 255]
        self.assertTrue(np.all(ink[:, 0] == ink[:, 1]))
        self.assertTrue(np.all(ink[:, 1] == ink[:, 2]))

    def test_whitespace_has_no_glyphs(self):
        canvas = Canvas(100, 60)
        glyphs = draw_text(canvas, BLACK, 5, 10, self.scale, self.font, "   ")
        self.assertEqual(glyphs, [])
        self.assertTrue(np.all(canvas.pixels == 255))

    def test_glyphs_in_text_order(self):
        glyphs = layout_glyphs(self.font, "a b", self.scale, (0, 24))
        self.assertEqual([g.char for g in glyphs], ["a", "b"])
        self.assertLess(glyphs[0].left, glyphs[1].left)
        for glyph in glyphs:
            self.assertTrue(0.0 <= glyph.coverage.min() <= glyph.coverage.max() <= 1.0)

    def test_horizontal_scale_is_independent(self):
        narrow = layout_glyphs(self.font, "MMMM", Scale(15.0, 30.0), (0, 24))
        wide = layout_glyphs(self.font, "MMMM", Scale(30.0, 30.0), (0, 24))
        self.assertLess(narrow[-1].bbox[2], wide[-1].bbox[2])
        # Same line height, same glyph rows
        self.assertEqual(narrow[0].coverage.shape[0], wide[0].coverage.shape[0])

    def test_offscreen_text_is_clipped(self):
        canvas = Canvas(40, 20)
        draw_text(canvas, BLACK, -500, -500, self.scale, self.font, "gone")
        self.assertTrue(np.all(canvas.pixels == 255))

        draw_text(canvas, BLACK, 25, 5, self.scale, self.font, "clipped text")
        self.assertEqual(canvas.size, (40, 20))
        ink_columns = np.nonzero((canvas.pixels < 255).any(axis=(0, 2)))[0]
        self.assertTrue(len(ink_columns) > 0, "visible part of the caption drew nothing")
        self.assertGreaterEqual(ink_columns.min(), 24)

    def test_face_built_once_per_draw(self):
        """One metrics pass plus one sized face, shared by ascent and layout."""
        canvas = Canvas(200, 40)
        with patch.object(LoadedFont, "sized", autospec=True, side_effect=LoadedFont.sized) as sized:
            draw_text(canvas, BLACK, 5, 5, self.scale, self.font, "abc")
        self.assertEqual(sized.call_count, 2)


if __name__ == "__main__":
    unittest.main()

"""
dayprogress/tests/test_progress_bar.py

Pixel checks on the rendered progress bar image.
"""

from __future__ import annotations

import unittest

from dayprogress.gui.progress_bar import render_progress_bar
from dayprogress.gui.themes import PALETTES, hex_to_rgb, palette_for
from dayprogress.models.widget_settings import ThemeId

PALETTE = palette_for(ThemeId.FOREST)
TRACK = hex_to_rgb(PALETTE.track)
ACCENT = hex_to_rgb(PALETTE.accent)


def _rgb(img, x, y):
    return img.getpixel((x, y))[:3]


class TestProgressBar(unittest.TestCase):
    def test_size(self) -> None:
        self.assertEqual(render_progress_bar(200, 10, 50, PALETTE).size, (200, 10))

    def test_empty_bar_shows_only_track(self) -> None:
        img = render_progress_bar(100, 8, 0, PALETTE)
        self.assertEqual(_rgb(img, 10, 4), TRACK)
        self.assertEqual(_rgb(img, 50, 4), TRACK)

    def test_full_bar(self) -> None:
        img = render_progress_bar(100, 8, 100, PALETTE)
        self.assertEqual(_rgb(img, 10, 4), ACCENT)
        self.assertEqual(_rgb(img, 90, 4), ACCENT)

    def test_half_bar(self) -> None:
        img = render_progress_bar(100, 8, 50, PALETTE)
        self.assertEqual(_rgb(img, 25, 4), ACCENT)
        self.assertEqual(_rgb(img, 75, 4), TRACK)

    def test_out_of_range_percent_is_clamped(self) -> None:
        self.assertEqual(_rgb(render_progress_bar(100, 8, 250, PALETTE), 90, 4), ACCENT)
        self.assertEqual(_rgb(render_progress_bar(100, 8, -5, PALETTE), 10, 4), TRACK)


class TestThemes(unittest.TestCase):
    def test_every_theme_has_a_palette(self) -> None:
        for theme in ThemeId:
            self.assertIs(palette_for(theme), PALETTES[theme])

    def test_hex_to_rgb(self) -> None:
        self.assertEqual(hex_to_rgb("#0f0"), (0, 255, 0))
        self.assertEqual(hex_to_rgb("38bdf8"), (0x38, 0xBD, 0xF8))


if __name__ == "__main__":
    unittest.main()

"""
Progress bar image for the widget, drawn with PIL and shown through ImageTk.
"""

from __future__ import annotations

from PIL import Image, ImageDraw

from .themes import Palette, hex_to_rgb


def render_progress_bar(width: int, height: int, percent: float, palette: Palette) -> Image.Image:
    """
    Rounded track with the filled share ``percent`` (clamped to 0..100).

    The fill keeps at least the cap diameter once progress is above zero, so a
    few percent remain visible as a dot rather than a sliver.
    """
    width = max(int(width), 2)
    height = max(int(height), 2)
    percent = min(100.0, max(0.0, float(percent)))
    radius = height // 2

    img = Image.new("RGBA", (width, height), hex_to_rgb(palette.background) + (255,))
    draw = ImageDraw.Draw(img)
    draw.rounded_rectangle((0, 0, width - 1, height - 1), radius=radius, fill=hex_to_rgb(palette.track))

    if percent > 0:
        fill_w = max(int(round(width * percent / 100.0)), height)
        fill_w = min(fill_w, width)
        draw.rounded_rectangle((0, 0, fill_w - 1, height - 1), radius=radius, fill=hex_to_rgb(palette.accent))
    return img

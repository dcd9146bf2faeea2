"""
Colour palettes for the theme labels stored in WidgetSettings.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Tuple

from ..models.widget_settings import ThemeId


@dataclass(frozen=True)
class Palette:
    background: str
    foreground: str
    muted: str
    track: str
    accent: str


PALETTES: Dict[ThemeId, Palette] = {
    ThemeId.MIDNIGHT: Palette("#0f172a", "#e2e8f0", "#94a3b8", "#1e293b", "#38bdf8"),
    ThemeId.DARK_PURPLE: Palette("#1e1033", "#ede9fe", "#a78bfa", "#2e1a4f", "#c084fc"),
    ThemeId.FOREST: Palette("#0f1f17", "#dcfce7", "#86efac", "#1a3326", "#22c55e"),
    ThemeId.ROSE: Palette("#2a0f1a", "#ffe4e6", "#fda4af", "#451a2a", "#fb7185"),
    ThemeId.AMBER: Palette("#24180a", "#fef3c7", "#fcd34d", "#3d2a10", "#f59e0b"),
    ThemeId.SLATE: Palette("#1f2933", "#f1f5f9", "#cbd5e1", "#334155", "#94a3b8"),
}


def palette_for(theme: ThemeId) -> Palette:
    return PALETTES.get(theme, PALETTES[ThemeId.MIDNIGHT])


def hex_to_rgb(hexstr: str) -> Tuple[int, int, int]:
    """
    Convert hex color (#RRGGBB or #RGB) into an RGB tuple for PIL.
    """
    s = (hexstr or "#000000").strip()
    if not s.startswith("#"):
        s = "#" + s
    if len(s) == 4:
        return int(s[1] * 2, 16), int(s[2] * 2, 16), int(s[3] * 2, 16)
    return int(s[1:3], 16), int(s[3:5], 16), int(s[5:7], 16)

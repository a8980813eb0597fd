"""Visual palettes, one per CV theme."""

from __future__ import annotations

from dataclasses import dataclass

from elevate_cv.models.draft import Theme


@dataclass(frozen=True)
class Palette:
    background: str
    accent: str
    border: str
    badge_background: str
    badge_text: str
    badge_border: str
    heading: str
    text: str
    font_family: str


MONO = "'JetBrains Mono', 'Fira Code', Menlo, monospace"
SANS = "Inter, 'Helvetica Neue', Arial, sans-serif"
SERIF = "Georgia, 'Times New Roman', serif"

THEMES: dict[Theme, Palette] = {
    Theme.TECH: Palette(
        background="#0a0f1a",
        accent="#22d3ee",
        border="#1e293b",
        badge_background="#083344",
        badge_text="#22d3ee",
        badge_border="#155e75",
        heading="#ffffff",
        text="#cbd5e1",
        font_family=MONO,
    ),
    Theme.CORPORATE: Palette(
        background="#ffffff",
        accent="#1d4ed8",
        border="#f1f5f9",
        badge_background="#eff6ff",
        badge_text="#1d4ed8",
        badge_border="#dbeafe",
        heading="#0f172a",
        text="#475569",
        font_family=SANS,
    ),
    Theme.CREATIVE: Palette(
        background="#fafafa",
        accent="#f43f5e",
        border="#ffe4e6",
        badge_background="#fff1f2",
        badge_text="#e11d48",
        badge_border="#ffe4e6",
        heading="#0f172a",
        text="#334155",
        font_family=SERIF,
    ),
    Theme.MEDICAL: Palette(
        background="#f0f9ff",
        accent="#047857",
        border="#d1fae5",
        badge_background="#ffffff",
        badge_text="#065f46",
        badge_border="#a7f3d0",
        heading="#1e293b",
        text="#475569",
        font_family=SANS,
    ),
    Theme.FINANCE: Palette(
        background="#020617",
        accent="#f59e0b",
        border="#1e293b",
        badge_background="#451a03",
        badge_text="#f59e0b",
        badge_border="#78350f",
        heading="#ffffff",
        text="#94a3b8",
        font_family=SERIF,
    ),
}

DEFAULT_THEME = Theme.TECH


def get_palette(theme: Theme | str | None) -> Palette:
    """Palette for ``theme``; unknown or missing themes fall back to tech."""
    try:
        return THEMES[Theme(theme)]
    except ValueError:
        return THEMES[DEFAULT_THEME]

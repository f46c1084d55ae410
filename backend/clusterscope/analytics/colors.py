"""Color/Key Assignment: deterministic group colors and choropleth blending."""

from __future__ import annotations

from typing import Sequence

from clusterscope.analytics.records import GroupKey

PALETTE: tuple[str, ...] = (
    "#1F77B4",
    "#FF7F0E",
    "#2CA02C",
    "#D62728",
    "#9467BD",
    "#8C564B",
    "#E377C2",
    "#7F7F7F",
    "#BCBD22",
    "#17BECF",
    "#F97316",
    "#14B8A6",
    "#A855F7",
    "#22C55E",
    "#3B82F6",
)

# Choropleth endpoints: baseline and maximum intensity
MAP_BASE_COLOR = "#1E293B"
MAP_MAX_COLOR = "#FF5432"


def color_for_key(key: GroupKey, all_keys: Sequence[GroupKey], palette: Sequence[str] = PALETTE) -> str:
    """Palette color by position of ``key`` in the ordered key list.

    Keys compare by string form so ``3`` and ``"3"`` are the same key.
    Unknown keys take index 0.
    """
    key_str = str(key)
    idx = next((i for i, k in enumerate(all_keys) if str(k) == key_str), 0)
    return palette[idx % len(palette)]


def color_map(all_keys: Sequence[GroupKey], palette: Sequence[str] = PALETTE) -> dict[GroupKey, str]:
    return {k: color_for_key(k, all_keys, palette) for k in all_keys}


def _hex_to_rgb(color: str) -> tuple[int, int, int]:
    c = color.lstrip("#")
    if len(c) == 3:
        c = "".join(ch * 2 for ch in c)
    return int(c[0:2], 16), int(c[2:4], 16), int(c[4:6], 16)


def blend_rgb(low: str, high: str, t: float) -> str:
    """Linear RGB blend from ``low`` (t=0) to ``high`` (t=1)."""
    t = min(1.0, max(0.0, t))
    r0, g0, b0 = _hex_to_rgb(low)
    r1, g1, b1 = _hex_to_rgb(high)
    r = round(r0 + (r1 - r0) * t)
    g = round(g0 + (g1 - g0) * t)
    b = round(b0 + (b1 - b0) * t)
    return f"#{r:02X}{g:02X}{b:02X}"

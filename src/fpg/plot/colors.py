"""Color normalization for chart traces.

Every color the chart receives is an ``rgba(r, g, b, a)`` string with
integer channels.  Inputs may be CSS ``rgb()``/``rgba()`` functions
(alpha as a fraction or a percentage), hex strings or any named color
matplotlib knows about.
"""

from __future__ import annotations

import re
from typing import Tuple

from matplotlib import colors as mcolors

_FUNC_RE = re.compile(
    r"^rgba?\(\s*([\d.]+)\s*,\s*([\d.]+)\s*,\s*([\d.]+)\s*(?:,\s*([\d.]+)\s*(%?)\s*)?\)$",
    re.IGNORECASE,
)


def _fmt_alpha(alpha: float) -> str:
    alpha = round(min(1.0, max(0.0, alpha)), 3)
    return f"{alpha:g}"


def _fmt(rgb: Tuple[int, int, int], alpha: float) -> str:
    return f"rgba({rgb[0]}, {rgb[1]}, {rgb[2]}, {_fmt_alpha(alpha)})"


def parse_color(value: str) -> Tuple[Tuple[int, int, int], float]:
    """Parse a color string into ``((r, g, b), alpha)``.

    Raises:
        ValueError: if the string is not a recognised color.
    """
    if not isinstance(value, str) or not value.strip():
        raise ValueError(f"Invalid color: {value!r}")
    text = value.strip()
    match = _FUNC_RE.match(text)
    if match:
        r, g, b, a, pct = match.groups()
        channels = tuple(int(round(float(c))) for c in (r, g, b))
        if any(c > 255 for c in channels):
            raise ValueError(f"Color channel out of range in {value!r}")
        alpha = 1.0 if a is None else float(a)
        if pct:
            alpha /= 100.0
        if alpha > 1.0:
            raise ValueError(f"Alpha out of range in {value!r}")
        return channels, alpha  # type: ignore[return-value]
    try:
        r, g, b, a = mcolors.to_rgba(text)
    except ValueError as exc:
        raise ValueError(f"Invalid color: {value!r}") from exc
    return (int(round(r * 255)), int(round(g * 255)), int(round(b * 255))), a


def normalize_color(value: str) -> str:
    """Return ``value`` as an ``rgba(r, g, b, a)`` string."""
    rgb, alpha = parse_color(value)
    return _fmt(rgb, alpha)


def with_opacity(value: str, opacity: float) -> str:
    """Replace the alpha channel of ``value``."""
    rgb, _ = parse_color(value)
    return _fmt(rgb, opacity)


def to_mpl_rgba(value: str) -> Tuple[float, float, float, float]:
    """Convert a color string to a matplotlib RGBA tuple."""
    rgb, alpha = parse_color(value)
    return rgb[0] / 255.0, rgb[1] / 255.0, rgb[2] / 255.0, alpha

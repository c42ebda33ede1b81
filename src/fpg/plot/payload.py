"""Render payload for the charting collaborator.

The payload is plain data in Plotly figure format: a line trace for the
confidence intervals (one ``None``-separated segment per row), a scatter
trace of diamonds sized by weight, the layout dictionary and the color
configuration.  Nothing here talks to a plotting library, so the same
payload feeds the HTML export, the web dashboard and the JSON output.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence

from ..config.settings import settings
from ..core.models import AugmentedRow, ColorConfig, LayoutSpec, PlotOptions, RawRow, RenderPayload
from ..meta.augment import augment
from ..meta.summary import build_table, hover_text, total_weight, weight_percentages
from ..utils.logging import get_logger
from .layout import plan_layout

logger = get_logger(__name__)


def default_colors() -> ColorConfig:
    return ColorConfig(
        marker_color=settings.marker_color,
        marker_opacity=settings.marker_opacity,
        ci_color=settings.ci_color,
        reference_color=settings.reference_color,
    )


def ci_trace(rows: Sequence[AugmentedRow], geometry: LayoutSpec, colors: ColorConfig) -> Dict[str, Any]:
    """Horizontal interval segments, broken by ``None`` between rows."""
    xs: List[Optional[float]] = []
    ys: List[Optional[float]] = []
    for row, y in zip(rows, geometry.y_positions):
        if not row.has_interval:
            continue
        xs.extend([row.ci_low, row.ci_high, None])
        ys.extend([y, y, None])
    return {
        "type": "scatter",
        "mode": "lines",
        "x": xs,
        "y": ys,
        "line": {"color": colors.ci_color, "width": 1.5},
        "hoverinfo": "skip",
        "showlegend": False,
    }


def marker_trace(rows: Sequence[AugmentedRow], geometry: LayoutSpec, colors: ColorConfig) -> Dict[str, Any]:
    """Diamond markers for every weighted row that has an effect estimate."""
    pcts = weight_percentages(rows)
    xs: List[float] = []
    ys: List[int] = []
    sizes: List[float] = []
    texts: List[str] = []
    for row, y, size, pct in zip(rows, geometry.y_positions, geometry.marker_sizes, pcts):
        if row.effect is None or not row.has_weight:
            continue
        xs.append(row.effect)
        ys.append(y)
        sizes.append(size if size is not None else settings.min_marker_size)
        texts.append(hover_text(row, pct))
    return {
        "type": "scatter",
        "mode": "markers",
        "x": xs,
        "y": ys,
        "marker": {
            "symbol": "diamond",
            "size": sizes,
            "color": colors.marker_fill,
            "line": {"width": 1, "color": colors.marker_color},
        },
        "hoverinfo": "text",
        "text": texts,
        "showlegend": False,
    }


def build_payload(
    rows: Sequence[RawRow],
    options: Optional[PlotOptions] = None,
    colors: Optional[ColorConfig] = None,
) -> RenderPayload:
    """Augment ``rows`` and assemble traces, layout and table.

    Args:
        rows: Raw study rows in display order.
        options: Ratio/mirror/label/marker-scale options.
        colors: Trace colors; defaults come from the settings.

    Returns:
        A :class:`RenderPayload` computed from scratch.
    """
    options = options or PlotOptions()
    colors = colors or default_colors()
    augmented = augment(rows, options.is_ratio)
    geometry = plan_layout(
        augmented,
        is_ratio=options.is_ratio,
        mirror_x=options.mirror_x,
        label=options.x_label,
        marker_scale=options.marker_scale,
    )
    payload = RenderPayload(
        traces=[ci_trace(augmented, geometry, colors), marker_trace(augmented, geometry, colors)],
        layout=geometry.to_plotly(reference_color=colors.reference_color),
        colors=colors,
        table=build_table(augmented),
        total_weight=total_weight(augmented),
    )
    logger.debug("Built render payload", extra={"rows": len(augmented), "ratio": options.is_ratio})
    return payload

"""Static forest plot rendering with matplotlib.

Uses the same :class:`LayoutSpec` as the interactive chart so that the
PNG export matches it: y slots ``N..1``, the tick plan on ratio axes,
diamonds sized by weight and the reference line at the null effect.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Sequence

import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt  # noqa: E402

from ..config.settings import settings  # noqa: E402
from ..core.models import ColorConfig, PlotOptions, RawRow  # noqa: E402
from ..meta.augment import augment  # noqa: E402
from ..utils.logging import get_logger  # noqa: E402
from .colors import to_mpl_rgba  # noqa: E402
from .layout import plan_layout  # noqa: E402
from .payload import default_colors  # noqa: E402

logger = get_logger(__name__)

# Plotly sizes are diameters in px; matplotlib scatter sizes are areas in pt².
_PX_TO_PT = 0.75


def render_png(
    rows: Sequence[RawRow],
    path: Path,
    options: Optional[PlotOptions] = None,
    colors: Optional[ColorConfig] = None,
    dpi: Optional[int] = None,
) -> Path:
    """Render a forest plot to ``path`` as PNG.

    Args:
        rows: Raw study rows in display order.
        path: Output image file.
        options: Plot options (ratio mode, mirroring, label, marker scale).
        colors: Trace colors; defaults from the settings.
        dpi: Resolution; defaults to ``settings.png_dpi``.

    Returns:
        The written path.
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

    width_px = 900 + geometry.margin.l
    fig, ax = plt.subplots(figsize=(width_px / 100, geometry.height / 100))
    ci_rgba = to_mpl_rgba(colors.ci_color)
    fill_rgba = to_mpl_rgba(colors.marker_fill)
    edge_rgba = to_mpl_rgba(colors.marker_color)

    for row, y, size in zip(augmented, geometry.y_positions, geometry.marker_sizes):
        if row.has_interval:
            ax.hlines(y, row.ci_low, row.ci_high, colors=[ci_rgba], linewidth=1.5)
        if row.effect is not None and row.has_weight and size is not None:
            ax.scatter(
                [row.effect],
                [y],
                s=(size * _PX_TO_PT) ** 2,
                marker="D",
                color=[fill_rgba],
                edgecolors=[edge_rgba],
                linewidths=1,
                zorder=3,
            )

    ax.axvline(geometry.reference_x, color=to_mpl_rgba(colors.reference_color), linewidth=2, zorder=1)
    ax.set_ylim(*geometry.y_range)
    ax.set_yticks(geometry.y_positions)
    ax.set_yticklabels(geometry.y_labels)
    if geometry.x_type == "log":
        ax.set_xscale("log")
        if geometry.tick_plan is not None and geometry.tick_plan.values:
            ax.set_xticks(geometry.tick_plan.values)
            ax.set_xticklabels(geometry.tick_plan.labels)
            ax.minorticks_off()
    if geometry.x_reversed:
        ax.invert_xaxis()
    ax.set_xlabel(geometry.x_title)
    for side in ("top", "right"):
        ax.spines[side].set_visible(False)

    fig.tight_layout()
    path.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(path, dpi=dpi or settings.png_dpi)
    plt.close(fig)
    logger.info(f"Forest plot image saved to {path}")
    return path

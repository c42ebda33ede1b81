"""Chart geometry for a forest plot.

The planner turns augmented rows into a :class:`LayoutSpec`: one y slot
per row (first row on top), a height that grows with the row count, a
left margin wide enough for the longest study label, the null-effect
reference line and, on ratio axes, the tick plan from
:mod:`fpg.plot.ticks`.
"""

from __future__ import annotations

from typing import List, Optional, Sequence

from ..config.settings import settings
from ..core.models import AugmentedRow, LayoutSpec, Margin
from ..utils.logging import get_logger
from .ticks import plan_ticks

logger = get_logger(__name__)

ROW_HEIGHT_PX = 40
HEIGHT_PADDING_PX = 160
MIN_HEIGHT_PX = 400
CHAR_WIDTH_PX = 8
LABEL_PADDING_PX = 12
MIN_LEFT_MARGIN_PX = 100
MAX_LEFT_MARGIN_PX = 600
MIN_WEIGHT = 1e-6


def y_positions(n_rows: int) -> List[int]:
    """``N..1`` so that the first row sits at the top."""
    return [n_rows - i for i in range(n_rows)]


def plot_height(n_rows: int) -> int:
    return max(MIN_HEIGHT_PX, n_rows * ROW_HEIGHT_PX + HEIGHT_PADDING_PX)


def left_margin(labels: Sequence[str]) -> int:
    """Pixel margin estimated from the longest label, clamped."""
    longest = max((len(label or "") for label in labels), default=0)
    return min(MAX_LEFT_MARGIN_PX, max(MIN_LEFT_MARGIN_PX, LABEL_PADDING_PX + longest * CHAR_WIDTH_PX))


def marker_sizes(
    rows: Sequence[AugmentedRow],
    scale: float = 1.0,
    min_size: Optional[float] = None,
    max_size: Optional[float] = None,
) -> List[Optional[float]]:
    """Diamond diameters proportional to each row's share of the largest weight.

    Rows without a weight get ``None`` and are left out of the scaling.
    """
    min_size = settings.min_marker_size if min_size is None else min_size
    max_size = settings.max_marker_size if max_size is None else max_size
    weights = [r.weight_calc for r in rows if r.has_weight]
    max_w = max(weights + [MIN_WEIGHT])
    sizes: List[Optional[float]] = []
    for r in rows:
        if not r.has_weight:
            sizes.append(None)
        else:
            sizes.append(((r.weight_calc / max_w) * max_size + min_size) * scale)
    return sizes


def plan_layout(
    rows: Sequence[AugmentedRow],
    is_ratio: bool,
    mirror_x: bool,
    label: str,
    marker_scale: float = 1.0,
) -> LayoutSpec:
    """Compute the full chart geometry for ``rows``."""
    n = len(rows)
    labels = [r.study for r in rows]
    tick_plan = plan_ticks(rows, mirror_x=mirror_x) if is_ratio else None
    geometry = LayoutSpec(
        height=plot_height(n),
        margin=Margin(l=left_margin(labels)),
        y_positions=y_positions(n),
        y_labels=labels,
        y_range=(0.0, float(n + 1)),
        reference_x=1.0 if is_ratio else 0.0,
        x_type="log" if is_ratio else "linear",
        x_title=label or "",
        x_reversed=mirror_x,
        # x-axis drawn at the bottom of the y-range
        axis_position=0.0,
        tick_plan=tick_plan,
        marker_sizes=marker_sizes(rows, scale=marker_scale),
    )
    logger.debug(
        "Planned layout",
        extra={"rows": n, "height": geometry.height, "ticks": len(tick_plan.values) if tick_plan else 0},
    )
    return geometry

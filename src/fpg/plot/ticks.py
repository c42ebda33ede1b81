"""Readable tick sets for logarithmic ratio axes.

Plotting libraries label a log axis with powers of ten, which leaves a
forest plot of odds ratios between 0.5 and 3 with a single tick.  The
functions here pick mantissa multiples of each decade the data covers,
thin them to ``{1, 2, 5}`` when there are too many, and format them the
way ratios are usually printed (``.3``, ``.5``, ``1``, ``2``).
"""

from __future__ import annotations

import math
from typing import Iterable, List, Sequence, Tuple

import numpy as np

from ..config.settings import settings
from ..core.models import RawRow, TickPlan
from ..meta.augment import RATIO_FLOOR

FULL_MANTISSAS: Tuple[int, ...] = (1, 2, 3, 4, 5, 6, 7, 8, 9)
REDUCED_MANTISSAS: Tuple[int, ...] = (1, 2, 5)


def _finite_values(rows: Iterable[RawRow]) -> List[float]:
    values: List[float] = []
    for r in rows:
        for v in (r.effect, r.ci_low, r.ci_high):
            if v is not None and math.isfinite(v):
                values.append(max(RATIO_FLOOR, v))
    return values


def x_extent(rows: Iterable[RawRow]) -> Tuple[float, float]:
    """Smallest and largest positive-clamped value over all rows.

    Falls back to ``(1.0, 1.0)`` when no row has a numeric value.
    """
    values = _finite_values(rows)
    if not values:
        return 1.0, 1.0
    return min(values), max(values)


def candidate_ticks(x_min: float, x_max: float, mantissas: Sequence[int]) -> List[float]:
    """``m * 10**d`` for every decade touching the range, kept inside it."""
    decade_min = int(math.floor(math.log10(max(x_min, RATIO_FLOOR))))
    decade_max = int(math.ceil(math.log10(max(x_max, RATIO_FLOOR))))
    candidates = [m * 10.0 ** d for d in range(decade_min, decade_max + 1) for m in mantissas]
    return [v for v in candidates if x_min <= v <= x_max]


def log_ticks(x_min: float, x_max: float, max_ticks: int | None = None) -> List[float]:
    """Tick values covering ``[x_min, x_max]`` on a log axis."""
    if max_ticks is None:
        max_ticks = settings.max_ticks
    ticks = candidate_ticks(x_min, x_max, FULL_MANTISSAS)
    if len(ticks) > max_ticks:
        ticks = candidate_ticks(x_min, x_max, REDUCED_MANTISSAS)
    if not ticks:
        # No mantissa multiple inside a narrow range: space a few ticks evenly in log.
        steps = min(6, max(2, math.ceil(x_max / x_min)))
        spaced = np.logspace(math.log10(x_min), math.log10(x_max), steps + 1)
        ticks = [float(v) for v in np.clip(spaced, x_min, x_max)]
    return ticks


def format_tick(value: float) -> str:
    """Ratio-style label: ``0.3 -> ".3"``, ``0.05 -> ".05"``, ``2.0 -> "2"``."""
    if value >= 1:
        if float(value).is_integer():
            return str(int(value))
        text = f"{value:.1f}"
        return text[:-2] if text.endswith(".0") else text
    precision = 1 if value >= 0.1 else 2
    text = f"{value:.{precision}f}"
    return text[1:] if text.startswith("0.") else text


def plan_ticks(rows: Sequence[RawRow], mirror_x: bool = False, max_ticks: int | None = None) -> TickPlan:
    """Build the tick plan for a ratio-scale axis.

    When ``mirror_x`` is set both sequences are reversed; the caller is
    expected to reverse the axis direction as well.
    """
    x_min, x_max = x_extent(rows)
    values = log_ticks(x_min, x_max, max_ticks)
    labels = [format_tick(v) for v in values]
    if mirror_x:
        values = values[::-1]
        labels = labels[::-1]
    return TickPlan(values=values, labels=labels, x_min=x_min, x_max=x_max)

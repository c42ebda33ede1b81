"""Inverse-variance weights from confidence intervals.

Each study row is augmented with the standard error implied by its 95%
confidence interval and the fixed-effect pooling weight ``1/se²``.  For
ratio measures (odds, risk or hazard ratios) the interval is taken on
the log scale, where a symmetric ratio-scale interval becomes symmetric.
"""

from __future__ import annotations

import math
from typing import List, Optional, Sequence

import numpy as np

from ..core.models import AugmentedRow, RawRow

Z_95 = 1.96
RATIO_FLOOR = 1e-12


def standard_error(ci_low: float, ci_high: float, is_ratio: bool) -> float:
    """Standard error implied by a 95% confidence interval.

    In ratio mode both bounds are clamped to ``RATIO_FLOOR`` before the
    log transform so zero or negative bounds never reach ``log``.
    """
    if is_ratio:
        low = max(RATIO_FLOOR, ci_low)
        high = max(RATIO_FLOOR, ci_high)
        return float((np.log(high) - np.log(low)) / (2 * Z_95))
    return float((ci_high - ci_low) / (2 * Z_95))


def inverse_variance_weight(se: Optional[float]) -> float:
    """``1/se²``, or ``0`` when the standard error is missing or not positive.

    A standard error so small that ``se²`` underflows or ``1/se²``
    overflows is treated like a zero-width interval.
    """
    if se is None or not se > 0:
        return 0.0
    variance = se * se
    if variance == 0.0:
        return 0.0
    weight = 1.0 / variance
    return weight if math.isfinite(weight) else 0.0


def augment_row(row: RawRow, is_ratio: bool) -> AugmentedRow:
    base = row.model_dump()
    if row.weight is not None:
        return AugmentedRow(**base, se=None, weight_calc=row.weight, has_weight=True)
    if not row.has_interval:
        return AugmentedRow(**base, se=None, weight_calc=0.0, has_weight=False)
    se = standard_error(row.ci_low, row.ci_high, is_ratio)  # type: ignore[arg-type]
    return AugmentedRow(**base, se=se, weight_calc=inverse_variance_weight(se), has_weight=True)


def augment(rows: Sequence[RawRow], is_ratio: bool) -> List[AugmentedRow]:
    """Augment every row, preserving order and count.

    Args:
        rows: Raw study rows.
        is_ratio: Whether effects are ratios pooled on the log scale.

    Returns:
        A new list of :class:`AugmentedRow`; the input is not modified.
    """
    return [augment_row(row, is_ratio) for row in rows]

"""Weight totals, percentages and label-table rows."""

from __future__ import annotations

from typing import List, Optional, Sequence

from ..core.models import AugmentedRow, TableRow


def total_weight(rows: Sequence[AugmentedRow]) -> float:
    """Sum of ``weight_calc`` over rows that carry a weight."""
    return float(sum(r.weight_calc for r in rows if r.has_weight))


def weight_percentages(rows: Sequence[AugmentedRow]) -> List[Optional[float]]:
    """Share of the total weight per row, in percent.

    Rows without a weight get ``None``.  If the total is zero every
    weighted row gets ``0.0`` instead of a division by zero.
    """
    total = total_weight(rows)
    out: List[Optional[float]] = []
    for r in rows:
        if not r.has_weight:
            out.append(None)
        elif total == 0:
            out.append(0.0)
        else:
            out.append(r.weight_calc / total * 100.0)
    return out


def format_value(value: Optional[float]) -> str:
    """Shortest readable text for a number (``1.0`` -> ``"1"``)."""
    if value is None:
        return ""
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))


def format_interval(low: Optional[float], high: Optional[float]) -> str:
    if low is None or high is None:
        return ""
    return f"[{format_value(low)}, {format_value(high)}]"


def format_percent(pct: Optional[float]) -> str:
    return "" if pct is None else f"{pct:.1f}%"


def hover_text(row: AugmentedRow, pct: Optional[float]) -> str:
    """Hover label for a marker: study, effect, interval and weight share."""
    return (
        f"{row.study}<br>Effect: {format_value(row.effect)}"
        f"<br>CI: {format_interval(row.ci_low, row.ci_high)}"
        f"<br>Weight: {(pct or 0.0):.1f}%"
    )


def build_table(rows: Sequence[AugmentedRow]) -> List[TableRow]:
    """Rows of the label table, aligned one-to-one with the plot rows."""
    table: List[TableRow] = []
    for row, pct in zip(rows, weight_percentages(rows)):
        if not row.has_weight:
            table.append(TableRow(study=row.study, is_subheader=True))
            continue
        table.append(
            TableRow(
                study=row.study,
                effect_text=format_value(row.effect),
                ci_text=format_interval(row.ci_low, row.ci_high),
                weight_text=format_percent(pct),
                weight_pct=pct,
            )
        )
    return table

"""Unit tests for logarithmic tick synthesis."""

import pytest

from fpg.core.models import RawRow
from fpg.plot.ticks import (
    REDUCED_MANTISSAS,
    candidate_ticks,
    format_tick,
    log_ticks,
    plan_ticks,
    x_extent,
)


class TestExtent:
    """Tests for the x range used by the tick planner."""

    def test_covers_effect_and_interval(self, sample_rows) -> None:
        assert x_extent(sample_rows) == (0.21, 1.66)

    def test_empty_rows_fall_back_to_one(self) -> None:
        assert x_extent([]) == (1.0, 1.0)
        assert x_extent([RawRow(study="header only")]) == (1.0, 1.0)

    def test_non_positive_values_are_clamped(self) -> None:
        x_min, x_max = x_extent([RawRow(study="a", effect=0.5, ci_low=-1.0, ci_high=2.0)])
        assert x_min == 1e-12
        assert x_max == 2.0


class TestCandidates:
    """Tests for mantissa candidates and the thinning rule."""

    def test_single_decade(self) -> None:
        ticks = candidate_ticks(1.0, 9.0, range(1, 10))
        assert ticks == [float(m) for m in range(1, 10)]

    def test_wide_range_uses_reduced_mantissas(self) -> None:
        ticks = log_ticks(0.3, 12)
        assert len(ticks) <= 12
        assert ticks == pytest.approx([0.5, 1, 2, 5, 10])
        for v in ticks:
            mantissa = v / 10 ** int(f"{v:e}".split("e")[1])
            assert round(mantissa) in REDUCED_MANTISSAS

    def test_twelve_or_fewer_keep_full_mantissas(self) -> None:
        ticks = log_ticks(0.8, 2.6)
        assert ticks == pytest.approx([0.8, 0.9, 1, 2])

    def test_narrow_range_falls_back_to_log_spacing(self) -> None:
        ticks = log_ticks(1.1, 1.9)
        assert len(ticks) == 3
        assert ticks[0] == pytest.approx(1.1)
        assert ticks[-1] == pytest.approx(1.9)
        assert ticks == sorted(ticks)

    @pytest.mark.parametrize("x_min, x_max", [(0.3, 12), (0.8, 2.6), (0.01, 500), (1.1, 1.9), (0.21, 1.66)])
    def test_ticks_stay_within_bounds(self, x_min, x_max) -> None:
        ticks = log_ticks(x_min, x_max)
        assert ticks
        assert all(x_min <= v <= x_max for v in ticks)
        assert ticks == sorted(ticks)


class TestFormat:
    """Tests for ratio-style tick labels."""

    @pytest.mark.parametrize(
        "value, expected",
        [
            (0.3, ".3"),
            (3 * 0.1, ".3"),
            (0.5, ".5"),
            (0.05, ".05"),
            (0.02, ".02"),
            (1.0, "1"),
            (2.0, "2"),
            (10.0, "10"),
            (1.26, "1.3"),
            (1.96, "2"),
        ],
    )
    def test_format_tick(self, value, expected) -> None:
        assert format_tick(value) == expected


class TestPlan:
    """Tests for the complete tick plan."""

    def test_labels_match_values(self, sample_rows) -> None:
        plan = plan_ticks(sample_rows)
        assert len(plan.values) == len(plan.labels)
        assert plan.labels == [format_tick(v) for v in plan.values]

    def test_mirror_reverses_sequence_only(self, sample_rows) -> None:
        plain = plan_ticks(sample_rows)
        mirrored = plan_ticks(sample_rows, mirror_x=True)
        assert mirrored.values == plain.values[::-1]
        assert mirrored.labels == plain.labels[::-1]
        assert set(mirrored.values) == set(plain.values)

"""Shared fixtures: sample rows and CSV files."""

from pathlib import Path

import pytest

from fpg.core.models import RawRow


SAMPLE_CSV = """study,effect,ci_low,ci_high
Primary outcomes,,,
Smith 2019,0.85,0.62,1.17
Jones 2020,1.32,1.05,1.66
Lee 2021,0.47,0.21,1.05
"""


@pytest.fixture
def sample_rows() -> list[RawRow]:
    return [
        RawRow(study="Primary outcomes"),
        RawRow(study="Smith 2019", effect=0.85, ci_low=0.62, ci_high=1.17),
        RawRow(study="Jones 2020", effect=1.32, ci_low=1.05, ci_high=1.66),
        RawRow(study="Lee 2021", effect=0.47, ci_low=0.21, ci_high=1.05),
    ]


@pytest.fixture
def two_study_csv(tmp_path: Path) -> Path:
    path = tmp_path / "two_studies.csv"
    path.write_text("study,effect,ci_low,ci_high\nA,1.0,0.8,1.25\nB,2.0,1.5,2.6\n")
    return path


@pytest.fixture
def sample_csv(tmp_path: Path) -> Path:
    path = tmp_path / "sample.csv"
    path.write_text(SAMPLE_CSV)
    return path

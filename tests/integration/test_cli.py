"""Integration tests for the fpg command line."""

import json
from pathlib import Path

from typer.testing import CliRunner

from fpg.cli.main import app

runner = CliRunner()


def test_help() -> None:
    result = runner.invoke(app, ["--help"])
    assert result.exit_code == 0
    for command in ("plot", "table", "ticks", "serve"):
        assert command in result.output


def test_plot_json(two_study_csv: Path, tmp_path: Path) -> None:
    out = tmp_path / "payload.json"
    result = runner.invoke(app, ["plot", str(two_study_csv), "--output", str(out)])
    assert result.exit_code == 0, result.output
    payload = json.loads(out.read_text())
    assert payload["traces"][1]["y"] == [2, 1]
    assert payload["layout"]["xaxis"]["type"] == "log"


def test_plot_html(two_study_csv: Path, tmp_path: Path) -> None:
    out = tmp_path / "forest.html"
    result = runner.invoke(app, ["plot", str(two_study_csv), "-o", str(out), "--label", "Odds ratio"])
    assert result.exit_code == 0, result.output
    html = out.read_text()
    assert "plotly" in html.lower()
    assert "Odds ratio" in html


def test_plot_png(two_study_csv: Path, tmp_path: Path) -> None:
    out = tmp_path / "forest.png"
    result = runner.invoke(app, ["plot", str(two_study_csv), "-o", str(out), "--mirror", "--dpi", "72"])
    assert result.exit_code == 0, result.output
    assert out.read_bytes()[:8] == b"\x89PNG\r\n\x1a\n"


def test_plot_linear_png(sample_csv: Path, tmp_path: Path) -> None:
    out = tmp_path / "linear.png"
    result = runner.invoke(app, ["plot", str(sample_csv), "-o", str(out), "--linear", "--dpi", "72"])
    assert result.exit_code == 0, result.output
    assert out.exists()


def test_plot_rejects_unknown_suffix(two_study_csv: Path, tmp_path: Path) -> None:
    result = runner.invoke(app, ["plot", str(two_study_csv), "-o", str(tmp_path / "forest.svgz")])
    assert result.exit_code == 1


def test_plot_rejects_bad_color(two_study_csv: Path, tmp_path: Path) -> None:
    out = tmp_path / "forest.json"
    result = runner.invoke(app, ["plot", str(two_study_csv), "-o", str(out), "--ci-color", "nope"])
    assert result.exit_code == 1
    assert not out.exists()


def test_table(sample_csv: Path) -> None:
    result = runner.invoke(app, ["table", str(sample_csv)])
    assert result.exit_code == 0, result.output
    assert "Smith 2019" in result.output
    assert "%" in result.output


def test_ticks(two_study_csv: Path) -> None:
    result = runner.invoke(app, ["ticks", str(two_study_csv)])
    assert result.exit_code == 0, result.output
    assert ".8" in result.output
    assert "Range: 0.8 to 2.6" in result.output


def test_unparsable_csv_exits_with_error(tmp_path: Path) -> None:
    bad = tmp_path / "bad.csv"
    bad.write_text("study,effect\nA,1\nB,1,2,3\n")
    result = runner.invoke(app, ["table", str(bad)])
    assert result.exit_code == 1

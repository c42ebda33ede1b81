"""CLI application using Typer for the forest plot generator."""

import json
from pathlib import Path
from typing import List, Optional
import typer
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ..config.settings import settings
from ..core.models import ColorConfig, PlotOptions, RawRow
from ..io.csv_reader import CSVParseError, read_effect_rows
from ..io.paths import create_output_path
from ..meta.augment import augment
from ..meta.summary import build_table
from ..plot.figure import write_html
from ..plot.payload import build_payload
from ..plot.static import render_png
from ..plot.ticks import plan_ticks
from ..utils.logging import get_logger, set_level

app = typer.Typer(
    name="fpg",
    help="Forest Plot Generator - forest plots from a CSV of effect estimates",
    add_completion=False,
)

console = Console()
logger = get_logger(__name__)


def _load_rows(csv_path: Path) -> List[RawRow]:
    try:
        rows = read_effect_rows(csv_path)
    except CSVParseError as exc:
        console.print(f"[red]Error: could not parse {csv_path}: {escape(str(exc))}[/red]")
        raise typer.Exit(1)
    if not rows:
        console.print(f"[red]Error: no study rows found in {csv_path}[/red]")
        raise typer.Exit(1)
    return rows


@app.callback()
def main(
    log_level: Optional[str] = typer.Option(None, "--log-level", help="Override the configured log level"),
) -> None:
    """Forest plots from study effect estimates and confidence intervals."""
    if log_level:
        set_level(log_level)


@app.command()
def serve(
    host: str = typer.Option(
        "127.0.0.1",
        "--host",
        help="Hostname to bind the web server to.",
    ),
    port: int = typer.Option(
        8000,
        "--port",
        help="Port for the web server.",
    ),
    reload: bool = typer.Option(
        False,
        "--reload/--no-reload",
        help="Enable auto-reload (development only).",
    ),
) -> None:
    """Start the interactive web dashboard.

    Launches a FastAPI server with the CSV upload page. Use
    ``--reload`` in development to auto-restart on code changes.
    """
    from ..web.app import start_server

    console.print(f"[bold blue]Starting web server[/bold blue] at http://{host}:{port}")
    try:
        start_server(host=host, port=port, reload=reload)
    except Exception as exc:
        logger.error(f"Failed to start web server: {exc}")
        raise typer.Exit(1)


@app.command()
def plot(
    csv_path: Path = typer.Argument(..., exists=True, dir_okay=False, help="CSV with study, effect, ci_low, ci_high"),
    linear: bool = typer.Option(False, "--linear", help="Effects are differences (0 = no effect), not ratios"),
    mirror: bool = typer.Option(False, "--mirror", help="Reverse the x axis"),
    label: str = typer.Option(settings.default_x_label, "--label", "-l", help="X axis label"),
    marker_scale: float = typer.Option(1.0, "--marker-scale", help="Multiplier for diamond sizes"),
    marker_color: str = typer.Option(settings.marker_color, "--marker-color", help="Diamond fill color"),
    marker_opacity: float = typer.Option(settings.marker_opacity, "--marker-opacity", help="Diamond opacity (0-1)"),
    ci_color: str = typer.Option(settings.ci_color, "--ci-color", help="Confidence interval color"),
    reference_color: str = typer.Option(settings.reference_color, "--reference-color", help="Reference line color"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Output file (.html, .png or .json)"),
    dpi: int = typer.Option(settings.png_dpi, "--dpi", help="Resolution for PNG output"),
) -> None:
    """Render a forest plot to HTML, PNG or payload JSON."""
    rows = _load_rows(csv_path)
    try:
        options = PlotOptions(is_ratio=not linear, mirror_x=mirror, x_label=label, marker_scale=marker_scale)
        colors = ColorConfig(
            marker_color=marker_color,
            marker_opacity=marker_opacity,
            ci_color=ci_color,
            reference_color=reference_color,
        )
    except ValidationError as exc:
        console.print(f"[red]Error: {escape(str(exc))}[/red]")
        raise typer.Exit(1)

    if output is None:
        output = create_output_path(csv_path.stem, ".html")
    suffix = output.suffix.lower()
    if suffix == ".png":
        render_png(rows, output, options=options, colors=colors, dpi=dpi)
    elif suffix == ".json":
        payload = build_payload(rows, options, colors)
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(json.dumps(payload.model_dump(), indent=2))
    elif suffix in (".html", ".htm"):
        write_html(build_payload(rows, options, colors), output)
    else:
        console.print(f"[red]Error: unsupported output type '{output.suffix}' (use .html, .png or .json)[/red]")
        raise typer.Exit(1)
    console.print(f"[green]✓ Forest plot saved to {output}[/green]")


@app.command()
def table(
    csv_path: Path = typer.Argument(..., exists=True, dir_okay=False, help="CSV with study, effect, ci_low, ci_high"),
    linear: bool = typer.Option(False, "--linear", help="Effects are differences, not ratios"),
) -> None:
    """Show rows with standard errors and weight shares."""
    rows = _load_rows(csv_path)
    augmented = augment(rows, is_ratio=not linear)
    out = Table(title=f"{csv_path.name} ({'linear' if linear else 'ratio'} scale)")
    out.add_column("Study", style="cyan")
    out.add_column("Effect", justify="right")
    out.add_column("CI", justify="right")
    out.add_column("SE", justify="right")
    out.add_column("Weight", justify="right", style="yellow")
    for row, line in zip(augmented, build_table(augmented)):
        se_text = f"{row.se:.4f}" if row.se is not None else ""
        study = f"[bold]{escape(line.study)}[/bold]" if line.is_subheader else escape(line.study)
        out.add_row(study, line.effect_text, line.ci_text, se_text, line.weight_text)
    console.print(out)


@app.command()
def ticks(
    csv_path: Path = typer.Argument(..., exists=True, dir_okay=False, help="CSV with study, effect, ci_low, ci_high"),
    mirror: bool = typer.Option(False, "--mirror", help="Reverse tick order"),
) -> None:
    """Print the log-scale tick plan for ratio data."""
    rows = _load_rows(csv_path)
    plan = plan_ticks(rows, mirror_x=mirror)
    console.print(f"Range: {plan.x_min:g} to {plan.x_max:g}")
    out = Table(title="Ticks")
    out.add_column("Value", justify="right")
    out.add_column("Label", style="cyan")
    for value, text in zip(plan.values, plan.labels):
        out.add_row(f"{value:g}", text)
    console.print(out)


if __name__ == "__main__":
    app()

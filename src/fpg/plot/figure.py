"""Interactive Plotly figures built from a render payload."""

from __future__ import annotations

from pathlib import Path

import plotly.graph_objects as go

from ..core.models import RenderPayload
from ..utils.logging import get_logger

logger = get_logger(__name__)


def build_figure(payload: RenderPayload) -> go.Figure:
    """Create a Plotly figure from the payload traces and layout."""
    fig = go.Figure(data=payload.traces, layout=payload.layout)
    fig.update_layout(template="plotly_white")
    return fig


def write_html(payload: RenderPayload, path: Path) -> Path:
    """Write the figure as a standalone HTML page (Plotly.js from CDN)."""
    path.parent.mkdir(parents=True, exist_ok=True)
    fig = build_figure(payload)
    fig.write_html(str(path), include_plotlyjs="cdn", full_html=True, config={"responsive": True})
    logger.info(f"Forest plot written to {path}")
    return path

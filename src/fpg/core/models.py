"""Core domain models for forest plot rows, options and layout."""

import math
from typing import Optional, List, Dict, Any, Tuple
from pydantic import BaseModel, Field, field_validator, model_validator


class RawRow(BaseModel):
    """One study row as read from the input CSV.

    Numeric fields are optional; a row that only carries a study label
    is kept as a subheader.
    """
    study: str = Field(..., min_length=1)
    effect: Optional[float] = None
    ci_low: Optional[float] = None
    ci_high: Optional[float] = None
    weight: Optional[float] = None

    @field_validator("effect", "ci_low", "ci_high", "weight", mode="before")
    @classmethod
    def _finite_or_none(cls, v: Any) -> Optional[float]:
        """Map NaN, infinities and unparsable values to ``None``."""
        if v is None:
            return None
        try:
            num = float(v)
        except (TypeError, ValueError):
            return None
        return num if math.isfinite(num) else None

    @property
    def has_effect(self) -> bool:
        return self.effect is not None

    @property
    def has_interval(self) -> bool:
        return self.effect is not None and self.ci_low is not None and self.ci_high is not None


class AugmentedRow(RawRow):
    """Row carrying the standard error and pooling weight."""
    se: Optional[float] = None
    weight_calc: float = 0.0
    has_weight: bool = False


class PlotOptions(BaseModel):
    """User-controlled options that drive every recomputation."""
    is_ratio: bool = True
    mirror_x: bool = False
    x_label: str = "Effect"
    marker_scale: float = Field(1.0, gt=0)


class ColorConfig(BaseModel):
    """Colors handed to the charting collaborator, normalized to rgba()."""
    marker_color: str
    marker_opacity: float = Field(1.0, ge=0.0, le=1.0)
    ci_color: str
    reference_color: str

    @field_validator("marker_color", "ci_color", "reference_color")
    @classmethod
    def _normalize(cls, v: str) -> str:
        from ..plot.colors import normalize_color

        return normalize_color(v)

    @property
    def marker_fill(self) -> str:
        """Marker color with the configured opacity applied."""
        from ..plot.colors import with_opacity

        return with_opacity(self.marker_color, self.marker_opacity)


class TickPlan(BaseModel):
    """Tick values and labels for a logarithmic x-axis."""
    values: List[float] = Field(default_factory=list)
    labels: List[str] = Field(default_factory=list)
    x_min: float = 1.0
    x_max: float = 1.0

    @model_validator(mode="after")
    def _same_length(self) -> "TickPlan":
        if len(self.values) != len(self.labels):
            raise ValueError("tick values and labels must have the same length")
        return self


class Margin(BaseModel):
    l: int
    r: int = 40
    t: int = 40
    b: int = 60


class LayoutSpec(BaseModel):
    """Chart geometry computed from the augmented rows."""
    height: int
    margin: Margin
    y_positions: List[int]
    y_labels: List[str]
    y_range: Tuple[float, float]
    reference_x: float
    x_type: str = Field(..., pattern="^(log|linear)$")
    x_title: str = ""
    x_reversed: bool = False
    axis_position: float = Field(0.0, ge=0.0, le=1.0)
    tick_plan: Optional[TickPlan] = None
    marker_sizes: List[Optional[float]] = Field(default_factory=list)

    def reference_shape(self, color: str = "rgba(0, 0, 0, 0.3)", width: int = 2) -> Dict[str, Any]:
        """Vertical null-effect line spanning the whole y-range."""
        return {
            "type": "line",
            "x0": self.reference_x,
            "x1": self.reference_x,
            "y0": self.y_range[0],
            "y1": self.y_range[1],
            "line": {"color": color, "width": width},
        }

    def to_plotly(self, reference_color: str = "rgba(0, 0, 0, 0.3)") -> Dict[str, Any]:
        """Convert to a Plotly layout dictionary."""
        xaxis: Dict[str, Any] = {
            "title": {"text": self.x_title},
            "type": self.x_type,
            "zeroline": False,
            "ticklen": 6,
            "position": self.axis_position,
        }
        if self.x_reversed:
            xaxis["autorange"] = "reversed"
        if self.tick_plan is not None:
            xaxis.update(
                tickmode="array",
                tickvals=list(self.tick_plan.values),
                ticktext=list(self.tick_plan.labels),
            )
        return {
            "autosize": True,
            "margin": self.margin.model_dump(),
            "xaxis": xaxis,
            "yaxis": {
                "tickmode": "array",
                "tickvals": list(self.y_positions),
                "ticktext": list(self.y_labels),
                "range": list(self.y_range),
                "autorange": False,
                "automargin": True,
            },
            "shapes": [self.reference_shape(reference_color)],
            "height": self.height,
        }


class TableRow(BaseModel):
    """One line of the label table shown next to the chart."""
    study: str
    effect_text: str = ""
    ci_text: str = ""
    weight_text: str = ""
    weight_pct: Optional[float] = None
    is_subheader: bool = False


class RenderPayload(BaseModel):
    """Everything the charting collaborator needs to draw the plot."""
    traces: List[Dict[str, Any]]
    layout: Dict[str, Any]
    colors: ColorConfig
    table: List[TableRow]
    total_weight: float

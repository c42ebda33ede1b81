"""Current dataset and options for one user.

A :class:`ForestPlotSession` stores only inputs: the raw rows, the plot
options and the colors.  Every derived value (augmented rows, table,
render payload) is recomputed from those inputs when asked for, so a
change to any of them is reflected on the next call.
"""

from __future__ import annotations

from typing import Any, List, Optional, Sequence

from .core.models import AugmentedRow, ColorConfig, PlotOptions, RawRow, RenderPayload, TableRow
from .io.csv_reader import CSVParseError, CSVSource, read_effect_rows
from .meta.augment import augment
from .meta.summary import build_table
from .plot.payload import build_payload, default_colors
from .utils.logging import get_logger

logger = get_logger(__name__)


class ForestPlotSession:
    """Rows, options and colors behind one forest plot."""

    def __init__(
        self,
        rows: Optional[Sequence[RawRow]] = None,
        options: Optional[PlotOptions] = None,
        colors: Optional[ColorConfig] = None,
    ) -> None:
        self.rows: List[RawRow] = list(rows or [])
        self.options: PlotOptions = options or PlotOptions()
        self.colors: ColorConfig = colors or default_colors()
        self.file_name: Optional[str] = None

    def load_csv(self, source: CSVSource, file_name: Optional[str] = None) -> bool:
        """Replace the rows with the contents of ``source``.

        On a parse failure the error is logged and the previous rows are
        kept unchanged.

        Returns:
            ``True`` if the new rows were committed.
        """
        try:
            rows = read_effect_rows(source)
        except CSVParseError as exc:
            logger.error(
                f"Keeping previous data; failed to parse {file_name or 'CSV'}: {exc}",
                extra={"file_name": file_name, "kept_rows": len(self.rows)},
            )
            return False
        self.rows = rows
        self.file_name = file_name
        logger.info(f"Loaded {len(rows)} rows", extra={"file_name": file_name})
        return True

    def clear(self) -> None:
        """Drop the uploaded data."""
        self.rows = []
        self.file_name = None

    def update_options(self, **changes: Any) -> PlotOptions:
        """Apply option changes; validation errors leave the options untouched."""
        self.options = PlotOptions.model_validate({**self.options.model_dump(), **changes})
        return self.options

    def update_colors(self, **changes: Any) -> ColorConfig:
        self.colors = ColorConfig.model_validate({**self.colors.model_dump(), **changes})
        return self.colors

    def augmented(self) -> List[AugmentedRow]:
        return augment(self.rows, self.options.is_ratio)

    def table(self) -> List[TableRow]:
        return build_table(self.augmented())

    def payload(self) -> RenderPayload:
        return build_payload(self.rows, self.options, self.colors)

"""Read study rows from a CSV file.

Column names are matched case-sensitively against a fixed alias table
so that exports from common tools (``OR``, ``Lower``/``Upper``, German
``Untere_KI``/``Obere_KI`` …) load without renaming.  For every row the
first alias with a non-empty cell wins.  Numeric cells that are blank or
cannot be parsed become missing values; rows without a study label are
dropped; rows with a label but no numbers are kept as subheaders.
"""

from __future__ import annotations

import io
from pathlib import Path
from typing import IO, Dict, List, Optional, Sequence, Union

import pandas as pd

from ..core.models import RawRow
from ..utils.logging import get_logger

logger = get_logger(__name__)

# A plain ``str`` is CSV text; pass file names as ``Path``.
CSVSource = Union[Path, str, bytes, IO[bytes], IO[str]]

COLUMN_ALIASES: Dict[str, Sequence[str]] = {
    "study": ("study", "Study", "name", "Name", "Studie"),
    "effect": ("effect", "Effect", "or", "OR", "value", "ES"),
    "ci_low": ("ci_low", "CI_low", "ciLower", "lower", "Lower", "Untere_KI", "untere_KI", "untere_ki"),
    "ci_high": ("ci_high", "CI_high", "ciUpper", "upper", "Upper", "Obere_KI", "obere_KI", "obere_ki"),
    "weight": ("weight", "Weight"),
}
NUMERIC_FIELDS = ("effect", "ci_low", "ci_high", "weight")


class CSVParseError(Exception):
    """Raised when a CSV file cannot be tokenized or decoded."""


def resolve_columns(header: Sequence[str]) -> Dict[str, List[str]]:
    """Aliases present in ``header`` for each field, in priority order."""
    present = set(header)
    return {field: [a for a in aliases if a in present] for field, aliases in COLUMN_ALIASES.items()}


def _to_buffer(source: CSVSource) -> Union[str, IO]:
    if isinstance(source, Path):
        return str(source)
    if isinstance(source, bytes):
        return io.BytesIO(source)
    if isinstance(source, str):
        return io.StringIO(source)
    return source


def _read_frame(source: CSVSource) -> pd.DataFrame:
    try:
        return pd.read_csv(
            _to_buffer(source),
            dtype=str,
            keep_default_na=False,
            skip_blank_lines=True,
            skipinitialspace=True,
        )
    except pd.errors.EmptyDataError:
        return pd.DataFrame()
    except (pd.errors.ParserError, UnicodeDecodeError, OSError) as exc:
        logger.error(f"CSV parse error: {exc}")
        raise CSVParseError(str(exc)) from exc


def _first_present(record: Dict[str, str], aliases: Sequence[str]) -> Optional[str]:
    for alias in aliases:
        value = record.get(alias)
        if value is not None and str(value).strip() != "":
            return str(value).strip()
    return None


def _to_float(value: Optional[str]) -> Optional[float]:
    if value is None:
        return None
    number = pd.to_numeric(value, errors="coerce")
    return None if pd.isna(number) else float(number)


def read_effect_rows(source: CSVSource) -> List[RawRow]:
    """Parse ``source`` into raw study rows.

    Args:
        source: Path, raw bytes, CSV text, or an open text/binary file.

    Returns:
        Rows in file order.  An empty file yields an empty list.

    Raises:
        CSVParseError: if the file cannot be read or tokenized.
    """
    df = _read_frame(source)
    if df.empty:
        return []
    columns = resolve_columns([str(c) for c in df.columns])
    if not columns["study"]:
        logger.warning("No study column found", extra={"columns": list(map(str, df.columns))})
    rows: List[RawRow] = []
    dropped = 0
    for record in df.to_dict(orient="records"):
        study = _first_present(record, columns["study"])
        if not study:
            dropped += 1
            continue
        values = {f: _to_float(_first_present(record, columns[f])) for f in NUMERIC_FIELDS}
        rows.append(RawRow(study=study, **values))
    logger.info("Parsed CSV", extra={"rows": len(rows), "dropped": dropped})
    return rows

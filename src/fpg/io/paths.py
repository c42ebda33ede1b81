"""Output file path management."""

from pathlib import Path
from datetime import datetime
from typing import Optional

from ..config.settings import settings


def create_output_path(stem: str, suffix: str = ".html", timestamp: Optional[datetime] = None) -> Path:
    """Timestamped file path inside the configured output directory."""
    if timestamp is None:
        timestamp = datetime.now()
    filename = f"{stem}_{timestamp.strftime('%Y%m%d_%H%M%S')}{suffix}"
    settings.output_dir.mkdir(parents=True, exist_ok=True)
    return settings.output_dir / filename

"""Configuration management using Pydantic Settings."""

from pathlib import Path
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables and .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Directories
    output_dir: Path = Field(Path("output"))

    # Logging
    log_level: str = Field("INFO")
    log_format: str = Field("json", pattern="^(json|text)$")

    # Axis and marker geometry
    max_ticks: int = Field(12, ge=1, description="Tick count above which the reduced mantissa set is used")
    min_marker_size: float = Field(6.0, ge=0)
    max_marker_size: float = Field(28.0, gt=0)

    # Default colors (any CSS color; normalized to rgba())
    marker_color: str = Field("rgba(31, 119, 180, 1)", description="Diamond fill color")
    marker_opacity: float = Field(1.0, ge=0.0, le=1.0)
    ci_color: str = Field("rgba(31, 119, 180, 1)", description="Confidence interval line color")
    reference_color: str = Field("rgba(0, 0, 0, 0.3)", description="Null-effect reference line color")

    # Presentation defaults
    default_x_label: str = Field("Effect")
    png_dpi: int = Field(200, ge=50, le=1200)

    @field_validator("output_dir")
    @classmethod
    def _create_dirs(cls, v: Path) -> Path:
        v.mkdir(parents=True, exist_ok=True)
        return v


# Instantiate global settings
settings = Settings()

"""Configuration management for the text structuring engine.

Loads and validates YAML configuration with sensible defaults
for parsing heuristics, validation thresholds, and the HTTP API.
"""

import logging
from pathlib import Path

import yaml
from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)


DEFAULT_HEADER_KEYWORDS: list[str] = [
    "qualification",
    "school",
    "college",
    "year",
    "cgpa",
    "description",
    "item",
    "qty",
    "quantity",
    "price",
    "amount",
    "total",
    "rate",
    "name",
]


class ParsingConfig(BaseModel):
    """Configuration for the text-to-structure heuristics."""

    max_table_rows: int = 2000
    min_tabular_ratio: float = 0.4
    header_keywords: list[str] = Field(
        default_factory=lambda: list(DEFAULT_HEADER_KEYWORDS)
    )
    vendor_scan_lines: int = 8
    table_preview_rows: int = 5
    text_preview_chars: int = 2000
    currency_codes: list[str] = Field(
        default_factory=lambda: ["USD", "EUR", "GBP", "JPY", "INR"]
    )


class ValidationConfig(BaseModel):
    """Configuration for the structural validator."""

    cgpa_min: float = 0.0
    cgpa_max: float = 10.0


class ApiConfig(BaseModel):
    """Configuration for the HTTP API server."""

    host: str = "0.0.0.0"
    port: int = 8000


class AppConfig(BaseModel):
    """Top-level application configuration."""

    parsing: ParsingConfig = Field(default_factory=ParsingConfig)
    validation: ValidationConfig = Field(default_factory=ValidationConfig)
    api: ApiConfig = Field(default_factory=ApiConfig)
    log_level: str = "INFO"


def load_config(path: Path | None = None) -> AppConfig:
    """Load configuration from a YAML file.

    Args:
        path: Path to the YAML configuration file.
            Defaults to configs/config.yaml.

    Returns:
        Validated application configuration.
    """
    if path is None:
        path = Path("configs/config.yaml")

    if path.exists():
        logger.info("Loading configuration from %s", path)
        with open(path) as f:
            raw = yaml.safe_load(f) or {}
        return AppConfig(**raw)

    logger.info("No config file found at %s, using defaults", path)
    return AppConfig()

"""
Configuration for a topoviz run.
"""

import logging
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .formats.registry import DEFAULT_FORMAT

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class VisualizerConfig(BaseModel):
    """
    Pydantic schema for one conversion run.

    The CLI fills it from command-line options and ``TOPOVIZ_*``
    environment variables. The format name is only normalized here; whether
    it is supported is decided by the format registry so the error can list
    the available formats.
    """

    output_format: str = Field(
        DEFAULT_FORMAT, description="Output format name (e.g., 'mermaid', 'dot')"
    )
    output_path: Optional[Path] = Field(
        None, description="File to write the diagram to (stdout if None)"
    )
    log_level: str = Field("WARNING", description="Logging level for diagnostics on stderr")

    model_config = ConfigDict(frozen=True)

    @field_validator("output_format")
    @classmethod
    def _normalize_format(cls, value: str) -> str:
        value = value.strip().lower()
        if not value:
            raise ValueError("Output format cannot be empty")
        return value

    @field_validator("log_level")
    @classmethod
    def _validate_log_level(cls, value: str) -> str:
        value = value.strip().upper()
        if value not in LOG_LEVELS:
            raise ValueError(f"Unknown log level '{value}'. Use one of: {', '.join(LOG_LEVELS)}")
        return value

    @property
    def log_level_value(self) -> int:
        return logging.getLevelName(self.log_level)

"""
Environment-driven defaults for relfetch.
"""

from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from relfetch.relfetch_config import RelfetchConfig


class LogLevel(str, Enum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class RelfetchSettings(BaseSettings):
    """
    Settings read from ``RELFETCH_*`` environment variables (and an optional ``.env`` file).

    CLI options take precedence over these values.
    """

    model_config = SettingsConfigDict(
        env_prefix="RELFETCH_",
        extra="ignore",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    root_dir: Optional[Path] = Field(
        default=None,
        description="Directory the <arch>/<environment>/bin tree is created under. Defaults to the working directory.",
    )
    config_path: Optional[Path] = Field(
        default=None,
        description="Path of the artifacts JSON file. Defaults to <root_dir>/config.json.",
    )
    http_timeout_seconds: Optional[float] = Field(
        default=None,
        gt=0,
        description="Per-request timeout. Unset keeps the HTTP client default.",
    )
    max_redirects: int = Field(default=5, ge=0, le=50)
    progress_step_percent: int = Field(default=5, ge=1, le=100)
    chunk_size: int = Field(default=64 * 1024, ge=1024)
    download_prefixes: Dict[str, str] = Field(
        default_factory=dict,
        description="Extra or overriding download prefixes per software, as JSON.",
    )
    log_level: LogLevel = Field(default=LogLevel.INFO)

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_log_level(cls, value: Any) -> Any:
        return value.upper() if isinstance(value, str) else value

    def to_config(self, **overrides: Any) -> RelfetchConfig:
        """
        Build the run configuration, letting non-None ``overrides`` win over the settings.
        """
        values = self.model_dump(exclude={"log_level"})
        values.update({k: v for k, v in overrides.items() if v is not None})
        return RelfetchConfig.from_dict(values)

"""
Configuration management for pagemeta using Pydantic.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Literal, Optional

import yaml
from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

log = logging.getLogger(__name__)


class ParserConfig(BaseModel):
    """HTML parser configuration."""

    features: Literal["html.parser", "lxml"] = Field(
        default="html.parser", description="BeautifulSoup tree builder."
    )


class FetchConfig(BaseModel):
    """HTTP fetching configuration."""

    timeout: float = Field(default=30.0, description="HTTP request timeout in seconds.")
    user_agent: str = Field(
        default="pagemeta/0.1 (+https://github.com/pagemeta/pagemeta)",
        description="User-Agent string for HTTP requests.",
    )
    follow_redirects: bool = Field(default=True, description="Follow HTTP redirects.")

    @field_validator("timeout")
    @classmethod
    def validate_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("timeout must be positive")
        return v


class ExtractionConfig(BaseModel):
    """Metadata extraction configuration."""

    favicon_probe: bool = Field(
        default=True, description="Probe /favicon.ico when the page links no icon."
    )
    favicon_timeout: float = Field(default=5.0, description="Timeout for the favicon probe in seconds.")
    apply_site_rules: bool = Field(default=True, description="Apply registered site-specific rules.")


class MonitoringConfig(BaseModel):
    """Logging configuration."""

    log_level: str = Field(default="INFO", description="Logging level (e.g., DEBUG, INFO, WARNING).")
    log_file: Optional[str] = Field(default=None, description="Path to log file. If None, logs to console.")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"unknown log level: {v}")
        return level

    @field_validator("log_file", mode="before")
    @classmethod
    def create_parent_dir(cls, v: str | Path | None) -> str | None:
        if v is None:
            return None
        path = Path(v)
        path.parent.mkdir(parents=True, exist_ok=True)
        return str(path)


class Config(BaseSettings):
    project_name: str = "pagemeta"
    parser: ParserConfig = Field(default_factory=ParserConfig)
    fetch: FetchConfig = Field(default_factory=FetchConfig)
    extraction: ExtractionConfig = Field(default_factory=ExtractionConfig)
    monitoring: MonitoringConfig = Field(default_factory=MonitoringConfig)

    model_config = SettingsConfigDict(env_prefix="PAGEMETA_", env_nested_delimiter="__", case_sensitive=False)

    @classmethod
    def from_yaml(cls, path: Path) -> Config:
        log.debug("Loading configuration from YAML file: %s", path)
        if not path.is_file():
            raise FileNotFoundError(f"Configuration file not found or is not a file: {path}")
        with open(path, "r", encoding="utf-8") as f:
            yaml_data = yaml.safe_load(f)
        if not yaml_data:
            log.warning("Configuration file is empty: %s. Using default settings.", path)
            return cls.model_validate({})
        return cls.model_validate(yaml_data)


def find_config_file() -> Path | None:
    current_dir = Path.cwd()
    for path in (current_dir / "pagemeta.yaml", current_dir / "pagemeta.yml"):
        if path.exists():
            return path
    return None


def load_config(path: Path | None = None) -> Config:
    """Load configuration from ``path``, a discovered YAML file, or the environment."""
    path = path or find_config_file()
    if path is not None:
        return Config.from_yaml(path)
    return Config()
